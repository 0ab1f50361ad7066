from __future__ import annotations

from typing import Protocol

from clavesalud.app.application.auditoria_agenda import EventoAuditoriaAgenda


class RepositorioAuditoriaAgenda(Protocol):
    def registrar(self, evento: EventoAuditoriaAgenda) -> None:
        ...
