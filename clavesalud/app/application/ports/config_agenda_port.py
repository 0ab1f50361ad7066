from __future__ import annotations

from typing import Protocol

from clavesalud.app.domain.agenda import ConfigAgenda


class RepositorioConfigAgenda(Protocol):
    def obtener(self, centro_id: str, profesional_id: str) -> ConfigAgenda | None:
        ...

    def guardar(self, centro_id: str, profesional_id: str, config: ConfigAgenda) -> None:
        ...
