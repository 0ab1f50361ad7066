from __future__ import annotations

from dataclasses import dataclass

from clavesalud.app.application.auditoria_agenda import (
    AccionAuditoriaAgenda,
    EventoAuditoriaAgenda,
    now_utc_iso,
)
from clavesalud.app.application.ports.auditoria_agenda_port import RepositorioAuditoriaAgenda
from clavesalud.app.application.security import UserContext
from clavesalud.app.bootstrap_logging import get_logger


LOGGER = get_logger(__name__)


@dataclass(slots=True)
class RegistrarAuditoriaAgenda:
    repositorio: RepositorioAuditoriaAgenda

    def execute(
        self,
        *,
        contexto_usuario: UserContext,
        centro_id: str,
        accion: AccionAuditoriaAgenda,
        entidad_id: str,
        metadata: dict[str, str | int | float | bool | None] | None = None,
    ) -> None:
        evento = EventoAuditoriaAgenda(
            timestamp_utc=now_utc_iso(),
            usuario=contexto_usuario.username,
            centro_id=centro_id,
            accion=accion,
            entidad_id=entidad_id,
            metadata_json=metadata,
        )
        self.repositorio.registrar(evento)
        LOGGER.info(
            "auditoria_agenda_registrada accion=%s entidad_id=%s",
            accion.value,
            evento.entidad_id,
            extra={"action": "auditoria_agenda"},
        )
