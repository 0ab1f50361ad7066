from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum


class AccionAuditoriaAgenda(str, Enum):
    ABRIR_BLOQUE = "ABRIR_BLOQUE"
    CERRAR_BLOQUE = "CERRAR_BLOQUE"
    VER_DETALLE_RESERVA = "VER_DETALLE_RESERVA"
    GUARDAR_CONFIG_AGENDA = "GUARDAR_CONFIG_AGENDA"
    GUARDAR_PLANTILLAS_WHATSAPP = "GUARDAR_PLANTILLAS_WHATSAPP"


@dataclass(frozen=True, slots=True)
class EventoAuditoriaAgenda:
    timestamp_utc: str
    usuario: str
    centro_id: str
    accion: AccionAuditoriaAgenda
    entidad_id: str
    metadata_json: dict[str, str | int | float | bool | None] | None = None
    id: int | None = None


def now_utc_iso() -> str:
    return datetime.now(UTC).isoformat()
