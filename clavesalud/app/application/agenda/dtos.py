from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from clavesalud.app.application.security import UserContext
from clavesalud.app.domain.agenda import BloqueAgenda
from clavesalud.app.domain.centros import Centro
from clavesalud.app.domain.enums import EstadoSlot


class AccionToggle(str, Enum):
    ABIERTO = "ABIERTO"
    CERRADO = "CERRADO"
    DETALLE_RESERVA = "DETALLE_RESERVA"
    OCUPADO = "OCUPADO"
    RECHAZADO = "RECHAZADO"
    FALLIDO = "FALLIDO"


@dataclass(frozen=True, slots=True)
class ContextoAgenda:
    """Identidad con la que se opera sobre la agenda: centro activo, profesional y usuario."""

    centro: Centro | None
    profesional_id: str | None
    usuario: UserContext

    @property
    def centro_id(self) -> str | None:
        return self.centro.id if self.centro is not None else None

    @property
    def solo_lectura(self) -> bool:
        if not self.usuario.can_write:
            return True
        return self.centro is not None and self.centro.suspendido


@dataclass(frozen=True, slots=True)
class ResultadoAlternarBloque:
    accion: AccionToggle
    fecha: str
    hora: str
    estado_final: EstadoSlot | None = None
    bloque: BloqueAgenda | None = None
    motivo: str | None = None

    @property
    def muto_almacen(self) -> bool:
        return self.accion in {AccionToggle.ABIERTO, AccionToggle.CERRADO}


@dataclass(frozen=True, slots=True)
class EnlaceMensajeDTO:
    clave: str
    titulo: str
    mensaje: str
    url: str


@dataclass(frozen=True, slots=True)
class MensajesReservaDTO:
    confirmacion: EnlaceMensajeDTO | None
    cancelacion: EnlaceMensajeDTO | None
    plantillas: tuple[EnlaceMensajeDTO, ...] = ()

    @property
    def disponible(self) -> bool:
        return self.confirmacion is not None
