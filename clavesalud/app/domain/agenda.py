"""Entidades de dominio de la agenda de bloques por profesional."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from clavesalud.app.domain.enums import EstadoBloque, EstadoSlot
from clavesalud.app.domain.exceptions import ValidationError
from clavesalud.app.domain.value_objects import (
    _require_non_empty,
    _strip_or_empty,
    _strip_or_none,
    parse_fecha_iso,
    parse_hhmm_a_minutos,
)

HORA_INICIO_POR_DEFECTO = "08:00"
HORA_FIN_POR_DEFECTO = "21:00"
DURACION_POR_DEFECTO = 20


def _escapar_parte_id(parte: str) -> str:
    # '_' separa las partes del id; dentro de una parte se escribe %5F.
    return parte.replace("%", "%25").replace("_", "%5F")


def generar_id_bloque(centro_id: str, profesional_id: str, fecha: str, hora: str) -> str:
    """Id determinista de un bloque: slot_<centro>_<profesional>_<fecha>_<HHMM>."""
    return (
        f"slot_{_escapar_parte_id(centro_id)}_{_escapar_parte_id(profesional_id)}"
        f"_{fecha}_{hora.replace(':', '')}"
    )


@dataclass(frozen=True, slots=True)
class ConfigAgenda:
    """
    Horario de trabajo de un profesional.

    Un campo a None toma el valor por defecto (08:00 - 21:00 cada 20 minutos).
    """

    hora_inicio: Optional[str] = None
    hora_fin: Optional[str] = None
    duracion_minutos: Optional[int] = None

    @property
    def inicio_efectivo(self) -> str:
        return self.hora_inicio or HORA_INICIO_POR_DEFECTO

    @property
    def fin_efectivo(self) -> str:
        return self.hora_fin or HORA_FIN_POR_DEFECTO

    @property
    def duracion_efectiva(self) -> int:
        return DURACION_POR_DEFECTO if self.duracion_minutos is None else int(self.duracion_minutos)

    def validar(self) -> None:
        inicio = parse_hhmm_a_minutos(self.inicio_efectivo, "hora_inicio")
        fin = parse_hhmm_a_minutos(self.fin_efectivo, "hora_fin")
        if self.duracion_efectiva <= 0:
            raise ValidationError("La duración del bloque debe ser mayor que cero.")
        if inicio >= fin:
            raise ValidationError("hora_fin debe ser posterior a hora_inicio.")


@dataclass(slots=True)
class BloqueAgenda:
    """
    Bloque de agenda persistido (tabla SQL: bloques_agenda).

    Un bloque 'available' no lleva datos de paciente; uno 'booked' los lleva todos.
    """

    id: str = ""
    centro_id: str = ""
    profesional_id: str = ""
    fecha: str = ""                 # YYYY-MM-DD
    hora: str = ""                  # HH:MM
    estado: EstadoBloque = EstadoBloque.AVAILABLE
    paciente_nombre: str = ""
    paciente_rut: str = ""
    paciente_telefono: str = ""
    paciente_id: Optional[str] = None
    activo: bool = True

    @classmethod
    def disponible(cls, centro_id: str, profesional_id: str, fecha: str, hora: str) -> "BloqueAgenda":
        return cls(
            id=generar_id_bloque(centro_id, profesional_id, fecha, hora),
            centro_id=centro_id,
            profesional_id=profesional_id,
            fecha=fecha,
            hora=hora,
            estado=EstadoBloque.AVAILABLE,
        )

    @property
    def reservado(self) -> bool:
        return self.estado == EstadoBloque.BOOKED

    def corresponde_a(self, profesional_id: str, fecha: str, hora: Optional[str] = None) -> bool:
        if self.profesional_id != profesional_id or self.fecha != fecha:
            return False
        return hora is None or self.hora == hora

    def validar(self) -> None:
        self.centro_id = _require_non_empty(self.centro_id, "centro_id")
        self.profesional_id = _require_non_empty(self.profesional_id, "profesional_id")
        parse_fecha_iso(self.fecha)
        parse_hhmm_a_minutos(self.hora)
        if not self.id:
            self.id = generar_id_bloque(self.centro_id, self.profesional_id, self.fecha, self.hora)

        self.paciente_nombre = _strip_or_empty(self.paciente_nombre)
        self.paciente_rut = _strip_or_empty(self.paciente_rut)
        self.paciente_telefono = _strip_or_empty(self.paciente_telefono)
        self.paciente_id = _strip_or_none(self.paciente_id)

        datos_paciente = (self.paciente_nombre, self.paciente_rut, self.paciente_telefono)
        if self.estado == EstadoBloque.BOOKED and not all(datos_paciente):
            raise ValidationError("Un bloque reservado exige nombre, RUT y teléfono del paciente.")
        if self.estado == EstadoBloque.AVAILABLE and any(datos_paciente):
            raise ValidationError("Un bloque disponible no puede llevar datos de paciente.")

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["estado"] = self.estado.value
        return data


@dataclass(frozen=True, slots=True)
class SlotResuelto:
    """
    Variante etiquetada de un slot: CERRADO (sin bloque), ABIERTO(bloque) o RESERVADO(bloque).
    """

    hora: str
    estado: EstadoSlot
    bloque: Optional[BloqueAgenda] = None

    @property
    def abierto(self) -> bool:
        return self.estado == EstadoSlot.ABIERTO

    @property
    def reservado(self) -> bool:
        return self.estado == EstadoSlot.RESERVADO

    @property
    def cerrado(self) -> bool:
        return self.estado == EstadoSlot.CERRADO
