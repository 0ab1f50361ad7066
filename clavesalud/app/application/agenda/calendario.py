"""Rejilla mensual del selector de días de la agenda."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from typing import Iterable

from clavesalud.app.application.agenda.resolver_slots import es_fecha_pasada, fechas_con_actividad
from clavesalud.app.domain.agenda import BloqueAgenda


@dataclass(frozen=True, slots=True)
class CursorMes:
    anio: int
    mes: int  # 1..12

    @classmethod
    def desde_fecha(cls, fecha: date) -> "CursorMes":
        return cls(anio=fecha.year, mes=fecha.month)

    def desplazar(self, meses: int) -> "CursorMes":
        indice = self.anio * 12 + (self.mes - 1) + meses
        return CursorMes(anio=indice // 12, mes=indice % 12 + 1)

    def anterior(self) -> "CursorMes":
        return self.desplazar(-1)

    def siguiente(self) -> "CursorMes":
        return self.desplazar(1)

    @property
    def dias_en_mes(self) -> int:
        return calendar.monthrange(self.anio, self.mes)[1]

    @property
    def primer_dia(self) -> date:
        return date(self.anio, self.mes, 1)


@dataclass(frozen=True, slots=True)
class DiaCalendario:
    fecha: date
    es_pasado: bool
    seleccionado: bool
    tiene_actividad: bool

    @property
    def iso(self) -> str:
        return self.fecha.isoformat()

    @property
    def habilitado(self) -> bool:
        return not self.es_pasado

    @property
    def mostrar_indicador(self) -> bool:
        return self.tiene_actividad and not self.seleccionado and not self.es_pasado


def construir_mes(
    cursor: CursorMes,
    *,
    fecha_seleccionada: str | None,
    bloques: Iterable[BloqueAgenda],
    profesional_id: str | None,
    hoy: date,
) -> list[DiaCalendario | None]:
    """
    Celdas del mes empezando en lunes; las posiciones previas al día 1 son None.
    """
    activos = fechas_con_actividad(bloques, profesional_id) if profesional_id else set()
    celdas: list[DiaCalendario | None] = [None] * cursor.primer_dia.weekday()
    for dia in range(1, cursor.dias_en_mes + 1):
        fecha = date(cursor.anio, cursor.mes, dia)
        iso = fecha.isoformat()
        celdas.append(
            DiaCalendario(
                fecha=fecha,
                es_pasado=es_fecha_pasada(fecha, hoy),
                seleccionado=iso == fecha_seleccionada,
                tiene_actividad=iso in activos,
            )
        )
    return celdas
