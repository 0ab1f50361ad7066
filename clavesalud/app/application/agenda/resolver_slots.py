"""Clasificación de cada hora del día en cerrado / abierto / reservado."""

from __future__ import annotations

from datetime import date
from typing import Iterable, Sequence

from clavesalud.app.domain.agenda import BloqueAgenda, SlotResuelto
from clavesalud.app.domain.enums import EstadoSlot
from clavesalud.app.domain.value_objects import parse_fecha_iso


def bloques_del_slot(
    bloques: Iterable[BloqueAgenda],
    *,
    profesional_id: str,
    fecha: str,
    hora: str,
) -> list[BloqueAgenda]:
    """Todos los bloques activos que coinciden con el triple; puede haber duplicados."""
    return [b for b in bloques if b.activo and b.corresponde_a(profesional_id, fecha, hora)]


def resolver_slot(candidatos: Sequence[BloqueAgenda], hora: str) -> SlotResuelto:
    if not candidatos:
        return SlotResuelto(hora=hora, estado=EstadoSlot.CERRADO)
    for bloque in candidatos:
        if bloque.reservado:
            return SlotResuelto(hora=hora, estado=EstadoSlot.RESERVADO, bloque=bloque)
    return SlotResuelto(hora=hora, estado=EstadoSlot.ABIERTO, bloque=candidatos[0])


def resolver_estados_slots(
    bloques: Iterable[BloqueAgenda],
    *,
    profesional_id: str,
    fecha: str,
    horas: Sequence[str],
) -> tuple[SlotResuelto, ...]:
    por_hora: dict[str, list[BloqueAgenda]] = {}
    for bloque in bloques:
        if bloque.activo and bloque.corresponde_a(profesional_id, fecha):
            por_hora.setdefault(bloque.hora, []).append(bloque)
    return tuple(resolver_slot(por_hora.get(hora, []), hora) for hora in horas)


def dia_tiene_actividad(bloques: Iterable[BloqueAgenda], profesional_id: str, fecha: str) -> bool:
    return any(b.activo and b.corresponde_a(profesional_id, fecha) for b in bloques)


def fechas_con_actividad(bloques: Iterable[BloqueAgenda], profesional_id: str) -> set[str]:
    return {b.fecha for b in bloques if b.activo and b.profesional_id == profesional_id}


def es_fecha_pasada(fecha: str | date, hoy: date) -> bool:
    """Compara por día natural: solo los días estrictamente anteriores a hoy son pasados."""
    dia = fecha if isinstance(fecha, date) else parse_fecha_iso(fecha)
    return dia < hoy


def listar_reservas_del_dia(bloques: Iterable[BloqueAgenda], profesional_id: str, fecha: str) -> list[BloqueAgenda]:
    reservas = [b for b in bloques if b.activo and b.reservado and b.corresponde_a(profesional_id, fecha)]
    return sorted(reservas, key=lambda b: b.hora)
