from clavesalud.app.application.agenda.alternar_bloque import AlternarBloqueAgenda
from clavesalud.app.application.agenda.calendario import CursorMes, DiaCalendario, construir_mes
from clavesalud.app.application.agenda.config_agenda import GuardarConfigAgenda, ObtenerConfigAgenda
from clavesalud.app.application.agenda.dtos import AccionToggle, ContextoAgenda, ResultadoAlternarBloque
from clavesalud.app.application.agenda.plantilla_slots import generar_slots
from clavesalud.app.application.agenda.resolver_slots import (
    dia_tiene_actividad,
    es_fecha_pasada,
    listar_reservas_del_dia,
    resolver_estados_slots,
)
from clavesalud.app.application.agenda.sincronizacion import AgendaEnVivo, InstantaneaAgenda

__all__ = [
    "AccionToggle",
    "AgendaEnVivo",
    "AlternarBloqueAgenda",
    "ContextoAgenda",
    "CursorMes",
    "DiaCalendario",
    "GuardarConfigAgenda",
    "InstantaneaAgenda",
    "ObtenerConfigAgenda",
    "ResultadoAlternarBloque",
    "construir_mes",
    "dia_tiene_actividad",
    "es_fecha_pasada",
    "generar_slots",
    "listar_reservas_del_dia",
    "resolver_estados_slots",
]
