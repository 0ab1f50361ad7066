"""Plantilla de horas del día a partir del horario de un profesional."""

from __future__ import annotations

from clavesalud.app.bootstrap_logging import get_logger
from clavesalud.app.domain.agenda import ConfigAgenda
from clavesalud.app.domain.exceptions import ValidationError
from clavesalud.app.domain.value_objects import formatear_minutos_hhmm, parse_hhmm_a_minutos

LOGGER = get_logger(__name__)


def generar_slots(config: ConfigAgenda | None = None) -> tuple[str, ...]:
    """
    Devuelve las etiquetas 'HH:MM' del día, desde hora_inicio (incluida) hasta
    hora_fin (excluida), cada duracion_minutos.

    Una configuración imposible (duración <= 0, inicio >= fin o una hora mal
    formada) produce una plantilla vacía.
    """
    config = config or ConfigAgenda()
    duracion = config.duracion_efectiva
    try:
        inicio = parse_hhmm_a_minutos(config.inicio_efectivo, "hora_inicio")
        fin = parse_hhmm_a_minutos(config.fin_efectivo, "hora_fin")
    except ValidationError as exc:
        LOGGER.warning(
            "plantilla_slots_config_invalida",
            extra={"action": "generar_slots", "reason": str(exc)},
        )
        return ()
    if duracion <= 0 or inicio >= fin:
        return ()
    return tuple(formatear_minutos_hhmm(minuto) for minuto in range(inicio, fin, duracion))


def contar_slots(config: ConfigAgenda | None = None) -> int:
    return len(generar_slots(config))
