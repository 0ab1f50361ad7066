"""
Mensajes y enlaces de WhatsApp asociados a una reserva.

Plantillas de texto libre con marcadores {patientName}, {nextControlDate} y
{centerName}. Al enviar, los marcadores desconocidos se dejan tal cual; solo la
edición de plantillas los valida.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Mapping
from urllib.parse import quote

from clavesalud.app.application.agenda.dtos import EnlaceMensajeDTO, MensajesReservaDTO
from clavesalud.app.application.ports.centros_port import RepositorioPlantillasWhatsapp
from clavesalud.app.bootstrap_logging import get_logger
from clavesalud.app.domain.agenda import BloqueAgenda
from clavesalud.app.domain.exceptions import ValidationError
from clavesalud.app.domain.value_objects import parse_fecha_iso

LOGGER = get_logger(__name__)

WHATSAPP_BASE_URL = "https://wa.me/"
BOOKING_URL_POR_DEFECTO = "https://clavesalud-2.web.app"
CENTRO_POR_DEFECTO = "Centro Médico"
PACIENTE_POR_DEFECTO = "Paciente"

PLACEHOLDERS: tuple[str, ...] = ("{patientName}", "{nextControlDate}", "{centerName}")

_PLACEHOLDER_RE = re.compile(r"\{[^}]+\}")
_SEPARADORES_TELEFONO_RE = re.compile(r"[\s\-()]")
_INICIO_PALABRA_RE = re.compile(r"(^|[\s-])(\w)")
# encodeURIComponent deja sin escapar estos signos además de letras y dígitos.
_SEGUROS_URL = "-_.!~*'()"

_MESES = (
    "enero",
    "febrero",
    "marzo",
    "abril",
    "mayo",
    "junio",
    "julio",
    "agosto",
    "septiembre",
    "octubre",
    "noviembre",
    "diciembre",
)


def extraer_placeholders(texto: str | None) -> list[str]:
    if not texto:
        return []
    return _PLACEHOLDER_RE.findall(texto)


def placeholders_invalidos(texto: str | None) -> list[str]:
    return [p for p in extraer_placeholders(texto) if p not in PLACEHOLDERS]


def aplicar_plantilla(texto: str, valores: Mapping[str, str | None]) -> str:
    resultado = texto
    for placeholder in PLACEHOLDERS:
        clave = placeholder[1:-1]
        resultado = resultado.replace(placeholder, valores.get(clave) or "")
    return resultado


def normalizar_telefono(telefono: str | None) -> str:
    """
    Normaliza móviles chilenos: '912345678' y '56912345678' pasan a '+56912345678'.
    Otros formatos solo pierden espacios, guiones y paréntesis.
    """
    if not telefono:
        return ""
    limpio = _SEPARADORES_TELEFONO_RE.sub("", telefono)
    if len(limpio) == 9 and limpio.startswith("9"):
        return "+56" + limpio
    if len(limpio) == 11 and limpio.startswith("569"):
        return "+" + limpio
    return limpio


def formatear_nombre_persona(valor: str | None) -> str:
    if not valor:
        return ""
    compacto = " ".join(valor.strip().lower().split())
    return _INICIO_PALABRA_RE.sub(lambda m: m.group(1) + m.group(2).upper(), compacto)


def etiqueta_fecha_larga(fecha: str) -> str:
    """'2026-03-05' -> '5 de marzo de 2026'."""
    try:
        dia = parse_fecha_iso(fecha)
    except ValidationError:
        return fecha or ""
    return f"{dia.day} de {_MESES[dia.month - 1]} de {dia.year}"


def construir_enlace_whatsapp(telefono: str | None, mensaje: str) -> str:
    digitos = "".join(ch for ch in normalizar_telefono(telefono) if ch.isdigit())
    return f"{WHATSAPP_BASE_URL}{digitos}?text={quote(mensaje, safe=_SEGUROS_URL)}"


def nombre_profesional_visible(nombre_profesional: str | None) -> str:
    formateado = formatear_nombre_persona(nombre_profesional)
    return f"el Dr. {formateado}" if formateado else "el profesional asignado"


def mensaje_confirmacion(
    bloque: BloqueAgenda,
    *,
    centro_nombre: str | None,
    profesional_nombre: str | None,
) -> str:
    paciente = formatear_nombre_persona(bloque.paciente_nombre) or PACIENTE_POR_DEFECTO
    profesional = formatear_nombre_persona(profesional_nombre) or "el profesional"
    return (
        f"Estimado/a {paciente}, lo saludamos desde {centro_nombre or CENTRO_POR_DEFECTO} "
        f"y queremos confirmar su hora con {profesional} para el día {etiqueta_fecha_larga(bloque.fecha)} "
        f"a las {bloque.hora}. Agradecemos su confirmación, por favor."
    )


def mensaje_cancelacion(
    bloque: BloqueAgenda,
    *,
    centro_nombre: str | None,
    profesional_nombre: str | None,
    booking_url: str = BOOKING_URL_POR_DEFECTO,
) -> str:
    paciente = formatear_nombre_persona(bloque.paciente_nombre) or PACIENTE_POR_DEFECTO
    return (
        f"Estimado/a {paciente}, le escribimos desde {centro_nombre or CENTRO_POR_DEFECTO}. "
        f"Por motivos de fuerza mayor, {nombre_profesional_visible(profesional_nombre)} no podrá asistir "
        f"a la consulta del {etiqueta_fecha_larga(bloque.fecha)} a las {bloque.hora}. "
        "Pedimos disculpas e invitamos a reagendar su hora por los canales habituales: "
        "teléfono del centro médico o por esta misma vía. "
        f"Puedes solicitar una nueva hora aquí: {booking_url}"
    )


@dataclass(slots=True)
class PrepararMensajesReserva:
    """Construye los enlaces del detalle de una reserva: confirmar, cancelar y plantillas del centro."""

    plantillas: RepositorioPlantillasWhatsapp
    traductor: Callable[[str], str]
    booking_url: str = BOOKING_URL_POR_DEFECTO

    def ejecutar(
        self,
        bloque: BloqueAgenda | None,
        *,
        centro_id: str,
        centro_nombre: str | None,
        profesional_nombre: str | None,
    ) -> MensajesReservaDTO:
        if bloque is None or not bloque.reservado:
            return MensajesReservaDTO(confirmacion=None, cancelacion=None)

        confirmar = mensaje_confirmacion(bloque, centro_nombre=centro_nombre, profesional_nombre=profesional_nombre)
        cancelar = mensaje_cancelacion(
            bloque,
            centro_nombre=centro_nombre,
            profesional_nombre=profesional_nombre,
            booking_url=self.booking_url,
        )
        valores = {
            "patientName": formatear_nombre_persona(bloque.paciente_nombre) or PACIENTE_POR_DEFECTO,
            "nextControlDate": etiqueta_fecha_larga(bloque.fecha),
            "centerName": centro_nombre or CENTRO_POR_DEFECTO,
        }
        enlaces_plantillas = tuple(
            _enlace(plantilla.id, plantilla.titulo, aplicar_plantilla(plantilla.cuerpo, valores), bloque)
            for plantilla in self.plantillas.listar(centro_id)
            if plantilla.habilitada
        )
        LOGGER.info(
            "mensajes_reserva_preparados",
            extra={"action": "preparar_mensajes_reserva", "plantillas": len(enlaces_plantillas)},
        )
        return MensajesReservaDTO(
            confirmacion=_enlace("confirmar", self.traductor("agenda.detalle.confirmar_whatsapp"), confirmar, bloque),
            cancelacion=_enlace("cancelar", self.traductor("agenda.detalle.cancelar_whatsapp"), cancelar, bloque),
            plantillas=enlaces_plantillas,
        )


def _enlace(clave: str, titulo: str, mensaje: str, bloque: BloqueAgenda) -> EnlaceMensajeDTO:
    return EnlaceMensajeDTO(
        clave=clave,
        titulo=titulo,
        mensaje=mensaje,
        url=construir_enlace_whatsapp(bloque.paciente_telefono, mensaje),
    )
