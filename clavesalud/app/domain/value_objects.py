"""Utilidades internas de dominio."""

from __future__ import annotations

import re
from datetime import date
from typing import Optional

from clavesalud.app.domain.exceptions import ValidationError

_HHMM_RE = re.compile(r"^(?P<hh>[01]\d|2[0-3]):(?P<mm>[0-5]\d)$")


def _strip_or_none(value: Optional[str]) -> Optional[str]:
    """Normaliza strings opcionales: devuelve None si queda vacío tras strip()."""
    if value is None:
        return None
    v = value.strip()
    return v if v else None


def _strip_or_empty(value: Optional[str]) -> str:
    return (value or "").strip()


def _require_non_empty(value: str, field_name: str) -> str:
    """Exige string no vacío; lanza ValidationError si no cumple."""
    v = (value or "").strip()
    if not v:
        raise ValidationError(f"Campo obligatorio: {field_name}.")
    return v


def parse_hhmm_a_minutos(value: str, field_name: str = "hora") -> int:
    """Convierte 'HH:MM' (24h) en minutos desde medianoche."""
    match = _HHMM_RE.match((value or "").strip())
    if match is None:
        raise ValidationError(f"{field_name} debe tener formato HH:MM.")
    return int(match.group("hh")) * 60 + int(match.group("mm"))


def formatear_minutos_hhmm(minutos: int) -> str:
    return f"{minutos // 60:02d}:{minutos % 60:02d}"


def parse_fecha_iso(value: str, field_name: str = "fecha") -> date:
    """Exige fecha 'YYYY-MM-DD' sin componente horario."""
    texto = (value or "").strip()
    try:
        parsed = date.fromisoformat(texto)
    except ValueError as exc:
        raise ValidationError(f"{field_name} debe tener formato YYYY-MM-DD.") from exc
    if parsed.isoformat() != texto:
        raise ValidationError(f"{field_name} debe tener formato YYYY-MM-DD.")
    return parsed
