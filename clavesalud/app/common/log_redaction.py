"""
Enmascarado de datos de pacientes antes de escribir un log.

Dos mecanismos:
- reglas sobre texto libre (correo, RUT, teléfono), aplicadas a mensajes y trazas;
- claves sensibles en los 'extra': su valor se sustituye entero.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

MASCARA = "***"


@dataclass(frozen=True, slots=True)
class ReglaEnmascarado:
    nombre: str
    patron: re.Pattern[str]

    def aplicar(self, texto: str) -> str:
        return self.patron.sub(MASCARA, texto)


# El orden importa: el RUT va antes que el teléfono, cuyo patrón también casa sus dígitos.
REGLAS: tuple[ReglaEnmascarado, ...] = (
    ReglaEnmascarado("correo", re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")),
    ReglaEnmascarado("rut", re.compile(r"\b\d{1,2}\.?\d{3}\.?\d{3}-[\dkK]\b")),
    # Una fecha ISO (2026-03-10) no es un teléfono.
    ReglaEnmascarado("telefono", re.compile(r"(?<![\w/])(?!\d{4}-\d{2}-\d{2}(?!\d))\+?\d[\d\s().-]{7,}\d")),
)

# Fragmentos de nombre de campo; basta con que la clave los contenga (patientName, paciente_rut...).
FRAGMENTOS_SENSIBLES = frozenset(
    {"rut", "telefono", "teléfono", "phone", "email", "correo", "nombre", "name", "mensaje"}
)


def enmascarar_texto(texto: str) -> str:
    for regla in REGLAS:
        texto = regla.aplicar(texto)
    return texto


def es_clave_sensible(clave: str) -> bool:
    clave = clave.lower()
    return any(fragmento in clave for fragmento in FRAGMENTOS_SENSIBLES)


def enmascarar_valor(valor: Any, *, clave: str | None = None) -> Any:
    """
    Recorre dicts, listas y tuplas. Los textos bajo una clave sensible se
    sustituyen por la máscara; el resto de textos pasa por las reglas.
    Números, booleanos y None no se tocan.
    """
    if isinstance(valor, str):
        if clave is not None and es_clave_sensible(clave):
            return MASCARA
        return enmascarar_texto(valor)
    if isinstance(valor, Mapping):
        return {k: enmascarar_valor(v, clave=str(k)) for k, v in valor.items()}
    if isinstance(valor, (list, tuple)):
        return [enmascarar_valor(v, clave=clave) for v in valor]
    return valor
