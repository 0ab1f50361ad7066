# domain/enums.py
from __future__ import annotations
from enum import Enum


class EstadoBloque(str, Enum):
    """Estado persistido de un bloque de agenda."""

    AVAILABLE = "available"
    BOOKED = "booked"


class EstadoSlot(str, Enum):
    """Estado derivado de un slot: la ausencia de registro es CERRADO."""

    CERRADO = "closed"
    ABIERTO = "open"
    RESERVADO = "booked"


class EstadoSuscripcionCentro(str, Enum):
    ACTIVE = "active"
    LATE = "late"
    SUSPENDED = "suspended"


class RolProfesional(str, Enum):
    MEDICO = "MEDICO"
    ODONTOLOGO = "ODONTOLOGO"
    ENFERMERA = "ENFERMERA"
    KINESIOLOGO = "KINESIOLOGO"
    PSICOLOGO = "PSICOLOGO"
    NUTRICIONISTA = "NUTRICIONISTA"
    MATRONA = "MATRONA"
    FONOAUDIOLOGO = "FONOAUDIOLOGO"
    TERAPEUTA_OCUPACIONAL = "TERAPEUTA_OCUPACIONAL"
    PODOLOGO = "PODOLOGO"
    TECNOLOGO_MEDICO = "TECNOLOGO_MEDICO"
    ADMINISTRATIVO = "ADMINISTRATIVO"
