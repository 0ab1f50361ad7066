# domain/exceptions.py
"""
Excepciones del dominio.

Propósito:
- Distinguir errores de reglas de negocio (dominio) de errores técnicos (DB/UI/red).
- Permitir que la capa de aplicación/UI traduzca errores a avisos para el usuario.
"""


class DomainError(Exception):
    """Error base del dominio."""


class ValidationError(DomainError):
    """Entidad en estado inválido o violación de invariantes."""


class BusinessRuleError(DomainError):
    """Violación de regla de negocio (p. ej., bloque ya abierto por otro usuario)."""


class AuthorizationError(DomainError):
    """Operación denegada por falta de permisos o agenda en modo solo lectura."""


class CentroNoSeleccionadoError(DomainError):
    """No hay un centro activo sobre el que operar."""


class ErrorAlmacenAgenda(DomainError):
    """Fallo del almacén de bloques (lectura, escritura o suscripción)."""
