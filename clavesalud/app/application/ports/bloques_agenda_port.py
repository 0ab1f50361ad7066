from __future__ import annotations

from typing import Callable, Protocol, Sequence

from clavesalud.app.domain.agenda import BloqueAgenda

CallbackCambiosAgenda = Callable[[str], None]
CancelarSuscripcion = Callable[[], None]


class RepositorioBloquesAgenda(Protocol):
    """Almacén de bloques de agenda de un centro."""

    def listar_activos(
        self,
        centro_id: str,
        *,
        profesional_id: str | None = None,
        fecha: str | None = None,
    ) -> list[BloqueAgenda]:
        """Bloques activos del centro, opcionalmente filtrados por profesional y fecha."""

    def crear_si_libre(self, bloque: BloqueAgenda) -> bool:
        """Inserta el bloque solo si no hay otro activo para (centro, profesional, fecha, hora)."""

    def create(self, bloque: BloqueAgenda) -> str:
        """Inserción sin comprobaciones (reservas externas, importaciones)."""

    def eliminar_disponibles(self, ids: Sequence[str]) -> int:
        """Borra los bloques indicados que siguen 'available'; devuelve cuántos borró."""

    def desactivar(self, ids: Sequence[str]) -> int:
        ...

    def suscribir(self, centro_id: str, callback: CallbackCambiosAgenda) -> CancelarSuscripcion:
        """Registra un observador de cambios del centro; devuelve la función de cancelación."""
