from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from PySide6.QtWidgets import QWidget

if TYPE_CHECKING:
    from clavesalud.app.application.security import UserContext
    from clavesalud.app.container import AppContainer

FabricaPagina = Callable[["AppContainer"], QWidget]


@dataclass(frozen=True, slots=True)
class PageDef:
    """
    Entrada de la barra lateral.

    El rótulo se guarda como clave i18n y se traduce al pintarlo, así la
    barra sigue al idioma activo. La página se construye con el container
    la primera vez que se abre.
    """

    key: str
    titulo_clave: str
    factory: FabricaPagina
    requiere_escritura: bool = False

    def titulo(self, traductor: Callable[[str], str], usuario: UserContext) -> str:
        titulo = traductor(self.titulo_clave)
        if self.requiere_escritura and not usuario.can_write:
            return f"{titulo} ({traductor('nav.solo_lectura')})"
        return titulo

    def crear(self, container: AppContainer) -> QWidget:
        return self.factory(container)
