from __future__ import annotations

from typing import Dict, List

from clavesalud.app.container import AppContainer
from clavesalud.app.pages.page_def import PageDef


class PageRegistry:
    """Registro in-memory de PageDef.

    Cada página registra su PageDef en un único lugar y MainWindow crea
    cada widget la primera vez que se abre su entrada.
    """

    def __init__(self) -> None:
        self._pages: Dict[str, PageDef] = {}

    def register(self, page: PageDef) -> None:
        if page.key in self._pages:
            raise ValueError(f"Página duplicada: {page.key}")
        self._pages[page.key] = page

    def get(self, key: str) -> PageDef:
        return self._pages[key]

    def list(self) -> List[PageDef]:
        return list(self._pages.values())


def register_pages(registry: PageRegistry, container: AppContainer) -> None:
    from clavesalud.app.pages.agenda.register import register as register_agenda
    from clavesalud.app.pages.plantillas_whatsapp.register import register as register_plantillas

    register_agenda(registry, container)
    register_plantillas(registry, container)


def get_pages(container: AppContainer) -> List[PageDef]:
    reg = PageRegistry()
    register_pages(reg, container)
    return reg.list()
