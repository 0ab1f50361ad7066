from __future__ import annotations

from clavesalud.app.container import AppContainer
from clavesalud.app.pages.page_def import PageDef
from clavesalud.app.pages.pages_registry import PageRegistry


def _crear_pagina(container: AppContainer):
    from clavesalud.app.pages.agenda.page import PageAgenda

    return PageAgenda(container)


def register(registry: PageRegistry, container: AppContainer) -> None:
    registry.register(
        PageDef(key="agenda", titulo_clave="nav.agenda", factory=_crear_pagina, requiere_escritura=True)
    )
