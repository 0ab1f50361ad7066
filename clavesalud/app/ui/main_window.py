from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QStackedWidget,
    QWidget,
)

from clavesalud.app.bootstrap_logging import get_logger
from clavesalud.app.container import AppContainer
from clavesalud.app.pages.page_def import PageDef
from clavesalud.app.pages.pages_registry import get_pages

LOGGER = get_logger(__name__)

PAGINA_INICIAL = "agenda"


class MainWindow(QMainWindow):
    """
    Ventana principal: barra lateral con las páginas registradas y una pila
    donde cada página se construye la primera vez que se abre.

    Las páginas pueden exponer on_show()/on_hide(); la agenda los usa para
    suscribirse y desuscribirse del centro seleccionado.
    """

    def __init__(self, container: AppContainer, pagina_inicial: str = PAGINA_INICIAL) -> None:
        super().__init__()
        self._container = container
        self._definiciones: dict[str, PageDef] = {p.key: p for p in get_pages(container)}
        self._paginas: dict[str, QWidget] = {}
        self.resize(1200, 800)

        self.lst_paginas = QListWidget()
        self.lst_paginas.setFixedWidth(220)
        for definicion in self._definiciones.values():
            item = QListWidgetItem()
            item.setData(Qt.UserRole, definicion.key)
            self.lst_paginas.addItem(item)
        self.lst_paginas.currentItemChanged.connect(self._on_item_changed)

        self.stack = QStackedWidget()

        central = QWidget()
        layout = QHBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)
        layout.addWidget(self.lst_paginas)
        layout.addWidget(self.stack, 1)
        self.setCentralWidget(central)

        self.lbl_usuario = QLabel()
        self.statusBar().addPermanentWidget(self.lbl_usuario)

        self._menu_archivo = self.menuBar().addMenu("")
        self._accion_salir = QAction(self)
        self._accion_salir.triggered.connect(self.close)
        self._menu_archivo.addAction(self._accion_salir)

        self._retraducir()
        container.i18n.subscribe(self._retraducir)
        self.abrir_pagina(pagina_inicial)

    # ------------------------------------------------------------------
    # Navegación
    # ------------------------------------------------------------------

    @property
    def pagina_actual(self) -> Optional[str]:
        widget = self.stack.currentWidget()
        for key, pagina in self._paginas.items():
            if pagina is widget:
                return key
        return None

    def abrir_pagina(self, key: str) -> None:
        definicion = self._definiciones.get(key)
        if definicion is None:
            LOGGER.warning("pagina_desconocida", extra={"action": "abrir_pagina", "page": key})
            return
        if key == self.pagina_actual:
            return

        saliente = self.stack.currentWidget()
        if saliente is not None:
            _avisar(saliente, "on_hide")

        pagina = self._paginas.get(key)
        if pagina is None:
            pagina = definicion.crear(self._container)
            self._paginas[key] = pagina
            self.stack.addWidget(pagina)
            LOGGER.info("pagina_creada", extra={"action": "abrir_pagina", "page": key})
        self.stack.setCurrentWidget(pagina)
        _avisar(pagina, "on_show")
        self._marcar_en_lista(key)

    def _marcar_en_lista(self, key: str) -> None:
        self.lst_paginas.blockSignals(True)
        try:
            for fila in range(self.lst_paginas.count()):
                item = self.lst_paginas.item(fila)
                if item.data(Qt.UserRole) == key:
                    self.lst_paginas.setCurrentItem(item)
                    break
        finally:
            self.lst_paginas.blockSignals(False)

    def _on_item_changed(self, actual: Optional[QListWidgetItem], _anterior: Optional[QListWidgetItem]) -> None:
        if actual is not None:
            self.abrir_pagina(actual.data(Qt.UserRole))

    # ------------------------------------------------------------------
    # Textos
    # ------------------------------------------------------------------

    def _retraducir(self) -> None:
        t = self._container.i18n.t
        usuario = self._container.user_context
        self.setWindowTitle(t("app.title"))
        for fila in range(self.lst_paginas.count()):
            item = self.lst_paginas.item(fila)
            item.setText(self._definiciones[item.data(Qt.UserRole)].titulo(t, usuario))
        self._menu_archivo.setTitle(t("menu.archivo"))
        self._accion_salir.setText(t("menu.salir"))
        self.lbl_usuario.setText(f"{usuario.username} · {t(f'app.rol.{usuario.role.value.lower()}')}")

    def closeEvent(self, event) -> None:
        """Cierra primero las páginas (sueltan sus suscripciones) y luego la BD."""
        for pagina in self._paginas.values():
            pagina.close()
        self._container.close()
        super().closeEvent(event)


def _avisar(pagina: QWidget, hook: str) -> None:
    metodo = getattr(pagina, hook, None)
    if callable(metodo):
        metodo()
