from __future__ import annotations

import uuid
from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QAbstractItemView,
    QComboBox,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from clavesalud.app.application.agenda.notificaciones import PLACEHOLDERS
from clavesalud.app.bootstrap_logging import get_logger
from clavesalud.app.container import AppContainer
from clavesalud.app.domain.centros import Centro, PlantillaWhatsapp
from clavesalud.app.domain.exceptions import DomainError
from clavesalud.app.ui.error_presenter import present_error

LOGGER = get_logger(__name__)

_COL_TITULO = 0
_COL_CUERPO = 1
_COL_HABILITADA = 2


class PagePlantillasWhatsapp(QWidget):
    """Editor de las plantillas de WhatsApp de un centro."""

    def __init__(self, container: AppContainer, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._container = container
        self._t = container.i18n.t
        self._centros: list[Centro] = []

        self._build_ui()
        self._connect_signals()
        self._cargar_centros()

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)

        filtros = QHBoxLayout()
        self.cbo_centro = QComboBox()
        filtros.addWidget(QLabel(self._t("agenda.centro")))
        filtros.addWidget(self.cbo_centro, 1)
        root.addLayout(filtros)

        self.lbl_ayuda = QLabel(self._t("plantillas.ayuda").format(placeholders=", ".join(PLACEHOLDERS)))
        self.lbl_ayuda.setWordWrap(True)
        root.addWidget(self.lbl_ayuda)

        self.table = QTableWidget(0, 3)
        self.table.setHorizontalHeaderLabels(
            [
                self._t("plantillas.col.titulo"),
                self._t("plantillas.col.cuerpo"),
                self._t("plantillas.col.habilitada"),
            ]
        )
        self.table.setSelectionBehavior(QAbstractItemView.SelectRows)
        self.table.horizontalHeader().setSectionResizeMode(_COL_CUERPO, QHeaderView.Stretch)
        root.addWidget(self.table, 1)

        botones = QHBoxLayout()
        self.btn_agregar = QPushButton(self._t("plantillas.agregar"))
        self.btn_eliminar = QPushButton(self._t("plantillas.eliminar"))
        self.btn_guardar = QPushButton(self._t("plantillas.guardar"))
        botones.addWidget(self.btn_agregar)
        botones.addWidget(self.btn_eliminar)
        botones.addStretch(1)
        botones.addWidget(self.btn_guardar)
        root.addLayout(botones)

        solo_lectura = not self._container.user_context.can_write
        for boton in (self.btn_agregar, self.btn_eliminar, self.btn_guardar):
            boton.setEnabled(not solo_lectura)

    def _connect_signals(self) -> None:
        self.cbo_centro.currentIndexChanged.connect(lambda _i: self._cargar_plantillas())
        self.btn_agregar.clicked.connect(self._on_agregar)
        self.btn_eliminar.clicked.connect(self._on_eliminar)
        self.btn_guardar.clicked.connect(self._on_guardar)

    def on_show(self) -> None:
        self._cargar_plantillas()

    # --------------------------------------------------------------

    def _cargar_centros(self) -> None:
        self._centros = self._container.centros_repo.list_all()
        self.cbo_centro.blockSignals(True)
        self.cbo_centro.clear()
        for centro in self._centros:
            self.cbo_centro.addItem(centro.nombre, centro.id)
        self.cbo_centro.blockSignals(False)
        self._cargar_plantillas()

    def _centro_id(self) -> str | None:
        return self.cbo_centro.currentData()

    def _cargar_plantillas(self) -> None:
        self.table.setRowCount(0)
        centro_id = self._centro_id()
        if not centro_id:
            return
        for plantilla in self._container.listar_plantillas().ejecutar(centro_id):
            self._agregar_fila(plantilla)

    def _agregar_fila(self, plantilla: PlantillaWhatsapp) -> None:
        row = self.table.rowCount()
        self.table.insertRow(row)
        titulo = QTableWidgetItem(plantilla.titulo)
        titulo.setData(Qt.UserRole, plantilla.id)
        self.table.setItem(row, _COL_TITULO, titulo)
        self.table.setItem(row, _COL_CUERPO, QTableWidgetItem(plantilla.cuerpo))
        habilitada = QTableWidgetItem()
        habilitada.setFlags(Qt.ItemIsUserCheckable | Qt.ItemIsEnabled)
        habilitada.setCheckState(Qt.Checked if plantilla.habilitada else Qt.Unchecked)
        self.table.setItem(row, _COL_HABILITADA, habilitada)

    def _plantillas_de_tabla(self) -> list[PlantillaWhatsapp]:
        plantillas: list[PlantillaWhatsapp] = []
        for row in range(self.table.rowCount()):
            titulo = self.table.item(row, _COL_TITULO)
            cuerpo = self.table.item(row, _COL_CUERPO)
            habilitada = self.table.item(row, _COL_HABILITADA)
            plantillas.append(
                PlantillaWhatsapp(
                    id=str(titulo.data(Qt.UserRole)) if titulo else uuid.uuid4().hex,
                    titulo=titulo.text() if titulo else "",
                    cuerpo=cuerpo.text() if cuerpo else "",
                    habilitada=habilitada is not None and habilitada.checkState() == Qt.Checked,
                )
            )
        return plantillas

    def _on_agregar(self) -> None:
        self._agregar_fila(PlantillaWhatsapp(id=uuid.uuid4().hex, titulo="", cuerpo=""))
        self.table.editItem(self.table.item(self.table.rowCount() - 1, _COL_TITULO))

    def _on_eliminar(self) -> None:
        row = self.table.currentRow()
        if row >= 0:
            self.table.removeRow(row)

    def _on_guardar(self) -> None:
        centro_id = self._centro_id()
        if not centro_id:
            return
        try:
            self._container.guardar_plantillas().ejecutar(
                self._container.user_context,
                centro_id,
                self._plantillas_de_tabla(),
            )
        except DomainError as exc:
            present_error(self, exc, "guardar_plantillas_whatsapp", traductor=self._t)
            return
        self._container.toasts.success(self._t("plantillas.guardadas"))
        self._cargar_plantillas()
