from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtCore import QUrl
from PySide6.QtGui import QDesktopServices
from PySide6.QtWidgets import (
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from clavesalud.app.application.agenda.dtos import EnlaceMensajeDTO, MensajesReservaDTO
from clavesalud.app.application.agenda.notificaciones import etiqueta_fecha_larga, formatear_nombre_persona
from clavesalud.app.domain.agenda import BloqueAgenda


class DetalleReservaDialog(QDialog):
    """Detalle de solo lectura de un bloque reservado con sus enlaces de WhatsApp."""

    def __init__(
        self,
        bloque: BloqueAgenda,
        mensajes: MensajesReservaDTO,
        traductor: Callable[[str], str],
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        t = traductor
        self.setWindowTitle(t("agenda.detalle.titulo"))

        form = QFormLayout()
        form.addRow(t("agenda.detalle.paciente"), QLabel(formatear_nombre_persona(bloque.paciente_nombre)))
        form.addRow(t("agenda.detalle.rut"), QLabel(bloque.paciente_rut))
        form.addRow(t("agenda.detalle.telefono"), QLabel(bloque.paciente_telefono))
        form.addRow(t("agenda.detalle.fecha"), QLabel(etiqueta_fecha_larga(bloque.fecha)))
        form.addRow(t("agenda.detalle.hora"), QLabel(bloque.hora))

        layout = QVBoxLayout(self)
        layout.addLayout(form)

        for enlace in (mensajes.confirmacion, mensajes.cancelacion):
            if enlace is not None:
                layout.addWidget(self._boton_enlace(enlace))

        layout.addWidget(QLabel(t("agenda.detalle.plantillas")))
        if not mensajes.plantillas:
            layout.addWidget(QLabel(t("agenda.detalle.sin_plantillas")))
        for enlace in mensajes.plantillas:
            layout.addWidget(self._boton_enlace(enlace))

        buttons = QDialogButtonBox(QDialogButtonBox.Close)
        buttons.button(QDialogButtonBox.Close).setText(t("agenda.detalle.cerrar"))
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

    def _boton_enlace(self, enlace: EnlaceMensajeDTO) -> QPushButton:
        boton = QPushButton(enlace.titulo)
        boton.setToolTip(enlace.mensaje)
        boton.clicked.connect(lambda _=False, url=enlace.url: QDesktopServices.openUrl(QUrl(url)))
        return boton
