from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtCore import QTime
from PySide6.QtWidgets import (
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QLabel,
    QSpinBox,
    QTimeEdit,
    QWidget,
)

from clavesalud.app.application.agenda.plantilla_slots import contar_slots
from clavesalud.app.domain.agenda import ConfigAgenda


class ConfigAgendaDialog(QDialog):
    def __init__(
        self,
        config: ConfigAgenda,
        traductor: Callable[[str], str],
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._t = traductor
        self.setWindowTitle(traductor("agenda.config.titulo"))

        self.time_inicio = QTimeEdit(QTime.fromString(config.inicio_efectivo, "HH:mm"))
        self.time_inicio.setDisplayFormat("HH:mm")
        self.time_fin = QTimeEdit(QTime.fromString(config.fin_efectivo, "HH:mm"))
        self.time_fin.setDisplayFormat("HH:mm")
        self.spin_duracion = QSpinBox()
        self.spin_duracion.setRange(5, 240)
        self.spin_duracion.setSingleStep(5)
        self.spin_duracion.setValue(max(5, config.duracion_efectiva))
        self.lbl_vista_previa = QLabel()

        form = QFormLayout(self)
        form.addRow(traductor("agenda.config.inicio"), self.time_inicio)
        form.addRow(traductor("agenda.config.fin"), self.time_fin)
        form.addRow(traductor("agenda.config.duracion"), self.spin_duracion)
        form.addRow("", self.lbl_vista_previa)

        buttons = QDialogButtonBox(QDialogButtonBox.Save | QDialogButtonBox.Cancel)
        buttons.button(QDialogButtonBox.Cancel).setText(traductor("common.cancelar"))
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        form.addRow(buttons)

        self.time_inicio.timeChanged.connect(self._actualizar_vista_previa)
        self.time_fin.timeChanged.connect(self._actualizar_vista_previa)
        self.spin_duracion.valueChanged.connect(self._actualizar_vista_previa)
        self._actualizar_vista_previa()

    def get_config(self) -> ConfigAgenda:
        return ConfigAgenda(
            hora_inicio=self.time_inicio.time().toString("HH:mm"),
            hora_fin=self.time_fin.time().toString("HH:mm"),
            duracion_minutos=self.spin_duracion.value(),
        )

    def _actualizar_vista_previa(self, *_args) -> None:
        total = contar_slots(self.get_config())
        self.lbl_vista_previa.setText(self._t("agenda.config.vista_previa").format(total=total))
