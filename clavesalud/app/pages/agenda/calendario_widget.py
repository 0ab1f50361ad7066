from __future__ import annotations

from datetime import date
from typing import Callable, Optional, Sequence

from PySide6.QtCore import Signal
from PySide6.QtWidgets import QGridLayout, QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from clavesalud.app.application.agenda.calendario import CursorMes, DiaCalendario, construir_mes
from clavesalud.app.domain.agenda import BloqueAgenda

_ESTILO_INDICADOR = "font-weight: bold; color: #0f766e;"
_ESTILO_SELECCIONADO = "background-color: #0f766e; color: white; font-weight: bold;"


class CalendarioAgendaWidget(QWidget):
    """Selector mensual de día: días pasados deshabilitados y un punto en los días con bloques."""

    fecha_seleccionada = Signal(str)

    def __init__(self, traductor: Callable[[str], str], hoy: date, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._t = traductor
        self._hoy = hoy
        self._cursor = CursorMes.desde_fecha(hoy)
        self._seleccion: str | None = hoy.isoformat()
        self._bloques: Sequence[BloqueAgenda] = ()
        self._profesional_id: str | None = None
        self._botones: list[QPushButton] = []

        self._build_ui()
        self.refrescar()

    @property
    def seleccion(self) -> str | None:
        return self._seleccion

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        cabecera = QHBoxLayout()
        self.btn_anterior = QPushButton("‹")
        self.btn_anterior.setToolTip(self._t("agenda.mes_anterior"))
        self.btn_siguiente = QPushButton("›")
        self.btn_siguiente.setToolTip(self._t("agenda.mes_siguiente"))
        self.lbl_mes = QLabel()
        cabecera.addWidget(self.btn_anterior)
        cabecera.addStretch(1)
        cabecera.addWidget(self.lbl_mes)
        cabecera.addStretch(1)
        cabecera.addWidget(self.btn_siguiente)
        root.addLayout(cabecera)

        self._grid = QGridLayout()
        for columna, nombre in enumerate(self._t("dias.cortos").split(",")):
            self._grid.addWidget(QLabel(nombre), 0, columna)
        root.addLayout(self._grid)

        self.btn_anterior.clicked.connect(lambda: self._mover(-1))
        self.btn_siguiente.clicked.connect(lambda: self._mover(1))

    def set_datos(self, bloques: Sequence[BloqueAgenda], profesional_id: str | None) -> None:
        self._bloques = bloques
        self._profesional_id = profesional_id
        self.refrescar()

    def set_hoy(self, hoy: date) -> None:
        self._hoy = hoy
        self.refrescar()

    def _mover(self, meses: int) -> None:
        self._cursor = self._cursor.desplazar(meses)
        self.refrescar()

    def refrescar(self) -> None:
        for boton in self._botones:
            self._grid.removeWidget(boton)
            boton.deleteLater()
        self._botones.clear()

        meses = self._t("meses").split(",")
        self.lbl_mes.setText(f"{meses[self._cursor.mes - 1]} {self._cursor.anio}")

        celdas = construir_mes(
            self._cursor,
            fecha_seleccionada=self._seleccion,
            bloques=self._bloques,
            profesional_id=self._profesional_id,
            hoy=self._hoy,
        )
        for indice, dia in enumerate(celdas):
            if dia is None:
                continue
            boton = self._crear_boton(dia)
            self._grid.addWidget(boton, 1 + indice // 7, indice % 7)
            self._botones.append(boton)

    def _crear_boton(self, dia: DiaCalendario) -> QPushButton:
        texto = f"{dia.fecha.day}•" if dia.mostrar_indicador else str(dia.fecha.day)
        boton = QPushButton(texto)
        boton.setEnabled(dia.habilitado)
        if dia.seleccionado:
            boton.setStyleSheet(_ESTILO_SELECCIONADO)
        elif dia.mostrar_indicador:
            boton.setStyleSheet(_ESTILO_INDICADOR)
        boton.clicked.connect(lambda _=False, iso=dia.iso: self._seleccionar(iso))
        return boton

    def _seleccionar(self, iso: str) -> None:
        self._seleccion = iso
        self.refrescar()
        self.fecha_seleccionada.emit(iso)
