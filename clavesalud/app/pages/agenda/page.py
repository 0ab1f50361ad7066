from __future__ import annotations

from typing import Any, Callable, Optional

from PySide6.QtCore import Qt, QTimer, Signal
from PySide6.QtWidgets import (
    QComboBox,
    QDialog,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from clavesalud.app.application.agenda.dtos import AccionToggle, ContextoAgenda, ResultadoAlternarBloque
from clavesalud.app.application.agenda.notificaciones import etiqueta_fecha_larga, formatear_nombre_persona
from clavesalud.app.application.agenda.plantilla_slots import generar_slots
from clavesalud.app.application.agenda.resolver_slots import (
    es_fecha_pasada,
    listar_reservas_del_dia,
    resolver_estados_slots,
)
from clavesalud.app.application.agenda.sincronizacion import InstantaneaAgenda
from clavesalud.app.bootstrap_logging import get_logger, set_centro_context
from clavesalud.app.container import AppContainer
from clavesalud.app.domain.agenda import ConfigAgenda, SlotResuelto
from clavesalud.app.domain.centros import Centro, Profesional
from clavesalud.app.domain.enums import EstadoSlot
from clavesalud.app.domain.exceptions import DomainError
from clavesalud.app.pages.agenda.calendario_widget import CalendarioAgendaWidget
from clavesalud.app.pages.agenda.dialogs.config_agenda_dialog import ConfigAgendaDialog
from clavesalud.app.pages.agenda.dialogs.detalle_reserva_dialog import DetalleReservaDialog
from clavesalud.app.pages.agenda.escritor_agenda_worker import EscrituraFailPayload, RunnerAlternarBloque
from clavesalud.app.ui.error_presenter import present_error

LOGGER = get_logger(__name__)

_COLUMNAS_SLOTS = 4
_DURACION_TOAST_MS = 4000
_ESTILO_SLOT = {
    EstadoSlot.CERRADO: "background-color: #e2e8f0; color: #475569;",
    EstadoSlot.ABIERTO: "background-color: #ccfbf1; color: #115e59; font-weight: bold;",
    EstadoSlot.RESERVADO: "background-color: #fde68a; color: #92400e; font-weight: bold;",
}
_ESTILO_TOAST = {
    "success": "background-color: #dcfce7; color: #166534; padding: 6px;",
    "info": "background-color: #e0f2fe; color: #075985; padding: 6px;",
    "warning": "background-color: #fef9c3; color: #854d0e; padding: 6px;",
    "error": "background-color: #fee2e2; color: #991b1b; padding: 6px;",
}


class PageAgenda(QWidget):
    # Puentes hacia el hilo de la UI: el worker publica cambios y toasts desde su hilo.
    _tarea_ui = Signal(object)
    _toast_ui = Signal(object)

    def __init__(self, container: AppContainer, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._container = container
        self._t = container.i18n.t
        self._centros: list[Centro] = []
        self._profesionales: list[Profesional] = []
        self._config = ConfigAgenda()
        self._runners: list[RunnerAlternarBloque] = []
        self._instantanea = InstantaneaAgenda()

        self._tarea_ui.connect(self._ejecutar_tarea_ui, Qt.QueuedConnection)
        self._toast_ui.connect(self._mostrar_toast)
        self._en_vivo = container.agenda_en_vivo(despachar=self._tarea_ui.emit)
        self._cancelar_observador = self._en_vivo.observar(self._on_instantanea)
        self._cancelar_toasts = container.toasts.suscribir(self._toast_ui.emit)

        self._toast_timer = QTimer(self)
        self._toast_timer.setSingleShot(True)
        self._toast_timer.timeout.connect(self._ocultar_toast)

        self._build_ui()
        self._connect_signals()
        self._cargar_centros()

    # --------------------------------------------------------------
    # Construcción
    # --------------------------------------------------------------

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)

        filtros = QHBoxLayout()
        self.cbo_centro = QComboBox()
        self.cbo_profesional = QComboBox()
        self.btn_config = QPushButton(self._t("agenda.configurar"))
        self.lbl_estado = QLabel()
        filtros.addWidget(QLabel(self._t("agenda.centro")))
        filtros.addWidget(self.cbo_centro, 1)
        filtros.addWidget(QLabel(self._t("agenda.profesional")))
        filtros.addWidget(self.cbo_profesional, 1)
        filtros.addWidget(self.btn_config)
        filtros.addWidget(self.lbl_estado)
        root.addLayout(filtros)

        self.lbl_toast = QLabel()
        self.lbl_toast.setVisible(False)
        self.lbl_toast.setWordWrap(True)
        root.addWidget(self.lbl_toast)

        cuerpo = QHBoxLayout()
        self.calendario = CalendarioAgendaWidget(self._t, self._container.reloj())
        cuerpo.addWidget(self.calendario)

        columna_slots = QVBoxLayout()
        self.lbl_slots = QLabel()
        self._grid_slots = QGridLayout()
        self._botones_slot: list[QPushButton] = []
        columna_slots.addWidget(self.lbl_slots)
        columna_slots.addLayout(self._grid_slots)
        columna_slots.addStretch(1)
        cuerpo.addLayout(columna_slots, 1)

        columna_reservas = QVBoxLayout()
        columna_reservas.addWidget(QLabel(self._t("agenda.reservas.titulo")))
        self.lst_reservas = QListWidget()
        columna_reservas.addWidget(self.lst_reservas)
        cuerpo.addLayout(columna_reservas)

        root.addLayout(cuerpo, 1)

    def _connect_signals(self) -> None:
        self.cbo_centro.currentIndexChanged.connect(self._on_centro_changed)
        self.cbo_profesional.currentIndexChanged.connect(self._on_profesional_changed)
        self.calendario.fecha_seleccionada.connect(lambda _fecha: self._render())
        self.btn_config.clicked.connect(self._on_configurar)

    # --------------------------------------------------------------
    # Ciclo de vida (hooks de MainWindow)
    # --------------------------------------------------------------

    def on_show(self) -> None:
        self.calendario.set_hoy(self._container.reloj())
        self._en_vivo.recargar()

    def on_hide(self) -> None:
        self._ocultar_toast()

    def closeEvent(self, event) -> None:
        self._cancelar_toasts()
        self._cancelar_observador()
        self._en_vivo.cerrar()
        super().closeEvent(event)

    # --------------------------------------------------------------
    # Selección de centro y profesional
    # --------------------------------------------------------------

    def _cargar_centros(self) -> None:
        self._centros = self._container.centros_repo.list_all()
        self.cbo_centro.blockSignals(True)
        self.cbo_centro.clear()
        for centro in self._centros:
            self.cbo_centro.addItem(centro.nombre, centro.id)
        self.cbo_centro.blockSignals(False)
        if not self._centros:
            self.lbl_slots.setText(self._t("agenda.sin_centros"))
        self._on_centro_changed(self.cbo_centro.currentIndex())

    def _centro_actual(self) -> Centro | None:
        indice = self.cbo_centro.currentIndex()
        if 0 <= indice < len(self._centros):
            return self._centros[indice]
        return None

    def _profesional_actual(self) -> Profesional | None:
        indice = self.cbo_profesional.currentIndex()
        if 0 <= indice < len(self._profesionales):
            return self._profesionales[indice]
        return None

    def _on_centro_changed(self, _index: int) -> None:
        centro = self._centro_actual()
        set_centro_context(centro.id if centro else None)
        self._profesionales = (
            self._container.profesionales_repo.listar_por_centro(centro.id) if centro is not None else []
        )
        self.cbo_profesional.blockSignals(True)
        self.cbo_profesional.clear()
        for profesional in self._profesionales:
            self.cbo_profesional.addItem(profesional.nombre, profesional.id)
        self.cbo_profesional.blockSignals(False)
        self._on_profesional_changed(self.cbo_profesional.currentIndex())

    def _on_profesional_changed(self, _index: int) -> None:
        centro = self._centro_actual()
        profesional = self._profesional_actual()
        if centro is not None and profesional is not None:
            self._config = self._container.obtener_config_agenda().ejecutar(centro.id, profesional.id)
        else:
            self._config = ConfigAgenda()
        self._en_vivo.seleccionar(centro.id if centro else None, profesional.id if profesional else None)

    def _contexto(self) -> ContextoAgenda:
        profesional = self._profesional_actual()
        return ContextoAgenda(
            centro=self._centro_actual(),
            profesional_id=profesional.id if profesional else None,
            usuario=self._container.user_context,
        )

    # --------------------------------------------------------------
    # Render
    # --------------------------------------------------------------

    def _on_instantanea(self, instantanea: InstantaneaAgenda) -> None:
        self._instantanea = instantanea
        self._render()

    def _render(self) -> None:
        instantanea = self._instantanea
        profesional_id = instantanea.profesional_id
        fecha = self.calendario.seleccion or self._container.reloj().isoformat()
        contexto = self._contexto()

        estados = []
        if self._centro_actual() is not None and not self._profesionales:
            self.lbl_slots.setText(self._t("agenda.sin_profesionales"))
        else:
            self.lbl_slots.setText(self._t("agenda.slots.titulo").format(fecha=etiqueta_fecha_larga(fecha)))
        if profesional_id:
            estados = resolver_estados_slots(
                instantanea.bloques,
                profesional_id=profesional_id,
                fecha=fecha,
                horas=generar_slots(self._config),
            )
        self._render_slots(estados, bloqueado=es_fecha_pasada(fecha, self._container.reloj()))
        self._render_reservas(instantanea, fecha)
        self.calendario.set_datos(instantanea.bloques, profesional_id)

        estado = []
        if instantanea.sincronizando:
            estado.append(self._t("agenda.sincronizando"))
        if contexto.solo_lectura:
            estado.append(self._t("agenda.solo_lectura"))
        self.lbl_estado.setText(" · ".join(estado))
        self.btn_config.setEnabled(profesional_id is not None and not contexto.solo_lectura)

    def _render_slots(self, estados: tuple[SlotResuelto, ...] | list, *, bloqueado: bool) -> None:
        for boton in self._botones_slot:
            self._grid_slots.removeWidget(boton)
            boton.deleteLater()
        self._botones_slot.clear()

        for indice, slot in enumerate(estados):
            boton = QPushButton(f"{slot.hora}\n{self._t(f'agenda.estado.{slot.estado.value}')}")
            boton.setStyleSheet(_ESTILO_SLOT[slot.estado])
            boton.setEnabled(not bloqueado)
            boton.clicked.connect(lambda _=False, hora=slot.hora: self._on_slot_clicked(hora))
            self._grid_slots.addWidget(boton, indice // _COLUMNAS_SLOTS, indice % _COLUMNAS_SLOTS)
            self._botones_slot.append(boton)

        if bloqueado and estados:
            self.lbl_slots.setText(self.lbl_slots.text() + "\n" + self._t("agenda.slots.pasado"))
        elif not estados and self._instantanea.profesional_id:
            self.lbl_slots.setText(self.lbl_slots.text() + "\n" + self._t("agenda.slots.vacio"))

    def _render_reservas(self, instantanea: InstantaneaAgenda, fecha: str) -> None:
        self.lst_reservas.clear()
        if not instantanea.profesional_id:
            return
        reservas = listar_reservas_del_dia(instantanea.bloques, instantanea.profesional_id, fecha)
        if not reservas:
            self.lst_reservas.addItem(self._t("agenda.reservas.vacio"))
            return
        for bloque in reservas:
            self.lst_reservas.addItem(f"{bloque.hora}  {formatear_nombre_persona(bloque.paciente_nombre)}")

    # --------------------------------------------------------------
    # Clic en slot
    # --------------------------------------------------------------

    def _on_slot_clicked(self, hora: str) -> None:
        fecha = self.calendario.seleccion
        if not fecha:
            return
        contexto = self._contexto()
        proveedor = self._container.proveedor_conexion
        self._en_vivo.iniciar_escritura()

        if proveedor is None:
            try:
                resultado = self._container.alternar_bloque().ejecutar(contexto, fecha, hora)
            finally:
                self._en_vivo.finalizar_escritura()
            self._on_toggle_ok(resultado)
            return

        runner = RunnerAlternarBloque(self._container.alternar_bloque, contexto, fecha, hora, proveedor)
        self._runners.append(runner)
        runner.ok.connect(self._on_toggle_ok)
        runner.fail.connect(self._on_toggle_fail)
        runner.finished.connect(lambda r=runner: self._on_runner_finished(r))
        runner.start()

    def _on_runner_finished(self, runner: RunnerAlternarBloque) -> None:
        if runner in self._runners:
            self._runners.remove(runner)
        self._en_vivo.finalizar_escritura()

    def _on_toggle_ok(self, resultado: ResultadoAlternarBloque) -> None:
        if resultado.accion != AccionToggle.DETALLE_RESERVA or resultado.bloque is None:
            return
        centro = self._centro_actual()
        profesional = self._profesional_actual()
        try:
            mensajes = self._container.preparar_mensajes_reserva().ejecutar(
                resultado.bloque,
                centro_id=centro.id if centro else "",
                centro_nombre=centro.nombre if centro else None,
                profesional_nombre=profesional.nombre if profesional else None,
            )
        except DomainError as exc:
            present_error(self, exc, "preparar_mensajes_reserva", traductor=self._t)
            return
        DetalleReservaDialog(resultado.bloque, mensajes, self._t, self).exec()

    def _on_toggle_fail(self, payload: EscrituraFailPayload) -> None:
        LOGGER.error(
            "agenda_toggle_error_inesperado",
            extra={"action": "alternar_bloque_agenda", "error_type": payload.error_type},
        )
        self._container.toasts.error(self._t("agenda.toast.error_guardar"))

    # --------------------------------------------------------------
    # Configuración de horario
    # --------------------------------------------------------------

    def _on_configurar(self) -> None:
        centro = self._centro_actual()
        profesional = self._profesional_actual()
        if centro is None or profesional is None:
            return
        dialog = ConfigAgendaDialog(self._config, self._t, self)
        if dialog.exec() != QDialog.Accepted:
            return
        try:
            self._config = self._container.guardar_config_agenda().ejecutar(
                self._container.user_context,
                centro.id,
                profesional.id,
                dialog.get_config(),
            )
        except DomainError as exc:
            present_error(self, exc, "guardar_config_agenda", traductor=self._t)
            return
        self._container.toasts.success(self._t("agenda.toast.config_guardada"))
        self._render()

    # --------------------------------------------------------------
    # Puentes de hilo y toasts
    # --------------------------------------------------------------

    def _ejecutar_tarea_ui(self, tarea: Callable[[], None]) -> None:
        tarea()

    def _mostrar_toast(self, payload: dict[str, Any]) -> None:
        self.lbl_toast.setText(payload["message"])
        self.lbl_toast.setStyleSheet(_ESTILO_TOAST.get(payload["tipo"], _ESTILO_TOAST["info"]))
        self.lbl_toast.setVisible(True)
        self._toast_timer.start(_DURACION_TOAST_MS)

    def _ocultar_toast(self) -> None:
        self.lbl_toast.setVisible(False)
