from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from PySide6.QtCore import QObject, QThread, Signal

from clavesalud.app.application.agenda.alternar_bloque import AlternarBloqueAgenda
from clavesalud.app.application.agenda.dtos import ContextoAgenda
from clavesalud.app.infrastructure.sqlite.proveedor_conexion_sqlite import ProveedorConexionSqlitePorHilo

FabricaAlternarBloque = Callable[[object], AlternarBloqueAgenda]


@dataclass(frozen=True, slots=True)
class EscrituraFailPayload:
    fecha: str
    hora: str
    error_type: str
    error_message: str


class AlternarBloqueWorker(QObject):
    started = Signal()
    ok = Signal(object)
    fail = Signal(object)
    finished = Signal()

    def __init__(
        self,
        fabrica_uc: FabricaAlternarBloque,
        contexto: ContextoAgenda,
        fecha: str,
        hora: str,
        proveedor_conexion: ProveedorConexionSqlitePorHilo,
    ) -> None:
        super().__init__()
        self._fabrica_uc = fabrica_uc
        self._contexto = contexto
        self._fecha = fecha
        self._hora = hora
        self._proveedor_conexion = proveedor_conexion

    def run(self) -> None:
        self.started.emit()
        try:
            uc = self._fabrica_uc(self._proveedor_conexion.obtener())
            self.ok.emit(uc.ejecutar(self._contexto, self._fecha, self._hora))
        except Exception as exc:  # noqa: BLE001
            self.fail.emit(
                EscrituraFailPayload(
                    fecha=self._fecha,
                    hora=self._hora,
                    error_type=type(exc).__name__,
                    error_message=str(exc),
                )
            )
        finally:
            self._proveedor_conexion.cerrar_conexion_del_hilo_actual()
            self.finished.emit()


class RunnerAlternarBloque(QObject):
    """Ejecuta un clic de agenda en un QThread propio con su conexión SQLite."""

    started = Signal()
    ok = Signal(object)
    fail = Signal(object)
    finished = Signal()

    def __init__(
        self,
        fabrica_uc: FabricaAlternarBloque,
        contexto: ContextoAgenda,
        fecha: str,
        hora: str,
        proveedor_conexion: ProveedorConexionSqlitePorHilo,
    ) -> None:
        super().__init__()
        self._thread = QThread()
        self._worker = AlternarBloqueWorker(fabrica_uc, contexto, fecha, hora, proveedor_conexion)
        self._worker.moveToThread(self._thread)
        self._thread.started.connect(self._worker.run)
        self._worker.started.connect(self.started)
        self._worker.ok.connect(self.ok)
        self._worker.fail.connect(self.fail)
        self._worker.finished.connect(self.finished)
        self._worker.finished.connect(self._thread.quit)
        self._thread.finished.connect(self._worker.deleteLater)
        self._thread.finished.connect(self._thread.deleteLater)

    def start(self) -> None:
        self._thread.start()
