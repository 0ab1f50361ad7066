from __future__ import annotations

from pathlib import Path
import sqlite3
import threading

from clavesalud.app.bootstrap_logging import get_logger
from clavesalud.app.infrastructure.sqlite.db import get_connection


LOGGER = get_logger(__name__)


class ProveedorConexionSqlitePorHilo:
    """Una conexión SQLite por hilo: la UI lee con la suya y el worker de agenda escribe con otra."""

    def __init__(self, db_path: str | Path) -> None:
        self._db_path = Path(db_path)
        self._local = threading.local()
        self._lock = threading.Lock()
        self._abiertas: list[sqlite3.Connection] = []

    @property
    def db_path(self) -> Path:
        return self._db_path

    def obtener(self) -> sqlite3.Connection:
        conexion = getattr(self._local, "conexion", None)
        if conexion is None:
            conexion = get_connection(self._db_path)
            self._local.conexion = conexion
            with self._lock:
                self._abiertas.append(conexion)
            LOGGER.debug(
                "sqlite_conexion_hilo_creada",
                extra={
                    "action": "sqlite_conexion_hilo_creada",
                    "db_path": self._db_path.as_posix(),
                    "thread_name": threading.current_thread().name,
                },
            )
        return conexion

    def cerrar_conexion_del_hilo_actual(self) -> None:
        conexion = getattr(self._local, "conexion", None)
        if conexion is None:
            return
        try:
            conexion.close()
        finally:
            del self._local.conexion
            with self._lock:
                if conexion in self._abiertas:
                    self._abiertas.remove(conexion)

    @property
    def conexiones_abiertas(self) -> int:
        with self._lock:
            return len(self._abiertas)
