# bootstrap.py
"""
Bootstrap de la aplicación ClaveSalud.

Responsabilidades:
- Resolver rutas del proyecto
- Inicializar SQLite
- Aplicar schema.sql
- Devolver la conexión lista para usar

Este archivo es infraestructura pura.
No contiene lógica de dominio ni de aplicación.
"""

from __future__ import annotations

import sqlite3
from os import getenv
from pathlib import Path

from clavesalud.app.bootstrap_logging import get_logger
from clavesalud.app.infrastructure.sqlite.db import SCHEMA_PATH, bootstrap


LOGGER = get_logger(__name__)

DB_PATH_ENV = "CLAVESALUD_DB_PATH"
LOG_LEVEL_ENV = "CLAVESALUD_LOG_LEVEL"
BOOKING_URL_ENV = "CLAVESALUD_BOOKING_URL"


def _is_special_sqlite_path(raw_path: str) -> bool:
    return raw_path == ":memory:" or raw_path.startswith("file:")


# ---------------------------------------------------------------------
# Rutas del proyecto
# ---------------------------------------------------------------------


def project_root() -> Path:
    """Devuelve la raíz del paquete de la aplicación."""
    return Path(__file__).resolve().parent


def data_dir() -> Path:
    """Directorio donde se guarda la base de datos."""
    return Path("./data")


def logs_dir() -> Path:
    return Path("./logs")


def resolve_db_path(sqlite_path_arg: str | None = None, *, emit_log: bool = True) -> Path:
    """Resuelve la ruta SQLite desde arg/env/default con trazabilidad en logs."""
    if sqlite_path_arg:
        resolved = Path(sqlite_path_arg) if _is_special_sqlite_path(sqlite_path_arg) else Path(sqlite_path_arg).expanduser().resolve()
        source = "arg"
    else:
        configured = getenv(DB_PATH_ENV)
        if configured:
            resolved = Path(configured) if _is_special_sqlite_path(configured) else Path(configured).expanduser().resolve()
            source = "env"
        else:
            resolved = (data_dir() / "clavesalud.db").expanduser().resolve()
            source = "default"
    if emit_log:
        LOGGER.info("db_path_resolved path=%s source=%s", resolved, source)
    return resolved


def resolve_log_level() -> str:
    return (getenv(LOG_LEVEL_ENV) or "INFO").strip().upper()


def schema_path() -> Path:
    """Ruta al archivo schema.sql."""
    return SCHEMA_PATH


# ---------------------------------------------------------------------
# Bootstrap principal
# ---------------------------------------------------------------------


def bootstrap_database(apply_schema: bool = True, sqlite_path: str | None = None) -> sqlite3.Connection:
    """
    Inicializa la base de datos de la aplicación.

    Flujo:
    - Resuelve la ruta (argumento, CLAVESALUD_DB_PATH o ./data/clavesalud.db)
    - Abre conexión SQLite con sus PRAGMAs
    - Aplica schema.sql
    - Devuelve la conexión
    """
    target_path = resolve_db_path(sqlite_path)
    con = bootstrap(target_path, schema_path(), apply=apply_schema)
    LOGGER.info("db_opened path=%s", target_path)
    return con
