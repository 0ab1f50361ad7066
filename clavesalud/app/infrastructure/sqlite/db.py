# infrastructure/sqlite/db.py
"""
Conexión y bootstrap de SQLite.

Responsabilidades:
- Abrir conexión con SQLite con PRAGMAs recomendados.
- Aplicar el schema desde un archivo .sql (idempotente: CREATE IF NOT EXISTS).
- Centralizar el acceso para que el resto de capas no repitan lógica.

Notas:
- foreign_keys debe activarse por conexión en SQLite.
- WAL permite leer la agenda mientras el worker escribe.
"""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from pathlib import Path

SCHEMA_PATH = Path(__file__).with_name("schema.sql")
BUSY_TIMEOUT_MS = 5000


@dataclass(frozen=True)
class SqliteConfig:
    """
    Configuración para SQLite.
    - db_path: ruta al archivo .sqlite/.db
    - schema_path: ruta al schema.sql
    """
    db_path: Path
    schema_path: Path = SCHEMA_PATH


def connect(config: SqliteConfig) -> sqlite3.Connection:
    """
    Abre conexión SQLite y aplica PRAGMAs recomendados.
    """
    if config.db_path.as_posix() != ":memory:":
        config.db_path.parent.mkdir(parents=True, exist_ok=True)

    con = sqlite3.connect(config.db_path.as_posix(), timeout=BUSY_TIMEOUT_MS / 1000)
    con.row_factory = sqlite3.Row  # devuelve filas tipo dict-like
    _apply_pragmas(con)
    return con


def get_connection(db_path: str | Path) -> sqlite3.Connection:
    return connect(SqliteConfig(db_path=Path(db_path)))


def _apply_pragmas(con: sqlite3.Connection) -> None:
    """
    PRAGMAs por conexión.

    foreign_keys:
    - Obligatorio para que se respeten las FKs.

    journal_mode=WAL:
    - Lecturas de la UI concurrentes con la escritura del worker.

    busy_timeout:
    - El alta condicional usa BEGIN IMMEDIATE; otro escritor espera en vez de fallar.
    """
    con.execute("PRAGMA foreign_keys = ON;")
    con.execute("PRAGMA journal_mode = WAL;")
    con.execute("PRAGMA synchronous = NORMAL;")
    con.execute("PRAGMA temp_store = MEMORY;")
    con.execute(f"PRAGMA busy_timeout = {BUSY_TIMEOUT_MS};")


def apply_schema(con: sqlite3.Connection, schema_path: Path = SCHEMA_PATH) -> None:
    """
    Aplica el schema desde un archivo .sql.

    Requisitos:
    - El schema debe ser idempotente (CREATE TABLE IF NOT EXISTS...).
    """
    if not schema_path.exists():
        raise FileNotFoundError(f"No existe schema.sql en: {schema_path}")

    sql = schema_path.read_text(encoding="utf-8")

    # executescript permite ejecutar múltiples sentencias SQL separadas por ';'
    con.executescript(sql)
    _migrate_agenda_columns(con)
    con.commit()


def _migrate_agenda_columns(con: sqlite3.Connection) -> None:
    """
    Bases creadas antes de la configuración de horario por profesional.
    """
    _ensure_column(con, table="profesionales", column="agenda_hora_inicio", ddl="TEXT")
    _ensure_column(con, table="profesionales", column="agenda_hora_fin", ddl="TEXT")
    _ensure_column(con, table="profesionales", column="agenda_duracion_min", ddl="INTEGER")
    _ensure_column(con, table="bloques_agenda", column="activo", ddl="INTEGER NOT NULL DEFAULT 1")


def _ensure_column(con: sqlite3.Connection, *, table: str, column: str, ddl: str) -> None:
    columns = {row["name"] for row in con.execute(f"PRAGMA table_info({table})").fetchall()}
    if column in columns:
        return
    con.execute(f"ALTER TABLE {table} ADD COLUMN {column} {ddl}")


def bootstrap(
    db_path: str | Path,
    schema_path: str | Path = SCHEMA_PATH,
    *,
    apply: bool = True,
) -> sqlite3.Connection:
    """
    Atajo para:
    - conectar
    - aplicar schema (si apply=True)
    """
    cfg = SqliteConfig(db_path=Path(db_path), schema_path=Path(schema_path))
    con = connect(cfg)
    if apply:
        apply_schema(con, cfg.schema_path)
    return con
