from __future__ import annotations

import json
import sqlite3
from dataclasses import dataclass

from clavesalud.app.application.auditoria_agenda import AccionAuditoriaAgenda, EventoAuditoriaAgenda
from clavesalud.app.domain.exceptions import ErrorAlmacenAgenda


@dataclass(slots=True)
class RepositorioAuditoriaAgendaSqlite:
    connection: sqlite3.Connection

    def registrar(self, evento: EventoAuditoriaAgenda) -> None:
        metadata_json = json.dumps(evento.metadata_json, ensure_ascii=False) if evento.metadata_json else None
        try:
            self.connection.execute(
                """
                INSERT INTO auditoria_agenda(
                    timestamp_utc,
                    usuario,
                    centro_id,
                    accion,
                    entidad_id,
                    metadata_json
                )
                VALUES(?, ?, ?, ?, ?, ?)
                """,
                (
                    evento.timestamp_utc,
                    evento.usuario,
                    evento.centro_id,
                    evento.accion.value,
                    evento.entidad_id,
                    metadata_json,
                ),
            )
            self.connection.commit()
        except sqlite3.Error as exc:
            raise ErrorAlmacenAgenda("No se pudo registrar la auditoría de agenda.") from exc

    def listar(self, centro_id: str, *, limit: int = 100) -> list[EventoAuditoriaAgenda]:
        rows = self.connection.execute(
            """
            SELECT id, timestamp_utc, usuario, centro_id, accion, entidad_id, metadata_json
            FROM auditoria_agenda
            WHERE centro_id = ?
            ORDER BY id DESC
            LIMIT ?
            """,
            (centro_id, limit),
        ).fetchall()
        return [
            EventoAuditoriaAgenda(
                id=row["id"],
                timestamp_utc=row["timestamp_utc"],
                usuario=row["usuario"],
                centro_id=row["centro_id"],
                accion=AccionAuditoriaAgenda(row["accion"]),
                entidad_id=row["entidad_id"],
                metadata_json=json.loads(row["metadata_json"]) if row["metadata_json"] else None,
            )
            for row in rows
        ]
