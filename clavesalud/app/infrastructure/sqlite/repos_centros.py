# infrastructure/sqlite/repos_centros.py
"""
Repositorios SQLite para centros, profesionales y plantillas de WhatsApp.

Responsabilidades:
- Alta y lectura de centros y de sus profesionales
- Horario de agenda por profesional (columnas agenda_* de profesionales)
- Plantillas de WhatsApp por centro

No contiene:
- Reglas de suscripción del centro
- Código de UI
"""

from __future__ import annotations

import sqlite3
from typing import List, Optional, Sequence

from clavesalud.app.domain.agenda import ConfigAgenda
from clavesalud.app.domain.centros import Centro, PlantillaWhatsapp, Profesional
from clavesalud.app.domain.enums import EstadoSuscripcionCentro, RolProfesional
from clavesalud.app.domain.exceptions import ErrorAlmacenAgenda, ValidationError


class CentrosRepository:
    def __init__(self, connection: sqlite3.Connection) -> None:
        self._con = connection

    def create(self, centro: Centro) -> str:
        centro.validar()
        try:
            self._con.execute(
                """
                INSERT INTO centros (id, nombre, estado_suscripcion, activo)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    nombre = excluded.nombre,
                    estado_suscripcion = excluded.estado_suscripcion,
                    activo = excluded.activo
                """,
                (centro.id, centro.nombre, centro.estado_suscripcion.value, int(centro.activo)),
            )
            self._con.commit()
        except sqlite3.Error as exc:
            raise ErrorAlmacenAgenda(f"No se pudo guardar el centro {centro.id}.") from exc
        return centro.id

    def get_by_id(self, centro_id: str) -> Optional[Centro]:
        row = self._con.execute(
            "SELECT id, nombre, estado_suscripcion, activo FROM centros WHERE id = ?",
            (centro_id,),
        ).fetchone()
        return self._row_to_model(row) if row else None

    def list_all(self, *, solo_activos: bool = True) -> List[Centro]:
        sql = "SELECT id, nombre, estado_suscripcion, activo FROM centros"
        if solo_activos:
            sql += " WHERE activo = 1"
        sql += " ORDER BY nombre"
        return [self._row_to_model(row) for row in self._con.execute(sql).fetchall()]

    @staticmethod
    def _row_to_model(row: sqlite3.Row) -> Centro:
        return Centro(
            id=row["id"],
            nombre=row["nombre"],
            estado_suscripcion=EstadoSuscripcionCentro(row["estado_suscripcion"]),
            activo=bool(row["activo"]),
        )


class ProfesionalesRepository:
    """
    Profesionales del centro. También actúa como repositorio del horario de agenda.
    """

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._con = connection

    def create(self, profesional: Profesional) -> str:
        profesional.validar()
        config = profesional.config_agenda
        try:
            self._con.execute(
                """
                INSERT INTO profesionales (
                    id, centro_id, nombre, rol,
                    agenda_hora_inicio, agenda_hora_fin, agenda_duracion_min, activo
                )
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    profesional.id,
                    profesional.centro_id,
                    profesional.nombre,
                    profesional.rol.value,
                    config.hora_inicio,
                    config.hora_fin,
                    config.duracion_minutos,
                    int(profesional.activo),
                ),
            )
            self._con.commit()
        except sqlite3.Error as exc:
            raise ErrorAlmacenAgenda(f"No se pudo guardar el profesional {profesional.id}.") from exc
        return profesional.id

    def get_by_id(self, centro_id: str, profesional_id: str) -> Optional[Profesional]:
        row = self._con.execute(
            "SELECT * FROM profesionales WHERE centro_id = ? AND id = ?",
            (centro_id, profesional_id),
        ).fetchone()
        return self._row_to_model(row) if row else None

    def listar_por_centro(self, centro_id: str, *, solo_activos: bool = True) -> List[Profesional]:
        sql = "SELECT * FROM profesionales WHERE centro_id = ?"
        if solo_activos:
            sql += " AND activo = 1"
        sql += " ORDER BY nombre"
        return [self._row_to_model(row) for row in self._con.execute(sql, (centro_id,)).fetchall()]

    # --------------------------------------------------------------
    # Horario de agenda
    # --------------------------------------------------------------

    def obtener(self, centro_id: str, profesional_id: str) -> Optional[ConfigAgenda]:
        try:
            row = self._con.execute(
                """
                SELECT agenda_hora_inicio, agenda_hora_fin, agenda_duracion_min
                FROM profesionales WHERE centro_id = ? AND id = ?
                """,
                (centro_id, profesional_id),
            ).fetchone()
        except sqlite3.Error as exc:
            raise ErrorAlmacenAgenda("No se pudo leer el horario de agenda.") from exc
        if row is None:
            return None
        return self._config_desde_fila(row)

    def guardar(self, centro_id: str, profesional_id: str, config: ConfigAgenda) -> None:
        try:
            cur = self._con.execute(
                """
                UPDATE profesionales SET
                    agenda_hora_inicio = ?,
                    agenda_hora_fin = ?,
                    agenda_duracion_min = ?
                WHERE centro_id = ? AND id = ?
                """,
                (config.hora_inicio, config.hora_fin, config.duracion_minutos, centro_id, profesional_id),
            )
            self._con.commit()
        except sqlite3.Error as exc:
            raise ErrorAlmacenAgenda("No se pudo guardar el horario de agenda.") from exc
        if cur.rowcount == 0:
            raise ValidationError(f"No existe el profesional {profesional_id} en el centro {centro_id}.")

    @staticmethod
    def _config_desde_fila(row: sqlite3.Row) -> ConfigAgenda:
        duracion = row["agenda_duracion_min"]
        return ConfigAgenda(
            hora_inicio=row["agenda_hora_inicio"],
            hora_fin=row["agenda_hora_fin"],
            duracion_minutos=int(duracion) if duracion is not None else None,
        )

    @classmethod
    def _row_to_model(cls, row: sqlite3.Row) -> Profesional:
        return Profesional(
            id=row["id"],
            centro_id=row["centro_id"],
            nombre=row["nombre"],
            rol=RolProfesional(row["rol"]),
            config_agenda=cls._config_desde_fila(row),
            activo=bool(row["activo"]),
        )


class PlantillasWhatsappRepository:
    def __init__(self, connection: sqlite3.Connection) -> None:
        self._con = connection

    def listar(self, centro_id: str) -> List[PlantillaWhatsapp]:
        try:
            rows = self._con.execute(
                """
                SELECT id, titulo, cuerpo, habilitada, orden
                FROM plantillas_whatsapp WHERE centro_id = ?
                ORDER BY orden, titulo
                """,
                (centro_id,),
            ).fetchall()
        except sqlite3.Error as exc:
            raise ErrorAlmacenAgenda("No se pudieron leer las plantillas de WhatsApp.") from exc
        return [
            PlantillaWhatsapp(
                id=row["id"],
                titulo=row["titulo"],
                cuerpo=row["cuerpo"],
                habilitada=bool(row["habilitada"]),
                orden=row["orden"],
            )
            for row in rows
        ]

    def reemplazar(self, centro_id: str, plantillas: Sequence[PlantillaWhatsapp]) -> None:
        try:
            with self._con:
                self._con.execute("DELETE FROM plantillas_whatsapp WHERE centro_id = ?", (centro_id,))
                self._con.executemany(
                    """
                    INSERT INTO plantillas_whatsapp (id, centro_id, titulo, cuerpo, habilitada, orden)
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    [
                        (p.id, centro_id, p.titulo, p.cuerpo, int(p.habilitada), p.orden or 0)
                        for p in plantillas
                    ],
                )
        except sqlite3.Error as exc:
            raise ErrorAlmacenAgenda("No se pudieron guardar las plantillas de WhatsApp.") from exc
