# infrastructure/sqlite/repos_bloques_agenda.py
"""
Repositorio SQLite para bloques de agenda.

Responsabilidades:
- Lectura de bloques activos por centro, profesional y fecha
- Alta condicional (solo si el slot sigue libre) y alta directa
- Borrado físico (cerrar bloque) y lógico (limpiezas administrativas)
- Publicar cada cambio a los suscriptores del centro

No contiene:
- Decisión de qué hacer al hacer clic en un slot
- Código de UI
"""

from __future__ import annotations

import sqlite3
import uuid
from contextlib import contextmanager
from typing import Any, Iterator, List, Mapping, Optional, Sequence

from clavesalud.app.application.ports.bloques_agenda_port import CallbackCambiosAgenda, CancelarSuscripcion
from clavesalud.app.bootstrap_logging import get_logger
from clavesalud.app.domain.agenda import BloqueAgenda
from clavesalud.app.domain.enums import EstadoBloque
from clavesalud.app.domain.exceptions import ErrorAlmacenAgenda, ValidationError
from clavesalud.app.infrastructure.publicador_cambios_agenda import PublicadorCambiosAgenda


LOGGER = get_logger(__name__)

_COLUMNAS = (
    "id, centro_id, profesional_id, fecha, hora, estado, "
    "paciente_nombre, paciente_rut, paciente_telefono, paciente_id, activo"
)


def bloque_desde_documento(documento: Mapping[str, Any]) -> BloqueAgenda:
    """
    Convierte un documento de cita heredado (claves en inglés) en BloqueAgenda.

    El profesional es 'doctorUid' si viene informado y si no 'doctorId'.
    Un documento sin 'active' se considera activo.
    """
    profesional_id = documento.get("doctorUid") or documento.get("doctorId") or documento.get("professionalId") or ""
    estado_raw = str(documento.get("status") or EstadoBloque.AVAILABLE.value).strip().lower()
    try:
        estado = EstadoBloque(estado_raw)
    except ValueError as exc:
        raise ValidationError(f"Estado de bloque desconocido: {estado_raw}.") from exc
    bloque = BloqueAgenda(
        id=str(documento.get("id") or ""),
        centro_id=str(documento.get("centerId") or ""),
        profesional_id=str(profesional_id),
        fecha=str(documento.get("date") or ""),
        hora=str(documento.get("time") or ""),
        estado=estado,
        paciente_nombre=str(documento.get("patientName") or ""),
        paciente_rut=str(documento.get("patientRut") or ""),
        paciente_telefono=str(documento.get("patientPhone") or ""),
        paciente_id=documento.get("patientId"),
        activo=documento.get("active") is not False,
    )
    bloque.validar()
    return bloque


# ---------------------------------------------------------------------
# Repositorio
# ---------------------------------------------------------------------


class BloquesAgendaRepository:
    """
    Repositorio de acceso a datos para bloques de agenda.
    """

    def __init__(
        self,
        connection: sqlite3.Connection,
        publicador: Optional[PublicadorCambiosAgenda] = None,
    ) -> None:
        self._con = connection
        self._publicador = publicador or PublicadorCambiosAgenda()

    @property
    def publicador(self) -> PublicadorCambiosAgenda:
        return self._publicador

    # --------------------------------------------------------------
    # Lectura
    # --------------------------------------------------------------

    def listar_activos(
        self,
        centro_id: str,
        *,
        profesional_id: Optional[str] = None,
        fecha: Optional[str] = None,
    ) -> List[BloqueAgenda]:
        """
        Bloques activos del centro ordenados por fecha y hora.
        """
        sql = f"SELECT {_COLUMNAS} FROM bloques_agenda WHERE centro_id = ? AND activo = 1"
        params: list[Any] = [centro_id]
        if profesional_id:
            sql += " AND profesional_id = ?"
            params.append(profesional_id)
        if fecha:
            sql += " AND fecha = ?"
            params.append(fecha)
        sql += " ORDER BY fecha, hora, id"

        try:
            rows = self._con.execute(sql, params).fetchall()
        except sqlite3.Error as exc:
            raise ErrorAlmacenAgenda(f"No se pudieron leer los bloques del centro {centro_id}.") from exc
        return [self._row_to_model(row) for row in rows]

    def get_by_id(self, bloque_id: str) -> Optional[BloqueAgenda]:
        try:
            row = self._con.execute(
                f"SELECT {_COLUMNAS} FROM bloques_agenda WHERE id = ?",
                (bloque_id,),
            ).fetchone()
        except sqlite3.Error as exc:
            raise ErrorAlmacenAgenda(f"No se pudo leer el bloque {bloque_id}.") from exc
        return self._row_to_model(row) if row else None

    # --------------------------------------------------------------
    # Escritura
    # --------------------------------------------------------------

    def crear_si_libre(self, bloque: BloqueAgenda) -> bool:
        """
        Inserta el bloque solo si no existe otro activo para el mismo
        (centro, profesional, fecha, hora). Devuelve False si el slot ya estaba ocupado.

        Comprobación e inserción van en una transacción BEGIN IMMEDIATE, de modo que
        dos puestos que abren el mismo slot a la vez no generan duplicados.
        Si el id existe inactivo para el mismo slot, se reactiva. Si el id lo usa
        una fila de otro slot (datos importados), esa fila no se toca y el bloque
        se inserta con un id nuevo.
        """
        bloque.validar()
        try:
            with self._transaccion_inmediata():
                ocupado = self._con.execute(
                    """
                    SELECT 1 FROM bloques_agenda
                    WHERE centro_id = ? AND profesional_id = ? AND fecha = ? AND hora = ? AND activo = 1
                    LIMIT 1
                    """,
                    (bloque.centro_id, bloque.profesional_id, bloque.fecha, bloque.hora),
                ).fetchone()
                if ocupado:
                    creado = False
                else:
                    cur = self._con.execute(
                        f"""
                        INSERT INTO bloques_agenda ({_COLUMNAS})
                        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, 1)
                        ON CONFLICT(id) DO UPDATE SET
                            estado = excluded.estado,
                            paciente_nombre = excluded.paciente_nombre,
                            paciente_rut = excluded.paciente_rut,
                            paciente_telefono = excluded.paciente_telefono,
                            paciente_id = excluded.paciente_id,
                            activo = 1
                        WHERE bloques_agenda.activo = 0
                          AND bloques_agenda.centro_id = excluded.centro_id
                          AND bloques_agenda.profesional_id = excluded.profesional_id
                          AND bloques_agenda.fecha = excluded.fecha
                          AND bloques_agenda.hora = excluded.hora
                        """,
                        self._params_insert(bloque),
                    )
                    if cur.rowcount == 0:
                        LOGGER.warning(
                            "bloque_agenda_id_en_uso",
                            extra={"action": "crear_si_libre", "bloque_id": bloque.id},
                        )
                        bloque.id = f"{bloque.id}_{uuid.uuid4().hex[:8]}"
                        cur = self._con.execute(
                            f"INSERT INTO bloques_agenda ({_COLUMNAS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, 1)",
                            self._params_insert(bloque),
                        )
                    creado = cur.rowcount == 1
        except sqlite3.Error as exc:
            raise ErrorAlmacenAgenda(f"No se pudo abrir el bloque {bloque.id}.") from exc

        LOGGER.debug(
            "bloque_agenda_crear_si_libre",
            extra={"action": "crear_si_libre", "bloque_id": bloque.id, "creado": creado},
        )
        if creado:
            self._publicador.publicar(bloque.centro_id)
        return creado

    def create(self, bloque: BloqueAgenda) -> str:
        """
        Inserta el bloque sin comprobar el slot (reservas externas e importaciones).
        """
        bloque.validar()
        try:
            self._con.execute(
                f"""
                INSERT INTO bloques_agenda ({_COLUMNAS})
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (*self._params_insert(bloque), int(bloque.activo)),
            )
            self._con.commit()
        except sqlite3.Error as exc:
            self._rollback_si_pendiente()
            raise ErrorAlmacenAgenda(f"No se pudo guardar el bloque {bloque.id}.") from exc
        self._publicador.publicar(bloque.centro_id)
        return bloque.id

    def eliminar_disponibles(self, ids: Sequence[str]) -> int:
        """
        Borrado físico de los bloques que siguen 'available'; es lo que hace
        cerrar un bloque abierto. Un bloque reservado entre la lectura y el
        borrado no se elimina. Devuelve cuántos se borraron.
        """
        return self._mutar_por_ids(
            "DELETE FROM bloques_agenda WHERE id IN ({marcas}) AND estado = 'available'",
            ids,
        )

    def desactivar(self, ids: Sequence[str]) -> int:
        """
        Borrado lógico: el bloque deja de verse en todas las vistas.
        """
        return self._mutar_por_ids("UPDATE bloques_agenda SET activo = 0 WHERE id IN ({marcas}) AND activo = 1", ids)

    # --------------------------------------------------------------
    # Suscripción
    # --------------------------------------------------------------

    def suscribir(self, centro_id: str, callback: CallbackCambiosAgenda) -> CancelarSuscripcion:
        return self._publicador.suscribir(centro_id, callback)

    # --------------------------------------------------------------
    # Helpers
    # --------------------------------------------------------------

    def _mutar_por_ids(self, plantilla_sql: str, ids: Sequence[str]) -> int:
        ids = [i for i in dict.fromkeys(ids) if i]
        if not ids:
            return 0
        marcas = ", ".join("?" for _ in ids)
        try:
            centros = [
                row["centro_id"]
                for row in self._con.execute(
                    f"SELECT DISTINCT centro_id FROM bloques_agenda WHERE id IN ({marcas})",
                    ids,
                ).fetchall()
            ]
            cur = self._con.execute(plantilla_sql.format(marcas=marcas), ids)
            self._con.commit()
        except sqlite3.Error as exc:
            self._rollback_si_pendiente()
            raise ErrorAlmacenAgenda("No se pudieron actualizar los bloques de agenda.") from exc
        afectados = int(cur.rowcount)
        if afectados:
            for centro_id in centros:
                self._publicador.publicar(centro_id)
        return afectados

    @contextmanager
    def _transaccion_inmediata(self) -> Iterator[None]:
        propia = not self._con.in_transaction
        if propia:
            self._con.execute("BEGIN IMMEDIATE")
        try:
            yield
        except BaseException:
            if propia:
                self._con.rollback()
            raise
        else:
            if propia:
                self._con.commit()

    def _rollback_si_pendiente(self) -> None:
        if self._con.in_transaction:
            self._con.rollback()

    @staticmethod
    def _params_insert(bloque: BloqueAgenda) -> tuple[Any, ...]:
        return (
            bloque.id,
            bloque.centro_id,
            bloque.profesional_id,
            bloque.fecha,
            bloque.hora,
            bloque.estado.value,
            bloque.paciente_nombre,
            bloque.paciente_rut,
            bloque.paciente_telefono,
            bloque.paciente_id,
        )

    @staticmethod
    def _row_to_model(row: sqlite3.Row) -> BloqueAgenda:
        return BloqueAgenda(
            id=row["id"],
            centro_id=row["centro_id"],
            profesional_id=row["profesional_id"],
            fecha=row["fecha"],
            hora=row["hora"],
            estado=EstadoBloque(row["estado"]),
            paciente_nombre=row["paciente_nombre"] or "",
            paciente_rut=row["paciente_rut"] or "",
            paciente_telefono=row["paciente_telefono"] or "",
            paciente_id=row["paciente_id"],
            activo=bool(row["activo"]),
        )
