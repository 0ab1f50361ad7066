from __future__ import annotations

import os
import sqlite3
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Callable

from clavesalud.app.application.agenda.alternar_bloque import AlternarBloqueAgenda
from clavesalud.app.application.agenda.config_agenda import GuardarConfigAgenda, ObtenerConfigAgenda
from clavesalud.app.application.agenda.notificaciones import BOOKING_URL_POR_DEFECTO, PrepararMensajesReserva
from clavesalud.app.application.agenda.plantillas_whatsapp import GuardarPlantillasWhatsapp, ListarPlantillasWhatsapp
from clavesalud.app.application.agenda.sincronizacion import AgendaEnVivo, Despachador
from clavesalud.app.application.security import UserContext, parse_role
from clavesalud.app.application.usecases.registrar_auditoria_agenda import RegistrarAuditoriaAgenda
from clavesalud.app.bootstrap import BOOKING_URL_ENV
from clavesalud.app.bootstrap_logging import get_logger
from clavesalud.app.i18n import I18nManager
from clavesalud.app.infrastructure.publicador_cambios_agenda import PublicadorCambiosAgenda
from clavesalud.app.infrastructure.sqlite.proveedor_conexion_sqlite import ProveedorConexionSqlitePorHilo
from clavesalud.app.infrastructure.sqlite.repos_auditoria_agenda import RepositorioAuditoriaAgendaSqlite
from clavesalud.app.infrastructure.sqlite.repos_bloques_agenda import BloquesAgendaRepository
from clavesalud.app.infrastructure.sqlite.repos_centros import (
    CentrosRepository,
    PlantillasWhatsappRepository,
    ProfesionalesRepository,
)
from clavesalud.app.ui.widgets.toast import GestorToasts

LOGGER = get_logger(__name__)

ROLE_ENV = "CLAVESALUD_ROLE"
USER_ENV = "CLAVESALUD_USER"


@dataclass(slots=True)
class AppContainer:
    connection: sqlite3.Connection
    db_path: Path | None
    publicador: PublicadorCambiosAgenda
    proveedor_conexion: ProveedorConexionSqlitePorHilo | None

    centros_repo: CentrosRepository
    profesionales_repo: ProfesionalesRepository
    plantillas_repo: PlantillasWhatsappRepository
    bloques_repo: BloquesAgendaRepository
    auditoria_repo: RepositorioAuditoriaAgendaSqlite

    user_context: UserContext
    i18n: I18nManager
    toasts: GestorToasts
    booking_url: str
    reloj: Callable[[], date] = date.today

    # --------------------------------------------------------------
    # Casos de uso
    # --------------------------------------------------------------

    def registrar_auditoria(self, connection: sqlite3.Connection | None = None) -> RegistrarAuditoriaAgenda:
        repo = self.auditoria_repo if connection is None else RepositorioAuditoriaAgendaSqlite(connection)
        return RegistrarAuditoriaAgenda(repo)

    def bloques_repo_para(self, connection: sqlite3.Connection) -> BloquesAgendaRepository:
        """Repositorio sobre otra conexión (p. ej. la del worker) que comparte publicador."""
        return BloquesAgendaRepository(connection, self.publicador)

    def alternar_bloque(self, connection: sqlite3.Connection | None = None) -> AlternarBloqueAgenda:
        repo = self.bloques_repo if connection is None else self.bloques_repo_para(connection)
        return AlternarBloqueAgenda(
            repositorio=repo,
            notificador=self.toasts,
            traductor=self.i18n.t,
            reloj=self.reloj,
            auditoria=self.registrar_auditoria(connection),
        )

    def agenda_en_vivo(self, despachar: Despachador | None = None) -> AgendaEnVivo:
        if despachar is None:
            return AgendaEnVivo(self.bloques_repo, self.toasts, self.i18n.t)
        return AgendaEnVivo(self.bloques_repo, self.toasts, self.i18n.t, despachar)

    def obtener_config_agenda(self) -> ObtenerConfigAgenda:
        return ObtenerConfigAgenda(self.profesionales_repo)

    def guardar_config_agenda(self) -> GuardarConfigAgenda:
        return GuardarConfigAgenda(self.profesionales_repo, self.registrar_auditoria())

    def preparar_mensajes_reserva(self) -> PrepararMensajesReserva:
        return PrepararMensajesReserva(self.plantillas_repo, self.i18n.t, self.booking_url)

    def listar_plantillas(self) -> ListarPlantillasWhatsapp:
        return ListarPlantillasWhatsapp(self.plantillas_repo)

    def guardar_plantillas(self) -> GuardarPlantillasWhatsapp:
        return GuardarPlantillasWhatsapp(self.plantillas_repo, self.i18n.t, self.registrar_auditoria())

    def close(self) -> None:
        self.connection.close()


def _db_path_de(connection: sqlite3.Connection) -> Path | None:
    row = connection.execute("PRAGMA database_list").fetchone()
    archivo = row["file"] if row is not None else ""
    return Path(archivo) if archivo else None


def build_container(
    connection: sqlite3.Connection,
    *,
    i18n: I18nManager | None = None,
    toasts: GestorToasts | None = None,
    reloj: Callable[[], date] = date.today,
) -> AppContainer:
    connection.row_factory = sqlite3.Row
    publicador = PublicadorCambiosAgenda()
    profesionales_repo = ProfesionalesRepository(connection)
    db_path = _db_path_de(connection)

    user_context = UserContext(
        role=parse_role(os.getenv(ROLE_ENV)),
        username=(os.getenv(USER_ENV) or "system").strip() or "system",
    )
    LOGGER.info(
        "container_built role=%s",
        user_context.role.value,
        extra={"action": "build_container"},
    )

    return AppContainer(
        connection=connection,
        db_path=db_path,
        publicador=publicador,
        proveedor_conexion=ProveedorConexionSqlitePorHilo(db_path) if db_path else None,
        centros_repo=CentrosRepository(connection),
        profesionales_repo=profesionales_repo,
        plantillas_repo=PlantillasWhatsappRepository(connection),
        bloques_repo=BloquesAgendaRepository(connection, publicador),
        auditoria_repo=RepositorioAuditoriaAgendaSqlite(connection),
        user_context=user_context,
        i18n=i18n or I18nManager("es"),
        toasts=toasts or GestorToasts(),
        booking_url=(os.getenv(BOOKING_URL_ENV) or BOOKING_URL_POR_DEFECTO).strip(),
        reloj=reloj,
    )
