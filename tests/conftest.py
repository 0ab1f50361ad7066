from __future__ import annotations

import sqlite3
from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

import pytest

from clavesalud.app.application.security import Role, UserContext
from clavesalud.app.container import ROLE_ENV, USER_ENV, build_container
from clavesalud.app.domain.agenda import BloqueAgenda, ConfigAgenda
from clavesalud.app.domain.centros import Centro, PlantillaWhatsapp, Profesional
from clavesalud.app.domain.enums import EstadoBloque
from clavesalud.app.domain.exceptions import ErrorAlmacenAgenda
from clavesalud.app.infrastructure.publicador_cambios_agenda import PublicadorCambiosAgenda
from clavesalud.app.infrastructure.sqlite.db import bootstrap
from clavesalud.app.ui.widgets.toast import GestorToasts


HOY = date(2026, 3, 5)


# ---------------------------------------------------------------------
# Dobles en memoria
# ---------------------------------------------------------------------


class RepositorioBloquesEnMemoria:
    """Almacén de bloques en memoria con fallos inyectables."""

    def __init__(self) -> None:
        self.bloques: list[BloqueAgenda] = []
        self.publicador = PublicadorCambiosAgenda()
        self.fallar_lectura = False
        self.fallar_escritura = False
        # Bloque que "otro puesto" inserta justo antes de nuestro alta condicional.
        self.carrera: Optional[BloqueAgenda] = None
        # Reserva externa que sustituye a un bloque abierto justo antes de cerrarlo.
        self.reserva_en_carrera: Optional[BloqueAgenda] = None
        self.llamadas: list[str] = []

    def listar_activos(
        self,
        centro_id: str,
        *,
        profesional_id: Optional[str] = None,
        fecha: Optional[str] = None,
    ) -> list[BloqueAgenda]:
        self.llamadas.append("listar_activos")
        if self.fallar_lectura:
            raise ErrorAlmacenAgenda("lectura caída")
        return [
            b
            for b in self.bloques
            if b.activo
            and b.centro_id == centro_id
            and (not profesional_id or b.profesional_id == profesional_id)
            and (not fecha or b.fecha == fecha)
        ]

    def crear_si_libre(self, bloque: BloqueAgenda) -> bool:
        self.llamadas.append("crear_si_libre")
        if self.fallar_escritura:
            raise ErrorAlmacenAgenda("escritura caída")
        if self.carrera is not None:
            self.bloques.append(self.carrera)
            self.carrera = None
        if any(self._mismo_slot(b, bloque) for b in self.bloques if b.activo):
            return False
        self.bloques = [b for b in self.bloques if b.id != bloque.id]
        self.bloques.append(bloque)
        self.publicador.publicar(bloque.centro_id)
        return True

    def create(self, bloque: BloqueAgenda) -> str:
        self.llamadas.append("create")
        self.bloques.append(bloque)
        self.publicador.publicar(bloque.centro_id)
        return bloque.id

    def eliminar_disponibles(self, ids: Sequence[str]) -> int:
        self.llamadas.append("eliminar_disponibles")
        if self.fallar_escritura:
            raise ErrorAlmacenAgenda("escritura caída")
        if self.reserva_en_carrera is not None:
            reserva = self.reserva_en_carrera
            self.bloques = [reserva if b.id == reserva.id else b for b in self.bloques]
            self.reserva_en_carrera = None
        borrables = {b.id for b in self.bloques if b.id in ids and b.estado == EstadoBloque.AVAILABLE}
        centros = {b.centro_id for b in self.bloques if b.id in borrables}
        self.bloques = [b for b in self.bloques if b.id not in borrables]
        for centro_id in centros:
            self.publicador.publicar(centro_id)
        return len(borrables)

    def desactivar(self, ids: Sequence[str]) -> int:
        self.llamadas.append("desactivar")
        total = 0
        for bloque in self.bloques:
            if bloque.id in ids and bloque.activo:
                bloque.activo = False
                total += 1
        return total

    def suscribir(self, centro_id: str, callback):
        return self.publicador.suscribir(centro_id, callback)

    @property
    def mutaciones(self) -> list[str]:
        return [c for c in self.llamadas if c in {"crear_si_libre", "create", "eliminar_disponibles", "desactivar"}]

    @staticmethod
    def _mismo_slot(a: BloqueAgenda, b: BloqueAgenda) -> bool:
        return (a.centro_id, a.profesional_id, a.fecha, a.hora) == (b.centro_id, b.profesional_id, b.fecha, b.hora)


class RepositorioPlantillasEnMemoria:
    def __init__(self, plantillas: Optional[list[PlantillaWhatsapp]] = None) -> None:
        self.por_centro: dict[str, list[PlantillaWhatsapp]] = {}
        if plantillas:
            self.por_centro["c1"] = list(plantillas)

    def listar(self, centro_id: str) -> list[PlantillaWhatsapp]:
        return list(self.por_centro.get(centro_id, []))

    def reemplazar(self, centro_id: str, plantillas: Sequence[PlantillaWhatsapp]) -> None:
        self.por_centro[centro_id] = list(plantillas)


class RepositorioAuditoriaEnMemoria:
    def __init__(self, *, fallar: bool = False) -> None:
        self.eventos: list[Any] = []
        self.fallar = fallar

    def registrar(self, evento) -> None:
        if self.fallar:
            raise ErrorAlmacenAgenda("auditoría caída")
        self.eventos.append(evento)


def traductor_identidad(key: str) -> str:
    return key


def _bloque_reservado(
    *,
    id: str = "cita-1",
    centro_id: str = "c1",
    profesional_id: str = "p1",
    fecha: str = "2026-03-10",
    hora: str = "09:00",
    nombre: str = "juan pérez",
    rut: str = "12.345.678-5",
    telefono: str = "9 8765 4321",
) -> BloqueAgenda:
    return BloqueAgenda(
        id=id,
        centro_id=centro_id,
        profesional_id=profesional_id,
        fecha=fecha,
        hora=hora,
        estado=EstadoBloque.BOOKED,
        paciente_nombre=nombre,
        paciente_rut=rut,
        paciente_telefono=telefono,
    )


# ---------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------


@pytest.fixture()
def hoy() -> date:
    return HOY


@pytest.fixture()
def centro() -> Centro:
    return Centro(id="c1", nombre="Centro Médico Los Andes")


@pytest.fixture()
def admin() -> UserContext:
    return UserContext(role=Role.ADMIN, username="recepcion")


@pytest.fixture()
def solo_lectura() -> UserContext:
    return UserContext(role=Role.READONLY, username="auditor")


@pytest.fixture()
def repo_bloques() -> RepositorioBloquesEnMemoria:
    return RepositorioBloquesEnMemoria()


@pytest.fixture()
def toasts() -> GestorToasts:
    return GestorToasts()


@pytest.fixture()
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "clavesalud_test.sqlite"


@pytest.fixture()
def db_connection(db_path: Path) -> sqlite3.Connection:
    con = bootstrap(db_path)
    try:
        yield con
    finally:
        con.close()


@pytest.fixture()
def container(db_connection: sqlite3.Connection, monkeypatch: pytest.MonkeyPatch, hoy: date):
    monkeypatch.delenv(ROLE_ENV, raising=False)
    monkeypatch.setenv(USER_ENV, "recepcion")
    return build_container(db_connection, reloj=lambda: hoy)


@pytest.fixture()
def seed_agenda(container) -> Dict[str, Any]:
    centro = Centro(id="c1", nombre="Centro Médico Los Andes")
    otro_centro = Centro(id="c2", nombre="Clínica Costanera")
    container.centros_repo.create(centro)
    container.centros_repo.create(otro_centro)

    profesional = Profesional(id="p1", centro_id="c1", nombre="Ana Soto")
    corto = Profesional(
        id="p2",
        centro_id="c1",
        nombre="Pedro Rojas",
        config_agenda=ConfigAgenda(hora_inicio="09:00", hora_fin="10:00", duracion_minutos=20),
    )
    container.profesionales_repo.create(profesional)
    container.profesionales_repo.create(corto)

    return {
        "centro": container.centros_repo.get_by_id("c1"),
        "otro_centro": container.centros_repo.get_by_id("c2"),
        "profesional": profesional,
        "corto": corto,
    }


@pytest.fixture()
def nuevo_bloque_reservado():
    return _bloque_reservado


@pytest.fixture()
def traductor():
    return traductor_identidad


@pytest.fixture()
def repo_plantillas() -> RepositorioPlantillasEnMemoria:
    return RepositorioPlantillasEnMemoria()


@pytest.fixture()
def repo_auditoria() -> RepositorioAuditoriaEnMemoria:
    return RepositorioAuditoriaEnMemoria()


@pytest.fixture()
def repo_auditoria_caido() -> RepositorioAuditoriaEnMemoria:
    return RepositorioAuditoriaEnMemoria(fallar=True)
