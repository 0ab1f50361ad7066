from __future__ import annotations

import argparse
import json
import random
import sqlite3
import sys
import uuid
from datetime import date, timedelta
from pathlib import Path

from clavesalud.app.application.agenda.plantilla_slots import generar_slots
from clavesalud.app.application.agenda.resolver_slots import resolver_slot
from clavesalud.app.bootstrap_logging import configure_logging, get_logger, log_soft_exception, set_run_context
from clavesalud.app.crash_handler import install_global_exception_hook
from clavesalud.app.domain.agenda import BloqueAgenda, ConfigAgenda
from clavesalud.app.domain.centros import Centro, PlantillaWhatsapp, Profesional
from clavesalud.app.domain.enums import EstadoBloque, RolProfesional
from clavesalud.app.domain.exceptions import DomainError
from clavesalud.app.infrastructure.sqlite.db import bootstrap
from clavesalud.app.infrastructure.sqlite.repos_bloques_agenda import BloquesAgendaRepository, bloque_desde_documento
from clavesalud.app.infrastructure.sqlite.repos_centros import (
    CentrosRepository,
    PlantillasWhatsappRepository,
    ProfesionalesRepository,
)

_DEFAULT_SQLITE_PATH = "./data/demo.db"
_LOGGER = get_logger(__name__)

_NOMBRES_CENTRO = ("Centro Médico Los Andes", "Clínica Costanera", "Centro de Salud Valle Norte")
_NOMBRES_PROFESIONAL = (
    "ana soto",
    "pedro rojas",
    "carla muñoz",
    "jorge fuentes",
    "valentina díaz",
    "tomás herrera",
)
_PACIENTES = (
    ("juan pérez", "12.345.678-5", "9 8765 4321"),
    ("maría gonzález", "11.111.111-1", "+56 9 1234 5678"),
    ("josé-luis araya", "9.876.543-2", "56987654321"),
    ("camila torres", "15.432.198-K", "912345678"),
)
_CONFIGS = (
    ConfigAgenda(),
    ConfigAgenda(hora_inicio="09:00", hora_fin="13:00", duracion_minutos=30),
    ConfigAgenda(hora_inicio="14:00", hora_fin="19:00", duracion_minutos=15),
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Siembra de centros, profesionales y bloques de agenda demo.")
    parser.add_argument("--seed", type=int, default=123)
    parser.add_argument("--centros", type=int, default=2)
    parser.add_argument("--profesionales", type=int, default=3, help="Profesionales por centro.")
    parser.add_argument("--dias", type=int, default=14, help="Días de agenda desde hoy.")
    parser.add_argument("--open-rate", type=float, default=0.35)
    parser.add_argument("--booked-rate", type=float, default=0.15)
    parser.add_argument("--import-json", type=str, default=None, help="Fichero JSON con citas heredadas.")
    parser.add_argument("--sqlite-path", type=str, default=_DEFAULT_SQLITE_PATH)
    parser.add_argument("--reset", dest="reset", action="store_true", default=True)
    parser.add_argument("--no-reset", dest="reset", action="store_false")
    return parser


def main(argv: list[str] | None = None) -> int:
    configure_logging("clavesalud-seed-demo", Path("./logs"), level="INFO", json=True)
    set_run_context(uuid.uuid4().hex[:8])
    install_global_exception_hook(_LOGGER)
    args = build_parser().parse_args(argv)
    try:
        sqlite_path = _validate_args(args)
        if args.reset:
            _reset_demo_db_if_allowed(sqlite_path)

        con = bootstrap(sqlite_path)
        try:
            _seed(con, args)
            if args.import_json:
                importados, desactivados = _import_json(con, Path(args.import_json))
                _LOGGER.info("[import] bloques importados: %s; duplicados desactivados: %s", importados, desactivados)
            counts = _fetch_counts(con)
        finally:
            con.close()
        _print_summary(counts, sqlite_path)
        return 0
    except (ValueError, DomainError, OSError) as exc:
        log_soft_exception(_LOGGER, exc, {"command": "seed_demo_data"})
        return 2


def _validate_args(args: argparse.Namespace) -> Path:
    if args.seed < 0:
        raise ValueError("--seed debe ser >= 0")
    if not (1 <= args.centros <= len(_NOMBRES_CENTRO)):
        raise ValueError(f"--centros debe estar entre 1 y {len(_NOMBRES_CENTRO)}")
    if not (1 <= args.profesionales <= len(_NOMBRES_PROFESIONAL)):
        raise ValueError(f"--profesionales debe estar entre 1 y {len(_NOMBRES_PROFESIONAL)}")
    if args.dias <= 0:
        raise ValueError("--dias debe ser > 0")
    if not (0.0 <= args.open_rate <= 1.0) or not (0.0 <= args.booked_rate <= 1.0):
        raise ValueError("--open-rate y --booked-rate deben estar entre 0.0 y 1.0")
    if args.open_rate + args.booked_rate > 1.0:
        raise ValueError("--open-rate + --booked-rate no puede superar 1.0")

    sqlite_path = Path(args.sqlite_path).expanduser().resolve()
    sqlite_path.parent.mkdir(parents=True, exist_ok=True)
    return sqlite_path


def _reset_demo_db_if_allowed(sqlite_path: Path) -> None:
    if not sqlite_path.exists():
        return
    if not _is_safe_demo_db_path(sqlite_path):
        raise ValueError(
            "--reset solo permite borrar bases demo bajo ./data/*.db para evitar borrados accidentales. "
            f"Ruta recibida: {sqlite_path}"
        )
    for suffix in ("", "-wal", "-shm"):
        path = Path(f"{sqlite_path}{suffix}")
        if path.exists():
            path.unlink()
    _LOGGER.info("[reset] base demo eliminada: %s", sqlite_path)


def _is_safe_demo_db_path(sqlite_path: Path) -> bool:
    repo_root = Path(__file__).resolve().parent
    data_dir = (repo_root / "data").resolve()
    return sqlite_path.suffix == ".db" and data_dir in sqlite_path.parents


def _seed(con: sqlite3.Connection, args: argparse.Namespace) -> None:
    rng = random.Random(args.seed)
    centros_repo = CentrosRepository(con)
    profesionales_repo = ProfesionalesRepository(con)
    plantillas_repo = PlantillasWhatsappRepository(con)
    bloques_repo = BloquesAgendaRepository(con)
    hoy = date.today()

    for n in range(args.centros):
        centro = Centro(id=f"centro{n + 1}", nombre=_NOMBRES_CENTRO[n])
        centros_repo.create(centro)
        plantillas_repo.reemplazar(
            centro.id,
            [
                PlantillaWhatsapp(
                    id="recordatorio",
                    titulo="Recordatorio de control",
                    cuerpo="Hola {patientName}, te recordamos tu control del {nextControlDate} en {centerName}.",
                ),
            ],
        )
        nombres = rng.sample(_NOMBRES_PROFESIONAL, args.profesionales)
        for m, nombre in enumerate(nombres):
            profesional = Profesional(
                id=f"prof{n + 1}{m + 1}",
                centro_id=centro.id,
                nombre=nombre.title(),
                rol=RolProfesional.MEDICO,
                config_agenda=_CONFIGS[m % len(_CONFIGS)],
            )
            profesionales_repo.create(profesional)
            _seed_bloques(bloques_repo, rng, profesional, hoy, args)


def _seed_bloques(
    repo: BloquesAgendaRepository,
    rng: random.Random,
    profesional: Profesional,
    hoy: date,
    args: argparse.Namespace,
) -> None:
    horas = generar_slots(profesional.config_agenda)
    for offset in range(args.dias):
        fecha = (hoy + timedelta(days=offset)).isoformat()
        for hora in horas:
            tirada = rng.random()
            if tirada < args.booked_rate:
                nombre, rut, telefono = rng.choice(_PACIENTES)
                bloque = BloqueAgenda.disponible(profesional.centro_id, profesional.id, fecha, hora)
                bloque.estado = EstadoBloque.BOOKED
                bloque.paciente_nombre = nombre
                bloque.paciente_rut = rut
                bloque.paciente_telefono = telefono
                repo.create(bloque)
            elif tirada < args.booked_rate + args.open_rate:
                repo.crear_si_libre(BloqueAgenda.disponible(profesional.centro_id, profesional.id, fecha, hora))


def _import_json(con: sqlite3.Connection, path: Path) -> tuple[int, int]:
    """
    Importa una lista de citas con claves heredadas (centerId, doctorUid, date, time, status...).

    Devuelve (importados, desactivados por duplicado).
    """
    documentos = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(documentos, list):
        raise ValueError("--import-json debe contener una lista de citas")
    repo = BloquesAgendaRepository(con)
    centro_ids: set[str] = set()
    for documento in documentos:
        bloque = bloque_desde_documento(documento)
        repo.create(bloque)
        centro_ids.add(bloque.centro_id)
    return len(documentos), _depurar_duplicados(con, centro_ids)


def _depurar_duplicados(con: sqlite3.Connection, centro_ids: set[str]) -> int:
    """
    Desactiva los bloques sobrantes de cada slot con varios activos.

    Se conservan las reservas; si no hay ninguna, el primer bloque disponible.
    """
    repo = BloquesAgendaRepository(con)
    sobrantes: list[str] = []
    for centro_id in sorted(centro_ids):
        por_slot: dict[tuple[str, str, str], list[BloqueAgenda]] = {}
        for bloque in repo.listar_activos(centro_id):
            por_slot.setdefault((bloque.profesional_id, bloque.fecha, bloque.hora), []).append(bloque)
        for (_, _, hora), candidatos in por_slot.items():
            if len(candidatos) < 2:
                continue
            ganador = resolver_slot(candidatos, hora)
            if ganador.reservado:
                sobrantes.extend(b.id for b in candidatos if not b.reservado)
            else:
                sobrantes.extend(b.id for b in candidatos if b is not ganador.bloque)
    return repo.desactivar(sobrantes)


def _fetch_counts(con: sqlite3.Connection) -> dict[str, int]:
    return {
        "centros": _count(con, "SELECT COUNT(*) FROM centros"),
        "profesionales": _count(con, "SELECT COUNT(*) FROM profesionales"),
        "abiertos": _count(con, "SELECT COUNT(*) FROM bloques_agenda WHERE activo = 1 AND estado = 'available'"),
        "reservados": _count(con, "SELECT COUNT(*) FROM bloques_agenda WHERE activo = 1 AND estado = 'booked'"),
    }


def _count(con: sqlite3.Connection, sql: str) -> int:
    row = con.execute(sql).fetchone()
    return int(row[0]) if row else 0


def _print_summary(counts: dict[str, int], sqlite_path: Path) -> None:
    _LOGGER.info("=== RESUMEN DEMO ===")
    _LOGGER.info(
        "Conteos creados: "
        f"centros={counts['centros']} profesionales={counts['profesionales']} "
        f"abiertos={counts['abiertos']} reservados={counts['reservados']}"
    )
    _LOGGER.info("Base de datos: %s", sqlite_path)
    _LOGGER.info("Siguiente paso sugerido:")
    _LOGGER.info("  CLAVESALUD_DB_PATH=%s python -m clavesalud", sqlite_path)


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
