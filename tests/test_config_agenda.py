from __future__ import annotations

import pytest

from clavesalud.app.application.agenda.config_agenda import GuardarConfigAgenda, ObtenerConfigAgenda
from clavesalud.app.application.agenda.plantilla_slots import generar_slots
from clavesalud.app.domain.agenda import ConfigAgenda
from clavesalud.app.domain.exceptions import AuthorizationError, ValidationError


def test_profesional_sin_horario_usa_config_por_defecto(container, seed_agenda) -> None:
    config = container.obtener_config_agenda().ejecutar("c1", "p1")

    assert config == ConfigAgenda()
    assert generar_slots(config)[0] == "08:00"


def test_profesional_inexistente_usa_config_por_defecto(container, seed_agenda) -> None:
    assert container.obtener_config_agenda().ejecutar("c1", "nadie") == ConfigAgenda()


def test_horario_sembrado_se_lee_del_profesional(container, seed_agenda) -> None:
    config = container.obtener_config_agenda().ejecutar("c1", "p2")

    assert generar_slots(config) == ("09:00", "09:20", "09:40")


def test_guardar_normaliza_y_persiste(container, seed_agenda) -> None:
    guardada = container.guardar_config_agenda().ejecutar(
        container.user_context,
        "c1",
        "p1",
        ConfigAgenda(hora_inicio="10:00", duracion_minutos=30),
    )

    assert guardada == ConfigAgenda(hora_inicio="10:00", hora_fin="21:00", duracion_minutos=30)
    assert container.obtener_config_agenda().ejecutar("c1", "p1") == guardada
    assert container.profesionales_repo.get_by_id("c1", "p1").config_agenda == guardada


def test_guardar_deja_rastro_de_auditoria(container, seed_agenda) -> None:
    container.guardar_config_agenda().ejecutar(
        container.user_context,
        "c1",
        "p1",
        ConfigAgenda(hora_inicio="09:00", hora_fin="12:00", duracion_minutos=15),
    )

    [evento] = container.auditoria_repo.listar("c1")
    assert evento.accion.value == "GUARDAR_CONFIG_AGENDA"
    assert evento.entidad_id == "p1"
    assert evento.usuario == "recepcion"
    assert evento.metadata_json == {"hora_inicio": "09:00", "hora_fin": "12:00", "duracion_minutos": 15}


@pytest.mark.parametrize(
    "config",
    [
        ConfigAgenda(hora_inicio="12:00", hora_fin="09:00"),
        ConfigAgenda(duracion_minutos=0),
        ConfigAgenda(hora_inicio="8"),
    ],
)
def test_guardar_rechaza_config_imposible(container, seed_agenda, config: ConfigAgenda) -> None:
    with pytest.raises(ValidationError):
        container.guardar_config_agenda().ejecutar(container.user_context, "c1", "p1", config)

    assert container.obtener_config_agenda().ejecutar("c1", "p1") == ConfigAgenda()


def test_guardar_profesional_inexistente(container, seed_agenda) -> None:
    with pytest.raises(ValidationError):
        container.guardar_config_agenda().ejecutar(container.user_context, "c1", "nadie", ConfigAgenda())


def test_guardar_en_solo_lectura(container, seed_agenda, solo_lectura) -> None:
    uc = GuardarConfigAgenda(container.profesionales_repo)

    with pytest.raises(AuthorizationError):
        uc.ejecutar(solo_lectura, "c1", "p1", ConfigAgenda(duracion_minutos=30))

    assert ObtenerConfigAgenda(container.profesionales_repo).ejecutar("c1", "p1") == ConfigAgenda()
