from __future__ import annotations

from typing import Callable

import pytest

from clavesalud.app.application.agenda.sincronizacion import AgendaEnVivo, InstantaneaAgenda
from clavesalud.app.domain.agenda import BloqueAgenda

FECHA = "2026-03-10"


@pytest.fixture()
def en_vivo(repo_bloques, toasts, traductor) -> AgendaEnVivo:
    return AgendaEnVivo(repo_bloques, toasts, traductor)


@pytest.fixture()
def vistas(en_vivo) -> list[InstantaneaAgenda]:
    recibidas: list[InstantaneaAgenda] = []
    en_vivo.observar(recibidas.append)
    return recibidas


def test_seleccionar_carga_los_bloques_del_profesional(en_vivo, vistas, repo_bloques) -> None:
    repo_bloques.bloques.append(BloqueAgenda.disponible("c1", "p1", FECHA, "09:00"))
    repo_bloques.bloques.append(BloqueAgenda.disponible("c1", "p2", FECHA, "09:00"))

    en_vivo.seleccionar("c1", "p1")

    ultima = vistas[-1]
    assert ultima.centro_id == "c1"
    assert ultima.profesional_id == "p1"
    assert [b.profesional_id for b in ultima.bloques] == ["p1"]
    assert ultima.error_lectura is False


def test_cambio_en_el_almacen_recarga_sin_pedirlo(en_vivo, vistas, repo_bloques) -> None:
    en_vivo.seleccionar("c1", "p1")
    assert vistas[-1].bloques == ()

    repo_bloques.create(BloqueAgenda.disponible("c1", "p1", FECHA, "09:00"))

    assert len(vistas[-1].bloques) == 1


def test_cambio_en_otro_centro_no_recarga(en_vivo, vistas, repo_bloques) -> None:
    en_vivo.seleccionar("c1", "p1")
    lecturas = repo_bloques.llamadas.count("listar_activos")

    repo_bloques.create(BloqueAgenda.disponible("c2", "p1", FECHA, "09:00"))

    assert repo_bloques.llamadas.count("listar_activos") == lecturas


def test_cambiar_de_centro_mueve_la_suscripcion(en_vivo, repo_bloques) -> None:
    en_vivo.seleccionar("c1", "p1")
    en_vivo.seleccionar("c2", "p9")

    assert repo_bloques.publicador.total_suscriptores("c1") == 0
    assert repo_bloques.publicador.total_suscriptores("c2") == 1


def test_cambiar_de_profesional_mantiene_una_sola_suscripcion(en_vivo, repo_bloques) -> None:
    en_vivo.seleccionar("c1", "p1")
    en_vivo.seleccionar("c1", "p2")

    assert repo_bloques.publicador.total_suscriptores("c1") == 1
    assert en_vivo.instantanea.profesional_id == "p2"


def test_sin_profesional_la_agenda_queda_vacia(en_vivo, vistas, repo_bloques) -> None:
    repo_bloques.bloques.append(BloqueAgenda.disponible("c1", "p1", FECHA, "09:00"))

    en_vivo.seleccionar("c1", None)

    assert vistas[-1].bloques == ()
    assert "listar_activos" not in repo_bloques.llamadas


def test_fallo_de_lectura_degrada_a_vacio_y_avisa_una_vez(en_vivo, vistas, repo_bloques, toasts) -> None:
    repo_bloques.bloques.append(BloqueAgenda.disponible("c1", "p1", FECHA, "09:00"))
    en_vivo.seleccionar("c1", "p1")
    assert len(vistas[-1].bloques) == 1

    repo_bloques.fallar_lectura = True
    en_vivo.recargar()
    en_vivo.recargar()

    assert vistas[-1].bloques == ()
    assert vistas[-1].error_lectura is True
    assert [t["message"] for t in toasts.por_tipo("error")] == ["agenda.toast.error_lectura"]


def test_tras_recuperarse_un_nuevo_fallo_vuelve_a_avisar(en_vivo, repo_bloques, toasts) -> None:
    en_vivo.seleccionar("c1", "p1")
    repo_bloques.fallar_lectura = True
    en_vivo.recargar()
    repo_bloques.fallar_lectura = False
    en_vivo.recargar()
    assert en_vivo.instantanea.error_lectura is False

    repo_bloques.fallar_lectura = True
    en_vivo.recargar()

    assert len(toasts.por_tipo("error")) == 2


def test_sincronizando_mientras_hay_escrituras_pendientes(en_vivo, vistas) -> None:
    en_vivo.seleccionar("c1", "p1")

    en_vivo.iniciar_escritura()
    en_vivo.iniciar_escritura()
    assert vistas[-1].sincronizando is True
    en_vivo.finalizar_escritura()
    assert en_vivo.sincronizando is True
    en_vivo.finalizar_escritura()
    en_vivo.finalizar_escritura()

    assert vistas[-1].sincronizando is False
    assert en_vivo.sincronizando is False


def test_las_recargas_pasan_por_el_despachador(repo_bloques, toasts, traductor) -> None:
    pendientes: list[Callable[[], None]] = []
    en_vivo = AgendaEnVivo(repo_bloques, toasts, traductor, despachar=pendientes.append)
    en_vivo.seleccionar("c1", "p1")

    repo_bloques.create(BloqueAgenda.disponible("c1", "p1", FECHA, "09:00"))
    assert en_vivo.instantanea.bloques == ()
    assert len(pendientes) == 1

    pendientes.pop()()

    assert len(en_vivo.instantanea.bloques) == 1


def test_recarga_despachada_tras_cambiar_de_centro_se_descarta(repo_bloques, toasts, traductor) -> None:
    pendientes: list[Callable[[], None]] = []
    en_vivo = AgendaEnVivo(repo_bloques, toasts, traductor, despachar=pendientes.append)
    en_vivo.seleccionar("c1", "p1")
    repo_bloques.create(BloqueAgenda.disponible("c1", "p1", FECHA, "09:00"))
    en_vivo.seleccionar("c2", "p1")
    lecturas = repo_bloques.llamadas.count("listar_activos")

    pendientes.pop()()

    assert repo_bloques.llamadas.count("listar_activos") == lecturas


def test_cerrar_cancela_suscripcion_y_observadores(en_vivo, vistas, repo_bloques) -> None:
    en_vivo.seleccionar("c1", "p1")
    total = len(vistas)

    en_vivo.cerrar()
    repo_bloques.create(BloqueAgenda.disponible("c1", "p1", FECHA, "09:00"))

    assert repo_bloques.publicador.total_suscriptores("c1") == 0
    assert len(vistas) == total
