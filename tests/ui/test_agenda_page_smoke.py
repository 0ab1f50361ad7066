from __future__ import annotations

import os
import sqlite3
from collections.abc import Iterator
from datetime import date

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
try:
    from PySide6.QtWidgets import QApplication
except ImportError as exc:  # pragma: no cover - depende del sistema
    pytest.skip(f"PySide6 no disponible: {exc}", allow_module_level=True)

from PySide6.QtCore import Qt

from clavesalud.app.application.security import Role, UserContext
from clavesalud.app.container import ROLE_ENV, USER_ENV, build_container
from clavesalud.app.domain.centros import Centro, Profesional
from clavesalud.app.infrastructure.sqlite.db import bootstrap
from clavesalud.app.pages.agenda.page import PageAgenda
from clavesalud.app.pages.pages_registry import get_pages
from clavesalud.app.ui.main_window import MainWindow


@pytest.fixture(scope="session")
def qapp() -> Iterator[QApplication]:
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture()
def container_memoria(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv(ROLE_ENV, raising=False)
    monkeypatch.delenv(USER_ENV, raising=False)
    con: sqlite3.Connection = bootstrap(":memory:")
    container = build_container(con, reloj=lambda: date(2026, 3, 5))
    container.centros_repo.create(Centro(id="c1", nombre="Centro Médico Los Andes"))
    container.profesionales_repo.create(Profesional(id="p1", centro_id="c1", nombre="Ana Soto"))
    try:
        yield container
    finally:
        con.close()


def test_registro_de_paginas(container_memoria) -> None:
    assert [p.key for p in get_pages(container_memoria)] == ["agenda", "plantillas_whatsapp"]


def test_pagina_agenda_pinta_la_plantilla_del_dia(qapp: QApplication, container_memoria) -> None:
    pagina = PageAgenda(container_memoria)

    assert pagina.cbo_centro.count() == 1
    assert pagina.cbo_profesional.count() == 1
    assert len(pagina._botones_slot) == 39
    assert pagina._botones_slot[0].text().startswith("08:00")


def test_clic_en_slot_abre_bloque_y_refresca(qapp: QApplication, container_memoria) -> None:
    assert container_memoria.proveedor_conexion is None
    pagina = PageAgenda(container_memoria)

    pagina._botones_slot[0].click()
    qapp.processEvents()

    [bloque] = container_memoria.bloques_repo.listar_activos("c1")
    assert bloque.hora == "08:00"
    assert [b.id for b in pagina._instantanea.bloques] == [bloque.id]
    assert container_memoria.toasts.por_tipo("success")
    pagina.close()


def test_titulo_de_pagina_marca_solo_lectura(container_memoria) -> None:
    agenda = next(p for p in get_pages(container_memoria) if p.key == "agenda")
    t = container_memoria.i18n.t

    assert agenda.titulo(t, UserContext(role=Role.ADMIN)) == "Agenda"
    assert agenda.titulo(t, UserContext(role=Role.READONLY)) == "Agenda (solo lectura)"


def test_ventana_principal_crea_cada_pagina_al_abrirla(qapp: QApplication, container_memoria) -> None:
    ventana = MainWindow(container_memoria)

    assert ventana.pagina_actual == "agenda"
    assert ventana.stack.count() == 1
    assert ventana.lst_paginas.item(1).text() == "Plantillas WhatsApp"

    ventana.abrir_pagina("plantillas_whatsapp")
    ventana.abrir_pagina("agenda")
    ventana.abrir_pagina("no_existe")

    assert ventana.pagina_actual == "agenda"
    assert ventana.stack.count() == 2
    assert ventana.lst_paginas.currentItem().data(Qt.UserRole) == "agenda"
    ventana.close()


def test_ventana_principal_sigue_el_cambio_de_idioma(qapp: QApplication, container_memoria) -> None:
    ventana = MainWindow(container_memoria)

    container_memoria.i18n.set_language("en")

    assert ventana.lst_paginas.item(0).text() == "Schedule"
    assert ventana.lbl_usuario.text() == "system · Administrator"
    ventana.close()
