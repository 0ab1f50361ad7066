from __future__ import annotations

from clavesalud.app.ui.widgets.toast import GestorToasts


def _assert_no_typeerror_calls(manager: GestorToasts) -> None:
    success = manager.success(
        "Guardado",
        title="Éxito",
        action_label="Deshacer",
        action_callback=lambda: None,
    )
    error = manager.error(
        "Falló",
        title="Error",
        action_label="Reintentar",
        action_callback=lambda: None,
    )

    assert success["action_label"] == "Deshacer"
    assert callable(success["action_callback"])
    assert error["action_label"] == "Reintentar"
    assert callable(error["action_callback"])


def test_gestor_toasts_acepta_action_kwargs_sin_typeerror() -> None:
    _assert_no_typeerror_calls(GestorToasts())


def test_gestor_toasts_notifica_a_observadores_hasta_cancelar() -> None:
    manager = GestorToasts()
    recibidos: list[str] = []
    cancelar = manager.suscribir(lambda payload: recibidos.append(payload["tipo"]))

    manager.warning("Solo lectura")
    manager.info("Bloque cerrado")
    cancelar()
    manager.error("Falló")

    assert recibidos == ["warning", "info"]
    assert [n["tipo"] for n in manager.notificaciones] == ["warning", "info", "error"]
    assert manager.por_tipo("error")[0]["message"] == "Falló"


def test_gestor_toasts_conserva_solo_los_ultimos_avisos() -> None:
    manager = GestorToasts(historial_max=3)
    recibidos: list[str] = []
    manager.suscribir(lambda payload: recibidos.append(payload["message"]))

    for indice in range(5):
        manager.info(f"aviso {indice}")

    assert [n["message"] for n in manager.notificaciones] == ["aviso 2", "aviso 3", "aviso 4"]
    assert len(recibidos) == 5
