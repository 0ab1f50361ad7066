from __future__ import annotations

import threading
from typing import Callable

from clavesalud.app.bootstrap_logging import get_logger, log_soft_exception

LOGGER = get_logger(__name__)

CallbackCambios = Callable[[str], None]


class PublicadorCambiosAgenda:
    """
    Observadores en proceso de los cambios de bloques por centro.

    Los repositorios publican tras cada commit; el callback se ejecuta en el hilo
    que escribió, así que la UI debe reenviarlo a su propio hilo.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._suscriptores: dict[str, list[CallbackCambios]] = {}

    def suscribir(self, centro_id: str, callback: CallbackCambios) -> Callable[[], None]:
        with self._lock:
            self._suscriptores.setdefault(centro_id, []).append(callback)

        def _cancelar() -> None:
            with self._lock:
                callbacks = self._suscriptores.get(centro_id, [])
                if callback in callbacks:
                    callbacks.remove(callback)

        return _cancelar

    def publicar(self, centro_id: str) -> None:
        with self._lock:
            callbacks = list(self._suscriptores.get(centro_id, []))
        for callback in callbacks:
            try:
                callback(centro_id)
            except Exception as exc:  # noqa: BLE001
                log_soft_exception(LOGGER, exc, {"action": "publicar_cambios_agenda", "centro_id": centro_id})

    def total_suscriptores(self, centro_id: str) -> int:
        with self._lock:
            return len(self._suscriptores.get(centro_id, []))
