"""Avisos transitorios (toasts) de la aplicación."""

from __future__ import annotations

from collections import deque
from collections.abc import Callable
from typing import Any

ObservadorToast = Callable[[dict[str, Any]], None]

HISTORIAL_TOASTS_MAX = 50


class GestorToasts:
    """
    Gestor de notificaciones toast independiente de Qt.

    Conserva solo los últimos `historial_max` avisos para inspección.
    """

    def __init__(self, historial_max: int = HISTORIAL_TOASTS_MAX) -> None:
        self._notificaciones: deque[dict[str, Any]] = deque(maxlen=historial_max)
        self._observadores: list[ObservadorToast] = []

    @property
    def notificaciones(self) -> list[dict[str, Any]]:
        return list(self._notificaciones)

    def suscribir(self, callback: ObservadorToast) -> Callable[[], None]:
        self._observadores.append(callback)

        def _cancelar() -> None:
            if callback in self._observadores:
                self._observadores.remove(callback)

        return _cancelar

    def _emitir(
        self,
        tipo: str,
        message: str,
        *,
        title: str | None = None,
        action_label: str | None = None,
        action_callback: Callable[[], None] | None = None,
        **kwargs: Any,
    ) -> dict[str, Any]:
        payload = {
            "tipo": tipo,
            "message": message,
            "title": title,
            "action_label": action_label,
            "action_callback": action_callback,
            "meta": kwargs,
        }
        self._notificaciones.append(payload)
        for callback in list(self._observadores):
            callback(payload)
        return payload

    def success(self, message: str, *, title: str | None = None, **kwargs: Any) -> dict[str, Any]:
        return self._emitir("success", message, title=title, **kwargs)

    def info(self, message: str, *, title: str | None = None, **kwargs: Any) -> dict[str, Any]:
        return self._emitir("info", message, title=title, **kwargs)

    def warning(self, message: str, *, title: str | None = None, **kwargs: Any) -> dict[str, Any]:
        return self._emitir("warning", message, title=title, **kwargs)

    def error(
        self,
        message: str,
        *,
        title: str | None = None,
        action_label: str | None = None,
        action_callback: Callable[[], None] | None = None,
        **kwargs: Any,
    ) -> dict[str, Any]:
        return self._emitir(
            "error",
            message,
            title=title,
            action_label=action_label,
            action_callback=action_callback,
            **kwargs,
        )

    def por_tipo(self, tipo: str) -> list[dict[str, Any]]:
        return [n for n in self._notificaciones if n["tipo"] == tipo]


__all__ = ["GestorToasts"]
