from __future__ import annotations

from typing import Any, Protocol


class NotificadorUsuario(Protocol):
    """Avisos transitorios al usuario (toasts)."""

    def success(self, message: str, **kwargs: Any) -> Any:
        ...

    def info(self, message: str, **kwargs: Any) -> Any:
        ...

    def warning(self, message: str, **kwargs: Any) -> Any:
        ...

    def error(self, message: str, **kwargs: Any) -> Any:
        ...
