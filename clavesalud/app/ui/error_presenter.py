from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtWidgets import QMessageBox, QWidget

from clavesalud.app.bootstrap_logging import get_logger
from clavesalud.app.domain.exceptions import DomainError, ErrorAlmacenAgenda

LOGGER = get_logger("clavesalud.ui")


def _normalize_context(context: Optional[str]) -> Optional[str]:
    if not context:
        return None
    return context.strip() or None


def present_error(
    parent: QWidget,
    exc: Exception,
    context: str | None = None,
    *,
    traductor: Callable[[str], str] | None = None,
) -> None:
    t = traductor or (lambda key: key)
    context_text = _normalize_context(context)

    if isinstance(exc, ErrorAlmacenAgenda):
        LOGGER.error("ui_store_error", exc_info=exc, extra={"action": context_text or "ui"})
        QMessageBox.warning(parent, t("common.error"), str(exc))
        return

    if isinstance(exc, DomainError):
        QMessageBox.warning(parent, t("common.aviso"), str(exc))
        return

    LOGGER.error("ui_unexpected_error", exc_info=exc, extra={"action": context_text or "ui"})
    QMessageBox.critical(parent, t("common.error"), t("common.error_inesperado"))
