from __future__ import annotations

import sys
import uuid

from PySide6.QtWidgets import QApplication

from clavesalud.app.bootstrap import bootstrap_database, logs_dir, resolve_log_level
from clavesalud.app.bootstrap_logging import configure_logging, get_logger, set_run_context
from clavesalud.app.container import build_container
from clavesalud.app.crash_handler import install_global_exception_hook
from clavesalud.app.ui.main_window import MainWindow


LOGGER = get_logger(__name__)


def main() -> int:
    configure_logging("clavesalud-agenda", logs_dir(), level=resolve_log_level(), json=True)
    install_global_exception_hook(LOGGER)

    app = QApplication(sys.argv)

    con = bootstrap_database(apply_schema=True)
    container = build_container(con)
    set_run_context(uuid.uuid4().hex[:8], user=container.user_context.username)
    LOGGER.info(
        "app_started",
        extra={"action": "app_start", "role": container.user_context.role.value},
    )

    window = MainWindow(container)
    window.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
