"""Qt application bootstrap helpers."""

from __future__ import annotations

import logging
import sys
from types import TracebackType
from typing import TYPE_CHECKING

from chesstable.core.errors import InternalConsistencyError

if TYPE_CHECKING:
    from PyQt6.QtWidgets import QApplication

    from chesstable.settings import TableSettings

_LOGGER = logging.getLogger(__name__)
_LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: int | str = logging.WARNING) -> None:
    """Install the root handler used by the application."""
    logging.basicConfig(level=level, format=_LOG_FORMAT)


def _excepthook(
    exc_type: type[BaseException],
    exc: BaseException,
    tb: TracebackType | None,
) -> None:
    """Log uncaught errors; board desync is fatal and quits the app."""
    _LOGGER.critical("Unhandled exception", exc_info=(exc_type, exc, tb))
    if issubclass(exc_type, InternalConsistencyError):
        from PyQt6.QtWidgets import QApplication

        app = QApplication.instance()
        if app is not None:
            app.exit(1)


def _configure_application(app: QApplication) -> None:
    """Apply app-wide settings."""
    app.setApplicationName("Chesstable")
    app.setStyle("Fusion")


def run_application(
    settings: TableSettings | None = None,
    argv: list[str] | None = None,
) -> int:
    """Create and run the main Qt application."""
    from PyQt6.QtWidgets import QApplication

    from chesstable.ui.main_window import MainWindow

    app = QApplication(sys.argv if argv is None else argv)
    _configure_application(app)
    sys.excepthook = _excepthook

    window = MainWindow(settings)
    window.show()

    return app.exec()
