"""Allow running HIIT Timer as a module: python -m hiittimer."""

import logging
import os
import sys

from PyQt6.QtWidgets import QApplication

from .app import IntervalTimerApp


def _configure_logging() -> None:
    level_name = os.environ.get("HIIT_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    _configure_logging()
    logging.getLogger(__name__).info("HIIT Timer ready!")

    app = QApplication(sys.argv)
    app.setApplicationName("HIIT Timer")
    app.setOrganizationName("HIITTimer")

    window = IntervalTimerApp()
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
