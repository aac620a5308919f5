# main.py
from __future__ import annotations
import sys
import logging

from PySide6.QtWidgets import QApplication, QMessageBox

from app.errors import SettingsError
from ui.main_window import MainWindow
from utils import db_helper
from utils.file_handler import ensure_settings_file, load_settings


def setup_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler("app.log", encoding="utf-8"),
        ],
    )

    # Log any uncaught exceptions rather than silently dying
    def excepthook(exctype, value, tb):
        logging.critical("Unhandled exception", exc_info=(exctype, value, tb))
        if QApplication.instance() is not None:
            QMessageBox.critical(
                None, "Application Error", f"{exctype.__name__}: {value}"
            )
        sys.exit(1)

    sys.excepthook = excepthook


def main() -> int:
    setup_logging()

    ensure_settings_file()
    try:
        settings = load_settings()
    except SettingsError as e:
        logging.error("Invalid settings: %s", e)
        return 2
    db_helper.DB_PATH = settings["db_path"]

    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName("Quick Check")
    app.setOrganizationName("Quick Check")

    win = MainWindow(settings)
    win.show()

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
