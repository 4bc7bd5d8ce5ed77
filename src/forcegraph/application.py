from __future__ import annotations

import os
import sys

from PySide6.QtCore import QCoreApplication, QSettings
from PySide6.QtWidgets import QApplication

ORG_ID = "forcegraph"
APP_ID = "dependency-graph-viewer"

VISIBLE_APP_NAME = "Dependency Graph"


def create_app(argv: list[str] | None = None) -> QApplication:
    """Create and configure the QApplication instance (or reuse the running one)."""
    existing = QApplication.instance()
    if existing is not None:
        return existing

    os.environ.setdefault("QT_ENABLE_HIGHDPI_SCALING", "1")

    QCoreApplication.setOrganizationName(ORG_ID)
    QCoreApplication.setApplicationName(APP_ID)
    QSettings.setDefaultFormat(QSettings.Format.IniFormat)

    app = QApplication(sys.argv if argv is None else argv)
    app.setApplicationDisplayName(QCoreApplication.translate("App", VISIBLE_APP_NAME))
    return app
