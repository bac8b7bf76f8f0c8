"""SkinScan: photograph a skin lesion and classify it on-device.

Desktop entry point.
"""

import argparse
import logging
import os
import sys

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QApplication

import i18n
from core.settings import APPLICATION, ORGANIZATION, AppSettings
from ui.dialogs.about_dialog import APP_VERSION
from ui.theme import ThemeManager


def parse_args(argv):
    parser = argparse.ArgumentParser(prog="skinscan", description="On-device skin lesion screening.")
    parser.add_argument("--camera", type=int, metavar="INDEX", help="Camera device to use (saved for next launch).")
    parser.add_argument("--debug", action="store_true", help="Verbose logging.")
    args, _qt_args = parser.parse_known_args(argv)
    if args.camera is not None and args.camera < 0:
        parser.error("--camera must be 0 or greater")
    return args


def main():
    """Application entry point."""
    args = parse_args(sys.argv[1:])
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if getattr(sys, "frozen", False):
        os.chdir(os.path.dirname(sys.executable))

    app = QApplication(sys.argv)
    app.setApplicationName(APPLICATION)
    app.setApplicationVersion(APP_VERSION)
    app.setOrganizationName(ORGANIZATION)

    settings = AppSettings()
    if args.camera is not None:
        settings.camera_index = args.camera

    # Strings must be loaded before the first widget is built
    i18n.init(settings.language)
    if i18n.is_rtl():
        app.setLayoutDirection(Qt.LayoutDirection.RightToLeft)

    theme_manager = ThemeManager(app, settings)
    theme_manager.apply_theme()

    # Deferred: pulls in torch for the classifier
    from ui.main_window import MainWindow

    window = MainWindow(theme_manager, settings=settings)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
