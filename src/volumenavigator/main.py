"""
Application Initialization
==========================
Builds the navigator store and the main window, then starts the Qt event loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Instantiates the navigator (model + controller state).
2. Instantiates the Main Window (View), passing the navigator in.
3. Prevents circular import errors by being the orchestrator.
"""
import logging
import sys
from PySide6.QtWidgets import QApplication

from volumenavigator import config
from volumenavigator.controller.navigator import VolumeNavigator
from volumenavigator.logging_config import setup_logging
from volumenavigator.view.main_window import MainWindow, VISIBLE_APP_NAME

logger = logging.getLogger(__name__)


def main() -> None:
    # 1. Setup Logging (use logging.DEBUG to follow every plane mutation)
    setup_logging(level=logging.INFO)

    # 2. Create the Qt Application
    app = QApplication(sys.argv)
    app.setApplicationName(VISIBLE_APP_NAME)

    # 3. Initialize the navigator
    navigator = VolumeNavigator(config.DEFAULT_OUTER_BOX, config.DEFAULT_INNER_BOX)
    navigator.set_on_finish_change_callback(
        lambda: logger.info(f"Plane: {navigator.equation_literal()}")
    )

    # 4. Initialize the Main Window, passing the navigator
    window = MainWindow(navigator)
    window.add_action("Print polygon", lambda: logger.info(f"Polygon: {navigator.get_plane_polygon()}"))
    window.show()

    # 5. Start Event Loop
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
