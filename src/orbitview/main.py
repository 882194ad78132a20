"""
Application Initialization
==========================
This module constructs the store/view architecture and starts the Qt Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Instantiates the global state store (ViewerStore).
2. Loads the initial scene (command-line path or the bundled sample).
3. Instantiates the Main Window (View) and passes the store into it.
"""
import logging
import os
import sys
from typing import List, Optional

from PySide6.QtWidgets import QApplication, QMessageBox

from orbitview.app.state import ViewerStore
from orbitview.config import DEFAULT_SCENE_PATH
from orbitview.logging_config import setup_logging
from orbitview.model.io import SceneIO, SceneValidationError
from orbitview.view.main_window import MainWindow

logger = logging.getLogger(__name__)


def resolve_scene_path(argv: List[str]) -> Optional[str]:
    """First command-line argument if given, otherwise the bundled sample scene (if present)."""
    if len(argv) > 1:
        return argv[1]
    if os.path.exists(DEFAULT_SCENE_PATH):
        return DEFAULT_SCENE_PATH
    return None


def main() -> None:
    # 1. Setup Logging (Console + Optional File)
    # Use logging.DEBUG to trace camera state transitions during development
    setup_logging(level=logging.INFO, log_file=os.environ.get("ORBITVIEW_LOG_FILE"))

    # 2. Create the Qt Application
    app = QApplication(sys.argv)
    app.setApplicationName("Orbit View")

    # 3. Initialize the Data Model
    store = ViewerStore()
    load_error: Optional[str] = None
    scene_path = resolve_scene_path(sys.argv)
    if scene_path:
        try:
            store.load_scene(SceneIO.load(scene_path), filepath=scene_path)
        except SceneValidationError as e:
            load_error = str(e)

    # 4. Initialize the Main Window, passing the store
    window = MainWindow(store)
    window.show()
    if load_error:
        QMessageBox.critical(window, "Invalid Scene", load_error)

    # 5. Start Event Loop
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
