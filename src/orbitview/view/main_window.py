"""
Main Application Window
=======================
The primary GUI container that holds the Menu Bar, the Info Panel and the 3D view.

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Routing: It connects the store, the panel and the 3D view, and routes file
   actions (Open / Export) to the I/O manager.
"""
import logging
import os
from typing import Optional

from PySide6.QtWidgets import QMainWindow, QSplitter, QFileDialog, QMessageBox
from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QCloseEvent, QCursor

from orbitview.app.state import ViewerStore
from orbitview.controller.bridge import BridgeState
from orbitview.model.io import SceneIO, SceneValidationError
from orbitview.view.widgets.info_panel import InfoPanel
from orbitview.view.widgets.scene_view import SceneView

logger = logging.getLogger(__name__)

VISIBLE_APP_NAME = "Orbit View"


class MainWindow(QMainWindow):
    def __init__(self, store: ViewerStore) -> None:
        super().__init__()
        self.store: ViewerStore = store

        self.update_window_title()
        self.resize(1400, 900)

        # --- SPLITTER (CONTENT AREA) ---
        self.splitter = QSplitter(Qt.Horizontal)
        self.setCentralWidget(self.splitter)

        # --- LEFT SIDE: Info Panel ---
        self.info_panel = InfoPanel(self.store)
        self.splitter.addWidget(self.info_panel)

        # --- RIGHT SIDE: 3D Visualization ---
        self.scene_view = SceneView()
        self.splitter.addWidget(self.scene_view)

        # Set initial proportions (1 part sidebar : 4 parts 3D view)
        self.splitter.setSizes([320, 1080])

        # --- ACTIONS & MENUS ---
        self._create_actions()
        self._create_menus()

        # --- SIGNAL CONNECTIONS ---
        # 1. Store -> View / Bridge
        self.store.scene_changed.connect(self.on_scene_changed)
        self.store.selection_changed.connect(self.scene_view.set_selection)
        self.store.reset_requested.connect(self.scene_view.bridge.on_reset_signal)

        # 2. View -> Store (pointer intents)
        self.scene_view.body_clicked.connect(self.store.select)
        self.scene_view.body_hovered.connect(self.on_body_hovered)

        # 3. Panel requests
        self.info_panel.export_requested.connect(self.on_file_export)
        self.info_panel.hide_requested.connect(lambda: self.set_panel_visible(False))

        # 4. Status bar
        self.scene_view.bridge.state_changed.connect(self.on_camera_state_changed)

        # Initial Render + initial home view
        self.on_scene_changed(self.store.scene)
        self.scene_view.bridge.on_reset_signal(self.store.reset_counter)

    def _create_actions(self) -> None:
        self.act_open = QAction("Open Scene...", self)
        self.act_open.setShortcut("Ctrl+O")
        self.act_open.triggered.connect(self.on_file_open)

        self.act_export = QAction("Export Scene...", self)
        self.act_export.setShortcut("Ctrl+E")
        self.act_export.triggered.connect(self.on_file_export)

        self.act_exit = QAction("Exit", self)
        self.act_exit.triggered.connect(self.close)

        self.act_home = QAction("Center on Sun", self)
        self.act_home.setShortcut("Home")
        self.act_home.triggered.connect(self.store.request_home)

        self.act_toggle_panel = QAction("Show Panel", self)
        self.act_toggle_panel.setCheckable(True)
        self.act_toggle_panel.setChecked(True)
        self.act_toggle_panel.toggled.connect(self.set_panel_visible)

    def _create_menus(self) -> None:
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("&File")
        file_menu.addAction(self.act_open)
        file_menu.addAction(self.act_export)
        file_menu.addSeparator()
        file_menu.addAction(self.act_exit)

        view_menu = menu_bar.addMenu("&View")
        view_menu.addAction(self.act_home)
        view_menu.addAction(self.act_toggle_panel)

    # --- HELPER METHODS ---
    def update_window_title(self) -> None:
        filename = self.store.filepath if self.store.filepath else "Untitled"
        self.setWindowTitle(f"{VISIBLE_APP_NAME} - [{os.path.basename(filename)}]")

    def set_panel_visible(self, visible: bool) -> None:
        self.info_panel.setVisible(visible)
        if self.act_toggle_panel.isChecked() != visible:
            self.act_toggle_panel.blockSignals(True)
            self.act_toggle_panel.setChecked(visible)
            self.act_toggle_panel.blockSignals(False)

    def load_scene_file(self, filepath: str) -> bool:
        """Loads a scene; on failure the current scene stays and the user is told why."""
        try:
            scene = SceneIO.load(filepath)
        except SceneValidationError as e:
            QMessageBox.critical(self, "Invalid Scene", str(e))
            return False
        self.store.load_scene(scene, filepath=filepath)
        return True

    # --- SLOTS ---
    def on_scene_changed(self, scene) -> None:
        self.scene_view.set_scene(scene, self.store.selected_id)
        self.update_window_title()

    def on_body_hovered(self, entity_id: Optional[str]) -> None:
        if entity_id is None:
            self.scene_view.unsetCursor()
        else:
            self.scene_view.setCursor(QCursor(Qt.PointingHandCursor))

    def on_camera_state_changed(self, state: BridgeState) -> None:
        if state is BridgeState.FOCUSING and self.store.selected_entity is not None:
            self.statusBar().showMessage(f"Focusing: {self.store.selected_entity.name}")
        elif state is BridgeState.HOMING:
            self.statusBar().showMessage("Centering on the Sun...", 2000)
        else:
            self.statusBar().clearMessage()

    def on_file_open(self) -> None:
        path, _ = QFileDialog.getOpenFileName(self, "Open Scene", "", "Scene Files (*.json)")
        if path:
            self.load_scene_file(path)

    def on_file_export(self) -> None:
        if self.store.scene.is_empty:
            QMessageBox.information(self, "Export", "There is no scene to export.")
            return
        path, _ = QFileDialog.getSaveFileName(self, "Export Scene", "scene.json", "Scene Files (*.json)")
        if not path:
            return
        try:
            SceneIO.export(self.store.scene, path)
            self.statusBar().showMessage(f"Exported to {path}", 3000)
        except OSError as e:
            QMessageBox.critical(self, "Export Failed", f"Could not export scene:\n{e}")

    def closeEvent(self, event: QCloseEvent) -> None:
        # SceneView.closeEvent stops the frame loop and the homing timer
        self.scene_view.close()
        event.accept()
