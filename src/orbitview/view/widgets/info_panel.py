"""
Scene Info Panel
"""
from __future__ import annotations

from typing import Dict, Optional

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QGroupBox, QFormLayout, QScrollArea
)
from PySide6.QtCore import Signal, Qt

from orbitview.app.state import ViewerStore
from orbitview.config import PANEL_LIST_LIMIT
from orbitview.model.scene import Scene


class InfoPanel(QWidget):
    # Requests routed to the main window
    export_requested = Signal()
    hide_requested = Signal()

    def __init__(self, store: ViewerStore, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.store = store
        self._entity_buttons: Dict[str, QPushButton] = {}

        layout = QVBoxLayout(self)

        # --- Header: title + actions ---
        header = QHBoxLayout()
        title = QLabel("Scene Info")
        title.setStyleSheet("font-weight: bold; font-size: 14px;")
        header.addWidget(title)
        header.addStretch()

        self.btn_home = QPushButton("Center on Sun")
        self.btn_home.clicked.connect(self.store.request_home)
        header.addWidget(self.btn_home)

        self.btn_export = QPushButton("Export")
        self.btn_export.clicked.connect(self.export_requested)
        header.addWidget(self.btn_export)

        self.btn_hide = QPushButton("Hide")
        self.btn_hide.clicked.connect(self.hide_requested)
        header.addWidget(self.btn_hide)
        layout.addLayout(header)

        # --- Metadata ---
        grp_meta = QGroupBox("Metadata")
        form = QFormLayout(grp_meta)
        self.lbl_count = QLabel("-")
        self.lbl_time = QLabel("-")
        self.lbl_coords = QLabel("-")
        form.addRow("Count:", self.lbl_count)
        form.addRow("Time:", self.lbl_time)
        form.addRow("Coords:", self.lbl_coords)
        layout.addWidget(grp_meta)

        # --- Entity list (first PANEL_LIST_LIMIT only) ---
        grp_list = QGroupBox("Asteroids")
        list_layout = QVBoxLayout(grp_list)
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        self._list_container = QWidget()
        self._list_layout = QVBoxLayout(self._list_container)
        self._list_layout.setContentsMargins(0, 0, 0, 0)
        self._list_layout.addStretch()
        scroll.setWidget(self._list_container)
        list_layout.addWidget(scroll)
        layout.addWidget(grp_list, stretch=1)

        # --- Selected details ---
        self.grp_selected = QGroupBox("Selected")
        sel_form = QFormLayout(self.grp_selected)
        self.lbl_sel_name = QLabel("")
        self.lbl_sel_name.setStyleSheet("font-weight: bold;")
        self.lbl_sel_size = QLabel("")
        self.lbl_sel_pos = QLabel("")
        self.lbl_sel_pos.setTextInteractionFlags(Qt.TextSelectableByMouse)
        sel_form.addRow("Name:", self.lbl_sel_name)
        sel_form.addRow("Size:", self.lbl_sel_size)
        sel_form.addRow("Position:", self.lbl_sel_pos)
        self.grp_selected.setVisible(False)
        layout.addWidget(self.grp_selected)

        # --- CONNECTIONS ---
        self.store.scene_changed.connect(self.on_scene_changed)
        self.store.selection_changed.connect(self.on_selection_changed)

        self.on_scene_changed(self.store.scene)

    # --- SLOTS ---

    def on_scene_changed(self, scene: Scene) -> None:
        meta = scene.metadata
        self.lbl_count.setText(str(meta.count))
        self.lbl_time.setText(meta.time_point or "Now")
        self.lbl_coords.setText(meta.coordinate_system or "-")
        self._rebuild_list(scene)
        self.on_selection_changed(self.store.selected_id)

    def on_selection_changed(self, entity_id: Optional[str]) -> None:
        for eid, btn in self._entity_buttons.items():
            btn.setChecked(eid == entity_id)

        entity = self.store.scene.find(entity_id)
        if entity is None:
            self.grp_selected.setVisible(False)
            return

        self.lbl_sel_name.setText(entity.name)
        self.lbl_sel_size.setText(f"{entity.size:.3f}")
        self.lbl_sel_pos.setText("[" + ", ".join(f"{v:.2f}" for v in entity.position) + "]")
        self.grp_selected.setVisible(True)

    def _on_entity_clicked(self, entity_id: str) -> None:
        self.store.select(entity_id)
        # Re-clicking the selected entry must not leave its button unchecked
        self.on_selection_changed(self.store.selected_id)

    # --- HELPERS ---

    def _rebuild_list(self, scene: Scene) -> None:
        for btn in self._entity_buttons.values():
            self._list_layout.removeWidget(btn)
            btn.deleteLater()
        self._entity_buttons.clear()

        for i, entity in enumerate(scene.entities[:PANEL_LIST_LIMIT]):
            btn = QPushButton(entity.name)
            btn.setCheckable(True)
            btn.setStyleSheet("QPushButton { text-align: left; padding: 4px; }"
                              "QPushButton:checked { background-color: rgba(255, 160, 66, 90); }")
            btn.clicked.connect(lambda _checked=False, eid=entity.id: self._on_entity_clicked(eid))
            # Keep the trailing stretch last
            self._list_layout.insertWidget(i, btn)
            self._entity_buttons[entity.id] = btn
