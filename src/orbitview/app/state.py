from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QObject, Signal

from orbitview.model.scene import Entity, Scene

logger = logging.getLogger(__name__)


class ViewerStore(QObject):
    """Central state store with signals for panel/scene-view sync."""
    scene_changed = Signal(object)
    selection_changed = Signal(object)  # entity id or None
    reset_requested = Signal(int)

    def __init__(self, scene: Optional[Scene] = None) -> None:
        super().__init__()
        self._scene: Scene = scene if scene is not None else Scene()
        self._selected_id: Optional[str] = None
        self._reset_counter: int = 0
        self.filepath: Optional[str] = None

    # --- Read access ---

    @property
    def scene(self) -> Scene:
        return self._scene

    @property
    def selected_id(self) -> Optional[str]:
        return self._selected_id

    @property
    def selected_entity(self) -> Optional[Entity]:
        return self._scene.find(self._selected_id)

    @property
    def reset_counter(self) -> int:
        return self._reset_counter

    # --- Mutations ---

    def load_scene(self, scene: Scene, filepath: Optional[str] = None) -> None:
        """Replaces the scene wholesale. A selection that no longer resolves is dropped."""
        self._scene = scene
        self.filepath = filepath
        self.scene_changed.emit(scene)
        if self._selected_id is not None and scene.find(self._selected_id) is None:
            self._set_selected(None)

    def select(self, entity_id: Optional[str]) -> None:
        # Unknown ids are treated as "no selection", not as an error
        if entity_id is not None and self._scene.find(entity_id) is None:
            logger.debug(f"Ignoring selection of unknown entity '{entity_id}'.")
            entity_id = None
        self._set_selected(entity_id)

    def clear_selection(self) -> None:
        self._set_selected(None)

    def request_home(self) -> None:
        """'Center on Sun': drop the selection, then bump the reset counter."""
        self.clear_selection()
        self._reset_counter += 1
        self.reset_requested.emit(self._reset_counter)

    def _set_selected(self, entity_id: Optional[str]) -> None:
        if entity_id != self._selected_id:
            self._selected_id = entity_id
            self.selection_changed.emit(entity_id)
