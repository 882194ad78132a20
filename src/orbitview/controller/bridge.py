"""
Event Bridge
============
Translates edge-triggered external signals (selection changes, reset requests)
into focus updates on the CameraTargetController.

States
------
IDLE      No active focus; the camera belongs to the user.
FOCUSING  Focus = render position of the selected entity. No expiry.
HOMING    Focus = origin, right after a reset. Ends when the homing timer fires.

Transitions
-----------
selection -> resolvable id       any state      -> FOCUSING (homing timer cancelled)
selection -> None / unknown id   FOCUSING       -> IDLE
                                 IDLE, HOMING   -> unchanged
reset counter changes            any state      -> HOMING (camera snapped home, timer re-armed)
homing timer fires               HOMING         -> IDLE
teardown                         any state      -> IDLE, further events ignored

The homing timer is a single-shot QTimer: starting it again cancels the pending
shot, so two quick resets produce exactly one IDLE transition, measured from
the second reset.
"""
from __future__ import annotations

from enum import Enum
import logging
from typing import Optional, Protocol, TYPE_CHECKING

import numpy as np
from PySide6.QtCore import QObject, QTimer, Signal

from orbitview.config import HOME_OFFSET, HOMING_DURATION_MS
from orbitview.core.camera import ORIGIN
from orbitview.core.scale import compute_scale_factor
from orbitview.model.scene import Scene

if TYPE_CHECKING:
    import numpy.typing as npt
    from orbitview.core.camera import CameraTargetController
    from orbitview.model.scene import Entity

logger = logging.getLogger(__name__)


class BridgeState(Enum):
    IDLE = "idle"
    FOCUSING = "focusing"
    HOMING = "homing"


class HomingTimer(Protocol):
    """The subset of QTimer the bridge relies on."""
    timeout: Signal

    def start(self) -> None: ...
    def stop(self) -> None: ...
    def isActive(self) -> bool: ...


def home_position(scale: float) -> npt.NDArray[np.float64]:
    return np.asarray(HOME_OFFSET, dtype=np.float64) * max(1.0, scale)


class EventBridge(QObject):
    # Emits the new BridgeState after every transition
    state_changed = Signal(object)

    def __init__(
        self,
        controller: CameraTargetController,
        timer: Optional[HomingTimer] = None,
        parent: Optional[QObject] = None
    ) -> None:
        super().__init__(parent)
        self.controller = controller

        self._scene: Scene = Scene()
        self._state: BridgeState = BridgeState.IDLE
        self._highlight_id: Optional[str] = None
        self._last_reset: Optional[int] = None
        self._torn_down: bool = False

        if timer is None:
            timer = QTimer(self)
            timer.setSingleShot(True)
            timer.setInterval(HOMING_DURATION_MS)
        self._homing_timer = timer
        self._homing_timer.timeout.connect(self._on_homing_expired)

    # ------------------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------------------

    @property
    def state(self) -> BridgeState:
        return self._state

    @property
    def scene(self) -> Scene:
        return self._scene

    @property
    def scale(self) -> float:
        return self.controller.scale

    @property
    def is_homing_armed(self) -> bool:
        return self._homing_timer.isActive()

    def render_position(self, entity: Entity) -> npt.NDArray[np.float64]:
        return entity.position_array() * self.controller.scale

    # ------------------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------------------

    def set_scene(self, scene: Scene) -> None:
        """Replaces the scene, recomputes the scale and re-resolves the current selection."""
        if self._torn_down:
            return
        self._scene = scene
        self.controller.scale = compute_scale_factor(scene.positions())
        logger.info(f"Scene set: {len(scene)} entities, scale={self.controller.scale:.4g}")

        if self._state is not BridgeState.HOMING:
            self._apply_highlight()

    def on_highlight_changed(self, entity_id: Optional[str]) -> None:
        if self._torn_down:
            return
        self._highlight_id = entity_id
        self._apply_highlight()

    def on_reset_signal(self, value: int) -> None:
        """Edge-triggered: fires whenever the counter differs from the last value seen."""
        if self._torn_down or value == self._last_reset:
            return
        self._last_reset = value
        self.go_home()

    def go_home(self) -> None:
        """Snaps the camera home, holds focus on the origin and arms the homing timer."""
        if self._torn_down:
            return
        self.controller.snap_to(home_position(self.controller.scale), ORIGIN)
        self.controller.set_focus(ORIGIN)
        self._set_state(BridgeState.HOMING)
        # Restarting a single-shot timer replaces any pending shot
        self._homing_timer.start()

    def teardown(self) -> None:
        """Cancels the homing timer and detaches from the camera. Safe to call twice."""
        if self._torn_down:
            return
        self._homing_timer.stop()
        self.controller.clear_focus()
        self._state = BridgeState.IDLE
        self._torn_down = True
        logger.debug("Event bridge torn down.")

    # ------------------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------------------

    def _apply_highlight(self) -> None:
        entity = self._scene.find(self._highlight_id)
        if entity is None:
            if self._highlight_id is not None:
                logger.debug(f"Selection '{self._highlight_id}' not in scene, treated as no selection.")
            if self._state is BridgeState.FOCUSING:
                self.controller.clear_focus()
                self._set_state(BridgeState.IDLE)
            return

        # A selection after a reset wins over the pending homing release
        if self._homing_timer.isActive():
            self._homing_timer.stop()
        self.controller.set_focus(self.render_position(entity))
        self._set_state(BridgeState.FOCUSING)

    def _on_homing_expired(self) -> None:
        if self._torn_down or self._state is not BridgeState.HOMING:
            return
        self.controller.clear_focus()
        self._set_state(BridgeState.IDLE)

    def _set_state(self, state: BridgeState) -> None:
        previous = self._state
        self._state = state
        logger.debug(f"Bridge {previous.value} -> {state.value}")
        self.state_changed.emit(state)
