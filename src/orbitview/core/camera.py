"""
Camera Target Controller
========================
Drives the camera toward a single focus point, one small step per rendered frame.

Why is this file needed?
------------------------
1. Smoothness: The camera approaches its goal exponentially (a fixed fraction
   of the remaining distance per frame) instead of jumping.
2. Cooperation: While no focus is active, the camera belongs to the user and
   this controller does not touch it.

The navigation surface (user-driven orbit/pan/zoom control) is optional and is
checked once, when the controller is built. With a surface, its look-at target
is interpolated too and it is asked to refresh. Without one, the camera is
pointed straight at the focus.

Classes:
    CameraLike: Minimal camera interface (position + look_at).
    NavigationSurface: Optional user-navigation capability.
    CameraTargetController: Holds the active focus and performs the per-frame step.
"""
from __future__ import annotations

import logging
from typing import Optional, Protocol, runtime_checkable

import numpy as np
import numpy.typing as npt

from orbitview.config import LERP_FACTOR, FOCUS_OFFSET

logger = logging.getLogger(__name__)

ORIGIN: npt.NDArray[np.float64] = np.zeros(3, dtype=np.float64)


@runtime_checkable
class CameraLike(Protocol):
    position: npt.NDArray[np.float64]

    def look_at(self, point: npt.NDArray[np.float64]) -> None: ...


@runtime_checkable
class NavigationSurface(Protocol):
    target: npt.NDArray[np.float64]
    enable_rotate: bool
    enabled: bool

    def update(self) -> None: ...


def lerp(start: npt.ArrayLike, end: npt.ArrayLike, t: float) -> npt.NDArray[np.float64]:
    a = np.asarray(start, dtype=np.float64)
    b = np.asarray(end, dtype=np.float64)
    return a + (b - a) * t


class CameraTargetController:
    def __init__(
        self,
        camera: CameraLike,
        navigation: Optional[NavigationSurface] = None,
        scale: float = 1.0,
        lerp_factor: float = LERP_FACTOR
    ) -> None:
        if navigation is not None and not isinstance(navigation, NavigationSurface):
            raise TypeError(
                f"{type(navigation).__name__} does not provide target/enable_rotate/enabled/update()."
            )
        self.camera = camera
        self.navigation = navigation
        self.scale: float = scale
        self.lerp_factor: float = lerp_factor
        self._active_focus: Optional[npt.NDArray[np.float64]] = None

    # ------------------------------------------------------------------------------
    # Focus
    # ------------------------------------------------------------------------------

    @property
    def active_focus(self) -> Optional[npt.NDArray[np.float64]]:
        return None if self._active_focus is None else self._active_focus.copy()

    @property
    def has_focus(self) -> bool:
        return self._active_focus is not None

    def set_focus(self, point: npt.ArrayLike) -> None:
        self._active_focus = np.asarray(point, dtype=np.float64).reshape(3).copy()

    def clear_focus(self) -> None:
        self._active_focus = None

    def desired_camera_position(self) -> Optional[npt.NDArray[np.float64]]:
        """Focus plus the viewing offset, scaled so the framing is the same at any scene scale."""
        if self._active_focus is None:
            return None
        return self._active_focus + np.asarray(FOCUS_OFFSET, dtype=np.float64) * self.scale

    # ------------------------------------------------------------------------------
    # Per-frame
    # ------------------------------------------------------------------------------

    def step(self) -> bool:
        """
        Advances the camera one frame toward the active focus.

        Returns:
            True if the camera was mutated, False when idle (camera left to the user).
        """
        if self._active_focus is None:
            return False

        desired = self.desired_camera_position()
        self.camera.position = lerp(self.camera.position, desired, self.lerp_factor)

        if self.navigation is not None:
            self.navigation.target = lerp(self.navigation.target, self._active_focus, self.lerp_factor)
            self.navigation.update()
        else:
            # No smoothing primitive available: look straight at the focus
            self.camera.look_at(self._active_focus)
        return True

    def snap_to(self, position: npt.ArrayLike, look_at: npt.ArrayLike = ORIGIN) -> None:
        """Moves the camera instantly (no interpolation) and hands rotation back to the user."""
        self.camera.position = np.asarray(position, dtype=np.float64).reshape(3).copy()
        target = np.asarray(look_at, dtype=np.float64).reshape(3).copy()

        if self.navigation is not None:
            self.navigation.target = target
            self.navigation.enable_rotate = True
            self.navigation.enabled = True
            self.navigation.update()
        else:
            self.camera.look_at(target)
        logger.debug(f"Camera snapped to {self.camera.position.tolist()} looking at {target.tolist()}.")
