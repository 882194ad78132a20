"""Shared fixtures: Qt-free stand-ins for the camera, the navigation surface and the homing timer."""
from __future__ import annotations

from typing import List, Optional

import numpy as np
import pytest
from PySide6.QtCore import QCoreApplication, QObject, Signal

from orbitview.config import HOMING_DURATION_MS
from orbitview.controller.bridge import EventBridge
from orbitview.core.camera import CameraTargetController
from orbitview.model.scene import Entity, Scene, SceneMetadata


@pytest.fixture(scope="session", autouse=True)
def qt_core_app() -> QCoreApplication:
    # QTimer needs an application instance; no display required
    return QCoreApplication.instance() or QCoreApplication([])


class FakeCamera:
    def __init__(self, position=(0.0, 20.0, 20.0)) -> None:
        self.position = np.asarray(position, dtype=np.float64)
        self.looked_at: List[np.ndarray] = []

    def look_at(self, point) -> None:
        self.looked_at.append(np.asarray(point, dtype=np.float64).copy())


class FakeNavigation:
    def __init__(self) -> None:
        self.target = np.zeros(3)
        self.enable_rotate = False
        self.enabled = False
        self.update_calls = 0

    def update(self) -> None:
        self.update_calls += 1


class ManualTimer(QObject):
    """Single-shot timer driven by `advance(ms)` instead of an event loop."""
    timeout = Signal()

    def __init__(self, interval_ms: int = HOMING_DURATION_MS) -> None:
        super().__init__()
        self.interval = interval_ms
        self.starts = 0
        self._remaining: Optional[int] = None

    def start(self) -> None:
        self._remaining = self.interval
        self.starts += 1

    def stop(self) -> None:
        self._remaining = None

    def isActive(self) -> bool:
        return self._remaining is not None

    def advance(self, ms: int) -> None:
        if self._remaining is None:
            return
        self._remaining -= ms
        if self._remaining <= 0:
            self._remaining = None
            self.timeout.emit()


@pytest.fixture
def scene() -> Scene:
    return Scene(
        entities=(
            Entity(id="a", name="Alpha", position=(100.0, 0.0, 0.0), size=1.0,
                   orbit=((100.0, 0.0, 0.0), (0.0, 0.0, 100.0), (-100.0, 0.0, 0.0))),
            Entity(id="b", name="Beta", position=(0.0, 50.0, 0.0), size=0.5),
        ),
        metadata=SceneMetadata(count=2, coordinate_system="test"),
    )


@pytest.fixture
def camera() -> FakeCamera:
    return FakeCamera()


@pytest.fixture
def navigation() -> FakeNavigation:
    return FakeNavigation()


@pytest.fixture
def timer() -> ManualTimer:
    return ManualTimer()


@pytest.fixture
def controller(camera: FakeCamera, navigation: FakeNavigation) -> CameraTargetController:
    return CameraTargetController(camera, navigation)


@pytest.fixture
def bridge(controller: CameraTargetController, timer: ManualTimer, scene: Scene) -> EventBridge:
    b = EventBridge(controller, timer=timer)
    b.set_scene(scene)
    return b
