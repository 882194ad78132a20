"""
3D Scene Widget (PyVista Wrapper)
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

import logging
import numpy as np
import numpy.typing as npt

from PySide6.QtWidgets import QWidget, QVBoxLayout
from PySide6.QtCore import QTimer, Signal
from PySide6.QtGui import QCloseEvent

from pyvistaqt import QtInteractor
import pyvista as pv
from vtkmodules.vtkRenderingCore import vtkPropPicker

from orbitview.config import (
    BACKGROUND_COLOR, CAMERA_VIEW_ANGLE, CLICK_TOLERANCE_PX, FRAME_INTERVAL_MS,
    INITIAL_CAMERA_POSITION, ORBIT_LINE_WIDTH,
)
from orbitview.controller.bridge import EventBridge
from orbitview.core.camera import CameraTargetController
from orbitview.core.projector import ProjectedBody, SunGlyph, project_scene, project_sun
from orbitview.model.scene import Scene

logger = logging.getLogger(__name__)


# --- PLOTTER ADAPTERS ---

class PlotterCamera:
    """Exposes the plotter camera as a CameraLike (position + look_at)."""

    def __init__(self, plotter: pv.Plotter) -> None:
        self._plotter = plotter

    @property
    def position(self) -> npt.NDArray[np.float64]:
        return np.asarray(self._plotter.camera.position, dtype=np.float64)

    @position.setter
    def position(self, value: npt.ArrayLike) -> None:
        self._plotter.camera.position = tuple(float(v) for v in np.asarray(value).reshape(3))

    def look_at(self, point: npt.ArrayLike) -> None:
        self._plotter.camera.focal_point = tuple(float(v) for v in np.asarray(point).reshape(3))


class PlotterNavigation:
    """
    Exposes the interactor as a NavigationSurface.

    target        -> camera focal point (what trackball rotation orbits around)
    enable_rotate -> trackball style (rotate/pan/zoom) vs image style (pan/zoom only)
    enabled       -> whether the interactor reacts to the mouse at all
    """

    def __init__(self, plotter: QtInteractor) -> None:
        self._plotter = plotter
        self._enable_rotate: bool = True
        self._enabled: bool = True
        self._plotter.enable_trackball_style()

    @property
    def target(self) -> npt.NDArray[np.float64]:
        return np.asarray(self._plotter.camera.focal_point, dtype=np.float64)

    @target.setter
    def target(self, value: npt.ArrayLike) -> None:
        self._plotter.camera.focal_point = tuple(float(v) for v in np.asarray(value).reshape(3))

    @property
    def enable_rotate(self) -> bool:
        return self._enable_rotate

    @enable_rotate.setter
    def enable_rotate(self, value: bool) -> None:
        if value == self._enable_rotate:
            return
        self._enable_rotate = value
        if value:
            self._plotter.enable_trackball_style()
        else:
            self._plotter.enable_image_style()

    @property
    def enabled(self) -> bool:
        return self._enabled

    @enabled.setter
    def enabled(self, value: bool) -> None:
        self._enabled = value
        if value:
            self._plotter.iren.interactor.Enable()
        else:
            self._plotter.iren.interactor.Disable()

    def update(self) -> None:
        self._plotter.renderer.ResetCameraClippingRange()
        self._plotter.render()


# --- WIDGET CLASS ---

class SceneView(QWidget):
    # Pointer interaction on a projected body. The host decides what to do with it.
    body_clicked = Signal(str)
    body_hovered = Signal(object)  # entity id, or None when the pointer leaves

    def __init__(self, parent: Optional[QWidget] = None, interactive: bool = True) -> None:
        super().__init__(parent)

        self.layout_box: QVBoxLayout = QVBoxLayout(self)
        self.layout_box.setContentsMargins(0, 0, 0, 0)

        self.plotter: QtInteractor = QtInteractor(self)
        self.layout_box.addWidget(self.plotter)

        self._init_plotter()

        # --- Camera core ---
        self.camera = PlotterCamera(self.plotter)
        self.navigation: Optional[PlotterNavigation] = PlotterNavigation(self.plotter) if interactive else None
        if self.navigation is None:
            self.plotter.iren.interactor.Disable()
        self.controller = CameraTargetController(self.camera, self.navigation)
        self.bridge = EventBridge(self.controller, parent=self)

        # --- Actors state ---
        self._sun_actors: list[pv.Actor] = []
        self._sun_light: Optional[pv.Light] = None
        self._body_actors: Dict[str, pv.Actor] = {}
        self._orbit_actors: Dict[str, pv.Actor] = {}
        self._actor_to_id: Dict[str, str] = {}
        self._selected_id: Optional[str] = None

        # --- Pointer state ---
        self._picker = vtkPropPicker()
        self._press_pos: Optional[Tuple[int, int]] = None
        self._hovered_id: Optional[str] = None
        self._attach_observers()

        self._draw_starfield()

        # Per-frame camera step, tied to the render loop
        self._frame_timer = QTimer(self)
        self._frame_timer.setInterval(FRAME_INTERVAL_MS)
        self._frame_timer.timeout.connect(self._on_frame)
        self._frame_timer.start()

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def set_scene(self, scene: Scene, selected_id: Optional[str] = None) -> None:
        """Rebuilds all layers for a new scene snapshot."""
        logger.info(f"Updating 3D scene ({len(scene)} entities).")
        self.bridge.set_scene(scene)
        self._selected_id = selected_id if scene.find(selected_id) else None

        scale = self.bridge.scale
        self._update_sun_layer(project_sun(scale))
        self._update_body_layer(project_scene(scene, scale, self._selected_id))
        self.plotter.render()

    def set_selection(self, selected_id: Optional[str]) -> None:
        """Restyles the highlighted body in place and forwards the change to the bridge."""
        self._selected_id = selected_id if self.bridge.scene.find(selected_id) else None
        projected = project_scene(self.bridge.scene, self.bridge.scale, self._selected_id)
        for body in projected:
            self._style_body(body)
        self.bridge.on_highlight_changed(selected_id)
        self.plotter.render()

    def stop(self) -> None:
        """Cancels every pending timer. Called before the widget is destroyed."""
        self._frame_timer.stop()
        self.bridge.teardown()

    # ------------------------------------------------------------------------------
    # Internal: Layer Management
    # ------------------------------------------------------------------------------

    def _update_sun_layer(self, sun: SunGlyph) -> None:
        for actor in self._sun_actors:
            self.plotter.remove_actor(actor)
        self._sun_actors.clear()

        core = self.plotter.add_mesh(
            pv.Sphere(radius=sun.radius, center=(0.0, 0.0, 0.0), theta_resolution=48, phi_resolution=48),
            color=sun.color,
            ambient=1.0,
            smooth_shading=True,
            pickable=False,
        )
        core.prop.SetAmbientColor(pv.Color(sun.emissive).float_rgb)
        glow = self.plotter.add_mesh(
            pv.Sphere(radius=sun.glow_radius, center=(0.0, 0.0, 0.0), theta_resolution=32, phi_resolution=32),
            color=sun.glow_color,
            opacity=sun.glow_opacity,
            lighting=False,
            pickable=False,
        )
        self._sun_actors.extend([core, glow])

        if self._sun_light is None:
            self._sun_light = pv.Light(position=(0.0, 0.0, 0.0), light_type="scene light")
            self._sun_light.positional = True
            self.plotter.add_light(self._sun_light)
        self._sun_light.intensity = sun.light_intensity
        # Quadratic falloff reaching ~1/2 at the configured range
        self._sun_light.attenuation_values = (1.0, 0.0, 1.0 / sun.light_range ** 2)

    def _update_body_layer(self, bodies: List[ProjectedBody]) -> None:
        # 1. Clear old actors
        for actor in [*self._body_actors.values(), *self._orbit_actors.values()]:
            self.plotter.remove_actor(actor)
        self._body_actors.clear()
        self._orbit_actors.clear()
        self._actor_to_id.clear()

        # 2. Create body + orbit actors
        for body in bodies:
            sphere = pv.Sphere(radius=body.radius, center=tuple(body.position), theta_resolution=16, phi_resolution=16)
            actor = self.plotter.add_mesh(sphere, color=body.color, smooth_shading=True, pickable=True)
            self._body_actors[body.entity_id] = actor
            self._actor_to_id[self._actor_key(actor)] = body.entity_id

            # A poly line needs at least two points
            if body.orbit.shape[0] >= 2:
                line = pv.lines_from_points(body.orbit, close=False)
                orbit_actor = self.plotter.add_mesh(
                    line,
                    color=body.orbit_color,
                    opacity=body.orbit_opacity,
                    line_width=ORBIT_LINE_WIDTH,
                    lighting=False,
                    pickable=False,
                )
                self._orbit_actors[body.entity_id] = orbit_actor

            self._style_body(body)

    def _style_body(self, body: ProjectedBody) -> None:
        actor = self._body_actors.get(body.entity_id)
        if actor is not None:
            actor.prop.color = body.color
            # Emissive glow approximated by the ambient term (set after color, which resets it)
            actor.prop.SetAmbientColor(pv.Color(body.emissive).float_rgb)
            actor.prop.ambient = body.emissive_intensity
        orbit_actor = self._orbit_actors.get(body.entity_id)
        if orbit_actor is not None:
            orbit_actor.prop.color = body.orbit_color
            orbit_actor.prop.opacity = body.orbit_opacity

    def _draw_starfield(self, count: int = 5000, radius: float = 100.0, depth: float = 50.0) -> None:
        rng = np.random.default_rng(seed=7)
        directions = rng.normal(size=(count, 3))
        directions /= np.linalg.norm(directions, axis=1)[:, None]
        distances = radius + rng.random(count) * depth
        stars = pv.PolyData(directions * distances[:, None])
        self.plotter.add_mesh(stars, color="white", point_size=1.5, lighting=False, pickable=False)

    @staticmethod
    def _actor_key(actor) -> str:
        return actor.GetAddressAsString("vtkObject")

    # ------------------------------------------------------------------------------
    # Internal: Setup & Observers
    # ------------------------------------------------------------------------------

    def _init_plotter(self) -> None:
        self.plotter.set_background(BACKGROUND_COLOR)
        cam = self.plotter.camera
        cam.position = INITIAL_CAMERA_POSITION
        cam.focal_point = (0.0, 0.0, 0.0)
        cam.up = (0.0, 1.0, 0.0)
        cam.view_angle = CAMERA_VIEW_ANGLE

    def _attach_observers(self) -> None:
        iren = self.plotter.iren
        iren.add_observer("LeftButtonPressEvent", self._on_left_press)
        iren.add_observer("LeftButtonReleaseEvent", self._on_left_release)
        iren.add_observer("MouseMoveEvent", self._on_mouse_move)

    def _pick_entity(self, x: int, y: int) -> Optional[str]:
        self._picker.Pick(x, y, 0, self.plotter.renderer)
        actor = self._picker.GetActor()
        if actor is None:
            return None
        return self._actor_to_id.get(self._actor_key(actor))

    def _on_left_press(self, obj, _event) -> None:
        self._press_pos = tuple(obj.GetEventPosition())

    def _on_left_release(self, obj, _event) -> None:
        if self._press_pos is None:
            return
        x, y = obj.GetEventPosition()
        px, py = self._press_pos
        self._press_pos = None
        # A drag is a rotation, not a click
        if abs(x - px) > CLICK_TOLERANCE_PX or abs(y - py) > CLICK_TOLERANCE_PX:
            return
        entity_id = self._pick_entity(x, y)
        if entity_id is not None:
            self.body_clicked.emit(entity_id)

    def _on_mouse_move(self, obj, _event) -> None:
        if self._press_pos is not None:
            return
        x, y = obj.GetEventPosition()
        entity_id = self._pick_entity(x, y)
        if entity_id != self._hovered_id:
            self._hovered_id = entity_id
            self.body_hovered.emit(entity_id)

    def _on_frame(self) -> None:
        moved = self.controller.step()
        # With a navigation surface the step already refreshed the view
        if moved and self.navigation is None:
            self.plotter.render()

    def closeEvent(self, event: QCloseEvent) -> None:
        self.stop()
        self.plotter.close()
        event.accept()
