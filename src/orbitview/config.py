"""
Configuration & Path Management
===============================
This module serves as the central registry for file paths and tuning constants
of the viewer.

Why is this file needed?
------------------------
1. Abstraction: Scene scaling, camera offsets and colours live in one place
   instead of being scattered through the core and the view.
2. Deployment: It handles the logic required by PyInstaller (sys._MEIPASS) to
   find assets (sample scenes) when the app is frozen into an .exe.

Exports:
    ASSETS_PATH (str): Absolute path to the assets directory.
    DEFAULT_SCENE_PATH (str): Absolute path to the bundled sample scene.
"""
import sys
import os
from pathlib import Path
from typing import Tuple


def get_resource_path(relative_path: str) -> str:
    """
    Get absolute path to resource, works for dev and for PyInstaller.
    """
    if hasattr(sys, '_MEIPASS'):
        # PyInstaller temp folder
        base_path: str = getattr(sys, '_MEIPASS')
        return os.path.join(base_path, relative_path)

    # Development mode: resolve relative to this file
    # config.py is in src/orbitview/
    current_file_path: Path = Path(__file__)
    project_root: Path = current_file_path.parent.parent.parent
    return os.path.join(str(project_root), relative_path)


# Global Paths
ASSETS_PATH: str = get_resource_path("assets")
DEFAULT_SCENE_PATH: str = os.path.join(ASSETS_PATH, "sample_scene.json")

Vec3 = Tuple[float, float, float]

# --- Scale Normalizer ---
DESIRED_SCENE_RADIUS: float = 30.0  # render units
SCALE_MIN: float = 0.02
SCALE_MAX: float = 5.0

# --- Render Projector ---
BODY_MIN_SCALE: float = 0.5  # bodies never shrink below half their raw size
BODY_FLOOR_RADIUS: float = 0.05
SUN_RADIUS: float = 2.0
SUN_GLOW_RADIUS: float = 3.0
SUN_GLOW_OPACITY: float = 0.12
SUN_LIGHT_INTENSITY: float = 4.0
SUN_LIGHT_RANGE: float = 200.0

SUN_COLOR: str = "#FFDD33"
SUN_EMISSIVE: str = "#FFAA00"
SUN_GLOW_COLOR: str = "#FFEE88"

BODY_COLOR: str = "#909090"
BODY_COLOR_SELECTED: str = "#FFA042"
BODY_EMISSIVE: str = "#000000"
BODY_EMISSIVE_SELECTED: str = "#FFB070"
BODY_EMISSIVE_INTENSITY: float = 0.0
BODY_EMISSIVE_INTENSITY_SELECTED: float = 0.35

ORBIT_COLOR: str = "#FFFFFF"
ORBIT_COLOR_SELECTED: str = "#FFA042"
ORBIT_OPACITY: float = 0.18
ORBIT_OPACITY_SELECTED: float = 0.6
ORBIT_LINE_WIDTH: float = 0.8

BACKGROUND_COLOR: str = "black"

# --- Camera Target Controller ---
LERP_FACTOR: float = 0.08  # fraction of the remaining distance per frame
FOCUS_OFFSET: Vec3 = (0.0, 12.0, 24.0)  # multiplied by scale
HOME_OFFSET: Vec3 = (0.0, 20.0, 40.0)  # multiplied by max(1, scale)
INITIAL_CAMERA_POSITION: Vec3 = (0.0, 20.0, 20.0)
CAMERA_VIEW_ANGLE: float = 60.0
FRAME_INTERVAL_MS: int = 16

# --- Event Bridge ---
HOMING_DURATION_MS: int = 600

# --- Info Panel ---
PANEL_LIST_LIMIT: int = 20
CLICK_TOLERANCE_PX: int = 4
