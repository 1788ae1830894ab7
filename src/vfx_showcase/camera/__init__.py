"""Orbit camera: config parsing, rubber-band axes and the per-frame controller."""

from vfx_showcase.camera.orbit_axis import AXIS_IN_BOUNDS, AXIS_OVERSHOT, OrbitAxis
from vfx_showcase.camera.orbit_config import CAMERA_DEFAULTS, OrbitCameraConfig
from vfx_showcase.camera.orbit_controller import CameraPose, OrbitCameraController, orbit_offset

__all__ = [
    "AXIS_IN_BOUNDS",
    "AXIS_OVERSHOT",
    "CAMERA_DEFAULTS",
    "CameraPose",
    "OrbitAxis",
    "OrbitCameraConfig",
    "OrbitCameraController",
    "orbit_offset",
]
