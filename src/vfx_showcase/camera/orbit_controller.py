from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Sequence

from panda3d.core import LPoint3f, LVector3f, NodePath

from vfx_showcase.camera.orbit_axis import OVERSHOOT_DECAY, OrbitAxis
from vfx_showcase.camera.orbit_config import DEFAULT_COLLISION_RADIUS, OrbitCameraConfig
from vfx_showcase.physics.raycast import Collidable, nearest_hit

FocusProvider = Callable[[], LVector3f]

WHEEL_ZOOM_SCALE = 0.01
_DRAG_POINTER_TYPES = ("touch", "pen")
_WORLD_UP = LVector3f(0, 1, 0)


@dataclass(frozen=True)
class CameraPose:
    pos: LVector3f
    target: LVector3f
    focus: LVector3f
    collided: bool = False


def orbit_offset(*, yaw: float, pitch: float, distance: float) -> LVector3f:
    """Spherical offset from the focus point (Y-up, yaw 0 looks down -Z from +Z)."""

    cp = math.cos(pitch)
    return LVector3f(
        distance * cp * math.sin(yaw),
        distance * math.sin(pitch),
        distance * cp * math.cos(yaw),
    )


class OrbitCameraController:
    """
    Orbit camera around a moving focus point.

    Input handlers mutate the orbit state as events arrive; `update()` is
    called once per frame and only reads it (plus the overshoot easing).
    The controller writes the camera transform and nothing else.
    """

    def __init__(
        self,
        camera: NodePath,
        focus_provider: FocusProvider,
        config: Mapping[str, Any] | OrbitCameraConfig | None = None,
        collidables: Sequence[Collidable] | None = None,
        collision_radius: float = DEFAULT_COLLISION_RADIUS,
    ) -> None:
        cfg = config if isinstance(config, OrbitCameraConfig) else OrbitCameraConfig.from_record(config)
        self.camera = camera
        self.config = cfg
        self._focus_provider = focus_provider
        self.collidables: Sequence[Collidable] = collidables if collidables is not None else []
        self.collision_radius = max(0.0, float(collision_radius))

        self._yaw = OrbitAxis(cfg.initial_yaw, cfg.min_yaw, cfg.max_yaw, cfg.overshoot_yaw)
        self._pitch = OrbitAxis(cfg.initial_pitch, cfg.min_pitch, cfg.max_pitch, cfg.overshoot_pitch)
        self._distance = float(cfg.initial_distance)
        self._dragging = False
        self._last_pointer = (0.0, 0.0)

    @property
    def yaw(self) -> float:
        return float(self._yaw.value)

    @property
    def pitch(self) -> float:
        return float(self._pitch.value)

    @property
    def distance(self) -> float:
        return float(self._distance)

    @property
    def yaw_axis(self) -> OrbitAxis:
        return self._yaw

    @property
    def pitch_axis(self) -> OrbitAxis:
        return self._pitch

    @property
    def is_dragging(self) -> bool:
        return bool(self._dragging)

    # -- input -------------------------------------------------------------

    def on_wheel(self, delta_y: float) -> None:
        # Distance has no overshoot band; clamp hard.
        d = self._distance + float(delta_y) * WHEEL_ZOOM_SCALE
        self._distance = max(self.config.min_distance, min(self.config.max_distance, d))

    def on_pointer_down(self, x: float, y: float, *, button: int = 0, pointer_type: str = "mouse") -> bool:
        if int(button) != 0 and str(pointer_type) not in _DRAG_POINTER_TYPES:
            return False
        self._dragging = True
        self._last_pointer = (float(x), float(y))
        return True

    def on_pointer_up(self) -> None:
        self._dragging = False

    def on_pointer_move(self, x: float, y: float) -> None:
        if not self._dragging:
            return
        lx, ly = self._last_pointer
        dx = float(x) - lx
        dy = float(y) - ly
        self._last_pointer = (float(x), float(y))
        sens = self.config.sensitivity
        self._yaw.apply_delta(-dx * sens)
        # Dragging down raises the camera.
        self._pitch.apply_delta(dy * sens)

    # -- focus -------------------------------------------------------------

    def focus(self) -> LVector3f:
        return LVector3f(self._focus_provider())

    def update_focus_position(self, point: LVector3f) -> None:
        fixed = LVector3f(point)
        self._focus_provider = lambda: fixed

    def set_focus_provider(self, provider: FocusProvider) -> None:
        self._focus_provider = provider

    # -- per frame ---------------------------------------------------------

    def desired_position(self, focus: LVector3f | None = None) -> tuple[LVector3f, bool]:
        """Candidate camera position for the current orbit state, after collision pull-in."""

        f = LVector3f(focus) if focus is not None else self.focus()
        candidate = f + orbit_offset(yaw=self.yaw, pitch=self.pitch, distance=self._distance)
        if not self.collidables:
            return candidate, False

        ray = candidate - f
        if ray.lengthSquared() <= 1e-12:
            return candidate, False
        direction = LVector3f(ray)
        direction.normalize()
        hit = nearest_hit(self.collidables, origin=f, direction=direction, max_distance=self._distance)
        if hit is None or float(hit.distance) >= self._distance - self.collision_radius:
            return candidate, False
        pulled = max(0.0, float(hit.distance) - self.collision_radius)
        return f + direction * pulled, True

    def reset(self) -> CameraPose:
        focus = self.focus()
        target, collided = self.desired_position(focus)
        self.camera.setPos(LPoint3f(target))
        self.camera.lookAt(LPoint3f(focus), _WORLD_UP)
        return CameraPose(pos=LVector3f(target), target=target, focus=focus, collided=collided)

    def update(self) -> CameraPose:
        self._yaw.relax(OVERSHOOT_DECAY)
        self._pitch.relax(OVERSHOOT_DECAY)

        focus = self.focus()
        target, collided = self.desired_position(focus)

        alpha = self.config.smoothing
        cur = LVector3f(self.camera.getPos())
        pos = cur + (target - cur) * alpha
        self.camera.setPos(LPoint3f(pos))
        self.camera.lookAt(LPoint3f(focus), _WORLD_UP)
        return CameraPose(pos=pos, target=target, focus=focus, collided=collided)
