from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping


# Camera record keys (scene JSON, camelCase) -> default value. Angles are degrees.
CAMERA_DEFAULTS: dict[str, float] = {
    "initialYaw": 0.0,
    "initialPitch": 0.0,
    "initialDistance": 5.0,
    "minYaw": -360.0,
    "maxYaw": 360.0,
    "minPitch": -30.0,
    "maxPitch": 30.0,
    "minDistance": 2.0,
    "maxDistance": 20.0,
    "sensitivity": 0.01,
    "overshootYaw": 0.0,
    "overshootPitch": 0.0,
}

DEFAULT_SMOOTHING = 0.12
DEFAULT_COLLISION_RADIUS = 0.25


def _number(record: Mapping[str, Any], key: str) -> float:
    raw = record.get(key)
    # bool is an int subclass; "true" is not a usable angle.
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        return CAMERA_DEFAULTS[key]
    value = float(raw)
    if not math.isfinite(value):
        return CAMERA_DEFAULTS[key]
    return value


def _ordered_pair(record: Mapping[str, Any], lo_key: str, hi_key: str) -> tuple[float, float]:
    lo = _number(record, lo_key)
    hi = _number(record, hi_key)
    if lo > hi:
        return CAMERA_DEFAULTS[lo_key], CAMERA_DEFAULTS[hi_key]
    return lo, hi


@dataclass(frozen=True)
class OrbitCameraConfig:
    """Orbit limits in internal units (radians for angles)."""

    initial_yaw: float
    initial_pitch: float
    initial_distance: float
    min_yaw: float
    max_yaw: float
    min_pitch: float
    max_pitch: float
    min_distance: float
    max_distance: float
    sensitivity: float
    overshoot_yaw: float
    overshoot_pitch: float
    smoothing: float = DEFAULT_SMOOTHING

    @classmethod
    def from_record(cls, record: Mapping[str, Any] | None, *, smoothing: float = DEFAULT_SMOOTHING) -> "OrbitCameraConfig":
        """
        Build from a scene-config camera record.

        Missing, non-numeric or non-finite fields fall back to `CAMERA_DEFAULTS`;
        an inverted min/max pair falls back to both defaults. Nothing raises.
        """

        rec: Mapping[str, Any] = record if isinstance(record, Mapping) else {}
        min_yaw, max_yaw = _ordered_pair(rec, "minYaw", "maxYaw")
        min_pitch, max_pitch = _ordered_pair(rec, "minPitch", "maxPitch")
        min_dist, max_dist = _ordered_pair(rec, "minDistance", "maxDistance")
        sensitivity = _number(rec, "sensitivity")
        if sensitivity <= 0.0:
            sensitivity = CAMERA_DEFAULTS["sensitivity"]
        alpha = float(smoothing)
        if not (0.0 < alpha <= 1.0):
            alpha = DEFAULT_SMOOTHING
        return cls(
            initial_yaw=math.radians(_number(rec, "initialYaw")),
            initial_pitch=math.radians(_number(rec, "initialPitch")),
            initial_distance=max(0.0, _number(rec, "initialDistance")),
            min_yaw=math.radians(min_yaw),
            max_yaw=math.radians(max_yaw),
            min_pitch=math.radians(min_pitch),
            max_pitch=math.radians(max_pitch),
            min_distance=max(0.0, min_dist),
            max_distance=max(0.0, max_dist),
            sensitivity=sensitivity,
            overshoot_yaw=math.radians(max(0.0, _number(rec, "overshootYaw"))),
            overshoot_pitch=math.radians(max(0.0, _number(rec, "overshootPitch"))),
            smoothing=alpha,
        )
