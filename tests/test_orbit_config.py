from __future__ import annotations

import math

from vfx_showcase.camera.orbit_config import CAMERA_DEFAULTS, DEFAULT_SMOOTHING, OrbitCameraConfig


def test_empty_record_uses_defaults_in_radians() -> None:
    cfg = OrbitCameraConfig.from_record({})

    assert cfg.initial_yaw == 0.0
    assert cfg.initial_distance == CAMERA_DEFAULTS["initialDistance"]
    assert math.isclose(cfg.min_pitch, math.radians(-30))
    assert math.isclose(cfg.max_pitch, math.radians(30))
    assert math.isclose(cfg.max_yaw, math.radians(360))
    assert cfg.min_distance == 2.0
    assert cfg.max_distance == 20.0
    assert cfg.sensitivity == 0.01
    assert cfg.overshoot_yaw == 0.0
    assert cfg.smoothing == DEFAULT_SMOOTHING


def test_none_record_is_accepted() -> None:
    assert OrbitCameraConfig.from_record(None) == OrbitCameraConfig.from_record({})


def test_record_values_are_converted() -> None:
    cfg = OrbitCameraConfig.from_record(
        {"initialYaw": -100, "initialPitch": -30, "overshootYaw": 15, "minDistance": 1, "maxDistance": 8}
    )

    assert math.isclose(cfg.initial_yaw, math.radians(-100))
    assert math.isclose(cfg.initial_pitch, math.radians(-30))
    assert math.isclose(cfg.overshoot_yaw, math.radians(15))
    assert (cfg.min_distance, cfg.max_distance) == (1.0, 8.0)


def test_malformed_values_fall_back_per_field() -> None:
    cfg = OrbitCameraConfig.from_record(
        {
            "initialYaw": True,
            "sensitivity": "fast",
            "initialDistance": float("nan"),
            "overshootPitch": -5,
        }
    )

    assert cfg.initial_yaw == 0.0
    assert cfg.sensitivity == CAMERA_DEFAULTS["sensitivity"]
    assert cfg.initial_distance == CAMERA_DEFAULTS["initialDistance"]
    assert cfg.overshoot_pitch == 0.0


def test_inverted_range_falls_back_to_both_defaults() -> None:
    cfg = OrbitCameraConfig.from_record({"minPitch": 40, "maxPitch": 10, "minDistance": 9, "maxDistance": 3})

    assert math.isclose(cfg.min_pitch, math.radians(CAMERA_DEFAULTS["minPitch"]))
    assert math.isclose(cfg.max_pitch, math.radians(CAMERA_DEFAULTS["maxPitch"]))
    assert (cfg.min_distance, cfg.max_distance) == (2.0, 20.0)


def test_non_positive_sensitivity_and_bad_smoothing_use_defaults() -> None:
    cfg = OrbitCameraConfig.from_record({"sensitivity": 0}, smoothing=1.5)

    assert cfg.sensitivity == 0.01
    assert cfg.smoothing == DEFAULT_SMOOTHING
