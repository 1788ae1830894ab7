from __future__ import annotations

import math

from vfx_showcase.camera.orbit_axis import AXIS_IN_BOUNDS, AXIS_OVERSHOT, OVERSHOOT_DECAY, OrbitAxis


def _yaw_axis() -> OrbitAxis:
    return OrbitAxis(0.0, math.radians(-180), math.radians(180), math.radians(30))


def test_drag_past_soft_band_clamps_to_bound_plus_margin() -> None:
    axis = _yaw_axis()
    axis.apply_delta(math.radians(240))

    assert math.isclose(axis.value, math.radians(210), abs_tol=1e-12)
    assert axis.phase == AXIS_OVERSHOT
    # Deviation is measured before the soft clamp.
    assert math.isclose(axis.deviation, math.radians(60), abs_tol=1e-12)


def test_drag_inside_overshoot_band_is_kept_raw() -> None:
    axis = _yaw_axis()
    axis.apply_delta(math.radians(200))

    assert math.isclose(axis.value, math.radians(200), abs_tol=1e-12)
    assert axis.phase == AXIS_OVERSHOT


def test_overshoot_relaxes_back_to_bound_in_bounded_frames() -> None:
    axis = _yaw_axis()
    axis.apply_delta(math.radians(240))

    frames = 0
    while axis.phase == AXIS_OVERSHOT and frames < 100:
        axis.relax(OVERSHOOT_DECAY)
        frames += 1

    # 0.85^n * (30 deg) < 0.001 rad after ~39 frames.
    assert frames <= 60
    assert axis.value == math.radians(180)
    assert axis.deviation == 0.0


def test_relax_is_monotonic_toward_bound() -> None:
    axis = _yaw_axis()
    axis.apply_delta(math.radians(-230))
    prev = axis.value
    for _ in range(10):
        axis.relax()
        assert axis.value >= prev
        assert axis.value <= math.radians(-180)
        prev = axis.value


def test_drag_back_inside_clears_overshoot() -> None:
    axis = _yaw_axis()
    axis.apply_delta(math.radians(200))
    axis.apply_delta(math.radians(-40))

    assert axis.phase == AXIS_IN_BOUNDS
    assert axis.deviation == 0.0
    axis.relax()
    assert math.isclose(axis.value, math.radians(160), abs_tol=1e-12)


def test_zero_margin_is_a_hard_clamp() -> None:
    axis = OrbitAxis(0.0, -0.5, 0.5)
    axis.apply_delta(2.0)
    assert axis.value == 0.5

    axis.relax()
    assert axis.value == 0.5
    assert axis.phase == AXIS_IN_BOUNDS


def test_initial_value_outside_bounds_starts_overshot_and_settles() -> None:
    axis = OrbitAxis(1.0, -0.5, 0.5, 0.2)
    assert math.isclose(axis.value, 0.7)
    assert axis.phase == AXIS_OVERSHOT

    for _ in range(100):
        axis.relax()
    assert axis.value == 0.5
    assert axis.phase == AXIS_IN_BOUNDS


def test_soft_band_holds_for_arbitrary_drag_sequences() -> None:
    axis = OrbitAxis(0.0, -1.0, 1.0, 0.3)
    for delta in (0.4, 0.9, -3.0, 0.05, 5.0, -0.2, -0.7, 2.2, -9.0):
        axis.apply_delta(delta)
        assert axis.soft_min <= axis.value <= axis.soft_max
        axis.relax()
        assert axis.soft_min <= axis.value <= axis.soft_max
