from __future__ import annotations

import pytest

from vfx_showcase.vfx.catalog import EFFECT_KINDS, PRESETS, UnknownEffectError, create_effect
from vfx_showcase.vfx.colors import RGB, WHITE, parse_color
from vfx_showcase.vfx.effect import ParticleEffect
from vfx_showcase.vfx.ring_trail import RingTrailEffect
from vfx_showcase.vfx.spawn import ExplosionSpawn, FireworkSpawn, FountainSpawn, SmokeSpawn, StarburstSpawn


def test_catalog_covers_six_kinds() -> None:
    assert set(EFFECT_KINDS) == {"explosion", "firework", "fountain", "smoke", "starburst", "ringtrail"}
    assert set(PRESETS) == set(EFFECT_KINDS)


def test_unknown_kind_raises_value_error() -> None:
    with pytest.raises(UnknownEffectError) as info:
        create_effect("tornado")
    assert isinstance(info.value, ValueError)
    assert info.value.kind == "tornado"
    assert 'Unknown VFX type "tornado"' in str(info.value)


def test_each_kind_gets_its_strategy() -> None:
    expected = {
        "explosion": ExplosionSpawn,
        "firework": FireworkSpawn,
        "fountain": FountainSpawn,
        "smoke": SmokeSpawn,
        "starburst": StarburstSpawn,
    }
    for kind, strategy_type in expected.items():
        fx = create_effect(kind)
        assert isinstance(fx, ParticleEffect)
        assert isinstance(fx.strategy, strategy_type)
        assert fx.kind == kind
        assert fx.name == kind

    ring = create_effect("ringtrail", name="Ring Trail")
    assert isinstance(ring, RingTrailEffect)
    assert ring.name == "Ring Trail"


def test_presets_fill_missing_properties() -> None:
    fx = create_effect("smoke")
    assert fx.particle_count == 60
    assert fx.lifetime == 2.0
    assert fx.color == parse_color("#888888")
    assert fx.strategy.randomized is False


def test_malformed_properties_fall_back_to_presets() -> None:
    fx = create_effect("explosion", {"particleCount": "many", "lifetime": None, "radius": True, "size": -3})
    assert fx.particle_count == 80
    assert fx.lifetime == 1.0
    assert fx.strategy.radius == 0.3
    assert fx.size == 1e-4


def test_fountain_without_height_uses_preset_speed() -> None:
    fx = create_effect("fountain", {"lifetime": 2.0})
    assert fx.strategy.up_speed == 2.5


def test_ringtrail_properties() -> None:
    fx = create_effect("ringtrail", {"trailLength": 12, "angularSpeed": 3.0, "particleCount": 6})
    assert fx.trail_length == 12
    assert fx.angular_speed == 3.0
    assert len(fx.particles) == 6


def test_parse_color_forms() -> None:
    orange = RGB(1.0, 0x66 / 255.0, 0.0)
    assert parse_color("#ff6600") == orange
    assert parse_color("0xFF6600") == orange
    assert parse_color(0xFF6600) == orange
    assert parse_color("#f60") == orange
    assert parse_color([1.0, 0.4, 0.0, 0.5]) == RGB(1.0, 0.4, 0.0)
    assert parse_color([2.0, -1.0, 0.5]) == RGB(1.0, 0.0, 0.5)


def test_parse_color_rejects_garbage() -> None:
    assert parse_color("#zzzzzz") == WHITE
    assert parse_color("#12345") == WHITE
    assert parse_color(True) == WHITE
    assert parse_color(None, default=RGB(0, 0, 0)) == RGB(0, 0, 0)
    assert parse_color(["a", "b", "c"]) == WHITE
