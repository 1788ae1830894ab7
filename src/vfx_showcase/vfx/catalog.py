"""
Effect catalog: scene-config identifiers -> configured effect instances.

Property keys follow the scene JSON (camelCase). Every key is optional; a
missing or malformed value uses the per-variant default preset below.
"""

from __future__ import annotations

import math
import random
from typing import Any, Callable, Mapping

from vfx_showcase.vfx.effect import ParticleEffect, as_vector
from vfx_showcase.vfx.ring_trail import RingTrailEffect
from vfx_showcase.vfx.spawn import ExplosionSpawn, FireworkSpawn, FountainSpawn, SmokeSpawn, StarburstSpawn


class UnknownEffectError(ValueError):
    def __init__(self, kind: str) -> None:
        super().__init__(f'Unknown VFX type "{kind}"')
        self.kind = kind


PRESETS: dict[str, dict[str, Any]] = {
    "explosion": {"color": "#ff6600", "size": 0.15, "lifetime": 1.0, "particleCount": 80, "radius": 0.3, "speed": 0.5},
    "firework": {"color": "#ffffff", "size": 0.12, "lifetime": 1.2, "particleCount": 120, "velocity": (0.0, 2.5, 0.0)},
    "fountain": {"color": "#66ccff", "size": 0.09, "lifetime": 1.5, "particleCount": 100, "spawnRadius": 0.2, "speed": 2.5},
    "smoke": {
        "color": "#888888",
        "size": 0.18,
        "lifetime": 2.0,
        "particleCount": 60,
        "spawnRadius": 0.25,
        "spawnInSphere": False,
        "velocity": (0.0, 0.5, 0.0),
        "minSpeed": 0.0,
        "maxSpeed": 0.0,
    },
    "starburst": {"color": "#ffff66", "size": 0.13, "lifetime": 1.0, "particleCount": 40, "velocity": (0.0, 0.5, 0.0)},
    "ringtrail": {"color": "#ffffff", "size": 0.15, "particleCount": 10, "trailLength": 30, "angularSpeed": 1.2},
}


class _Props:
    def __init__(self, kind: str, raw: Mapping[str, Any] | None) -> None:
        self._preset = PRESETS[kind]
        self._raw: Mapping[str, Any] = raw if isinstance(raw, Mapping) else {}

    def raw(self, key: str) -> Any:
        if key in self._raw:
            return self._raw[key]
        return self._preset.get(key)

    def number(self, key: str, *, minimum: float | None = None) -> float:
        value = self._raw.get(key)
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(float(value)):
            value = self._preset[key]
        out = float(value)
        if minimum is not None:
            out = max(minimum, out)
        return out

    def flag(self, key: str) -> bool:
        value = self._raw.get(key)
        return bool(value) if isinstance(value, bool) else bool(self._preset[key])

    def vec3(self, key: str) -> tuple[float, float, float]:
        preset = self._preset[key]
        v = as_vector(self._raw.get(key), default=preset) if key in self._raw else as_vector(preset)
        return float(v.x), float(v.y), float(v.z)

    def common(self) -> dict[str, Any]:
        return {
            "position": as_vector(self._raw.get("position")),
            "color": self.raw("color"),
            "size": self.number("size", minimum=1e-4),
            "particle_count": int(self.number("particleCount", minimum=0.0)),
        }


def _explosion(p: _Props, name: str | None, rng: random.Random | None) -> ParticleEffect:
    return ParticleEffect(
        kind="explosion",
        strategy=ExplosionSpawn(radius=p.number("radius", minimum=0.0), speed=p.number("speed")),
        lifetime=p.number("lifetime", minimum=1e-3),
        name=name,
        rng=rng,
        **p.common(),
    )


def _firework(p: _Props, name: str | None, rng: random.Random | None) -> ParticleEffect:
    return ParticleEffect(
        kind="firework",
        strategy=FireworkSpawn(velocity=p.vec3("velocity")),
        lifetime=p.number("lifetime", minimum=1e-3),
        name=name,
        rng=rng,
        **p.common(),
    )


def _fountain(p: _Props, name: str | None, rng: random.Random | None) -> ParticleEffect:
    lifetime = p.number("lifetime", minimum=1e-3)
    height = p.raw("height")
    if isinstance(height, (int, float)) and not isinstance(height, bool) and math.isfinite(float(height)):
        # No gravity: a particle covers `height` in exactly one lifetime.
        up_speed = float(height) / lifetime
    else:
        up_speed = p.number("speed")
    return ParticleEffect(
        kind="fountain",
        strategy=FountainSpawn(spawn_radius=p.number("spawnRadius", minimum=0.0), up_speed=up_speed),
        lifetime=lifetime,
        name=name,
        rng=rng,
        **p.common(),
    )


def _smoke(p: _Props, name: str | None, rng: random.Random | None) -> ParticleEffect:
    return ParticleEffect(
        kind="smoke",
        strategy=SmokeSpawn(
            spawn_radius=p.number("spawnRadius", minimum=0.0),
            in_sphere=p.flag("spawnInSphere"),
            velocity=p.vec3("velocity"),
            min_speed=p.number("minSpeed", minimum=0.0),
            max_speed=p.number("maxSpeed", minimum=0.0),
        ),
        lifetime=p.number("lifetime", minimum=1e-3),
        name=name,
        rng=rng,
        **p.common(),
    )


def _starburst(p: _Props, name: str | None, rng: random.Random | None) -> ParticleEffect:
    return ParticleEffect(
        kind="starburst",
        strategy=StarburstSpawn(velocity=p.vec3("velocity")),
        lifetime=p.number("lifetime", minimum=1e-3),
        name=name,
        rng=rng,
        **p.common(),
    )


def _ringtrail(p: _Props, name: str | None, rng: random.Random | None) -> ParticleEffect:
    return RingTrailEffect(
        trail_length=int(p.number("trailLength", minimum=1.0)),
        angular_speed=p.number("angularSpeed"),
        name=name,
        rng=rng,
        **p.common(),
    )


_FACTORIES: dict[str, Callable[[_Props, str | None, random.Random | None], ParticleEffect]] = {
    "explosion": _explosion,
    "firework": _firework,
    "fountain": _fountain,
    "smoke": _smoke,
    "starburst": _starburst,
    "ringtrail": _ringtrail,
}

EFFECT_KINDS: tuple[str, ...] = tuple(_FACTORIES.keys())


def create_effect(
    kind: str,
    properties: Mapping[str, Any] | None = None,
    *,
    name: str | None = None,
    rng: random.Random | None = None,
) -> ParticleEffect:
    factory = _FACTORIES.get(str(kind))
    if factory is None:
        raise UnknownEffectError(str(kind))
    return factory(_Props(str(kind), properties), name, rng)
