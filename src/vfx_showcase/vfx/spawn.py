"""
Spawn strategies: where a particle appears and how fast it leaves.

Every effect variant shares the same lifecycle kernel; the only thing that
differs between them is the strategy record below, dispatched by
`spawn_particle`. Strategies are frozen, so one effect can hand the same
record to every spawn and respawn.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Union

from panda3d.core import LVector3f

RING_RADIUS = 1.2


@dataclass(frozen=True)
class ExplosionSpawn:
    radius: float = 0.3
    speed: float = 0.5


@dataclass(frozen=True)
class FireworkSpawn:
    velocity: tuple[float, float, float] = (0.0, 2.5, 0.0)


@dataclass(frozen=True)
class FountainSpawn:
    spawn_radius: float = 0.2
    up_speed: float = 2.5


@dataclass(frozen=True)
class SmokeSpawn:
    spawn_radius: float = 0.25
    in_sphere: bool = False
    velocity: tuple[float, float, float] = (0.0, 0.5, 0.0)
    min_speed: float = 0.0
    max_speed: float = 0.0

    @property
    def randomized(self) -> bool:
        return float(self.max_speed) > 0.0


@dataclass(frozen=True)
class StarburstSpawn:
    velocity: tuple[float, float, float] = (0.0, 0.5, 0.0)


@dataclass(frozen=True)
class RingTrailSpawn:
    ring_radius: float = RING_RADIUS


SpawnStrategy = Union[ExplosionSpawn, FireworkSpawn, FountainSpawn, SmokeSpawn, StarburstSpawn, RingTrailSpawn]


@dataclass(frozen=True)
class SpawnResult:
    pos: LVector3f
    vel: LVector3f


def random_unit_vector(rng: random.Random) -> LVector3f:
    theta = rng.uniform(0.0, math.tau)
    phi = math.acos(2.0 * rng.random() - 1.0)
    sp = math.sin(phi)
    return LVector3f(sp * math.cos(theta), sp * math.sin(theta), math.cos(phi))


def point_in_sphere(rng: random.Random, radius: float) -> LVector3f:
    # Cube-root radial draw keeps density uniform over the volume.
    r = max(0.0, float(radius)) * (rng.random() ** (1.0 / 3.0))
    return random_unit_vector(rng) * r


def point_in_disk(rng: random.Random, radius: float) -> LVector3f:
    """Disk in the XZ plane (Y up). Radius is drawn linearly, so points cluster at the center."""

    ang = rng.uniform(0.0, math.tau)
    r = rng.random() * max(0.0, float(radius))
    return LVector3f(math.cos(ang) * r, 0.0, math.sin(ang) * r)


def ring_slot(index: int, count: int, *, radius: float = RING_RADIUS) -> tuple[float, LVector3f]:
    n = max(1, int(count))
    ang = (float(index) / float(n)) * math.tau
    return ang, LVector3f(math.cos(ang) * radius, 0.0, math.sin(ang) * radius)


def _vec(v: tuple[float, float, float]) -> LVector3f:
    return LVector3f(float(v[0]), float(v[1]), float(v[2]))


def spawn_particle(
    strategy: SpawnStrategy,
    origin: LVector3f,
    rng: random.Random,
    *,
    index: int = 0,
    count: int = 1,
) -> SpawnResult:
    base = LVector3f(origin)

    if isinstance(strategy, ExplosionSpawn):
        offset = point_in_sphere(rng, strategy.radius)
        if offset.lengthSquared() > 1e-12:
            outward = LVector3f(offset)
            outward.normalize()
        else:
            outward = random_unit_vector(rng)
        speed = float(strategy.speed) * rng.uniform(0.8, 1.2)
        return SpawnResult(pos=base + offset, vel=outward * speed)

    if isinstance(strategy, FireworkSpawn):
        return SpawnResult(pos=base, vel=_vec(strategy.velocity))

    if isinstance(strategy, FountainSpawn):
        return SpawnResult(
            pos=base + point_in_disk(rng, strategy.spawn_radius),
            vel=LVector3f(0.0, float(strategy.up_speed), 0.0),
        )

    if isinstance(strategy, SmokeSpawn):
        if strategy.in_sphere:
            offset = point_in_sphere(rng, strategy.spawn_radius)
        else:
            offset = point_in_disk(rng, strategy.spawn_radius)
        if strategy.randomized:
            lo = max(0.0, min(float(strategy.min_speed), float(strategy.max_speed)))
            vel = random_unit_vector(rng) * rng.uniform(lo, float(strategy.max_speed))
        else:
            vel = _vec(strategy.velocity)
        return SpawnResult(pos=base + offset, vel=vel)

    if isinstance(strategy, StarburstSpawn):
        return SpawnResult(pos=base, vel=_vec(strategy.velocity))

    if isinstance(strategy, RingTrailSpawn):
        _, offset = ring_slot(index, count, radius=strategy.ring_radius)
        return SpawnResult(pos=base + offset, vel=LVector3f(0, 0, 0))

    raise TypeError(f"Unsupported spawn strategy: {type(strategy).__name__}")
