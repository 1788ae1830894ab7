from __future__ import annotations

import math
import random
from collections import deque
from typing import Sequence

from panda3d.core import LVector3f, NodePath

from vfx_showcase.vfx.colors import RGB, WHITE
from vfx_showcase.vfx.effect import ParticleEffect
from vfx_showcase.vfx.particle import OrbitingParticle
from vfx_showcase.vfx.render import build_line_node, write_line_strip
from vfx_showcase.vfx.spawn import RingTrailSpawn, ring_slot

TRAIL_ALPHA = 0.5
# Angular advance is damped relative to the particle's nominal speed.
ANGULAR_STEP_SCALE = 0.5


class RingTrailEffect(ParticleEffect):
    """
    Particles circling the origin, each dragging a polyline of its recent positions.

    Motion is periodic, so nothing expires: there is no age-based fade or
    respawn. Each particle owns a point (in the shared cloud) and a separate
    line node for its trail; attach/detach always moves all of them together.
    """

    kind = "ringtrail"

    def __init__(
        self,
        *,
        position: Sequence[float] | LVector3f | None = None,
        color: RGB | str | int | Sequence[float] = WHITE,
        size: float = 0.15,
        particle_count: int = 10,
        trail_length: int = 30,
        angular_speed: float = 1.2,
        ring_radius: float = 1.2,
        name: str | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.trail_length = max(1, int(trail_length))
        self.angular_speed = float(angular_speed)
        self.trails: list[deque[LVector3f]] = []
        self.trail_nps: list[NodePath] = []
        super().__init__(
            strategy=RingTrailSpawn(ring_radius=float(ring_radius)),
            position=position,
            color=color,
            size=size,
            lifetime=1.0,
            particle_count=particle_count,
            name=name,
            rng=rng,
        )

    @property
    def ring_radius(self) -> float:
        return float(self.strategy.ring_radius)

    def init_particles(self) -> None:
        self.particles = []
        self.trails = []
        if len(self.trail_nps) != self.particle_count:
            self.trail_nps = [build_line_node(f"ringtrail-line-{i}") for i in range(self.particle_count)]
        for i in range(self.particle_count):
            angle, _ = ring_slot(i, self.particle_count, radius=self.ring_radius)
            pos = LVector3f(self.spawn(i).pos)
            self.particles.append(OrbitingParticle(pos=pos, angle=angle, angular_speed=self.angular_speed))
            self.trails.append(deque([LVector3f(pos)], maxlen=self.trail_length))
        self._write_buffer()
        self._write_trails()

    def update(self, dt: float) -> None:
        step = max(0.0, float(dt))
        o = self.origin
        r = self.ring_radius
        for i, p in enumerate(self.particles):
            p.angle += p.angular_speed * step * ANGULAR_STEP_SCALE
            p.age_s += step
            p.pos = LVector3f(
                float(o.x) + math.cos(p.angle) * r,
                float(o.y),
                float(o.z) + math.sin(p.angle) * r,
            )
            # deque(maxlen) drops the oldest entry on overflow.
            self.trails[i].append(LVector3f(p.pos))
        self._write_buffer()
        self._write_trails()

    def trail(self, index: int) -> list[LVector3f]:
        return list(self.trails[int(index)])

    def _write_trails(self) -> None:
        for np, history in zip(self.trail_nps, self.trails):
            write_line_strip(np, history, color=self.color, alpha=TRAIL_ALPHA)

    def renderables(self) -> list[NodePath]:
        return [self.points_np, *self.trail_nps]
