from __future__ import annotations

import random
from typing import Sequence

from panda3d.core import LVector3f, NodePath

from vfx_showcase.vfx.colors import RGB, WHITE, parse_color
from vfx_showcase.vfx.particle import Particle
from vfx_showcase.vfx.render import build_point_cloud, write_point_cloud
from vfx_showcase.vfx.spawn import SpawnResult, SpawnStrategy, spawn_particle

MIN_LIFETIME_S = 1e-3


def as_vector(value: Sequence[float] | LVector3f | None, default: tuple[float, float, float] = (0.0, 0.0, 0.0)) -> LVector3f:
    if value is None:
        return LVector3f(*default)
    if isinstance(value, LVector3f):
        return LVector3f(value)
    try:
        x, y, z = (float(c) for c in value)
    except (TypeError, ValueError):
        return LVector3f(*default)
    return LVector3f(x, y, z)


class ParticleEffect:
    """
    Fixed-size particle pool driven by one spawn strategy.

    Particles are allocated once by `init_particles`; expired ones are
    respawned in place during `update`, so the pool never grows or shrinks.
    """

    kind = "particles"

    def __init__(
        self,
        *,
        strategy: SpawnStrategy,
        position: Sequence[float] | LVector3f | None = None,
        color: RGB | str | int | Sequence[float] = WHITE,
        size: float = 0.05,
        lifetime: float = 1.0,
        particle_count: int = 100,
        name: str | None = None,
        kind: str | None = None,
        rng: random.Random | None = None,
    ) -> None:
        if kind:
            self.kind = str(kind)
        self.strategy = strategy
        self.name = str(name) if name else self.kind
        self.color = parse_color(color)
        self.size = max(1e-4, float(size))
        self.lifetime = max(MIN_LIFETIME_S, float(lifetime))
        self.particle_count = max(0, int(particle_count))
        self.rng = rng if rng is not None else random.Random()
        self._origin = as_vector(position)
        self.particles: list = []
        self.points_np = build_point_cloud(f"{self.kind}-points", self.particle_count, size=self.size)
        self.init_particles()

    @property
    def origin(self) -> LVector3f:
        return self._origin

    @origin.setter
    def origin(self, value: Sequence[float] | LVector3f) -> None:
        self._origin = as_vector(value, default=(float(self._origin.x), float(self._origin.y), float(self._origin.z)))

    def spawn(self, index: int) -> SpawnResult:
        return spawn_particle(self.strategy, self._origin, self.rng, index=index, count=self.particle_count)

    def init_particles(self) -> None:
        self.particles = []
        for i in range(self.particle_count):
            s = self.spawn(i)
            self.particles.append(Particle(pos=LVector3f(s.pos), vel=LVector3f(s.vel), life_s=self.lifetime))
        self._write_buffer()

    def update(self, dt: float) -> None:
        step = max(0.0, float(dt))
        for i, p in enumerate(self.particles):
            p.age_s += step
            if p.age_s > p.life_s:
                s = self.spawn(i)
                p.pos = LVector3f(s.pos)
                p.vel = LVector3f(s.vel)
                p.age_s = 0.0
            else:
                p.pos += p.vel * step
            p.refresh_alpha()
        self._write_buffer()

    def positions(self) -> list[LVector3f]:
        return [LVector3f(p.pos) for p in self.particles]

    def _write_buffer(self) -> None:
        write_point_cloud(
            self.points_np,
            [p.pos for p in self.particles],
            [p.alpha for p in self.particles],
            color=self.color,
        )

    # -- scene -------------------------------------------------------------

    def renderables(self) -> list[NodePath]:
        return [self.points_np]

    def add_to_scene(self, container: NodePath) -> None:
        for np in self.renderables():
            np.reparentTo(container)

    def remove_from_scene(self, container: NodePath) -> None:
        for np in self.renderables():
            if not np.getParent().isEmpty() and np.getParent() == container:
                np.detachNode()

    def is_attached(self, container: NodePath) -> bool:
        parent = self.points_np.getParent()
        return not parent.isEmpty() and parent == container
