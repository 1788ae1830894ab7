from __future__ import annotations

import random
from typing import Sequence

from panda3d.core import LVector3f, NodePath

from vfx_showcase.common.aabb import AABB
from vfx_showcase.vfx.colors import RGB, WHITE, parse_color
from vfx_showcase.vfx.effect import as_vector
from vfx_showcase.vfx.render import build_point_cloud, write_point_cloud

DUST_ALPHA = 0.18


def _wrap(v: float, lo: float, hi: float) -> float:
    if v < lo:
        return hi
    if v > hi:
        return lo
    return v


class DustField:
    """Ambient motes drifting inside a box; leaving through one face re-enters at the opposite one."""

    def __init__(
        self,
        *,
        volume_min: Sequence[float] | LVector3f,
        volume_max: Sequence[float] | LVector3f,
        count: int = 1000,
        color: RGB | str | int | Sequence[float] = WHITE,
        size: float = 0.04,
        speed: float = 0.02,
        rng: random.Random | None = None,
    ) -> None:
        lo = as_vector(volume_min)
        hi = as_vector(volume_max)
        self.volume = AABB(
            minimum=LVector3f(min(lo.x, hi.x), min(lo.y, hi.y), min(lo.z, hi.z)),
            maximum=LVector3f(max(lo.x, hi.x), max(lo.y, hi.y), max(lo.z, hi.z)),
        )
        self.count = max(0, int(count))
        self.color = parse_color(color)
        self.size = max(1e-4, float(size))
        self.speed = max(0.0, float(speed))
        self.rng = rng if rng is not None else random.Random()

        self.positions: list[LVector3f] = [self._random_point() for _ in range(self.count)]
        # Per-frame displacement, not per-second.
        self.velocities: list[LVector3f] = [
            LVector3f(
                (self.rng.random() - 0.5) * self.speed,
                (self.rng.random() - 0.5) * self.speed,
                (self.rng.random() - 0.5) * self.speed,
            )
            for _ in range(self.count)
        ]
        self.points_np = build_point_cloud("dust-points", self.count, size=self.size, additive=False)
        self._write_buffer()

    @property
    def volume_min(self) -> LVector3f:
        return self.volume.minimum

    @property
    def volume_max(self) -> LVector3f:
        return self.volume.maximum

    def _random_point(self) -> LVector3f:
        lo, hi = self.volume_min, self.volume_max
        return LVector3f(
            float(lo.x) + (float(hi.x) - float(lo.x)) * self.rng.random(),
            float(lo.y) + (float(hi.y) - float(lo.y)) * self.rng.random(),
            float(lo.z) + (float(hi.z) - float(lo.z)) * self.rng.random(),
        )

    def update(self) -> None:
        lo, hi = self.volume_min, self.volume_max
        for i, (p, v) in enumerate(zip(self.positions, self.velocities)):
            moved = LVector3f(p + v)
            if not self.volume.contains(moved):
                moved = LVector3f(
                    _wrap(float(moved.x), float(lo.x), float(hi.x)),
                    _wrap(float(moved.y), float(lo.y), float(hi.y)),
                    _wrap(float(moved.z), float(lo.z), float(hi.z)),
                )
            self.positions[i] = moved
        self._write_buffer()

    def _write_buffer(self) -> None:
        write_point_cloud(self.points_np, self.positions, [DUST_ALPHA] * self.count, color=self.color)

    def add_to_scene(self, container: NodePath) -> None:
        self.points_np.reparentTo(container)

    def remove_from_scene(self, container: NodePath) -> None:
        parent = self.points_np.getParent()
        if not parent.isEmpty() and parent == container:
            self.points_np.detachNode()
