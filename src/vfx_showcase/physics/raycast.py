from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Protocol

from panda3d.core import LPoint3f, LVector3f


@dataclass(frozen=True)
class RayHit:
    distance: float
    point: LPoint3f


class Collidable(Protocol):
    def intersect_ray(self, origin: LVector3f, direction: LVector3f, max_distance: float) -> list[RayHit]:
        """Hits along `origin + direction * t`, t in [0, max_distance], nearest first."""
        ...


def nearest_hit(
    collidables: Iterable[Collidable],
    *,
    origin: LVector3f,
    direction: LVector3f,
    max_distance: float,
) -> RayHit | None:
    best: RayHit | None = None
    for obj in collidables:
        hits = obj.intersect_ray(LVector3f(origin), LVector3f(direction), float(max_distance))
        if not hits:
            continue
        hit = hits[0]
        if float(hit.distance) > float(max_distance):
            continue
        if best is None or float(hit.distance) < float(best.distance):
            best = hit
    return best
