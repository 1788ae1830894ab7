from __future__ import annotations

from dataclasses import dataclass

from panda3d.core import LVector3f


@dataclass(frozen=True)
class AABB:
    minimum: LVector3f
    maximum: LVector3f

    @classmethod
    def from_center_size(cls, center: LVector3f, size: LVector3f) -> "AABB":
        half = LVector3f(abs(float(size.x)), abs(float(size.y)), abs(float(size.z))) * 0.5
        return cls(minimum=LVector3f(center - half), maximum=LVector3f(center + half))

    @property
    def center(self) -> LVector3f:
        return (self.minimum + self.maximum) * 0.5

    @property
    def half_extents(self) -> LVector3f:
        return (self.maximum - self.minimum) * 0.5

    def contains(self, point: LVector3f) -> bool:
        return (
            float(self.minimum.x) <= float(point.x) <= float(self.maximum.x)
            and float(self.minimum.y) <= float(point.y) <= float(self.maximum.y)
            and float(self.minimum.z) <= float(point.z) <= float(self.maximum.z)
        )
