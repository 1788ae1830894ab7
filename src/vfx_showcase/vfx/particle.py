from __future__ import annotations

from dataclasses import dataclass

from panda3d.core import LVector3f


@dataclass
class Particle:
    pos: LVector3f
    vel: LVector3f
    life_s: float
    age_s: float = 0.0
    alpha: float = 1.0

    def refresh_alpha(self) -> float:
        life = max(1e-6, float(self.life_s))
        self.alpha = max(0.0, min(1.0, 1.0 - float(self.age_s) / life))
        return self.alpha


@dataclass
class OrbitingParticle:
    """Ring-trail particle: placed by angle around the effect origin, never expires."""

    pos: LVector3f
    angle: float
    angular_speed: float
    age_s: float = 0.0
    alpha: float = 1.0
