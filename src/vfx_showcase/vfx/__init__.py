"""Particle effects: spawn strategies, the shared lifecycle kernel and the effect catalog."""

from vfx_showcase.vfx.catalog import EFFECT_KINDS, PRESETS, UnknownEffectError, create_effect
from vfx_showcase.vfx.dust import DustField
from vfx_showcase.vfx.effect import ParticleEffect
from vfx_showcase.vfx.ring_trail import RingTrailEffect

__all__ = [
    "EFFECT_KINDS",
    "PRESETS",
    "DustField",
    "ParticleEffect",
    "RingTrailEffect",
    "UnknownEffectError",
    "create_effect",
]
