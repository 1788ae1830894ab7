from __future__ import annotations

import random

from panda3d.core import LVector3f, NodePath

from vfx_showcase.camera.orbit_controller import OrbitCameraController
from vfx_showcase.scene_config import ShowcaseConfig
from vfx_showcase.vfx.catalog import create_effect
from vfx_showcase.vfx.colors import parse_color
from vfx_showcase.vfx.dust import DustField
from vfx_showcase.vfx.effect import ParticleEffect

RECENTER_RATE = 0.15


class Showcase:
    """
    Slideshow of effects: exactly one is attached to the stage at a time.

    Owns the selection and the focus accessor handed to the orbit camera.
    The selected effect slides in from the side it was navigated from and
    is eased back to x = 0 every tick; only its future spawns see the move.
    """

    def __init__(
        self,
        *,
        effects: list[ParticleEffect],
        names: list[str] | None = None,
        stage: NodePath | None = None,
        dust: list[DustField] | None = None,
        slide_spacing: float = 2.5,
    ) -> None:
        self.effects = list(effects)
        self.names = list(names) if names is not None else [e.name for e in self.effects]
        self.stage = stage if stage is not None else NodePath("vfx-stage")
        self.dust = list(dust or [])
        self.slide_spacing = max(0.0, float(slide_spacing))
        self.camera: OrbitCameraController | None = None
        self.selected_index = len(self.effects) // 2
        for d in self.dust:
            d.add_to_scene(self.stage)
        self._show_only_selected()

    @classmethod
    def from_config(
        cls,
        cfg: ShowcaseConfig,
        *,
        stage: NodePath | None = None,
        rng: random.Random | None = None,
    ) -> "Showcase":
        # Unknown types raise UnknownEffectError here, before anything is shown.
        effects = [create_effect(e.type, e.properties, name=e.name, rng=rng) for e in cfg.effects]
        dust = [
            DustField(
                volume_min=d.volume_min,
                volume_max=d.volume_max,
                count=d.count,
                color=parse_color(d.color),
                size=d.size,
                speed=d.speed,
                rng=rng,
            )
            for d in cfg.dust
        ]
        return cls(
            effects=effects,
            names=[e.name for e in cfg.effects],
            stage=stage,
            dust=dust,
            slide_spacing=cfg.slide_spacing,
        )

    @property
    def selected(self) -> ParticleEffect | None:
        if not self.effects:
            return None
        return self.effects[self.selected_index]

    @property
    def selected_name(self) -> str:
        if not self.effects:
            return ""
        return self.names[self.selected_index]

    def focus_position(self) -> LVector3f:
        sel = self.selected
        if sel is None:
            return LVector3f(0, 0, 0)
        return LVector3f(sel.origin)

    def bind_camera(self, camera: OrbitCameraController) -> None:
        self.camera = camera
        camera.set_focus_provider(self.focus_position)

    def select_next(self) -> None:
        self._select(self.selected_index + 1, direction=1)

    def select_previous(self) -> None:
        self._select(self.selected_index - 1, direction=-1)

    def _select(self, index: int, *, direction: int) -> None:
        if not self.effects:
            return
        self.selected_index = int(index) % len(self.effects)
        sel = self.effects[self.selected_index]
        o = sel.origin
        # Arrive from the side we navigated toward.
        sel.origin = LVector3f(float(direction) * self.slide_spacing, float(o.y), float(o.z))
        self._show_only_selected()

    def _show_only_selected(self) -> None:
        for effect in self.effects:
            effect.remove_from_scene(self.stage)
        sel = self.selected
        if sel is not None:
            sel.add_to_scene(self.stage)

    def recenter(self) -> None:
        sel = self.selected
        if sel is None:
            return
        o = sel.origin
        x = float(o.x)
        if x == 0.0:
            return
        x += (0.0 - x) * RECENTER_RATE
        if abs(x) < 1e-4:
            x = 0.0
        sel.origin = LVector3f(x, float(o.y), float(o.z))

    def tick(self, dt: float) -> None:
        sel = self.selected
        if sel is not None:
            sel.update(dt)
        for d in self.dust:
            d.update()
        self.recenter()
        if self.camera is not None:
            self.camera.update()
