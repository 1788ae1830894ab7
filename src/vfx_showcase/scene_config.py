from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EffectEntry:
    type: str
    name: str
    properties: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class WallSpec:
    name: str
    position: tuple[float, float, float] = (0.0, 1.0, 0.0)
    size: tuple[float, float, float] = (1.0, 2.0, 0.1)
    # Euler degrees, X then Y then Z, about the wall center.
    rotation: tuple[float, float, float] = (0.0, 0.0, 0.0)
    color: Any = "#888888"


@dataclass(frozen=True)
class DustSpec:
    volume_min: tuple[float, float, float]
    volume_max: tuple[float, float, float]
    count: int = 1000
    color: Any = "#ffffff"
    size: float = 0.04
    speed: float = 0.003


@dataclass(frozen=True)
class FogSpec:
    color: Any = "#222233"
    near: float = 1.5
    far: float = 7.5


@dataclass(frozen=True)
class ShowcaseConfig:
    camera: dict[str, Any] = field(default_factory=dict)
    effects: tuple[EffectEntry, ...] = ()
    slide_spacing: float = 2.5
    walls: tuple[WallSpec, ...] = ()
    dust: tuple[DustSpec, ...] = ()
    fog: FogSpec | None = None


DEFAULT_EFFECTS: tuple[EffectEntry, ...] = (
    EffectEntry(type="explosion", name="Explosion", properties={"position": [0, 1.0, 0]}),
    EffectEntry(type="firework", name="Firework", properties={"position": [0, 0.5, 0]}),
    EffectEntry(type="fountain", name="Fountain", properties={"position": [0, 0.5, 0]}),
    EffectEntry(type="smoke", name="Smoke Puff", properties={"position": [0, 0.5, 0]}),
    EffectEntry(type="starburst", name="Starburst", properties={"position": [0, 1.0, 0]}),
    EffectEntry(type="ringtrail", name="Ring Trail", properties={"position": [0, 1.0, 0]}),
)


def default_config() -> ShowcaseConfig:
    return ShowcaseConfig(
        camera={
            "initialYaw": -100,
            "initialPitch": -30,
            "initialDistance": 5,
            "minDistance": 2,
            "maxDistance": 20,
            "minPitch": -30,
            "maxPitch": 30,
            "sensitivity": 0.01,
        },
        effects=DEFAULT_EFFECTS,
    )


def _vec3(raw: Any, default: tuple[float, float, float]) -> tuple[float, float, float]:
    if not isinstance(raw, (list, tuple)) or len(raw) != 3:
        return default
    out: list[float] = []
    for c in raw:
        if isinstance(c, bool) or not isinstance(c, (int, float)) or not math.isfinite(float(c)):
            return default
        out.append(float(c))
    return out[0], out[1], out[2]


def _xyz_record(raw: Any) -> tuple[float, float, float] | None:
    # Dust volumes use {"x": .., "y": .., "z": ..} records.
    if isinstance(raw, dict):
        raw = [raw.get("x"), raw.get("y"), raw.get("z")]
    parsed = _vec3(raw, (math.nan, math.nan, math.nan))
    return None if math.isnan(parsed[0]) else parsed


def _num(raw: Any, default: float) -> float:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)) or not math.isfinite(float(raw)):
        return default
    return float(raw)


def _parse_effects(raw: Any) -> tuple[EffectEntry, ...]:
    if not isinstance(raw, list):
        return DEFAULT_EFFECTS
    entries: list[EffectEntry] = []
    for i, item in enumerate(raw):
        if not isinstance(item, dict):
            logger.warning("Skipping vfx entry #%d: expected an object", i)
            continue
        kind = item.get("type")
        # Unknown types are kept; the catalog rejects them when the showcase is built.
        kind_s = str(kind) if kind is not None else ""
        name = item.get("name")
        props = item.get("properties")
        entries.append(
            EffectEntry(
                type=kind_s,
                name=str(name) if isinstance(name, str) and name.strip() else kind_s,
                properties=dict(props) if isinstance(props, dict) else {},
            )
        )
    return tuple(entries)


def _parse_walls(raw: Any) -> tuple[WallSpec, ...]:
    if not isinstance(raw, dict):
        return ()
    walls: list[WallSpec] = []
    for name, spec in raw.items():
        if not isinstance(spec, dict):
            continue
        walls.append(
            WallSpec(
                name=str(name),
                position=_vec3(spec.get("position"), WallSpec.position),
                size=_vec3(spec.get("size"), WallSpec.size),
                rotation=_vec3(spec.get("rotation"), WallSpec.rotation),
                color=spec.get("color", WallSpec.color),
            )
        )
    return tuple(walls)


def _parse_dust(raw: Any) -> tuple[DustSpec, ...]:
    if not isinstance(raw, list):
        return ()
    out: list[DustSpec] = []
    for item in raw:
        if not isinstance(item, dict) or item.get("type") != "dust":
            continue
        volume = item.get("volume")
        if not isinstance(volume, dict):
            continue
        lo = _xyz_record(volume.get("min"))
        hi = _xyz_record(volume.get("max"))
        if lo is None or hi is None:
            logger.warning("Skipping dust volume with malformed bounds: %r", volume)
            continue
        out.append(
            DustSpec(
                volume_min=lo,
                volume_max=hi,
                count=int(max(0.0, _num(item.get("count"), 1000))),
                color=item.get("color", "#ffffff"),
                size=_num(item.get("size"), 0.04),
                speed=_num(item.get("speed"), 0.003),
            )
        )
    return tuple(out)


def _parse_fog(raw: Any) -> FogSpec | None:
    if not isinstance(raw, dict):
        return None
    return FogSpec(
        color=raw.get("color", FogSpec.color),
        near=_num(raw.get("near"), FogSpec.near),
        far=_num(raw.get("far"), FogSpec.far),
    )


def parse_showcase_config(payload: Any) -> ShowcaseConfig:
    if not isinstance(payload, dict):
        return default_config()
    camera = payload.get("camera")
    vfx = payload.get("vfx") if isinstance(payload.get("vfx"), dict) else {}
    return ShowcaseConfig(
        camera=dict(camera) if isinstance(camera, dict) else default_config().camera,
        effects=_parse_effects(vfx.get("systems")),
        slide_spacing=max(0.0, _num(vfx.get("slideSpacing"), 2.5)),
        walls=_parse_walls(payload.get("walls")),
        dust=_parse_dust(payload.get("sceneParticleSystems")),
        fog=_parse_fog(payload.get("fog")),
    )


def load_showcase_config(path: Path | None) -> ShowcaseConfig:
    """Read scene JSON; a missing or unreadable file yields the built-in showcase."""

    if path is None:
        return default_config()
    p = Path(path)
    if not p.exists():
        logger.warning("Scene config not found: %s (using defaults)", p)
        return default_config()
    try:
        payload = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("Failed to load scene config %s: %s (using defaults)", p, exc)
        return default_config()
    logger.info("Loaded scene config: %s", p)
    return parse_showcase_config(payload)
