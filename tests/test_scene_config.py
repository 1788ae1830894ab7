from __future__ import annotations

import json
import logging
from pathlib import Path

from vfx_showcase.scene_config import (
    DEFAULT_EFFECTS,
    default_config,
    load_showcase_config,
    parse_showcase_config,
)


def test_missing_file_returns_defaults(tmp_path: Path, caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="vfx_showcase.scene_config"):
        cfg = load_showcase_config(tmp_path / "nope.json")

    assert cfg == default_config()
    assert "not found" in caplog.text


def test_invalid_json_returns_defaults(tmp_path: Path, caplog) -> None:
    p = tmp_path / "scene.json"
    p.write_text("{ not json", encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="vfx_showcase.scene_config"):
        cfg = load_showcase_config(p)

    assert cfg.effects == DEFAULT_EFFECTS
    assert "Failed to load" in caplog.text


def test_none_path_is_builtin_showcase() -> None:
    cfg = load_showcase_config(None)
    assert [e.type for e in cfg.effects] == ["explosion", "firework", "fountain", "smoke", "starburst", "ringtrail"]
    assert cfg.camera["initialYaw"] == -100


def test_full_payload_round_trip(tmp_path: Path) -> None:
    payload = {
        "camera": {"initialDistance": 4, "overshootYaw": 20},
        "vfx": {
            "slideSpacing": 3,
            "systems": [
                {"type": "explosion", "name": "Boom", "properties": {"particleCount": 10}},
                {"type": "tornado"},
                "junk",
            ],
        },
        "walls": {
            "back": {"position": [0, 1, -3], "size": [6, 2, 0.2], "color": "#334455", "rotation": [0, 0.5, 0]},
            "bad": 5,
        },
        "sceneParticleSystems": [
            {"type": "dust", "volume": {"min": {"x": -2, "y": 0, "z": -2}, "max": {"x": 2, "y": 3, "z": 2}}, "count": 40},
            {"type": "dust", "volume": {"min": {"x": "a"}, "max": {"x": 1, "y": 1, "z": 1}}},
            {"type": "rain"},
        ],
        "fog": {"color": "#101018", "near": 2, "far": 9},
    }
    p = tmp_path / "scene.json"
    p.write_text(json.dumps(payload), encoding="utf-8")

    cfg = load_showcase_config(p)

    assert cfg.camera == {"initialDistance": 4, "overshootYaw": 20}
    assert cfg.slide_spacing == 3.0
    assert [(e.type, e.name) for e in cfg.effects] == [("explosion", "Boom"), ("tornado", "tornado")]
    assert cfg.effects[0].properties == {"particleCount": 10}

    assert len(cfg.walls) == 1
    assert cfg.walls[0].name == "back"
    assert cfg.walls[0].position == (0.0, 1.0, -3.0)
    assert cfg.walls[0].size == (6.0, 2.0, 0.2)
    assert cfg.walls[0].rotation == (0.0, 0.5, 0.0)

    assert len(cfg.dust) == 1
    assert cfg.dust[0].volume_min == (-2.0, 0.0, -2.0)
    assert cfg.dust[0].count == 40

    assert cfg.fog is not None
    assert (cfg.fog.near, cfg.fog.far) == (2.0, 9.0)


def test_partial_payload_fills_sections() -> None:
    cfg = parse_showcase_config({"vfx": {"slideSpacing": -4}})
    assert cfg.effects == DEFAULT_EFFECTS
    assert cfg.slide_spacing == 0.0
    assert cfg.walls == ()
    assert cfg.dust == ()
    assert cfg.fog is None
    assert cfg.camera == default_config().camera


def test_non_object_payload_is_defaults() -> None:
    assert parse_showcase_config([1, 2, 3]) == default_config()


def test_wall_rotation_defaults_and_malformed_values() -> None:
    cfg = parse_showcase_config(
        {
            "walls": {
                "plain": {"position": [0, 1, -2]},
                "turned": {"rotation": [0, 45, 0]},
                "broken": {"rotation": [0, "x", 0]},
            }
        }
    )
    rotations = {w.name: w.rotation for w in cfg.walls}
    assert rotations == {"plain": (0.0, 0.0, 0.0), "turned": (0.0, 45.0, 0.0), "broken": (0.0, 0.0, 0.0)}
