from __future__ import annotations

from panda3d.core import LVector3f

import vfx_showcase.__main__ as cli
from vfx_showcase.app import wall_box
from vfx_showcase.scene_config import WallSpec


def test_main_forwards_flags_to_run(monkeypatch) -> None:
    seen: dict = {}
    monkeypatch.setattr(cli, "run", lambda **kw: seen.update(kw))

    cli.main(["--smoke", "--config", "scene.json", "--seed", "3"])

    assert seen == {"smoke": True, "config_path": "scene.json", "error_log_path": None, "seed": 3}


def test_main_defaults(monkeypatch) -> None:
    seen: dict = {}
    monkeypatch.setattr(cli, "run", lambda **kw: seen.update(kw))

    cli.main([])

    assert seen["smoke"] is False
    assert seen["config_path"] is None


def test_wall_box_is_centered_on_wall_position() -> None:
    box = wall_box(WallSpec(name="back", position=(0.0, 1.0, -3.0), size=(6.0, 2.0, 0.2)))
    assert (box.center - LVector3f(0, 1, -3)).length() < 1e-5
    assert (box.maximum - box.minimum - LVector3f(6, 2, 0.2)).length() < 1e-5
