from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RunConfig:
    smoke: bool = False
    # Number of frames rendered in smoke mode before exiting.
    smoke_frames: int = 10
    # Scene JSON (camera record, vfx systems, walls, dust, fog).
    # If None, the built-in six-effect showcase is used.
    config_path: str | None = None
    # Optional file that receives runtime errors caught by the frame loop.
    error_log_path: str | None = None
    # Camera collision radius against walls.
    collision_radius: float = 0.25
    # Seed for particle spawns; None = nondeterministic.
    seed: int | None = None
