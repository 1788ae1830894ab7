from __future__ import annotations

import argparse
import logging

from vfx_showcase.app import run


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="vfx-showcase", description="Orbit-camera particle effects showcase")
    parser.add_argument(
        "--smoke",
        action="store_true",
        help="Run briefly in an offscreen window and exit (for quick verification).",
    )
    parser.add_argument(
        "--config",
        dest="config_path",
        default=None,
        help="Scene JSON with camera, vfx, walls, sceneParticleSystems and fog sections.",
    )
    parser.add_argument(
        "--error-log",
        dest="error_log_path",
        default=None,
        help="Optional file that receives runtime errors caught by the frame loop.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed particle spawns for a repeatable run.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO).",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=str(args.log_level).upper(), format="%(levelname)s %(name)s: %(message)s")
    run(
        smoke=args.smoke,
        config_path=args.config_path,
        error_log_path=args.error_log_path,
        seed=args.seed,
    )


if __name__ == "__main__":
    main()
