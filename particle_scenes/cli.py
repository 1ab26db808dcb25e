from __future__ import annotations

import argparse
import logging
from typing import List, Optional, Union

from .config import AppConfig
from .scenes import SCENE_CLASSES


def _scene_arg(value: str) -> Union[int, str]:
    """Scene by 0-based index or by display name."""
    try:
        return int(value)
    except ValueError:
        names = [cls.display_name.lower() for cls in SCENE_CLASSES]
        if value.strip().lower() not in names:
            raise argparse.ArgumentTypeError(
                f"unknown scene {value!r}; choose an index 0-{len(names) - 1} or one of: "
                + ", ".join(cls.display_name for cls in SCENE_CLASSES)
            )
        return value


def _positive_int(value: str) -> int:
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {n}")
    return n


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Pointer-reactive particle scenes (pygame)")
    parser.add_argument(
        "--screen-width",
        type=_positive_int,
        default=AppConfig.screen_width,
        help="Window width in pixels.",
    )
    parser.add_argument(
        "--screen-height",
        type=_positive_int,
        default=AppConfig.screen_height,
        help="Window height in pixels.",
    )
    parser.add_argument(
        "--fps",
        type=_positive_int,
        default=AppConfig.target_fps,
        help="Frame rate; every frame advances the live scene by one tick.",
    )
    parser.add_argument(
        "--scene",
        type=_scene_arg,
        default=0,
        help="Start scene, as a 0-based index or a display name (e.g. 'Vortex').",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed every scene's random generator for reproducible runs.",
    )
    parser.add_argument(
        "--record",
        action="store_true",
        help="Record frames and stop after --record-duration seconds.",
    )
    parser.add_argument(
        "--record-duration",
        type=float,
        default=AppConfig.record_duration,
        help=f"Duration in seconds to record (default: {AppConfig.record_duration}).",
    )
    parser.add_argument(
        "--output-file",
        type=str,
        default=None,
        help="Output video path for the recording (e.g. scenes.mp4).",
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Run without a window and print a summary.",
    )
    parser.add_argument(
        "--frames",
        type=_positive_int,
        default=AppConfig.headless_frames,
        help="Number of ticks to run in headless mode.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity.",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.headless:
        from .headless import circling_pointer, run_headless
        from .context import Viewport

        viewport = Viewport(args.screen_width, args.screen_height)
        result = run_headless(
            frames=args.frames,
            width=args.screen_width,
            height=args.screen_height,
            scene=args.scene,
            seed=args.seed,
            pointer_path=circling_pointer(viewport),
        )
        print(
            f"{result.scene}: {result.frames} frames, {result.draw_calls} draw calls, "
            f"{result.entities} entities, finite={result.finite}"
        )
        return

    from .app import ParticleScenesApp
    from .recorder import FrameRecorder

    recorder = None
    if args.record:
        recorder = FrameRecorder(args.output_file, duration=args.record_duration, fps=args.fps)

    start = args.scene
    if isinstance(start, str):
        names = [cls.display_name.lower() for cls in SCENE_CLASSES]
        start = names.index(start.strip().lower())

    app = ParticleScenesApp(
        screen_size=(args.screen_width, args.screen_height),
        target_fps=args.fps,
        start_scene=start,
        seed=args.seed,
        recorder=recorder,
    )
    app.run()


if __name__ == "__main__":
    main()
