"""Command line entry point: solve maze images, inspect stored solutions, serve the API."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from PIL import Image

from mazewalker.config import get_settings
from mazewalker.core.image_decoder import MazeDecodeError
from mazewalker.schemas.solution import SolutionRecord
from mazewalker.services import renderer
from mazewalker.services.image_loader import ImageLoadError
from mazewalker.services.solution_service import (
    SolutionFileError,
    load_solution,
    solve_image_file,
    summarize,
)

logger = logging.getLogger("maze_walker")


def _format_summary(record: SolutionRecord) -> str:
    summary = summarize(record)
    status = summary.status.value if summary.status else "unknown"
    return (
        f"{summary.name}: {status}, {summary.steps} steps "
        f"from ({summary.start.x}, {summary.start.y}) to ({summary.end.x}, {summary.end.y})"
    )


def _cmd_solve(args: argparse.Namespace) -> int:
    failures = 0
    for image_path in args.images:
        try:
            record = solve_image_file(image_path, output_dir=args.output_dir)
        except FileNotFoundError as e:
            logger.error(str(e))
            failures += 1
            continue
        except (ImageLoadError, MazeDecodeError) as e:
            logger.error(f"{image_path}: {e}")
            failures += 1
            continue

        print(_format_summary(record))

        if args.animate is not None:
            destination = Path(args.animate) / f"{Path(image_path).stem}.gif"
            with Image.open(image_path) as image:
                renderer.save_animation(
                    image,
                    record.path(),
                    destination,
                    frame_ms=args.frame_ms,
                    max_frames=args.max_frames,
                )
            logger.info(f"Animation written to {destination}")

    return 1 if failures else 0


def _cmd_show(args: argparse.Namespace) -> int:
    try:
        record = load_solution(args.solution)
    except (FileNotFoundError, SolutionFileError) as e:
        logger.error(str(e))
        return 1

    print(_format_summary(record))
    if args.path:
        for position in record.solution:
            print(f"{position.x},{position.y}")
    return 0


def _cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("mazewalker.main:app", host=args.host, port=args.port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()

    parser = argparse.ArgumentParser(
        prog="maze-walker",
        description="Decode 322x322 maze images and walk them with the right-hand rule.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    solve_parser = subparsers.add_parser("solve", help="Solve one or more maze images")
    solve_parser.add_argument("images", nargs="+", type=Path, help="Maze image files")
    solve_parser.add_argument(
        "--output-dir",
        type=Path,
        default=settings.solutions_dir,
        help="Directory for <stem>.json solution files (default: %(default)s)",
    )
    solve_parser.add_argument(
        "--animate",
        type=Path,
        default=None,
        metavar="DIR",
        help="Also write a <stem>.gif replay into DIR",
    )
    solve_parser.add_argument(
        "--frame-ms",
        type=int,
        default=settings.animation_frame_ms,
        help="Replay frame duration in milliseconds (default: %(default)s)",
    )
    solve_parser.add_argument(
        "--max-frames",
        type=int,
        default=settings.animation_max_frames,
        help="Subsample longer replays to this many frames (default: %(default)s)",
    )
    solve_parser.set_defaults(func=_cmd_solve)

    show_parser = subparsers.add_parser("show", help="Summarize a stored solution")
    show_parser.add_argument("solution", type=Path, help="Solution JSON file")
    show_parser.add_argument("--path", action="store_true", help="Print every walked position")
    show_parser.set_defaults(func=_cmd_show)

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)
    serve_parser.set_defaults(func=_cmd_serve)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=get_settings().log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
