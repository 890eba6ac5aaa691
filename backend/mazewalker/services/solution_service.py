"""Solution service: runs decode + walk and stores results as JSON."""

import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from mazewalker.core.image_decoder import decode
from mazewalker.core.maze_walker import MazeWalker
from mazewalker.schemas.solution import SolutionRecord, SolutionSummary
from mazewalker.services.image_loader import RawImage, load_image

logger = logging.getLogger(__name__)


class SolutionFileError(Exception):
    """Exception raised when a stored solution cannot be read."""

    pass


def solve_image(raw: RawImage, name: Optional[str] = None) -> SolutionRecord:
    """
    Decode a raw image and walk the maze.

    Raises:
        MazeDecodeError: If the image is not a valid maze.
    """
    maze = decode(raw.pixels, raw.width, raw.height)
    result = MazeWalker(maze.grid, maze.start, maze.end).solve()

    if not result.solved:
        logger.warning(f"Maze {name or '<unnamed>'} not solved within iteration cap")

    return SolutionRecord.from_walk(maze, result, name=name)


def solution_path_for(output_dir: Path | str, name: str) -> Path:
    """Location of the stored solution named name."""
    return Path(output_dir) / f"{name}.json"


def save_solution(record: SolutionRecord, file_path: Path | str) -> Path:
    """Write record as JSON, creating parent directories."""
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(record.model_dump_json(indent=2), encoding="utf-8")
    logger.info(f"Solution written to {file_path}")
    return file_path


def load_solution(file_path: Path | str) -> SolutionRecord:
    """
    Load a stored solution.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        SolutionFileError: If the file cannot be read or is not a solution.
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Solution file not found: {file_path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SolutionFileError(f"Failed to read solution file: {e}") from e

    try:
        record = SolutionRecord.model_validate_json(content)
    except ValidationError as e:
        raise SolutionFileError(f"Invalid solution file {file_path}: {e}") from e

    # Files written without a name take it from the filename
    if record.name is None:
        record.name = file_path.stem
    return record


def solve_image_file(
    image_path: Path | str,
    output_dir: Optional[Path | str] = None,
) -> SolutionRecord:
    """
    Load, decode and walk a maze image.

    Args:
        image_path: Path to the maze image.
        output_dir: If given, the record is saved as <output_dir>/<stem>.json.

    Returns:
        SolutionRecord named after the image file stem.
    """
    image_path = Path(image_path)
    record = solve_image(load_image(image_path), name=image_path.stem)

    if output_dir is not None:
        save_solution(record, solution_path_for(output_dir, image_path.stem))

    return record


def load_all_solutions(solutions_dir: Path | str) -> list[SolutionRecord]:
    """
    Load all stored solutions from a directory.

    Invalid files are logged and skipped.

    Raises:
        FileNotFoundError: If the directory doesn't exist.
    """
    solutions_dir = Path(solutions_dir)

    if not solutions_dir.exists():
        raise FileNotFoundError(f"Solutions directory not found: {solutions_dir}")

    if not solutions_dir.is_dir():
        raise SolutionFileError(f"Path is not a directory: {solutions_dir}")

    records = []
    for solution_file in sorted(solutions_dir.glob("*.json")):
        try:
            records.append(load_solution(solution_file))
        except SolutionFileError as e:
            logger.warning(f"Failed to load {solution_file}: {e}")

    return records


def summarize(record: SolutionRecord) -> SolutionSummary:
    """Summary of a record for listings and the CLI."""
    return SolutionSummary(
        name=record.name,
        status=record.status,
        steps=len(record.solution),
        start=record.start,
        end=record.end,
    )
