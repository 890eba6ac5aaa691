"""Replay rendering: draws a walked solution over the maze image with Pillow."""

from pathlib import Path
from typing import Iterator, Optional, Sequence

from PIL import Image, ImageDraw

from mazewalker.core.grid import Position
from mazewalker.core.image_decoder import BLOCK_SIZE, BORDER_OFFSET

MARKER_INSET = 4
MARKER_SIZE = 10
MARKER_COLOR = (0, 128, 0)
PATH_COLOR = (0, 128, 0)
PATH_WIDTH = 4


def _marker_box(position: Position) -> tuple[int, int, int, int]:
    left = position.x * BLOCK_SIZE + MARKER_INSET
    top = position.y * BLOCK_SIZE + MARKER_INSET
    return (left, top, left + MARKER_SIZE - 1, top + MARKER_SIZE - 1)


def _cell_center(position: Position) -> tuple[int, int]:
    half = BLOCK_SIZE // 2
    return (
        position.x * BLOCK_SIZE + BORDER_OFFSET + half,
        position.y * BLOCK_SIZE + BORDER_OFFSET + half,
    )


def render_frame(image: Image.Image, position: Position) -> Image.Image:
    """Copy of the maze with the walker marker drawn at position."""
    frame = image.convert("RGB")
    draw = ImageDraw.Draw(frame)
    draw.rectangle(_marker_box(position), fill=MARKER_COLOR)
    return frame


def sample_path(path: Sequence[Position], max_frames: Optional[int]) -> list[Position]:
    """
    Pick at most max_frames positions, evenly spaced along path.

    The first and last positions are always kept.
    """
    count = len(path)
    if max_frames is None or count <= max_frames:
        return list(path)
    if max_frames < 2:
        return [path[-1]]

    stride = (count - 1) / (max_frames - 1)
    return [path[round(i * stride)] for i in range(max_frames)]


def render_frames(image: Image.Image, path: Sequence[Position]) -> Iterator[Image.Image]:
    """Lazily yield one frame per walked step."""
    return (render_frame(image, position) for position in path)


def render_path(image: Image.Image, path: Sequence[Position]) -> Image.Image:
    """Static overlay: a line through the centers of every walked cell."""
    canvas = image.convert("RGB")
    draw = ImageDraw.Draw(canvas)
    points = [_cell_center(position) for position in path]

    if len(points) >= 2:
        draw.line(points, fill=PATH_COLOR, width=PATH_WIDTH, joint="curve")
    elif len(points) == 1:
        x, y = points[0]
        r = PATH_WIDTH / 2
        draw.ellipse((x - r, y - r, x + r, y + r), fill=PATH_COLOR)
    return canvas


def save_animation(
    image: Image.Image,
    path: Sequence[Position],
    destination,
    frame_ms: int = 20,
    max_frames: Optional[int] = None,
) -> None:
    """
    Write the replay as an animated GIF.

    Args:
        image: Source maze image.
        path: Walked positions, in order.
        destination: File path or binary file object.
        frame_ms: Duration of each frame in milliseconds.
        max_frames: If given, long paths are subsampled to this many frames.

    Raises:
        ValueError: If path is empty.
    """
    if not path:
        raise ValueError("Cannot animate an empty path")

    frames = render_frames(image, sample_path(path, max_frames))
    first = next(frames)
    if isinstance(destination, (str, Path)):
        Path(destination).parent.mkdir(parents=True, exist_ok=True)

    first.save(
        destination,
        format="GIF",
        save_all=True,
        append_images=frames,
        duration=frame_ms,
        loop=0,
    )
