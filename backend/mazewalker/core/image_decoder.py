"""
Image Grid Decoder for Maze Walker.

Turns a raw RGBA pixel buffer into a grid of blocks.

Image Format:
    322x322 pixels, row-major, 4 bytes per pixel (RGBA).
    A 1px frame surrounds a 20x20 grid of 16px cells.
    Each cell is read at five sample points (north, west, south,
    east, center) relative to the frame-stripped image.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, Optional

from mazewalker.core.grid import Block, Color, Grid, Position

logger = logging.getLogger(__name__)

IMAGE_SIZE = 322
BLOCK_SIZE = 16
BORDER_OFFSET = 1
CHANNELS = 4

# Sample points inside a cell, tuned against the reference mazes
SAMPLE_MID = 8
SAMPLE_FAR = 15


class MazeDecodeError(Exception):
    """Exception raised when an image cannot be decoded into a maze."""

    pass


class DimensionError(MazeDecodeError):
    """Exception raised when the image is not the supported size."""

    pass


class PixelBufferError(MazeDecodeError):
    """Exception raised when the buffer does not match the dimensions."""

    pass


class MarkerError(MazeDecodeError):
    """Exception raised when start/end markers are not unique."""

    pass


class MissingMarkerError(MarkerError):
    """Exception raised when the start or end marker is absent."""

    pass


class DuplicateMarkerError(MarkerError):
    """Exception raised when a marker appears on more than one cell."""

    pass


@dataclass
class DecodedMaze:
    """Decoded grid with its start and end cells."""

    grid: Grid
    start: Position
    end: Position

    @property
    def grid_count(self) -> int:
        return len(self.grid)

    def __iter__(self) -> Iterator:
        # Allows `grid, start, end = decode(...)`
        return iter((self.grid, self.start, self.end))

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "grid": [[block.to_dict() for block in row] for row in self.grid],
            "start": self.start.to_dict(),
            "end": self.end.to_dict(),
        }


def pixel_to_color(r: int, g: int, b: int) -> Color:
    """Classify a pixel by exact RGB match. Alpha is ignored."""
    return Color.from_rgb(r, g, b)


def _sample(pixels: bytes, width: int, x: int, y: int) -> Color:
    """Read the color at (x, y) of the frame-stripped image."""
    i = ((x + BORDER_OFFSET) + (y + BORDER_OFFSET) * width) * CHANNELS
    return pixel_to_color(pixels[i], pixels[i + 1], pixels[i + 2])


def decode(pixels: bytes, width: int, height: int) -> DecodedMaze:
    """
    Decode a maze image buffer into a grid.

    Args:
        pixels: RGBA bytes, row-major, width * height * 4 long.
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        DecodedMaze with grid, start and end positions.

    Raises:
        DimensionError: If the image is not 322x322.
        PixelBufferError: If the buffer length does not match.
        MissingMarkerError: If there is no start or no end cell.
        DuplicateMarkerError: If there is more than one start or end cell.
    """
    if width != IMAGE_SIZE or height != IMAGE_SIZE:
        raise DimensionError(
            f"Wrong image dimensions {width}x{height}. "
            f"Expected {IMAGE_SIZE}x{IMAGE_SIZE}"
        )

    expected = width * height * CHANNELS
    if len(pixels) != expected:
        raise PixelBufferError(
            f"Pixel buffer has {len(pixels)} bytes, expected {expected}"
        )

    grid_count = round(width / BLOCK_SIZE)

    grid: Grid = []
    start: Optional[Position] = None
    end: Optional[Position] = None

    for y in range(grid_count):
        row = []
        for x in range(grid_count):
            block_x = x * BLOCK_SIZE
            block_y = y * BLOCK_SIZE

            block = Block(
                north=_sample(pixels, width, block_x + SAMPLE_MID, block_y),
                east=_sample(pixels, width, block_x + SAMPLE_FAR, block_y + SAMPLE_MID),
                south=_sample(pixels, width, block_x + SAMPLE_MID, block_y + SAMPLE_FAR),
                west=_sample(pixels, width, block_x, block_y + SAMPLE_MID),
                center=_sample(pixels, width, block_x + SAMPLE_MID, block_y + SAMPLE_MID),
            )

            if block.center == Color.BLUE:
                if start is not None:
                    raise DuplicateMarkerError(
                        f"Multiple start cells found: "
                        f"first at ({start.x}, {start.y}), second at ({x}, {y})"
                    )
                start = Position(x, y)
            elif block.center == Color.RED:
                if end is not None:
                    raise DuplicateMarkerError(
                        f"Multiple end cells found: "
                        f"first at ({end.x}, {end.y}), second at ({x}, {y})"
                    )
                end = Position(x, y)

            row.append(block)
        grid.append(row)

    if start is None:
        raise MissingMarkerError("Maze must have a start cell (blue center)")

    if end is None:
        raise MissingMarkerError("Maze must have an end cell (red center)")

    logger.debug(
        f"Decoded {grid_count}x{grid_count} maze, "
        f"start=({start.x}, {start.y}) end=({end.x}, {end.y})"
    )

    return DecodedMaze(grid=grid, start=start, end=end)
