# Core module
from .grid import Block, Color, Direction, Grid, Position
from .image_decoder import (
    BLOCK_SIZE,
    BORDER_OFFSET,
    IMAGE_SIZE,
    DecodedMaze,
    DimensionError,
    DuplicateMarkerError,
    MarkerError,
    MazeDecodeError,
    MissingMarkerError,
    PixelBufferError,
    decode,
    pixel_to_color,
)
from .maze_walker import MAX_ITERATIONS, MazeWalker, WalkResult, WalkStatus, solve

__all__ = [
    "Block",
    "Color",
    "Direction",
    "Grid",
    "Position",
    "BLOCK_SIZE",
    "BORDER_OFFSET",
    "IMAGE_SIZE",
    "DecodedMaze",
    "DimensionError",
    "DuplicateMarkerError",
    "MarkerError",
    "MazeDecodeError",
    "MissingMarkerError",
    "PixelBufferError",
    "decode",
    "pixel_to_color",
    "MAX_ITERATIONS",
    "MazeWalker",
    "WalkResult",
    "WalkStatus",
    "solve",
]
