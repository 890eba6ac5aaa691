"""
Maze Walker grid types.

A decoded maze is a square grid of blocks. Each block stores the color
sampled on its four sides and at its center:

    WHITE side  = open passage
    other side  = wall
    BLUE center = start cell
    RED center  = end cell
"""

from dataclasses import dataclass
from enum import Enum, IntEnum


class Color(IntEnum):
    """Colors recognised in a maze image.

    Values match the integers stored in solution files.
    """
    OTHER = 0
    WHITE = 1
    BLACK = 2
    RED = 3
    BLUE = 4

    @classmethod
    def from_rgb(cls, r: int, g: int, b: int) -> "Color":
        """Classify an exact RGB triple. Anything else is OTHER."""
        mapping = {
            (255, 255, 255): cls.WHITE,
            (0, 0, 0): cls.BLACK,
            (255, 0, 0): cls.RED,
            (0, 0, 255): cls.BLUE,
        }
        return mapping.get((r, g, b), cls.OTHER)


class Direction(Enum):
    """Headings, declared in clockwise order."""
    NORTH = "north"
    EAST = "east"
    SOUTH = "south"
    WEST = "west"

    @property
    def delta(self) -> tuple[int, int]:
        """Get (dx, dy) for this direction."""
        deltas = {
            Direction.NORTH: (0, -1),
            Direction.SOUTH: (0, 1),
            Direction.EAST: (1, 0),
            Direction.WEST: (-1, 0),
        }
        return deltas[self]

    def clockwise(self) -> "Direction":
        """Direction after turning right."""
        return CLOCKWISE[(CLOCKWISE.index(self) + 1) % 4]

    def counter_clockwise(self) -> "Direction":
        """Direction after turning left."""
        return CLOCKWISE[(CLOCKWISE.index(self) - 1) % 4]


CLOCKWISE = [Direction.NORTH, Direction.EAST, Direction.SOUTH, Direction.WEST]


@dataclass(frozen=True)
class Position:
    """2D position in the grid (not in pixels)."""
    x: int
    y: int

    def move(self, direction: Direction) -> "Position":
        """Return new position after moving in direction."""
        dx, dy = direction.delta
        return Position(self.x + dx, self.y + dy)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class Block:
    """One maze cell: four side colors plus the center marker."""
    north: Color
    east: Color
    south: Color
    west: Color
    center: Color

    def side(self, direction: Direction) -> Color:
        """Get the side color facing direction."""
        return getattr(self, direction.value)

    def is_open(self, direction: Direction) -> bool:
        """Only an exactly white side is a passage."""
        return self.side(direction) == Color.WHITE

    def to_dict(self) -> dict:
        """Convert to dictionary of integer colors."""
        return {
            "north": int(self.north),
            "east": int(self.east),
            "south": int(self.south),
            "west": int(self.west),
            "center": int(self.center),
        }


# Rows first: grid[y][x]
Grid = list[list[Block]]
