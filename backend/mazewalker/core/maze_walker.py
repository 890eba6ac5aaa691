"""
Maze Walker

Right-hand wall follower over a decoded grid.

Strategy, first match wins on every step:
1. If the cell to the right is open, turn right and move there
2. Else if the cell ahead is open, move there
3. Else turn left in place

Only the current block's own sides decide whether a move is open.
The walk is not a shortest-path search: revisits and loops are
recorded exactly as walked.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum

from mazewalker.core.grid import Direction, Grid, Position

logger = logging.getLogger(__name__)

MAX_ITERATIONS = 5000


class WalkStatus(Enum):
    """How a walk ended."""
    SOLVED = "solved"
    CAP_EXCEEDED = "cap_exceeded"


@dataclass
class WalkResult:
    """Result of a walk."""
    status: WalkStatus
    path: list[Position] = field(default_factory=list)
    iterations: int = 0

    @property
    def solved(self) -> bool:
        return self.status == WalkStatus.SOLVED

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "status": self.status.value,
            "path": [position.to_dict() for position in self.path],
            "iterations": self.iterations,
        }


class MazeWalker:
    """
    Walks a grid from start to end keeping its right hand on the wall.

    Example usage:
        walker = MazeWalker(grid, start, end)
        result = walker.solve()
        if result.solved:
            print(result.path)
    """

    def __init__(
        self,
        grid: Grid,
        start: Position,
        end: Position,
        max_iterations: int = MAX_ITERATIONS,
    ):
        self.grid = grid
        self.end = end
        self.max_iterations = max_iterations

        self.position = start
        self.direction = Direction.EAST
        self.steps_taken: list[Position] = [start]

        # Bookkeeping only, never consulted when choosing a move
        self._visited: set[Position] = {start}

    def is_visited(self, position: Position) -> bool:
        """Whether the walker has stood on position."""
        return position in self._visited

    def _in_grid(self, position: Position) -> bool:
        return 0 <= position.y < len(self.grid) and 0 <= position.x < len(self.grid[position.y])

    def can_move_to(self, position: Position) -> bool:
        """
        Check a move from the current cell.

        The target must be an orthogonal neighbour inside the grid and the
        current block's side facing it must be white.
        """
        if not self._in_grid(position):
            return False

        block = self.grid[self.position.y][self.position.x]
        for direction in Direction:
            if self.position.move(direction) == position:
                return block.is_open(direction)
        return False

    def _move_to(self, position: Position) -> None:
        self.position = position
        self.steps_taken.append(position)
        self._visited.add(position)

    def step(self) -> None:
        """Apply one transition of the wall follower."""
        right_pos = self.position.move(self.direction.clockwise())
        ahead_pos = self.position.move(self.direction)

        if self.can_move_to(right_pos):
            self.direction = self.direction.clockwise()
            self._move_to(right_pos)
        elif self.can_move_to(ahead_pos):
            self._move_to(ahead_pos)
        else:
            self.direction = self.direction.counter_clockwise()

    def solve(self) -> WalkResult:
        """
        Step until the end is reached or the iteration cap is hit.

        Returns:
            WalkResult with the walked path. Hitting the cap is not an
            error: the partial path is returned with CAP_EXCEEDED.
        """
        iterations = 0

        while self.position != self.end:
            if iterations >= self.max_iterations:
                logger.warning(
                    f"Iteration limit reached ({self.max_iterations}) "
                    f"after {len(self.steps_taken)} steps"
                )
                return WalkResult(
                    status=WalkStatus.CAP_EXCEEDED,
                    path=list(self.steps_taken),
                    iterations=iterations,
                )

            self.step()
            iterations += 1

        logger.info(f"Solution found, took {len(self.steps_taken)} steps")
        return WalkResult(
            status=WalkStatus.SOLVED,
            path=list(self.steps_taken),
            iterations=iterations,
        )


def solve(grid: Grid, start: Position, end: Position) -> WalkResult:
    """Walk grid from start to end with the default iteration cap."""
    return MazeWalker(grid, start, end).solve()
