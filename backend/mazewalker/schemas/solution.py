"""Solution schemas for persistence and API responses."""

from typing import Optional

from pydantic import BaseModel, Field

from mazewalker.core.grid import Block, Color, Grid, Position
from mazewalker.core.image_decoder import DecodedMaze
from mazewalker.core.maze_walker import WalkResult, WalkStatus


class PositionSchema(BaseModel):
    """Schema for a position in the grid."""

    x: int = Field(..., ge=0)
    y: int = Field(..., ge=0)

    @classmethod
    def from_position(cls, position: Position) -> "PositionSchema":
        return cls(x=position.x, y=position.y)

    def to_position(self) -> Position:
        return Position(self.x, self.y)


class BlockSchema(BaseModel):
    """Schema for one block, colors stored as integers."""

    north: Color
    east: Color
    south: Color
    west: Color
    center: Color

    @classmethod
    def from_block(cls, block: Block) -> "BlockSchema":
        return cls(
            north=block.north,
            east=block.east,
            south=block.south,
            west=block.west,
            center=block.center,
        )

    def to_block(self) -> Block:
        return Block(
            north=self.north,
            east=self.east,
            south=self.south,
            west=self.west,
            center=self.center,
        )


class SolutionRecord(BaseModel):
    """Decoded maze plus the walked solution.

    status and iterations are optional so records written without them
    (grid/start/end/solution only) still load.
    """

    name: Optional[str] = None
    grid: list[list[BlockSchema]]
    start: PositionSchema
    end: PositionSchema
    solution: list[PositionSchema]
    status: Optional[WalkStatus] = None
    iterations: Optional[int] = Field(None, ge=0)

    @classmethod
    def from_walk(
        cls,
        maze: DecodedMaze,
        result: WalkResult,
        name: Optional[str] = None,
    ) -> "SolutionRecord":
        """Build a record from a decoded maze and its walk."""
        return cls(
            name=name,
            grid=[[BlockSchema.from_block(block) for block in row] for row in maze.grid],
            start=PositionSchema.from_position(maze.start),
            end=PositionSchema.from_position(maze.end),
            solution=[PositionSchema.from_position(p) for p in result.path],
            status=result.status,
            iterations=result.iterations,
        )

    def to_grid(self) -> Grid:
        return [[block.to_block() for block in row] for row in self.grid]

    def start_position(self) -> Position:
        return self.start.to_position()

    def end_position(self) -> Position:
        return self.end.to_position()

    def path(self) -> list[Position]:
        return [p.to_position() for p in self.solution]


class SolutionSummary(BaseModel):
    """Short description of a stored solution."""

    name: Optional[str] = None
    status: Optional[WalkStatus] = None
    steps: int
    start: PositionSchema
    end: PositionSchema


class SolutionListResponse(BaseModel):
    """Schema for solution list response."""

    solutions: list[SolutionSummary]
    total: int
