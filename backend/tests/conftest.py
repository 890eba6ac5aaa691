"""Pytest configuration and fixtures."""

import io
from pathlib import Path
from typing import AsyncGenerator, Iterable

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from PIL import Image

from mazewalker.config import Settings, get_settings
from mazewalker.core.grid import Direction
from mazewalker.main import app

IMAGE_SIZE = 322
BLOCK_SIZE = 16

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
RED = (255, 0, 0)
BLUE = (0, 0, 255)

# Raw pixel offsets of each sample point inside a cell (frame included)
SIDE_OFFSETS = {
    Direction.NORTH: (9, 1),
    Direction.WEST: (1, 9),
    Direction.SOUTH: (9, 16),
    Direction.EAST: (16, 9),
}
CENTER_OFFSET = (9, 9)


class MazeImageBuilder:
    """Paints synthetic 322x322 maze images.

    Every cell starts closed on all four sides with a white center.
    """

    def __init__(self, alpha: int = 255):
        self.size = IMAGE_SIZE
        self.alpha = alpha
        self.buffer = bytearray(bytes((0, 0, 0, alpha)) * (IMAGE_SIZE * IMAGE_SIZE))
        for y in range(20):
            for x in range(20):
                self._paint_cell(x, y, CENTER_OFFSET, WHITE)

    def paint(self, px: int, py: int, rgb: tuple[int, int, int]) -> "MazeImageBuilder":
        i = (px + py * self.size) * 4
        self.buffer[i:i + 4] = bytes((*rgb, self.alpha))
        return self

    def _paint_cell(self, x: int, y: int, offset: tuple[int, int], rgb) -> None:
        dx, dy = offset
        self.paint(x * BLOCK_SIZE + dx, y * BLOCK_SIZE + dy, rgb)

    def side(self, x: int, y: int, direction: Direction, rgb=WHITE) -> "MazeImageBuilder":
        """Paint one side sample of a cell."""
        self._paint_cell(x, y, SIDE_OFFSETS[direction], rgb)
        return self

    def open(self, x: int, y: int, *directions: Direction) -> "MazeImageBuilder":
        for direction in directions:
            self.side(x, y, direction, WHITE)
        return self

    def center(self, x: int, y: int, rgb) -> "MazeImageBuilder":
        self._paint_cell(x, y, CENTER_OFFSET, rgb)
        return self

    def start(self, x: int, y: int) -> "MazeImageBuilder":
        return self.center(x, y, BLUE)

    def end(self, x: int, y: int) -> "MazeImageBuilder":
        return self.center(x, y, RED)

    def carve(self, cells: Iterable[tuple[int, int]]) -> "MazeImageBuilder":
        """Open the walls between consecutive orthogonal neighbours."""
        cells = list(cells)
        for (x1, y1), (x2, y2) in zip(cells, cells[1:]):
            for direction in Direction:
                dx, dy = direction.delta
                if (x1 + dx, y1 + dy) == (x2, y2):
                    opposite = direction.clockwise().clockwise()
                    self.open(x1, y1, direction)
                    self.open(x2, y2, opposite)
                    break
            else:
                raise ValueError(f"({x1}, {y1}) and ({x2}, {y2}) are not neighbours")
        return self

    def pixels(self) -> bytes:
        return bytes(self.buffer)

    def image(self) -> Image.Image:
        return Image.frombytes("RGBA", (self.size, self.size), self.pixels())

    def png_bytes(self) -> bytes:
        out = io.BytesIO()
        self.image().save(out, format="PNG")
        return out.getvalue()

    def save(self, file_path: Path) -> Path:
        self.image().save(file_path, format="PNG")
        return file_path


# Start (0, 0) walks east to (2, 0), then south to the end at (2, 3)
L_SHAPE = [(0, 0), (1, 0), (2, 0), (2, 1), (2, 2), (2, 3)]


@pytest.fixture
def maze_builder() -> MazeImageBuilder:
    """A blank maze image with every wall closed."""
    return MazeImageBuilder()


@pytest.fixture
def l_maze() -> MazeImageBuilder:
    """A small solvable maze: an L-shaped corridor from start to end."""
    return MazeImageBuilder().carve(L_SHAPE).start(0, 0).end(2, 3)


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings pointing the solutions directory at a temp dir."""
    return Settings(solutions_dir=tmp_path / "solutions")


@pytest_asyncio.fixture(scope="function")
async def client(test_settings: Settings) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client."""
    app.dependency_overrides[get_settings] = lambda: test_settings

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()



@pytest.fixture
def make_maze():
    """Factory for blank maze images with custom options."""
    return MazeImageBuilder
