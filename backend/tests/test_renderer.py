"""Tests for solution replay rendering."""

import io

import pytest
from PIL import Image

from mazewalker.core.grid import Position
from mazewalker.services.renderer import (
    MARKER_COLOR,
    PATH_COLOR,
    render_frame,
    render_frames,
    render_path,
    sample_path,
    save_animation,
)

PATH = [Position(0, 0), Position(1, 0), Position(2, 0)]


@pytest.fixture
def maze_image(l_maze) -> Image.Image:
    return l_maze.image()


class TestRenderFrame:
    """Tests for single replay frames."""

    def test_marker_square(self, maze_image):
        """Test the 10x10 marker drawn at x*16+4, y*16+4."""
        frame = render_frame(maze_image, Position(2, 3))

        left, top = 2 * 16 + 4, 3 * 16 + 4
        assert frame.getpixel((left, top)) == MARKER_COLOR
        assert frame.getpixel((left + 9, top + 9)) == MARKER_COLOR
        assert frame.getpixel((left + 10, top + 10)) != MARKER_COLOR
        assert frame.getpixel((left - 1, top)) != MARKER_COLOR

    def test_source_is_untouched(self, maze_image):
        """Test that rendering copies the image."""
        before = maze_image.tobytes()
        render_frame(maze_image, Position(0, 0))
        assert maze_image.tobytes() == before

    def test_render_frames(self, maze_image):
        """Test one frame per walked step."""
        frames = list(render_frames(maze_image, PATH))

        assert len(frames) == 3
        assert frames[1].getpixel((16 + 4, 4)) == MARKER_COLOR
        assert frames[1].getpixel((4, 4)) != MARKER_COLOR


class TestRenderPath:
    """Tests for the static path overlay."""

    def test_render_path(self, maze_image):
        """Test that walked cell centers are painted."""
        canvas = render_path(maze_image, PATH)

        assert canvas.size == (322, 322)
        assert canvas.getpixel((9, 9)) == PATH_COLOR
        assert canvas.getpixel((16 + 9, 9)) == PATH_COLOR
        assert canvas.getpixel((9, 16 * 5 + 9)) != PATH_COLOR

    def test_render_single_position(self, maze_image):
        """Test that a one-step path draws a dot."""
        canvas = render_path(maze_image, [Position(4, 4)])
        assert canvas.getpixel((4 * 16 + 9, 4 * 16 + 9)) == PATH_COLOR


class TestSaveAnimation:
    """Tests for GIF replay output."""

    def test_save_animation_file(self, maze_image, tmp_path):
        """Test writing a GIF with one frame per step."""
        destination = tmp_path / "out" / "4.gif"

        save_animation(maze_image, PATH, destination, frame_ms=30)

        with Image.open(destination) as gif:
            assert gif.format == "GIF"
            assert gif.n_frames == len(PATH)

    def test_save_animation_buffer(self, maze_image):
        """Test writing a GIF into a file object."""
        buffer = io.BytesIO()

        save_animation(maze_image, PATH, buffer)

        assert buffer.getvalue()[:6] in (b"GIF87a", b"GIF89a")

    def test_long_path_is_subsampled(self, maze_image, tmp_path):
        """Test that max_frames bounds the number of frames written."""
        long_path = [Position(i % 20, (i // 20) % 20) for i in range(2000)]
        destination = tmp_path / "long.gif"

        save_animation(maze_image, long_path, destination, max_frames=25)

        with Image.open(destination) as gif:
            assert gif.n_frames == 25

    def test_empty_path_raises(self, maze_image, tmp_path):
        """Test that an empty path cannot be animated."""
        with pytest.raises(ValueError, match="empty path"):
            save_animation(maze_image, [], tmp_path / "empty.gif")


class TestSamplePath:
    """Tests for replay subsampling."""

    def test_short_path_is_kept(self):
        """Test that paths within the limit are not touched."""
        assert sample_path(PATH, 3) == PATH
        assert sample_path(PATH, None) == PATH

    def test_keeps_first_and_last(self):
        """Test evenly spaced sampling that keeps both ends."""
        path = [Position(i, 0) for i in range(101)]

        sampled = sample_path(path, 11)

        assert len(sampled) == 11
        assert sampled[0] == Position(0, 0)
        assert sampled[-1] == Position(100, 0)
        assert sampled[5] == Position(50, 0)

    def test_single_frame_is_the_last_position(self):
        """Test that a one-frame replay shows where the walk ended."""
        assert sample_path(PATH, 1) == [Position(2, 0)]
