"""Image loading: reads maze images into raw RGBA buffers with Pillow."""

import io
from dataclasses import dataclass
from pathlib import Path

from PIL import Image, UnidentifiedImageError


class ImageLoadError(Exception):
    """Exception raised when an image cannot be read or decoded."""

    pass


@dataclass(frozen=True)
class RawImage:
    """Decoded pixels, row-major RGBA."""

    width: int
    height: int
    pixels: bytes


def _to_raw(image: Image.Image) -> RawImage:
    rgba = image.convert("RGBA")
    return RawImage(width=rgba.width, height=rgba.height, pixels=rgba.tobytes())


def open_image_bytes(data: bytes) -> Image.Image:
    """
    Decode image file contents (PNG, GIF, ...) into an RGBA Pillow image.

    Raises:
        ImageLoadError: If the data is not a readable image.
    """
    try:
        with Image.open(io.BytesIO(data)) as image:
            return image.convert("RGBA")
    except (UnidentifiedImageError, OSError) as e:
        raise ImageLoadError(f"Failed to decode image: {e}") from e


def load_image_bytes(data: bytes) -> RawImage:
    """Decode image file contents into a RawImage."""
    return _to_raw(open_image_bytes(data))


def load_image(file_path: Path | str) -> RawImage:
    """
    Load an image file from the filesystem.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ImageLoadError: If the path is not a file or cannot be decoded.
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Image file not found: {file_path}")

    if not file_path.is_file():
        raise ImageLoadError(f"Path is not a file: {file_path}")

    try:
        with Image.open(file_path) as image:
            return _to_raw(image)
    except (UnidentifiedImageError, OSError) as e:
        raise ImageLoadError(f"Failed to read image {file_path}: {e}") from e
