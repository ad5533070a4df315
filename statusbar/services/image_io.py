"""Decode the source photograph and encode the composited output."""

import io
import logging
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from statusbar.errors import ImageDecodeError, ImageEncodeError

logger = logging.getLogger(__name__)

DEFAULT_FORMAT = "JPEG"

# Formats without an alpha channel or palette need an RGB image
_RGB_ONLY_FORMATS = {"JPEG", "BMP", "PPM"}


def load_source_image(path: str | Path) -> Image.Image:
    """
    Load the source image as a fully decoded RGB image.

    Raises:
        ImageDecodeError: The file is missing or cannot be decoded
    """
    image_path = Path(path)
    try:
        with Image.open(image_path) as img:
            img.load()
            image = img.convert("RGB")
    except FileNotFoundError as e:
        raise ImageDecodeError(f"Failed to open input image file {image_path}: {e}") from e
    except (UnidentifiedImageError, OSError, ValueError) as e:
        raise ImageDecodeError(f"Failed to decode image {image_path}: {e}") from e

    logger.info("Loaded source image %s (%dx%d)", image_path, image.width, image.height)
    return image


def format_for(path: str | Path) -> str:
    """Pillow format name for an output path, JPEG when the extension is unknown."""
    extension = Path(path).suffix.lower()
    return Image.registered_extensions().get(extension, DEFAULT_FORMAT)


def encode_image(image: Image.Image, fmt: str = DEFAULT_FORMAT, quality: int = 75) -> bytes:
    """Encode ``image`` in memory."""
    if fmt in _RGB_ONLY_FORMATS and image.mode != "RGB":
        image = image.convert("RGB")

    options = {"quality": quality} if fmt == "JPEG" else {}
    buffer = io.BytesIO()
    try:
        image.save(buffer, format=fmt, **options)
    except (OSError, ValueError, KeyError) as e:
        raise ImageEncodeError(f"Failed to encode output image as {fmt}: {e}") from e
    return buffer.getvalue()


def save_image(image: Image.Image, path: str | Path, quality: int = 75) -> Path:
    """
    Encode ``image`` and write it to ``path``.

    The image is fully encoded before the file is created, and a partially
    written file is removed, so a failed run leaves no output behind.

    Raises:
        ImageEncodeError: Encoding or writing failed
    """
    output_path = Path(path)
    data = encode_image(image, format_for(output_path), quality)

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(data)
    except OSError as e:
        if output_path.is_file():
            output_path.unlink()
        raise ImageEncodeError(f"Failed to write output image {output_path}: {e}") from e

    logger.info("Saved output image %s (%d bytes)", output_path, len(data))
    return output_path
