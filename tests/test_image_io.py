"""Test source image decoding and output encoding."""

from io import BytesIO

import pytest
from PIL import Image

from statusbar.errors import ImageDecodeError, ImageEncodeError
from statusbar.services.image_io import encode_image, format_for, load_source_image, save_image


def test_load_source_image_converts_to_rgb(tmp_path):
    """Test source images are decoded to RGB."""
    path = tmp_path / "input.png"
    Image.new("RGBA", (12, 8), (10, 20, 30, 255)).save(path)

    image = load_source_image(path)

    assert image.mode == "RGB"
    assert image.size == (12, 8)
    assert image.getpixel((0, 0)) == (10, 20, 30)


def test_missing_source_image(tmp_path):
    """Test a missing source image is fatal."""
    with pytest.raises(ImageDecodeError, match="Failed to open"):
        load_source_image(tmp_path / "missing.jpg")


def test_undecodable_source_image(tmp_path):
    """Test an undecodable source image is fatal."""
    path = tmp_path / "input.jpg"
    path.write_bytes(b"definitely not a jpeg")

    with pytest.raises(ImageDecodeError, match="Failed to decode"):
        load_source_image(path)


@pytest.mark.parametrize(
    "name,expected",
    [("out.jpg", "JPEG"), ("out.JPEG", "JPEG"), ("out.png", "PNG"), ("out", "JPEG")],
)
def test_format_for(name, expected):
    """Test output format follows the file extension."""
    assert format_for(name) == expected


def test_encode_jpeg():
    """Test JPEG encoding in memory."""
    data = encode_image(Image.new("RGB", (20, 10), (200, 0, 0)), "JPEG", quality=90)

    decoded = Image.open(BytesIO(data))
    assert decoded.format == "JPEG"
    assert decoded.size == (20, 10)


def test_encode_unknown_format_fails():
    """Test encoding to an unknown format is fatal."""
    with pytest.raises(ImageEncodeError):
        encode_image(Image.new("RGB", (4, 4)), "NOT-A-FORMAT")


def test_save_creates_output_directory(tmp_path):
    """Test saving creates missing output directories."""
    path = tmp_path / "outputs" / "nested" / "output.png"

    saved = save_image(Image.new("RGB", (6, 4), (1, 2, 3)), path)

    assert saved == path
    with Image.open(path) as img:
        assert img.format == "PNG"
        assert img.getpixel((0, 0)) == (1, 2, 3)


def test_save_to_unwritable_path_fails(tmp_path):
    """Test a failed write raises and leaves the target alone."""
    target = tmp_path / "output.jpg"
    target.mkdir()

    with pytest.raises(ImageEncodeError, match="Failed to write"):
        save_image(Image.new("RGB", (4, 4)), target)

    assert target.is_dir()
