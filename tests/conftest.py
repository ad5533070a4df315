"""Pytest configuration and fixtures for tests."""

import atexit
import os
import shutil
import tempfile

import pytest
from PIL import ImageFont

# Set up test environment variables BEFORE any package imports
# This must run at module import time, not in a fixture
_test_data_dir = tempfile.mkdtemp(prefix="statusbar_test_")
os.environ.setdefault("OUTPUT_IMAGE", os.path.join(_test_data_dir, "outputs", "output.jpg"))

from statusbar.models import Bar, Font, Label, Panel, Section  # noqa: E402


def _cleanup_test_dir():
    """Clean up test data directory on exit."""
    try:
        if os.path.exists(_test_data_dir):
            shutil.rmtree(_test_data_dir)
    except Exception:
        # Silently ignore cleanup failures
        pass


# Register cleanup to run when tests finish
atexit.register(_cleanup_test_dir)


def bundled_font_loader(font, font_dir):
    """Pillow's bundled scalable font, so tests need no TTF files on disk."""
    return ImageFont.load_default(size=max(font.size, 1))


@pytest.fixture
def font_loader():
    return bundled_font_loader


def make_panel(labels, values=(), color="#FF0000", border_width=0, border_color="#FFFFFF"):
    """Build a panel from (text, align) pairs."""
    return Panel(
        color=color,
        border_width=border_width,
        border_color=border_color,
        labels=[Label(text=text, align=align) for text, align in labels],
        values=[Label(text=text, align=align) for text, align in values],
    )


def make_section(panels, height=100, font_color="#0000FF", font_size=16):
    return Section(
        height=height,
        font=Font(name="test.ttf", color=font_color, size=font_size),
        panels=panels,
    )


@pytest.fixture
def speed_altitude_bar():
    """One full-width panel with two label/value rows."""
    panel = make_panel(
        labels=[("Speed", "L"), ("Altitude", "R")],
        values=[("120", "L"), ("3000", "R")],
    )
    return Bar(color="#00FF00", height=100, sections=[make_section([panel], height=100)])
