"""Bar rendering service using Pillow."""

import logging
from pathlib import Path
from typing import Callable, Optional

from PIL import Image, ImageColor, ImageDraw, ImageFont
from PIL.ImageFont import FreeTypeFont

from statusbar.errors import FontLoadError
from statusbar.models import Font, Panel, RenderContext
from statusbar.services.layout import CellLayout, Rect, TextPlacement, iter_cells

logger = logging.getLogger(__name__)

FontLoader = Callable[[Font, Path], FreeTypeFont]

# Pillow anchor letters for the anchor fractions the layout produces
_HORIZONTAL_ANCHORS = {0.0: "l", 1.0: "r"}
_VERTICAL_ANCHORS = {0.5: "m"}


def load_font(font: Font, font_dir: Path) -> FreeTypeFont:
    """Load a section font from the font directory; failures are fatal."""
    font_path = font_dir / font.name
    try:
        return ImageFont.truetype(str(font_path), font.size)
    except (OSError, ValueError) as e:
        raise FontLoadError(f"Failed to load font {font_path} at size {font.size}: {e}") from e


def rgba(color: str) -> tuple[int, int, int, int]:
    """Convert a validated color string to an RGBA tuple for blended drawing."""
    return ImageColor.getcolor(color, "RGBA")  # type: ignore[return-value]


def rgb(color: str) -> tuple[int, int, int]:
    """Opaque RGB for a color painted onto an empty surface.

    A translucent color has nothing beneath it, so it is flattened onto black.
    """
    r, g, b, a = rgba(color)
    return (r * a // 255, g * a // 255, b * a // 255)


def pillow_anchor(placement: TextPlacement) -> str:
    """Two-letter Pillow anchor for a text placement."""
    return _HORIZONTAL_ANCHORS[placement.anchor_x] + _VERTICAL_ANCHORS[placement.anchor_y]


class Renderer:
    """Draws the status bar cells onto a bar-sized surface."""

    def __init__(self, font_dir: str | Path, font_loader: Optional[FontLoader] = None):
        """
        Initialize renderer.

        Args:
            font_dir: Directory the section font names are resolved against
            font_loader: Optional replacement for ``load_font``
        """
        self.font_dir = Path(font_dir)
        self._font_loader = font_loader or load_font
        self._fonts: dict[tuple[str, int], FreeTypeFont] = {}

    def render_bar(self, context: RenderContext) -> Image.Image:
        """
        Render the bar described by ``context``.

        Args:
            context: Bar configuration and source image dimensions

        Returns:
            RGB image of size (image_width, bar.height)
        """
        bar = context.bar
        image = Image.new("RGB", (context.image_width, bar.height), rgb(bar.color))
        # Fills, text and borders blend their alpha over what is already drawn
        draw = ImageDraw.Draw(image, "RGBA")

        cells = 0
        for cell in iter_cells(context):
            self._draw_cell(draw, context, cell)
            cells += 1

        logger.debug("Rendered %d cells in %d sections", cells, len(bar.sections))
        return image

    # =========================================================================
    # Cells
    # =========================================================================

    def _draw_cell(self, draw: ImageDraw.ImageDraw, context: RenderContext, cell: CellLayout) -> None:
        """Fill, label, value and border of a single row, in that order."""
        section = context.bar.sections[cell.section_index]
        panel = section.panels[cell.panel_index]

        if not cell.rect.is_empty:
            draw.rectangle(cell.rect.box(), fill=rgba(panel.color))

        font = self._get_font(section.font)
        fill = rgba(section.font.color)
        self._draw_text(draw, cell.label, font, fill)
        if cell.value is not None:
            self._draw_text(draw, cell.value, font, fill)

        self._stroke_border(draw, cell.rect, panel)

    def _draw_text(
        self,
        draw: ImageDraw.ImageDraw,
        placement: TextPlacement,
        font: FreeTypeFont,
        fill: tuple[int, int, int, int],
    ) -> None:
        if not placement.text:
            return
        draw.text(
            (placement.x, placement.y),
            placement.text,
            fill=fill,
            font=font,
            anchor=pillow_anchor(placement),
        )

    def _stroke_border(self, draw: ImageDraw.ImageDraw, rect: Rect, panel: Panel) -> None:
        """Stroke the cell outline centered on its edges."""
        width = panel.border_width
        if width == 0 or rect.is_empty:
            return

        # Half the stroke lies outside the cell, odd widths keep the extra pixel inside
        spill = width // 2
        x0, y0, x1, y1 = rect.box()
        draw.rectangle(
            (x0 - spill, y0 - spill, x1 + spill, y1 + spill),
            outline=rgba(panel.border_color),
            width=width,
        )

    # =========================================================================
    # Fonts
    # =========================================================================

    def _get_font(self, font: Font) -> FreeTypeFont:
        """Load a font once per (name, size) for the lifetime of the renderer."""
        key = (font.name, font.size)
        if key not in self._fonts:
            self._fonts[key] = self._font_loader(font, self.font_dir)
            logger.debug("Loaded font %s at size %d", font.name, font.size)
        return self._fonts[key]
