"""Layout engine: turns the bar configuration into pixel geometry.

All coordinates are bar-local (origin at the bar's top-left corner). Widths
and heights use floor division, so when a section does not divide evenly the
trailing pixels are left uncovered.
"""

from enum import Enum
from typing import Iterator, Optional

from pydantic import BaseModel, ConfigDict

from statusbar.errors import DegenerateLayoutError
from statusbar.models import Alignment, Bar, Label, RenderContext

# Horizontal padding between a cell edge and its text
TEXT_MARGIN = 15

# Text is always centered vertically on the row midpoint
VERTICAL_ANCHOR = 0.5


class TextRole(str, Enum):
    LABEL = "label"
    VALUE = "value"


class Rect(BaseModel):
    """Axis-aligned pixel rectangle."""

    model_config = ConfigDict(frozen=True)

    x: int
    y: int
    width: int
    height: int

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def box(self) -> tuple[int, int, int, int]:
        """Inclusive ``(x0, y0, x1, y1)`` box as used by ``ImageDraw``."""
        return (self.x, self.y, self.x + self.width - 1, self.y + self.height - 1)


class TextAnchor(BaseModel):
    """Offset from the cell's left edge plus horizontal anchor fraction."""

    model_config = ConfigDict(frozen=True)

    x_offset: int
    fraction: float


class TextPlacement(BaseModel):
    """A string anchored at an absolute bar-local point."""

    model_config = ConfigDict(frozen=True)

    text: str
    x: int
    y: int
    anchor_x: float
    anchor_y: float = VERTICAL_ANCHOR


class CellLayout(BaseModel):
    """Geometry of one (section, panel, row) cell."""

    model_config = ConfigDict(frozen=True)

    section_index: int
    panel_index: int
    row_index: int
    rect: Rect
    label: TextPlacement
    value: Optional[TextPlacement] = None


def _floor_div(total: int, count: int, what: str) -> int:
    if count <= 0:
        raise DegenerateLayoutError(f"cannot divide layout among {count} {what}")
    return total // count


def panel_width(image_width: int, panel_count: int) -> int:
    """Width shared by every panel of a section."""
    return _floor_div(image_width, panel_count, "panels")


def row_height(section_height: int, label_count: int) -> int:
    """Height of a single label row within a panel."""
    return _floor_div(section_height, label_count, "labels")


def section_offset(bar: Bar, section_index: int) -> int:
    """Vertical offset of a section: the sum of all preceding section heights."""
    return sum(section.height for section in bar.sections[:section_index])


def resolve_anchor(role: TextRole, align: Alignment, width: int) -> TextAnchor:
    """Map an alignment code to an x offset and anchor fraction for ``role``.

    Labels live in the left half of the cell and values in the right half;
    left-aligned text hangs off its anchor, right-aligned text ends on it.
    """
    half = width // 2
    if role is TextRole.LABEL:
        if align is Alignment.LEFT:
            return TextAnchor(x_offset=TEXT_MARGIN, fraction=0.0)
        return TextAnchor(x_offset=half, fraction=1.0)

    if align is Alignment.LEFT:
        return TextAnchor(x_offset=half + TEXT_MARGIN, fraction=0.0)
    return TextAnchor(x_offset=width - TEXT_MARGIN, fraction=1.0)


def cell_rect(context: RenderContext, section_index: int, panel_index: int, row_index: int) -> Rect:
    """Rectangle of a single label row inside its panel."""
    section = context.bar.sections[section_index]
    panel = section.panels[panel_index]

    width = panel_width(context.image_width, section.panel_count)
    height = row_height(section.height, panel.row_count)

    return Rect(
        x=width * panel_index,
        y=section_offset(context.bar, section_index) + height * row_index,
        width=width,
        height=height,
    )


def _place(text: str, role: TextRole, item: Label, rect: Rect) -> TextPlacement:
    anchor = resolve_anchor(role, item.align, rect.width)
    return TextPlacement(
        text=text,
        x=rect.x + anchor.x_offset,
        y=rect.y + rect.height // 2,
        anchor_x=anchor.fraction,
    )


def layout_cell(
    context: RenderContext, section_index: int, panel_index: int, row_index: int
) -> CellLayout:
    """Compute the rectangle and text placements of one cell."""
    panel = context.bar.sections[section_index].panels[panel_index]
    rect = cell_rect(context, section_index, panel_index, row_index)

    label = panel.labels[row_index]
    value = panel.value_for(row_index)

    return CellLayout(
        section_index=section_index,
        panel_index=panel_index,
        row_index=row_index,
        rect=rect,
        label=_place(f"{label.text}:", TextRole.LABEL, label, rect),
        value=_place(value.text, TextRole.VALUE, value, rect) if value is not None else None,
    )


def iter_cells(context: RenderContext) -> Iterator[CellLayout]:
    """Yield every cell in section, then panel, then row order."""
    for s, section in enumerate(context.bar.sections):
        for p, panel in enumerate(section.panels):
            for r in range(panel.row_count):
                yield layout_cell(context, s, p, r)
