"""Data models for the photo status bar renderer."""

import logging
import re
from enum import Enum
from typing import Optional

from PIL import ImageColor
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from statusbar.errors import DegenerateLayoutError

logger = logging.getLogger(__name__)

# Hex colors without the leading "#": RGB, RRGGBB or RRGGBBAA
_BARE_HEX_RE = re.compile(r"^(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")

DEFAULT_COLOR = "#000000"


def normalize_color(value: object) -> str:
    """Return a color string Pillow can parse, or raise ValueError."""
    if value is None or value == "":
        return DEFAULT_COLOR
    if not isinstance(value, str):
        raise ValueError(f"color must be a string, got {type(value).__name__}")
    color = value.strip()
    try:
        ImageColor.getrgb(color)
        return color
    except ValueError:
        if not _BARE_HEX_RE.match(color):
            raise
    # Not a color Pillow knows by name, read it as hex
    return f"#{color}"


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


# ============================================================================
# Bar configuration tree
# ============================================================================


class Alignment(str, Enum):
    """Horizontal alignment code of a label or value."""

    LEFT = "L"
    RIGHT = "R"


class BarPosition(str, Enum):
    """Placement of the bar relative to the source image.

    Only one placement exists today; the field is kept as a variant so more
    placements can be added without changing the configuration format.
    """

    BELOW = "below"


class Label(_FrozenModel):
    """A caption or value row inside a panel."""

    text: str = ""
    align: Alignment = Alignment.LEFT

    @field_validator("align", mode="before")
    @classmethod
    def validate_align(cls, value: object) -> object:
        if value is None or value == "":
            return Alignment.LEFT
        if isinstance(value, str):
            return value.strip().upper()
        return value


class Font(_FrozenModel):
    """Font shared by every panel of a section."""

    name: str = ""
    color: str = DEFAULT_COLOR
    size: int = Field(0, ge=0)

    @field_validator("color", mode="before")
    @classmethod
    def validate_color(cls, value: object) -> str:
        return normalize_color(value)


class Panel(_FrozenModel):
    """Horizontal division of a section holding label/value rows."""

    color: str = DEFAULT_COLOR
    border_width: int = Field(0, ge=0, alias="borderWidth")
    border_color: str = Field(DEFAULT_COLOR, alias="borderColor")
    labels: tuple[Label, ...] = ()
    values: tuple[Label, ...] = ()

    @field_validator("color", "border_color", mode="before")
    @classmethod
    def validate_color(cls, value: object) -> str:
        return normalize_color(value)

    @model_validator(mode="after")
    def check_labels(self) -> "Panel":
        if not self.labels:
            raise DegenerateLayoutError("panel must contain at least one label")
        return self

    @property
    def row_count(self) -> int:
        return len(self.labels)

    def value_for(self, index: int) -> Optional[Label]:
        """Value paired with the label at ``index``, if there is one."""
        if 0 <= index < len(self.values):
            return self.values[index]
        return None


class Section(_FrozenModel):
    """Horizontal band of the bar, stacked top to bottom."""

    height: int = Field(0, ge=0)
    font: Font
    panels: tuple[Panel, ...] = ()

    @model_validator(mode="after")
    def check_panels(self) -> "Section":
        if not self.panels:
            raise DegenerateLayoutError("section must contain at least one panel")
        return self

    @property
    def panel_count(self) -> int:
        return len(self.panels)


class Bar(_FrozenModel):
    """Root of the bar configuration tree."""

    position: BarPosition = BarPosition.BELOW
    color: str = DEFAULT_COLOR
    height: int = Field(0, ge=0)
    sections: tuple[Section, ...] = ()

    @field_validator("position", mode="before")
    @classmethod
    def validate_position(cls, value: object) -> BarPosition:
        if value is None or value == "":
            return BarPosition.BELOW
        if isinstance(value, BarPosition):
            return value
        if isinstance(value, str) and value.strip().lower() in ("below", "bottom"):
            return BarPosition.BELOW
        logger.warning("Unsupported bar position %r; placing the bar below the image", value)
        return BarPosition.BELOW

    @field_validator("color", mode="before")
    @classmethod
    def validate_color(cls, value: object) -> str:
        return normalize_color(value)

    @property
    def sections_height(self) -> int:
        """Sum of section heights; may differ from ``height``."""
        return sum(section.height for section in self.sections)


# ============================================================================
# Run context
# ============================================================================


class RenderContext(_FrozenModel):
    """Immutable inputs of one rendering run."""

    bar: Bar
    image_width: int = Field(..., ge=0)
    image_height: int = Field(..., ge=0)

    @property
    def total_height(self) -> int:
        """Height of the composited canvas (image plus bar)."""
        return self.image_height + self.bar.height
