"""Load the bar configuration document (XML) into the data models.

Expected layout::

    <bar position="below" color="#202020" height="100">
      <section height="100">
        <font name="DejaVuSans.ttf" color="#FFFFFF" size="18"/>
        <panel color="#303030" borderWidth="2" borderColor="#FFFFFF">
          <label text="Speed" align="L"/>
          <value text="120" align="L"/>
        </panel>
      </section>
    </bar>
"""

import logging
from pathlib import Path
from xml.etree.ElementTree import Element, ParseError

import defusedxml.ElementTree as ET
from defusedxml import DefusedXmlException
from pydantic import ValidationError

from statusbar.errors import ConfigLoadError
from statusbar.models import Bar

logger = logging.getLogger(__name__)

# Missing numeric attributes count as zero
_NUMERIC_DEFAULT = "0"


def _label_data(element: Element) -> dict:
    return {"text": element.get("text", ""), "align": element.get("align")}


def _panel_data(element: Element) -> dict:
    return {
        "color": element.get("color"),
        "borderWidth": element.get("borderWidth", _NUMERIC_DEFAULT),
        "borderColor": element.get("borderColor"),
        "labels": [_label_data(label) for label in element.findall("label")],
        "values": [_label_data(value) for value in element.findall("value")],
    }


def _section_data(element: Element, index: int) -> dict:
    font = element.find("font")
    if font is None:
        raise ConfigLoadError(f"section {index} has no <font> element")

    return {
        "height": element.get("height", _NUMERIC_DEFAULT),
        "font": {
            "name": font.get("name", ""),
            "color": font.get("color"),
            "size": font.get("size", _NUMERIC_DEFAULT),
        },
        "panels": [_panel_data(panel) for panel in element.findall("panel")],
    }


def bar_from_element(root: Element) -> Bar:
    """Build the bar model from a parsed ``<bar>`` element."""
    data = {
        "position": root.get("position"),
        "color": root.get("color"),
        "height": root.get("height", _NUMERIC_DEFAULT),
        "sections": [
            _section_data(section, i) for i, section in enumerate(root.findall("section"))
        ],
    }
    try:
        return Bar.model_validate(data)
    except ValidationError as e:
        raise ConfigLoadError(f"Invalid bar configuration: {e}") from e


def parse_config(text: str | bytes) -> Bar:
    """Parse a configuration document held in memory."""
    try:
        root = ET.fromstring(text)
    except (ParseError, DefusedXmlException) as e:
        raise ConfigLoadError(f"Failed to decode XML configuration: {e}") from e
    return bar_from_element(root)


def load_config(path: str | Path) -> Bar:
    """
    Load the bar configuration from an XML file.

    Args:
        path: Path to the configuration document

    Returns:
        Parsed and validated bar model

    Raises:
        ConfigLoadError: The file is missing, unreadable or malformed
    """
    config_path = Path(path)
    try:
        text = config_path.read_bytes()
    except OSError as e:
        raise ConfigLoadError(f"Failed to open XML file {config_path}: {e}") from e

    bar = parse_config(text)
    logger.info(
        "Loaded bar configuration from %s: %d sections, height %d",
        config_path,
        len(bar.sections),
        bar.height,
    )
    if bar.sections_height != bar.height:
        logger.debug(
            "Section heights sum to %d but bar height is %d", bar.sections_height, bar.height
        )
    return bar
