"""Test loading the XML bar configuration."""

import pytest

from statusbar.errors import ConfigLoadError, DegenerateLayoutError
from statusbar.models import Alignment, BarPosition
from statusbar.services.config_loader import load_config, parse_config

SAMPLE_XML = """<?xml version="1.0" encoding="UTF-8"?>
<bar position="below" color="#202020" height="120">
  <section height="80">
    <font name="DejaVuSans.ttf" color="#FFFFFF" size="18"/>
    <panel color="#303030" borderWidth="2" borderColor="#FFFFFF">
      <label text="Speed" align="L"/>
      <value text="120" align="L"/>
      <label text="Altitude" align="R"/>
      <value text="3000" align="R"/>
    </panel>
    <panel color="#404040" borderWidth="1" borderColor="#AAAAAA">
      <label text="Heading" align="L"/>
    </panel>
  </section>
  <section height="40">
    <font name="DejaVuSans-Bold.ttf" color="#FACC15" size="14"/>
    <panel color="#111111" borderWidth="0" borderColor="#000000">
      <label text="Location" align="L"/>
      <value text="Prague" align="R"/>
    </panel>
  </section>
</bar>
"""


def test_parse_sample_config():
    """Test parsing a full configuration document."""
    bar = parse_config(SAMPLE_XML.encode("utf-8"))

    assert bar.position is BarPosition.BELOW
    assert bar.color == "#202020"
    assert bar.height == 120
    assert [s.height for s in bar.sections] == [80, 40]

    first = bar.sections[0]
    assert first.font.name == "DejaVuSans.ttf"
    assert first.font.size == 18
    assert first.panel_count == 2

    panel = first.panels[0]
    assert panel.border_width == 2
    assert panel.border_color == "#FFFFFF"
    assert [label.text for label in panel.labels] == ["Speed", "Altitude"]
    assert [value.align for value in panel.values] == [Alignment.LEFT, Alignment.RIGHT]

    assert first.panels[1].values == ()
    assert bar.sections[1].font.color == "#FACC15"


def test_load_config_from_file(tmp_path):
    """Test loading the configuration from disk."""
    path = tmp_path / "config.xml"
    path.write_text(SAMPLE_XML, encoding="utf-8")

    bar = load_config(path)

    assert len(bar.sections) == 2


def test_missing_attributes_use_defaults():
    """Test missing attributes fall back to zero values."""
    bar = parse_config(
        '<bar><section><font name="f.ttf"/><panel><label/></panel></section></bar>'
    )

    assert bar.height == 0
    assert bar.color == "#000000"
    section = bar.sections[0]
    assert section.height == 0
    assert section.font.size == 0
    label = section.panels[0].labels[0]
    assert label.text == ""
    assert label.align is Alignment.LEFT


def test_missing_file_raises(tmp_path):
    """Test a missing configuration file is fatal."""
    with pytest.raises(ConfigLoadError, match="Failed to open"):
        load_config(tmp_path / "missing.xml")


def test_malformed_xml_raises():
    """Test malformed XML is fatal."""
    with pytest.raises(ConfigLoadError, match="Failed to decode"):
        parse_config("<bar><section></bar>")


def test_entity_declarations_are_refused():
    """Test entity declarations are rejected by the XML parser."""
    xml = '<!DOCTYPE bar [<!ENTITY big "aaaa">]><bar color="&big;"/>'
    with pytest.raises(ConfigLoadError):
        parse_config(xml)


def test_invalid_number_raises():
    """Test non-numeric sizes are rejected."""
    with pytest.raises(ConfigLoadError, match="Invalid bar configuration"):
        parse_config('<bar height="tall"/>')


def test_negative_height_raises():
    """Test negative heights are rejected."""
    with pytest.raises(ConfigLoadError):
        parse_config('<bar height="-5"/>')


def test_invalid_alignment_raises():
    """Test alignment codes other than L and R are rejected."""
    with pytest.raises(ConfigLoadError):
        parse_config(
            '<bar><section height="10"><font name="f.ttf" size="10"/>'
            '<panel><label text="A" align="C"/></panel></section></bar>'
        )


def test_section_without_font_raises():
    """Test a section must declare its font."""
    with pytest.raises(ConfigLoadError, match="no <font>"):
        parse_config('<bar><section height="10"><panel><label text="A"/></panel></section></bar>')


def test_section_without_panels_is_degenerate():
    """Test a section without panels cannot be laid out."""
    with pytest.raises(DegenerateLayoutError):
        parse_config('<bar><section height="10"><font name="f.ttf" size="10"/></section></bar>')


def test_panel_without_labels_is_degenerate():
    """Test a panel without labels cannot be laid out."""
    with pytest.raises(DegenerateLayoutError):
        parse_config(
            '<bar><section height="10"><font name="f.ttf" size="10"/>'
            '<panel><value text="1"/></panel></section></bar>'
        )
