"""Generate a sample bar configuration and source photograph.

Writes ``config.xml`` and ``inputs/input.jpg`` in the project root so the
renderer can be tried without real data. The configuration refers to
``DejaVuSans.ttf``; copy that font (or change the name) into ``font/``.

Usage:
    python scripts/generate_sample.py
"""

from pathlib import Path

from PIL import Image, ImageDraw

# Image dimensions
WIDTH = 800
HEIGHT = 450

# Colors
SKY_TOP = (40, 90, 160)
SKY_BOTTOM = (200, 220, 240)
GROUND = (60, 110, 50)

# Paths
SCRIPT_DIR = Path(__file__).parent
PROJECT_ROOT = SCRIPT_DIR.parent
CONFIG_PATH = PROJECT_ROOT / "config.xml"
INPUT_PATH = PROJECT_ROOT / "inputs" / "input.jpg"

SAMPLE_CONFIG = """\
<bar position="below" color="#101010" height="120">
  <section height="80">
    <font name="DejaVuSans.ttf" color="#FFFFFF" size="18"/>
    <panel color="#1F2937" borderWidth="2" borderColor="#9CA3AF">
      <label text="Speed" align="L"/>
      <value text="120 km/h" align="L"/>
      <label text="Altitude" align="R"/>
      <value text="3000 m" align="R"/>
    </panel>
    <panel color="#374151" borderWidth="2" borderColor="#9CA3AF">
      <label text="Heading" align="L"/>
      <value text="274" align="R"/>
      <label text="Battery" align="L"/>
      <value text="87%" align="R"/>
    </panel>
  </section>
  <section height="40">
    <font name="DejaVuSans.ttf" color="#FACC15" size="14"/>
    <panel color="#111827" borderWidth="1" borderColor="#4B5563">
      <label text="Location" align="L"/>
      <value text="50.0755 N, 14.4378 E" align="L"/>
    </panel>
  </section>
</bar>
"""


def generate_input_image() -> Image.Image:
    """Draw a simple landscape: vertical sky gradient over flat ground."""
    image = Image.new("RGB", (WIDTH, HEIGHT), SKY_BOTTOM)
    draw = ImageDraw.Draw(image)

    horizon = HEIGHT * 2 // 3
    for y in range(horizon):
        t = y / horizon
        color = tuple(int(a + (b - a) * t) for a, b in zip(SKY_TOP, SKY_BOTTOM))
        draw.line([(0, y), (WIDTH, y)], fill=color)

    draw.rectangle([(0, horizon), (WIDTH, HEIGHT)], fill=GROUND)
    return image


def main() -> None:
    """Write the sample configuration and input image."""
    CONFIG_PATH.write_text(SAMPLE_CONFIG, encoding="utf-8")
    print(f"Generated sample configuration: {CONFIG_PATH}")

    INPUT_PATH.parent.mkdir(parents=True, exist_ok=True)
    generate_input_image().save(INPUT_PATH, "JPEG", quality=90)
    print(f"Generated sample input image: {INPUT_PATH}")
    print(f"Size: {WIDTH}x{HEIGHT}")


if __name__ == "__main__":
    main()
