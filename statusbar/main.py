"""Photo status bar renderer command line entry point."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

import sentry_sdk
from PIL import Image

from statusbar.config import get_config
from statusbar.errors import StatusBarError
from statusbar.models import Bar, RenderContext
from statusbar.services.compositor import composite
from statusbar.services.config_loader import load_config
from statusbar.services.image_io import load_source_image, save_image
from statusbar.services.layout import iter_cells
from statusbar.services.renderer import FontLoader, Renderer

logger = logging.getLogger(__name__)


def build_context(bar: Bar, image: Image.Image) -> RenderContext:
    """Freeze the bar configuration and source image dimensions for one run."""
    return RenderContext(bar=bar, image_width=image.width, image_height=image.height)


def render_status_bar(
    bar: Bar,
    source: Image.Image,
    font_dir: str | Path,
    font_loader: Optional[FontLoader] = None,
) -> Image.Image:
    """
    Render the bar and stack it below the source image.

    Args:
        bar: Bar configuration
        source: Decoded source image
        font_dir: Directory section font names are resolved against
        font_loader: Optional replacement font loader

    Returns:
        Composited RGB image of size (width, height + bar.height)
    """
    context = build_context(bar, source)
    bar_surface = Renderer(font_dir, font_loader).render_bar(context)
    return composite(context, source, bar_surface)


def dump_layout(bar: Bar, source: Image.Image) -> str:
    """Computed cell geometry as a JSON document."""
    context = build_context(bar, source)
    cells = [cell.model_dump(mode="json") for cell in iter_cells(context)]
    return json.dumps(
        {
            "image": {"width": context.image_width, "height": context.image_height},
            "bar": {"y": context.image_height, "height": bar.height},
            "cells": cells,
        },
        indent=2,
    )


def run(
    config_path: str | Path,
    input_path: str | Path,
    output_path: str | Path,
    font_dir: str | Path,
    quality: int = 75,
) -> Path:
    """Load, render, composite and save; any failure raises ``StatusBarError``."""
    bar = load_config(config_path)
    source = load_source_image(input_path)

    image = render_status_bar(bar, source, font_dir)
    logger.info("Rendered %dx%d composite", image.width, image.height)

    return save_image(image, output_path, quality)


def _jpeg_quality(value: str) -> int:
    """argparse type for the JPEG quality, same range as ``JPEG_QUALITY``."""
    try:
        quality = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid quality {value!r}") from None
    if not 1 <= quality <= 95:
        raise argparse.ArgumentTypeError(f"quality must be from 1 to 95, got {quality}")
    return quality


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    config = get_config()

    parser = argparse.ArgumentParser(description="Render a status bar below a photograph")
    parser.add_argument("--config", default=config.CONFIG_FILE, help="Bar configuration XML")
    parser.add_argument("--input", default=config.INPUT_IMAGE, help="Source image")
    parser.add_argument("--output", default=config.OUTPUT_IMAGE, help="Output image")
    parser.add_argument("--font-dir", default=config.FONT_DIR, help="Font directory")
    parser.add_argument(
        "--quality", type=_jpeg_quality, default=config.JPEG_QUALITY, help="JPEG quality (1-95)"
    )
    parser.add_argument(
        "--dump-layout",
        action="store_true",
        help="Print the computed cell layout as JSON instead of writing an image",
    )
    return parser.parse_args(argv)


def _setup_observability() -> None:
    config = get_config()

    logging.basicConfig(
        level=logging.DEBUG if config.DEBUG else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    # Initialize Sentry/GlitchTip
    if config.SENTRY_DSN:
        sentry_sdk.init(dsn=config.SENTRY_DSN, environment=config.SENTRY_ENVIRONMENT)
        logger.info("Sentry/GlitchTip initialized")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the pipeline once; returns the process exit status."""
    _setup_observability()
    args = _parse_args(argv)

    try:
        if args.dump_layout:
            print(dump_layout(load_config(args.config), load_source_image(args.input)))
        else:
            output = run(args.config, args.input, args.output, args.font_dir, args.quality)
            logger.info(f"Status bar image written to {output}")
    except StatusBarError as e:
        logger.error(f"{type(e).__name__}: {e}")
        sentry_sdk.capture_exception(e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
