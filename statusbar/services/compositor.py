"""Stack the source image above the rendered bar."""

import logging

from PIL import Image

from statusbar.models import RenderContext
from statusbar.services.renderer import rgb

logger = logging.getLogger(__name__)


def bar_origin(context: RenderContext) -> tuple[int, int]:
    """Top-left corner of the bar on the composited canvas.

    ``BarPosition.BELOW`` is the only placement: full width, under the image.
    """
    return (0, context.image_height)


def composite(context: RenderContext, source: Image.Image, bar_surface: Image.Image) -> Image.Image:
    """Return a canvas with ``source`` at the top and ``bar_surface`` below it."""
    canvas = Image.new(
        "RGB", (context.image_width, context.total_height), rgb(context.bar.color)
    )
    canvas.paste(bar_surface, bar_origin(context))
    canvas.paste(source, (0, 0))

    logger.debug("Composited canvas %dx%d", canvas.width, canvas.height)
    return canvas
