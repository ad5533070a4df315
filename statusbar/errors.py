"""Error types for the status bar renderer.

Every error aborts the run; the CLI turns them into a non-zero exit status.
"""


class StatusBarError(Exception):
    """Base class for all fatal rendering pipeline errors."""


class ConfigLoadError(StatusBarError):
    """Bar configuration document is missing or malformed."""


class ImageDecodeError(StatusBarError):
    """Source image is missing or cannot be decoded."""


class FontLoadError(StatusBarError):
    """A section font cannot be loaded at its declared size."""


class ImageEncodeError(StatusBarError):
    """Composited output image cannot be encoded or written."""


class DegenerateLayoutError(StatusBarError):
    """A section without panels or a panel without labels."""
