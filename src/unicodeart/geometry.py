import logging

logger = logging.getLogger(__name__)

# Terminal glyphs are roughly twice as tall as they are wide
DEFAULT_SYMBOL_ASPECT_RATIO = 0.5


def target_size(
    orig_width: int,
    orig_height: int,
    width: int | None = None,
    symbol_aspect_ratio: float = DEFAULT_SYMBOL_ASPECT_RATIO,
) -> tuple[int, int]:
    """Pixel size to resample an image to so that one pixel becomes one character cell.

    The height is scaled by the symbol aspect ratio so the text keeps the
    source's proportions, and truncated toward zero. A height of 0 is valid and
    means the rendering is empty.
    """
    if width is None:
        width = orig_width
    aspect_ratio = orig_width / orig_height
    height = int(width * symbol_aspect_ratio / aspect_ratio)
    logger.debug("Planned %dx%d cells for a %dx%d image", width, height, orig_width, orig_height)
    return width, height
