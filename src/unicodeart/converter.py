import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from PIL import Image

from unicodeart.acquisition import load_image
from unicodeart.charsets import DEFAULT_CHARSET, validate_charset
from unicodeart.errors import ConversionError, ErrorKind
from unicodeart.geometry import DEFAULT_SYMBOL_ASPECT_RATIO, target_size
from unicodeart.grid import CharacterGrid
from unicodeart.sampling import to_grayscale

logger = logging.getLogger(__name__)

# Closest Pillow filter to Catmull-Rom
RESAMPLE = Image.Resampling.BICUBIC


@dataclass(frozen=True)
class RenderParameters:
    input_path: str
    output_path: str | None = None
    output_width: int | None = None  # None keeps the image's own pixel width
    symbol_aspect_ratio: float = DEFAULT_SYMBOL_ASPECT_RATIO
    charset: str = DEFAULT_CHARSET


def image_to_art(
    image: Image.Image,
    charset: str = DEFAULT_CHARSET,
    width: int | None = None,
    symbol_aspect_ratio: float = DEFAULT_SYMBOL_ASPECT_RATIO,
) -> CharacterGrid:
    """Render a decoded image as a grid of charset glyphs, one per resampled pixel."""
    validate_charset(charset)
    size = target_size(image.width, image.height, width, symbol_aspect_ratio)
    if 0 in size:
        return CharacterGrid.filled(size)

    gray = to_grayscale(image)
    if gray.size != size:
        logger.debug("Resizing %dx%d to %dx%d", gray.width, gray.height, *size)
        gray = gray.resize(size, RESAMPLE)
    return CharacterGrid.from_image(gray, charset)


def write_art(text: str, output_path: str | None = None) -> None:
    """Write rendered art to a file, or to stdout followed by a blank line when no path is given."""
    if output_path is None:
        sys.stdout.write(text + "\n")
        sys.stdout.flush()
        return
    try:
        Path(output_path).write_text(text, encoding="utf-8")
    except OSError as exc:
        logger.debug("Cannot write %s: %s", output_path, exc)
        raise ConversionError(ErrorKind.FAILED_TO_WRITE_TO_OUTPUT, output_path) from exc


def generate_art(params: RenderParameters) -> None:
    """Load, render and write one image. Raises ConversionError on any failure."""
    image = load_image(params.input_path)
    grid = image_to_art(
        image,
        charset=params.charset,
        width=params.output_width,
        symbol_aspect_ratio=params.symbol_aspect_ratio,
    )
    write_art(str(grid), params.output_path)
