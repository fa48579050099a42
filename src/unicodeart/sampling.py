import math

import numpy as np
from PIL import Image

MAX_CHANNEL = 255.0

# Rec. 709 luma weights for R, G, B
LUMA_WEIGHTS = np.array([0.2126, 0.7152, 0.0722])

# Single band modes wider than 8 bits, and the factor that brings them to 0-255
_WIDE_MODE_SCALES = {
    "I": 1 / 257,
    "I;16": 1 / 257,
    "I;16L": 1 / 257,
    "I;16B": 1 / 257,
    "I;16N": 1 / 257,
    "F": MAX_CHANNEL,
}


def to_8bit(image: Image.Image) -> Image.Image:
    """Scale a 16-bit integer or 0-1 float image down to an 8-bit "L" image.

    Other modes are returned unchanged. Pillow's own conversions clip these
    modes at 255 instead of scaling them.
    """
    scale = _WIDE_MODE_SCALES.get(image.mode)
    if scale is None:
        return image
    arr = np.nan_to_num(np.asarray(image, dtype=np.float64) * scale, nan=0.0)
    return Image.fromarray(np.rint(np.clip(arr, 0.0, MAX_CHANNEL)).astype(np.uint8))


def to_grayscale(image: Image.Image) -> Image.Image:
    """Grayscale copy of an image as an "LA" image, keeping its alpha.

    Images without alpha get an opaque one.
    """
    rgba = np.asarray(to_8bit(image).convert("RGBA"), dtype=np.float64)
    luma = np.rint(rgba[:, :, :3] @ LUMA_WEIGHTS)
    la = np.stack([luma, rgba[:, :, 3]], axis=-1)
    return Image.fromarray(np.clip(la, 0.0, MAX_CHANNEL).astype(np.uint8))


def pixel_brightness(pixel: tuple[int, ...]) -> float:
    """Brightness of an RGBA pixel in 0-1: the first channel scaled by opacity.

    The image must already be grayscale so that the first channel carries the
    luminance. Fully transparent pixels are 0 whatever their luminance.
    """
    return (pixel[0] / MAX_CHANNEL) * (pixel[3] / MAX_CHANNEL)


def brightness_grid(image: Image.Image) -> np.ndarray:
    """Brightness of every pixel of an RGBA image. Returns array of shape (height, width)."""
    arr = np.asarray(image, dtype=np.float64)
    return (arr[:, :, 0] / MAX_CHANNEL) * (arr[:, :, 3] / MAX_CHANNEL)


def brightness_to_index(brightness: float, num_chars: int) -> int:
    """Map a brightness to an index into a charset of num_chars glyphs.

    Each glyph owns an equal slice of the brightness range, so the -0.5 centres
    the rounding on the slice. Rounds half away from zero and clamps, so any
    brightness, in range or not, yields a valid index. NaN maps to 0.
    """
    if math.isnan(brightness):
        return 0
    scaled = min(max(brightness * num_chars - 0.5, 0.0), num_chars - 1.0)
    return int(math.floor(scaled + 0.5))


def quantize_grid(brightness: np.ndarray, num_chars: int) -> np.ndarray:
    """Vectorised brightness_to_index over a whole brightness grid."""
    scaled = np.nan_to_num(brightness * num_chars - 0.5, nan=0.0)
    scaled = np.clip(scaled, 0.0, num_chars - 1.0)
    return np.floor(scaled + 0.5).astype(np.intp)
