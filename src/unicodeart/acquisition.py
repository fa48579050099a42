import logging
from io import BytesIO

import requests
from PIL import Image

from unicodeart.errors import ConversionError, ErrorKind

logger = logging.getLogger(__name__)

URL_SCHEMES = ("http://", "https://")
DOWNLOAD_TIMEOUT = 30.0
USER_AGENT = "unicodeart/0.1"

# Pillow raises a handful of unrelated exception types for bad image data
_DECODE_ERRORS = (OSError, ValueError, SyntaxError, Image.DecompressionBombError)


def is_url(locator: str) -> bool:
    return locator.startswith(URL_SCHEMES)


def load_image(locator: str) -> Image.Image:
    """Resolve a file path or http(s) URL to a fully decoded image."""
    if is_url(locator):
        return load_image_from_url(locator)
    return load_image_from_file(locator)


def load_image_from_file(path: str) -> Image.Image:
    try:
        f = open(path, "rb")
    except OSError as exc:
        logger.debug("Cannot open %s: %s", path, exc)
        raise ConversionError(ErrorKind.INVALID_INPUT_PATH, path) from exc

    with f:
        try:
            return _decode(f)
        except _DECODE_ERRORS as exc:
            logger.debug("Cannot decode %s: %s", path, exc)
            raise ConversionError(ErrorKind.FAILED_TO_DECODE_INPUT, path) from exc


def load_image_from_url(url: str) -> Image.Image:
    logger.debug("Downloading %s", url)
    try:
        response = requests.get(url, headers={"User-Agent": USER_AGENT}, timeout=DOWNLOAD_TIMEOUT, stream=True)
    except requests.RequestException as exc:
        logger.debug("Download of %s failed: %s", url, exc)
        raise ConversionError(ErrorKind.FAILED_TO_DOWNLOAD, url) from exc

    with response:
        try:
            response.raise_for_status()
        except requests.RequestException as exc:
            logger.debug("Download of %s failed: %s", url, exc)
            raise ConversionError(ErrorKind.FAILED_TO_DOWNLOAD, url) from exc

        content_type = response.headers.get("Content-Type")
        try:
            image_format = format_from_content_type(content_type)
        except ValueError as exc:
            logger.debug("Unsupported content type for %s: %s", url, exc)
            raise ConversionError(ErrorKind.DOWNLOAD_INVALID, url) from exc

        try:
            data = response.content
        except requests.RequestException as exc:
            logger.debug("Reading body of %s failed: %s", url, exc)
            raise ConversionError(ErrorKind.DOWNLOAD_INVALID, url) from exc

    formats = [image_format] if image_format is not None else None
    try:
        return _decode(BytesIO(data), formats)
    except _DECODE_ERRORS as exc:
        logger.debug("Cannot decode download from %s: %s", url, exc)
        raise ConversionError(ErrorKind.DOWNLOAD_INVALID, url) from exc


def format_from_content_type(content_type: str | None) -> str | None:
    """Map a Content-Type header to a Pillow format name.

    Returns None when the header is missing or not readable as ASCII, meaning
    the format should be detected from the data. Raises ValueError for a
    readable header that names no image format Pillow knows.
    """
    if content_type is None or not content_type.isascii():
        return None
    mime = content_type.split(";", 1)[0].strip().lower()
    image_format = _mime_formats().get(mime)
    if image_format is None:
        raise ValueError(f"Unrecognised image content type: {content_type!r}")
    logger.debug("Content type %s selects format %s", mime, image_format)
    return image_format


def _mime_formats() -> dict[str, str]:
    Image.init()
    formats: dict[str, str] = {}
    # Several plugins share a MIME type (BMP and DIB); the first registered is the general one
    for fmt, mime in Image.MIME.items():
        formats.setdefault(mime.lower(), fmt)
    return formats


def _decode(fp, formats: list[str] | None = None) -> Image.Image:
    image = Image.open(fp, formats=formats)
    # Image.open is lazy; force decoding while the source is still open
    image.load()
    logger.debug("Decoded %s image, %dx%d, mode %s", image.format, image.width, image.height, image.mode)
    return image
