from enum import Enum


class ErrorKind(Enum):
    """Every way a conversion can fail. Values are the user-facing message templates."""

    INVALID_INPUT_PATH = "Failed to open: {locator}"
    FAILED_TO_DECODE_INPUT = "Failed to decode input image: {locator}"
    FAILED_TO_DOWNLOAD = "Failed to download: {locator}"
    DOWNLOAD_INVALID = "Invalid source: {locator}"
    FAILED_TO_WRITE_TO_OUTPUT = "Failed to save output to: {locator}"


class ConversionError(Exception):
    """Raised by image acquisition and output when a conversion cannot complete."""

    def __init__(self, kind: ErrorKind, locator: str):
        super().__init__(kind.value.format(locator=locator))
        self.kind = kind
        self.locator = locator
