import argparse
import logging
import math
import sys

from unicodeart.charsets import DEFAULT_CHARSET, validate_charset
from unicodeart.converter import RenderParameters, generate_art
from unicodeart.errors import ConversionError
from unicodeart.geometry import DEFAULT_SYMBOL_ASPECT_RATIO


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {value}")
    return number


def _positive_float(value: str) -> float:
    number = float(value)
    if not math.isfinite(number) or number <= 0:
        raise argparse.ArgumentTypeError(f"must be a finite number greater than zero: {value}")
    return number


def _charset(value: str) -> str:
    try:
        return validate_charset(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Convert an image to Unicode art")
    parser.add_argument("input", help="Input file path or http(s) URL")
    parser.add_argument("-o", "--output", default=None, help="Output file path (default: standard output)")
    parser.add_argument(
        "-w",
        "--width",
        type=_non_negative_int,
        default=None,
        help="Output width in characters (default: image width in pixels)",
    )
    parser.add_argument(
        "-s",
        "--symbol-aspect-ratio",
        type=_positive_float,
        default=DEFAULT_SYMBOL_ASPECT_RATIO,
        help=f"Width/height ratio of one character cell (default: {DEFAULT_SYMBOL_ASPECT_RATIO})",
    )
    parser.add_argument(
        "-c",
        "--charset",
        type=_charset,
        default=DEFAULT_CHARSET,
        help=f"Characters ordered from darkest to brightest (default: {DEFAULT_CHARSET!r})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", default=False, help="Log debug details to stderr")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    params = RenderParameters(
        input_path=args.input,
        output_path=args.output,
        output_width=args.width,
        symbol_aspect_ratio=args.symbol_aspect_ratio,
        charset=args.charset,
    )
    try:
        generate_art(params)
    except ConversionError as exc:
        print(exc)
        sys.exit(1)
