# colorgram/cli.py
"""
colorgram-cli
Print the dominant colours of an image with their share of the palette.

Usage:
  colorgram-cli -i INPUT [-c COLORS] [--workers N] [--no-color] [--debug]

Output:
  One line per colour, most common first: "<share> | rgb(r, g, b)", drawn on
  the colour itself unless --no-color is given.

Exit status:
  0 success, 1 the input could not be decoded, 2 invalid arguments.
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path
from typing import List, Optional, Sequence

from colorgram import __version__
from colorgram.color import Color
from colorgram.constants import DEFAULT_COLOR_COUNT, default_workers
from colorgram.errors import DecodeError
from colorgram.extract import accumulate_buckets, build_colors, rank_buckets
from colorgram.image_io import decode_image
from colorgram.utils import (
    debug_log,
    enable_line_buffered_stdout,
    error,
    format_proportion,
    format_seconds_compact,
    key_value_pairs_to_string,
    log,
    paint_swatch,
    print_config_line,
    warn,
)


def parse_cli_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse CLI arguments.

    Returns:
      argparse.Namespace with:
        input: Path to the image
        colors: number of colours to extract
        workers: threads used for bucket accumulation
        no_color: print plain text instead of swatches
        debug: bool for timings and bucket stats
    """
    parser = argparse.ArgumentParser(
        prog="colorgram-cli",
        description="Extract the dominant colours of an image.",
    )
    parser.add_argument(
        "-i", "--input", type=Path, required=True, help="Path to the image"
    )
    parser.add_argument(
        "-c",
        "--colors",
        type=int,
        default=DEFAULT_COLOR_COUNT,
        help="Amount of colors to extract",
    )
    parser.add_argument(
        "--workers", type=int, default=default_workers(), help="Accumulation threads"
    )
    parser.add_argument(
        "--no-color", action="store_true", help="Do not paint the output lines"
    )
    parser.add_argument("--debug", action="store_true", help="Timings and bucket stats")
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser.parse_args(argv)


def format_color_line(color: Color, painted: bool = True) -> str:
    """
    One report line: a leading space, then '<share> | rgb(...)' padded to 28.
    """
    text = f" {f'{format_proportion(color.proportion):<6} | {color.rgb}':<28}"
    return paint_swatch(text, color.rgb) if painted else text


def _validate_args(args: argparse.Namespace) -> Optional[str]:
    path = args.input.absolute()
    if not path.exists():
        return f"input file does not exist: {path}"
    if not path.is_file():
        return f"input path is not a file: {path}"
    if args.colors <= 0:
        return "colors amount must be greater than zero"
    if args.workers <= 0:
        return "workers must be greater than zero"
    return None


def run(args: argparse.Namespace) -> List[Color]:
    """
    Decode -> accumulate -> rank -> build, logging each stage when --debug.
    Raises DecodeError if the image cannot be read.
    """
    t_start = time.perf_counter()
    pixels = decode_image(args.input.absolute())
    t_decoded = time.perf_counter()
    height, width = int(pixels.shape[0]), int(pixels.shape[1])

    sums, counts = accumulate_buckets(pixels, workers=args.workers)
    ranked = rank_buckets(sums, counts)
    colors = build_colors(ranked, args.colors)
    t_done = time.perf_counter()

    if args.debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Loaded", f"{width}x{height}"),
                    ("Pixels", width * height),
                    ("Buckets used", len(ranked)),
                    ("Returned", len(colors)),
                ]
            )
        )
        for bucket in ranked[: len(colors)]:
            debug_log(
                f"  bucket {bucket.key:4d}  {bucket.rgb.hex}  pixels={bucket.count:,}"
            )
        debug_log(
            f"Total {format_seconds_compact(t_done - t_start)}  "
            f"(decode={format_seconds_compact(t_decoded - t_start)}, "
            f"quantize={format_seconds_compact(t_done - t_decoded)})"
        )

    if len(colors) < args.colors:
        warn(f"only {len(colors)} of {args.colors} requested colours found")
    return colors


def main(argv: Optional[Sequence[str]] = None) -> None:
    """CLI entry point."""
    enable_line_buffered_stdout()
    args = parse_cli_args(argv)

    problem = _validate_args(args)
    if problem is not None:
        error(problem)
        sys.exit(2)

    if args.debug:
        print_config_line(
            "extract",
            [
                ("Input", args.input.name),
                ("Colours", args.colors),
                ("Workers", args.workers),
            ],
            debug=True,
        )

    try:
        colors = run(args)
    except DecodeError as exc:
        error(str(exc))
        sys.exit(1)

    for color in colors:
        log(format_color_line(color, painted=not args.no_color))


if __name__ == "__main__":
    main()
