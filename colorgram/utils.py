# colorgram/utils.py
from __future__ import annotations

"""
Shared utilities for colorgram.

Row partitioning for threaded accumulation, compact formatting, terminal
colouring, and tidy print-based logging for the CLI.
"""

import sys
from typing import Any, Iterable, List, Tuple

from .core_types import RGB


# Work splitting


def split_rows_into_parts(height: int, parts: int) -> List[Tuple[int, int]]:
    """Partition range [0, height) into ~parts contiguous [start, end) row spans."""
    parts = max(1, int(parts))
    step = max(1, (height + parts - 1) // parts)
    return [(start, min(start + step, height)) for start in range(0, height, step)]


#  Time / number formatting


def format_seconds_compact(seconds: float) -> str:
    """Human-friendly seconds: '<ms>ms', '<s>s', or 'Mm Ss'."""
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f}ms"
    if seconds < 60.0:
        return f"{seconds:.3f}s"
    minutes = int(seconds // 60)
    return f"{minutes}m {seconds - 60 * minutes:.1f}s"


def format_bool_on_off(value: Any) -> str:
    """Pretty boolean: 'on'/'off' for bools; str(value) otherwise."""
    if isinstance(value, bool):
        return "on" if value else "off"
    return str(value)


def format_number_compact(value: Any) -> str:
    """Pretty number: 1,234 style for ints; compact for floats; passthrough otherwise."""
    if isinstance(value, int):
        return f"{value:,}"
    if isinstance(value, float):
        return f"{value:.3f}".rstrip("0").rstrip(".")
    return str(value)


def format_proportion(proportion: float) -> str:
    """0..1 share as a two-decimal percentage, e.g. 0.5 -> '50.00%'."""
    return f"{proportion * 100.0:.2f}%"


def key_value_pairs_to_string(
    pairs: Iterable[Tuple[str, Any]], sep: str = "  ", eq: str = ": "
) -> str:
    """Format (name, value) pairs as 'Name: value' blocks separated by sep."""
    out: List[str] = []
    for name, value in pairs:
        display = (
            format_bool_on_off(value)
            if isinstance(value, bool)
            else format_number_compact(value)
        )
        out.append(f"{name}{eq}{display}")
    return sep.join(out)


# Terminal colour


def paint_swatch(text: str, background: RGB) -> str:
    """
    Bold text on a 24-bit background, foreground inverted for contrast.
    """
    fg = background.inverted()
    return (
        f"\033[1;38;2;{fg.r};{fg.g};{fg.b};48;2;{background.r};{background.g};{background.b}m"
        f"{text}\033[0m"
    )


#  CLI logging


def enable_line_buffered_stdout() -> None:
    """Enable line-buffered stdout when the stream supports .reconfigure()."""
    reconfig = getattr(sys.stdout, "reconfigure", None)
    if callable(reconfig):
        try:
            reconfig(line_buffering=True, write_through=True)
        except (OSError, ValueError):
            pass


def print_config_line(
    section: str, pairs: Iterable[Tuple[str, Any]], debug: bool
) -> None:
    """
    Emit a single config line, e.g.
      [extract] Colours: 10  Workers: 4
    Routes to debug_log() when debug=True, else to log().
    """
    line = f"[{section}] {key_value_pairs_to_string(pairs)}"
    (debug_log if debug else log)(line)


def log(message: str) -> None:
    """Plain log line."""
    print(message, flush=True)


def debug_log(message: str) -> None:
    """Debug log line."""
    print(f"[debug] {message}", flush=True)


def warn(message: str) -> None:
    """Warning log line."""
    print(f"[warn] {message}", flush=True)


def error(message: str) -> None:
    """Error line to stderr."""
    print(f"error: {message}", file=sys.stderr, flush=True)


__all__ = [
    "split_rows_into_parts",
    "format_seconds_compact",
    "format_bool_on_off",
    "format_number_compact",
    "format_proportion",
    "key_value_pairs_to_string",
    "paint_swatch",
    "enable_line_buffered_stdout",
    "print_config_line",
    "log",
    "debug_log",
    "warn",
    "error",
]
