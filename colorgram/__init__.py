# colorgram/__init__.py
"""
colorgram package.

Purpose:
  Extract the dominant colours of an image, each weighted by how much of the
  palette it covers. See colorgram.cli for the command line tool.

Public API:
  extract        : path / bytes / PIL image / pixel grid -> list[Color].
  Color, RGB, HSL: value objects returned by extract.
  rgb_to_hsl     : the 0..255 integer HSL derivation used for bucketing.
  decode_image   : Pillow-backed decoder returning uint8 (H, W, 3).
  ExtractError, DecodeError: failures surfaced by extract.

Quick start:
  from colorgram import extract
  for color in extract("photo.jpg", 6):
      print(color.rgb, color.hsl, color.proportion)
"""

__version__ = "0.1.1"

from .color import Color
from .colour_convert import rgb_to_hsl
from .core_types import HSL, RGB
from .errors import DecodeError, ExtractError
from .extract import extract, extract_from_pixels
from .image_io import decode_image

__all__ = [
    "__version__",
    "Color",
    "RGB",
    "HSL",
    "rgb_to_hsl",
    "decode_image",
    "extract",
    "extract_from_pixels",
    "ExtractError",
    "DecodeError",
]
