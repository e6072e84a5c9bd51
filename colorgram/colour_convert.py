# colorgram/colour_convert.py
from __future__ import annotations

"""
RGB to HSL conversion on a 0..255 integer scale.

Exports:
  rgb_to_hsl(rgb)           scalar, returns HSL
  rgb_to_hsl_array(pixels)  vectorised, uint8 [...,3] -> uint8 [...,3]
  luminance(rgb)            scalar 8-bit luma (float32, truncated)
  luminance_array(pixels)   vectorised luma

This is not textbook HSL. Hue, saturation and lightness are produced with
integer arithmetic: lightness is a shift-halved sum, every division truncates
toward zero and results wrap to 8 bits. Palettes produced elsewhere were
computed with exactly these numbers, so the arithmetic must not change.
Both forms return identical values on every input.
"""

from typing import Sequence, Union

import numpy as np
from numpy.typing import NDArray

from .constants import HUE_OFFSET_B, HUE_OFFSET_G, HUE_SPAN, LUMA_B, LUMA_G, LUMA_R
from .core_types import HSL, RGB, U8Pixels, coerce_to_rgb

RGBLike = Union[RGB, Sequence[int], NDArray[np.generic]]


# Truncating division


def _trunc_div(num: int, den: int) -> int:
    """Integer division rounding toward zero (Python's // floors)."""
    q = abs(num) // abs(den)
    return -q if (num < 0) != (den < 0) else q


def _trunc_div_array(num: np.ndarray, den: np.ndarray) -> np.ndarray:
    q = np.abs(num) // np.abs(den)
    return np.where((num < 0) != (den < 0), -q, q)


# Scalar


def rgb_to_hsl(rgb: RGBLike) -> HSL:
    """
    Convert one RGB triple to the 0..255 HSL triple.

    Total over all 2**24 inputs. Reference points:
      (0, 0, 0)       -> (0, 0, 0)
      (255, 255, 255) -> (0, 0, 255)
      (100, 20, 30)   -> (249, 170, 60)
    """
    r, g, b = coerce_to_rgb(rgb).as_tuple()

    most = max(r, g, b)
    least = min(r, g, b)
    lightness = (most + least) >> 1

    if most == least:
        return HSL(0, 0, lightness & 0xFF)

    diff = most - least
    if lightness > 127:
        sat = _trunc_div(diff * 255, 510 - most - least)
    else:
        sat = _trunc_div(diff * 255, most + least)

    if most == r:
        hue = _trunc_div(
            _trunc_div((g - b) * 255, diff) + (HUE_SPAN if g < b else 0), 6
        )
    elif most == g:
        hue = _trunc_div(_trunc_div((b - r) * 255, diff) + HUE_OFFSET_G, 6)
    else:
        hue = _trunc_div(_trunc_div((r - g) * 255, diff) + HUE_OFFSET_B, 6)

    return HSL(hue & 0xFF, sat & 0xFF, lightness & 0xFF)


def luminance(rgb: RGBLike) -> int:
    """Rec. 709 luma in single precision, truncated to 8 bits."""
    r, g, b = coerce_to_rgb(rgb).as_tuple()
    y = np.float32(r) * LUMA_R + np.float32(g) * LUMA_G + np.float32(b) * LUMA_B
    return int(y) & 0xFF


# Vectorised


def rgb_to_hsl_array(pixels: U8Pixels) -> U8Pixels:
    """
    Vectorised rgb_to_hsl over uint8 [...,3]. Shape preserved, returns uint8.
    """
    px = np.asarray(pixels).astype(np.int32, copy=False)
    r = px[..., 0]
    g = px[..., 1]
    b = px[..., 2]

    most = np.maximum(np.maximum(r, g), b)
    least = np.minimum(np.minimum(r, g), b)
    lightness = (most + least) >> 1
    diff = most - least
    chromatic = diff != 0

    # Achromatic rows get dummy divisors and are zeroed afterwards.
    safe_diff = np.where(chromatic, diff, 1)
    sat_den = np.where(lightness > 127, 510 - most - least, most + least)
    sat_den = np.where(chromatic, sat_den, 1)
    sat = _trunc_div_array(diff * 255, sat_den)

    hue_r = _trunc_div_array((g - b) * 255, safe_diff) + np.where(g < b, HUE_SPAN, 0)
    hue_g = _trunc_div_array((b - r) * 255, safe_diff) + HUE_OFFSET_G
    hue_b = _trunc_div_array((r - g) * 255, safe_diff) + HUE_OFFSET_B
    hue_num = np.where(most == r, hue_r, np.where(most == g, hue_g, hue_b))
    hue = _trunc_div_array(hue_num, np.full_like(hue_num, 6))

    out = np.empty(px.shape[:-1] + (3,), dtype=np.uint8)
    out[..., 0] = np.where(chromatic, hue, 0) & 0xFF
    out[..., 1] = np.where(chromatic, sat, 0) & 0xFF
    out[..., 2] = lightness & 0xFF
    return out


def luminance_array(pixels: U8Pixels) -> NDArray[np.uint8]:
    """Vectorised luminance over uint8 [...,3]; float32 throughout."""
    px = np.asarray(pixels).astype(np.float32, copy=False)
    y = px[..., 0] * LUMA_R + px[..., 1] * LUMA_G + px[..., 2] * LUMA_B
    # y is never negative, so astype truncates toward zero like int().
    return (y.astype(np.int32) & 0xFF).astype(np.uint8)


__all__ = [
    "rgb_to_hsl",
    "rgb_to_hsl_array",
    "luminance",
    "luminance_array",
]
