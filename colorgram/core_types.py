# colorgram/core_types.py
from __future__ import annotations

"""
Core type aliases, small value objects, and lightweight helpers.
"""

from dataclasses import dataclass
from typing import Iterator, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

# Basic aliases

RGBTuple = Tuple[int, int, int]
HexStr = str

U8Image = NDArray[np.uint8]  # (H, W, 3)
U8Pixels = NDArray[np.uint8]  # (..., 3)
KeyArray = NDArray[np.int64]  # (...,) quantization keys in [0, 4096)
BucketSums = NDArray[np.int64]  # (4096, 3)
BucketCounts = NDArray[np.int64]  # (4096,)

# Value objects


def _check_channel(name: str, value: int) -> int:
    if isinstance(value, (bool, float)) or not isinstance(value, (int, np.integer)):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    v = int(value)
    if not 0 <= v <= 255:
        raise ValueError(f"{name} must be in [0, 255], got {v}")
    return v


@dataclass(frozen=True)
class RGB:
    """8-bit sRGB triple."""

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "r", _check_channel("r", self.r))
        object.__setattr__(self, "g", _check_channel("g", self.g))
        object.__setattr__(self, "b", _check_channel("b", self.b))

    def __iter__(self) -> Iterator[int]:
        return iter((self.r, self.g, self.b))

    def __str__(self) -> str:
        return f"rgb({self.r}, {self.g}, {self.b})"

    @property
    def hex(self) -> HexStr:
        return rgb_to_hex((self.r, self.g, self.b))

    def inverted(self) -> RGB:
        """Channel-wise 255 - c, used for readable text over this colour."""
        return RGB(255 - self.r, 255 - self.g, 255 - self.b)

    def as_tuple(self) -> RGBTuple:
        return (self.r, self.g, self.b)


@dataclass(frozen=True)
class HSL:
    """
    Hue, saturation and lightness, each scaled to [0, 255].

    Produced by colour_convert.rgb_to_hsl only. The values follow that
    derivation's integer arithmetic and are not degrees or percentages.
    """

    h: int
    s: int
    l: int  # noqa: E741

    def __post_init__(self) -> None:
        object.__setattr__(self, "h", _check_channel("h", self.h))
        object.__setattr__(self, "s", _check_channel("s", self.s))
        object.__setattr__(self, "l", _check_channel("l", self.l))

    def __iter__(self) -> Iterator[int]:
        return iter((self.h, self.s, self.l))

    def __str__(self) -> str:
        return f"hsl({self.h}, {self.s}, {self.l})"

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.h, self.s, self.l)


# Small helpers


def rgb_to_hex(rgb: RGBTuple) -> HexStr:
    """RGB tuple to lowercase hex string '#rrggbb'."""
    return f"#{rgb[0]:02x}{rgb[1]:02x}{rgb[2]:02x}"


def coerce_to_rgb(value: Union[RGB, Sequence[int], NDArray[np.generic]]) -> RGB:
    """
    Coerce an RGB, a 3-length sequence or a numpy row to an RGB.
    Helpful when pulling single pixels out of arrays.
    """
    if isinstance(value, RGB):
        return value
    if isinstance(value, np.ndarray):
        if value.size < 3:
            raise ValueError("array too small for RGB")
        flat = value.reshape(-1)
        return RGB(int(flat[0]), int(flat[1]), int(flat[2]))
    if len(value) < 3:
        raise ValueError("sequence too small for RGB")
    return RGB(int(value[0]), int(value[1]), int(value[2]))


def coerce_pixel_grid(pixels: Union[NDArray[np.generic], Sequence]) -> U8Image:
    """
    Validate a decoded pixel grid and return it as uint8 (H, W, 3).

    Accepts (H, W, 3) or (H, W, 4), or a flat (N, 3) / (N, 4) run of pixels
    which is treated as a single row. Alpha is dropped. Integer arrays of
    another dtype are accepted when every value fits in [0, 255].
    """
    arr = np.asarray(pixels)
    if arr.size == 0:
        return np.zeros((0, 0, 3), dtype=np.uint8)
    if arr.ndim == 2 and arr.shape[-1] in (3, 4):
        arr = arr[None, ...]
    if arr.ndim != 3 or arr.shape[-1] not in (3, 4):
        raise TypeError(f"expected (H,W,3/4) or (N,3/4) pixel grid, got {arr.shape}")
    if arr.dtype != np.uint8:
        if not np.issubdtype(arr.dtype, np.integer):
            raise TypeError(f"expected integer pixels, got {arr.dtype}")
        if arr.min() < 0 or arr.max() > 255:
            raise ValueError("pixel values must be in [0, 255]")
        arr = arr.astype(np.uint8)
    return np.ascontiguousarray(arr[..., :3])


__all__ = [
    # aliases / types
    "RGBTuple",
    "HexStr",
    "U8Image",
    "U8Pixels",
    "KeyArray",
    "BucketSums",
    "BucketCounts",
    # value objects
    "RGB",
    "HSL",
    # helpers
    "rgb_to_hex",
    "coerce_to_rgb",
    "coerce_pixel_grid",
]
