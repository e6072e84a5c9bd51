# colorgram/extract.py
from __future__ import annotations

"""
Dominant-colour extraction by coarse bucket quantization.

Exports:
  quantization_key(rgb) -> int
  quantization_keys(pixels) -> KeyArray
  accumulate_buckets(pixels, workers=1, *, block_pixels) -> (sums, counts)
  rank_buckets(sums, counts) -> list[Bucket]
  build_colors(ranked, number_of_color) -> list[Color]
  extract_from_pixels(pixels, number_of_color, workers=1) -> list[Color]
  extract(source, number_of_color, workers=1) -> list[Color]

Every pixel lands in one of 4096 buckets keyed by the top two bits of its
luminance, hue and lightness:

  key = (luma & 0xC0) << 4 | (hue & 0xC0) << 2 | (lightness & 0xC0)

Buckets keep channel sums and a pixel count. The palette is the per-bucket
mean colour of the most populated buckets, weighted by count relative to the
other returned buckets. Equal counts are ordered by ascending key.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from .color import Color
from .colour_convert import luminance, luminance_array, rgb_to_hsl, rgb_to_hsl_array
from .constants import (
    BUCKET_COUNT,
    HUE_SHIFT,
    KEY_BLOCK_PIXELS,
    KEY_MASK,
    LIGHTNESS_SHIFT,
    LUMA_SHIFT,
    MIN_ROWS_PER_WORKER,
)
from .core_types import (
    RGB,
    BucketCounts,
    BucketSums,
    KeyArray,
    U8Image,
    U8Pixels,
    coerce_pixel_grid,
    coerce_to_rgb,
)
from .image_io import ImageSource, decode_image
from .utils import split_rows_into_parts

PixelGrid = Union[NDArray[np.generic], Sequence]


@dataclass(frozen=True)
class Bucket:
    """Non-empty bucket: its key, pixel count and mean colour."""

    key: int
    count: int
    rgb: RGB


# Keys


def quantization_key(rgb: Union[RGB, Sequence[int]]) -> int:
    """12-bit bucket key of a single pixel."""
    px = coerce_to_rgb(rgb)
    hsl = rgb_to_hsl(px)
    return (
        ((luminance(px) & KEY_MASK) << LUMA_SHIFT)
        | ((hsl.h & KEY_MASK) << HUE_SHIFT)
        | ((hsl.l & KEY_MASK) << LIGHTNESS_SHIFT)
    )


def quantization_keys(pixels: U8Pixels) -> KeyArray:
    """Vectorised quantization_key over uint8 [...,3]; returns int64 [...]."""
    px = np.asarray(pixels, dtype=np.uint8)
    hsl = rgb_to_hsl_array(px).astype(np.int64)
    luma = luminance_array(px).astype(np.int64)
    return (
        ((luma & KEY_MASK) << LUMA_SHIFT)
        | ((hsl[..., 0] & KEY_MASK) << HUE_SHIFT)
        | ((hsl[..., 2] & KEY_MASK) << LIGHTNESS_SHIFT)
    )


# Accumulation


def _accumulate_rows(
    grid: U8Image, block_pixels: int = KEY_BLOCK_PIXELS
) -> Tuple[BucketSums, BucketCounts]:
    flat = grid.reshape(-1, 3)
    block_pixels = max(1, int(block_pixels))
    sums = np.zeros((BUCKET_COUNT, 3), dtype=np.int64)
    counts = np.zeros((BUCKET_COUNT,), dtype=np.int64)
    for start in range(0, flat.shape[0], block_pixels):
        block = flat[start : start + block_pixels]
        keys = quantization_keys(block)
        counts += np.bincount(keys, minlength=BUCKET_COUNT)
        for ch in range(3):
            # float64 weights are exact for any sum below 2**53.
            sums[:, ch] += np.bincount(
                keys, weights=block[:, ch], minlength=BUCKET_COUNT
            ).astype(np.int64)
    return sums, counts


def accumulate_buckets(
    pixels: PixelGrid, workers: int = 1, *, block_pixels: int = KEY_BLOCK_PIXELS
) -> Tuple[BucketSums, BucketCounts]:
    """
    Sum channels and count pixels per bucket.

    Args:
      pixels      : decoded grid, see core_types.coerce_pixel_grid
      workers     : threads; rows are split into contiguous spans of at least
                    MIN_ROWS_PER_WORKER and the partial buckets are added up
      block_pixels: pixels keyed per step inside each span, caps peak memory
    Returns:
      sums  : int64 [4096, 3]
      counts: int64 [4096]
    """
    grid = coerce_pixel_grid(pixels)
    height = int(grid.shape[0])
    parts = min(int(workers), height // MIN_ROWS_PER_WORKER)
    if parts <= 1:
        return _accumulate_rows(grid, block_pixels)

    spans = split_rows_into_parts(height, parts)
    with ThreadPoolExecutor(max_workers=len(spans)) as pool:
        futures = [
            pool.submit(_accumulate_rows, grid[s:e], block_pixels) for s, e in spans
        ]
        partials = [f.result() for f in futures]

    sums = np.zeros((BUCKET_COUNT, 3), dtype=np.int64)
    counts = np.zeros((BUCKET_COUNT,), dtype=np.int64)
    for part_sums, part_counts in partials:
        sums += part_sums
        counts += part_counts
    return sums, counts


# Ranking / output


def rank_buckets(sums: BucketSums, counts: BucketCounts) -> List[Bucket]:
    """
    Non-empty buckets, most populated first, with truncated mean colours.
    Ties keep ascending key order.
    """
    used = np.flatnonzero(counts > 0)
    order = np.argsort(-counts[used], kind="stable")
    ranked: List[Bucket] = []
    for key in used[order].tolist():
        n = int(counts[key])
        r, g, b = (int(v) // n for v in sums[key].tolist())
        ranked.append(Bucket(key=key, count=n, rgb=RGB(r, g, b)))
    return ranked


def _check_color_count(number_of_color: int) -> int:
    if isinstance(number_of_color, bool) or not isinstance(
        number_of_color, (int, np.integer)
    ):
        raise TypeError("number_of_color must be an int")
    if number_of_color < 0:
        raise ValueError(f"number_of_color must be >= 0, got {number_of_color}")
    return int(number_of_color)


def build_colors(ranked: Sequence[Bucket], number_of_color: int) -> List[Color]:
    """
    Turn the first number_of_color ranked buckets into Colors.

    Proportions are relative to the selected buckets only, so they sum to 1
    whenever anything is returned.
    """
    top = list(ranked[: _check_color_count(number_of_color)])
    total_weight = sum(bucket.count for bucket in top)
    return [Color(bucket.rgb, bucket.count / total_weight) for bucket in top]


# Entry points


def extract_from_pixels(
    pixels: PixelGrid, number_of_color: int, workers: int = 1
) -> List[Color]:
    """Extract up to number_of_color weighted colours from a decoded grid."""
    n = _check_color_count(number_of_color)
    sums, counts = accumulate_buckets(pixels, workers=workers)
    return build_colors(rank_buckets(sums, counts), n)


def extract(
    source: Union[ImageSource, PixelGrid], number_of_color: int, *, workers: int = 1
) -> List[Color]:
    """
    Extract up to number_of_color weighted colours from an image.

    source may be a path, encoded bytes, a binary file object, a PIL image or
    an already-decoded pixel grid. Raises DecodeError if it cannot be decoded.
    """
    n = _check_color_count(number_of_color)
    if isinstance(source, (np.ndarray, list, tuple)):
        return extract_from_pixels(source, n, workers=workers)
    return extract_from_pixels(decode_image(source), n, workers=workers)


__all__ = [
    "Bucket",
    "quantization_key",
    "quantization_keys",
    "accumulate_buckets",
    "rank_buckets",
    "build_colors",
    "extract_from_pixels",
    "extract",
]
