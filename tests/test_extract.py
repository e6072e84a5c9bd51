"""Bucket quantization, ranking and palette construction."""

from __future__ import annotations

import numpy as np
import pytest

from colorgram.color import Color
from colorgram.colour_convert import rgb_to_hsl
from colorgram.constants import BUCKET_COUNT
from colorgram.core_types import HSL, RGB
from colorgram.extract import (
    Bucket,
    accumulate_buckets,
    build_colors,
    extract,
    extract_from_pixels,
    quantization_key,
    quantization_keys,
    rank_buckets,
)

RED = (255, 0, 0)
BLUE = (0, 0, 255)
GREEN = (0, 255, 0)


# Keys


@pytest.mark.parametrize(
    "rgb, key",
    [
        ((0, 0, 0), 0),
        ((255, 255, 255), (192 << 4) | 192),
        (RED, 64),
        (BLUE, (128 << 2) | 64),
        (GREEN, (128 << 4) | (64 << 2) | 64),
        ((214, 163, 101), (128 << 4) | 128),
        ((100, 20, 30), 192 << 2),
        # Luma sits on a mask boundary that only single precision reaches.
        ((12, 175, 4), (128 << 4) | (64 << 2) | 64),
        ((15, 152, 223), (128 << 4) | (128 << 2) | 64),
        ((33, 61, 185), (64 << 4) | (128 << 2) | 64),
    ],
)
def test_quantization_key_packing(rgb, key) -> None:
    assert quantization_key(rgb) == key


def test_keys_fit_in_bucket_range(rng) -> None:
    keys = quantization_keys(rng.integers(0, 256, size=(5000, 3), dtype=np.uint8))
    assert keys.min() >= 0
    assert keys.max() < BUCKET_COUNT


def test_vectorised_keys_match_scalar(rng) -> None:
    pixels = rng.integers(0, 256, size=(3000, 3), dtype=np.uint8)
    expected = [quantization_key(px) for px in pixels.tolist()]
    assert quantization_keys(pixels).tolist() == expected


# Accumulation


def test_accumulate_sums_and_counts(stripes) -> None:
    grid = stripes([(RED, 3), ((254, 0, 0), 1), (BLUE, 2)])

    sums, counts = accumulate_buckets(grid)

    assert sums.shape == (BUCKET_COUNT, 3)
    assert counts.shape == (BUCKET_COUNT,)
    assert counts[64] == 4
    assert sums[64].tolist() == [3 * 255 + 254, 0, 0]
    assert counts[576] == 2
    assert sums[576].tolist() == [0, 0, 510]
    assert counts.sum() == 6


def test_threaded_accumulation_matches_single_thread(rng) -> None:
    grid = rng.integers(0, 256, size=(1100, 7, 3), dtype=np.uint8)

    sums_1, counts_1 = accumulate_buckets(grid, workers=1)
    sums_4, counts_4 = accumulate_buckets(grid, workers=4)

    assert np.array_equal(sums_1, sums_4)
    assert np.array_equal(counts_1, counts_4)
    assert counts_4.sum() == 1100 * 7
    channel_totals = grid.reshape(-1, 3).astype(np.int64).sum(axis=0)
    assert sums_4.sum(axis=0).tolist() == channel_totals.tolist()


def test_blockwise_keying_matches_whole_grid(rng) -> None:
    grid = rng.integers(0, 256, size=(530, 9, 3), dtype=np.uint8)

    sums, counts = accumulate_buckets(grid)
    small_sums, small_counts = accumulate_buckets(grid, block_pixels=7)
    threaded_sums, threaded_counts = accumulate_buckets(
        grid, workers=2, block_pixels=100
    )

    assert np.array_equal(sums, small_sums)
    assert np.array_equal(counts, small_counts)
    assert np.array_equal(sums, threaded_sums)
    assert np.array_equal(counts, threaded_counts)


def test_accumulate_rejects_bad_shapes() -> None:
    with pytest.raises(TypeError):
        accumulate_buckets(np.zeros((4, 5), dtype=np.uint8))


# Ranking


def test_rank_orders_by_count_and_truncates_means(stripes) -> None:
    grid = stripes([(BLUE, 2), (RED, 1), ((254, 0, 0), 1), ((254, 0, 0), 1)])

    ranked = rank_buckets(*accumulate_buckets(grid))

    assert ranked == [
        Bucket(key=64, count=3, rgb=RGB(254, 0, 0)),  # 763 // 3
        Bucket(key=576, count=2, rgb=RGB(0, 0, 255)),
    ]


def test_rank_breaks_ties_by_ascending_key(stripes) -> None:
    grid = stripes([(BLUE, 5), (GREEN, 5), (RED, 5)])

    ranked = rank_buckets(*accumulate_buckets(grid))

    assert [b.key for b in ranked] == sorted(b.key for b in ranked)
    assert [b.rgb for b in ranked] == [RGB(*RED), RGB(*BLUE), RGB(*GREEN)]


def test_build_colors_zero_requested() -> None:
    ranked = [Bucket(key=64, count=3, rgb=RGB(*RED))]
    assert build_colors(ranked, 0) == []
    assert build_colors([], 5) == []


# Extraction


def test_fixture_image_top_color(fixture_image_path) -> None:
    colors = extract(fixture_image_path, 1)

    assert len(colors) == 1
    assert colors[0].rgb == RGB(214, 163, 101)
    assert colors[0].hsl == HSL(23, 147, 157)
    assert colors[0].proportion == 1.0


def test_proportions_relative_to_returned_colors(stripes) -> None:
    grid = stripes([(RED, 30), (BLUE, 10), (GREEN, 5)])

    top_two = extract_from_pixels(grid, 2)
    top_one = extract_from_pixels(grid, 1)

    assert [c.rgb for c in top_two] == [RGB(*RED), RGB(*BLUE)]
    assert [c.proportion for c in top_two] == [0.75, 0.25]
    assert top_one == [Color(RGB(*RED), 1.0)]


def test_returns_min_of_requested_and_buckets(rng) -> None:
    pixels = rng.integers(0, 256, size=(64, 64, 3), dtype=np.uint8)
    distinct = len({quantization_key(px) for px in pixels.reshape(-1, 3).tolist()})

    assert len(extract_from_pixels(pixels, 1000)) == distinct
    assert len(extract_from_pixels(pixels, 3)) == min(3, distinct)


def test_palette_invariants(rng) -> None:
    pixels = rng.integers(0, 256, size=(50, 40, 3), dtype=np.uint8)

    colors = extract_from_pixels(pixels, 8)

    assert 0 < len(colors) <= 8
    assert sum(c.proportion for c in colors) == pytest.approx(1.0)
    for color in colors:
        assert color.hsl == rgb_to_hsl(color.rgb)
        assert 0.0 < color.proportion <= 1.0
    weights = [c.proportion for c in colors]
    assert weights == sorted(weights, reverse=True)


def test_zero_colors_requested(stripes) -> None:
    assert extract_from_pixels(stripes([(RED, 4)]), 0) == []


def test_empty_grid() -> None:
    assert extract_from_pixels(np.zeros((0, 0, 3), dtype=np.uint8), 5) == []
    assert extract([], 5) == []


def test_negative_count_rejected(stripes) -> None:
    with pytest.raises(ValueError):
        extract_from_pixels(stripes([(RED, 1)]), -1)
    with pytest.raises(TypeError):
        extract_from_pixels(stripes([(RED, 1)]), True)


def test_threaded_extract_matches_single_thread(rng) -> None:
    pixels = rng.integers(0, 256, size=(600, 5, 3), dtype=np.uint8)
    assert extract(pixels, 12, workers=3) == extract(pixels, 12, workers=1)


def test_extract_accepts_nested_sequences() -> None:
    grid = [[RED, RED, RED], [BLUE, RED, RED]]

    colors = extract(grid, 10)

    assert [c.rgb for c in colors] == [RGB(*RED), RGB(*BLUE)]
    assert colors[0].proportion == pytest.approx(5 / 6)
