"""Shared fixtures: images are generated into tmp_path with Pillow."""

from __future__ import annotations

import io
import struct
from pathlib import Path
from typing import Callable, Sequence, Tuple

import numpy as np
import pytest
from PIL import Image

Region = Tuple[Tuple[int, int, int], int]


@pytest.fixture
def stripes() -> Callable[[Sequence[Region]], np.ndarray]:
    """One-row uint8 grid: each (rgb, count) region repeated count times."""

    def _build(regions: Sequence[Region]) -> np.ndarray:
        row = [rgb for rgb, count in regions for _ in range(count)]
        return np.array([row], dtype=np.uint8)

    return _build


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def png_path(tmp_path: Path) -> Callable[[np.ndarray, str], Path]:
    def _write(pixels: np.ndarray, name: str = "image.png") -> Path:
        path = tmp_path / name
        Image.fromarray(np.asarray(pixels, dtype=np.uint8)).save(path)
        return path

    return _write


@pytest.fixture
def fixture_image_path(png_path) -> Path:
    """16x12 image of a single (214, 163, 101) region."""
    pixels = np.zeros((12, 16, 3), dtype=np.uint8)
    pixels[...] = (214, 163, 101)
    return png_path(pixels, "fixture.png")


@pytest.fixture
def png_bytes() -> Callable[[np.ndarray], bytes]:
    def _encode(pixels: np.ndarray) -> bytes:
        buf = io.BytesIO()
        Image.fromarray(np.asarray(pixels, dtype=np.uint8)).save(
            buf, format="PNG"
        )
        return buf.getvalue()

    return _encode


@pytest.fixture
def broken_idat_png(png_bytes, rng) -> bytes:
    """Valid 24x24 PNG whose IDAT length field no longer matches its data."""
    data = bytearray(png_bytes(rng.integers(0, 256, size=(24, 24, 3), dtype=np.uint8)))
    pos = data.index(b"IDAT") - 4
    (length,) = struct.unpack(">I", data[pos : pos + 4])
    data[pos : pos + 4] = struct.pack(">I", length // 3)
    return bytes(data)
