# colorgram/constants.py
"""
Fixed constants and tunables used across the project.

- Bucket layout (BUCKET_COUNT, KEY_MASK, *_SHIFT)
- Luminance weights (float32, evaluated left to right)
- CLI defaults
"""
from __future__ import annotations

import os

import numpy as np

# ==================
# Quantization keys
# ==================
# Top two bits of an 8-bit channel.
KEY_MASK: int = 0b1100_0000
LUMA_SHIFT: int = 4
HUE_SHIFT: int = 2
LIGHTNESS_SHIFT: int = 0

# Largest key is (192 << 4) | (192 << 2) | 192 == 4032, inside 12 bits.
BUCKET_COUNT: int = 4096

# ==========
# Luminance
# ==========
LUMA_R: np.float32 = np.float32(0.2126)
LUMA_G: np.float32 = np.float32(0.7152)
LUMA_B: np.float32 = np.float32(0.0722)

# ===============
# HSL derivation
# ===============
HUE_SPAN: int = 1530  # 6 * 255
HUE_OFFSET_G: int = 510
HUE_OFFSET_B: int = 1020

# =====================
# Extraction / CLI knobs
# =====================
DEFAULT_COLOR_COUNT: int = 10
MIN_ROWS_PER_WORKER: int = 256
# Pixels keyed at once; bounds the int32 HSL temporaries to a few MB.
KEY_BLOCK_PIXELS: int = 1 << 18


def default_workers() -> int:
    """Leave a few cores free for the system; returns a sensible worker count."""
    n = os.cpu_count() or 4
    reserve = 1 if n <= 6 else 2 if n <= 12 else 3
    return max(1, n - reserve)


__all__ = [
    "KEY_MASK",
    "LUMA_SHIFT",
    "HUE_SHIFT",
    "LIGHTNESS_SHIFT",
    "BUCKET_COUNT",
    "LUMA_R",
    "LUMA_G",
    "LUMA_B",
    "HUE_SPAN",
    "HUE_OFFSET_G",
    "HUE_OFFSET_B",
    "DEFAULT_COLOR_COUNT",
    "MIN_ROWS_PER_WORKER",
    "KEY_BLOCK_PIXELS",
    "default_workers",
]
