# colorgram/image_io.py
from __future__ import annotations

import io
import os
import struct
from typing import BinaryIO, Union

import numpy as np
from PIL import Image

from .core_types import U8Image
from .errors import DecodeError

"""
Image decoding helpers: anything Pillow can open -> uint8 (H, W, 3).
"""

ImageSource = Union[str, "os.PathLike[str]", bytes, bytearray, memoryview, BinaryIO, Image.Image]

# Pillow plugins report corrupt chunk structure as SyntaxError or struct.error.
_DECODE_FAILURES = (
    OSError,
    ValueError,
    EOFError,
    SyntaxError,
    struct.error,
    Image.DecompressionBombError,
)


def _describe(source: object) -> str:
    if isinstance(source, (str, os.PathLike)):
        return os.fspath(source)
    if isinstance(source, (bytes, bytearray, memoryview)):
        return f"<{len(source)} bytes>"
    return f"<{type(source).__name__}>"


def _to_rgb_array(im: Image.Image) -> U8Image:
    # Alpha is dropped, not composited over a background.
    rgb = im if im.mode == "RGB" else im.convert("RGB")
    return np.asarray(rgb, dtype=np.uint8).reshape(rgb.height, rgb.width, 3)


def decode_image(source: ImageSource) -> U8Image:
    """
    Decode a path, an encoded byte buffer, a binary file object or an
    already-open PIL image into a uint8 (H, W, 3) RGB array.

    Raises DecodeError when the source does not resolve to a valid image.
    """
    if isinstance(source, Image.Image):
        try:
            source.load()
            return _to_rgb_array(source)
        except _DECODE_FAILURES as exc:
            raise DecodeError(f"cannot decode {_describe(source)}: {exc}") from exc

    if isinstance(source, (bytes, bytearray, memoryview)):
        fp: Union[str, "os.PathLike[str]", BinaryIO] = io.BytesIO(bytes(source))
    elif isinstance(source, (str, os.PathLike)):
        fp = source
    elif hasattr(source, "read"):
        fp = source
    else:
        raise TypeError(f"unsupported image source: {type(source).__name__}")

    try:
        with Image.open(fp) as im:
            im.load()
            return _to_rgb_array(im)
    except _DECODE_FAILURES as exc:
        raise DecodeError(f"cannot decode {_describe(source)}: {exc}") from exc


__all__ = ["ImageSource", "decode_image"]
