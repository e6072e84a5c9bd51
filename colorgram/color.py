# colorgram/color.py
from __future__ import annotations

from dataclasses import dataclass, field

from .colour_convert import rgb_to_hsl
from .core_types import HSL, RGB, HexStr


@dataclass(frozen=True)
class Color:
    """
    One extracted palette entry.

    hsl is always derived from rgb at construction, never passed in.
    proportion is this colour's share of the pixels covered by the returned
    palette, not of the whole image.
    """

    rgb: RGB
    proportion: float
    hsl: HSL = field(init=False)

    def __post_init__(self) -> None:
        if not isinstance(self.rgb, RGB):
            raise TypeError("rgb must be an RGB")
        p = float(self.proportion)
        if not 0.0 <= p <= 1.0:
            raise ValueError(f"proportion must be in [0, 1], got {p}")
        object.__setattr__(self, "proportion", p)
        object.__setattr__(self, "hsl", rgb_to_hsl(self.rgb))

    @property
    def hex(self) -> HexStr:
        return self.rgb.hex

    def __str__(self) -> str:
        return f"{self.rgb} {self.hsl} {self.proportion:.2%}"


__all__ = ["Color"]
