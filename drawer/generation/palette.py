"""Colour schemes per shape and stroke styling."""

import colorsys
import copy
from dataclasses import dataclass
from typing import Literal

from .shapes import ShapeKind

LineCap = Literal["round", "butt", "square"]
LineJoin = Literal["round"]

LINE_CAPS: tuple[str, ...] = ("round", "butt", "square")
LINE_JOINS: tuple[str, ...] = ("round",)


@dataclass
class ColorScheme:
    """HSL base colour for one shape, plus how far pens may wander from it."""

    hue: float          # Degrees [0, 360)
    hue_range: float    # Full width of the hue jitter, in degrees
    saturation: float   # Percent [0, 100]
    lightness: float    # Percent [0, 100]


DEFAULT_COLOR_SCHEMES: dict[ShapeKind, ColorScheme] = {
    ShapeKind.SPHERE: ColorScheme(hue=200, hue_range=40, saturation=70, lightness=50),  # Blue
    ShapeKind.TORUS: ColorScheme(hue=280, hue_range=30, saturation=60, lightness=45),   # Purple
    ShapeKind.SPIRAL: ColorScheme(hue=120, hue_range=40, saturation=65, lightness=40),  # Green
    ShapeKind.WAVE: ColorScheme(hue=180, hue_range=30, saturation=75, lightness=55),    # Cyan
    ShapeKind.CROSS: ColorScheme(hue=340, hue_range=20, saturation=80, lightness=50),   # Red/pink
}


def copy_schemes() -> dict[ShapeKind, ColorScheme]:
    """Independent copy of the default table, one per dot."""
    return copy.deepcopy(DEFAULT_COLOR_SCHEMES)


def hsl_to_rgb(hue: float, saturation: float, lightness: float) -> tuple[int, int, int]:
    """Convert CSS-style HSL (degrees, percent, percent) to 8-bit RGB."""
    h = (hue % 360) / 360
    s = max(0.0, min(100.0, saturation)) / 100
    l = max(0.0, min(100.0, lightness)) / 100
    r, g, b = colorsys.hls_to_rgb(h, l, s)
    return int(round(r * 255)), int(round(g * 255)), int(round(b * 255))


@dataclass(frozen=True)
class StrokeStyle:
    """Everything a surface needs to stroke one path."""

    width: float
    hue: float
    saturation: float
    lightness: float
    alpha: float
    cap: LineCap = "round"
    join: LineJoin = "round"

    @property
    def rgb(self) -> tuple[int, int, int]:
        return hsl_to_rgb(self.hue, self.saturation, self.lightness)
