"""Render surfaces the dots draw their trail segments onto.

The engine only needs a tiny canvas-like API: build a path out of
move/line/quadratic segments, then stroke it. Surfaces accumulate; nothing
in the engine ever clears them.
"""

import logging
import math
from typing import Optional, Protocol, runtime_checkable

import cv2
import numpy as np
from PIL import Image

from ..generation.palette import LINE_CAPS, LINE_JOINS, StrokeStyle
from .frame_encoder import FrameEncoder

logger = logging.getLogger(__name__)

# Sub-segments used to flatten one quadratic curve
CURVE_STEPS = 8
# Fixed-point bits for sub-pixel OpenCV drawing
SHIFT = 4
_FIXED = 1 << SHIFT


@runtime_checkable
class RenderSurface(Protocol):
    """Minimal 2D drawing context used by the dots."""

    width: int
    height: int

    def begin_path(self) -> None:
        ...

    def move_to(self, x: float, y: float) -> None:
        ...

    def line_to(self, x: float, y: float) -> None:
        ...

    def quadratic_curve_to(self, cpx: float, cpy: float, x: float, y: float) -> None:
        ...

    def stroke(self, style: StrokeStyle) -> None:
        ...


class RasterSurface:
    """Accumulating RGB raster backed by numpy, drawn with OpenCV.

    Each stroke is rasterized into an anti-aliased coverage mask over its
    bounding box and alpha-blended onto the canvas, so translucent pens
    build up trails the way a browser canvas does.
    """

    def __init__(self, width: int, height: int, background: tuple[int, int, int] = (0, 0, 0)):
        self.width = width
        self.height = height
        self.background = background
        self._pixels = np.empty((height, width, 3), dtype=np.float32)
        self._pixels[:] = background
        self._subpaths: list[list[tuple[float, float]]] = []
        self.strokes_drawn = 0

    # Path construction

    def begin_path(self) -> None:
        self._subpaths = []

    def move_to(self, x: float, y: float) -> None:
        self._subpaths.append([(x, y)])

    def line_to(self, x: float, y: float) -> None:
        if not self._subpaths:
            self.move_to(x, y)
            return
        self._subpaths[-1].append((x, y))

    def quadratic_curve_to(self, cpx: float, cpy: float, x: float, y: float) -> None:
        if not self._subpaths:
            self.move_to(cpx, cpy)
        x0, y0 = self._subpaths[-1][-1]
        for step in range(1, CURVE_STEPS + 1):
            u = step / CURVE_STEPS
            a = (1 - u) * (1 - u)
            b = 2 * (1 - u) * u
            c = u * u
            self._subpaths[-1].append((a * x0 + b * cpx + c * x, a * y0 + b * cpy + c * y))

    # Stroking

    def stroke(self, style: StrokeStyle) -> None:
        """Stroke the current path with the given style."""
        if style.cap not in LINE_CAPS:
            raise ValueError(f"Unknown line cap: {style.cap}")
        if style.join not in LINE_JOINS:
            raise ValueError(f"Unknown line join: {style.join}")

        alpha = max(0.0, min(1.0, style.alpha))
        if alpha <= 0 or style.width <= 0:
            return

        color = np.array(style.rgb, dtype=np.float32)
        for points in self._subpaths:
            self._stroke_polyline(points, style, alpha, color)
        self.strokes_drawn += 1

    def _stroke_polyline(
        self,
        points: list[tuple[float, float]],
        style: StrokeStyle,
        alpha: float,
        color: np.ndarray,
    ) -> None:
        half = style.width / 2
        pad = half + 2
        xs = [p[0] for p in points]
        ys = [p[1] for p in points]
        x0 = max(0, int(math.floor(min(xs) - pad)))
        y0 = max(0, int(math.floor(min(ys) - pad)))
        x1 = min(self.width, int(math.ceil(max(xs) + pad)) + 1)
        y1 = min(self.height, int(math.ceil(max(ys) + pad)) + 1)
        if x0 >= x1 or y0 >= y1:
            return

        mask = np.zeros((y1 - y0, x1 - x0), dtype=np.uint8)
        local = [(x - x0, y - y0) for x, y in points]
        self._rasterize(mask, local, half, style)

        coverage = mask.astype(np.float32) * (alpha / 255.0)
        roi = self._pixels[y0:y1, x0:x1]
        roi += (color - roi) * coverage[..., None]

    def _rasterize(
        self,
        mask: np.ndarray,
        points: list[tuple[float, float]],
        half: float,
        style: StrokeStyle,
    ) -> None:
        segments = [(p, q) for p, q in zip(points, points[1:]) if math.dist(p, q) > 1e-9]

        if not segments:
            # Zero-length stroke: only round and square caps leave a mark
            px, py = points[0]
            if style.cap == "round":
                self._disc(mask, px, py, half)
            elif style.cap == "square":
                self._polygon(mask, [(px - half, py - half), (px + half, py - half),
                                     (px + half, py + half), (px - half, py + half)])
            return

        for i, ((px, py), (qx, qy)) in enumerate(segments):
            length = math.dist((px, py), (qx, qy))
            dx, dy = (qx - px) / length, (qy - py) / length
            nx, ny = -dy * half, dx * half
            if style.cap == "square":
                if i == 0:
                    px, py = px - dx * half, py - dy * half
                if i == len(segments) - 1:
                    qx, qy = qx + dx * half, qy + dy * half
            self._polygon(mask, [(px + nx, py + ny), (qx + nx, qy + ny),
                                 (qx - nx, qy - ny), (px - nx, py - ny)])

        if style.join == "round":
            for (jx, jy), _ in segments[1:]:
                self._disc(mask, jx, jy, half)
        if style.cap == "round":
            self._disc(mask, *segments[0][0], half)
            self._disc(mask, *segments[-1][1], half)

    @staticmethod
    def _polygon(mask: np.ndarray, corners: list[tuple[float, float]]) -> None:
        pts = np.array([[round(x * _FIXED), round(y * _FIXED)] for x, y in corners], dtype=np.int32)
        cv2.fillConvexPoly(mask, pts, 255, lineType=cv2.LINE_AA, shift=SHIFT)

    @staticmethod
    def _disc(mask: np.ndarray, x: float, y: float, radius: float) -> None:
        center = (round(x * _FIXED), round(y * _FIXED))
        cv2.circle(mask, center, max(1, round(radius * _FIXED)), 255,
                   thickness=-1, lineType=cv2.LINE_AA, shift=SHIFT)

    # Export

    def to_array(self) -> np.ndarray:
        """Snapshot of the canvas as an (H, W, 3) uint8 array."""
        return np.clip(np.rint(self._pixels), 0, 255).astype(np.uint8)

    def to_image(self) -> Image.Image:
        """Snapshot of the canvas as a PIL image."""
        return Image.fromarray(self.to_array())

    def pixel(self, x: int, y: int) -> tuple[int, int, int]:
        r, g, b = np.clip(np.rint(self._pixels[y, x]), 0, 255)
        return int(r), int(g), int(b)

    def export(self, path: str, format: Optional[str] = None) -> None:
        """Write the canvas to an image file (format inferred from path if omitted)."""
        encoder = FrameEncoder(format=format or FrameEncoder.format_for_path(path))
        encoder.save(self.to_image(), path)
        logger.info(f"Exported {self.width}x{self.height} canvas to {path}")
