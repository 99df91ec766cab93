"""Render surfaces and export."""

from .surface import RasterSurface, RenderSurface
from .frame_encoder import FrameEncoder

__all__ = [
    "RasterSurface",
    "RenderSurface",
    "FrameEncoder",
]
