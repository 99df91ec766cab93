"""Skeleton sampler: walk the control-point ring and project to the canvas.

The sampler is pure. Given the same time value, skeleton and rotation angle
it returns the same projected point, depth and lighting, so dots can be
replayed exactly in tests.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional, Sequence

from .shapes import ControlPoint

logger = logging.getLogger(__name__)

# Shrinks the interpolated figure so it stays inside the frame
DAMPING = 0.8
# Distance from the eye to the projection plane
PERSPECTIVE = 800.0
# Rotated z in [-DEPTH_OFFSET, DEPTH_OFFSET] maps onto depth [0, 1]
DEPTH_OFFSET = 300.0
LIGHTING_GAIN = 1.5
LIGHTING_MIN = 0.2
LIGHTING_MAX = 1.0


@dataclass(frozen=True)
class SkeletonSample:
    """One projected position on the skeleton."""

    x: float
    y: float
    depth: float      # ~0 far, ~1 near
    lighting: float   # Brightness multiplier in [0.2, 1]


def safe_sample(x: float = 0.0, y: float = 0.0) -> SkeletonSample:
    """Neutral sample returned when the skeleton cannot be read."""
    return SkeletonSample(x=x, y=y, depth=0.5, lighting=1.0)


def sample(
    t: float,
    skeleton: Optional[Sequence[ControlPoint]],
    rotation_angle: float = 0.0,
    center_x: float = 0.0,
    center_y: float = 0.0,
    perspective: float = PERSPECTIVE,
    damping: float = DAMPING,
) -> SkeletonSample:
    """Sample the skeleton at time t.

    The ring is walked at one control point per 1/len(skeleton) of t, with
    linear interpolation between neighbours. The point is scaled by damping,
    rotated about the vertical axis by rotation_angle, then projected with a
    perspective divide of distance perspective around (center_x, center_y).

    Faults never raise so the render loop keeps going:
    - empty or missing skeleton -> safe_sample() at the origin
    - missing point at the computed index -> safe_sample() at the centre
    """
    if not skeleton:
        logger.warning(f"Cannot sample an empty skeleton: {skeleton!r}")
        return safe_sample()

    count = len(skeleton)
    time = abs(t * count)
    index = math.floor(time) % count
    next_index = (index + 1) % count
    fraction = time - math.floor(time)

    p1 = skeleton[index]
    p2 = skeleton[next_index]
    if p1 is None or p2 is None:
        logger.warning(f"Missing control point at index {index}/{next_index} (length {count})")
        return safe_sample(center_x, center_y)

    x = (p1.x + (p2.x - p1.x) * fraction) * damping
    y = (p1.y + (p2.y - p1.y) * fraction) * damping
    z = (p1.z + (p2.z - p1.z) * fraction) * damping

    cos_a = math.cos(rotation_angle)
    sin_a = math.sin(rotation_angle)
    rotated_x = x * cos_a - z * sin_a
    rotated_z = x * sin_a + z * cos_a

    scale = perspective / (perspective + rotated_z)
    depth = (rotated_z + DEPTH_OFFSET) / (2 * DEPTH_OFFSET)

    return SkeletonSample(
        x=center_x + rotated_x * scale,
        y=center_y + y * scale,
        depth=depth,
        lighting=max(LIGHTING_MIN, min(LIGHTING_MAX, depth * LIGHTING_GAIN)),
    )
