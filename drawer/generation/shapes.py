"""Shape catalog: procedural 3D control-point skeletons for each shape family."""

import logging
import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

logger = logging.getLogger(__name__)

# Every skeleton is a closed ring of this many control points
SKELETON_SIZE = 12


class ShapeKind(str, Enum):
    """Shape families, in switch order."""

    SPHERE = "sphere"
    TORUS = "torus"
    SPIRAL = "spiral"
    WAVE = "wave"
    CROSS = "cross"


@dataclass(frozen=True)
class ControlPoint:
    """A skeleton control point in model space (origin at the shape centre)."""

    x: float
    y: float
    z: float


Skeleton = tuple[ControlPoint, ...]


def generate_sphere(radius: float) -> Skeleton:
    """Figure-eight orbit: a wide ring with a double-frequency vertical swing."""
    points = []
    for i in range(SKELETON_SIZE):
        phi = (i / SKELETON_SIZE) * math.pi * 2
        points.append(ControlPoint(
            x=radius * math.cos(phi),
            y=radius * math.sin(phi * 2) * 0.5,  # Dramatic up/down movement
            z=radius * math.sin(phi) * 0.5,      # Front/back movement
        ))
    return tuple(points)


def generate_torus(radius: float) -> Skeleton:
    """Ring with four lobes wobbling around a tube of 0.3 * radius."""
    tube_radius = radius * 0.3
    points = []
    for i in range(SKELETON_SIZE):
        theta = (i / SKELETON_SIZE) * math.pi * 2
        ring = radius + tube_radius * math.cos(theta * 4)
        points.append(ControlPoint(
            x=ring * math.cos(theta),
            y=ring * math.sin(theta),
            z=tube_radius * math.sin(theta * 4),
        ))
    return tuple(points)


def generate_spiral(radius: float) -> Skeleton:
    """Two turns spiralling inward while travelling along z."""
    points = []
    for i in range(SKELETON_SIZE):
        progress = i / SKELETON_SIZE
        t = progress * math.pi * 4
        scale = 1 - progress * 0.8
        points.append(ControlPoint(
            x=radius * scale * math.cos(t),
            y=radius * scale * math.sin(t),
            z=radius * progress - radius / 2,
        ))
    return tuple(points)


def generate_wave(radius: float) -> Skeleton:
    points = []
    for i in range(SKELETON_SIZE):
        t = (i / SKELETON_SIZE) * math.pi * 2
        points.append(ControlPoint(
            x=radius * math.cos(t),
            y=radius * math.sin(t),
            z=radius * math.sin(t * 4) * 0.5,
        ))
    return tuple(points)


def generate_cross(radius: float) -> Skeleton:
    """Four flat arms (top, right, bottom, left), three points each."""
    points = []
    for i in range(SKELETON_SIZE):
        segment = i // 3
        fraction = (i % 3) / 2

        x = y = 0.0
        if segment == 0:    # Top arm
            y = radius * (1 - fraction)
        elif segment == 1:  # Right arm
            x = radius * fraction
        elif segment == 2:  # Bottom arm
            y = -radius * fraction
        else:               # Left arm
            x = -radius * (1 - fraction)

        points.append(ControlPoint(x=x, y=y, z=0.0))
    return tuple(points)


SHAPE_GENERATORS: dict[ShapeKind, Callable[[float], Skeleton]] = {
    ShapeKind.SPHERE: generate_sphere,
    ShapeKind.TORUS: generate_torus,
    ShapeKind.SPIRAL: generate_spiral,
    ShapeKind.WAVE: generate_wave,
    ShapeKind.CROSS: generate_cross,
}


def generate(kind: ShapeKind, radius: float) -> Skeleton:
    """Build the skeleton for a shape kind.

    Args:
        kind: Shape family (a ShapeKind or its string value)
        radius: Overall size; every coordinate scales linearly with it

    Returns:
        Tuple of exactly SKELETON_SIZE control points

    Raises:
        ValueError: If radius is not positive or kind is unknown
    """
    if radius <= 0:
        raise ValueError(f"radius must be positive, got {radius}")

    kind = ShapeKind(kind)
    points = SHAPE_GENERATORS[kind](radius)
    logger.info(f"Generated {kind.value} skeleton with radius {radius:.1f}")
    return points


def random_radius(
    radius_min: float,
    radius_max: float,
    rng: Optional[random.Random] = None,
) -> float:
    """Draw a radius uniformly from [radius_min, radius_max)."""
    rng = rng or random.Random()
    return rng.random() * (radius_max - radius_min) + radius_min


def next_kind(kind: ShapeKind) -> ShapeKind:
    """Cyclic successor of a shape kind (cross wraps back to sphere)."""
    kinds = list(ShapeKind)
    return kinds[(kinds.index(ShapeKind(kind)) + 1) % len(kinds)]
