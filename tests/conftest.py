"""Shared fixtures: a recording surface, a constant random source, a small world."""

import random

import pytest

from drawer.generation.shapes import ShapeKind, generate
from drawer.world import WorldState


class RecordingSurface:
    """Records path and stroke calls instead of rasterizing."""

    def __init__(self, width: int = 400, height: int = 300):
        self.width = width
        self.height = height
        self.calls = []
        self.strokes = []

    def begin_path(self):
        self.calls.append(("begin_path",))

    def move_to(self, x, y):
        self.calls.append(("move_to", x, y))

    def line_to(self, x, y):
        self.calls.append(("line_to", x, y))

    def quadratic_curve_to(self, cpx, cpy, x, y):
        self.calls.append(("quadratic_curve_to", cpx, cpy, x, y))

    def stroke(self, style):
        self.calls.append(("stroke", style))
        self.strokes.append(style)


class ConstantRandom(random.Random):
    """Random source whose random() always returns the same value."""

    def __init__(self, value: float = 0.5):
        super().__init__(0)
        self.value = value

    def random(self):
        return self.value


@pytest.fixture
def recording_surface():
    return RecordingSurface()


@pytest.fixture
def world():
    return WorldState(
        width=400,
        height=300,
        shape_kind=ShapeKind.SPHERE,
        skeleton=generate(ShapeKind.SPHERE, 100),
        rotation_angle=0.0,
    )
