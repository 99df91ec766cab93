"""Dot agents: independent pens tracing the shared skeleton.

A dot is either following the skeleton (steady) or wandering chaotically
while the orchestrator swaps shapes (transitioning). Independently of the
mode, its line width, colour and opacity drift toward targets that are
re-rolled now and then, so every pen keeps a slightly different character.
"""

import logging
import math
import random
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..config import Settings
from ..generation.palette import LINE_CAPS, ColorScheme, StrokeStyle, copy_schemes
from ..generation.sampler import sample
from ..generation.shapes import ShapeKind
from ..render.surface import RenderSurface
from ..world import WorldState

logger = logging.getLogger(__name__)


class DotMode(Enum):
    """Motion mode of a dot."""

    STEADY = "steady"                # Following the skeleton sampler
    TRANSITIONING = "transitioning"  # Bounded random walk during a shape switch


@dataclass
class DotConfig:
    """Tuning shared by all dots."""

    phase_offset: float = 0.1

    # Sampler projection
    perspective: float = 800.0
    damping: float = 0.8

    # Steady motion
    t_step: float = 0.0002
    rotation_step: float = 0.001
    follow_rate: float = 0.1
    history_size: int = 3
    smoothing_factor: float = 0.6
    depth_min: float = 0.4
    depth_max: float = 1.2

    # Transition motion
    transition_duration_ms: float = 2000.0
    speed_min: float = 2.0
    speed_max: float = 10.0
    jump_probability: float = 0.05
    burst_probability: float = 0.03

    # Line width
    min_width: float = 0.5
    max_width: float = 14.0
    width_reroll_probability: float = 0.1
    width_reroll_probability_fast: float = 0.03
    width_relax_rate: float = 0.25
    width_relax_rate_fast: float = 0.1

    # Colour
    color_reroll_probability: float = 0.01
    hue_smoothing: float = 0.05
    opacity_smoothing: float = 0.15
    saturation_smoothing: float = 0.05
    lightness_smoothing: float = 0.05

    @classmethod
    def from_settings(cls, s: Settings) -> "DotConfig":
        return cls(**{name: getattr(s, name) for name in cls.__dataclass_fields__})


class Dot:
    """One animated pen."""

    def __init__(
        self,
        dot_id: int,
        x: float,
        y: float,
        shape_kind: ShapeKind = ShapeKind.SPHERE,
        config: Optional[DotConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        self.id = dot_id
        self.config = config or DotConfig()
        self.rng = rng or random.Random()
        cfg = self.config
        rng = self.rng

        self.x = x
        self.y = y
        self.last_x = x
        self.last_y = y
        self.t = dot_id * cfg.phase_offset

        # Recent skeleton samples, newest last
        self.history: deque[tuple[float, float]] = deque(maxlen=cfg.history_size)
        # Recent pen positions, used to curve the drawn segment
        self._trail: deque[tuple[float, float]] = deque([(x, y)], maxlen=3)

        # Line properties
        self.min_width = cfg.min_width
        self.max_width = cfg.max_width
        self.line_width = self.min_width
        self.target_line_width = self.line_width
        self.line_cap = "round"
        self.line_join = "round"

        # Colour, seeded from this dot's own copy of the scheme table
        self.color_schemes: dict[ShapeKind, ColorScheme] = copy_schemes()
        scheme = self.color_schemes[ShapeKind(shape_kind)]
        self.hue = scheme.hue + (rng.random() - 0.5) * scheme.hue_range
        self.saturation = scheme.saturation + (rng.random() - 0.5) * 20
        self.lightness = scheme.lightness + (rng.random() - 0.5) * 15
        self.opacity = rng.random() * 0.5 + 0.3
        self.target_hue = self.hue
        self.target_saturation = self.saturation
        self.target_lightness = self.lightness
        self.target_opacity = self.opacity

        # Projection of the last sample
        self.current_depth = 0.5
        self.current_lighting = 1.0

        # Transition state and chaotic-motion temperament
        self.mode = DotMode.STEADY
        self.transition_start_ms: Optional[float] = None
        self.speed = rng.random() * 8 + 2
        self.direction = rng.random() * math.pi * 2
        self.direction_change_rate = rng.random() * 0.4 + 0.1
        self.speed_variation = rng.random() * 0.5 + 0.5

    def __repr__(self) -> str:
        return f"Dot(id={self.id}, mode={self.mode.value}, x={self.x:.1f}, y={self.y:.1f})"

    @property
    def is_transitioning(self) -> bool:
        return self.mode is DotMode.TRANSITIONING

    # Mode changes

    def start_transition(self, now_ms: float, direction: Optional[float] = None) -> None:
        """Enter chaotic motion, timed from now_ms."""
        self.mode = DotMode.TRANSITIONING
        self.transition_start_ms = now_ms
        self.direction = self.rng.random() * math.pi * 2 if direction is None else direction
        logger.debug(f"Dot {self.id} transitioning from t={now_ms:.0f}ms")

    def end_transition(self) -> None:
        """Return to following the skeleton from the current pen position."""
        if self.mode is DotMode.STEADY:
            return
        self.mode = DotMode.STEADY
        self.transition_start_ms = None
        logger.debug(f"Dot {self.id} steady")

    def reset_phase(self) -> None:
        """Restart the walk along a new skeleton, keeping the pen where it is."""
        self.t = self.id * self.config.phase_offset
        self.history.clear()

    # Per-tick update

    def update(self, world: WorldState, now_ms: float) -> None:
        """Advance one frame against the shared world."""
        if self.mode is DotMode.TRANSITIONING:
            elapsed = now_ms - self.transition_start_ms
            if elapsed > self.config.transition_duration_ms:
                self.end_transition()

        if self.mode is DotMode.TRANSITIONING:
            self._update_transition(world)
        else:
            self._update_steady(world)

        self._animate_width(world.fast_mode)
        self._animate_color(world.shape_kind)

    def _update_steady(self, world: WorldState) -> None:
        cfg = self.config

        self.t += cfg.t_step
        angle = world.advance_rotation(cfg.rotation_step)
        center_x, center_y = world.center
        pos = sample(
            self.t,
            world.skeleton,
            angle,
            center_x,
            center_y,
            perspective=cfg.perspective,
            damping=cfg.damping,
        )

        self.history.append((pos.x, pos.y))
        target_x, target_y = self.smoothed_target()
        self._move_pen(
            self.x + (target_x - self.x) * cfg.follow_rate,
            self.y + (target_y - self.y) * cfg.follow_rate,
        )

        self.current_depth = max(cfg.depth_min, min(cfg.depth_max, pos.depth))
        self.current_lighting = pos.lighting

        # Nearer pens draw wider and more opaque
        depth_norm = (self.current_depth - cfg.depth_min) / (cfg.depth_max - cfg.depth_min)
        self.line_width = self.min_width + (self.max_width - self.min_width) * depth_norm
        self.opacity = min(1.0, 0.2 + self.current_depth * 0.8)

    def smoothed_target(self) -> tuple[float, float]:
        """Weighted blend of the sample history, newest weighted highest."""
        factor = self.config.smoothing_factor
        total_weight = 0.0
        sum_x = 0.0
        sum_y = 0.0
        for age, (hx, hy) in enumerate(reversed(self.history)):
            weight = factor ** age
            sum_x += hx * weight
            sum_y += hy * weight
            total_weight += weight
        if total_weight == 0:
            return self.x, self.y
        return sum_x / total_weight, sum_y / total_weight

    def _update_transition(self, world: WorldState) -> None:
        cfg = self.config
        rng = self.rng

        self.direction += (rng.random() - 0.5) * self.direction_change_rate
        self.speed *= 1 + (rng.random() - 0.5) * self.speed_variation

        # Occasional sudden turn
        if rng.random() < cfg.jump_probability:
            self.direction += math.pi * (rng.random() - 0.5)

        # Occasional burst of speed
        if rng.random() < cfg.burst_probability:
            self.speed *= rng.random() * 2 + 1

        self.speed = max(cfg.speed_min, min(cfg.speed_max, self.speed))

        x = self.x + math.cos(self.direction) * self.speed
        y = self.y + math.sin(self.direction) * self.speed

        # Bounce off the canvas edges
        if x < 0 or x > world.width:
            self.direction = math.pi - self.direction
            x = max(0.0, min(float(world.width), x))
        if y < 0 or y > world.height:
            self.direction = -self.direction
            y = max(0.0, min(float(world.height), y))

        self._move_pen(x, y)

    def _move_pen(self, x: float, y: float) -> None:
        self.last_x = self.x
        self.last_y = self.y
        self.x = x
        self.y = y
        self._trail.append((x, y))

    def _animate_width(self, fast_mode: bool) -> None:
        cfg = self.config
        reroll = cfg.width_reroll_probability_fast if fast_mode else cfg.width_reroll_probability
        if self.rng.random() < reroll:
            self.target_line_width = self.rng.random() * (self.max_width - self.min_width) + self.min_width

        rate = cfg.width_relax_rate_fast if fast_mode else cfg.width_relax_rate
        self.line_width += (self.target_line_width - self.line_width) * rate

    def _animate_color(self, shape_kind: ShapeKind) -> None:
        cfg = self.config
        rng = self.rng

        if rng.random() < cfg.color_reroll_probability:
            scheme = self.color_schemes[shape_kind]
            self.target_hue = scheme.hue + (rng.random() - 0.5) * scheme.hue_range
            self.target_saturation = scheme.saturation + (rng.random() - 0.5) * 20
            self.target_lightness = scheme.lightness + (rng.random() - 0.5) * 15
            self.target_opacity = rng.random() * 0.5 + 0.3

        self.hue += (self.target_hue - self.hue) * cfg.hue_smoothing
        self.saturation += (self.target_saturation - self.saturation) * cfg.saturation_smoothing
        self.lightness += (self.target_lightness - self.lightness) * cfg.lightness_smoothing
        self.opacity += (self.target_opacity - self.opacity) * cfg.opacity_smoothing

    # Pen style

    def randomize_pen(self, shape_kind: ShapeKind) -> None:
        """Re-roll width range, opacity, cap and this dot's scheme for shape_kind."""
        rng = self.rng

        self.min_width = rng.random() * 2
        self.max_width = rng.random() * 15 + 5

        self.opacity = rng.random() * 0.5 + 0.3
        self.target_opacity = self.opacity

        self.line_cap = LINE_CAPS[int(rng.random() * len(LINE_CAPS))]

        scheme = self.color_schemes[shape_kind]
        scheme.hue_range = rng.random() * 60 + 10
        scheme.saturation = rng.random() * 40 + 40
        scheme.lightness = rng.random() * 30 + 35

    def pen_parameters(self, shape_kind: ShapeKind) -> dict:
        """Snapshot of the parameters randomize_pen() controls."""
        scheme = self.color_schemes[shape_kind]
        return {
            "min_width": self.min_width,
            "max_width": self.max_width,
            "opacity": self.opacity,
            "target_opacity": self.target_opacity,
            "line_cap": self.line_cap,
            "hue_range": scheme.hue_range,
            "saturation": scheme.saturation,
            "lightness": scheme.lightness,
        }

    # Rendering

    def stroke_style(self) -> StrokeStyle:
        return StrokeStyle(
            width=self.line_width * (1 + self.current_depth),
            hue=self.hue,
            saturation=self.saturation,
            lightness=self.lightness * self.current_lighting,
            alpha=self.opacity * (0.5 + self.current_depth),
            cap=self.line_cap,
            join=self.line_join,
        )

    def draw(self, surface: RenderSurface) -> None:
        """Stroke the segment from the previous pen position to the current one."""
        surface.begin_path()
        surface.move_to(self.last_x, self.last_y)

        if self.mode is DotMode.STEADY and len(self._trail) == self._trail.maxlen:
            # Continue the previous segment's tangent for a smooth join
            (ax, ay), (bx, by), _ = self._trail
            surface.quadratic_curve_to(
                bx + (bx - ax) * 0.5,
                by + (by - ay) * 0.5,
                self.x,
                self.y,
            )
        else:
            surface.line_to(self.x, self.y)

        surface.stroke(self.stroke_style())
