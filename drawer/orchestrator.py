"""Orchestrator: owns the world, the dots, and the shape-switch cycle."""

import logging
import math
import random
import time
from dataclasses import dataclass
from typing import Callable, Optional

from .agents.dot import Dot, DotConfig
from .config import Settings, settings as default_settings
from .generation.shapes import ShapeKind, generate, next_kind, random_radius
from .render.surface import RenderSurface
from .world import WorldState

logger = logging.getLogger(__name__)


def monotonic_ms() -> float:
    return time.monotonic() * 1000


@dataclass
class PendingSwitch:
    """A scheduled shape advance, applied by the first tick past its due time."""

    requested_at_ms: float
    duration_ms: float
    from_kind: ShapeKind
    coalesced: int = 0  # Extra requests folded into this switch

    @property
    def due_ms(self) -> float:
        return self.requested_at_ms + self.duration_ms

    def is_due(self, now_ms: float) -> bool:
        return now_ms - self.requested_at_ms > self.duration_ms


class Orchestrator:
    """Drives the animation one frame at a time.

    Each tick applies a due shape switch, then updates and draws every dot
    in index order onto the shared surface. The world state is only
    rewritten here; dots read it and advance its rotation.
    """

    def __init__(
        self,
        config: Optional[Settings] = None,
        surface: Optional[RenderSurface] = None,
        seed: Optional[int] = None,
        clock: Callable[[], float] = monotonic_ms,
    ):
        self.config = config or default_settings
        self.surface = surface
        self.clock = clock
        self.frame = 0
        cfg = self.config

        self._rng = random.Random(cfg.seed if seed is None else seed)
        self._pending: Optional[PendingSwitch] = None

        kind = ShapeKind(cfg.initial_shape)
        self.world = WorldState(
            width=cfg.canvas_width,
            height=cfg.canvas_height,
            shape_kind=kind,
            skeleton=generate(kind, self._new_radius()),
            rotation_angle=self._rng.random() * math.pi * 2,
        )

        # Each dot gets its own random stream so trajectories replay exactly
        dot_config = DotConfig.from_settings(cfg)
        center_x, center_y = self.world.center
        self.dots = [
            Dot(
                i,
                center_x,
                center_y,
                shape_kind=kind,
                config=dot_config,
                rng=random.Random(self._rng.getrandbits(64)),
            )
            for i in range(cfg.dot_count)
        ]
        logger.info(f"Created {len(self.dots)} dots on a {cfg.canvas_width}x{cfg.canvas_height} canvas")

    @property
    def shape_kind(self) -> ShapeKind:
        return self.world.shape_kind

    @property
    def pending_switch(self) -> Optional[PendingSwitch]:
        return self._pending

    def _now(self, now_ms: Optional[float]) -> float:
        return self.clock() if now_ms is None else now_ms

    def _new_radius(self) -> float:
        return random_radius(self.config.radius_min, self.config.radius_max, self._rng)

    def request_switch(self, now_ms: Optional[float] = None) -> PendingSwitch:
        """Send every dot into chaotic motion and schedule the next shape.

        A request while another switch is pending is coalesced into it: the
        dots restart their transition and the due time moves, but the shape
        still advances only once.
        """
        now = self._now(now_ms)
        for dot in self.dots:
            dot.start_transition(now, direction=self._rng.random() * math.pi * 2)

        if self._pending is None:
            self._pending = PendingSwitch(
                requested_at_ms=now,
                duration_ms=self.config.transition_duration_ms,
                from_kind=self.world.shape_kind,
            )
            logger.info(f"Shape switch requested from {self.world.shape_kind.value}")
        else:
            self._pending.requested_at_ms = now
            self._pending.coalesced += 1
            logger.info(f"Shape switch coalesced ({self._pending.coalesced} extra request(s))")
        return self._pending

    def _apply_due_switch(self, now: float) -> bool:
        if self._pending is None or not self._pending.is_due(now):
            return False

        kind = next_kind(self.world.shape_kind)
        self.world.replace_skeleton(kind, generate(kind, self._new_radius()))
        for dot in self.dots:
            dot.reset_phase()
            dot.end_transition()

        self._pending = None
        logger.info(f"New shape type: {kind.value}")
        return True

    def tick(self, now_ms: Optional[float] = None) -> None:
        """Advance every dot by one frame and draw it."""
        now = self._now(now_ms)
        self._apply_due_switch(now)

        for dot in self.dots:
            dot.update(self.world, now)
            if self.surface is not None:
                dot.draw(self.surface)

        self.frame += 1

    def randomize_pens(self) -> None:
        """Give every dot a new pen style for the current shape."""
        for dot in self.dots:
            dot.randomize_pen(self.world.shape_kind)
        logger.info(f"Randomized {len(self.dots)} pens for {self.world.shape_kind.value}")

    def toggle_speed(self) -> bool:
        """Flip the fast-mode flag (affects line-width animation only)."""
        self.world.fast_mode = not self.world.fast_mode
        logger.info(f"Fast mode: {self.world.fast_mode}")
        return self.world.fast_mode

    def export(self, path: str, format: Optional[str] = None) -> None:
        """Save the accumulated drawing."""
        if self.surface is None or not hasattr(self.surface, "export"):
            raise RuntimeError("No exportable surface attached")
        self.surface.export(path, format)
