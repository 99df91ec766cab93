"""Shared world state read by every dot and written by the orchestrator."""

import logging
from dataclasses import dataclass

from .generation.shapes import SKELETON_SIZE, ShapeKind, Skeleton

logger = logging.getLogger(__name__)


@dataclass
class WorldState:
    """Current shape, its skeleton and the shared rotation.

    The orchestrator is the only writer of shape_kind and skeleton. Dots
    read both and nudge rotation_angle through advance_rotation().
    """

    width: int
    height: int
    shape_kind: ShapeKind
    skeleton: Skeleton
    rotation_angle: float = 0.0
    fast_mode: bool = False

    def __post_init__(self):
        self._check_skeleton(self.skeleton)
        self.skeleton = tuple(self.skeleton)

    @staticmethod
    def _check_skeleton(skeleton: Skeleton) -> None:
        if skeleton is None or len(skeleton) != SKELETON_SIZE:
            count = 0 if skeleton is None else len(skeleton)
            raise ValueError(f"Skeleton must have {SKELETON_SIZE} points, got {count}")

    @property
    def center(self) -> tuple[float, float]:
        return self.width / 2, self.height / 2

    def replace_skeleton(self, kind: ShapeKind, skeleton: Skeleton) -> None:
        """Swap in a freshly generated skeleton for a new shape kind."""
        self._check_skeleton(skeleton)
        self.shape_kind = kind
        self.skeleton = tuple(skeleton)
        logger.debug(f"World shape set to {kind.value}")

    def advance_rotation(self, step: float) -> float:
        """Add step to the shared rotation; grows without wrapping."""
        self.rotation_angle += step
        return self.rotation_angle
