"""Floor-plan geometry and the wall obstruction index."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

import numpy as np

from .errors import InvalidFloorPlanError
from .geometry import Point, segments_intersect_many

logger = logging.getLogger(__name__)

ELEMENT_KINDS: Tuple[str, ...] = ("wall", "door", "window")

MATERIALS: Tuple[str, ...] = ("drywall", "brick", "concrete", "metal", "glass", "wood")


@dataclass(frozen=True)
class Bounds:
    width: float
    height: float


@dataclass(frozen=True)
class FloorElement:
    """Straight architectural element between two points.

    Parameters
    ----------
    kind : str
        ``"wall"``, ``"door"`` or ``"window"``. Only walls obstruct.
    start, end : Point
        Segment endpoints.
    material : str
        Material label used for RF attenuation (e.g. ``"concrete"``).
        Unknown labels are allowed and fall back to a default loss.
    thickness : float
        Wall thickness in plan units.
    """

    kind: str
    start: Point
    end: Point
    material: str = "drywall"
    thickness: float = 0.1
    id: str = ""

    def __post_init__(self) -> None:
        if self.kind not in ELEMENT_KINDS:
            raise ValueError(
                f"Unknown element kind '{self.kind}'. Choose from: " + ", ".join(ELEMENT_KINDS)
            )

    @property
    def is_degenerate(self) -> bool:
        return self.start == self.end


@dataclass(frozen=True)
class FloorPlan:
    """Immutable floor geometry for one analysis run."""

    bounds: Bounds
    elements: Tuple[FloorElement, ...] = field(default_factory=tuple)
    id: str = ""

    @property
    def walls(self) -> List[FloorElement]:
        return [e for e in self.elements if e.kind == "wall"]

    @property
    def area(self) -> float:
        return self.bounds.width * self.bounds.height

    def validate(self) -> None:
        """Raise :class:`InvalidFloorPlanError` if the bounds are unusable."""
        width, height = self.bounds.width, self.bounds.height
        if not (math.isfinite(width) and math.isfinite(height)):
            raise InvalidFloorPlanError(f"Floor plan bounds must be finite, got {width} x {height}")
        if width <= 0 or height <= 0:
            raise InvalidFloorPlanError(f"Floor plan bounds must be positive, got {width} x {height}")


@dataclass(frozen=True)
class Obstruction:
    """A wall crossed by a line of sight."""

    material: str
    thickness: float


class ObstructionIndex:
    """Answers line-of-sight queries against the walls of a floor plan.

    Built once per analysis run. Each query tests the sight line against
    every wall, so a query is O(walls); with one query per cell and sensor
    this is the dominant cost of a run (O(cells × sensors × walls)). A
    spatial index over the wall segments would be the place to optimise.
    """

    def __init__(self, walls: Sequence[FloorElement]) -> None:
        kept = [w for w in walls if w.kind == "wall" and not w.is_degenerate]
        skipped = len(walls) - len(kept)
        if skipped:
            logger.warning("Ignoring %d degenerate or non-wall segment(s)", skipped)

        self._walls: Tuple[FloorElement, ...] = tuple(kept)
        self._starts = np.array([w.start.as_tuple() for w in kept], dtype=np.float64).reshape(-1, 2)
        self._ends = np.array([w.end.as_tuple() for w in kept], dtype=np.float64).reshape(-1, 2)
        logger.debug("Built obstruction index over %d wall(s)", len(kept))

    @classmethod
    def from_floor_plan(cls, floor_plan: FloorPlan) -> "ObstructionIndex":
        return cls(floor_plan.walls)

    def __len__(self) -> int:
        return len(self._walls)

    def _hits(self, p1: Point, p2: Point) -> np.ndarray:
        return segments_intersect_many(p1, p2, self._starts, self._ends)

    def obstructions_between(self, p1: Point, p2: Point) -> List[Obstruction]:
        """Walls crossed by the segment p1→p2, in wall order."""
        if not self._walls:
            return []
        hits = self._hits(p1, p2)
        return [
            Obstruction(material=self._walls[i].material, thickness=self._walls[i].thickness)
            for i in np.flatnonzero(hits)
        ]

    def is_obstructed(self, p1: Point, p2: Point) -> bool:
        if not self._walls:
            return False
        return bool(self._hits(p1, p2).any())
