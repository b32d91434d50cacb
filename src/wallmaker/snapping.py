# src/wallmaker/snapping.py
"""Point resolution: endpoint snap, then grid snap, plus angle snap for wall ends."""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence

from loguru import logger

from wallmaker.geometry import (
    Point,
    angle_difference,
    direction_angle,
    distance,
    polar_point,
)
from wallmaker.models import Wall, WallMakerConfig

ENDPOINT_SNAP_THRESHOLD = 15.0
ANGLE_SNAP_TOLERANCE = 5.0


class SnapKind(str, Enum):
    ENDPOINT = "endpoint"
    GRID = "grid"
    NONE = "none"


@dataclass(frozen=True)
class PointSnap:
    point: Point
    kind: SnapKind
    snapped: bool


@dataclass(frozen=True)
class AngleSnap:
    point: Point
    angle: float
    snapped: bool


def snap_to_grid(point: Point, grid_size: float) -> Point:
    """Round a point to the nearest grid intersection (halves round up)."""
    return Point(
        math.floor(point[0] / grid_size + 0.5) * grid_size,
        math.floor(point[1] / grid_size + 0.5) * grid_size,
    )


def nearest_endpoint(
    point: Point, walls: Iterable[Wall], threshold: float = ENDPOINT_SNAP_THRESHOLD
) -> Point | None:
    """Closest wall start/end strictly within ``threshold`` of ``point``."""
    best: Point | None = None
    best_dist = threshold
    for wall in walls:
        for candidate in (wall.start, wall.end):
            d = distance(point, candidate)
            if d < best_dist:
                best_dist = d
                best = candidate
    return best


def snap_line_to_angle(
    anchor: Point,
    free: Point,
    snap_angles: Sequence[float],
    tolerance: float = ANGLE_SNAP_TOLERANCE,
) -> AngleSnap:
    """Rotate ``free`` about ``anchor`` onto the nearest allowed angle.

    The distance from the anchor is preserved. Nothing moves when no allowed
    angle lies within ``tolerance`` degrees or the segment has zero length.
    """
    raw_angle = direction_angle(anchor, free)
    length = distance(anchor, free)
    if not snap_angles or length == 0.0:
        return AngleSnap(point=Point(*free), angle=raw_angle, snapped=False)

    closest = min(snap_angles, key=lambda a: angle_difference(raw_angle, a))
    if angle_difference(raw_angle, closest) > tolerance:
        return AngleSnap(point=Point(*free), angle=raw_angle, snapped=False)

    return AngleSnap(point=polar_point(anchor, length, closest), angle=closest, snapped=True)


class SnapResolver:
    """Resolves raw world points against the current walls and config."""

    def __init__(
        self,
        walls: Sequence[Wall],
        config: WallMakerConfig,
        endpoint_threshold: float = ENDPOINT_SNAP_THRESHOLD,
        angle_tolerance: float = ANGLE_SNAP_TOLERANCE,
    ) -> None:
        self.walls = walls
        self.config = config
        self.endpoint_threshold = endpoint_threshold
        self.angle_tolerance = angle_tolerance

    def resolve(self, point: Point) -> PointSnap:
        """Endpoint snap wins over grid snap; the two never combine."""
        endpoint = nearest_endpoint(point, self.walls, self.endpoint_threshold)
        if endpoint is not None:
            logger.debug(f"Endpoint snap {point} -> {endpoint}")
            return PointSnap(point=endpoint, kind=SnapKind.ENDPOINT, snapped=True)

        if self.config.snap_to_grid:
            gridded = snap_to_grid(point, self.config.grid_size)
            return PointSnap(point=gridded, kind=SnapKind.GRID, snapped=gridded != tuple(point))

        return PointSnap(point=Point(*point), kind=SnapKind.NONE, snapped=False)

    def snap_angle(self, anchor: Point, free: Point) -> AngleSnap:
        return snap_line_to_angle(anchor, free, self.config.snap_angles, self.angle_tolerance)

    def resolve_wall_end(self, anchor: Point, point: Point) -> tuple[PointSnap, AngleSnap]:
        """Resolve the far end of a wall in progress: point snap, then angle snap."""
        snap = self.resolve(point)
        return snap, self.snap_angle(anchor, snap.point)
