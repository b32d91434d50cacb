# src/wallmaker/layout.py
"""Wall/door derived geometry: segmentation around doors, swing arcs,
hit-testing, and the collection-level edits (resize, cascade delete)."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

import numpy as np
from loguru import logger

from wallmaker.geometry import (
    Point,
    Projection,
    direction_angle,
    distance,
    point_along,
    polar_point,
    project_onto_segment,
)
from wallmaker.models import Door, HingeSide, OpeningDirection, Wall


@dataclass(frozen=True)
class WallHit:
    wall: Wall
    position: float
    point: Point
    distance: float


@dataclass(frozen=True)
class DoorSwing:
    """Geometry of a door's swing, anchored at the hinge."""

    hinge: Point
    frame_end: Point
    base_angle: float
    sweep: float
    radius: float

    @property
    def end_angle(self) -> float:
        return self.base_angle + self.sweep

    @property
    def arc_start(self) -> Point:
        return polar_point(self.hinge, self.radius, self.base_angle)

    @property
    def arc_end(self) -> Point:
        return polar_point(self.hinge, self.radius, self.end_angle)


# ------------------------------------------------------------------ #
# Projection and hit-testing
# ------------------------------------------------------------------ #


def point_on_wall(wall: Wall, t: float) -> Point:
    return point_along(wall.start, wall.end, t)


def project_onto_wall(wall: Wall, point: Point) -> Optional[Projection]:
    return project_onto_segment(point, wall.start, wall.end)


def find_wall_at_point(
    walls: Iterable[Wall], point: Point, threshold: float
) -> Optional[WallHit]:
    """Closest wall whose clamped projection lies strictly within ``threshold``."""
    best: Optional[WallHit] = None
    for wall in walls:
        proj = project_onto_wall(wall, point)
        if proj is None:
            continue
        if proj.distance < threshold and (best is None or proj.distance < best.distance):
            best = WallHit(wall=wall, position=proj.t, point=proj.point, distance=proj.distance)
    return best


def find_wall(walls: Iterable[Wall], wall_id: str) -> Optional[Wall]:
    for wall in walls:
        if wall.id == wall_id:
            return wall
    return None


# ------------------------------------------------------------------ #
# Segmentation around doors
# ------------------------------------------------------------------ #


def doors_on_wall(wall: Wall, doors: Iterable[Door]) -> list[Door]:
    return [d for d in doors if d.wall_id == wall.id]


def wall_segments(wall: Wall, doors: Iterable[Door]) -> list[tuple[float, float]]:
    """Parametric [start, end] spans of the wall left solid by its doors.

    Only doors whose ``wall_id`` matches are considered. A wall with N doors
    yields at most N+1 spans; a zero-length wall yields none.
    """
    wall_length = distance(wall.start, wall.end)
    if wall_length == 0.0:
        return []

    segments: list[tuple[float, float]] = []
    cursor = 0.0
    for door in sorted(doors_on_wall(wall, doors), key=lambda d: d.position):
        half = door.width / (2 * wall_length)
        door_start = max(0.0, door.position - half)
        door_end = min(1.0, door.position + half)
        if door_start > cursor:
            segments.append((cursor, door_start))
        cursor = door_end

    if cursor < 1.0:
        segments.append((cursor, 1.0))
    return segments


def segment_lines(wall: Wall, doors: Iterable[Door]) -> list[tuple[Point, Point]]:
    """World-space lines for :func:`wall_segments`."""
    return [
        (point_on_wall(wall, a), point_on_wall(wall, b))
        for a, b in wall_segments(wall, doors)
    ]


# ------------------------------------------------------------------ #
# Door geometry
# ------------------------------------------------------------------ #


def door_edges(wall: Wall, door: Door) -> tuple[Point, Point]:
    """Opening edges: the door centre +/- half its width along the wall."""
    centre = np.array(point_on_wall(wall, door.position))
    rad = math.radians(direction_angle(wall.start, wall.end))
    offset = np.array([math.cos(rad), math.sin(rad)]) * (door.width / 2)
    return Point(*(centre - offset)), Point(*(centre + offset))


def door_swing(wall: Wall, door: Door) -> DoorSwing:
    start, end = door_edges(wall, door)
    if door.hinge_side == HingeSide.START:
        hinge, frame_end = start, end
    else:
        hinge, frame_end = end, start

    base_angle = math.degrees(math.atan2(frame_end.y - hinge.y, frame_end.x - hinge.x))
    sweep = 90.0 if door.opening_direction == OpeningDirection.LEFT else -90.0
    return DoorSwing(
        hinge=hinge,
        frame_end=frame_end,
        base_angle=base_angle,
        sweep=sweep,
        radius=distance(hinge, frame_end),
    )


# ------------------------------------------------------------------ #
# Collection edits
# ------------------------------------------------------------------ #


def resize_wall(
    wall: Wall,
    length: Optional[float] = None,
    angle: Optional[float] = None,
    thickness: Optional[float] = None,
) -> Wall:
    """Apply direct property edits; the end point follows from the start."""
    if length is not None and length <= 0:
        raise ValueError("length must be positive")
    return wall.with_polar(length=length, angle=angle, thickness=thickness)


def replace_wall(walls: Sequence[Wall], updated: Wall) -> list[Wall]:
    if find_wall(walls, updated.id) is None:
        raise KeyError(f"unknown wall {updated.id!r}")
    return [updated if w.id == updated.id else w for w in walls]


def remove_wall(
    walls: Sequence[Wall], doors: Sequence[Door], wall_id: str
) -> tuple[list[Wall], list[Door]]:
    """Delete a wall together with every door hung on it."""
    if find_wall(walls, wall_id) is None:
        raise KeyError(f"unknown wall {wall_id!r}")
    kept_doors = [d for d in doors if d.wall_id != wall_id]
    dropped = len(doors) - len(kept_doors)
    if dropped:
        logger.debug(f"Cascade-deleting {dropped} door(s) on {wall_id}")
    return [w for w in walls if w.id != wall_id], kept_doors


def remove_door(doors: Sequence[Door], door_id: str) -> list[Door]:
    if not any(d.id == door_id for d in doors):
        raise KeyError(f"unknown door {door_id!r}")
    return [d for d in doors if d.id != door_id]


def orphaned_doors(walls: Iterable[Wall], doors: Iterable[Door]) -> list[Door]:
    """Doors whose wall reference no longer resolves."""
    wall_ids = {w.id for w in walls}
    return [d for d in doors if d.wall_id not in wall_ids]
