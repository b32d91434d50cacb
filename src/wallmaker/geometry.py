# src/wallmaker/geometry.py
"""Plane geometry helpers shared by snapping, hit-testing and door placement.

World coordinates use the screen convention (y grows downward), so every
angle here is ``atan2(dy, dx)`` in degrees measured clockwise on screen.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import NamedTuple

import numpy as np


class Point(NamedTuple):
    x: float
    y: float


@dataclass(frozen=True)
class Projection:
    """Clamped projection of a point onto a segment."""

    t: float
    point: Point
    distance: float


def as_point(value) -> Point:
    """Coerce a pair-like value (tuple, list, ndarray) into a Point."""
    return Point(float(value[0]), float(value[1]))


def distance(a: Point, b: Point) -> float:
    return float(math.hypot(b[0] - a[0], b[1] - a[1]))


def normalize_angle(angle: float) -> float:
    """Map an angle in degrees into [0, 360)."""
    result = angle % 360.0
    if result >= 360.0:
        result -= 360.0
    return result


def wrap_angle(angle: float) -> float:
    """Map an angle in degrees into [-180, 180]."""
    while angle > 180.0:
        angle -= 360.0
    while angle < -180.0:
        angle += 360.0
    return angle


def angle_difference(a: float, b: float) -> float:
    """Smallest absolute difference between two angles, in degrees."""
    return abs(wrap_angle(a - b))


def direction_angle(a: Point, b: Point) -> float:
    """Direction from ``a`` to ``b`` in degrees, normalised to [0, 360)."""
    return normalize_angle(math.degrees(math.atan2(b[1] - a[1], b[0] - a[0])))


def polar_point(origin: Point, length: float, angle: float) -> Point:
    """Point at ``length`` from ``origin`` along ``angle`` degrees."""
    rad = math.radians(angle)
    return Point(origin[0] + length * math.cos(rad), origin[1] + length * math.sin(rad))


def point_along(start: Point, end: Point, t: float) -> Point:
    """Point at parameter ``t`` on the segment start->end (t=0 start, t=1 end)."""
    p = np.array(start, dtype=float) + t * (np.array(end, dtype=float) - np.array(start, dtype=float))
    return as_point(p)


def project_onto_segment(point: Point, start: Point, end: Point) -> Projection | None:
    """Project ``point`` onto the segment, clamping the parameter into [0, 1].

    Returns None for a degenerate (zero-length) segment.
    """
    s = np.array(start, dtype=float)
    d = np.array(end, dtype=float) - s
    length_sq = float(np.dot(d, d))
    if length_sq == 0.0:
        return None

    t = float(np.dot(np.array(point, dtype=float) - s, d)) / length_sq
    t = max(0.0, min(1.0, t))
    projected = as_point(s + t * d)
    return Projection(t=t, point=projected, distance=distance(point, projected))


def side_of_line(point: Point, start: Point, end: Point) -> str:
    """Which side of the directed line start->end the point lies on.

    The right-hand perpendicular of ``d = end - start`` is ``(d.y, -d.x)``.
    A non-negative dot product with it is "right", a negative one "left".
    """
    d = np.array(end, dtype=float) - np.array(start, dtype=float)
    perp_right = np.array([d[1], -d[0]])
    to_point = np.array(point, dtype=float) - np.array(start, dtype=float)
    return "right" if float(np.dot(to_point, perp_right)) >= 0 else "left"


def classify_direction(
    pointer: Point, hinge: Point, far_edge: Point, radius: float, margin: float
) -> str | None:
    """Classify the pointer into one of the two quarter-circle swing regions.

    Both regions are anchored at ``hinge``. Relative to the hinge->far_edge
    baseline, [-90, 0] degrees is "right" and [0, 90] is "left" (the shared
    0 boundary resolves to "right"). Pointers farther than ``radius + margin``
    from the hinge, or behind the baseline, match nothing.
    """
    if distance(pointer, hinge) > radius + margin:
        return None

    pointer_angle = math.degrees(math.atan2(pointer[1] - hinge[1], pointer[0] - hinge[0]))
    base_angle = math.degrees(math.atan2(far_edge[1] - hinge[1], far_edge[0] - hinge[0]))
    normalized = wrap_angle(pointer_angle - base_angle)

    if -90.0 <= normalized <= 0.0:
        return "right"
    if 0.0 <= normalized <= 90.0:
        return "left"
    return None
