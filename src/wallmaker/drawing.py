# src/wallmaker/drawing.py
"""Renderer-agnostic drawing intents for the editor's current state.

Each intent carries a ``role`` that a renderer maps to colour/opacity
(see :mod:`wallmaker.styles`). Coordinates are world units.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from loguru import logger

from wallmaker.door_tool import DirectionPending, DoorPreview, HingeSet
from wallmaker.geometry import Point, distance, polar_point
from wallmaker.layout import door_edges, door_swing, find_wall, segment_lines
from wallmaker.models import OpeningDirection
from wallmaker.units import format_angle, format_length
from wallmaker.wall_tool import WallPreview, WallStartSet

if TYPE_CHECKING:
    from wallmaker.editor import WallEditor

LABEL_OFFSET = 10.0
MAJOR_GRID_EVERY = 5
FRAME_WIDTH = 3.0
HINGE_MARKER_RADIUS = 3.0
ENDPOINT_MARKER_RADIUS = 4.0
PREVIEW_MARKER_RADIUS = 5.0
SNAP_MARKER_RADIUS = 6.0


@dataclass(frozen=True)
class LineIntent:
    start: Point
    end: Point
    width: float
    role: str
    dashed: bool = False


@dataclass(frozen=True)
class SectorIntent:
    """Filled circular sector from ``start_angle`` sweeping ``sweep`` degrees."""

    center: Point
    radius: float
    start_angle: float
    sweep: float
    role: str


@dataclass(frozen=True)
class ArcIntent:
    center: Point
    radius: float
    start_angle: float
    sweep: float
    role: str
    width: float = 4.0


@dataclass(frozen=True)
class CircleIntent:
    center: Point
    radius: float
    role: str


@dataclass(frozen=True)
class LabelIntent:
    position: Point
    text: str
    role: str


@dataclass(frozen=True)
class GridIntent:
    size: float
    major_every: int = MAJOR_GRID_EVERY


Intent = Union[LineIntent, SectorIntent, ArcIntent, CircleIntent, LabelIntent, GridIntent]


def _midpoint(a: Point, b: Point) -> Point:
    return Point((a.x + b.x) / 2, (a.y + b.y) / 2)


def _measurement_labels(start: Point, end: Point, angle: float, role: str, config, suffix: str = "") -> list[Intent]:
    intents: list[Intent] = []
    if config.show_measurements:
        mid = _midpoint(start, end)
        intents.append(LabelIntent(Point(mid.x, mid.y - LABEL_OFFSET), format_length(distance(start, end)), role))
    if config.show_angles:
        intents.append(LabelIntent(Point(end.x + LABEL_OFFSET, end.y), format_angle(angle) + suffix, role))
    return intents


def wall_intents(editor: WallEditor) -> list[Intent]:
    intents: list[Intent] = []
    selected = editor.selected_wall_id
    for wall in editor.walls:
        role = "wall_selected" if wall.id == selected else "wall"
        for a, b in segment_lines(wall, editor.doors):
            intents.append(LineIntent(a, b, wall.thickness, role))
        intents.extend(
            _measurement_labels(wall.start, wall.end, wall.angle, "measurement", editor.config)
        )
    return intents


def door_intents(editor: WallEditor) -> list[Intent]:
    intents: list[Intent] = []
    for door in editor.doors:
        wall = find_wall(editor.walls, door.wall_id)
        if wall is None:
            logger.debug(f"Skipping door {door.id}: wall {door.wall_id} not found")
            continue
        swing = door_swing(wall, door)
        start, end = door_edges(wall, door)
        intents.append(SectorIntent(swing.hinge, swing.radius, swing.base_angle, swing.sweep, "door_swing"))
        intents.append(ArcIntent(swing.hinge, swing.radius, swing.base_angle, swing.sweep, "door_arc"))
        intents.append(LineIntent(start, end, FRAME_WIDTH, "door_frame"))
        intents.append(CircleIntent(swing.hinge, HINGE_MARKER_RADIUS, "door_hinge"))
    return intents


def wall_preview_intents(editor: WallEditor) -> list[Intent]:
    state = editor.wall_tool.state
    if not isinstance(state, WallPreview):
        return []
    snapped = state.snap.snapped or state.angle_snap.snapped
    role = "preview_snapped" if snapped else "preview"
    intents: list[Intent] = [
        LineIntent(state.start, state.end, editor.config.default_thickness, role, dashed=True)
    ]
    suffix = " ✓" if state.angle_snap.snapped else ""
    intents.extend(
        _measurement_labels(state.start, state.end, state.angle_snap.angle, role, editor.config, suffix)
    )
    return intents


def door_preview_intents(editor: WallEditor) -> list[Intent]:
    state = editor.door_tool.state
    if isinstance(state, HingeSet):
        return [CircleIntent(state.hinge, PREVIEW_MARKER_RADIUS, "door_hinge")]
    if not isinstance(state, DoorPreview):
        return []
    intents: list[Intent] = [
        LineIntent(state.hinge, state.end, FRAME_WIDTH, "door_frame", dashed=True),
        CircleIntent(state.hinge, PREVIEW_MARKER_RADIUS, "door_hinge"),
        CircleIntent(state.end, PREVIEW_MARKER_RADIUS, "door_hinge"),
    ]
    if state.width > 0:
        mid = _midpoint(state.hinge, state.end)
        intents.append(LabelIntent(Point(mid.x, mid.y - LABEL_OFFSET), format_length(state.width), "door_label"))
    return intents


def direction_option_intents(editor: WallEditor) -> list[Intent]:
    state = editor.door_tool.state
    if not isinstance(state, DirectionPending) or state.width == 0:
        return []

    intents: list[Intent] = []
    base_angle = state.base_angle
    for direction, sweep, label in (
        (OpeningDirection.RIGHT, -90.0, "R"),
        (OpeningDirection.LEFT, 90.0, "L"),
    ):
        suffix = "_hover" if state.hovered == direction else ""
        intents.append(SectorIntent(state.hinge, state.width, base_angle, sweep, "direction_option" + suffix))
        intents.append(ArcIntent(state.hinge, state.width, base_angle, sweep, "door_arc" + suffix))
        label_at = polar_point(state.hinge, state.width * 0.65, base_angle + sweep / 2)
        intents.append(LabelIntent(label_at, label, "door_label" + suffix))
    intents.append(CircleIntent(state.hinge, HINGE_MARKER_RADIUS + 1, "door_hinge"))
    return intents


def marker_intents(editor: WallEditor) -> list[Intent]:
    intents: list[Intent] = []
    state = editor.wall_tool.state

    snap = getattr(state, "snap", None)
    if snap is not None and snap.snapped:
        intents.append(CircleIntent(snap.point, SNAP_MARKER_RADIUS, "snap"))

    selected = editor.selected_wall_id
    for wall in editor.walls:
        role = "endpoint_selected" if wall.id == selected else "endpoint"
        intents.append(CircleIntent(wall.start, ENDPOINT_MARKER_RADIUS, role))
        intents.append(CircleIntent(wall.end, ENDPOINT_MARKER_RADIUS, role))

    if isinstance(state, (WallStartSet, WallPreview)):
        intents.append(CircleIntent(state.start, PREVIEW_MARKER_RADIUS, "start"))
    if isinstance(state, WallPreview):
        snapped = state.snap.snapped
        intents.append(
            CircleIntent(
                state.end,
                SNAP_MARKER_RADIUS if snapped else PREVIEW_MARKER_RADIUS,
                "preview_snapped" if snapped else "preview",
            )
        )
    return intents


def build_scene(editor: WallEditor) -> list[Intent]:
    """All intents for the current editor state, in back-to-front order."""
    intents: list[Intent] = []
    if editor.config.show_grid:
        intents.append(GridIntent(editor.config.grid_size))
    intents.extend(wall_intents(editor))
    intents.extend(door_intents(editor))
    intents.extend(wall_preview_intents(editor))
    intents.extend(door_preview_intents(editor))
    intents.extend(direction_option_intents(editor))
    intents.extend(marker_intents(editor))
    return intents
