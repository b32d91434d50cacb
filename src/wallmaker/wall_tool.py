# src/wallmaker/wall_tool.py
"""Click-click wall drawing.

    Idle --click--> StartSet --move--> Preview --click--> Idle (+ Wall)

Escape (``Cancel``) returns to Idle from any state without committing.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Union

from loguru import logger

from wallmaker.geometry import Point, distance
from wallmaker.models import Wall, WallMakerConfig
from wallmaker.snapping import AngleSnap, PointSnap, SnapResolver

MIN_WALL_LENGTH = 5.0


# ------------------------------------------------------------------ #
# States
# ------------------------------------------------------------------ #


@dataclass(frozen=True)
class WallIdle:
    pass


@dataclass(frozen=True)
class WallStartSet:
    start: Point
    snap: PointSnap


@dataclass(frozen=True)
class WallPreview:
    start: Point
    end: Point
    snap: PointSnap
    angle_snap: AngleSnap

    @property
    def length(self) -> float:
        return distance(self.start, self.end)


WallState = Union[WallIdle, WallStartSet, WallPreview]


# ------------------------------------------------------------------ #
# Events
# ------------------------------------------------------------------ #


@dataclass(frozen=True)
class Click:
    point: Point


@dataclass(frozen=True)
class Move:
    point: Point


@dataclass(frozen=True)
class Cancel:
    pass


ToolEvent = Union[Click, Move, Cancel]


def transition(
    state: WallState,
    event: ToolEvent,
    walls: Sequence[Wall],
    config: WallMakerConfig,
) -> tuple[WallState, Optional[Wall]]:
    """Advance the wall tool by one event; returns (next state, committed wall)."""
    if isinstance(event, Cancel):
        return WallIdle(), None

    resolver = SnapResolver(walls, config)

    if isinstance(state, WallIdle):
        if isinstance(event, Click):
            snap = resolver.resolve(event.point)
            logger.debug(f"Wall start set at {snap.point} ({snap.kind.value})")
            return WallStartSet(start=snap.point, snap=snap), None
        return state, None

    if isinstance(state, (WallStartSet, WallPreview)):
        if isinstance(event, Move):
            snap, angle_snap = resolver.resolve_wall_end(state.start, event.point)
            return WallPreview(
                start=state.start, end=angle_snap.point, snap=snap, angle_snap=angle_snap
            ), None

        if isinstance(event, Click):
            return WallIdle(), _commit(state, event.point, resolver, config)

    raise TypeError(f"unhandled wall tool transition: {state!r} / {event!r}")


def _commit(
    state: Union[WallStartSet, WallPreview],
    raw: Point,
    resolver: SnapResolver,
    config: WallMakerConfig,
) -> Optional[Wall]:
    # endpoint/grid resolution only, so chained walls share exact coordinates
    end = resolver.resolve(raw).point
    snap_angle: Optional[float] = None
    if isinstance(state, WallPreview) and state.angle_snap.snapped:
        snap_angle = state.angle_snap.angle

    length = distance(state.start, end)
    if length < MIN_WALL_LENGTH:
        logger.debug(f"Discarding wall shorter than {MIN_WALL_LENGTH}: {length:.2f}")
        return None

    wall = Wall.between(
        state.start,
        end,
        thickness=config.default_thickness,
        snap_to_grid=config.snap_to_grid,
        snap_angle=snap_angle,
    )
    logger.info(f"Wall {wall.id} created, length={wall.length:.1f} angle={wall.angle:.1f}")
    return wall


class WallTool:
    """Holds the wall tool's current state and feeds it events."""

    def __init__(self) -> None:
        self.state: WallState = WallIdle()

    @property
    def active(self) -> bool:
        return not isinstance(self.state, WallIdle)

    def click(self, point: Point, walls: Sequence[Wall], config: WallMakerConfig) -> Optional[Wall]:
        self.state, wall = transition(self.state, Click(point), walls, config)
        return wall

    def move(self, point: Point, walls: Sequence[Wall], config: WallMakerConfig) -> None:
        self.state, _ = transition(self.state, Move(point), walls, config)

    def cancel(self) -> None:
        self.state = WallIdle()
