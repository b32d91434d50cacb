# src/wallmaker/door_tool.py
"""Three-stage door placement.

1. Click on a wall sets the hinge.
2. Moving previews the far edge along the same wall; a second click fixes it.
3. A third click inside one of the two quarter-circle regions picks the
   opening direction and commits the door.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Optional, Sequence, Union

from loguru import logger

from wallmaker.geometry import Point, classify_direction, distance, side_of_line
from wallmaker.layout import find_wall, find_wall_at_point, project_onto_wall
from wallmaker.models import Door, HingeSide, OpeningDirection, Wall
from wallmaker.wall_tool import Cancel, Click, Move, ToolEvent

MIN_DOOR_WIDTH = 20.0
HINGE_HIT_THRESHOLD = 15.0
END_HIT_THRESHOLD = 25.0
DIRECTION_MARGIN = 30.0


@dataclass(frozen=True)
class DoorIdle:
    pass


@dataclass(frozen=True)
class HingeSet:
    wall_id: str
    hinge: Point
    hinge_t: float


@dataclass(frozen=True)
class DoorPreview:
    wall_id: str
    hinge: Point
    hinge_t: float
    end: Point
    end_t: float

    @property
    def width(self) -> float:
        return distance(self.hinge, self.end)


@dataclass(frozen=True)
class DirectionPending:
    wall_id: str
    hinge: Point
    far_edge: Point
    hinge_t: float
    far_t: float
    width: float
    base_angle: float
    end_side: str
    hinge_side: HingeSide
    hovered: Optional[OpeningDirection] = None


DoorState = Union[DoorIdle, HingeSet, DoorPreview, DirectionPending]


def _end_on_wall(
    state: Union[HingeSet, DoorPreview], wall: Wall, point: Point
) -> tuple[Point, float]:
    """Far-edge candidate: the pointer clamped onto the hinge's wall."""
    proj = project_onto_wall(wall, point)
    if proj is None:
        return state.hinge, state.hinge_t
    return proj.point, proj.t


def _final_end(
    state: Union[HingeSet, DoorPreview], wall: Wall, walls: Sequence[Wall], point: Point
) -> tuple[Point, float]:
    hit = find_wall_at_point(walls, point, END_HIT_THRESHOLD)
    if hit is not None and hit.wall.id == wall.id:
        return hit.point, hit.position
    # off the wall, or nearer another one: keep the last previewed edge
    if isinstance(state, DoorPreview):
        return state.end, state.end_t
    return _end_on_wall(state, wall, point)


def transition(
    state: DoorState, event: ToolEvent, walls: Sequence[Wall]
) -> tuple[DoorState, Optional[Door]]:
    """Advance the door tool by one event; returns (next state, committed door)."""
    if isinstance(event, Cancel):
        return DoorIdle(), None

    if isinstance(state, DoorIdle):
        if isinstance(event, Click):
            hit = find_wall_at_point(walls, event.point, HINGE_HIT_THRESHOLD)
            if hit is None:
                logger.debug(f"Door hinge click at {event.point} hit no wall")
                return state, None
            logger.debug(f"Door hinge on {hit.wall.id} at t={hit.position:.3f}")
            return HingeSet(wall_id=hit.wall.id, hinge=hit.point, hinge_t=hit.position), None
        return state, None

    wall = find_wall(walls, state.wall_id)
    if wall is None:
        logger.debug(f"Wall {state.wall_id} vanished during door placement")
        return DoorIdle(), None

    if isinstance(state, (HingeSet, DoorPreview)):
        if isinstance(event, Move):
            end, end_t = _end_on_wall(state, wall, event.point)
            return DoorPreview(
                wall_id=state.wall_id, hinge=state.hinge, hinge_t=state.hinge_t,
                end=end, end_t=end_t,
            ), None

        if isinstance(event, Click):
            return _fix_width(state, wall, walls, event.point), None

    if isinstance(state, DirectionPending):
        direction = _direction_at(state, event.point)
        if isinstance(event, Move):
            return _with_hover(state, direction), None
        if isinstance(event, Click):
            if direction is None:
                logger.debug("Click outside direction regions, door cancelled")
                return DoorIdle(), None
            return DoorIdle(), _commit(state, direction)

    raise TypeError(f"unhandled door tool transition: {state!r} / {event!r}")


def _fix_width(
    state: Union[HingeSet, DoorPreview], wall: Wall, walls: Sequence[Wall], raw: Point
) -> DoorState:
    far_edge, far_t = _final_end(state, wall, walls, raw)
    width = distance(state.hinge, far_edge)
    if width < MIN_DOOR_WIDTH:
        logger.debug(f"Discarding door narrower than {MIN_DOOR_WIDTH}: {width:.2f}")
        return DoorIdle()

    # side is taken from the raw click, before projection onto the wall
    end_side = side_of_line(raw, wall.start, wall.end)
    hinge_side = HingeSide.START if state.hinge_t <= far_t else HingeSide.END
    base_angle = math.degrees(
        math.atan2(far_edge.y - state.hinge.y, far_edge.x - state.hinge.x)
    )
    return DirectionPending(
        wall_id=state.wall_id,
        hinge=state.hinge,
        far_edge=far_edge,
        hinge_t=state.hinge_t,
        far_t=far_t,
        width=width,
        base_angle=base_angle,
        end_side=end_side,
        hinge_side=hinge_side,
    )


def _direction_at(state: DirectionPending, point: Point) -> Optional[OpeningDirection]:
    label = classify_direction(point, state.hinge, state.far_edge, state.width, DIRECTION_MARGIN)
    return OpeningDirection(label) if label is not None else None


def _with_hover(state: DirectionPending, hovered: Optional[OpeningDirection]) -> DirectionPending:
    if hovered == state.hovered:
        return state
    return replace(state, hovered=hovered)


def _commit(state: DirectionPending, direction: OpeningDirection) -> Door:
    door = Door(
        wall_id=state.wall_id,
        position=(state.hinge_t + state.far_t) / 2,
        width=state.width,
        opening_direction=direction,
        hinge_side=state.hinge_side,
    )
    logger.info(
        f"Door {door.id} on {door.wall_id}: width={door.width:.1f} "
        f"{direction.value}/{state.hinge_side.value}"
    )
    return door


class DoorTool:
    """Holds the door tool's current state and feeds it events."""

    def __init__(self) -> None:
        self.state: DoorState = DoorIdle()

    @property
    def active(self) -> bool:
        return not isinstance(self.state, DoorIdle)

    def click(self, point: Point, walls: Sequence[Wall]) -> Optional[Door]:
        self.state, door = transition(self.state, Click(point), walls)
        return door

    def move(self, point: Point, walls: Sequence[Wall]) -> None:
        self.state, _ = transition(self.state, Move(point), walls)

    def cancel(self) -> None:
        self.state = DoorIdle()
