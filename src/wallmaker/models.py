# src/wallmaker/models.py
from __future__ import annotations

import uuid
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from wallmaker.geometry import Point, direction_angle, distance, polar_point


class OpeningDirection(str, Enum):
    LEFT = "left"
    RIGHT = "right"


class HingeSide(str, Enum):
    START = "start"
    END = "end"


def new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


class Wall(BaseModel):
    """A straight wall segment in world units (1 unit ~ 1 cm)."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: new_id("wall"))
    start_x: float
    start_y: float
    end_x: float
    end_y: float
    thickness: float = Field(gt=0)
    length: float = Field(default=0.0, ge=0)
    angle: float = Field(default=0.0, description="Direction start->end in degrees, [0, 360)")
    snap_to_grid: bool = True
    snap_angle: Optional[float] = None

    @model_validator(mode="before")
    @classmethod
    def derive_polar(cls, data):
        # length/angle always follow the endpoints
        if isinstance(data, dict) and all(
            k in data for k in ("start_x", "start_y", "end_x", "end_y")
        ):
            start = Point(float(data["start_x"]), float(data["start_y"]))
            end = Point(float(data["end_x"]), float(data["end_y"]))
            data = dict(data)
            data["length"] = distance(start, end)
            data["angle"] = direction_angle(start, end)
        return data

    @classmethod
    def between(
        cls,
        start: Point,
        end: Point,
        thickness: float,
        snap_to_grid: bool = True,
        snap_angle: Optional[float] = None,
        id: Optional[str] = None,
    ) -> Wall:
        fields = dict(
            start_x=start[0], start_y=start[1],
            end_x=end[0], end_y=end[1],
            thickness=thickness,
            snap_to_grid=snap_to_grid,
            snap_angle=snap_angle,
        )
        if id is not None:
            fields["id"] = id
        return cls(**fields)

    @property
    def start(self) -> Point:
        return Point(self.start_x, self.start_y)

    @property
    def end(self) -> Point:
        return Point(self.end_x, self.end_y)

    def with_polar(
        self,
        length: Optional[float] = None,
        angle: Optional[float] = None,
        thickness: Optional[float] = None,
    ) -> Wall:
        """Copy of this wall with the end point recomputed from the start point."""
        new_length = self.length if length is None else length
        new_angle = self.angle if angle is None else angle
        end = polar_point(self.start, new_length, new_angle)
        return Wall.between(
            self.start, end,
            thickness=self.thickness if thickness is None else thickness,
            snap_to_grid=self.snap_to_grid,
            snap_angle=self.snap_angle,
            id=self.id,
        )


class Door(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: new_id("door"))
    wall_id: str
    position: float = Field(ge=0.0, le=1.0, description="Door centre along the wall (0-1)")
    width: float = Field(gt=0)
    opening_direction: OpeningDirection
    hinge_side: HingeSide = HingeSide.START


DEFAULT_SNAP_ANGLES = [0.0, 45.0, 90.0, 135.0, 180.0, 225.0, 270.0, 315.0]


class WallMakerConfig(BaseModel):
    grid_size: float = Field(default=20.0, gt=0)
    snap_to_grid: bool = True
    snap_angles: list[float] = Field(default_factory=lambda: list(DEFAULT_SNAP_ANGLES))
    default_thickness: float = Field(default=10.0, gt=0)
    show_grid: bool = True
    show_measurements: bool = True
    show_angles: bool = True

    @field_validator("snap_angles")
    @classmethod
    def normalize_snap_angles(cls, v: list[float]) -> list[float]:
        return [a % 360.0 for a in v]
