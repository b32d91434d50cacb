# src/wallmaker/events.py
"""Input event records and scripted editing sessions."""
from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from wallmaker.models import Door, Wall, WallMakerConfig


class Tool(str, Enum):
    WALL = "wall"
    DOOR = "door"
    PAN = "pan"


class PointerDown(BaseModel):
    kind: Literal["pointer_down"] = "pointer_down"
    x: float
    y: float
    button: int = 0


class PointerMove(BaseModel):
    kind: Literal["pointer_move"] = "pointer_move"
    x: float
    y: float


class PointerUp(BaseModel):
    kind: Literal["pointer_up"] = "pointer_up"
    x: float
    y: float
    button: int = 0


class Wheel(BaseModel):
    kind: Literal["wheel"] = "wheel"
    x: float
    y: float
    delta_x: float = 0.0
    delta_y: float = 0.0
    ctrl: bool = False
    meta: bool = False


class KeyPress(BaseModel):
    kind: Literal["key"] = "key"
    key: str
    ctrl: bool = False
    meta: bool = False
    shift: bool = False
    in_text_field: bool = False

    @property
    def command(self) -> bool:
        """Ctrl on Windows/Linux, Cmd on macOS."""
        return self.ctrl or self.meta


class SelectTool(BaseModel):
    kind: Literal["tool"] = "tool"
    tool: Tool


InputEvent = Annotated[
    Union[PointerDown, PointerMove, PointerUp, Wheel, KeyPress, SelectTool],
    Field(discriminator="kind"),
]


class Session(BaseModel):
    """A recorded editing session: starting layout plus the events to replay."""

    config: WallMakerConfig = Field(default_factory=WallMakerConfig)
    width: float = Field(default=800, gt=0)
    height: float = Field(default=600, gt=0)
    walls: list[Wall] = Field(default_factory=list)
    doors: list[Door] = Field(default_factory=list)
    events: list[InputEvent] = Field(default_factory=list)
