# src/wallmaker/history.py
"""Linear undo/redo over whole-layout snapshots."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional

from loguru import logger

from wallmaker.models import Door, Wall


class ChangeSource(str, Enum):
    """Where an emitted layout change came from."""

    USER = "user"
    UNDO = "undo"
    REDO = "redo"
    EXTERNAL = "external"


@dataclass(frozen=True)
class LayoutSnapshot:
    walls: tuple[Wall, ...] = field(default_factory=tuple)
    doors: tuple[Door, ...] = field(default_factory=tuple)

    @classmethod
    def of(cls, walls: Iterable[Wall], doors: Iterable[Door]) -> LayoutSnapshot:
        return cls(walls=tuple(walls), doors=tuple(doors))


class HistoryManager:
    """Snapshots plus a cursor; recording after an undo drops the redo tail.

    Walls and doors are captured together so undo never separates a door
    from the wall it hangs on.
    """

    def __init__(self, initial: Optional[LayoutSnapshot] = None, limit: Optional[int] = None) -> None:
        if limit is not None and limit < 1:
            raise ValueError("limit must be at least 1")
        self.snapshots: list[LayoutSnapshot] = [initial or LayoutSnapshot()]
        self.cursor = 0
        self.limit = limit
        self.last_source = ChangeSource.EXTERNAL

    @property
    def current(self) -> LayoutSnapshot:
        return self.snapshots[self.cursor]

    def can_undo(self) -> bool:
        return self.cursor > 0

    def can_redo(self) -> bool:
        return self.cursor < len(self.snapshots) - 1

    def is_current(self, snapshot: LayoutSnapshot) -> bool:
        return snapshot is self.current or snapshot == self.current

    def record(self, snapshot: LayoutSnapshot, source: ChangeSource = ChangeSource.USER) -> bool:
        """Append a committed change; returns False when nothing changed."""
        if source in (ChangeSource.UNDO, ChangeSource.REDO):
            raise ValueError(f"{source.value} changes come from the history itself")
        if self.is_current(snapshot):
            return False

        del self.snapshots[self.cursor + 1:]
        self.snapshots.append(snapshot)
        if self.limit is not None and len(self.snapshots) > self.limit:
            del self.snapshots[: len(self.snapshots) - self.limit]
        self.cursor = len(self.snapshots) - 1
        self.last_source = source
        logger.debug(
            f"History +1 ({source.value}): {len(snapshot.walls)} walls, "
            f"{len(snapshot.doors)} doors, cursor={self.cursor}"
        )
        return True

    def undo(self) -> Optional[LayoutSnapshot]:
        if not self.can_undo():
            return None
        self.cursor -= 1
        self.last_source = ChangeSource.UNDO
        return self.current

    def redo(self) -> Optional[LayoutSnapshot]:
        if not self.can_redo():
            return None
        self.cursor += 1
        self.last_source = ChangeSource.REDO
        return self.current
