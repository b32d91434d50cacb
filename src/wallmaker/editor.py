# src/wallmaker/editor.py
"""Interactive wall/door editor: routes input to the active tool and owns
selection, history and the change callbacks."""
from __future__ import annotations

from typing import Callable, Iterable, Optional

from loguru import logger

from wallmaker.door_tool import DoorTool
from wallmaker.drawing import build_scene
from wallmaker.events import (
    KeyPress,
    PointerDown,
    PointerMove,
    PointerUp,
    SelectTool,
    Tool,
    Wheel,
)
from wallmaker.geometry import Point
from wallmaker.history import ChangeSource, HistoryManager, LayoutSnapshot
from wallmaker.layout import (
    find_wall,
    orphaned_doors,
    project_onto_wall,
    remove_door,
    remove_wall,
    replace_wall,
    resize_wall,
)
from wallmaker.models import Door, Wall, WallMakerConfig
from wallmaker.viewport import Viewport
from wallmaker.wall_tool import WallTool

WallsCallback = Callable[[list[Wall], ChangeSource], None]
DoorsCallback = Callable[[list[Door], ChangeSource], None]

PRIMARY_BUTTON = 0
SECONDARY_BUTTON = 2
SELECT_MARGIN = 5.0


class WallEditor:
    """Single-threaded editor core. Every call completes its commit before
    returning; the host re-reads ``walls``/``doors`` and :meth:`scene`."""

    def __init__(
        self,
        config: Optional[WallMakerConfig] = None,
        walls: Iterable[Wall] = (),
        doors: Iterable[Door] = (),
        viewport: Optional[Viewport] = None,
        on_walls_change: Optional[WallsCallback] = None,
        on_doors_change: Optional[DoorsCallback] = None,
        tool: Tool = Tool.WALL,
        history_limit: Optional[int] = None,
    ) -> None:
        self.config = config or WallMakerConfig()
        self.viewport = viewport or Viewport()
        self.walls: list[Wall] = list(walls)
        self.doors: list[Door] = list(doors)
        self.on_walls_change = on_walls_change
        self.on_doors_change = on_doors_change
        self.tool = tool
        self.wall_tool = WallTool()
        self.door_tool = DoorTool()
        self.selected_wall_id: Optional[str] = None
        self.history = HistoryManager(LayoutSnapshot.of(self.walls, self.doors), limit=history_limit)
        self._pan_anchor: Optional[Point] = None

    # ------------------------------------------------------------------ #
    # Layout changes
    # ------------------------------------------------------------------ #

    @property
    def selected_wall(self) -> Optional[Wall]:
        if self.selected_wall_id is None:
            return None
        return find_wall(self.walls, self.selected_wall_id)

    def _apply(self, snapshot: LayoutSnapshot, source: ChangeSource) -> None:
        walls_changed = list(snapshot.walls) != self.walls
        doors_changed = list(snapshot.doors) != self.doors
        self.walls = list(snapshot.walls)
        self.doors = list(snapshot.doors)
        if self.selected_wall_id is not None and self.selected_wall is None:
            self.selected_wall_id = None

        if walls_changed and self.on_walls_change is not None:
            self.on_walls_change(list(self.walls), source)
        if doors_changed and self.on_doors_change is not None:
            self.on_doors_change(list(self.doors), source)

    def _commit(self, walls: list[Wall], doors: list[Door], source: ChangeSource = ChangeSource.USER) -> None:
        snapshot = LayoutSnapshot.of(walls, doors)
        self.history.record(snapshot, source)
        self._apply(snapshot, source)

    def load_layout(self, walls: Iterable[Wall], doors: Iterable[Door] = ()) -> None:
        """Replace the layout with host-supplied collections (undoable)."""
        walls, doors = list(walls), list(doors)
        if self.history.is_current(LayoutSnapshot.of(walls, doors)):
            return
        orphans = orphaned_doors(walls, doors)
        if orphans:
            logger.warning(f"Loaded {len(orphans)} door(s) referencing missing walls")
        self.cancel()
        logger.info(f"Layout loaded: {len(walls)} walls, {len(doors)} doors")
        self._commit(walls, doors, ChangeSource.EXTERNAL)

    def delete_wall(self, wall_id: str) -> None:
        walls, doors = remove_wall(self.walls, self.doors, wall_id)
        logger.info(f"Wall {wall_id} deleted")
        if self.selected_wall_id == wall_id:
            self.selected_wall_id = None
        self._commit(walls, doors)

    def update_wall(
        self,
        wall_id: str,
        length: Optional[float] = None,
        angle: Optional[float] = None,
        thickness: Optional[float] = None,
    ) -> Wall:
        wall = find_wall(self.walls, wall_id)
        if wall is None:
            raise KeyError(f"unknown wall {wall_id!r}")
        updated = resize_wall(wall, length=length, angle=angle, thickness=thickness)
        logger.info(f"Wall {wall_id} edited: length={updated.length:.1f} angle={updated.angle:.1f}")
        self._commit(replace_wall(self.walls, updated), list(self.doors))
        return updated

    def remove_door(self, door_id: str) -> None:
        doors = remove_door(self.doors, door_id)
        logger.info(f"Door {door_id} removed")
        self._commit(list(self.walls), doors)

    def undo(self) -> bool:
        snapshot = self.history.undo()
        if snapshot is None:
            return False
        self.cancel()
        logger.info(f"Undo -> step {self.history.cursor}")
        self._apply(snapshot, ChangeSource.UNDO)
        return True

    def redo(self) -> bool:
        snapshot = self.history.redo()
        if snapshot is None:
            return False
        self.cancel()
        logger.info(f"Redo -> step {self.history.cursor}")
        self._apply(snapshot, ChangeSource.REDO)
        return True

    # ------------------------------------------------------------------ #
    # Tools and selection
    # ------------------------------------------------------------------ #

    def set_tool(self, tool: Tool) -> None:
        if tool != self.tool:
            self.cancel()
            self.tool = tool

    def cancel(self) -> None:
        """Drop any in-progress wall or door."""
        self.wall_tool.cancel()
        self.door_tool.cancel()
        self._pan_anchor = None

    def select_wall_at(self, point: Point) -> Optional[Wall]:
        """Select the wall drawn under ``point`` (its stroke plus a margin)."""
        best: Optional[Wall] = None
        best_dist = float("inf")
        for wall in self.walls:
            proj = project_onto_wall(wall, point)
            if proj is None or proj.distance >= wall.thickness / 2 + SELECT_MARGIN:
                continue
            if proj.distance < best_dist:
                best, best_dist = wall, proj.distance
        self.selected_wall_id = best.id if best is not None else None
        return best

    # ------------------------------------------------------------------ #
    # Pointer, wheel and keyboard input
    # ------------------------------------------------------------------ #

    def pointer_down(self, client_x: float, client_y: float, button: int = PRIMARY_BUTTON) -> None:
        point = self.viewport.screen_to_world(client_x, client_y)

        if button == SECONDARY_BUTTON:
            self.select_wall_at(point)
            return
        if button != PRIMARY_BUTTON:
            return

        if self.tool == Tool.PAN:
            self._pan_anchor = Point(client_x, client_y)
        elif self.tool == Tool.DOOR:
            door = self.door_tool.click(point, self.walls)
            if door is not None:
                self._commit(list(self.walls), self.doors + [door])
        else:
            wall = self.wall_tool.click(point, self.walls, self.config)
            if wall is not None:
                self._commit(self.walls + [wall], list(self.doors))

    def pointer_move(self, client_x: float, client_y: float) -> None:
        if self.tool == Tool.PAN:
            if self._pan_anchor is not None:
                self.viewport.pan_by(client_x - self._pan_anchor.x, client_y - self._pan_anchor.y)
                self._pan_anchor = Point(client_x, client_y)
            return

        point = self.viewport.screen_to_world(client_x, client_y)
        if self.tool == Tool.DOOR:
            self.door_tool.move(point, self.walls)
        else:
            self.wall_tool.move(point, self.walls, self.config)

    def pointer_up(self, client_x: float, client_y: float, button: int = PRIMARY_BUTTON) -> None:
        # clicks are handled on pointer-down; only pan drags end here
        if self.tool == Tool.PAN:
            self._pan_anchor = None

    def wheel(
        self,
        client_x: float,
        client_y: float,
        delta_x: float = 0.0,
        delta_y: float = 0.0,
        ctrl: bool = False,
        meta: bool = False,
    ) -> None:
        self.viewport.wheel(client_x, client_y, delta_x, delta_y, ctrl=ctrl, meta=meta)

    def key_down(self, event: KeyPress) -> bool:
        """Handle a key press; returns True when the editor consumed it."""
        key = event.key

        if event.command and key in ("+", "="):
            self.viewport.zoom_step(+1)
            return True
        if event.command and key == "-":
            self.viewport.zoom_step(-1)
            return True

        if key == "Escape":
            if self.wall_tool.active or self.door_tool.active:
                self.cancel()
                return True
            return False

        if event.in_text_field:
            return False

        if key in ("Delete", "Backspace") and self.selected_wall_id is not None:
            self.delete_wall(self.selected_wall_id)
            return True

        if event.command and key.lower() == "z" and not event.shift:
            self.undo()
            return True
        if event.command and (key.lower() == "y" or (key.lower() == "z" and event.shift)):
            self.redo()
            return True
        return False

    def dispatch(self, event) -> None:
        """Feed one recorded input event to the editor."""
        if isinstance(event, PointerDown):
            self.pointer_down(event.x, event.y, event.button)
        elif isinstance(event, PointerMove):
            self.pointer_move(event.x, event.y)
        elif isinstance(event, PointerUp):
            self.pointer_up(event.x, event.y, event.button)
        elif isinstance(event, Wheel):
            self.wheel(event.x, event.y, event.delta_x, event.delta_y, ctrl=event.ctrl, meta=event.meta)
        elif isinstance(event, KeyPress):
            self.key_down(event)
        elif isinstance(event, SelectTool):
            self.set_tool(event.tool)
        else:
            raise TypeError(f"unsupported event {event!r}")

    def scene(self) -> list:
        return build_scene(self)
