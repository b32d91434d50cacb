# src/wallmaker/viewport.py
"""Screen <-> world mapping under pan and zoom."""
from __future__ import annotations

from dataclasses import dataclass

from wallmaker.geometry import Point

MIN_ZOOM = 0.1
MAX_ZOOM = 5.0
WHEEL_ZOOM_OUT = 0.95
WHEEL_ZOOM_IN = 1.05
KEY_ZOOM_STEP = 0.1


def clamp_zoom(zoom: float) -> float:
    return max(MIN_ZOOM, min(MAX_ZOOM, zoom))


@dataclass
class Viewport:
    """Pan/zoom state of the drawing surface.

    ``origin_x``/``origin_y`` locate the container's top-left corner in
    device (client) coordinates; ``width``/``height`` are its size. Pan is
    expressed in container pixels.
    """

    pan_x: float = 0.0
    pan_y: float = 0.0
    zoom: float = 1.0
    origin_x: float = 0.0
    origin_y: float = 0.0
    width: float = 800.0
    height: float = 600.0

    def __post_init__(self) -> None:
        self.zoom = clamp_zoom(self.zoom)

    def screen_to_world(self, client_x: float, client_y: float) -> Point:
        return Point(
            (client_x - self.origin_x - self.pan_x) / self.zoom,
            (client_y - self.origin_y - self.pan_y) / self.zoom,
        )

    def world_to_screen(self, x: float, y: float) -> Point:
        return Point(
            x * self.zoom + self.pan_x + self.origin_x,
            y * self.zoom + self.pan_y + self.origin_y,
        )

    def world_to_container(self, x: float, y: float) -> Point:
        return Point(x * self.zoom + self.pan_x, y * self.zoom + self.pan_y)

    def zoom_at(self, factor: float, mouse_x: float, mouse_y: float) -> None:
        """Scale by ``factor`` keeping the world point under the mouse fixed.

        ``mouse_x``/``mouse_y`` are container coordinates.
        """
        new_zoom = clamp_zoom(self.zoom * factor)
        change = new_zoom / self.zoom
        self.pan_x = mouse_x - (mouse_x - self.pan_x) * change
        self.pan_y = mouse_y - (mouse_y - self.pan_y) * change
        self.zoom = new_zoom

    def zoom_step(self, direction: int) -> None:
        """Keyboard zoom (+1 in, -1 out) about the container centre."""
        factor = 1.0 + KEY_ZOOM_STEP if direction > 0 else 1.0 - KEY_ZOOM_STEP
        self.zoom_at(factor, self.width / 2, self.height / 2)

    def pan_by(self, dx: float, dy: float) -> None:
        self.pan_x += dx
        self.pan_y += dy

    def wheel(
        self,
        client_x: float,
        client_y: float,
        delta_x: float,
        delta_y: float,
        ctrl: bool = False,
        meta: bool = False,
    ) -> None:
        """Ctrl/Cmd+wheel zooms around the pointer, a plain wheel pans."""
        if ctrl or meta:
            factor = WHEEL_ZOOM_OUT if delta_y > 0 else WHEEL_ZOOM_IN
            self.zoom_at(factor, client_x - self.origin_x, client_y - self.origin_y)
        else:
            self.pan_by(-delta_x, -delta_y)
