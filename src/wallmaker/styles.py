# src/wallmaker/styles.py
from __future__ import annotations

from dataclasses import dataclass, field


WALL_COLOR = (44, 62, 80)          # slate
SELECTED_COLOR = (52, 152, 219)    # blue
SNAPPED_COLOR = (39, 174, 96)      # green
DOOR_COLOR = (0, 0, 0)
BG_COLOR = (255, 255, 255)

# role -> (rgb, opacity 0..1)
ROLE_COLORS: dict[str, tuple[tuple[int, int, int], float]] = {
    "wall": (WALL_COLOR, 1.0),
    "wall_selected": (SELECTED_COLOR, 1.0),
    "measurement": ((102, 102, 102), 1.0),
    "preview": (SELECTED_COLOR, 0.5),
    "preview_snapped": (SNAPPED_COLOR, 0.5),
    "door_swing": (DOOR_COLOR, 0.15),
    "door_arc": (DOOR_COLOR, 0.6),
    "door_arc_hover": (DOOR_COLOR, 0.8),
    "door_frame": (DOOR_COLOR, 1.0),
    "door_hinge": (DOOR_COLOR, 0.8),
    "door_label": (DOOR_COLOR, 0.6),
    "door_label_hover": (DOOR_COLOR, 0.9),
    "direction_option": (DOOR_COLOR, 0.15),
    "direction_option_hover": (DOOR_COLOR, 0.25),
    "snap": (SNAPPED_COLOR, 0.9),
    "endpoint": (WALL_COLOR, 0.8),
    "endpoint_selected": (SELECTED_COLOR, 0.8),
    "start": (SELECTED_COLOR, 1.0),
}


@dataclass
class RenderStyle:
    bg_color: tuple[int, int, int] = BG_COLOR
    grid_color: tuple[int, int, int] = (208, 208, 208)
    major_grid_color: tuple[int, int, int] = (176, 176, 176)
    dash_length: float = 5.0
    role_colors: dict[str, tuple[tuple[int, int, int], float]] = field(
        default_factory=lambda: dict(ROLE_COLORS)
    )

    def color_for(self, role: str) -> tuple[int, int, int, int]:
        """RGBA fill for a drawing role; unknown roles draw like walls."""
        rgb, opacity = self.role_colors.get(role, (WALL_COLOR, 1.0))
        return (*rgb, int(round(opacity * 255)))
