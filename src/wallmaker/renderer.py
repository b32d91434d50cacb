# src/wallmaker/renderer.py
"""Raster preview: draws drawing intents into a PIL Image."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np
from PIL import Image, ImageDraw, ImageFont
from shapely.geometry import MultiLineString

from wallmaker.drawing import (
    ArcIntent,
    CircleIntent,
    GridIntent,
    Intent,
    LabelIntent,
    LineIntent,
    SectorIntent,
)
from wallmaker.models import Wall
from wallmaker.styles import RenderStyle
from wallmaker.viewport import Viewport, clamp_zoom


@dataclass
class RenderConfig:
    """Configuration for rendering a scene."""

    width: int = 800
    height: int = 600
    margin: float = 0.1


def fit_viewport(walls: Sequence[Wall], width: float, height: float, margin: float = 0.1) -> Viewport:
    """Viewport that centres all walls in a ``width`` x ``height`` container."""
    walls = [w for w in walls if w.length > 0]
    if not walls:
        return Viewport(width=width, height=height)

    lines = MultiLineString([[w.start, w.end] for w in walls])
    pad = max(w.thickness for w in walls) / 2
    min_x, min_y, max_x, max_y = lines.buffer(pad, cap_style="square").bounds

    extent_x = max(max_x - min_x, 1e-6)
    extent_y = max(max_y - min_y, 1e-6)
    usable_w = width * (1 - 2 * margin)
    usable_h = height * (1 - 2 * margin)
    zoom = clamp_zoom(min(usable_w / extent_x, usable_h / extent_y))

    pan_x = (width - extent_x * zoom) / 2 - min_x * zoom
    pan_y = (height - extent_y * zoom) / 2 - min_y * zoom
    return Viewport(pan_x=pan_x, pan_y=pan_y, zoom=zoom, width=width, height=height)


class IntentRenderer:
    """Renders drawing intents through a viewport onto an RGB image."""

    def __init__(self, config: RenderConfig | None = None, style: RenderStyle | None = None) -> None:
        self.config = config or RenderConfig()
        self.style = style or RenderStyle()
        self._font = self._load_font()

    # ------------------------------------------------------------------ #
    # Main render method
    # ------------------------------------------------------------------ #

    def render(self, intents: Iterable[Intent], viewport: Viewport) -> Image.Image:
        """Render intents to a new PIL Image (RGB).

        Args:
            intents: Drawing intents in world coordinates, back to front.
            viewport: Pan/zoom used to map world units to pixels.

        Returns:
            The rendered image.
        """
        img = Image.new("RGB", (self.config.width, self.config.height), self.style.bg_color)
        # RGBA drawing on an RGB image blends translucent fills
        draw = ImageDraw.Draw(img, "RGBA")

        for intent in intents:
            if isinstance(intent, GridIntent):
                self._draw_grid(draw, intent, viewport)
            elif isinstance(intent, LineIntent):
                self._draw_line(draw, intent, viewport)
            elif isinstance(intent, SectorIntent):
                self._draw_sector(draw, intent, viewport)
            elif isinstance(intent, ArcIntent):
                self._draw_arc(draw, intent, viewport)
            elif isinstance(intent, CircleIntent):
                self._draw_circle(draw, intent, viewport)
            elif isinstance(intent, LabelIntent):
                self._draw_label(draw, intent, viewport)
            else:
                raise TypeError(f"unknown drawing intent {intent!r}")
        return img

    # ------------------------------------------------------------------ #
    # Coordinate conversion
    # ------------------------------------------------------------------ #

    @staticmethod
    def _to_px(point, viewport: Viewport) -> tuple[float, float]:
        return tuple(viewport.world_to_container(point[0], point[1]))

    @staticmethod
    def _angle_range(start_angle: float, sweep: float) -> tuple[float, float]:
        # PIL sweeps clockwise on screen, i.e. towards increasing world angles
        lo = min(start_angle, start_angle + sweep)
        return lo, lo + abs(sweep)

    # ------------------------------------------------------------------ #
    # Primitives
    # ------------------------------------------------------------------ #

    def _draw_grid(self, draw: ImageDraw.ImageDraw, grid: GridIntent, viewport: Viewport) -> None:
        step_px = grid.size * viewport.zoom
        if step_px < 2:
            return
        width, height = self.config.width, self.config.height
        x0 = math.floor(-viewport.pan_x / viewport.zoom / grid.size)
        x1 = math.ceil((width - viewport.pan_x) / viewport.zoom / grid.size)
        y0 = math.floor(-viewport.pan_y / viewport.zoom / grid.size)
        y1 = math.ceil((height - viewport.pan_y) / viewport.zoom / grid.size)

        for i in range(x0, x1 + 1):
            px = i * step_px + viewport.pan_x
            color = self.style.major_grid_color if i % grid.major_every == 0 else self.style.grid_color
            draw.line([(px, 0), (px, height)], fill=color, width=1)
        for j in range(y0, y1 + 1):
            py = j * step_px + viewport.pan_y
            color = self.style.major_grid_color if j % grid.major_every == 0 else self.style.grid_color
            draw.line([(0, py), (width, py)], fill=color, width=1)

    def _draw_line(self, draw: ImageDraw.ImageDraw, line: LineIntent, viewport: Viewport) -> None:
        p1 = np.array(self._to_px(line.start, viewport))
        p2 = np.array(self._to_px(line.end, viewport))
        width = max(1, int(round(line.width * viewport.zoom)))
        fill = self.style.color_for(line.role)

        if not line.dashed:
            draw.line([tuple(p1), tuple(p2)], fill=fill, width=width)
            return

        vec = p2 - p1
        length = float(np.linalg.norm(vec))
        if length < 1e-6:
            return
        unit = vec / length
        dash = max(1.0, self.style.dash_length * viewport.zoom)
        pos = 0.0
        while pos < length:
            seg_end = min(pos + dash, length)
            draw.line([tuple(p1 + unit * pos), tuple(p1 + unit * seg_end)], fill=fill, width=width)
            pos += 2 * dash

    def _bbox(self, center, radius: float, viewport: Viewport) -> list[float]:
        cx, cy = self._to_px(center, viewport)
        r = radius * viewport.zoom
        return [cx - r, cy - r, cx + r, cy + r]

    def _draw_sector(self, draw: ImageDraw.ImageDraw, sector: SectorIntent, viewport: Viewport) -> None:
        if sector.radius * viewport.zoom < 1:
            return
        start, end = self._angle_range(sector.start_angle, sector.sweep)
        draw.pieslice(self._bbox(sector.center, sector.radius, viewport), start, end,
                      fill=self.style.color_for(sector.role))

    def _draw_arc(self, draw: ImageDraw.ImageDraw, arc: ArcIntent, viewport: Viewport) -> None:
        if arc.radius * viewport.zoom < 1:
            return
        start, end = self._angle_range(arc.start_angle, arc.sweep)
        width = max(1, int(round(arc.width * viewport.zoom)))
        draw.arc(self._bbox(arc.center, arc.radius, viewport), start, end,
                 fill=self.style.color_for(arc.role), width=width)

    def _draw_circle(self, draw: ImageDraw.ImageDraw, circle: CircleIntent, viewport: Viewport) -> None:
        # markers keep their pixel size at any zoom
        cx, cy = self._to_px(circle.center, viewport)
        r = circle.radius
        draw.ellipse([cx - r, cy - r, cx + r, cy + r],
                     fill=self.style.color_for(circle.role), outline=self.style.bg_color)

    def _draw_label(self, draw: ImageDraw.ImageDraw, label: LabelIntent, viewport: Viewport) -> None:
        px, py = self._to_px(label.position, viewport)
        fill = self.style.color_for(label.role)
        try:
            bbox = draw.textbbox((0, 0), label.text, font=self._font)
            tw, th = bbox[2] - bbox[0], bbox[3] - bbox[1]
            draw.text((px - tw / 2, py - th / 2), label.text, fill=fill, font=self._font)
        except UnicodeEncodeError:
            # bitmap fallback font is latin-1 only
            text = label.text.encode("latin-1", "replace").decode("latin-1")
            draw.text((px, py), text, fill=fill, font=self._font)

    @staticmethod
    def _load_font():
        try:
            return ImageFont.truetype("Arial", 11)
        except (OSError, IOError):
            return ImageFont.load_default()
