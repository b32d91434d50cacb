# src/wallmaker/units.py
"""Measurement labels: editor world units shown in metres."""
from __future__ import annotations

# 1 world unit ~ 1 cm
PIXELS_PER_METER = 100.0


def to_meters(units: float, pixels_per_meter: float = PIXELS_PER_METER) -> float:
    return units / pixels_per_meter


def format_length(units: float) -> str:
    return f"{to_meters(units):.2f}m"


def format_angle(angle: float) -> str:
    return f"{angle:.0f}°"
