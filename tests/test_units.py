# tests/test_units.py
import pytest

from wallmaker.units import format_angle, format_length, to_meters


def test_conversions():
    assert to_meters(250) == pytest.approx(2.5)
    assert to_meters(50, pixels_per_meter=50) == pytest.approx(1.0)


def test_formatting():
    assert format_length(250) == "2.50m"
    assert format_length(0) == "0.00m"
    assert format_angle(45.4) == "45°"
    assert format_angle(270) == "270°"
