# tests/test_layout.py
import pytest

from wallmaker.geometry import Point
from wallmaker.layout import (
    door_edges,
    door_swing,
    find_wall_at_point,
    orphaned_doors,
    point_on_wall,
    remove_door,
    remove_wall,
    replace_wall,
    resize_wall,
    segment_lines,
    wall_segments,
)
from wallmaker.models import Door, HingeSide, OpeningDirection, Wall


@pytest.fixture
def wall():
    return Wall.between(Point(0, 0), Point(100, 0), thickness=10, id="w1")


def make_door(wall_id="w1", position=0.5, width=20, direction=OpeningDirection.LEFT, hinge=HingeSide.START):
    return Door(wall_id=wall_id, position=position, width=width,
                opening_direction=direction, hinge_side=hinge)


def test_segments_without_doors(wall):
    assert wall_segments(wall, []) == [(0.0, 1.0)]


def test_segments_around_single_door(wall):
    segments = wall_segments(wall, [make_door()])
    assert len(segments) == 2
    assert segments[0] == pytest.approx((0.0, 0.4))
    assert segments[1] == pytest.approx((0.6, 1.0))


def test_segments_sorted_by_position(wall):
    doors = [make_door(position=0.8, width=10), make_door(position=0.2, width=10)]
    segments = wall_segments(wall, doors)
    assert [pytest.approx(s) for s in segments] == [(0.0, 0.15), (0.25, 0.75), (0.85, 1.0)]


def test_segments_ignore_other_walls(wall):
    assert wall_segments(wall, [make_door(wall_id="other")]) == [(0.0, 1.0)]


def test_segments_clamp_door_at_wall_end(wall):
    segments = wall_segments(wall, [make_door(position=0.95, width=20)])
    assert segments == [pytest.approx((0.0, 0.85))]


def test_segments_full_width_door(wall):
    assert wall_segments(wall, [make_door(position=0.5, width=100)]) == []


def test_segments_zero_length_wall():
    w = Wall.between(Point(5, 5), Point(5, 5), thickness=10)
    assert wall_segments(w, [make_door(wall_id=w.id)]) == []


def test_segment_count_bounded(wall):
    doors = [make_door(position=p, width=6) for p in (0.1, 0.3, 0.5, 0.7, 0.9)]
    assert len(wall_segments(wall, doors)) <= len(doors) + 1


def test_segment_lines_world_space(wall):
    lines = segment_lines(wall, [make_door()])
    assert lines[0][0] == pytest.approx((0.0, 0.0))
    assert lines[0][1] == pytest.approx((40.0, 0.0))
    assert lines[1][0] == pytest.approx((60.0, 0.0))


def test_point_on_wall(wall):
    assert point_on_wall(wall, 0.25) == pytest.approx((25.0, 0.0))


def test_find_wall_at_point_picks_closest():
    a = Wall.between(Point(0, 0), Point(100, 0), thickness=10)
    b = Wall.between(Point(0, 10), Point(100, 10), thickness=10)
    hit = find_wall_at_point([a, b], Point(50, 7), 15)
    assert hit.wall is b
    assert hit.position == pytest.approx(0.5)
    assert hit.distance == pytest.approx(3.0)
    assert find_wall_at_point([a, b], Point(50, 40), 15) is None


def test_find_wall_at_point_threshold_strict(wall):
    assert find_wall_at_point([wall], Point(50, 15), 15) is None


def test_find_wall_at_point_skips_degenerate():
    w = Wall.between(Point(5, 5), Point(5, 5), thickness=10)
    assert find_wall_at_point([w], Point(5, 5), 15) is None


def test_door_edges_centered(wall):
    start, end = door_edges(wall, make_door(position=0.5, width=30))
    assert start == pytest.approx((35.0, 0.0))
    assert end == pytest.approx((65.0, 0.0))


def test_door_swing_left_and_right(wall):
    left = door_swing(wall, make_door(width=30, direction=OpeningDirection.LEFT))
    assert left.hinge == pytest.approx((35.0, 0.0))
    assert left.base_angle == pytest.approx(0.0)
    assert left.sweep == 90.0
    assert left.radius == pytest.approx(30.0)
    assert left.arc_end == pytest.approx((35.0, 30.0))

    right = door_swing(wall, make_door(width=30, direction=OpeningDirection.RIGHT))
    assert right.sweep == -90.0
    assert right.arc_end == pytest.approx((35.0, -30.0))


def test_door_swing_end_hinge(wall):
    swing = door_swing(wall, make_door(width=30, hinge=HingeSide.END))
    assert swing.hinge == pytest.approx((65.0, 0.0))
    assert swing.frame_end == pytest.approx((35.0, 0.0))
    assert swing.base_angle == pytest.approx(180.0)


def test_resize_wall(wall):
    longer = resize_wall(wall, length=150)
    assert longer.id == wall.id
    assert longer.end == pytest.approx((150.0, 0.0))
    with pytest.raises(ValueError):
        resize_wall(wall, length=0)


def test_replace_wall(wall):
    other = Wall.between(Point(0, 0), Point(0, 50), thickness=10)
    updated = resize_wall(wall, thickness=20)
    walls = replace_wall([wall, other], updated)
    assert walls[0].thickness == 20
    assert walls[1] is other
    with pytest.raises(KeyError):
        replace_wall([other], updated)


def test_remove_wall_cascades_doors(wall):
    other = Wall.between(Point(0, 0), Point(0, 50), thickness=10, id="w2")
    doors = [make_door(), make_door(wall_id="w2", width=10)]
    walls, kept = remove_wall([wall, other], doors, "w1")
    assert walls == [other]
    assert [d.wall_id for d in kept] == ["w2"]
    with pytest.raises(KeyError):
        remove_wall(walls, kept, "w1")


def test_remove_door(wall):
    door = make_door()
    assert remove_door([door], door.id) == []
    with pytest.raises(KeyError):
        remove_door([door], "missing")


def test_orphaned_doors(wall):
    good, bad = make_door(), make_door(wall_id="gone")
    assert orphaned_doors([wall], [good, bad]) == [bad]
