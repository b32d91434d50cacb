# tests/test_wall_tool.py
import math

import pytest

from wallmaker.geometry import Point
from wallmaker.models import Wall, WallMakerConfig
from wallmaker.snapping import SnapKind
from wallmaker.wall_tool import (
    Cancel,
    Click,
    Move,
    WallIdle,
    WallPreview,
    WallStartSet,
    WallTool,
    transition,
)


@pytest.fixture
def config():
    return WallMakerConfig()


@pytest.fixture
def free_config():
    return WallMakerConfig(snap_to_grid=False)


def test_first_click_sets_snapped_start(config):
    tool = WallTool()
    assert tool.click(Point(3, 4), [], config) is None
    assert isinstance(tool.state, WallStartSet)
    assert tool.state.start == (0, 0)
    assert tool.active


def test_move_previews_snapped_end(config):
    tool = WallTool()
    tool.click(Point(0, 0), [], config)
    tool.move(Point(97, 7), [], config)
    state = tool.state
    assert isinstance(state, WallPreview)
    assert state.end.x == pytest.approx(100.0)
    assert state.end.y == pytest.approx(0.0, abs=1e-9)
    assert state.angle_snap.snapped
    assert state.length == pytest.approx(100.0)


def test_second_click_commits_wall(config):
    tool = WallTool()
    tool.click(Point(0, 0), [], config)
    tool.move(Point(97, 7), [], config)
    wall = tool.click(Point(97, 7), [], config)
    assert isinstance(wall, Wall)
    assert wall.start == (0, 0)
    assert wall.end == (100, 0)
    assert wall.thickness == config.default_thickness
    assert wall.snap_angle == 0
    assert isinstance(tool.state, WallIdle)
    assert not tool.active


def test_commit_stays_on_grid_point(config):
    tool = WallTool()
    tool.click(Point(0, 0), [], config)
    tool.move(Point(301, 19), [], config)
    assert tool.state.angle_snap.snapped
    wall = tool.click(Point(301, 19), [], config)
    assert (wall.end_x, wall.end_y) == (300, 20)
    assert wall.snap_angle == 0


def test_commit_records_previewed_angle(free_config):
    tool = WallTool()
    tool.click(Point(0, 0), [], free_config)
    tool.move(Point(200, 8), [], free_config)
    assert tool.state.angle_snap.snapped
    wall = tool.click(Point(200, 8), [], free_config)
    assert wall.end == (200, 8)
    assert wall.angle == pytest.approx(math.degrees(math.atan2(8, 200)))
    assert wall.snap_angle == 0
    assert wall.snap_to_grid is False


def test_commit_same_point_with_or_without_preview(config):
    moved = WallTool()
    moved.click(Point(0, 0), [], config)
    moved.move(Point(301, 19), [], config)
    direct = WallTool()
    direct.click(Point(0, 0), [], config)
    assert moved.click(Point(301, 19), [], config).end == direct.click(Point(301, 19), [], config).end


def test_commit_without_angle_snap(free_config):
    tool = WallTool()
    tool.click(Point(0, 0), [], free_config)
    tool.move(Point(100, 40), [], free_config)
    wall = tool.click(Point(100, 40), [], free_config)
    assert wall.end == (100, 40)
    assert wall.snap_angle is None


def test_commit_straight_from_start(free_config):
    tool = WallTool()
    tool.click(Point(0, 0), [], free_config)
    wall = tool.click(Point(60, 80), [], free_config)
    assert wall.length == pytest.approx(100.0)
    assert wall.snap_angle is None


def test_short_wall_discarded(free_config):
    tool = WallTool()
    tool.click(Point(0, 0), [], free_config)
    tool.move(Point(3, 0), [], free_config)
    assert tool.click(Point(3, 0), [], free_config) is None
    assert isinstance(tool.state, WallIdle)


def test_same_grid_point_discarded(config):
    tool = WallTool()
    tool.click(Point(1, 1), [], config)
    assert tool.click(Point(4, 6), [], config) is None


def test_cancel_drops_wall_in_progress(config):
    state, _ = transition(WallIdle(), Click(Point(0, 0)), [], config)
    state, _ = transition(state, Move(Point(100, 0)), [], config)
    state, wall = transition(state, Cancel(), [], config)
    assert isinstance(state, WallIdle)
    assert wall is None


def test_move_while_idle_is_ignored(config):
    state, wall = transition(WallIdle(), Move(Point(10, 10)), [], config)
    assert state == WallIdle()
    assert wall is None


def test_start_snaps_to_existing_endpoint(config):
    existing = Wall.between(Point(0, 0), Point(97, 3), thickness=10)
    tool = WallTool()
    tool.click(Point(103, 6), [existing], config)
    assert tool.state.start == (97, 3)
    assert tool.state.snap.kind == SnapKind.ENDPOINT

    wall = tool.click(Point(297, 3), [existing], config)
    assert wall.start == existing.end
    assert (wall.start_x, wall.start_y) == (97, 3)


def test_end_snaps_to_existing_endpoint(free_config):
    existing = Wall.between(Point(200, 108), Point(200, 300), thickness=10)
    tool = WallTool()
    tool.click(Point(0, 100), [existing], free_config)
    tool.move(Point(203, 110), [existing], free_config)
    # the preview angle engages too, but the committed end stays on the endpoint
    assert tool.state.angle_snap.snapped
    wall = tool.click(Point(203, 110), [existing], free_config)
    assert wall.end == existing.start
    assert wall.snap_angle == 0


def test_unknown_event_rejected(config):
    state, _ = transition(WallIdle(), Click(Point(0, 0)), [], config)
    with pytest.raises(TypeError):
        transition(state, object(), [], config)
