# tests/test_drawing.py
import pytest

from wallmaker.drawing import (
    ArcIntent,
    CircleIntent,
    GridIntent,
    LabelIntent,
    LineIntent,
    SectorIntent,
    build_scene,
)
from wallmaker.editor import WallEditor
from wallmaker.events import Tool
from wallmaker.geometry import Point
from wallmaker.models import Door, Wall, WallMakerConfig


@pytest.fixture
def wall():
    return Wall.between(Point(0, 0), Point(200, 0), thickness=10, id="w1")


@pytest.fixture
def door():
    return Door(wall_id="w1", position=0.5, width=40, opening_direction="left")


def of_type(intents, cls, role=None):
    return [i for i in intents if isinstance(i, cls) and (role is None or i.role == role)]


def test_empty_scene_has_grid():
    scene = build_scene(WallEditor())
    assert scene == [GridIntent(20.0)]


def test_grid_hidden():
    scene = build_scene(WallEditor(WallMakerConfig(show_grid=False)))
    assert scene == []


def test_wall_split_around_door(wall, door):
    scene = WallEditor(walls=[wall], doors=[door]).scene()
    lines = of_type(scene, LineIntent, "wall")
    assert len(lines) == 2
    assert lines[0].end == pytest.approx((80.0, 0.0))
    assert lines[1].start == pytest.approx((120.0, 0.0))
    assert all(line.width == 10 for line in lines)

    assert len(of_type(scene, SectorIntent, "door_swing")) == 1
    assert len(of_type(scene, ArcIntent, "door_arc")) == 1
    assert len(of_type(scene, LineIntent, "door_frame")) == 1


def test_measurements_follow_config(wall):
    labels = of_type(WallEditor(walls=[wall]).scene(), LabelIntent, "measurement")
    assert [l.text for l in labels] == ["2.00m", "0°"]

    quiet = WallEditor(WallMakerConfig(show_measurements=False, show_angles=False), walls=[wall])
    assert of_type(quiet.scene(), LabelIntent) == []


def test_selected_wall_role(wall):
    editor = WallEditor(walls=[wall])
    editor.select_wall_at(Point(100, 2))
    scene = editor.scene()
    assert len(of_type(scene, LineIntent, "wall_selected")) == 1
    assert len(of_type(scene, CircleIntent, "endpoint_selected")) == 2


def test_door_on_missing_wall_skipped(door):
    scene = WallEditor(doors=[door]).scene()
    assert of_type(scene, SectorIntent) == []


def test_wall_preview_intents():
    editor = WallEditor()
    editor.pointer_down(0, 0)
    editor.pointer_move(97, 7)
    scene = editor.scene()
    preview = of_type(scene, LineIntent, "preview_snapped")
    assert len(preview) == 1
    assert preview[0].dashed
    texts = [l.text for l in of_type(scene, LabelIntent, "preview_snapped")]
    assert "1.00m" in texts
    assert "0° ✓" in texts
    assert len(of_type(scene, CircleIntent, "start")) == 1


def test_unsnapped_preview_role():
    editor = WallEditor(WallMakerConfig(snap_to_grid=False))
    editor.pointer_down(0, 0)
    editor.pointer_move(100, 40)
    assert len(of_type(editor.scene(), LineIntent, "preview")) == 1


def test_direction_options_with_hover(wall):
    editor = WallEditor(walls=[wall], tool=Tool.DOOR)
    editor.pointer_down(50, 0)
    editor.pointer_move(140, 0)
    preview = of_type(editor.scene(), LabelIntent, "door_label")
    assert preview[0].text == "0.90m"

    editor.pointer_down(140, 0)
    editor.pointer_move(90, 40)
    scene = editor.scene()
    options = of_type(scene, SectorIntent)
    assert {s.role for s in options} == {"direction_option", "direction_option_hover"}
    hovered = of_type(scene, SectorIntent, "direction_option_hover")[0]
    assert hovered.sweep == 90.0
    labels = {l.text: l.role for l in of_type(scene, LabelIntent) if l.text in ("L", "R")}
    assert labels == {"L": "door_label_hover", "R": "door_label"}


def test_scene_order_back_to_front(wall, door):
    editor = WallEditor(walls=[wall], doors=[door])
    scene = editor.scene()
    assert isinstance(scene[0], GridIntent)
    first_door = scene.index(of_type(scene, SectorIntent)[0])
    last_wall = max(scene.index(l) for l in of_type(scene, LineIntent, "wall"))
    assert last_wall < first_door
    assert isinstance(scene[-1], CircleIntent)
