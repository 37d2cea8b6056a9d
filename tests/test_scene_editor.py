import pytest

from snapblaster.models import CCDefinition, CCValue, Scene, TriggerKind, TriggerMode
from snapblaster.scene_editor import SceneEditor, group_cc_values, trigger_mode_label


def _scene():
    return Scene(
        id="s1",
        name="Intro",
        description="Soft start",
        cc_values={
            "1:20": CCValue(channel=1, cc_number=20, value=10),
            "1:7": CCValue(channel=1, cc_number=7, value=100),
            "0:3": CCValue(channel=0, cc_number=3, value=5),
        },
    )


@pytest.mark.parametrize(
    "mode, label",
    [
        (TriggerMode(TriggerKind.IMMEDIATE), "Immediate"),
        (TriggerMode(TriggerKind.NEXT_BEAT), "Next Beat"),
        (TriggerMode(TriggerKind.NEXT_BAR), "Next Bar"),
    ],
)
def test_trigger_mode_label(mode, label):
    assert trigger_mode_label(mode) == label


def test_trigger_mode_label_beats():
    assert trigger_mode_label(TriggerMode(TriggerKind.BEATS, 4)) == "4 Beats"


def test_group_cc_values_sorts_and_skips_bad_keys():
    a = CCValue(channel=2, cc_number=9, value=1)
    b = CCValue(channel=2, cc_number=1, value=2)
    c = CCValue(channel=0, cc_number=5, value=3)
    values = {"2:9": a, "2:1": b, "0:5": c, "bad": c, "x:1": c, "1:300": c}
    groups = group_cc_values(values)
    assert [channel for channel, _ in groups] == [0, 2]
    assert groups[1][1] == [(1, b), (9, a)]
    assert groups[0][1] == [(5, c)]


def test_group_cc_values_empty():
    assert group_cc_values({}) == []


def test_initial_state_mirrors_scene():
    editor = SceneEditor(_scene())
    assert editor.name == "Intro"
    assert editor.description == "Soft start"
    assert editor.editing is False
    assert editor.dirty is False


def test_save_reports_edited_scene():
    seen = []
    editor = SceneEditor(_scene(), on_update=seen.append)
    editor.begin_edit()
    assert editor.editing is True
    editor.set_name("Verse")
    editor.set_description("")
    editor.set_trigger_mode(TriggerMode(TriggerKind.NEXT_BAR))
    assert editor.dirty is True
    result = editor.save()
    assert seen == [result]
    assert result.name == "Verse"
    assert result.description is None
    assert result.trigger_mode == TriggerMode(TriggerKind.NEXT_BAR)
    assert result.id == "s1"
    assert editor.editing is False
    assert editor.dirty is False


def test_update_cc_stores_under_key_and_saves():
    editor = SceneEditor(_scene())
    new_value = CCValue(channel=1, cc_number=7, value=64)
    editor.update_cc(1, 7, new_value)
    assert editor.cc_values["1:7"] == new_value
    assert editor.save().cc_values["1:7"] == new_value


def test_cancel_restores_original():
    scene = _scene()
    editor = SceneEditor(scene)
    editor.begin_edit()
    editor.set_name("Other")
    editor.update_cc(1, 7, CCValue(channel=1, cc_number=7, value=0))
    editor.cancel()
    assert editor.name == scene.name
    assert editor.cc_values == scene.cc_values
    assert editor.editing is False
    assert editor.dirty is False


def test_groups_attach_definitions():
    definition = CCDefinition(cc_number=7, channel=1, name="Volume")
    editor = SceneEditor(_scene(), {"1:7": definition})
    groups = editor.groups()
    assert [channel for channel, _ in groups] == [0, 1]
    channel_one = groups[1][1]
    assert [entry[0] for entry in channel_one] == [7, 20]
    assert channel_one[0][2] is definition
    assert channel_one[1][2] is None