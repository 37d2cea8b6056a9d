import pytest

from snapblaster.commands import BackendClient
from snapblaster.models import ProjectMeta
from snapblaster.project_dialog import ProjectDialog, format_date


def make_dialog(list_result=None):
    events = []

    async def transport(command, args):
        events.append(("call", command))
        if isinstance(list_result, Exception):
            raise list_result
        return list_result

    dialog = ProjectDialog(
        BackendClient(transport),
        on_close=lambda: events.append(("close",)),
        on_create=lambda name, author: events.append(("create", name, author)),
        on_load=lambda project_id: events.append(("load", project_id)),
    )
    return dialog, events


def meta(project_id, name):
    return ProjectMeta(
        id=project_id,
        name=name,
        version="1.0",
        created_at="2024-01-01T00:00:00Z",
        updated_at="2024-01-05T10:00:00Z",
        file_path=f"/projects/{project_id}.json",
        author="someone",
    )


def test_format_date():
    assert format_date("2024-01-05T10:00:00Z") == "2024-01-05"
    assert format_date("2024-01-05") == "2024-01-05"
    assert format_date("") == ""


@pytest.mark.asyncio
async def test_refresh_loads_projects():
    projects = [meta("p1", "One"), meta("p2", "Two")]
    dialog, events = make_dialog([p.to_dict() for p in projects])
    result = await dialog.refresh()
    assert result == projects
    assert dialog.projects == projects
    assert dialog.is_loading is False
    assert events == [("call", "list_projects")]


@pytest.mark.asyncio
async def test_refresh_failure_empties_list():
    dialog, _ = make_dialog(RuntimeError("down"))
    dialog.projects = [meta("old", "Old")]
    assert await dialog.refresh() == []
    assert dialog.projects == []
    assert dialog.is_loading is False


@pytest.mark.asyncio
async def test_refresh_malformed_result_empties_list():
    dialog, _ = make_dialog([{"id": "x"}])
    assert await dialog.refresh() == []


def test_select_tab_and_labels():
    dialog, _ = make_dialog()
    assert dialog.active_tab == "existing"
    assert dialog.primary_label() == "Load Project"
    dialog.select_tab("new")
    assert dialog.primary_label() == "Create Project"
    with pytest.raises(ValueError):
        dialog.select_tab("recent")
    assert dialog.active_tab == "new"


def test_primary_disabled_states():
    dialog, _ = make_dialog()
    assert dialog.primary_disabled() is True
    dialog.select("p1")
    assert dialog.primary_disabled() is False
    dialog.select_tab("new")
    assert dialog.primary_disabled() is True
    dialog.new_name = "  "
    assert dialog.primary_disabled() is True
    dialog.new_name = "Live set"
    assert dialog.primary_disabled() is False


def test_submit_load_existing():
    dialog, events = make_dialog()
    assert dialog.submit() is False
    assert events == []
    dialog.select("p2")
    assert dialog.submit() is True
    assert events == [("load", "p2"), ("close",)]


def test_submit_create_without_author():
    dialog, events = make_dialog()
    dialog.select_tab("new")
    dialog.new_name = "Live set"
    dialog.new_author = "   "
    assert dialog.submit() is True
    assert events == [("create", "Live set", None), ("close",)]


def test_submit_create_with_author():
    dialog, events = make_dialog()
    dialog.select_tab("new")
    dialog.new_name = "Live set"
    dialog.new_author = "Ada"
    dialog.submit()
    assert events == [("create", "Live set", "Ada"), ("close",)]


def test_submit_create_blank_name_does_nothing():
    dialog, events = make_dialog()
    dialog.select_tab("new")
    dialog.new_name = "  "
    assert dialog.submit() is False
    assert events == []