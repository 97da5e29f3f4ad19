# tests/test_commands.py

from __future__ import annotations

import pytest

from task_calendar.cli.commands import CommandRegistry
from task_calendar.cli.render import render_day, render_month
from task_calendar.connectors.console_connector import handle_line
from task_calendar.core.view_state import CLOSED, ViewState

from .fakes import FakeTaskRepo


@pytest.mark.asyncio
async def test_command_registry_routes_and_rejects(view: ViewState) -> None:
    reg = CommandRegistry()
    called: list[list[str]] = []

    async def h(state, args):
        called.append(args)
        return "ok"

    async def bad(state, args):
        raise ValueError("nope")

    reg.register("a", h, "a", aliases=["aa"])
    reg.register("b", bad, "b")

    assert await reg.handle(view, "/a x y") == "ok"
    assert await reg.handle(view, "/AA") == "ok"
    assert called == [["x", "y"], []]
    assert await reg.handle(view, "hello") is None
    assert "Unknown command" in (await reg.handle(view, "/zzz") or "")
    assert await reg.handle(view, "/b") == "Invalid argument: nope"


@pytest.mark.asyncio
async def test_console_flow_add_toggle_edit_delete(view: ViewState, repo: FakeTaskRepo) -> None:
    await view.load()

    out = await handle_line(view, "Water plants | balcony")
    assert "Water plants" in out
    assert "balcony" in out
    assert len(view.selected_tasks) == 3

    out = await handle_line(view, "/done 3")
    assert "3. [x] Water plants" in out

    await handle_line(view, "/edit 3")
    await handle_line(view, "/title Water all plants")
    await handle_line(view, "/notes")
    out = await handle_line(view, "/save")
    assert view.session is CLOSED
    assert "3. [x] Water all plants" in out
    assert view.selected_tasks[2].notes is None

    await handle_line(view, "/rm 3")
    out = await handle_line(view, "/yes")
    assert "Water all plants" not in out
    assert len(view.selected_tasks) == 2


@pytest.mark.asyncio
async def test_console_navigation_and_errors(view: ViewState, repo: FakeTaskRepo) -> None:
    await view.load()

    out = await handle_line(view, "/next")
    assert "April 2024" in out
    assert view.selected_day == "2024-03-05"

    await handle_line(view, "/day 2")
    assert view.selected_day == "2024-04-02"
    assert [t.title for t in view.selected_tasks] == ["Pay rent"]

    out = await handle_line(view, "/done 9")
    assert out.startswith("Invalid argument")

    out = await handle_line(view, "/month 2024-13")
    assert out.startswith("Invalid argument")
    assert view.displayed_month == "2024-04"


def test_render_month_marks_selection_and_counts(view: ViewState) -> None:
    text = render_month(view)
    lines = text.splitlines()
    assert lines[0].strip() == "March 2024"
    assert lines[1].startswith("Mon")
    assert len(lines) == 8
    # 2024-03-05 is selected; no tasks are loaded yet.
    assert "[ 5]" in text
    # February 26 opens the grid as a previous-month day.
    assert lines[2].startswith("(26)")


@pytest.mark.asyncio
async def test_render_day_lists_tasks_with_done_badge(view: ViewState) -> None:
    assert render_day(view) == "Tasks for 2024-03-05\n  No tasks for this day."

    await view.load()
    assert await view.toggle_done(view.selected_tasks[0])

    lines = render_day(view).splitlines()
    assert lines[0] == "Tasks for 2024-03-05 (1/2 done)"
    assert lines[1] == "  1. [x] Buy milk"
    assert lines[2] == "  2. [ ] Call Ana"
    assert lines[3].strip() == "about the trip"
