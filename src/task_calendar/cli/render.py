# src/task_calendar/cli/render.py

"""Plain-text rendering of a ViewState for the console."""

from __future__ import annotations

from ..core.grid import WEEKDAY_ABBR, grid_weeks
from ..core.view_state import ConfirmingDelete, Editing, ViewState

CELL_WIDTH = 6


def _cell_text(day: int, count: int, *, selected: bool, other_month: bool) -> str:
    if selected:
        left, right = "[", "]"
    elif other_month:
        left, right = "(", ")"
    else:
        left, right = " ", " "
    badge = str(count) if count else ""
    return f"{left}{day:>2}{right}{badge:<2}"[:CELL_WIDTH].ljust(CELL_WIDTH)


def render_month(state: ViewState) -> str:
    """
    Month header + 6x7 grid.

    [ 5] selected day, ( 1) day of the previous/next month,
    a trailing number is the task count of that day.
    """
    index = state.index
    lines = [state.month_title.center(CELL_WIDTH * 7).rstrip()]
    lines.append("".join(w.ljust(CELL_WIDTH) for w in WEEKDAY_ABBR).rstrip())
    for week in grid_weeks(state.grid):
        row = [
            _cell_text(
                cell.day,
                index.count(cell.key),
                selected=cell.key == state.selected_day,
                other_month=not cell.in_current_month,
            )
            for cell in week
        ]
        lines.append("".join(row).rstrip())
    return "\n".join(lines)


def render_day(state: ViewState) -> str:
    tasks = state.selected_tasks
    if not tasks:
        return f"Tasks for {state.selected_day}\n  No tasks for this day."
    done = state.index.done_count(state.selected_day)
    lines = [f"Tasks for {state.selected_day} ({done}/{len(tasks)} done)"]
    for i, task in enumerate(tasks, start=1):
        mark = "x" if task.is_done else " "
        lines.append(f"  {i}. [{mark}] {task.title}")
        if task.notes:
            lines.append(f"         {task.notes}")
    return "\n".join(lines)


def render_session(state: ViewState) -> str | None:
    session = state.session
    if isinstance(session, Editing):
        notes = session.draft.notes or "-"
        return (
            f"Editing task #{session.task.id}\n"
            f"  title: {session.draft.title}\n"
            f"  notes: {notes}\n"
            "  /title <text>, /notes <text>, /save, /cancel"
        )
    if isinstance(session, ConfirmingDelete):
        return (
            f'Delete "{session.task.title}"? This action cannot be undone.\n'
            "  /yes to delete, /cancel to keep it"
        )
    return None


def render_view(state: ViewState) -> str:
    parts: list[str] = []
    if state.last_error:
        parts.append(f"! {state.last_error}")
    parts.append(render_month(state))
    parts.append(render_day(state))
    session = render_session(state)
    if session:
        parts.append(session)
    return "\n\n".join(parts)
