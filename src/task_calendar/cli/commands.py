# src/task_calendar/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from datetime import date

from ..core.datekey import day_key, month_key_of, parse_month_key
from ..core.view_state import ConfirmingDelete, Editing, ViewState
from ..tasks.task_models import Task
from .render import render_day, render_view

CommandHandler = Callable[[ViewState, list[str]], Awaitable[str]]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /next, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    async def handle(self, state: ViewState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            return await handler(state, args)
        except ValueError as e:
            logger.debug("Command /%s rejected args=%s: %s", name, args, e)
            return f"Invalid argument: {e}"

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _pick_task(state: ViewState, args: list[str]) -> Task:
    """Resolve "N" (1-based position in the selected day's list) to a task."""
    if not args:
        raise ValueError("task number is required")
    try:
        pos = int(args[0])
    except ValueError:
        raise ValueError(f"not a task number: {args[0]!r}") from None
    tasks = state.selected_tasks
    if not 1 <= pos <= len(tasks):
        raise ValueError(f"no task #{pos} on {state.selected_day}")
    return tasks[pos - 1]


def _split_title_notes(text: str) -> tuple[str, str]:
    title, _, notes = text.partition("|")
    return title.strip(), notes.strip()


async def cmd_help(state: ViewState, args: list[str]) -> str:
    return registry.build_help()


async def cmd_show(state: ViewState, args: list[str]) -> str:
    return render_view(state)


async def cmd_prev(state: ViewState, args: list[str]) -> str:
    await state.select_month(-1)
    return render_view(state)


async def cmd_next(state: ViewState, args: list[str]) -> str:
    await state.select_month(1)
    return render_view(state)


async def cmd_month(state: ViewState, args: list[str]) -> str:
    """
    /month YYYY-MM  -> show that month
    /month          -> back to the current month
    """
    if args:
        await state.show_month(args[0])
    else:
        await state.show_month(month_key_of(date.today()))
    return render_view(state)


async def cmd_day(state: ViewState, args: list[str]) -> str:
    """
    /day YYYY-MM-DD  -> select that day
    /day N           -> select day N of the displayed month
    """
    if not args:
        return render_day(state)
    raw = args[0]
    if raw.isdigit():
        year, month = parse_month_key(state.displayed_month)
        key = day_key(year, month, int(raw))
    else:
        key = raw
    await state.select_day(key)
    return render_view(state)


async def cmd_add(state: ViewState, args: list[str]) -> str:
    """/add title | notes"""
    title, notes = _split_title_notes(" ".join(args))
    state.form.title = title
    state.form.notes = notes
    if not title:
        return "Usage: /add <title> | <notes (optional)>"
    await state.add_from_form()
    return render_view(state)


async def cmd_done(state: ViewState, args: list[str]) -> str:
    await state.toggle_done(_pick_task(state, args))
    return render_view(state)


async def cmd_edit(state: ViewState, args: list[str]) -> str:
    state.open_edit(_pick_task(state, args))
    return render_view(state)


async def cmd_title(state: ViewState, args: list[str]) -> str:
    if not state.update_draft(title=" ".join(args)):
        return "No task is being edited. Use /edit N first."
    return render_view(state)


async def cmd_notes(state: ViewState, args: list[str]) -> str:
    if not state.update_draft(notes=" ".join(args)):
        return "No task is being edited. Use /edit N first."
    return render_view(state)


async def cmd_save(state: ViewState, args: list[str]) -> str:
    session = state.session
    if not isinstance(session, Editing):
        return "No task is being edited. Use /edit N first."
    if not session.draft.title.strip():
        return "Title cannot be empty."
    await state.save_edit()
    return render_view(state)


async def cmd_rm(state: ViewState, args: list[str]) -> str:
    state.open_delete(_pick_task(state, args))
    return render_view(state)


async def cmd_yes(state: ViewState, args: list[str]) -> str:
    if not isinstance(state.session, ConfirmingDelete):
        return "Nothing to confirm."
    await state.confirm_delete()
    return render_view(state)


async def cmd_cancel(state: ViewState, args: list[str]) -> str:
    state.cancel()
    return render_view(state)


async def cmd_reload(state: ViewState, args: list[str]) -> str:
    await state.reload()
    return render_view(state)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("show", cmd_show, help_text="Show the month and the selected day.", aliases=["ls"])
registry.register("prev", cmd_prev, help_text="Previous month.", aliases=["p"])
registry.register("next", cmd_next, help_text="Next month.", aliases=["n"])
registry.register("month", cmd_month, help_text="Jump to a month: /month YYYY-MM (no arg: today).")
registry.register("day", cmd_day, help_text="Select a day: /day YYYY-MM-DD | /day N.", aliases=["d"])
registry.register("add", cmd_add, help_text="Add a task to the selected day: /add title | notes.")
registry.register("done", cmd_done, help_text="Toggle done: /done N.", aliases=["x"])
registry.register("edit", cmd_edit, help_text="Edit a task: /edit N, then /title, /notes, /save.")
registry.register("title", cmd_title, help_text="Set the draft title while editing.")
registry.register("notes", cmd_notes, help_text="Set the draft notes while editing.")
registry.register("save", cmd_save, help_text="Save the task being edited.")
registry.register("rm", cmd_rm, help_text="Delete a task (asks for confirmation): /rm N.", aliases=["del"])
registry.register("yes", cmd_yes, help_text="Confirm the pending delete.")
registry.register("cancel", cmd_cancel, help_text="Close the edit/delete prompt.")
registry.register("reload", cmd_reload, help_text="Re-read the displayed month from the store.", aliases=["r"])
