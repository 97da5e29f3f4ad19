# src/task_calendar/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
from datetime import datetime

from ..cli.commands import CommandRegistry
from ..cli.commands import registry as command_registry
from ..cli.render import render_view
from ..core.view_state import ViewState

logger = logging.getLogger(__name__)

EXIT_COMMANDS = ("/exit", "/quit", "/q")


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


async def handle_line(state: ViewState, line: str, registry: CommandRegistry | None = None) -> str:
    """
    One console input -> reply text.

    Slash commands go to the registry; anything else is a quick add to the
    selected day ("title | notes").
    """
    registry = registry or command_registry
    if not line.startswith("/"):
        line = f"/add {line}"
    reply = await registry.handle(state, line)
    return reply if reply is not None else ""


async def run_console_loop(state: ViewState, *, app_name: str = "task-calendar") -> None:
    logger.info("Console connector started.")
    _print_ts(f"[{app_name}] Type a task title to add it to the selected day. /help for commands, /exit to quit.\n")
    print(render_view(state))

    while True:
        try:
            user_input = (await asyncio.to_thread(input, "\n> ")).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in EXIT_COMMANDS:
            logger.info("Console exit command received.")
            break

        try:
            reply = await handle_line(state, user_input)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply:
            print(reply)

    logger.info("Console connector finished.")
