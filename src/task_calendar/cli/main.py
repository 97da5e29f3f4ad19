# src/task_calendar/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds the task store and the ViewState, loads the
current month, then runs the console REPL.
"""

from __future__ import annotations

import asyncio
import logging

from ..config import Settings, get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging
from .bootstrap import close_store, create_store, create_view_state

logger = logging.getLogger(__name__)


async def run(settings: Settings) -> None:
    store = create_store(settings=settings)
    try:
        state = create_view_state(store, settings=settings)
        await state.load()
        await run_console_loop(state, app_name=settings.app_name)
    finally:
        try:
            await close_store(store)
        except Exception:
            logger.debug("Store close failed.", exc_info=True)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s (store=%s)...", settings.app_name, settings.store_kind)

    try:
        asyncio.run(run(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down...")

    logger.info("Bye.")


if __name__ == "__main__":
    main()
