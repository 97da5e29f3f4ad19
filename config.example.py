# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Use:
- .env (local, gitignored)
- config_local.py (local safe overrides, gitignored)

This file exists to make the repo self-documenting without a .env file at hand.
"""

ENV_VARS = {
    # App / logging
    "TASKCAL_APP_NAME": "App display name (default: task-calendar).",
    "TASKCAL_LOG_LEVEL": "Console logging level (default: INFO).",
    # Task store
    "TASKCAL_STORE": "Task store backend: sqlite | http (default: sqlite).",
    "TASKCAL_TASKS_DB_PATH": "SQLite path (default: <data_dir>/tasks.sqlite3).",
    "TASKCAL_API_BASE_URL": "Task service base URL (default: http://localhost:8000/api).",
    "TASKCAL_API_TIMEOUT_SECONDS": "Task service request timeout (default: 10).",
    # Paths (gitignored)
    "TASKCAL_DATA_DIR": "Local data directory for logs and SQLite (default: .local/task-calendar).",
    # Behaviour
    "TASKCAL_FOLLOW_SELECTION": (
        "Selecting a day of the previous/next month switches the displayed month (default: true)."
    ),
}
