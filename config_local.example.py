# config_local.example.py

"""
Example local overrides.

Usage:
  1) Copy this file to `config_local.py`
  2) Adjust values for your machine
  3) Never commit `config_local.py` (it is gitignored)

Prefer `.env` for anything environment specific. This file should contain only safe overrides.
"""

# Example: talk to a running task service instead of the local SQLite file
# STORE = "http"
# API_BASE_URL = "http://localhost:8000/api"

# Example: keep the displayed month when a previous/next-month day is selected
# FOLLOW_SELECTION = False
