# config_local.example.py

"""
Example local overrides.

Usage:
  1) Copy this file to `config_local.py`
  2) Adjust values for your machine
  3) Never commit `config_local.py` (it is gitignored)

Prefer `.env`. This file should contain only safe overrides.
"""

# Example: talk to a local backend instead of the offline store
# API_BASE_URL = "http://localhost:3000"

# Example: shorter undo window while testing by hand
# UNDO_WINDOW_SECONDS = 3
