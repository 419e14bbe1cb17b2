"""Configuration constants and .env loading.

WHY: Centralizes configurable values so they are easy to find, update,
and override. Gap thresholds, the log directory, and server settings are
plain module-level values, not buried in logic.

HOW: python-dotenv loads the .env file on import. Constants are defined
at module level, each with an environment variable override.

RULES:
- All defaults can be overridden via environment variables
- Algorithm constants (speaking rate, default ratio, scorer weights) live
  next to the algorithms in core/ and are NOT configurable
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Formatting defaults (seconds)
# ---------------------------------------------------------------------------

DEFAULT_PARAGRAPH_GAP = float(os.getenv("PARAGRAPH_GAP", "8"))
"""Gap above which a paragraph break (blank line) is inserted."""

DEFAULT_LINE_GAP = float(os.getenv("LINE_GAP", "4"))
"""Gap above which a single line break is inserted."""

# ---------------------------------------------------------------------------
# Audit logs and repair output
# ---------------------------------------------------------------------------

LOG_DIR = Path(os.getenv("TRANSCRIPTION_TOOLS_LOG_DIR", "logs"))
"""Base directory for session audit logs (summary/ and repairs/ below it)."""

REPAIR_OUTPUT_FILE = os.getenv("REPAIR_OUTPUT_FILE", "repaired.txt")
"""Where repair_text writes the corrected text."""

REPAIR_OUTPUT_DIR = Path(os.getenv("REPAIR_OUTPUT_DIR", "."))
"""Directory the HTTP API writes repaired files into; clients name only the file."""

# ---------------------------------------------------------------------------
# HTTP API
# ---------------------------------------------------------------------------

API_HOST = os.getenv("API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("API_PORT", "8000"))
