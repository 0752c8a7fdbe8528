"""Configuration constants, .env loading, and logging setup.

WHY: Centralizes every configurable value so it is easy to find, update,
and override: the initial keyboard state, the toggle key, the log level,
and the HTTP API's bind address and session limits.

HOW: python-dotenv loads the .env file on import. Constants are read from
the environment with defaults. configure_logging() is called by each entry
point (CLI, GUI, API) before any work starts.

RULES:
- All settings use the BENGALI_KEYBOARD_ prefix
- Integer settings accept decimal or 0x-prefixed hex ("0x79")
- An unparsable integer raises ValueError naming the variable
- Booleans are "true"/"1"/"yes"/"on" (case-insensitive), anything else is False
"""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

# Load .env from the working directory
load_dotenv()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw, 0)
    except ValueError:
        raise ValueError(
            "{} must be an integer, got {!r}".format(name, raw)
        ) from None


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return default
    return raw in ("true", "1", "yes", "on")


# ---------------------------------------------------------------------------
# Keyboard
# ---------------------------------------------------------------------------

DEFAULT_ENABLED = _env_bool("BENGALI_KEYBOARD_ENABLED", False)
"""Whether a new session starts with conversion switched on."""

TOGGLE_KEY = _env_int("BENGALI_KEYBOARD_TOGGLE_KEY", 0x79)
"""Virtual-key code of the toggle key (F10)."""

# ---------------------------------------------------------------------------
# HTTP API
# ---------------------------------------------------------------------------

API_HOST = os.getenv("BENGALI_KEYBOARD_API_HOST", "127.0.0.1")
API_PORT = _env_int("BENGALI_KEYBOARD_API_PORT", 8000)
SESSION_TTL_SECONDS = _env_int("BENGALI_KEYBOARD_SESSION_TTL", 3600)
MAX_SESSIONS = _env_int("BENGALI_KEYBOARD_MAX_SESSIONS", 100)

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

LOG_LEVEL = os.getenv("BENGALI_KEYBOARD_LOG_LEVEL", "WARNING").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for an entry point.

    RULES:
    - level overrides LOG_LEVEL when given (e.g. from --verbose)
    - Unknown level names fall back to WARNING
    """
    name = (level or LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.WARNING),
        format=LOG_FORMAT,
    )
