"""Runtime configuration defaults for persistence, photos and logging."""

from __future__ import annotations

import os

DB_PATH = "data/dishbook.db"
DISHES_SLOT_KEY = "Dishes"
DEBUG_LOG_PATH = "/tmp/dishbook-debug.log"

# Stored photos are JPEG; quality is on the 1-95 Pillow scale.
PHOTO_JPEG_QUALITY = 70
PHOTO_MAX_SIDE_PX = 1600

_DB_PATH_ENV = "DISHBOOK_DB_PATH"
_DEBUG_LOG_ENV = "DISHBOOK_DEBUG_LOG"


def resolve_db_path() -> str:
    """Return the key-value database path, honoring DISHBOOK_DB_PATH."""
    env_override = os.environ.get(_DB_PATH_ENV, "").strip()
    return env_override or DB_PATH


def resolve_debug_log_path() -> str:
    """Return the debug log path, honoring DISHBOOK_DEBUG_LOG."""
    env_override = os.environ.get(_DEBUG_LOG_ENV, "").strip()
    return env_override or DEBUG_LOG_PATH
