"""Entry point for the dishbook Textual app."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dishbook.config import resolve_db_path, resolve_debug_log_path
from dishbook.dish_app import DishBookApp
from dishbook.store import DishStore

_LOG_FORMAT = "%(asctime)s %(name)s %(message)s"


def configure_logging(log_path: str | Path | None = None, level: int = logging.DEBUG) -> None:
    """Send log records to the debug log file; the terminal belongs to Textual."""
    path = Path(resolve_debug_log_path() if log_path is None else log_path)
    root = logging.getLogger("dishbook")
    root.setLevel(level)
    target = os.path.abspath(path)
    if any(isinstance(h, logging.FileHandler) and h.baseFilename == target for h in root.handlers):
        return

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, encoding="utf-8")
    except OSError:
        # Logging must never interfere with app flow.
        root.addHandler(logging.NullHandler())
        return

    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    root.addHandler(handler)


def main() -> None:
    """Run the Textual application."""
    configure_logging()
    store = DishStore(resolve_db_path())
    DishBookApp(store).run()


if __name__ == "__main__":
    main()
