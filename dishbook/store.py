"""In-memory dish collection with single-slot JSON persistence."""

from __future__ import annotations

import json
import logging
import sqlite3
from pathlib import Path
from typing import Callable, Iterable

from dishbook.config import DISHES_SLOT_KEY
from dishbook.models import Category, Dish
from dishbook.persistence import read_slot, write_slot

logger = logging.getLogger(__name__)

ChangeListener = Callable[[], None]


def encode_dishes(dishes: Iterable[Dish]) -> bytes:
    """Serialize dishes to a UTF-8 JSON array of field-tagged objects."""
    return json.dumps([dish.to_dict() for dish in dishes], ensure_ascii=False).encode("utf-8")


def decode_dishes(blob: bytes) -> list[Dish]:
    """Parse a blob written by encode_dishes. Raises ValueError on malformed data."""
    try:
        raw = json.loads(blob.decode("utf-8"))
    except RecursionError as exc:
        raise ValueError("Dish blob is nested too deeply") from exc
    if not isinstance(raw, list):
        raise ValueError("Dish blob must hold a JSON array")

    dishes: list[Dish] = []
    seen_ids: set[str] = set()
    for item in raw:
        if not isinstance(item, dict):
            raise ValueError("Dish entries must be JSON objects")
        try:
            dish = Dish.from_dict(item)
        except KeyError as exc:
            raise ValueError(f"Dish entry missing field {exc}") from exc
        if dish.id in seen_ids:
            raise ValueError(f"Duplicate dish id: {dish.id}")
        seen_ids.add(dish.id)
        dishes.append(dish)
    return dishes


class DishStore:
    """Owns the ordered dish collection and its persisted slot."""

    def __init__(self, db_path: str | Path | None = None, slot_key: str = DISHES_SLOT_KEY) -> None:
        self.db_path = db_path
        self.slot_key = slot_key
        self._dishes: list[Dish] = []
        self._listeners: list[ChangeListener] = []

    @property
    def dishes(self) -> tuple[Dish, ...]:
        return tuple(self._dishes)

    def dishes_in(self, category: Category) -> list[Dish]:
        """Dishes of one category in collection order."""
        return [dish for dish in self._dishes if dish.category == category]

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """Register a change listener and return a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def add(self, dish: Dish) -> None:
        """Append a dish, persist the whole collection, then notify listeners."""
        if any(existing.id == dish.id for existing in self._dishes):
            raise ValueError(f"Dish id already present: {dish.id}")

        self._dishes.append(dish)
        logger.debug("store_add id=%s category=%s count=%d", dish.id, dish.category.value, len(self._dishes))
        self.persist()
        self._notify()

    def persist(self) -> bool:
        """Write the collection to its slot. Failures are logged, never raised."""
        try:
            blob = encode_dishes(self._dishes)
            write_slot(self.slot_key, blob, self.db_path)
        except (TypeError, ValueError, OSError, sqlite3.Error) as exc:
            logger.warning("store_persist_failed slot=%s error=%r", self.slot_key, exc)
            return False

        logger.debug("store_persisted slot=%s count=%d bytes=%d", self.slot_key, len(self._dishes), len(blob))
        return True

    def load(self) -> list[Dish]:
        """Replace the collection with the slot contents, or empty it if unreadable."""
        try:
            blob = read_slot(self.slot_key, self.db_path)
        except (OSError, sqlite3.Error) as exc:
            logger.warning("store_read_failed slot=%s error=%r", self.slot_key, exc)
            blob = None

        dishes: list[Dish] = []
        if blob is not None:
            try:
                dishes = decode_dishes(blob)
            except ValueError as exc:
                logger.warning("store_decode_failed slot=%s error=%r", self.slot_key, exc)
                dishes = []

        self._dishes = dishes
        logger.debug("store_loaded slot=%s count=%d", self.slot_key, len(dishes))
        self._notify()
        return list(dishes)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()
