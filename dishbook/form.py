"""Dish creation form state, independent of any screen."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Awaitable

from dishbook.models import Category, Dish
from dishbook.store import DishStore

logger = logging.getLogger(__name__)


class FormState(str, Enum):
    EDITING = "editing"
    SUBMITTED = "submitted"
    CLOSED = "closed"


CATEGORY_ORDER: list[Category] = list(Category)


@dataclass
class DishForm:
    """Field values for a dish being created, plus the form lifecycle."""

    name: str = ""
    photo: bytes | None = None
    description: str = ""
    recipe: str = ""
    category: Category = Category.ANTIPASTO
    duration: str = ""
    difficulty: str = ""
    state: FormState = FormState.EDITING
    _pick_generation: int = field(default=0, init=False, repr=False)

    @property
    def is_editing(self) -> bool:
        return self.state == FormState.EDITING

    @property
    def can_submit(self) -> bool:
        return self.is_editing and bool(self.name) and self.photo is not None

    def missing_fields(self) -> list[str]:
        """Names of the required fields that still block submission."""
        missing: list[str] = []
        if not self.name:
            missing.append("name")
        if self.photo is None:
            missing.append("photo")
        return missing

    def cycle_category(self, delta: int = 1) -> Category:
        idx = CATEGORY_ORDER.index(self.category)
        self.category = CATEGORY_ORDER[(idx + delta) % len(CATEGORY_ORDER)]
        return self.category

    def build_dish(self) -> Dish:
        if self.photo is None:
            raise ValueError("A photo is required to build a dish")
        return Dish(
            name=self.name,
            photo=self.photo,
            description=self.description,
            recipe=self.recipe,
            category=self.category,
            duration=self.duration,
            difficulty=self.difficulty,
        )

    def submit(self, store: DishStore) -> Dish | None:
        """Add the dish to the store and mark the form submitted; None while blocked."""
        if not self.can_submit:
            logger.debug("form_submit_blocked missing=%s state=%s", ",".join(self.missing_fields()), self.state.value)
            return None

        dish = self.build_dish()
        store.add(dish)
        self.state = FormState.SUBMITTED
        logger.debug("form_submitted id=%s", dish.id)
        return dish

    def cancel(self) -> None:
        if self.state == FormState.EDITING:
            self.state = FormState.CLOSED

    def begin_photo_pick(self) -> int:
        """Start a new pick; any pick started earlier becomes stale."""
        self._pick_generation += 1
        return self._pick_generation

    def apply_photo(self, generation: int, payload: bytes | None) -> bool:
        """Apply a pick result if it is still current and the form is still open."""
        if not self.is_editing:
            logger.debug("form_photo_ignored reason=form_%s", self.state.value)
            return False
        if generation != self._pick_generation:
            logger.debug("form_photo_ignored reason=stale_pick generation=%d", generation)
            return False
        if payload is None:
            return False
        self.photo = payload
        return True

    async def pick_photo(self, pending: Awaitable[bytes | None]) -> bool:
        """Await a single-result photo operation and apply it if still relevant."""
        generation = self.begin_photo_pick()
        payload = await pending
        return self.apply_photo(generation, payload)
