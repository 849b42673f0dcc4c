"""Domain models for dishbook."""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from uuid import uuid4


class Category(str, Enum):
    """Meal course a dish belongs to, in display order."""

    ANTIPASTO = "Antipasto"
    PRIMO = "Primo"
    SECONDO = "Secondo"


def _new_dish_id() -> str:
    return str(uuid4()).upper()


@dataclass(frozen=True)
class Dish:
    """A catalogued recipe record. Immutable once created."""

    name: str
    photo: bytes
    description: str = ""
    recipe: str = ""
    category: Category = Category.ANTIPASTO
    duration: str = ""
    difficulty: str = ""
    id: str = field(default_factory=_new_dish_id)

    def to_dict(self) -> dict[str, str]:
        return {
            "id": self.id,
            "name": self.name,
            "photo": base64.b64encode(self.photo).decode("ascii"),
            "description": self.description,
            "recipe": self.recipe,
            "category": self.category.value,
            "duration": self.duration,
            "difficulty": self.difficulty,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Dish:
        """Build a dish from its field-tagged form; raises KeyError/ValueError on bad input."""
        text_fields = {}
        for key in ("id", "name", "description", "recipe", "duration", "difficulty"):
            value = raw[key]
            if not isinstance(value, str):
                raise ValueError(f"Dish field {key!r} must be a string")
            text_fields[key] = value

        photo_raw = raw["photo"]
        if not isinstance(photo_raw, str):
            raise ValueError("Dish field 'photo' must be a base64 string")

        return cls(
            photo=base64.b64decode(photo_raw, validate=True),
            category=Category(raw["category"]),
            **text_fields,
        )
