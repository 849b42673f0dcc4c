"""Rendering and grouping helpers for dish lists and details."""

from __future__ import annotations

from typing import Iterable

from rich.text import Text

from dishbook.models import Category, Dish
from dishbook.picker import describe_photo

COURSE_LABELS: dict[Category, str] = {
    Category.ANTIPASTO: "Starter",
    Category.PRIMO: "First course",
    Category.SECONDO: "Main course",
}


def group_by_category(dishes: Iterable[Dish]) -> list[tuple[Category, list[Dish]]]:
    """Group dishes under every category in enumeration order, keeping collection order."""
    groups: dict[Category, list[Dish]] = {category: [] for category in Category}
    for dish in dishes:
        groups[dish.category].append(dish)
    return [(category, groups[category]) for category in Category]


def badge_style(category: Category) -> str:
    """Return a consistent badge style for category tags."""
    if category == Category.PRIMO:
        return "bold #ffffff on #b23a48"
    if category == Category.SECONDO:
        return "bold #ffffff on #2f6db5"
    return "bold #0b1f0f on #5fbf72"


def format_category_header(category: Category, count: int) -> Text:
    text = Text()
    text.append(f" {category.value} ", style=badge_style(category))
    text.append(f" {COURSE_LABELS[category]} ({count})", style="bold")
    return text


def format_dish_label(dish: Dish) -> Text:
    """Render a list row: name plus the description as a dim subtitle."""
    text = Text()
    text.append(dish.name, style="bold")
    if dish.description:
        text.append(f"  {dish.description}", style="dim")
    return text


def format_dish_detail(dish: Dish) -> Text:
    """Render the read-only detail body for one dish."""
    text = Text(style="white")
    text.append(f"[{describe_photo(dish.photo)}]\n\n", style="italic")
    text.append(f"{dish.name}\n", style="bold underline")
    if dish.description:
        text.append(f"{dish.description}\n")

    text.append("\nRecipe\n", style="bold")
    text.append(f"{dish.recipe or '(no recipe yet)'}\n")

    text.append("\n")
    for label, value in (
        ("Category", dish.category.value),
        ("Duration", dish.duration),
        ("Difficulty", dish.difficulty),
    ):
        text.append(f"{label}: ", style="bold")
        text.append(f"{value or '-'}   ")
    return text
