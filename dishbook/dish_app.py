"""Main Textual app class."""

from __future__ import annotations

import logging
from typing import Callable

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.css.query import NoMatches
from textual.events import Key
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Header, Static

from dishbook.detail_modal import DishDetailModal
from dishbook.form_modal import DishFormModal
from dishbook.models import Dish
from dishbook.rendering import format_category_header, format_dish_label, group_by_category
from dishbook.store import DishStore

logger = logging.getLogger(__name__)


class DishBookApp(App):
    """A Textual app for browsing dishes by course and adding new ones."""

    TITLE = "Dish Book"
    SUB_TITLE = "Antipasto / Primo / Secondo"

    CSS = """
    Screen {
        layout: vertical;
    }

    #dishes-pane {
        height: 1fr;
        border: round $primary;
        padding: 1;
    }

    #dishes-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #status-bar {
        border: heavy $secondary;
        padding: 0 1;
        height: 3;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    selected_index = reactive(None)

    BINDINGS = [
        ("up", "move_selection(-1)", "Previous dish"),
        ("down", "move_selection(1)", "Next dish"),
        ("enter", "open_selected", "Details"),
        Binding("ctrl+q", "quit", "Quit", priority=True),
    ]

    def __init__(self, store: DishStore) -> None:
        super().__init__()
        self.store = store
        self.system_status = ""
        self._unsubscribe: Callable[[], None] | None = None
        logger.debug("app_init db_path=%s", store.db_path)

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="dishes-pane"):
            yield Static("Dishes", classes="pane-title")
            yield Static("(no dishes yet)", id="dishes-list")
        yield Static(id="status-bar")

    def on_mount(self) -> None:
        self._unsubscribe = self.store.subscribe(self._refresh_all)
        dishes = self.store.load()
        logger.debug("on_mount loaded=%d", len(dishes))

    def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def on_key(self, event: Key) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        if not event.is_printable or not event.character:
            return

        key = event.character.lower()
        logger.debug("on_key key=%r", key)
        if key in {"a", "n"}:
            self.action_new_dish()
        elif key == "j":
            self.action_move_selection(1)
        elif key == "k":
            self.action_move_selection(-1)
        else:
            return
        event.stop()

    def action_move_selection(self, delta: int) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        dishes = self.selectable_dishes()
        if not dishes:
            return

        if self.selected_index is None:
            self.selected_index = 0 if delta > 0 else len(dishes) - 1
        else:
            self.selected_index = (self.selected_index + delta) % len(dishes)
        self._refresh_dishes()

    def action_open_selected(self) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        dish = self.selected_dish()
        if dish is None:
            return
        logger.debug("open_detail id=%s", dish.id)
        self.push_screen(DishDetailModal(dish))

    def action_new_dish(self) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        self.push_screen(DishFormModal(self.store), self._on_form_closed)

    def selectable_dishes(self) -> list[Dish]:
        """Dishes in on-screen order: grouped by category, collection order within a group."""
        return [dish for _, group in group_by_category(self.store.dishes) for dish in group]

    def selected_dish(self) -> Dish | None:
        dishes = self.selectable_dishes()
        if self.selected_index is None or not (0 <= self.selected_index < len(dishes)):
            return None
        return dishes[self.selected_index]

    def _on_form_closed(self, dish: Dish | None) -> None:
        if dish is None:
            logger.debug("form_closed result=cancelled")
            self.system_status = "Cancelled"
        else:
            logger.debug("form_closed result=saved id=%s", dish.id)
            self.system_status = f"Saved {dish.name}"
            dishes = self.selectable_dishes()
            self.selected_index = next(idx for idx, item in enumerate(dishes) if item.id == dish.id)
        self._refresh_all()

    def _refresh_all(self) -> None:
        self._refresh_dishes()
        self._refresh_status()

    def _visible_rows(self, widget: Static) -> int:
        height = widget.size.height
        if height <= 0:
            return 16
        return max(1, height)

    def _window_bounds(self, total: int, rows: int, selected: int | None) -> tuple[int, int]:
        if total <= 0:
            return (0, 0)

        rows = max(1, rows)
        if total <= rows:
            return (0, total)

        if selected is None:
            start = 0
        else:
            start = max(0, selected - rows // 2)
            start = min(start, total - rows)

        return (start, start + rows)

    def _list_lines(self) -> list[tuple[Text, int | None]]:
        lines: list[tuple[Text, int | None]] = []
        dish_idx = 0
        for category, group in group_by_category(self.store.dishes):
            lines.append((format_category_header(category, len(group)), None))
            if not group:
                lines.append((Text("    (none)", style="dim"), None))
            for dish in group:
                pointer = "➤ " if dish_idx == self.selected_index else "  "
                row = Text(f"  {pointer}")
                row.append_text(format_dish_label(dish))
                lines.append((row, dish_idx))
                dish_idx += 1
        return lines

    def _refresh_dishes(self) -> None:
        try:
            dishes_widget = self.query_one("#dishes-list", Static)
        except NoMatches:
            return

        total = len(self.store.dishes)
        if total == 0:
            self.selected_index = None
        elif self.selected_index is not None and self.selected_index >= total:
            self.selected_index = total - 1

        lines = self._list_lines()
        selected_line = next(
            (pos for pos, (_, idx) in enumerate(lines) if idx is not None and idx == self.selected_index),
            None,
        )
        start, end = self._window_bounds(len(lines), self._visible_rows(dishes_widget), selected_line)

        text = Text()
        if start > 0:
            text.append("⋮\n", style="dim")
        for pos in range(start, end):
            if pos > start:
                text.append("\n")
            text.append_text(lines[pos][0])
        if end < len(lines):
            text.append("\n⋮", style="dim")

        dishes_widget.update(text)

    def _refresh_status(self) -> None:
        try:
            bar = self.query_one("#status-bar", Static)
        except NoMatches:
            return
        count = len(self.store.dishes)
        status = self.system_status or f"{count} dish{'es' if count != 1 else ''}"
        bar.update(f"A add dish, ↑/↓ or J/K move, Enter details, Ctrl+Q quit.\n{status}")
