"""Dish creation form screen."""

from __future__ import annotations

import logging

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Static
from textual.worker import Worker

from dishbook.form import DishForm
from dishbook.models import Dish
from dishbook.photo_modal import PhotoPathModal
from dishbook.picker import PickerConfig, describe_photo, pick_photo
from dishbook.rendering import badge_style
from dishbook.store import DishStore

logger = logging.getLogger(__name__)

_TEXT_ROWS = {
    "name": "Name",
    "description": "Description",
    "recipe": "Recipe",
    "duration": "Duration",
    "difficulty": "Difficulty",
}
_ROWS = ["name", "photo", "description", "recipe", "category", "duration", "difficulty", "save"]


class DishFormModal(ModalScreen[Dish | None]):
    """Collect dish fields and hand the new dish to the store."""

    CSS = """
    DishFormModal {
        align: center middle;
        background: $background 60%;
    }

    #form-dialog {
        width: 76;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #form-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #form-body {
        margin-bottom: 1;
        color: white;
    }

    #form-status {
        color: #ffb3b3;
    }

    #form-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    cursor_index = reactive(0)

    def __init__(self, store: DishStore, picker_config: PickerConfig | None = None) -> None:
        super().__init__()
        self.store = store
        self.picker_config = PickerConfig() if picker_config is None else picker_config
        self.form = DishForm()
        self.status = ""
        self._photo_worker: Worker[None] | None = None

    def compose(self) -> ComposeResult:
        with Container(id="form-dialog"):
            yield Static("Add Dish", id="form-title")
            yield Static(id="form-body")
            yield Static(id="form-status")
            yield Static(id="form-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        event.stop()
        row = _ROWS[self.cursor_index]

        if event.key == "escape":
            self.action_cancel()
            return
        if event.key == "ctrl+s":
            self.action_save()
            return
        if event.key == "up":
            self.cursor_index = (self.cursor_index - 1) % len(_ROWS)
            self._refresh_content()
            return
        if event.key == "down":
            self.cursor_index = (self.cursor_index + 1) % len(_ROWS)
            self._refresh_content()
            return

        if row == "category" and event.key in {"left", "right", "enter", "space"}:
            self.form.cycle_category(-1 if event.key == "left" else 1)
            self._refresh_content()
            return

        if event.key == "enter":
            if row == "photo":
                self.app.push_screen(PhotoPathModal(), self.load_photo_from)
            elif row == "save":
                self.action_save()
            else:
                self.cursor_index = (self.cursor_index + 1) % len(_ROWS)
                self._refresh_content()
            return

        if row not in _TEXT_ROWS:
            return

        value = getattr(self.form, row)
        if event.key == "backspace":
            setattr(self.form, row, value[:-1])
        elif event.is_printable and event.character:
            setattr(self.form, row, value + event.character)
        else:
            return
        self.status = ""
        self._refresh_content()

    def action_save(self) -> None:
        dish = self.form.submit(self.store)
        if dish is None:
            self.status = f"Missing: {', '.join(self.form.missing_fields())}"
            self._refresh_content()
            return
        self._cancel_photo_worker()
        self.dismiss(dish)

    def action_cancel(self) -> None:
        self.form.cancel()
        self._cancel_photo_worker()
        self.dismiss(None)

    def load_photo_from(self, path: str | None) -> None:
        """Start loading a photo from ``path`` in the background; None means the picker was dismissed."""
        if path is None or not self.form.is_editing:
            return
        self.status = "Loading photo..."
        self._refresh_content()
        self._photo_worker = self.run_worker(self._pick(path), group="photo", exclusive=True)

    async def _pick(self, path: str) -> None:
        applied = await self.form.pick_photo(pick_photo([path], self.picker_config))
        if not self.form.is_editing:
            return
        self.status = "" if applied else f"No image loaded from {path}"
        logger.debug("form_photo_pick path=%s applied=%s", path, applied)
        self._refresh_content()

    def _cancel_photo_worker(self) -> None:
        if self._photo_worker is not None and not self._photo_worker.is_finished:
            self._photo_worker.cancel()
        self._photo_worker = None

    def _refresh_content(self) -> None:
        body = Text(style="white")
        for idx, row in enumerate(_ROWS):
            if idx > 0:
                body.append("\n")
            pointer = "➤ " if idx == self.cursor_index else "  "
            body.append(pointer)

            if row in _TEXT_ROWS:
                value = getattr(self.form, row)
                body.append(f"{_TEXT_ROWS[row]}: ", style="bold")
                body.append(value)
                if idx == self.cursor_index:
                    body.append("|")
            elif row == "photo":
                body.append("Photo: ", style="bold")
                if self.form.photo is None:
                    body.append("Select Photo", style="dim")
                else:
                    body.append(describe_photo(self.form.photo))
            elif row == "category":
                body.append("Category: ", style="bold")
                body.append(f" {self.form.category.value} ", style=badge_style(self.form.category))
            else:
                save_style = "bold #0b1f0f on #5fbf72" if self.form.can_submit else "dim"
                body.append(" Save ", style=save_style)

        self.query_one("#form-body", Static).update(body)
        self.query_one("#form-status", Static).update(self.status)
        self.query_one("#form-help", Static).update(
            "↑/↓ move, type to edit, Enter select/next, ←/→ category, Ctrl+S save, Esc cancel"
        )
