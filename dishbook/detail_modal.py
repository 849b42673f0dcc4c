"""Read-only dish detail screen."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Static

from dishbook.models import Dish
from dishbook.rendering import format_dish_detail


class DishDetailModal(ModalScreen[None]):
    """Centered modal showing every field of one dish."""

    BINDINGS = [
        ("escape", "close", "Close"),
        ("q", "close", "Close"),
    ]

    CSS = """
    DishDetailModal {
        align: center middle;
        background: $background 60%;
    }

    #detail-dialog {
        width: 80;
        height: 80%;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #detail-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #detail-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    def __init__(self, dish: Dish) -> None:
        super().__init__()
        self.dish = dish

    def compose(self) -> ComposeResult:
        with Container(id="detail-dialog"):
            yield Static("Dish Details", id="detail-title")
            with VerticalScroll(id="detail-scroll"):
                yield Static(format_dish_detail(self.dish), id="detail-body")
            yield Static("Esc/q close", id="detail-help")

    def action_close(self) -> None:
        self.dismiss()
