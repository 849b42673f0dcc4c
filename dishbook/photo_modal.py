"""Photo path entry modal screen."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static


class PhotoPathModal(ModalScreen[str | None]):
    """Prompt for the image file to attach to a dish."""

    CSS = """
    PhotoPathModal {
        align: center middle;
        background: $background 60%;
    }

    #photo-dialog {
        width: 72;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #photo-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #photo-value {
        border: heavy $secondary;
        padding: 0 1;
        color: white;
        margin-bottom: 1;
    }

    #photo-error {
        color: #ffb3b3;
        margin-bottom: 1;
    }

    #photo-help {
        color: #dddddd;
    }
    """

    def __init__(self, initial: str = "") -> None:
        super().__init__()
        self.value = initial
        self.error = ""

    def compose(self) -> ComposeResult:
        with Container(id="photo-dialog"):
            yield Static("Select Photo", id="photo-title")
            yield Static(id="photo-value")
            yield Static(id="photo-error")
            yield Static("Type an image file path. Enter confirm. Backspace delete. Esc cancel.", id="photo-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        if event.key == "escape":
            self.dismiss(None)
            event.stop()
            return

        if event.key == "enter":
            self._confirm()
            event.stop()
            return

        if event.key == "backspace":
            if self.value:
                self.value = self.value[:-1]
                self.error = ""
                self._refresh_content()
            event.stop()
            return

        if event.is_printable and event.character:
            self.value += event.character
            self.error = ""
            self._refresh_content()
        event.stop()

    def _confirm(self) -> None:
        path = self.value.strip()
        if not path:
            self.error = "A file path is required."
            self._refresh_content()
            return
        self.dismiss(path)

    def _refresh_content(self) -> None:
        self.query_one("#photo-value", Static).update(f"{self.value}|")
        self.query_one("#photo-error", Static).update(self.error)
