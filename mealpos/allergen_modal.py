"""Allergen filter modal screen."""

from __future__ import annotations

from typing import Callable

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Static


class AllergenFilterModal(ModalScreen[None]):
    """Centered modal to toggle which allergens hide menu items."""

    BINDINGS = [
        ("escape", "close", "Close"),
        ("q", "close", "Close"),
        ("ctrl+c", "close", "Close"),
        ("j", "move_cursor(1)", "Next"),
        ("k", "move_cursor(-1)", "Previous"),
        ("up", "move_cursor(-1)", "Previous"),
        ("down", "move_cursor(1)", "Next"),
        ("enter", "toggle_current", "Toggle"),
        ("c", "clear_all", "Clear"),
    ]

    CSS = """
    AllergenFilterModal {
        align: center middle;
        background: $background 60%;
    }

    #allergen-dialog {
        width: 48;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #allergen-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #allergen-body {
        color: white;
    }

    #allergen-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    cursor_index = reactive(0)

    def __init__(self, allergens: list[str], excluded: set[str], on_change: Callable[[], None]) -> None:
        super().__init__()
        self.allergens = list(allergens)
        self.excluded = excluded
        self.on_change = on_change

    def compose(self) -> ComposeResult:
        with Container(id="allergen-dialog"):
            yield Static("Hide items containing", id="allergen-title")
            yield Static(id="allergen-body")
            yield Static("J/K/↑/↓ move, Enter toggle, C clear, Esc/q close", id="allergen-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def action_close(self) -> None:
        self.dismiss()
        self.on_change()

    def action_move_cursor(self, delta: int) -> None:
        if not self.allergens:
            return
        self.cursor_index = (self.cursor_index + delta) % len(self.allergens)
        self._refresh_content()

    def action_toggle_current(self) -> None:
        if not self.allergens:
            return
        allergen = self.allergens[self.cursor_index]
        if allergen in self.excluded:
            self.excluded.remove(allergen)
        else:
            self.excluded.add(allergen)
        self._refresh_content()

    def action_clear_all(self) -> None:
        self.excluded.clear()
        self._refresh_content()

    def _refresh_content(self) -> None:
        body = self.query_one("#allergen-body", Static)
        if not self.allergens:
            body.update("No allergens listed on the menu")
            return

        content = Text(style="white")
        for idx, allergen in enumerate(self.allergens):
            if idx > 0:
                content.append("\n")
            pointer = "➤ " if idx == self.cursor_index else "  "
            is_checked = allergen in self.excluded
            checked = "[x]" if is_checked else "[ ]"
            content.append(f"{pointer}{checked} {allergen}", style="bold white" if is_checked else "white")
        body.update(content)
