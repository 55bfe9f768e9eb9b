"""Meal customization modal screen."""

from __future__ import annotations

import logging

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Static

from mealpos.constant import CATEGORY_NOUNS, CATEGORY_ORDER
from mealpos.data import filter_by_allergens, filter_by_query, items_for_category
from mealpos.models import MealType, MenuItem, OrderLine
from mealpos.rendering import format_menu_row, format_price, format_selection_header
from mealpos.selection import MealSelection

logger = logging.getLogger(__name__)


class MealEditorModal(ModalScreen[OrderLine | None]):
    """Pick entrees, sides and a drink for one order line."""

    BINDINGS = [
        ("escape", "close", "Cancel"),
        ("q", "close", "Cancel"),
        ("ctrl+c", "close", "Cancel"),
        ("j", "move_cursor(1)", "Next"),
        ("k", "move_cursor(-1)", "Previous"),
        ("up", "move_cursor(-1)", "Previous"),
        ("down", "move_cursor(1)", "Next"),
        ("enter", "click_current", "Select"),
        ("space", "click_current", "Select"),
        ("slash", "start_search", "Search"),
        ("a", "commit", "Add / Update"),
    ]

    CSS = """
    MealEditorModal {
        align: center middle;
        background: $background 60%;
    }

    #editor-dialog {
        width: 72;
        height: auto;
        max-height: 90%;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #editor-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #editor-body {
        color: white;
    }

    #editor-status {
        margin-top: 1;
        color: #ffb3b3;
    }

    #editor-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    cursor_index = reactive(0)

    def __init__(
        self,
        meal_type: MealType,
        menu_items: list[MenuItem],
        line: OrderLine | None = None,
        excluded_allergens: set[str] | None = None,
    ) -> None:
        super().__init__()
        self.menu_items = list(menu_items)
        self.excluded_allergens = set(excluded_allergens or set())
        self.editing = line is not None
        if line is not None and line.meal_type.meal_type_id == meal_type.meal_type_id:
            self.meal_selection = MealSelection.from_line(line)
        else:
            self.meal_selection = MealSelection.start(meal_type)
        self.search_query = ""
        self.typing_query = False
        self.status_message = ""

    def compose(self) -> ComposeResult:
        with Container(id="editor-dialog"):
            yield Static(id="editor-title")
            yield Static(id="editor-body")
            yield Static(id="editor-status")
            yield Static(id="editor-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        if not self.typing_query:
            return

        if event.key == "escape":
            self.typing_query = False
            self.search_query = ""
            self.cursor_index = 0
            self._refresh_content()
            event.stop()
            return

        if event.key == "enter":
            self.typing_query = False
            self._refresh_content()
            event.stop()
            return

        if event.key == "backspace":
            if self.search_query:
                self.search_query = self.search_query[:-1]
            self.cursor_index = 0
            self._refresh_content()
            event.stop()
            return

        if event.is_printable and event.character:
            self.search_query += event.character
            self.cursor_index = 0
            self._refresh_content()
            event.stop()
            return

        # Ignore all non-text keys while typing.
        event.stop()

    def rows(self) -> list[MenuItem]:
        """Clickable items in display order: entrees, sides, then drinks.

        Items already in the selection stay listed even when the allergen
        filter or the search would hide them, so they can be clicked off.
        """
        matching = filter_by_allergens(self.menu_items, self.excluded_allergens)
        shown = {item.menu_item_id for item in filter_by_query(matching, self.search_query)}
        visible = [item for item in self.menu_items if item.menu_item_id in shown or self.meal_selection.count(item) > 0]
        rows: list[MenuItem] = []
        for item_type in CATEGORY_ORDER:
            if self.meal_selection.meal_type.capacity_for(item_type) <= 0:
                continue
            rows.extend(items_for_category(visible, item_type))
        return rows

    def action_close(self) -> None:
        if self.typing_query:
            self.typing_query = False
            self.search_query = ""
            self._refresh_content()
            return
        self.dismiss(None)

    def action_move_cursor(self, delta: int) -> None:
        if self.typing_query:
            return
        rows = self.rows()
        if not rows:
            return
        self.cursor_index = (self.cursor_index + delta) % len(rows)
        self._refresh_content()

    def action_click_current(self) -> None:
        rows = self.rows()
        if not rows:
            return
        self.click_item(rows[self.cursor_index])

    def click_item(self, item: MenuItem) -> None:
        self.meal_selection = self.meal_selection.click(item)
        self.status_message = ""
        self._refresh_content()

    def action_start_search(self) -> None:
        self.typing_query = True
        self._refresh_content()

    def action_commit(self) -> None:
        if not self.meal_selection.can_commit():
            parts = []
            for item_type, count in self.meal_selection.missing().items():
                singular, plural = CATEGORY_NOUNS[item_type]
                parts.append(f"{count} more {singular if count == 1 else plural}")
            missing = ", ".join(parts)
            self.status_message = f"Pick {missing} first"
            self._refresh_content()
            return
        line = self.meal_selection.commit()
        logger.debug(
            "meal committed meal_type=%s entrees=%d sides=%d drink=%s",
            line.meal_type.meal_type_id,
            len(line.entrees),
            len(line.sides),
            line.drink.menu_item_id if line.drink else None,
        )
        self.dismiss(line)

    def _refresh_content(self) -> None:
        title = self.query_one("#editor-title", Static)
        body = self.query_one("#editor-body", Static)
        status = self.query_one("#editor-status", Static)
        help_text = self.query_one("#editor-help", Static)

        meal_type = self.meal_selection.meal_type
        verb = "Update" if self.editing else "Customize"
        title.update(f"{verb} {meal_type.meal_type_name}")

        rows = self.rows()
        if self.cursor_index >= len(rows):
            self.cursor_index = max(0, len(rows) - 1)

        content = Text(style="white")
        if self.search_query or self.typing_query:
            cursor = "|" if self.typing_query else ""
            content.append(f"Search: {self.search_query}{cursor}\n\n", style="bold")

        current_type = None
        for idx, item in enumerate(rows):
            if item.item_type != current_type:
                if current_type is not None:
                    content.append("\n\n")
                current_type = item.item_type
                content.append(format_selection_header(self.meal_selection, current_type), style="bold underline")
            content.append("\n")
            content.append("➤ " if idx == self.cursor_index else "  ")
            content.append_text(format_menu_row(item, self.meal_selection, self.excluded_allergens))
        if not rows:
            content.append("No matching items")

        content.append(f"\n\nPrice: {format_price(self.meal_selection.preview().price)}", style="bold")
        if self.meal_selection.can_commit():
            content.append("   ready", style="bold #5fbf72")

        body.update(content)
        status.update(self.status_message)
        if self.typing_query:
            help_text.update("Type to filter, Enter keep, Esc clear")
        else:
            action = "update" if self.editing else "add"
            help_text.update(f"J/K/↑/↓ move, Enter select, / search, A {action}, Esc cancel")
