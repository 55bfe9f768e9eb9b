"""Main Textual app class shared by the kiosk and cashier surfaces."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Literal

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Header, Static

from mealpos import config
from mealpos.allergen_modal import AllergenFilterModal
from mealpos.cart import Cart
from mealpos.data import MEAL_TYPES, MENU_ITEMS, all_allergens, combo_meal_types, drink_meal_types, offered_menu_items
from mealpos.meal_editor import MealEditorModal
from mealpos.models import MealType, MenuItem, OrderLine, StaffMember
from mealpos.persistence import bootstrap_schema, list_active_orders, save_order, update_order_status
from mealpos.printer import check_printer_dependencies, print_order_ticket
from mealpos.rendering import format_meal_type, format_order_line, format_price
from mealpos.staff_modal import StaffSignInModal

logger = logging.getLogger(__name__)

Surface = Literal["kiosk", "cashier"]


class PosApp(App):
    """Order entry for combo meals: pick a meal type, customize it, submit."""

    TITLE = "Meal POS"

    CSS = """
    Screen {
        layout: vertical;
    }

    #main-layout {
        height: 1fr;
    }

    #cart-pane {
        width: 3fr;
        border: round $primary;
        padding: 1;
    }

    #meal-types-pane {
        width: 2fr;
        border: round $secondary;
        padding: 1;
    }

    #status-bar {
        border: heavy $secondary;
        padding: 0 1;
        margin-bottom: 1;
        height: 4;
    }

    #meal-types {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #cart-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #cart-total {
        text-style: bold;
        margin-top: 1;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    selected_index = reactive(0)
    cart_selected_index = reactive(None)

    BINDINGS = [
        ("up", "cycle_meal_types(-1)", "Previous meal"),
        ("down", "cycle_meal_types(1)", "Next meal"),
        ("enter", "open_selected_meal_type", "Customize"),
        ("j", "move_cart_selection(1)", "Next line"),
        ("k", "move_cart_selection(-1)", "Previous line"),
        ("e", "edit_selected_line", "Edit line"),
        ("d", "delete_selected_line", "Delete line"),
        ("f", "open_allergen_filter", "Allergens"),
        Binding("ctrl+s", "submit_order", "Submit", priority=True),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        surface: Surface = "kiosk",
        clock: Callable[[], datetime] = datetime.now,
        menu_items: list[MenuItem] | None = None,
        meal_types: list[MealType] | None = None,
    ) -> None:
        super().__init__()
        self.surface = surface
        self.clock = clock
        self.menu_items = list(menu_items if menu_items is not None else MENU_ITEMS)
        all_meal_types = meal_types if meal_types is not None else MEAL_TYPES
        self.meal_types = combo_meal_types(all_meal_types) + drink_meal_types(all_meal_types)
        self.cart = Cart()
        self.excluded_allergens: set[str] = set()
        self.last_staff_id: int | None = None
        self.system_status = ""
        self.sub_title = "Cashier" if surface == "cashier" else "Customer Kiosk"
        self._log_debug(f"app_init surface={surface}")

    def _log_debug(self, message: str) -> None:
        logger.debug(message)

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            with Vertical(id="cart-pane"):
                yield Static("Your Order" if self.surface == "kiosk" else "Current Order", classes="pane-title")
                yield Static("(no items yet)", id="cart-list")
                yield Static(id="cart-total")
            with Vertical(id="meal-types-pane"):
                yield Static(id="status-bar")
                yield Static(id="meal-types")

    def on_mount(self) -> None:
        bootstrap_schema()
        if self.surface == "cashier":
            _, msg = check_printer_dependencies()
            self.system_status = msg
            self._log_debug(f"on_mount printer_status={msg!r}")
        self._refresh_all()

    def current_menu(self) -> list[MenuItem]:
        """Items on offer right now; out-of-stock items stay listed but disabled."""
        return offered_menu_items(self.menu_items, self.clock())

    def action_cycle_meal_types(self, delta: int) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        if not self.meal_types:
            return
        self.selected_index = (self.selected_index + delta) % len(self.meal_types)
        self._refresh_meal_types()

    def action_open_selected_meal_type(self) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        if not self.meal_types:
            return
        self.open_editor(self.meal_types[self.selected_index])

    def open_editor(self, meal_type: MealType, edit_index: int | None = None) -> None:
        line = self.cart[edit_index] if edit_index is not None else None
        excluded = self.excluded_allergens if self.surface == "kiosk" else set()
        modal = MealEditorModal(meal_type, self.current_menu(), line=line, excluded_allergens=excluded)

        def on_done(result: OrderLine | None) -> None:
            self._on_editor_done(result, edit_index)

        self.push_screen(modal, on_done)

    def _on_editor_done(self, result: OrderLine | None, edit_index: int | None) -> None:
        if result is None:
            return
        if edit_index is None:
            self.cart_selected_index = self.cart.add(result)
            self._log_debug(f"line_added meal_type={result.meal_type.meal_type_id} rows={len(self.cart)}")
        else:
            self.cart.replace(edit_index, result)
            self.cart_selected_index = edit_index
            self._log_debug(f"line_updated index={edit_index}")
        self._refresh_cart()

    def action_edit_selected_line(self) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        line = self._selected_line()
        if line is None:
            return
        self.open_editor(line.meal_type, edit_index=self.cart_selected_index)

    def action_move_cart_selection(self, delta: int) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        if not len(self.cart):
            return

        if self.cart_selected_index is None:
            self.cart_selected_index = 0 if delta > 0 else len(self.cart) - 1
        else:
            self.cart_selected_index = (self.cart_selected_index + delta) % len(self.cart)
        self._refresh_cart()

    def action_delete_selected_line(self) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        if not len(self.cart) or self.cart_selected_index is None:
            return

        idx = self.cart_selected_index
        if not (0 <= idx < len(self.cart)):
            self.cart_selected_index = None
            self._refresh_cart()
            return

        self.cart.remove(idx)

        if not len(self.cart):
            self.cart_selected_index = None
        else:
            self.cart_selected_index = min(idx, len(self.cart) - 1)

        self._refresh_cart()

    def action_open_allergen_filter(self) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        if self.surface != "kiosk":
            return
        allergens = all_allergens(self.current_menu())
        self.push_screen(AllergenFilterModal(allergens, self.excluded_allergens, on_change=self._refresh_all))

    def action_submit_order(self) -> None:
        self._log_debug(f"submit_enter rows={len(self.cart)} screen={type(self.screen).__name__}")
        if isinstance(self.screen, ModalScreen):
            self._log_debug("submit_blocked reason=modal_open")
            return
        if not len(self.cart):
            self.system_status = "Nothing to submit"
            self._refresh_status()
            self._log_debug("submit_blocked reason=no_rows")
            return

        if self.surface == "cashier":
            self.push_screen(StaffSignInModal(default=self.last_staff_id), self._on_staff_signed_in)
            return
        self.submit(config.DEFAULT_STAFF_ID)

    def _on_staff_signed_in(self, member: StaffMember | None) -> None:
        if member is None:
            self.system_status = "Submit cancelled"
            self._refresh_status()
            self._log_debug("submit_cancelled reason=no_staff")
            return
        self.last_staff_id = member.staff_id
        self._log_debug(f"submit_signed staff_id={member.staff_id} username={member.username}")
        self.submit(member.staff_id)

    def submit(self, staff_id: int) -> None:
        """Save the cart as one order; the cashier surface also prints it."""
        try:
            saved = save_order(self.cart.lines, staff_id=staff_id, source=self.surface)
        except ValueError as exc:
            self.system_status = f"Cannot submit: {exc}"
            self._refresh_status()
            logger.warning("submit_rejected error=%s", exc)
            return
        self._log_debug(f"submit_saved order_id={saved.order_id} rows={len(saved.lines)}")

        if self.surface == "cashier":
            try:
                print_order_ticket(saved.lines, saved.order_id)
            except Exception as exc:
                update_order_status(saved.order_id, "print_failed")
                self.system_status = f"Saved #{saved.order_id} but print failed: {exc}"
                self._refresh_status()
                logger.error("submit_print_failed order_id=%s error=%r", saved.order_id, exc)
                return

        self.cart.clear()
        self.cart_selected_index = None
        self.system_status = f"Order #{saved.order_id} placed: {format_price(saved.price)}"
        self._refresh_all()
        self._log_debug(f"submit_done order_id={saved.order_id}")

    def _refresh_all(self) -> None:
        self._refresh_cart()
        self._refresh_status()
        self._refresh_meal_types()

    def _selected_line(self) -> OrderLine | None:
        if self.cart_selected_index is None:
            return None
        if not (0 <= self.cart_selected_index < len(self.cart)):
            return None
        return self.cart[self.cart_selected_index]

    def _main_widget(self, selector: str) -> Static:
        # Modals sit on top of the stack; the panes live on the base screen.
        return self.screen_stack[0].query_one(selector, Static)

    def _visible_rows(self, widget: Static) -> int:
        height = widget.size.height
        if height <= 0:
            return 8
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

    def _refresh_cart(self) -> None:
        try:
            cart_widget = self._main_widget("#cart-list")
            total_widget = self._main_widget("#cart-total")
        except NoMatches:
            return
        total_widget.update(f"Total: {format_price(self.cart.total)}")
        if not len(self.cart):
            self.cart_selected_index = None
            cart_widget.update("(no items yet)")
            return

        if self.cart_selected_index is not None and self.cart_selected_index >= len(self.cart):
            self.cart_selected_index = len(self.cart) - 1

        lines = Text()
        for idx, line in enumerate(self.cart):
            if idx > 0:
                lines.append("\n")
            pointer = "➤ " if idx == self.cart_selected_index else "  "
            lines.append(pointer)
            lines.append(f"{idx + 1}. ")
            lines.append_text(format_order_line(line))

        cart_widget.update(lines)

    def _refresh_status(self) -> None:
        try:
            bar = self._main_widget("#status-bar")
        except NoMatches:
            return
        help_line = "↑/↓ meal, Enter customize, J/K line, E edit, D delete, Ctrl+S submit"
        if self.surface == "kiosk":
            help_line += ", F allergens"
        status = self.system_status or "Ready"
        if self.excluded_allergens:
            status += f" | hiding: {', '.join(sorted(self.excluded_allergens))}"
        if self.surface == "cashier":
            status += f" | active orders: {len(list_active_orders())}"
        bar.update(f"{help_line}\n{status}")

    def _refresh_meal_types(self) -> None:
        try:
            widget = self._main_widget("#meal-types")
        except NoMatches:
            return
        if not self.meal_types:
            widget.update("No meal types")
            return

        if self.selected_index >= len(self.meal_types):
            self.selected_index = 0

        visible_rows = self._visible_rows(widget)
        start, end = self._window_bounds(len(self.meal_types), visible_rows, self.selected_index)

        lines = Text()
        if start > 0:
            lines.append("⋮\n", style="dim")

        for idx in range(start, end):
            if idx > start:
                lines.append("\n")
            lines.append("➤ " if idx == self.selected_index else "  ")
            lines.append_text(format_meal_type(self.meal_types[idx]))

        if end < len(self.meal_types):
            lines.append("\n⋮", style="dim")

        widget.update(lines)
