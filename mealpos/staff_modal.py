"""Staff sign-in modal shown before a counter order is submitted."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

from mealpos.data import find_staff, order_signers
from mealpos.models import StaffMember

STAFF_ID_DIGITS = 4


class StaffSignInModal(ModalScreen[StaffMember | None]):
    """Pick the cashier or manager who signs the order, by id or from the roster."""

    BINDINGS = [
        ("escape", "close", "Cancel"),
        ("ctrl+c", "close", "Cancel"),
        ("up", "move_cursor(-1)", "Previous"),
        ("down", "move_cursor(1)", "Next"),
        ("enter", "confirm", "Sign"),
    ]

    CSS = """
    StaffSignInModal {
        align: center middle;
        background: $background 60%;
    }

    #staff-dialog {
        width: 52;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #staff-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #staff-roster {
        color: white;
        margin-bottom: 1;
    }

    #staff-match {
        border: heavy $secondary;
        padding: 0 1;
        color: white;
    }

    #staff-error {
        color: #ffb3b3;
    }

    #staff-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    def __init__(self, default: int | None = None, signers: list[StaffMember] | None = None) -> None:
        super().__init__()
        self.signers = signers if signers is not None else order_signers()
        self.typed_id = str(default) if default else ""
        self.error = ""

    def compose(self) -> ComposeResult:
        with Container(id="staff-dialog"):
            yield Static("Who is signing this order?", id="staff-title")
            yield Static(id="staff-roster")
            yield Static(id="staff-match")
            yield Static(id="staff-error")
            yield Static("Type an id or ↑/↓ pick. Enter sign, Backspace delete, Esc cancel", id="staff-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def matched(self) -> StaffMember | None:
        if not self.typed_id:
            return None
        return find_staff(int(self.typed_id))

    def on_key(self, event: Key) -> None:
        if event.key == "backspace":
            self.typed_id = self.typed_id[:-1]
            self.error = ""
            self._refresh_content()
            event.stop()
            return

        if event.is_printable and event.character and event.character.isdigit():
            if len(self.typed_id) < STAFF_ID_DIGITS:
                self.typed_id += event.character
            self.error = ""
            self._refresh_content()
            event.stop()

    def action_close(self) -> None:
        self.dismiss(None)

    def action_move_cursor(self, delta: int) -> None:
        if not self.signers:
            return
        ids = [member.staff_id for member in self.signers]
        current = self.matched()
        if current is not None and current.staff_id in ids:
            position = (ids.index(current.staff_id) + delta) % len(ids)
        else:
            position = 0 if delta > 0 else len(ids) - 1
        self.typed_id = str(ids[position])
        self.error = ""
        self._refresh_content()

    def action_confirm(self) -> None:
        if not self.typed_id:
            self.error = "Type a staff id or pick one from the list."
        else:
            member = self.matched()
            if member is None:
                self.error = f"No staff member has id {self.typed_id}."
            elif not member.can_sign_orders:
                self.error = f"{member.display_name} cannot sign counter orders."
            else:
                self.dismiss(member)
                return
        self._refresh_content()

    def _refresh_content(self) -> None:
        current = self.matched()
        roster = Text(style="white")
        for idx, member in enumerate(self.signers):
            if idx > 0:
                roster.append("\n")
            chosen = current is not None and current.staff_id == member.staff_id
            pointer = "➤ " if chosen else "  "
            roster.append(f"{pointer}{member.staff_id:>4}  {member.display_name}", style="bold white" if chosen else "white")
            roster.append(f"  {member.role.lower()}", style="dim")
        self.query_one("#staff-roster", Static).update(roster if self.signers else "Nobody on the roster can sign orders")

        if not self.typed_id:
            match = Text("Staff id: ", style="dim")
        elif current is None:
            match = Text(f"Staff id: {self.typed_id}  (unknown)", style="#ffb3b3")
        else:
            match = Text(f"Staff id: {self.typed_id}  {current.display_name}", style="bold white")
        self.query_one("#staff-match", Static).update(match)
        self.query_one("#staff-error", Static).update(self.error)
