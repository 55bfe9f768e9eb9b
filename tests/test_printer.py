from __future__ import annotations

import pytest

from mealpos import printer
from mealpos.models import OrderLine
from mealpos.printer import TicketRow, resolve_printer_font_path, ticket_rows


def test_identical_meals_are_grouped(bowl, kids_meal, orange_chicken, beijing_beef, fried_rice, chow_mein, lemonade):
    lines = [
        OrderLine(meal_type=bowl, entrees=[orange_chicken], sides=[fried_rice, chow_mein]),
        OrderLine(meal_type=kids_meal, entrees=[beijing_beef], sides=[fried_rice], drink=lemonade),
        OrderLine(meal_type=bowl, entrees=[orange_chicken], sides=[chow_mein, fried_rice]),
    ]
    rows = ticket_rows(lines)
    assert [row.title for row in rows] == ["2x Bowl", "Kids Meal"]
    assert rows[0].item_lines == ["  Orange Chicken", "  Fried Rice", "  Chow Mein"]
    assert rows[1].item_lines == ["  Beijing Beef", "  Fried Rice", "  Small Lemonade"]


def test_repeated_items_are_counted(bowl, orange_chicken, fried_rice):
    rows = ticket_rows([OrderLine(meal_type=bowl, entrees=[orange_chicken], sides=[fried_rice, fried_rice])])
    assert rows == [TicketRow(label="Bowl", count=1, item_lines=["  Orange Chicken", "  2x Fried Rice"])]


def test_font_override_from_environment(tmp_path, monkeypatch):
    font = tmp_path / "ticket.ttf"
    font.write_bytes(b"")
    monkeypatch.setenv("MEALPOS_PRINTER_FONT_PATH", str(font))
    assert resolve_printer_font_path() == str(font)


def test_missing_font_raises(monkeypatch, tmp_path):
    monkeypatch.delenv("MEALPOS_PRINTER_FONT_PATH", raising=False)
    monkeypatch.setattr(printer, "PRINTER_FONT_PATH", str(tmp_path / "missing.ttf"))
    monkeypatch.setattr(printer, "_LINUX_FONT_FALLBACKS", ())
    with pytest.raises(RuntimeError, match="MEALPOS_PRINTER_FONT_PATH"):
        resolve_printer_font_path()


def test_empty_ticket_prints_nothing():
    printer.print_order_ticket([], order_id=1)
