from __future__ import annotations

from datetime import datetime

import pytest

from conftest import NOON, make_item
from mealpos.data import (
    MEAL_TYPES,
    MEAL_TYPES_BY_ID,
    MENU_ITEMS,
    MENU_ITEMS_BY_ID,
    all_allergens,
    available_menu_items,
    combo_meal_types,
    drink_meal_types,
    filter_by_allergens,
    filter_by_query,
    find_staff,
    is_within_availability_window,
    items_for_category,
    offered_menu_items,
    order_signers,
)


def _at(hour: int, minute: int = 0) -> datetime:
    return datetime(2026, 10, 19, hour, minute)


@pytest.mark.parametrize(
    ("start", "end", "now", "expected"),
    [
        (None, None, _at(3), True),
        ("08:00", None, _at(3), True),
        ("08:00", "18:00", _at(8), True),
        ("08:00", "18:00", _at(18), True),
        ("08:00", "18:00", _at(18, 1), False),
        ("08:00:00", "18:00:00", _at(7, 59), False),
        ("22:00", "02:00", _at(23, 30), True),
        ("22:00", "02:00", _at(1, 15), True),
        ("22:00", "02:00", _at(12), False),
    ],
)
def test_availability_window(start, end, now, expected):
    assert is_within_availability_window(start, end, now) is expected


def test_available_menu_items_filters_flag_window_and_stock():
    items = [
        make_item(1, "Ready"),
        make_item(2, "Sold out", stock=0),
        make_item(3, "Pulled", is_available=False),
        make_item(4, "Breakfast", availability_start_time="06:00", availability_end_time="10:30"),
    ]
    assert [item.name for item in available_menu_items(items, NOON)] == ["Ready"]
    assert [item.name for item in offered_menu_items(items, NOON)] == ["Ready", "Sold out"]
    assert [item.name for item in available_menu_items(items, _at(9))] == ["Ready", "Breakfast"]


def test_catalog_lookups_are_consistent():
    assert len(MENU_ITEMS_BY_ID) == len(MENU_ITEMS)
    assert len(MEAL_TYPES_BY_ID) == len(MEAL_TYPES)
    assert MENU_ITEMS_BY_ID[1].name == "Orange Chicken"
    assert MEAL_TYPES_BY_ID[1].entree_count == 1
    assert MEAL_TYPES_BY_ID[1].side_count == 2


def test_drink_meal_types_are_listed_apart():
    drinks = drink_meal_types()
    assert [meal_type.meal_type_id for meal_type in drinks] == [13, 14, 15]
    assert all(meal_type.meal_type_id not in (13, 14, 15) for meal_type in combo_meal_types())


def test_items_for_category_and_query():
    sides = items_for_category(MENU_ITEMS, "side")
    assert all(item.item_type == "side" for item in sides)
    assert [item.name for item in filter_by_query(sides, "  CHOW ")] == ["Chow Mein", "Chow Fun"]
    assert filter_by_query(sides, "") == sides


def test_allergen_filter_is_case_insensitive():
    items = [
        make_item(1, "Shrimp", allergens=("Shellfish", "egg")),
        make_item(2, "Rice"),
        make_item(3, "Noodles", allergens=("wheat",)),
    ]
    assert [item.name for item in filter_by_allergens(items, {"shellfish"})] == ["Rice", "Noodles"]
    assert filter_by_allergens(items, set()) == items
    assert all_allergens(items) == ["Shellfish", "egg", "wheat"]


def test_staff_roster_lookups():
    assert find_staff(42).display_name == "Jamie Chen"
    assert find_staff(5) is None
    assert not find_staff(1).can_sign_orders
    assert [member.username for member in order_signers()] == ["mlopez", "jchen", "asmith"]
