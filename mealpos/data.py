"""Static menu data and availability filtering."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable

from mealpos.constant import MEAL_TYPE_ROWS, MENU_ITEM_ROWS, STAFF_ROWS
from mealpos.models import MealType, MenuItem, StaffMember


def _menu_item_from_row(menu_item_id: int, row: dict[str, object]) -> MenuItem:
    return MenuItem(
        menu_item_id=menu_item_id,
        name=str(row["name"]),
        item_type=row["item_type"],  # type: ignore[arg-type]
        upcharge=float(row.get("upcharge", 0.0)),  # type: ignore[arg-type]
        is_available=bool(row.get("is_available", True)),
        availability_start_time=row.get("availability_start_time"),  # type: ignore[arg-type]
        availability_end_time=row.get("availability_end_time"),  # type: ignore[arg-type]
        allergens=tuple(row.get("allergens", ())),  # type: ignore[arg-type]
        stock=int(row.get("stock", 0)),  # type: ignore[arg-type]
    )


MENU_ITEMS: list[MenuItem] = [_menu_item_from_row(item_id, row) for item_id, row in MENU_ITEM_ROWS.items()]

MENU_ITEMS_BY_ID: dict[int, MenuItem] = {item.menu_item_id: item for item in MENU_ITEMS}

MEAL_TYPES: list[MealType] = [
    MealType(
        meal_type_id=meal_type_id,
        meal_type_name=str(row["meal_type_name"]),
        meal_type_price=float(row["meal_type_price"]),  # type: ignore[arg-type]
        entree_count=int(row["entree_count"]),  # type: ignore[arg-type]
        side_count=int(row["side_count"]),  # type: ignore[arg-type]
        drink_size=row["drink_size"],  # type: ignore[arg-type]
    )
    for meal_type_id, row in MEAL_TYPE_ROWS.items()
]

MEAL_TYPES_BY_ID: dict[int, MealType] = {meal_type.meal_type_id: meal_type for meal_type in MEAL_TYPES}


def combo_meal_types(meal_types: Iterable[MealType] = MEAL_TYPES) -> list[MealType]:
    """Meal types offered on the main selection list."""
    return [meal_type for meal_type in meal_types if not meal_type.is_drink_only]


def drink_meal_types(meal_types: Iterable[MealType] = MEAL_TYPES) -> list[MealType]:
    return [meal_type for meal_type in meal_types if meal_type.is_drink_only]


def _minutes_since_midnight(value: str) -> int:
    parts = value.split(":")
    hours = int(parts[0] or 0)
    minutes = int(parts[1] or 0) if len(parts) > 1 else 0
    return hours * 60 + minutes


def is_within_availability_window(start: str | None, end: str | None, now: datetime) -> bool:
    """
    Check whether ``now`` falls inside an item's time-of-day window.

    Both ends are inclusive and compared at minute resolution. A window whose
    start is later than its end crosses midnight (22:00-02:00). An item with
    either end missing has no restriction.
    """
    if not start or not end:
        return True

    current = now.hour * 60 + now.minute
    start_minutes = _minutes_since_midnight(start)
    end_minutes = _minutes_since_midnight(end)

    if start_minutes > end_minutes:
        return current >= start_minutes or current <= end_minutes
    return start_minutes <= current <= end_minutes


def is_offered(item: MenuItem, now: datetime) -> bool:
    """Return whether an item is on the menu right now, ignoring stock."""
    if not item.is_available:
        return False
    return is_within_availability_window(item.availability_start_time, item.availability_end_time, now)


def available_menu_items(items: Iterable[MenuItem], now: datetime) -> list[MenuItem]:
    """Customer-facing menu: available, inside the time window and in stock."""
    return [item for item in items if is_offered(item, now) and item.stock > 0]


def offered_menu_items(items: Iterable[MenuItem], now: datetime) -> list[MenuItem]:
    """Menu as shown on screen: out-of-stock items stay listed but disabled."""
    return [item for item in items if is_offered(item, now)]


def items_for_category(items: Iterable[MenuItem], item_type: str) -> list[MenuItem]:
    return [item for item in items if item.item_type == item_type]


def filter_by_query(items: Iterable[MenuItem], query: str) -> list[MenuItem]:
    """Case-insensitive substring match on the item name."""
    q = query.strip().lower()
    if not q:
        return list(items)
    return [item for item in items if q in item.name.lower()]


def _normalize_allergen(allergen: str) -> str:
    return allergen.strip().lower()


def filter_by_allergens(items: Iterable[MenuItem], excluded: Iterable[str]) -> list[MenuItem]:
    """Drop items that contain any excluded allergen."""
    blocked = {_normalize_allergen(allergen) for allergen in excluded}
    if not blocked:
        return list(items)
    return [
        item for item in items if not any(_normalize_allergen(allergen) in blocked for allergen in item.allergens)
    ]


def all_allergens(items: Iterable[MenuItem]) -> list[str]:
    found: set[str] = set()
    for item in items:
        found.update(item.allergens)
    return sorted(found)


STAFF: list[StaffMember] = [
    StaffMember(
        staff_id=staff_id,
        username=row["username"],
        display_name=row["display_name"],
        role=row["role"],  # type: ignore[arg-type]
    )
    for staff_id, row in STAFF_ROWS.items()
]

STAFF_BY_ID: dict[int, StaffMember] = {member.staff_id: member for member in STAFF}


def find_staff(staff_id: int) -> StaffMember | None:
    return STAFF_BY_ID.get(staff_id)


def order_signers(staff: Iterable[StaffMember] = STAFF) -> list[StaffMember]:
    """Roster entries allowed to sign orders at the counter, by id."""
    return sorted((member for member in staff if member.can_sign_orders), key=lambda member: member.staff_id)
