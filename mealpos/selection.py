"""Meal customization selector shared by the kiosk and cashier surfaces."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from mealpos.models import MealType, MenuItem, OrderLine


class Direction(Enum):
    """Whether repeated clicks on an item currently add or remove copies."""

    ASCENDING = "ascending"
    DESCENDING = "descending"


class SelectionIncomplete(ValueError):
    """Raised when committing a meal whose counts do not match its meal type."""


def _freeze(directions: dict[int, Direction]) -> Mapping[int, Direction]:
    return MappingProxyType(dict(directions))


@dataclass(frozen=True)
class CategorySelection:
    """Selected items for one category (entree or side) of one order line."""

    selected: tuple[MenuItem, ...] = ()
    directions: Mapping[int, Direction] = field(default_factory=lambda: _freeze({}))

    def count(self, item: MenuItem) -> int:
        return sum(1 for chosen in self.selected if chosen.menu_item_id == item.menu_item_id)

    def direction(self, item: MenuItem) -> Direction | None:
        return self.directions.get(item.menu_item_id)

    def __len__(self) -> int:
        return len(self.selected)

    @classmethod
    def seeded(cls, items: list[MenuItem]) -> CategorySelection:
        """Build a state from an existing selection; every present item ascends."""
        return cls(
            selected=tuple(items),
            directions=_freeze({item.menu_item_id: Direction.ASCENDING for item in items}),
        )


def _without_first(selected: tuple[MenuItem, ...], item: MenuItem) -> tuple[MenuItem, ...]:
    for idx, chosen in enumerate(selected):
        if chosen.menu_item_id == item.menu_item_id:
            return selected[:idx] + selected[idx + 1 :]
    return selected


def apply_selection(state: CategorySelection, item: MenuItem, max_count: int) -> CategorySelection:
    """
    Apply one click on ``item`` and return the new category state.

    Repeated clicks on the same item cycle its count 0 -> 1 -> ... -> peak
    -> ... -> 0 where the peak is bounded by ``max_count`` and by the room
    left after other items. Clicks that cannot change anything return
    ``state`` unchanged.
    """
    item_id = item.menu_item_id
    item_count = state.count(item)
    total_count = len(state.selected)
    directions = dict(state.directions)

    if item_count == 0:
        if total_count >= max_count:
            return state
        directions[item_id] = Direction.ASCENDING
        return CategorySelection(selected=state.selected + (item,), directions=_freeze(directions))

    ascending = directions.get(item_id, Direction.ASCENDING) is Direction.ASCENDING
    if item_count < max_count and ascending:
        if total_count < max_count:
            return CategorySelection(selected=state.selected + (item,), directions=state.directions)
    return _remove_one(state, item, directions)


def _remove_one(state: CategorySelection, item: MenuItem, directions: dict[int, Direction]) -> CategorySelection:
    # An item with no copies left has no direction entry.
    if state.count(item) <= 1:
        directions.pop(item.menu_item_id, None)
    else:
        directions[item.menu_item_id] = Direction.DESCENDING
    return CategorySelection(selected=_without_first(state.selected, item), directions=_freeze(directions))


def toggle_drink(current: MenuItem | None, item: MenuItem) -> MenuItem | None:
    """Single-select toggle: the current drink deselects, any other replaces it."""
    if current is not None and current.menu_item_id == item.menu_item_id:
        return None
    return item


def is_selectable(item: MenuItem) -> bool:
    return item.is_available and item.stock > 0


@dataclass(frozen=True)
class MealSelection:
    """Everything chosen so far for the order line being edited."""

    meal_type: MealType
    entrees: CategorySelection = field(default_factory=CategorySelection)
    sides: CategorySelection = field(default_factory=CategorySelection)
    drink: MenuItem | None = None

    @classmethod
    def start(cls, meal_type: MealType) -> MealSelection:
        return cls(meal_type=meal_type)

    @classmethod
    def from_line(cls, line: OrderLine) -> MealSelection:
        """Seed the editor from a cart line so it can be updated in place."""
        return cls(
            meal_type=line.meal_type,
            entrees=CategorySelection.seeded(line.entrees),
            sides=CategorySelection.seeded(line.sides),
            drink=line.drink if line.meal_type.needs_drink else None,
        )

    def for_category(self, item_type: str) -> CategorySelection | None:
        if item_type == "entree":
            return self.entrees
        if item_type == "side":
            return self.sides
        return None

    def count(self, item: MenuItem) -> int:
        if item.item_type == "drink":
            return 1 if self.drink is not None and self.drink.menu_item_id == item.menu_item_id else 0
        state = self.for_category(item.item_type)
        return state.count(item) if state is not None else 0

    def click(self, item: MenuItem) -> MealSelection:
        """Apply one click; unselectable items and full categories are no-ops."""
        if not is_selectable(item):
            return self
        capacity = self.meal_type.capacity_for(item.item_type)
        if capacity <= 0:
            return self

        if item.item_type == "entree":
            return replace(self, entrees=apply_selection(self.entrees, item, capacity))
        if item.item_type == "side":
            return replace(self, sides=apply_selection(self.sides, item, capacity))
        if item.item_type == "drink":
            return replace(self, drink=toggle_drink(self.drink, item))
        return self

    def missing(self) -> dict[str, int]:
        """Return how many more picks each incomplete category needs."""
        missing: dict[str, int] = {}
        if len(self.entrees) != self.meal_type.entree_count:
            missing["entree"] = self.meal_type.entree_count - len(self.entrees)
        if len(self.sides) != self.meal_type.side_count:
            missing["side"] = self.meal_type.side_count - len(self.sides)
        if self.meal_type.needs_drink and self.drink is None:
            missing["drink"] = 1
        return missing

    def can_commit(self) -> bool:
        return not self.missing()

    def preview(self) -> OrderLine:
        """The line as it stands, complete or not."""
        return OrderLine(
            meal_type=self.meal_type,
            entrees=list(self.entrees.selected),
            sides=list(self.sides.selected),
            drink=self.drink,
        )

    def commit(self) -> OrderLine:
        if not self.can_commit():
            raise SelectionIncomplete(f"{self.meal_type.meal_type_name} is missing selections: {self.missing()}")
        return self.preview()

    def switch_meal_type(self, meal_type: MealType) -> MealSelection:
        """Changing the meal type discards every selection and direction."""
        return MealSelection.start(meal_type)

    def reset(self) -> MealSelection:
        return MealSelection.start(self.meal_type)
