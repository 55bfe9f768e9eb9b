"""Domain models for mealpos."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

ItemType = Literal["entree", "side", "drink"]
DrinkSize = Literal["none", "small", "medium", "large"]
StaffRole = Literal["KIOSK", "CASHIER", "MANAGER"]


@dataclass(frozen=True)
class MenuItem:
    """A single selectable food or drink item."""

    menu_item_id: int
    name: str
    item_type: ItemType
    upcharge: float = 0.0
    is_available: bool = True
    availability_start_time: str | None = None
    availability_end_time: str | None = None
    allergens: tuple[str, ...] = ()
    stock: int = 0


@dataclass(frozen=True)
class MealType:
    """A purchasable combo definition with required entree/side counts."""

    meal_type_id: int
    meal_type_name: str
    meal_type_price: float
    entree_count: int
    side_count: int
    drink_size: DrinkSize = "none"

    @property
    def needs_drink(self) -> bool:
        return self.drink_size != "none"

    @property
    def is_drink_only(self) -> bool:
        return self.needs_drink and self.entree_count == 0 and self.side_count == 0

    def capacity_for(self, item_type: str) -> int:
        """Return how many items of ``item_type`` one meal holds."""
        if item_type == "entree":
            return self.entree_count
        if item_type == "side":
            return self.side_count
        if item_type == "drink":
            return 1 if self.needs_drink else 0
        return 0


@dataclass
class OrderLine:
    """One combo instance in the cart with concrete item selections."""

    meal_type: MealType
    entrees: list[MenuItem] = field(default_factory=list)
    sides: list[MenuItem] = field(default_factory=list)
    drink: MenuItem | None = None

    @property
    def price(self) -> float:
        total = self.meal_type.meal_type_price
        total += sum(item.upcharge for item in self.entrees)
        total += sum(item.upcharge for item in self.sides)
        if self.drink is not None:
            total += self.drink.upcharge
        return round(total, 2)

    def is_complete(self) -> bool:
        if len(self.entrees) != self.meal_type.entree_count:
            return False
        if len(self.sides) != self.meal_type.side_count:
            return False
        return (self.drink is not None) == self.meal_type.needs_drink


@dataclass(frozen=True)
class StaffMember:
    """A roster entry; only cashiers and managers may sign counter orders."""

    staff_id: int
    username: str
    display_name: str
    role: StaffRole

    @property
    def can_sign_orders(self) -> bool:
        return self.role in ("CASHIER", "MANAGER")
