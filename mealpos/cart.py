"""In-memory order list built up before submit."""

from __future__ import annotations

from typing import Any, Iterator

from mealpos.models import MenuItem, OrderLine


def _item_payload(item: MenuItem) -> dict[str, Any]:
    return {
        "menu_item_id": item.menu_item_id,
        "name": item.name,
        "upcharge": item.upcharge,
        "item_type": item.item_type,
    }


def line_payload(line: OrderLine) -> dict[str, Any]:
    """Serialize one line in the shape the order endpoint accepts."""
    meal_type = line.meal_type
    return {
        "mealType": {
            "meal_type_id": meal_type.meal_type_id,
            "meal_type_name": meal_type.meal_type_name,
            "meal_type_price": meal_type.meal_type_price,
            "entree_count": meal_type.entree_count,
            "side_count": meal_type.side_count,
            "drink_size": meal_type.drink_size,
        },
        "entrees": [_item_payload(item) for item in line.entrees],
        "sides": [_item_payload(item) for item in line.sides],
        "drink": _item_payload(line.drink) if line.drink is not None else None,
    }


class Cart:
    """Ordered list of committed order lines."""

    def __init__(self, lines: list[OrderLine] | None = None) -> None:
        self.lines: list[OrderLine] = list(lines or [])

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[OrderLine]:
        return iter(self.lines)

    def __getitem__(self, index: int) -> OrderLine:
        return self.lines[index]

    def _check_index(self, index: int) -> None:
        if not (0 <= index < len(self.lines)):
            raise IndexError(f"cart has no line {index}")

    def add(self, line: OrderLine) -> int:
        self.lines.append(line)
        return len(self.lines) - 1

    def replace(self, index: int, line: OrderLine) -> None:
        self._check_index(index)
        self.lines[index] = line

    def remove(self, index: int) -> OrderLine:
        self._check_index(index)
        return self.lines.pop(index)

    def clear(self) -> None:
        self.lines.clear()

    @property
    def total(self) -> float:
        return round(sum(line.price for line in self.lines), 2)

    def to_payload(self) -> dict[str, Any]:
        return {"order_items": [line_payload(line) for line in self.lines]}
