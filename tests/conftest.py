from __future__ import annotations

from datetime import datetime

import pytest

from mealpos import config
from mealpos.models import MealType, MenuItem

NOON = datetime(2026, 10, 19, 12, 0)


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    path = tmp_path / "mealpos.db"
    monkeypatch.setattr(config, "DB_PATH", str(path))
    return path


def make_item(menu_item_id: int, name: str, item_type: str = "entree", **kwargs) -> MenuItem:
    kwargs.setdefault("stock", 10)
    return MenuItem(menu_item_id=menu_item_id, name=name, item_type=item_type, **kwargs)


@pytest.fixture
def orange_chicken() -> MenuItem:
    return make_item(1, "Orange Chicken")


@pytest.fixture
def beijing_beef() -> MenuItem:
    return make_item(2, "Beijing Beef")


@pytest.fixture
def fried_rice() -> MenuItem:
    return make_item(9, "Fried Rice", "side")


@pytest.fixture
def chow_mein() -> MenuItem:
    return make_item(10, "Chow Mein", "side")


@pytest.fixture
def lemonade() -> MenuItem:
    return make_item(17, "Lemonade", "drink", upcharge=0.25)


@pytest.fixture
def iced_tea() -> MenuItem:
    return make_item(16, "Iced Tea", "drink")


@pytest.fixture
def bowl() -> MealType:
    return MealType(meal_type_id=1, meal_type_name="Bowl", meal_type_price=8.30, entree_count=1, side_count=2)


@pytest.fixture
def kids_meal() -> MealType:
    return MealType(
        meal_type_id=4,
        meal_type_name="Kids Meal",
        meal_type_price=6.60,
        entree_count=1,
        side_count=1,
        drink_size="small",
    )
