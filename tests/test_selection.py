from __future__ import annotations

import pytest

from conftest import make_item
from mealpos.models import MealType
from mealpos.selection import (
    CategorySelection,
    Direction,
    MealSelection,
    SelectionIncomplete,
    apply_selection,
    is_selectable,
    toggle_drink,
)


def _click_many(state: CategorySelection, item, max_count: int, times: int) -> CategorySelection:
    for _ in range(times):
        state = apply_selection(state, item, max_count)
    return state


def _ids(state: CategorySelection) -> list[int]:
    return [item.menu_item_id for item in state.selected]


@pytest.mark.parametrize("max_count", [1, 2, 3, 5])
def test_distinct_items_fill_capacity(max_count):
    state = CategorySelection()
    for idx in range(max_count):
        state = apply_selection(state, make_item(100 + idx, f"Item {idx}"), max_count)
    assert len(state) == max_count


@pytest.mark.parametrize("max_count", [1, 2, 3, 4])
def test_same_item_cycles_up_and_back_down(max_count, orange_chicken):
    state = CategorySelection()
    counts = []
    for _ in range(2 * max_count + 1):
        state = apply_selection(state, orange_chicken, max_count)
        counts.append(state.count(orange_chicken))

    rising = list(range(1, max_count + 1))
    falling = list(range(max_count - 1, -1, -1))
    assert counts == rising + falling + [1]
    assert state.direction(orange_chicken) is Direction.ASCENDING


def test_click_on_full_category_with_new_item_is_noop(orange_chicken, beijing_beef):
    state = apply_selection(CategorySelection(), orange_chicken, 1)
    after = apply_selection(state, beijing_beef, 1)
    assert after is state
    assert _ids(after) == [orange_chicken.menu_item_id]


def test_adding_when_total_is_full_turns_item_around(orange_chicken, beijing_beef):
    state = CategorySelection()
    state = apply_selection(state, orange_chicken, 3)
    state = apply_selection(state, beijing_beef, 3)
    state = apply_selection(state, beijing_beef, 3)
    assert len(state) == 3

    # Orange Chicken could go to 2 on its own, but the category is full.
    state = apply_selection(state, orange_chicken, 3)
    assert _ids(state) == [beijing_beef.menu_item_id, beijing_beef.menu_item_id]
    assert state.direction(orange_chicken) is None


def test_other_items_are_never_removed_by_a_click(orange_chicken, beijing_beef):
    state = _click_many(CategorySelection(), orange_chicken, 3, 2)
    state = apply_selection(state, beijing_beef, 3)
    state = apply_selection(state, beijing_beef, 3)
    assert state.count(orange_chicken) == 2
    assert state.count(beijing_beef) == 0


def test_descending_item_keeps_descending_until_zero(orange_chicken, beijing_beef):
    state = _click_many(CategorySelection(), orange_chicken, 3, 4)
    assert state.count(orange_chicken) == 2
    assert state.direction(orange_chicken) is Direction.DESCENDING

    # Room opened up, but the item is on its way down.
    state = apply_selection(state, beijing_beef, 3)
    state = apply_selection(state, orange_chicken, 3)
    assert state.count(orange_chicken) == 1
    assert state.direction(orange_chicken) is Direction.DESCENDING

    state = apply_selection(state, orange_chicken, 3)
    assert state.count(orange_chicken) == 0
    assert state.direction(orange_chicken) is None


def test_removal_takes_first_matching_copy(orange_chicken, beijing_beef):
    state = CategorySelection()
    for item in (orange_chicken, beijing_beef, orange_chicken):
        state = apply_selection(state, item, 3)
    state = apply_selection(state, orange_chicken, 3)
    assert _ids(state) == [beijing_beef.menu_item_id, orange_chicken.menu_item_id]


def test_fully_deselected_item_starts_over(orange_chicken):
    state = _click_many(CategorySelection(), orange_chicken, 2, 4)
    assert len(state) == 0
    assert orange_chicken.menu_item_id not in state.directions

    fresh = _click_many(CategorySelection(), orange_chicken, 2, 2)
    again = _click_many(state, orange_chicken, 2, 2)
    assert _ids(again) == _ids(fresh)


def test_apply_selection_does_not_mutate_input(orange_chicken):
    state = CategorySelection()
    apply_selection(state, orange_chicken, 2)
    assert len(state) == 0
    assert dict(state.directions) == {}


def test_toggle_drink(lemonade, iced_tea):
    assert toggle_drink(None, lemonade) == lemonade
    assert toggle_drink(lemonade, lemonade) is None
    assert toggle_drink(lemonade, iced_tea) == iced_tea


def test_is_selectable():
    assert is_selectable(make_item(1, "In stock"))
    assert not is_selectable(make_item(2, "Sold out", stock=0))
    assert not is_selectable(make_item(3, "Pulled", is_available=False))


def test_out_of_stock_click_is_noop_in_any_state(bowl, orange_chicken):
    sold_out = make_item(50, "Teriyaki Chicken", stock=0)
    selection = MealSelection.start(bowl)
    assert selection.click(sold_out) is selection

    selection = selection.click(orange_chicken)
    assert selection.click(sold_out) is selection


def test_bowl_scenario(bowl, orange_chicken, fried_rice, chow_mein):
    selection = MealSelection.start(bowl)
    selection = selection.click(orange_chicken)
    assert [item.name for item in selection.entrees.selected] == ["Orange Chicken"]

    selection = selection.click(fried_rice).click(chow_mein)
    assert [item.name for item in selection.sides.selected] == ["Fried Rice", "Chow Mein"]
    assert selection.can_commit()

    selection = selection.click(fried_rice)
    assert [item.name for item in selection.sides.selected] == ["Chow Mein"]
    assert selection.sides.direction(fried_rice) is None
    assert not selection.can_commit()
    assert selection.missing() == {"side": 1}


def test_drink_clicks_are_ignored_without_drink_size(bowl, lemonade):
    selection = MealSelection.start(bowl)
    assert selection.click(lemonade) is selection


def test_meal_with_drink_requires_one(kids_meal, orange_chicken, fried_rice, lemonade, iced_tea):
    selection = MealSelection.start(kids_meal).click(orange_chicken).click(fried_rice)
    assert selection.missing() == {"drink": 1}

    selection = selection.click(lemonade).click(iced_tea)
    assert selection.drink == iced_tea
    line = selection.commit()
    assert line.drink == iced_tea
    assert line.price == pytest.approx(6.60)


def test_commit_incomplete_raises(bowl, orange_chicken):
    selection = MealSelection.start(bowl).click(orange_chicken)
    with pytest.raises(SelectionIncomplete):
        selection.commit()


def test_category_with_zero_capacity_ignores_clicks(fried_rice):
    entree_only = MealType(meal_type_id=6, meal_type_name="A La Carte Entree", meal_type_price=5.2, entree_count=1, side_count=0)
    selection = MealSelection.start(entree_only)
    assert selection.click(fried_rice) is selection


def test_switch_meal_type_and_reset_clear_everything(bowl, kids_meal, orange_chicken, fried_rice):
    selection = MealSelection.start(bowl).click(orange_chicken).click(fried_rice).click(fried_rice)
    switched = selection.switch_meal_type(kids_meal)
    assert switched.meal_type == kids_meal
    assert len(switched.entrees) == 0 and len(switched.sides) == 0
    assert dict(switched.sides.directions) == {}

    reset = selection.reset()
    assert reset.meal_type == bowl
    assert len(reset.entrees) == 0
    assert reset.drink is None


def test_from_line_resumes_editing(bowl, orange_chicken, fried_rice, chow_mein):
    line = MealSelection.start(bowl).click(orange_chicken).click(fried_rice).click(chow_mein).commit()
    selection = MealSelection.from_line(line)
    assert selection.can_commit()

    # Category is full, so the next Fried Rice click removes it.
    selection = selection.click(fried_rice)
    assert [item.name for item in selection.sides.selected] == ["Chow Mein"]
