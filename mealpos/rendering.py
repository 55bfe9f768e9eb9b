"""Rendering helpers for menu rows, selections and cart lines."""

from __future__ import annotations

from collections import Counter

from rich.text import Text

from mealpos.constant import CATEGORY_LABELS
from mealpos.models import MealType, MenuItem, OrderLine
from mealpos.selection import Direction, MealSelection, is_selectable

_BADGE_LETTERS = {"entree": "E", "side": "S", "drink": "D"}


def badge_style(item_type: str) -> str:
    """Return a consistent badge style for category tags."""
    if item_type == "entree":
        return "bold #ffffff on #b23a48"
    if item_type == "side":
        return "bold #0b1f0f on #5fbf72"
    return "bold #ffffff on #2f6db5"


def format_price(amount: float) -> str:
    return f"${amount:.2f}"


def counted_names(items: list[MenuItem]) -> list[str]:
    """Collapse repeated items into ``2x Name`` keeping first-seen order."""
    counts = Counter(item.menu_item_id for item in items)
    seen: set[int] = set()
    names: list[str] = []
    for item in items:
        if item.menu_item_id in seen:
            continue
        seen.add(item.menu_item_id)
        count = counts[item.menu_item_id]
        names.append(f"{count}x {item.name}" if count > 1 else item.name)
    return names


def format_meal_type(meal_type: MealType) -> Text:
    text = Text()
    text.append(meal_type.meal_type_name, style="bold")
    text.append(f"  {format_price(meal_type.meal_type_price)}")
    parts = []
    if meal_type.entree_count:
        parts.append(f"{meal_type.entree_count} entree" + ("s" if meal_type.entree_count > 1 else ""))
    if meal_type.side_count:
        parts.append(f"{meal_type.side_count} side" + ("s" if meal_type.side_count > 1 else ""))
    if meal_type.needs_drink:
        parts.append(f"{meal_type.drink_size} drink")
    if parts:
        text.append(f"  ({', '.join(parts)})", style="dim")
    return text


def format_order_line(line: OrderLine) -> Text:
    """Render a cart line as a title row plus one indented row per category."""
    text = Text()
    text.append(line.meal_type.meal_type_name, style="bold")
    text.append(f"  {format_price(line.price)}")
    for item_type, items in (("entree", line.entrees), ("side", line.sides)):
        if not items:
            continue
        text.append("\n      ")
        text.append(_BADGE_LETTERS[item_type], style=badge_style(item_type))
        text.append(f" {', '.join(counted_names(items))}")
    if line.drink is not None:
        text.append("\n      ")
        text.append(_BADGE_LETTERS["drink"], style=badge_style("drink"))
        text.append(f" {line.drink.name}")
    return text


def format_selection_header(selection: MealSelection, item_type: str) -> str:
    """Section title with progress, e.g. ``Entrees (1/2)``."""
    label = CATEGORY_LABELS[item_type]
    capacity = selection.meal_type.capacity_for(item_type)
    if item_type == "drink":
        chosen = 1 if selection.drink is not None else 0
    else:
        state = selection.for_category(item_type)
        chosen = len(state) if state is not None else 0
    return f"{label} ({chosen}/{capacity})"


def format_menu_row(item: MenuItem, selection: MealSelection, excluded_allergens: set[str] | None = None) -> Text:
    """Render one clickable menu item with its count and markers."""
    text = Text()
    count = selection.count(item)
    if item.item_type == "drink":
        text.append("(•) " if count else "( ) ")
    else:
        text.append(f"[{count}] " if count else "[ ] ")

    if not is_selectable(item):
        text.append(item.name, style="dim strike")
        text.append("  unavailable", style="dim")
        return text

    text.append(item.name, style="bold white" if count else "white")
    if item.upcharge:
        text.append(f"  +{format_price(item.upcharge)}", style="yellow")

    state = selection.for_category(item.item_type)
    if state is not None and state.direction(item) is Direction.DESCENDING:
        text.append("  ▼", style="dim")

    if item.allergens:
        flagged = {a.lower() for a in (excluded_allergens or set())}
        text.append("  ")
        for idx, allergen in enumerate(item.allergens):
            if idx > 0:
                text.append(" ")
            style = "bold #ffb3b3" if allergen.lower() in flagged else "dim"
            text.append(f"[{allergen}]", style=style)
    return text
