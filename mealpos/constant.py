"""Editable static menu and meal type configuration."""

from __future__ import annotations

# menu_item_id -> raw item fields consumed by mealpos.data.
MENU_ITEM_ROWS: dict[int, dict[str, object]] = {
    1: {"name": "Orange Chicken", "item_type": "entree", "upcharge": 0.0, "allergens": ["wheat", "soy", "egg"], "stock": 120},
    2: {"name": "Beijing Beef", "item_type": "entree", "upcharge": 0.0, "allergens": ["wheat", "soy"], "stock": 80},
    3: {"name": "Honey Walnut Shrimp", "item_type": "entree", "upcharge": 1.5, "allergens": ["shellfish", "tree nuts", "egg", "milk"], "stock": 40},
    4: {"name": "Kung Pao Chicken", "item_type": "entree", "upcharge": 0.0, "allergens": ["peanuts", "soy", "wheat"], "stock": 60},
    5: {"name": "Broccoli Beef", "item_type": "entree", "upcharge": 0.0, "allergens": ["soy", "wheat"], "stock": 70},
    6: {"name": "Black Pepper Angus Steak", "item_type": "entree", "upcharge": 1.5, "allergens": ["soy", "wheat"], "stock": 25},
    7: {"name": "Teriyaki Chicken", "item_type": "entree", "upcharge": 0.0, "allergens": ["soy", "wheat"], "stock": 0},
    8: {
        "name": "Breakfast Egg Roll",
        "item_type": "entree",
        "upcharge": 0.0,
        "allergens": ["egg", "wheat"],
        "stock": 30,
        "availability_start_time": "06:00",
        "availability_end_time": "10:30",
    },
    9: {"name": "Fried Rice", "item_type": "side", "upcharge": 0.0, "allergens": ["egg", "soy", "wheat"], "stock": 150},
    10: {"name": "Chow Mein", "item_type": "side", "upcharge": 0.0, "allergens": ["soy", "wheat"], "stock": 150},
    11: {"name": "White Steamed Rice", "item_type": "side", "upcharge": 0.0, "allergens": [], "stock": 200},
    12: {"name": "Super Greens", "item_type": "side", "upcharge": 0.0, "allergens": ["soy"], "stock": 90},
    13: {"name": "Chow Fun", "item_type": "side", "upcharge": 0.0, "allergens": ["soy", "wheat"], "stock": 50, "is_available": False},
    14: {
        "name": "Late Night Dumplings",
        "item_type": "side",
        "upcharge": 1.0,
        "allergens": ["wheat", "soy"],
        "stock": 40,
        "availability_start_time": "22:00",
        "availability_end_time": "02:00",
    },
    15: {"name": "Fountain Soda", "item_type": "drink", "upcharge": 0.0, "allergens": [], "stock": 500},
    16: {"name": "Iced Tea", "item_type": "drink", "upcharge": 0.0, "allergens": [], "stock": 300},
    17: {"name": "Lemonade", "item_type": "drink", "upcharge": 0.25, "allergens": [], "stock": 200},
    18: {"name": "Bottled Water", "item_type": "drink", "upcharge": 0.5, "allergens": [], "stock": 0},
}

# meal_type_id -> raw meal type fields.
MEAL_TYPE_ROWS: dict[int, dict[str, object]] = {
    1: {"meal_type_name": "Bowl", "meal_type_price": 8.30, "entree_count": 1, "side_count": 2, "drink_size": "none"},
    2: {"meal_type_name": "Plate", "meal_type_price": 9.80, "entree_count": 2, "side_count": 2, "drink_size": "none"},
    3: {"meal_type_name": "Bigger Plate", "meal_type_price": 11.30, "entree_count": 3, "side_count": 2, "drink_size": "none"},
    4: {"meal_type_name": "Kids Meal", "meal_type_price": 6.60, "entree_count": 1, "side_count": 1, "drink_size": "small"},
    5: {"meal_type_name": "Combo Plate", "meal_type_price": 12.40, "entree_count": 2, "side_count": 1, "drink_size": "medium"},
    6: {"meal_type_name": "A La Carte Entree", "meal_type_price": 5.20, "entree_count": 1, "side_count": 0, "drink_size": "none"},
    7: {"meal_type_name": "A La Carte Side", "meal_type_price": 4.40, "entree_count": 0, "side_count": 1, "drink_size": "none"},
    13: {"meal_type_name": "Small Drink", "meal_type_price": 2.10, "entree_count": 0, "side_count": 0, "drink_size": "small"},
    14: {"meal_type_name": "Medium Drink", "meal_type_price": 2.40, "entree_count": 0, "side_count": 0, "drink_size": "medium"},
    15: {"meal_type_name": "Large Drink", "meal_type_price": 2.70, "entree_count": 0, "side_count": 0, "drink_size": "large"},
}

CATEGORY_ORDER: tuple[str, ...] = ("entree", "side", "drink")

CATEGORY_LABELS: dict[str, str] = {
    "entree": "Entrees",
    "side": "Sides",
    "drink": "Drink",
}

ACTIVE_ORDER_EXCLUDED_STATUSES: tuple[str, ...] = ("completed", "cancelled")

CATEGORY_NOUNS: dict[str, tuple[str, str]] = {
    "entree": ("entree", "entrees"),
    "side": ("side", "sides"),
    "drink": ("drink", "drinks"),
}

# staff_id -> roster fields. Id 1 is the self-service kiosk account.
STAFF_ROWS: dict[int, dict[str, str]] = {
    1: {"username": "kiosk", "display_name": "Kiosk", "role": "KIOSK"},
    7: {"username": "mlopez", "display_name": "Maria Lopez", "role": "CASHIER"},
    42: {"username": "jchen", "display_name": "Jamie Chen", "role": "CASHIER"},
    101: {"username": "asmith", "display_name": "Alex Smith", "role": "MANAGER"},
}
