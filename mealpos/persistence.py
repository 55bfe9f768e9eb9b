"""SQLite persistence for submitted orders."""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable

from mealpos import config
from mealpos.constant import ACTIVE_ORDER_EXCLUDED_STATUSES
from mealpos.models import OrderLine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SavedOrder:
    """Saved order metadata and copied lines."""

    order_id: int
    created_at: str
    staff_id: int
    source: str
    price: float
    lines: list[OrderLine]


@dataclass(frozen=True)
class ActiveOrder:
    order_id: int
    staff_id: int
    created_at: str
    price: float
    order_status: str
    source: str
    meal_count: int


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _connect() -> sqlite3.Connection:
    db_file = Path(config.DB_PATH)
    db_file.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(db_file)
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def bootstrap_schema() -> None:
    """Create persistence schema if it does not already exist."""
    with _connect() as conn:
        conn.executescript(
            """
            CREATE TABLE IF NOT EXISTS orders (
                order_id INTEGER PRIMARY KEY AUTOINCREMENT,
                created_at TEXT NOT NULL,
                price REAL NOT NULL,
                staff_id INTEGER NOT NULL,
                source TEXT NOT NULL DEFAULT 'kiosk',
                order_status TEXT NOT NULL
            );

            CREATE TABLE IF NOT EXISTS meals (
                meal_id INTEGER PRIMARY KEY AUTOINCREMENT,
                order_id INTEGER NOT NULL,
                line_index INTEGER NOT NULL,
                meal_type_id INTEGER NOT NULL,
                meal_type_name TEXT NOT NULL,
                price REAL NOT NULL,
                FOREIGN KEY(order_id) REFERENCES orders(order_id) ON DELETE CASCADE
            );

            CREATE TABLE IF NOT EXISTS meal_details (
                detail_id INTEGER PRIMARY KEY AUTOINCREMENT,
                meal_id INTEGER NOT NULL,
                meal_type_id INTEGER NOT NULL,
                menu_item_id INTEGER NOT NULL,
                menu_item_name TEXT NOT NULL,
                role TEXT NOT NULL,
                FOREIGN KEY(meal_id) REFERENCES meals(meal_id) ON DELETE CASCADE
            );

            CREATE INDEX IF NOT EXISTS idx_meals_order_id_line
                ON meals(order_id, line_index);

            CREATE INDEX IF NOT EXISTS idx_meal_details_meal_id
                ON meal_details(meal_id);
            """
        )


def _check_line(idx: int, line: OrderLine) -> None:
    if line.is_complete():
        return
    meal_type = line.meal_type
    raise ValueError(
        f"line {idx} ({meal_type.meal_type_name}) needs {meal_type.entree_count} entrees, "
        f"{meal_type.side_count} sides and {'a' if meal_type.needs_drink else 'no'} drink; "
        f"got {len(line.entrees)}, {len(line.sides)} and {'a' if line.drink else 'no'} drink"
    )


def save_order(
    lines: Iterable[OrderLine],
    staff_id: int = config.DEFAULT_STAFF_ID,
    source: str = "kiosk",
) -> SavedOrder:
    """Persist a full order and return saved order metadata."""
    copied_lines = [
        OrderLine(
            meal_type=line.meal_type,
            entrees=list(line.entrees),
            sides=list(line.sides),
            drink=line.drink,
        )
        for line in lines
    ]
    if not copied_lines:
        raise ValueError("Cannot save an order without items")
    for idx, line in enumerate(copied_lines):
        _check_line(idx, line)

    created_at = _utc_now_iso()
    price = round(sum(line.price for line in copied_lines), 2)

    with _connect() as conn:
        with conn:
            cur = conn.execute(
                """
                INSERT INTO orders (created_at, price, staff_id, source, order_status)
                VALUES (?, ?, ?, ?, 'pending')
                """,
                (created_at, price, staff_id, source),
            )
            order_id = int(cur.lastrowid)

            for idx, line in enumerate(copied_lines):
                meal_type = line.meal_type
                cur = conn.execute(
                    """
                    INSERT INTO meals (order_id, line_index, meal_type_id, meal_type_name, price)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (order_id, idx, meal_type.meal_type_id, meal_type.meal_type_name, line.price),
                )
                meal_id = int(cur.lastrowid)

                details = [(item, "entree") for item in line.entrees]
                details.extend((item, "side") for item in line.sides)
                if line.drink is not None:
                    details.append((line.drink, "drink"))
                conn.executemany(
                    """
                    INSERT INTO meal_details (meal_id, meal_type_id, menu_item_id, menu_item_name, role)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    [(meal_id, meal_type.meal_type_id, item.menu_item_id, item.name, role) for item, role in details],
                )

    logger.info("order saved order_id=%s lines=%d price=%.2f source=%s", order_id, len(copied_lines), price, source)
    return SavedOrder(
        order_id=order_id,
        created_at=created_at,
        staff_id=staff_id,
        source=source,
        price=price,
        lines=copied_lines,
    )


def update_order_status(order_id: int, status: str) -> None:
    """Update status for a persisted order."""
    with _connect() as conn:
        with conn:
            conn.execute("UPDATE orders SET order_status = ? WHERE order_id = ?", (status, order_id))


def list_active_orders() -> list[ActiveOrder]:
    """Orders that are neither completed nor cancelled, newest first."""
    placeholders = ", ".join("?" for _ in ACTIVE_ORDER_EXCLUDED_STATUSES)
    with _connect() as conn:
        rows = conn.execute(
            f"""
            SELECT o.order_id, o.staff_id, o.created_at, o.price, o.order_status, o.source,
                   COUNT(m.meal_id) AS meal_count
            FROM orders o
            LEFT JOIN meals m ON m.order_id = o.order_id
            WHERE o.order_status NOT IN ({placeholders})
            GROUP BY o.order_id
            ORDER BY o.created_at DESC, o.order_id DESC
            """,
            ACTIVE_ORDER_EXCLUDED_STATUSES,
        ).fetchall()
    return [
        ActiveOrder(
            order_id=int(row[0]),
            staff_id=int(row[1]),
            created_at=str(row[2]),
            price=float(row[3]),
            order_status=str(row[4]),
            source=str(row[5]),
            meal_count=int(row[6]),
        )
        for row in rows
    ]


def load_order_lines(order_id: int) -> list[tuple[str, list[tuple[str, str]]]]:
    """Return ``(meal type name, [(role, item name), ...])`` per saved meal."""
    with _connect() as conn:
        meals = conn.execute(
            "SELECT meal_id, meal_type_name FROM meals WHERE order_id = ? ORDER BY line_index",
            (order_id,),
        ).fetchall()
        result = []
        for meal_id, meal_type_name in meals:
            details = conn.execute(
                "SELECT role, menu_item_name FROM meal_details WHERE meal_id = ? ORDER BY detail_id",
                (meal_id,),
            ).fetchall()
            result.append((str(meal_type_name), [(str(role), str(name)) for role, name in details]))
    return result
