"""Runtime configuration defaults for persistence, logging and printing."""

from __future__ import annotations

import os

DB_PATH = os.environ.get("MEALPOS_DB_PATH", "data/mealpos.db")
LOG_PATH = os.environ.get("MEALPOS_LOG_PATH", "logs/mealpos.log")
LOG_MAX_BYTES = 2 * 1024 * 1024
LOG_BACKUP_COUNT = 3

DEFAULT_STAFF_ID = 1

PRINTER_USB_VENDOR_ID = 0x28E9
PRINTER_USB_PRODUCT_ID = 0x0289
PRINTER_WIDTH_PX = 384
PRINTER_FONT_SIZE = 40
PRINTER_FONT_PATH = "/System/Library/Fonts/SFNS.ttf"
PRINTER_FONT_OVERRIDE_ENV = "MEALPOS_PRINTER_FONT_PATH"
PRINTER_LEFT_INDENT_PX = 16
PRINTER_TAIL_SPACER_PX = 70
