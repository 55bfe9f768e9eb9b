"""Kitchen ticket printing over an ESC/POS USB printer."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from mealpos.config import (
    PRINTER_FONT_OVERRIDE_ENV,
    PRINTER_FONT_PATH,
    PRINTER_FONT_SIZE,
    PRINTER_LEFT_INDENT_PX,
    PRINTER_TAIL_SPACER_PX,
    PRINTER_USB_PRODUCT_ID,
    PRINTER_USB_VENDOR_ID,
    PRINTER_WIDTH_PX,
)
from mealpos.models import OrderLine
from mealpos.rendering import counted_names

logger = logging.getLogger(__name__)

_SEPARATOR_HEIGHT_PX = 12
_SEPARATOR_THICKNESS_PX = 3
_HEADER_RIGHT_GUTTER_PX = 8
# Extra vertical headroom so descenders are not clipped on thermal output.
_LINE_EXTRA_PX = 20
_LINUX_FONT_FALLBACKS = (
    "/usr/share/fonts/TTF/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/noto/NotoSans-Regular.ttf",
    "/usr/share/fonts/liberation/LiberationSans-Regular.ttf",
)


@dataclass
class TicketRow:
    """One grouped meal on the ticket with its indented item lines."""

    label: str
    count: int
    item_lines: list[str] = field(default_factory=list)

    @property
    def title(self) -> str:
        if self.count <= 1:
            return self.label
        return f"{self.count}x {self.label}"


def _line_key(line: OrderLine) -> tuple:
    return (
        line.meal_type.meal_type_id,
        tuple(sorted(item.menu_item_id for item in line.entrees)),
        tuple(sorted(item.menu_item_id for item in line.sides)),
        line.drink.menu_item_id if line.drink is not None else None,
    )


def ticket_rows(lines: list[OrderLine]) -> list[TicketRow]:
    """Group identical meals (same type and same picks) in first-seen order."""
    rows: dict[tuple, TicketRow] = {}
    for line in lines:
        key = _line_key(line)
        row = rows.get(key)
        if row is not None:
            row.count += 1
            continue
        item_lines = [f"  {name}" for name in counted_names(line.entrees)]
        item_lines.extend(f"  {name}" for name in counted_names(line.sides))
        if line.drink is not None:
            item_lines.append(f"  {line.meal_type.drink_size.title()} {line.drink.name}")
        rows[key] = TicketRow(label=line.meal_type.meal_type_name, count=1, item_lines=item_lines)
    return list(rows.values())


def resolve_printer_font_path() -> str:
    """
    Resolve a printer font path.

    Resolution order:
    1. MEALPOS_PRINTER_FONT_PATH (if set)
    2. PRINTER_FONT_PATH
    3. Known Linux fallbacks
    """
    env_override = os.environ.get(PRINTER_FONT_OVERRIDE_ENV, "").strip()
    candidates: list[str] = []
    if env_override:
        candidates.append(env_override)
    candidates.append(PRINTER_FONT_PATH)
    candidates.extend(_LINUX_FONT_FALLBACKS)

    seen: set[str] = set()
    for candidate in candidates:
        if not candidate or candidate in seen:
            continue
        seen.add(candidate)
        if Path(candidate).is_file():
            return candidate

    raise RuntimeError(
        f"No usable printer font found. Set {PRINTER_FONT_OVERRIDE_ENV} to a valid .ttf/.otf file. "
        f"Tried: {', '.join(seen)}"
    )


def check_printer_dependencies() -> tuple[bool, str]:
    """Check whether printer dependencies are importable and a font resolves."""
    try:
        from escpos.printer import Usb  # noqa: F401
        from PIL import ImageFont

        font_path = resolve_printer_font_path()
        ImageFont.truetype(font_path, max(10, PRINTER_FONT_SIZE // 2))
    except Exception as exc:
        return (False, f"Printer unavailable: {exc}")
    return (True, "Printer ready")


def _render_line(text: str, font: object) -> object:
    from PIL import Image, ImageDraw

    canvas_height = PRINTER_FONT_SIZE + _LINE_EXTRA_PX
    img = Image.new("1", (PRINTER_WIDTH_PX, canvas_height), color=1)
    draw = ImageDraw.Draw(img)

    bbox = draw.textbbox((0, 0), text, font=font)
    text_height = bbox[3] - bbox[1]

    # Offset by bbox top so descenders are not clipped.
    y = (canvas_height - text_height) // 2 - bbox[1]
    draw.text((PRINTER_LEFT_INDENT_PX, y), text, font=font, fill=0)
    return img


def _render_spacer(height_px: int) -> object:
    from PIL import Image

    return Image.new("1", (PRINTER_WIDTH_PX, max(1, height_px)), color=1)


def _render_separator() -> object:
    from PIL import Image, ImageDraw

    img = Image.new("1", (PRINTER_WIDTH_PX, _SEPARATOR_HEIGHT_PX), color=1)
    draw = ImageDraw.Draw(img)
    top = (_SEPARATOR_HEIGHT_PX - _SEPARATOR_THICKNESS_PX) // 2
    draw.rectangle((0, top, PRINTER_WIDTH_PX - 1, top + _SEPARATOR_THICKNESS_PX - 1), fill=0)
    return img


def _render_order_header(order_id: int, font: object) -> object:
    from PIL import Image, ImageDraw

    text = f"#{order_id}"
    probe = ImageDraw.Draw(Image.new("1", (1, 1), color=1))
    bbox = probe.textbbox((0, 0), text, font=font)
    canvas_height = max(26, bbox[3] - bbox[1] + 16)

    img = Image.new("1", (PRINTER_WIDTH_PX, canvas_height), color=1)
    draw = ImageDraw.Draw(img)
    x = PRINTER_WIDTH_PX - _HEADER_RIGHT_GUTTER_PX - (bbox[2] - bbox[0]) - bbox[0]
    draw.text((x, 4 - bbox[1]), text, font=font, fill=0)
    return img


def print_order_ticket(lines: list[OrderLine], order_id: int) -> None:
    """Print a kitchen ticket for a saved order and cut it."""
    if not lines:
        return

    try:
        from escpos.printer import Usb
        from PIL import ImageFont
    except Exception as exc:
        raise RuntimeError(f"Printer dependencies unavailable: {exc}") from exc

    printer = Usb(PRINTER_USB_VENDOR_ID, PRINTER_USB_PRODUCT_ID)
    font_path = resolve_printer_font_path()
    font = ImageFont.truetype(font_path, PRINTER_FONT_SIZE)
    item_font = ImageFont.truetype(font_path, max(14, PRINTER_FONT_SIZE - 12))
    header_font = ImageFont.truetype(font_path, PRINTER_FONT_SIZE + 8)

    rows = ticket_rows(lines)
    logger.debug("printing order_id=%s rows=%d", order_id, len(rows))

    printer.image(_render_order_header(order_id, header_font))
    for idx, row in enumerate(rows):
        if idx > 0:
            printer.image(_render_separator())
        printer.image(_render_line(row.title, font))
        for item_line in row.item_lines:
            printer.image(_render_line(item_line, item_font))

    printer.image(_render_spacer(PRINTER_TAIL_SPACER_PX))
    printer.cut()
