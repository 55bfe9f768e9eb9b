"""Entry point for the mealpos Textual app."""

from __future__ import annotations

import argparse
import logging

from mealpos.logging_setup import setup_logging
from mealpos.pos_app import PosApp

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mealpos", description="Combo meal ordering for kiosk and cashier.")
    parser.add_argument(
        "--surface",
        choices=("kiosk", "cashier"),
        default="kiosk",
        help="kiosk for self-service customers, cashier for staff with ticket printing",
    )
    parser.add_argument("--log-path", default=None, help="override the rotating log file location")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_path)
    logger.info("starting surface=%s", args.surface)
    PosApp(surface=args.surface).run()


if __name__ == "__main__":
    main()
