from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

import pytest

from mealpos import main as main_module
from mealpos.logging_setup import setup_logging


def test_parser_defaults_to_kiosk():
    args = main_module.build_parser().parse_args([])
    assert args.surface == "kiosk"
    assert args.log_path is None


def test_parser_rejects_unknown_surface():
    with pytest.raises(SystemExit):
        main_module.build_parser().parse_args(["--surface", "drive-thru"])


def test_setup_logging_attaches_handler_once(tmp_path):
    log_file = tmp_path / "logs" / "mealpos.log"
    logger = setup_logging(str(log_file))
    try:
        setup_logging(str(log_file))
        handlers = [
            h for h in logger.handlers if isinstance(h, RotatingFileHandler) and h.baseFilename == str(log_file)
        ]
        assert len(handlers) == 1

        logging.getLogger("mealpos.persistence").info("order saved order_id=1")
        handlers[0].flush()
        assert "[mealpos.persistence] order saved order_id=1" in log_file.read_text(encoding="utf-8")
    finally:
        for handler in list(logger.handlers):
            if isinstance(handler, RotatingFileHandler):
                logger.removeHandler(handler)
                handler.close()


def test_main_runs_selected_surface(monkeypatch, tmp_path):
    started = []

    class FakeApp:
        def __init__(self, surface):
            started.append(surface)

        def run(self):
            started.append("run")

    monkeypatch.setattr(main_module, "PosApp", FakeApp)
    monkeypatch.setattr(main_module, "setup_logging", lambda log_path: None)
    main_module.main(["--surface", "cashier"])
    assert started == ["cashier", "run"]
