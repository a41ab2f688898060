"""Tests for promptdial logging setup."""

from __future__ import annotations

import logging
from pathlib import Path

from promptdial.logging import configure_logging, get_logger


def test_get_logger_nests_under_package() -> None:
    assert get_logger("compiler").name == "promptdial.compiler"
    assert get_logger().name == "promptdial"


def test_configure_logging_replaces_handlers() -> None:
    configure_logging()
    logger = configure_logging(verbose=True)

    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    assert logger.propagate is False


def test_configure_logging_writes_debug_to_file(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "promptdial.log"
    logger = configure_logging(log_file=log_file)

    get_logger("compiler").debug("selected 3 blocks")
    for handler in logger.handlers:
        handler.flush()

    assert "promptdial.compiler: selected 3 blocks" in log_file.read_text(encoding="utf-8")
    configure_logging()
