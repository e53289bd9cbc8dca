"""Tests for daisygen.logging."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from daisygen.logging import ROOT_LOGGER, configure_logging, get_logger


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    yield
    configure_logging()


def test_get_logger_nests_under_daisygen() -> None:
    assert get_logger().name == "daisygen"
    assert get_logger("parser").name == "daisygen.parser"


def test_console_shows_warnings_by_default() -> None:
    logger = configure_logging()

    [handler] = logger.handlers
    assert logger.name == ROOT_LOGGER
    assert logger.propagate is False
    assert handler.level == logging.WARNING
    assert logger.level == logging.WARNING


def test_verbose_console_shows_debug() -> None:
    logger = configure_logging(verbose=True)

    [handler] = logger.handlers
    assert handler.level == logging.DEBUG
    assert logger.level == logging.DEBUG


def test_log_file_receives_debug_records_without_verbose(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "daisygen.log"
    logger = configure_logging(log_file=log_file)

    get_logger("parser").debug("Skipping untitled block")

    console, file_sink = logger.handlers
    assert console.level == logging.WARNING
    assert file_sink.level == logging.DEBUG
    assert "DEBUG daisygen.parser [MainThread] Skipping untitled block" in log_file.read_text(
        encoding="utf-8"
    )


def test_reconfiguring_replaces_handlers(tmp_path: Path) -> None:
    configure_logging(log_file=tmp_path / "first.log")

    logger = configure_logging(verbose=True)

    assert len(logger.handlers) == 1
    assert not isinstance(logger.handlers[0], logging.FileHandler)
