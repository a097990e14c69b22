"""Tests for dustat.logging."""

from __future__ import annotations

import logging

from dustat.logging import configure_logging, get_logger


def test_get_logger_is_namespaced() -> None:
    assert get_logger().name == "dustat"
    assert get_logger("registry").name == "dustat.registry"


def test_configure_logging_installs_one_stream_handler() -> None:
    configure_logging()
    logger = configure_logging(verbose=True)

    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    assert type(logger.handlers[0]) is logging.StreamHandler
    assert logger.propagate is False

    assert configure_logging().level == logging.WARNING
