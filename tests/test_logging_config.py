"""Tests for logging configuration."""

from __future__ import annotations

import logging

from filtex import logging_config


def test_configure_logging_verbose_adds_single_handler() -> None:
    logger = logging.getLogger(logging_config.LOGGER_NAME)
    try:
        logging_config.configure_logging(True)
        logging_config.configure_logging(True)

        assert logger.level == logging.INFO
        assert logger.propagate is False
        assert len(logger.handlers) == 1
    finally:
        logging_config.configure_logging(False)


def test_configure_logging_quiet_clears_handlers() -> None:
    logger = logging.getLogger(logging_config.LOGGER_NAME)

    logging_config.configure_logging(True)
    logging_config.configure_logging(False)

    assert logger.level == logging.WARNING
    assert logger.handlers == []
