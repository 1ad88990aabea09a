from __future__ import annotations

import logging
from io import StringIO

import i18n_sheet.logging.init as log_init
from i18n_sheet.logging.init import LabeledFormatter, get_logger, log_summary, reset_logging, setup_logging


def _capture(logger: logging.Logger) -> StringIO:
    buf = StringIO()
    logger.handlers[0].setStream(buf)
    return buf


def test_setup_logging_creates_logger_with_labeled_formatter():
    reset_logging()
    logger = setup_logging()
    assert logger.name == "i18n_sheet"
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, LabeledFormatter)
    assert logger.propagate is False


def test_setup_logging_is_idempotent():
    reset_logging()
    first = setup_logging()
    assert setup_logging() is first
    assert get_logger() is first
    assert len(first.handlers) == 1


def test_labeled_prefixes():
    reset_logging()
    logger = setup_logging()
    buf = _capture(logger)
    logger.info("Test info message")
    logger.warning("Test warning message")
    logger.error("Test error message")
    log_summary("direction=to-excel files=1")
    lines = buf.getvalue().splitlines()
    assert lines == [
        "INFO Test info message",
        "WARN Test warning message",
        "ERROR Test error message",
        "SUMMARY direction=to-excel files=1",
    ]


def test_module_loggers_propagate_to_labeled_handler():
    reset_logging()
    logger = setup_logging()
    buf = _capture(logger)
    logging.getLogger("i18n_sheet.services.importer").warning('Language column "FR" not found, skipping')
    assert buf.getvalue() == 'WARN Language column "FR" not found, skipping\n'


def test_enable_debug_lowers_levels():
    reset_logging()
    logger = setup_logging()
    buf = _capture(logger)
    logger.debug("hidden")
    log_init.enable_debug(logger)
    logger.debug("shown")
    assert buf.getvalue() == "DEBUG shown\n"
    reset_logging()
