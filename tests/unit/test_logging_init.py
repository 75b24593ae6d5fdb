from __future__ import annotations

import logging
from io import StringIO

import sheetverify.logging.init
from sheetverify.logging.init import LabeledFormatter, get_logger, log_summary, reset_logging, setup_logging


def test_setup_logging_creates_logger_with_labeled_formatter():
    reset_logging()
    logger = setup_logging()

    assert logger.name == "sheetverify"
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    handler = logger.handlers[0]
    assert isinstance(handler, logging.StreamHandler)
    assert isinstance(handler.formatter, LabeledFormatter)
    assert logger.propagate is False


def test_logging_labeled_prefixes():
    captured_output = StringIO()

    logger = logging.getLogger("test_sheetverify")
    logger.setLevel(logging.DEBUG)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logging.addLevelName(25, "SUMMARY")
    handler = logging.StreamHandler(captured_output)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    logger.propagate = False

    logger.debug("Test debug message")
    logger.info("Test info message")
    logger.warning("Test warning message")
    logger.error("Test error message")
    logger.log(25, "Test summary message")

    lines = captured_output.getvalue().strip().split("\n")
    assert lines == [
        "DEBUG Test debug message",
        "INFO Test info message",
        "WARN Test warning message",
        "ERROR Test error message",
        "SUMMARY Test summary message",
    ]


def test_setup_logging_idempotent():
    reset_logging()
    logger1 = setup_logging()
    logger2 = setup_logging()
    assert logger1 is logger2
    assert len(logger1.handlers) == 1
    assert get_logger() is logger1


def test_setup_logging_debug_lowers_levels():
    reset_logging()
    logger = setup_logging(debug=True)
    assert logger.level == logging.DEBUG
    assert all(h.level == logging.DEBUG for h in logger.handlers)
    setup_logging()
    assert logger.level == logging.INFO


def test_module_loggers_share_application_handler(capsys):
    reset_logging()
    setup_logging()
    logging.getLogger("sheetverify.services.verify").info("from a module")
    assert capsys.readouterr().out == "INFO from a module\n"


def test_log_summary_convenience_function(capsys):
    reset_logging()
    setup_logging()
    assert logging.getLevelName(25) == "SUMMARY"
    log_summary("checks=2 passed=2 failed=0 errors=0")
    assert capsys.readouterr().out.strip() == "SUMMARY checks=2 passed=2 failed=0 errors=0"
    assert sheetverify.logging.init._logger is not None
