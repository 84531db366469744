"""Tests for logging configuration."""

import io
import logging

import pytest

from digraph.logs import ColorFormatter, ExitStreamHandler, fatal, setup_logging


def record(level: int, msg: str) -> logging.LogRecord:
    return logging.LogRecord("test", level, __file__, 1, msg, None, None)


def test_plain_formatter():
    formatter = ColorFormatter(use_color=False)
    assert formatter.format(record(logging.WARNING, "hi")) == "WARNING: hi"


def test_color_formatter():
    formatter = ColorFormatter(use_color=True)
    text = formatter.format(record(logging.ERROR, "bad"))
    assert text == "\x1b[31;1mERROR:\x1b[0m bad"


def test_exit_handler_below_threshold():
    stream = io.StringIO()
    handler = ExitStreamHandler(stream, logging.ERROR)
    handler.emit(record(logging.WARNING, "careful"))
    assert stream.getvalue() == "careful\n"


def test_exit_handler_at_threshold():
    stream = io.StringIO()
    handler = ExitStreamHandler(stream, logging.ERROR)
    with pytest.raises(SystemExit) as info:
        handler.emit(record(logging.ERROR, "bad"))
    assert info.value.code == 1
    assert stream.getvalue() == "bad\n"


def test_setup_logging():
    stream = io.StringIO()
    setup_logging(stream, logging.INFO, logging.FATAL)
    logging.debug("hidden")
    logging.info("shown")
    logging.error("survived")
    assert stream.getvalue() == "INFO: shown\nERROR: survived\n"
    with pytest.raises(SystemExit):
        fatal("the end")
    assert stream.getvalue().endswith("FATAL: the end\n")


def test_setup_logging_rejects_bad_levels():
    with pytest.raises(AssertionError):
        setup_logging(io.StringIO(), logging.ERROR, logging.WARNING)
