# File: tests/test_logger.py
import logging
from logging.handlers import RotatingFileHandler

import pytest

from webmail_harvester.logger import LOGGER_NAME, configure, get_logger, init_logging


@pytest.fixture(autouse=True)
def restore_logger():
    yield
    init_logging()


def test_init_logging_writes_to_file(tmp_path):
    log_file = tmp_path / "harvest.log"
    lg = init_logging("DEBUG", log_file=log_file, log_format="%(levelname)s %(message)s")

    assert lg.level == logging.DEBUG
    assert any(isinstance(h, RotatingFileHandler) for h in lg.handlers)
    lg.debug("hello file")
    for handler in lg.handlers:
        handler.flush()
    assert "DEBUG hello file" in log_file.read_text(encoding="utf-8")


def test_configure_appends_handlers_when_asked():
    lg = init_logging()
    before = len(lg.handlers)
    configure(replace_handlers=False)
    assert len(lg.handlers) == before + 1


def test_get_logger_children():
    assert get_logger().name == LOGGER_NAME
    assert get_logger("crawler").name == f"{LOGGER_NAME}.crawler"
