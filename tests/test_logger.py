# File: tests/test_logger.py
import logging
from logging.handlers import RotatingFileHandler

import pytest

from tech_scout.errors import ErrorType, VisitError
from tech_scout.logger import configure, to_level


@pytest.fixture()
def restore_logger():
    yield
    configure()


def test_configure_replaces_handlers(tmp_path, restore_logger):
    log_file = tmp_path / "scout.log"
    lg = configure(level="DEBUG", log_file=log_file, log_format="%(levelname)s %(message)s")
    assert lg.level == logging.DEBUG
    assert [type(h) for h in lg.handlers] == [logging.StreamHandler, RotatingFileHandler]
    assert lg.propagate is False

    lg.debug("crawl started")
    for handler in lg.handlers:
        handler.flush()
    assert log_file.read_text(encoding="utf-8") == "DEBUG crawl started\n"

    assert len(configure().handlers) == 1


@pytest.mark.parametrize(
    "name,level",
    [("debug", logging.DEBUG), ("warn", logging.WARNING), ("ERROR", logging.ERROR), (None, logging.DEBUG),
     ("verbose", logging.DEBUG)],
)
def test_to_level(name, level):
    assert to_level(name) == level


def test_visit_error_carries_type():
    err = VisitError(ErrorType.RESPONSE_NOT_OK)
    assert err.error_type is ErrorType.RESPONSE_NOT_OK
    assert str(err) == "Response was not ok"
