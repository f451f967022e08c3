"""
Unit tests for the root logging setup.
"""

import json
import logging

import pytest

from coach_marketplace.core import logging as logging_setup
from coach_marketplace.core.config import settings


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def test_configure_logging_installs_single_handler(restore_root_logger, monkeypatch):
    monkeypatch.setattr(settings, "log_level", "debug")
    monkeypatch.setattr(settings, "log_format", "plain")

    logging_setup.configure_logging()
    logging_setup.configure_logging()

    assert len(restore_root_logger.handlers) == 1
    assert restore_root_logger.level == logging.DEBUG


def test_json_formatter_emits_json():
    record = logging.LogRecord(
        name="coach_marketplace.test",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="scored %d coaches",
        args=(3,),
        exc_info=None,
    )

    payload = json.loads(logging_setup.JsonFormatter().format(record))

    assert payload["level"] == "WARNING"
    assert payload["name"] == "coach_marketplace.test"
    assert payload["message"] == "scored 3 coaches"
