import logging

import pytest
from rich.logging import RichHandler

from ignoretree.log import init_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_init_logging_uses_rich_handler():
    init_logging("debug")
    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0], RichHandler)


def test_unknown_level_falls_back_to_info():
    init_logging("chatty")
    assert logging.getLogger().level == logging.INFO
