import logging
import logging.handlers

import pytest

from recommendation_service.logging_config import HTTP_LOGGERS, ThreadSafeLoggingConfig, get_logger


@pytest.fixture
def logging_config():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    config = ThreadSafeLoggingConfig()
    yield config
    config.stop()
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


def test_setup_routes_root_logger_through_queue(logging_config):
    logging_config.setup_logging(debug=False)

    root = logging.getLogger()
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0], logging.handlers.QueueHandler)
    assert root.level == logging.INFO
    assert all(logging.getLogger(name).level == logging.WARNING for name in HTTP_LOGGERS)


def test_setup_twice_replaces_listener(logging_config):
    logging_config.setup_logging(debug=True)
    first = logging_config._log_listener
    logging_config.setup_logging(debug=True)

    assert logging_config._log_listener is not first
    assert logging.getLogger().level == logging.DEBUG

    logging_config.stop()
    assert logging_config._log_listener is None


def test_get_logger():
    assert get_logger("recommendation_service.test").name == "recommendation_service.test"
