"""
Logging Configuration Tests
"""

import logging

import pytest

from kvcache.config import Settings
from kvcache.logging_config import setup_logging

CONFIGURED_LOGGERS = ("kvcache", "sqlalchemy.engine", "apscheduler")


@pytest.fixture(autouse=True)
def restore_loggers():
    """Undo dictConfig changes so later tests keep propagating to caplog"""
    root = logging.getLogger()
    saved_root = (root.level, list(root.handlers))
    saved = {
        name: (
            logging.getLogger(name).level,
            logging.getLogger(name).propagate,
            list(logging.getLogger(name).handlers),
        )
        for name in CONFIGURED_LOGGERS
    }

    yield

    root.setLevel(saved_root[0])
    root.handlers[:] = saved_root[1]
    for name, (level, propagate, handlers) in saved.items():
        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.propagate = propagate
        logger.handlers[:] = handlers


def test_debug_levels():
    setup_logging(Settings(_env_file=None, DEBUG=True))

    assert logging.getLogger("kvcache").level == logging.DEBUG
    assert logging.getLogger("sqlalchemy.engine").level == logging.INFO
    assert logging.getLogger("apscheduler").level == logging.WARNING
    assert logging.getLogger().level == logging.DEBUG


def test_default_levels():
    setup_logging(Settings(_env_file=None, DEBUG=False))

    assert logging.getLogger("kvcache").level == logging.INFO
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
    assert logging.getLogger().level == logging.INFO


def test_kvcache_logger_writes_standard_format(capsys):
    setup_logging(Settings(_env_file=None, DEBUG=False))

    logging.getLogger("kvcache.services.cache_service").info("Swept 3 expired keys")

    out = capsys.readouterr().out
    assert "[INFO] [kvcache.services.cache_service] Swept 3 expired keys" in out
