"""Tests for finproj.core.utils.logging."""

import os

from loguru import logger

from finproj.core.config_schema import LoggingConfig
from finproj.core.utils.logging import setup_logging


class TestSetupLogging:
    def test_file_sink(self, tmp_dir):
        log_file = os.path.join(tmp_dir, "finproj.log")
        setup_logging(LoggingConfig(level="debug", file=log_file))
        logger.debug("schedule built")
        logger.remove()

        with open(log_file) as f:
            content = f.read()
        assert "schedule built" in content
        assert "DEBUG" in content

    def test_level_filters_file_output(self, tmp_dir):
        log_file = os.path.join(tmp_dir, "finproj.log")
        setup_logging(LoggingConfig(level="WARNING", file=log_file))
        logger.info("too chatty")
        logger.warning("contributions reached zero")
        logger.remove()

        with open(log_file) as f:
            content = f.read()
        assert "too chatty" not in content
        assert "contributions reached zero" in content

    def test_level_override(self, tmp_dir):
        log_file = os.path.join(tmp_dir, "finproj.log")
        setup_logging(LoggingConfig(level="ERROR", file=log_file), level="info")
        logger.info("override wins")
        logger.remove()

        with open(log_file) as f:
            assert "override wins" in f.read()

    def test_stderr_only(self, capsys):
        setup_logging(LoggingConfig(level="INFO"))
        logger.info("hello stderr")
        logger.remove()
        assert "hello stderr" in capsys.readouterr().err
