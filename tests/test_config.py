"""Tests for configuration loading in dumpview/config.py."""

from __future__ import annotations

import logging

import pytest

from dumpview.config import DEFAULT_PORT, ViewerConfig, configure_logging, load_config
from dumpview.errors import ConfigError


class TestPort:
    """The single positional argument."""

    def test_default_port(self):
        assert load_config([], environ={}).port == DEFAULT_PORT == 9337

    def test_positional_port(self):
        assert load_config(["9400"], environ={}).port == 9400

    def test_zero_allowed(self):
        assert load_config(["0"], environ={}).port == 0

    @pytest.mark.parametrize("port", ["65536", "-1"])
    def test_out_of_range(self, port):
        with pytest.raises(ConfigError):
            load_config([port], environ={})

    def test_not_a_number(self):
        with pytest.raises(SystemExit):
            load_config(["abc"], environ={})


class TestEnvironment:
    """Environment overrides."""

    def test_defaults(self):
        config = load_config([], environ={})
        assert config == ViewerConfig()

    def test_overrides(self):
        config = load_config(
            [],
            environ={
                "DUMPVIEW_HOST": "0.0.0.0",
                "DUMPVIEW_REFRESH": "0.5",
                "DUMPVIEW_LOG_FILE": "/tmp/dumpview.log",
                "DUMPVIEW_LOG_LEVEL": "debug",
            },
        )
        assert config.host == "0.0.0.0"
        assert config.refresh_interval == 0.5
        assert config.log_file == "/tmp/dumpview.log"
        assert config.log_level == "DEBUG"

    def test_empty_host_keeps_default(self):
        assert load_config([], environ={"DUMPVIEW_HOST": ""}).host == "127.0.0.1"

    def test_bad_log_level(self):
        with pytest.raises(ConfigError, match="log level"):
            load_config([], environ={"DUMPVIEW_LOG_LEVEL": "LOUD"})

    @pytest.mark.parametrize("refresh", ["fast", "0", "-1"])
    def test_bad_refresh(self, refresh):
        with pytest.raises(ConfigError):
            load_config([], environ={"DUMPVIEW_REFRESH": refresh})


class TestLogging:
    """Handler setup."""

    def test_file_handler_added(self, tmp_path):
        log_file = tmp_path / "dumpview.log"
        logger = configure_logging(ViewerConfig(log_file=str(log_file), log_level="INFO"))
        try:
            assert logger.level == logging.INFO
            assert not logger.propagate
            assert any(isinstance(h, logging.FileHandler) for h in logger.handlers)

            logging.getLogger("dumpview.ingest.listener").info("hello from test")
            for handler in logger.handlers:
                handler.flush()
            assert "hello from test" in log_file.read_text(encoding="utf-8")
        finally:
            for handler in logger.handlers:
                handler.close()
            logger.handlers.clear()

    def test_reconfigure_replaces_handlers(self):
        logger = configure_logging(ViewerConfig())
        configure_logging(ViewerConfig())
        try:
            assert len(logger.handlers) == 1
        finally:
            logger.handlers.clear()
