"""
Tests for configuration loading and logging configuration.
"""

import logging
import logging.config
import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from typed_session.logging_config import (
    SESSION_STORE_LOGGER,
    HealthCheckFilter,
    get_logging_config,
)
from typed_session.modules.config import ConfigModule, get_config, reset_config
from typed_session.modules.storage import StorageModule


@pytest.fixture(autouse=True)
def fresh_config():
    reset_config()
    yield
    reset_config()


class TestConfigModule:
    def test_defaults(self, monkeypatch):
        for name in (
            "REDIS_HOST",
            "REDIS_PORT",
            "SESSION_TTL",
            "SESSION_COOKIE_NAME",
            "LOG_LEVEL",
            "SESSION_LOG_LEVEL",
        ):
            monkeypatch.delenv(name, raising=False)

        config = ConfigModule()

        assert config.get("redis_host") == "localhost"
        assert config.get("redis_port") == 6379
        assert config.get("session_ttl") == 3600
        assert config.get("session_cookie_name") == "session_id"
        assert config.get("log_level") == "INFO"
        assert config.get("redis_password") is None
        assert config.get("session_log_level") is None

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("REDIS_HOST", "redis.internal")
        monkeypatch.setenv("SESSION_TTL", "60")
        monkeypatch.setenv("SESSION_COOKIE_NAME", "sid")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("DEBUG", "true")

        config = ConfigModule()

        assert config.get("redis_host") == "redis.internal"
        assert config.get("session_ttl") == 60
        assert config.get("session_cookie_name") == "sid"
        assert config.get("log_level") == "DEBUG"
        assert config.get("debug") is True

    def test_session_log_level_from_environment(self, monkeypatch):
        monkeypatch.setenv("SESSION_LOG_LEVEL", "debug")
        assert ConfigModule().get("session_log_level") == "DEBUG"

    def test_kubernetes_style_redis_port(self, monkeypatch):
        monkeypatch.setenv("REDIS_PORT", "tcp://10.0.0.12:6380")
        assert ConfigModule().get("redis_port") == 6380

    def test_missing_required_key_rejected(self, monkeypatch):
        monkeypatch.setenv("SESSION_COOKIE_NAME", "")

        with pytest.raises(ValueError) as exc_info:
            ConfigModule()
        assert "session_cookie_name" in str(exc_info.value)

    def test_set_and_get_all(self):
        config = ConfigModule()
        config.set("session_ttl", 5)

        values = config.get_all()
        assert values["session_ttl"] == 5
        values["session_ttl"] = 10
        assert config.get("session_ttl") == 5

    def test_schema_documents_required_keys(self):
        schema = ConfigModule.get_config_schema()
        assert "session_ttl" in schema["required"]
        assert "redis_password" in schema["optional"]

    def test_get_config_is_singleton(self):
        assert get_config() is get_config()

    def test_storage_built_from_config(self, monkeypatch):
        monkeypatch.setenv("REDIS_HOST", "redis.internal")
        monkeypatch.setenv("REDIS_PORT", "6380")
        monkeypatch.setenv("REDIS_DB", "2")

        storage = StorageModule.from_config(ConfigModule())

        assert storage.url == "redis://redis.internal:6380/2"


class TestLoggingConfig:
    def _record(self, name, message):
        return logging.LogRecord(name, logging.INFO, __file__, 1, message, None, None)

    def test_health_checks_filtered(self):
        health_filter = HealthCheckFilter()

        assert not health_filter.filter(
            self._record("uvicorn.access", '127.0.0.1 - "GET /health HTTP/1.1" 200')
        )
        assert health_filter.filter(
            self._record("uvicorn.access", '127.0.0.1 - "GET /whoami HTTP/1.1" 200')
        )
        assert health_filter.filter(self._record("typed_session.main", "GET /health"))

    def test_log_level_applied(self):
        config = get_logging_config("DEBUG")
        assert config["loggers"]["typed_session"]["level"] == "DEBUG"

    def test_config_is_valid_for_dict_config(self):
        logging.config.dictConfig(get_logging_config())
        assert logging.getLogger("typed_session").level == logging.INFO

    def test_session_store_level_defaults_to_app_level(self):
        config = get_logging_config("WARNING")
        assert config["loggers"][SESSION_STORE_LOGGER]["level"] == "WARNING"

    def test_session_store_level_set_separately(self):
        logging.config.dictConfig(get_logging_config("INFO", "DEBUG"))

        assert logging.getLogger("typed_session").level == logging.INFO
        store_logger = logging.getLogger(SESSION_STORE_LOGGER)
        assert store_logger.level == logging.DEBUG
        assert store_logger.isEnabledFor(logging.DEBUG)
        # Store records reach the application handler through propagation
        assert store_logger.propagate
        assert not store_logger.handlers

    def test_session_store_logger_matches_store_module(self):
        from typed_session.modules.session import session

        assert session.logger.name.startswith(SESSION_STORE_LOGGER)
