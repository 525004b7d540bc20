"""
Unit tests for environment configuration and application wiring.
"""

import logging
import os
from unittest.mock import patch

import pytest

from sharedsession.config.provider import EnvConfigProvider
from sharedsession.logging_config import HealthCheckFilter, get_logging_config
from sharedsession.modules.factory import SharedSessionFactory
from sharedsession.modules.store import MemoryCache, RedisCache


def test_session_option_defaults():
    with patch.dict(os.environ, {}, clear=True):
        options = EnvConfigProvider().get_session_options()

    assert options.idle_timeout == 1200
    assert options.io_timeout == 60
    assert options.cookie.name == ".AspNetCore.Session"
    assert options.cookie.httponly is True
    assert options.cookie.samesite == "lax"


def test_session_options_from_environment():
    env = {
        "SESSION_IDLE_TIMEOUT": "300",
        "SESSION_IO_TIMEOUT": "5",
        "SESSION_COOKIE_NAME": "shared",
        "SESSION_COOKIE_SECURE": "true",
        "SESSION_COOKIE_SAMESITE": "Strict",
        "SESSION_COOKIE_DOMAIN": "example.com",
    }
    with patch.dict(os.environ, env, clear=True):
        options = EnvConfigProvider().get_session_options()

    assert options.idle_timeout == 300
    assert options.io_timeout == 5
    assert options.cookie.name == "shared"
    assert options.cookie.secure is True
    assert options.cookie.samesite == "strict"
    assert options.cookie.domain == "example.com"


@pytest.mark.parametrize(
    "env",
    [
        {"SESSION_IDLE_TIMEOUT": "soon"},
        {"SESSION_IO_TIMEOUT": "0"},
        {"SESSION_COOKIE_SAMESITE": "sometimes"},
    ],
)
def test_invalid_session_options_raise(env):
    with patch.dict(os.environ, env, clear=True):
        with pytest.raises(ValueError):
            EnvConfigProvider().get_session_options()


def test_store_config():
    with patch.dict(os.environ, {"SESSION_STORE": "memory"}, clear=True):
        config = EnvConfigProvider().get_store_config()

    assert config.backend == "memory"
    assert not config.uses_redis
    assert config.instance_name == "session:"

    with patch.dict(os.environ, {"SESSION_STORE": "sql"}, clear=True):
        with pytest.raises(ValueError):
            EnvConfigProvider().get_store_config()


def test_api_config():
    with patch.dict(os.environ, {"API_PORT": "9000", "LOG_LEVEL": "debug"}, clear=True):
        config = EnvConfigProvider().get_api_config()

    assert config.port == 9000
    assert config.host == "0.0.0.0"
    assert config.log_level == "DEBUG"


def test_factory_builds_memory_stack(tmp_path):
    env = {
        "SESSION_STORE": "memory",
        "DATA_PROTECTION_KEY_PATH": str(tmp_path / "keys" / "session.key"),
    }
    with patch.dict(os.environ, env, clear=True):
        components = SharedSessionFactory.build(EnvConfigProvider())

    assert isinstance(components.cache, MemoryCache)
    assert (tmp_path / "keys" / "session.key").exists()
    assert components.session_service.session_store is components.session_store


def test_factory_builds_redis_stack(tmp_path):
    env = {
        "SESSION_STORE": "redis",
        "REDIS_URL": "redis://cache.internal:6380/2",
        "SESSION_CACHE_PREFIX": "app:",
        "DATA_PROTECTION_KEY_PATH": str(tmp_path / "session.key"),
    }
    with patch.dict(os.environ, env, clear=True):
        components = SharedSessionFactory.build(EnvConfigProvider())

    assert isinstance(components.cache, RedisCache)
    assert components.cache.instance_name == "app:"


def test_logging_config_filters_health_checks():
    config = get_logging_config("DEBUG")
    assert config["loggers"]["sharedsession"]["level"] == "DEBUG"

    health_filter = HealthCheckFilter()
    record = _access_record('127.0.0.1 - "GET /health HTTP/1.1" 200')
    other = _access_record('127.0.0.1 - "GET /api/session/abc HTTP/1.1" 200')

    assert health_filter.filter(record) is False
    assert health_filter.filter(other) is True


def _access_record(message):
    return logging.LogRecord("uvicorn.access", logging.INFO, __file__, 1, message, None, None)
