"""
Shared pytest fixtures for SharedSession tests.

This module provides common fixtures including:
- Redis mocks for cache tests
- An in-memory session stack (cache, store, protection, bridge service)
- FastAPI test client utilities
"""

import os
import sys
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sharedsession.app import create_app
from sharedsession.config.provider import CookieOptions, SessionOptions
from sharedsession.modules.factory import SharedSessionFactory
from sharedsession.modules.protection import AesGcmProtectionProvider
from sharedsession.modules.store import DistributedSessionStore, MemoryCache


# =============================================================================
# Redis Mocking Infrastructure
# =============================================================================

@pytest.fixture
def mock_redis():
    """Create a mock async Redis client for cache operations."""
    redis = AsyncMock()
    redis.get = AsyncMock(return_value=None)
    redis.set = AsyncMock(return_value=True)
    redis.expire = AsyncMock(return_value=True)
    redis.delete = AsyncMock(return_value=1)
    redis.ping = AsyncMock(return_value=True)
    redis.aclose = AsyncMock()
    return redis


# =============================================================================
# Session Stack
# =============================================================================

@pytest.fixture
def memory_cache():
    """Fresh in-memory cache per test."""
    return MemoryCache()


@pytest.fixture
def session_store(memory_cache):
    return DistributedSessionStore(memory_cache)


@pytest.fixture
def protection_provider():
    """Protection provider with a random master key."""
    return AesGcmProtectionProvider.ephemeral()


@pytest.fixture
def session_options():
    return SessionOptions(idle_timeout=1200, io_timeout=5, cookie=CookieOptions())


@pytest.fixture
def components(memory_cache, protection_provider, session_options):
    return SharedSessionFactory.build_from(memory_cache, protection_provider, session_options)


@pytest.fixture
def session_service(components):
    return components.session_service


@pytest.fixture
def app(components):
    return create_app(components)


@pytest.fixture
def client(app):
    return TestClient(app)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: Integration tests requiring infrastructure"
    )
