"""Configuration providers."""

from .provider import (
    APIConfig,
    ConfigProvider,
    CookieOptions,
    EnvConfigProvider,
    ProtectionConfig,
    SessionOptions,
    StoreConfig,
)

__all__ = [
    "APIConfig",
    "ConfigProvider",
    "CookieOptions",
    "EnvConfigProvider",
    "ProtectionConfig",
    "SessionOptions",
    "StoreConfig",
]
