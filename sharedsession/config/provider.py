"""Configuration provider following Black Box Design principles."""
import os
from dataclasses import dataclass, field
from typing import Optional, Protocol


def _env_int(name: str, default: int) -> int:
    """Read a positive integer environment variable."""
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


def _env_bool(name: str, default: bool) -> bool:
    return os.getenv(name, str(default)).lower() == "true"


@dataclass
class CookieOptions:
    """Session cookie settings."""
    name: str = ".AspNetCore.Session"
    path: str = "/"
    domain: Optional[str] = None
    secure: bool = False
    httponly: bool = True
    samesite: str = "lax"


@dataclass
class SessionOptions:
    """Session lifetime settings, in seconds."""
    idle_timeout: int = 1200
    io_timeout: int = 60
    cookie: CookieOptions = field(default_factory=CookieOptions)


@dataclass
class StoreConfig:
    """Session store backend configuration."""
    backend: str
    redis_url: str
    redis_password: Optional[str]
    instance_name: str

    @property
    def uses_redis(self) -> bool:
        return self.backend == "redis"


@dataclass
class ProtectionConfig:
    """Key protection configuration."""
    key_path: str


@dataclass
class APIConfig:
    """API configuration."""
    port: int
    host: str
    debug: bool
    log_level: str


class ConfigProvider(Protocol):
    """Protocol for configuration providers."""

    def get_session_options(self) -> SessionOptions:
        """Get session lifetime and cookie options."""
        ...

    def get_store_config(self) -> StoreConfig:
        """Get session store configuration."""
        ...

    def get_protection_config(self) -> ProtectionConfig:
        """Get key protection configuration."""
        ...

    def get_api_config(self) -> APIConfig:
        """Get API configuration."""
        ...


class EnvConfigProvider:
    """Environment-based configuration provider."""

    def get_session_options(self) -> SessionOptions:
        """Get session options from environment variables."""
        samesite = os.getenv("SESSION_COOKIE_SAMESITE", "lax").lower()
        if samesite not in ("lax", "strict", "none"):
            raise ValueError(
                f"SESSION_COOKIE_SAMESITE must be lax, strict or none, got {samesite!r}"
            )

        cookie = CookieOptions(
            name=os.getenv("SESSION_COOKIE_NAME", ".AspNetCore.Session"),
            path=os.getenv("SESSION_COOKIE_PATH", "/"),
            domain=os.getenv("SESSION_COOKIE_DOMAIN") or None,
            secure=_env_bool("SESSION_COOKIE_SECURE", False),
            httponly=True,
            samesite=samesite,
        )

        return SessionOptions(
            idle_timeout=_env_int("SESSION_IDLE_TIMEOUT", 1200),
            io_timeout=_env_int("SESSION_IO_TIMEOUT", 60),
            cookie=cookie,
        )

    def get_store_config(self) -> StoreConfig:
        """Get session store configuration from environment variables."""
        backend = os.getenv("SESSION_STORE", "redis").lower()
        if backend not in ("redis", "memory"):
            raise ValueError(f"SESSION_STORE must be 'redis' or 'memory', got {backend!r}")

        return StoreConfig(
            backend=backend,
            redis_url=os.getenv("REDIS_URL", "redis://localhost:6379/0"),
            redis_password=os.getenv("REDIS_PASSWORD"),  # Optional: for authenticated Redis
            instance_name=os.getenv("SESSION_CACHE_PREFIX", "session:"),
        )

    def get_protection_config(self) -> ProtectionConfig:
        """Get key protection configuration from environment variables."""
        # Every application sharing sessions must point at the same key file
        return ProtectionConfig(
            key_path=os.getenv("DATA_PROTECTION_KEY_PATH", "./keys/session.key"),
        )

    def get_api_config(self) -> APIConfig:
        """Get API configuration from environment variables."""
        return APIConfig(
            port=_env_int("API_PORT", 8080),
            host=os.getenv("API_HOST", "0.0.0.0"),
            debug=_env_bool("API_DEBUG", False),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
