"""Config management for OdinAuth.

Reads `config.ini` from the data directory (`ODINAUTH_HOME`, defaults to the
project root).
"""

from __future__ import annotations

import configparser
import dataclasses
import os
import pathlib
from typing import Optional

from .cookie import CLOCK_SKEW_SECONDS, MAX_AGE_SECONDS
from .logging_config import get_logger

logger = get_logger(__name__)

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]

# DATA_DIR holds config.ini and odinauth.log.
DATA_DIR = pathlib.Path(os.environ.get("ODINAUTH_HOME", str(PROJECT_ROOT)))
DEFAULT_CONFIG_PATH = DATA_DIR / "config.ini"


@dataclasses.dataclass
class CookieConfig:
    """Shared secret and time window used to issue and verify cookies."""

    secret: str
    max_age: int = MAX_AGE_SECONDS
    clock_skew: int = CLOCK_SKEW_SECONDS
    cookie_name: str = "odin_auth"

    def __repr__(self) -> str:
        return (
            f"CookieConfig(secret='***', max_age={self.max_age}, "
            f"clock_skew={self.clock_skew}, cookie_name={self.cookie_name!r})"
        )


@dataclasses.dataclass
class ServerConfig:
    host: str = "127.0.0.1"
    port: int = 8080


@dataclasses.dataclass
class LoggingConfig:
    level: str = "INFO"


@dataclasses.dataclass
class OdinAuthConfig:
    cookie: CookieConfig
    server: ServerConfig = dataclasses.field(default_factory=ServerConfig)
    logging: LoggingConfig = dataclasses.field(default_factory=LoggingConfig)

    @property
    def secret(self) -> str:
        return self.cookie.secret


def load_config(config_path: Optional[pathlib.Path] = None) -> OdinAuthConfig:
    """Load configuration from config.ini.

    Defaults to `config.ini` in the data directory.
    """
    path = config_path or DEFAULT_CONFIG_PATH
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    parser = configparser.ConfigParser(interpolation=None)
    parser.read(path, encoding="utf-8")

    secret = parser.get("odinauth", "secret", fallback="").strip()
    if not secret:
        raise ValueError(f"[odinauth] secret is not set in {path}")

    cookie = CookieConfig(
        secret=secret,
        max_age=parser.getint("odinauth", "max_age", fallback=MAX_AGE_SECONDS),
        clock_skew=parser.getint("odinauth", "clock_skew", fallback=CLOCK_SKEW_SECONDS),
        cookie_name=parser.get("odinauth", "cookie_name", fallback="odin_auth").strip(),
    )
    if cookie.max_age < 0 or cookie.clock_skew < 0:
        raise ValueError("max_age and clock_skew must not be negative")

    server = ServerConfig(
        host=parser.get("server", "host", fallback="127.0.0.1"),
        port=parser.getint("server", "port", fallback=8080),
    )

    logging_config = LoggingConfig(
        level=parser.get("logging", "level", fallback="INFO").strip().upper(),
    )

    logger.debug(f"Loaded config from {path}")
    return OdinAuthConfig(cookie=cookie, server=server, logging=logging_config)


_cached_config: Optional[OdinAuthConfig] = None


def get_config() -> OdinAuthConfig:
    """Return the cached config singleton. Loads from disk on first call."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reset_config_cache() -> None:
    """Clear the cached config (useful for tests)."""
    global _cached_config
    _cached_config = None


def write_config(
    config_path: pathlib.Path,
    secret: str,
    max_age: int = MAX_AGE_SECONDS,
    clock_skew: int = CLOCK_SKEW_SECONDS,
) -> pathlib.Path:
    """Write a fresh config.ini with the given secret and time window."""
    parser = configparser.ConfigParser(interpolation=None)
    parser["odinauth"] = {
        "secret": secret,
        "max_age": str(max_age),
        "clock_skew": str(clock_skew),
        "cookie_name": "odin_auth",
    }
    parser["server"] = {
        "host": "127.0.0.1",
        "port": "8080",
    }
    parser["logging"] = {
        "level": "INFO",
    }

    config_path.parent.mkdir(parents=True, exist_ok=True)
    with config_path.open("w", encoding="utf-8") as handle:
        parser.write(handle)
    return config_path
