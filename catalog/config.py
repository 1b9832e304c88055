"""
Environment-driven settings for the inventory catalog.

``FLASK_ENV`` selects one of the settings classes below; every other value is
read through ``EnvReader`` so malformed input falls back to a default and is
reported in ``ENV_DIAGNOSTICS`` instead of failing at import time.
"""
from __future__ import annotations

import os
from typing import Mapping

ENVIRONMENTS = ("development", "testing", "staging", "production")
CUSTOM_ID_MAX_WIDTH_DEFAULT = 64
CUSTOM_ID_MAX_WIDTH_LIMIT = 256

_BOOL_WORDS = {
    "1": True, "true": True, "yes": True, "on": True,
    "0": False, "false": False, "no": False, "off": False,
}


class EnvReader:
    """Typed view over a mapping of environment variables."""

    def __init__(self, source: Mapping[str, str] | None = None):
        self._source = dict(os.environ if source is None else source)
        self.warnings: list[str] = []

    def _raw(self, key: str) -> str | None:
        raw = self._source.get(key)
        if raw is None or not raw.strip():
            return None
        return raw.strip()

    def _fallback(self, key: str, raw: str, expected: str, default):
        self.warnings.append(f"{key}={raw!r} is not a valid {expected}; using {default!r}.")
        return default

    def str(self, key: str, default: str | None = None) -> str | None:
        raw = self._raw(key)
        return default if raw is None else raw

    def int(self, key: str, default: int = 0) -> int:
        raw = self._raw(key)
        if raw is None:
            return default
        try:
            return int(raw)
        except ValueError:
            return self._fallback(key, raw, "integer", default)

    def bool(self, key: str, default: bool = False) -> bool:
        raw = self._raw(key)
        if raw is None:
            return default
        parsed = _BOOL_WORDS.get(raw.lower())
        if parsed is None:
            return self._fallback(key, raw, "boolean", default)
        return parsed

    def bounded_int(self, key: str, default: int, *, low: int, high: int) -> int:
        value = self.int(key, default)
        if low <= value <= high:
            return value
        return self._fallback(key, str(value), f"integer in {low}..{high}", default)


def _environment_name(reader: EnvReader) -> str:
    name = (reader.str("FLASK_ENV") or "development").lower()
    if name not in ENVIRONMENTS:
        raise RuntimeError(f"Invalid FLASK_ENV={name!r}. Expected one of {list(ENVIRONMENTS)}.")
    return name


def _database_url(reader: EnvReader) -> str | None:
    url = reader.str("DATABASE_URL")
    # Heroku-style URLs use the scheme SQLAlchemy 1.4+ no longer accepts
    if url and url.startswith("postgres://"):
        return "postgresql://" + url[len("postgres://"):]
    return url


def _resolve_custom_id_max_width(reader: EnvReader) -> int:
    return reader.bounded_int(
        "CUSTOM_ID_MAX_WIDTH",
        CUSTOM_ID_MAX_WIDTH_DEFAULT,
        low=1,
        high=CUSTOM_ID_MAX_WIDTH_LIMIT,
    )


env = EnvReader()
ACTIVE_ENV = _environment_name(env)
_DATABASE_URL = _database_url(env)
_LOCAL_SQLITE = "sqlite:///" + os.path.join(
    os.path.abspath(os.path.dirname(__file__)), "..", "instance", "catalog.db"
)


class BaseConfig:
    ENV = ACTIVE_ENV
    SECRET_KEY = env.str("FLASK_SECRET_KEY", "catalog-dev-secret")
    JSON_SORT_KEYS = False
    LOG_LEVEL = env.str("LOG_LEVEL", "WARNING")

    SQLALCHEMY_DATABASE_URI = _DATABASE_URL
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_pre_ping": True,
        "pool_size": env.int("SQLALCHEMY_POOL_SIZE", 10),
        "max_overflow": env.int("SQLALCHEMY_MAX_OVERFLOW", 20),
        "pool_timeout": env.int("SQLALCHEMY_POOL_TIMEOUT", 30),
        "pool_recycle": env.int("SQLALCHEMY_POOL_RECYCLE", 1800),
    }

    # Upper bound for D<n>/X<n> widths in custom ID formats
    CUSTOM_ID_MAX_WIDTH = _resolve_custom_id_max_width(env)


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    LOG_LEVEL = env.str("LOG_LEVEL", "DEBUG")
    SQLALCHEMY_DATABASE_URI = _DATABASE_URL or _LOCAL_SQLITE


class TestingConfig(BaseConfig):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"


class StagingConfig(BaseConfig):
    DEBUG = False


class ProductionConfig(BaseConfig):
    DEBUG = False
    LOG_LEVEL = env.str("LOG_LEVEL", "INFO")


config_map = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "staging": StagingConfig,
    "production": ProductionConfig,
}

Config = config_map[ACTIVE_ENV]
ENV_DIAGNOSTICS = {
    "active": ACTIVE_ENV,
    "database_configured": _DATABASE_URL is not None,
    "warnings": tuple(env.warnings),
}
