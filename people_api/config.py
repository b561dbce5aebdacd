"""Service configuration read from the environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

DEFAULT_PORT = "8080"
DEFAULT_SSLMODE = "disable"

_REQUIRED = ("DB_USER", "DB_PASSWORD", "DB_HOST", "DB_PORT", "DB_NAME")


class ConfigError(Exception):
    """Raised when a required setting is missing."""


@dataclass(frozen=True)
class Config:
    """Listening port and database connection string."""

    port: str
    postgres: str


def load(environ: Mapping[str, str] | None = None) -> Config:
    """Build a Config from environment variables.

    Empty values count as unset. Raises ConfigError when a database
    setting is missing.
    """
    env = os.environ if environ is None else environ

    port = env.get("PORT") or DEFAULT_PORT
    required = {}
    for key in _REQUIRED:
        value = env.get(key) or ""
        if not value:
            raise ConfigError(f"{key} is not defined")
        required[key] = value
    sslmode = env.get("DB_SSLMODE") or DEFAULT_SSLMODE

    postgres = (
        f"postgres://{required['DB_USER']}:{required['DB_PASSWORD']}"
        f"@{required['DB_HOST']}:{required['DB_PORT']}/{required['DB_NAME']}"
        f"?sslmode={sslmode}"
    )
    return Config(port=port, postgres=postgres)