"""
Process-wide settings.

Settings are read from the environment once at startup (`load_settings`) and
stored on `app.state.settings`. Components get them through `get_settings`
instead of reading `os.environ` on their own.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from fastapi import Request

DEFAULT_PORT = 3000


def _env_str(environ: Mapping[str, str], name: str, default: str = "") -> str:
    return (environ.get(name) or "").strip() or default


def _env_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = (environ.get(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(environ: Mapping[str, str], name: str, default: float) -> float:
    raw = (environ.get(name) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_bool(environ: Mapping[str, str], name: str, default: bool = False) -> bool:
    raw = (environ.get(name) or "").strip().lower()
    if not raw:
        return default
    return raw in {"1", "true", "yes", "on"}


def _env_list(environ: Mapping[str, str], name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = (environ.get(name) or "").strip()
    if not raw:
        return default
    items = tuple(part.strip() for part in raw.split(",") if part.strip())
    return items or default


@dataclass(frozen=True)
class Settings:
    database_url: str = ""
    database_ssl: bool = False
    db_pool_min_size: int = 1
    db_pool_max_size: int = 5
    db_command_timeout: float = 30.0
    # Empty means every admin request is rejected.
    admin_token: str = ""
    cors_origins: tuple[str, ...] = ("*",)
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    env = os.environ if environ is None else environ
    min_size = max(_env_int(env, "DB_POOL_MIN_SIZE", 1), 0)
    max_size = max(_env_int(env, "DB_POOL_MAX_SIZE", 5), 1)
    return Settings(
        database_url=_env_str(env, "DATABASE_URL"),
        database_ssl=_env_bool(env, "DATABASE_SSL"),
        db_pool_min_size=min(min_size, max_size),
        db_pool_max_size=max_size,
        db_command_timeout=_env_float(env, "DB_COMMAND_TIMEOUT", 30.0),
        admin_token=_env_str(env, "ADMIN_TOKEN"),
        cors_origins=_env_list(env, "CORS_ORIGINS", ("*",)),
        log_level=_env_str(env, "LOG_LEVEL", "INFO").upper(),
        host=_env_str(env, "HOST", "0.0.0.0"),
        port=_env_int(env, "PORT", DEFAULT_PORT),
    )


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
