"""
Async database access helpers (raw SQL) using asyncpg.

`Database` owns the connection pool. The FastAPI lifespan connects it on
startup and closes it on shutdown (see `api/main.py`); request handlers reach
it through `get_database`.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import asyncio
import ssl
from collections.abc import Mapping
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg
from fastapi import Request

from .config import Settings

# Errors raised while talking to Postgres. Wrapped into DatabaseError so the
# HTTP layer does not need to know about asyncpg.
_DRIVER_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError)


class DatabaseError(RuntimeError):
    pass


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def _ssl_context(enabled: bool) -> ssl.SSLContext | None:
    """
    Hosted Postgres providers often serve self-signed certificates, so TLS is
    used for transport only (no certificate verification).
    """
    if not enabled:
        return None
    ctx = ssl.create_default_context()
    ctx.check_hostname = False
    ctx.verify_mode = ssl.CERT_NONE
    return ctx


def set_clause(fields: Mapping[str, Any], *, start: int = 1) -> tuple[str, list[Any]]:
    """
    Build `col = $n, ...` for an UPDATE from the given column/value pairs.

    Column names come from code, never from request input.
    """
    assignments = [f"{column} = ${start + i}" for i, column in enumerate(fields)]
    return ", ".join(assignments), list(fields.values())


class Database:
    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._pool: asyncpg.Pool | None = None

    def dsn(self) -> str:
        url = self._settings.database_url.strip()
        if not url:
            raise RuntimeError("DATABASE_URL is not set.")
        return _sanitize_database_url(url)

    async def connect(self) -> None:
        if self._pool is not None:
            return None
        self._pool = await asyncpg.create_pool(
            dsn=self.dsn(),
            min_size=self._settings.db_pool_min_size,
            max_size=self._settings.db_pool_max_size,
            command_timeout=self._settings.db_command_timeout,
            ssl=_ssl_context(self._settings.database_ssl),
        )

    async def close(self) -> None:
        if self._pool is None:
            return None
        await self._pool.close()
        self._pool = None

    def pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise RuntimeError("DB pool is not initialized. Call connect() on startup.")
        return self._pool

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        try:
            row = await self.pool().fetchrow(sql, *args)
        except _DRIVER_ERRORS as exc:
            raise DatabaseError(str(exc) or type(exc).__name__) from exc
        return dict(row) if row is not None else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        try:
            rows = await self.pool().fetch(sql, *args)
        except _DRIVER_ERRORS as exc:
            raise DatabaseError(str(exc) or type(exc).__name__) from exc
        return [dict(r) for r in rows]

    async def execute(self, sql: str, *args: Any) -> None:
        """
        Run a statement (INSERT/UPDATE/DELETE/DDL). No result returned.
        """
        try:
            await self.pool().execute(sql, *args)
        except _DRIVER_ERRORS as exc:
            raise DatabaseError(str(exc) or type(exc).__name__) from exc


def get_database(request: Request) -> Database:
    return request.app.state.db
