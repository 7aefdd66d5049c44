"""
Async database access helpers (raw SQL) using asyncpg.

The pool is created by the FastAPI lifespan (see `api/main.py`), stored on
`app.state` and handed to each repository explicitly. Nothing here keeps a
module-level pool.

Every helper borrows a connection with `pool.acquire(timeout=...)`; a full pool
raises `asyncio.TimeoutError` after `DB_ACQUIRE_TIMEOUT` seconds instead of
waiting forever.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg

from . import settings


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    url = settings.database_url()
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    return _sanitize_database_url(url)


async def create_pool(
    dsn: str | None = None,
    *,
    min_size: int | None = None,
    max_size: int | None = None,
    command_timeout: float | None = None,
) -> asyncpg.Pool:
    """
    Open a connection pool. At most `max_size` backend connections (5 by default).
    """
    return await asyncpg.create_pool(
        dsn=dsn or database_url(),
        min_size=min_size if min_size is not None else settings.pool_min_size(),
        max_size=max_size if max_size is not None else settings.pool_max_size(),
        command_timeout=command_timeout if command_timeout is not None else settings.command_timeout_s(),
    )


async def close_pool(pool: asyncpg.Pool | None) -> None:
    if pool is None:
        return None
    await pool.close()


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


async def fetch_one(pool: asyncpg.Pool, sql: str, *args: Any) -> dict[str, Any] | None:
    """
    Run a query and return a single row as a dict (or None).
    """
    async with pool.acquire(timeout=settings.acquire_timeout_s()) as con:
        row = await con.fetchrow(sql, *args)
    return _record_to_dict(row) if row is not None else None


async def fetch_all(pool: asyncpg.Pool, sql: str, *args: Any) -> list[dict[str, Any]]:
    """
    Run a query and return all rows as a list of dicts.
    """
    async with pool.acquire(timeout=settings.acquire_timeout_s()) as con:
        rows = await con.fetch(sql, *args)
    return [_record_to_dict(r) for r in rows]


async def execute(pool: asyncpg.Pool, sql: str, *args: Any) -> None:
    """
    Run a statement (INSERT/UPDATE/DELETE/DDL). No result returned.
    """
    async with pool.acquire(timeout=settings.acquire_timeout_s()) as con:
        await con.execute(sql, *args)
