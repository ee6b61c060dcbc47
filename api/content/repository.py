"""
Post persistence (raw SQL).
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from fastapi import Depends

from core import db
from publishing import policy


class PostRepository:
    def __init__(self, database: db.Database) -> None:
        self._db = database

    async def latest_visible_post(self) -> dict[str, Any] | None:
        return await self._db.fetch_one(
            f"""
            SELECT id, title, body_md, is_premium, published_at, updated_at
            FROM posts
            WHERE {policy.POST_VISIBLE_SQL}
            ORDER BY {policy.LATEST_POST_ORDER_SQL}
            LIMIT 1
            """
        )

    async def upsert_post(
        self,
        *,
        post_id: int | None,
        title: str,
        body_md: str,
        published_at: datetime | None,
    ) -> int | None:
        """
        Update `post_id` in place, or insert a new premium post when it is None.

        Returns None when `post_id` does not exist.
        """
        if post_id is not None:
            return await self._update(post_id, title=title, body_md=body_md, published_at=published_at)

        row = await self._db.fetch_one(
            """
            INSERT INTO posts (title, body_md, is_premium, published_at)
            VALUES ($1, $2, true, $3)
            RETURNING id
            """,
            title,
            body_md,
            published_at,
        )
        if row is None:
            raise RuntimeError("Failed to insert post.")
        return int(row["id"])

    async def _update(
        self,
        post_id: int,
        *,
        title: str,
        body_md: str,
        published_at: datetime | None,
    ) -> int | None:
        fields: dict[str, Any] = {"title": title, "body_md": body_md}
        if published_at is not None:
            fields["published_at"] = published_at

        assignments, args = db.set_clause(fields)
        row = await self._db.fetch_one(
            f"""
            UPDATE posts
            SET {assignments}, updated_at = now()
            WHERE id = ${len(args) + 1}
            RETURNING id
            """,
            *args,
            post_id,
        )
        return int(row["id"]) if row is not None else None


def get_repository(database: db.Database = Depends(db.get_database)) -> PostRepository:
    return PostRepository(database)
