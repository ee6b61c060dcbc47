"""
Content business logic.

Scope:
- latest published post for readers (excerpt only)
- admin create/update with publish-state handling
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from fastapi import HTTPException

from publishing import policy

from . import schemas
from .repository import PostRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PostWrite:
    post_id: int | None
    title: str
    body_md: str
    publish: bool


def validate_write(payload: schemas.PostWriteRequest | None) -> PostWrite:
    if payload is None:
        payload = schemas.PostWriteRequest()
    title = payload.title or ""
    body_md = payload.body_md or ""
    if not title.strip() or not body_md.strip():
        raise HTTPException(status_code=400, detail="title/body_md required")
    return PostWrite(
        # Identity ids start at 1; a falsy id means insert.
        post_id=payload.id or None,
        title=title,
        body_md=body_md,
        publish=bool(payload.publish),
    )


async def latest_post(repo: PostRepository) -> dict:
    row = await repo.latest_visible_post()
    if row is None:
        return {"item": None}
    return {
        "item": {
            "id": int(row["id"]),
            "title": str(row["title"]),
            "published_at": row["published_at"],
            "excerpt": policy.excerpt(row.get("body_md")),
        }
    }


async def save_post(
    payload: schemas.PostWriteRequest | None,
    *,
    repo: PostRepository,
    now: datetime,
) -> dict:
    write = validate_write(payload)
    published_at = policy.effective_published_at(write.publish, now=now)

    post_id = await repo.upsert_post(
        post_id=write.post_id,
        title=write.title,
        body_md=write.body_md,
        published_at=published_at,
    )
    if post_id is None:
        # Lenient contract: unknown id is reported as {"id": null}, not 404.
        logger.warning("post_update_missing id=%s", write.post_id)
    else:
        logger.info("post_saved id=%s published=%s", post_id, published_at is not None)
    return {"id": post_id}
