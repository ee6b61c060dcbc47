"""
Airdrop calendar business logic.
"""

from __future__ import annotations

import logging
from datetime import datetime

from fastapi import HTTPException

from publishing import policy

from . import schemas
from .repository import AirdropFields, AirdropRepository

logger = logging.getLogger(__name__)

LISTING_FIELDS = ("id", "name", "subtitle", "score", "amount", "time_text", "badge")


def validate_write(payload: schemas.AirdropWriteRequest | None) -> schemas.AirdropWriteRequest:
    if payload is None:
        payload = schemas.AirdropWriteRequest()
    if not payload.category or not (payload.name or "").strip():
        raise HTTPException(status_code=400, detail="category/name required")
    if not policy.is_valid_category(payload.category):
        raise HTTPException(status_code=400, detail="bad category")
    return payload


def _listing_item(row: dict) -> dict:
    item = {field: row.get(field) for field in LISTING_FIELDS}
    item["id"] = int(row["id"])
    if item["score"] is not None:
        item["score"] = float(item["score"])
    return item


async def list_airdrops(category: str, *, repo: AirdropRepository) -> dict:
    rows = await repo.list_visible(category)
    return {"items": [_listing_item(row) for row in rows]}


async def save_airdrop(
    payload: schemas.AirdropWriteRequest | None,
    *,
    repo: AirdropRepository,
    now: datetime,
) -> dict:
    write = validate_write(payload)
    published_at = policy.effective_published_at(write.publish, now=now)

    fields = AirdropFields(
        category=str(write.category),
        name=str(write.name),
        subtitle=write.subtitle,
        score=write.score,
        amount=write.amount,
        time_text=write.time_text,
        badge=write.badge or None,
    )
    airdrop_id = await repo.upsert_airdrop(
        airdrop_id=write.id or None,
        fields=fields,
        sort=write.sort,
        published_at=published_at,
    )
    if airdrop_id is None:
        logger.warning("airdrop_update_missing id=%s", write.id)
    else:
        logger.info(
            "airdrop_saved id=%s category=%s published=%s",
            airdrop_id,
            fields.category,
            published_at is not None,
        )
    return {"id": airdrop_id}


async def clear_airdrops(
    payload: schemas.AirdropClearRequest | None,
    *,
    repo: AirdropRepository,
) -> dict:
    category = payload.category if payload is not None else None
    scope = category if policy.is_valid_category(category) else "all"
    await repo.clear(category)
    logger.warning("airdrops_cleared scope=%s", scope)
    return {"ok": True}
