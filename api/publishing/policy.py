"""
Publish/visibility rules shared by posts and airdrops.

An item is a draft while `published_at` is NULL. A write only moves
`published_at` when the request explicitly asks to publish; otherwise the
stored value is left as it is (NULL on insert).

Visibility and ordering are SQL fragments; the repositories build their read
queries from them.
"""

from __future__ import annotations

from datetime import datetime, timezone

EXCERPT_LENGTH = 80

AIRDROP_CATEGORIES = ("today", "upcoming")

POST_VISIBLE_SQL = "is_premium = true AND published_at IS NOT NULL"
# Equal timestamps resolve to the higher id.
LATEST_POST_ORDER_SQL = "published_at DESC, id DESC"

AIRDROP_VISIBLE_SQL = "published_at IS NOT NULL"
AIRDROP_LISTING_ORDER_SQL = "sort ASC, published_at DESC, id ASC"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def effective_published_at(publish: bool | None, *, now: datetime) -> datetime | None:
    """
    Return the `published_at` value a single write should apply.

    None means "do not touch": keep the existing value on update, NULL on insert.
    """
    return now if publish else None


def is_valid_category(category: object) -> bool:
    return category in AIRDROP_CATEGORIES


def excerpt(body_md: str | None, length: int = EXCERPT_LENGTH) -> str:
    return (body_md or "")[:length]
