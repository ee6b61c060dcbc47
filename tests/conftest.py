from __future__ import annotations

import itertools
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from airdrops import repository as airdrop_repository
from content import repository as post_repository
from core.config import Settings
from main import create_app
from publishing import policy
from publishing.dependencies import request_time

ADMIN_TOKEN = "test-admin-token-123"
BASE_TIME = datetime(2026, 1, 1, 9, 0, tzinfo=timezone.utc)


class FakePostRepository:
    """In-memory stand-in for PostRepository."""

    def __init__(self) -> None:
        self.rows: dict[int, dict] = {}
        self.calls: list[str] = []
        self._ids = itertools.count(1)

    async def latest_visible_post(self) -> dict | None:
        self.calls.append("latest_visible_post")
        visible = [r for r in self.rows.values() if r["is_premium"] and r["published_at"] is not None]
        # published_at DESC, id DESC
        row = max(visible, key=lambda r: (r["published_at"], r["id"]), default=None)
        return dict(row) if row is not None else None

    async def upsert_post(self, *, post_id, title, body_md, published_at):
        self.calls.append("upsert_post")
        now = datetime.now(timezone.utc)
        if post_id is not None:
            row = self.rows.get(post_id)
            if row is None:
                return None
            row.update(title=title, body_md=body_md, updated_at=now)
            if published_at is not None:
                row["published_at"] = published_at
            return post_id

        new_id = next(self._ids)
        self.rows[new_id] = {
            "id": new_id,
            "title": title,
            "body_md": body_md,
            "is_premium": True,
            "published_at": published_at,
            "updated_at": now,
        }
        return new_id


class FakeAirdropRepository:
    """In-memory stand-in for AirdropRepository."""

    def __init__(self) -> None:
        self.rows: dict[int, dict] = {}
        self.calls: list[str] = []
        self._ids = itertools.count(1)

    async def list_visible(self, category: str) -> list[dict]:
        self.calls.append("list_visible")
        rows = [
            dict(r)
            for r in self.rows.values()
            if r["category"] == category and r["published_at"] is not None
        ]
        # sort ASC, published_at DESC, id ASC
        return sorted(rows, key=lambda r: (r["sort"], -r["published_at"].timestamp(), r["id"]))

    async def upsert_airdrop(self, *, airdrop_id, fields, sort, published_at):
        self.calls.append("upsert_airdrop")
        now = datetime.now(timezone.utc)
        values = {
            "category": fields.category,
            "name": fields.name,
            "subtitle": fields.subtitle,
            "score": fields.score,
            "amount": fields.amount,
            "time_text": fields.time_text,
            "badge": fields.badge,
            "updated_at": now,
        }
        if airdrop_id is not None:
            row = self.rows.get(airdrop_id)
            if row is None:
                return None
            row.update(values)
            if sort is not None:
                row["sort"] = sort
            if published_at is not None:
                row["published_at"] = published_at
            return airdrop_id

        new_id = next(self._ids)
        self.rows[new_id] = {
            "id": new_id,
            **values,
            "sort": sort if sort is not None else 0,
            "published_at": published_at,
        }
        return new_id

    async def clear(self, category=None) -> None:
        self.calls.append("clear")
        if policy.is_valid_category(category):
            self.rows = {k: v for k, v in self.rows.items() if v["category"] != category}
        else:
            self.rows = {}


@pytest.fixture
def settings() -> Settings:
    return Settings(admin_token=ADMIN_TOKEN)


@pytest.fixture
def clock():
    # Each request gets a strictly later timestamp.
    ticks = itertools.count()

    def now() -> datetime:
        return BASE_TIME + timedelta(minutes=next(ticks))

    return now


@pytest.fixture
def post_repo() -> FakePostRepository:
    return FakePostRepository()


@pytest.fixture
def airdrop_repo() -> FakeAirdropRepository:
    return FakeAirdropRepository()


@pytest.fixture
def app(settings, clock, post_repo, airdrop_repo):
    app = create_app(settings)
    app.dependency_overrides[post_repository.get_repository] = lambda: post_repo
    app.dependency_overrides[airdrop_repository.get_repository] = lambda: airdrop_repo
    app.dependency_overrides[request_time] = clock
    return app


@pytest.fixture
def client(app) -> TestClient:
    # Not used as a context manager: the lifespan (DB pool) never starts.
    return TestClient(app)


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}
