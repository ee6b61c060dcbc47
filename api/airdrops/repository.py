"""
Airdrop persistence (raw SQL).
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any

from fastapi import Depends

from core import db
from publishing import policy


@dataclass(frozen=True)
class AirdropFields:
    """
    Columns that every airdrop write sets as given (None stores NULL).
    """

    category: str
    name: str
    subtitle: str | None = None
    score: float | None = None
    amount: str | None = None
    time_text: str | None = None
    badge: str | None = None


class AirdropRepository:
    def __init__(self, database: db.Database) -> None:
        self._db = database

    async def list_visible(self, category: str) -> list[dict[str, Any]]:
        return await self._db.fetch_all(
            f"""
            SELECT id, category, name, subtitle, score, amount, time_text, badge,
                   sort, published_at, updated_at
            FROM airdrops
            WHERE category = $1
              AND {policy.AIRDROP_VISIBLE_SQL}
            ORDER BY {policy.AIRDROP_LISTING_ORDER_SQL}
            """,
            category,
        )

    async def upsert_airdrop(
        self,
        *,
        airdrop_id: int | None,
        fields: AirdropFields,
        sort: int | None,
        published_at: datetime | None,
    ) -> int | None:
        """
        Update `airdrop_id` in place, or insert when it is None.

        `sort` and `published_at` are only written on update when given.
        Returns None when `airdrop_id` does not exist.
        """
        values: dict[str, Any] = asdict(fields)

        if airdrop_id is not None:
            if sort is not None:
                values["sort"] = sort
            if published_at is not None:
                values["published_at"] = published_at
            assignments, args = db.set_clause(values)
            row = await self._db.fetch_one(
                f"""
                UPDATE airdrops
                SET {assignments}, updated_at = now()
                WHERE id = ${len(args) + 1}
                RETURNING id
                """,
                *args,
                airdrop_id,
            )
            return int(row["id"]) if row is not None else None

        values["sort"] = sort if sort is not None else 0
        values["published_at"] = published_at
        columns = ", ".join(values)
        placeholders = ", ".join(f"${i}" for i in range(1, len(values) + 1))
        row = await self._db.fetch_one(
            f"""
            INSERT INTO airdrops ({columns})
            VALUES ({placeholders})
            RETURNING id
            """,
            *values.values(),
        )
        if row is None:
            raise RuntimeError("Failed to insert airdrop.")
        return int(row["id"])

    async def clear(self, category: object = None) -> None:
        """
        Irreversibly delete airdrops.

        A known category deletes only that category; anything else deletes all rows.
        """
        if policy.is_valid_category(category):
            await self._db.execute("DELETE FROM airdrops WHERE category = $1", category)
        else:
            await self._db.execute("TRUNCATE TABLE airdrops")


def get_repository(database: db.Database = Depends(db.get_database)) -> AirdropRepository:
    return AirdropRepository(database)
