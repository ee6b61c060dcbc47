"""
Airdrop API schemas (request models).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class AirdropWriteRequest(BaseModel):
    # category/name are required; checked in service.validate_write (400).
    id: int | None = None
    category: str | None = None
    name: str | None = None
    subtitle: str | None = None
    score: float | None = None
    amount: str | None = None
    time_text: str | None = None
    badge: str | None = None
    sort: int | None = None
    publish: bool | None = None


class AirdropClearRequest(BaseModel):
    # Any value other than a known category clears every airdrop.
    category: Any = None
