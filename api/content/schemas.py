"""
Content API schemas (request models).
"""

from __future__ import annotations

from pydantic import BaseModel


class PostWriteRequest(BaseModel):
    # title/body_md are required; checked in service.validate_write (400).
    id: int | None = None
    title: str | None = None
    body_md: str | None = None
    publish: bool | None = None
