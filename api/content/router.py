"""
Content API endpoints.
"""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends

from auth import dependencies as auth_dependencies
from core.body import json_body
from publishing.dependencies import request_time

from . import repository, schemas, service

router = APIRouter()


@router.get("/content/latest")
async def get_latest_content(
    repo: repository.PostRepository = Depends(repository.get_repository),
) -> dict:
    """
    Latest published post. v1 returns title/published_at/excerpt only.
    """
    return await service.latest_post(repo)


@router.post("/admin/content")
async def save_content(
    _: None = Depends(auth_dependencies.require_admin),
    payload: schemas.PostWriteRequest | None = Depends(json_body(schemas.PostWriteRequest)),
    repo: repository.PostRepository = Depends(repository.get_repository),
    now: datetime = Depends(request_time),
) -> dict:
    return await service.save_post(payload, repo=repo, now=now)
