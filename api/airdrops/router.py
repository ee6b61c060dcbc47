"""
Airdrop calendar API endpoints.
"""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends

from auth import dependencies as auth_dependencies
from core.body import json_body
from publishing.dependencies import request_time

from . import repository, schemas, service

router = APIRouter()


@router.get("/airdrops/today")
async def get_today_airdrops(
    repo: repository.AirdropRepository = Depends(repository.get_repository),
) -> dict:
    return await service.list_airdrops("today", repo=repo)


@router.get("/airdrops/upcoming")
async def get_upcoming_airdrops(
    repo: repository.AirdropRepository = Depends(repository.get_repository),
) -> dict:
    return await service.list_airdrops("upcoming", repo=repo)


@router.post("/admin/airdrop")
async def save_airdrop(
    _: None = Depends(auth_dependencies.require_admin),
    payload: schemas.AirdropWriteRequest | None = Depends(json_body(schemas.AirdropWriteRequest)),
    repo: repository.AirdropRepository = Depends(repository.get_repository),
    now: datetime = Depends(request_time),
) -> dict:
    return await service.save_airdrop(payload, repo=repo, now=now)


@router.post("/admin/airdrop/clear")
async def clear_airdrops(
    _: None = Depends(auth_dependencies.require_admin),
    payload: schemas.AirdropClearRequest | None = Depends(json_body(schemas.AirdropClearRequest)),
    repo: repository.AirdropRepository = Depends(repository.get_repository),
) -> dict:
    """
    Delete airdrops in one category, or all of them when no valid category is given.

    Destructive and irreversible.
    """
    return await service.clear_airdrops(payload, repo=repo)
