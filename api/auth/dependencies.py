"""
Auth dependencies for admin-only FastAPI routes.
"""

from __future__ import annotations

import logging

from fastapi import Depends, Header, HTTPException, Request, status

from core.config import Settings, get_settings

from . import security

logger = logging.getLogger(__name__)


def _extract_bearer_token(authorization: str | None) -> str:
    raw = (authorization or "").strip()
    if not raw:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing Authorization header.",
        )

    parts = raw.split(None, 1)
    if len(parts) != 2:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid Authorization header format.",
        )

    scheme, token = parts[0].strip().lower(), parts[1].strip()
    if scheme != "bearer" or not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization must be: Bearer <token>.",
        )
    return token


async def require_admin(
    request: Request,
    settings: Settings = Depends(get_settings),
    authorization: str | None = Header(default=None),
) -> None:
    try:
        token = _extract_bearer_token(authorization)
    except HTTPException:
        logger.warning("admin_auth_rejected path=%s reason=header", request.url.path)
        raise

    if not security.verify_admin_token(token, settings.admin_token):
        logger.warning("admin_auth_rejected path=%s reason=token", request.url.path)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid admin token.",
        )
