"""
JSON request-body reading for admin write routes.

The body is read by a dependency rather than a FastAPI body parameter, so it
runs after the auth dependency declared before it and reports every problem
with the body as a 400.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

from fastapi import HTTPException, Request
from pydantic import BaseModel, ValidationError


def _invalid_fields(exc: ValidationError) -> str:
    fields = sorted({".".join(str(part) for part in err["loc"]) or "body" for err in exc.errors()})
    return ", ".join(fields)


def json_body(model: type[BaseModel]) -> Callable[..., Any]:
    """
    Dependency that parses the request body into `model`.

    An empty body or JSON `null` yields None.
    """

    async def read_body(request: Request):
        raw = await request.body()
        if not raw.strip():
            return None

        try:
            data = json.loads(raw)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail="Request body is not valid JSON.") from exc
        if data is None:
            return None

        try:
            return model.model_validate(data)
        except ValidationError as exc:
            raise HTTPException(status_code=400, detail=f"invalid fields: {_invalid_fields(exc)}") from exc

    return read_body
