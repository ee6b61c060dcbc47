from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from airdrops import router as airdrops_router
from content import router as content_router
from core import db
from core.config import Settings, load_settings
from core.log import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Open the DB pool once per process.
    await app.state.db.connect()
    try:
        yield
    finally:
        await app.state.db.close()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings.log_level)
    if not settings.admin_token:
        logger.warning("admin_token_missing admin endpoints will reject every request")

    app = FastAPI(lifespan=lifespan)
    app.state.settings = settings
    app.state.db = db.Database(settings)

    # Read endpoints are public; the consumer client calls them from the browser.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(content_router.router, tags=["content"])
    app.include_router(airdrops_router.router, tags=["airdrops"])

    @app.exception_handler(db.DatabaseError)
    async def database_error_handler(request: Request, exc: db.DatabaseError) -> JSONResponse:
        logger.error("storage_failed path=%s error=%s", request.url.path, exc, exc_info=exc)
        return JSONResponse(status_code=500, content={"error": str(exc)})

    @app.get("/health")
    def health() -> dict:
        return {"ok": True}

    @app.get("/")
    def root() -> dict:
        return {"message": "daily-drops api"}

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host=app.state.settings.host, port=app.state.settings.port)
