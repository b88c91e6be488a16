"""FastAPI application factory for the surfacemap HTTP API."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from surfacemap import __version__
from surfacemap.config import SurfaceMapConfig
from surfacemap.storage.db import get_db


def create_app(config: SurfaceMapConfig | None = None) -> FastAPI:
    """Build and return the FastAPI application."""
    config = config or SurfaceMapConfig.load()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.db = await get_db(config.db_path)
        try:
            yield
        finally:
            await app.state.db.close()

    app = FastAPI(
        title="surfacemap",
        version=__version__,
        docs_url="/api/docs",
        lifespan=lifespan,
    )
    app.state.config = config

    from surfacemap.web.api.scans import router as scans_router
    from surfacemap.web.api.tools import router as tools_router

    app.include_router(tools_router, prefix="/api")
    app.include_router(scans_router, prefix="/api")

    return app
