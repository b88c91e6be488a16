"""Host tool API — manifest and ``scan`` invocation over HTTP."""

from __future__ import annotations

import asyncio
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from surfacemap.plugin import MANIFEST, handle_scan
from surfacemap.scanner.engine import ScanEngine
from surfacemap.scanner.errors import WorkspaceNotFoundError

router = APIRouter(tags=["tools"])


@router.get("/manifest")
async def get_manifest():
    return MANIFEST


@router.post("/tools/scan")
async def invoke_scan(body: dict[str, Any], request: Request):
    config = request.app.state.config
    engine = ScanEngine(
        skip_dirs=config.skip_dirs,
        exclude_patterns=config.exclude_patterns,
        max_file_size=config.max_file_size,
        workers=config.workers,
    )
    try:
        return await asyncio.to_thread(handle_scan, body, None, engine)
    except WorkspaceNotFoundError as e:
        return JSONResponse(status_code=404, content={"detail": str(e)})
