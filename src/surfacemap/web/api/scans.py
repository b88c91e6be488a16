"""REST API for scan results."""

from __future__ import annotations

import asyncio

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from surfacemap.scanner.engine import ScanEngine
from surfacemap.scanner.errors import WorkspaceNotFoundError
from surfacemap.storage.repos import ScanRepo

router = APIRouter(tags=["scans"])


class ScanCreate(BaseModel):
    directory: str
    exclude: list[str] = []


@router.get("/scans")
async def list_scans(request: Request, limit: int = 50, offset: int = 0):
    repo = ScanRepo(request.app.state.db)
    return await repo.list_all(limit=limit, offset=offset)


@router.get("/scans/{scan_id}")
async def get_scan(scan_id: str, request: Request):
    repo = ScanRepo(request.app.state.db)
    result = await repo.get(scan_id)
    if not result:
        return JSONResponse(
            status_code=404,
            content={"detail": "Scan not found"},
        )
    return result


@router.post("/scans")
async def create_scan(body: ScanCreate, request: Request):
    config = request.app.state.config
    engine = ScanEngine(
        skip_dirs=config.skip_dirs,
        exclude_patterns=[*config.exclude_patterns, *body.exclude],
        max_file_size=config.max_file_size,
        workers=config.workers,
    )
    try:
        result = await asyncio.to_thread(engine.scan, body.directory)
    except WorkspaceNotFoundError as e:
        return JSONResponse(status_code=404, content={"detail": str(e)})

    repo = ScanRepo(request.app.state.db)
    scan_id = await repo.save_result(result)
    return {
        "status": "created",
        "id": scan_id,
        "finding_count": len(result.findings),
    }
