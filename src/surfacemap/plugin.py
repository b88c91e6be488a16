"""Host-facing tool surface — manifest and the ``scan`` request handler."""

from __future__ import annotations

import logging
import threading
from typing import Any

from surfacemap import __version__
from surfacemap.scanner.engine import ScanEngine
from surfacemap.scanner.models import RULES

logger = logging.getLogger(__name__)

PLUGIN_NAME = "surfacemap/attack-surface"

MANIFEST: dict[str, Any] = {
    "name": PLUGIN_NAME,
    "version": __version__,
    "capabilities": [
        {
            "name": "attack-surface",
            "description": "Static endpoint extraction and attack surface inventory",
            "tools": [
                {
                    "name": "scan",
                    "description": (
                        "Extract HTTP endpoints, detect unauthenticated routes, "
                        "admin/debug exposure, file uploads, and WebSocket endpoints"
                    ),
                    "read_only": True,
                }
            ],
        }
    ],
    "rules": [
        {
            "id": rule.id,
            "name": rule.name,
            "severity": rule.severity.value,
            "confidence": rule.confidence.value,
        }
        for rule in RULES
    ],
    "safety": {"risk_class": "passive"},
}


def workspace_root_from(request: dict[str, Any]) -> str:
    """Tool input ``workspace_root`` wins over the request-level one.

    Values that are not strings count as absent.
    """
    tool_input = request.get("input")
    root = tool_input.get("workspace_root") if isinstance(tool_input, dict) else None
    if not isinstance(root, str) or not root:
        root = request.get("workspace_root")
    return root if isinstance(root, str) else ""


def handle_scan(
    request: dict[str, Any],
    cancel: threading.Event | None = None,
    engine: ScanEngine | None = None,
) -> dict[str, Any]:
    """Run the ``scan`` tool for one host request.

    Raises WorkspaceNotFoundError when the root does not exist; an empty
    root yields an empty response.
    """
    root = workspace_root_from(request)
    if not root:
        return _response([], files_scanned=0, files_skipped=0, files_failed=0)

    engine = engine or ScanEngine()
    result = engine.scan(root, cancel=cancel)
    logger.debug(
        "Scan tool: %d findings in %d files under %s",
        len(result.findings),
        result.files_scanned,
        root,
    )
    return _response(
        [f.to_dict() for f in result.findings],
        files_scanned=result.files_scanned,
        files_skipped=result.files_skipped,
        files_failed=result.files_failed,
        cancelled=result.cancelled,
    )


def _response(
    findings: list[dict[str, Any]],
    *,
    files_scanned: int,
    files_skipped: int,
    files_failed: int,
    cancelled: bool = False,
) -> dict[str, Any]:
    return {
        "findings": findings,
        "files_scanned": files_scanned,
        "files_skipped": files_skipped,
        "files_failed": files_failed,
        "cancelled": cancelled,
    }
