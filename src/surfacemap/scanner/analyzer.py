"""Two-pass file analyzer — auth evidence first, then endpoints and signals."""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence

from surfacemap.scanner.errors import FileReadError
from surfacemap.scanner.extractor import extract_endpoint
from surfacemap.scanner.models import (
    ADMIN_DEBUG_ENDPOINT,
    ENDPOINT_DETECTED,
    ENDPOINT_UNAUTHENTICATED,
    UPLOAD_HANDLING,
    WEBSOCKET_ENDPOINT,
    Ecosystem,
    Finding,
)
from surfacemap.scanner.patterns import is_public_endpoint
from surfacemap.scanner.registry import DEFAULT_REGISTRY, PatternRegistry

logger = logging.getLogger(__name__)


def analyze_file(
    file_path: str | os.PathLike[str],
    ecosystem: Ecosystem,
    registry: PatternRegistry = DEFAULT_REGISTRY,
) -> list[Finding]:
    """Analyze one source file.

    A file that cannot be opened contributes no findings. A read error
    after opening raises FileReadError so the caller can account for it.
    """
    file_path = os.fspath(file_path)
    try:
        f = open(file_path, encoding="utf-8", errors="ignore", newline="")
    except OSError as e:
        logger.debug("Skipping %s: %s", file_path, e)
        return []

    with f:
        try:
            lines = split_lines(f.read())
        except OSError as e:
            raise FileReadError(file_path, e) from e

    has_auth = has_auth_evidence(lines, registry)
    return analyze_lines(lines, file_path, ecosystem, has_auth, registry)


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` only, dropping one trailing ``\\r`` per line.

    Form feeds, lone carriage returns and Unicode line separators stay
    inside their line so reported line numbers match an editor's.
    """
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def has_auth_evidence(
    lines: Sequence[str],
    registry: PatternRegistry = DEFAULT_REGISTRY,
) -> bool:
    """Pass 1: does any line in the file look like auth middleware?"""
    return any(registry.auth.search(line) for line in lines)


def analyze_lines(
    lines: Sequence[str],
    file_path: str,
    ecosystem: Ecosystem,
    has_auth: bool,
    registry: PatternRegistry = DEFAULT_REGISTRY,
) -> list[Finding]:
    """Pass 2: extract endpoints and per-line signals.

    ``has_auth`` applies to every line of the file, including lines
    above the one that provided the evidence.
    """
    findings: list[Finding] = []

    for line_num, line in enumerate(lines, start=1):
        endpoint = extract_endpoint(line, ecosystem, registry)
        if endpoint is not None:
            meta = {"endpoint": endpoint}
            findings.append(
                Finding.for_rule(
                    ENDPOINT_DETECTED,
                    f"HTTP endpoint detected: {endpoint}",
                    file_path,
                    line_num,
                    meta,
                )
            )

            if not has_auth and not is_public_endpoint(endpoint):
                findings.append(
                    Finding.for_rule(
                        ENDPOINT_UNAUTHENTICATED,
                        f"Potentially unauthenticated endpoint: {endpoint}",
                        file_path,
                        line_num,
                        meta,
                    )
                )

            # Allowlisted health probes are not admin surface
            if registry.admin_debug.search(endpoint) and not is_public_endpoint(
                endpoint
            ):
                findings.append(
                    Finding.for_rule(
                        ADMIN_DEBUG_ENDPOINT,
                        f"Admin/debug endpoint exposed: {endpoint}",
                        file_path,
                        line_num,
                        meta,
                    )
                )

        # Upload and WebSocket signals apply to every line
        if registry.upload.search(line):
            findings.append(
                Finding.for_rule(
                    UPLOAD_HANDLING,
                    f"File upload handling detected: {line.strip()}",
                    file_path,
                    line_num,
                )
            )

        if registry.websocket.search(line):
            findings.append(
                Finding.for_rule(
                    WEBSOCKET_ENDPOINT,
                    f"WebSocket endpoint detected: {line.strip()}",
                    file_path,
                    line_num,
                )
            )

    return findings
