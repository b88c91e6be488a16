"""Route-declaration rule type, cross-cutting signal patterns and the public allowlist."""

from __future__ import annotations

import re
from dataclasses import dataclass

from surfacemap.scanner.models import Ecosystem


@dataclass(frozen=True)
class PatternRule:
    """An endpoint declaration pattern and the group holding the path."""

    name: str
    ecosystem: Ecosystem
    regex: re.Pattern[str]
    group: int = 1

    def extract(self, line: str) -> str | None:
        match = self.regex.search(line)
        if match is None:
            return None
        return match.group(self.group)


AUTH_MIDDLEWARE = re.compile(
    r"(auth.?middleware|requireAuth|isAuthenticated|authenticate"
    r"|jwt.?middleware|passport\.|@login_required|@requires_auth"
    r"|AuthGuard|UseGuards|Depends\(.*auth)",
    re.IGNORECASE,
)

# Matched against the extracted path, not the whole line.
ADMIN_DEBUG_PATH = re.compile(
    r"(/admin|/debug|/metrics|/health|/status|/internal|/actuator|/__debug__"
    r"|/pprof|/swagger|/graphql|/playground)",
    re.IGNORECASE,
)

FILE_UPLOAD = re.compile(
    r"(multipart|FormFile|upload|multer|FileField|UploadFile|busboy|formidable)",
    re.IGNORECASE,
)

WEBSOCKET = re.compile(
    r"(websocket|ws://|wss://|Upgrader|socket\.io|@WebSocket"
    r"|@SubscribeMessage|\.ws\(|\.websocket\()",
    re.IGNORECASE,
)

PUBLIC_ENDPOINTS: frozenset[str] = frozenset(
    {
        "/health",
        "/healthz",
        "/ready",
        "/readyz",
        "/ping",
        "/version",
        "/",
        "/favicon.ico",
        "/robots.txt",
    }
)


def is_public_endpoint(path: str) -> bool:
    """Check if a path is a well-known public endpoint (exact, case-insensitive)."""
    return path.lower() in PUBLIC_ENDPOINTS
