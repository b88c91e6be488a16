"""Scanner data models — rule catalog, findings and scan results."""

from __future__ import annotations

import enum
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


class Ecosystem(enum.Enum):
    """Source family whose route-declaration patterns apply to a file."""

    GO = "go"
    PYTHON = "python"
    JAVASCRIPT = "javascript"


class Severity(enum.Enum):
    """Finding severity level."""

    INFO = "info"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {
    Severity.INFO: 0,
    Severity.LOW: 1,
    Severity.MEDIUM: 2,
    Severity.HIGH: 3,
}


class Confidence(enum.Enum):
    """How sure a rule is about what it reports."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class Rule:
    """A rule identity with its fixed severity and confidence."""

    id: str
    name: str
    severity: Severity
    confidence: Confidence
    description: str


ENDPOINT_DETECTED = Rule(
    id="ATTACK-001",
    name="endpoint-detected",
    severity=Severity.INFO,
    confidence=Confidence.HIGH,
    description="HTTP endpoint declaration",
)
ENDPOINT_UNAUTHENTICATED = Rule(
    id="ATTACK-002",
    name="endpoint-unauthenticated",
    severity=Severity.MEDIUM,
    confidence=Confidence.MEDIUM,
    description="Endpoint in a file with no auth middleware",
)
ADMIN_DEBUG_ENDPOINT = Rule(
    id="ATTACK-003",
    name="admin-debug-endpoint",
    severity=Severity.MEDIUM,
    confidence=Confidence.HIGH,
    description="Admin, debug or internal endpoint exposed",
)
UPLOAD_HANDLING = Rule(
    id="ATTACK-004",
    name="upload-handling",
    severity=Severity.LOW,
    confidence=Confidence.MEDIUM,
    description="File upload handling",
)
WEBSOCKET_ENDPOINT = Rule(
    id="ATTACK-005",
    name="websocket-endpoint",
    severity=Severity.MEDIUM,
    confidence=Confidence.MEDIUM,
    description="WebSocket endpoint or client",
)

RULES: tuple[Rule, ...] = (
    ENDPOINT_DETECTED,
    ENDPOINT_UNAUTHENTICATED,
    ADMIN_DEBUG_ENDPOINT,
    UPLOAD_HANDLING,
    WEBSOCKET_ENDPOINT,
)


@dataclass(frozen=True)
class Finding:
    """A single classified observation at one source location."""

    rule_id: str
    severity: Severity
    confidence: Confidence
    message: str
    file_path: str
    start_line: int
    end_line: int
    metadata: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def for_rule(
        cls,
        rule: Rule,
        message: str,
        file_path: str,
        line: int,
        metadata: Mapping[str, str] | None = None,
    ) -> Finding:
        return cls(
            rule_id=rule.id,
            severity=rule.severity,
            confidence=rule.confidence,
            message=message,
            file_path=file_path,
            start_line=line,
            end_line=line,
            metadata=MappingProxyType(dict(metadata or {})),
        )

    @property
    def endpoint(self) -> str:
        return self.metadata.get("endpoint", "")

    def to_dict(self) -> dict:
        return {
            "rule_id": self.rule_id,
            "severity": self.severity.value,
            "confidence": self.confidence.value,
            "message": self.message,
            "location": {
                "file_path": self.file_path,
                "start_line": self.start_line,
                "end_line": self.end_line,
            },
            "metadata": dict(self.metadata),
        }


@dataclass
class ScanResult:
    """Aggregate result of a workspace scan."""

    directory: str
    findings: list[Finding] = field(default_factory=list)
    files_scanned: int = 0
    files_skipped: int = 0
    files_failed: int = 0
    duration: float = 0.0
    cancelled: bool = False
    timestamp: float = field(default_factory=time.time)
