"""Finding sink protocol — where analyzed findings are delivered."""

from __future__ import annotations

from typing import Protocol

from surfacemap.scanner.models import Finding


class FindingSink(Protocol):
    """Protocol for consumers of findings."""

    def emit(self, finding: Finding) -> None:
        """Accept one finding. Called in file order, then line order."""
        ...


class FindingCollector:
    """Default sink: keeps findings in the order they were emitted."""

    def __init__(self) -> None:
        self.findings: list[Finding] = []

    def emit(self, finding: Finding) -> None:
        self.findings.append(finding)

    def __len__(self) -> int:
        return len(self.findings)
