"""Ordered first-match extraction of route paths from a single line."""

from __future__ import annotations

from surfacemap.scanner.models import Ecosystem
from surfacemap.scanner.registry import DEFAULT_REGISTRY, PatternRegistry


def extract_endpoint(
    line: str,
    ecosystem: Ecosystem,
    registry: PatternRegistry = DEFAULT_REGISTRY,
) -> str | None:
    """Return the path captured by the first matching rule, or None.

    Rules are tried in registration order and evaluation stops at the
    first match, so when a line fits two framework styles the earlier
    one decides the path.
    """
    for rule in registry.rules_for(ecosystem):
        path = rule.extract(line)
        if path is not None:
            return path
    return None
