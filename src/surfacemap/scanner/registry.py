"""Immutable pattern registry shared by every file analysis."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from surfacemap.scanner import patterns
from surfacemap.scanner.languages.go import GO_ENDPOINT_RULES
from surfacemap.scanner.languages.javascript import JAVASCRIPT_ENDPOINT_RULES
from surfacemap.scanner.languages.python import PYTHON_ENDPOINT_RULES
from surfacemap.scanner.models import Ecosystem
from surfacemap.scanner.patterns import PatternRule


@dataclass(frozen=True)
class PatternRegistry:
    """Endpoint rules per ecosystem plus the global signal patterns."""

    endpoint_rules: Mapping[Ecosystem, tuple[PatternRule, ...]]
    auth: re.Pattern[str]
    admin_debug: re.Pattern[str]
    upload: re.Pattern[str]
    websocket: re.Pattern[str]

    def rules_for(self, ecosystem: Ecosystem) -> tuple[PatternRule, ...]:
        return self.endpoint_rules.get(ecosystem, ())


def build_default_registry() -> PatternRegistry:
    return PatternRegistry(
        endpoint_rules=MappingProxyType(
            {
                Ecosystem.GO: GO_ENDPOINT_RULES,
                Ecosystem.PYTHON: PYTHON_ENDPOINT_RULES,
                Ecosystem.JAVASCRIPT: JAVASCRIPT_ENDPOINT_RULES,
            }
        ),
        auth=patterns.AUTH_MIDDLEWARE,
        admin_debug=patterns.ADMIN_DEBUG_PATH,
        upload=patterns.FILE_UPLOAD,
        websocket=patterns.WEBSOCKET,
    )


DEFAULT_REGISTRY = build_default_registry()
