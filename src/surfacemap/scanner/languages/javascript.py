"""JavaScript/TypeScript route declarations — Express, Koa and Fastify."""

from __future__ import annotations

import re

from surfacemap.scanner.models import Ecosystem
from surfacemap.scanner.patterns import PatternRule

JAVASCRIPT_ENDPOINT_RULES: tuple[PatternRule, ...] = (
    PatternRule(
        name="express",
        ecosystem=Ecosystem.JAVASCRIPT,
        regex=re.compile(
            r"(?:app|router)\.\s*(get|post|put|delete|patch|all|use)"
            r"\s*\(\s*['\"]([^'\"]+)['\"]"
        ),
        group=2,
    ),
    PatternRule(
        name="koa",
        ecosystem=Ecosystem.JAVASCRIPT,
        regex=re.compile(
            r"(?:router)\.\s*(get|post|put|delete|patch|all)"
            r"\s*\(\s*['\"]([^'\"]+)['\"]"
        ),
        group=2,
    ),
    PatternRule(
        name="fastify",
        ecosystem=Ecosystem.JAVASCRIPT,
        regex=re.compile(
            r"(?:fastify|server|app)\.\s*(get|post|put|delete|patch|all|route)"
            r"\s*\(\s*['\"]([^'\"]+)['\"]"
        ),
        group=2,
    ),
)
