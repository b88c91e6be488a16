"""Python route declarations — Flask, Django and FastAPI."""

from __future__ import annotations

import re

from surfacemap.scanner.models import Ecosystem
from surfacemap.scanner.patterns import PatternRule

# Flask is tried before FastAPI, so @app.get("/x") is attributed to Flask.
PYTHON_ENDPOINT_RULES: tuple[PatternRule, ...] = (
    PatternRule(
        name="flask",
        ecosystem=Ecosystem.PYTHON,
        regex=re.compile(
            r"@(?:app|blueprint|bp)\.\s*(?:route|get|post|put|delete|patch)"
            r"\s*\(\s*[\"']([^\"']+)[\"']"
        ),
    ),
    PatternRule(
        name="django",
        ecosystem=Ecosystem.PYTHON,
        regex=re.compile(r"(?:path|re_path|url)\s*\(\s*[\"']([^\"']+)[\"']"),
    ),
    PatternRule(
        name="fastapi",
        ecosystem=Ecosystem.PYTHON,
        regex=re.compile(
            r"@(?:app|router)\.\s*(?:get|post|put|delete|patch|head|options)"
            r"\s*\(\s*[\"']([^\"']+)[\"']"
        ),
    ),
)
