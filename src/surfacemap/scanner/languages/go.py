"""Go route declarations — net/http, gorilla/mux, Gin, Echo and chi."""

from __future__ import annotations

import re

from surfacemap.scanner.models import Ecosystem
from surfacemap.scanner.patterns import PatternRule

# Order matters: the first rule that matches a line wins.
GO_ENDPOINT_RULES: tuple[PatternRule, ...] = (
    PatternRule(
        name="http-handle",
        ecosystem=Ecosystem.GO,
        regex=re.compile(
            r"(?:http\.HandleFunc|http\.Handle|mux\.HandleFunc|mux\.Handle"
            r"|r\.HandleFunc|r\.Handle)\s*\(\s*[\"']([^\"']+)[\"']"
        ),
        group=1,
    ),
    PatternRule(
        name="gin",
        ecosystem=Ecosystem.GO,
        regex=re.compile(
            r"(?:r|router|g|group|e|engine)\.\s*"
            r"(GET|POST|PUT|DELETE|PATCH|HEAD|OPTIONS|Any)"
            r"\s*\(\s*[\"']([^\"']+)[\"']"
        ),
        group=2,
    ),
    PatternRule(
        name="echo",
        ecosystem=Ecosystem.GO,
        regex=re.compile(
            r"(?:e|echo)\.\s*(GET|POST|PUT|DELETE|PATCH|HEAD|OPTIONS)"
            r"\s*\(\s*[\"']([^\"']+)[\"']"
        ),
        group=2,
    ),
    PatternRule(
        name="chi",
        ecosystem=Ecosystem.GO,
        regex=re.compile(
            r"(?:r|router)\.\s*(Get|Post|Put|Delete|Patch|Head|Options|Route)"
            r"\s*\(\s*[\"']([^\"']+)[\"']"
        ),
        group=2,
    ),
)
