from __future__ import annotations

import re

from rejection_analyzer.extraction.utils import contains_any

RESIDENCY_TRIGGERS = ("resident", "citizen", "available in", "only in")

_COUNTRY_ALIASES = {
    "usa": "united states",
    "us": "united states",
    "united states of america": "united states",
    "uk": "united kingdom",
    "u k": "united kingdom",
    "united kingdom of great britain": "united kingdom",
}

COUNTRY_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"residents?\s+of\s+([a-zA-Z\s]+)"),
    re.compile(r"citizens?\s+of\s+([a-zA-Z\s]+)"),
    re.compile(r"available\s+in\s+([a-zA-Z\s]+)"),
    re.compile(r"only\s+in\s+([a-zA-Z\s]+)"),
)

COUNTRY_FALLBACKS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("united states", "u s", "usa"), "united states"),
    (("united kingdom", "u k"), "united kingdom"),
)

_CAPTURE_STOP_RE = re.compile(r"[,.;]")


def normalize_country(value: str | None) -> str:
    if not value:
        return ""
    lowered = value.lower().replace(".", "").strip()
    return _COUNTRY_ALIASES.get(lowered, lowered)


def mentions_residency(line: str) -> bool:
    return contains_any(line, RESIDENCY_TRIGGERS)


def detect_country_requirement(line: str) -> str | None:
    lower = line.lower()
    for pattern in COUNTRY_PATTERNS:
        match = pattern.search(lower)
        if match and match.group(1):
            captured = _CAPTURE_STOP_RE.split(match.group(1))[0]
            country = normalize_country(captured)
            if country:
                return country

    for markers, country in COUNTRY_FALLBACKS:
        if contains_any(lower, markers):
            return country
    return None


def countries_match(required: str, actual: str) -> bool:
    return required in actual or actual in required
