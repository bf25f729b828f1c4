from __future__ import annotations

from rejection_analyzer.core.config import settings


def cors_allowed_origins() -> list[str]:
    # Browsers send Origin without a trailing slash; "https://a.org/" would never match.
    origins: dict[str, None] = {}
    for origin in settings.cors_allowed_origins:
        cleaned = origin.strip().rstrip("/")
        if cleaned:
            origins.setdefault(cleaned, None)
    return list(origins)
