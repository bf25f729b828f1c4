from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from rejection_analyzer.core.analysis_config import get_analysis_value
from rejection_analyzer.schemas.analysis import PageText

from .utils import contains_any, normalize_line, split_lines

logger = logging.getLogger(__name__)

RULE_KEYWORDS = (
    "eligible",
    "eligibility",
    "requirement",
    "requirements",
    "must",
    "must be",
    "at least",
    "minimum",
    "maximum",
    "not eligible",
    "ineligible",
    "excluded",
    "exclusion",
    "only",
    "age",
    "income",
    "resident",
    "citizen",
    "student",
)

PageInput = Iterable[PageText] | Mapping[str, Any]


def _normalize_pages(pages: PageInput) -> list[PageText]:
    if isinstance(pages, Mapping):
        raw_pages = pages.get("pages")
        if not isinstance(raw_pages, list):
            return []
        pages = raw_pages
    normalized: list[PageText] = []
    for page in pages:
        if isinstance(page, PageText):
            normalized.append(page)
        elif isinstance(page, Mapping) and isinstance(page.get("text"), str):
            normalized.append(PageText(url=str(page.get("url") or "unknown"), text=page["text"]))
    return normalized


def is_rule_line(line: str) -> bool:
    min_length = int(get_analysis_value("rule_lines.min_length", 8))
    max_length = int(get_analysis_value("rule_lines.max_length", 280))
    if len(line) < min_length or len(line) > max_length:
        return False
    return contains_any(line, RULE_KEYWORDS)


def extract_rule_lines(pages: PageInput) -> list[str]:
    """Collect the distinct normalized lines that plausibly state an eligibility rule."""
    rules: dict[str, None] = {}
    normalized_pages = _normalize_pages(pages)
    for page in normalized_pages:
        for raw_line in split_lines(page.text):
            line = normalize_line(raw_line)
            if line and is_rule_line(line):
                rules.setdefault(line, None)

    logger.debug("rule_lines_extracted pages=%d lines=%d", len(normalized_pages), len(rules))
    return list(rules)
