from __future__ import annotations

import re
from typing import Callable

from rejection_analyzer.extraction.utils import contains_any
from rejection_analyzer.schemas.analysis import RangeConstraint

RangeExtractor = Callable[[re.Match[str]], RangeConstraint]

AGE_TRIGGERS = ("age", "years old")
INCOME_TRIGGERS = ("income", "annual", "earn")

# "must be at least 18" states an age bound even when the word "age" is absent.
_APPLICANT_AGE_BOUND_RE = re.compile(
    r"\b(?:be|are|is)\s+(?:aged\s+)?"
    r"(?:at least|under|below|less than|up to|no older than|over|between)\s+\d{1,3}\b"
    r"(?!\s*(?:%|percent|years?\b(?!\s+old)|yrs|thousand|k\b|months?|weeks?|days?|hours?"
    r"|semesters?|terms?|credits?|points?|gpa|[,.]\d))"
)
_INCOME_NUMBER_RE = re.compile(r"(\d{1,3}(?:,\d{3})+|\d+)(?:\.\d+)?")


def to_number(value: str) -> float | None:
    try:
        return float(value.replace(",", "").strip())
    except ValueError:
        return None


def _between(match: re.Match[str]) -> RangeConstraint:
    return RangeConstraint(min=to_number(match.group(1)), max=to_number(match.group(2)))


def _min_from_last_group(match: re.Match[str]) -> RangeConstraint:
    return RangeConstraint(min=to_number(match.group(match.lastindex or 1)))


def _exclusive_max(match: re.Match[str]) -> RangeConstraint:
    return RangeConstraint(max=to_number(match.group(2)), max_exclusive=True)


def _inclusive_max(match: re.Match[str]) -> RangeConstraint:
    return RangeConstraint(max=to_number(match.group(2)))


AGE_PATTERNS: tuple[tuple[str, re.Pattern[str], RangeExtractor], ...] = (
    ("between", re.compile(r"between\s+(\d{1,3})\s+and\s+(\d{1,3})"), _between),
    ("at_least", re.compile(r"(at least|minimum age|min age)\s+(\d{1,3})"), _min_from_last_group),
    ("plus", re.compile(r"(\d{1,3})\s*\+"), _min_from_last_group),
    ("under", re.compile(r"(under|below|less than)\s+(\d{1,3})"), _exclusive_max),
    ("up_to", re.compile(r"(up to|maximum age|max age|no older than)\s+(\d{1,3})"), _inclusive_max),
)

INCOME_RULES: tuple[tuple[str, Callable[[str, list[float]], bool], Callable[[list[float]], RangeConstraint]], ...] = (
    (
        "between",
        lambda lower, numbers: "between" in lower and len(numbers) >= 2,
        lambda numbers: RangeConstraint(min=numbers[0], max=numbers[1]),
    ),
    (
        "minimum",
        lambda lower, numbers: contains_any(lower, ("at least", "minimum", "over")),
        lambda numbers: RangeConstraint(min=numbers[0]),
    ),
    (
        "maximum",
        lambda lower, numbers: contains_any(lower, ("under", "below", "less than", "up to", "maximum")),
        lambda numbers: RangeConstraint(max=numbers[0]),
    ),
)


def _coherent(constraint: RangeConstraint) -> RangeConstraint:
    if constraint.min is not None and constraint.max is not None and constraint.min > constraint.max:
        return RangeConstraint()
    return constraint


def mentions_age(line: str) -> bool:
    lower = line.lower()
    return contains_any(lower, AGE_TRIGGERS) or bool(_APPLICANT_AGE_BOUND_RE.search(lower))


def mentions_income(line: str) -> bool:
    return contains_any(line, INCOME_TRIGGERS)


def parse_age_constraint(line: str) -> RangeConstraint:
    lower = line.lower()
    for _name, pattern, extract in AGE_PATTERNS:
        match = pattern.search(lower)
        if match:
            return _coherent(extract(match))
    return RangeConstraint()


def extract_numbers(line: str) -> list[float]:
    numbers = (to_number(match.group(1)) for match in _INCOME_NUMBER_RE.finditer(line))
    return [number for number in numbers if number is not None]


def parse_income_constraint(line: str) -> RangeConstraint:
    lower = line.lower()
    numbers = extract_numbers(lower)
    if not numbers:
        return RangeConstraint()
    for _name, applies, build in INCOME_RULES:
        if applies(lower, numbers):
            return _coherent(build(numbers))
    return RangeConstraint()
