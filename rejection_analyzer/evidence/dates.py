from __future__ import annotations

import re
from datetime import date, datetime

MONTHS = {
    "jan": 1,
    "january": 1,
    "feb": 2,
    "february": 2,
    "mar": 3,
    "march": 3,
    "apr": 4,
    "april": 4,
    "may": 5,
    "jun": 6,
    "june": 6,
    "jul": 7,
    "july": 7,
    "aug": 8,
    "august": 8,
    "sep": 9,
    "sept": 9,
    "september": 9,
    "oct": 10,
    "october": 10,
    "nov": 11,
    "november": 11,
    "dec": 12,
    "december": 12,
}

_MONTH_NAMES = "|".join(sorted(MONTHS, key=len, reverse=True))

# Month-first wins for ambiguous numeric dates such as 03/04/2024.
NUMERIC_DATE_FORMATS = ("%m/%d/%Y", "%d/%m/%Y")

_ISO_DATE_RE = re.compile(r"^(\d{4})[-.](\d{1,2})[-.](\d{1,2})$")
_NUMERIC_SEPARATOR_RE = re.compile(r"[.-]")
_MONTH_NAME_DATE_RE = re.compile(rf"^({_MONTH_NAMES})\s+(\d{{1,2}}),?\s+(\d{{4}})$", re.IGNORECASE)

DATE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\b\d{4}[-.]\d{1,2}[-.]\d{1,2}\b"),
    re.compile(r"\b\d{1,2}[/.-]\d{1,2}[/.-]\d{4}\b"),
    re.compile(rf"\b(?:{_MONTH_NAMES})\s+\d{{1,2}},?\s+\d{{4}}\b", re.IGNORECASE),
)


def _safe_date(year: int, month: int, day: int) -> date | None:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def parse_date(value: str) -> date | None:
    trimmed = value.strip()

    iso = _ISO_DATE_RE.match(trimmed)
    if iso:
        return _safe_date(int(iso.group(1)), int(iso.group(2)), int(iso.group(3)))

    slashed = _NUMERIC_SEPARATOR_RE.sub("/", trimmed)
    for fmt in NUMERIC_DATE_FORMATS:
        try:
            return datetime.strptime(slashed, fmt).date()
        except ValueError:
            continue

    named = _MONTH_NAME_DATE_RE.match(trimmed)
    if named:
        return _safe_date(int(named.group(3)), MONTHS[named.group(1).lower()], int(named.group(2)))
    return None


def extract_dates(text: str) -> list[date]:
    """Every parseable date in ``text``, ISO matches first, then numeric, then month-name forms."""
    found: list[date] = []
    for pattern in DATE_PATTERNS:
        for match in pattern.finditer(text or ""):
            parsed = parse_date(match.group(0))
            if parsed is not None:
                found.append(parsed)
    return found


def compute_age(dob: date, today: date) -> int:
    age = today.year - dob.year
    if (today.month, today.day) < (dob.month, dob.day):
        age -= 1
    return age
