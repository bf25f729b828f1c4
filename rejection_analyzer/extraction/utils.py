from __future__ import annotations

import re
from typing import Iterable

_NEWLINE_RE = re.compile(r"\r\n|\r|\n")
_WHITESPACE_RE = re.compile(r"\s+")


def split_lines(text: str) -> list[str]:
    return _NEWLINE_RE.split(text or "")


def normalize_line(line: str) -> str:
    return _WHITESPACE_RE.sub(" ", line or "").strip()


def contains_any(text: str, markers: Iterable[str]) -> bool:
    lowered = text.lower()
    return any(marker in lowered for marker in markers)
