from __future__ import annotations

import re
from typing import Callable, Sequence

from rejection_analyzer.core.analysis_config import get_analysis_value
from rejection_analyzer.extraction.utils import contains_any, normalize_line, split_lines
from rejection_analyzer.schemas.analysis import FindingDraft, UploadedDocument

from .similarity import similarity_score

NAME_KEYWORDS = ("full name", "applicant name", "name of applicant", "name")
ADDRESS_KEYWORDS = ("address", "street", "road", "city", "state", "zip", "postal")

_NAME_LABEL_RE = re.compile(
    r"(?:full name|applicant name|name of applicant|name)\s*[:\-]\s*(.+)$",
    re.IGNORECASE,
)
_UPPERCASE_NAME_RE = re.compile(r"^[A-Z][A-Z\s'.-]{4,}$")


def extract_name_candidates(text: str) -> list[str]:
    candidates: list[str] = []
    for line in split_lines(text):
        if contains_any(line, NAME_KEYWORDS):
            match = _NAME_LABEL_RE.search(line)
            if match and match.group(1).strip():
                candidates.append(match.group(1).strip())

        stripped = line.strip()
        if _UPPERCASE_NAME_RE.match(stripped) and 2 <= len(stripped.split()) <= 4:
            candidates.append(stripped)
    return [candidate for candidate in candidates if len(candidate) >= 4]


def extract_address_candidates(text: str) -> list[str]:
    matches = [normalize_line(line) for line in split_lines(text) if contains_any(line, ADDRESS_KEYWORDS)]
    return [line for line in matches if line]


def _first_mismatch(
    documents: Sequence[UploadedDocument],
    extract: Callable[[str], list[str]],
    threshold: float,
) -> tuple[str, str] | None:
    # Only the first candidate of each document is compared, always against the first document.
    entries = [(document.name, extract(document.text or "")) for document in documents]
    entries = [(name, candidates) for name, candidates in entries if candidates]
    if len(entries) < 2:
        return None

    primary_name, primary_candidates = entries[0]
    primary = primary_candidates[0]
    for name, candidates in entries[1:]:
        if similarity_score(primary, candidates[0]) < threshold:
            return primary_name, name
    return None


def analyze_name_consistency(documents: Sequence[UploadedDocument]) -> list[FindingDraft]:
    threshold = float(get_analysis_value("consistency.name_similarity_threshold", 0.5))
    mismatch = _first_mismatch(documents, extract_name_candidates, threshold)
    if mismatch is None:
        return []
    first, other = mismatch
    return [
        FindingDraft(
            title="Name mismatch across documents",
            severity="high",
            explanation=f"Names appear inconsistent between {first} and {other}.",
            recommendation="Ensure all documents use the exact same legal name.",
            source="document",
        )
    ]


def analyze_address_consistency(documents: Sequence[UploadedDocument]) -> list[FindingDraft]:
    threshold = float(get_analysis_value("consistency.address_similarity_threshold", 0.4))
    mismatch = _first_mismatch(documents, extract_address_candidates, threshold)
    if mismatch is None:
        return []
    first, other = mismatch
    return [
        FindingDraft(
            title="Address mismatch across documents",
            severity="medium",
            explanation=f"Addresses appear inconsistent between {first} and {other}.",
            recommendation="Ensure your documents list the same current address.",
            source="document",
        )
    ]
