from __future__ import annotations

import logging
from datetime import date
from typing import Sequence

from rejection_analyzer.core.analysis_config import get_analysis_value
from rejection_analyzer.extraction.utils import contains_any
from rejection_analyzer.schemas.analysis import FindingDraft, UploadedDocument, UserFacts

from .dates import compute_age, extract_dates

logger = logging.getLogger(__name__)

INVALIDITY_MARKERS = ("expired", "void", "invalid", "cancelled", "canceled")
EXPIRY_MARKERS = ("expiry", "expiration", "valid until")
DOB_MARKERS = ("date of birth", "dob")


def _min_readable_chars() -> int:
    return int(get_analysis_value("documents.min_readable_chars", 120))


def _dob_tolerance_years() -> int:
    return int(get_analysis_value("documents.dob_age_tolerance_years", 2))


def _is_unreadable(text: str) -> bool:
    return len(text.strip()) < _min_readable_chars()


def _has_invalidity_marker(text: str) -> bool:
    return contains_any(text, INVALIDITY_MARKERS)


def _has_passed_expiry(text: str, today: date) -> bool:
    if not contains_any(text, EXPIRY_MARKERS):
        return False
    dates = extract_dates(text)
    return bool(dates) and max(dates) < today


def document_appears_expired(document: UploadedDocument, today: date | None = None) -> bool:
    """True when the text carries an invalidity keyword or its latest expiry-context date has passed."""
    today = today or date.today()
    text = document.text or ""
    return _has_invalidity_marker(text) or _has_passed_expiry(text, today)


def analyze_document(
    document: UploadedDocument,
    facts: UserFacts,
    today: date | None = None,
) -> list[FindingDraft]:
    today = today or date.today()
    name = document.name
    text = document.text or ""
    findings: list[FindingDraft] = []

    if _is_unreadable(text):
        findings.append(
            FindingDraft(
                title="Unreadable or very short document",
                severity="high",
                explanation=f"{name} appears too short or unreadable to verify requirements.",
                recommendation=f"Re-upload {name} with clearer or more complete text.",
                source="document",
            )
        )

    if _has_invalidity_marker(text):
        findings.append(
            FindingDraft(
                title="Document marked expired or invalid",
                severity="high",
                explanation=f"{name} contains keywords indicating it is expired, invalid, or void.",
                recommendation=f"Upload a valid, unexpired version of {name}.",
                source="document",
            )
        )

    if _has_passed_expiry(text, today):
        findings.append(
            FindingDraft(
                title="Document appears expired",
                severity="high",
                explanation=f"{name} includes an expiration date that has already passed.",
                recommendation=f"Provide a version of {name} that is currently valid.",
                source="document",
            )
        )

    if facts.age is not None and contains_any(text, DOB_MARKERS):
        dates = extract_dates(text)
        if dates:
            # The earliest date on the document is taken as the birth date.
            computed_age = compute_age(min(dates), today)
            if abs(computed_age - facts.age) >= _dob_tolerance_years():
                findings.append(
                    FindingDraft(
                        title="Age mismatch with document DOB",
                        severity="medium",
                        explanation=(
                            f"{name} contains a date of birth that does not align with the provided age."
                        ),
                        recommendation="Ensure the age matches the date of birth on submitted documents.",
                        source="document",
                    )
                )

    if findings:
        logger.debug("document_evidence name=%s findings=%s", name, len(findings))
    return findings


def analyze_documents(
    documents: Sequence[UploadedDocument],
    facts: UserFacts,
    today: date | None = None,
) -> list[FindingDraft]:
    today = today or date.today()
    findings: list[FindingDraft] = []
    for document in documents:
        findings.extend(analyze_document(document, facts, today=today))
    return findings
