from __future__ import annotations

from typing import Iterable, Mapping

from pydantic import BaseModel, Field

from rejection_analyzer.extraction.utils import contains_any
from rejection_analyzer.schemas.analysis import UploadedDocument
from rejection_analyzer.taxonomy import DocumentTaxonomy, get_default_document_taxonomy

DOCUMENT_REQUIREMENT_TRIGGERS = ("required", "must provide", "must submit", "upload", "provide")

QUALIFIER_LABELS = (
    ("recent_3_months", "from the last 3 months"),
    ("recent_6_months", "from the last 6 months"),
    ("recent_12_months", "from the last 12 months"),
)


class DocumentRequirements(BaseModel):
    categories: list[str] = Field(default_factory=list)
    qualifiers: list[str] = Field(default_factory=list)


def _matching_keys(line: str, table: Mapping[str, tuple[str, ...]]) -> list[str]:
    return [key for key, keywords in table.items() if contains_any(line, keywords)]


def is_document_requirement_line(line: str) -> bool:
    return contains_any(line, DOCUMENT_REQUIREMENT_TRIGGERS)


def detect_required_documents(
    line: str,
    taxonomy: DocumentTaxonomy | None = None,
) -> DocumentRequirements:
    """Document categories and recency qualifiers named by one requirement line."""
    if not is_document_requirement_line(line):
        return DocumentRequirements()
    taxonomy = taxonomy or get_default_document_taxonomy()
    return DocumentRequirements(
        categories=_matching_keys(line, taxonomy.document_categories),
        qualifiers=_matching_keys(line, taxonomy.qualifiers),
    )


def collect_required_documents(
    rule_lines: Iterable[str],
    taxonomy: DocumentTaxonomy | None = None,
) -> DocumentRequirements:
    categories: dict[str, None] = {}
    qualifiers: dict[str, None] = {}
    for line in rule_lines:
        detected = detect_required_documents(line, taxonomy)
        categories.update(dict.fromkeys(detected.categories))
        qualifiers.update(dict.fromkeys(detected.qualifiers))
    return DocumentRequirements(categories=list(categories), qualifiers=list(qualifiers))


def recency_label(qualifiers: Iterable[str]) -> str | None:
    present = set(qualifiers)
    for key, label in QUALIFIER_LABELS:
        if key in present:
            return label
    return None


def document_mentions(document: UploadedDocument, keyword: str) -> bool:
    return keyword in document.name.lower() or keyword in document.text.lower()


def document_matches(document: UploadedDocument, keywords: Iterable[str]) -> bool:
    return any(document_mentions(document, keyword) for keyword in keywords)


def has_document(documents: Iterable[UploadedDocument], keywords: Iterable[str]) -> bool:
    keywords = tuple(keywords)
    return any(document_matches(document, keywords) for document in documents)
