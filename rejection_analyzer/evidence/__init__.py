from .consistency import (
    analyze_address_consistency,
    analyze_name_consistency,
    extract_address_candidates,
    extract_name_candidates,
)
from .dates import compute_age, extract_dates, parse_date
from .documents import analyze_document, analyze_documents, document_appears_expired
from .similarity import normalize_tokens, similarity_score

__all__ = [
    "analyze_address_consistency",
    "analyze_document",
    "analyze_documents",
    "analyze_name_consistency",
    "compute_age",
    "document_appears_expired",
    "extract_address_candidates",
    "extract_dates",
    "extract_name_candidates",
    "normalize_tokens",
    "parse_date",
    "similarity_score",
]
