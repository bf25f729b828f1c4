from __future__ import annotations

import logging
from datetime import date
from typing import Callable

from rejection_analyzer.core.analysis_config import get_analysis_value
from rejection_analyzer.extraction.rule_lines import extract_rule_lines
from rejection_analyzer.reasons import analyze
from rejection_analyzer.schemas.analysis import PageText, UploadedDocument
from rejection_analyzer.schemas.api import AnalyzeRequest, AnalyzeResponse, DocumentPayload

from .content_fetch import fetch_application_pages

logger = logging.getLogger(__name__)

PageFetcher = Callable[[str], list[PageText]]


def _enforce_request_limits(documents: list[DocumentPayload]) -> None:
    max_documents = int(get_analysis_value("request_limits.max_documents", 5))
    max_total_chars = int(get_analysis_value("request_limits.max_total_document_chars", 120000))

    if len(documents) > max_documents:
        raise ValueError(f"You can upload up to {max_documents} documents.")
    if sum(len(document.text) for document in documents) > max_total_chars:
        raise ValueError("Uploaded document text exceeds the allowed limit.")


def prepare_documents(documents: list[DocumentPayload]) -> list[UploadedDocument]:
    """Trim document texts and drop empty or oversized ones before analysis."""
    max_document_chars = int(get_analysis_value("request_limits.max_document_chars", 40000))
    prepared: list[UploadedDocument] = []
    for document in documents:
        text = document.text.strip()
        if 0 < len(text) < max_document_chars:
            prepared.append(UploadedDocument(name=document.filename, text=text))
    return prepared


def run_application_analysis(
    request: AnalyzeRequest,
    fetcher: PageFetcher | None = None,
    today: date | None = None,
) -> AnalyzeResponse:
    """Fetch the application pages, extract rule lines and analyze them with the caller's facts.

    Raises ``ValueError`` when request limits are exceeded and lets
    ``ContentFetchError`` propagate from the fetcher.
    """
    _enforce_request_limits(request.documents)
    documents = prepare_documents(request.documents)

    fetcher = fetcher or fetch_application_pages
    pages = fetcher(request.application_url)
    rule_lines = extract_rule_lines(pages)
    result = analyze(
        rule_lines,
        request.user_facts,
        documents,
        request.extra_required_docs,
        today=today,
    )

    logger.info(
        "analysis_completed pages=%s rule_lines=%s documents=%s findings=%s",
        len(pages),
        len(rule_lines),
        len(documents),
        len(result.findings),
    )
    return AnalyzeResponse(
        findings=result.findings,
        likely_reason_titles=result.likely_reason_titles,
        recommendations=result.recommendations,
        rule_line_count=len(rule_lines),
        page_count=len(pages),
    )
