from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Sequence

from rejection_analyzer.evidence import analyze_address_consistency, analyze_documents, analyze_name_consistency
from rejection_analyzer.rules import evaluate_document_mentions, evaluate_required_documents, evaluate_rule_line
from rejection_analyzer.schemas.analysis import AnalysisResult, UploadedDocument, UserFacts
from rejection_analyzer.taxonomy import DocumentTaxonomy, get_default_document_taxonomy

from .collector import FindingCollector

logger = logging.getLogger(__name__)


def analyze(
    rule_lines: Sequence[str],
    user_facts: UserFacts,
    uploaded_docs: Sequence[UploadedDocument] = (),
    extra_required_docs: Iterable[str] = (),
    today: date | None = None,
    taxonomy: DocumentTaxonomy | None = None,
) -> AnalysisResult:
    """Combine rule-line findings and document evidence into one deduplicated result.

    Findings keep first-seen order: per-line rule checks, required documents,
    per-document evidence, name then address consistency, and finally the
    cross-checks for documents that rule text only mentions.
    """
    today = today or date.today()
    taxonomy = taxonomy or get_default_document_taxonomy()
    extra = list(extra_required_docs)

    collector = FindingCollector()
    for line in rule_lines:
        collector.extend(evaluate_rule_line(line, user_facts, taxonomy))
    collector.extend(evaluate_required_documents(rule_lines, uploaded_docs, extra, taxonomy))
    collector.extend(analyze_documents(uploaded_docs, user_facts, today=today))
    collector.extend(analyze_name_consistency(uploaded_docs))
    collector.extend(analyze_address_consistency(uploaded_docs))
    collector.extend(evaluate_document_mentions(rule_lines, uploaded_docs, extra, taxonomy, today=today))

    result = collector.result()
    logger.debug(
        "analysis_findings rule_lines=%s documents=%s findings=%s",
        len(rule_lines),
        len(uploaded_docs),
        len(result.findings),
    )
    return result
