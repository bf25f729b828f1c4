from __future__ import annotations

import re
from typing import Iterable

from rejection_analyzer.schemas.analysis import Advisory, AnalysisResult, Finding, FindingDraft

_SLUG_RE = re.compile(r"[^a-z0-9]+")


def slugify(value: str) -> str:
    return _SLUG_RE.sub("-", value.lower()).strip("-")


class FindingCollector:
    """Ordered, deduplicating accumulator for findings and standalone advisories."""

    def __init__(self) -> None:
        self._findings: list[Finding] = []
        self._seen: set[tuple[str, str, str]] = set()
        self._recommendations: dict[str, None] = {}

    def add(self, entry: FindingDraft | Advisory) -> bool:
        if isinstance(entry, Advisory):
            self._recommendations.setdefault(entry.message, None)
            return False

        if entry.identity in self._seen:
            return False
        self._seen.add(entry.identity)
        position = len(self._findings) + 1
        finding = Finding(id=f"{slugify(entry.title)}-{position}", **entry.model_dump(exclude={"id"}))
        self._findings.append(finding)
        self._recommendations.setdefault(entry.recommendation, None)
        return True

    def extend(self, entries: Iterable[FindingDraft | Advisory]) -> None:
        for entry in entries:
            self.add(entry)

    def result(self) -> AnalysisResult:
        findings = list(self._findings)
        return AnalysisResult(
            findings=findings,
            likely_reason_titles=[finding.title for finding in findings],
            recommendations=list(self._recommendations),
        )


def aggregate_findings(entries: Iterable[FindingDraft | Advisory]) -> AnalysisResult:
    collector = FindingCollector()
    collector.extend(entries)
    return collector.result()
