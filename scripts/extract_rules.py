from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from rejection_analyzer.extraction.rule_lines import extract_rule_lines
from rejection_analyzer.reasons import analyze
from rejection_analyzer.schemas.analysis import PageText, UploadedDocument, UserFacts
from rejection_analyzer.services.content_fetch import ContentFetchError, fetch_application_pages


def _load_pages(args: argparse.Namespace) -> list[PageText]:
    pages = [PageText(url=str(path), text=Path(path).read_text(encoding="utf-8")) for path in args.page_file]
    if args.url:
        pages.extend(fetch_application_pages(args.url))
    return pages


def main() -> int:
    parser = argparse.ArgumentParser(description="Extract eligibility rule lines and optionally analyze them.")
    parser.add_argument("--url", help="Application URL to crawl through the content retrieval service.")
    parser.add_argument(
        "--page-file",
        action="append",
        default=[],
        help="Local text file to treat as a fetched page. Repeatable.",
    )
    parser.add_argument("--analyze", action="store_true", help="Run the analysis and print findings as JSON.")
    parser.add_argument("--age", type=float)
    parser.add_argument("--income", type=float)
    parser.add_argument("--student-status")
    parser.add_argument("--country")
    parser.add_argument(
        "--document",
        action="append",
        default=[],
        help="Plain-text document to include in the analysis. Repeatable.",
    )
    parser.add_argument(
        "--require",
        action="append",
        default=[],
        help="Extra required document category, e.g. passport. Repeatable.",
    )
    args = parser.parse_args()

    if not args.url and not args.page_file:
        parser.error("provide --url or at least one --page-file")

    try:
        pages = _load_pages(args)
    except ContentFetchError as exc:
        print(f"Fetch failed: {exc}", file=sys.stderr)
        return 1

    rule_lines = extract_rule_lines(pages)
    if not args.analyze:
        for line in rule_lines:
            print(line)
        return 0

    facts = UserFacts(
        age=args.age,
        income=args.income,
        student_status=args.student_status,
        country=args.country,
    )
    documents = [
        UploadedDocument(name=Path(path).name, text=Path(path).read_text(encoding="utf-8"))
        for path in args.document
    ]
    result = analyze(rule_lines, facts, documents, args.require)
    payload = {"rule_lines": rule_lines, **result.model_dump()}
    print(json.dumps(payload, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
