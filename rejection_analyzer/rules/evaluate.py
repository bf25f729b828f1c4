from __future__ import annotations

from datetime import date
from typing import Iterable, Sequence

from rejection_analyzer.evidence.documents import document_appears_expired
from rejection_analyzer.schemas.analysis import Advisory, FindingDraft, RangeConstraint, UploadedDocument, UserFacts
from rejection_analyzer.taxonomy import DocumentTaxonomy, get_default_document_taxonomy

from .documents import collect_required_documents, document_matches, has_document, recency_label
from .parser import RuleConstraints, parse_rule_line
from .residency import countries_match, normalize_country


def _missing_info(subject: str, mention: str, missing: str, recommendation: str) -> FindingDraft:
    return FindingDraft(
        title=f"Missing {subject} information",
        severity="low",
        explanation=f"Eligibility rules mention {mention}, but no {missing} was provided.",
        recommendation=recommendation,
        source="rule",
    )


def _rule_conflict(title: str, line: str, recommendation: str) -> FindingDraft:
    return FindingDraft(
        title=title,
        severity="high",
        explanation=f"Rule: {line}",
        recommendation=recommendation,
        source="rule",
    )


def _exceeds_max(value: float, constraint: RangeConstraint) -> bool:
    if constraint.max is None:
        return False
    if constraint.max_exclusive:
        return value >= constraint.max
    return value > constraint.max


def _evaluate_age(constraints: RuleConstraints, age: float | None) -> list[FindingDraft]:
    constraint = constraints.age
    if constraint is None:
        return []
    if age is None:
        return [_missing_info("age", "age", "age", "Provide your age to verify age eligibility.")]
    if constraint.min is not None and age < constraint.min:
        return [
            _rule_conflict(
                "Age below minimum requirement",
                constraints.line,
                "Ensure your age meets the minimum requirement.",
            )
        ]
    if _exceeds_max(age, constraint):
        return [
            _rule_conflict(
                "Age above maximum requirement",
                constraints.line,
                "Check the maximum age limit for this program.",
            )
        ]
    return []


def _evaluate_income(constraints: RuleConstraints, income: float | None) -> list[FindingDraft]:
    constraint = constraints.income
    if constraint is None:
        return []
    if income is None:
        return [_missing_info("income", "income", "income", "Provide your income to verify income eligibility.")]
    if constraint.min is not None and income < constraint.min:
        return [
            _rule_conflict(
                "Income below minimum requirement",
                constraints.line,
                "Verify that your income meets the minimum requirement.",
            )
        ]
    if _exceeds_max(income, constraint):
        return [
            _rule_conflict(
                "Income above maximum requirement",
                constraints.line,
                "Verify that your income is within the allowed maximum.",
            )
        ]
    return []


def _evaluate_student(constraints: RuleConstraints, student_status: str) -> list[FindingDraft]:
    requirement = constraints.student
    if requirement is None:
        return []
    if not student_status:
        return [
            _missing_info(
                "student status",
                "student status",
                "status",
                "Provide your student status to verify eligibility.",
            )
        ]
    if requirement == "student" and student_status != "student":
        return [
            _rule_conflict(
                "Student status requirement not met",
                constraints.line,
                "Confirm that student status is required.",
            )
        ]
    if requirement == "non-student" and student_status == "student":
        return [
            _rule_conflict(
                "Student status conflict",
                constraints.line,
                "Confirm whether students are excluded.",
            )
        ]
    return []


def _evaluate_residency(constraints: RuleConstraints, country: str) -> list[FindingDraft]:
    required_country = constraints.country
    if not required_country:
        return []
    if not country:
        return [
            _missing_info(
                "country",
                "residency",
                "country",
                "Provide your country to verify residency requirements.",
            )
        ]
    if not countries_match(required_country, country):
        return [
            _rule_conflict(
                "Residency requirement not met",
                constraints.line,
                "Check residency or citizenship requirements.",
            )
        ]
    return []


def evaluate_rule_line(
    line: str | RuleConstraints,
    facts: UserFacts,
    taxonomy: DocumentTaxonomy | None = None,
) -> list[FindingDraft]:
    """Findings produced by one rule line against the user's facts, independent of other lines."""
    constraints = line if isinstance(line, RuleConstraints) else parse_rule_line(line, taxonomy)
    student_status = (facts.student_status or "").strip().lower()
    country = normalize_country(facts.country)
    return [
        *_evaluate_age(constraints, facts.age),
        *_evaluate_income(constraints, facts.income),
        *_evaluate_student(constraints, student_status),
        *_evaluate_residency(constraints, country),
    ]


def evaluate_required_documents(
    rule_lines: Sequence[str],
    documents: Sequence[UploadedDocument],
    extra_required_docs: Iterable[str] = (),
    taxonomy: DocumentTaxonomy | None = None,
) -> list[FindingDraft | Advisory]:
    """Cross-check documents demanded by requirement phrasing (or by the caller) against uploads."""
    taxonomy = taxonomy or get_default_document_taxonomy()
    detected = collect_required_documents(rule_lines, taxonomy)
    extra = (str(item).strip().lower() for item in extra_required_docs)
    combined = list(dict.fromkeys([*detected.categories, *extra]))

    entries: list[FindingDraft | Advisory] = []
    for category in combined:
        keywords = taxonomy.document_categories.get(category)
        if not keywords or has_document(documents, keywords):
            continue
        label = keywords[0]
        entries.append(
            FindingDraft(
                title="Missing required document",
                severity="high",
                explanation=(
                    f"Eligibility rules or selected requirements mention {label}, "
                    "but no matching document was found."
                ),
                recommendation=f"Upload a valid {label} to satisfy document requirements.",
                source="cross",
            )
        )

    if "bank_statement" in detected.categories:
        label = recency_label(detected.qualifiers)
        if label:
            entries.append(Advisory(message=f"Ensure bank statements are {label}."))
    return entries


def evaluate_document_mentions(
    rule_lines: Sequence[str],
    documents: Sequence[UploadedDocument],
    extra_required_docs: Iterable[str] = (),
    taxonomy: DocumentTaxonomy | None = None,
    today: date | None = None,
) -> list[FindingDraft]:
    """Cross-checks for documents that rule text merely mentions, without imperative phrasing."""
    taxonomy = taxonomy or get_default_document_taxonomy()
    today = today or date.today()
    lowered_lines = [line.lower() for line in rule_lines]

    already_required = set(collect_required_documents(rule_lines, taxonomy).categories)
    already_required.update(str(item).strip().lower() for item in extra_required_docs)

    findings: list[FindingDraft] = []
    for category in taxonomy.mandatory_categories:
        # Already reported by the requirement-phrase check; one cross finding per category.
        if category in already_required:
            continue
        keywords = taxonomy.document_categories.get(category, ())
        mentioned = any(keyword in line for line in lowered_lines for keyword in keywords)
        if mentioned and not has_document(documents, keywords):
            findings.append(
                FindingDraft(
                    title="Missing document required by eligibility rules",
                    severity="high",
                    explanation=f"Eligibility rules mention {keywords[0]}, but no matching document was uploaded.",
                    recommendation=f"Provide a {keywords[0]} that matches the requirement.",
                    source="cross",
                )
            )

    passport_keywords = taxonomy.document_categories.get("passport", ())
    bank_keywords = taxonomy.document_categories.get("bank_statement", ())
    for line, lower in zip(rule_lines, lowered_lines):
        if "passport" in lower and "valid" in lower:
            passports = [document for document in documents if document_matches(document, passport_keywords)]
            if not passports:
                findings.append(
                    FindingDraft(
                        title="Valid passport required",
                        severity="high",
                        explanation=f"Rule: {line}",
                        recommendation="Upload a valid passport that meets the rule.",
                        source="cross",
                    )
                )
            elif any(document_appears_expired(document, today=today) for document in passports):
                findings.append(
                    FindingDraft(
                        title="Passport appears expired",
                        severity="high",
                        explanation="A passport document appears to be expired while the rule requires it to be valid.",
                        recommendation="Provide a valid, unexpired passport.",
                        source="cross",
                    )
                )

        if "bank statement" in lower and not has_document(documents, bank_keywords):
            findings.append(
                FindingDraft(
                    title="Bank statement required",
                    severity="high",
                    explanation=f"Rule: {line}",
                    recommendation="Upload a bank statement that meets the requirement.",
                    source="cross",
                )
            )
    return findings
