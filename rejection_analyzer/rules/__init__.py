from .documents import (
    DocumentRequirements,
    collect_required_documents,
    detect_required_documents,
    has_document,
)
from .evaluate import (
    evaluate_document_mentions,
    evaluate_required_documents,
    evaluate_rule_line,
)
from .parser import RuleConstraints, parse_rule_line
from .ranges import parse_age_constraint, parse_income_constraint
from .residency import detect_country_requirement, normalize_country
from .student import detect_student_requirement

__all__ = [
    "DocumentRequirements",
    "RuleConstraints",
    "collect_required_documents",
    "detect_country_requirement",
    "detect_required_documents",
    "detect_student_requirement",
    "evaluate_document_mentions",
    "evaluate_required_documents",
    "evaluate_rule_line",
    "has_document",
    "normalize_country",
    "parse_age_constraint",
    "parse_income_constraint",
    "parse_rule_line",
]
