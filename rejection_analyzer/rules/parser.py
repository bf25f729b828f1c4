from __future__ import annotations

from pydantic import BaseModel, Field

from rejection_analyzer.schemas.analysis import RangeConstraint, StudentRequirement
from rejection_analyzer.taxonomy import DocumentTaxonomy

from .documents import DocumentRequirements, detect_required_documents
from .ranges import mentions_age, mentions_income, parse_age_constraint, parse_income_constraint
from .residency import detect_country_requirement, mentions_residency
from .student import detect_student_requirement


class RuleConstraints(BaseModel):
    """Every typed constraint found on a single rule line.

    ``age``/``income`` are ``None`` when the line does not mention them at all and an
    empty ``RangeConstraint`` when it mentions them without a recognizable bound.
    """

    line: str
    age: RangeConstraint | None = None
    income: RangeConstraint | None = None
    student: StudentRequirement | None = None
    country: str | None = None
    documents: DocumentRequirements = Field(default_factory=DocumentRequirements)


def parse_rule_line(line: str, taxonomy: DocumentTaxonomy | None = None) -> RuleConstraints:
    return RuleConstraints(
        line=line,
        age=parse_age_constraint(line) if mentions_age(line) else None,
        income=parse_income_constraint(line) if mentions_income(line) else None,
        student=detect_student_requirement(line),
        country=detect_country_requirement(line) if mentions_residency(line) else None,
        documents=detect_required_documents(line, taxonomy),
    )
