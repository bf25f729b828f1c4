from __future__ import annotations

from rejection_analyzer.extraction.utils import contains_any
from rejection_analyzer.schemas.analysis import StudentRequirement

_NON_STUDENT_MARKERS = ("not a student", "non-student", "non student")
_STUDENT_ONLY_MARKERS = ("students only", "must be a student", "student status required", "student-only")


def detect_student_requirement(line: str) -> StudentRequirement | None:
    lower = line.lower()
    if "student" not in lower:
        return None
    if contains_any(lower, _NON_STUDENT_MARKERS):
        return "non-student"
    if contains_any(lower, _STUDENT_ONLY_MARKERS):
        return "student"
    return None
