from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

Severity = Literal["high", "medium", "low"]
FindingSource = Literal["rule", "document", "cross"]
StudentRequirement = Literal["student", "non-student"]


class PageText(BaseModel):
    url: str = "unknown"
    text: str


class RangeConstraint(BaseModel):
    min: float | None = None
    max: float | None = None
    max_exclusive: bool = False

    @property
    def is_empty(self) -> bool:
        return self.min is None and self.max is None


class UserFacts(BaseModel):
    age: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    income: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    student_status: str | None = None
    country: str | None = None


class UploadedDocument(BaseModel):
    name: str
    text: str = ""


class FindingDraft(BaseModel):
    title: str
    severity: Severity
    explanation: str
    recommendation: str
    source: FindingSource

    @property
    def identity(self) -> tuple[str, str, str]:
        return (self.title, self.explanation, self.source)


class Finding(FindingDraft):
    id: str


class Advisory(BaseModel):
    message: str


class AnalysisResult(BaseModel):
    findings: list[Finding] = Field(default_factory=list)
    likely_reason_titles: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
