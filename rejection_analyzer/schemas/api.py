from __future__ import annotations

from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator

from .analysis import Finding, UserFacts


class DocumentPayload(BaseModel):
    filename: str = Field(min_length=1, max_length=255)
    text: str = ""


class AnalyzeRequest(BaseModel):
    application_url: str = Field(min_length=1, max_length=2048)
    user_facts: UserFacts = Field(default_factory=UserFacts)
    documents: list[DocumentPayload] = Field(default_factory=list)
    extra_required_docs: list[str] = Field(default_factory=list, max_length=40)

    @field_validator("application_url")
    @classmethod
    def _validate_application_url(cls, value: str) -> str:
        candidate = value.strip()
        parsed = urlparse(candidate)
        if parsed.scheme not in {"http", "https"} or not parsed.netloc:
            raise ValueError("application_url must be a valid http(s) URL.")
        return candidate


class AnalyzeResponse(BaseModel):
    findings: list[Finding] = Field(default_factory=list)
    likely_reason_titles: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    rule_line_count: int = 0
    page_count: int = 0


class RegionDocument(BaseModel):
    key: str
    label: str


class RegionDocumentsResponse(BaseModel):
    regions: dict[str, list[RegionDocument]] = Field(default_factory=dict)
