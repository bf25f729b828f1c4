from __future__ import annotations

from pydantic import BaseModel, Field


class ExtractedDocument(BaseModel):
    filename: str
    text: str = ""
    characters: int = 0
    warnings: list[str] = Field(default_factory=list)
