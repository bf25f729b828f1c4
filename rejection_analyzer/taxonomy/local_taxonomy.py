from __future__ import annotations

import json
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from .provider import DocumentTaxonomy


class LocalDocumentTaxonomy(DocumentTaxonomy):
    def __init__(self, keywords_path: str | Path | None = None) -> None:
        path = Path(keywords_path) if keywords_path else Path(__file__).with_name("document_keywords.json")
        raw = self._load(path)
        self._document_categories = self._keyword_table(raw.get("document_categories", {}))
        self._qualifiers = self._keyword_table(raw.get("qualifiers", {}))
        self._mandatory_categories = tuple(
            str(key).strip().lower()
            for key in raw.get("mandatory_categories", [])
            if str(key).strip().lower() in self._document_categories
        )
        self._region_documents = MappingProxyType(
            {
                str(region): tuple(
                    (str(item["key"]).strip().lower(), str(item["label"]))
                    for item in items
                    if isinstance(item, dict) and "key" in item and "label" in item
                )
                for region, items in raw.get("region_documents", {}).items()
            }
        )

    @staticmethod
    def _load(path: Path) -> dict[str, Any]:
        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)

    @staticmethod
    def _keyword_table(raw: dict[str, Any]) -> Mapping[str, tuple[str, ...]]:
        return MappingProxyType(
            {
                str(key).strip().lower(): tuple(str(keyword).lower() for keyword in keywords)
                for key, keywords in raw.items()
            }
        )

    @property
    def document_categories(self) -> Mapping[str, tuple[str, ...]]:
        return self._document_categories

    @property
    def qualifiers(self) -> Mapping[str, tuple[str, ...]]:
        return self._qualifiers

    @property
    def mandatory_categories(self) -> tuple[str, ...]:
        return self._mandatory_categories

    @property
    def region_documents(self) -> Mapping[str, tuple[tuple[str, str], ...]]:
        return self._region_documents
