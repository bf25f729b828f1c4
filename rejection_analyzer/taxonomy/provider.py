from __future__ import annotations

from typing import Mapping, Protocol


class DocumentTaxonomy(Protocol):
    @property
    def document_categories(self) -> Mapping[str, tuple[str, ...]]:
        """Document category key -> ordered synonym keywords."""

    @property
    def qualifiers(self) -> Mapping[str, tuple[str, ...]]:
        """Recency qualifier key -> ordered keywords."""

    @property
    def mandatory_categories(self) -> tuple[str, ...]:
        """Categories checked whenever rule text mentions them."""

    @property
    def region_documents(self) -> Mapping[str, tuple[tuple[str, str], ...]]:
        """Region name -> (category key, label) suggestions."""
