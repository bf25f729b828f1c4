from functools import lru_cache

from .local_taxonomy import LocalDocumentTaxonomy
from .provider import DocumentTaxonomy


@lru_cache(maxsize=1)
def get_default_document_taxonomy() -> DocumentTaxonomy:
    return LocalDocumentTaxonomy()


__all__ = ["DocumentTaxonomy", "LocalDocumentTaxonomy", "get_default_document_taxonomy"]
