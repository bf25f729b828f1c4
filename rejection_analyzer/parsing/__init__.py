from .models import ExtractedDocument
from .parse import decode_document, normalize_extracted_text
from .signatures import SUPPORTED_EXTENSIONS, file_extension, validate_upload_signature

__all__ = [
    "ExtractedDocument",
    "SUPPORTED_EXTENSIONS",
    "decode_document",
    "file_extension",
    "normalize_extracted_text",
    "validate_upload_signature",
]
