from __future__ import annotations

import logging
from io import BytesIO

import pytesseract
from docx import Document
from PIL import Image
from pypdf import PdfReader

from rejection_analyzer.extraction.utils import normalize_line, split_lines

from .models import ExtractedDocument
from .signatures import IMAGE_EXTENSIONS, TEXT_EXTENSIONS, file_extension

logger = logging.getLogger(__name__)


def _decode_text(content: bytes) -> tuple[str, list[str]]:
    for encoding in ("utf-8", "utf-16", "latin-1"):
        try:
            return content.decode(encoding), []
        except UnicodeDecodeError:
            continue
    return "", ["Text file could not be decoded."]


def _decode_pdf(content: bytes) -> tuple[str, list[str]]:
    try:
        reader = PdfReader(BytesIO(content))
        page_chunks = [page.extract_text() or "" for page in reader.pages]
    except Exception as exc:
        return "", [f"PDF parsing failed: {exc}"]
    text = "\n".join(chunk for chunk in page_chunks if chunk.strip())
    if not text:
        return "", ["No extractable text found in PDF."]
    return text, []


def _decode_docx(content: bytes) -> tuple[str, list[str]]:
    try:
        document = Document(BytesIO(content))
    except Exception as exc:
        return "", [f"DOCX parsing failed: {exc}"]
    paragraphs = [paragraph.text for paragraph in document.paragraphs if paragraph.text.strip()]
    if not paragraphs:
        return "", ["No extractable text found in DOCX."]
    return "\n".join(paragraphs), []


def _decode_image(content: bytes) -> tuple[str, list[str]]:
    try:
        image = Image.open(BytesIO(content))
        if getattr(image, "mode", "") not in ("RGB", "L"):
            image = image.convert("RGB")
        text = pytesseract.image_to_string(image) or ""
    except Exception as exc:
        return "", [f"OCR failed: {exc}"]
    if not text.strip():
        return "", ["OCR ran but produced no text."]
    return text, []


def normalize_extracted_text(text: str, max_text_length: int) -> str:
    """Collapse whitespace inside each line, drop blank lines and cap the length."""
    lines = (normalize_line(line) for line in split_lines(text))
    return "\n".join(line for line in lines if line)[:max_text_length]


def decode_document(filename: str, content: bytes, max_text_length: int) -> ExtractedDocument:
    """Extract plain text from an uploaded file.

    Decoder and OCR failures never raise: the document comes back with empty
    text and a warning, so downstream analysis reports it as unreadable.
    """
    ext = file_extension(filename)
    if ext in TEXT_EXTENSIONS:
        raw, warnings = _decode_text(content)
    elif ext == "pdf":
        raw, warnings = _decode_pdf(content)
    elif ext == "docx":
        raw, warnings = _decode_docx(content)
    elif ext in IMAGE_EXTENSIONS:
        raw, warnings = _decode_image(content)
    else:
        raw, warnings = "", [f"Unsupported file type '.{ext}'."]

    text = normalize_extracted_text(raw, max_text_length)
    if warnings:
        logger.info("document_decode_failed filename=%s warnings=%s", filename, "; ".join(warnings))
    return ExtractedDocument(filename=filename, text=text, characters=len(text), warnings=warnings)
