from __future__ import annotations

from io import BytesIO
from zipfile import BadZipFile, ZipFile

TEXT_EXTENSIONS = frozenset({"txt", "md"})
IMAGE_EXTENSIONS = frozenset({"png", "jpg", "jpeg", "webp", "gif", "bmp"})
SUPPORTED_EXTENSIONS = frozenset({"pdf", "docx"}) | TEXT_EXTENSIONS | IMAGE_EXTENSIONS

PDF_MAGIC = b"%PDF-"
PNG_MAGIC = b"\x89PNG\r\n\x1a\n"
JPEG_MAGIC = b"\xff\xd8\xff"
GIF_MAGICS = (b"GIF87a", b"GIF89a")
BMP_MAGIC = b"BM"
WEBP_RIFF_MAGIC = b"RIFF"
WEBP_WEBP_MAGIC = b"WEBP"
ZIP_MAGICS = (b"PK\x03\x04", b"PK\x05\x06", b"PK\x07\x08")


def file_extension(filename: str) -> str:
    return filename.rsplit(".", 1)[-1].lower() if "." in filename else ""


def _is_docx_payload(content: bytes) -> bool:
    if not any(content.startswith(prefix) for prefix in ZIP_MAGICS):
        return False
    try:
        with ZipFile(BytesIO(content)) as archive:
            return any(name.startswith("word/") for name in archive.namelist())
    except BadZipFile:
        return False


def _is_probably_text_payload(content: bytes) -> bool:
    if not content:
        return True
    sample = content[:4096]
    if b"\x00" in sample:
        return False
    printable = sum(1 for byte in sample if byte in (9, 10, 13) or byte >= 32)
    return (printable / len(sample)) >= 0.75


def _image_signature_matches(ext: str, content: bytes) -> bool:
    if ext == "png":
        return content.startswith(PNG_MAGIC)
    if ext in {"jpg", "jpeg"}:
        return content.startswith(JPEG_MAGIC)
    if ext == "gif":
        return any(content.startswith(magic) for magic in GIF_MAGICS)
    if ext == "bmp":
        return content.startswith(BMP_MAGIC)
    if ext == "webp":
        return len(content) >= 12 and content.startswith(WEBP_RIFF_MAGIC) and content[8:12] == WEBP_WEBP_MAGIC
    return False


def validate_upload_signature(*, filename: str, content: bytes) -> None:
    """Reject uploads whose extension is unsupported or whose bytes do not match it."""
    ext = file_extension(filename)
    if ext == "doc":
        raise ValueError("Legacy .doc is not supported. Convert to .docx.")
    if ext not in SUPPORTED_EXTENSIONS:
        raise ValueError(
            f"Unsupported file type '.{ext}'. Allowed: {', '.join(sorted(SUPPORTED_EXTENSIONS))}."
        )

    if ext == "pdf" and not content.startswith(PDF_MAGIC):
        raise ValueError("File signature does not match .pdf content.")
    if ext == "docx" and not _is_docx_payload(content):
        raise ValueError("File signature does not match .docx content.")
    if ext in TEXT_EXTENSIONS and not _is_probably_text_payload(content):
        raise ValueError(f"File signature does not match .{ext} text content.")
    if ext in IMAGE_EXTENSIONS and not _image_signature_matches(ext, content):
        raise ValueError(f"File signature does not match .{ext} content.")
