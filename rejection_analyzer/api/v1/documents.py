import asyncio

from fastapi import APIRouter, File, Header, HTTPException, Request, UploadFile, status

from rejection_analyzer.core.config import settings
from rejection_analyzer.core.rate_limit import rate_limit
from rejection_analyzer.core.security import check_api_key
from rejection_analyzer.parsing import (
    SUPPORTED_EXTENSIONS,
    ExtractedDocument,
    decode_document,
    file_extension,
    validate_upload_signature,
)
from rejection_analyzer.schemas.api import RegionDocument, RegionDocumentsResponse
from rejection_analyzer.taxonomy import get_default_document_taxonomy

router = APIRouter()

UPLOAD_CHUNK_BYTES = 1024 * 64


@router.post("/documents/extract", response_model=ExtractedDocument)
@rate_limit()
async def extract_document(
    request: Request,
    file: UploadFile = File(...),
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
):
    _ = request
    check_api_key(x_api_key, action="extract document text")
    filename = file.filename or "document"

    ext = file_extension(filename)
    if ext not in SUPPORTED_EXTENSIONS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unsupported file type '.{ext}'. Allowed: {', '.join(sorted(SUPPORTED_EXTENSIONS))}.",
        )

    chunks: list[bytes] = []
    total = 0
    while True:
        chunk = await file.read(UPLOAD_CHUNK_BYTES)
        if not chunk:
            break
        total += len(chunk)
        if total > settings.max_upload_bytes:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail=f"File too large. Maximum allowed size is {settings.max_upload_bytes // (1024 * 1024)} MB.",
            )
        chunks.append(chunk)
    content = b"".join(chunks)

    try:
        validate_upload_signature(filename=filename, content=content)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    return await asyncio.to_thread(decode_document, filename, content, settings.document_max_text_length)


@router.get("/documents/regions", response_model=RegionDocumentsResponse)
async def region_documents():
    taxonomy = get_default_document_taxonomy()
    return RegionDocumentsResponse(
        regions={
            region: [RegionDocument(key=key, label=label) for key, label in items]
            for region, items in taxonomy.region_documents.items()
        }
    )
