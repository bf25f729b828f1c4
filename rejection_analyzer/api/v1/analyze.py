import asyncio
import logging

from fastapi import APIRouter, Header, HTTPException, Request, status

from rejection_analyzer.core.rate_limit import rate_limit
from rejection_analyzer.core.security import check_api_key
from rejection_analyzer.schemas.api import AnalyzeRequest, AnalyzeResponse
from rejection_analyzer.services.analysis_service import run_application_analysis
from rejection_analyzer.services.content_fetch import ContentFetchError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/analyze", response_model=AnalyzeResponse)
@rate_limit()
async def analyze_application(
    request: Request,
    payload: AnalyzeRequest,
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
):
    _ = request
    check_api_key(x_api_key)
    try:
        return await asyncio.to_thread(run_application_analysis, payload)
    except ContentFetchError as exc:
        logger.warning("analysis_fetch_failed url=%s error=%s", payload.application_url, exc)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
