from __future__ import annotations

import logging
import secrets

from fastapi import HTTPException, status

from rejection_analyzer.core.config import settings

logger = logging.getLogger(__name__)


def check_api_key(x_api_key: str | None, action: str = "run an analysis") -> None:
    """Reject the request with 401 when an API key is configured and the header does not match."""
    if not settings.api_key:
        return
    if x_api_key and secrets.compare_digest(x_api_key.encode("utf-8"), settings.api_key.encode("utf-8")):
        return
    logger.info("api_key_rejected action=%s header_present=%s", action, bool(x_api_key))
    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=f"Please provide a valid API key to {action}.",
    )
