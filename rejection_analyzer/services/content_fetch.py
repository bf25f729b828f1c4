from __future__ import annotations

import logging
from typing import Any

import httpx

from rejection_analyzer.core.config import settings
from rejection_analyzer.schemas.analysis import PageText

logger = logging.getLogger(__name__)

LINK_KEYWORDS = ("eligibility", "requirements", "exclusions", "faq", "rules", "pdf")
_PAGE_COLLECTIONS = ("pages", "documents", "results")


class ContentFetchError(RuntimeError):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def _page(url: Any, text: Any) -> PageText | None:
    if not isinstance(text, str) or not text.strip():
        return None
    return PageText(url=url if isinstance(url, str) else "unknown", text=text)


def extract_pages(payload: Any) -> list[PageText]:
    """Collect page texts from the service payload's list fields and top-level text."""
    if not isinstance(payload, dict):
        return []

    pages: list[PageText] = []
    for key in _PAGE_COLLECTIONS:
        entries = payload.get(key)
        if not isinstance(entries, list):
            continue
        for entry in entries:
            if not isinstance(entry, dict):
                continue
            page = _page(entry.get("url"), entry.get("text"))
            if page is not None:
                pages.append(page)

    top_level = _page(payload.get("url"), payload.get("text"))
    if top_level is not None:
        pages.append(top_level)
    return pages


def fetch_application_pages(
    url: str,
    client: httpx.Client | None = None,
    *,
    api_url: str | None = None,
    api_key: str | None = None,
    timeout: float | None = None,
) -> list[PageText]:
    """Ask the content retrieval service to crawl ``url`` and return its page texts.

    An empty list means the service answered but found nothing; every failure
    raises ``ContentFetchError``.
    """
    api_url = api_url or settings.content_fetch_api_url
    api_key = api_key or settings.content_fetch_api_key
    if not api_url or not api_key:
        raise ContentFetchError("Content retrieval service is not configured.")

    headers = {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {api_key}",
        "x-api-key": api_key,
    }
    body = {
        "url": url,
        "followLinks": list(LINK_KEYWORDS),
        "followLinkKeywords": list(LINK_KEYWORDS),
        "extractText": True,
    }

    owns_client = client is None
    http = client or httpx.Client(timeout=timeout or settings.content_fetch_timeout_seconds, follow_redirects=True)
    try:
        response = http.post(api_url, json=body, headers=headers)
    except httpx.HTTPError as exc:
        logger.warning("content_fetch_transport_error url=%s error=%s", url, exc)
        raise ContentFetchError(f"Content retrieval request failed: {exc}") from exc
    finally:
        if owns_client:
            http.close()

    if response.status_code < 200 or response.status_code >= 300:
        detail = response.text or "Unknown error"
        logger.warning("content_fetch_failed url=%s status=%s", url, response.status_code)
        raise ContentFetchError(
            f"Content retrieval request failed ({response.status_code}): {detail}",
            status_code=response.status_code,
        )

    try:
        payload = response.json()
    except ValueError as exc:
        logger.warning("content_fetch_malformed_body url=%s", url)
        raise ContentFetchError("Content retrieval service returned a malformed body.") from exc

    pages = extract_pages(payload)
    logger.info("content_fetch_completed url=%s pages=%s", url, len(pages))
    return pages
