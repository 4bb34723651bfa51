"""
core.search.google_search

Thin wrapper around the Google Custom Search JSON API.

Used by:
  - runtime/agents/guess_agent.py (background text + candidate photos)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx

from configs.settings import settings
from exceptions.exceptions import SearchError


logger = logging.getLogger(__name__)

SEARCH_URL = "https://www.googleapis.com/customsearch/v1"

IMAGE_TYPES = ("clipart", "face", "lineart", "stock", "photo", "animated")


@dataclass
class SearchResult:
    """Textual summary of the hits plus the direct links of every hit."""

    text: str = ""
    images: List[str] = field(default_factory=list)


# -------------------------------------------------------------------
# Internal helpers
# -------------------------------------------------------------------


def _format_items(items: List[Dict[str, Any]]) -> str:
    """Render search items as the numbered block fed to the assistant."""
    results_text = ""
    for i, item in enumerate(items, start=1):
        title = item.get("title") or ""
        snippet = item.get("snippet") or ""
        link = item.get("link") or ""
        results_text += f"Result {i}:\nTitle: {title}\nSnippet: {snippet}\nLink: {link}\n\n"
    return results_text


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(data, dict) and isinstance(data.get("error"), dict):
        message = data["error"].get("message")
        if message:
            return str(message)
    return response.text


# -------------------------------------------------------------------
# Public function
# -------------------------------------------------------------------


def google_search(
    query: str,
    *,
    num: int = 10,
    search_type: str = "web",
    img_type: Optional[str] = None,
    api_key: Optional[str] = None,
    cse_id: Optional[str] = None,
    http_client: Optional[httpx.Client] = None,
) -> SearchResult:
    """
    Fetch search results from Google Custom Search.

    Parameters
    ----------
    query : str
        Free-text query (the user's full name).
    num : int
        Number of results to request (the API caps this at 10).
    search_type : str
        "web" (default) for a normal search, "image" for an image search.
    img_type : str, optional
        Only used for image searches; one of IMAGE_TYPES.
    api_key, cse_id : str, optional
        Override the credentials from settings.
    http_client : httpx.Client, optional
        Client to send the request with (tests pass one with a mock transport).

    Returns
    -------
    SearchResult
        `text` is the numbered summary, `images` the list of item links.

    Raises
    ------
    SearchError
        If the request fails or the API answers with an error status.
    ConfigurationError
        If credentials are neither passed nor configured.
    """
    if search_type not in ("web", "image"):
        raise ValueError(f"Unsupported search_type: {search_type!r}")

    params: Dict[str, Any] = {
        "q": query,
        "key": api_key or settings.google_api_key,
        "cx": cse_id or settings.google_cse_id,
        "num": num,
    }
    if search_type == "image":
        params["searchType"] = "image"
        if img_type:
            if img_type not in IMAGE_TYPES:
                raise ValueError(f"Unsupported img_type: {img_type!r}")
            params["imgType"] = img_type

    client = http_client or httpx.Client(timeout=30.0)
    try:
        response = client.get(SEARCH_URL, params=params)
    except httpx.HTTPError as exc:
        raise SearchError(f"Search request failed: {exc}") from exc
    finally:
        if http_client is None:
            client.close()

    if response.is_error:
        message = _error_message(response)
        logger.warning(
            "[SEARCH] %s search for %r failed with HTTP %s: %s",
            search_type,
            query,
            response.status_code,
            message,
        )
        raise SearchError(message, status_code=response.status_code)

    data = response.json()
    items: List[Dict[str, Any]] = data.get("items") or []
    logger.info("[SEARCH] %s search for %r returned %d items", search_type, query, len(items))

    return SearchResult(
        text=_format_items(items),
        images=[item["link"] for item in items if item.get("link")],
    )
