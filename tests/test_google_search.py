"""
Tests for the Google Custom Search wrapper
==========================================
"""

import httpx
import pytest

from core.search.google_search import SEARCH_URL, google_search
from exceptions.exceptions import SearchError


def make_client(handler):
    return httpx.Client(transport=httpx.MockTransport(handler))


class TestWebSearch:
    """Plain web search formats items into numbered text."""

    def test_sends_query_and_credentials(self):
        seen = {}

        def handler(request):
            seen["url"] = f"{request.url.scheme}://{request.url.host}{request.url.path}"
            seen["params"] = dict(request.url.params)
            return httpx.Response(200, json={"items": []})

        google_search("Ada Lovelace", api_key="k", cse_id="cx", http_client=make_client(handler))

        assert seen["url"] == SEARCH_URL
        assert seen["params"] == {"q": "Ada Lovelace", "key": "k", "cx": "cx", "num": "10"}

    def test_formats_results_text(self):
        items = [
            {"title": "Ada", "snippet": "Mathematician", "link": "https://a.example"},
            {"title": "Other Ada"},
        ]
        client = make_client(lambda request: httpx.Response(200, json={"items": items}))

        result = google_search("Ada", api_key="k", cse_id="cx", http_client=client)

        assert result.text == (
            "Result 1:\nTitle: Ada\nSnippet: Mathematician\nLink: https://a.example\n\n"
            "Result 2:\nTitle: Other Ada\nSnippet: \nLink: \n\n"
        )
        assert result.images == ["https://a.example"]

    def test_missing_items_means_no_results(self):
        client = make_client(lambda request: httpx.Response(200, json={"kind": "customsearch#search"}))

        result = google_search("Nobody", api_key="k", cse_id="cx", http_client=client)

        assert result.text == ""
        assert result.images == []


class TestImageSearch:
    """Image search adds searchType (and imgType when given)."""

    def test_image_params(self):
        seen = {}

        def handler(request):
            seen.update(dict(request.url.params))
            return httpx.Response(200, json={"items": [{"link": "https://img.example/1.jpg"}]})

        result = google_search(
            "Ada",
            num=5,
            search_type="image",
            img_type="face",
            api_key="k",
            cse_id="cx",
            http_client=make_client(handler),
        )

        assert seen["searchType"] == "image"
        assert seen["imgType"] == "face"
        assert seen["num"] == "5"
        assert result.images == ["https://img.example/1.jpg"]

    def test_rejects_unknown_image_type(self):
        with pytest.raises(ValueError):
            google_search("Ada", search_type="image", img_type="vector", api_key="k", cse_id="cx")


class TestErrors:

    def test_http_error_carries_provider_message(self):
        body = {"error": {"code": 403, "message": "API key not valid."}}
        client = make_client(lambda request: httpx.Response(403, json=body))

        with pytest.raises(SearchError) as excinfo:
            google_search("Ada", api_key="k", cse_id="cx", http_client=client)

        assert str(excinfo.value) == "API key not valid."
        assert excinfo.value.status_code == 403

    def test_transport_error_is_wrapped(self):
        def handler(request):
            raise httpx.ConnectError("boom", request=request)

        with pytest.raises(SearchError):
            google_search("Ada", api_key="k", cse_id="cx", http_client=make_client(handler))
