"""
Tests for the animepahe CatalogClient.
"""
import json

import pytest

from anipahe.core.exceptions import ApiUsageError, ExtractionError
from anipahe.plugins.animepahe.api import CatalogClient

from conftest import API_URL, FakeTransport, release_body


class TestSearch:

    async def test_sends_search_params(self, make_client):
        client, transport = make_client(api=lambda params: json.dumps({"data": []}))

        await client.search("naruto")

        call = transport.calls[0]
        assert call["url"] == API_URL
        assert call["params"] == {"l": 8, "m": "search", "q": "naruto"}
        assert call["headers"]["Referer"] == "https://animepahe.com/"

    async def test_absent_data_is_empty(self, make_client):
        client, _ = make_client(api=lambda params: json.dumps({"total": 0}))
        assert await client.search("nothing") == []

    async def test_returns_hits(self, make_client):
        body = json.dumps({"data": [{"title": "Example", "slug": "example", "image": "https://i/e.jpg"}]})
        client, _ = make_client(api=lambda params: body)

        hits = await client.search("example")

        assert len(hits) == 1
        assert hits[0].title == "Example"


class TestReleasePage:

    async def test_default_page_is_one(self, make_client):
        client, transport = make_client(api=lambda params: release_body([(1, "abc")]))

        page = await client.fetch_release_page(42)

        assert transport.calls[0]["params"] == {"m": "release", "id": 42, "sort": "episode_asc", "page": 1}
        assert page.items[0].id == "abc"

    async def test_explicit_page(self, make_client):
        client, transport = make_client(api=lambda params: release_body([(31, "x")], 2, 2))

        page = await client.fetch_release_page(42, page=2)

        assert transport.calls[0]["params"]["page"] == 2
        assert page.current_page == 2


class TestEmbedData:

    async def test_sends_embed_params(self, make_client):
        body = json.dumps({"data": [{"720": {"url": "https://kwik.example/720"}}]})
        client, transport = make_client(api=lambda params: body)

        streams = await client.fetch_embed_data("kwik", "1234", "sess")

        assert transport.calls[0]["params"] == {"id": "1234", "m": "embed", "p": "kwik", "session": "sess"}
        assert streams[0].label == "720p"

    async def test_empty_body_raises_with_params(self, make_client):
        client, _ = make_client(api=lambda params: "")

        with pytest.raises(ApiUsageError) as exc_info:
            await client.fetch_embed_data("kwik", "1234", "stale-session")

        error = exc_info.value
        assert error.params == {"id": "1234", "m": "embed", "p": "kwik", "session": "stale-session"}
        assert "stale-session" in str(error)
        assert "1234" in str(error)

    async def test_whitespace_body_is_not_empty(self, make_client):
        client, _ = make_client(api=lambda params: "  \n")

        with pytest.raises(ExtractionError) as exc_info:
            await client.fetch_embed_data("kwik", "1234", "sess")

        assert not isinstance(exc_info.value, ApiUsageError)
        assert "session=sess" in str(exc_info.value)

    async def test_non_json_body_raises(self, make_client):
        client, _ = make_client(api=lambda params: "<html>captcha</html>")

        with pytest.raises(ExtractionError):
            await client.fetch_embed_data("kwik", "1234", "sess")


class TestHeaders:

    def test_headers_built_once_from_builder(self, config):
        seen = []

        def builder(overrides):
            seen.append(dict(overrides))
            return {"X-Test": "1", **overrides}

        client = CatalogClient(FakeTransport(), config, header_builder=builder)

        assert len(seen) == 1
        assert client.headers["Referer"] == config.referer
        assert client.headers["X-Test"] == "1"

    async def test_page_fetch_uses_shared_headers(self, make_client):
        client, transport = make_client(pages={"https://animepahe.com/anime/x": "<h1>X</h1>"})

        text = await client.get_page("https://animepahe.com/anime/x")

        assert text == "<h1>X</h1>"
        assert transport.calls[0]["params"] is None
        assert transport.calls[0]["headers"] is client.headers
