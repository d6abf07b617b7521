"""
Pytest configuration and fixtures for AniPahe tests.
"""
import json

import pytest

from anipahe.core.config import AnimePaheConfig
from anipahe.plugins.animepahe.api import CatalogClient


API_URL = "https://animepahe.com/api"
CATALOG_URL = "https://animepahe.com/anime/example"
EPISODE_URL = "https://animepahe.com/play/example/abc"


class FakeTransport:
    """
    In-memory transport.

    Page requests (no params) are answered from ``pages``; API requests
    are answered by calling ``api`` with the request params.
    """

    def __init__(self, pages=None, api=None):
        self.pages = pages or {}
        self.api = api
        self.calls = []

    async def get(self, url, params=None, headers=None):
        self.calls.append({"url": url, "params": dict(params) if params else None, "headers": headers})
        if params is None:
            return self.pages[url]
        return self.api(dict(params))

    def api_calls(self, mode=None):
        calls = [c["params"] for c in self.calls if c["params"] is not None]
        if mode is not None:
            calls = [p for p in calls if p.get("m") == mode]
        return calls


def release_body(items, current_page=1, last_page=1):
    """Serialize a release page response."""
    return json.dumps({
        "total": len(items),
        "current_page": current_page,
        "last_page": last_page,
        "data": [{"episode": number, "id": episode_id} for number, episode_id in items],
    })


def catalog_page(title="Example", catalog_id=42):
    return f'''
    <html>
    <body>
        <div class="anime-header">
            <h1>{title}</h1>
            <h1>Other heading</h1>
        </div>
        <a href="/api?m=release&id={catalog_id}&sort=episode_asc">episodes</a>
        <a href="/api?m=release&id=999">related</a>
    </body>
    </html>
    '''


def episode_page(providers, episode_id="1234", session="sess-token"):
    buttons = "\n".join(
        f'<button data-provider="{name}" data-src="https://{name}.example/e/1">{name}</button>'
        for name in providers
    )
    return f'''
    <html>
    <body>
        <div id="resolutionMenu">
        {buttons}
        </div>
        <script>
            getEmbeds({episode_id}, "{session}", 1);
            getEmbeds(5555, "other-session", 2);
        </script>
    </body>
    </html>
    '''


@pytest.fixture
def config():
    """Default configuration."""
    return AnimePaheConfig()


@pytest.fixture
def make_client(config):
    """Build a CatalogClient around a FakeTransport."""
    def _make(pages=None, api=None):
        transport = FakeTransport(pages=pages, api=api)
        return CatalogClient(transport, config), transport
    return _make
