"""
Tests for the animepahe page text extractor.
"""
import re

import pytest

from anipahe.core.exceptions import ExtractionError
from anipahe.plugins.animepahe.extractor import (
    DEFAULT_PATTERNS,
    extract_catalog_id,
    extract_provider_names,
    extract_provider_session,
    extract_title,
    iter_provider_names,
)

from conftest import catalog_page, episode_page


class TestCatalogId:

    def test_first_id_wins(self):
        assert extract_catalog_id(catalog_page(catalog_id=42)) == 42

    def test_returns_int(self):
        assert isinstance(extract_catalog_id('<a href="?m=release&id=7">'), int)

    def test_missing_id_raises(self):
        with pytest.raises(ExtractionError) as exc_info:
            extract_catalog_id("<html><h1>No id here</h1></html>")
        assert exc_info.value.pattern == DEFAULT_PATTERNS.catalog_id.pattern

    def test_non_numeric_id_is_not_matched(self):
        with pytest.raises(ExtractionError):
            extract_catalog_id('<a href="?m=release&id=abc">')


class TestTitle:

    def test_first_heading_wins(self):
        assert extract_title(catalog_page(title="Example")) == "Example"

    def test_missing_heading_raises(self):
        with pytest.raises(ExtractionError):
            extract_title("<html><h2>Not a title</h2></html>")

    def test_heading_with_attributes_is_not_matched(self):
        with pytest.raises(ExtractionError):
            extract_title('<h1 class="title">Example</h1>')


class TestProviderNames:

    @pytest.mark.parametrize("providers", [
        [],
        ["kwik"],
        ["kwik", "mp4upload", "streamtape"],
    ])
    def test_counts_follow_markers(self, providers):
        assert extract_provider_names(episode_page(providers)) == tuple(providers)

    def test_duplicates_preserved_in_order(self):
        names = extract_provider_names(episode_page(["kwik", "mp4upload", "kwik"]))
        assert names == ("kwik", "mp4upload", "kwik")

    def test_iterator_is_lazy_and_restartable(self):
        text = episode_page(["kwik", "mp4upload"])
        first = iter_provider_names(text)
        assert next(first) == "kwik"
        # A fresh iteration starts from the beginning again
        assert list(iter_provider_names(text)) == ["kwik", "mp4upload"]
        assert list(first) == ["mp4upload"]

    def test_custom_patterns(self):
        patterns = DEFAULT_PATTERNS._replace(provider=re.compile(r'data-host="([^"]+)'))
        text = '<a data-host="kwik"></a><a data-provider="mp4upload"></a>'
        assert extract_provider_names(text, patterns) == ("kwik",)


class TestProviderSession:

    def test_first_embed_call_wins(self):
        episode_id, session = extract_provider_session(episode_page(["kwik"], "1234", "sess-token"))
        assert episode_id == "1234"
        assert session == "sess-token"

    def test_missing_embed_call_raises(self):
        with pytest.raises(ExtractionError):
            extract_provider_session('<button data-provider="kwik"></button>')
