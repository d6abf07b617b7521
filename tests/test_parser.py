"""
Tests for the animepahe API response parser.
"""
import pytest

from anipahe.core.exceptions import ExtractionError
from anipahe.plugins.animepahe.parser import (
    parse_embed_data,
    parse_json,
    parse_release_page,
    parse_search_hits,
)


class TestParseJson:

    def test_object(self):
        assert parse_json('{"data": []}') == {"data": []}

    def test_invalid_json_raises(self):
        with pytest.raises(ExtractionError) as exc_info:
            parse_json("<html>blocked</html>", source="search {'q': 'x'}")
        assert "search" in str(exc_info.value)

    def test_non_object_raises(self):
        with pytest.raises(ExtractionError):
            parse_json("[1, 2, 3]")


class TestSearchHits:

    def test_missing_data_means_no_results(self):
        assert parse_search_hits({"total": 0}) == []

    def test_null_data_means_no_results(self):
        assert parse_search_hits({"data": None}) == []

    def test_hits_keep_order(self):
        hits = parse_search_hits({"data": [
            {"title": "B", "slug": "b-slug", "image": "https://i/b.jpg", "id": 2},
            {"title": "A", "slug": "a-slug", "image": "https://i/a.jpg", "id": 1},
        ]})
        assert [hit.slug for hit in hits] == ["b-slug", "a-slug"]

    def test_hit_without_slug_raises(self):
        with pytest.raises(ExtractionError):
            parse_search_hits({"data": [{"title": "A"}]})

    def test_non_list_data_raises(self):
        with pytest.raises(ExtractionError):
            parse_search_hits({"data": {"title": "A"}})

    def test_null_image_becomes_empty(self):
        hits = parse_search_hits({"data": [{"title": "A", "slug": "a-slug", "image": None}]})
        assert hits[0].image == ""


class TestReleasePage:

    def test_items_and_bounds(self):
        page = parse_release_page({
            "current_page": 1,
            "last_page": 3,
            "data": [{"episode": 1, "id": "abc"}, {"episode": 2, "id": 77}],
        })
        assert page.current_page == 1
        assert page.last_page == 3
        assert page.has_more
        assert [(i.episode, i.id) for i in page.items] == [(1, "abc"), (2, "77")]

    def test_missing_data_gives_empty_items(self):
        page = parse_release_page({"current_page": 1, "last_page": 1})
        assert page.items == ()
        assert not page.has_more

    def test_missing_pagination_raises(self):
        with pytest.raises(ExtractionError) as exc_info:
            parse_release_page({"data": []}, source="https://animepahe.com/api?m=release&id=42")
        assert "id=42" in str(exc_info.value)

    def test_current_beyond_last_raises(self):
        with pytest.raises(ExtractionError):
            parse_release_page({"current_page": 4, "last_page": 3, "data": []})

    def test_malformed_item_raises(self):
        with pytest.raises(ExtractionError):
            parse_release_page({"current_page": 1, "last_page": 1, "data": [{"id": "abc"}]})


class TestEmbedData:

    def test_list_entries_in_reported_order(self):
        streams = parse_embed_data({"data": [
            {"1080": {"url": "https://kwik.example/1080", "disc": "BD"}},
            {"360": {"url": "https://kwik.example/360"}},
            {"720": {"url": "https://kwik.example/720"}},
        ]})
        assert [s.label for s in streams] == ["1080p", "360p", "720p"]
        assert streams[0].url == "https://kwik.example/1080"

    def test_object_entries(self):
        streams = parse_embed_data({"data": {
            "0": {"720": {"url": "https://mp4.example/720"}},
            "1": {"480": {"url": "https://mp4.example/480"}},
        }})
        assert [s.label for s in streams] == ["720p", "480p"]

    def test_missing_data_raises(self):
        with pytest.raises(ExtractionError):
            parse_embed_data({})

    def test_entry_without_url_raises(self):
        with pytest.raises(ExtractionError) as exc_info:
            parse_embed_data({"data": [{"720": {"size": 1}}]}, source="https://animepahe.com/api?m=embed&p=kwik")
        assert "p=kwik" in str(exc_info.value)

    def test_empty_entry_raises(self):
        with pytest.raises(ExtractionError):
            parse_embed_data({"data": [{}]})
