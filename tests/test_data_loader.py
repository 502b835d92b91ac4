"""Tests for services.data_loader."""

from __future__ import annotations

import json

import pytest

from story_recommender.services.data_loader import CatalogLoader
from story_recommender.utils.exceptions import DataLoadError, DataValidationError


def _write(path, text: str):
    path.write_text(text, encoding="utf-8")
    return str(path)


@pytest.fixture
def csv_catalog(tmp_path) -> CatalogLoader:
    genres = _write(tmp_path / "genres.csv", "id,name\ng-fantasy,Fantasy\ng-scifi,SciFi\n")
    tags = _write(tmp_path / "tags.csv", "id,name\nt-magic,magic\nt-dragons,dragons\n")
    stories = _write(
        tmp_path / "stories.csv",
        "id,author_id,genre_id,status,tag_ids,title\n"
        "a,author-1,g-fantasy,ongoing,t-magic|t-dragons,Dragon Tales\n"
        "b,author-2,,draft,,Unfinished\n"
        "c,author-3,g-scifi,,t-magic| ,\n",
    )
    return CatalogLoader(genres, tags, stories)


class TestCsvCatalog:
    def test_vocabulary_keeps_file_order(self, csv_catalog) -> None:
        assert [g.genre_id for g in csv_catalog.get_all_genres()] == ["g-fantasy", "g-scifi"]
        assert [t.tag_id for t in csv_catalog.get_all_tags()] == ["t-magic", "t-dragons"]
        assert csv_catalog.get_all_tags()[1].name == "dragons"

    def test_stories_parsed(self, csv_catalog) -> None:
        stories = {s.story_id: s for s in csv_catalog.get_stories_for_similarity()}

        assert stories["a"].tag_ids == ("t-magic", "t-dragons")
        assert stories["a"].genre_id == "g-fantasy"
        assert stories["a"].title == "Dragon Tales"

    def test_blank_fields_and_drafts(self, csv_catalog) -> None:
        stories = {s.story_id: s for s in csv_catalog.get_stories_for_similarity()}

        assert stories["b"].genre_id is None
        assert stories["b"].tag_ids == ()
        assert stories["b"].is_draft
        assert stories["c"].status == "ongoing"
        assert stories["c"].tag_ids == ("t-magic",)


class TestJsonCatalog:
    def test_json_records_with_lists(self, tmp_path) -> None:
        genres = _write(tmp_path / "genres.json", json.dumps([{"id": 1, "name": "Fantasy"}]))
        tags = _write(tmp_path / "tags.jsonl", '{"id": "t1", "name": "magic"}\n{"id": "t2", "name": "dragons"}\n')
        stories = _write(tmp_path / "stories.json", json.dumps([
            {"id": "a", "author_id": "u1", "genre_id": 1, "status": "ongoing", "tag_ids": ["t1", "t2"]},
            {"id": "b", "author_id": "u2", "genre_id": None, "status": "completed", "tag_ids": []},
        ]))
        loader = CatalogLoader(genres, tags, stories)

        assert [g.genre_id for g in loader.get_all_genres()] == ["1"]
        assert [t.tag_id for t in loader.get_all_tags()] == ["t1", "t2"]
        stories_by_id = {s.story_id: s for s in loader.get_stories_for_similarity()}
        assert stories_by_id["a"].genre_id == "1"
        assert stories_by_id["a"].tag_ids == ("t1", "t2")
        assert stories_by_id["b"].genre_id is None
        assert stories_by_id["b"].tag_ids == ()


class TestLoaderErrors:
    def test_missing_file(self, tmp_path) -> None:
        loader = CatalogLoader(str(tmp_path / "nope.csv"), "", "")
        with pytest.raises(FileNotFoundError):
            loader.get_all_genres()

    def test_missing_columns(self, tmp_path) -> None:
        genres = _write(tmp_path / "genres.csv", "id\ng1\n")
        with pytest.raises(DataValidationError):
            CatalogLoader(genres, "", "").get_all_genres()

    def test_duplicate_ids(self, tmp_path) -> None:
        tags = _write(tmp_path / "tags.csv", "id,name\nt1,a\nt1,b\n")
        with pytest.raises(DataValidationError):
            CatalogLoader("", tags, "").get_all_tags()

    def test_unsupported_format(self, tmp_path) -> None:
        genres = _write(tmp_path / "genres.xml", "<genres/>")
        with pytest.raises(DataLoadError):
            CatalogLoader(genres, "", "").get_all_genres()

    def test_empty_file(self, tmp_path) -> None:
        genres = _write(tmp_path / "genres.csv", "")
        with pytest.raises(DataLoadError):
            CatalogLoader(genres, "", "").get_all_genres()

    def test_header_only_catalog_is_empty(self, tmp_path) -> None:
        stories = _write(tmp_path / "stories.csv", "id,author_id,genre_id,status,tag_ids\n")
        assert CatalogLoader("", "", stories).get_stories_for_similarity() == []
