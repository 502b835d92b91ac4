"""Shared fixtures: a two-genre, two-tag vocabulary and a small catalog."""

from __future__ import annotations

import pytest

from story_recommender.models import Genre, Story, Tag


@pytest.fixture
def genres() -> list:
    return [Genre("g-fantasy", "Fantasy"), Genre("g-scifi", "SciFi")]


@pytest.fixture
def tags() -> list:
    return [Tag("t-magic", "magic"), Tag("t-dragons", "dragons")]


@pytest.fixture
def story_a() -> Story:
    return Story("a", "author-1", "g-fantasy", "ongoing", ["t-magic", "t-dragons"], title="A")


@pytest.fixture
def story_b() -> Story:
    return Story("b", "author-2", "g-fantasy", "completed", ["t-magic"], title="B")


@pytest.fixture
def story_c() -> Story:
    return Story("c", "author-3", "g-scifi", "ongoing", [], title="C")


@pytest.fixture
def catalog(story_a, story_b, story_c) -> list:
    return [story_a, story_b, story_c]


class FakeCatalog:
    """In-memory catalog provider."""

    def __init__(self, genres, tags, stories):
        self.genres = genres
        self.tags = tags
        self.stories = stories

    def get_all_genres(self):
        return list(self.genres)

    def get_all_tags(self):
        return list(self.tags)

    def get_stories_for_similarity(self):
        return list(self.stories)


class FakeSink:
    """In-memory recommendation sink recording replace() calls."""

    def __init__(self):
        self.rows = {}
        self.calls = []
        self.closed = False

    def replace(self, story_id, recommendations):
        self.calls.append(story_id)
        self.rows[story_id] = list(recommendations)
        return len(recommendations)

    def close(self):
        self.closed = True


@pytest.fixture
def fake_sink() -> FakeSink:
    return FakeSink()


@pytest.fixture
def make_catalog():
    return FakeCatalog
