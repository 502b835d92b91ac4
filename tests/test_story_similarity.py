"""Tests for algorithms.story_similarity."""

from __future__ import annotations

import pytest

from story_recommender.algorithms.story_similarity import compute_similar_stories, filter_candidates
from story_recommender.models import Genre, Story, Tag
from story_recommender.utils.exceptions import DataValidationError, DimensionMismatchError
from story_recommender.utils.matrix_builder import build_story_vectors
from story_recommender.utils.similarity import cosine_similarity, jaccard_similarity


class TestFilterCandidates:
    def test_excludes_target_itself(self, story_a, catalog) -> None:
        ids = [s.story_id for s in filter_candidates(story_a, catalog)]
        assert ids == ["b", "c"]

    def test_excludes_drafts(self, story_a, catalog) -> None:
        draft = Story("d", "author-9", "g-fantasy", "draft", ["t-magic"])
        ids = [s.story_id for s in filter_candidates(story_a, catalog + [draft])]
        assert "d" not in ids

    def test_same_author_toggle(self, story_a, catalog) -> None:
        sibling = Story("s", "author-1", "g-fantasy", "ongoing", ["t-magic"])
        stories = catalog + [sibling]

        assert "s" in [s.story_id for s in filter_candidates(story_a, stories, exclude_same_author=False)]
        assert "s" not in [s.story_id for s in filter_candidates(story_a, stories, exclude_same_author=True)]

    def test_preserves_order_and_input(self, story_a, story_b, story_c) -> None:
        stories = [story_c, story_a, story_b]
        snapshot = list(stories)
        result = filter_candidates(story_a, stories)
        assert [s.story_id for s in result] == ["c", "b"]
        assert stories == snapshot


class TestComputeSimilarStories:
    def test_concrete_cosine_ranking(self, story_a, catalog, genres, tags) -> None:
        results = compute_similar_stories(story_a, catalog, genres, tags, cosine_similarity)
        assert [r.story_id for r in results] == ["b", "c"]
        assert results[0].score == pytest.approx(0.8165, abs=1e-4)
        assert results[1].score == 0.0

    def test_concrete_jaccard_ranking(self, story_a, catalog, genres, tags) -> None:
        results = compute_similar_stories(story_a, catalog, genres, tags, jaccard_similarity)
        assert results[0].score == pytest.approx(2 / 3)
        assert results[1].score == 0.0

    def test_self_never_included(self, story_a, catalog, genres, tags) -> None:
        results = compute_similar_stories(story_a, catalog + [story_a], genres, tags)
        assert "a" not in [r.story_id for r in results]

    def test_drafts_never_included(self, story_a, catalog, genres, tags) -> None:
        draft = Story("d", "author-9", "g-fantasy", "draft", ["t-magic", "t-dragons"])
        results = compute_similar_stories(story_a, catalog + [draft], genres, tags)
        assert "d" not in [r.story_id for r in results]

    def test_author_exclusion_toggle(self, story_a, catalog, genres, tags) -> None:
        sibling = Story("s", "author-1", "g-fantasy", "ongoing", ["t-dragons"])
        stories = catalog + [sibling]

        included = compute_similar_stories(story_a, stories, genres, tags, exclude_same_author=False)
        excluded = compute_similar_stories(story_a, stories, genres, tags, exclude_same_author=True)

        sibling_result = [r for r in included if r.story_id == "s"]
        assert sibling_result and sibling_result[0].score > 0
        assert all(r.story.author_id != story_a.author_id for r in excluded)

    def test_sorted_descending(self) -> None:
        genres = [Genre("g1")]
        tags = [Tag("t1"), Tag("t2"), Tag("t3"), Tag("t4")]
        target = Story("target", "x", "g1", tag_ids=["t1", "t2", "t3", "t4"])
        low = Story("low", "y", None, tag_ids=["t1"])
        high = Story("high", "y", "g1", tag_ids=["t1", "t2", "t3", "t4"])
        mid = Story("mid", "y", "g1", tag_ids=["t1"])

        results = compute_similar_stories(target, [low, high, mid], genres, tags, jaccard_similarity)

        assert [r.story_id for r in results] == ["high", "mid", "low"]
        assert [r.score for r in results] == [1.0, 0.4, 0.2]

    def test_ties_keep_input_order(self, story_a, genres, tags) -> None:
        twins = [Story(f"twin-{i}", "y", "g-fantasy", tag_ids=["t-magic"]) for i in range(5)]
        results = compute_similar_stories(story_a, twins, genres, tags)
        assert [r.story_id for r in results] == [f"twin-{i}" for i in range(5)]

    def test_zero_vector_target_ties_in_input_order(self, catalog, genres, tags) -> None:
        empty = Story("empty", "x", None, tag_ids=[])
        results = compute_similar_stories(empty, catalog, genres, tags)
        assert [r.story_id for r in results] == ["a", "b", "c"]
        assert all(r.score == 0.0 for r in results)

    def test_limit_truncates_to_top_results(self, story_a, genres, tags) -> None:
        candidates = [
            Story("c1", "y", "g-scifi", tag_ids=[]),
            Story("c2", "y", "g-fantasy", tag_ids=["t-magic", "t-dragons"]),
            Story("c3", "y", None, tag_ids=["t-magic"]),
            Story("c4", "y", "g-fantasy", tag_ids=["t-magic"]),
            Story("c5", "y", None, tag_ids=[]),
        ]
        results = compute_similar_stories(story_a, candidates, genres, tags, limit=2)
        assert len(results) == 2
        assert [r.story_id for r in results] == ["c2", "c4"]

    def test_limit_zero_and_none(self, story_a, catalog, genres, tags) -> None:
        assert compute_similar_stories(story_a, catalog, genres, tags, limit=0) == []
        assert len(compute_similar_stories(story_a, catalog, genres, tags, limit=None)) == 2

    def test_invalid_limit(self, story_a, catalog, genres, tags) -> None:
        with pytest.raises(DataValidationError):
            compute_similar_stories(story_a, catalog, genres, tags, limit=-1)

    def test_empty_catalog(self, story_a, genres, tags) -> None:
        assert compute_similar_stories(story_a, [], genres, tags) == []

    def test_dimension_mismatch_propagates(self, story_a, catalog, genres, tags) -> None:
        def drifting_score(vector_a, vector_b):
            return cosine_similarity(vector_a, list(vector_b) + [0])

        with pytest.raises(DimensionMismatchError):
            compute_similar_stories(story_a, catalog, genres, tags, drifting_score)

    def test_precomputed_vectors_match_vectorized_scores(self, story_a, catalog, genres, tags) -> None:
        vectors = build_story_vectors(catalog, genres, tags)
        expected = compute_similar_stories(story_a, catalog, genres, tags)
        results = compute_similar_stories(story_a, catalog, genres, tags, vectors=vectors)
        assert [(r.story_id, r.score) for r in results] == [(r.story_id, r.score) for r in expected]

    def test_stale_precomputed_vectors_raise_mismatch(self, story_a, story_b, catalog, genres, tags) -> None:
        # vectors built before a tag was added; story_c is vectorized with the new vocabulary
        stale = build_story_vectors([story_a, story_b], genres, tags)
        grown_tags = tags + [Tag("t-space", "space")]

        with pytest.raises(DimensionMismatchError):
            compute_similar_stories(story_a, catalog, genres, grown_tags, vectors=stale)
