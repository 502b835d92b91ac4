"""
相似故事计算：候选过滤和排序
"""

from typing import List, Mapping, Optional, Sequence

import numpy as np

from ..models import Genre, SimilarityResult, Story, Tag
from ..utils.similarity import SimilarityFunction, cosine_similarity
from ..utils.validation import validate_limit
from .vectorizer import vectorize


def filter_candidates(target_story: Story,
                      all_stories: Sequence[Story],
                      exclude_same_author: bool = False) -> List[Story]:
    """
    过滤目标故事的候选集合

    依次排除：目标故事本身、草稿、（可选）同一作者的故事。
    不修改输入，保留剩余候选的相对顺序。

    Args:
        target_story: 目标故事
        all_stories: 全部故事
        exclude_same_author: 是否排除同一作者的故事

    Returns:
        候选故事列表
    """
    candidates = []
    for story in all_stories:
        if story.story_id == target_story.story_id:
            continue
        if story.is_draft:
            continue
        if exclude_same_author and story.author_id == target_story.author_id:
            continue
        candidates.append(story)
    return candidates


def compute_similar_stories(target_story: Story,
                            all_stories: Sequence[Story],
                            all_genres: Sequence[Genre],
                            all_tags: Sequence[Tag],
                            score_fn: SimilarityFunction = cosine_similarity,
                            exclude_same_author: bool = False,
                            limit: Optional[int] = None,
                            vectors: Optional[Mapping[str, np.ndarray]] = None) -> List[SimilarityResult]:
    """
    计算与目标故事相似的故事，按分数降序排列

    Args:
        target_story: 目标故事
        all_stories: 全部故事（可以包含目标故事和草稿）
        all_genres: 全部类型，目标和候选使用同一份
        all_tags: 全部标签，目标和候选使用同一份
        score_fn: 相似度函数（cosine_similarity/jaccard_similarity）
        exclude_same_author: 是否排除同一作者的故事
        limit: 最多返回的结果数量，None表示不截断
        vectors: 预先构建的故事ID到特征向量的映射，缺失的故事现场向量化

    Returns:
        SimilarityResult列表，分数相同时保持输入顺序

    Raises:
        DimensionMismatchError: 向量维度不一致
    """
    validate_limit(limit)

    def _vector_for(story: Story) -> np.ndarray:
        if vectors is not None and story.story_id in vectors:
            return vectors[story.story_id]
        return vectorize(story, all_genres, all_tags)

    target_vector = _vector_for(target_story)

    results = []
    for candidate in filter_candidates(target_story, all_stories, exclude_same_author):
        candidate_vector = _vector_for(candidate)
        results.append(SimilarityResult(candidate, score_fn(target_vector, candidate_vector)))

    # sorted是稳定排序
    results = sorted(results, key=lambda result: result.score, reverse=True)

    if limit is not None:
        results = results[:limit]
    return results
