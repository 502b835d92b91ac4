"""
故事-特征矩阵构建工具
批量生成推荐时每次运行只构建一次，避免对每个目标故事重复向量化候选
"""

import numpy as np
from scipy.sparse import csr_matrix
from typing import Dict, Sequence, Tuple

from ..models import Genre, Story, Tag
from .logger import logger
from .validation import validate_unique_ids


def build_feature_matrix(
    stories: Sequence[Story],
    all_genres: Sequence[Genre],
    all_tags: Sequence[Tag]
) -> Tuple[csr_matrix, Dict[str, int]]:
    """
    构建故事-特征稀疏矩阵，第i行与vectorize(stories[i], all_genres, all_tags)一致

    Args:
        stories: 故事列表
        all_genres: 全部类型（有序）
        all_tags: 全部标签（有序）

    Returns:
        (feature_matrix, story_id_to_index)
        - feature_matrix: 形状为(len(stories), len(all_genres) + len(all_tags))的二值稀疏矩阵
        - story_id_to_index: 故事ID到行索引的映射
    """
    validate_unique_ids([story.story_id for story in stories], kind='story')

    genre_id_to_index = {genre.genre_id: idx for idx, genre in enumerate(all_genres)}
    n_genres = len(all_genres)
    tag_id_to_index = {tag.tag_id: n_genres + idx for idx, tag in enumerate(all_tags)}
    n_features = n_genres + len(all_tags)

    rows = []
    cols = []
    for row_idx, story in enumerate(stories):
        if story.genre_id is not None and story.genre_id in genre_id_to_index:
            rows.append(row_idx)
            cols.append(genre_id_to_index[story.genre_id])
        # 同一标签只记一次
        for col_idx in sorted({tag_id_to_index[tag_id] for tag_id in story.tag_ids if tag_id in tag_id_to_index}):
            rows.append(row_idx)
            cols.append(col_idx)

    data = np.ones(len(rows), dtype=np.int8)
    feature_matrix = csr_matrix((data, (rows, cols)), shape=(len(stories), n_features), dtype=np.int8)
    logger.debug(f"Feature matrix created: shape {feature_matrix.shape}, non-zero elements: {feature_matrix.nnz}")

    story_id_to_index = {story.story_id: idx for idx, story in enumerate(stories)}
    return feature_matrix, story_id_to_index


def build_story_vectors(
    stories: Sequence[Story],
    all_genres: Sequence[Genre],
    all_tags: Sequence[Tag]
) -> Dict[str, np.ndarray]:
    """
    一次性构建整个目录的特征向量，供批量计算时按故事ID查找

    Returns:
        故事ID到int8特征向量的映射
    """
    feature_matrix, story_id_to_index = build_feature_matrix(stories, all_genres, all_tags)
    dense_matrix = feature_matrix.toarray()
    return {story_id: dense_matrix[idx] for story_id, idx in story_id_to_index.items()}
