"""
故事特征向量化

特征向量为定长二值向量：前len(all_genres)位对应类型，其余位对应标签。
位置由传入词表的顺序决定，同一次运行中参与比较的向量必须基于同一份词表构建。
"""

import numpy as np
from typing import Iterable, Sequence

from ..models import Genre, Story, Tag


def vectorize(story: Story, all_genres: Sequence[Genre], all_tags: Sequence[Tag]) -> np.ndarray:
    """
    将故事的类型和标签转换为二值特征向量

    Args:
        story: 故事
        all_genres: 全部类型（有序，ID唯一）
        all_tags: 全部标签（有序，ID唯一）

    Returns:
        长度为len(all_genres) + len(all_tags)的int8向量；
        类型不在词表中时不设置类型位（不报错）
    """
    n_genres = len(all_genres)
    vector = np.zeros(n_genres + len(all_tags), dtype=np.int8)

    # 类型位（最多一位）
    if story.genre_id is not None:
        for index, genre in enumerate(all_genres):
            if genre.genre_id == story.genre_id:
                vector[index] = 1
                break

    # 标签位
    if story.tag_ids:
        story_tag_ids = set(story.tag_ids)
        for index, tag in enumerate(all_tags):
            if tag.tag_id in story_tag_ids:
                vector[n_genres + index] = 1

    return vector


def count_orphaned_genres(stories: Iterable[Story], all_genres: Sequence[Genre]) -> int:
    """
    统计genre_id不在类型词表中的故事数量

    这类故事向量化时不会设置类型位，通常意味着数据中存在失效的类型引用。
    """
    known_genre_ids = {genre.genre_id for genre in all_genres}
    return sum(1 for story in stories
               if story.genre_id is not None and story.genre_id not in known_genre_ids)
