"""
数据加载服务模块

从文件读取故事目录快照（类型、标签、故事），支持CSV、JSON和JSON Lines。
"""

import os
import pandas as pd
from typing import Any, List, Optional

from ..models import Genre, Story, Tag, STATUS_ONGOING
from ..utils.exceptions import DataLoadError, DataValidationError
from ..utils.validation import validate_dataframe_columns, validate_unique_ids
from ..utils.logger import logger

# CSV文件中tag_ids列的分隔符
TAG_ID_SEPARATOR = '|'


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (list, tuple)):
        return False
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _clean_id(value: Any) -> Optional[str]:
    """空值或空白字符串返回None，其余转换为去除首尾空白的字符串"""
    if _is_missing(value):
        return None
    # JSON中含空值的整数列会被读成浮点数
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    cleaned = str(value).strip()
    return cleaned or None


def _parse_tag_ids(value: Any) -> List[str]:
    if _is_missing(value):
        return []
    if isinstance(value, str):
        parts = value.split(TAG_ID_SEPARATOR)
    else:
        parts = list(value)
    tag_ids = []
    for part in parts:
        tag_id = _clean_id(part)
        if tag_id is not None:
            tag_ids.append(tag_id)
    return tag_ids


class CatalogLoader:
    """故事目录加载器类"""

    # 必需的列定义
    VOCABULARY_COLUMNS = ['id', 'name']
    STORY_COLUMNS = ['id', 'author_id', 'genre_id', 'status', 'tag_ids']

    def __init__(self, genres_path: str, tags_path: str, stories_path: str):
        """
        初始化加载器

        Args:
            genres_path: 类型文件路径
            tags_path: 标签文件路径
            stories_path: 故事文件路径
        """
        self.genres_path = genres_path
        self.tags_path = tags_path
        self.stories_path = stories_path

    def _read_table(self, file_path: str) -> pd.DataFrame:
        if not os.path.exists(file_path):
            raise FileNotFoundError(f"Catalog file not found: {file_path}")

        extension = os.path.splitext(file_path)[1].lower()
        if extension == '.csv':
            return pd.read_csv(file_path, dtype=str, keep_default_na=False)
        if extension == '.json':
            return pd.read_json(file_path, orient='records', dtype=False)
        if extension == '.jsonl':
            return pd.read_json(file_path, lines=True, dtype=False)
        raise DataLoadError(f"Unsupported catalog file format: {file_path}")

    def get_all_genres(self) -> List[Genre]:
        """
        加载全部类型，顺序与文件一致

        Returns:
            Genre列表

        Raises:
            FileNotFoundError: 文件不存在
            DataValidationError: 缺少必需的列或存在重复ID
            DataLoadError: 数据加载错误
        """
        try:
            logger.info(f"Loading genres from {self.genres_path}")
            df = self._read_table(self.genres_path)
            validate_dataframe_columns(df, self.VOCABULARY_COLUMNS)

            genres = [Genre(_clean_id(row['id']), '' if _is_missing(row['name']) else str(row['name']))
                      for row in df.to_dict('records')]
            validate_unique_ids([genre.genre_id for genre in genres], kind='genre')

            logger.info(f"Loaded {len(genres)} genres")
            return genres

        except (FileNotFoundError, DataLoadError, DataValidationError):
            raise
        except Exception as e:
            raise DataLoadError(f"Error loading genres: {str(e)}")

    def get_all_tags(self) -> List[Tag]:
        """
        加载全部标签，顺序与文件一致

        Returns:
            Tag列表

        Raises:
            FileNotFoundError: 文件不存在
            DataValidationError: 缺少必需的列或存在重复ID
            DataLoadError: 数据加载错误
        """
        try:
            logger.info(f"Loading tags from {self.tags_path}")
            df = self._read_table(self.tags_path)
            validate_dataframe_columns(df, self.VOCABULARY_COLUMNS)

            tags = [Tag(_clean_id(row['id']), '' if _is_missing(row['name']) else str(row['name']))
                    for row in df.to_dict('records')]
            validate_unique_ids([tag.tag_id for tag in tags], kind='tag')

            logger.info(f"Loaded {len(tags)} tags")
            return tags

        except (FileNotFoundError, DataLoadError, DataValidationError):
            raise
        except Exception as e:
            raise DataLoadError(f"Error loading tags: {str(e)}")

    def get_stories_for_similarity(self) -> List[Story]:
        """
        加载全部故事（包括草稿，过滤由相似度计算负责）

        Returns:
            Story列表

        Raises:
            FileNotFoundError: 文件不存在
            DataValidationError: 缺少必需的列或存在重复ID
            DataLoadError: 数据加载错误
        """
        try:
            logger.info(f"Loading stories from {self.stories_path}")
            df = self._read_table(self.stories_path)
            validate_dataframe_columns(df, self.STORY_COLUMNS)

            stories = []
            for row in df.to_dict('records'):
                stories.append(Story(
                    story_id=_clean_id(row['id']),
                    author_id=_clean_id(row['author_id']),
                    genre_id=_clean_id(row['genre_id']),
                    status=_clean_id(row['status']) or STATUS_ONGOING,
                    tag_ids=_parse_tag_ids(row['tag_ids']),
                    title='' if _is_missing(row.get('title')) else str(row.get('title')),
                ))
            validate_unique_ids([story.story_id for story in stories], kind='story')

            drafts = sum(1 for story in stories if story.is_draft)
            logger.info(f"Loaded {len(stories)} stories ({drafts} drafts)")
            return stories

        except (FileNotFoundError, DataLoadError, DataValidationError):
            raise
        except Exception as e:
            raise DataLoadError(f"Error loading stories: {str(e)}")
