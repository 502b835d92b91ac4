"""
数据验证工具模块
"""

import pandas as pd
import numpy as np
from typing import Iterable, List, Optional
from .exceptions import DataValidationError, InvalidVectorInputError


def validate_story_id(story_id: str) -> None:
    """
    验证故事ID

    Args:
        story_id: 故事ID

    Raises:
        DataValidationError: 如果故事ID无效
    """
    if story_id is None or not isinstance(story_id, str) or not story_id.strip():
        raise DataValidationError(f"Invalid story_id: {story_id!r}")


def validate_unique_ids(ids: Iterable[str], kind: str = 'id') -> None:
    """
    验证ID列表中没有重复（词表顺序决定向量位置，重复ID会导致位置歧义）

    Args:
        ids: ID序列
        kind: 用于错误信息的实体名称

    Raises:
        DataValidationError: 如果存在空ID或重复ID
    """
    seen = set()
    duplicates = []
    for item_id in ids:
        if item_id is None or not isinstance(item_id, str) or not item_id.strip():
            raise DataValidationError(f"Invalid {kind} id: {item_id!r}")
        if item_id in seen:
            duplicates.append(item_id)
        seen.add(item_id)
    if duplicates:
        raise DataValidationError(f"Duplicate {kind} ids: {sorted(set(duplicates))}")


def validate_dataframe_columns(df: pd.DataFrame, required_columns: List[str]) -> None:
    """
    验证DataFrame是否包含必需的列

    Args:
        df: 要验证的DataFrame
        required_columns: 必需的列名列表

    Raises:
        DataValidationError: 如果缺少必需的列
    """
    missing_columns = set(required_columns) - set(df.columns)
    if missing_columns:
        raise DataValidationError(f"Missing required columns: {sorted(missing_columns)}")


def validate_binary_vector(vector: np.ndarray) -> None:
    """
    验证特征向量只包含0/1

    Raises:
        InvalidVectorInputError: 如果向量不是一维或包含非二值元素
    """
    if vector.ndim != 1:
        raise InvalidVectorInputError(f"Feature vector must be one-dimensional, got shape {vector.shape}")
    if not np.isin(vector, (0, 1)).all():
        raise InvalidVectorInputError(f"Feature vector must contain only 0/1 values, got {np.unique(vector).tolist()}")


def validate_limit(limit: Optional[int]) -> None:
    """
    验证截断数量

    Raises:
        DataValidationError: 如果limit不是非负整数
    """
    if limit is None:
        return
    if isinstance(limit, bool) or not isinstance(limit, (int, np.integer)) or limit < 0:
        raise DataValidationError(f"limit must be a non-negative integer or None, got {limit!r}")
