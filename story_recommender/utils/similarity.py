"""
相似度计算工具模块

二值特征向量的余弦相似度和Jaccard相似度。两种度量可以互换使用，
取值都在[0, 1]范围内；全零向量与任何向量的相似度定义为0。
"""

import numpy as np
from typing import Callable, Dict, Sequence, Tuple, Union

from .exceptions import ConfigurationError, DimensionMismatchError
from .validation import validate_binary_vector

VectorLike = Union[np.ndarray, Sequence[int]]
SimilarityFunction = Callable[[VectorLike, VectorLike], float]


def _prepare_vectors(vector_a: VectorLike, vector_b: VectorLike) -> Tuple[np.ndarray, np.ndarray]:
    """转换为int64数组并检查维度和取值"""
    a = np.asarray(vector_a)
    b = np.asarray(vector_b)
    if a.shape != b.shape:
        raise DimensionMismatchError(f"Vectors must have the same length, got shapes {a.shape} and {b.shape}")
    validate_binary_vector(a)
    validate_binary_vector(b)
    return a.astype(np.int64), b.astype(np.int64)


def cosine_similarity(vector_a: VectorLike, vector_b: VectorLike) -> float:
    """
    计算两个二值向量的余弦相似度

    Args:
        vector_a: 第一个二值向量
        vector_b: 第二个二值向量

    Returns:
        余弦相似度，范围[0, 1]；任一向量全零时返回0

    Raises:
        DimensionMismatchError: 两个向量长度不同
        InvalidVectorInputError: 向量包含0/1以外的值
    """
    a, b = _prepare_vectors(vector_a, vector_b)

    # 任一向量全零，相似度为0
    if a.sum() == 0 or b.sum() == 0:
        return 0.0

    dot_product = float(np.dot(a, b))
    magnitude_a = float(np.sqrt(np.dot(a, a)))
    magnitude_b = float(np.sqrt(np.dot(b, b)))

    # 使用clip处理浮点数精度问题
    return float(np.clip(dot_product / (magnitude_a * magnitude_b), 0.0, 1.0))


def jaccard_similarity(vector_a: VectorLike, vector_b: VectorLike) -> float:
    """
    计算两个二值向量的Jaccard相似度

    Args:
        vector_a: 第一个二值向量
        vector_b: 第二个二值向量

    Returns:
        交集大小/并集大小，范围[0, 1]；并集为空时返回0

    Raises:
        DimensionMismatchError: 两个向量长度不同
        InvalidVectorInputError: 向量包含0/1以外的值
    """
    a, b = _prepare_vectors(vector_a, vector_b)

    mask_a = a == 1
    mask_b = b == 1
    union = int(np.count_nonzero(mask_a | mask_b))
    if union == 0:
        return 0.0
    intersection = int(np.count_nonzero(mask_a & mask_b))
    return intersection / union


SIMILARITY_FUNCTIONS: Dict[str, SimilarityFunction] = {
    'cosine': cosine_similarity,
    'jaccard': jaccard_similarity,
}


def get_similarity_function(name: str) -> SimilarityFunction:
    """
    按名称获取相似度函数

    Args:
        name: 'cosine' 或 'jaccard'（不区分大小写）

    Raises:
        ConfigurationError: 未知的度量名称
    """
    key = (name or '').strip().lower()
    try:
        return SIMILARITY_FUNCTIONS[key]
    except KeyError:
        raise ConfigurationError(
            f"Unknown similarity measure {name!r}, expected one of {sorted(SIMILARITY_FUNCTIONS)}")
