"""
配置模块：提供推荐参数和路径配置
"""

import math
import os
from typing import Mapping, Optional

from dotenv import load_dotenv

from .exceptions import ConfigurationError
from .similarity import SIMILARITY_FUNCTIONS

# 数据路径配置
DATA_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), 'data')
GENRES_PATH = os.path.join(DATA_DIR, 'genres.csv')
TAGS_PATH = os.path.join(DATA_DIR, 'tags.csv')
STORIES_PATH = os.path.join(DATA_DIR, 'stories.csv')
RECOMMENDATIONS_PATH = os.path.join(DATA_DIR, 'story_recommendations.csv')

# 推荐系统配置
MAX_RECOMMENDATIONS_PER_STORY = 10  # 每个故事保留的推荐数量
SIMILARITY_THRESHOLD = 0.1  # 低于该分数的候选不保留
EXCLUDE_SAME_AUTHOR = False
BATCH_SIZE = 50  # 每批处理的目标故事数量
SIMILARITY_MEASURE = 'cosine'
LOG_LEVEL = 'INFO'

# 每处理多少个故事输出一次进度日志
PROGRESS_LOG_INTERVAL = 100


class RecommendationConfig:
    """推荐生成配置"""

    def __init__(self,
                 max_recommendations_per_story: int = MAX_RECOMMENDATIONS_PER_STORY,
                 similarity_threshold: float = SIMILARITY_THRESHOLD,
                 exclude_same_author: bool = EXCLUDE_SAME_AUTHOR,
                 batch_size: int = BATCH_SIZE,
                 similarity_measure: str = SIMILARITY_MEASURE,
                 log_level: str = LOG_LEVEL):
        """
        初始化推荐配置

        Args:
            max_recommendations_per_story: 每个故事最多保留的推荐数量
            similarity_threshold: 相似度阈值，排序后再过滤
            exclude_same_author: 是否排除同一作者的故事
            batch_size: 每批处理的目标故事数量
            similarity_measure: 相似度度量（cosine/jaccard）
            log_level: 日志级别
        """
        self.max_recommendations_per_story = max_recommendations_per_story
        self.similarity_threshold = similarity_threshold
        self.exclude_same_author = exclude_same_author
        self.batch_size = batch_size
        self.similarity_measure = similarity_measure
        self.log_level = log_level

    def to_dict(self) -> dict:
        return {
            'max_recommendations_per_story': self.max_recommendations_per_story,
            'similarity_threshold': self.similarity_threshold,
            'exclude_same_author': self.exclude_same_author,
            'batch_size': self.batch_size,
            'similarity_measure': self.similarity_measure,
            'log_level': self.log_level,
        }

    def __repr__(self) -> str:
        return (f"RecommendationConfig(max={self.max_recommendations_per_story}, "
                f"threshold={self.similarity_threshold}, "
                f"exclude_same_author={self.exclude_same_author}, "
                f"batch_size={self.batch_size}, measure={self.similarity_measure})")


def _get_env_number(environ: Mapping[str, str], name: str, default_value: float) -> float:
    value = environ.get(name)
    if not value:
        return default_value
    try:
        number = float(value)
    except ValueError:
        raise ConfigurationError(f"Environment variable {name} must be a valid number, got {value!r}")
    if not math.isfinite(number):
        raise ConfigurationError(f"Environment variable {name} must be a finite number, got {value!r}")
    return number


def _get_env_int(environ: Mapping[str, str], name: str, default_value: int) -> int:
    value = _get_env_number(environ, name, default_value)
    if value != int(value):
        raise ConfigurationError(f"Environment variable {name} must be an integer, got {value}")
    return int(value)


def _get_env_boolean(environ: Mapping[str, str], name: str, default_value: bool) -> bool:
    value = environ.get(name)
    if not value:
        return default_value
    return value.strip().lower() == 'true'


def load_config(environ: Optional[Mapping[str, str]] = None) -> RecommendationConfig:
    """
    从环境变量加载推荐配置（未设置的项使用模块默认值）

    Args:
        environ: 环境变量映射，默认读取.env后使用os.environ

    Returns:
        RecommendationConfig实例

    Raises:
        ConfigurationError: 数值型配置无法解析
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    return RecommendationConfig(
        max_recommendations_per_story=_get_env_int(
            environ, 'MAX_RECOMMENDATIONS_PER_STORY', MAX_RECOMMENDATIONS_PER_STORY),
        similarity_threshold=_get_env_number(environ, 'SIMILARITY_THRESHOLD', SIMILARITY_THRESHOLD),
        exclude_same_author=_get_env_boolean(environ, 'EXCLUDE_SAME_AUTHOR', EXCLUDE_SAME_AUTHOR),
        batch_size=_get_env_int(environ, 'BATCH_SIZE', BATCH_SIZE),
        similarity_measure=(environ.get('SIMILARITY_MEASURE') or SIMILARITY_MEASURE).strip().lower(),
        log_level=(environ.get('LOG_LEVEL') or LOG_LEVEL).strip().upper(),
    )


def validate_config(config: RecommendationConfig) -> None:
    """
    验证推荐配置

    Raises:
        ConfigurationError: 配置无效
    """
    if config.max_recommendations_per_story <= 0:
        raise ConfigurationError("MAX_RECOMMENDATIONS_PER_STORY must be greater than 0")

    if not 0 <= config.similarity_threshold <= 1:
        raise ConfigurationError("SIMILARITY_THRESHOLD must be between 0 and 1")

    if config.batch_size <= 0:
        raise ConfigurationError("BATCH_SIZE must be greater than 0")

    if config.similarity_measure not in SIMILARITY_FUNCTIONS:
        raise ConfigurationError(
            f"SIMILARITY_MEASURE must be one of {sorted(SIMILARITY_FUNCTIONS)}, "
            f"got {config.similarity_measure!r}")
