"""
数据模型模块
"""

from .story import Story, STATUS_DRAFT, STATUS_ONGOING
from .vocabulary import Genre, Tag
from .recommendation import SimilarityResult, StoryRecommendation

__all__ = ['Story', 'STATUS_DRAFT', 'STATUS_ONGOING', 'Genre', 'Tag',
           'SimilarityResult', 'StoryRecommendation']
