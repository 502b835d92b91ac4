"""
故事相似度推荐引擎

根据类型和标签构建二值特征向量，计算故事之间的相似度并生成排序后的相似故事列表。
"""

from .algorithms import compute_similar_stories, filter_candidates, vectorize
from .models import Genre, SimilarityResult, Story, StoryRecommendation, Tag
from .utils.exceptions import DimensionMismatchError, InvalidVectorInputError, StoryRecommenderError
from .utils.similarity import cosine_similarity, jaccard_similarity, get_similarity_function

__version__ = '0.1.0'

__all__ = [
    'compute_similar_stories', 'filter_candidates', 'vectorize',
    'Genre', 'SimilarityResult', 'Story', 'StoryRecommendation', 'Tag',
    'DimensionMismatchError', 'InvalidVectorInputError', 'StoryRecommenderError',
    'cosine_similarity', 'jaccard_similarity', 'get_similarity_function',
]
