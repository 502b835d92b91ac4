"""
相似度算法模块
"""

from .vectorizer import vectorize, count_orphaned_genres
from .story_similarity import filter_candidates, compute_similar_stories

__all__ = ['vectorize', 'count_orphaned_genres', 'filter_candidates', 'compute_similar_stories']
