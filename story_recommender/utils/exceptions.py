"""
异常类定义
"""


class StoryRecommenderError(Exception):
    """故事推荐系统基础异常类"""
    pass


class DataLoadError(StoryRecommenderError):
    """数据加载错误"""
    pass


class DataValidationError(StoryRecommenderError):
    """数据验证错误"""
    pass


class ConfigurationError(StoryRecommenderError):
    """配置错误"""
    pass


class SimilarityError(StoryRecommenderError):
    """相似度计算错误"""
    pass


class DimensionMismatchError(SimilarityError):
    """向量维度不一致（同一次运行中词表发生了变化）"""
    pass


class InvalidVectorInputError(SimilarityError):
    """向量中出现了0/1以外的值"""
    pass


class RecommendationError(StoryRecommenderError):
    """推荐生成错误"""
    pass


class OutputError(StoryRecommenderError):
    """结果输出错误"""
    pass
