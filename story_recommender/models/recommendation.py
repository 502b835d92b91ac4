"""
推荐结果模型
"""

from .story import Story


class SimilarityResult:
    """候选故事及其与目标故事的相似度"""

    def __init__(self, story: Story, score: float):
        """
        初始化相似度结果

        Args:
            story: 候选故事
            score: 相似度分数，范围[0, 1]
        """
        self.story = story
        self.score = score

    @property
    def story_id(self) -> str:
        return self.story.story_id

    def __repr__(self) -> str:
        return f"SimilarityResult(story_id={self.story_id}, score={self.score:.4f})"


class StoryRecommendation:
    """一条待保存的推荐记录"""

    def __init__(self, story_id: str, recommended_story_id: str, score: float):
        """
        初始化推荐记录

        Args:
            story_id: 目标故事ID
            recommended_story_id: 被推荐的故事ID
            score: 相似度分数
        """
        self.story_id = story_id
        self.recommended_story_id = recommended_story_id
        self.score = score

    def to_dict(self) -> dict:
        return {
            'story_id': self.story_id,
            'recommended_story_id': self.recommended_story_id,
            'score': self.score,
        }

    def __eq__(self, other) -> bool:
        if not isinstance(other, StoryRecommendation):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self) -> int:
        return hash((self.story_id, self.recommended_story_id, self.score))

    def __repr__(self) -> str:
        return (f"StoryRecommendation(story_id={self.story_id}, "
                f"recommended_story_id={self.recommended_story_id}, score={self.score:.4f})")
