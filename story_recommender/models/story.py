"""
故事模型
"""

from typing import Iterable, Optional

# 草稿状态的故事不可被发现，不参与推荐
STATUS_DRAFT = 'draft'
STATUS_ONGOING = 'ongoing'


class Story:
    """故事实体类（只读输入）"""

    def __init__(self,
                 story_id: str,
                 author_id: str,
                 genre_id: Optional[str] = None,
                 status: str = STATUS_ONGOING,
                 tag_ids: Optional[Iterable[str]] = None,
                 title: str = ''):
        """
        初始化故事

        Args:
            story_id: 故事唯一标识符
            author_id: 作者ID
            genre_id: 类型ID（可为空，一个故事最多一个类型）
            status: 故事状态（draft/ongoing/completed等）
            tag_ids: 标签ID集合
            title: 标题，仅用于日志
        """
        self.story_id = story_id
        self.author_id = author_id
        self.genre_id = genre_id
        self.status = status
        self.tag_ids = tuple(tag_ids or ())
        self.title = title

    @property
    def is_draft(self) -> bool:
        return self.status == STATUS_DRAFT

    def __repr__(self) -> str:
        return (f"Story(story_id={self.story_id}, author_id={self.author_id}, "
                f"genre_id={self.genre_id}, status={self.status}, tag_count={len(self.tag_ids)})")
