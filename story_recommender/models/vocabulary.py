"""
词表模型：类型和标签

所有类型ID的有序列表占据特征向量的头部，所有标签ID的有序列表占据其余位置。
"""


class Genre:
    """类型实体类"""

    def __init__(self, genre_id: str, name: str = ''):
        self.genre_id = genre_id
        self.name = name

    def __repr__(self) -> str:
        return f"Genre(genre_id={self.genre_id}, name={self.name})"


class Tag:
    """标签实体类"""

    def __init__(self, tag_id: str, name: str = ''):
        self.tag_id = tag_id
        self.name = name

    def __repr__(self) -> str:
        return f"Tag(tag_id={self.tag_id}, name={self.name})"
