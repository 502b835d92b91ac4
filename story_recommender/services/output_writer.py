"""
结果输出服务模块
"""

import os
import pandas as pd
from typing import Dict, List, Sequence

from ..models import StoryRecommendation
from ..utils.exceptions import OutputError
from ..utils.validation import validate_story_id
from ..utils.logger import logger


class CsvRecommendationWriter:
    """推荐结果输出器类：按故事整体替换推荐列表，close时写入CSV"""

    COLUMNS = ['story_id', 'recommended_story_id', 'score']

    def __init__(self, output_path: str, load_existing: bool = False):
        """
        初始化输出器

        Args:
            output_path: 输出文件路径
            load_existing: 是否先读取已有文件，保留本次未重新生成的故事的推荐
        """
        self.output_path = output_path
        self._recommendations: Dict[str, List[StoryRecommendation]] = {}
        self._closed = False
        if load_existing and os.path.exists(output_path):
            self._load_existing()

    def _load_existing(self) -> None:
        try:
            df = pd.read_csv(self.output_path, dtype={'story_id': str, 'recommended_story_id': str})
        except Exception as e:
            raise OutputError(f"Error reading existing recommendations: {str(e)}")

        for row in df.to_dict('records'):
            rec = StoryRecommendation(row['story_id'], row['recommended_story_id'], float(row['score']))
            self._recommendations.setdefault(rec.story_id, []).append(rec)
        logger.info(f"Loaded {len(df)} existing recommendations for {len(self._recommendations)} stories")

    def replace(self, story_id: str, recommendations: Sequence[StoryRecommendation]) -> int:
        """
        删除故事已有的推荐并写入新的推荐

        Args:
            story_id: 目标故事ID
            recommendations: 新的推荐记录

        Returns:
            实际保存的记录数量（(story_id, recommended_story_id)重复的记录只保留第一条）
        """
        validate_story_id(story_id)
        if self._closed:
            raise OutputError("Recommendation writer is already closed")

        seen = set()
        rows = []
        for rec in recommendations:
            if rec.story_id != story_id:
                raise OutputError(f"Recommendation for story {rec.story_id} passed to replace({story_id})")
            if rec.recommended_story_id in seen:
                continue
            seen.add(rec.recommended_story_id)
            rows.append(rec)

        self._recommendations[story_id] = rows
        return len(rows)

    def get(self, story_id: str) -> List[StoryRecommendation]:
        return list(self._recommendations.get(story_id, []))

    def all_recommendations(self) -> List[StoryRecommendation]:
        return [rec for rows in self._recommendations.values() for rec in rows]

    def close(self) -> None:
        """
        将推荐结果写入CSV文件

        Raises:
            OutputError: 输出错误
        """
        if self._closed:
            return
        try:
            records = [rec.to_dict() for rec in self.all_recommendations()]
            df = pd.DataFrame(records, columns=self.COLUMNS)

            # 创建输出目录（如果不存在）
            output_dir = os.path.dirname(self.output_path)
            if output_dir and not os.path.exists(output_dir):
                os.makedirs(output_dir)

            df.to_csv(self.output_path, index=False)
            self._closed = True
            logger.info(f"Recommendations written to {self.output_path}: {len(df)} rows")

        except Exception as e:
            raise OutputError(f"Error writing recommendations file: {str(e)}")
