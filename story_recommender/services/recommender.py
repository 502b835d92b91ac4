"""
推荐生成服务模块

对目录中每个已发布的故事计算相似故事，按阈值和数量过滤后交给输出器保存。
"""

import math
import time
from typing import Dict, List, Optional, Sequence

import numpy as np
from tqdm import tqdm

from ..algorithms.story_similarity import compute_similar_stories
from ..algorithms.vectorizer import count_orphaned_genres
from ..models import Genre, Story, StoryRecommendation, Tag
from ..utils.config import PROGRESS_LOG_INTERVAL, RecommendationConfig, validate_config
from ..utils.exceptions import DimensionMismatchError, RecommendationError, StoryRecommenderError
from ..utils.logger import logger
from ..utils.matrix_builder import build_story_vectors
from ..utils.similarity import get_similarity_function


class GenerationSummary:
    """一次推荐生成运行的统计结果"""

    def __init__(self,
                 processed_stories: int = 0,
                 total_recommendations: int = 0,
                 errors: int = 0,
                 orphaned_genres: int = 0,
                 elapsed_seconds: float = 0.0):
        self.processed_stories = processed_stories
        self.total_recommendations = total_recommendations
        self.errors = errors
        self.orphaned_genres = orphaned_genres
        self.elapsed_seconds = elapsed_seconds

    def to_dict(self) -> dict:
        return {
            'processed_stories': self.processed_stories,
            'total_recommendations': self.total_recommendations,
            'errors': self.errors,
            'orphaned_genres': self.orphaned_genres,
            'elapsed_seconds': self.elapsed_seconds,
        }

    def __repr__(self) -> str:
        return (f"GenerationSummary(processed_stories={self.processed_stories}, "
                f"total_recommendations={self.total_recommendations}, errors={self.errors})")


class RecommendationGenerator:
    """推荐生成器类"""

    def __init__(self, catalog, sink, config: Optional[RecommendationConfig] = None, show_progress: bool = True):
        """
        初始化推荐生成器

        Args:
            catalog: 目录提供者，需实现get_all_genres/get_all_tags/get_stories_for_similarity
            sink: 推荐输出器，需实现replace(story_id, recommendations)和close()
            config: 推荐配置，默认使用模块默认值
            show_progress: 是否显示进度条

        Raises:
            ConfigurationError: 配置无效
        """
        self.catalog = catalog
        self.sink = sink
        self.config = config or RecommendationConfig()
        validate_config(self.config)
        self.score_fn = get_similarity_function(self.config.similarity_measure)
        self.show_progress = show_progress

    def _load_snapshot(self):
        """每次运行只读取一次词表和目录，所有目标故事共用同一份快照"""
        all_genres = self.catalog.get_all_genres()
        all_tags = self.catalog.get_all_tags()
        stories = self.catalog.get_stories_for_similarity()
        logger.info(f"Found {len(all_genres)} genres and {len(all_tags)} tags")
        return all_genres, all_tags, stories

    def _select_recommendations(self, story: Story, similar_stories) -> List[StoryRecommendation]:
        valid = []
        for result in similar_stories:
            if math.isnan(result.score) or result.score < 0 or result.score > 1:
                logger.warning(f"Invalid similarity score for story pair: {story.story_id} -> "
                               f"{result.story_id}, score: {result.score}")
                continue
            valid.append(result)

        top_results = [result for result in valid
                       if result.score >= self.config.similarity_threshold]
        top_results = top_results[:self.config.max_recommendations_per_story]

        return [StoryRecommendation(story.story_id, result.story_id, result.score)
                for result in top_results]

    def process_story(self,
                      story: Story,
                      all_stories: Sequence[Story],
                      all_genres: Sequence[Genre],
                      all_tags: Sequence[Tag],
                      vectors: Optional[Dict[str, np.ndarray]] = None) -> int:
        """
        为单个故事生成并保存推荐

        Args:
            vectors: build_story_vectors构建的特征向量，None时逐个向量化

        Returns:
            保存的推荐数量；没有满足阈值的候选时返回0，且不改动该故事已有的推荐
        """
        similar_stories = compute_similar_stories(
            story,
            all_stories,
            all_genres,
            all_tags,
            score_fn=self.score_fn,
            exclude_same_author=self.config.exclude_same_author,
            vectors=vectors,
        )
        recommendations = self._select_recommendations(story, similar_stories)

        if not recommendations:
            logger.debug(f"No recommendations found for story \"{story.title}\" ({story.story_id})")
            return 0

        logger.debug(f"Found {len(recommendations)} recommendations for story \"{story.title}\" ({story.story_id})")
        return self.sink.replace(story.story_id, recommendations)

    def generate_recommendations(self) -> GenerationSummary:
        """
        为全部已发布的故事生成推荐

        Returns:
            GenerationSummary统计结果

        Raises:
            DimensionMismatchError: 向量维度不一致（词表快照不一致，整次运行中止）
            RecommendationError: 推荐生成错误
        """
        start_time = time.time()
        summary = GenerationSummary()
        logger.info(f"Starting recommendation generation with config {self.config.to_dict()}")

        try:
            all_genres, all_tags, stories = self._load_snapshot()
            targets = [story for story in stories if not story.is_draft]
            logger.info(f"Found {len(targets)} published stories")

            if not targets:
                logger.warning("No published stories found. Skipping recommendation generation.")
                summary.elapsed_seconds = time.time() - start_time
                return summary

            # 整个目录只向量化一次，所有目标故事共用
            vectors = build_story_vectors(stories, all_genres, all_tags)

            summary.orphaned_genres = count_orphaned_genres(stories, all_genres)
            if summary.orphaned_genres:
                logger.warning(f"{summary.orphaned_genres} stories reference a genre missing from the "
                               f"genre list; their genre is ignored")

            batch_size = self.config.batch_size
            batches = math.ceil(len(targets) / batch_size)
            progress = tqdm(total=len(targets), desc="Generating recommendations", disable=not self.show_progress)
            try:
                for batch_index in range(batches):
                    batch_stories = targets[batch_index * batch_size:(batch_index + 1) * batch_size]
                    logger.debug(f"Processing batch {batch_index + 1}/{batches} with {len(batch_stories)} stories")

                    for story in batch_stories:
                        try:
                            summary.total_recommendations += self.process_story(
                                story, stories, all_genres, all_tags, vectors)
                            summary.processed_stories += 1
                        except DimensionMismatchError:
                            logger.error(f"Vector dimension mismatch while processing story {story.story_id}; "
                                         f"aborting run")
                            raise
                        except Exception as e:
                            logger.error(f"Error processing story \"{story.title}\" ({story.story_id}): {str(e)}")
                            summary.errors += 1
                        progress.update(1)

                        if summary.processed_stories and summary.processed_stories % PROGRESS_LOG_INTERVAL == 0:
                            logger.info(f"Processed {summary.processed_stories}/{len(targets)} stories")
            finally:
                progress.close()

            summary.elapsed_seconds = time.time() - start_time
            logger.info(f"Successfully generated {summary.total_recommendations} recommendations for "
                        f"{summary.processed_stories} stories in {summary.elapsed_seconds:.2f} seconds "
                        f"({summary.errors} errors)")
            return summary

        except StoryRecommenderError:
            raise
        except Exception as e:
            raise RecommendationError(f"Error generating recommendations: {str(e)}")

    def generate_for_story(self, story_id: str) -> int:
        """
        只为指定故事重新生成推荐

        Returns:
            保存的推荐数量；故事不存在时返回0

        Raises:
            DimensionMismatchError: 向量维度不一致
            RecommendationError: 推荐生成错误
        """
        logger.info(f"Generating recommendations for story {story_id}")
        try:
            all_genres, all_tags, stories = self._load_snapshot()
            story = next((s for s in stories if s.story_id == story_id), None)
            if story is None:
                logger.warning(f"Story {story_id} not found")
                return 0

            count = self.process_story(story, stories, all_genres, all_tags)
            logger.info(f"Generated {count} recommendations for story \"{story.title}\" ({story.story_id})")
            return count

        except StoryRecommenderError:
            raise
        except Exception as e:
            raise RecommendationError(f"Error generating recommendations for story {story_id}: {str(e)}")

    def close(self) -> None:
        """关闭输出器，写入结果"""
        self.sink.close()
