"""
故事推荐生成主入口
"""

import argparse
import sys
import time
from typing import List, Optional

from .services.data_loader import CatalogLoader
from .services.output_writer import CsvRecommendationWriter
from .services.recommender import RecommendationGenerator
from .utils.config import (
    GENRES_PATH, TAGS_PATH, STORIES_PATH, RECOMMENDATIONS_PATH,
    load_config, validate_config
)
from .utils.exceptions import StoryRecommenderError
from .utils.logger import logger, set_log_level


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Story similarity recommendation generator')
    parser.add_argument('--genres', type=str, default=GENRES_PATH,
                        help=f'Genre list file (default: {GENRES_PATH})')
    parser.add_argument('--tags', type=str, default=TAGS_PATH,
                        help=f'Tag list file (default: {TAGS_PATH})')
    parser.add_argument('--stories', type=str, default=STORIES_PATH,
                        help=f'Story catalog file (default: {STORIES_PATH})')
    parser.add_argument('--output', type=str, default=RECOMMENDATIONS_PATH,
                        help=f'Recommendations output CSV (default: {RECOMMENDATIONS_PATH})')
    parser.add_argument('--story-id', type=str, default=None,
                        help="Only regenerate recommendations for this story")
    parser.add_argument('--measure', choices=['cosine', 'jaccard'], default=None,
                        help='Similarity measure (overrides SIMILARITY_MEASURE)')
    parser.add_argument('--max-recommendations', type=int, default=None,
                        help='Recommendations kept per story (overrides MAX_RECOMMENDATIONS_PER_STORY)')
    parser.add_argument('--threshold', type=float, default=None,
                        help='Minimum similarity score (overrides SIMILARITY_THRESHOLD)')
    author_group = parser.add_mutually_exclusive_group()
    author_group.add_argument('--exclude-same-author', dest='exclude_same_author',
                              action='store_true', default=None,
                              help='Never recommend stories by the same author')
    author_group.add_argument('--include-same-author', dest='exclude_same_author',
                              action='store_false',
                              help='Allow stories by the same author')
    parser.add_argument('--batch-size', type=int, default=None,
                        help='Target stories per batch (overrides BATCH_SIZE)')
    parser.add_argument('--log-level', type=str, default=None,
                        help='Log level (overrides LOG_LEVEL)')
    parser.add_argument('--no-progress', action='store_true',
                        help='Disable the progress bar')
    parser.add_argument('--health-check', action='store_true',
                        help='Print OK and exit')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    运行推荐生成

    Returns:
        进程退出码，成功为0，失败为1
    """
    args = build_parser().parse_args(argv)

    if args.health_check:
        logger.info("Health check requested")
        print('OK')
        return 0

    start_time = time.time()
    try:
        config = load_config()
        if args.measure is not None:
            config.similarity_measure = args.measure
        if args.max_recommendations is not None:
            config.max_recommendations_per_story = args.max_recommendations
        if args.threshold is not None:
            config.similarity_threshold = args.threshold
        if args.exclude_same_author is not None:
            config.exclude_same_author = args.exclude_same_author
        if args.batch_size is not None:
            config.batch_size = args.batch_size
        if args.log_level is not None:
            config.log_level = args.log_level.upper()

        set_log_level(config.log_level)
        logger.info("Validating configuration...")
        validate_config(config)
        logger.info(f"Starting recommendation generator with configuration {config.to_dict()}")

        catalog = CatalogLoader(args.genres, args.tags, args.stories)
        # 先读取已有输出，本次没有重新生成的故事保留原来的推荐
        writer = CsvRecommendationWriter(args.output, load_existing=True)
        generator = RecommendationGenerator(catalog, writer, config, show_progress=not args.no_progress)

        if args.story_id is not None:
            generator.generate_for_story(args.story_id)
        else:
            generator.generate_recommendations()
        generator.close()

        elapsed = time.time() - start_time
        logger.info(f"Recommendation generation completed successfully in {elapsed:.2f} seconds")
        return 0

    except (StoryRecommenderError, FileNotFoundError, ValueError) as e:
        elapsed = time.time() - start_time
        logger.error(f"Recommendation generation failed after {elapsed:.2f} seconds: {str(e)}")
        return 1


def run() -> None:
    sys.exit(main())


if __name__ == '__main__':
    run()
