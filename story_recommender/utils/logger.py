"""
日志配置模块
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional, Union

# 日志格式
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# 日志目录，默认为当前工作目录下的logs，可用环境变量覆盖
LOG_DIR_ENV = 'STORY_RECOMMENDER_LOG_DIR'
DEFAULT_LOG_DIR = 'logs'
LOG_FILE_NAME = 'story_recommender.log'


def setup_logger(name: str = 'story_recommender',
                 level: int = logging.INFO,
                 log_dir: Optional[Union[str, Path]] = None) -> logging.Logger:
    """
    设置并返回logger实例

    Args:
        name: logger名称
        level: 日志级别，默认INFO
        log_dir: 日志文件目录，默认读取STORY_RECOMMENDER_LOG_DIR，未设置时为./logs

    Returns:
        配置好的logger实例
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # 避免重复添加handler
    if logger.handlers:
        return logger

    # 控制台handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)

    # 文件handler；目录不可写时只输出到控制台
    log_path = Path(log_dir or os.environ.get(LOG_DIR_ENV) or DEFAULT_LOG_DIR)
    try:
        log_path.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path / LOG_FILE_NAME, encoding='utf-8')
    except OSError as e:
        logger.warning(f"Log file disabled, cannot write to {log_path}: {str(e)}")
        return logger
    file_handler.setLevel(logging.DEBUG)
    file_formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)
    file_handler.setFormatter(file_formatter)
    logger.addHandler(file_handler)

    return logger


def set_log_level(level: Union[str, int], name: str = 'story_recommender') -> None:
    """
    运行时调整日志级别（文件handler保持DEBUG）

    Args:
        level: 日志级别名称（如'debug'）或logging常量
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        level = resolved

    target = logging.getLogger(name)
    target.setLevel(level)
    for handler in target.handlers:
        if not isinstance(handler, logging.FileHandler):
            handler.setLevel(level)


# 默认logger实例
logger = setup_logger()
