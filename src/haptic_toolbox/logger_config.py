"""
日志配置
"""

import logging
import logging.handlers
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_MAX_BYTES = 1024 * 1024
LOG_BACKUP_COUNT = 3


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """配置根日志记录器

    Args:
        level: 日志级别名称
        log_file: 日志文件路径，为空时只输出到控制台
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    formatter = logging.Formatter(LOG_FORMAT)

    # 避免重复调用时叠加处理器
    for handler in list(root_logger.handlers):
        if getattr(handler, '_haptic_toolbox', False):
            root_logger.removeHandler(handler)
            handler.close()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    setattr(console_handler, '_haptic_toolbox', True)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.handlers.RotatingFileHandler(
            log_file, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUP_COUNT, encoding='utf-8'
        )
        file_handler.setFormatter(formatter)
        setattr(file_handler, '_haptic_toolbox', True)
        root_logger.addHandler(file_handler)
