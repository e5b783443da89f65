"""日志工具模块.

提供引擎日志记录功能，支持控制台输出和文件记录。

Features:
    - 控制台彩色输出
    - 可选的文件日志轮转
    - 结构化日志格式
    - 全局日志级别管理
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

# 包级日志记录器名称
PACKAGE_LOGGER = "template_studio"

# 日志格式
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# 日志文件配置
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024  # 10MB
LOG_FILE_BACKUP_COUNT = 5

# 全局日志级别缓存
_log_level: int = logging.INFO
_package_configured: bool = False
_file_log_dir: Optional[Path] = None


class ColoredFormatter(logging.Formatter):
    """彩色日志格式化器."""

    COLORS = {
        logging.DEBUG: "\033[36m",     # 青色
        logging.INFO: "\033[32m",      # 绿色
        logging.WARNING: "\033[33m",   # 黄色
        logging.ERROR: "\033[31m",     # 红色
        logging.CRITICAL: "\033[35m",  # 紫色
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        """格式化日志记录."""
        # 复制记录，避免颜色码进入其他处理器
        record = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelno, "")
        record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


def _configure_package_logger() -> None:
    """配置包级日志记录器."""
    global _package_configured
    if _package_configured:
        return

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(_log_level)
    package_logger.handlers.clear()

    # 控制台（彩色）
    console = logging.StreamHandler(sys.stdout)
    console.setLevel(_log_level)
    console.setFormatter(ColoredFormatter(LOG_FORMAT, DATE_FORMAT))
    package_logger.addHandler(console)

    _package_configured = True


def _remove_file_handlers(package_logger: logging.Logger) -> None:
    for handler in list(package_logger.handlers):
        if isinstance(handler, RotatingFileHandler):
            package_logger.removeHandler(handler)
            handler.close()


def enable_file_logging(log_dir: Path) -> None:
    """启用文件日志.

    在指定目录下写入轮转的 app.log 与单独的 error.log。
    重复调用同一目录不会重复添加处理器。

    Args:
        log_dir: 日志目录
    """
    global _file_log_dir
    _configure_package_logger()

    log_dir = Path(log_dir)
    if _file_log_dir == log_dir:
        return

    log_dir.mkdir(parents=True, exist_ok=True)
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    _remove_file_handlers(package_logger)

    # 主日志文件（轮转）
    file_handler = RotatingFileHandler(
        log_dir / "app.log",
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(_log_level)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    package_logger.addHandler(file_handler)

    # 错误日志（单独记录）
    error_handler = RotatingFileHandler(
        log_dir / "error.log",
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUP_COUNT,
        encoding="utf-8",
    )
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    package_logger.addHandler(error_handler)

    _file_log_dir = log_dir


def disable_file_logging() -> None:
    """关闭文件日志，只保留控制台输出."""
    global _file_log_dir
    _remove_file_handlers(logging.getLogger(PACKAGE_LOGGER))
    _file_log_dir = None


def setup_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """设置并返回日志记录器.

    Args:
        name: 日志记录器名称，通常使用 __name__
        level: 日志级别，默认使用全局配置

    Returns:
        配置好的日志记录器
    """
    _configure_package_logger()
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    return logger


def set_log_level(level: int | str) -> None:
    """设置全局日志级别."""
    global _log_level
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    _log_level = level

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)
    for handler in package_logger.handlers:
        if handler.level != logging.ERROR:
            handler.setLevel(level)


def get_log_level() -> int:
    """获取当前全局日志级别."""
    return _log_level


def get_log_level_name() -> str:
    """获取当前日志级别名称."""
    return logging.getLevelName(_log_level)
