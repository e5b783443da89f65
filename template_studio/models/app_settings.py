"""引擎设置模型."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from template_studio.utils.constants import (
    DEFAULT_ZOOM,
    ENV_PREFIX,
    MAX_ZOOM,
    MIN_ZOOM,
    TEMPLATES_DIR,
)


class Settings(BaseSettings):
    """引擎设置.

    支持从环境变量（前缀 TEMPLATE_STUDIO_）和 .env 文件加载配置。

    Attributes:
        log_level: 日志级别
        log_dir: 文件日志目录，未设置时只输出到控制台
        strict_mode: 严格模式，引用不存在的模板/图层时抛出异常
        default_zoom: 画布默认缩放比例
        templates_dir: 模板文件存储目录
        debug: 调试模式
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # 日志配置
    log_level: str = Field(
        default="INFO",
        description="日志级别",
    )

    log_dir: Optional[Path] = Field(
        default=None,
        description="文件日志目录",
    )

    # 画布配置
    strict_mode: bool = Field(
        default=False,
        description="严格模式",
    )

    default_zoom: float = Field(
        default=DEFAULT_ZOOM,
        ge=MIN_ZOOM,
        le=MAX_ZOOM,
        description="默认缩放比例",
    )

    # 存储配置
    templates_dir: Optional[Path] = Field(
        default=None,
        description="模板存储目录",
    )

    # 开发配置
    debug: bool = Field(
        default=False,
        description="调试模式",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """验证日志级别."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(f"无效的日志级别: {v}，有效值: {valid_levels}")
        return upper_v

    @property
    def effective_log_level(self) -> str:
        """调试模式下强制使用 DEBUG 级别."""
        return "DEBUG" if self.debug else self.log_level

    @property
    def store_dir(self) -> Path:
        """获取模板存储目录."""
        return self.templates_dir or TEMPLATES_DIR
