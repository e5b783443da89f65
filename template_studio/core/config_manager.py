"""配置管理器模块."""

from __future__ import annotations

from typing import Optional

from pydantic import ValidationError

from template_studio.models.app_settings import Settings
from template_studio.utils.exceptions import ConfigError
from template_studio.utils.logger import enable_file_logging, set_log_level, setup_logger

logger = setup_logger(__name__)


class ConfigManager:
    """配置管理器.

    负责引擎设置的加载与重新加载，并把日志相关设置应用到日志系统。

    Attributes:
        settings: 引擎设置
    """

    _instance: Optional["ConfigManager"] = None

    def __new__(cls) -> "ConfigManager":
        """单例模式."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self) -> None:
        """初始化配置管理器."""
        if self._initialized:
            return

        self._settings: Optional[Settings] = None
        self._initialized = True

        logger.debug("配置管理器初始化完成")

    @property
    def settings(self) -> Settings:
        """获取引擎设置."""
        if self._settings is None:
            self._settings = self._load_settings()
            self._apply_logging(self._settings)
        return self._settings

    def _load_settings(self) -> Settings:
        """加载引擎设置.

        优先从环境变量加载，然后从 .env 文件加载。

        Returns:
            Settings 实例

        Raises:
            ConfigError: 设置值无效
        """
        try:
            settings = Settings()
        except ValidationError as e:
            logger.error(f"加载引擎设置失败: {e}")
            raise ConfigError(f"加载引擎设置失败: {e}") from e

        logger.debug(
            f"引擎设置加载完成: log_level={settings.log_level}, "
            f"strict_mode={settings.strict_mode}"
        )
        return settings

    def _apply_logging(self, settings: Settings) -> None:
        """将日志设置应用到日志系统."""
        set_log_level(settings.effective_log_level)
        if settings.log_dir is not None:
            enable_file_logging(settings.log_dir)

    def reload(self) -> None:
        """重新加载所有配置."""
        self._settings = None
        logger.info("配置已重新加载")


# 全局配置管理器实例
config_manager = ConfigManager()


def get_config() -> ConfigManager:
    """获取配置管理器实例.

    Returns:
        ConfigManager 单例实例
    """
    return config_manager
