"""应用常量定义."""

from pathlib import Path

# ===================
# 应用信息
# ===================
APP_NAME = "品牌模板设计引擎"
APP_VERSION = "0.3.0"

# ===================
# 路径常量
# ===================
# 应用数据目录
APP_DATA_DIR = Path.home() / ".template-studio"

# 模板存储目录
TEMPLATES_DIR = APP_DATA_DIR / "templates"

# 日志目录
LOG_DIR = APP_DATA_DIR / "logs"

# 环境变量前缀
ENV_PREFIX = "TEMPLATE_STUDIO_"

# ===================
# 画布视图设置
# ===================
MIN_ZOOM = 0.1
MAX_ZOOM = 2.0
ZOOM_STEP = 0.1
DEFAULT_ZOOM = 0.5

# ===================
# 品牌规范
# ===================
# 任何品牌都允许使用的中性色
NEUTRAL_COLORS = ("#000000", "#FFFFFF")

# 品牌未配置字体时使用的字体
DEFAULT_FONT_FAMILY = "Inter"
