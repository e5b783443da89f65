"""核心业务逻辑模块."""

from template_studio.core.canvas_controller import CanvasController
from template_studio.core.config_manager import ConfigManager, get_config
from template_studio.core.guardrails import (
    GuardrailResult,
    GuardrailViolation,
    check_color,
    check_font,
    evaluate_layer,
    evaluate_template,
)
from template_studio.core.render_plan import RenderItem, build_render_plan

__all__ = [
    # 画布控制器
    "CanvasController",
    # 配置
    "ConfigManager",
    "get_config",
    # 品牌规范校验
    "GuardrailResult",
    "GuardrailViolation",
    "check_color",
    "check_font",
    "evaluate_layer",
    "evaluate_template",
    # 渲染计划
    "RenderItem",
    "build_render_plan",
]
