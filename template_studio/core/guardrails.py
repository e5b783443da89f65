"""品牌规范校验模块.

检查图层的颜色和字体是否符合品牌的调色板与字体规范。
校验结果只用于提示，从不阻止任何修改。

Features:
    - 颜色精确匹配（不区分大小写，无模糊容差）
    - 字体双向子串匹配（容忍 "Inter Bold" 之类的字重后缀）
    - 单图层与整个模板的校验
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from template_studio.models.brand import BrandIdentity, BrandPalette, BrandTypography
from template_studio.models.layer import Layer, ShapeLayer, TextLayer
from template_studio.models.template import Template
from template_studio.utils.logger import setup_logger

logger = setup_logger(__name__)


# 被校验的样式属性（使用 JSON 键名，与界面提示一致）
ATTR_COLOR = "color"
ATTR_BACKGROUND_COLOR = "backgroundColor"
ATTR_FONT_FAMILY = "fontFamily"


# ===================
# 校验结果
# ===================


class GuardrailViolation(BaseModel):
    """单项违规.

    Attributes:
        attribute: 违规的样式属性
        value: 属性的当前值
    """

    model_config = ConfigDict(frozen=True)

    attribute: str
    value: str


class GuardrailResult(BaseModel):
    """图层校验结果.

    Attributes:
        color_ok: 颜色是否合规（包含形状背景色）
        font_ok: 字体是否合规
        violations: 违规明细
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    color_ok: bool = True
    font_ok: bool = True
    violations: list[GuardrailViolation] = Field(default_factory=list)

    @property
    def passed(self) -> bool:
        """是否全部合规."""
        return self.color_ok and self.font_ok

    @property
    def violated_attributes(self) -> list[str]:
        """违规的属性名列表."""
        return [v.attribute for v in self.violations]


# ===================
# 基础检查
# ===================


def check_color(hex_color: str, palette: BrandPalette) -> bool:
    """检查颜色是否在品牌调色板中.

    只做不区分大小写的精确比较。#FFFFFE 与 #FFFFFF 视觉上几乎相同，
    但不视为合规。

    Args:
        hex_color: 十六进制颜色
        palette: 品牌调色板

    Returns:
        是否合规
    """
    wanted = hex_color.lower()
    return any(color.lower() == wanted for color in palette.colors)


def check_font(font_family: str, typography: BrandTypography) -> bool:
    """检查字体是否属于品牌字体.

    字体名包含品牌字体或被品牌字体包含即视为合规。
    空字体名与未配置的品牌字体不参与匹配；空的品牌字体被跳过，
    否则空串会让任意字体都判定为合规。

    Args:
        font_family: 字体名称
        typography: 品牌字体

    Returns:
        是否合规
    """
    if not font_family:
        return False
    return any(
        font in font_family or font_family in font
        for font in typography.fonts
    )


# ===================
# 图层校验
# ===================


def _colors_to_check(layer: Layer) -> list[tuple[str, Optional[str]]]:
    if isinstance(layer, TextLayer):
        return [(ATTR_COLOR, layer.style.color)]
    if isinstance(layer, ShapeLayer):
        return [(ATTR_BACKGROUND_COLOR, layer.style.background_color)]
    return []


def evaluate_layer(layer: Layer, identity: Optional[BrandIdentity]) -> GuardrailResult:
    """校验单个图层.

    只检查图层上存在的属性，缺失的属性视为合规。文字图层检查 color 与
    fontFamily，形状图层检查 backgroundColor，图片与 Logo 图层没有需要
    检查的属性。没有品牌识别时一律合规。

    Args:
        layer: 图层
        identity: 品牌识别快照

    Returns:
        校验结果
    """
    if identity is None:
        return GuardrailResult()

    violations: list[GuardrailViolation] = []
    palette = identity.palette

    color_ok = True
    for attribute, value in _colors_to_check(layer):
        if value and not check_color(value, palette):
            color_ok = False
            violations.append(GuardrailViolation(attribute=attribute, value=value))

    font_ok = True
    if isinstance(layer, TextLayer) and layer.style.font_family:
        if not check_font(layer.style.font_family, identity.typography):
            font_ok = False
            violations.append(
                GuardrailViolation(attribute=ATTR_FONT_FAMILY, value=layer.style.font_family)
            )

    return GuardrailResult(color_ok=color_ok, font_ok=font_ok, violations=violations)


def evaluate_template(
    template: Template,
    identity: Optional[BrandIdentity],
) -> dict[str, GuardrailResult]:
    """校验模板中的全部图层.

    Args:
        template: 模板
        identity: 品牌识别快照

    Returns:
        图层ID到校验结果的映射（插入顺序）
    """
    results = {layer.id: evaluate_layer(layer, identity) for layer in template.layers}
    failed = sum(1 for r in results.values() if not r.passed)
    if failed:
        logger.info(f"模板 {template.id} 有 {failed} 个图层不符合品牌规范")
    return results
