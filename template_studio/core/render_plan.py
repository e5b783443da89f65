"""渲染计划模块.

把模板解析为按绘制顺序排列的像素空间描述，供渲染表面直接使用。
这里不做任何像素级绘制。Logo 图层在此时才绑定品牌当前的 Logo 地址。
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

from template_studio.models.brand import BrandIdentity
from template_studio.models.geometry import PixelRect, to_pixels
from template_studio.models.layer import ImageLayer, Layer, LogoLayer, TextLayer, resolve_source_url
from template_studio.models.template import Template


class RenderItem(BaseModel):
    """渲染计划中的一项.

    Attributes:
        layer_id: 图层ID
        layer_type: 图层类型
        rect: 像素矩形（已乘以缩放比例）
        rotation: 旋转角度
        z_index: 层级索引
        content: 文字内容或解析后的图片地址，未解析的 Logo 为 None
        style: 样式字典（JSON 键名，省略空值）
    """

    model_config = ConfigDict(frozen=True)

    layer_id: str
    layer_type: str
    rect: PixelRect
    rotation: float
    z_index: int
    content: Optional[str] = None
    style: dict[str, Any]


def _resolve_content(layer: Layer, identity: Optional[BrandIdentity]) -> Optional[str]:
    if isinstance(layer, TextLayer):
        return layer.content
    if isinstance(layer, (ImageLayer, LogoLayer)):
        return resolve_source_url(layer.source, identity)
    return None


def build_render_plan(
    template: Template,
    identity: Optional[BrandIdentity] = None,
    scale: float = 1.0,
) -> list[RenderItem]:
    """生成渲染计划.

    Args:
        template: 模板
        identity: 品牌识别快照，用于解析 Logo 图层
        scale: 渲染缩放比例

    Returns:
        从底到顶排列的渲染项
    """
    return [
        RenderItem(
            layer_id=layer.id,
            layer_type=layer.type,
            rect=to_pixels(layer.geometry, template.dimensions, scale),
            rotation=layer.rotation,
            z_index=layer.z_index,
            content=_resolve_content(layer, identity),
            style=layer.style.model_dump(mode="json", by_alias=True, exclude_none=True),
        )
        for layer in template.resolve_paint_order()
    ]
