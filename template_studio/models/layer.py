"""图层数据模型.

提供模板设计引擎的图层模型，支持文字、图片、形状和 Logo 四种图层。

Features:
    - 按图层类型区分的样式记录（未知样式键保留，保证前向兼容）
    - 百分比坐标几何（越界钳制）
    - 图片类图层的显式来源：静态 URL 或品牌 Logo 引用
    - 图层创建与部分更新（样式浅合并一层）
"""

from __future__ import annotations

import uuid
from enum import Enum
from typing import Annotated, Any, ClassVar, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from template_studio.models.brand import BrandIdentity, LogoSlot
from template_studio.models.geometry import (
    Geometry,
    clamp_percent,
    clamp_size_percent,
    normalize_rotation,
)
from template_studio.utils.constants import DEFAULT_FONT_FAMILY
from template_studio.utils.logger import setup_logger

logger = setup_logger(__name__)


# ===================
# 常量定义
# ===================

# 默认图层位置（百分比）
DEFAULT_LAYER_X = 10.0
DEFAULT_LAYER_Y = 10.0
DEFAULT_LAYER_ROTATION = 0.0

# 文字图层默认值
DEFAULT_TEXT_CONTENT = "Double Click to Edit"
DEFAULT_TEXT_COLOR = "#000000"
DEFAULT_TEXT_FONT_SIZE = 24

# 形状图层默认值
DEFAULT_SHAPE_BACKGROUND_COLOR = "#CCCCCC"


# ===================
# 枚举定义
# ===================


class LayerType(str, Enum):
    """图层类型枚举."""

    TEXT = "text"  # 文字图层
    IMAGE = "image"  # 图片图层
    SHAPE = "shape"  # 形状图层
    LOGO = "logo"  # 品牌 Logo 图层


class TextAlign(str, Enum):
    """文字对齐方式."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


# 各类型图层的默认尺寸（宽, 高），单位为百分比
DEFAULT_LAYER_SIZES: dict[LayerType, tuple[float, float]] = {
    LayerType.TEXT: (50.0, 10.0),
    LayerType.IMAGE: (30.0, 30.0),
    LayerType.SHAPE: (30.0, 30.0),
    LayerType.LOGO: (30.0, 30.0),
}


# ===================
# 辅助函数
# ===================


def generate_layer_id() -> str:
    """生成唯一的图层ID.

    Returns:
        8位UUID字符串
    """
    return uuid.uuid4().hex[:8]


def _alias_keys(model_cls: type[BaseModel], data: Mapping[str, Any]) -> dict[str, Any]:
    """将字段名统一为别名（camelCase），未知键原样保留."""
    aliases = {
        name: field.alias or to_camel(name)
        for name, field in model_cls.model_fields.items()
    }
    return {aliases.get(key, key): value for key, value in data.items()}


# ===================
# 样式记录
# ===================


class LayerStyle(BaseModel):
    """图层样式基类.

    未声明的样式键被原样保留，保存/加载后不丢失。

    Attributes:
        z_index: 绘制顺序，数值越大越靠上
        opacity: 不透明度
    """

    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    z_index: int = Field(default=0, description="层级索引")
    opacity: Optional[float] = Field(default=None, description="不透明度")


class TextStyle(LayerStyle):
    """文字样式."""

    color: Optional[str] = Field(default=None, description="文字颜色")
    font_size: Optional[float] = Field(default=None, description="字体大小")
    font_family: Optional[str] = Field(default=None, description="字体名称")
    font_weight: Optional[Union[str, int]] = Field(default=None, description="字重")
    # 取值通常为 TextAlign 中的值，其他值原样保留
    text_align: Optional[str] = Field(default=None, description="对齐方式")

    @field_validator("text_align", mode="before")
    @classmethod
    def _align_value(cls, v: Any) -> Any:
        return v.value if isinstance(v, TextAlign) else v


class ShapeStyle(LayerStyle):
    """形状样式.

    形状完全由背景色和几何定义。
    """

    background_color: Optional[str] = Field(default=None, description="背景颜色")
    border_radius: Optional[float] = Field(default=None, description="圆角半径")


class ImageStyle(LayerStyle):
    """图片样式."""

    border_radius: Optional[float] = Field(default=None, description="圆角半径")


class LogoStyle(ImageStyle):
    """Logo 样式."""


# ===================
# 图片来源
# ===================


class UrlSource(BaseModel):
    """静态图片来源（素材地址的快照）."""

    model_config = ConfigDict(frozen=True)

    url: str


class BrandLogoRef(BaseModel):
    """品牌 Logo 引用.

    渲染时才解析为品牌识别中的当前 Logo 地址，品牌更新 Logo 后
    所有使用 Logo 图层的模板自动生效。
    """

    model_config = ConfigDict(frozen=True)

    slot: LogoSlot = "primary"


ImageSource = Union[UrlSource, BrandLogoRef]


def resolve_source_url(
    source: ImageSource,
    identity: Optional[BrandIdentity],
) -> Optional[str]:
    """解析图片来源为实际地址.

    Args:
        source: 图片来源
        identity: 当前品牌识别快照

    Returns:
        图片地址；Logo 引用在品牌未配置 Logo 时返回 None
    """
    if isinstance(source, UrlSource):
        return source.url or None
    if identity is None:
        return None
    return identity.logo_for(source.slot)


# ===================
# 图层基类
# ===================


class LayerBase(BaseModel):
    """图层基类.

    所有图层类型的通用属性。

    Attributes:
        id: 图层唯一标识符（模板内唯一）
        type: 图层类型
        x: X坐标（百分比）
        y: Y坐标（百分比）
        width: 宽度（百分比）
        height: 高度（百分比）
        rotation: 旋转角度（度，绕中心）
        is_locked: 是否锁定
    """

    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    # 是否携带自身 content
    accepts_content: ClassVar[bool] = True

    id: str = Field(default_factory=generate_layer_id, description="图层唯一ID")
    type: str

    # 位置和尺寸
    x: float = Field(default=DEFAULT_LAYER_X, description="X坐标")
    y: float = Field(default=DEFAULT_LAYER_Y, description="Y坐标")
    width: float = Field(default=30.0, description="宽度")
    height: float = Field(default=30.0, description="高度")
    rotation: float = Field(default=DEFAULT_LAYER_ROTATION, description="旋转角度")

    is_locked: bool = Field(default=False, description="是否锁定")

    @model_validator(mode="before")
    @classmethod
    def _drop_foreign_content(cls, data: Any) -> Any:
        if not cls.accepts_content and isinstance(data, dict) and "content" in data:
            data = {k: v for k, v in data.items() if k != "content"}
        return data

    @field_validator("x", "y")
    @classmethod
    def _clamp_position(cls, v: float) -> float:
        return clamp_percent(v)

    @field_validator("width", "height")
    @classmethod
    def _clamp_size(cls, v: float) -> float:
        return clamp_size_percent(v)

    @field_validator("rotation")
    @classmethod
    def _check_rotation(cls, v: float) -> float:
        return normalize_rotation(v)

    @property
    def layer_type(self) -> LayerType:
        """图层类型枚举."""
        return LayerType(self.type)

    @property
    def geometry(self) -> Geometry:
        """百分比几何."""
        return Geometry(
            x=self.x,
            y=self.y,
            width=self.width,
            height=self.height,
            rotation=self.rotation,
        )

    @property
    def z_index(self) -> int:
        """绘制顺序."""
        return self.style.z_index  # type: ignore[attr-defined]

    def to_dict(self) -> dict[str, Any]:
        """转换为 JSON 结构的字典."""
        return self.model_dump(mode="json", by_alias=True)


# ===================
# 具体图层
# ===================


class TextLayer(LayerBase):
    """文字图层.

    文字高度可以由渲染端自动计算，height 只作为参考值。

    Example:
        >>> layer = TextLayer(content="Headline", style={"fontSize": 40, "zIndex": 1})
        >>> layer.style.font_size
        40.0
    """

    type: Literal["text"] = "text"
    content: str = Field(default=DEFAULT_TEXT_CONTENT, description="文字内容")
    style: TextStyle = Field(default_factory=TextStyle)


class ImageLayer(LayerBase):
    """图片图层.

    content 保存素材地址。
    """

    type: Literal["image"] = "image"
    content: str = Field(default="", description="图片地址")
    style: ImageStyle = Field(default_factory=ImageStyle)

    @property
    def source(self) -> UrlSource:
        """图片来源."""
        return UrlSource(url=self.content)


class ShapeLayer(LayerBase):
    """形状图层.

    形状不携带 content，输入中的 content 会被丢弃。
    """

    accepts_content: ClassVar[bool] = False

    type: Literal["shape"] = "shape"
    style: ShapeStyle = Field(default_factory=ShapeStyle)


class LogoLayer(LayerBase):
    """Logo 图层.

    从不携带自身 content，总是在渲染时绑定品牌当前的 Logo。
    """

    accepts_content: ClassVar[bool] = False

    type: Literal["logo"] = "logo"
    source: BrandLogoRef = Field(default_factory=BrandLogoRef)
    style: LogoStyle = Field(default_factory=LogoStyle)


# ===================
# 图层联合类型
# ===================

AnyLayer = Annotated[
    Union[TextLayer, ImageLayer, ShapeLayer, LogoLayer],
    Field(discriminator="type"),
]

Layer = Union[TextLayer, ImageLayer, ShapeLayer, LogoLayer]

LAYER_CLASSES: dict[LayerType, type[LayerBase]] = {
    LayerType.TEXT: TextLayer,
    LayerType.IMAGE: ImageLayer,
    LayerType.SHAPE: ShapeLayer,
    LayerType.LOGO: LogoLayer,
}


# ===================
# 图层操作
# ===================


def update_layer(layer: Layer, partial_update: Mapping[str, Any]) -> Layer:
    """部分更新图层.

    顶层字段浅合并，style 合并一层深度，因此只更新 color 不会清除
    fontSize。键名可以使用 camelCase 或 snake_case。

    id 和 type 不可修改；对形状和 Logo 设置 content 不产生任何效果。

    Args:
        layer: 原图层
        partial_update: 部分更新内容

    Returns:
        更新后的新图层，原图层不变
    """
    if not partial_update:
        return layer

    layer_cls = type(layer)
    updates = _alias_keys(layer_cls, partial_update)

    for key in ("id", "type"):
        if key in updates and updates[key] != getattr(layer, key):
            logger.debug(f"忽略对图层 {layer.id} 的 {key} 修改")
        updates.pop(key, None)

    if not layer_cls.accepts_content and updates.pop("content", None) is not None:
        logger.debug(f"{layer.type} 图层不携带 content，已忽略: {layer.id}")

    style_update = updates.pop("style", None)
    merged = layer.model_dump(by_alias=True)
    merged.update(updates)

    if style_update:
        style_cls = type(layer.style)
        if isinstance(style_update, BaseModel):
            style_update = style_update.model_dump(by_alias=True, exclude_unset=True)
        merged["style"] = {**merged["style"], **_alias_keys(style_cls, style_update)}

    return layer_cls.model_validate(merged)


def create_layer(
    layer_type: LayerType | str,
    canvas_layer_count: int,
    defaults: Optional[Mapping[str, Any]] = None,
) -> Layer:
    """创建新图层.

    新图层位于 (10%, 10%)，尺寸按类型取默认值，zIndex 等于画布上已有
    图层数量，因此默认绘制在最上层。

    Args:
        layer_type: 图层类型
        canvas_layer_count: 画布上已有图层数量
        defaults: 调用方提供的默认值，按 update_layer 语义合并

    Returns:
        新图层
    """
    layer_type = LayerType(layer_type)
    width, height = DEFAULT_LAYER_SIZES[layer_type]

    base: dict[str, Any] = {
        "id": generate_layer_id(),
        "x": DEFAULT_LAYER_X,
        "y": DEFAULT_LAYER_Y,
        "width": width,
        "height": height,
        "rotation": DEFAULT_LAYER_ROTATION,
        "style": {"zIndex": canvas_layer_count},
    }

    if layer_type == LayerType.TEXT:
        base["content"] = DEFAULT_TEXT_CONTENT
        base["style"].update(
            color=DEFAULT_TEXT_COLOR,
            fontSize=DEFAULT_TEXT_FONT_SIZE,
            fontFamily=DEFAULT_FONT_FAMILY,
        )
    elif layer_type == LayerType.SHAPE:
        base["style"]["backgroundColor"] = DEFAULT_SHAPE_BACKGROUND_COLOR

    layer = LAYER_CLASSES[layer_type].model_validate(base)
    if defaults:
        layer = update_layer(layer, defaults)
    return layer  # type: ignore[return-value]
