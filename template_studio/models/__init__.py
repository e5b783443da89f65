"""数据模型模块."""

from template_studio.models.brand import (
    Asset,
    BrandIdentity,
    BrandPalette,
    BrandTypography,
)
from template_studio.models.geometry import (
    Dimensions,
    Geometry,
    PixelRect,
    clamp_percent,
    to_percent,
    to_pixels,
)
from template_studio.models.layer import (
    # 枚举
    LayerType,
    TextAlign,
    # 样式
    LayerStyle,
    TextStyle,
    ShapeStyle,
    ImageStyle,
    LogoStyle,
    # 图片来源
    UrlSource,
    BrandLogoRef,
    ImageSource,
    # 图层类
    LayerBase,
    TextLayer,
    ImageLayer,
    ShapeLayer,
    LogoLayer,
    AnyLayer,
    Layer,
    # 图层操作
    create_layer,
    update_layer,
    resolve_source_url,
    generate_layer_id,
)
from template_studio.models.template import Template

__all__ = [
    # 品牌
    "Asset",
    "BrandIdentity",
    "BrandPalette",
    "BrandTypography",
    # 几何
    "Dimensions",
    "Geometry",
    "PixelRect",
    "clamp_percent",
    "to_percent",
    "to_pixels",
    # 枚举
    "LayerType",
    "TextAlign",
    # 样式
    "LayerStyle",
    "TextStyle",
    "ShapeStyle",
    "ImageStyle",
    "LogoStyle",
    # 图片来源
    "UrlSource",
    "BrandLogoRef",
    "ImageSource",
    # 图层类
    "LayerBase",
    "TextLayer",
    "ImageLayer",
    "ShapeLayer",
    "LogoLayer",
    "AnyLayer",
    "Layer",
    # 图层操作
    "create_layer",
    "update_layer",
    "resolve_source_url",
    "generate_layer_id",
    # 模板
    "Template",
]
