"""模板数据模型.

模板是固定像素尺寸的命名画布，持有按插入顺序存储的图层集合。
绘制顺序由每个图层的 style.zIndex 决定，而不是存储位置。

Features:
    - 图层添加/删除/替换（不可变更新，返回新模板）
    - 稳定的绘制顺序解析
    - JSON序列化/反序列化（camelCase 结构，无损往返）
    - 模板克隆
"""

from __future__ import annotations

import uuid
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from template_studio.models.geometry import Dimensions
from template_studio.models.layer import AnyLayer, Layer
from template_studio.utils.exceptions import DuplicateIdError


# ===================
# 常量定义
# ===================

DEFAULT_TEMPLATE_NAME = "New Design"
DEFAULT_CHANNEL = "Instagram"
DEFAULT_KIND = "Post"
DEFAULT_DIMENSIONS = Dimensions(width=1080, height=1080)


def generate_template_id() -> str:
    """生成唯一的模板ID.

    Returns:
        8位UUID字符串
    """
    return uuid.uuid4().hex[:8]


# ===================
# 模板
# ===================


class Template(BaseModel):
    """品牌模板.

    所有修改操作都返回新模板，原模板保持不变。未声明的顶层键原样保留。

    Attributes:
        id: 模板唯一ID（创建后不可变）
        brand_id: 所属品牌ID（仅为反向引用）
        name: 模板名称
        channel: 发布渠道，如 Instagram
        kind: 模板类型，如 Post、Story
        dimensions: 像素尺寸，模板生命周期内固定
        layers: 图层列表（插入顺序）
        tags: 标签
        thumbnail_url: 缩略图地址

    Example:
        >>> template = Template(brand_id="glvt", name="Standard Post")
        >>> template = template.add_layer(TextLayer(id="l1"))
        >>> template.layer_count
        1
    """

    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str = Field(default_factory=generate_template_id, description="模板唯一ID")
    brand_id: str = Field(default="", description="所属品牌ID")
    name: str = Field(default=DEFAULT_TEMPLATE_NAME, description="模板名称")
    channel: str = Field(default=DEFAULT_CHANNEL, description="发布渠道")
    kind: str = Field(default=DEFAULT_KIND, description="模板类型")
    dimensions: Dimensions = Field(default=DEFAULT_DIMENSIONS, description="像素尺寸")

    layers: list[AnyLayer] = Field(default_factory=list, description="图层列表")

    # 元数据
    tags: list[str] = Field(default_factory=list, description="标签")
    thumbnail_url: Optional[str] = Field(default=None, description="缩略图地址")

    @model_validator(mode="after")
    def _check_unique_layer_ids(self) -> "Template":
        seen: set[str] = set()
        for layer in self.layers:
            if layer.id in seen:
                raise ValueError(f"图层ID重复: {layer.id}")
            seen.add(layer.id)
        return self

    # ========================
    # 查询
    # ========================

    @property
    def layer_count(self) -> int:
        """获取图层数量."""
        return len(self.layers)

    @property
    def layer_ids(self) -> list[str]:
        """按插入顺序的图层ID列表."""
        return [layer.id for layer in self.layers]

    @property
    def max_z_index(self) -> Optional[int]:
        """最大层级索引，无图层时返回 None."""
        if not self.layers:
            return None
        return max(layer.z_index for layer in self.layers)

    @property
    def min_z_index(self) -> Optional[int]:
        """最小层级索引，无图层时返回 None."""
        if not self.layers:
            return None
        return min(layer.z_index for layer in self.layers)

    def has_layer(self, layer_id: str) -> bool:
        """是否包含指定图层."""
        return any(layer.id == layer_id for layer in self.layers)

    def get_layer(self, layer_id: str) -> Optional[Layer]:
        """根据ID获取图层.

        Args:
            layer_id: 图层ID

        Returns:
            图层对象，不存在返回None
        """
        for layer in self.layers:
            if layer.id == layer_id:
                return layer
        return None

    def resolve_paint_order(self) -> list[Layer]:
        """解析绘制顺序.

        按 zIndex 升序稳定排序，zIndex 相同时保持插入顺序，
        因此相同输入总是得到相同的结果。

        Returns:
            从底到顶的图层列表
        """
        return sorted(self.layers, key=lambda layer: layer.z_index)

    # ========================
    # 修改（返回新模板）
    # ========================

    def add_layer(self, layer: Layer) -> "Template":
        """追加图层.

        Args:
            layer: 图层对象

        Returns:
            新模板

        Raises:
            DuplicateIdError: 图层ID已存在
        """
        if self.has_layer(layer.id):
            raise DuplicateIdError(layer.id)
        return self.model_copy(update={"layers": [*self.layers, layer]})

    def remove_layer(self, layer_id: str) -> "Template":
        """删除图层.

        删除是幂等的：图层不存在时返回同一个模板实例。

        Args:
            layer_id: 图层ID

        Returns:
            新模板或原模板
        """
        if not self.has_layer(layer_id):
            return self
        return self.model_copy(
            update={"layers": [layer for layer in self.layers if layer.id != layer_id]}
        )

    def replace_layer(self, layer: Layer) -> "Template":
        """按ID原位替换图层，存储顺序不变.

        Args:
            layer: 更新后的图层

        Returns:
            新模板；图层不存在时返回原模板
        """
        if not self.has_layer(layer.id):
            return self
        return self.model_copy(
            update={"layers": [layer if l.id == layer.id else l for l in self.layers]}
        )

    def clone(self, name: Optional[str] = None) -> "Template":
        """克隆模板.

        Args:
            name: 新名称，默认在原名称后追加 " Copy"

        Returns:
            具有新ID的模板，图层原样复制
        """
        return self.model_copy(
            update={
                "id": generate_template_id(),
                "name": name or f"{self.name} Copy",
                "layers": list(self.layers),
                "tags": list(self.tags),
            }
        )

    # ========================
    # 序列化
    # ========================

    def to_dict(self) -> dict[str, Any]:
        """转换为 JSON 结构的字典."""
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self, indent: Optional[int] = 2) -> str:
        """序列化为JSON字符串.

        Args:
            indent: 缩进空格数

        Returns:
            JSON字符串
        """
        return self.model_dump_json(by_alias=True, indent=indent)

    @classmethod
    def from_json(cls, json_str: str) -> "Template":
        """从JSON字符串反序列化.

        Args:
            json_str: JSON字符串

        Returns:
            Template实例
        """
        return cls.model_validate_json(json_str)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Template":
        """从字典反序列化."""
        return cls.model_validate(data)
