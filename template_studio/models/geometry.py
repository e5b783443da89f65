"""百分比坐标几何模型.

图层的位置与尺寸都以模板尺寸的百分比（0-100）表示，与实际像素分辨率
及画布缩放无关。缩放只在渲染时参与计算，从不保存到图层上。

Features:
    - 百分比钳制（越界值被钳制而不是拒绝，允许图层部分出血）
    - 百分比到像素的换算
    - 像素到百分比的反向换算（供渲染表面使用）
"""

from __future__ import annotations

import math
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ===================
# 常量定义
# ===================

PERCENT_MIN = 0.0
PERCENT_MAX = 100.0

# 宽高的最小百分比，保证可渲染图层的尺寸始终大于0
MIN_LAYER_SIZE_PERCENT = 0.1


# ===================
# 辅助函数
# ===================


def clamp_percent(value: float) -> float:
    """将数值钳制到 [0, 100].

    该函数是幂等的：clamp_percent(clamp_percent(v)) == clamp_percent(v)。
    NaN 被视为 0。

    Args:
        value: 原始百分比

    Returns:
        钳制后的百分比
    """
    value = float(value)
    if math.isnan(value):
        return PERCENT_MIN
    return max(PERCENT_MIN, min(PERCENT_MAX, value))


def clamp_size_percent(value: float) -> float:
    """钳制宽高百分比到 [MIN_LAYER_SIZE_PERCENT, 100]."""
    return max(MIN_LAYER_SIZE_PERCENT, clamp_percent(value))


def normalize_rotation(value: float) -> float:
    """规范化旋转角度.

    任何有限实数都是合法角度，不做取模；非有限值视为 0。
    """
    value = float(value)
    if not math.isfinite(value):
        return 0.0
    return value


# ===================
# 值类型
# ===================


class Dimensions(BaseModel):
    """模板像素尺寸.

    Attributes:
        width: 宽度（像素）
        height: 高度（像素）
    """

    model_config = ConfigDict(frozen=True)

    width: int = Field(gt=0, description="宽度")
    height: int = Field(gt=0, description="高度")

    @property
    def aspect_ratio(self) -> float:
        """宽高比."""
        return self.width / self.height


class PixelRect(NamedTuple):
    """像素空间中的矩形."""

    x: float
    y: float
    width: float
    height: float


class Geometry(BaseModel):
    """百分比空间中的几何信息.

    Attributes:
        x: 左上角X（百分比）
        y: 左上角Y（百分比）
        width: 宽度（百分比）
        height: 高度（百分比）
        rotation: 绕图层自身中心的旋转角度（度）

    Example:
        >>> geo = Geometry(x=120, y=-5, width=50, height=10)
        >>> (geo.x, geo.y)
        (100.0, 0.0)
    """

    model_config = ConfigDict(frozen=True)

    x: float = 0.0
    y: float = 0.0
    width: float = PERCENT_MAX
    height: float = PERCENT_MAX
    rotation: float = 0.0

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
    def center(self) -> tuple[float, float]:
        """中心点（百分比）."""
        return (self.x + self.width / 2, self.y + self.height / 2)


# ===================
# 坐标换算
# ===================


def to_pixels(
    geometry: Geometry,
    dimensions: Dimensions,
    scale: float = 1.0,
) -> PixelRect:
    """将百分比几何换算为像素矩形.

    Args:
        geometry: 百分比几何
        dimensions: 模板像素尺寸
        scale: 渲染缩放比例

    Returns:
        像素矩形
    """
    sx = dimensions.width * scale / PERCENT_MAX
    sy = dimensions.height * scale / PERCENT_MAX
    return PixelRect(
        x=geometry.x * sx,
        y=geometry.y * sy,
        width=geometry.width * sx,
        height=geometry.height * sy,
    )


def to_percent(
    px: float,
    py: float,
    dimensions: Dimensions,
    scale: float = 1.0,
) -> tuple[float, float]:
    """将渲染表面上的像素坐标换算为百分比坐标.

    Args:
        px: 像素X
        py: 像素Y
        dimensions: 模板像素尺寸
        scale: 渲染缩放比例

    Returns:
        钳制后的 (x, y) 百分比
    """
    if scale <= 0:
        return (PERCENT_MIN, PERCENT_MIN)
    x = px / (dimensions.width * scale) * PERCENT_MAX
    y = py / (dimensions.height * scale) * PERCENT_MAX
    return (clamp_percent(x), clamp_percent(y))
