"""品牌识别数据模型.

引擎只读取品牌识别快照，从不修改它。

Features:
    - 品牌调色板与字体
    - 主/副 Logo 地址
    - 素材库条目
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from template_studio.utils.constants import NEUTRAL_COLORS


LogoSlot = Literal["primary", "secondary"]


class BrandPalette(BaseModel):
    """品牌调色板.

    Attributes:
        primary: 主色
        secondary: 辅助色
        accent: 强调色
    """

    model_config = ConfigDict(frozen=True)

    primary: Optional[str] = None
    secondary: Optional[str] = None
    accent: Optional[str] = None

    @property
    def colors(self) -> list[str]:
        """允许使用的全部颜色（品牌色在前，中性色在后）.

        也是属性面板中提供的色板顺序。
        """
        brand = [c for c in (self.primary, self.secondary, self.accent) if c]
        return brand + list(NEUTRAL_COLORS)


class BrandTypography(BaseModel):
    """品牌字体.

    Attributes:
        heading_font: 标题字体
        body_font: 正文字体
    """

    model_config = ConfigDict(frozen=True)

    heading_font: Optional[str] = None
    body_font: Optional[str] = None

    @property
    def fonts(self) -> list[str]:
        """已配置的字体（忽略空值）."""
        return [f for f in (self.heading_font, self.body_font) if f]


class BrandIdentity(BaseModel):
    """品牌识别快照.

    字段名与品牌识别来源返回的结构一致（primaryColor、headingFont、logoUrl 等）。

    Example:
        >>> identity = BrandIdentity(
        ...     brand_id="glvt",
        ...     primary_color="#FDFCF8",
        ...     accent_color="#C9A878",
        ...     heading_font="Playfair Display",
        ...     body_font="Inter",
        ... )
        >>> identity.palette.colors
        ['#FDFCF8', '#C9A878', '#000000', '#FFFFFF']
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    brand_id: str = ""
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None
    accent_color: Optional[str] = None
    heading_font: Optional[str] = None
    body_font: Optional[str] = None
    logo_url: Optional[str] = None
    secondary_logo_url: Optional[str] = None

    @property
    def palette(self) -> BrandPalette:
        """品牌调色板."""
        return BrandPalette(
            primary=self.primary_color,
            secondary=self.secondary_color,
            accent=self.accent_color,
        )

    @property
    def typography(self) -> BrandTypography:
        """品牌字体."""
        return BrandTypography(heading_font=self.heading_font, body_font=self.body_font)

    def logo_for(self, slot: LogoSlot = "primary") -> Optional[str]:
        """获取指定位置的 Logo 地址.

        Args:
            slot: primary 或 secondary

        Returns:
            Logo 地址，未配置返回 None
        """
        if slot == "secondary":
            return self.secondary_logo_url
        return self.logo_url


class Asset(BaseModel):
    """素材库条目.

    引擎只读取 url 和 tags。
    """

    model_config = ConfigDict(frozen=True)

    url: str
    tags: list[str] = Field(default_factory=list)

    def has_tag(self, tag: str) -> bool:
        """是否带有指定标签（不区分大小写）."""
        wanted = tag.lower()
        return any(t.lower() == wanted for t in self.tags)
