"""模板尺寸预设.

各发布渠道常用的画布尺寸，新模板从这些空白预设创建。

Features:
    - 预设目录（社交、印刷、数字渠道）
    - 按渠道、类型、比例和名称筛选
    - 从预设创建空白模板
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from template_studio.models.geometry import Dimensions
from template_studio.models.template import Template
from template_studio.utils.logger import setup_logger

logger = setup_logger(__name__)


# 筛选条件中表示不过滤的值
FILTER_ALL = "All"

RATIO_SQUARE = "Square"
RATIO_PORTRAIT = "Portrait"
RATIO_LANDSCAPE = "Landscape"


class TemplatePreset(BaseModel):
    """模板尺寸预设.

    Attributes:
        id: 预设ID
        name: 预设名称
        category: 分类（Social、Print、Digital）
        channel: 发布渠道
        kind: 模板类型
        width: 宽度（像素）
        height: 高度（像素）
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    category: str
    channel: str
    kind: str
    width: int
    height: int

    @property
    def dimensions(self) -> Dimensions:
        """像素尺寸."""
        return Dimensions(width=self.width, height=self.height)

    @property
    def ratio(self) -> str:
        """画面比例分类."""
        if self.width == self.height:
            return RATIO_SQUARE
        return RATIO_PORTRAIT if self.height > self.width else RATIO_LANDSCAPE


# 空白画布
BLANK_PRESET = TemplatePreset(
    id="blank",
    name="New Design",
    category="Social",
    channel="Instagram",
    kind="Post",
    width=1080,
    height=1080,
)

PRESET_CATALOG: tuple[TemplatePreset, ...] = (
    BLANK_PRESET,
    # 社交：Instagram
    TemplatePreset(id="ig-post", name="Quote Card Minimal", category="Social",
                   channel="Instagram", kind="Post", width=1080, height=1080),
    TemplatePreset(id="ig-story", name="Event Announcement", category="Social",
                   channel="Instagram", kind="Story", width=1080, height=1920),
    TemplatePreset(id="ig-cover", name="Reel Cover", category="Social",
                   channel="Instagram", kind="Cover", width=1080, height=1920),
    # 社交：Facebook
    TemplatePreset(id="fb-banner", name="Event Header", category="Social",
                   channel="Facebook", kind="Banner", width=820, height=312),
    TemplatePreset(id="fb-post", name="Standard Link Post", category="Social",
                   channel="Facebook", kind="Post", width=1200, height=630),
    # 社交：YouTube
    TemplatePreset(id="yt-thumbnail", name="Vlog Thumbnail", category="Social",
                   channel="YouTube", kind="Thumbnail", width=1280, height=720),
    TemplatePreset(id="yt-banner", name="Channel Art", category="Social",
                   channel="YouTube", kind="Banner", width=2560, height=1440),
    # 社交：LinkedIn
    TemplatePreset(id="li-banner", name="Corporate Header", category="Social",
                   channel="LinkedIn", kind="Banner", width=1584, height=396),
    TemplatePreset(id="li-post", name="Hiring Announcement", category="Social",
                   channel="LinkedIn", kind="Post", width=1200, height=1200),
    # 社交：TikTok
    TemplatePreset(id="tt-background", name="Green Screen Style", category="Social",
                   channel="TikTok", kind="Background", width=1080, height=1920),
    # 印刷
    TemplatePreset(id="pr-flyer", name="Event Flyer A4", category="Print",
                   channel="Print", kind="Flyer", width=2480, height=3508),
    TemplatePreset(id="pr-card", name="Business Card Front", category="Print",
                   channel="Print", kind="Card", width=1050, height=600),
    # 数字
    TemplatePreset(id="dg-blog", name="Blog Header", category="Digital",
                   channel="Web", kind="Banner", width=1200, height=600),
    TemplatePreset(id="dg-email", name="Email Newsletter Header", category="Digital",
                   channel="Email", kind="Banner", width=600, height=200),
)


def get_preset(preset_id: str) -> Optional[TemplatePreset]:
    """根据ID获取预设."""
    for preset in PRESET_CATALOG:
        if preset.id == preset_id:
            return preset
    return None


def find_presets(
    channel: Optional[str] = None,
    kind: Optional[str] = None,
    ratio: Optional[str] = None,
    search: str = "",
) -> List[TemplatePreset]:
    """筛选预设.

    None 或 "All" 表示不按该条件过滤；名称搜索不区分大小写。

    Args:
        channel: 发布渠道
        kind: 模板类型
        ratio: 画面比例分类
        search: 名称关键字

    Returns:
        符合条件的预设（目录顺序）
    """
    keyword = search.lower()

    def matches(value: str, wanted: Optional[str]) -> bool:
        return wanted in (None, FILTER_ALL) or value == wanted

    return [
        preset
        for preset in PRESET_CATALOG
        if matches(preset.channel, channel)
        and matches(preset.kind, kind)
        and matches(preset.ratio, ratio)
        and keyword in preset.name.lower()
    ]


def create_from_preset(
    preset: TemplatePreset,
    brand_id: str,
    name: Optional[str] = None,
) -> Template:
    """从预设创建空白模板.

    Args:
        preset: 尺寸预设
        brand_id: 所属品牌ID
        name: 模板名称，默认使用预设名称

    Returns:
        没有图层的新模板
    """
    template = Template(
        brand_id=brand_id,
        name=name or preset.name,
        channel=preset.channel,
        kind=preset.kind,
        dimensions=preset.dimensions,
    )
    logger.debug(f"从预设 {preset.id} 创建模板: {template.id}")
    return template
