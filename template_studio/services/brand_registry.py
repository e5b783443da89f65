"""品牌识别与素材库的内存实现.

用于嵌入引擎和测试，满足 BrandIdentitySource 与 AssetLibrary 接口。
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from template_studio.models.brand import Asset, BrandIdentity
from template_studio.utils.logger import setup_logger

logger = setup_logger(__name__)


class InMemoryBrandRegistry:
    """内存品牌识别来源.

    Example:
        >>> registry = InMemoryBrandRegistry()
        >>> registry.register(BrandIdentity(brand_id="glvt", primary_color="#FDFCF8"))
        >>> registry.get("glvt").primary_color
        '#FDFCF8'
    """

    def __init__(self, identities: Optional[Iterable[BrandIdentity]] = None) -> None:
        self._identities: Dict[str, BrandIdentity] = {}
        for identity in identities or ():
            self.register(identity)

    def register(self, identity: BrandIdentity) -> None:
        """注册或替换品牌识别.

        品牌识别是不可变快照，替换后新的快照在下一次轮询时生效。
        """
        self._identities[identity.brand_id] = identity
        logger.debug(f"品牌识别已更新: {identity.brand_id}")

    def get(self, brand_id: str) -> Optional[BrandIdentity]:
        """获取品牌识别快照."""
        return self._identities.get(brand_id)


class InMemoryAssetLibrary:
    """内存素材库."""

    def __init__(self) -> None:
        self._assets: Dict[str, List[Asset]] = {}

    def add(self, brand_id: str, asset: Asset) -> None:
        """添加素材."""
        self._assets.setdefault(brand_id, []).append(asset)

    def list(self, brand_id: str) -> List[Asset]:
        """列出品牌的素材."""
        return list(self._assets.get(brand_id, ()))

    def find_by_tag(self, brand_id: str, tag: str) -> List[Asset]:
        """按标签查找素材（不区分大小写）."""
        return [asset for asset in self._assets.get(brand_id, ()) if asset.has_tag(tag)]
