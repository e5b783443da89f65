"""外部协作方接口.

引擎通过构造函数注入这些协作方，自身从不进行网络或存储 I/O。
重试与退避由协作方自行负责。
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from template_studio.models.brand import Asset, BrandIdentity
from template_studio.models.template import Template
from template_studio.services.template_store import TemplateMetadata


@runtime_checkable
class BrandIdentitySource(Protocol):
    """品牌识别来源（只读，渲染时轮询）."""

    def get(self, brand_id: str) -> Optional[BrandIdentity]:
        """获取品牌识别快照，不存在返回 None."""
        ...


@runtime_checkable
class AssetLibrary(Protocol):
    """素材库（只读，提供拖放目标）."""

    def list(self, brand_id: str) -> list[Asset]:
        """列出品牌的素材."""
        ...


@runtime_checkable
class TemplateRepository(Protocol):
    """画布控制器需要的最小模板存储（保存与加载）."""

    def save(self, template: Template) -> bool:
        """保存（插入或覆盖）模板."""
        ...

    def load(self, template_id: str) -> Optional[Template]:
        """加载模板，不存在返回 None."""
        ...


@runtime_checkable
class TemplateStore(TemplateRepository, Protocol):
    """完整的模板存储（键值 upsert/delete 服务，带列表）."""

    def delete(self, template_id: str) -> bool:
        """删除模板."""
        ...

    def list_templates(self, brand_id: Optional[str] = None) -> list[TemplateMetadata]:
        """列出模板元数据."""
        ...
