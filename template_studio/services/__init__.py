"""服务层模块."""

from template_studio.services.brand_registry import (
    InMemoryAssetLibrary,
    InMemoryBrandRegistry,
)
from template_studio.services.interfaces import (
    AssetLibrary,
    BrandIdentitySource,
    TemplateRepository,
    TemplateStore,
)
from template_studio.services.template_presets import (
    BLANK_PRESET,
    PRESET_CATALOG,
    TemplatePreset,
    create_from_preset,
    find_presets,
    get_preset,
)
from template_studio.services.template_store import (
    InMemoryTemplateStore,
    JsonFileTemplateStore,
    TemplateMetadata,
)

__all__ = [
    # 协作方接口
    "AssetLibrary",
    "BrandIdentitySource",
    "TemplateRepository",
    "TemplateStore",
    # 内存实现
    "InMemoryAssetLibrary",
    "InMemoryBrandRegistry",
    "InMemoryTemplateStore",
    # 文件存储
    "JsonFileTemplateStore",
    "TemplateMetadata",
    # 模板预设
    "BLANK_PRESET",
    "PRESET_CATALOG",
    "TemplatePreset",
    "create_from_preset",
    "find_presets",
    "get_preset",
]
