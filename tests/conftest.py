"""Pytest 配置和共享 fixtures."""

import pytest

from template_studio.core.canvas_controller import CanvasController
from template_studio.models.brand import Asset, BrandIdentity
from template_studio.models.geometry import Dimensions
from template_studio.models.template import Template
from template_studio.services.brand_registry import InMemoryAssetLibrary, InMemoryBrandRegistry
from template_studio.services.template_store import InMemoryTemplateStore

BRAND_ID = "glvt"


@pytest.fixture
def brand_identity() -> BrandIdentity:
    """返回示例品牌识别."""
    return BrandIdentity(
        brand_id=BRAND_ID,
        primary_color="#FDFCF8",
        accent_color="#C9A878",
        heading_font="Playfair Display",
        body_font="Inter",
        logo_url="https://cdn.example.com/glvt/logo-primary.svg",
    )


@pytest.fixture
def registry(brand_identity: BrandIdentity) -> InMemoryBrandRegistry:
    """返回已注册示例品牌的品牌识别来源."""
    return InMemoryBrandRegistry([brand_identity])


@pytest.fixture
def asset_library() -> InMemoryAssetLibrary:
    """返回带有示例素材的素材库."""
    library = InMemoryAssetLibrary()
    library.add(BRAND_ID, Asset(url="https://cdn.example.com/glvt/hero.jpg", tags=["hero"]))
    library.add(BRAND_ID, Asset(url="https://cdn.example.com/glvt/gym.jpg", tags=["Gym", "interior"]))
    return library


@pytest.fixture
def store() -> InMemoryTemplateStore:
    """返回空的内存模板存储."""
    return InMemoryTemplateStore()


@pytest.fixture
def empty_template() -> Template:
    """返回 1080x1080 的空模板."""
    return Template(
        brand_id=BRAND_ID,
        name="Standard Post",
        dimensions=Dimensions(width=1080, height=1080),
    )


@pytest.fixture
def controller(registry, asset_library, store, empty_template) -> CanvasController:
    """返回已打开空模板的画布控制器（非严格模式）."""
    return CanvasController(
        brand_source=registry,
        asset_library=asset_library,
        store=store,
        template=empty_template,
        strict=False,
    )
