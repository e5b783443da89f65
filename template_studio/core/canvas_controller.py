"""画布控制器模块.

界面驱动的有状态外观，把图层模型、模板模型和品牌规范校验组合成
用户可见的编辑操作。控制器只持有当前正在编辑的一个模板。

Features:
    - 图层添加、拖放素材、部分更新、删除、层级调整
    - 当前选中图层（界面焦点，不属于数据模型）
    - 画布缩放（视图状态，不随模板保存）
    - 实时品牌规范提示
    - 引用不存在时静默忽略，严格模式下抛出异常
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from pydantic import ValidationError

from template_studio.core.config_manager import get_config
from template_studio.core.guardrails import GuardrailResult, evaluate_layer, evaluate_template
from template_studio.core.render_plan import RenderItem, build_render_plan
from template_studio.models.brand import Asset, BrandIdentity
from template_studio.models.geometry import clamp_percent
from template_studio.models.layer import Layer, LayerType, create_layer, update_layer
from template_studio.models.template import Template
from template_studio.services.interfaces import AssetLibrary, BrandIdentitySource, TemplateRepository
from template_studio.services.template_presets import BLANK_PRESET, TemplatePreset, create_from_preset
from template_studio.utils.constants import (
    DEFAULT_FONT_FAMILY,
    DEFAULT_ZOOM,
    MAX_ZOOM,
    MIN_ZOOM,
    ZOOM_STEP,
)
from template_studio.utils.exceptions import (
    InvalidLayerUpdateError,
    LayerNotFoundError,
    StorageError,
    TemplateNotFoundError,
)
from template_studio.utils.logger import setup_logger

logger = setup_logger(__name__)


# 拖放素材生成的图片图层尺寸（百分比）
PLACED_ASSET_SIZE = 50.0


class CanvasController:
    """画布控制器.

    所有操作在同一线程中同步执行完毕。针对不存在的模板或图层的操作
    不抛出异常，而是返回未改变的状态，以容忍界面滞后于自身状态
    （例如删除后的过期点击）；严格模式下改为抛出 NotFoundError。

    Attributes:
        template: 当前编辑的模板
        active_layer_id: 当前选中的图层ID
        zoom: 画布缩放比例
        feedback: 图层ID到品牌规范校验结果的映射

    Example:
        >>> controller = CanvasController(brand_source=registry)
        >>> controller.new_template(brand_id="glvt")
        >>> controller.add_layer(LayerType.TEXT)
        >>> controller.active_layer.type
        'text'
    """

    def __init__(
        self,
        brand_source: BrandIdentitySource,
        asset_library: Optional[AssetLibrary] = None,
        store: Optional[TemplateRepository] = None,
        template: Optional[Template] = None,
        strict: Optional[bool] = None,
    ) -> None:
        """初始化画布控制器.

        Args:
            brand_source: 品牌识别来源
            asset_library: 素材库
            store: 模板存储
            template: 初始打开的模板
            strict: 严格模式，默认读取设置
        """
        self._brand_source = brand_source
        self._asset_library = asset_library
        self._store = store

        if strict is None:
            strict = get_config().settings.strict_mode
        self._strict = strict
        self._default_zoom = get_config().settings.default_zoom

        self._template: Optional[Template] = None
        self._active_layer_id: Optional[str] = None
        self._zoom = self._default_zoom
        self._feedback: dict[str, GuardrailResult] = {}

        if template is not None:
            self.open_template(template)

    # ========================
    # 状态
    # ========================

    @property
    def template(self) -> Optional[Template]:
        """当前编辑的模板."""
        return self._template

    @property
    def strict(self) -> bool:
        """是否为严格模式."""
        return self._strict

    @property
    def active_layer_id(self) -> Optional[str]:
        """当前选中的图层ID."""
        return self._active_layer_id

    @property
    def active_layer(self) -> Optional[Layer]:
        """当前选中的图层."""
        if self._template is None or self._active_layer_id is None:
            return None
        return self._template.get_layer(self._active_layer_id)

    @property
    def zoom(self) -> float:
        """画布缩放比例."""
        return self._zoom

    @property
    def feedback(self) -> dict[str, GuardrailResult]:
        """最近一次的品牌规范校验结果."""
        return dict(self._feedback)

    @property
    def brand_identity(self) -> Optional[BrandIdentity]:
        """当前模板所属品牌的识别快照（每次访问都重新获取）."""
        if self._template is None:
            return None
        return self._brand_source.get(self._template.brand_id)

    # ========================
    # 内部辅助
    # ========================

    def _require_template(self) -> Optional[Template]:
        """获取当前模板，不存在时按模式忽略或抛出."""
        if self._template is None:
            if self._strict:
                raise TemplateNotFoundError()
            logger.debug("没有打开的模板，操作已忽略")
        return self._template

    def _require_layer(self, template: Template, layer_id: str) -> Optional[Layer]:
        """获取图层，不存在时按模式忽略或抛出."""
        layer = template.get_layer(layer_id)
        if layer is None:
            if self._strict:
                raise LayerNotFoundError(layer_id)
            logger.debug(f"图层不存在，操作已忽略: {layer_id}")
        return layer

    def _refresh_feedback(self, layer: Layer) -> GuardrailResult:
        """重新校验图层并记录结果."""
        result = evaluate_layer(layer, self.brand_identity)
        self._feedback[layer.id] = result
        if not result.passed:
            logger.info(
                f"图层 {layer.id} 不符合品牌规范: {', '.join(result.violated_attributes)}"
            )
        return result

    def _append_layer(self, template: Template, layer: Layer) -> Template:
        self._template = template.add_layer(layer)
        self._refresh_feedback(layer)
        return self._template

    # ========================
    # 模板生命周期
    # ========================

    def open_template(self, template: Template) -> Template:
        """打开模板进行编辑.

        Args:
            template: 模板

        Returns:
            当前模板
        """
        self._template = template
        self._active_layer_id = None
        self._feedback = evaluate_template(template, self.brand_identity)
        logger.debug(f"打开模板: {template.name} ({template.id})")
        return template

    def new_template(
        self,
        brand_id: str,
        preset: Optional[TemplatePreset] = None,
        name: Optional[str] = None,
    ) -> Template:
        """从空白预设创建并打开新模板.

        Args:
            brand_id: 所属品牌ID
            preset: 尺寸预设，默认 1080x1080 的 Instagram Post
            name: 模板名称

        Returns:
            新模板
        """
        template = create_from_preset(preset or BLANK_PRESET, brand_id, name=name)
        return self.open_template(template)

    def load_template(self, template_id: str) -> Optional[Template]:
        """从存储加载并打开模板.

        Args:
            template_id: 模板ID

        Returns:
            当前模板；加载失败时为原状态
        """
        template = self._store.load(template_id) if self._store is not None else None
        if template is None:
            if self._strict:
                raise TemplateNotFoundError(template_id)
            logger.debug(f"模板不存在，加载已忽略: {template_id}")
            return self._template
        return self.open_template(template)

    def save(self) -> bool:
        """保存当前模板到存储.

        Returns:
            是否保存成功

        Raises:
            StorageError: 严格模式下没有存储或保存失败
        """
        template = self._require_template()
        if template is None:
            return False

        if self._store is None:
            if self._strict:
                raise StorageError("未配置模板存储")
            logger.warning("未配置模板存储，保存已忽略")
            return False

        saved = self._store.save(template)
        if not saved and self._strict:
            raise StorageError(f"保存模板失败: {template.id}")
        return saved

    def close_template(self) -> None:
        """关闭当前模板."""
        self._template = None
        self._active_layer_id = None
        self._feedback = {}

    # ========================
    # 图层操作
    # ========================

    def add_layer(self, layer_type: LayerType | str) -> Optional[Template]:
        """添加图层并选中.

        文字图层默认使用品牌正文字体。

        Args:
            layer_type: 图层类型

        Returns:
            更新后的模板
        """
        template = self._require_template()
        if template is None:
            return None

        defaults: dict[str, Any] = {}
        if LayerType(layer_type) == LayerType.TEXT:
            identity = self.brand_identity
            font = identity.body_font if identity and identity.body_font else DEFAULT_FONT_FAMILY
            defaults["style"] = {"fontFamily": font}

        layer = create_layer(layer_type, template.layer_count, defaults)
        self._append_layer(template, layer)
        self._active_layer_id = layer.id
        logger.debug(f"添加图层: {layer.type} ({layer.id})")
        return self._template

    def place_asset(
        self,
        asset_url: str,
        drop_x: float,
        drop_y: float,
    ) -> Optional[Template]:
        """把素材库中的图片拖放到画布上.

        拖放坐标已由调用方换算为模板百分比空间，图层左上角位于拖放点。

        Args:
            asset_url: 素材地址
            drop_x: 拖放点X（百分比）
            drop_y: 拖放点Y（百分比）

        Returns:
            更新后的模板
        """
        template = self._require_template()
        if template is None:
            return None

        layer = create_layer(
            LayerType.IMAGE,
            template.layer_count,
            {
                "content": asset_url,
                "x": clamp_percent(drop_x),
                "y": clamp_percent(drop_y),
                "width": PLACED_ASSET_SIZE,
                "height": PLACED_ASSET_SIZE,
            },
        )
        self._append_layer(template, layer)
        logger.debug(f"放置素材: {asset_url} -> {layer.id}")
        return self._template

    def update_layer(
        self,
        layer_id: str,
        partial_update: Mapping[str, Any],
    ) -> Optional[Template]:
        """部分更新图层，并重新校验品牌规范.

        Args:
            layer_id: 图层ID
            partial_update: 部分更新内容（style 合并一层深度）

        Returns:
            更新后的模板

        Raises:
            InvalidLayerUpdateError: 严格模式下更新内容无法通过校验
        """
        template = self._require_template()
        if template is None:
            return None

        layer = self._require_layer(template, layer_id)
        if layer is None:
            return template

        try:
            updated = update_layer(layer, partial_update)
        except ValidationError as e:
            if self._strict:
                raise InvalidLayerUpdateError(layer_id, str(e)) from e
            logger.debug(f"图层更新无效，已忽略: {layer_id}, 错误: {e}")
            return template

        self._template = template.replace_layer(updated)
        self._refresh_feedback(updated)
        return self._template

    def remove_layer(self, layer_id: str) -> Optional[Template]:
        """删除图层.

        如果选中的正是被删除的图层，清除选中状态。

        Args:
            layer_id: 图层ID

        Returns:
            更新后的模板
        """
        template = self._require_template()
        if template is None:
            return None

        if self._require_layer(template, layer_id) is None:
            return template

        self._template = template.remove_layer(layer_id)
        self._feedback.pop(layer_id, None)
        if self._active_layer_id == layer_id:
            self._active_layer_id = None
        logger.debug(f"删除图层: {layer_id}")
        return self._template

    def reorder_layer(self, layer_id: str, z_index: int) -> Optional[Template]:
        """设置图层的层级索引.

        只修改 zIndex，不改变存储顺序。
        """
        return self.update_layer(layer_id, {"style": {"zIndex": z_index}})

    def bring_to_front(self, layer_id: str) -> Optional[Template]:
        """把图层移到最上层."""
        template = self._require_template()
        if template is None:
            return None
        layer = self._require_layer(template, layer_id)
        if layer is None:
            return template

        others = [l.z_index for l in template.layers if l.id != layer_id]
        if not others or layer.z_index > max(others):
            return template
        return self.reorder_layer(layer_id, max(others) + 1)

    def send_to_back(self, layer_id: str) -> Optional[Template]:
        """把图层移到最下层."""
        template = self._require_template()
        if template is None:
            return None
        layer = self._require_layer(template, layer_id)
        if layer is None:
            return template

        others = [l.z_index for l in template.layers if l.id != layer_id]
        if not others or layer.z_index < min(others):
            return template
        return self.reorder_layer(layer_id, min(others) - 1)

    # ========================
    # 选中状态
    # ========================

    def select_layer(self, layer_id: str) -> Optional[str]:
        """选中图层.

        Returns:
            当前选中的图层ID
        """
        template = self._require_template()
        if template is None:
            return None
        if self._require_layer(template, layer_id) is not None:
            self._active_layer_id = layer_id
        return self._active_layer_id

    def clear_selection(self) -> None:
        """清除选中状态."""
        self._active_layer_id = None

    # ========================
    # 缩放
    # ========================

    def set_zoom(self, factor: float) -> float:
        """设置缩放比例，限制在 [0.1, 2.0].

        Args:
            factor: 缩放比例

        Returns:
            实际缩放比例
        """
        self._zoom = max(MIN_ZOOM, min(MAX_ZOOM, factor))
        return self._zoom

    def zoom_in(self) -> float:
        """放大."""
        return self.set_zoom(round(self._zoom + ZOOM_STEP, 2))

    def zoom_out(self) -> float:
        """缩小."""
        return self.set_zoom(round(self._zoom - ZOOM_STEP, 2))

    def zoom_reset(self) -> float:
        """重置缩放."""
        return self.set_zoom(self._default_zoom or DEFAULT_ZOOM)

    # ========================
    # 查询
    # ========================

    def draggable_assets(self, tag: Optional[str] = None) -> list[Asset]:
        """列出当前品牌可拖放的素材.

        Args:
            tag: 只返回带此标签的素材

        Returns:
            素材列表
        """
        if self._template is None or self._asset_library is None:
            return []
        assets = self._asset_library.list(self._template.brand_id)
        if tag is not None:
            assets = [asset for asset in assets if asset.has_tag(tag)]
        return assets

    def check_layer(self, layer_id: str) -> Optional[GuardrailResult]:
        """按需校验单个图层.

        Returns:
            校验结果，图层不存在时返回 None
        """
        template = self._require_template()
        if template is None:
            return None
        layer = self._require_layer(template, layer_id)
        if layer is None:
            return None
        return self._refresh_feedback(layer)

    def render_plan(self) -> list[RenderItem]:
        """按当前缩放比例生成渲染计划."""
        template = self._require_template()
        if template is None:
            return []
        return build_render_plan(template, self.brand_identity, self._zoom)
