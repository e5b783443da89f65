"""模板存储服务.

提供模板的持久化存储功能，包括保存、加载、删除和列表管理。
两种实现都以 JSON 结构保存模板，保证所有字段（包括未声明的样式键）
在保存/加载后保持不变。

Features:
    - 内存存储（嵌入与测试使用）
    - 本地文件存储（.template.json）
    - 模板列表与元数据
    - 模板复制、导入和导出
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from template_studio.models.template import Template, generate_template_id
from template_studio.utils.logger import setup_logger

logger = setup_logger(__name__)


# ===================
# 常量定义
# ===================

# 模板文件扩展名
TEMPLATE_EXTENSION = ".template.json"


# ===================
# 模板元数据
# ===================


class TemplateMetadata:
    """模板元数据.

    用于模板列表显示，不包含完整图层数据。
    """

    def __init__(
        self,
        id: str,
        name: str,
        brand_id: str = "",
        channel: str = "",
        kind: str = "",
        width: int = 0,
        height: int = 0,
        layer_count: int = 0,
        file_path: str = "",
        modified_at: Optional[datetime] = None,
    ) -> None:
        """初始化模板元数据."""
        self.id = id
        self.name = name
        self.brand_id = brand_id
        self.channel = channel
        self.kind = kind
        self.width = width
        self.height = height
        self.layer_count = layer_count
        self.file_path = file_path
        self.modified_at = modified_at or datetime.now()

    @classmethod
    def from_template(cls, template: Template, file_path: str = "") -> "TemplateMetadata":
        """从模板创建元数据."""
        return cls(
            id=template.id,
            name=template.name,
            brand_id=template.brand_id,
            channel=template.channel,
            kind=template.kind,
            width=template.dimensions.width,
            height=template.dimensions.height,
            layer_count=template.layer_count,
            file_path=file_path,
        )

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典."""
        return {
            "id": self.id,
            "name": self.name,
            "brand_id": self.brand_id,
            "channel": self.channel,
            "kind": self.kind,
            "width": self.width,
            "height": self.height,
            "layer_count": self.layer_count,
            "file_path": self.file_path,
            "modified_at": self.modified_at.isoformat() if self.modified_at else None,
        }


# ===================
# 内存存储
# ===================


class InMemoryTemplateStore:
    """内存模板存储.

    保存的是模板的 JSON 文本而不是对象本身，加载时重新解析，
    因此与真实存储一样经过一次完整的序列化往返。

    Example:
        >>> store = InMemoryTemplateStore()
        >>> store.save(Template(name="Standard Post"))
        True
    """

    def __init__(self) -> None:
        self._records: Dict[str, str] = {}
        self._modified: Dict[str, datetime] = {}

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, template_id: object) -> bool:
        return template_id in self._records

    def save(self, template: Template) -> bool:
        """保存（插入或覆盖）模板."""
        self._records[template.id] = template.to_json(indent=None)
        self._modified[template.id] = datetime.now()
        logger.debug(f"模板已保存到内存: {template.id}")
        return True

    def load(self, template_id: str) -> Optional[Template]:
        """加载模板."""
        raw = self._records.get(template_id)
        if raw is None:
            logger.debug(f"模板不存在: {template_id}")
            return None
        return Template.from_json(raw)

    def delete(self, template_id: str) -> bool:
        """删除模板."""
        if self._records.pop(template_id, None) is None:
            return False
        self._modified.pop(template_id, None)
        return True

    def list_templates(self, brand_id: Optional[str] = None) -> List[TemplateMetadata]:
        """列出模板元数据（最近修改的在前）."""
        result: List[TemplateMetadata] = []
        for template_id in self._records:
            template = self.load(template_id)
            if template is None:
                continue
            if brand_id is not None and template.brand_id != brand_id:
                continue
            metadata = TemplateMetadata.from_template(template)
            metadata.modified_at = self._modified[template_id]
            result.append(metadata)

        result.sort(key=lambda m: m.modified_at or datetime.min, reverse=True)
        return result


# ===================
# 文件存储
# ===================


class JsonFileTemplateStore:
    """本地文件模板存储.

    每个模板保存为目录下的一个 <id>.template.json 文件。
    读写失败时记录日志并返回 False/None，由调用方决定如何提示。

    Example:
        >>> store = JsonFileTemplateStore("/tmp/templates")
        >>> store.save(template)
        >>> loaded = store.load(template.id)
    """

    def __init__(self, templates_dir: Optional[str | Path] = None) -> None:
        """初始化文件存储.

        Args:
            templates_dir: 模板存储目录，默认使用设置中的目录
        """
        if templates_dir:
            self._templates_dir = Path(templates_dir)
        else:
            from template_studio.core.config_manager import get_config

            self._templates_dir = get_config().settings.store_dir

        # 确保目录存在
        self._templates_dir.mkdir(parents=True, exist_ok=True)

    @property
    def templates_dir(self) -> Path:
        """模板目录."""
        return self._templates_dir

    def _get_template_path(self, template_id: str) -> Path:
        """获取模板文件路径."""
        return self._templates_dir / f"{template_id}{TEMPLATE_EXTENSION}"

    def _save_to_file(self, template: Template, file_path: Path) -> None:
        """保存模板到指定文件."""
        file_path.write_text(template.to_json(), encoding="utf-8")

    def _load_from_file(self, file_path: Path) -> Optional[Template]:
        """从文件加载模板."""
        try:
            return Template.from_json(file_path.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as e:
            logger.error(f"加载模板失败: {file_path}, 错误: {e}")
            return None

    # ========================
    # 公共方法
    # ========================

    def save(self, template: Template) -> bool:
        """保存模板.

        Args:
            template: 模板

        Returns:
            是否保存成功
        """
        try:
            self._save_to_file(template, self._get_template_path(template.id))
        except OSError as e:
            logger.error(f"保存模板失败: {e}")
            return False

        logger.info(f"模板已保存: {template.name} ({template.id})")
        return True

    def load(self, template_id: str) -> Optional[Template]:
        """加载模板.

        Args:
            template_id: 模板 ID

        Returns:
            模板，不存在返回 None
        """
        path = self._get_template_path(template_id)
        if not path.exists():
            logger.warning(f"模板不存在: {template_id}")
            return None
        return self._load_from_file(path)

    def delete(self, template_id: str) -> bool:
        """删除模板.

        Args:
            template_id: 模板 ID

        Returns:
            是否删除成功
        """
        path = self._get_template_path(template_id)
        if not path.exists():
            return False

        try:
            path.unlink()
        except OSError as e:
            logger.error(f"删除模板失败: {e}")
            return False

        logger.info(f"模板已删除: {template_id}")
        return True

    def list_templates(self, brand_id: Optional[str] = None) -> List[TemplateMetadata]:
        """获取模板列表.

        Args:
            brand_id: 只列出该品牌的模板，None 表示全部

        Returns:
            模板元数据列表（最近修改的在前）
        """
        result: List[TemplateMetadata] = []

        for file_path in self._templates_dir.glob(f"*{TEMPLATE_EXTENSION}"):
            template = self._load_from_file(file_path)
            if template is None:
                continue
            if brand_id is not None and template.brand_id != brand_id:
                continue
            metadata = TemplateMetadata.from_template(template, str(file_path))
            # 获取文件修改时间
            metadata.modified_at = datetime.fromtimestamp(file_path.stat().st_mtime)
            result.append(metadata)

        result.sort(key=lambda m: m.modified_at or datetime.min, reverse=True)
        return result

    def duplicate_template(self, template_id: str) -> Optional[Template]:
        """复制模板.

        Args:
            template_id: 原模板 ID

        Returns:
            新模板，失败返回 None
        """
        template = self.load(template_id)
        if template is None:
            return None

        new_template = template.clone()
        if not self.save(new_template):
            return None
        return new_template

    def export_template(self, template_id: str, export_path: str | Path) -> bool:
        """导出模板到指定路径.

        Args:
            template_id: 模板 ID
            export_path: 导出路径

        Returns:
            是否导出成功
        """
        template = self.load(template_id)
        if template is None:
            return False

        try:
            self._save_to_file(template, Path(export_path))
        except OSError as e:
            logger.error(f"导出模板失败: {e}")
            return False

        logger.info(f"模板已导出: {export_path}")
        return True

    def import_template(self, import_path: str | Path) -> Optional[Template]:
        """从指定路径导入模板.

        导入的模板会分配新 ID，避免与已有模板冲突。

        Args:
            import_path: 导入路径

        Returns:
            导入的模板
        """
        template = self._load_from_file(Path(import_path))
        if template is None:
            return None

        template = template.model_copy(update={"id": generate_template_id()})
        if self.save(template):
            return template
        return None
