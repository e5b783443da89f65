"""自定义异常类."""

from __future__ import annotations


class AppException(Exception):
    """引擎基础异常类.

    所有自定义异常都应继承此类。

    Attributes:
        message: 错误消息
        code: 错误代码
    """

    def __init__(self, message: str, code: str = "UNKNOWN") -> None:
        """初始化异常.

        Args:
            message: 错误消息
            code: 错误代码
        """
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        """返回异常字符串表示."""
        return f"[{self.code}] {self.message}"


# ===================
# 配置相关异常
# ===================
class ConfigError(AppException):
    """配置错误异常."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "CONFIG_ERROR")


# ===================
# 模板结构相关异常
# ===================
class TemplateError(AppException):
    """模板结构错误异常."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "TEMPLATE_ERROR")


class DuplicateIdError(TemplateError):
    """图层ID重复异常.

    重复ID意味着调用方存在缺陷，因此总是同步抛出。
    """

    def __init__(self, layer_id: str) -> None:
        self.layer_id = layer_id
        super().__init__(f"图层ID已存在: {layer_id}")


class InvalidLayerUpdateError(TemplateError):
    """图层更新内容无效异常（仅严格模式抛出）."""

    def __init__(self, layer_id: str, detail: str) -> None:
        self.layer_id = layer_id
        super().__init__(f"图层 {layer_id} 的更新无效: {detail}")


# ===================
# 引用未找到异常（仅严格模式抛出）
# ===================
class NotFoundError(AppException):
    """引用对象不存在异常."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "NOT_FOUND")


class TemplateNotFoundError(NotFoundError):
    """模板不存在异常."""

    def __init__(self, template_id: str | None = None) -> None:
        self.template_id = template_id
        if template_id:
            super().__init__(f"模板不存在: {template_id}")
        else:
            super().__init__("当前没有打开的模板")


class LayerNotFoundError(NotFoundError):
    """图层不存在异常."""

    def __init__(self, layer_id: str) -> None:
        self.layer_id = layer_id
        super().__init__(f"图层不存在: {layer_id}")


# ===================
# 存储相关异常
# ===================
class StorageError(AppException):
    """模板存储错误异常."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "STORAGE_ERROR")
