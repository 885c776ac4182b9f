"""文档转换模块.

把业务文档对象转换为批量请求可用的字段字典。
"""

import dataclasses
from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from .typing import FieldsDict


@runtime_checkable
class DocumentConverter(Protocol):
    """文档转换器接口."""

    def convert_to_dict(self, document: Any) -> FieldsDict: ...

    def type_name(self, document: Any) -> str: ...


class DefaultDocumentConverter:
    """默认文档转换器.

    支持以下文档形式：
    - Mapping：复制为普通字典
    - dataclass 实例：通过 ``dataclasses.asdict`` 转换
    - 提供 ``to_dict()`` 方法的对象

    类型名依次取 ``__doc_type__``、``doc_type`` 属性，否则使用小写类名。
    """

    def convert_to_dict(self, document: Any) -> FieldsDict:
        if isinstance(document, Mapping):
            return dict(document)
        if dataclasses.is_dataclass(document) and not isinstance(document, type):
            return dataclasses.asdict(document)
        to_dict = getattr(document, "to_dict", None)
        if callable(to_dict):
            return dict(to_dict())
        raise TypeError(f"无法转换的文档类型: {type(document).__name__}")

    def type_name(self, document: Any) -> str:
        for attr in ("__doc_type__", "doc_type"):
            value = getattr(document, attr, None)
            if isinstance(value, str) and value:
                return value
        return type(document).__name__.lower()
