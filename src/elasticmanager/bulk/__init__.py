"""批量操作模块.

该模块负责把多种写操作累积为一个批量请求，包括：
- index、create、update、delete 四种操作
- 操作头元数据（_index、_type、_id、_ttl、_parent）的稀疏构建
- 批量请求参数（consistency、refresh、replication）
- 批量响应解析

示例用法:
    >>> from elasticmanager.bulk import BulkOperationBuilder
    >>> builder = BulkOperationBuilder("catalog")
    >>> builder.enqueue("index", "product", {"_id": "1", "title": "Desk"})
    >>> builder.enqueue("delete", "product", {"_id": "2"})
    >>> len(builder)
    3
"""

from .exceptions import BulkOperationError, InvalidBulkOperationError
from .models import (
    RESERVED_FIELDS,
    BulkAction,
    BulkErrorItem,
    BulkParams,
    BulkResult,
)
from .tool import BulkOperationBuilder, build_metadata, resolve_action

__all__ = [
    "BulkAction",
    "BulkErrorItem",
    "BulkParams",
    "BulkResult",
    "RESERVED_FIELDS",
    "BulkOperationBuilder",
    "build_metadata",
    "resolve_action",
    "BulkOperationError",
    "InvalidBulkOperationError",
]
