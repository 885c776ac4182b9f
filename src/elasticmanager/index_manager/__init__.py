"""索引生命周期模块.

该模块负责管理器绑定索引的生命周期，包括：
- 索引创建（可选移除 mappings）与删除
- 删除并重建索引（忽略索引不存在）
- 缓存清理、refresh、flush

示例用法:
    >>> from elasticmanager.guard import ReadOnlyGuard
    >>> from elasticmanager.index_manager import IndexLifecycleManager
    >>> lifecycle = IndexLifecycleManager(
    ...     backend, {"index_name": "catalog", "body": {}}, ReadOnlyGuard()
    ... )
    >>> lifecycle.drop_and_create_index()
"""

from .models import IndexBody, IndexSettings, IndexState
from .tool import IndexLifecycleManager, best_effort

__all__ = [
    "IndexLifecycleManager",
    "best_effort",
    "IndexBody",
    "IndexSettings",
    "IndexState",
]
