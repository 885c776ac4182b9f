"""映射同步模块.

比较索引配置中定义的映射与集群中的映射，只推送不一致的类型。

示例用法:
    >>> from elasticmanager.mapping import compute_mapping_diff
    >>> desired = {"product": {"properties": {"title": {"type": "text"}}}}
    >>> compute_mapping_diff(desired, {})
    {'product': {'properties': {'title': {'type': 'text'}}}}
"""

from .models import MappingUpdateResult
from .tool import MappingSynchronizer, compute_mapping_diff

__all__ = [
    "MappingUpdateResult",
    "MappingSynchronizer",
    "compute_mapping_diff",
]
