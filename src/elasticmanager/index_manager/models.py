"""索引生命周期数据模型定义模块."""

from enum import Enum
from typing import Any, TypedDict

from ..typing import MappingByType


class IndexBody(TypedDict, total=False):
    """创建索引时的请求体类型定义.

    Attributes:
        mappings: 按类型名组织的映射
        settings: 索引设置（number_of_shards、analysis 等）
        aliases: 索引别名
    """

    mappings: MappingByType
    settings: dict[str, Any]
    aliases: dict[str, Any]


class IndexSettings(TypedDict, total=False):
    """管理器持有的索引配置类型定义.

    Attributes:
        index_name: 索引名称
        body: 创建索引时的请求体
    """

    index_name: str
    body: IndexBody


class IndexState(Enum):
    """索引状态枚举.

    Attributes:
        UNKNOWN: 尚未观测
        ABSENT: 不存在
        PRESENT: 已存在
    """

    UNKNOWN = "unknown"
    ABSENT = "absent"
    PRESENT = "present"
