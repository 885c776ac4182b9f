"""映射同步数据模型定义模块."""

from enum import IntEnum


class MappingUpdateResult(IntEnum):
    """映射同步结果.

    Attributes:
        NOTHING_TO_UPDATE: 请求的类型没有定义映射，未访问集群
        UP_TO_DATE: 集群中的映射与定义一致，未推送
        UPDATED: 至少一个类型不一致，差异部分已推送
    """

    UP_TO_DATE = -1
    NOTHING_TO_UPDATE = 0
    UPDATED = 1
