"""映射同步工具类."""

import logging
from collections.abc import Iterable
from typing import Any

from ..backend import SearchBackend
from ..guard import ReadOnlyGuard
from ..typing import MappingByType
from .models import MappingUpdateResult

logger = logging.getLogger(__name__)


def compute_mapping_diff(desired: MappingByType, live: MappingByType) -> MappingByType:
    """计算需要推送的映射差异.

    按类型整体比较：只要类型片段中任意字段不同，或集群中不存在该类型，
    整个类型片段都会保留在结果中。

    Args:
        desired: 期望的映射
        live: 集群中当前的映射

    Returns:
        与集群不一致的类型映射
    """
    return {
        type_name: fragment
        for type_name, fragment in desired.items()
        if type_name not in live or live[type_name] != fragment
    }


class MappingSynchronizer:
    """映射同步器.

    比较索引配置中定义的映射与集群中的映射，只推送不一致的类型。

    Args:
        backend: 搜索后端
        index_settings: 管理器持有的索引配置（与管理器共享同一对象）
        guard: 只读保护
    """

    def __init__(
        self,
        backend: SearchBackend,
        index_settings: dict[str, Any],
        guard: ReadOnlyGuard,
    ):
        self.backend = backend
        self.index_settings = index_settings
        self.guard = guard

    @property
    def index_name(self) -> str:
        return self.index_settings["index_name"]

    def get_mapping(self, types: Iterable[str] | None = None) -> MappingByType:
        """获取配置中定义的映射.

        Args:
            types: 类型名列表，为空时返回全部类型

        Returns:
            按类型名组织的映射，未定义的类型被忽略

        Raises:
            TypeError: types 是单个字符串时抛出
        """
        mappings: MappingByType = self.index_settings.get("body", {}).get("mappings") or {}
        if isinstance(types, str):
            raise TypeError(f"types 必须是类型名列表，而不是字符串: {types!r}")
        types = list(types or [])
        if not types:
            return dict(mappings)
        return {name: mappings[name] for name in types if name in mappings}

    def get_mapping_from_index(self, desired: MappingByType) -> MappingByType:
        """获取集群中索引当前的映射，类型范围与 desired 一致."""
        return self.backend.get_mapping(self.index_name, list(desired), desired=desired)

    def get_mapping_diff(self, types: Iterable[str] | None = None) -> MappingByType:
        """计算配置与集群之间的映射差异，不做任何写入.

        配置中没有对应映射时返回空字典且不访问集群。
        """
        desired = self.get_mapping(types)
        if not desired:
            return {}
        return compute_mapping_diff(desired, self.get_mapping_from_index(desired))

    def update_mapping(
        self, types: Iterable[str] | None = None
    ) -> MappingUpdateResult:
        """把不一致的类型映射推送到集群.

        Args:
            types: 类型名列表，为空时处理全部已定义类型

        Returns:
            NOTHING_TO_UPDATE（0）、UP_TO_DATE（-1）或 UPDATED（1）

        Raises:
            ForbiddenError: 只读时抛出
            RemoteFailureError: 读取或推送映射失败时抛出
        """
        self.guard.check("Create types")

        desired = self.get_mapping(types)
        if not desired:
            return MappingUpdateResult.NOTHING_TO_UPDATE

        diff = compute_mapping_diff(desired, self.get_mapping_from_index(desired))
        if not diff:
            logger.info(f"索引 '{self.index_name}' 的映射已是最新")
            return MappingUpdateResult.UP_TO_DATE

        self.backend.put_mapping(self.index_name, list(diff), diff)
        logger.info(f"索引 '{self.index_name}' 已更新类型映射: {list(diff)}")
        return MappingUpdateResult.UPDATED
