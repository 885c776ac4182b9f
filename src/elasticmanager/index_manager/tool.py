"""索引生命周期管理工具类."""

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from ..backend import SearchBackend
from ..exceptions import RemoteNotFoundError
from ..guard import ReadOnlyGuard
from .models import IndexSettings, IndexState

logger = logging.getLogger(__name__)

T = TypeVar("T")


def best_effort(
    func: Callable[[], T], *expected: type[BaseException]
) -> T | None:
    """执行操作，只忽略预期的异常类型.

    Args:
        func: 待执行的无参函数
        *expected: 需要忽略的异常类型

    Returns:
        func 的返回值；发生预期异常时返回 None

    Example:
        >>> best_effort(manager.drop_index, RemoteNotFoundError)
    """
    try:
        return func()
    except expected as e:
        logger.warning(f"已忽略预期异常 {type(e).__name__}: {e}")
        return None


class IndexLifecycleManager:
    """索引生命周期管理器.

    负责创建、删除和重建管理器所绑定的索引，所有写操作先经过只读检查。

    Args:
        backend: 搜索后端
        index_settings: 管理器持有的索引配置（与管理器共享同一对象）
        guard: 只读保护
    """

    def __init__(
        self,
        backend: SearchBackend,
        index_settings: IndexSettings,
        guard: ReadOnlyGuard,
    ):
        self.backend = backend
        self.index_settings = index_settings
        self.guard = guard
        self.state = IndexState.UNKNOWN

    def get_index_name(self) -> str:
        return self.index_settings["index_name"]

    def create_index(self, strip_mappings: bool = False) -> Any:
        """创建索引.

        Args:
            strip_mappings: 为 True 时先从索引配置中移除 mappings，
                该修改会保留在管理器持有的配置中

        Raises:
            ForbiddenError: 只读时抛出
            RemoteFailureError: 创建失败时抛出
        """
        self.guard.check("Create index")

        if strip_mappings:
            self.index_settings.get("body", {}).pop("mappings", None)

        response = self.backend.index_create(self.index_settings)
        self.state = IndexState.PRESENT
        logger.info(f"索引 '{self.get_index_name()}' 创建成功")
        return response

    def drop_index(self) -> Any:
        """删除索引.

        Raises:
            ForbiddenError: 只读时抛出
            RemoteNotFoundError: 索引不存在时抛出
        """
        self.guard.check("Drop index")

        try:
            response = self.backend.index_delete(self.get_index_name())
        except RemoteNotFoundError:
            self.state = IndexState.ABSENT
            raise
        self.state = IndexState.ABSENT
        logger.info(f"索引 '{self.get_index_name()}' 删除成功")
        return response

    def drop_and_create_index(self, strip_mappings: bool = False) -> Any:
        """删除并重新创建索引.

        索引不存在导致的删除失败会被忽略，其余异常照常抛出。

        Args:
            strip_mappings: 是否在创建前移除 mappings
        """
        best_effort(self.drop_index, RemoteNotFoundError)
        return self.create_index(strip_mappings)

    def index_exists(self) -> bool:
        exists = self.backend.index_exists(self.get_index_name())
        self.state = IndexState.PRESENT if exists else IndexState.ABSENT
        return exists

    def clear_cache(self) -> Any:
        """清理索引缓存."""
        self.guard.check("Clear cache")

        return self.backend.index_clear_cache(self.get_index_name())

    def refresh(self, params: dict[str, Any] | None = None) -> Any:
        """刷新索引，未指定 index 时使用当前索引."""
        return self.backend.index_refresh(self._scoped_params(params))

    def flush(self, params: dict[str, Any] | None = None) -> Any:
        """flush 索引，未指定 index 时使用当前索引."""
        return self.backend.index_flush(self._scoped_params(params))

    def _scoped_params(self, params: dict[str, Any] | None) -> dict[str, Any]:
        scoped = {"index": self.get_index_name()}
        scoped.update(params or {})
        return scoped

    def get_version_number(self) -> str:
        """获取集群版本号."""
        return self.backend.server_info()["version"]["number"]
