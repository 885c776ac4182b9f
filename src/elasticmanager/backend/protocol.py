"""搜索后端接口定义模块."""

from typing import Any, Protocol, runtime_checkable

from ..typing import BulkBody, MappingByType


@runtime_checkable
class SearchBackend(Protocol):
    """管理器使用的后端能力集合.

    所有方法均为同步调用，失败时抛出 ``RemoteFailureError`` 及其子类。
    """

    def index_create(self, settings: dict[str, Any]) -> Any: ...

    def index_delete(self, name: str) -> Any: ...

    def index_exists(self, name: str) -> bool: ...

    def index_refresh(self, params: dict[str, Any]) -> Any: ...

    def index_flush(self, params: dict[str, Any]) -> Any: ...

    def index_clear_cache(self, name: str) -> Any: ...

    def get_mapping(
        self,
        name: str,
        types: list[str],
        desired: MappingByType | None = None,
    ) -> MappingByType: ...

    def put_mapping(
        self, name: str, types: list[str], mapping: MappingByType
    ) -> Any: ...

    def bulk_execute(self, entries: BulkBody, params: dict[str, Any]) -> Any: ...

    def server_info(self) -> dict[str, Any]: ...
