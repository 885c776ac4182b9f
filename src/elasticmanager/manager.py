"""管理器核心类."""

import logging
from typing import Any

from .backend import SearchBackend
from .bulk import (
    BulkAction,
    BulkOperationBuilder,
    BulkParams,
    BulkResult,
    InvalidBulkOperationError,
    resolve_action,
)
from .converter import DefaultDocumentConverter, DocumentConverter
from .events import CommitEvent, CommitNotifier
from .guard import ReadOnlyGuard
from .index_manager import IndexLifecycleManager, IndexSettings
from .mapping import MappingSynchronizer, MappingUpdateResult
from .typing import BulkBody, MappingByType

logger = logging.getLogger(__name__)


class Manager:
    """Elasticsearch 管理器.

    绑定一个索引，统一提供文档持久化、批量写入、索引生命周期管理和
    映射同步功能。只读模式下所有写操作都会被拒绝。

    Args:
        backend: 搜索后端
        index_settings: 索引配置，格式为 ``{"index_name": ..., "body": {...}}``，
            管理器在整个生命周期内持有该对象
        converter: 文档转换器，默认为 DefaultDocumentConverter
        commit_notifier: 批量提交成功后的回调
        read_only: 是否只读，默认为 False

    Example:
        >>> manager = Manager(backend, {"index_name": "catalog", "body": {}})
        >>> manager.bulk("index", "product", {"_id": "1", "title": "Desk"})
        >>> manager.bulk("update", "product", {"_id": "42", "price": 10})
        >>> result = manager.commit()
        >>> print(f"成功: {result.success}, 失败: {result.failed}")
    """

    def __init__(
        self,
        backend: SearchBackend,
        index_settings: IndexSettings,
        converter: DocumentConverter | None = None,
        commit_notifier: CommitNotifier | None = None,
        read_only: bool = False,
    ):
        if backend is None:
            raise ValueError("backend 不能为 None")
        if not index_settings.get("index_name"):
            raise ValueError("index_settings 中缺少 index_name")

        self._backend = backend
        self._index_settings = index_settings
        self._converter = converter or DefaultDocumentConverter()
        self._commit_notifier = commit_notifier
        self._guard = ReadOnlyGuard(read_only)
        self._bulk = BulkOperationBuilder(self.get_index_name())
        self._lifecycle = IndexLifecycleManager(backend, index_settings, self._guard)
        self._mapping = MappingSynchronizer(backend, index_settings, self._guard)
        logger.info(
            f"初始化管理器: index={self.get_index_name()}, read_only={read_only}"
        )

    def get_client(self) -> SearchBackend:
        return self._backend

    @property
    def index_settings(self) -> IndexSettings:
        return self._index_settings

    def get_index_name(self) -> str:
        return self._index_settings["index_name"]

    # ============================================================
    # 文档与批量操作
    # ============================================================

    def persist(
        self,
        document: Any,
        type_name: str | None = None,
        operation: str | BulkAction = BulkAction.INDEX,
    ) -> None:
        """把文档加入下一次提交.

        Args:
            document: 文档对象，由文档转换器转换为字段字典
            type_name: 类型名称，默认由文档转换器给出
            operation: index 或 create，默认为 index

        Raises:
            ForbiddenError: 只读时抛出
            InvalidBulkOperationError: operation 不是 index 或 create 时抛出
        """
        self._guard.check("Bulk")

        action = resolve_action(operation)
        if action not in (BulkAction.INDEX, BulkAction.CREATE):
            raise InvalidBulkOperationError(
                f"persist 只支持 index 或 create 操作: {action.value}"
            )

        fields = self._converter.convert_to_dict(document)
        self.bulk(action, type_name or self._converter.type_name(document), fields)

    def bulk(
        self,
        operation: str | BulkAction,
        type_name: str,
        query: dict[str, Any] | None = None,
    ) -> None:
        """追加一个批量操作.

        Args:
            operation: index、create、update 或 delete
            type_name: 类型名称
            query: 文档字段，可包含 ``_id``、``_ttl``、``_parent``

        Raises:
            ForbiddenError: 只读时抛出
            InvalidBulkOperationError: 操作类型不受支持时抛出
        """
        self._guard.check("Bulk")

        self._bulk.enqueue(operation, type_name, query)

    def set_bulk_params(self, params: BulkParams) -> None:
        """替换批量请求参数.

        Args:
            params: 可用键：
                consistency: 写一致性级别
                refresh: 执行后是否刷新索引
                replication: 复制方式
        """
        self._bulk.set_params(params)

    @property
    def bulk_entries(self) -> BulkBody:
        return self._bulk.entries

    def commit(self) -> BulkResult:
        """执行已累积的批量操作.

        无论成功与否，执行后都会清空批量请求体。批量请求体为空时不访问集群。

        Returns:
            批量提交结果，单条操作失败记录在结果中而不抛出

        Raises:
            RemoteFailureError: 批量请求失败时抛出
        """
        with self._bulk.lock:
            entries = self._bulk.entries
            if not entries:
                logger.debug("批量请求体为空，跳过提交")
                return BulkResult()

            params = self._bulk.params
            try:
                response = self._backend.bulk_execute(entries, params)
                result = BulkResult.from_response(response or {})
                if self._commit_notifier is not None:
                    self._commit_notifier(
                        CommitEvent(entries=entries, params=params, result=result)
                    )
            finally:
                self._bulk.clear()

        if result.failed > 0:
            logger.warning(
                f"批量提交完成，成功 {result.success}, 失败 {result.failed}: "
                f"{result.get_error_summary()}"
            )
        else:
            logger.info(f"批量提交完成: 全部成功 ({result.success})")
        return result

    # ============================================================
    # 索引管理
    # ============================================================

    def refresh(self, params: dict[str, Any] | None = None) -> Any:
        return self._lifecycle.refresh(params)

    def flush(self, params: dict[str, Any] | None = None) -> Any:
        return self._lifecycle.flush(params)

    def create_index(self, no_mapping: bool = False) -> Any:
        """创建索引.

        Args:
            no_mapping: 为 True 时创建不带 mappings 的索引
        """
        return self._lifecycle.create_index(no_mapping)

    def drop_index(self) -> Any:
        return self._lifecycle.drop_index()

    def drop_and_create_index(self, no_mapping: bool = False) -> Any:
        """删除（若存在）并重新创建索引."""
        return self._lifecycle.drop_and_create_index(no_mapping)

    def index_exists(self) -> bool:
        return self._lifecycle.index_exists()

    def get_version_number(self) -> str:
        return self._lifecycle.get_version_number()

    def clear_cache(self) -> Any:
        return self._lifecycle.clear_cache()

    # ============================================================
    # 映射同步
    # ============================================================

    def update_mapping(self, types: list[str] | None = None) -> MappingUpdateResult:
        """把配置中与集群不一致的类型映射推送到集群.

        Args:
            types: 类型名列表，为空时处理全部已定义类型

        Returns:
            0 表示没有定义映射，-1 表示已是最新，1 表示已推送差异
        """
        return self._mapping.update_mapping(types)

    def get_mapping_diff(self, types: list[str] | None = None) -> MappingByType:
        return self._mapping.get_mapping_diff(types)

    # ============================================================
    # 只读模式
    # ============================================================

    @property
    def read_only(self) -> bool:
        return self._guard.read_only

    def set_read_only(self, read_only: bool) -> None:
        self._guard.set_read_only(read_only)

    def is_read_only(self, message: str = "") -> None:
        """只读时抛出 ForbiddenError.

        Args:
            message: 被拒绝的操作名称
        """
        self._guard.check(message)
