"""批量请求构建工具类."""

import logging
import threading
from collections.abc import Mapping
from typing import Any

from ..typing import BulkBody, BulkEntry, FieldsDict
from .exceptions import InvalidBulkOperationError
from .models import RESERVED_FIELDS, BulkAction, BulkParams

logger = logging.getLogger(__name__)


def resolve_action(operation: str | BulkAction) -> BulkAction:
    if isinstance(operation, BulkAction):
        return operation
    try:
        return BulkAction(operation)
    except ValueError:
        raise InvalidBulkOperationError(
            f"Wrong bulk operation selected: {operation!r}，"
            f"可选值为 {[action.value for action in BulkAction]}"
        ) from None


def build_metadata(
    index_name: str, type_name: str, query: Mapping[str, Any]
) -> dict[str, Any]:
    """构建批量操作头的元数据.

    ``_id``、``_ttl``、``_parent`` 只有在 query 中存在且不为 None 时才写入，
    因此 ``_ttl`` 为 0 之类的值会被保留。

    Args:
        index_name: 索引名称
        type_name: 类型名称
        query: 调用方提供的字段

    Returns:
        元数据字典
    """
    metadata: dict[str, Any] = {"_index": index_name, "_type": type_name}
    for key in RESERVED_FIELDS:
        if query.get(key) is not None:
            metadata[key] = query[key]
    return metadata


class BulkOperationBuilder:
    """批量请求构建器.

    将 index、create、update、delete 操作依次追加到一个批量请求体中，
    操作头与文档体成对相邻，顺序与调用顺序一致。

    Args:
        index_name: 操作头中写入的索引名称
    """

    def __init__(self, index_name: str):
        self.index_name = index_name
        self.lock = threading.RLock()
        self._entries: BulkBody = []
        self._params: BulkParams = {}

    def enqueue(
        self,
        operation: str | BulkAction,
        type_name: str,
        query: Mapping[str, Any] | None = None,
    ) -> None:
        """追加一个批量操作.

        Args:
            operation: 操作类型，index、create、update 或 delete
            type_name: 类型名称
            query: 文档字段，可包含 ``_id``、``_ttl``、``_parent`` 保留字段

        Raises:
            InvalidBulkOperationError: 操作类型不受支持时抛出，批量请求体保持不变

        Example:
            >>> builder = BulkOperationBuilder("catalog")
            >>> builder.enqueue("update", "product", {"_id": "42", "price": 10})
            >>> builder.entries
            [{'update': {'_index': 'catalog', '_type': 'product', '_id': '42'}}, {'doc': {'price': 10}}]
        """
        action = resolve_action(operation)
        query = query or {}

        header: BulkEntry = {
            action.value: build_metadata(self.index_name, type_name, query)
        }
        payload: FieldsDict = {
            k: v for k, v in query.items() if k not in RESERVED_FIELDS
        }

        with self.lock:
            self._entries.append(header)
            if action in (BulkAction.INDEX, BulkAction.CREATE):
                self._entries.append(payload)
            elif action == BulkAction.UPDATE:
                self._entries.append({"doc": payload})
            # delete 操作不需要文档体

        logger.debug(f"追加批量操作: {header}")

    def set_params(self, params: BulkParams) -> None:
        """替换批量请求参数（不合并）."""
        self._params = dict(params)

    @property
    def params(self) -> BulkParams:
        return dict(self._params)

    @property
    def entries(self) -> BulkBody:
        """批量请求体的副本."""
        with self.lock:
            return list(self._entries)

    @property
    def operation_count(self) -> int:
        """已追加的操作数."""
        with self.lock:
            count = 0
            expect_body = False
            for entry in self._entries:
                if expect_body:
                    expect_body = False
                    continue
                count += 1
                expect_body = next(iter(entry)) != BulkAction.DELETE.value
            return count

    def clear(self) -> None:
        with self.lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self.lock:
            return len(self._entries)

    def __bool__(self) -> bool:
        return len(self) > 0
