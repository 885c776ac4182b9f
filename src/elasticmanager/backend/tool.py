"""基于 elasticsearch-py 的后端实现."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from elasticsearch import Elasticsearch
from elasticsearch.exceptions import (
    ApiError,
    AuthorizationException,
    NotFoundError,
    TransportError,
)

from ..exceptions import (
    RemoteFailureError,
    RemoteForbiddenError,
    RemoteNotFoundError,
)
from ..typing import BulkBody, BulkEntry, MappingByType, MappingFragment

logger = logging.getLogger(__name__)

# 未指定类型时，无类型集群的映射以该名称返回
DEFAULT_DOC_TYPE = "_doc"

# 携带文档体的批量操作
_ACTIONS_WITH_BODY = ("index", "create", "update")

# consistency 参数在新版本中由 wait_for_active_shards 取代
_CONSISTENCY_TO_ACTIVE_SHARDS: dict[str, int | str] = {
    "one": 1,
    "all": "all",
}


def _response_body(response: Any) -> Any:
    """从 ObjectApiResponse 中取出原始字典，普通字典原样返回."""
    return getattr(response, "body", response)


def merge_typed_mappings(mappings: MappingByType) -> MappingFragment:
    """把按类型组织的映射合并为无类型集群使用的单一映射.

    各类型的 properties 合并，其余键后出现的覆盖先出现的。

    Args:
        mappings: 按类型名组织的映射

    Returns:
        合并后的映射
    """
    merged: MappingFragment = {}
    for fragment in mappings.values():
        for key, value in fragment.items():
            if key == "properties":
                merged.setdefault("properties", {}).update(value)
            else:
                merged[key] = value
    return merged


def project_mapping(live: Any, fragment: Any) -> Any:
    """从合并后的映射中取出某个类型片段定义过的部分.

    只保留 fragment 中出现的键，嵌套字典递归处理；片段中有而集群中没有的键
    不会出现在结果中。

    Args:
        live: 集群中的映射（或其中的一个值）
        fragment: 某个类型的期望映射片段（或其中的一个值）

    Returns:
        与 fragment 结构对应的集群映射
    """
    if not isinstance(live, dict) or not isinstance(fragment, dict):
        return live
    return {
        key: project_mapping(live[key], value)
        for key, value in fragment.items()
        if key in live
    }


class ElasticsearchBackend:
    """``SearchBackend`` 的 Elasticsearch 实现.

    面向无类型（7.x/8.x）集群：
    - 读取映射时，索引的唯一映射以每个请求的类型名返回
    - 写入映射时，每个类型片段依次通过 put_mapping 推送，由服务端合并
    - 未指定类型时，映射以 doc_type 为类型名返回
    - 批量请求头中的 ``_type`` 被移除，``_parent`` 转为 ``routing``，
      ``_ttl`` 已不受支持，丢弃并记录警告；legacy_metadata 为 True 时
      请求头原样发送

    所有 elasticsearch 异常统一转换为 ``RemoteFailureError`` 及其子类。

    Args:
        es_client: Elasticsearch 客户端实例
        doc_type: 未指定类型时使用的类型名，默认 "_doc"
        legacy_metadata: 是否原样发送旧版批量元数据，默认 False
    """

    def __init__(
        self,
        es_client: Elasticsearch,
        doc_type: str = DEFAULT_DOC_TYPE,
        legacy_metadata: bool = False,
    ):
        if es_client is None:
            raise ValueError("es_client 不能为 None")
        self.es_client = es_client
        self.doc_type = doc_type
        self.legacy_metadata = legacy_metadata

    @contextmanager
    def _translate_errors(self, action: str) -> Iterator[None]:
        """把 elasticsearch 异常转换为本库的远程异常."""
        try:
            yield
        except NotFoundError as e:
            raise RemoteNotFoundError(f"{action} 失败: {e}", status_code=404) from e
        except AuthorizationException as e:
            raise RemoteForbiddenError(
                f"{action} 被拒绝: {e}", status_code=403
            ) from e
        except ApiError as e:
            raise RemoteFailureError(
                f"{action} 失败: {e}", status_code=e.status_code
            ) from e
        except TransportError as e:
            raise RemoteFailureError(f"{action} 失败: {e}") from e

    def index_create(self, settings: dict[str, Any]) -> Any:
        """创建索引.

        Args:
            settings: 索引配置，格式为 ``{"index_name": ..., "body": {...}}``，
                body 中的 mappings 按类型组织
        """
        index_name = settings["index_name"]
        body = dict(settings.get("body") or {})
        if "mappings" in body:
            body["mappings"] = merge_typed_mappings(body["mappings"])

        with self._translate_errors(f"创建索引 '{index_name}'"):
            response = self.es_client.indices.create(index=index_name, body=body)
        return _response_body(response)

    def index_delete(self, name: str) -> Any:
        with self._translate_errors(f"删除索引 '{name}'"):
            response = self.es_client.indices.delete(index=name)
        return _response_body(response)

    def index_exists(self, name: str) -> bool:
        with self._translate_errors(f"检查索引 '{name}' 是否存在"):
            return bool(self.es_client.indices.exists(index=name))

    def index_refresh(self, params: dict[str, Any]) -> Any:
        with self._translate_errors("刷新索引"):
            response = self.es_client.indices.refresh(**params)
        return _response_body(response)

    def index_flush(self, params: dict[str, Any]) -> Any:
        with self._translate_errors("flush 索引"):
            response = self.es_client.indices.flush(**params)
        return _response_body(response)

    def index_clear_cache(self, name: str) -> Any:
        with self._translate_errors(f"清理索引 '{name}' 缓存"):
            response = self.es_client.indices.clear_cache(index=name)
        return _response_body(response)

    def get_mapping(
        self,
        name: str,
        types: list[str],
        desired: MappingByType | None = None,
    ) -> MappingByType:
        """获取索引当前的映射.

        无类型集群只有一个映射。提供 desired 时，每个类型只取该类型片段中
        出现的部分，使其可以与对应的期望片段直接比较；否则每个类型都得到
        完整映射。

        Args:
            name: 索引名称
            types: 需要的类型名列表
            desired: 按类型名组织的期望映射

        Returns:
            按类型名组织的映射；索引没有映射时返回空字典
        """
        with self._translate_errors(f"获取索引 '{name}' 的映射"):
            response = _response_body(self.es_client.indices.get_mapping(index=name))

        # 通过别名访问时，返回的键是真实索引名
        index_data = response.get(name)
        if index_data is None and response:
            index_data = next(iter(response.values()))
        mappings = (index_data or {}).get("mappings") or {}
        if not mappings:
            return {}

        type_names = list(types) or [self.doc_type]
        if not desired:
            return {type_name: mappings for type_name in type_names}
        return {
            type_name: project_mapping(mappings, desired[type_name])
            if type_name in desired
            else mappings
            for type_name in type_names
        }

    def put_mapping(self, name: str, types: list[str], mapping: MappingByType) -> Any:
        """推送映射.

        Args:
            name: 索引名称
            types: 需要推送的类型名列表，为空时推送 mapping 中的全部类型
            mapping: 按类型名组织的映射
        """
        responses = []
        for type_name, fragment in mapping.items():
            if types and type_name not in types:
                continue
            with self._translate_errors(f"更新索引 '{name}' 的类型 '{type_name}' 映射"):
                response = self.es_client.indices.put_mapping(index=name, body=fragment)
            responses.append(_response_body(response))
        return responses

    def _translate_header(self, header: BulkEntry) -> BulkEntry:
        """把批量操作头中的旧版元数据转换为当前版本可接受的形式."""
        operation, metadata = next(iter(header.items()))
        translated = {k: v for k, v in metadata.items() if k not in ("_type", "_ttl")}
        if "_ttl" in metadata:
            logger.warning(
                f"集群不支持 _ttl，已忽略: {operation} {metadata.get('_id')}"
            )
        if "_parent" in translated:
            translated["routing"] = translated.pop("_parent")
        return {operation: translated}

    def _translate_entries(self, entries: BulkBody) -> BulkBody:
        operations: BulkBody = []
        expect_body = False
        for entry in entries:
            if expect_body:
                operations.append(entry)
                expect_body = False
                continue
            operations.append(
                entry if self.legacy_metadata else self._translate_header(entry)
            )
            expect_body = next(iter(entry)) in _ACTIONS_WITH_BODY
        return operations

    def _translate_params(self, params: dict[str, Any]) -> dict[str, Any]:
        kwargs = dict(params)
        if "consistency" in kwargs:
            consistency = kwargs.pop("consistency")
            if consistency in _CONSISTENCY_TO_ACTIVE_SHARDS:
                kwargs.setdefault(
                    "wait_for_active_shards", _CONSISTENCY_TO_ACTIVE_SHARDS[consistency]
                )
            else:
                logger.warning(f"无法转换的 consistency 参数，已忽略: {consistency}")
        if "replication" in kwargs:
            logger.warning(
                f"集群不支持 replication 参数，已忽略: {kwargs.pop('replication')}"
            )
        return kwargs

    def bulk_execute(self, entries: BulkBody, params: dict[str, Any]) -> Any:
        """执行批量请求.

        Args:
            entries: 操作头与文档体交替排列的批量请求体
            params: 批量请求参数（consistency、refresh、replication 等）

        Returns:
            批量响应字典
        """
        operations = self._translate_entries(entries)
        kwargs = self._translate_params(params)
        with self._translate_errors("批量操作"):
            response = self.es_client.bulk(operations=operations, **kwargs)
        return _response_body(response)

    def server_info(self) -> dict[str, Any]:
        with self._translate_errors("获取集群信息"):
            return _response_body(self.es_client.info())
