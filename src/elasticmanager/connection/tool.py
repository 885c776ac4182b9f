"""管理器工厂模块.

按配置创建 Elasticsearch 客户端与 Manager，并负责客户端的生命周期。

使用示例:
    from elasticmanager.connection import ManagerFactory

    config = {
        "connections": {"default": {"hosts": ["http://localhost:9200"]}},
        "managers": {
            "default": {
                "index_name": "catalog",
                "mappings": {"product": {"properties": {"title": {"type": "text"}}}},
            },
        },
    }

    with ManagerFactory.from_dict(config) as factory:
        manager = factory.get_manager()
        manager.drop_and_create_index()
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from elasticsearch import Elasticsearch

from ..backend import ElasticsearchBackend
from ..converter import DocumentConverter
from ..events import CommitNotifier
from ..manager import Manager
from .exceptions import ConnectionConfigError, ManagerNotFoundError
from .models import ClusterConfig, ConnectionConfig, ManagerConfig

logger = logging.getLogger(__name__)


class ManagerFactory:
    """Manager 工厂.

    每个连接名称对应一个惰性创建并缓存的 Elasticsearch 客户端，
    每个管理器名称对应一个缓存的 Manager。同一连接上的多个管理器共享客户端，
    但各自持有独立的索引配置、批量请求体和只读状态。

    Attributes:
        _connections: 连接名称到集群配置的字典
        _managers: 管理器名称到管理器配置的字典
        _connection_config: 客户端传输参数
        _clients: 按连接名称缓存的客户端
        _instances: 按管理器名称缓存的 Manager
    """

    def __init__(
        self,
        connections: dict[str, ClusterConfig],
        managers: dict[str, ManagerConfig],
        connection_config: ConnectionConfig | None = None,
        converter: DocumentConverter | None = None,
        commit_notifier: CommitNotifier | None = None,
    ) -> None:
        """初始化管理器工厂.

        Args:
            connections: 连接名称到集群配置的字典，不可为空
            managers: 管理器名称到管理器配置的字典
            connection_config: 客户端传输参数，默认使用 ConnectionConfig 的默认值
            converter: 所有管理器共用的文档转换器
            commit_notifier: 所有管理器共用的提交回调

        Raises:
            ConnectionConfigError: 当 connections 为空或管理器引用了未定义的连接时抛出
        """
        if not connections:
            raise ConnectionConfigError("connections 不能为空，请提供至少一个连接配置")
        for name, manager_config in managers.items():
            if manager_config.connection not in connections:
                raise ConnectionConfigError(
                    f"管理器 '{name}' 引用了未定义的连接 '{manager_config.connection}'"
                )

        self._connections = connections
        self._managers = managers
        self._connection_config = connection_config or ConnectionConfig()
        self._converter = converter
        self._commit_notifier = commit_notifier
        self._clients: dict[str, Elasticsearch] = {}
        self._instances: dict[str, Manager] = {}

    @classmethod
    def from_dict(cls, config: Mapping[str, Any], **kwargs: Any) -> ManagerFactory:
        """从普通字典构建工厂.

        Args:
            config: 格式为 ``{"connections": {...}, "managers": {...},
                "transport": {...}}`` 的配置，transport 可选
            **kwargs: 透传给构造函数的其他参数

        Raises:
            ConnectionConfigError: 配置格式不合法时抛出
        """
        try:
            connections = {
                name: ClusterConfig(**options)
                for name, options in (config.get("connections") or {}).items()
            }
            managers = {
                name: ManagerConfig(**options)
                for name, options in (config.get("managers") or {}).items()
            }
            transport = config.get("transport")
            connection_config = ConnectionConfig(**transport) if transport else None
        except TypeError as e:
            raise ConnectionConfigError(f"配置格式不合法: {e}") from e

        return cls(connections, managers, connection_config=connection_config, **kwargs)

    def _create_client(self, cluster_config: ClusterConfig) -> Elasticsearch:
        """根据集群配置创建 Elasticsearch 客户端实例."""
        kwargs: dict[str, Any] = {
            "hosts": cluster_config.hosts,
            "max_retries": self._connection_config.max_retries,
            "retry_on_timeout": self._connection_config.retry_on_timeout,
            "request_timeout": self._connection_config.request_timeout,
            "http_compress": self._connection_config.http_compress,
            "sniff_on_start": self._connection_config.sniff_on_start,
            "sniff_on_node_failure": self._connection_config.sniff_on_node_failure,
            "min_delay_between_sniffing": (
                self._connection_config.min_delay_between_sniffing
            ),
        }

        # Basic Auth 认证
        if cluster_config.username and cluster_config.password:
            kwargs["basic_auth"] = (
                cluster_config.username,
                cluster_config.password,
            )

        # API Key 认证
        if cluster_config.api_key:
            kwargs["api_key"] = cluster_config.api_key

        # Bearer Token 认证
        if cluster_config.bearer_token:
            kwargs["bearer_auth"] = cluster_config.bearer_token

        # SSL/TLS 配置
        if cluster_config.ca_certs:
            kwargs["ca_certs"] = cluster_config.ca_certs
        kwargs["verify_certs"] = cluster_config.verify_certs

        return Elasticsearch(**kwargs)

    def get_client(self, connection: str = "default") -> Elasticsearch:
        """获取指定连接的客户端（惰性创建并缓存）.

        Raises:
            ManagerNotFoundError: 连接名称未配置时抛出
        """
        if connection in self._clients:
            return self._clients[connection]

        try:
            cluster_config = self._connections[connection]
        except KeyError:
            raise ManagerNotFoundError(f"未找到名为 '{connection}' 的连接配置") from None

        client = self._create_client(cluster_config)
        self._clients[connection] = client
        logger.info(f"创建连接 '{connection}': hosts={cluster_config.hosts}")
        return client

    def get_manager(self, name: str = "default") -> Manager:
        """获取指定名称的 Manager（首次调用时创建并缓存）.

        Raises:
            ManagerNotFoundError: 管理器名称未配置时抛出
        """
        if name in self._instances:
            return self._instances[name]

        try:
            manager_config = self._managers[name]
        except KeyError:
            raise ManagerNotFoundError(f"未找到名为 '{name}' 的管理器配置") from None

        backend = ElasticsearchBackend(
            self.get_client(manager_config.connection),
            doc_type=manager_config.doc_type,
            legacy_metadata=manager_config.legacy_metadata,
        )
        manager = Manager(
            backend,
            manager_config.to_index_settings(),
            converter=self._converter,
            commit_notifier=self._commit_notifier,
            read_only=manager_config.read_only,
        )
        self._instances[name] = manager
        return manager

    @property
    def manager_names(self) -> list[str]:
        return list(self._managers)

    # ============================================================
    # 生命周期管理
    # ============================================================

    def __enter__(self) -> ManagerFactory:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """上下文管理器退出，自动关闭所有客户端."""
        self.close_all()

    def close_all(self) -> None:
        """关闭所有已创建的客户端并清空缓存的客户端与管理器."""
        for name, client in self._clients.items():
            try:
                client.close()
            except Exception as e:
                logger.warning(f"关闭连接 '{name}' 失败: {e}")
        self._clients.clear()
        self._instances.clear()
