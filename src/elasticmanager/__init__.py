"""Elastic Manager - Elasticsearch 索引与批量写入管理库.

在应用代码与 Elasticsearch 集群之间提供一层管理器，负责文档持久化、
批量写入、索引生命周期和映射同步，并支持只读模式。

主要功能:
    - Manager: 绑定单个索引的管理器
    - BulkOperationBuilder: 构建批量请求
    - MappingSynchronizer: 只推送与集群不一致的映射
    - IndexLifecycleManager: 创建、删除和重建索引
    - ManagerFactory: 按配置创建管理器

使用示例:
    from elasticmanager import ManagerFactory

    factory = ManagerFactory.from_dict(config)
    manager = factory.get_manager()
    manager.bulk("update", "product", {"_id": "42", "price": 10})
    manager.commit()
"""

__version__ = "0.1.0"

# 导出核心组件
from elasticmanager.backend import ElasticsearchBackend, SearchBackend
from elasticmanager.bulk import (
    BulkAction,
    BulkErrorItem,
    BulkOperationBuilder,
    BulkParams,
    BulkResult,
)
from elasticmanager.connection import (
    ClusterConfig,
    ConnectionConfig,
    ManagerConfig,
    ManagerFactory,
)
from elasticmanager.converter import DefaultDocumentConverter, DocumentConverter
from elasticmanager.events import CommitEvent, CommitNotifier
from elasticmanager.guard import ReadOnlyGuard
from elasticmanager.index_manager import IndexLifecycleManager, IndexSettings, IndexState
from elasticmanager.manager import Manager
from elasticmanager.mapping import (
    MappingSynchronizer,
    MappingUpdateResult,
    compute_mapping_diff,
)

# 导出异常
from elasticmanager.bulk.exceptions import BulkOperationError, InvalidBulkOperationError
from elasticmanager.connection.exceptions import (
    ConnectionConfigError,
    ManagerNotFoundError,
)
from elasticmanager.exceptions import (
    ElasticManagerError,
    ForbiddenError,
    RemoteFailureError,
    RemoteForbiddenError,
    RemoteNotFoundError,
)

__all__ = [
    # 版本
    "__version__",
    # 管理器
    "Manager",
    "ManagerFactory",
    # 配置
    "ClusterConfig",
    "ConnectionConfig",
    "ManagerConfig",
    "IndexSettings",
    # 组件
    "ReadOnlyGuard",
    "BulkOperationBuilder",
    "MappingSynchronizer",
    "IndexLifecycleManager",
    "compute_mapping_diff",
    # 后端与协作者
    "SearchBackend",
    "ElasticsearchBackend",
    "DocumentConverter",
    "DefaultDocumentConverter",
    "CommitEvent",
    "CommitNotifier",
    # 模型与枚举
    "BulkAction",
    "BulkParams",
    "BulkResult",
    "BulkErrorItem",
    "IndexState",
    "MappingUpdateResult",
    # 异常
    "ElasticManagerError",
    "ForbiddenError",
    "RemoteFailureError",
    "RemoteNotFoundError",
    "RemoteForbiddenError",
    "BulkOperationError",
    "InvalidBulkOperationError",
    "ConnectionConfigError",
    "ManagerNotFoundError",
]
