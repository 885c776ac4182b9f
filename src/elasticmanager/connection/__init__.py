"""连接与管理器工厂模块 - 按配置创建 Elasticsearch 客户端与 Manager.

主要组件:
    - ManagerFactory: 管理器工厂，管理客户端缓存和生命周期
    - ClusterConfig: 集群地址与认证配置
    - ConnectionConfig: 客户端传输参数
    - ManagerConfig: 管理器配置

使用示例:
    from elasticmanager.connection import ClusterConfig, ManagerConfig, ManagerFactory

    factory = ManagerFactory(
        {"default": ClusterConfig(hosts=["http://localhost:9200"])},
        {"default": ManagerConfig(index_name="catalog")},
    )
    manager = factory.get_manager()
"""

from .exceptions import ConnectionConfigError, ManagerNotFoundError
from .models import ClusterConfig, ConnectionConfig, ManagerConfig, validate_index_name
from .tool import ManagerFactory

__all__ = [
    # 工厂
    "ManagerFactory",
    # 模型
    "ClusterConfig",
    "ConnectionConfig",
    "ManagerConfig",
    "validate_index_name",
    # 异常
    "ConnectionConfigError",
    "ManagerNotFoundError",
]
