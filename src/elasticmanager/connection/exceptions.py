"""连接与管理器配置异常定义模块."""

from ..exceptions import ElasticManagerError


class ConnectionConfigError(ElasticManagerError):
    """连接或管理器配置校验异常.

    当配置参数不合法时抛出，例如 hosts 为空、index_name 不符合规范等。
    """

    pass


class ManagerNotFoundError(ElasticManagerError):
    """请求的管理器或连接名称在配置中不存在时抛出."""

    pass
