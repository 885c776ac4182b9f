"""Elastic Manager 异常定义模块."""


class ElasticManagerError(Exception):
    """Elastic Manager 基础异常类."""

    pass


class ForbiddenError(ElasticManagerError):
    """只读模式下执行写操作时抛出的异常.

    Attributes:
        operation: 被拒绝的操作名称
    """

    def __init__(self, operation: str = ""):
        self.operation = operation
        super().__init__(
            f"Manager is readonly! {operation} operation is not permitted."
        )


class RemoteFailureError(ElasticManagerError):
    """后端（Elasticsearch）调用失败异常.

    Attributes:
        status_code: HTTP 状态码，传输层错误时为 None
    """

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class RemoteNotFoundError(RemoteFailureError):
    """后端返回 404（索引或资源不存在）."""

    pass


class RemoteForbiddenError(RemoteFailureError):
    """后端返回 403（与只读模式无关的服务端权限拒绝）."""

    pass
