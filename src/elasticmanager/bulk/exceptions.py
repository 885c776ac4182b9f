"""批量操作异常定义模块."""

from ..exceptions import ElasticManagerError


class BulkOperationError(ElasticManagerError):
    """批量操作基础异常类."""

    pass


class InvalidBulkOperationError(BulkOperationError, ValueError):
    """不支持的批量操作类型异常."""

    pass
