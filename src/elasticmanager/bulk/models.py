"""批量操作数据模型定义模块."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypedDict


class BulkAction(Enum):
    """批量操作类型枚举."""

    INDEX = "index"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


# 从查询字段中提取到操作头的保留字段
RESERVED_FIELDS = ("_id", "_ttl", "_parent")


class BulkParams(TypedDict, total=False):
    """批量请求参数类型定义.

    Attributes:
        consistency: 写一致性级别（one、quorum、all）
        refresh: 执行后是否刷新索引
        replication: 复制方式（sync、async）
    """

    consistency: str
    refresh: bool
    replication: str


@dataclass
class BulkErrorItem:
    """批量操作错误项数据类.

    Attributes:
        index_name: 索引名称
        doc_id: 文档ID
        error_type: 错误类型
        error_reason: 错误原因
        status: HTTP状态码
        caused_by: 根本原因
        operation: 失败的操作类型
    """

    index_name: str
    doc_id: str | None
    error_type: str
    error_reason: str
    status: int
    caused_by: str | None = None
    operation: BulkAction | None = None


@dataclass
class BulkResult:
    """批量提交结果数据类.

    Attributes:
        total: 总操作数
        success: 成功数
        failed: 失败数
        errors: 错误详情列表
        took: 服务端耗时（秒）
    """

    total: int = 0
    success: int = 0
    failed: int = 0
    errors: list[BulkErrorItem] = field(default_factory=list)
    took: float = 0.0

    def is_success(self) -> bool:
        """判断操作是否全部成功."""
        return self.failed == 0

    @classmethod
    def from_response(cls, response: dict[str, Any]) -> "BulkResult":
        """从批量响应构建结果.

        响应格式: ``{"took": 30, "errors": false, "items": [{"index": {...}}]}``
        """
        items = response.get("items", [])
        result = cls(total=len(items), took=response.get("took", 0) / 1000.0)

        for item in items:
            for op_type, info in item.items():
                error_info = info.get("error")
                if not error_info:
                    result.success += 1
                    continue

                result.failed += 1
                if isinstance(error_info, str):
                    error_info = {"reason": error_info}

                # 提取根本原因
                caused_by = None
                if "caused_by" in error_info:
                    caused_by_info = error_info["caused_by"]
                    caused_by = f"{caused_by_info.get('type', '')}: {caused_by_info.get('reason', '')}"

                try:
                    operation = BulkAction(op_type)
                except ValueError:
                    operation = None

                result.errors.append(
                    BulkErrorItem(
                        index_name=info.get("_index", ""),
                        doc_id=info.get("_id"),
                        error_type=error_info.get("type", "unknown"),
                        error_reason=error_info.get("reason", "unknown error"),
                        status=info.get("status", 0),
                        caused_by=caused_by,
                        operation=operation,
                    )
                )

        return result

    def get_error_summary(self) -> str:
        """获取错误摘要."""
        if not self.errors:
            return "No errors"
        summary = f"Total errors: {len(self.errors)}\n"
        for i, error in enumerate(self.errors[:10], 1):  # 只显示前10个错误
            summary += (
                f"{i}. [{error.operation.value if error.operation else 'unknown'}] "
                f"Index: {error.index_name}, DocID: {error.doc_id}, "
                f"Status: {error.status}, Reason: {error.error_reason}\n"
            )
        if len(self.errors) > 10:
            summary += f"... and {len(self.errors) - 10} more errors\n"
        return summary
