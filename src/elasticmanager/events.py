"""批量提交事件模块."""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from .bulk.models import BulkResult
from .typing import BulkBody


@dataclass
class CommitEvent:
    """批量提交完成事件.

    Attributes:
        entries: 已执行的批量请求体
        params: 执行时使用的批量参数
        result: 解析后的提交结果
    """

    entries: BulkBody
    params: dict[str, Any] = field(default_factory=dict)
    result: BulkResult | None = None


# 提交成功后、清空批量请求体之前调用
CommitNotifier = Callable[[CommitEvent], None]
