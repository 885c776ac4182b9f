"""只读保护模块."""

import logging

from .exceptions import ForbiddenError

logger = logging.getLogger(__name__)


class ReadOnlyGuard:
    """管理器级别的只读开关.

    每个写操作在产生任何副作用之前调用 ``check``。开关本身随时可以切换，
    即使当前处于只读状态。

    Args:
        read_only: 初始是否只读，默认为 False
    """

    def __init__(self, read_only: bool = False):
        self._read_only = read_only

    @property
    def read_only(self) -> bool:
        return self._read_only

    def set_read_only(self, read_only: bool) -> None:
        """切换只读状态."""
        self._read_only = bool(read_only)
        logger.info(f"只读模式: {self._read_only}")

    def check(self, operation: str = "") -> None:
        """只读时拒绝操作.

        Args:
            operation: 操作名称，写入异常信息

        Raises:
            ForbiddenError: 处于只读状态时抛出
        """
        if self._read_only:
            raise ForbiddenError(operation)
