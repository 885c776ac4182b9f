"""索引生命周期管理器单元测试."""

import unittest
from unittest.mock import MagicMock

from elasticmanager.exceptions import (
    ForbiddenError,
    RemoteFailureError,
    RemoteNotFoundError,
)
from elasticmanager.guard import ReadOnlyGuard
from elasticmanager.index_manager import (
    IndexLifecycleManager,
    IndexState,
    best_effort,
)


class TestBestEffort(unittest.TestCase):
    """best_effort 函数单元测试."""

    def test_returns_value(self):
        self.assertEqual(best_effort(lambda: 42, KeyError), 42)

    def test_swallows_expected(self):
        def fail():
            raise RemoteNotFoundError("missing", status_code=404)

        self.assertIsNone(best_effort(fail, RemoteNotFoundError))

    def test_propagates_unexpected(self):
        def fail():
            raise RemoteFailureError("boom", status_code=500)

        with self.assertRaises(RemoteFailureError):
            best_effort(fail, RemoteNotFoundError)


class TestIndexLifecycleManager(unittest.TestCase):
    """IndexLifecycleManager 类单元测试."""

    def setUp(self):
        """设置测试环境."""
        self.backend = MagicMock()
        self.settings = {
            "index_name": "catalog",
            "body": {
                "settings": {"number_of_shards": 1},
                "mappings": {"product": {"properties": {}}},
            },
        }
        self.guard = ReadOnlyGuard()
        self.lifecycle = IndexLifecycleManager(self.backend, self.settings, self.guard)

    def test_initialization(self):
        """测试初始化."""
        self.assertEqual(self.lifecycle.get_index_name(), "catalog")
        self.assertEqual(self.lifecycle.state, IndexState.UNKNOWN)

    def test_create_index(self):
        """测试创建索引."""
        self.lifecycle.create_index()

        self.backend.index_create.assert_called_once_with(self.settings)
        self.assertIn("mappings", self.settings["body"])
        self.assertEqual(self.lifecycle.state, IndexState.PRESENT)

    def test_create_index_strip_mappings(self):
        """测试创建索引时移除 mappings，其余配置保留."""
        seen = {}

        def record(settings):
            seen["body"] = dict(settings["body"])

        self.backend.index_create.side_effect = record

        self.lifecycle.create_index(strip_mappings=True)

        self.assertEqual(seen["body"], {"settings": {"number_of_shards": 1}})
        # 修改保留在持有的配置中
        self.assertNotIn("mappings", self.settings["body"])
        self.assertEqual(self.settings["index_name"], "catalog")

    def test_drop_index(self):
        """测试删除索引."""
        self.lifecycle.drop_index()

        self.backend.index_delete.assert_called_once_with("catalog")
        self.assertEqual(self.lifecycle.state, IndexState.ABSENT)

    def test_drop_missing_index_raises(self):
        """测试单独删除不存在的索引时抛出异常."""
        self.backend.index_delete.side_effect = RemoteNotFoundError("missing", 404)

        with self.assertRaises(RemoteNotFoundError):
            self.lifecycle.drop_index()

    def test_drop_and_create_index(self):
        """测试删除并重建索引."""
        self.lifecycle.drop_and_create_index()

        self.backend.index_delete.assert_called_once_with("catalog")
        self.backend.index_create.assert_called_once()
        self.assertEqual(self.lifecycle.state, IndexState.PRESENT)

    def test_drop_and_create_when_index_missing(self):
        """测试索引不存在时仍然创建索引."""
        self.backend.index_delete.side_effect = RemoteNotFoundError("missing", 404)

        self.lifecycle.drop_and_create_index(strip_mappings=True)

        self.backend.index_create.assert_called_once()
        self.assertNotIn("mappings", self.settings["body"])

    def test_drop_and_create_propagates_other_errors(self):
        """测试删除时的其他错误不被忽略."""
        self.backend.index_delete.side_effect = RemoteFailureError("boom", 500)

        with self.assertRaises(RemoteFailureError):
            self.lifecycle.drop_and_create_index()

        self.backend.index_create.assert_not_called()

    def test_index_exists(self):
        """测试检查索引是否存在."""
        self.backend.index_exists.return_value = False

        self.assertFalse(self.lifecycle.index_exists())
        self.backend.index_exists.assert_called_once_with("catalog")
        self.assertEqual(self.lifecycle.state, IndexState.ABSENT)

    def test_index_exists_allowed_when_read_only(self):
        """测试只读时仍可查询索引是否存在."""
        self.guard.set_read_only(True)
        self.backend.index_exists.return_value = True

        self.assertTrue(self.lifecycle.index_exists())

    def test_clear_cache(self):
        """测试清理缓存."""
        self.lifecycle.clear_cache()
        self.backend.index_clear_cache.assert_called_once_with("catalog")

    def test_refresh_and_flush_scoped_to_index(self):
        """测试 refresh 和 flush 默认作用于当前索引."""
        self.lifecycle.refresh()
        self.lifecycle.flush({"force": True})

        self.backend.index_refresh.assert_called_once_with({"index": "catalog"})
        self.backend.index_flush.assert_called_once_with(
            {"index": "catalog", "force": True}
        )

    def test_get_version_number(self):
        """测试获取集群版本号."""
        self.backend.server_info.return_value = {"version": {"number": "8.13.0"}}
        self.assertEqual(self.lifecycle.get_version_number(), "8.13.0")

    def test_read_only_blocks_mutations(self):
        """测试只读时所有写操作被拒绝且不访问集群."""
        self.guard.set_read_only(True)

        operations = [
            (self.lifecycle.create_index, "Create index"),
            (self.lifecycle.drop_index, "Drop index"),
            (self.lifecycle.drop_and_create_index, "Drop index"),
            (self.lifecycle.clear_cache, "Clear cache"),
        ]
        for operation, label in operations:
            with self.assertRaises(ForbiddenError) as ctx:
                operation()
            self.assertEqual(ctx.exception.operation, label)

        self.assertEqual(self.backend.method_calls, [])
        self.assertIn("mappings", self.settings["body"])


if __name__ == "__main__":
    unittest.main()
