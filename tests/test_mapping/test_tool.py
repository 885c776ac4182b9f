"""映射同步器单元测试."""

from unittest.mock import MagicMock

import pytest

from elasticmanager.exceptions import ForbiddenError, RemoteNotFoundError
from elasticmanager.guard import ReadOnlyGuard
from elasticmanager.mapping import (
    MappingSynchronizer,
    MappingUpdateResult,
    compute_mapping_diff,
)

PRODUCT = {"properties": {"title": {"type": "text"}, "price": {"type": "float"}}}
CATEGORY = {"properties": {"name": {"type": "keyword"}}}


@pytest.fixture
def backend() -> MagicMock:
    return MagicMock()


@pytest.fixture
def settings() -> dict:
    return {
        "index_name": "catalog",
        "body": {"mappings": {"product": PRODUCT, "category": CATEGORY}},
    }


@pytest.fixture
def synchronizer(backend, settings) -> MappingSynchronizer:
    return MappingSynchronizer(backend, settings, ReadOnlyGuard())


class TestComputeMappingDiff:
    """compute_mapping_diff 函数测试."""

    def test_identical(self) -> None:
        assert compute_mapping_diff({"product": PRODUCT}, {"product": PRODUCT}) == {}

    def test_missing_type_is_included(self) -> None:
        diff = compute_mapping_diff({"product": PRODUCT, "category": CATEGORY}, {"product": PRODUCT})
        assert diff == {"category": CATEGORY}

    def test_nested_difference_marks_whole_type(self) -> None:
        live = {"properties": {"title": {"type": "text"}, "price": {"type": "double"}}}
        diff = compute_mapping_diff({"product": PRODUCT}, {"product": live})
        assert diff == {"product": PRODUCT}

    def test_extra_live_types_are_ignored(self) -> None:
        diff = compute_mapping_diff({"product": PRODUCT}, {"product": PRODUCT, "other": {}})
        assert diff == {}


class TestGetMapping:
    """get_mapping 方法测试."""

    def test_all_types_when_none_requested(self, synchronizer) -> None:
        assert synchronizer.get_mapping() == {"product": PRODUCT, "category": CATEGORY}
        assert synchronizer.get_mapping([]) == {"product": PRODUCT, "category": CATEGORY}

    def test_scoped_to_requested_types(self, synchronizer) -> None:
        assert synchronizer.get_mapping(["category", "unknown"]) == {"category": CATEGORY}

    def test_single_string_rejected(self, synchronizer, backend) -> None:
        with pytest.raises(TypeError, match="product"):
            synchronizer.update_mapping("product")

        backend.get_mapping.assert_not_called()

    def test_no_mappings_section(self, backend) -> None:
        sync = MappingSynchronizer(backend, {"index_name": "catalog", "body": {}}, ReadOnlyGuard())
        assert sync.get_mapping() == {}


class TestUpdateMapping:
    """update_mapping 方法测试."""

    def test_nothing_defined_returns_zero_without_remote_call(self, backend) -> None:
        """测试没有定义映射时返回 0 且不访问集群."""
        sync = MappingSynchronizer(backend, {"index_name": "catalog", "body": {}}, ReadOnlyGuard())

        result = sync.update_mapping([])

        assert result == 0
        assert result is MappingUpdateResult.NOTHING_TO_UPDATE
        assert backend.method_calls == []

    def test_unknown_types_return_zero(self, synchronizer, backend) -> None:
        assert synchronizer.update_mapping(["unknown"]) == 0
        backend.get_mapping.assert_not_called()

    def test_up_to_date_returns_minus_one(self, synchronizer, backend) -> None:
        """测试集群映射一致时返回 -1 且不推送."""
        backend.get_mapping.return_value = {"product": PRODUCT, "category": CATEGORY}

        result = synchronizer.update_mapping(["product", "category"])

        assert result == -1
        assert result is MappingUpdateResult.UP_TO_DATE
        backend.get_mapping.assert_called_once_with(
            "catalog",
            ["product", "category"],
            desired={"product": PRODUCT, "category": CATEGORY},
        )
        backend.put_mapping.assert_not_called()

    def test_pushes_only_differing_types(self, synchronizer, backend) -> None:
        """测试只推送不一致的类型."""
        backend.get_mapping.return_value = {"product": PRODUCT}

        result = synchronizer.update_mapping()

        assert result == 1
        assert result is MappingUpdateResult.UPDATED
        backend.put_mapping.assert_called_once_with(
            "catalog", ["category"], {"category": CATEGORY}
        )

    def test_read_only(self, backend, settings) -> None:
        """测试只读时拒绝且不访问集群."""
        sync = MappingSynchronizer(backend, settings, ReadOnlyGuard(read_only=True))

        with pytest.raises(ForbiddenError, match="Create types"):
            sync.update_mapping()

        assert backend.method_calls == []

    def test_remote_failure_propagates(self, synchronizer, backend) -> None:
        backend.get_mapping.side_effect = RemoteNotFoundError("missing", status_code=404)

        with pytest.raises(RemoteNotFoundError):
            synchronizer.update_mapping()

        backend.put_mapping.assert_not_called()

    def test_reads_fresh_each_call(self, synchronizer, backend) -> None:
        """测试每次调用都重新计算差异."""
        backend.get_mapping.side_effect = [{}, {"product": PRODUCT, "category": CATEGORY}]

        assert synchronizer.update_mapping() == 1
        assert synchronizer.update_mapping() == -1
        assert backend.get_mapping.call_count == 2

    def test_get_mapping_diff_does_not_push(self, synchronizer, backend) -> None:
        backend.get_mapping.return_value = {}

        assert synchronizer.get_mapping_diff(["product"]) == {"product": PRODUCT}
        backend.put_mapping.assert_not_called()
