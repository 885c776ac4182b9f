"""Manager 使用示例.

本文件展示了如何通过 ManagerFactory 创建管理器，并完成索引重建、映射同步、
批量写入和只读模式切换。
"""

import logging
from dataclasses import dataclass

from elasticmanager import (
    CommitEvent,
    ForbiddenError,
    ManagerFactory,
    MappingUpdateResult,
)

logging.basicConfig(level=logging.INFO)

CONFIG = {
    "connections": {"default": {"hosts": ["http://localhost:9200"]}},
    "managers": {
        "default": {
            "index_name": "catalog",
            "settings": {"number_of_shards": 1, "number_of_replicas": 0},
            "mappings": {
                "product": {
                    "properties": {
                        "title": {"type": "text"},
                        "price": {"type": "float"},
                    }
                },
            },
        },
    },
    "transport": {"request_timeout": 10},
}


@dataclass
class Product:
    __doc_type__ = "product"

    title: str
    price: float


def on_commit(event: CommitEvent) -> None:
    """提交成功后的回调."""
    print(f"  已提交 {len(event.entries)} 条记录，参数: {event.params}")


# ==================== 示例1：重建索引并同步映射 ====================
def example_index_lifecycle(manager):
    """删除（若存在）并重建索引，再同步映射."""
    manager.drop_and_create_index(no_mapping=False)
    print(f"  索引: {manager.get_index_name()}, 集群版本: {manager.get_version_number()}")

    result = manager.update_mapping(["product"])
    if result == MappingUpdateResult.UP_TO_DATE:
        print("  映射已是最新")
    elif result == MappingUpdateResult.UPDATED:
        print("  映射已更新")


# ==================== 示例2：批量写入 ====================
def example_bulk(manager):
    """累积多种写操作后一次提交."""
    manager.set_bulk_params({"refresh": True})

    manager.persist(Product(title="Desk", price=199.0))
    manager.bulk("index", "product", {"_id": "1", "title": "Lamp", "price": 25.0})
    manager.bulk("update", "product", {"_id": "1", "price": 19.9})
    manager.bulk("delete", "product", {"_id": "2"})

    result = manager.commit()
    print(f"  成功: {result.success}, 失败: {result.failed}, 耗时: {result.took:.3f}秒")
    if result.failed > 0:
        print(f"  错误摘要:\n{result.get_error_summary()}")


# ==================== 示例3：只读模式 ====================
def example_read_only(manager):
    """只读模式下写操作被拒绝."""
    manager.set_read_only(True)
    try:
        manager.bulk("delete", "product", {"_id": "1"})
    except ForbiddenError as e:
        print(f"  {e}")
    finally:
        manager.set_read_only(False)


def main():
    """运行所有示例."""
    with ManagerFactory.from_dict(CONFIG, commit_notifier=on_commit) as factory:
        manager = factory.get_manager()

        print("\n1. 索引生命周期示例")
        print("-" * 50)
        example_index_lifecycle(manager)

        print("\n2. 批量写入示例")
        print("-" * 50)
        example_bulk(manager)

        print("\n3. 只读模式示例")
        print("-" * 50)
        example_read_only(manager)


if __name__ == "__main__":
    main()
