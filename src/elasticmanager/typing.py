"""Elastic Manager 类型定义模块."""

from typing import Any, Dict, List

# 文档字段字典类型
FieldsDict = Dict[str, Any]

# 单个类型的映射片段
MappingFragment = Dict[str, Any]

# 按类型名组织的映射字典
# 格式: {类型名: 映射片段}
MappingByType = Dict[str, MappingFragment]

# 批量请求中的单条记录（操作头或文档体）
BulkEntry = Dict[str, Any]

# 批量请求体
BulkBody = List[BulkEntry]
