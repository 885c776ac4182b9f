"""搜索后端模块.

定义管理器依赖的后端接口 ``SearchBackend``，并提供基于
``elasticsearch.Elasticsearch`` 的实现 ``ElasticsearchBackend``。

示例用法:
    >>> from elasticsearch import Elasticsearch
    >>> from elasticmanager.backend import ElasticsearchBackend
    >>> backend = ElasticsearchBackend(Elasticsearch("http://localhost:9200"))
    >>> backend.index_exists("catalog")
"""

from .protocol import SearchBackend
from .tool import ElasticsearchBackend

__all__ = [
    "SearchBackend",
    "ElasticsearchBackend",
]
