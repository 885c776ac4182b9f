"""连接与管理器配置数据模型定义模块.

提供以下配置模型：
- ClusterConfig: 集群地址与认证
- ConnectionConfig: 客户端传输参数
- ManagerConfig: 管理器绑定的索引、映射与只读状态
"""

import copy
from dataclasses import dataclass, field
from typing import Any

from .exceptions import ConnectionConfigError

# 索引名称中不允许出现的字符
_INVALID_INDEX_CHARS = frozenset(',#/\\*?"<>| \t\n\r')


def validate_index_name(index_name: str) -> bool:
    """验证索引名称是否符合 Elasticsearch 规范.

    Note:
        - 必须为小写
        - 不能以 - _ + 开头
        - 不能包含 , # / \\ * ? " < > | 空格
        - 不能是 . 或 ..
        - 长度不能超过 255 字节
    """
    if not index_name or not isinstance(index_name, str):
        return False
    if len(index_name.encode("utf-8")) > 255:
        return False
    if index_name in (".", "..") or index_name[0] in "-_+":
        return False
    if index_name != index_name.lower():
        return False
    return not any(char in _INVALID_INDEX_CHARS for char in index_name)


@dataclass
class ClusterConfig:
    """集群配置模型.

    Attributes:
        hosts: ES 节点地址列表（必需，不可为空）
        username: Basic Auth 用户名
        password: Basic Auth 密码
        api_key: API Key 认证（字符串或元组）
        bearer_token: Bearer Token 认证
        ca_certs: CA 证书文件路径
        verify_certs: 是否验证 SSL 证书，默认 True

    Raises:
        ConnectionConfigError: 当 hosts 为空时抛出
    """

    hosts: list[str] = field(default_factory=list)
    username: str | None = None
    password: str | None = None
    api_key: str | tuple[str, str] | None = None
    bearer_token: str | None = None
    ca_certs: str | None = None
    verify_certs: bool = True

    def __post_init__(self) -> None:
        if isinstance(self.hosts, str):
            self.hosts = [self.hosts]
        if not self.hosts:
            raise ConnectionConfigError("hosts 不能为空，请提供至少一个 ES 节点地址")


@dataclass
class ConnectionConfig:
    """客户端传输参数模型.

    重试与超时由 elasticsearch 客户端负责，管理器本身不做重试。

    Attributes:
        max_retries: 最大重试次数，默认 3
        retry_on_timeout: 超时是否重试，默认 True
        request_timeout: 请求超时时间（秒），默认 30，必须 >= 0
        http_compress: 是否启用 HTTP 压缩，默认 True
        sniff_on_start: 启动时是否嗅探节点，默认 False
        sniff_on_node_failure: 节点失败时是否嗅探，默认 False
        min_delay_between_sniffing: 两次嗅探的最小间隔（秒），默认 10，必须 >= 0
    """

    max_retries: int = 3
    retry_on_timeout: bool = True
    request_timeout: int = 30
    http_compress: bool = True
    sniff_on_start: bool = False
    sniff_on_node_failure: bool = False
    min_delay_between_sniffing: float = 10.0

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ConnectionConfigError(
                f"max_retries 必须 >= 0，当前值: {self.max_retries}"
            )
        if self.request_timeout < 0:
            raise ConnectionConfigError(
                f"request_timeout 必须 >= 0，当前值: {self.request_timeout}"
            )
        if self.min_delay_between_sniffing < 0:
            raise ConnectionConfigError(
                "min_delay_between_sniffing 必须 >= 0，"
                f"当前值: {self.min_delay_between_sniffing}"
            )


@dataclass
class ManagerConfig:
    """管理器配置模型.

    Attributes:
        index_name: 管理器绑定的索引名称
        connection: 使用的连接名称，默认 "default"
        settings: 索引设置（number_of_shards、analysis 等）
        mappings: 按类型名组织的映射
        read_only: 是否只读，默认 False
        doc_type: 无类型集群上映射使用的类型名，默认 "_doc"
        legacy_metadata: 是否原样发送旧版批量元数据（_type、_ttl、_parent），
            默认 False

    Raises:
        ConnectionConfigError: 当 index_name 不符合规范时抛出

    Examples:
        >>> config = ManagerConfig(
        ...     index_name="catalog",
        ...     mappings={"product": {"properties": {"title": {"type": "text"}}}},
        ... )
    """

    index_name: str
    connection: str = "default"
    settings: dict[str, Any] = field(default_factory=dict)
    mappings: dict[str, Any] = field(default_factory=dict)
    read_only: bool = False
    doc_type: str = "_doc"
    legacy_metadata: bool = False

    def __post_init__(self) -> None:
        if not validate_index_name(self.index_name):
            raise ConnectionConfigError(
                f"索引名称 '{self.index_name}' 不符合 Elasticsearch 规范"
            )
        if not self.doc_type:
            raise ConnectionConfigError("doc_type 不能为空")

    def to_index_settings(self) -> dict[str, Any]:
        """生成管理器持有的索引配置（不与本配置共享可变对象）."""
        body: dict[str, Any] = {}
        if self.settings:
            body["settings"] = copy.deepcopy(self.settings)
        if self.mappings:
            body["mappings"] = copy.deepcopy(self.mappings)
        return {"index_name": self.index_name, "body": body}
