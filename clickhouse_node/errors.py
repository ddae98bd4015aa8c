# clickhouse_node/errors.py


class ClickHouseNodeError(Exception):
    """Base class for errors raised by the node itself"""


class CredentialError(ClickHouseNodeError):
    """Stored credential is missing a field or holds a malformed value"""


class NodeOperationError(ClickHouseNodeError):
    """Node parameters do not describe a runnable operation"""
