from clickhouse_node.client_config import ClientConfig, build_config
from clickhouse_node.credentials import Credential
from clickhouse_node.errors import ClickHouseNodeError, CredentialError, NodeOperationError
from clickhouse_node.node import ClickHouseNode, CredentialTestResult
