# clickhouse_node/node.py
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from clickhouse_node.client_config import build_config, open_client
from clickhouse_node.context import ExecutionContext
from clickhouse_node.credentials import CREDENTIAL_NAME, Credential
from clickhouse_node.description import INSERT, OPERATIONS, QUERY
from clickhouse_node.errors import NodeOperationError

logger = logging.getLogger(__name__)

# Row-delimited JSON, used for both the read and the write path
ROW_FORMAT = 'JSONEachRow'

OK = 'OK'
ERROR = 'Error'


@dataclass(frozen=True)
class CredentialTestResult:
    status: str
    message: str

    @property
    def ok(self) -> bool:
        return self.status == OK


def decode_rows(body: bytes) -> List[Dict[str, Any]]:
    """Decode a JSONEachRow response body, one record per non-empty line.

    Only a newline separates rows; string values may hold other line breaks such as
    U+0085 or U+2028 unescaped. Invalid UTF-8 is replaced, not rejected.
    """
    text = body.decode('utf-8', errors='replace') if isinstance(body, (bytes, bytearray)) else body
    return [json.loads(line) for line in text.split('\n') if line.strip()]


def encode_rows(records: Sequence[Mapping[str, Any]]) -> bytes:
    """Encode records as a JSONEachRow insert block"""
    lines = [json.dumps(dict(record), default=str, ensure_ascii=False) for record in records]
    return '\n'.join(lines).encode('utf-8')


def collect_query_parameters(raw: Any) -> Dict[str, Any]:
    """Turn the queryParameters collection into a name -> value mapping.

    Accepts either a list of ``{'name': ..., 'value': ...}`` entries, as the
    host form produces, or an already built mapping.
    """
    if not raw:
        return {}
    if isinstance(raw, Mapping):
        return dict(raw)

    parameters = {}
    for entry in raw:
        name = (entry.get('name') or '').strip()
        if not name:
            raise NodeOperationError("Query parameter is missing a name")
        parameters[name] = entry.get('value')
    return parameters


class ClickHouseNode:
    """Runs queries and inserts against ClickHouse for a workflow host"""

    def test_connection(self, credential: Union[Credential, Mapping[str, Any]]) -> CredentialTestResult:
        """Check that the credential reaches a live server. Never raises.

        Accepts a Credential or the stored credential record the host hands over.
        """
        try:
            if not isinstance(credential, Credential):
                credential = Credential.from_record(credential)
            config = build_config(credential)
            with open_client(config) as client:
                if not client.ping():
                    raise ConnectionError(f"ClickHouse at {config.url} did not answer the ping")
        except Exception as e:
            logger.error(f"❌ Connection test failed: {e}")
            return CredentialTestResult(status=ERROR, message=str(e) or e.__class__.__name__)

        logger.info("✅ Connection test passed")
        return CredentialTestResult(status=OK, message='Connection successful!')

    def execute_query(self, credential: Credential, query: str,
                      parameters: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
        """Execute SQL query and return one record per result row"""
        config = build_config(credential)
        with open_client(config) as client:
            logger.info(f"Executing query: {query}")
            body = client.raw_query(query, parameters=dict(parameters or {}), fmt=ROW_FORMAT)

        rows = decode_rows(body)
        logger.info(f"✅ Query returned {len(rows)} rows")
        return rows

    def execute_insert(self, credential: Credential, table: str,
                       records: Sequence[Mapping[str, Any]]) -> None:
        """Write all records to `table` in a single insert"""
        config = build_config(credential)
        with open_client(config) as client:
            if not records:
                logger.info(f"No records to insert into {table}")
                return

            logger.info(f"Inserting {len(records)} records into {table}")
            client.raw_insert(table, insert_block=encode_rows(records), fmt=ROW_FORMAT)

        logger.info(f"✅ Inserted {len(records)} records into {table}")

    def execute(self, context: ExecutionContext) -> List[Dict[str, Any]]:
        """Host entry point: run the configured operation and emit its output"""
        operation = context.get_node_parameter('operation', INSERT)
        if operation not in OPERATIONS:
            raise NodeOperationError(f"Unknown operation '{operation}', expected one of: {', '.join(OPERATIONS)}")

        output = []
        if operation == QUERY:
            query = (context.get_node_parameter('query', '') or '').strip()
            if not query:
                raise NodeOperationError("The 'query' parameter is required for the query operation")
            parameters = collect_query_parameters(context.get_node_parameter('queryParameters'))
            credential = Credential.from_record(context.get_credentials(CREDENTIAL_NAME))
            output = self.execute_query(credential, query, parameters)
        elif operation == INSERT:
            table = (context.get_node_parameter('table', '') or '').strip()
            if not table:
                raise NodeOperationError("The 'table' parameter is required for the insert operation")
            credential = Credential.from_record(context.get_credentials(CREDENTIAL_NAME))
            self.execute_insert(credential, table, context.get_input_data())

        context.emit(output)
        return output
