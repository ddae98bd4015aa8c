import json

import pytest

from clickhouse_node.credentials import Credential


class FakeClient:
    """Stands in for a clickhouse_connect client and records what it is asked"""

    def __init__(self, server, **kwargs):
        self.server = server
        self.kwargs = kwargs
        self.queries = []
        self.inserts = []
        self.close_calls = 0

    def ping(self):
        if self.server.fail_on == 'ping':
            raise ConnectionError('ping refused')
        return self.server.ping_result

    def raw_query(self, query, parameters=None, settings=None, fmt=None, **kwargs):
        self.queries.append({'query': query, 'parameters': parameters, 'fmt': fmt})
        if self.server.fail_on == 'query':
            raise RuntimeError('Code: 62. DB::Exception: Syntax error')
        if self.server.body is not None:
            return self.server.body
        return '\n'.join(json.dumps(row) for row in self.server.rows).encode('utf-8')

    def raw_insert(self, table, column_names=None, insert_block=None, settings=None, fmt=None, **kwargs):
        self.inserts.append({'table': table, 'insert_block': insert_block, 'fmt': fmt})
        if self.server.fail_on == 'insert':
            raise RuntimeError('Code: 16. DB::Exception: No such column price')

    def close(self):
        self.close_calls += 1


class FakeServer:
    def __init__(self):
        self.rows = []
        self.body = None
        self.fail_on = None
        self.ping_result = True
        self.clients = []

    def get_client(self, **kwargs):
        if self.fail_on == 'connect':
            raise ConnectionError('Connection refused')
        client = FakeClient(self, **kwargs)
        self.clients.append(client)
        return client

    @property
    def client(self):
        assert len(self.clients) == 1, f"expected one client, got {len(self.clients)}"
        return self.clients[0]


@pytest.fixture
def clickhouse(monkeypatch):
    server = FakeServer()
    monkeypatch.setattr('clickhouse_connect.get_client', server.get_client)
    return server


@pytest.fixture
def credential():
    return Credential(url='http://localhost:8123', database='shop', username='reader', password='secret')


@pytest.fixture
def credential_record():
    return {
        'url': 'http://localhost:8123',
        'database': 'shop',
        'user': 'reader',
        'password': 'secret',
        'allowUnauthorizedCerts': False
    }
