# clickhouse_node/credentials.py
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping
from clickhouse_node.errors import CredentialError

# Name the node asks the host for
CREDENTIAL_NAME = 'clickhouseApi'

# Declarative schema of the stored credential, rendered by the host
CLICKHOUSE_API_CREDENTIAL = {
    'name': CREDENTIAL_NAME,
    'displayName': 'ClickHouse API',
    'testedBy': 'test_connection',
    'properties': [
        {
            'displayName': 'URL',
            'name': 'url',
            'type': 'string',
            'default': '',
            'placeholder': 'http://localhost:8123',
            'required': True,
        },
        {
            'displayName': 'Database',
            'name': 'database',
            'type': 'string',
            'default': 'default',
        },
        {
            'displayName': 'User',
            'name': 'user',
            'type': 'string',
            'default': 'default',
        },
        {
            'displayName': 'Password',
            'name': 'password',
            'type': 'string',
            'typeOptions': {'password': True},
            'default': '',
        },
        {
            'displayName': 'Ignore SSL Issues',
            'name': 'allowUnauthorizedCerts',
            'type': 'boolean',
            'default': False,
        },
    ],
}


@dataclass(frozen=True)
class Credential:
    """Connection parameters resolved by the host at invocation time"""

    url: str
    database: str = 'default'
    username: str = 'default'
    password: str = field(default='', repr=False)
    allow_unauthorized_certs: bool = False

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> 'Credential':
        """Build a Credential from a stored credential record.

        The record uses the stored field names (``user``,
        ``allowUnauthorizedCerts``); ``username`` is accepted as an alias.
        """
        url = record.get('url')
        if not url:
            raise CredentialError("Credential is missing the ClickHouse URL")

        username = record.get('user') or record.get('username') or 'default'

        return cls(
            url=str(url).strip(),
            database=record.get('database') or 'default',
            username=username,
            password=record.get('password') or '',
            allow_unauthorized_certs=bool(record.get('allowUnauthorizedCerts', False))
        )
