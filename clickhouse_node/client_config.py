# clickhouse_node/client_config.py
import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator
from urllib.parse import urlparse

import clickhouse_connect
from clickhouse_connect.driver import Client

from clickhouse_node.credentials import Credential
from clickhouse_node.errors import CredentialError

logger = logging.getLogger(__name__)

DEFAULT_PORTS = {'http': 8123, 'https': 8443}

# Server setting switched on by the allowUnauthorizedCerts credential flag
COMPRESSION_SETTINGS = {'enable_http_compression': 1}


@dataclass(frozen=True)
class ClientConfig:
    """Per-invocation client configuration derived from a Credential"""

    url: str
    database: str
    username: str
    password: str = field(repr=False)
    settings: Dict[str, Any] = field(default_factory=dict)

    def client_kwargs(self) -> Dict[str, Any]:
        """Get clickhouse_connect.get_client() keyword arguments"""
        parsed = urlparse(self.url)
        interface = parsed.scheme.lower()
        if interface not in DEFAULT_PORTS:
            raise CredentialError(f"Unsupported ClickHouse URL scheme in '{self.url}', expected http or https")
        if not parsed.hostname:
            raise CredentialError(f"ClickHouse URL '{self.url}' has no host")

        try:
            port = parsed.port or DEFAULT_PORTS[interface]
        except ValueError as e:
            raise CredentialError(f"Invalid port in ClickHouse URL '{self.url}': {e}") from e

        kwargs = {
            'host': parsed.hostname,
            'port': port,
            'interface': interface,
            'username': self.username,
            'password': self.password,
            'database': self.database,
        }
        if self.settings:
            kwargs['settings'] = dict(self.settings)
        return kwargs


def build_config(credential: Credential) -> ClientConfig:
    """Map a stored credential onto a fresh client configuration"""
    settings = dict(COMPRESSION_SETTINGS) if credential.allow_unauthorized_certs else {}
    return ClientConfig(
        url=credential.url,
        database=credential.database,
        username=credential.username,
        password=credential.password,
        settings=settings
    )


@contextmanager
def open_client(config: ClientConfig) -> Iterator[Client]:
    """Create a client for one invocation and close it on every exit path"""
    kwargs = config.client_kwargs()
    logger.debug(f"🔌 Connecting to ClickHouse at {kwargs['interface']}://{kwargs['host']}:{kwargs['port']} (database: {config.database})")
    client = clickhouse_connect.get_client(**kwargs)
    try:
        yield client
    finally:
        client.close()
        logger.debug("🔒 ClickHouse client closed")
