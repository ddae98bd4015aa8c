import pytest

from clickhouse_node.credentials import CLICKHOUSE_API_CREDENTIAL, Credential
from clickhouse_node.errors import CredentialError


def test_from_record_maps_stored_fields(credential_record):
    credential = Credential.from_record(credential_record)

    assert credential.url == 'http://localhost:8123'
    assert credential.database == 'shop'
    assert credential.username == 'reader'
    assert credential.password == 'secret'
    assert credential.allow_unauthorized_certs is False


def test_from_record_accepts_username_alias():
    credential = Credential.from_record({'url': 'http://ch:8123', 'username': 'writer'})

    assert credential.username == 'writer'


def test_from_record_fills_defaults():
    credential = Credential.from_record({'url': ' http://ch:8123 '})

    assert credential.url == 'http://ch:8123'
    assert credential.database == 'default'
    assert credential.username == 'default'
    assert credential.password == ''
    assert credential.allow_unauthorized_certs is False


@pytest.mark.parametrize('record', [{}, {'url': ''}, {'url': None, 'user': 'reader'}])
def test_from_record_requires_url(record):
    with pytest.raises(CredentialError, match='URL'):
        Credential.from_record(record)


def test_repr_hides_password(credential):
    assert 'secret' not in repr(credential)


def test_credential_type_lists_stored_fields():
    names = [prop['name'] for prop in CLICKHOUSE_API_CREDENTIAL['properties']]

    assert names == ['url', 'database', 'user', 'password', 'allowUnauthorizedCerts']
    assert CLICKHOUSE_API_CREDENTIAL['testedBy'] == 'test_connection'
