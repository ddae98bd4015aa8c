from clickhouse_node.description import (
    NODE_DESCRIPTION,
    OPERATIONS,
    default_parameters,
    visible_parameters,
)


def test_operations():
    assert OPERATIONS == ['query', 'insert']


def test_defaults():
    assert default_parameters() == {'operation': 'insert', 'query': '', 'queryParameters': [], 'table': ''}


def test_defaults_are_independent_copies():
    default_parameters()['queryParameters'].append({'name': 'x', 'value': '1'})

    assert default_parameters()['queryParameters'] == []


def test_query_fields_only_in_query_mode():
    assert visible_parameters('query') == ['operation', 'query', 'queryParameters']


def test_table_only_in_insert_mode():
    assert visible_parameters('insert') == ['operation', 'table']


def test_credential_is_required():
    assert NODE_DESCRIPTION['credentials'][0]['name'] == 'clickhouseApi'
    assert NODE_DESCRIPTION['credentials'][0]['required'] is True
