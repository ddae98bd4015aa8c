# clickhouse_node/description.py
import copy
from typing import Any, Dict, List
from clickhouse_node.credentials import CREDENTIAL_NAME

QUERY = 'query'
INSERT = 'insert'

NODE_DESCRIPTION = {
    'displayName': 'ClickHouse',
    'name': 'clickhouse',
    'group': ['input'],
    'version': 1,
    'description': 'Query and ingest data into ClickHouse',
    'defaults': {'name': 'clickhouse'},
    'inputs': ['main'],
    'outputs': ['main'],
    'credentials': [
        {
            'name': CREDENTIAL_NAME,
            'required': True,
            'testedBy': 'test_connection',
        },
    ],
    'properties': [
        {
            'displayName': 'Operation',
            'name': 'operation',
            'type': 'options',
            'noDataExpression': True,
            'options': [
                {
                    'name': 'Query',
                    'value': QUERY,
                    'description': 'Execute an SQL query',
                    'action': 'Execute a SQL query',
                },
                {
                    'name': 'Insert',
                    'value': INSERT,
                    'description': 'Insert rows in database',
                    'action': 'Insert rows in database',
                },
            ],
            'default': INSERT,
        },
        {
            'displayName': 'Query',
            'name': 'query',
            'type': 'string',
            'displayOptions': {'show': {'operation': [QUERY]}},
            'default': '',
            'placeholder': 'SELECT id, name FROM product WHERE quantity > {quantity:Int32} AND price <= {price:Int32}',
            'required': True,
            'description': 'The SQL query to execute. You can use expressions or ClickHouse query parameters.',
        },
        {
            'displayName': 'Query Parameters',
            'name': 'queryParameters',
            'type': 'fixedCollection',
            'displayOptions': {'show': {'operation': [QUERY]}},
            'default': [],
            'placeholder': 'Add parameter',
            'description': 'Values bound to the named placeholders of the query, e.g. {quantity:Int32}',
            'options': [
                {'displayName': 'Name', 'name': 'name', 'type': 'string', 'default': ''},
                {'displayName': 'Value', 'name': 'value', 'type': 'string', 'default': ''},
            ],
        },
        {
            'displayName': 'Table Name',
            'name': 'table',
            'type': 'string',
            'displayOptions': {'show': {'operation': [INSERT]}},
            'default': '',
            'placeholder': 'product',
            'required': True,
            'description': 'The table name to insert data. You can use expressions.',
        },
    ],
}

OPERATIONS = [option['value'] for option in NODE_DESCRIPTION['properties'][0]['options']]


def default_parameters() -> Dict[str, Any]:
    """Get {name: default} for every node property"""
    return {prop['name']: copy.deepcopy(prop['default']) for prop in NODE_DESCRIPTION['properties']}


def visible_parameters(operation: str) -> List[str]:
    """Get the names of the properties shown for an operation"""
    names = []
    for prop in NODE_DESCRIPTION['properties']:
        shown_for = prop.get('displayOptions', {}).get('show', {}).get('operation')
        if shown_for is None or operation in shown_for:
            names.append(prop['name'])
    return names
