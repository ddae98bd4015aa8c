#!/usr/bin/env python3
"""
ClickHouse Node Runner

Simple CLI driver that plays the workflow host: credentials come from the
environment (or .env), parameters from the command line, and input items
from a JSON lines or CSV file.
"""
import argparse
import json
import logging
import sys
from typing import Any, Dict, List

import pandas as pd

from clickhouse_node.config import Config
from clickhouse_node.context import LocalExecutionContext
from clickhouse_node.credentials import CREDENTIAL_NAME
from clickhouse_node.description import INSERT, OPERATIONS, QUERY, visible_parameters
from clickhouse_node.node import ClickHouseNode

logger = logging.getLogger(__name__)


def setup_logging(verbose=False):
    """Setup logging configuration"""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )
    # clickhouse_connect and urllib3 are chatty at DEBUG
    for logger_name in ['clickhouse_connect', 'urllib3']:
        logging.getLogger(logger_name).setLevel(logging.WARNING)


def parse_parameter(text: str) -> Dict[str, str]:
    """Parse a NAME=VALUE query parameter"""
    name, sep, value = text.partition('=')
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got '{text}'")
    return {'name': name.strip(), 'value': value}


def load_records(path: str) -> List[Dict[str, Any]]:
    """Load input items from a CSV file or a JSON lines file"""
    if path.lower().endswith('.csv'):
        df = pd.read_csv(path)
        df = df.astype(object).where(df.notna(), None)
        return df.to_dict(orient='records')

    with open(path, 'r', encoding='utf-8') as f:
        return [json.loads(line) for line in f if line.strip()]


def write_rows(rows: List[Dict[str, Any]], output_file: str = None) -> None:
    """Write query rows as CSV, or as JSON lines on stdout"""
    if output_file:
        pd.DataFrame(rows).to_csv(output_file, index=False)
        logger.info(f"📄 Output file: {output_file}")
        return

    for row in rows:
        print(json.dumps(row, default=str, ensure_ascii=False))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="ClickHouse Node Runner",
        epilog="""
Examples:
  clickhouse-node --test-credentials                                   # Check the configured credentials
  clickhouse-node --operation query --query "SELECT 1 AS one"          # Print rows as JSON lines
  clickhouse-node --operation query --query "SELECT * FROM product WHERE quantity > {quantity:Int32}" -p quantity=3
  clickhouse-node --operation insert --table product --input rows.jsonl
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )

    parser.add_argument(
        '--test-credentials',
        action='store_true',
        help='Ping ClickHouse with the configured credentials and exit'
    )

    parser.add_argument(
        '-o', '--operation',
        choices=OPERATIONS,
        default=INSERT,
        help='Operation to run (default: insert)'
    )

    parser.add_argument(
        '-q', '--query',
        help='SQL query to execute (query operation)'
    )

    parser.add_argument(
        '-p', '--param',
        dest='params',
        action='append',
        type=parse_parameter,
        default=[],
        metavar='NAME=VALUE',
        help='Query parameter bound to a {NAME:Type} placeholder, repeatable'
    )

    parser.add_argument(
        '-t', '--table',
        help='Table to insert into (insert operation)'
    )

    parser.add_argument(
        '-i', '--input',
        help='JSON lines or CSV file with the records to insert'
    )

    parser.add_argument(
        '--output',
        help='Write query rows to this CSV file instead of stdout'
    )

    return parser


def main(argv=None) -> int:
    """Main CLI entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if not Config.validate_clickhouse_config():
        logger.error("Set CLICKHOUSE_URL in the environment or in .env")
        return 1

    credential_record = Config.get_credential_record()
    node = ClickHouseNode()

    try:
        if args.test_credentials:
            result = node.test_connection(credential_record)
            if not result.ok:
                logger.error(f"❌ {result.message}")
                return 1
            logger.info(f"🎉 {result.message}")
            return 0

        given = {'query': args.query, 'queryParameters': args.params, 'table': args.table}
        shown = visible_parameters(args.operation)
        for name, value in given.items():
            if value and name not in shown:
                logger.warning(f"⚠️  '{name}' is ignored by the {args.operation} operation")

        items = []
        if args.operation == INSERT:
            if not args.input:
                logger.error("❌ The insert operation needs --input")
                return 1
            items = load_records(args.input)
            logger.info(f"📥 Loaded {len(items)} records from {args.input}")

        context = LocalExecutionContext(
            credentials={CREDENTIAL_NAME: credential_record},
            parameters={'operation': args.operation, **given},
            items=items
        )
        rows = node.execute(context)

        if args.operation == QUERY:
            write_rows(rows, args.output)

    except Exception as e:
        logger.error(f"❌ {args.operation.capitalize()} failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
