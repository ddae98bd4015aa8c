# clickhouse_node/config.py
import os
import logging
from typing import Dict, Any
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

TRUE_VALUES = ('1', 'true', 'yes', 'on')


class Config:
    """Configuration settings for the local runner"""

    # ClickHouse settings - match .env variable names
    CLICKHOUSE_URL = os.getenv('CLICKHOUSE_URL')
    CLICKHOUSE_DATABASE = os.getenv('CLICKHOUSE_DATABASE', 'default')
    CLICKHOUSE_USER = os.getenv('CLICKHOUSE_USER', 'default')
    CLICKHOUSE_PASSWORD = os.getenv('CLICKHOUSE_PASSWORD', '')
    CLICKHOUSE_ALLOW_UNAUTHORIZED_CERTS = os.getenv('CLICKHOUSE_ALLOW_UNAUTHORIZED_CERTS', 'false').lower() in TRUE_VALUES

    @classmethod
    def get_credential_record(cls) -> Dict[str, Any]:
        """Get the stored credential record the way the host would hand it over"""
        return {
            'url': cls.CLICKHOUSE_URL,
            'database': cls.CLICKHOUSE_DATABASE,
            'user': cls.CLICKHOUSE_USER,
            'password': cls.CLICKHOUSE_PASSWORD,
            'allowUnauthorizedCerts': cls.CLICKHOUSE_ALLOW_UNAUTHORIZED_CERTS
        }

    @classmethod
    def validate_clickhouse_config(cls) -> bool:
        """Validate ClickHouse configuration parameters"""
        if not cls.CLICKHOUSE_URL:
            logger.error("❌ Missing ClickHouse configuration: CLICKHOUSE_URL")
            return False

        return True
