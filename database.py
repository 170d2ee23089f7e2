"""
Read-only Snowflake access to the Northwind tables.
Each table is pulled into a DataFrame and handed to the snapshot loader.
"""
import logging
import os
from typing import Dict
import pandas as pd
from dotenv import load_dotenv
import snowflake.connector

from snapshot import TABLES, Snapshot

load_dotenv()

logger = logging.getLogger(__name__)


class SnowflakeManager:
    """Manages the Snowflake connection the snapshot is read from"""

    def __init__(self):
        self.account = os.getenv("SNOWFLAKE_ACCOUNT")
        self.user = os.getenv("SNOWFLAKE_USER")
        self.password = os.getenv("SNOWFLAKE_PASSWORD")
        self.warehouse = os.getenv("SNOWFLAKE_WAREHOUSE")
        self.role = os.getenv("SNOWFLAKE_ROLE")
        self.database = os.getenv("SNOWFLAKE_DATABASE", "NORTHWIND")
        self.schema = os.getenv("SNOWFLAKE_SCHEMA", "PUBLIC")
        self.conn = None
        self.cursor = None

    def connect(self):
        """Establish Snowflake connection"""
        try:
            # Clean account identifier - remove .snowflakecomputing.com if present
            account = self.account
            if account and '.snowflakecomputing.com' in account:
                account = account.replace('.snowflakecomputing.com', '')
                logger.info(f"Cleaned account identifier: {account}")

            self.conn = snowflake.connector.connect(
                user=self.user,
                password=self.password,
                account=account,
                warehouse=self.warehouse,
                role=self.role,
                database=self.database,
                schema=self.schema
            )
            self.cursor = self.conn.cursor()
            logger.info("Successfully connected to Snowflake")
        except Exception as e:
            logger.error(f"Failed to connect to Snowflake: {str(e)}")
            raise

    def disconnect(self):
        """Close Snowflake connection"""
        if self.cursor:
            self.cursor.close()
        if self.conn:
            self.conn.close()
        logger.info("Disconnected from Snowflake")

    def _qualified(self, table: str) -> str:
        return f"{self.database}.{self.schema}.{table}"

    def fetch_table(self, table: str) -> pd.DataFrame:
        """Read a whole table into a DataFrame (Snowflake returns upper-case column names)"""
        try:
            self.cursor.execute(f"SELECT * FROM {self._qualified(table)}")
            columns = [desc[0] for desc in self.cursor.description]
            rows = self.cursor.fetchall()
            logger.info(f"Fetched {len(rows)} rows from {table}")
            return pd.DataFrame(rows, columns=columns)
        except Exception as e:
            logger.error(f"Error fetching {table}: {str(e)}")
            raise

    def load_snapshot(self) -> Snapshot:
        """Pull every Northwind table and build a snapshot from them"""
        logger.info("Loading Northwind snapshot from Snowflake")
        dataframes = {table: self.fetch_table(table) for table in TABLES}
        return Snapshot.from_dataframes(dataframes)

    def verify_data(self) -> Dict[str, int]:
        """Row counts per Northwind table"""
        results = {}

        try:
            for table in TABLES:
                self.cursor.execute(f"SELECT COUNT(*) FROM {self._qualified(table)}")
                count = self.cursor.fetchone()[0]
                results[table] = count
                logger.info(f"{table}: {count} rows")
        except Exception as e:
            logger.error(f"Error verifying data: {str(e)}")
            raise

        return results
