"""
Database connector for the break-in detector.

Optional PostgreSQL sink for reportable detections:
- detections: one row per reported log line, with verdict and rule
"""

import logging
from typing import Optional
from datetime import datetime
import psycopg2
from psycopg2 import pool

logger = logging.getLogger(__name__)


class DatabaseConnector:
    """
    Manages PostgreSQL database connections for detection records.

    Schema:
        - detections: Reported log lines with verdict/rule/account
    """

    def __init__(
        self,
        host: str,
        port: int,
        database: str,
        user: str,
        password: str,
        ssl_mode: str = "require",
        min_connections: int = 1,
        max_connections: int = 5
    ):
        """
        Initialize database connector with connection pooling.

        Args:
            host: Database host address
            port: Database port number
            database: Database name
            user: Database username
            password: Database password
            ssl_mode: SSL mode (require, prefer, disable)
            min_connections: Minimum connections in pool
            max_connections: Maximum connections in pool
        """
        self.host = host
        self.port = port
        self.database = database
        self.user = user
        self.ssl_mode = ssl_mode
        self.connection_pool: Optional[pool.SimpleConnectionPool] = None

        try:
            logger.info(f"Initializing database connection pool to {host}:{port}/{database}")
            self.connection_pool = psycopg2.pool.SimpleConnectionPool(
                min_connections,
                max_connections,
                host=host,
                port=port,
                database=database,
                user=user,
                password=password,
                sslmode=ssl_mode
            )
            logger.info("Database connection pool created successfully")
            self._initialize_schema()
        except psycopg2.Error as e:
            logger.error(f"Database connection error: {e}")
            raise

    def _initialize_schema(self) -> None:
        """Create the detections table if it doesn't exist."""
        schema_queries = """
        CREATE TABLE IF NOT EXISTS detections (
            id SERIAL PRIMARY KEY,
            detection_time TIMESTAMPTZ NOT NULL,
            account VARCHAR(32),
            verdict VARCHAR(32) NOT NULL,
            rule VARCHAR(32) NOT NULL,
            raw_line TEXT NOT NULL,
            created_at TIMESTAMPTZ DEFAULT NOW()
        );

        CREATE INDEX IF NOT EXISTS idx_detections_account ON detections(account);
        CREATE INDEX IF NOT EXISTS idx_detections_verdict ON detections(verdict);
        """

        conn = None
        try:
            conn = self.get_connection()
            cursor = conn.cursor()
            cursor.execute(schema_queries)
            conn.commit()
            cursor.close()
            logger.info("Database schema verified/created successfully")
        except psycopg2.Error as e:
            logger.error(f"Error initializing database schema: {e}")
            if conn:
                conn.rollback()
            raise
        finally:
            if conn:
                self.release_connection(conn)

    def get_connection(self):
        """Get a connection from the pool."""
        if not self.connection_pool:
            raise RuntimeError("Connection pool is not initialized")
        return self.connection_pool.getconn()

    def release_connection(self, conn) -> None:
        """Release a connection back to the pool."""
        if self.connection_pool and conn:
            self.connection_pool.putconn(conn)

    def insert_detection(
        self,
        detection_time: datetime,
        account: Optional[str],
        verdict: str,
        rule: str,
        raw_line: str
    ) -> Optional[int]:
        """
        Insert a reported detection.

        Args:
            detection_time: Timestamp of the offending log line
            account: Account field of the line, if any
            verdict: Verdict value (e.g. 'banned-ip')
            rule: Rule that produced the verdict
            raw_line: The log line as read

        Returns:
            Detection ID if successful, None otherwise
        """
        query = """
        INSERT INTO detections (detection_time, account, verdict, rule, raw_line)
        VALUES (%s, %s, %s, %s, %s)
        RETURNING id;
        """

        conn = None
        try:
            conn = self.get_connection()
            cursor = conn.cursor()
            cursor.execute(query, (detection_time, account, verdict, rule, raw_line))
            detection_id = cursor.fetchone()[0]
            conn.commit()
            cursor.close()

            logger.debug(f"Detection inserted successfully with ID: {detection_id}")
            return detection_id

        except psycopg2.Error as e:
            logger.error(f"Error inserting detection: {e}")
            if conn:
                conn.rollback()
            return None
        finally:
            if conn:
                self.release_connection(conn)

    def close(self) -> None:
        """Close all connections in the pool."""
        if self.connection_pool:
            self.connection_pool.closeall()
            logger.info("Database connection pool closed")

    def test_connection(self) -> bool:
        """
        Test database connectivity.

        Returns:
            True if connection successful, False otherwise
        """
        conn = None
        try:
            conn = self.get_connection()
            cursor = conn.cursor()
            cursor.execute("SELECT 1")
            cursor.close()
            logger.info("Database connection test successful")
            return True
        except psycopg2.Error as e:
            logger.error(f"Database connection test failed: {e}")
            return False
        finally:
            if conn:
                self.release_connection(conn)
