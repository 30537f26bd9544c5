"""
MySQL Database Connection
Pooled mysql-connector backend that runs rendered statements directly
"""

from mysql.connector import pooling, Error
from mysql.connector.constants import ClientFlag
from typing import Any, Callable, Dict, List
import logging
from contextlib import contextmanager

from domainhub.db.config import DatabaseConfig
from domainhub.db.connection import DatabaseConnection, ExecuteResult, T
from domainhub.db.statements import Select
from domainhub.utils.exceptions import BackendException, QueryException

logger = logging.getLogger(__name__)

class MySQLConnection(DatabaseConnection):
    """Connection pool wrapper executing statements as parameterized SQL"""

    backend_name = 'mysql'

    def __init__(self, config: DatabaseConfig):
        self.config = config
        self.connection_pool = None
        self._initialize_pool()

    def _initialize_pool(self):
        """Initialize connection pool"""
        try:
            pool_config = self.config.connection_kwargs()
            # rowcount reports matched rows, not only rows whose values changed
            pool_config['client_flags'] = [ClientFlag.FOUND_ROWS]
            self.connection_pool = pooling.MySQLConnectionPool(**pool_config)
            logger.info("MySQL connection pool initialized successfully")
        except Error as e:
            logger.error(f"Error creating connection pool: {e}")
            raise BackendException(f"Failed to create MySQL pool: {e}")

    @contextmanager
    def get_connection(self):
        """Context manager for pooled connections"""
        if self.connection_pool is None:
            raise BackendException("MySQL connection is closed")
        connection = None
        try:
            connection = self.connection_pool.get_connection()
            yield connection
        except Error as e:
            if connection:
                connection.rollback()
            logger.error(f"Database error: {e}")
            raise BackendException(str(e))
        finally:
            if connection and connection.is_connected():
                connection.close()

    def query(self, statement: Select) -> List[Dict[str, Any]]:
        if not isinstance(statement, Select):
            raise QueryException(f"query() expects a Select, got {type(statement).__name__}")
        with self.get_connection() as connection:
            return _run_query(connection, statement)

    def execute(self, statement) -> ExecuteResult:
        if isinstance(statement, Select):
            raise QueryException("execute() cannot run a Select")
        with self.get_connection() as connection:
            result = _run_execute(connection, statement)
            connection.commit()
            return result

    def transaction(self, callback: Callable[[DatabaseConnection], T]) -> T:
        """Run callback on one pooled connection; commit on success, rollback on error"""
        with self.get_connection() as connection:
            connection.start_transaction()
            try:
                result = callback(_TransactionConnection(connection))
                connection.commit()
                return result
            except Exception:
                connection.rollback()
                logger.error("Transaction rolled back")
                raise

    def close(self) -> None:
        self.connection_pool = None

class _TransactionConnection(DatabaseConnection):
    """Handle bound to the connection of an open transaction"""

    backend_name = 'mysql'

    def __init__(self, connection):
        self._connection = connection

    def query(self, statement: Select) -> List[Dict[str, Any]]:
        return _run_query(self._connection, statement)

    def execute(self, statement) -> ExecuteResult:
        return _run_execute(self._connection, statement)

    def transaction(self, callback: Callable[[DatabaseConnection], T]) -> T:
        # Already inside a transaction
        return callback(self)

    def close(self) -> None:
        pass

def _run_query(connection, statement: Select) -> List[Dict[str, Any]]:
    sql, params = statement.to_sql()
    cursor = connection.cursor(dictionary=True)
    try:
        cursor.execute(sql, tuple(params))
        return cursor.fetchall() or []
    except Error as e:
        raise QueryException(f"Query failed: {e}")
    finally:
        cursor.close()

def _run_execute(connection, statement) -> ExecuteResult:
    sql, params = statement.to_sql()
    cursor = connection.cursor()
    try:
        cursor.execute(sql, tuple(params))
        return ExecuteResult(changes=max(cursor.rowcount, 0), last_insert_id=cursor.lastrowid)
    except Error as e:
        raise QueryException(f"Statement failed: {e}")
    finally:
        cursor.close()
