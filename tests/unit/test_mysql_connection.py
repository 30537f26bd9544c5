"""Unit tests for the MySQL backend, with the connection pool patched out."""

from unittest.mock import MagicMock, patch

import pytest
from mysql.connector import Error

from domainhub.db.config import DatabaseConfig
from domainhub.db.mysql_connection import MySQLConnection
from domainhub.db.statements import Condition, Insert, Select, Update
from domainhub.utils.exceptions import BackendException, QueryException


@pytest.fixture
def pooled():
    """MySQLConnection whose pool hands out one MagicMock connection."""
    raw = MagicMock()
    raw.is_connected.return_value = True
    with patch("domainhub.db.mysql_connection.pooling.MySQLConnectionPool") as pool_cls:
        pool_cls.return_value.get_connection.return_value = raw
        connection = MySQLConnection(DatabaseConfig(type="mysql", host="db", port=3306,
                                                    user="root", password=""))
        yield connection, raw, pool_cls


def test_pool_is_built_from_config(pooled):
    _, _, pool_cls = pooled
    kwargs = pool_cls.call_args.kwargs
    assert kwargs["host"] == "db"
    assert kwargs["pool_name"] == "domainhub_pool"
    assert kwargs["client_flags"]


def test_pool_failure_becomes_backend_exception():
    with patch("domainhub.db.mysql_connection.pooling.MySQLConnectionPool",
               side_effect=Error("access denied")):
        with pytest.raises(BackendException):
            MySQLConnection(DatabaseConfig(type="mysql"))


def test_query_uses_dictionary_cursor(pooled):
    connection, raw, _ = pooled
    cursor = raw.cursor.return_value
    cursor.fetchall.return_value = [{"id": "CL_1"}]

    rows = connection.query(Select("clients", filters=[Condition("id", "CL_1")]))

    assert rows == [{"id": "CL_1"}]
    raw.cursor.assert_called_with(dictionary=True)
    cursor.execute.assert_called_once_with(
        "SELECT clients.* FROM clients WHERE clients.id = %s", ("CL_1",))
    raw.close.assert_called_once()


def test_execute_commits_and_reports_rowcount(pooled):
    connection, raw, _ = pooled
    cursor = raw.cursor.return_value
    cursor.rowcount = 1
    cursor.lastrowid = 7

    result = connection.execute(Update("clients", {"notes": "x"}, [Condition("id", "CL_1")]))

    assert (result.changes, result.last_insert_id) == (1, 7)
    raw.commit.assert_called_once()


def test_statement_error_becomes_query_exception(pooled):
    connection, raw, _ = pooled
    raw.cursor.return_value.execute.side_effect = Error("duplicate entry")
    with pytest.raises(QueryException):
        connection.execute(Insert("clients", {"id": "CL_1"}))


def test_transaction_rolls_back_on_failure(pooled):
    connection, raw, _ = pooled

    def failing(conn):
        conn.execute(Insert("clients", {"id": "CL_1"}))
        raise ValueError("boom")

    with pytest.raises(ValueError):
        connection.transaction(failing)

    raw.start_transaction.assert_called_once()
    raw.rollback.assert_called_once()
    raw.commit.assert_not_called()


def test_closed_connection_refuses_work(pooled):
    connection, _, _ = pooled
    connection.close()
    with pytest.raises(BackendException):
        connection.query(Select("clients"))
