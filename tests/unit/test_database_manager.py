"""Unit tests for the DatabaseManager lifecycle, backups and backend selection."""

from unittest.mock import patch

import pytest

from domainhub.core.models.entities import BackupLog, BackupType
from domainhub.db.config import DatabaseConfig
from domainhub.db.database import DatabaseManager
from domainhub.db.mock_connection import MockDatabaseConnection
from domainhub.db.schema import BACKUP_LOGS, CLIENTS
from domainhub.db.statements import Select
from domainhub.utils.exceptions import BackendException, DatabaseException


def test_initialize_seeds_starter_clients_once(manager: DatabaseManager, empty_connection):
    first = manager.initialize()
    second = manager.initialize()

    assert first == {"success": True, "message": "Database initialized successfully"}
    assert second == {"success": True, "message": "Database already initialized"}
    ids = [row["id"] for row in empty_connection.query(Select(CLIENTS))]
    assert ids == ["TC001", "EC002"]


def test_seed_skipped_when_clients_exist(seeded_connection):
    manager = DatabaseManager(connection=seeded_connection)
    manager.initialize()
    assert len(seeded_connection.query(Select(CLIENTS))) == 5


def test_falls_back_to_mock_without_credentials(caplog):
    manager = DatabaseManager()
    with caplog.at_level("WARNING"):
        assert manager.initialize()["success"]
    assert manager.backend_name == "mock"
    assert "in-memory mock database" in caplog.text


def test_supabase_selected_when_configured(monkeypatch):
    monkeypatch.setenv("SUPABASE_URL", "https://example.supabase.co")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "anon")
    with patch("domainhub.db.supabase_connection.create_client") as create_client:
        connection = DatabaseManager()._create_connection()
    assert connection.backend_name == "supabase"
    create_client.assert_called_once_with("https://example.supabase.co", "anon")


def test_mysql_failure_falls_back_to_mock():
    manager = DatabaseManager(config=DatabaseConfig(type="mysql", host="nowhere"))
    with patch("domainhub.db.mysql_connection.MySQLConnection.__init__",
               side_effect=BackendException("unreachable")):
        connection = manager._create_connection()
    assert isinstance(connection, MockDatabaseConnection)


def test_get_connection_initializes_lazily(manager: DatabaseManager, empty_connection):
    assert manager.get_connection() is empty_connection
    assert manager.is_initialized


def test_get_connection_raises_when_initialization_fails(manager: DatabaseManager):
    with patch.object(manager, "setup_schema", side_effect=BackendException("down")):
        with pytest.raises(DatabaseException):
            manager.get_connection()


def test_backup_builds_dump_and_logs_success(manager: DatabaseManager, empty_connection):
    result = manager.backup()

    assert result["success"]
    data = result["data"]
    assert data["file_path"].startswith("./backups/domainhub_full_")
    assert data["file_path"].endswith(".sql")
    assert data["file_size"] == len(data["content"].encode("utf-8"))
    content = data["content"]
    assert content.startswith("-- DomainHub Database Backup\n-- Type: full\n")
    assert "-- Table: clients\nINSERT INTO clients" in content
    assert "-- Table: domains\n\n" in content

    log = empty_connection.query_one(Select(BACKUP_LOGS))
    assert log["status"] == "success"
    assert log["file_size"] == data["file_size"]


def test_backup_failure_is_logged(manager: DatabaseManager, empty_connection):
    manager.initialize()
    with patch.object(manager, "generate_backup_content", side_effect=BackendException("disk")):
        result = manager.backup(BackupType.INCREMENTAL)

    assert result == {"success": False, "error": "Backup failed: disk"}
    log = empty_connection.query_one(Select(BACKUP_LOGS))
    assert (log["status"], log["error_message"]) == ("failed", "disk")


def test_backup_history_newest_first(manager: DatabaseManager):
    manager.backup()
    manager.backup("incremental")
    logs = manager.connection.data[BACKUP_LOGS]
    logs[0]["started_at"] = "2020-01-01T00:00:00"

    history = manager.get_backup_history()["data"]

    assert all(isinstance(entry, BackupLog) for entry in history)
    assert [entry.id for entry in history] == [2, 1]
    assert history[0].backup_type == BackupType.INCREMENTAL


def test_close_resets_state(manager: DatabaseManager):
    manager.initialize()
    manager.close()
    assert manager.connection is None
    assert not manager.is_initialized
