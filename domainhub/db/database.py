"""
Database Connection Management
Selects the storage backend and owns its lifecycle: schema bootstrap, seed
data, backups and backup history for DomainHub
"""

from typing import Any, Dict, Optional
import logging

from domainhub.core.models.entities import BackupLog, BackupType
from domainhub.db.config import DatabaseConfig, get_database_config, get_supabase_config
from domainhub.db.connection import DatabaseConnection
from domainhub.db.fixtures import STARTER_CLIENTS
from domainhub.db.mock_connection import MockDatabaseConnection
from domainhub.db.schema import BACKUP_LOGS, CLIENTS, DATA_TABLES, create_table_statements
from domainhub.db.statements import Condition, Insert, OrderBy, Select, Update, insert_block
from domainhub.utils.exceptions import DatabaseException, DomainHubException
from domainhub.utils.helpers import DateUtils, LoggingUtils
from domainhub.utils.responses import error_response, success_response

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

BACKUP_HISTORY_LIMIT = 50

class DatabaseManager:
    """Owns the active DatabaseConnection for the process"""

    def __init__(self, connection: DatabaseConnection = None, config: DatabaseConfig = None):
        self.connection = connection
        self.config = config
        self.is_initialized = False

    def initialize(self) -> Dict[str, Any]:
        """Connect, create tables and seed starter data; safe to call repeatedly"""
        if self.is_initialized:
            return success_response(message="Database already initialized")

        try:
            if self.connection is None:
                self.connection = self._create_connection()

            self.setup_schema()
            self.seed_initial_data()

            self.is_initialized = True
            logger.info(f"Database initialized using {self.connection.backend_name} backend")
            return success_response(message="Database initialized successfully")

        except Exception as e:
            logger.error(f"Database initialization failed: {e}")
            return error_response(f"Database initialization failed: {e}")

    def _create_connection(self) -> DatabaseConnection:
        """Supabase when credentials are present, then MySQL, then the mock"""
        try:
            # Imported here so the supabase client is only loaded when configured
            from domainhub.db.supabase_connection import SupabaseConnection
            return SupabaseConnection(get_supabase_config())
        except DomainHubException as e:
            logger.info(f"Supabase backend unavailable: {e.message}")

        config = self.config or get_database_config()
        if config.type == 'mysql':
            try:
                from domainhub.db.mysql_connection import MySQLConnection
                return MySQLConnection(config)
            except DomainHubException as e:
                logger.error(f"MySQL backend unavailable: {e.message}")

        logger.warning("No database backend configured, using in-memory mock database")
        return MockDatabaseConnection()

    def setup_schema(self):
        """Create every table that does not exist yet"""
        for statement in create_table_statements():
            self.connection.execute(statement)
        logger.info("Database schema ready")

    def seed_initial_data(self):
        """Insert the starter clients when the clients table is empty"""
        row = self.connection.query_one(Select(CLIENTS, count_only=True))
        if row and row['count'] > 0:
            logger.info("Clients table already populated, skipping seed data")
            return

        for client in STARTER_CLIENTS:
            self.connection.execute(Insert(CLIENTS, dict(client)))
        logger.info(f"Seeded {len(STARTER_CLIENTS)} starter clients")

    def get_connection(self) -> DatabaseConnection:
        """Active connection, initializing on first use"""
        if not self.is_initialized:
            result = self.initialize()
            if not result['success']:
                raise DatabaseException(result['error'], error_code='DB_INIT_FAILED')
        return self.connection

    def backup(self, backup_type: str = 'full') -> Dict[str, Any]:
        """Build an INSERT-statement dump of every data table and log the attempt"""
        if isinstance(backup_type, BackupType):
            backup_type = backup_type.value
        log_id = None
        timestamp = DateUtils.now_iso().replace(':', '-')
        file_path = f"./backups/domainhub_{backup_type}_{timestamp}.sql"

        try:
            connection = self.get_connection()
            log_id = connection.execute(Insert(BACKUP_LOGS, {
                'backup_type': backup_type,
                'file_path': file_path,
                'status': 'in_progress',
                'started_at': DateUtils.now_iso(),
                'created_by': 'system',
            })).last_insert_id
            LoggingUtils.log_backup_event('backup_started', backup_type, {'file_path': file_path})

            content = self.generate_backup_content(backup_type)
            file_size = len(content.encode('utf-8'))

            self._finish_backup_log(log_id, {
                'status': 'success',
                'file_size': file_size,
                'completed_at': DateUtils.now_iso(),
            })
            LoggingUtils.log_backup_event('backup_completed', backup_type,
                                          {'file_path': file_path, 'file_size': file_size})

            return success_response(
                data={'file_path': file_path, 'file_size': file_size, 'content': content},
                message="Backup created successfully"
            )

        except Exception as e:
            logger.error(f"Backup failed: {e}")
            if log_id is not None:
                try:
                    self._finish_backup_log(log_id, {
                        'status': 'failed',
                        'error_message': str(e),
                        'completed_at': DateUtils.now_iso(),
                    })
                except DomainHubException as log_error:
                    logger.error(f"Could not record backup failure: {log_error}")
            LoggingUtils.log_backup_event('backup_failed', backup_type, {'error': str(e)})
            return error_response(f"Backup failed: {e}")

    def _finish_backup_log(self, log_id, values: Dict[str, Any]):
        self.connection.execute(Update(BACKUP_LOGS, values, [Condition('id', log_id)]))

    def generate_backup_content(self, backup_type: str = 'full') -> str:
        lines = [
            "-- DomainHub Database Backup",
            f"-- Type: {backup_type}",
            f"-- Date: {DateUtils.now_iso()}",
            "",
        ]
        for table in DATA_TABLES:
            rows = self.connection.query(Select(table))
            lines.append(f"-- Table: {table}")
            if rows:
                lines.append(insert_block(table, rows))
            lines.append("")
        return "\n".join(lines)

    def get_backup_history(self) -> Dict[str, Any]:
        """Most recent backup log entries, newest first"""
        try:
            rows = self.get_connection().query(Select(
                BACKUP_LOGS,
                order_by=OrderBy('started_at', descending=True),
                limit=BACKUP_HISTORY_LIMIT,
            ))
            return success_response(data=[self._dict_to_backup_log(row) for row in rows])
        except Exception as e:
            logger.error(f"Error fetching backup history: {e}")
            return error_response(f"Failed to fetch backup history: {e}")

    def _dict_to_backup_log(self, data: Dict[str, Any]) -> BackupLog:
        return BackupLog(
            id=data.get('id'),
            backup_type=BackupType(data.get('backup_type') or 'full'),
            file_path=data.get('file_path') or '',
            file_size=data.get('file_size'),
            status=data.get('status') or 'in_progress',
            error_message=data.get('error_message'),
            started_at=DateUtils.parse_datetime(data.get('started_at')),
            completed_at=DateUtils.parse_datetime(data.get('completed_at')),
            created_by=data.get('created_by'),
        )

    @property
    def backend_name(self) -> Optional[str]:
        return self.connection.backend_name if self.connection else None

    def close(self):
        if self.connection is not None:
            self.connection.close()
            logger.info("Database connection closed")
        self.connection = None
        self.is_initialized = False

# Global database manager instance, connected on first use
db_manager = DatabaseManager()
