"""
Database Configuration
Reads backend settings from the environment
"""

import os
from dataclasses import dataclass
from typing import Optional, Dict, Any

from domainhub.utils.exceptions import ConfigurationException

_DEFAULT_PORTS = {'mysql': 3306, 'postgresql': 5432}
_DEFAULT_USERS = {'mysql': 'root', 'postgresql': 'postgres'}

@dataclass
class DatabaseConfig:
    """Direct-SQL configuration (DB_TYPE, DB_HOST, ...)"""
    type: str = 'sqlite'  # sqlite, mysql, postgresql
    database: str = 'domainhub'
    host: Optional[str] = None
    port: Optional[int] = None
    user: Optional[str] = None
    password: Optional[str] = None
    ssl: bool = False
    file_path: Optional[str] = './data/domainhub.db'  # sqlite only

    def connection_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for a MySQL connection pool"""
        kwargs = {
            'host': self.host,
            'port': self.port,
            'database': self.database,
            'user': self.user,
            'password': self.password,
            'charset': 'utf8mb4',
            'collation': 'utf8mb4_unicode_ci',
            'autocommit': False,
            'pool_name': 'domainhub_pool',
            'pool_size': 10,
            'pool_reset_session': True,
        }
        if not self.ssl:
            kwargs['ssl_disabled'] = True
        return kwargs

@dataclass
class SupabaseConfig:
    url: str
    anon_key: str
    service_role_key: Optional[str] = None

def get_database_config() -> DatabaseConfig:
    """Build the direct-SQL configuration from DB_* environment variables"""
    db_type = os.getenv('DB_TYPE', 'sqlite').lower()

    if db_type in _DEFAULT_PORTS:
        return DatabaseConfig(
            type=db_type,
            host=os.getenv('DB_HOST', 'localhost'),
            port=int(os.getenv('DB_PORT', _DEFAULT_PORTS[db_type])),
            database=os.getenv('DB_NAME', 'domainhub'),
            user=os.getenv('DB_USER', _DEFAULT_USERS[db_type]),
            password=os.getenv('DB_PASSWORD', ''),
            ssl=os.getenv('DB_SSL', 'false').lower() == 'true',
            file_path=None,
        )

    return DatabaseConfig(
        type='sqlite',
        database=os.getenv('DB_NAME', 'domainhub'),
        file_path=os.getenv('DB_FILE_PATH', './data/domainhub.db'),
    )

def get_supabase_config() -> SupabaseConfig:
    """Hosted-database credentials; raises when URL or anon key is missing"""
    url = os.getenv('SUPABASE_URL') or os.getenv('VITE_SUPABASE_URL')
    anon_key = os.getenv('SUPABASE_ANON_KEY') or os.getenv('VITE_SUPABASE_ANON_KEY')

    if not url or not anon_key:
        raise ConfigurationException(
            "Missing Supabase configuration. Set SUPABASE_URL and SUPABASE_ANON_KEY "
            "environment variables.",
            error_code='SUPABASE_CONFIG_MISSING'
        )

    return SupabaseConfig(
        url=url,
        anon_key=anon_key,
        service_role_key=os.getenv('SUPABASE_SERVICE_ROLE_KEY') or None,
    )
