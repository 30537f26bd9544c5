"""
Table catalogue for DomainHub: column names and their SQL definitions.
Derived fields (days until expiry, converted amount, overdue flags) are not
stored; repositories compute them on every read.
"""

from typing import Dict, List, Tuple

from domainhub.db.statements import CreateTable

CLIENTS = 'clients'
DOMAINS = 'domains'
HOSTING = 'hosting'
PAYMENTS = 'payments'
BACKUP_LOGS = 'backup_logs'

DATA_TABLES = [CLIENTS, DOMAINS, HOSTING, PAYMENTS]

_AUDIT_COLUMNS = [
    ('created_at', 'DATETIME DEFAULT CURRENT_TIMESTAMP'),
    ('updated_at', 'DATETIME DEFAULT CURRENT_TIMESTAMP'),
    ('created_by', 'VARCHAR(64) NOT NULL'),
]

TABLES: Dict[str, List[Tuple[str, str]]] = {
    CLIENTS: [
        ('id', 'VARCHAR(64) PRIMARY KEY'),
        ('full_name', 'VARCHAR(255) NOT NULL'),
        ('company_name', 'VARCHAR(255)'),
        ('email', 'VARCHAR(255) UNIQUE NOT NULL'),
        ('phone_number', 'VARCHAR(64)'),
        ('address', 'TEXT'),
        ('country', "VARCHAR(128) DEFAULT 'United States'"),
        ('timezone', "VARCHAR(64) DEFAULT 'UTC'"),
        ('preferred_contact', "VARCHAR(16) DEFAULT 'email'"),
        ('join_date', 'DATE NOT NULL'),
        ('account_status', "VARCHAR(16) DEFAULT 'active'"),
        ('notes', 'TEXT'),
    ] + _AUDIT_COLUMNS,
    DOMAINS: [
        ('id', 'VARCHAR(64) PRIMARY KEY'),
        ('client_id', 'VARCHAR(64) NOT NULL'),
        ('name', 'VARCHAR(255) UNIQUE NOT NULL'),
        ('registrar', 'VARCHAR(128) NOT NULL'),
        ('registration_date', 'DATE NOT NULL'),
        ('expiration_date', 'DATE NOT NULL'),
        ('status', "VARCHAR(16) DEFAULT 'active'"),
        ('primary_ns', 'VARCHAR(255)'),
        ('secondary_ns', 'VARCHAR(255)'),
        ('price', 'DECIMAL(10,2) NOT NULL'),
        ('currency', "VARCHAR(3) DEFAULT 'USD'"),
        ('payment_status', "VARCHAR(16) DEFAULT 'unpaid'"),
        ('invoice_number', 'VARCHAR(64)'),
        ('notes', 'TEXT'),
        ('auto_renewal', 'BOOLEAN DEFAULT FALSE'),
    ] + _AUDIT_COLUMNS,
    HOSTING: [
        ('id', 'VARCHAR(64) PRIMARY KEY'),
        ('client_id', 'VARCHAR(64) NOT NULL'),
        ('associated_domain_id', 'VARCHAR(64)'),
        ('package_name', 'VARCHAR(255) NOT NULL'),
        ('hosting_type', "VARCHAR(16) DEFAULT 'shared'"),
        ('provider_name', 'VARCHAR(128) NOT NULL'),
        ('account_username', 'VARCHAR(128)'),
        ('account_password', 'VARCHAR(255)'),
        ('control_panel_url', 'VARCHAR(255)'),
        ('storage_space', 'VARCHAR(32)'),
        ('bandwidth_limit', 'VARCHAR(32)'),
        ('ip_address', 'VARCHAR(64)'),
        ('server_location', 'VARCHAR(128)'),
        ('purchase_date', 'DATE NOT NULL'),
        ('expiration_date', 'DATE NOT NULL'),
        ('status', "VARCHAR(16) DEFAULT 'active'"),
        ('price', 'DECIMAL(10,2) NOT NULL'),
        ('currency', "VARCHAR(3) DEFAULT 'USD'"),
        ('payment_status', "VARCHAR(16) DEFAULT 'unpaid'"),
        ('invoice_number', 'VARCHAR(64)'),
        ('usage_percent', 'INT DEFAULT 0'),
        ('last_backup', 'DATE'),
        ('backup_status', 'VARCHAR(16)'),
        ('notes', 'TEXT'),
        ('auto_renewal', 'BOOLEAN DEFAULT FALSE'),
        ('support_contact', 'VARCHAR(255)'),
    ] + _AUDIT_COLUMNS,
    PAYMENTS: [
        ('id', 'VARCHAR(64) PRIMARY KEY'),
        ('client_id', 'VARCHAR(64) NOT NULL'),
        ('service_id', 'VARCHAR(64) NOT NULL'),
        ('service_type', 'VARCHAR(16) NOT NULL'),
        ('amount', 'DECIMAL(10,2) NOT NULL'),
        ('currency', "VARCHAR(3) DEFAULT 'USD'"),
        ('exchange_rate', 'DECIMAL(10,4)'),
        ('payment_date', 'DATE'),
        ('due_date', 'DATE NOT NULL'),
        ('payment_method', 'VARCHAR(32) NOT NULL'),
        ('invoice_number', 'VARCHAR(64)'),
        ('payment_status', "VARCHAR(16) DEFAULT 'unpaid'"),
        ('notes', 'TEXT'),
    ] + _AUDIT_COLUMNS,
    BACKUP_LOGS: [
        ('id', 'INT AUTO_INCREMENT PRIMARY KEY'),
        ('backup_type', 'VARCHAR(16) NOT NULL'),
        ('file_path', 'VARCHAR(255) NOT NULL'),
        ('file_size', 'INT'),
        ('status', "VARCHAR(16) DEFAULT 'in_progress'"),
        ('error_message', 'TEXT'),
        ('started_at', 'DATETIME DEFAULT CURRENT_TIMESTAMP'),
        ('completed_at', 'DATETIME'),
        ('created_by', 'VARCHAR(64)'),
    ],
}

FOREIGN_KEYS: Dict[str, List[str]] = {
    DOMAINS: ['FOREIGN KEY (client_id) REFERENCES clients(id)'],
    HOSTING: [
        'FOREIGN KEY (client_id) REFERENCES clients(id)',
        'FOREIGN KEY (associated_domain_id) REFERENCES domains(id)',
    ],
    PAYMENTS: ['FOREIGN KEY (client_id) REFERENCES clients(id)'],
}

# Tables whose ids are assigned by the backend rather than the repository
AUTO_INCREMENT_TABLES = {BACKUP_LOGS}


def column_names(table: str) -> List[str]:
    return [name for name, _ in TABLES[table]]


def create_table_statements() -> List[CreateTable]:
    """CreateTable statements in dependency order"""
    return [
        CreateTable(table, list(columns), list(FOREIGN_KEYS.get(table, [])))
        for table, columns in TABLES.items()
    ]
