"""
Database Service
Facade used by the dashboard: repository pass-throughs, dashboard statistics,
backups and data export
"""

import json
from dataclasses import fields
from decimal import Decimal
from enum import Enum
from typing import Callable, List, Dict, Any, Optional
import logging

import pandas as pd

from domainhub.core.models.entities import (
    Client, DashboardStats, Domain, ExportFormat, Hosting, Payment, PaymentStatus,
    QueryOptions, ServiceRef, ServiceStatus,
)
from domainhub.core.repositories.client_repository import ClientRepository
from domainhub.core.repositories.domain_repository import DomainRepository
from domainhub.core.repositories.hosting_repository import HostingRepository
from domainhub.core.repositories.payment_repository import PaymentRepository
from domainhub.db.database import DatabaseManager, db_manager
from domainhub.db.schema import DATA_TABLES
from domainhub.db.statements import insert_block
from domainhub.utils.exceptions import DatabaseException, ValidationException
from domainhub.utils.responses import error_response, success_response, unwrap

logger = logging.getLogger(__name__)

CRITICAL_DAYS = 7
WARNING_DAYS = 30

def entity_to_dict(entity) -> Dict[str, Any]:
    """Flatten an entity into plain column values for export"""
    record = {}
    for item in fields(entity):
        value = getattr(entity, item.name)
        if isinstance(value, ServiceRef):
            record['service_id'] = value.service_id
            record['service_type'] = value.service_type.value
            continue
        if isinstance(value, Enum):
            value = value.value
        record[item.name] = value
    return record

class DatabaseService:
    """Single entry point over the repositories and the database manager"""

    def __init__(self, manager: DatabaseManager = None):
        self.manager = manager or db_manager
        self.clients: Optional[ClientRepository] = None
        self.domains: Optional[DomainRepository] = None
        self.hosting: Optional[HostingRepository] = None
        self.payments: Optional[PaymentRepository] = None

    def initialize(self) -> Dict[str, Any]:
        result = self.manager.initialize()
        if not result['success']:
            return result

        connection = self.manager.get_connection()
        self.clients = ClientRepository(connection)
        self.domains = DomainRepository(connection)
        self.hosting = HostingRepository(connection)
        self.payments = PaymentRepository(connection)
        return result

    def _ensure_initialized(self):
        if self.clients is None or not self.manager.is_initialized:
            result = self.initialize()
            if not result['success']:
                raise DatabaseException(result["error"], error_code="DB_INIT_FAILED")

    def _run(self, operation: Callable[[], Dict[str, Any]]) -> Dict[str, Any]:
        """Run a repository call, reporting initialization failures as an envelope"""
        try:
            self._ensure_initialized()
        except DatabaseException as e:
            logger.error(f"Database service unavailable: {e.message}")
            return error_response(e.message)
        return operation()

    # Client operations
    def get_clients(self, options: QueryOptions = None) -> Dict[str, Any]:
        return self._run(lambda: self.clients.get_all(options))

    def get_client(self, client_id: str) -> Dict[str, Any]:
        return self._run(lambda: self.clients.get_by_id(client_id))

    def create_client(self, client: Client) -> Dict[str, Any]:
        return self._run(lambda: self.clients.create(client))

    def update_client(self, client_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        return self._run(lambda: self.clients.update(client_id, updates))

    def delete_client(self, client_id: str) -> Dict[str, Any]:
        return self._run(lambda: self.clients.delete(client_id))

    def get_clients_with_services(self) -> Dict[str, Any]:
        return self._run(lambda: self.clients.get_clients_with_services())

    # Domain operations
    def get_domains(self, options: QueryOptions = None) -> Dict[str, Any]:
        return self._run(lambda: self.domains.get_all(options))

    def get_domain(self, domain_id: str) -> Dict[str, Any]:
        return self._run(lambda: self.domains.get_by_id(domain_id))

    def create_domain(self, domain: Domain) -> Dict[str, Any]:
        return self._run(lambda: self.domains.create(domain))

    def update_domain(self, domain_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        return self._run(lambda: self.domains.update(domain_id, updates))

    def delete_domain(self, domain_id: str) -> Dict[str, Any]:
        return self._run(lambda: self.domains.delete(domain_id))

    def get_domains_for_client(self, client_id: str) -> Dict[str, Any]:
        return self._run(lambda: self.domains.get_by_client_id(client_id))

    def get_expiring_domains(self, days: int = 30) -> Dict[str, Any]:
        return self._run(lambda: self.domains.get_expiring_domains(days))

    # Hosting operations
    def get_hosting(self, options: QueryOptions = None) -> Dict[str, Any]:
        return self._run(lambda: self.hosting.get_all(options))

    def get_hosting_account(self, hosting_id: str) -> Dict[str, Any]:
        return self._run(lambda: self.hosting.get_by_id(hosting_id))

    def create_hosting(self, hosting: Hosting) -> Dict[str, Any]:
        return self._run(lambda: self.hosting.create(hosting))

    def update_hosting(self, hosting_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        return self._run(lambda: self.hosting.update(hosting_id, updates))

    def delete_hosting(self, hosting_id: str) -> Dict[str, Any]:
        return self._run(lambda: self.hosting.delete(hosting_id))

    def get_hosting_for_client(self, client_id: str) -> Dict[str, Any]:
        return self._run(lambda: self.hosting.get_by_client_id(client_id))

    def get_expiring_hosting(self, days: int = 30) -> Dict[str, Any]:
        return self._run(lambda: self.hosting.get_expiring_hosting(days))

    # Payment operations
    def get_payments(self, options: QueryOptions = None) -> Dict[str, Any]:
        return self._run(lambda: self.payments.get_all(options))

    def get_payment(self, payment_id: str) -> Dict[str, Any]:
        return self._run(lambda: self.payments.get_by_id(payment_id))

    def create_payment(self, payment: Payment) -> Dict[str, Any]:
        return self._run(lambda: self.payments.create(payment))

    def update_payment(self, payment_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        return self._run(lambda: self.payments.update(payment_id, updates))

    def delete_payment(self, payment_id: str) -> Dict[str, Any]:
        return self._run(lambda: self.payments.delete(payment_id))

    def get_payments_for_client(self, client_id: str) -> Dict[str, Any]:
        return self._run(lambda: self.payments.get_by_client_id(client_id))

    def get_overdue_payments(self) -> Dict[str, Any]:
        return self._run(lambda: self.payments.get_overdue_payments())

    def get_dashboard_stats(self) -> Dict[str, Any]:
        """Headline counts, paid revenue per currency and expiry buckets"""
        try:
            self._ensure_initialized()
            results = [self.get_clients(), self.get_domains(),
                       self.get_hosting(), self.get_payments()]
            if not all(result['success'] for result in results):
                return error_response("Failed to fetch dashboard data")

            clients, domains, hosting, payments = (result['data'] for result in results)
            expiring = unwrap(self.get_expiring_domains(WARNING_DAYS), [])

            def revenue(currency: str) -> Decimal:
                return sum(
                    (p.amount for p in payments
                     if p.currency.value == currency and p.payment_status == PaymentStatus.PAID),
                    Decimal('0.00')
                )

            services = list(domains) + list(hosting)
            stats = DashboardStats(
                total_clients=len(clients),
                total_domains=len(domains),
                total_hosting=len(hosting),
                upcoming_renewals=len(expiring),
                unpaid_invoices=sum(1 for p in payments if p.payment_status == PaymentStatus.UNPAID),
                total_revenue_bdt=revenue('BDT'),
                total_revenue_usd=revenue('USD'),
                expired_services=sum(
                    1 for s in services
                    if s.status == ServiceStatus.EXPIRED
                    or (s.days_until_expiry is not None and s.days_until_expiry <= 0)
                ),
                critical_services=sum(
                    1 for s in services
                    if s.days_until_expiry is not None and 0 < s.days_until_expiry <= CRITICAL_DAYS
                ),
                warning_services=sum(
                    1 for s in services
                    if s.days_until_expiry is not None
                    and CRITICAL_DAYS < s.days_until_expiry <= WARNING_DAYS
                ),
                active_services=sum(1 for s in services if s.status == ServiceStatus.ACTIVE),
            )
            return success_response(data=stats)

        except Exception as e:
            logger.error(f"Error calculating dashboard stats: {e}")
            return error_response(f"Failed to calculate dashboard stats: {e}")

    # Backup operations
    def create_backup(self, backup_type: str = 'full') -> Dict[str, Any]:
        return self.manager.backup(backup_type)

    def get_backup_history(self) -> Dict[str, Any]:
        return self.manager.get_backup_history()

    def export_data(self, tables: List[str] = None, export_format: str = 'json') -> Dict[str, Any]:
        """Export the chosen tables as JSON, CSV or SQL text"""
        try:
            self._ensure_initialized()
            if isinstance(export_format, ExportFormat):
                export_format = export_format.value
            try:
                export_format = ExportFormat(export_format.lower())
            except ValueError:
                raise ValidationException(f"Unsupported export format: {export_format}")

            loaders = {
                'clients': self.get_clients,
                'domains': self.get_domains,
                'hosting': self.get_hosting,
                'payments': self.get_payments,
            }
            data: Dict[str, List[Dict[str, Any]]] = {}
            for table in tables or DATA_TABLES:
                if table not in loaders:
                    raise ValidationException(f"Unknown table: {table}")
                data[table] = [entity_to_dict(e) for e in unwrap(loaders[table](), [])]

            if export_format == ExportFormat.CSV:
                content = self._to_csv(data)
            elif export_format == ExportFormat.SQL:
                content = self._to_sql(data)
            else:
                content = json.dumps(data, indent=2, default=str)

            return success_response(
                data=content,
                message=f"Data exported successfully in {export_format.value.upper()} format"
            )

        except ValidationException as e:
            return error_response(e.message)
        except Exception as e:
            logger.error(f"Export failed: {e}")
            return error_response(f"Export failed: {e}")

    @staticmethod
    def _to_csv(data: Dict[str, List[Dict[str, Any]]]) -> str:
        sections = []
        for table, rows in data.items():
            if not rows:
                continue
            df = pd.DataFrame(rows)
            sections.append(f"# {table.upper()}\n{df.to_csv(index=False)}")
        return "\n".join(sections)

    @staticmethod
    def _to_sql(data: Dict[str, List[Dict[str, Any]]]) -> str:
        lines = ["-- DomainHub Data Export", ""]
        for table, rows in data.items():
            lines.append(f"-- Table: {table}")
            if rows:
                lines.append(insert_block(table, rows))
            lines.append("")
        return "\n".join(lines)

    def close(self):
        self.manager.close()
        self.clients = self.domains = self.hosting = self.payments = None
