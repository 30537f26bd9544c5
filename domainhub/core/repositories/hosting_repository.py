"""
Hosting Repository
Handles database operations for hosting table
"""

from typing import Dict, Any

from domainhub.core.models.entities import (
    BackupStatus, Currency, Hosting, HostingType, PaymentStatus, QueryOptions, ServiceStatus,
)
from domainhub.core.repositories.base_repository import BaseRepository, CLIENT_JOIN
from domainhub.db.connection import DatabaseConnection
from domainhub.db.schema import DOMAINS, HOSTING
from domainhub.db.statements import Condition, Delete, Insert, Join, OrderBy, Select, Update
from domainhub.utils.helpers import DateUtils, LoggingUtils, NumberUtils
from domainhub.utils.responses import error_response, success_response
from domainhub.utils.validators import ServiceValidator

# The linked domain is optional, so hosting rows survive without one
DOMAIN_JOIN = Join(DOMAINS, 'associated_domain_id', {'name': 'domain_name'}, required=False)

class HostingRepository(BaseRepository):
    """Repository for hosting table operations"""

    def __init__(self, connection: DatabaseConnection):
        super().__init__(connection, HOSTING, 'HOST_')
        self.joins = [CLIENT_JOIN, DOMAIN_JOIN]

    def create(self, hosting: Hosting) -> Dict[str, Any]:
        """Create a hosting account for a client"""
        try:
            ServiceValidator.validate_required(hosting.package_name, "Package name")
            ServiceValidator.validate_required(hosting.provider_name, "Provider name")
            ServiceValidator.validate_amount(hosting.price, "Price")
            ServiceValidator.validate_usage_percent(hosting.usage_percent)
            ServiceValidator.validate_date_range(
                hosting.purchase_date, hosting.expiration_date,
                "Purchase date", "Expiration date")
            self.ensure_client_exists(hosting.client_id)

            record = self.new_record({
                'client_id': hosting.client_id,
                'associated_domain_id': hosting.associated_domain_id,
                'package_name': hosting.package_name,
                'hosting_type': hosting.hosting_type,
                'provider_name': hosting.provider_name,
                'account_username': hosting.account_username,
                'account_password': hosting.account_password,
                'control_panel_url': hosting.control_panel_url,
                'storage_space': hosting.storage_space,
                'bandwidth_limit': hosting.bandwidth_limit,
                'ip_address': hosting.ip_address,
                'server_location': hosting.server_location,
                'purchase_date': hosting.purchase_date or DateUtils.today(),
                'expiration_date': hosting.expiration_date,
                'status': hosting.status,
                'price': hosting.price,
                'currency': hosting.currency,
                'payment_status': hosting.payment_status,
                'invoice_number': hosting.invoice_number,
                'usage_percent': hosting.usage_percent,
                'last_backup': hosting.last_backup,
                'backup_status': hosting.backup_status,
                'notes': hosting.notes,
                'auto_renewal': hosting.auto_renewal,
                'support_contact': hosting.support_contact,
                'created_by': hosting.created_by,
            })
            self.connection.execute(Insert(self.table_name, record))

            LoggingUtils.log_business_event(
                "hosting_created", "hosting", record['id'],
                details={'client_id': hosting.client_id, 'package_name': hosting.package_name}
            )
            return self.get_by_id(record['id'])

        except Exception as e:
            return self.failure("create hosting", e)

    def get_by_id(self, hosting_id: str) -> Dict[str, Any]:
        try:
            row = self.find_row(hosting_id, self.joins)
            if not row:
                return error_response("Hosting not found")
            return success_response(data=self._dict_to_hosting(row))
        except Exception as e:
            return self.failure("get hosting", e)

    def get_all(self, options: QueryOptions = None) -> Dict[str, Any]:
        try:
            statement = self.build_select(options, self.joins, OrderBy('expiration_date'))
            rows = self.connection.query(statement)
            return success_response(
                data=[self._dict_to_hosting(row) for row in rows],
                pagination=self.pagination_for(options)
            )
        except Exception as e:
            return self.failure("get hosting", e)

    def update(self, hosting_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        try:
            patch = self.clean_patch(updates)
            if 'usage_percent' in patch:
                ServiceValidator.validate_usage_percent(patch['usage_percent'])
            if 'price' in patch:
                ServiceValidator.validate_amount(NumberUtils.to_decimal(patch['price']), "Price")
            self.check_patch_dates(hosting_id, patch, 'purchase_date', "Purchase date")
            self.check_patch_client(patch)

            result = self.connection.execute(
                Update(self.table_name, patch, [Condition('id', hosting_id)]))
            if result.changes == 0:
                return error_response("Hosting not found")

            LoggingUtils.log_business_event(
                "hosting_updated", "hosting", hosting_id,
                details={'fields': sorted(k for k in patch if k != 'updated_at')}
            )
            return self.get_by_id(hosting_id)

        except Exception as e:
            return self.failure("update hosting", e)

    def delete(self, hosting_id: str) -> Dict[str, Any]:
        try:
            result = self.connection.execute(Delete(self.table_name, [Condition('id', hosting_id)]))
            if result.changes == 0:
                return error_response("Hosting not found")

            LoggingUtils.log_business_event("hosting_deleted", "hosting", hosting_id)
            return success_response(message="Hosting deleted successfully")

        except Exception as e:
            return self.failure("delete hosting", e)

    def get_by_client_id(self, client_id: str) -> Dict[str, Any]:
        return self.get_all(QueryOptions(filters={'client_id': client_id}))

    def get_expiring_hosting(self, days: int = 30) -> Dict[str, Any]:
        """Hosting accounts expiring within the next `days` days, soonest first"""
        try:
            rows = self.connection.query(Select(
                self.table_name, joins=self.joins, order_by=OrderBy('expiration_date')))
            accounts = [self._dict_to_hosting(row) for row in rows]
            expiring = [h for h in accounts
                        if h.days_until_expiry is not None and 0 < h.days_until_expiry <= days]
            return success_response(data=expiring)
        except Exception as e:
            return self.failure("get expiring hosting", e)

    def _dict_to_hosting(self, hosting_data: dict) -> Hosting:
        """Convert dictionary to Hosting object"""
        expiration_date = DateUtils.parse_date(hosting_data.get('expiration_date'))
        return Hosting(
            id=hosting_data['id'],
            client_id=hosting_data.get('client_id') or '',
            associated_domain_id=hosting_data.get('associated_domain_id'),
            package_name=hosting_data.get('package_name') or '',
            hosting_type=HostingType(hosting_data['hosting_type']) if hosting_data.get('hosting_type') else HostingType.SHARED,
            provider_name=hosting_data.get('provider_name') or '',
            account_username=hosting_data.get('account_username'),
            account_password=hosting_data.get('account_password'),
            control_panel_url=hosting_data.get('control_panel_url'),
            storage_space=hosting_data.get('storage_space'),
            bandwidth_limit=hosting_data.get('bandwidth_limit'),
            ip_address=hosting_data.get('ip_address'),
            server_location=hosting_data.get('server_location'),
            purchase_date=DateUtils.parse_date(hosting_data.get('purchase_date')),
            expiration_date=expiration_date,
            status=ServiceStatus(hosting_data['status']) if hosting_data.get('status') else ServiceStatus.ACTIVE,
            price=NumberUtils.to_decimal(hosting_data.get('price')),
            currency=Currency(hosting_data['currency']) if hosting_data.get('currency') else Currency.USD,
            payment_status=PaymentStatus(hosting_data['payment_status']) if hosting_data.get('payment_status') else PaymentStatus.UNPAID,
            invoice_number=hosting_data.get('invoice_number'),
            usage_percent=int(hosting_data.get('usage_percent') or 0),
            last_backup=DateUtils.parse_date(hosting_data.get('last_backup')),
            backup_status=BackupStatus(hosting_data['backup_status']) if hosting_data.get('backup_status') else None,
            notes=hosting_data.get('notes'),
            auto_renewal=bool(hosting_data.get('auto_renewal')),
            support_contact=hosting_data.get('support_contact'),
            days_until_expiry=DateUtils.days_until(expiration_date) if expiration_date else None,
            client_name=hosting_data.get('client_name'),
            client_email=hosting_data.get('client_email'),
            client_company=hosting_data.get('client_company'),
            domain_name=hosting_data.get('domain_name'),
            created_at=DateUtils.parse_datetime(hosting_data.get('created_at')),
            updated_at=DateUtils.parse_datetime(hosting_data.get('updated_at')),
            created_by=hosting_data.get('created_by') or 'admin',
        )
