"""
Domain Repository
Handles database operations for domains table
"""

from typing import Dict, Any

from domainhub.core.models.entities import (
    Currency, Domain, PaymentStatus, QueryOptions, ServiceStatus,
)
from domainhub.core.repositories.base_repository import BaseRepository, CLIENT_JOIN
from domainhub.db.connection import DatabaseConnection
from domainhub.db.schema import DOMAINS
from domainhub.db.statements import Condition, Delete, Insert, OrderBy, Select, Update
from domainhub.utils.exceptions import ValidationException
from domainhub.utils.helpers import DateUtils, LoggingUtils, NumberUtils
from domainhub.utils.responses import error_response, success_response
from domainhub.utils.validators import ServiceValidator

class DomainRepository(BaseRepository):
    """Repository for domains table operations"""

    def __init__(self, connection: DatabaseConnection):
        super().__init__(connection, DOMAINS, 'DOM_')

    def create(self, domain: Domain) -> Dict[str, Any]:
        """Register a new domain for a client"""
        try:
            name = (domain.name or '').strip().lower()
            ServiceValidator.validate_domain_name(name)
            ServiceValidator.validate_required(domain.registrar, "Registrar")
            ServiceValidator.validate_amount(domain.price, "Price")
            ServiceValidator.validate_date_range(
                domain.registration_date, domain.expiration_date,
                "Registration date", "Expiration date")
            self.ensure_client_exists(domain.client_id)

            if self.count({'name': name}) > 0:
                raise ValidationException(f"Domain {name} already exists")

            record = self.new_record({
                'client_id': domain.client_id,
                'name': name,
                'registrar': domain.registrar,
                'registration_date': domain.registration_date or DateUtils.today(),
                'expiration_date': domain.expiration_date,
                'status': domain.status,
                'primary_ns': domain.primary_ns,
                'secondary_ns': domain.secondary_ns,
                'price': domain.price,
                'currency': domain.currency,
                'payment_status': domain.payment_status,
                'invoice_number': domain.invoice_number,
                'notes': domain.notes,
                'auto_renewal': domain.auto_renewal,
                'created_by': domain.created_by,
            })
            self.connection.execute(Insert(self.table_name, record))

            LoggingUtils.log_business_event(
                "domain_created", "domain", record['id'],
                details={'client_id': domain.client_id, 'name': name}
            )
            return self.get_by_id(record['id'])

        except Exception as e:
            return self.failure("create domain", e)

    def get_by_id(self, domain_id: str) -> Dict[str, Any]:
        try:
            row = self.find_row(domain_id, [CLIENT_JOIN])
            if not row:
                return error_response("Domain not found")
            return success_response(data=self._dict_to_domain(row))
        except Exception as e:
            return self.failure("get domain", e)

    def get_all(self, options: QueryOptions = None) -> Dict[str, Any]:
        """Domains with client details, soonest expiry first by default"""
        try:
            statement = self.build_select(options, [CLIENT_JOIN], OrderBy('expiration_date'))
            rows = self.connection.query(statement)
            return success_response(
                data=[self._dict_to_domain(row) for row in rows],
                pagination=self.pagination_for(options)
            )
        except Exception as e:
            return self.failure("get domains", e)

    def update(self, domain_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        try:
            patch = self.clean_patch(updates)
            if 'name' in patch:
                patch['name'] = patch['name'].strip().lower()
                ServiceValidator.validate_domain_name(patch['name'])
                duplicates = self.connection.query(
                    Select(self.table_name, filters=[Condition('name', patch['name'])]))
                if any(row['id'] != domain_id for row in duplicates):
                    raise ValidationException(f"Domain {patch['name']} already exists")
            if 'price' in patch:
                ServiceValidator.validate_amount(NumberUtils.to_decimal(patch['price']), "Price")
            self.check_patch_dates(domain_id, patch, 'registration_date', "Registration date")
            self.check_patch_client(patch)

            result = self.connection.execute(
                Update(self.table_name, patch, [Condition('id', domain_id)]))
            if result.changes == 0:
                return error_response("Domain not found")

            LoggingUtils.log_business_event(
                "domain_updated", "domain", domain_id,
                details={'fields': sorted(k for k in patch if k != 'updated_at')}
            )
            return self.get_by_id(domain_id)

        except Exception as e:
            return self.failure("update domain", e)

    def delete(self, domain_id: str) -> Dict[str, Any]:
        try:
            result = self.connection.execute(Delete(self.table_name, [Condition('id', domain_id)]))
            if result.changes == 0:
                return error_response("Domain not found")

            LoggingUtils.log_business_event("domain_deleted", "domain", domain_id)
            return success_response(message="Domain deleted successfully")

        except Exception as e:
            return self.failure("delete domain", e)

    def get_by_client_id(self, client_id: str) -> Dict[str, Any]:
        return self.get_all(QueryOptions(filters={'client_id': client_id}))

    def get_expiring_domains(self, days: int = 30) -> Dict[str, Any]:
        """Domains expiring within the next `days` days, soonest first"""
        try:
            rows = self.connection.query(Select(
                self.table_name, joins=[CLIENT_JOIN], order_by=OrderBy('expiration_date')))
            domains = [self._dict_to_domain(row) for row in rows]
            expiring = [d for d in domains
                        if d.days_until_expiry is not None and 0 < d.days_until_expiry <= days]
            return success_response(data=expiring)
        except Exception as e:
            return self.failure("get expiring domains", e)

    def _dict_to_domain(self, domain_data: dict) -> Domain:
        """Convert dictionary to Domain object"""
        expiration_date = DateUtils.parse_date(domain_data.get('expiration_date'))
        return Domain(
            id=domain_data['id'],
            client_id=domain_data.get('client_id') or '',
            name=domain_data.get('name') or '',
            registrar=domain_data.get('registrar') or '',
            registration_date=DateUtils.parse_date(domain_data.get('registration_date')),
            expiration_date=expiration_date,
            status=ServiceStatus(domain_data['status']) if domain_data.get('status') else ServiceStatus.ACTIVE,
            primary_ns=domain_data.get('primary_ns'),
            secondary_ns=domain_data.get('secondary_ns'),
            price=NumberUtils.to_decimal(domain_data.get('price')),
            currency=Currency(domain_data['currency']) if domain_data.get('currency') else Currency.USD,
            payment_status=PaymentStatus(domain_data['payment_status']) if domain_data.get('payment_status') else PaymentStatus.UNPAID,
            invoice_number=domain_data.get('invoice_number'),
            notes=domain_data.get('notes'),
            auto_renewal=bool(domain_data.get('auto_renewal')),
            days_until_expiry=DateUtils.days_until(expiration_date) if expiration_date else None,
            client_name=domain_data.get('client_name'),
            client_email=domain_data.get('client_email'),
            client_company=domain_data.get('client_company'),
            created_at=DateUtils.parse_datetime(domain_data.get('created_at')),
            updated_at=DateUtils.parse_datetime(domain_data.get('updated_at')),
            created_by=domain_data.get('created_by') or 'admin',
        )
