"""
Payment Repository
Handles database operations for payments table
"""

from typing import Optional, Dict, Any, Tuple

from domainhub.core.models.entities import (
    Currency, Payment, PaymentMethod, PaymentStatus, QueryOptions, ServiceRef, ServiceType,
)
from domainhub.core.repositories.base_repository import BaseRepository, CLIENT_JOIN
from domainhub.db.connection import DatabaseConnection
from domainhub.db.schema import DOMAINS, HOSTING, PAYMENTS
from domainhub.db.statements import Condition, Delete, Insert, OrderBy, Select, Update
from domainhub.utils.exceptions import NotFoundException, ValidationException
from domainhub.utils.helpers import DateUtils, LoggingUtils, NumberUtils
from domainhub.utils.responses import error_response, success_response
from domainhub.utils.validators import ServiceValidator

OTHER_SERVICE_NAME = 'Other Service'

# Table and display column behind each billable service kind
SERVICE_SOURCES = {
    ServiceType.DOMAIN: (DOMAINS, 'name'),
    ServiceType.HOSTING: (HOSTING, 'package_name'),
}

class PaymentRepository(BaseRepository):
    """Repository for payments table operations"""

    def __init__(self, connection: DatabaseConnection):
        super().__init__(connection, PAYMENTS, 'PAY_')

    def create(self, payment: Payment) -> Dict[str, Any]:
        """Record a payment / invoice against one client service"""
        try:
            if payment.service is None:
                raise ValidationException("Service is required")
            ServiceValidator.validate_amount(payment.amount)
            ServiceValidator.validate_exchange_rate(payment.exchange_rate)
            ServiceValidator.validate_required(payment.due_date, "Due date")
            self.ensure_client_exists(payment.client_id)
            if self.resolve_service_name(payment.service) is None:
                raise NotFoundException(
                    f"{payment.service.service_type.value.capitalize()} "
                    f"{payment.service.service_id} not found")

            record = self.new_record({
                'client_id': payment.client_id,
                'service_id': payment.service.service_id,
                'service_type': payment.service.service_type,
                'amount': payment.amount,
                'currency': payment.currency,
                'exchange_rate': payment.exchange_rate,
                'payment_date': payment.payment_date,
                'due_date': payment.due_date,
                'payment_method': payment.payment_method,
                'invoice_number': payment.invoice_number,
                'payment_status': payment.payment_status,
                'notes': payment.notes,
                'created_by': payment.created_by,
            })
            self.connection.execute(Insert(self.table_name, record))

            LoggingUtils.log_business_event(
                "payment_created", "payment", record['id'],
                details={
                    'client_id': payment.client_id,
                    'amount': str(payment.amount),
                    'currency': payment.currency.value,
                }
            )
            return self.get_by_id(record['id'])

        except Exception as e:
            return self.failure("create payment", e)

    def get_by_id(self, payment_id: str) -> Dict[str, Any]:
        try:
            row = self.find_row(payment_id, [CLIENT_JOIN])
            if not row:
                return error_response("Payment not found")
            return success_response(data=self._dict_to_payment(row, {}))
        except Exception as e:
            return self.failure("get payment", e)

    def get_all(self, options: QueryOptions = None) -> Dict[str, Any]:
        """Payments with client and service names, earliest due first by default"""
        try:
            statement = self.build_select(options, [CLIENT_JOIN], OrderBy('due_date'))
            rows = self.connection.query(statement)
            names: Dict[Tuple[ServiceType, str], Optional[str]] = {}
            return success_response(
                data=[self._dict_to_payment(row, names) for row in rows],
                pagination=self.pagination_for(options)
            )
        except Exception as e:
            return self.failure("get payments", e)

    def update(self, payment_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        try:
            updates = dict(updates or {})
            service = updates.pop('service', None)
            if isinstance(service, ServiceRef):
                updates['service_id'] = service.service_id
                updates['service_type'] = service.service_type

            patch = self.clean_patch(updates)
            if 'amount' in patch:
                ServiceValidator.validate_amount(NumberUtils.to_decimal(patch['amount']))
            if 'exchange_rate' in patch:
                ServiceValidator.validate_exchange_rate(patch['exchange_rate'])
            self.check_patch_client(patch)
            self._check_patch_service(payment_id, patch)

            result = self.connection.execute(
                Update(self.table_name, patch, [Condition('id', payment_id)]))
            if result.changes == 0:
                return error_response("Payment not found")

            LoggingUtils.log_business_event(
                "payment_updated", "payment", payment_id,
                details={'fields': sorted(k for k in patch if k != 'updated_at')}
            )
            return self.get_by_id(payment_id)

        except Exception as e:
            return self.failure("update payment", e)

    def delete(self, payment_id: str) -> Dict[str, Any]:
        try:
            result = self.connection.execute(Delete(self.table_name, [Condition('id', payment_id)]))
            if result.changes == 0:
                return error_response("Payment not found")

            LoggingUtils.log_business_event("payment_deleted", "payment", payment_id)
            return success_response(message="Payment deleted successfully")

        except Exception as e:
            return self.failure("delete payment", e)

    def get_by_client_id(self, client_id: str) -> Dict[str, Any]:
        return self.get_all(QueryOptions(filters={'client_id': client_id}))

    def get_overdue_payments(self) -> Dict[str, Any]:
        """Unpaid payments past their due date, most overdue first"""
        try:
            rows = self.connection.query(Select(self.table_name, joins=[CLIENT_JOIN]))
            names: Dict[Tuple[ServiceType, str], Optional[str]] = {}
            overdue = [p for p in (self._dict_to_payment(row, names) for row in rows)
                       if p.is_overdue]
            overdue.sort(key=lambda p: p.days_overdue, reverse=True)
            return success_response(data=overdue)
        except Exception as e:
            return self.failure("get overdue payments", e)

    def resolve_service_name(self, service: ServiceRef,
                             cache: Dict[Tuple[ServiceType, str], Optional[str]] = None) -> Optional[str]:
        """Display name of the referenced service, None when it no longer exists"""
        if service.service_type == ServiceType.OTHER:
            return OTHER_SERVICE_NAME

        key = (service.service_type, service.service_id)
        if cache is not None and key in cache:
            return cache[key]

        table, column = SERVICE_SOURCES[service.service_type]
        row = self.connection.query_one(
            Select(table, filters=[Condition('id', service.service_id)]))
        name = row.get(column) if row else None

        if cache is not None:
            cache[key] = name
        return name

    def _check_patch_service(self, payment_id: str, patch: Dict[str, Any]):
        if 'service_id' not in patch and 'service_type' not in patch:
            return
        row = self.find_row(payment_id) or {}
        service_type = patch.get('service_type', row.get('service_type'))
        service_id = patch.get('service_id', row.get('service_id'))
        if not service_type or not service_id:
            raise ValidationException("Service is required")
        try:
            service = ServiceRef(ServiceType(service_type), service_id)
        except ValueError:
            raise ValidationException(f"Invalid service type: {service_type}")
        if self.resolve_service_name(service) is None:
            raise NotFoundException(
                f"{service.service_type.value.capitalize()} {service.service_id} not found")

    def _dict_to_payment(self, payment_data: dict,
                         names: Dict[Tuple[ServiceType, str], Optional[str]]) -> Payment:
        """Convert dictionary to Payment object, deriving conversion and overdue fields"""
        service = ServiceRef(ServiceType(payment_data['service_type']), payment_data['service_id'])
        amount = NumberUtils.to_decimal(payment_data.get('amount'))
        currency = Currency(payment_data['currency']) if payment_data.get('currency') else Currency.USD
        exchange_rate = NumberUtils.to_decimal(payment_data.get('exchange_rate'))
        due_date = DateUtils.parse_date(payment_data.get('due_date'))
        status = PaymentStatus(payment_data['payment_status']) if payment_data.get('payment_status') else PaymentStatus.UNPAID

        # Whole calendar days: a payment due today becomes overdue tomorrow
        is_overdue = bool(due_date) and DateUtils.today() > due_date and status != PaymentStatus.PAID

        return Payment(
            id=payment_data['id'],
            client_id=payment_data.get('client_id') or '',
            service=service,
            amount=amount,
            currency=currency,
            exchange_rate=exchange_rate,
            payment_date=DateUtils.parse_date(payment_data.get('payment_date')),
            due_date=due_date,
            payment_method=PaymentMethod(payment_data['payment_method']) if payment_data.get('payment_method') else PaymentMethod.CASH,
            invoice_number=payment_data.get('invoice_number'),
            payment_status=status,
            notes=payment_data.get('notes'),
            converted_amount=NumberUtils.convert_amount(amount, currency.value, exchange_rate),
            is_overdue=is_overdue,
            days_overdue=DateUtils.days_overdue(due_date) if is_overdue else 0,
            client_name=payment_data.get('client_name'),
            client_email=payment_data.get('client_email'),
            service_name=self.resolve_service_name(service, names),
            created_at=DateUtils.parse_datetime(payment_data.get('created_at')),
            updated_at=DateUtils.parse_datetime(payment_data.get('updated_at')),
            created_by=payment_data.get('created_by') or 'admin',
        )
