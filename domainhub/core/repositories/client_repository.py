"""
Client Repository
Handles database operations for clients table
"""

from decimal import Decimal
from typing import Dict, Any

from domainhub.core.models.entities import Client, ContactMethod, AccountStatus, QueryOptions
from domainhub.core.repositories.base_repository import BaseRepository
from domainhub.db.connection import DatabaseConnection
from domainhub.db.schema import CLIENTS, DOMAINS, HOSTING, PAYMENTS
from domainhub.db.statements import Condition, Delete, Insert, OrderBy, Select, Update
from domainhub.utils.exceptions import ValidationException
from domainhub.utils.helpers import DateUtils, LoggingUtils, NumberUtils, StringUtils
from domainhub.utils.responses import error_response, success_response
from domainhub.utils.validators import ServiceValidator

RENEWAL_WINDOW_DAYS = 30

class ClientRepository(BaseRepository):
    """Repository for clients table operations"""

    def __init__(self, connection: DatabaseConnection):
        super().__init__(connection, CLIENTS, 'CL_')

    def create(self, client: Client) -> Dict[str, Any]:
        """Create a new client"""
        try:
            ServiceValidator.validate_required(client.full_name, "Full name")
            email = (client.email or '').strip().lower()
            ServiceValidator.validate_email(email)

            if self.count({'email': email}) > 0:
                raise ValidationException(f"A client with email {email} already exists")

            record = self.new_record({
                'full_name': StringUtils.clean_string(client.full_name),
                'company_name': client.company_name,
                'email': email,
                'phone_number': client.phone_number,
                'address': client.address,
                'country': client.country,
                'timezone': client.timezone,
                'preferred_contact': client.preferred_contact,
                'join_date': client.join_date or DateUtils.today(),
                'account_status': client.account_status,
                'notes': client.notes,
                'created_by': client.created_by,
            })
            self.connection.execute(Insert(self.table_name, record))

            LoggingUtils.log_business_event(
                "client_created", "client", record['id'],
                details={'email': record['email']}
            )
            return self.get_by_id(record['id'])

        except Exception as e:
            return self.failure("create client", e)

    def get_by_id(self, client_id: str) -> Dict[str, Any]:
        """Find client by ID"""
        try:
            row = self.find_row(client_id)
            if not row:
                return error_response("Client not found")
            return success_response(data=self._dict_to_client(row))
        except Exception as e:
            return self.failure("get client", e)

    def get_all(self, options: QueryOptions = None) -> Dict[str, Any]:
        """All clients, optionally filtered, sorted and paginated"""
        try:
            rows = self.connection.query(self.build_select(options))
            return success_response(
                data=[self._dict_to_client(row) for row in rows],
                pagination=self.pagination_for(options)
            )
        except Exception as e:
            return self.failure("get clients", e)

    def update(self, client_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        """Partially update a client"""
        try:
            patch = self.clean_patch(updates)
            if 'email' in patch:
                email = patch['email'].strip().lower()
                ServiceValidator.validate_email(email)
                duplicates = self.connection.query(
                    Select(self.table_name, filters=[Condition('email', email)]))
                if any(row['id'] != client_id for row in duplicates):
                    raise ValidationException(f"A client with email {email} already exists")
                patch['email'] = email

            result = self.connection.execute(
                Update(self.table_name, patch, [Condition('id', client_id)]))
            if result.changes == 0:
                return error_response("Client not found")

            LoggingUtils.log_business_event(
                "client_updated", "client", client_id,
                details={'fields': sorted(k for k in patch if k != 'updated_at')}
            )
            return self.get_by_id(client_id)

        except Exception as e:
            return self.failure("update client", e)

    def delete(self, client_id: str) -> Dict[str, Any]:
        """Delete a client"""
        try:
            result = self.connection.execute(Delete(self.table_name, [Condition('id', client_id)]))
            if result.changes == 0:
                return error_response("Client not found")

            LoggingUtils.log_business_event("client_deleted", "client", client_id)
            return success_response(message="Client deleted successfully")

        except Exception as e:
            return self.failure("delete client", e)

    def get_clients_with_services(self) -> Dict[str, Any]:
        """Clients ordered by name with service counts, renewals and spend"""
        try:
            clients = self.connection.query(Select(CLIENTS, order_by=OrderBy('full_name')))
            domains = self.connection.query(Select(DOMAINS))
            hosting = self.connection.query(Select(HOSTING))
            payments = self.connection.query(Select(PAYMENTS))

            results = []
            for row in clients:
                client = self._dict_to_client(row)
                client_domains = [d for d in domains if d.get('client_id') == client.id]
                client_hosting = [h for h in hosting if h.get('client_id') == client.id]
                paid = [p for p in payments
                        if p.get('client_id') == client.id and p.get('payment_status') == 'paid']

                client.total_domains = len(client_domains)
                client.total_hosting = len(client_hosting)
                client.total_services = client.total_domains + client.total_hosting
                client.upcoming_renewals = sum(
                    1 for service in client_domains + client_hosting
                    if self._renews_soon(service.get('expiration_date'))
                )
                client.total_spent = sum(
                    (NumberUtils.to_decimal(p.get('amount')) or Decimal('0') for p in paid),
                    Decimal('0.00')
                )
                payment_dates = [DateUtils.parse_date(p.get('payment_date'))
                                 for p in paid if p.get('payment_date')]
                client.last_payment = max(payment_dates) if payment_dates else None
                results.append(client)

            return success_response(data=results)

        except Exception as e:
            return self.failure("get clients with services", e)

    @staticmethod
    def _renews_soon(expiration_date) -> bool:
        expiry = DateUtils.parse_date(expiration_date)
        if expiry is None:
            return False
        return 0 < DateUtils.days_until(expiry) <= RENEWAL_WINDOW_DAYS

    def _dict_to_client(self, client_data: dict) -> Client:
        """Convert dictionary to Client object"""
        return Client(
            id=client_data['id'],
            full_name=client_data.get('full_name') or '',
            company_name=client_data.get('company_name'),
            email=client_data.get('email') or '',
            phone_number=client_data.get('phone_number'),
            address=client_data.get('address'),
            country=client_data.get('country') or 'United States',
            timezone=client_data.get('timezone') or 'UTC',
            preferred_contact=ContactMethod(client_data['preferred_contact']) if client_data.get('preferred_contact') else ContactMethod.EMAIL,
            join_date=DateUtils.parse_date(client_data.get('join_date')),
            account_status=AccountStatus(client_data['account_status']) if client_data.get('account_status') else AccountStatus.ACTIVE,
            notes=client_data.get('notes'),
            created_at=DateUtils.parse_datetime(client_data.get('created_at')),
            updated_at=DateUtils.parse_datetime(client_data.get('updated_at')),
            created_by=client_data.get('created_by') or 'admin',
        )
