"""
Base Repository Class
Provides id generation, statement building and shared CRUD helpers for all
repositories
"""

from abc import ABC, abstractmethod
from datetime import date, datetime
from enum import Enum
from typing import List, Optional, Dict, Any, Tuple
import logging

from domainhub.core.models.entities import QueryOptions, SortOrder
from domainhub.db.connection import DatabaseConnection
from domainhub.db.schema import CLIENTS, column_names
from domainhub.db.statements import Condition, Join, OrderBy, Select
from domainhub.utils.exceptions import NotFoundException, ValidationException
from domainhub.utils.helpers import DateUtils, StringUtils
from domainhub.utils.responses import build_pagination, error_response
from domainhub.utils.validators import ServiceValidator

logger = logging.getLogger(__name__)

# Never writable through update()
PROTECTED_FIELDS = {'id', 'created_at'}

# Owning client, required on every service and payment read
CLIENT_JOIN = Join(CLIENTS, 'client_id', {
    'full_name': 'client_name',
    'email': 'client_email',
    'company_name': 'client_company',
})

class BaseRepository(ABC):
    """Base repository with common query building and CRUD contracts"""

    def __init__(self, connection: DatabaseConnection, table_name: str, id_prefix: str = ''):
        self.connection = connection
        self.table_name = table_name
        self.id_prefix = id_prefix
        self.columns = column_names(table_name)

    def generate_id(self) -> str:
        return StringUtils.generate_id(self.id_prefix)

    def build_where_clause(self, filters: Optional[Dict[str, Any]]) -> List[Condition]:
        """Equality conditions for every non-None filter value"""
        conditions = []
        for column, value in (filters or {}).items():
            if value is None:
                continue
            if column not in self.columns:
                raise ValidationException(f"Unknown filter field: {column}")
            conditions.append(Condition(column, self._to_db_value(value)))
        return conditions

    def build_order_clause(self, sort_by: Optional[str],
                           sort_order: Any = SortOrder.ASC) -> Optional[OrderBy]:
        if not sort_by:
            return None
        if sort_by not in self.columns:
            raise ValidationException(f"Cannot sort by {sort_by}")

        if isinstance(sort_order, str):
            try:
                sort_order = SortOrder(sort_order.lower())
            except ValueError:
                raise ValidationException(f"Invalid sort order: {sort_order}")

        return OrderBy(sort_by, descending=sort_order == SortOrder.DESC)

    def build_limit_clause(self, page: Optional[int],
                           limit: Optional[int]) -> Optional[Tuple[int, int]]:
        """(limit, offset) for a 1-based page, or None when not paginating"""
        if not page or not limit:
            return None
        if page < 1 or limit < 1:
            raise ValidationException("Page and limit must be positive")
        return limit, (page - 1) * limit

    def build_select(self, options: Optional[QueryOptions], joins=None,
                     default_order: OrderBy = None) -> Select:
        """Select for get_all: filters, order (or the default) and page window"""
        options = options or QueryOptions()
        statement = Select(
            self.table_name,
            filters=self.build_where_clause(options.filters),
            joins=list(joins or []),
            order_by=self.build_order_clause(options.sort_by, options.sort_order) or default_order,
        )
        window = self.build_limit_clause(options.page, options.limit)
        if window:
            statement.limit, statement.offset = window
        return statement

    def pagination_for(self, options: Optional[QueryOptions]) -> Optional[Dict[str, int]]:
        """Pagination block when the options ask for a page, else None"""
        if not options or not options.page or not options.limit:
            return None
        total = self.count(options.filters)
        return build_pagination(total, options.page, options.limit)

    def count(self, filters: Dict[str, Any] = None) -> int:
        """Count records matching equality filters"""
        row = self.connection.query_one(Select(
            self.table_name, filters=self.build_where_clause(filters), count_only=True))
        return int(row['count']) if row else 0

    def find_row(self, record_id: str, joins=None) -> Optional[Dict[str, Any]]:
        return self.connection.query_one(Select(
            self.table_name, filters=[Condition('id', record_id)], joins=list(joins or [])))

    def ensure_client_exists(self, client_id: str):
        if not client_id:
            raise ValidationException("Client is required")
        row = self.connection.query_one(Select(
            CLIENTS, filters=[Condition('id', client_id)], count_only=True))
        if not row or not row['count']:
            raise NotFoundException(f"Client {client_id} not found")

    def check_patch_client(self, patch: Dict[str, Any]):
        if 'client_id' in patch:
            self.ensure_client_exists(patch['client_id'])

    def check_patch_dates(self, record_id: str, patch: Dict[str, Any],
                          start_column: str, start_label: str):
        """Start and expiration dates stay ordered, reading the unpatched one from storage"""
        if start_column not in patch and 'expiration_date' not in patch:
            return
        row = self.find_row(record_id)
        if not row:
            return
        start = DateUtils.parse_date(patch.get(start_column, row.get(start_column)))
        end = DateUtils.parse_date(patch.get('expiration_date', row.get('expiration_date')))
        ServiceValidator.validate_date_range(start, end, start_label, "Expiration date")

    @staticmethod
    def _to_db_value(value: Any) -> Any:
        if isinstance(value, Enum):
            return value.value
        if isinstance(value, datetime):
            return value.isoformat(timespec='seconds')
        if isinstance(value, date):
            return value.isoformat()
        return value

    def new_record(self, values: Dict[str, Any]) -> Dict[str, Any]:
        """Insert payload: generated id, audit stamps and storable values"""
        now = DateUtils.now_iso()
        record = {k: self._to_db_value(v) for k, v in values.items()
                  if k in self.columns and v is not None}
        record['id'] = self.generate_id()
        record['created_at'] = now
        record['updated_at'] = now
        record.setdefault('created_by', 'admin')
        return record

    def clean_patch(self, updates: Dict[str, Any]) -> Dict[str, Any]:
        """Drop None, protected and unknown fields; stamp updated_at"""
        patch = {
            k: self._to_db_value(v) for k, v in (updates or {}).items()
            if v is not None and k not in PROTECTED_FIELDS
            and k != 'updated_at' and k in self.columns
        }
        if not patch:
            raise ValidationException("No fields to update")
        patch['updated_at'] = DateUtils.now_iso()
        return patch

    def failure(self, action: str, error: Exception) -> Dict[str, Any]:
        """Failure envelope; validation and missing-reference messages pass through unprefixed"""
        if isinstance(error, (ValidationException, NotFoundException)):
            return error_response(error.message)
        logger.error(f"Failed to {action} in {self.table_name}: {error}")
        return error_response(f"Failed to {action}: {error}")

    @abstractmethod
    def create(self, entity) -> Dict[str, Any]:
        pass

    @abstractmethod
    def get_by_id(self, record_id: str) -> Dict[str, Any]:
        pass

    @abstractmethod
    def get_all(self, options: QueryOptions = None) -> Dict[str, Any]:
        pass

    @abstractmethod
    def update(self, record_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        pass

    @abstractmethod
    def delete(self, record_id: str) -> Dict[str, Any]:
        pass
