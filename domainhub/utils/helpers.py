"""
Helper Utilities
Common utility functions for service, billing and expiry calculations
"""

import random
import string
from decimal import Decimal, ROUND_HALF_UP
from datetime import datetime, date, timedelta
from typing import Optional, Dict, Any, Union
import logging

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

logger = logging.getLogger(__name__)

class NumberUtils:
    """Utility functions for number operations"""

    @staticmethod
    def to_decimal(value: Union[Decimal, float, int, str, None]) -> Optional[Decimal]:
        """Safely convert a numeric value to Decimal"""
        if value is None or value == '':
            return None
        if isinstance(value, Decimal):
            return value
        return Decimal(str(value))

    @staticmethod
    def round_currency(amount: Decimal) -> Decimal:
        """Round amount to 2 decimal places for currency"""
        return amount.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)

    @staticmethod
    def convert_amount(amount: Decimal, currency: str,
                       exchange_rate: Optional[Decimal]) -> Decimal:
        """Convert between USD and BDT using the payment's exchange rate"""
        # USD is multiplied up into BDT, anything else is divided back into USD
        if not exchange_rate:
            return amount
        if currency == 'USD':
            return NumberUtils.round_currency(amount * exchange_rate)
        return NumberUtils.round_currency(amount / exchange_rate)

class DateUtils:
    """Utility functions for date operations"""

    @staticmethod
    def today() -> date:
        return date.today()

    @staticmethod
    def parse_date(value: Union[date, datetime, str, None]) -> Optional[date]:
        """Parse an ISO string or datetime into a date"""
        if value is None or value == '':
            return None
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        return date_parser.isoparse(str(value)).date()

    @staticmethod
    def parse_datetime(value: Union[datetime, date, str, None]) -> Optional[datetime]:
        """Parse an ISO string into a datetime"""
        if value is None or value == '':
            return None
        if isinstance(value, datetime):
            return value
        if isinstance(value, date):
            return datetime(value.year, value.month, value.day)
        return date_parser.isoparse(str(value))

    @staticmethod
    def days_until(target_date: date, reference_date: date = None) -> int:
        """Whole days from the reference date (default today) to target date"""
        if reference_date is None:
            reference_date = date.today()
        return (target_date - reference_date).days

    @staticmethod
    def days_overdue(due_date: date, reference_date: date = None) -> int:
        """Whole days past the due date, never negative"""
        if reference_date is None:
            reference_date = date.today()
        return max(0, (reference_date - due_date).days)

    @staticmethod
    def add_years(start_date: date, years: int) -> date:
        """Add years to a date"""
        return start_date + relativedelta(years=years)

    @staticmethod
    def add_days(start_date: date, days: int) -> date:
        return start_date + timedelta(days=days)

    @staticmethod
    def now_iso() -> str:
        """Current timestamp as an ISO string (second precision)"""
        return datetime.now().isoformat(timespec='seconds')

class StringUtils:
    """Utility functions for string operations"""

    _ID_ALPHABET = string.ascii_lowercase + string.digits

    @staticmethod
    def generate_id(prefix: str = "") -> str:
        """Generate a unique record id: <prefix><epoch millis>_<9 random chars>"""
        timestamp = int(datetime.now().timestamp() * 1000)
        suffix = ''.join(random.choices(StringUtils._ID_ALPHABET, k=9))
        return f"{prefix}{timestamp}_{suffix}"

    @staticmethod
    def generate_invoice_number(prefix: str, index: int, year: int = None) -> str:
        """Invoice numbers in the INV-<kind>-<year>-<seq> format"""
        year = year or date.today().year
        return f"INV-{prefix}-{year}-{index:03d}"

    @staticmethod
    def clean_string(text: str) -> str:
        """Clean and normalize string input"""
        if not text:
            return ""

        # Remove extra whitespace and normalize
        return " ".join(text.strip().split())

class LoggingUtils:
    """Logging utility functions"""

    @staticmethod
    def log_business_event(event_type: str, entity_type: str, entity_id: Any,
                          details: Dict[str, Any] = None):
        """Log business events"""
        log_data = {
            'event_type': event_type,
            'entity_type': entity_type,
            'entity_id': entity_id,
            'timestamp': datetime.now().isoformat(),
            'details': details or {}
        }

        logger.info(f"Business Event: {event_type}", extra=log_data)

    @staticmethod
    def log_backup_event(event_type: str, backup_type: str, details: Dict[str, Any] = None):
        """Log backup lifecycle events"""
        log_data = {
            'event_type': event_type,
            'backup_type': backup_type,
            'timestamp': datetime.now().isoformat(),
            'details': details or {}
        }

        if event_type.endswith('failed'):
            logger.warning(f"Backup Event: {event_type}", extra=log_data)
        else:
            logger.info(f"Backup Event: {event_type}", extra=log_data)
