"""
Input Validation Utilities
Provides validation functions for client, service and payment inputs
"""

import re
from decimal import Decimal
from datetime import date
from typing import Optional, Any

from domainhub.utils.exceptions import ValidationException

class ServiceValidator:
    """Validation utilities for DomainHub records"""

    @staticmethod
    def validate_required(value: Any, field_name: str) -> bool:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationException(f"{field_name} is required")
        return True

    @staticmethod
    def validate_email(email: str) -> bool:
        """Validate email address"""
        if not email:
            raise ValidationException("Email is required")

        email_pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
        if not re.match(email_pattern, email):
            raise ValidationException("Invalid email format")

        return True

    @staticmethod
    def validate_domain_name(name: str) -> bool:
        """Validate a fully qualified domain name"""
        if not name:
            raise ValidationException("Domain name is required")

        pattern = r'^(?=.{1,253}$)([a-zA-Z0-9]([a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?\.)+[a-zA-Z]{2,63}$'
        if not re.match(pattern, name):
            raise ValidationException(f"Invalid domain name: {name}")

        return True

    @staticmethod
    def validate_amount(amount: Decimal, field_name: str = "Amount") -> bool:
        """Validate monetary amount"""
        if amount is None:
            raise ValidationException(f"{field_name} is required")

        if not isinstance(amount, Decimal):
            raise ValidationException(f"{field_name} must be a Decimal")

        if amount <= 0:
            raise ValidationException(f"{field_name} must be positive")

        # Check decimal places (max 2 for currency)
        if amount.as_tuple().exponent < -2:
            raise ValidationException(f"{field_name} cannot have more than 2 decimal places")

        return True

    @staticmethod
    def validate_exchange_rate(rate: Optional[Decimal]) -> bool:
        if rate is None:
            return True  # Rate is optional
        if Decimal(str(rate)) <= 0:
            raise ValidationException("Exchange rate must be positive")
        return True

    @staticmethod
    def validate_usage_percent(usage: int) -> bool:
        if usage is None:
            return True
        if not 0 <= usage <= 100:
            raise ValidationException("Usage percent must be between 0 and 100")
        return True

    @staticmethod
    def validate_date_range(start_date: Optional[date], end_date: Optional[date],
                            start_field: str = "Start date", end_field: str = "End date") -> bool:
        """End date must not precede the start date"""
        if end_date is None:
            raise ValidationException(f"{end_field} is required")
        if start_date and end_date < start_date:
            raise ValidationException(f"{end_field} cannot be before {start_field.lower()}")
        return True
