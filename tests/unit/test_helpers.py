"""Unit tests for helper utilities and input validators."""

import re
from datetime import date, datetime
from decimal import Decimal

import pytest

from domainhub.utils.exceptions import ValidationException
from domainhub.utils.helpers import DateUtils, NumberUtils, StringUtils
from domainhub.utils.responses import build_pagination, error_response, success_response, unwrap
from domainhub.utils.validators import ServiceValidator


# ── Helpers ──────────────────────────────────────────────────────────

@pytest.mark.parametrize("amount, currency, rate, expected", [
    (Decimal("100"), "USD", Decimal("120"), Decimal("12000.00")),
    (Decimal("12000"), "BDT", Decimal("120"), Decimal("100.00")),
    (Decimal("10"), "BDT", Decimal("3"), Decimal("3.33")),
    (Decimal("55.50"), "USD", None, Decimal("55.50")),
])
def test_convert_amount(amount, currency, rate, expected):
    assert NumberUtils.convert_amount(amount, currency, rate) == expected


def test_generate_id_shape():
    first = StringUtils.generate_id("CL_")
    second = StringUtils.generate_id("CL_")
    assert re.fullmatch(r"CL_\d{13}_[a-z0-9]{9}", first)
    assert first != second


def test_date_parsing_and_arithmetic():
    assert DateUtils.parse_date("2024-02-29") == date(2024, 2, 29)
    assert DateUtils.parse_date(datetime(2024, 1, 1, 12)) == date(2024, 1, 1)
    assert DateUtils.parse_datetime("2024-01-15T10:00:00") == datetime(2024, 1, 15, 10)
    assert DateUtils.add_years(date(2024, 2, 29), 1) == date(2025, 2, 28)
    assert DateUtils.days_until(date(2024, 1, 11), date(2024, 1, 1)) == 10
    assert DateUtils.days_overdue(date(2024, 1, 11), date(2024, 1, 1)) == 0


def test_clean_string_collapses_whitespace():
    assert StringUtils.clean_string("  Acme   Web \n Ltd ") == "Acme Web Ltd"


def test_envelopes():
    assert success_response() == {"success": True}
    assert success_response([], "ok") == {"success": True, "data": [], "message": "ok"}
    assert error_response("nope") == {"success": False, "error": "nope"}
    assert build_pagination(25, 2, 10) == {"total": 25, "page": 2, "limit": 10, "total_pages": 3}
    assert unwrap(error_response("nope"), []) == []


# ── Validators ───────────────────────────────────────────────────────

@pytest.mark.parametrize("email", ["ops@acme.test", "first.last+tag@sub.example.org"])
def test_valid_emails(email):
    assert ServiceValidator.validate_email(email)


@pytest.mark.parametrize("email, message", [
    ("", "Email is required"),
    ("not-an-email", "Invalid email format"),
])
def test_invalid_emails(email, message):
    with pytest.raises(ValidationException, match=message):
        ServiceValidator.validate_email(email)


def test_domain_names():
    assert ServiceValidator.validate_domain_name("api.example.co.uk")
    with pytest.raises(ValidationException):
        ServiceValidator.validate_domain_name("-bad-.com")
    with pytest.raises(ValidationException):
        ServiceValidator.validate_domain_name("localhost")


def test_amount_rules():
    assert ServiceValidator.validate_amount(Decimal("0.01"))
    with pytest.raises(ValidationException, match="Price must be positive"):
        ServiceValidator.validate_amount(Decimal("-1"), "Price")
    with pytest.raises(ValidationException, match="more than 2 decimal places"):
        ServiceValidator.validate_amount(Decimal("1.999"))
    with pytest.raises(ValidationException, match="must be a Decimal"):
        ServiceValidator.validate_amount(1.5)


def test_date_range():
    assert ServiceValidator.validate_date_range(date(2024, 1, 1), date(2024, 1, 1))
    with pytest.raises(ValidationException, match="End date cannot be before start date"):
        ServiceValidator.validate_date_range(date(2024, 1, 2), date(2024, 1, 1))
