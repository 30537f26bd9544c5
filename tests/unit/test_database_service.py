"""Unit tests for the DatabaseService facade."""

import json
from decimal import Decimal
from unittest.mock import patch

import pytest

from conftest import make_client, make_domain, make_payment
from domainhub.core.models.entities import (
    Currency, DashboardStats, ExportFormat, PaymentStatus, ServiceRef,
)
from domainhub.core.services.database_service import DatabaseService, entity_to_dict
from domainhub.db.database import DatabaseManager
from domainhub.utils.exceptions import BackendException


@pytest.fixture
def demo_service(seeded_connection) -> DatabaseService:
    return DatabaseService(DatabaseManager(connection=seeded_connection))


@pytest.fixture
def service(empty_connection) -> DatabaseService:
    return DatabaseService(DatabaseManager(connection=empty_connection))


def test_dashboard_stats_over_demo_data(demo_service: DatabaseService):
    result = demo_service.get_dashboard_stats()

    assert result["success"]
    stats = result["data"]
    assert isinstance(stats, DashboardStats)
    assert (stats.total_clients, stats.total_domains, stats.total_hosting) == (5, 48, 28)
    assert stats.expired_services == 5
    assert stats.critical_services == 6
    assert stats.warning_services == 12
    assert stats.upcoming_renewals == 11


def test_dashboard_revenue_counts_paid_payments_per_currency(service: DatabaseService):
    client_id = service.create_client(make_client())["data"].id
    ref = ServiceRef.domain(service.create_domain(make_domain(client_id))["data"].id)
    service.create_payment(make_payment(client_id, ref, amount=Decimal("50.00"),
                                        payment_status=PaymentStatus.PAID))
    service.create_payment(make_payment(client_id, ref, amount=Decimal("6000.00"),
                                        currency=Currency.BDT, payment_status=PaymentStatus.PAID))
    service.create_payment(make_payment(client_id, ref, amount=Decimal("75.00")))

    stats = service.get_dashboard_stats()["data"]

    assert stats.total_revenue_usd == Decimal("50.00")
    assert stats.total_revenue_bdt == Decimal("6000.00")
    assert stats.unpaid_invoices == 1


def test_client_scoped_lookups(demo_service: DatabaseService):
    domains = demo_service.get_domains_for_client("FS005")["data"]
    hosting = demo_service.get_hosting_for_client("FS005")["data"]
    assert {d.client_id for d in domains} == {"FS005"}
    assert [h.id for h in hosting] == ["HOST028", "HOST026", "HOST027", "HOST025"]


def test_export_json(demo_service: DatabaseService):
    result = demo_service.export_data(["clients"], "json")

    assert result["message"] == "Data exported successfully in JSON format"
    payload = json.loads(result["data"])
    assert list(payload) == ["clients"]
    assert payload["clients"][0]["preferred_contact"] == "email"


def test_export_csv_has_section_per_table(demo_service: DatabaseService):
    content = demo_service.export_data(["clients", "hosting"], ExportFormat.CSV)["data"]

    assert content.startswith("# CLIENTS\n")
    assert "\n# HOSTING\n" in content
    header = content.splitlines()[1]
    assert header.startswith("id,full_name,company_name,email")


def test_export_sql(demo_service: DatabaseService):
    content = demo_service.export_data(["domains"], "sql")["data"]
    assert "-- Table: domains\nINSERT INTO domains (id, client_id, name" in content


def test_export_rejects_unknown_format_and_table(demo_service: DatabaseService):
    assert demo_service.export_data(["clients"], "xml") == {
        "success": False, "error": "Unsupported export format: xml"}
    assert demo_service.export_data(["invoices"]) == {
        "success": False, "error": "Unknown table: invoices"}


def test_entity_to_dict_flattens_service_ref(service: DatabaseService):
    client_id = service.create_client(make_client())["data"].id
    domain_id = service.create_domain(make_domain(client_id))["data"].id
    payment = service.create_payment(make_payment(client_id, ServiceRef.domain(domain_id)))["data"]

    record = entity_to_dict(payment)

    assert record["service_id"] == domain_id
    assert record["service_type"] == "domain"
    assert "service" not in record


def test_backup_pass_through(demo_service: DatabaseService):
    backup = demo_service.create_backup()
    history = demo_service.get_backup_history()["data"]
    assert backup["success"]
    assert "INSERT INTO domains" in backup["data"]["content"]
    assert len(history) == 1


def test_close_drops_repositories(service: DatabaseService):
    service.initialize()
    service.close()
    assert service.clients is None
    assert not service.manager.is_initialized


def test_pass_throughs_report_initialization_failure(service: DatabaseService):
    with patch.object(service.manager, "setup_schema", side_effect=BackendException("offline")):
        clients = service.get_clients()
        created = service.create_domain(make_domain("CL_any"))

    expected = {"success": False, "error": "Database initialization failed: offline"}
    assert clients == expected
    assert created == expected
    assert service.get_clients()["success"]
