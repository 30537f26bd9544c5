"""Shared fixtures for DomainHub unit tests."""

from datetime import timedelta
from decimal import Decimal

import pytest

from domainhub.core.models.entities import Client, Domain, Hosting, Payment, ServiceRef
from domainhub.core.repositories.client_repository import ClientRepository
from domainhub.core.repositories.domain_repository import DomainRepository
from domainhub.core.repositories.hosting_repository import HostingRepository
from domainhub.core.repositories.payment_repository import PaymentRepository
from domainhub.db.database import DatabaseManager
from domainhub.db.mock_connection import MockDatabaseConnection
from domainhub.utils.helpers import DateUtils


# ── Environment ──────────────────────────────────────────────────────

@pytest.fixture(autouse=True)
def no_backend_env(monkeypatch):
    """Keep real credentials in the shell from selecting a live backend."""
    for name in ("SUPABASE_URL", "VITE_SUPABASE_URL", "SUPABASE_ANON_KEY",
                 "VITE_SUPABASE_ANON_KEY", "SUPABASE_SERVICE_ROLE_KEY",
                 "DB_TYPE", "DB_HOST", "DB_PORT", "DB_NAME", "DB_USER",
                 "DB_PASSWORD", "DB_SSL", "DB_FILE_PATH"):
        monkeypatch.delenv(name, raising=False)


# ── Connections ──────────────────────────────────────────────────────

@pytest.fixture
def seeded_connection() -> MockDatabaseConnection:
    return MockDatabaseConnection()


@pytest.fixture
def empty_connection() -> MockDatabaseConnection:
    return MockDatabaseConnection(seed=False)


@pytest.fixture
def manager(empty_connection) -> DatabaseManager:
    return DatabaseManager(connection=empty_connection)


# ── Repositories over an empty store ─────────────────────────────────

@pytest.fixture
def client_repo(empty_connection) -> ClientRepository:
    return ClientRepository(empty_connection)


@pytest.fixture
def domain_repo(empty_connection) -> DomainRepository:
    return DomainRepository(empty_connection)


@pytest.fixture
def hosting_repo(empty_connection) -> HostingRepository:
    return HostingRepository(empty_connection)


@pytest.fixture
def payment_repo(empty_connection) -> PaymentRepository:
    return PaymentRepository(empty_connection)


# ── Entity builders ──────────────────────────────────────────────────

def days_from_today(days: int):
    return DateUtils.today() + timedelta(days=days)


def make_client(**overrides) -> Client:
    values = dict(full_name="Acme Web", company_name="Acme Web Ltd",
                  email="ops@acme.test", phone_number="+1-555-0100")
    values.update(overrides)
    return Client(**values)


def make_domain(client_id: str, name: str = "example.com", expires_in: int = 10,
                **overrides) -> Domain:
    values = dict(client_id=client_id, name=name, registrar="Namecheap",
                  registration_date=days_from_today(expires_in - 365),
                  expiration_date=days_from_today(expires_in),
                  price=Decimal("15.99"))
    values.update(overrides)
    return Domain(**values)


def make_hosting(client_id: str, domain_id: str = None, expires_in: int = 60,
                 **overrides) -> Hosting:
    values = dict(client_id=client_id, associated_domain_id=domain_id,
                  package_name="Business Pro", provider_name="HostGator",
                  purchase_date=days_from_today(expires_in - 365),
                  expiration_date=days_from_today(expires_in),
                  price=Decimal("599.00"), usage_percent=40)
    values.update(overrides)
    return Hosting(**values)


def make_payment(client_id: str, service: ServiceRef, due_in: int = 15,
                 **overrides) -> Payment:
    values = dict(client_id=client_id, service=service, amount=Decimal("100.00"),
                  due_date=days_from_today(due_in), invoice_number="INV-TEST-001")
    values.update(overrides)
    return Payment(**values)


@pytest.fixture
def client_id(client_repo) -> str:
    result = client_repo.create(make_client())
    assert result["success"], result
    return result["data"].id


@pytest.fixture
def domain_id(domain_repo, client_id) -> str:
    result = domain_repo.create(make_domain(client_id))
    assert result["success"], result
    return result["data"].id
