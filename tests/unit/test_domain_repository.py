"""Unit tests for the DomainRepository."""

from datetime import timedelta
from decimal import Decimal

from conftest import days_from_today, make_client, make_domain
from domainhub.core.models.entities import Domain, QueryOptions, ServiceStatus
from domainhub.core.repositories.domain_repository import DomainRepository


def test_create_domain_joins_client(domain_repo: DomainRepository, client_id):
    result = domain_repo.create(make_domain(client_id, "Example.COM"))

    assert result["success"]
    domain = result["data"]
    assert isinstance(domain, Domain)
    assert domain.id.startswith("DOM_")
    assert domain.name == "example.com"
    assert domain.client_name == "Acme Web"
    assert domain.client_email == "ops@acme.test"
    assert domain.client_company == "Acme Web Ltd"
    assert domain.price == Decimal("15.99")
    assert domain.days_until_expiry == 10


def test_expiring_window_scenario(domain_repo: DomainRepository, client_id):
    created = domain_repo.create(make_domain(client_id, "example.com", expires_in=10))["data"]

    within_30 = domain_repo.get_expiring_domains(30)["data"]
    within_5 = domain_repo.get_expiring_domains(5)["data"]

    assert created.id in [d.id for d in within_30]
    assert created.id not in [d.id for d in within_5]


def test_expiring_excludes_expired_and_sorts_soonest_first(seeded_connection):
    repo = DomainRepository(seeded_connection)

    expiring = repo.get_expiring_domains(7)["data"]

    assert [d.name for d in expiring] == [
        "clients.marketingpro.com", "blog.techcorp.com",
        "techcorp.com", "email.marketingpro.com",
    ]
    assert all(0 < d.days_until_expiry <= 7 for d in expiring)


def test_duplicate_name_is_rejected(domain_repo: DomainRepository, client_id):
    domain_repo.create(make_domain(client_id, "example.com"))
    result = domain_repo.create(make_domain(client_id, "example.com"))
    assert result == {"success": False, "error": "Domain example.com already exists"}


def test_create_requires_existing_client(domain_repo: DomainRepository):
    result = domain_repo.create(make_domain("CL_missing"))
    assert result == {"success": False, "error": "Client CL_missing not found"}


def test_create_validates_dates_and_price(domain_repo: DomainRepository, client_id):
    backwards = make_domain(client_id, registration_date=days_from_today(5),
                            expiration_date=days_from_today(1))
    free = make_domain(client_id, price=Decimal("0"))

    assert not domain_repo.create(backwards)["success"]
    assert domain_repo.create(free)["error"] == "Price must be positive"


def test_days_until_expiry_is_recomputed_on_read(domain_repo: DomainRepository, domain_id):
    domain_repo.update(domain_id, {"expiration_date": days_from_today(-3)})

    domain = domain_repo.get_by_id(domain_id)["data"]

    assert domain.days_until_expiry == -3
    assert "days_until_expiry" not in domain_repo.connection.data["domains"][0]


def test_update_rejects_name_taken_by_another_domain(domain_repo: DomainRepository, client_id):
    domain_repo.create(make_domain(client_id, "taken.com"))
    other = domain_repo.create(make_domain(client_id, "mine.com"))["data"]

    result = domain_repo.update(other.id, {"name": "taken.com"})
    same = domain_repo.update(other.id, {"name": "mine.com", "notes": "kept"})

    assert result == {"success": False, "error": "Domain taken.com already exists"}
    assert same["success"]


def test_update_rejects_unknown_client(domain_repo: DomainRepository, client_id, domain_id):
    result = domain_repo.update(domain_id, {"client_id": "CL_missing"})

    assert result == {"success": False, "error": "Client CL_missing not found"}
    assert domain_repo.connection.data["domains"][0]["client_id"] == client_id
    assert [d.id for d in domain_repo.get_by_client_id(client_id)["data"]] == [domain_id]


def test_update_can_move_domain_to_another_client(domain_repo, client_repo, domain_id):
    other_id = client_repo.create(make_client(full_name="Other", email="o@other.test"))["data"].id

    moved = domain_repo.update(domain_id, {"client_id": other_id})["data"]

    assert (moved.client_id, moved.client_name) == (other_id, "Other")


def test_update_keeps_dates_ordered(domain_repo: DomainRepository, domain_id):
    stored = domain_repo.get_by_id(domain_id)["data"]

    early_expiry = domain_repo.update(
        domain_id, {"expiration_date": stored.registration_date - timedelta(days=1)})
    late_registration = domain_repo.update(
        domain_id, {"registration_date": stored.expiration_date + timedelta(days=1)})

    assert early_expiry == {"success": False,
                            "error": "Expiration date cannot be before registration date"}
    assert not late_registration["success"]
    assert domain_repo.get_by_id(domain_id)["data"].expiration_date == stored.expiration_date


def test_update_validates_price(domain_repo: DomainRepository, domain_id):
    assert domain_repo.update(domain_id, {"price": Decimal("-5.00")}) == {
        "success": False, "error": "Price must be positive"}
    assert domain_repo.update(domain_id, {"price": Decimal("18.50")})["data"].price == Decimal("18.50")


def test_get_by_client_id_is_isolated(domain_repo: DomainRepository, client_repo, client_id):
    other_id = client_repo.create(make_client(full_name="Other", email="o@other.test"))["data"].id
    domain_repo.create(make_domain(client_id, "mine.com"))
    domain_repo.create(make_domain(other_id, "theirs.com"))

    mine = domain_repo.get_by_client_id(client_id)["data"]

    assert [d.name for d in mine] == ["mine.com"]
    assert all(d.client_id == client_id for d in mine)


def test_filter_by_status(seeded_connection):
    repo = DomainRepository(seeded_connection)
    expired = repo.get_all(QueryOptions(filters={"status": ServiceStatus.EXPIRED}))["data"]
    assert {d.id for d in expired} == {"DOM003", "DOM016", "DOM036"}


def test_default_order_is_expiration_ascending(seeded_connection):
    domains = DomainRepository(seeded_connection).get_all()["data"]
    dates = [d.expiration_date for d in domains]
    assert dates == sorted(dates)


def test_delete_nonexistent_domain(domain_repo: DomainRepository):
    assert domain_repo.delete("DOM_missing") == {"success": False, "error": "Domain not found"}
