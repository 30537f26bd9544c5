"""Unit tests for the HostingRepository."""

from decimal import Decimal

from conftest import days_from_today, make_client, make_hosting
from domainhub.core.models.entities import Hosting, HostingType
from domainhub.core.repositories.hosting_repository import HostingRepository


def test_create_hosting_with_linked_domain(hosting_repo: HostingRepository, client_id, domain_id):
    result = hosting_repo.create(make_hosting(client_id, domain_id, hosting_type=HostingType.VPS))

    assert result["success"]
    hosting = result["data"]
    assert isinstance(hosting, Hosting)
    assert hosting.id.startswith("HOST_")
    assert hosting.hosting_type == HostingType.VPS
    assert hosting.domain_name == "example.com"
    assert hosting.client_name == "Acme Web"
    assert hosting.days_until_expiry == 60


def test_hosting_without_domain_is_still_listed(hosting_repo: HostingRepository, client_id):
    created = hosting_repo.create(make_hosting(client_id))["data"]

    listed = hosting_repo.get_all()["data"]

    assert [h.id for h in listed] == [created.id]
    assert listed[0].domain_name is None


def test_usage_percent_must_be_in_range(hosting_repo: HostingRepository, client_id):
    result = hosting_repo.create(make_hosting(client_id, usage_percent=120))
    assert result == {"success": False, "error": "Usage percent must be between 0 and 100"}

    created = hosting_repo.create(make_hosting(client_id))["data"]
    update = hosting_repo.update(created.id, {"usage_percent": -1})
    assert not update["success"]


def test_expiring_hosting_window(hosting_repo: HostingRepository, client_id):
    soon = hosting_repo.create(make_hosting(client_id, expires_in=4))["data"]
    hosting_repo.create(make_hosting(client_id, expires_in=90))
    hosting_repo.create(make_hosting(client_id, expires_in=-2))

    expiring = hosting_repo.get_expiring_hosting(30)["data"]

    assert [h.id for h in expiring] == [soon.id]


def test_seeded_hosting_expiry_matches_linked_domain(seeded_connection):
    hosting = HostingRepository(seeded_connection).get_by_id("HOST001")["data"]
    assert hosting.domain_name == "techcorp.com"
    assert hosting.days_until_expiry == 5


def test_get_by_client_id_is_isolated(hosting_repo, client_repo, client_id):
    other_id = client_repo.create(make_client(full_name="Other", email="o@other.test"))["data"].id
    hosting_repo.create(make_hosting(client_id))
    hosting_repo.create(make_hosting(other_id, package_name="Theirs"))

    mine = hosting_repo.get_by_client_id(client_id)["data"]

    assert [h.package_name for h in mine] == ["Business Pro"]


def test_update_and_delete_missing_hosting(hosting_repo: HostingRepository):
    assert hosting_repo.update("HOST_missing", {"notes": "x"}) == {
        "success": False, "error": "Hosting not found"}
    assert hosting_repo.delete("HOST_missing") == {
        "success": False, "error": "Hosting not found"}


def test_update_rejects_unknown_client(hosting_repo: HostingRepository, client_id):
    created = hosting_repo.create(make_hosting(client_id))["data"]

    result = hosting_repo.update(created.id, {"client_id": "CL_missing"})

    assert result == {"success": False, "error": "Client CL_missing not found"}
    assert [h.id for h in hosting_repo.get_all()["data"]] == [created.id]


def test_update_keeps_expiry_after_purchase(hosting_repo: HostingRepository, client_id):
    created = hosting_repo.create(make_hosting(client_id))["data"]

    result = hosting_repo.update(created.id, {"expiration_date": days_from_today(-400)})
    renewed = hosting_repo.update(created.id, {"expiration_date": days_from_today(425)})

    assert result == {"success": False, "error": "Expiration date cannot be before purchase date"}
    assert renewed["data"].days_until_expiry == 425


def test_update_validates_price(hosting_repo: HostingRepository, client_id):
    created = hosting_repo.create(make_hosting(client_id))["data"]
    assert hosting_repo.update(created.id, {"price": Decimal("0")}) == {
        "success": False, "error": "Price must be positive"}
