"""Unit tests for AdminConsole: permission gating and admin mutations."""

import pytest

from src.ld_admin.application.service import AdminConsole
from src.ld_auth.application.service import AuthService
from src.ld_catalog.application.schemas import ListingChanges, ListingDraft
from src.ld_catalog.domain.models import ListingQuery
from src.ld_catalog.infrastructure.repository import CatalogRepository
from src.ld_category.application.service import CategoryStore
from src.ld_common.enums import Role
from src.ld_common.errors import (
    AccountNotFoundError,
    CannotDeleteSelfError,
    CatalogNotLoadedError,
    CategoryInUseError,
    CategoryNotFoundError,
    ListingNotFoundError,
    PermissionDeniedError,
)
from src.ld_identity.application.service import IdentityStore
from tests.factories import catalog_client, listing_json, make_listing


@pytest.fixture
def catalog() -> CatalogRepository:
    repo = CatalogRepository(url="http://test/deals.json")
    repo.replace_all(
        [
            make_listing(id=1, category="Luxury Watches", original_price=1000, final_price=800,
                         discount_percentage=20),
            make_listing(id=2, category="Fine Jewelry", title="Cartier Love Bracelet",
                         original_price=500, final_price=400, discount_percentage=20),
        ]
    )
    return repo


@pytest.fixture
def console(
    auth: AuthService,
    catalog: CatalogRepository,
    seeded_identity: IdentityStore,
    categories: CategoryStore,
) -> AdminConsole:
    categories.bootstrap()
    return AdminConsole(auth, catalog, seeded_identity, categories)


def login_as(auth: AuthService, identity: IdentityStore, role: Role) -> None:
    identity.create(role.value, "pw", f"{role.value}@example.com", role)
    assert auth.login(role.value, "pw") is not None


class TestOpen:
    async def test_loads_and_refreshes_counts(
        self, auth: AuthService, seeded_identity: IdentityStore, categories: CategoryStore
    ) -> None:
        categories.bootstrap()
        repo = CatalogRepository(
            url="http://test/deals.json",
            client=catalog_client([listing_json(id=1), listing_json(id=2)]),
        )
        console = AdminConsole(auth, repo, seeded_identity, categories)

        assert await console.open() is True
        assert categories.get(1).product_count == 2

    async def test_load_failure_returns_false(
        self, auth: AuthService, seeded_identity: IdentityStore, categories: CategoryStore
    ) -> None:
        repo = CatalogRepository(url="http://test/deals.json", client=catalog_client(status_code=500))
        console = AdminConsole(auth, repo, seeded_identity, categories)
        assert await console.open() is False


class TestUnloadedCatalog:
    @pytest.fixture
    def unloaded(
        self, auth: AuthService, seeded_identity: IdentityStore, categories: CategoryStore
    ) -> CatalogRepository:
        auth.login("admin", "admin123")
        return CatalogRepository(
            url="http://test/deals.json",
            client=catalog_client([listing_json(id=1), listing_json(id=2), listing_json(id=3)]),
        )

    async def test_edit_before_load_refused_and_catalog_still_fetched(
        self,
        unloaded: CatalogRepository,
        auth: AuthService,
        seeded_identity: IdentityStore,
        categories: CategoryStore,
    ) -> None:
        console = AdminConsole(auth, unloaded, seeded_identity, categories)

        with pytest.raises(CatalogNotLoadedError):
            console.create_listing(ListingDraft(title="Hermes Birkin", original_price=100, final_price=50))
        with pytest.raises(CatalogNotLoadedError):
            console.export_catalog()
        assert not unloaded.is_loaded

        assert await console.open() is True
        assert [lst.id for lst in unloaded.snapshot] == [1, 2, 3]
        assert console.create_listing(ListingDraft(title="Hermes Birkin")).id == 4

    async def test_edit_after_failed_load_refused(
        self, auth: AuthService, seeded_identity: IdentityStore, categories: CategoryStore
    ) -> None:
        auth.login("admin", "admin123")
        repo = CatalogRepository(url="http://test/deals.json", client=catalog_client(status_code=500))
        console = AdminConsole(auth, repo, seeded_identity, categories)
        assert await console.open() is False

        with pytest.raises(CatalogNotLoadedError):
            console.delete_listing(1)
        with pytest.raises(CatalogNotLoadedError):
            console.update_listing(1, ListingChanges(title="x"))
        assert console.has_unexported_changes is False


class TestPermissions:
    def test_anonymous_denied(self, console: AdminConsole) -> None:
        with pytest.raises(PermissionDeniedError) as exc_info:
            console.listings()
        assert exc_info.value.message == "You do not have permission to view products"

    def test_viewer_can_view_only(
        self, console: AdminConsole, auth: AuthService, seeded_identity: IdentityStore,
        catalog: CatalogRepository,
    ) -> None:
        login_as(auth, seeded_identity, Role.VIEWER)
        assert len(console.listings()) == 2

        with pytest.raises(PermissionDeniedError, match="edit products"):
            console.update_listing(1, ListingChanges(title="x"))
        with pytest.raises(PermissionDeniedError, match="delete products"):
            console.delete_listing(1)
        with pytest.raises(PermissionDeniedError, match="export products"):
            console.export_catalog()

        assert catalog.snapshot[0].title == "Rolex Submariner Date"
        assert len(catalog.snapshot) == 2
        assert console.has_unexported_changes is False

    def test_editor_cannot_manage(
        self, console: AdminConsole, auth: AuthService, seeded_identity: IdentityStore
    ) -> None:
        login_as(auth, seeded_identity, Role.EDITOR)
        console.delete_listing(2)

        with pytest.raises(PermissionDeniedError, match="manage categories"):
            console.create_category("Belts")
        with pytest.raises(PermissionDeniedError, match="manage users"):
            console.create_user("eve", "pw", "eve@example.com")
        assert [a.username for a in seeded_identity.list_all()] == ["admin", "editor"]

    def test_check_happens_at_call_time(
        self, console: AdminConsole, auth: AuthService, catalog: CatalogRepository
    ) -> None:
        auth.login("admin", "admin123")
        console.delete_listing(1)
        auth.logout()

        with pytest.raises(PermissionDeniedError):
            console.delete_listing(2)
        assert [lst.id for lst in catalog.snapshot] == [2]


class TestListings:
    @pytest.fixture(autouse=True)
    def _admin(self, auth: AuthService) -> None:
        auth.login("admin", "admin123")

    def test_create_assigns_id_and_discount(
        self, console: AdminConsole, categories: CategoryStore
    ) -> None:
        draft = ListingDraft(title="Hermes Birkin", original_price=20000, final_price=15000,
                             category="Designer Handbags")
        listing = console.create_listing(draft)

        assert listing.id == 3
        assert listing.discount_percentage == 25
        assert listing.condition == "Pre-Owned"
        assert categories.get(2).product_count == 1
        assert console.has_unexported_changes is True

    def test_update_recomputes_discount(self, console: AdminConsole, catalog: CatalogRepository) -> None:
        updated = console.update_listing(1, ListingChanges(final_price=500))
        assert updated.discount_percentage == 50
        assert catalog.snapshot[0] == updated

    def test_update_unknown(self, console: AdminConsole) -> None:
        with pytest.raises(ListingNotFoundError):
            console.update_listing(99, ListingChanges(title="x"))
        assert console.has_unexported_changes is False

    def test_delete(self, console: AdminConsole, catalog: CatalogRepository,
                    categories: CategoryStore) -> None:
        console.delete_listing(2)
        assert [lst.id for lst in catalog.snapshot] == [1]
        assert categories.get(4).product_count == 0

    def test_delete_absent_is_noop(self, console: AdminConsole) -> None:
        console.delete_listing(42)
        assert len(console.listings()) == 2
        assert console.has_unexported_changes is False

    def test_listings_filter(self, console: AdminConsole) -> None:
        result = console.listings(ListingQuery(search_term="cartier", category="all"))
        assert [lst.id for lst in result] == [2]

    def test_export_clears_flag(self, console: AdminConsole) -> None:
        console.delete_listing(1)
        assert console.has_unexported_changes is True

        export = console.export_catalog()

        assert export.filename == "real_ebay_deals.json"
        assert b'"Cartier Love Bracelet"' in export.data
        assert console.has_unexported_changes is False


class TestCategories:
    @pytest.fixture(autouse=True)
    def _admin(self, auth: AuthService) -> None:
        auth.login("admin", "admin123")

    def test_list_includes_live_counts(self, console: AdminConsole) -> None:
        counts = {c.name: c.product_count for c in console.categories()}
        assert counts["Luxury Watches"] == 1
        assert counts["Fine Jewelry"] == 1
        assert counts["Designer Shoes"] == 0

    def test_create_and_update(self, console: AdminConsole) -> None:
        created = console.create_category("Designer Belts", "Leather belts")
        assert created.id == 6
        updated = console.update_category(6, name="Belts")
        assert (updated.name, updated.description) == ("Belts", "Leather belts")

    def test_update_unknown(self, console: AdminConsole) -> None:
        with pytest.raises(CategoryNotFoundError):
            console.update_category(99, name="x")

    def test_delete_in_use_refused(self, console: AdminConsole, categories: CategoryStore) -> None:
        with pytest.raises(CategoryInUseError) as exc_info:
            console.delete_category(1)
        assert exc_info.value.message == (
            'Cannot delete category "Luxury Watches" because it has 1 products'
        )
        assert categories.get(1) is not None

    def test_delete_unused(self, console: AdminConsole, categories: CategoryStore) -> None:
        console.delete_category(5)
        assert categories.get(5) is None


class TestUsers:
    @pytest.fixture(autouse=True)
    def _admin(self, auth: AuthService) -> None:
        auth.login("admin", "admin123")

    def test_create_defaults_to_viewer(self, console: AdminConsole) -> None:
        profile = console.create_user("bob", "pw", "bob@example.com")
        assert profile.role is Role.VIEWER
        assert profile.id == 2
        assert not hasattr(profile, "password")

    def test_users_hide_passwords(self, console: AdminConsole) -> None:
        (admin,) = console.users()
        assert admin.username == "admin"
        assert not hasattr(admin, "password")

    def test_update_blank_password_keeps_current(
        self, console: AdminConsole, seeded_identity: IdentityStore
    ) -> None:
        console.create_user("bob", "secret", "bob@example.com")
        profile = console.update_user(2, email="bob@new.com", password="", role=Role.EDITOR)

        assert profile.email == "bob@new.com"
        assert profile.role is Role.EDITOR
        assert seeded_identity.get(2).password == "secret"

    def test_update_unknown(self, console: AdminConsole) -> None:
        with pytest.raises(AccountNotFoundError):
            console.update_user(99, email="x@example.com")

    def test_cannot_delete_self(self, console: AdminConsole, seeded_identity: IdentityStore) -> None:
        with pytest.raises(CannotDeleteSelfError):
            console.delete_user(1)
        assert seeded_identity.get(1) is not None

    def test_delete_other(self, console: AdminConsole, seeded_identity: IdentityStore) -> None:
        console.create_user("bob", "pw", "bob@example.com")
        console.delete_user(2)
        assert seeded_identity.get(2) is None
