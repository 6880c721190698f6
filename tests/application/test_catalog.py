"""Integration tests for the product and category use cases."""

import pytest

from storefront.application.add_category import AddCategoryHandler
from storefront.application.add_product import AddProductHandler
from storefront.application.delete_category import DeleteCategoryHandler
from storefront.application.delete_product import DeleteProductHandler
from storefront.application.dto import ProductFilters
from storefront.application.list_categories import ListCategoriesHandler
from storefront.application.list_products import ListProductsHandler
from storefront.application.show_category import ShowCategoryHandler
from storefront.application.show_product import ShowProductHandler
from storefront.application.update_category import UpdateCategoryHandler
from storefront.application.update_product import UpdateProductHandler
from storefront.domain.exceptions import (
    EntityNotFoundError,
    Forbidden,
    Unauthenticated,
    ValidationError,
)
from storefront.domain.model.identity import Identity
from storefront.domain.model.value_objects import Money
from tests.fakes import FakeUnitOfWork, make_category, make_product

ADMIN = Identity(id="admin1", role="ADMIN")
SELLER = Identity(id="seller1", role="seller")
CUSTOMER = Identity(id="user1", role="customer")


def _setup() -> FakeUnitOfWork:
    return FakeUnitOfWork(
        categories=[make_category("1", "Gadgets"), make_category("2", "Books")],
        products=[
            make_product("1", "Widget", price="10.00", stock=5),
            make_product("2", "Gizmo", price="30.00", stock=0),
            make_product("3", "Novel", price="15.00", stock=2, category_id="2"),
        ],
    )


class TestCatalogAccess:

    @pytest.mark.parametrize(
        "call",
        [
            lambda uow, who: AddProductHandler(uow).handle(who, "New", "1.00", 1, "1"),
            lambda uow, who: UpdateProductHandler(uow).handle(who, "1", price="2.00"),
            lambda uow, who: DeleteProductHandler(uow).handle(who, "1"),
            lambda uow, who: AddCategoryHandler(uow).handle(who, "Toys"),
            lambda uow, who: UpdateCategoryHandler(uow).handle(who, "1", "Tools"),
            lambda uow, who: DeleteCategoryHandler(uow).handle(who, "1"),
        ],
    )
    def test_catalog_mutations_need_admin(self, call):
        uow = _setup()
        before = uow.snapshot()
        for caller in (SELLER, CUSTOMER):
            with pytest.raises(Forbidden):
                call(uow, caller)
        with pytest.raises(Unauthenticated):
            call(uow, None)
        assert uow.snapshot() == before


class TestProducts:

    def test_add_product(self):
        uow = _setup()
        dto = AddProductHandler(uow).handle(ADMIN, "Lamp", "19.999", 4, "1", description="Bright")
        assert dto.id == "4"
        assert dto.price == "$20.00"
        assert uow.products["4"].price == Money.of("20.00")
        assert uow.products["4"].stock == 4

    def test_add_product_needs_existing_category(self):
        uow = _setup()
        with pytest.raises(EntityNotFoundError, match="Category '9'"):
            AddProductHandler(uow).handle(ADMIN, "Lamp", "1.00", 1, "9")
        assert "4" not in uow.products

    @pytest.mark.parametrize(
        "name, price, stock, message",
        [
            ("", "1.00", 1, "name is required"),
            ("Lamp", "-1", 1, "cannot be negative"),
            ("Lamp", "abc", 1, "Invalid money amount"),
            ("Lamp", "1.00", -1, "Stock cannot be negative"),
        ],
    )
    def test_add_product_validation(self, name, price, stock, message):
        uow = _setup()
        with pytest.raises(ValidationError, match=message):
            AddProductHandler(uow).handle(ADMIN, name, price, stock, "1")

    def test_partial_update(self):
        uow = _setup()
        dto = UpdateProductHandler(uow).handle(ADMIN, "1", price="12.50", stock=9)
        assert dto.price == "$12.50"
        assert dto.stock == 9
        assert dto.name == "Widget"

    def test_recategorize_needs_existing_category(self):
        uow = _setup()
        with pytest.raises(EntityNotFoundError):
            UpdateProductHandler(uow).handle(ADMIN, "1", category_id="9")
        assert uow.products["1"].category_id == "1"

    def test_recategorize(self):
        uow = _setup()
        UpdateProductHandler(uow).handle(ADMIN, "1", category_id="2")
        assert uow.products["1"].category_id == "2"

    def test_deactivate(self):
        uow = _setup()
        dto = UpdateProductHandler(uow).handle(ADMIN, "1", active=False)
        assert dto.active is False

    def test_update_unknown_product(self):
        with pytest.raises(EntityNotFoundError):
            UpdateProductHandler(_setup()).handle(ADMIN, "404", price="1.00")

    def test_delete_product(self):
        uow = _setup()
        DeleteProductHandler(uow).handle(ADMIN, "1")
        assert "1" not in uow.products

    def test_show_product_is_public(self):
        assert ShowProductHandler(_setup()).handle("3").name == "Novel"


class TestListProducts:

    def test_defaults_return_everything(self):
        page = ListProductsHandler(_setup()).handle()
        assert page.total == 3
        assert page.total_pages == 1
        assert page.has_more is False

    def test_filters(self):
        handler = ListProductsHandler(_setup())
        assert [p.id for p in handler.handle(ProductFilters(category_id="2")).products] == ["3"]
        assert {p.id for p in handler.handle(ProductFilters(in_stock=True)).products} == {"1", "3"}
        assert [p.id for p in handler.handle(ProductFilters(search="giz")).products] == ["2"]
        cheap = handler.handle(ProductFilters(max_price="15.00", sort_by="price", sort_order="asc"))
        assert [p.id for p in cheap.products] == ["1", "3"]

    def test_pagination(self):
        handler = ListProductsHandler(_setup())
        first = handler.handle(ProductFilters(limit=2, page=1, sort_by="name", sort_order="asc"))
        second = handler.handle(ProductFilters(limit=2, page=2, sort_by="name", sort_order="asc"))
        assert [p.name for p in first.products] == ["Gizmo", "Novel"]
        assert first.has_more is True
        assert [p.name for p in second.products] == ["Widget"]
        assert second.total_pages == 2
        assert second.has_more is False

    @pytest.mark.parametrize(
        "filters",
        [
            ProductFilters(page=0),
            ProductFilters(limit=0),
            ProductFilters(limit=101),
            ProductFilters(sort_by="rating"),
            ProductFilters(sort_order="sideways"),
        ],
    )
    def test_bad_filters(self, filters):
        with pytest.raises(ValidationError):
            ListProductsHandler(_setup()).handle(filters)


class TestCategories:

    def test_add_category(self):
        uow = _setup()
        dto = AddCategoryHandler(uow).handle(ADMIN, "  Toys ", "Fun")
        assert dto.id == "3"
        assert dto.name == "Toys"

    def test_category_names_are_unique_ignoring_case(self):
        uow = _setup()
        with pytest.raises(ValidationError, match="already exists"):
            AddCategoryHandler(uow).handle(ADMIN, "gadgets")

    def test_rename_to_taken_name_rejected(self):
        uow = _setup()
        with pytest.raises(ValidationError, match="already exists"):
            UpdateCategoryHandler(uow).handle(ADMIN, "2", "Gadgets")

    def test_rename_keeps_own_name_case_change(self):
        uow = _setup()
        dto = UpdateCategoryHandler(uow).handle(ADMIN, "1", "GADGETS")
        assert dto.name == "GADGETS"
        assert dto.products_count == 2

    def test_category_with_products_cannot_be_deleted(self):
        uow = _setup()
        with pytest.raises(ValidationError, match="still has 2 product"):
            DeleteCategoryHandler(uow).handle(ADMIN, "1")
        assert "1" in uow.categories

    def test_empty_category_can_be_deleted(self):
        uow = _setup()
        DeleteProductHandler(uow).handle(ADMIN, "3")
        DeleteCategoryHandler(uow).handle(ADMIN, "2")
        assert "2" not in uow.categories

    def test_list_counts_products(self):
        counts = {c.name: c.products_count for c in ListCategoriesHandler(_setup()).handle()}
        assert counts == {"Gadgets": 2, "Books": 1}

    def test_deactivate_category_keeps_its_products(self):
        uow = _setup()
        dto = UpdateCategoryHandler(uow).handle(ADMIN, "1", active=False)
        assert dto.active is False
        assert dto.name == "Gadgets"
        assert uow.categories["1"].active is False
        assert uow.products["1"].category_id == "1"

    def test_update_description_only(self):
        uow = _setup()
        dto = UpdateCategoryHandler(uow).handle(ADMIN, "2", description=" Paper ")
        assert dto.name == "Books"
        assert dto.description == "Paper"

    def test_show_category_is_public(self):
        dto = ShowCategoryHandler(_setup()).handle("1")
        assert dto.name == "Gadgets"
        assert dto.products_count == 2
        assert dto.active is True

    def test_show_unknown_category(self):
        with pytest.raises(EntityNotFoundError, match="Category '9'"):
            ShowCategoryHandler(_setup()).handle("9")
