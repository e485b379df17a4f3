"""Transactional create, edit and delete of products."""

from decimal import Decimal

import pytest
from sqlalchemy import func
from sqlmodel import select

from src.catalog.core.errors import InvalidInputError, InvalidReferenceError, NotFoundError
from src.catalog.core.models import ProductCreateInput, ProductEditInput, VariantInput
from src.catalog.core.services.database.db_session import SERIALIZABLE
from src.catalog.entities.core.links import ProductCategoryLink
from src.catalog.entities.service.product.repository import ProductRepository
from src.catalog.entities.service.product.table import ProductTable
from src.catalog.entities.service.variant.table import VariantTable
from tests.fixtures.dummies import BROKEN_IMAGE


@pytest.fixture
def reload(database_service):
    """Read a product back in a fresh transaction."""

    def _reload(product_id):
        with database_service.transaction() as session:
            return ProductRepository(session).load_detail(product_id)

    return _reload


@pytest.fixture
def count_rows(database_service):
    def _count(table):
        with database_service.transaction() as session:
            return session.exec(select(func.count()).select_from(table)).one()

    return _count


class TestCreateProduct:
    def test_creates_product_with_categories_and_variants(
        self, product_mutation_service, make_category
    ):
        shoes = make_category("Shoes")
        sale = make_category("Sale")

        detail = product_mutation_service.create_product(
            ProductCreateInput(
                name="Runner",
                description="Road shoe",
                category_ids=[shoes.id, sale.id],
                variants=[
                    VariantInput(name="42", price=Decimal("89.00"), stock=4),
                    VariantInput(name="44", price=Decimal("94.00")),
                ],
            )
        )

        assert detail.name == "Runner"
        assert detail.is_active is True
        assert {c.name for c in detail.categories} == {"Shoes", "Sale"}
        assert {(v.name, v.price, v.stock) for v in detail.variants} == {
            ("42", Decimal("89.00"), 4),
            ("44", Decimal("94.00"), 0),
        }
        assert all(v.product_id == detail.id for v in detail.variants)
        assert detail.vouchers == []

    def test_image_is_normalized_before_storage(
        self, product_mutation_service, image_normalizer, database_service
    ):
        detail = product_mutation_service.create_product(
            ProductCreateInput(name="Pictured", image=b"raw-bytes")
        )

        assert image_normalizer.calls == [b"raw-bytes"]
        with database_service.transaction() as session:
            assert ProductRepository(session).get_image(detail.id) == b"png:raw-bytes"

    def test_undecodable_image_aborts_before_any_write(
        self, product_mutation_service, count_rows
    ):
        with pytest.raises(InvalidInputError):
            product_mutation_service.create_product(
                ProductCreateInput(name="Broken", image=BROKEN_IMAGE)
            )

        assert count_rows(ProductTable) == 0

    def test_unknown_category_rolls_back_everything(
        self, product_mutation_service, make_category, count_rows
    ):
        real = make_category("Real")

        with pytest.raises(InvalidReferenceError):
            product_mutation_service.create_product(
                ProductCreateInput(
                    name="Orphan",
                    category_ids=[real.id, "missing"],
                    variants=[VariantInput(name="only", price=Decimal("1"))],
                )
            )

        assert count_rows(ProductTable) == 0
        assert count_rows(VariantTable) == 0
        assert count_rows(ProductCategoryLink) == 0

    def test_repeated_category_id_is_rejected(self, product_mutation_service, make_category):
        category = make_category()

        with pytest.raises(InvalidReferenceError):
            product_mutation_service.create_product(
                ProductCreateInput(name="Twice", category_ids=[category.id, category.id])
            )


class TestEditProduct:
    def test_empty_payload_is_invalid_input(self, product_mutation_service, make_product):
        product = make_product()

        with pytest.raises(InvalidInputError):
            product_mutation_service.edit_product(product.id, ProductEditInput())

    def test_empty_payload_does_not_check_existence(self, product_mutation_service):
        with pytest.raises(InvalidInputError):
            product_mutation_service.edit_product("missing", ProductEditInput())

    def test_unknown_product_is_not_found(self, product_mutation_service):
        with pytest.raises(NotFoundError):
            product_mutation_service.edit_product("missing", ProductEditInput(name="x"))

    def test_updates_only_supplied_fields(self, product_mutation_service, make_product):
        product = make_product(name="Old", description="keep me", prices=("5",))

        detail = product_mutation_service.edit_product(product.id, ProductEditInput(name="New"))

        assert detail.name == "New"
        assert detail.description == "keep me"
        assert detail.is_active is True
        assert [v.id for v in detail.variants] == [product.variants[0].id]

    def test_explicit_null_description_clears_it(self, product_mutation_service, make_product):
        product = make_product(description="temporary")

        detail = product_mutation_service.edit_product(
            product.id, ProductEditInput(description=None)
        )

        assert detail.description is None
        assert detail.name == product.name

    def test_null_name_is_rejected(self):
        with pytest.raises(ValueError):
            ProductEditInput(name=None)

    def test_new_variant_needs_name_and_price(self):
        with pytest.raises(ValueError, match="name"):
            VariantInput(price=Decimal("1"))
        with pytest.raises(ValueError, match="price"):
            VariantInput(name="x", stock=3)

    def test_existing_variant_cannot_null_name_or_price(self):
        with pytest.raises(ValueError):
            VariantInput(id="v", name=None)
        with pytest.raises(ValueError):
            VariantInput(id="v", price=None)

    def test_existing_variant_reports_only_supplied_columns(self):
        assert VariantInput(id="v", stock=3).changed_values() == {"stock": 3}
        assert VariantInput(name="x", price=Decimal("1")).values() == {
            "name": "x",
            "price": Decimal("1"),
            "stock": 0,
        }

    def test_reconciles_variants(self, product_mutation_service, make_product):
        product = make_product(prices=("1", "2", "3"))
        variant_a, variant_b, variant_c = sorted(product.variants, key=lambda v: v.name)

        detail = product_mutation_service.edit_product(
            product.id,
            ProductEditInput(
                variants=[
                    VariantInput(id=variant_b.id, name="B", price=Decimal("20"), stock=9),
                    VariantInput(name="D", price=Decimal("40")),
                ]
            ),
        )

        by_name = {v.name: v for v in detail.variants}
        assert set(by_name) == {"B", "D"}
        assert by_name["B"].id == variant_b.id
        assert by_name["B"].price == Decimal("20")
        assert by_name["B"].stock == 9
        assert by_name["D"].id not in {variant_a.id, variant_b.id, variant_c.id}
        assert all(v.product is not None and v.product.id == product.id for v in detail.variants)

    def test_variant_edit_without_stock_keeps_stock(
        self, product_mutation_service, make_product
    ):
        product = make_product(prices=("5",))
        (variant,) = product.variants
        product_mutation_service.edit_product(
            product.id,
            ProductEditInput(variants=[VariantInput(id=variant.id, stock=7)]),
        )

        detail = product_mutation_service.edit_product(
            product.id,
            ProductEditInput(
                variants=[VariantInput(id=variant.id, name="renamed", price=Decimal("6"))]
            ),
        )

        (edited,) = detail.variants
        assert (edited.id, edited.name, edited.price, edited.stock) == (
            variant.id,
            "renamed",
            Decimal("6"),
            7,
        )

    def test_variant_edit_with_only_stock(self, product_mutation_service, make_product):
        product = make_product(prices=("5",))
        (variant,) = product.variants

        detail = product_mutation_service.edit_product(
            product.id,
            ProductEditInput(variants=[VariantInput(id=variant.id, stock=3)]),
        )

        (edited,) = detail.variants
        assert (edited.name, edited.price, edited.stock) == (variant.name, variant.price, 3)

    def test_existing_variant_listed_by_id_alone_is_kept_unchanged(
        self, product_mutation_service, make_product
    ):
        product = make_product(prices=("5", "6"))
        kept = product.variants[0]

        detail = product_mutation_service.edit_product(
            product.id, ProductEditInput(variants=[VariantInput(id=kept.id)])
        )

        assert [(v.id, v.name, v.price, v.stock) for v in detail.variants] == [
            (kept.id, kept.name, kept.price, kept.stock)
        ]

    def test_deleted_variants_are_gone_from_the_store(
        self, product_mutation_service, make_product, count_rows
    ):
        product = make_product(prices=("1", "2"))
        keep = product.variants[0]

        product_mutation_service.edit_product(
            product.id,
            ProductEditInput(variants=[VariantInput(id=keep.id, name=keep.name, price=keep.price)]),
        )

        assert count_rows(VariantTable) == 1

    def test_absent_and_empty_variant_lists_leave_variants_alone(
        self, product_mutation_service, make_product
    ):
        product = make_product(prices=("1", "2"))
        original = {v.id for v in product.variants}

        absent = product_mutation_service.edit_product(product.id, ProductEditInput(name="A"))
        empty = product_mutation_service.edit_product(product.id, ProductEditInput(variants=[]))

        assert {v.id for v in absent.variants} == original
        assert {v.id for v in empty.variants} == original

    def test_invalid_variant_id_rolls_back_the_whole_edit(
        self, product_mutation_service, make_product, make_category, reload
    ):
        category = make_category("Kept")
        product = make_product(name="Original", prices=("1", "2"), category_ids=[category.id])
        other = make_category("Other")

        with pytest.raises(InvalidReferenceError):
            product_mutation_service.edit_product(
                product.id,
                ProductEditInput(
                    name="Changed",
                    category_ids=[other.id],
                    variants=[VariantInput(id="not-a-variant", name="x", price=Decimal("1"))],
                ),
            )

        after = reload(product.id)
        assert after.name == "Original"
        assert {c.id for c in after.categories} == {category.id}
        assert {v.id for v in after.variants} == {v.id for v in product.variants}

    def test_variant_of_another_product_is_invalid_reference(
        self, product_mutation_service, make_product, reload
    ):
        mine = make_product(name="Mine", prices=("1",))
        theirs = make_product(name="Theirs", prices=("2",))
        foreign = theirs.variants[0]

        with pytest.raises(InvalidReferenceError):
            product_mutation_service.edit_product(
                mine.id,
                ProductEditInput(
                    variants=[VariantInput(id=foreign.id, name="stolen", price=Decimal("0"))]
                ),
            )

        assert reload(theirs.id).variants[0].name == foreign.name

    def test_unknown_category_leaves_product_unmodified(
        self, product_mutation_service, make_product, make_category, reload
    ):
        category = make_category()
        product = make_product(name="Before", category_ids=[category.id])

        with pytest.raises(InvalidReferenceError):
            product_mutation_service.edit_product(
                product.id, ProductEditInput(name="After", category_ids=["missing"])
            )

        after = reload(product.id)
        assert after.name == "Before"
        assert [c.id for c in after.categories] == [category.id]

    def test_category_replace_is_idempotent(
        self, product_mutation_service, make_product, make_category
    ):
        first = make_category("First")
        second = make_category("Second")
        third = make_category("Third")
        product = make_product(category_ids=[first.id])
        edit = ProductEditInput(category_ids=[second.id, third.id])

        once = product_mutation_service.edit_product(product.id, edit)
        twice = product_mutation_service.edit_product(product.id, edit)

        assert {c.id for c in once.categories} == {second.id, third.id}
        assert {c.id for c in twice.categories} == {second.id, third.id}

    def test_new_image_replaces_old(
        self, product_mutation_service, make_product, database_service
    ):
        product = make_product(image=b"first")

        product_mutation_service.edit_product(product.id, ProductEditInput(image=b"second"))

        with database_service.transaction() as session:
            assert ProductRepository(session).get_image(product.id) == b"png:second"


class TestDeleteProduct:
    def test_delete_cascades_to_variants_and_links(
        self, product_mutation_service, make_product, make_category, count_rows, reload
    ):
        category = make_category()
        product = make_product(prices=("1", "2"), category_ids=[category.id])

        product_mutation_service.delete_product(product.id)

        assert reload(product.id) is None
        assert count_rows(VariantTable) == 0
        assert count_rows(ProductCategoryLink) == 0

    def test_delete_unknown_is_not_found(self, product_mutation_service):
        with pytest.raises(NotFoundError):
            product_mutation_service.delete_product("missing")


class TestIsolationLevels:
    @pytest.fixture
    def isolation_levels(self, database_service, monkeypatch) -> list[str | None]:
        """Record the isolation level of every transaction the service opens."""
        levels: list[str | None] = []
        transaction = database_service.transaction

        def recording_transaction(isolation_level=None):
            levels.append(isolation_level)
            return transaction(isolation_level=isolation_level)

        monkeypatch.setattr(database_service, "transaction", recording_transaction)
        return levels

    def test_create_uses_default_isolation(self, product_mutation_service, isolation_levels):
        product_mutation_service.create_product(ProductCreateInput(name="Plain"))

        assert isolation_levels == [None]

    def test_edit_is_serializable(self, product_mutation_service, make_product, isolation_levels):
        product = make_product()
        isolation_levels.clear()

        product_mutation_service.edit_product(product.id, ProductEditInput(name="Renamed"))

        assert isolation_levels == [SERIALIZABLE]

    def test_delete_uses_default_isolation(
        self, product_mutation_service, make_product, isolation_levels
    ):
        product = make_product()
        isolation_levels.clear()

        product_mutation_service.delete_product(product.id)

        assert isolation_levels == [None]
