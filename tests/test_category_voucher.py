"""Category and voucher administration."""

from datetime import UTC, datetime, timedelta
from decimal import Decimal

import pytest

from src.catalog.core.errors import InvalidInputError, InvalidReferenceError, NotFoundError
from src.catalog.entities.service.voucher.entity import Voucher


class TestCategoryService:
    def test_create_and_list(self, category_service):
        category_service.create_category("Zebra")
        category_service.create_category("Apple")

        assert [c.name for c in category_service.list_categories()] == ["Apple", "Zebra"]

    def test_image_is_normalized_and_served_separately(self, category_service):
        category = category_service.create_category("Pictured", b"raw")

        assert "image" not in category.model_dump()
        assert category_service.get_category_image(category.id) == b"png:raw"

    def test_missing_image_is_not_found(self, category_service):
        category = category_service.create_category("Plain")

        with pytest.raises(NotFoundError):
            category_service.get_category_image(category.id)


class TestVoucherService:
    def test_create_links_products(self, voucher_service, make_product, catalog_query_service):
        product = make_product(name="Discounted")
        make_product(name="Full price")

        voucher = voucher_service.create_voucher(
            Voucher(code="TEN", discount=Decimal("10")), [product.id]
        )

        listed = {item.name: item for item in catalog_query_service.list_products().items}
        assert [v.id for v in listed["Discounted"].vouchers] == [voucher.id]
        assert listed["Full price"].vouchers == []
        assert [v.code for v in voucher_service.list_vouchers()] == ["TEN"]

    def test_unknown_product_rejects_the_voucher(self, voucher_service, make_product):
        product = make_product()

        with pytest.raises(InvalidReferenceError):
            voucher_service.create_voucher(
                Voucher(code="BAD", discount=Decimal("1")), [product.id, "missing"]
            )

        assert voucher_service.list_vouchers() == []

    def test_inverted_validity_window_is_invalid_input(self, voucher_service):
        now = datetime.now(UTC)

        with pytest.raises(InvalidInputError):
            voucher_service.create_voucher(
                Voucher(
                    code="LATE",
                    discount=Decimal("1"),
                    valid_from=now,
                    valid_until=now - timedelta(days=1),
                )
            )
