"""Planning of variant creates, updates and deletes."""

from decimal import Decimal

import pytest

from src.catalog.core.errors import InvalidInputError, InvalidReferenceError
from src.catalog.core.models import VariantInput
from src.catalog.core.services.catalog import reconcile
from src.catalog.entities.service.variant.entity import Variant


def _variant(name: str) -> Variant:
    return Variant(name=name, price=Decimal("1.00"), stock=1, product_id="p1")


@pytest.fixture
def existing() -> dict[str, Variant]:
    return {name: _variant(name) for name in ("A", "B", "C")}


class TestReconcile:
    def test_keeps_claimed_creates_new_deletes_rest(self, existing):
        desired = [
            VariantInput(id=existing["B"].id, name="B2", price=Decimal("5"), stock=3),
            VariantInput(name="D", price=Decimal("7")),
        ]

        plan = reconcile(existing.values(), desired)

        assert {v.name for v in plan.to_delete} == {"A", "C"}
        assert [u.current.id for u in plan.to_update] == [existing["B"].id]
        assert plan.to_update[0].desired.name == "B2"
        assert [item.name for item in plan.to_create] == ["D"]

    def test_empty_existing_creates_everything(self):
        desired = [VariantInput(name="X", price=Decimal("1")), VariantInput(name="Y", price=Decimal("2"))]

        plan = reconcile([], desired)

        assert len(plan.to_create) == 2
        assert plan.to_update == []
        assert plan.to_delete == []

    def test_unknown_id_rejects_whole_plan(self, existing):
        desired = [
            VariantInput(id=existing["A"].id, name="A", price=Decimal("1")),
            VariantInput(id="does-not-exist", name="Z", price=Decimal("1")),
        ]

        with pytest.raises(InvalidReferenceError):
            reconcile(existing.values(), desired)

    def test_duplicate_id_is_invalid_input(self, existing):
        variant_id = existing["A"].id
        desired = [
            VariantInput(id=variant_id, name="A", price=Decimal("1")),
            VariantInput(id=variant_id, name="A again", price=Decimal("2")),
        ]

        with pytest.raises(InvalidInputError):
            reconcile(existing.values(), desired)

    def test_extra_input_fields_are_ignored(self, existing):
        item = VariantInput.model_validate(
            {"id": existing["A"].id, "name": "A", "price": "3.50", "stock": 2, "sku": "ignored"}
        )

        plan = reconcile(existing.values(), [item])

        assert plan.to_update[0].desired.changed_values() == {
            "name": "A",
            "price": Decimal("3.50"),
            "stock": 2,
        }
