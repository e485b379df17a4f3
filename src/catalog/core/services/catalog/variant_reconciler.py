"""Planning of variant creates, updates and deletes for a product edit."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from src.catalog.core.errors import InvalidInputError, InvalidReferenceError
from src.catalog.core.models.catalog import VariantInput
from src.catalog.entities.service.variant.entity import Variant


@dataclass(frozen=True)
class VariantUpdate:
    current: Variant
    desired: VariantInput


@dataclass(frozen=True)
class VariantPlan:
    to_create: list[VariantInput] = field(default_factory=list)
    to_update: list[VariantUpdate] = field(default_factory=list)
    to_delete: list[Variant] = field(default_factory=list)


def reconcile(existing: Iterable[Variant], desired: Sequence[VariantInput]) -> VariantPlan:
    """Diff a product's persisted variants against the caller's desired list.

    Inputs without an id become creates. Inputs with an id must match one of
    ``existing`` and become updates; any existing variant not claimed by an
    input is deleted. Raises ``InvalidReferenceError`` when a claimed id is not
    one of the product's variants, and ``InvalidInputError`` when the same id
    is claimed twice. Nothing is partially planned.
    """
    existing_by_id = {variant.id: variant for variant in existing}

    to_create = [item for item in desired if not item.id]
    claimed = [item for item in desired if item.id]

    seen: set[str] = set()
    to_update = []
    for item in claimed:
        if item.id in seen:
            raise InvalidInputError(f"variant id {item.id} is listed more than once")
        seen.add(item.id)

        current = existing_by_id.get(item.id)
        if current is None:
            raise InvalidReferenceError("invalid variant id")
        to_update.append(VariantUpdate(current=current, desired=item))

    to_delete = [variant for variant_id, variant in existing_by_id.items() if variant_id not in seen]

    return VariantPlan(to_create=to_create, to_update=to_update, to_delete=to_delete)
