"""Input and result models for the catalog services."""

from __future__ import annotations

import math
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field, model_validator

from src.catalog.core.errors import InvalidInputError
from src.catalog.entities.service.product.entity import ProductDetail


class FieldPresence(str, Enum):
    """How an optional field appeared in a partial payload."""

    ABSENT = "absent"
    EMPTY = "empty"
    PRESENT = "present"


class SortField(str, Enum):
    """Allow-list of listing sort keys; ``price`` is derived, the rest are product columns."""

    NAME = "name"
    DESCRIPTION = "description"
    IS_ACTIVE = "is_active"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"
    PRICE = "price"

    @classmethod
    def parse(cls, value: str) -> SortField:
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(member.value for member in cls)
            raise InvalidInputError(
                f"invalid sort field '{value}'; expected one of: {allowed}"
            ) from None


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: str) -> SortDirection:
        try:
            return cls(value.lower())
        except ValueError:
            raise InvalidInputError(f"invalid sort direction '{value}'") from None


class VariantInput(BaseModel):
    """Desired state of one variant.

    With an ``id`` it targets an existing variant of the product and only the
    supplied fields change; without one it describes a variant to create and
    needs a name and a price. Unknown keys are ignored.
    """

    id: str | None = None
    name: str | None = Field(default=None, min_length=1)
    price: Decimal | None = Field(default=None, ge=0)
    stock: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _name_and_price_present(self) -> VariantInput:
        for field_name in ("name", "price"):
            value = getattr(self, field_name)
            if value is None and (not self.id or field_name in self.model_fields_set):
                raise ValueError(f"variant {field_name} is required")
        return self

    def values(self) -> dict[str, object]:
        """Column values for a new variant; ``stock`` falls back to 0."""
        return self.model_dump(include={"name", "price", "stock"})

    def changed_values(self) -> dict[str, object]:
        """Column values for an update: only the fields the caller supplied."""
        return self.model_dump(include={"name", "price", "stock"}, exclude_unset=True)


class ProductCreateInput(BaseModel):
    name: str = Field(min_length=1)
    description: str | None = None
    is_active: bool = True
    category_ids: list[str] | None = None
    variants: list[VariantInput] | None = None
    image: bytes | None = Field(default=None, description="Raw upload, normalized before storage")

    @model_validator(mode="after")
    def _variants_complete(self) -> ProductCreateInput:
        # ids are ignored on create, so every variant is a new one
        for variant in self.variants or ():
            if variant.name is None or variant.price is None:
                raise ValueError("new variants need a name and a price")
        return self

    def product_values(self) -> dict[str, object]:
        return self.model_dump(include={"name", "description", "is_active"})


class ProductEditInput(BaseModel):
    """Partial product update.

    Presence matters: a field that was never supplied means "no change", which
    is different from a field explicitly supplied with a value.
    """

    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    is_active: bool | None = None
    category_ids: list[str] | None = None
    variants: list[VariantInput] | None = None
    image: bytes | None = None

    @model_validator(mode="after")
    def _required_columns_not_null(self) -> ProductEditInput:
        for field_name in ("name", "is_active"):
            if field_name in self.model_fields_set and getattr(self, field_name) is None:
                raise ValueError(f"{field_name} cannot be null")
        return self

    def is_empty(self) -> bool:
        return not self.model_fields_set

    def presence(self, field_name: str) -> FieldPresence:
        if field_name not in self.model_fields_set or getattr(self, field_name) is None:
            return FieldPresence.ABSENT
        value = getattr(self, field_name)
        if isinstance(value, list) and not value:
            return FieldPresence.EMPTY
        return FieldPresence.PRESENT

    def product_values(self) -> dict[str, object]:
        return {
            field_name: getattr(self, field_name)
            for field_name in ("name", "description", "is_active")
            if field_name in self.model_fields_set
        }


class ProductFilter(BaseModel):
    name: str | None = Field(default=None, description="Case-insensitive substring of the name")


class ProductSort(BaseModel):
    field: SortField = SortField.UPDATED_AT
    direction: SortDirection = SortDirection.DESC


class Pagination(BaseModel):
    page: int = Field(default=1, ge=1)
    per_page: int = Field(default=5, ge=1)
    enabled: bool = True

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page


class PageInfo(BaseModel):
    total_page: int
    current_page: int
    per_page: int

    @classmethod
    def build(cls, total: int, pagination: Pagination) -> PageInfo:
        return cls(
            total_page=math.ceil(total / pagination.per_page),
            current_page=pagination.page,
            per_page=pagination.per_page,
        )


class ProductPage(BaseModel):
    items: list[ProductDetail]
    total: int
    page_info: PageInfo | None = None

    def to_response(self) -> dict[str, object]:
        """Listing envelope: data and total, plus page metadata when paginated."""
        body: dict[str, object] = {
            "data": [item.model_dump(mode="json") for item in self.items],
            "total_data": self.total,
        }
        if self.page_info is not None:
            body.update(self.page_info.model_dump())
        return body
