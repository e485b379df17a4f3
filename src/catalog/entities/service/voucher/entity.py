"""Entity: Voucher."""

from datetime import datetime
from decimal import Decimal

from pydantic import Field

from src.catalog.entities.core._base import Entity


class Voucher(Entity):
    """Promotional voucher, passed through unchanged in product listings."""

    code: str = Field(description="Redeemable voucher code")
    description: str | None = Field(default=None, description="Human readable description")
    discount: Decimal = Field(ge=0, description="Discount amount")
    valid_from: datetime | None = Field(default=None, description="Start of validity")
    valid_until: datetime | None = Field(default=None, description="End of validity")
