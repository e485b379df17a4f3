"""Voucher database table model."""

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlmodel import Field, Relationship

from src.catalog.entities.core._base import EntityTable
from src.catalog.entities.core.links import ProductVoucherLink

if TYPE_CHECKING:
    from src.catalog.entities.service.product.table import ProductTable


class VoucherTable(EntityTable, table=True):
    """Database persistence model for promotional vouchers."""

    __tablename__ = "vouchers"

    code: str = Field(index=True, unique=True)
    description: str | None = None
    discount: Decimal = Field(default=Decimal("0"), max_digits=12, decimal_places=2)
    valid_from: datetime | None = None
    valid_until: datetime | None = None

    products: list["ProductTable"] = Relationship(
        back_populates="vouchers", link_model=ProductVoucherLink
    )
