"""Voucher repository."""

from collections.abc import Sequence

from sqlalchemy import insert
from sqlmodel import Session, select

from src.catalog.entities.core.links import ProductVoucherLink
from src.catalog.entities.service.voucher.entity import Voucher
from src.catalog.entities.service.voucher.table import VoucherTable


class VoucherRepository:
    """Data-access layer for vouchers."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def create(self, voucher: Voucher) -> Voucher:
        row = VoucherTable.model_validate(voucher, from_attributes=True)
        self._session.add(row)
        self._session.flush()
        return Voucher.model_validate(row, from_attributes=True)

    def add_products(self, voucher_id: str, product_ids: Sequence[str]) -> None:
        if not product_ids:
            return
        self._session.exec(
            insert(ProductVoucherLink),
            params=[
                {"product_id": product_id, "voucher_id": voucher_id}
                for product_id in product_ids
            ],
        )

    def list_all(self) -> list[Voucher]:
        statement = select(VoucherTable).order_by(VoucherTable.code)
        return [
            Voucher.model_validate(row, from_attributes=True)
            for row in self._session.exec(statement).all()
        ]
