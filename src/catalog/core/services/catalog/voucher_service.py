"""Voucher administration."""

from collections.abc import Sequence

from loguru import logger
from sqlmodel import col, select

from src.catalog.core.errors import InvalidInputError, InvalidReferenceError
from src.catalog.core.services.database.db_session import DbSessionService
from src.catalog.entities.service.product.table import ProductTable
from src.catalog.entities.service.voucher.entity import Voucher
from src.catalog.entities.service.voucher.repository import VoucherRepository


class VoucherService:
    def __init__(self, database_service: DbSessionService):
        self._database = database_service

    def create_voucher(self, voucher: Voucher, product_ids: Sequence[str] = ()) -> Voucher:
        """Store a voucher and attach it to ``product_ids``; unknown ids reject the whole call."""
        if (
            voucher.valid_from is not None
            and voucher.valid_until is not None
            and voucher.valid_until < voucher.valid_from
        ):
            raise InvalidInputError("valid_until must not be earlier than valid_from")

        with self._database.transaction() as session:
            if product_ids:
                statement = select(ProductTable.id).where(col(ProductTable.id).in_(list(product_ids)))
                if len(session.exec(statement).all()) != len(product_ids):
                    raise InvalidReferenceError("invalid productId")

            vouchers = VoucherRepository(session)
            created = vouchers.create(voucher)
            vouchers.add_products(created.id, product_ids)

        logger.info("Voucher {} created for {} products", created.code, len(product_ids))
        return created

    def list_vouchers(self) -> list[Voucher]:
        with self._database.transaction() as session:
            return VoucherRepository(session).list_all()
