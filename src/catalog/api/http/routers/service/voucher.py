"""Voucher API router."""

from datetime import datetime
from decimal import Decimal
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from src.catalog.api.http.deps import get_voucher_service
from src.catalog.core.services import VoucherService
from src.catalog.entities.service.voucher.entity import Voucher

router = APIRouter(prefix="/vouchers", tags=["vouchers"])


class VoucherCreateRequest(BaseModel):
    code: str = Field(min_length=1)
    description: str | None = None
    discount: Decimal = Field(ge=0)
    valid_from: datetime | None = None
    valid_until: datetime | None = None
    product_ids: list[str] = Field(default_factory=list)


@router.get("")
def list_vouchers(
    service: VoucherService = Depends(get_voucher_service),
) -> dict[str, Any]:
    vouchers = service.list_vouchers()
    return {
        "data": [voucher.model_dump(mode="json") for voucher in vouchers],
        "total_data": len(vouchers),
    }


@router.post("", status_code=201)
def create_voucher(
    payload: VoucherCreateRequest,
    service: VoucherService = Depends(get_voucher_service),
) -> dict[str, Any]:
    """Create a voucher and attach it to the listed products."""
    voucher = Voucher(**payload.model_dump(exclude={"product_ids"}))
    created = service.create_voucher(voucher, payload.product_ids)
    return {"data": created.model_dump(mode="json")}
