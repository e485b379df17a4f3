"""Entity package: Voucher."""

from .entity import Voucher
from .repository import VoucherRepository
from .table import VoucherTable

__all__ = ["Voucher", "VoucherRepository", "VoucherTable"]
