"""Entity package: Variant."""

from .entity import Variant
from .repository import VariantRepository
from .table import VariantTable

__all__ = ["Variant", "VariantRepository", "VariantTable"]
