"""Demo data for local development."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from decimal import Decimal

from loguru import logger

from src.catalog.core.models import ProductCreateInput, VariantInput
from src.catalog.core.services import (
    CategoryService,
    DbSessionService,
    ImageNormalizerService,
    ProductMutationService,
    VoucherService,
)
from src.catalog.entities.service.voucher.entity import Voucher

DEMO_CATEGORIES = ("Apparel", "Footwear", "Accessories")

DEMO_PRODUCTS = (
    ("Classic Tee", "Cotton crew neck", ("Apparel",), (("S", "9.90", 40), ("M", "9.90", 55), ("L", "11.90", 20))),
    ("Trail Runner", "Lightweight running shoe", ("Footwear",), (("42", "89.00", 8), ("44", "94.00", 3))),
    ("Canvas Tote", None, ("Accessories", "Apparel"), (("One size", "15.00", 100),)),
    ("Gift Card", "Redeemable online", (), ()),
)


@dataclass
class SeedResult:
    categories: int = 0
    products: int = 0
    variants: int = 0
    vouchers: int = 0
    product_ids: list[str] = field(default_factory=list)


def seed_catalog(database_service: DbSessionService) -> SeedResult:
    """Insert demo categories, products with variants, and one voucher."""
    normalizer = ImageNormalizerService()
    categories = CategoryService(database_service, normalizer)
    products = ProductMutationService(database_service, normalizer)
    result = SeedResult()

    category_ids = {}
    for name in DEMO_CATEGORIES:
        category_ids[name] = categories.create_category(name).id
        result.categories += 1

    for name, description, category_names, variants in DEMO_PRODUCTS:
        detail = products.create_product(
            ProductCreateInput(
                name=name,
                description=description,
                category_ids=[category_ids[c] for c in category_names],
                variants=[
                    VariantInput(name=v_name, price=Decimal(price), stock=stock)
                    for v_name, price, stock in variants
                ],
            )
        )
        result.products += 1
        result.variants += len(detail.variants)
        result.product_ids.append(detail.id)

    now = datetime.now(UTC)
    VoucherService(database_service).create_voucher(
        Voucher(
            code="WELCOME10",
            description="10 off your first order",
            discount=Decimal("10.00"),
            valid_from=now,
            valid_until=now + timedelta(days=30),
        ),
        result.product_ids[:2],
    )
    result.vouchers += 1

    logger.info(
        "Seeded {} categories, {} products, {} variants, {} vouchers",
        result.categories,
        result.products,
        result.variants,
        result.vouchers,
    )
    return result
