"""Association tables for the many-to-many product relationships."""

from sqlmodel import Field, SQLModel


class ProductCategoryLink(SQLModel, table=True):
    """Association rows between products and categories."""

    __tablename__ = "product_categories"

    product_id: str = Field(foreign_key="products.id", primary_key=True, ondelete="CASCADE")
    category_id: str = Field(foreign_key="categories.id", primary_key=True, ondelete="CASCADE")


class ProductVoucherLink(SQLModel, table=True):
    """Association rows between products and vouchers."""

    __tablename__ = "product_vouchers"

    product_id: str = Field(foreign_key="products.id", primary_key=True, ondelete="CASCADE")
    voucher_id: str = Field(foreign_key="vouchers.id", primary_key=True, ondelete="CASCADE")
