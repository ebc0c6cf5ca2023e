"""Products, their optional supplier and their 1:1 inventory record."""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, Numeric, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from estore.db.session import Base
from estore.models.base import IntegerPrimaryKeyMixin, TimestampMixin


class Product(Base, IntegerPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_products_price"),
        {"sqlite_autoincrement": True},
    )

    sku: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    supplier_id: Mapped[int | None] = mapped_column(
        ForeignKey("suppliers.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    supplier: Mapped["Supplier | None"] = relationship("Supplier", back_populates="products")
    inventory: Mapped["Inventory | None"] = relationship(
        "Inventory",
        back_populates="product",
        passive_deletes=True,
        uselist=False,
    )
    categories: Mapped[list] = relationship(
        "Category",
        secondary="product_categories",
        viewonly=True,
    )


class Inventory(Base):
    __tablename__ = "inventory"
    __table_args__ = (
        CheckConstraint("quantity_in_stock >= 0", name="ck_inventory_stock"),
        CheckConstraint("reserved_quantity >= 0", name="ck_inventory_reserved"),
    )

    product_id: Mapped[int] = mapped_column(
        ForeignKey("products.id", ondelete="CASCADE"),
        primary_key=True,
    )
    quantity_in_stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0, index=True)
    reserved_quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_updated: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    product: Mapped["Product"] = relationship("Product", back_populates="inventory")
