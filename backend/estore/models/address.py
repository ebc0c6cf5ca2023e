"""Customer addresses (one customer -> many addresses)."""
from __future__ import annotations

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from estore.db.session import Base
from estore.models.base import IntegerPrimaryKeyMixin, TimestampMixin
from estore.models.enums import AddressType, enum_column_type


class Address(Base, IntegerPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "addresses"
    __table_args__ = {"sqlite_autoincrement": True}

    customer_id: Mapped[int] = mapped_column(
        ForeignKey("customers.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    type: Mapped[AddressType] = mapped_column(
        enum_column_type(AddressType, "address_type"),
        nullable=False,
        default=AddressType.shipping,
    )
    line1: Mapped[str] = mapped_column(String(255), nullable=False)
    line2: Mapped[str | None] = mapped_column(String(255), nullable=True)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    state: Mapped[str | None] = mapped_column(String(100), nullable=True)
    postal_code: Mapped[str] = mapped_column(String(20), nullable=False)
    country: Mapped[str] = mapped_column(String(100), nullable=False)

    customer: Mapped["Customer"] = relationship("Customer", back_populates="addresses")
