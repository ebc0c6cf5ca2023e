"""Customer entity: login identity and contact details."""
from __future__ import annotations

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from estore.db.session import Base
from estore.models.base import IntegerPrimaryKeyMixin, TimestampMixin


class Customer(Base, IntegerPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "customers"
    __table_args__ = {"sqlite_autoincrement": True}

    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(20), nullable=True)

    # Relationships are read-only navigation; deletion policy is applied by the store
    profile: Mapped["CustomerProfile | None"] = relationship(
        "CustomerProfile",
        back_populates="customer",
        passive_deletes=True,
        uselist=False,
    )
    addresses: Mapped[list] = relationship(
        "Address",
        back_populates="customer",
        passive_deletes=True,
    )
    orders: Mapped[list] = relationship(
        "Order",
        back_populates="customer",
        passive_deletes="all",
    )
    reviews: Mapped[list] = relationship(
        "Review",
        back_populates="customer",
        passive_deletes=True,
    )
