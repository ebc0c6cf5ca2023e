"""Supplier entity."""
from __future__ import annotations

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from estore.db.session import Base
from estore.models.base import IntegerPrimaryKeyMixin, TimestampMixin


class Supplier(Base, IntegerPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "suppliers"
    __table_args__ = {"sqlite_autoincrement": True}

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    contact_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(25), nullable=True)

    products: Mapped[list] = relationship("Product", back_populates="supplier", passive_deletes=True)
