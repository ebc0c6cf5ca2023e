"""Customer profile: strict 1:1 with customers through a shared primary key."""
from __future__ import annotations

from datetime import date

from sqlalchemy import Boolean, Date, ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from estore.db.session import Base
from estore.models.enums import Gender, enum_column_type


class CustomerProfile(Base):
    __tablename__ = "customer_profiles"

    # PK and FK -> enforces 1:1
    customer_id: Mapped[int] = mapped_column(
        ForeignKey("customers.id", ondelete="CASCADE"),
        primary_key=True,
    )
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    gender: Mapped[Gender | None] = mapped_column(enum_column_type(Gender, "gender"), nullable=True)
    newsletter_optin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)

    customer: Mapped["Customer"] = relationship("Customer", back_populates="profile")
