"""Row schemas for customers, their profiles and addresses."""
from __future__ import annotations

from datetime import date
from typing import Optional

from estore.models.enums import AddressType, Gender
from estore.schemas.base import ForeignKey, RowSchema, bounded_str

Str255 = bounded_str(255)
Str100 = bounded_str(100)
Str20 = bounded_str(20)
OptStr255 = bounded_str(255, required=False)
OptStr100 = bounded_str(100, required=False)
OptStr20 = bounded_str(20, required=False)


class CustomerRow(RowSchema):
    # email is kept literally; no case folding
    email: Str255
    password_hash: Str255
    first_name: Str100
    last_name: Str100
    phone: Optional[OptStr20] = None


class CustomerProfileRow(RowSchema):
    customer_id: ForeignKey
    date_of_birth: Optional[date] = None
    gender: Optional[Gender] = None
    newsletter_optin: bool = False
    bio: Optional[str] = None


class AddressRow(RowSchema):
    customer_id: ForeignKey
    type: AddressType = AddressType.shipping
    line1: Str255
    line2: Optional[OptStr255] = None
    city: Str100
    state: Optional[OptStr100] = None
    postal_code: Str20
    country: Str100
