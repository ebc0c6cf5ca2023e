"""Shared configuration and field shorthands for row schemas."""
from __future__ import annotations

from decimal import Decimal
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field


class RowSchema(BaseModel):
    """Closed schema: unknown keys are rejected."""

    model_config = ConfigDict(extra="forbid")


def bounded_str(max_length: int, required: bool = True) -> Any:
    """VARCHAR(n); required strings must also be non-empty."""
    return Annotated[str, Field(min_length=1 if required else 0, max_length=max_length)]


# DECIMAL(10,2) / DECIMAL(12,2), never negative
Price = Annotated[Decimal, Field(ge=0, max_digits=10, decimal_places=2)]
Amount = Annotated[Decimal, Field(ge=0, max_digits=12, decimal_places=2)]

# ids are signed 64-bit integers in every supported backend
MAX_ID = 2**63 - 1

ForeignKey = Annotated[int, Field(strict=True, ge=1, le=MAX_ID)]
