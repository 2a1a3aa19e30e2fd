"""
Expense Models

An expense is owned by a username and never cached in memory beyond
the lifetime of a single listing.
"""

import math
from decimal import Decimal, InvalidOperation

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Expense(BaseModel):
    """A stored expense row."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., ge=1, description="Auto-assigned row id")
    time: int = Field(..., ge=0, description="Creation time, seconds since epoch")
    username: str = Field(..., min_length=1, description="Owner of the expense")
    description: str = Field(..., description="Free-text description")
    amount: Decimal = Field(..., description="Expense amount")

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_amount(cls, v):
        # SQLite hands REAL columns back as float
        if isinstance(v, float):
            return Decimal(str(v))
        return v


def parse_amount(raw: str) -> Decimal:
    """
    Parse an amount typed on the command line.

    Raises:
        ValueError: If the text is not a finite decimal number, or cannot
            be stored as a REAL without overflowing or vanishing to zero
    """
    try:
        amount = Decimal(raw.strip())
    except InvalidOperation:
        raise ValueError(f"'{raw}' is not a valid amount")
    if not amount.is_finite():
        raise ValueError(f"'{raw}' is not a valid amount")
    stored = float(amount)
    if not math.isfinite(stored) or (amount and stored == 0.0):
        raise ValueError(f"'{raw}' is out of range for an amount")
    return amount
