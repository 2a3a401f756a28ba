"""
Shared field types for monetary amounts and percentages.
"""
from decimal import Decimal
from typing import Annotated
from pydantic import Field

# Amounts are in the currency minor unit; sub-cent values are rejected, not rounded
Money = Annotated[Decimal, Field(ge=0, decimal_places=2, allow_inf_nan=False)]
Percent = Annotated[Decimal, Field(ge=0, le=100, allow_inf_nan=False)]
