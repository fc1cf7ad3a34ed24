"""Exchange rate schemas."""

from pydantic import BaseModel, Field


class RatesResponse(BaseModel):
    base: str
    rates: dict[str, float]


class ConvertRequest(BaseModel):
    amount: float
    from_currency: str = Field(..., min_length=3, max_length=3)
    to_currency: str = Field(..., min_length=3, max_length=3)
    rates: dict[str, float] | None = None  # fetched live when omitted


class ConvertResponse(BaseModel):
    amount: float
    currency: str
