"""Exchange API: live rates with fallback, and amount conversion."""

from fastapi import APIRouter, HTTPException, status

from spendwise.core.config import settings
from spendwise.data.reference import CURRENCIES, CURRENCY_CODES
from spendwise.schemas.exchange import ConvertRequest, ConvertResponse, RatesResponse
from spendwise.services.exchange import convert_amount, fetch_exchange_rates

router = APIRouter(prefix="/exchange", tags=["exchange"])


def _check_code(code: str) -> str:
    code = code.upper()
    if code not in CURRENCIES:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=f"Unsupported currency: {code}")
    return code


@router.get("/currencies")
async def list_currencies():
    """Supported currencies, for pickers."""
    return [CURRENCIES[code] for code in CURRENCY_CODES]


@router.get("/rates/{base}", response_model=RatesResponse)
async def get_rates(base: str):
    base = _check_code(base)
    return RatesResponse(base=base, rates=await fetch_exchange_rates(base))


@router.post("/convert", response_model=ConvertResponse)
async def convert(payload: ConvertRequest):
    from_code = _check_code(payload.from_currency)
    to_code = _check_code(payload.to_currency)
    rates = payload.rates
    if rates is None:
        rates = await fetch_exchange_rates(settings.default_currency)
    return ConvertResponse(amount=convert_amount(payload.amount, from_code, to_code, rates), currency=to_code)
