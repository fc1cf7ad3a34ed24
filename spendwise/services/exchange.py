"""Exchange rates: fetch with a static fallback, and ratio conversion.

Rates are quoted against a base currency: ``rates[code]`` units of
``code`` per one unit of the base.
"""

from __future__ import annotations

import logging

import httpx

from spendwise.core.config import settings

logger = logging.getLogger(__name__)

# USD-based rates used when the live fetch fails
FALLBACK_RATES: dict[str, float] = {
    "USD": 1,
    "EUR": 0.92,
    "GBP": 0.79,
    "JPY": 151.0,
    "AUD": 1.52,
    "CAD": 1.35,
    "INR": 83.0,
    "MMK": 2100,
}


async def fetch_exchange_rates(
    base: str,
    transport: httpx.AsyncBaseTransport | None = None,
) -> dict[str, float]:
    """Fetch live rates for ``base``, falling back to FALLBACK_RATES on any failure."""
    url = settings.exchange_rates_url.format(base=base.upper())
    try:
        async with httpx.AsyncClient(timeout=settings.exchange_timeout_seconds, transport=transport) as client:
            resp = await client.get(url)
        resp.raise_for_status()
        rates = resp.json()["rates"]
        if not isinstance(rates, dict) or not rates:
            raise ValueError("empty rates table")
        return {code: float(rate) for code, rate in rates.items()}
    except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
        logger.warning("Failed to fetch rates for %s, using fallback: %s", base, e)
        return dict(FALLBACK_RATES)


def convert_amount(amount: float, from_code: str, to_code: str, rates: dict[str, float] | None) -> float:
    """Convert ``amount`` between currencies using a rates table.

    Same currency or no table → amount unchanged. Codes missing from the
    table are treated as rate 1.
    """
    if from_code == to_code:
        return amount
    if not rates:
        return amount
    from_rate = rates.get(from_code) or 1
    to_rate = rates.get(to_code) or 1
    return (amount / from_rate) * to_rate
