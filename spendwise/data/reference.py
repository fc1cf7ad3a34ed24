"""Static reference data: budget categories and supported currencies.

Used by the HTTP layer to populate pickers and validate currency codes.
"""

from enum import Enum


class Category(str, Enum):
    HOUSING = "Housing"
    FOOD = "Food & Dining"
    TRANSPORT = "Transport"
    ENTERTAINMENT = "Entertainment"
    SHOPPING = "Shopping"
    HEALTH = "Health"
    UTILITIES = "Utilities"
    SAVINGS = "Savings"
    OTHER = "Other"


CURRENCIES: dict[str, dict] = {
    "USD": {"code": "USD", "symbol": "$", "name": "US Dollar"},
    "EUR": {"code": "EUR", "symbol": "€", "name": "Euro"},
    "GBP": {"code": "GBP", "symbol": "£", "name": "British Pound"},
    "JPY": {"code": "JPY", "symbol": "¥", "name": "Japanese Yen"},
    "AUD": {"code": "AUD", "symbol": "A$", "name": "Australian Dollar"},
    "CAD": {"code": "CAD", "symbol": "C$", "name": "Canadian Dollar"},
    "CHF": {"code": "CHF", "symbol": "Fr", "name": "Swiss Franc"},
    "CNY": {"code": "CNY", "symbol": "¥", "name": "Chinese Yuan"},
    "HKD": {"code": "HKD", "symbol": "HK$", "name": "Hong Kong Dollar"},
    "NZD": {"code": "NZD", "symbol": "NZ$", "name": "NZ Dollar"},
    "SGD": {"code": "SGD", "symbol": "S$", "name": "Singapore Dollar"},
    "INR": {"code": "INR", "symbol": "₹", "name": "Indian Rupee"},
    "MMK": {"code": "MMK", "symbol": "Ks", "name": "Myanmar Kyat"},
}

CURRENCY_CODES: list[str] = list(CURRENCIES)
