"""
Display settings endpoints.

Currency settings only affect how amounts are shown; the ledger
always stores integer minor units.
"""

from fastapi import APIRouter

from spent_ledger.config import get_settings
from spent_ledger.formatting import (
    CURRENCY_OPTIONS,
    CurrencyOption,
    CurrencySettings,
    format_currency,
    load_currency_settings,
    save_currency_settings,
)

router = APIRouter(prefix="/settings", tags=["Settings"])


@router.get("/currency", response_model=CurrencySettings)
def get_currency_settings():
    settings, _loaded = load_currency_settings(get_settings().CURRENCY_SETTINGS_PATH)
    return settings


@router.put("/currency", response_model=CurrencySettings)
def update_currency_settings(request: CurrencySettings):
    save_currency_settings(request, get_settings().CURRENCY_SETTINGS_PATH)
    return request


@router.get("/currency/options", response_model=list[CurrencyOption])
def get_currency_options():
    return CURRENCY_OPTIONS


@router.get("/currency/format")
def format_amount(cents: int):
    """Format an amount with the saved display settings."""
    settings, _loaded = load_currency_settings(get_settings().CURRENCY_SETTINGS_PATH)
    return {"cents": cents, "formatted": format_currency(cents, settings)}
