"""
Currency display settings and formatting.

Display settings are an explicit value: load them (falling back
to the defaults), pass them to format_currency, save them back.
Nothing here touches the ledger; amounts stay integer cents.
"""

import json
import logging
from decimal import Decimal
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError

logger = logging.getLogger(__name__)

SETTINGS_KEY = "spent_currency"


class CurrencySettings(BaseModel):
    code: str = Field(min_length=3, max_length=3)
    symbol: str = Field(min_length=1, max_length=8)
    position: Literal["before", "after"] = "before"
    locale: str = "en-US"


class CurrencyOption(CurrencySettings):
    name: str


DEFAULT_CURRENCY = CurrencySettings(
    code="IDR", symbol="Rp", position="before", locale="id-ID"
)

CURRENCY_OPTIONS: list[CurrencyOption] = [
    CurrencyOption(
        code="IDR", symbol="Rp", name="Indonesian Rupiah",
        position="before", locale="id-ID",
    ),
    CurrencyOption(
        code="USD", symbol="$", name="US Dollar",
        position="before", locale="en-US",
    ),
]

# (thousands separator, decimal separator) per locale
LOCALE_SEPARATORS: dict[str, tuple[str, str]] = {
    "en-US": (",", "."),
    "en-GB": (",", "."),
    "id-ID": (".", ","),
    "de-DE": (".", ","),
    "fr-FR": (" ", ","),
}


def load_currency_settings(path: str | Path) -> tuple[CurrencySettings, bool]:
    """
    Read display settings from a JSON file.

    Returns (settings, loaded). loaded is False when the file is
    missing or unreadable and the defaults were used.
    """
    path = Path(path)
    if not path.exists():
        return DEFAULT_CURRENCY.model_copy(), False

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
        return CurrencySettings.model_validate(raw[SETTINGS_KEY]), True
    except (OSError, json.JSONDecodeError, KeyError, TypeError, PydanticValidationError) as e:
        logger.warning("Ignoring unreadable currency settings in %s: %s", path, e)
        return DEFAULT_CURRENCY.model_copy(), False


def save_currency_settings(settings: CurrencySettings, path: str | Path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps({SETTINGS_KEY: settings.model_dump()}, indent=2),
        encoding="utf-8",
    )


def format_currency(cents: int, settings: CurrencySettings) -> str:
    """
    Format a minor-unit amount for display.

    The sign is dropped; callers show direction separately.

    >>> format_currency(123450, DEFAULT_CURRENCY)
    'Rp1.234,50'
    """
    thousands, decimal = LOCALE_SEPARATORS.get(settings.locale, (",", "."))
    major = Decimal(abs(int(cents))) / 100
    whole, fraction = f"{major:,.2f}".split(".")
    formatted = f"{whole.replace(',', thousands)}{decimal}{fraction}"

    if settings.position == "before":
        return f"{settings.symbol}{formatted}"
    return f"{formatted} {settings.symbol}"
