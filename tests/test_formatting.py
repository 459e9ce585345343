"""
Tests for currency display settings.
"""

import json

from spent_ledger.formatting import (
    CURRENCY_OPTIONS,
    DEFAULT_CURRENCY,
    SETTINGS_KEY,
    CurrencySettings,
    format_currency,
    load_currency_settings,
    save_currency_settings,
)


USD = CurrencySettings(code="USD", symbol="$", position="before", locale="en-US")


class TestFormatCurrency:

    def test_default_is_rupiah(self):
        assert format_currency(123450, DEFAULT_CURRENCY) == "Rp1.234,50"

    def test_dollars(self):
        assert format_currency(100000050, USD) == "$1,000,000.50"

    def test_symbol_after(self):
        euro = CurrencySettings(code="EUR", symbol="€", position="after", locale="de-DE")
        assert format_currency(999, euro) == "9,99 €"

    def test_sign_dropped(self):
        assert format_currency(-2550, USD) == "$25.50"

    def test_unknown_locale_uses_plain_separators(self):
        odd = CurrencySettings(code="XYZ", symbol="X", locale="xx-XX")
        assert format_currency(123456, odd) == "X1,234.56"

    def test_options_include_default(self):
        assert [o.code for o in CURRENCY_OPTIONS] == ["IDR", "USD"]


class TestSettingsFile:

    def test_missing_file_uses_defaults(self, tmp_path):
        settings, loaded = load_currency_settings(tmp_path / "currency.json")
        assert loaded is False
        assert settings == DEFAULT_CURRENCY

    def test_round_trip(self, tmp_path):
        path = tmp_path / "nested" / "currency.json"
        save_currency_settings(USD, path)

        settings, loaded = load_currency_settings(path)
        assert loaded is True
        assert settings == USD
        assert json.loads(path.read_text())[SETTINGS_KEY]["code"] == "USD"

    def test_corrupt_file_falls_back(self, tmp_path, caplog):
        path = tmp_path / "currency.json"
        path.write_text("{not json")

        settings, loaded = load_currency_settings(path)
        assert loaded is False
        assert settings == DEFAULT_CURRENCY
        assert "Ignoring unreadable currency settings" in caplog.text

    def test_wrong_shape_falls_back(self, tmp_path):
        path = tmp_path / "currency.json"
        path.write_text(json.dumps({SETTINGS_KEY: {"code": "TOOLONG", "symbol": "?"}}))

        _settings, loaded = load_currency_settings(path)
        assert loaded is False
