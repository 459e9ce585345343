"""
Shared enumerations for database models.

Values are the lowercase strings used on the wire
("asset", "expense", ...), so request payloads and stored
rows use the same vocabulary.
"""

import enum


class AccountClassification(str, enum.Enum):
    """How an account's balance behaves."""
    ASSET = "asset"
    CONTRA_ASSET = "contra_asset"
    LIABILITY = "liability"
    EQUITY = "equity"


class Polarity(str, enum.Enum):
    """Which stored sign increases an account's balance."""
    DEBIT = "debit"
    CREDIT = "credit"


class CategoryType(str, enum.Enum):
    INCOME = "income"
    EXPENSE = "expense"


class TransactionKind(str, enum.Enum):
    """User-facing direction of a direct (non-transfer) entry."""
    INCOME = "income"
    EXPENSE = "expense"


# contra_asset tracks real money recorded the same way as asset
POLARITY_BY_CLASSIFICATION: dict[AccountClassification, Polarity] = {
    AccountClassification.ASSET: Polarity.DEBIT,
    AccountClassification.CONTRA_ASSET: Polarity.DEBIT,
    AccountClassification.LIABILITY: Polarity.CREDIT,
    AccountClassification.EQUITY: Polarity.CREDIT,
}


def polarity(classification: AccountClassification) -> Polarity:
    """Return the polarity group of an account classification."""
    return POLARITY_BY_CLASSIFICATION[AccountClassification(classification)]
