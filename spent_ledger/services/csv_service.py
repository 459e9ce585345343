"""
CSV service: export and import of transactions.

Export writes one row per transaction, amounts in major units.
Import records each row through TransactionService, so imported
entries get the same sign convention and validation as entries
typed in by hand. A bad row is reported and skipped; the other
rows are still imported.
"""

import csv
import io
import logging
import re
from datetime import datetime
from decimal import Decimal, InvalidOperation

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from spent_ledger.errors import InvalidAmountError, LedgerError, ValidationError
from spent_ledger.models.enums import TransactionKind
from spent_ledger.schemas.transaction import (
    ImportRequest,
    ImportResult,
    TransactionCreate,
)
from spent_ledger.services.category_service import FALLBACK_CATEGORY
from spent_ledger.services.transaction_service import TransactionService

logger = logging.getLogger(__name__)

EXPORT_HEADER = ["ID", "Amount", "Description", "Category", "Date"]

DATE_FORMATS = [
    "%Y-%m-%d",
    "%m/%d/%Y",
    "%d/%m/%Y",
    "%Y/%m/%d",
    "%m-%d-%Y",
    "%d-%m-%Y",
    "%Y-%m-%d %H:%M:%S",
    "%m/%d/%Y %H:%M",
]

_CURRENCY_NOISE = re.compile(r"[$€£,\s]")

# Stored amounts are 64-bit integers
MAX_MINOR_UNITS = 2**63 - 1

# Length of the transactions.description column
MAX_DESCRIPTION_LENGTH = 255


def parse_minor_units(text: str) -> int:
    """
    Parse a money string such as "$1,234.50" or "-12" into cents.

    Raises InvalidAmountError if the text is not a finite number.
    """
    cleaned = _CURRENCY_NOISE.sub("", text or "")
    try:
        value = Decimal(cleaned)
        if not value.is_finite():
            raise InvalidAmountError(f"Amount '{text}' is not finite")
        cents = int((value * 100).quantize(Decimal("1")))
    except InvalidOperation:
        raise InvalidAmountError(f"Cannot parse '{text}' as a number") from None
    if abs(cents) > MAX_MINOR_UNITS:
        raise InvalidAmountError(f"Amount '{text}' is out of range")
    return cents


def parse_date(text: str) -> datetime:
    """Parse a date in any of DATE_FORMATS. Raises ValidationError."""
    text = (text or "").strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    raise ValidationError(f"Unsupported date format '{text}'")


def format_major_units(cents: int) -> str:
    return f"{Decimal(cents) / 100:.2f}"


class CsvService:

    def __init__(self, db: Session):
        self.db = db
        self.transaction_service = TransactionService(db)

    def export_transactions_csv(self, container_id: int) -> str:
        """All transactions in a container as CSV, most recent first."""
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(EXPORT_HEADER)
        for txn in self.transaction_service.get_transactions(container_id):
            writer.writerow([
                txn.id,
                format_major_units(txn.amount),
                txn.description,
                txn.category or "",
                txn.date.strftime("%Y-%m-%d %H:%M:%S"),
            ])
        return buffer.getvalue()

    def import_transactions_csv(self, request: ImportRequest) -> ImportResult:
        """
        Import rows into one account.

        Negative amounts are expenses, positive amounts income.
        Unknown or empty categories fall back to "Other". Row
        numbers in errors are 1-based and count the header.
        """
        # Fail the whole import early if the account is unknown
        self.transaction_service.account_service.get_account(request.account_id)

        reader = csv.reader(io.StringIO(request.csv_content))
        success_count = 0
        errors: list[str] = []

        for index, record in enumerate(reader):
            if request.skip_header and index == 0:
                continue
            row_num = index + 1
            if not any(cell.strip() for cell in record):
                continue

            def cell(column: int, default: str = "") -> str:
                return record[column].strip() if column < len(record) else default

            amount_text = cell(request.amount_column)
            try:
                cents = parse_minor_units(amount_text)
                if cents == 0:
                    raise InvalidAmountError("Amount must not be zero")
            except InvalidAmountError as e:
                errors.append(f"Row {row_num}: Invalid amount '{amount_text}' - {e}")
                continue

            date_text = cell(request.date_column)
            try:
                date = parse_date(date_text)
            except ValidationError as e:
                errors.append(f"Row {row_num}: Invalid date '{date_text}' - {e}")
                continue

            category = cell(request.category_column)
            if not category or not self.transaction_service.category_service.find_category(category):
                category = FALLBACK_CATEGORY

            description = cell(request.description_column) or "Imported"
            try:
                self.transaction_service.record_transaction(TransactionCreate(
                    account_id=request.account_id,
                    amount=abs(cents),
                    kind=TransactionKind.EXPENSE if cents < 0 else TransactionKind.INCOME,
                    category=category,
                    description=description[:MAX_DESCRIPTION_LENGTH],
                    date=date,
                ))
                success_count += 1
            except (LedgerError, PydanticValidationError) as e:
                errors.append(f"Row {row_num}: Failed to insert - {e}")

        logger.info(
            "Imported %d row(s) into account %s, %d error(s)",
            success_count, request.account_id, len(errors),
        )
        return ImportResult(
            success_count=success_count,
            error_count=len(errors),
            errors=errors,
        )
