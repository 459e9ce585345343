"""
Ledger error taxonomy.

Every error raised by the services derives from LedgerError, which is
itself a ValueError. The API layer maps each family to an HTTP status
with http_status_for().
"""


class LedgerError(ValueError):
    """Base class for all ledger errors."""
    pass


# --- Validation: bad input shape or range, never partially applied ---

class ValidationError(LedgerError):
    """Input was rejected before anything was written."""
    pass


class InvalidClassificationError(ValidationError):
    pass


class InvalidAmountError(ValidationError):
    pass


class MissingCategoryError(ValidationError):
    pass


class InvalidCategoryTypeError(ValidationError):
    pass


class SameAccountTransferError(ValidationError):
    pass


class CrossContainerTransferError(ValidationError):
    pass


class InvalidPeriodError(ValidationError):
    pass


# --- Conflict: registry state is unchanged ---

class ConflictError(LedgerError):
    """The write conflicts with existing registry state."""
    pass


class DuplicateNameError(ConflictError):
    pass


class DefaultCategoryError(ConflictError):
    pass


class CategoryInUseError(ConflictError):
    pass


# --- Not found: callers must not assume auto-creation ---

class NotFoundError(LedgerError):
    """A referenced entity does not exist."""
    pass


class AccountNotFoundError(NotFoundError):
    pass


class CategoryNotFoundError(NotFoundError):
    pass


class ContainerNotFoundError(NotFoundError):
    pass


class TransactionNotFoundError(NotFoundError):
    pass


# --- Consistency: the only fatal class ---

class ConsistencyError(LedgerError):
    """
    A transfer group lost a leg, or the container is locked
    until someone reconciles it.
    """

    def __init__(self, message: str, container_id: int | None = None):
        super().__init__(message)
        self.container_id = container_id


def http_status_for(error: LedgerError) -> int:
    """Return the HTTP status code for a ledger error."""
    if isinstance(error, NotFoundError):
        return 404
    if isinstance(error, ConflictError):
        return 409
    if isinstance(error, ConsistencyError):
        # A locked container is a client-visible state, a broken
        # group found mid-write is a server fault
        return 423 if error.container_id is not None else 500
    return 400
