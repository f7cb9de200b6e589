"""
Typed errors for the ledger.

Every error the core raises is a LedgerError carrying:
- message: human readable, safe to return to a client
- kind: machine-readable name (e.g. "Unbalanced", "HasEntries")
- category: the broad family the transport layer maps to a status

    LedgerError
    +-- LedgerValidationError (also a ValueError)
    |   +-- InvalidInputError
    |   +-- TooFewEntriesError
    |   +-- BothSidesPresentError
    |   +-- NeitherSidePresentError
    |   +-- NegativeAmountError
    |   +-- UnbalancedError
    |   +-- MissingFieldError
    |   +-- DuplicateCodeError
    +-- NotFoundError
    |   +-- AccountNotFoundError
    |   +-- TransactionNotFoundError
    |   +-- AccountsNotFoundError
    +-- ConflictError
    |   +-- AccountHasEntriesError
    +-- InfrastructureError

Validation, not-found and conflict errors are all caused by
the client and are never retried by the core.
"""

from decimal import Decimal


class LedgerError(Exception):
    """Base class for every error raised by the ledger core."""

    kind: str = "LedgerError"
    category: str = "LedgerError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        return {"kind": self.kind, "message": self.message}


# --- Validation ---

class LedgerValidationError(LedgerError, ValueError):
    kind = "ValidationError"
    category = "ValidationError"


class InvalidInputError(LedgerValidationError):
    kind = "InvalidInput"


class TooFewEntriesError(LedgerValidationError):
    kind = "TooFewEntries"

    def __init__(self, count: int):
        super().__init__("Transaction must have at least 2 entries")
        self.count = count


class BothSidesPresentError(LedgerValidationError):
    kind = "BothSidesPresent"

    def __init__(self, position: int):
        super().__init__(
            f"Entry {position}: Cannot have both debit and credit amounts"
        )
        self.position = position


class NeitherSidePresentError(LedgerValidationError):
    kind = "NeitherSidePresent"

    def __init__(self, position: int):
        super().__init__(
            f"Entry {position}: Must have either debit or credit amount"
        )
        self.position = position


class NegativeAmountError(LedgerValidationError):
    kind = "NegativeAmount"

    def __init__(self, position: int):
        super().__init__(f"Entry {position}: Amounts cannot be negative")
        self.position = position


class UnbalancedError(LedgerValidationError):
    kind = "Unbalanced"

    def __init__(self, total_debits: Decimal, total_credits: Decimal):
        super().__init__(
            f"Total debits ({total_debits:.2f}) do not equal "
            f"total credits ({total_credits:.2f})"
        )
        self.total_debits = total_debits
        self.total_credits = total_credits


class MissingFieldError(LedgerValidationError):
    kind = "MissingField"

    def __init__(self, field: str):
        super().__init__(f"Field '{field}' is required")
        self.field = field


class DuplicateCodeError(LedgerValidationError):
    kind = "DuplicateCode"

    def __init__(self, code: str):
        super().__init__(f"Account with code '{code}' already exists")
        self.code = code


# --- Not found ---

class NotFoundError(LedgerError):
    kind = "NotFound"
    category = "NotFoundError"


class AccountNotFoundError(NotFoundError):

    def __init__(self, account_id: int):
        super().__init__(f"Account {account_id} not found")
        self.account_id = account_id


class TransactionNotFoundError(NotFoundError):

    def __init__(self, transaction_id: int):
        super().__init__(f"Transaction {transaction_id} not found")
        self.transaction_id = transaction_id


class AccountsNotFoundError(NotFoundError):
    kind = "AccountsNotFound"

    def __init__(self, missing_ids: set[int]):
        ids = ", ".join(str(i) for i in sorted(missing_ids))
        super().__init__(f"One or more accounts not found: {ids}")
        self.missing_ids = missing_ids


# --- Conflict ---

class ConflictError(LedgerError):
    kind = "Conflict"
    category = "ConflictError"


class AccountHasEntriesError(ConflictError):
    kind = "HasEntries"

    def __init__(self, account_id: int):
        super().__init__(
            f"Cannot delete account {account_id} with existing transactions"
        )
        self.account_id = account_id


# --- Infrastructure ---

class InfrastructureError(LedgerError):
    """Persistence failed part-way through an operation; nothing was kept."""

    kind = "InfrastructureError"
    category = "InfrastructureError"
