"""
Entry validation and polarity rules.

Two groups of pure functions, with no database access:

1. validate_entries() decides whether a proposed set of lines
   is a legal double-entry transaction:
   - at least 2 entries
   - per entry, in input order: not both sides, not neither
     side, no negative amounts
   - total debits equal total credits within BALANCE_TOLERANCE
   The first violation found is raised.

2. balance_delta() maps (account type, debit, credit) to the
   signed change in the account's balance:
   - ASSET, EXPENSE:             debit - credit
   - LIABILITY, EQUITY, REVENUE: credit - debit
   Reversing a posted entry is the same rule with debit and
   credit swapped (reverse_delta()).
"""

from decimal import Decimal
from typing import Iterable, Protocol

from ledger_engine.errors import (
    TooFewEntriesError,
    BothSidesPresentError,
    NeitherSidePresentError,
    NegativeAmountError,
    UnbalancedError,
)
from ledger_engine.models.enums import AccountType, DEBIT_NORMAL_TYPES

BALANCE_TOLERANCE = Decimal("0.01")

ZERO = Decimal("0")


class EntryLike(Protocol):
    debit: Decimal
    credit: Decimal


def to_amount(value) -> Decimal:
    """Coerce an int, float, str or Decimal to Decimal without float noise."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def validate_entries(entries: list[EntryLike]) -> None:
    """
    Raise the first rule violation in a proposed entry set.

    Positions in error messages are 1-based.
    """
    if len(entries) < 2:
        raise TooFewEntriesError(len(entries))

    for position, entry in enumerate(entries, start=1):
        debit = to_amount(entry.debit)
        credit = to_amount(entry.credit)
        has_debit = debit > 0
        has_credit = credit > 0

        if has_debit and has_credit:
            raise BothSidesPresentError(position)
        if not has_debit and not has_credit:
            raise NeitherSidePresentError(position)
        if debit < 0 or credit < 0:
            raise NegativeAmountError(position)

    total_debits, total_credits = entry_totals(entries)
    if abs(total_debits - total_credits) > BALANCE_TOLERANCE:
        raise UnbalancedError(total_debits, total_credits)


def entry_totals(entries: Iterable[EntryLike]) -> tuple[Decimal, Decimal]:
    """Return (total debits, total credits)."""
    total_debits = ZERO
    total_credits = ZERO
    for entry in entries:
        total_debits += to_amount(entry.debit)
        total_credits += to_amount(entry.credit)
    return total_debits, total_credits


def balance_delta(account_type: AccountType, debit, credit) -> Decimal:
    """Signed change to an account's balance from one entry."""
    debit = to_amount(debit)
    credit = to_amount(credit)
    if account_type in DEBIT_NORMAL_TYPES:
        return debit - credit
    return credit - debit


def reverse_delta(account_type: AccountType, debit, credit) -> Decimal:
    """Signed change that undoes a previously applied entry."""
    return balance_delta(account_type, credit, debit)
