"""
Balance service: net position of every trip member.

Balances are derived data. They are recomputed from the full expense history on
every call and never stored.
"""
import logging
from types import MappingProxyType
from typing import Dict, Hashable, Iterable, Mapping, Optional, Sequence

from tripsplit.services.records import ExpenseRecord, Member, ShareRecord, normalize_currency

logger = logging.getLogger(__name__)

Balance = Mapping[Hashable, int]


def compute_balances(
    members: Iterable[Member],
    expenses: Iterable[ExpenseRecord],
    shares: Iterable[ShareRecord],
    currency: Optional[str] = None
) -> Balance:
    """
    Net balance per member in minor currency units.

    balance[m] = (amounts of expenses paid by m) - (shares assigned to m).
    Positive means the member is owed money, negative means they owe.
    Every member appears, including members with no activity. Payers and
    beneficiaries that are not in ``members`` contribute nothing. When
    ``currency`` is given only expenses in that currency (and their shares)
    are counted.

    The result is not assumed to sum to zero: shares that do not add up to
    their expense total simply show up as a non-zero sum.
    """
    balance: Dict[Hashable, int] = {}
    for member in members:
        if member.id in balance:
            logger.warning(f"Duplicate member id {member.id!r} ignored")
            continue
        balance[member.id] = 0

    wanted = normalize_currency(currency) if currency else None
    known_expenses = set()
    included_expenses = set()

    for expense in expenses:
        known_expenses.add(expense.id)
        if wanted and expense.currency != wanted:
            continue
        included_expenses.add(expense.id)
        if expense.payer_id in balance:
            balance[expense.payer_id] += expense.amount
        else:
            logger.warning(
                f"Expense {expense.id!r} paid by unknown member {expense.payer_id!r}; "
                f"{expense.amount} not credited"
            )

    for share in shares:
        if share.expense_id not in included_expenses:
            if share.expense_id not in known_expenses:
                logger.warning(f"Share for unknown expense {share.expense_id!r} ignored")
            continue
        if share.beneficiary_id in balance:
            balance[share.beneficiary_id] -= share.amount
        else:
            logger.warning(
                f"Share of expense {share.expense_id!r} assigned to unknown member "
                f"{share.beneficiary_id!r}; {share.amount} not debited"
            )

    return MappingProxyType(balance)


def compute_balances_by_currency(
    members: Sequence[Member],
    expenses: Sequence[ExpenseRecord],
    shares: Sequence[ShareRecord]
) -> Dict[str, Balance]:
    """Balance each currency present in ``expenses`` independently."""
    currencies = sorted({expense.currency for expense in expenses})
    return {
        code: compute_balances(members, expenses, shares, currency=code)
        for code in currencies
    }


def balance_total(balance: Balance) -> int:
    """Sum of all balances; zero when every expense is fully shared."""
    return sum(balance.values())
