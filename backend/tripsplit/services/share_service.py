"""
Share service for splitting expenses and checking share integrity.
"""
import logging
from typing import Dict, Hashable, List, Sequence

from tripsplit.services.records import ExpenseRecord, ShareRecord

logger = logging.getLogger(__name__)


def split_evenly(amount: int, member_ids: Sequence[Hashable]) -> Dict[Hashable, int]:
    """
    Split an amount evenly in whole minor units.

    Every member gets ``amount // n``; the first ``amount % n`` members in the
    given order (earliest-joined first) get one extra unit, so the shares
    always add up to exactly ``amount``.
    """
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise ValueError(f"amount must be an integer number of minor units, got {amount!r}")
    if amount < 0:
        raise ValueError("amount must be non-negative")
    if not member_ids:
        raise ValueError("at least one member is required to split an expense")
    if len(set(member_ids)) != len(member_ids):
        raise ValueError("member ids must be unique")

    base, remainder = divmod(amount, len(member_ids))
    return {
        member_id: base + (1 if index < remainder else 0)
        for index, member_id in enumerate(member_ids)
    }


def build_even_shares(expense: ExpenseRecord, member_ids: Sequence[Hashable]) -> List[ShareRecord]:
    """Share records for an expense split evenly between ``member_ids``."""
    split = split_evenly(expense.amount, member_ids)
    return [
        ShareRecord(expense_id=expense.id, beneficiary_id=member_id, amount=share)
        for member_id, share in split.items()
    ]


def find_unbalanced_expenses(
    expenses: Sequence[ExpenseRecord],
    shares: Sequence[ShareRecord]
) -> List[Hashable]:
    """Ids of expenses whose shares do not add up to the expense amount."""
    totals: Dict[Hashable, int] = {}
    for share in shares:
        totals[share.expense_id] = totals.get(share.expense_id, 0) + share.amount

    unbalanced = []
    for expense in expenses:
        shared = totals.get(expense.id, 0)
        if shared != expense.amount:
            logger.warning(
                f"Expense {expense.id!r} totals {expense.amount} but its shares total {shared}"
            )
            unbalanced.append(expense.id)
    return unbalanced
