"""
Settlement service for suggesting the payments that clear a trip's debts.
"""
import logging
from sqlalchemy.orm import Session
from typing import Dict, Hashable, Iterable, List, Optional

from tripsplit.core.utils import format_cents
from tripsplit.schemas.settlement import BalanceEntry, SettlementSummary, TransferResponse
from tripsplit.services.balance_service import Balance, balance_total, compute_balances
from tripsplit.services.records import Transfer, TripSnapshot, normalize_currency
from tripsplit.services.share_service import find_unbalanced_expenses
from tripsplit.services.snapshot_service import load_trip_snapshot

logger = logging.getLogger(__name__)

# A balance closer to zero than this counts as settled
SETTLED_TOLERANCE = 1


def plan_settlement(balance: Balance) -> List[Transfer]:
    """
    Minimize the number of transfers needed to settle debts.

    Greedy: the largest debtor pays the largest creditor as much as either
    side allows, then whichever side reached zero moves on. Equal balances
    keep the order of ``balance``. Emits at most n - 1 transfers for n
    non-zero balances. Works on copies; ``balance`` is never modified.
    """
    debtors = [[member_id, amount] for member_id, amount in balance.items() if amount < 0]
    creditors = [[member_id, amount] for member_id, amount in balance.items() if amount > 0]

    # Most negative first / most positive first; both sorts are stable
    debtors.sort(key=lambda x: x[1])
    creditors.sort(key=lambda x: x[1], reverse=True)

    transfers = []
    debt_idx = 0
    cred_idx = 0

    while debt_idx < len(debtors) and cred_idx < len(creditors):
        debtor = debtors[debt_idx]
        creditor = creditors[cred_idx]

        owe = -debtor[1]
        due = creditor[1]
        pay = min(owe, due)
        transfers.append(Transfer(from_id=debtor[0], to_id=creditor[0], amount=pay))

        debtor[1] += pay
        creditor[1] -= pay

        if abs(debtor[1]) < SETTLED_TOLERANCE:
            debt_idx += 1
        if abs(creditor[1]) < SETTLED_TOLERANCE:
            cred_idx += 1

    leftover = {member_id: amount for member_id, amount in debtors[debt_idx:] + creditors[cred_idx:]}
    if leftover:
        logger.warning(f"Balances do not sum to zero; unsettled residue: {leftover}")

    return transfers


def apply_transfers(balance: Balance, transfers: Iterable[Transfer]) -> Dict[Hashable, int]:
    """Balances after every transfer has been paid."""
    result = dict(balance)
    for transfer in transfers:
        result[transfer.from_id] += transfer.amount
        result[transfer.to_id] -= transfer.amount
    return result


def is_settled(balance: Balance) -> bool:
    """True when nobody owes or is owed anything."""
    return all(amount == 0 for amount in balance.values())


def summarize_snapshot(snapshot: TripSnapshot, currency: Optional[str] = None) -> SettlementSummary:
    """Balances, transfers and a text summary for one currency of a snapshot."""
    currency = normalize_currency(currency or snapshot.currency)
    names = snapshot.display_names()

    def name_of(member_id: Hashable) -> str:
        return names.get(member_id) or str(member_id)

    expenses = [e for e in snapshot.expenses if e.currency == currency]
    unbalanced = find_unbalanced_expenses(expenses, snapshot.shares)

    balance = compute_balances(snapshot.members, snapshot.expenses, snapshot.shares, currency=currency)
    residue = balance_total(balance)
    if residue:
        logger.warning(f"{currency} balances of trip {snapshot.trip_id!r} sum to {residue}, not zero")
    transfers = plan_settlement(balance)

    balance_entries = [
        BalanceEntry(
            member_id=member_id,
            display_name=name_of(member_id),
            net_cents=net,
            formatted=format_cents(net, currency)
        )
        for member_id, net in balance.items()
    ]
    transfer_entries = [
        TransferResponse(
            from_member_id=t.from_id,
            from_display_name=name_of(t.from_id),
            to_member_id=t.to_id,
            to_display_name=name_of(t.to_id),
            amount_cents=t.amount,
            formatted=format_cents(t.amount, currency)
        )
        for t in transfers
    ]
    total_expenses = sum(e.amount for e in expenses)

    # Create summary text
    summary_lines = [
        f"Total expenses: {format_cents(total_expenses, currency)}",
        f"Participants: {len(balance)}",
        "\nNet balances:",
    ]
    for entry in balance_entries:
        summary_lines.append(f"  {entry.display_name}: {entry.formatted}")
    summary_lines.append("\nTransfers:")
    if transfer_entries:
        for entry in transfer_entries:
            summary_lines.append(f"  {entry.from_display_name} -> {entry.to_display_name}: {entry.formatted}")
    else:
        summary_lines.append("  All balances are settled!")

    return SettlementSummary(
        trip_id=snapshot.trip_id,
        currency=currency,
        balances=balance_entries,
        transfers=transfer_entries,
        total_expenses_cents=total_expenses,
        participant_count=len(balance),
        is_settled=is_settled(balance),
        unbalanced_expense_ids=unbalanced,
        summary="\n".join(summary_lines)
    )


def calculate_settlement(trip_id: int, db: Session, currency: Optional[str] = None) -> SettlementSummary:
    """
    Calculate settlement for a trip in one currency.
    Defaults to the trip's own currency. Nothing is persisted.
    """
    snapshot = load_trip_snapshot(trip_id, db)
    return summarize_snapshot(snapshot, currency)


def calculate_all_currencies(trip_id: int, db: Session) -> List[SettlementSummary]:
    """One settlement per currency used by the trip's expenses."""
    snapshot = load_trip_snapshot(trip_id, db)
    currencies = sorted({e.currency for e in snapshot.expenses}) or [snapshot.currency]
    return [summarize_snapshot(snapshot, code) for code in currencies]
