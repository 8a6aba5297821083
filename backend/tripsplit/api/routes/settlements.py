"""
Settlement routes.
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from tripsplit.core.config import settings
from tripsplit.db.session import get_db
from tripsplit.schemas.ledger import LedgerSnapshot, CURRENCY_PATTERN
from tripsplit.schemas.settlement import SettlementSummary
from tripsplit.services.records import ExpenseRecord, Member, ShareRecord, TripSnapshot
from tripsplit.services.settlement_service import (
    calculate_all_currencies, calculate_settlement, summarize_snapshot
)


router = APIRouter(prefix="/settlement", tags=["settlement"])


def snapshot_from_request(ledger: LedgerSnapshot) -> TripSnapshot:
    """Convert a submitted ledger into records, picking the currency to settle."""
    currency = ledger.currency
    if not currency:
        used = {expense.currency.upper() for expense in ledger.expenses}
        if len(used) > 1:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Expenses use several currencies ({', '.join(sorted(used))}); specify one"
            )
        currency = used.pop() if used else settings.DEFAULT_CURRENCY

    return TripSnapshot(
        trip_id=None,
        currency=currency,
        members=[Member(id=m.id, display_name=m.display_name) for m in ledger.members],
        expenses=[
            ExpenseRecord(id=e.id, payer_id=e.payer_id, amount=e.amount_cents, currency=e.currency)
            for e in ledger.expenses
        ],
        shares=[
            ShareRecord(expense_id=s.expense_id, beneficiary_id=s.member_id, amount=s.share_cents)
            for s in ledger.shares
        ]
    )


@router.post("/compute", response_model=SettlementSummary)
async def compute_settlement(ledger: LedgerSnapshot):
    """Balance and settle a ledger supplied in the request body."""
    snapshot = snapshot_from_request(ledger)
    return summarize_snapshot(snapshot)


@router.get("/{trip_id}", response_model=SettlementSummary)
async def get_settlement(
    trip_id: int,
    currency: Optional[str] = Query(default=None, pattern=CURRENCY_PATTERN),
    db: Session = Depends(get_db)
):
    """Get balances and suggested transfers for a trip."""
    try:
        return calculate_settlement(trip_id, db, currency)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )


@router.get("/{trip_id}/currencies", response_model=List[SettlementSummary])
async def get_settlement_per_currency(
    trip_id: int,
    db: Session = Depends(get_db)
):
    """Get a separate settlement for every currency the trip spent in."""
    try:
        return calculate_all_currencies(trip_id, db)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
