"""
Snapshot service: load one trip's ledger from the database as plain records.
"""
import logging
from sqlalchemy.orm import Session
from tripsplit.models.expense import Expense, ExpenseShare
from tripsplit.models.member import Member as MemberModel
from tripsplit.models.trip import Trip, TripMember, MembershipStatus
from tripsplit.services.records import ExpenseRecord, Member, ShareRecord, TripSnapshot

logger = logging.getLogger(__name__)


def load_trip_snapshot(trip_id: int, db: Session) -> TripSnapshot:
    """
    Read members, expenses and shares of a trip in a single session.

    Members are the active trip members ordered by join time, so the earliest
    member comes first. Expenses are ordered by date spent, then id.
    """
    trip = db.query(Trip).filter(Trip.id == trip_id).first()
    if not trip:
        raise ValueError("Trip not found")

    member_rows = db.query(TripMember, MemberModel).join(
        MemberModel, TripMember.member_id == MemberModel.id
    ).filter(
        TripMember.trip_id == trip_id,
        TripMember.status == MembershipStatus.ACTIVE
    ).order_by(TripMember.joined_at, TripMember.id).all()

    members = [
        Member(id=profile.id, display_name=profile.display_name)
        for _, profile in member_rows
    ]

    expense_rows = db.query(Expense).filter(
        Expense.trip_id == trip_id
    ).order_by(Expense.spent_at, Expense.id).all()

    expenses = [
        ExpenseRecord(
            id=expense.id,
            payer_id=expense.payer_id,
            amount=expense.amount_cents,
            currency=expense.currency
        )
        for expense in expense_rows
    ]

    shares = []
    if expense_rows:
        share_rows = db.query(ExpenseShare).filter(
            ExpenseShare.expense_id.in_([expense.id for expense in expense_rows])
        ).order_by(ExpenseShare.expense_id, ExpenseShare.id).all()
        shares = [
            ShareRecord(
                expense_id=share.expense_id,
                beneficiary_id=share.member_id,
                amount=share.share_cents
            )
            for share in share_rows
        ]

    logger.debug(
        f"Loaded trip {trip_id}: {len(members)} members, {len(expenses)} expenses, {len(shares)} shares"
    )

    return TripSnapshot(
        trip_id=trip.id,
        currency=trip.currency,
        members=members,
        expenses=expenses,
        shares=shares
    )
