"""Models package - Import all models for SQLAlchemy registration."""
from tripsplit.models.member import Member
from tripsplit.models.trip import Trip, TripMember, MembershipStatus
from tripsplit.models.expense import Expense, ExpenseShare

__all__ = [
    "Member",
    "Trip",
    "TripMember",
    "MembershipStatus",
    "Expense",
    "ExpenseShare",
]
