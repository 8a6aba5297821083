"""
Member model for people who take part in trips.
"""
from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from tripsplit.db.base import BaseModel


class Member(BaseModel):
    """Member profile; the display name is the only mutable field."""
    __tablename__ = "members"
    
    display_name = Column(String(100), nullable=False)
    
    # Relationships
    trips = relationship("TripMember", back_populates="member", cascade="all, delete-orphan")
    expenses_paid = relationship("Expense", foreign_keys="Expense.payer_id", back_populates="payer")
    expense_shares = relationship("ExpenseShare", back_populates="member", cascade="all, delete-orphan")
