"""
Expense model for tracking spending.
"""
from sqlalchemy import Column, String, Date, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship
from tripsplit.db.base import BaseModel


class Expense(BaseModel):
    """Expense model representing a single payment made for the group."""
    __tablename__ = "expenses"
    
    trip_id = Column(Integer, ForeignKey("trips.id"), nullable=False, index=True)
    payer_id = Column(Integer, ForeignKey("members.id"), nullable=False, index=True)
    amount_cents = Column(Integer, nullable=False)  # Minor currency units
    currency = Column(String(3), nullable=False, default="USD")
    category = Column(String(50), nullable=True)
    memo = Column(Text, nullable=True)
    spent_at = Column(Date, nullable=False, index=True)
    
    # Relationships
    trip = relationship("Trip", back_populates="expenses")
    payer = relationship("Member", foreign_keys=[payer_id], back_populates="expenses_paid")
    shares = relationship("ExpenseShare", back_populates="expense", cascade="all, delete-orphan")


class ExpenseShare(BaseModel):
    """One member's portion of an expense."""
    __tablename__ = "expense_shares"
    
    expense_id = Column(Integer, ForeignKey("expenses.id"), nullable=False, index=True)
    member_id = Column(Integer, ForeignKey("members.id"), nullable=False, index=True)
    share_cents = Column(Integer, nullable=False)  # Minor currency units
    
    # Relationships
    expense = relationship("Expense", back_populates="shares")
    member = relationship("Member", back_populates="expense_shares")
