"""
Trip model for group travel and its membership.
"""
from datetime import datetime
from sqlalchemy import Column, String, Date, DateTime, Enum as SQLEnum, ForeignKey, Integer
from sqlalchemy.orm import relationship
from tripsplit.db.base import BaseModel
import enum


class MembershipStatus(str, enum.Enum):
    """Trip membership status enumeration."""
    ACTIVE = "active"
    LEFT = "left"


class Trip(BaseModel):
    """Trip model representing a group travel event."""
    __tablename__ = "trips"
    
    name = Column(String(200), nullable=False)
    start_date = Column(Date, nullable=False, index=True)
    end_date = Column(Date, nullable=False, index=True)
    currency = Column(String(3), nullable=False, default="USD")  # Default currency for balances
    
    # Relationships
    members = relationship("TripMember", back_populates="trip", cascade="all, delete-orphan")
    expenses = relationship("Expense", back_populates="trip", cascade="all, delete-orphan")


class TripMember(BaseModel):
    """Junction table for Trip and Member many-to-many relationship."""
    __tablename__ = "trip_members"
    
    trip_id = Column(Integer, ForeignKey("trips.id"), nullable=False, index=True)
    member_id = Column(Integer, ForeignKey("members.id"), nullable=False, index=True)
    status = Column(SQLEnum(MembershipStatus), default=MembershipStatus.ACTIVE, nullable=False)
    joined_at = Column(DateTime, default=datetime.utcnow, nullable=False)  # Orders rounding remainders
    
    # Relationships
    trip = relationship("Trip", back_populates="members")
    member = relationship("Member", back_populates="trips")
