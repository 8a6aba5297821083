"""
Pydantic schemas for the ledger snapshot a caller submits for settlement.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from tripsplit.core.config import settings

CURRENCY_PATTERN = r"^[A-Za-z]{3}$"


class MemberIn(BaseModel):
    """Schema for a trip member."""
    id: str = Field(min_length=1)
    display_name: str = ""


class ExpenseIn(BaseModel):
    """Schema for an expense paid by one member."""
    id: str = Field(min_length=1)
    payer_id: str = Field(min_length=1)
    amount_cents: int = Field(ge=0)  # Minor currency units
    currency: str = Field(default_factory=lambda: settings.DEFAULT_CURRENCY, pattern=CURRENCY_PATTERN)


class ShareIn(BaseModel):
    """Schema for one member's share of an expense."""
    expense_id: str = Field(min_length=1)
    member_id: str = Field(min_length=1)
    share_cents: int = Field(ge=0)  # Minor currency units


class LedgerSnapshot(BaseModel):
    """Schema for a full trip ledger to balance and settle."""
    members: List[MemberIn]
    expenses: List[ExpenseIn] = []
    shares: List[ShareIn] = []
    currency: Optional[str] = Field(default=None, pattern=CURRENCY_PATTERN)  # Inferred from expenses when omitted
