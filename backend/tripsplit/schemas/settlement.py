"""
Pydantic schemas for balances and settlement plans.
"""
from pydantic import BaseModel
from typing import List, Optional, Union

MemberId = Union[int, str]


class BalanceEntry(BaseModel):
    """Schema for one member's net balance."""
    member_id: MemberId
    display_name: str
    net_cents: int  # Positive = owed to the member, negative = the member owes
    formatted: str


class TransferResponse(BaseModel):
    """Schema for a single transfer in settlement."""
    from_member_id: MemberId
    from_display_name: str
    to_member_id: MemberId
    to_display_name: str
    amount_cents: int
    formatted: str


class SettlementSummary(BaseModel):
    """Schema for settlement summary."""
    trip_id: Optional[MemberId] = None
    currency: str
    balances: List[BalanceEntry]
    transfers: List[TransferResponse]
    total_expenses_cents: int
    participant_count: int
    is_settled: bool
    unbalanced_expense_ids: List[MemberId] = []
    summary: str
