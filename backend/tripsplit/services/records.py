"""
Plain records consumed and produced by the balance and settlement services.

Records validate themselves on construction, so the aggregator and planner can
assume well-formed input. Ids are opaque: anything hashable except None or an
empty string.
"""
from dataclasses import dataclass, field
from typing import Dict, Hashable, List, Mapping

from tripsplit.core.config import settings


def _check_id(value: Hashable, label: str) -> None:
    try:
        hash(value)
    except TypeError:
        raise ValueError(f"{label} must be hashable, got {value!r}")
    if value is None or value == "":
        raise ValueError(f"{label} must not be empty")


def _check_amount(value: int, label: str) -> None:
    # bool is an int subclass; reject it along with floats and Decimals
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{label} must be an integer number of minor units, got {value!r}")
    if value < 0:
        raise ValueError(f"{label} must be non-negative, got {value}")


def normalize_currency(code: str) -> str:
    """Validate a three-letter currency code and return it upper-cased."""
    if not isinstance(code, str) or len(code.strip()) != 3 or not code.strip().isalpha():
        raise ValueError(f"currency must be a three-letter code, got {code!r}")
    return code.strip().upper()


@dataclass(frozen=True)
class Member:
    """A trip participant."""
    id: Hashable
    display_name: str = ""

    def __post_init__(self):
        _check_id(self.id, "member id")


@dataclass(frozen=True)
class ExpenseRecord:
    """A single payment made by one member for the group."""
    id: Hashable
    payer_id: Hashable
    amount: int
    currency: str = field(default_factory=lambda: settings.DEFAULT_CURRENCY)

    def __post_init__(self):
        _check_id(self.id, "expense id")
        _check_id(self.payer_id, "payer id")
        _check_amount(self.amount, "expense amount")
        object.__setattr__(self, "currency", normalize_currency(self.currency))


@dataclass(frozen=True)
class ShareRecord:
    """One member's portion of an expense."""
    expense_id: Hashable
    beneficiary_id: Hashable
    amount: int

    def __post_init__(self):
        _check_id(self.expense_id, "expense id")
        _check_id(self.beneficiary_id, "beneficiary id")
        _check_amount(self.amount, "share amount")


@dataclass(frozen=True)
class Transfer:
    """A suggested payment from a debtor to a creditor."""
    from_id: Hashable
    to_id: Hashable
    amount: int

    def __post_init__(self):
        if self.from_id == self.to_id:
            raise ValueError("transfer endpoints must differ")
        _check_amount(self.amount, "transfer amount")
        if self.amount == 0:
            raise ValueError("transfer amount must be positive")


@dataclass(frozen=True)
class TripSnapshot:
    """Consistent view of one trip's members, expenses and shares."""
    trip_id: Hashable
    currency: str
    members: List[Member]
    expenses: List[ExpenseRecord]
    shares: List[ShareRecord]

    def display_names(self) -> Mapping[Hashable, str]:
        # First occurrence of a duplicated id wins, as in compute_balances
        names: Dict[Hashable, str] = {}
        for member in self.members:
            names.setdefault(member.id, member.display_name)
        return names
