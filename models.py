"""
Data models for SettleLedger

All money is held as integer minor units (cents for USD).
"""
from __future__ import annotations
import uuid
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import List, Mapping, Tuple

from errors import InvalidExpense, InvalidSplit
from utils import parse_date, today_str


def _new_id() -> str:
    return uuid.uuid4().hex


def is_minor_units(value) -> bool:
    """True for a plain int (bool does not count)"""
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class ExpenseRecord:
    """One payment: who advanced the money and who shares the cost"""
    payer: str
    amount: int  # minor units, > 0
    beneficiaries: Tuple[str, ...]
    id: str = field(default_factory=_new_id)
    date: str = field(default_factory=today_str)  # YYYY-MM-DD
    description: str = ""
    # member -> weight, missing = 1; read-only once built
    weights: Mapping[str, int] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        if not is_minor_units(self.amount) or self.amount <= 0:
            raise InvalidExpense(
                f"amount must be a positive integer of minor units, got {self.amount!r}"
            )
        if not self.id:
            raise InvalidExpense("record id must not be empty")
        try:
            parse_date(self.date)
        except (ValueError, TypeError, AttributeError):
            raise InvalidExpense(
                f"record {self.id!r} has date {self.date!r}, expected YYYY-MM-DD"
            ) from None
        if not isinstance(self.weights, Mapping):
            raise InvalidSplit(f"weights must be a mapping, got {self.weights!r}")
        members = tuple(sorted(set(self.beneficiaries)))
        if not members:
            raise InvalidSplit(f"record {self.id!r} has no beneficiaries")
        for who, w in self.weights.items():
            if not is_minor_units(w) or w <= 0:
                raise InvalidSplit(f"weight for {who!r} must be a positive integer, got {w!r}")
        object.__setattr__(self, "beneficiaries", members)
        object.__setattr__(self, "weights", MappingProxyType(dict(sorted(self.weights.items()))))


@dataclass(frozen=True)
class SettlementInstruction:
    """A single transfer that discharges part of a debt"""
    from_participant: str
    to_participant: str
    amount: int  # minor units, > 0


@dataclass
class Ledger:
    """A roster, its expenses and the split policy they are read with"""
    people: List[str]
    payer_participates_in_split: bool
    expenses: List[ExpenseRecord] = field(default_factory=list)
    currency: str = "USD"
    version: int = 1
