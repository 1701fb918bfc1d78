"""
Splitting a single expense into per-person shares

Shares are integer minor units and always add up to the original amount.
Members are ordered lexicographically by identifier; leftover units from the
division go to the earliest members in that order.
"""
from __future__ import annotations
from typing import Dict, Iterable, List, Mapping, Optional

from errors import InvalidExpense, InvalidSplit
from models import ExpenseRecord, is_minor_units


def split_members(
    beneficiaries: Iterable[str], payer_participates: bool, payer: str
) -> List[str]:
    """Everyone who carries part of the cost, in allocation order"""
    members = set(beneficiaries)
    if payer_participates:
        members.add(payer)
    return sorted(members)


def allocate(
    amount: int,
    beneficiaries: Iterable[str],
    payer_participates: bool,
    payer: str,
    weights: Optional[Mapping[str, int]] = None,
) -> Dict[str, int]:
    """
    Compute each member's owed share of *amount*.

    With no weights the split is equal: everyone gets ``amount // n`` and the
    first ``amount % n`` members get one extra unit. With weights, each member
    gets the floor of ``amount * w / W`` and the leftover units go to the
    largest fractional remainders, ties broken by member order.
    """
    if not is_minor_units(amount) or amount <= 0:
        raise InvalidExpense(f"amount must be a positive integer of minor units, got {amount!r}")

    members = split_members(beneficiaries, payer_participates, payer)
    if not members:
        raise InvalidSplit("nobody to split the expense with")

    weights = weights or {}
    stray = set(weights) - set(members)
    if stray:
        raise InvalidSplit(f"weights given for non-members: {sorted(stray)}")
    w = []
    for m in members:
        v = weights.get(m, 1)
        if not is_minor_units(v) or v <= 0:
            raise InvalidSplit(f"weight for {m!r} must be a positive integer, got {v!r}")
        w.append(v)
    total_weight = sum(w)

    shares = []
    remainders = []
    for i, v in enumerate(w):
        q, r = divmod(amount * v, total_weight)
        shares.append(q)
        remainders.append((-r, i))

    leftover = amount - sum(shares)  # 0 <= leftover < len(members)
    for _, i in sorted(remainders)[:leftover]:
        shares[i] += 1

    return dict(zip(members, shares))


def allocate_record(record: ExpenseRecord, payer_participates: bool) -> Dict[str, int]:
    """Shares for one ExpenseRecord under the ledger's split policy"""
    return allocate(
        record.amount,
        record.beneficiaries,
        payer_participates,
        record.payer,
        record.weights,
    )
