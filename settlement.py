"""
Turning net balances into a list of transfers

Greedy debt netting: the largest debtor pays the largest creditor, repeatedly.
The plan has at most (debtors + creditors - 1) transfers. It is not
guaranteed to be the shortest possible plan; finding that is NP-hard.
"""
from __future__ import annotations
import logging
from typing import Dict, Iterable, List, Mapping

from errors import InvalidExpense, UnbalancedLedger, UnknownParticipant
from models import SettlementInstruction, is_minor_units

logger = logging.getLogger(__name__)


def check_conservation(balances: Mapping[str, int]) -> None:
    """Raise UnbalancedLedger unless the balances sum to exactly zero"""
    for who, v in balances.items():
        if not is_minor_units(v):
            raise TypeError(f"balance for {who!r} must be an integer of minor units, got {v!r}")
    total = sum(balances.values())
    if total != 0:
        raise UnbalancedLedger(total)


def plan_settlements(balances: Mapping[str, int]) -> List[SettlementInstruction]:
    """
    Compute transfers to settle debts.
    net>0 creditor; net<0 debtor. Equal magnitudes are ordered by identifier.
    """
    check_conservation(balances)

    creditors = [[p, v] for p, v in balances.items() if v > 0]
    debtors = [[p, -v] for p, v in balances.items() if v < 0]
    creditors.sort(key=lambda x: (-x[1], x[0]))
    debtors.sort(key=lambda x: (-x[1], x[0]))

    transfers = []
    i = j = 0
    while i < len(debtors) and j < len(creditors):
        debtor, creditor = debtors[i], creditors[j]
        x = min(debtor[1], creditor[1])
        if x > 0:
            transfers.append(SettlementInstruction(debtor[0], creditor[0], x))
        debtor[1] -= x
        creditor[1] -= x
        if debtor[1] == 0:
            i += 1
        if creditor[1] == 0:
            j += 1

    logger.debug(
        "Planned %d transfers for %d debtors and %d creditors",
        len(transfers), len(debtors), len(creditors),
    )
    return transfers


def apply_settlements(
    balances: Mapping[str, int],
    instructions: Iterable[SettlementInstruction]
) -> Dict[str, int]:
    """
    Replay transfers against a copy of *balances*: the sender's balance rises
    by the amount, the recipient's falls. A full plan leaves every entry at 0.
    """
    out = dict(balances)
    for ins in instructions:
        if not is_minor_units(ins.amount) or ins.amount <= 0:
            raise InvalidExpense(f"transfer amount must be a positive integer, got {ins.amount!r}")
        for who in (ins.from_participant, ins.to_participant):
            if who not in out:
                raise UnknownParticipant(who)
        out[ins.from_participant] += ins.amount
        out[ins.to_participant] -= ins.amount
    return out
