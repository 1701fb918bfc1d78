"""
Folding expense records into per-person net balances
"""
from __future__ import annotations
import logging
from datetime import date
from typing import Dict, Iterable, List, Optional

from allocation import allocate_record
from errors import InvalidExpense, UnknownParticipant
from models import ExpenseRecord, Ledger
from settlement import check_conservation
from utils import parse_date

logger = logging.getLogger(__name__)


def filter_expenses_by_date(
    expenses: Iterable[ExpenseRecord],
    start: Optional[date],
    end: Optional[date]
) -> List[ExpenseRecord]:
    """Filter expenses by date range (both ends inclusive)"""
    out = []
    for e in expenses:
        ed = parse_date(e.date)
        if start and ed < start:
            continue
        if end and ed > end:
            continue
        out.append(e)
    return out


def _validated(records: Iterable[ExpenseRecord], roster: set) -> List[ExpenseRecord]:
    """
    Check every record against the roster before any arithmetic happens.
    Records repeated under the same id are dropped; an id reused for
    different content is an error.
    """
    seen: Dict[str, ExpenseRecord] = {}
    out = []
    for rec in records:
        prev = seen.get(rec.id)
        if prev is not None:
            if prev != rec:
                raise InvalidExpense(f"record id {rec.id!r} reused for a different expense")
            logger.debug("Skipping duplicate record %s", rec.id)
            continue
        if rec.payer not in roster:
            raise UnknownParticipant(rec.payer, rec.id)
        for who in rec.beneficiaries:
            if who not in roster:
                raise UnknownParticipant(who, rec.id)
        seen[rec.id] = rec
        out.append(rec)
    return out


def compute_balances(
    records: Iterable[ExpenseRecord],
    participants: Iterable[str],
    *,
    payer_participates_in_split: bool,
) -> Dict[str, int]:
    """
    Net balance per participant in minor units.
    Positive -> is owed money; negative -> owes money.
    Every roster member appears in the result, in identifier order.
    """
    roster = set(participants)
    recs = _validated(records, roster)

    balances = {p: 0 for p in sorted(roster)}
    for rec in recs:
        balances[rec.payer] += rec.amount
        for who, share in allocate_record(rec, payer_participates_in_split).items():
            balances[who] -= share

    check_conservation(balances)
    logger.debug("Computed balances for %d participants from %d records", len(balances), len(recs))
    return balances


def ledger_balances(
    ledger: Ledger,
    start: Optional[date] = None,
    end: Optional[date] = None
) -> Dict[str, int]:
    """Balances for a Ledger, optionally limited to a date window"""
    return compute_balances(
        filter_expenses_by_date(ledger.expenses, start, end),
        ledger.people,
        payer_participates_in_split=ledger.payer_participates_in_split,
    )


def compute_summary(
    ledger: Ledger,
    start: Optional[date] = None,
    end: Optional[date] = None
) -> Dict[str, dict]:
    """
    Compute summary statistics for each person.
    Returns dict mapping person -> {paid, share, net}
    """
    exps = _validated(filter_expenses_by_date(ledger.expenses, start, end), set(ledger.people))
    people = sorted(set(ledger.people))

    paid = {p: 0 for p in people}
    share = {p: 0 for p in people}
    for e in exps:
        paid[e.payer] += e.amount
        for who, amt in allocate_record(e, ledger.payer_participates_in_split).items():
            share[who] += amt

    return {
        p: {
            "paid": paid[p],
            "share": share[p],
            "net": paid[p] - share[p],
        } for p in people
    }
