"""
CSV export and import functionality for SettleLedger
"""
from __future__ import annotations
import csv
import logging
from typing import Iterable, List

from errors import ConfigError
from models import ExpenseRecord, SettlementInstruction
from utils import to_minor_units

logger = logging.getLogger(__name__)

EXPENSE_COLUMNS = ['id', 'date', 'payer', 'amount', 'beneficiaries', 'weights', 'description']
SEPARATORS = (";", ":")


def export_expenses_to_csv(expenses: Iterable[ExpenseRecord], filepath: str) -> None:
    """
    Export expenses list to CSV file
    CSV columns: id, date, payer, amount (minor units), beneficiaries, weights, description
    Names used in the beneficiaries or weights cells may not contain ";" or ":".
    """
    expenses = list(expenses)
    for e in expenses:
        for name in list(e.beneficiaries) + list(e.weights):
            if any(sep in name for sep in SEPARATORS) or name != name.strip():
                raise ConfigError(f"record {e.id!r}: participant name {name!r} cannot be written to CSV")

    with open(filepath, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)
        writer.writerow(EXPENSE_COLUMNS)

        for e in expenses:
            weights_str = ';'.join([f"{k}:{v}" for k, v in e.weights.items()])
            writer.writerow([
                e.id,
                e.date,
                e.payer,
                e.amount,
                ';'.join(e.beneficiaries),
                weights_str,
                e.description
            ])


def _parse_weights(s: str) -> dict:
    weights = {}
    for pair in s.split(';'):
        if not pair.strip():
            continue
        if ':' not in pair:
            raise ValueError(f"bad weight entry {pair!r}")
        k, v = pair.split(':', 1)
        weights[k.strip()] = int(v.strip())
    return weights


def _parse_amount(row: dict) -> int:
    """Minor units from "amount", or a decimal "amount_major" such as 12.50"""
    if row.get('amount'):
        return int(row['amount'])
    if row.get('amount_major'):
        return to_minor_units(row['amount_major'])
    raise ValueError("row has neither amount nor amount_major")


def import_expenses_from_csv(filepath: str) -> List[ExpenseRecord]:
    """
    Import expenses list from CSV file
    Amounts come from the "amount" column (minor units) or, when that is
    absent or empty, from "amount_major" (decimal major units).
    Returns list of ExpenseRecord objects
    """
    expenses = []

    with open(filepath, 'r', encoding='utf-8', newline='') as f:
        reader = csv.DictReader(f)

        for row in reader:
            try:
                beneficiaries = [b.strip() for b in row['beneficiaries'].split(';') if b.strip()]
                expense = ExpenseRecord(
                    id=row['id'],
                    date=row['date'],
                    payer=row['payer'],
                    amount=_parse_amount(row),
                    beneficiaries=tuple(beneficiaries),
                    weights=_parse_weights(row.get('weights') or ''),
                    description=row.get('description') or ''
                )
            except (KeyError, ValueError, AttributeError) as ex:
                raise ConfigError(f"{filepath}:{reader.line_num}: {ex}") from ex
            expenses.append(expense)

    logger.info("Imported %d expenses from %s", len(expenses), filepath)
    return expenses


def export_settlements_to_csv(instructions: Iterable[SettlementInstruction], filepath: str) -> None:
    """Export transfers as from, to, amount (minor units)"""
    with open(filepath, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)
        writer.writerow(['from', 'to', 'amount'])
        for ins in instructions:
            writer.writerow([ins.from_participant, ins.to_participant, ins.amount])
