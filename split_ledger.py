"""
SettleLedger command line
- Print net balances and a settlement plan for a saved ledger.
- Import expenses from CSV, export an Excel report.

Run:
  split-ledger balances trip.json
  split-ledger settle trip.json --csv transfers.csv
  split-ledger import-csv trip.json expenses.csv
  split-ledger export-excel trip.json report.xlsx

Dependencies:
  pip install openpyxl
"""
from __future__ import annotations
import argparse
import logging
import sys
from typing import List, Optional

from computations import ledger_balances
from config import configure_logging, load_ledger, save_ledger
from csv_handler import export_settlements_to_csv, import_expenses_from_csv
from errors import LedgerError
from excel_export import export_excel
from settlement import plan_settlements
from utils import format_minor

logger = logging.getLogger(__name__)


def cmd_balances(args) -> None:
    ledger = load_ledger(args.ledger)
    for who, amount in ledger_balances(ledger).items():
        print(f"{who}\t{format_minor(amount)}")


def cmd_settle(args) -> None:
    ledger = load_ledger(args.ledger)
    plan = plan_settlements(ledger_balances(ledger))
    if not plan:
        print("All settled up.")
    for ins in plan:
        print(f"{ins.from_participant} pays {ins.to_participant} {format_minor(ins.amount)}")
    if args.csv:
        export_settlements_to_csv(plan, args.csv)


def cmd_import_csv(args) -> None:
    ledger = load_ledger(args.ledger)
    records = import_expenses_from_csv(args.csv)
    ledger.expenses.extend(records)
    # refuse to save a ledger that no longer balances against its roster
    ledger_balances(ledger)
    save_ledger(ledger, args.ledger)
    print(f"Imported {len(records)} expenses.")


def cmd_export_excel(args) -> None:
    export_excel(load_ledger(args.ledger), args.output)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="split-ledger", description="Shared expense settlement")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("balances", help="print net balance per person")
    p.add_argument("ledger")
    p.set_defaults(func=cmd_balances)

    p = sub.add_parser("settle", help="print who pays whom")
    p.add_argument("ledger")
    p.add_argument("--csv", help="also write the transfers to this CSV file")
    p.set_defaults(func=cmd_settle)

    p = sub.add_parser("import-csv", help="append expenses from a CSV file")
    p.add_argument("ledger")
    p.add_argument("csv")
    p.set_defaults(func=cmd_import_csv)

    p = sub.add_parser("export-excel", help="write an Excel report")
    p.add_argument("ledger")
    p.add_argument("output")
    p.set_defaults(func=cmd_export_excel)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application"""
    args = build_parser().parse_args(argv)
    configure_logging("DEBUG" if args.verbose else "WARNING")
    logger.debug("Running %s", args.command)
    try:
        args.func(args)
    except (LedgerError, OSError) as ex:
        print(f"error: {ex}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
