"""
Excel export functionality for SettleLedger

Amounts are stored in the ledger as minor units and only converted to
major units here, when written to the workbook.
"""
from __future__ import annotations
import logging
from datetime import date
from typing import Optional

from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, PatternFill, Border, Side
from openpyxl.utils import get_column_letter

from models import Ledger
from allocation import allocate_record
from computations import compute_summary, filter_expenses_by_date
from settlement import plan_settlements
from utils import from_minor_units

logger = logging.getLogger(__name__)

MONEY_FORMAT = "#,##0.00"


def _style_header(ws, row=1):
    """Apply header styling to worksheet row"""
    header_font = Font(bold=True, color="FFFFFF")
    fill = PatternFill("solid", fgColor="4F81BD")
    align = Alignment(horizontal="center", vertical="center")
    thin = Side(style="thin", color="A0A0A0")
    border = Border(left=thin, right=thin, top=thin, bottom=thin)
    for cell in ws[row]:
        cell.font = header_font
        cell.fill = fill
        cell.alignment = align
        cell.border = border


def _autosize_columns(ws, min_width=10, max_width=45):
    """Auto-size columns based on content"""
    for col in range(1, ws.max_column + 1):
        letter = get_column_letter(col)
        max_len = 0
        for cell in ws[letter]:
            v = cell.value
            if v is None:
                continue
            max_len = max(max_len, len(str(v)))
        ws.column_dimensions[letter].width = max(min_width, min(max_width, max_len + 2))


def _money_columns(ws, first_col, last_col):
    for r in range(2, ws.max_row + 1):
        for c in range(first_col, last_col + 1):
            ws.cell(r, c).number_format = MONEY_FORMAT


def export_excel(
    ledger: Ledger,
    filepath: str,
    start: Optional[date] = None,
    end: Optional[date] = None
) -> None:
    """
    Export ledger to Excel file with three sheets:
    - Expenses: one row per record with each person's share
    - Balances: paid, share and net per person
    - Transfers: the settlement plan
    """
    wb = Workbook()
    # remove default sheet
    wb.remove(wb.active)

    people = sorted(set(ledger.people))
    exps = filter_expenses_by_date(ledger.expenses, start, end)
    exps.sort(key=lambda e: (e.date, e.id))

    # validates the ledger; must run before any sheet is filled
    summary = compute_summary(ledger, start, end)

    ws = wb.create_sheet("Expenses")
    ws.append(["Date", "Description", "Payer", f"Amount ({ledger.currency})"] + people)
    _style_header(ws, 1)
    ws.freeze_panes = "A2"
    for e in exps:
        shares = allocate_record(e, ledger.payer_participates_in_split)
        row = [e.date, e.description, e.payer, from_minor_units(e.amount)]
        row += [from_minor_units(shares.get(p, 0)) for p in people]
        ws.append(row)
    if exps:
        ws.append(["TOTALS"] + [""] * (ws.max_column - 1))
        trow = ws.max_row
        ws.cell(trow, 1).font = Font(bold=True)
        # Using Excel formulas for better transparency
        for col in range(4, 5 + len(people)):
            letter = get_column_letter(col)
            ws.cell(trow, col).value = f"=SUM({letter}2:{letter}{trow - 1})"
    _money_columns(ws, 4, 4 + len(people))
    _autosize_columns(ws)

    ws = wb.create_sheet("Balances")
    ws.append(["Person", "Paid", "Share", "Net (Paid-Share)"])
    _style_header(ws, 1)
    ws.freeze_panes = "A2"
    for p in people:
        s = summary[p]
        ws.append([p] + [from_minor_units(s[k]) for k in ("paid", "share", "net")])
    _money_columns(ws, 2, 4)
    _autosize_columns(ws)

    ws = wb.create_sheet("Transfers")
    ws.append(["From (Debtor)", "To (Creditor)", "Amount"])
    _style_header(ws, 1)
    ws.freeze_panes = "A2"
    net = {p: summary[p]["net"] for p in people}
    for ins in plan_settlements(net):
        ws.append([ins.from_participant, ins.to_participant, from_minor_units(ins.amount)])
    _money_columns(ws, 3, 3)
    _autosize_columns(ws)

    wb.save(filepath)
    logger.info("Exported %d expenses to %s", len(exps), filepath)
