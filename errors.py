"""
Error types raised by the SettleLedger engine
"""
from __future__ import annotations
from typing import Optional


class LedgerError(Exception):
    """Base class for every error the ledger raises"""


class InvalidSplit(LedgerError, ValueError):
    """An expense cannot be divided (nobody to split with, or bad weights)"""


class InvalidExpense(LedgerError, ValueError):
    """An expense record or transfer carries an unusable amount or id"""


class UnknownParticipant(LedgerError, LookupError):
    """A record references someone outside the declared roster"""

    def __init__(self, participant: str, record_id: Optional[str] = None):
        self.participant = participant
        self.record_id = record_id
        if record_id:
            msg = f"unknown participant {participant!r} in record {record_id!r}"
        else:
            msg = f"unknown participant {participant!r}"
        super().__init__(msg)


class UnbalancedLedger(LedgerError, ArithmeticError):
    """Balances do not sum to zero"""

    def __init__(self, total: int):
        self.total = total
        super().__init__(f"balances sum to {total}, expected 0")


class ConfigError(LedgerError):
    """Ledger file or CSV content is malformed"""
