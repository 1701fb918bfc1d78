"""
Configuration and data loading/saving for SettleLedger
"""
from __future__ import annotations
import json
import logging
import logging.config
import os
from typing import List

from errors import ConfigError, LedgerError
from models import ExpenseRecord, Ledger
from utils import app_dir

logger = logging.getLogger(__name__)

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{levelname} {asctime} {module} {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "WARNING",
    },
}


def configure_logging(level: str = "WARNING") -> None:
    """Install the console logging setup at the given root level"""
    cfg = dict(LOGGING, root=dict(LOGGING["root"], level=level))
    logging.config.dictConfig(cfg)


def load_people(path: str) -> List[str]:
    """Load people list from JSON file"""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return list(data.get("people", []))
    except FileNotFoundError:
        return []


def get_default_ledger(payer_participates_in_split: bool = True) -> Ledger:
    """Create an empty ledger for the roster kept in the app directory"""
    people = load_people(os.path.join(app_dir(), "people.json"))
    return Ledger(
        people=people,
        payer_participates_in_split=payer_participates_in_split,
        expenses=[],
    )


def record_to_dict(e: ExpenseRecord) -> dict:
    return {
        "id": e.id,
        "date": e.date,
        "payer": e.payer,
        "amount": e.amount,
        "beneficiaries": list(e.beneficiaries),
        "weights": dict(e.weights),
        "description": e.description,
    }


def ledger_to_dict(ledger: Ledger) -> dict:
    """Convert Ledger object to dictionary for JSON serialization"""
    return {
        "version": ledger.version,
        "people": list(ledger.people),
        "payer_participates_in_split": ledger.payer_participates_in_split,
        "currency": ledger.currency,
        "expenses": [record_to_dict(e) for e in ledger.expenses],
    }


def dict_to_ledger(d: dict) -> Ledger:
    """
    Convert dictionary from JSON to Ledger object.
    The split policy must be stated explicitly in the data.
    """
    if "payer_participates_in_split" not in d:
        raise ConfigError("ledger data does not state payer_participates_in_split")
    policy = d["payer_participates_in_split"]
    if not isinstance(policy, bool):
        raise ConfigError(f"payer_participates_in_split must be true or false, got {policy!r}")
    try:
        exps = [ExpenseRecord(**e) for e in d.get("expenses", [])]
    except (TypeError, AttributeError, LedgerError) as ex:
        raise ConfigError(f"malformed expense entry: {ex}") from ex

    return Ledger(
        version=d.get("version", 1),
        people=list(d.get("people", [])),
        payer_participates_in_split=policy,
        expenses=exps,
        currency=d.get("currency", "USD"),
    )


def load_ledger(path: str) -> Ledger:
    """Read a ledger saved with save_ledger"""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as ex:
        raise ConfigError(f"{path}: not valid JSON ({ex})") from ex
    ledger = dict_to_ledger(data)
    logger.info("Loaded ledger %s with %d expenses", path, len(ledger.expenses))
    return ledger


def save_ledger(ledger: Ledger, path: str) -> None:
    """Write a ledger to a JSON file"""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(ledger_to_dict(ledger), f, ensure_ascii=False, indent=2)
    logger.info("Saved ledger %s with %d expenses", path, len(ledger.expenses))
