import pytest

from errors import InvalidExpense, InvalidSplit
from models import ExpenseRecord


def test_record_is_hashable():
    a = ExpenseRecord(payer="A", amount=100, beneficiaries=("B",), id="e1", date="2024-01-01")
    b = ExpenseRecord(payer="A", amount=100, beneficiaries=["B", "B"], id="e1", date="2024-01-01")
    assert a == b
    assert len({a, b}) == 1


def test_weights_cannot_change_after_construction():
    weights = {"B": 2}
    rec = ExpenseRecord(payer="A", amount=100, beneficiaries=("B", "C"), weights=weights)
    with pytest.raises(TypeError):
        rec.weights["B"] = 5
    weights["B"] = 5
    assert rec.weights == {"B": 2}
    assert hash(rec) == hash(rec)


@pytest.mark.parametrize("weights", [None, [("B", 2)], "B:2"])
def test_weights_must_be_a_mapping(weights):
    with pytest.raises(InvalidSplit):
        ExpenseRecord(payer="A", amount=100, beneficiaries=("B",), weights=weights)


@pytest.mark.parametrize("bad", ["06/01/2024", "2024-13-01", "", None])
def test_date_must_be_iso(bad):
    with pytest.raises(InvalidExpense):
        ExpenseRecord(payer="A", amount=100, beneficiaries=("B",), date=bad)


def test_default_date_is_valid():
    rec = ExpenseRecord(payer="A", amount=100, beneficiaries=("B",))
    assert len(rec.date) == 10
