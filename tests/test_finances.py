"""The ledger: balance only moves through transactions."""

from grassroots.config import TransactionType
from grassroots.finances import (
    add_transaction, can_afford, ledger_balance_ok, new_ledger, recent_transactions, summarise,
)


def test_balance_equals_start_plus_transactions():
    ledger = new_ledger(500)
    ledger = add_transaction(ledger, 120, TransactionType.SPONSOR_IN, "Butcher's sponsorship")
    ledger = add_transaction(ledger, -35.5, TransactionType.KIT_EXPENSE, "Corner flags")
    ledger = add_transaction(ledger, -600, TransactionType.FAC_UPGRADE_EXP, "Toilet block")

    assert ledger.balance == 500 + 120 - 35.5 - 600
    assert ledger_balance_ok(ledger)
    assert len(ledger.transactions) == 3
    assert len({t.id for t in ledger.transactions}) == 3


def test_add_transaction_returns_new_ledger():
    ledger = new_ledger(100)
    updated = add_transaction(ledger, 50, TransactionType.SUBS_INCOME, "Subs")
    assert ledger.balance == 100 and ledger.transactions == []
    assert updated.balance == 150


def test_summary_and_affordability():
    ledger = new_ledger(200)
    ledger = add_transaction(ledger, 300, TransactionType.FUNDRAISE_IN, "Quiz night")
    ledger = add_transaction(ledger, -50, TransactionType.OTHER_EXP, "Nets")
    totals = summarise(ledger)
    assert totals["income"] == 300
    assert totals["expenses"] == -50
    assert list(totals["by_type"]) == [TransactionType.FUNDRAISE_IN.value, TransactionType.OTHER_EXP.value]

    assert can_afford(ledger, 450)
    assert not can_afford(ledger, 451)
    assert [t.description for t in recent_transactions(ledger, 1)] == ["Nets"]
