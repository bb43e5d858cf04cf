# grassroots/finances.py
# Append-only ledger. add_transaction is the only way the balance moves.

from collections import OrderedDict
from datetime import date

from grassroots import calendar_utils, rng
from grassroots.models import Finances, Transaction


def new_ledger(starting_balance):
    return Finances(balance=starting_balance, starting_balance=starting_balance, transactions=[])


def add_transaction(finances, amount, tx_type, description, when=None):
    when = when or date.today()
    transaction = Transaction(
        id=rng.new_id("TR"),
        date=when.isoformat(),
        type=tx_type,
        description=description,
        amount=amount,
    )
    return Finances(
        balance=finances.balance + amount,
        starting_balance=finances.starting_balance,
        transactions=list(finances.transactions) + [transaction],
    )


def post_to_club(state, amount, tx_type, description):
    """Book a transaction on the managed club, dated with the current game week."""
    when = calendar_utils.game_date(state.current_season, state.current_week)
    finances = add_transaction(state.player_club.finances, amount, tx_type, description, when=when)
    return state.with_club(finances=finances)


def can_afford(finances, cost):
    return cost <= finances.balance


def ledger_balance_ok(finances):
    expected = finances.starting_balance + sum(t.amount for t in finances.transactions)
    return abs(expected - finances.balance) < 1e-6


def type_name(tx_type):
    return getattr(tx_type, "value", tx_type)


def summarise(finances):
    """Income / expense totals per transaction type, in first-seen order."""
    by_type = OrderedDict()
    income = expenses = 0
    for t in finances.transactions:
        name = type_name(t.type)
        by_type[name] = by_type.get(name, 0) + t.amount
        if t.amount >= 0:
            income += t.amount
        else:
            expenses += t.amount
    return {
        "balance": finances.balance,
        "income": income,
        "expenses": expenses,
        "by_type": by_type,
    }


def recent_transactions(finances, limit=10):
    return list(finances.transactions[-limit:])
