"""Random weekly events."""

import pytest

from grassroots import config, events
from grassroots.config import EventType, TransactionType
from grassroots.finances import ledger_balance_ok


@pytest.mark.parametrize("event_type", list(EventType))
def test_every_event_has_a_handler(state, event_type):
    updated, notification = events.apply_event(state, event_type)
    assert notification is not None
    assert notification.kind == "event"
    assert ledger_balance_ok(updated.player_club.finances)
    assert len(updated.messages) > len(state.messages)


def test_pitch_damage(state):
    updated, _ = events.apply_event(state, EventType.BAD_PITCH_DAMAGE)
    assert updated.player_club.facilities[config.FACILITY_PITCH].status == "Damaged"
    cost = state.player_club.finances.balance - updated.player_club.finances.balance
    assert 50 <= cost <= 150


def test_volunteer_joins_committee(state):
    updated, _ = events.apply_event(state, EventType.GOOD_VOLUNTEER)
    assert len(updated.player_club.committee) == len(state.player_club.committee) + 1
    assert updated.player_club.committee[-1].role in config.VOLUNTEER_ROLES


def test_player_absent_misses_a_game(state):
    updated, _ = events.apply_event(state, EventType.BAD_PLAYER_ABSENT)
    absent = [p for p in updated.player_club.squad if not p.status.available]
    assert len(absent) == 1
    assert absent[0].status.injury_status == config.INJURY_ABSENT
    assert absent[0].status.suspension_games == 1


def test_sponsor_income(state):
    updated, _ = events.apply_event(state, EventType.GOOD_SMALL_SPONSOR)
    last = updated.player_club.finances.transactions[-1]
    assert last.type == TransactionType.SPONSOR_IN
    assert 50 <= last.amount <= 200


def test_quiet_week(state, monkeypatch):
    monkeypatch.setattr(events.rng, "random_int", lambda lo, hi: hi)
    same, notification = events.trigger_random_event(state)
    assert same is state and notification is None
