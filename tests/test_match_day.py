"""Pre-match briefing, half-time choices and the half-by-half managed match."""

from dataclasses import replace

from grassroots import config, facilities as fac, match_day
from grassroots.config import TransactionType
from grassroots.models import Match


def _with_snack_bar(state):
    facilities, _, _ = fac.upgrade_facility(state.player_club.facilities, config.FACILITY_SNACK_BAR)
    return state.with_club(facilities=facilities)


def _with_morale(state, morale):
    squad = [replace(p, status=replace(p.status, morale=morale)) for p in state.player_club.squad]
    return state.with_club(squad=squad)


def _first_match(state):
    club_id = state.player_club.id
    return next(m for b in state.leagues[0].fixtures for m in b.matches if m.involves(club_id))


def test_options_depend_on_the_ground(state):
    actions = [a for a, _ in match_day.half_time_options(state.player_club.facilities)]
    assert actions == ["talk_players", "committee_room", "stands", "referee", "fans"]

    facilities = _with_snack_bar(state).player_club.facilities
    home = dict(match_day.half_time_options(facilities, is_home=True))
    assert home["bar"] == "Grab a Cuppa at the Tea Hut"
    assert "bar" not in dict(match_day.half_time_options(facilities, is_home=False))


def test_team_talk_lifts_a_flat_dressing_room(state):
    flat = _with_morale(state, 40)
    updated, message, bonus = match_day.half_time_action(flat, "talk_players")
    assert bonus == 2
    assert "rousing team talk" in message
    assert all(45 <= p.status.morale <= 50 for p in updated.player_club.squad)

    happy = _with_morale(state, 90)
    updated, _, bonus = match_day.half_time_action(happy, "talk_players")
    assert bonus == 0
    assert all(91 <= p.status.morale <= 93 for p in updated.player_club.squad)


def test_committee_room_builds_loyalty(state):
    updated, _, bonus = match_day.half_time_action(state, "committee_room")
    assert bonus == 0
    for before, after in zip(state.player_club.committee, updated.player_club.committee):
        gained = after.personality.loyalty_to_you - before.personality.loyalty_to_you
        assert 0 <= gained <= 5
        assert after.personality.loyalty_to_you <= config.ATTRIBUTE_MAX

    empty = state.with_club(committee=[])
    same, message, _ = match_day.half_time_action(empty, "committee_room")
    assert same is empty and "empty committee room" in message


def test_bar_takings_are_booked(state):
    state = _with_snack_bar(state)
    updated, _, _ = match_day.half_time_action(state, "bar")
    last = updated.player_club.finances.transactions[-1]
    expected = round(fac.match_day_revenue(state.player_club.facilities, 0) * config.BAR_TAKINGS_SHARE, 2)
    assert last.description == "Half-Time Bar Revenue"
    assert last.type == TransactionType.MATCH_DAY_IN
    assert last.amount == expected
    assert updated.player_club.finances.balance == state.player_club.finances.balance + expected


def test_referee_and_fans(state, monkeypatch):
    monkeypatch.setattr(match_day.rng, "random_element", lambda items: "negative")
    _, message, bonus = match_day.half_time_action(state, "referee")
    assert bonus == -1 and "annoyed" in message

    updated, _, bonus = match_day.half_time_action(state, "fans")
    assert bonus == 0
    assert 3 <= updated.player_club.fanbase - state.player_club.fanbase <= 7


def test_action_not_on_offer_means_the_stands(state):
    """No snack bar built, so the bar is not an option."""
    same, message, bonus = match_day.half_time_action(state, "bar")
    assert same is state and bonus == 0
    assert "from the stands" in message


def test_briefing(state):
    match = _first_match(state)
    opponent_id = match.away_id if match.home_id == state.player_club.id else match.home_id
    opponent = state.leagues[0].club(opponent_id)
    note = match_day.pre_match_briefing(state, match, opponent)
    assert note.kind == "briefing"
    assert note.title == f"Match Day Briefing: {match.home_name} vs {match.away_name}"
    assert opponent.name in note.body
    assert "Weather:" in note.body and "Referee:" in note.body
    assert "Unkempt Field (Condition: 70%)" in note.body


def test_play_managed_match(state):
    match = _first_match(state)
    opponents = [c for c in state.leagues[0].clubs if not c.is_player_club]
    notifications = []
    picks = []

    def choose(briefing, half, options):
        picks.append(half)
        return "fans"

    updated, outcome = match_day.play_managed_match(state, match, opponents, choose, notifications)
    assert [n.kind for n in notifications] == ["briefing", "match"]
    assert outcome.report.startswith(f"First Half: {picks[0].score_line}")
    assert updated.player_club.fanbase > state.player_club.fanbase
    assert not outcome.cancelled


def test_unknown_opponent_cancels_before_half_time(state):
    ghost = Match(id="M-x", week=5, round=1, season=1, home_id=state.player_club.id,
                  home_name=state.player_club.name, away_id="GHOST", away_name="Nobody")
    notifications = []

    def choose(briefing, half, options):
        raise AssertionError("no half-time without a match")

    same, outcome = match_day.play_managed_match(state, ghost, [], choose, notifications)
    assert same is state
    assert outcome.cancelled
    assert [n.kind for n in notifications] == ["briefing"]
