"""Match engine: ratings, score limits, aftermath on the managed squad."""

from dataclasses import replace

import pytest

from grassroots import config, match_simulation as sim, population
from grassroots.models import Club, PlayerClub


def _player_club(squad):
    return PlayerClub(id="PC", name="Sileby Town", nickname="The Stags", location="Sileby",
                      kit_primary="#FF0000", kit_secondary="#FFFFFF", squad=squad)


def _opponent(quality=7):
    return Club(id="OPP", name="Quorn Rovers", overall_team_quality=quality)


def test_scores_always_within_limits():
    """1000 matches, both sides always score 0-6."""
    squad = population.generate_initial_squad("PC")
    club = _player_club(squad)
    for i in range(1000):
        quality = 1 + i % 20
        if i % 2:
            outcome = sim.simulate_match("PC", "OPP", club, [_opponent(quality)], squad)
        else:
            outcome = sim.simulate_ai_match(_opponent(quality), Club(id="X", name="X", overall_team_quality=21 - quality))
        assert 0 <= outcome.home_score <= config.MAX_GOALS
        assert 0 <= outcome.away_score <= config.MAX_GOALS


def test_red_card_suspends_immediately(monkeypatch):
    monkeypatch.setattr(config, "RED_CARD_PERCENT", 101)
    monkeypatch.setattr(config, "YELLOW_CARDS", (0, 0))
    squad = population.generate_initial_squad("PC")
    outcome = sim.simulate_match("PC", "OPP", _player_club(squad), [_opponent()], squad)

    assert len(outcome.red_cards) == 1
    sent_off = [p for p in outcome.squad if p.season_stats.red_cards == 1]
    assert len(sent_off) == 1
    assert sent_off[0].status.suspended is True
    assert sent_off[0].status.suspension_games == 1
    # caller's squad untouched
    assert not any(p.status.suspended for p in squad)


def test_managed_match_aftermath():
    squad = population.generate_initial_squad("PC")
    outcome = sim.simulate_match("OPP", "PC", _player_club(squad), [_opponent()], squad)

    goals = sum(p.season_stats.goals for p in outcome.squad)
    assert goals == outcome.away_score
    assert all(p.season_stats.appearances == 1 for p in outcome.squad)
    assert len(outcome.squad) == len(squad)
    assert outcome.report.startswith("Final Score: Quorn Rovers")
    assert outcome.result == f"{outcome.home_score}-{outcome.away_score}"


def test_unresolvable_team_cancels():
    squad = population.generate_initial_squad("PC")
    outcome = sim.simulate_match("PC", "GHOST", _player_club(squad), [_opponent()], squad)
    assert outcome.cancelled
    assert (outcome.home_score, outcome.away_score, outcome.winner_id) == (0, 0, None)
    assert "cancelled" in outcome.report
    assert outcome.squad == squad

    same_side = sim.simulate_match("OPP", "OPP", _player_club(squad), [_opponent()], squad)
    assert same_side.cancelled


def test_ratings_floor_and_keeper_penalty():
    assert sim.attack_rating([]) == 1
    assert sim.defense_rating([]) == 1

    keeper = population.generate_player("GK", 5)
    back = population.generate_player("CB", 5)
    a = back.attributes
    back_value = (a["TKL"] * 2 + a["POS"] + a["STR"]) / 4
    assert sim.defense_rating([back]) == max(1, round(max(1, back_value * 0.5)))
    assert sim.defense_rating([keeper, back]) == round((keeper.attributes["GK"] * 3 + back_value) / 4)
    assert sim.ai_ratings(10)[0] in range(8, 13)


def test_low_draw_breaking(monkeypatch):
    """0-0 and 1-1 become a one-goal win when the roll comes in at or under 50."""
    rolls = iter([30, "home"])
    monkeypatch.setattr(sim.rng, "random_int", lambda lo, hi: next(rolls))
    monkeypatch.setattr(sim.rng, "random_element", lambda items: next(rolls))
    assert sim.break_low_draw(1, 1) == (2, 1)

    rolls = iter([51])
    assert sim.break_low_draw(0, 0) == (0, 0)
    assert sim.break_low_draw(2, 2) == (2, 2)
    assert sim.break_low_draw(3, 1) == (3, 1)


def test_goals_from_base_clamped():
    assert sim.goals_from_base(-10) in range(0, 3)
    assert sim.goals_from_base(1000) == config.MAX_GOALS


def _no_luck(lo, hi):
    """Zero where the range allows it, otherwise the top of the range (so draws are never broken)."""
    return 0 if lo <= 0 <= hi else hi


def test_home_advantage_and_morale_bonus(monkeypatch):
    """Identical sides: the home side's +2 wins it; an away morale bonus of +2 levels it."""
    monkeypatch.setattr(sim.rng, "random_int", _no_luck)
    assert sim.score_match(14, 10, 14, 10) == (2, 1)
    assert sim.score_match(14, 10, 14, 10, away_bonus=2) == (2, 2)
    assert sim.score_match(14, 10, 14, 10, home_bonus=3) == (3, 1)


def test_morale_bonus_from_squad_average():
    squad = population.generate_initial_squad("PC")
    assert sim.morale_bonus([]) == 0
    assert sim.morale_bonus(_with_morale(squad, 80)) == 3
    assert sim.morale_bonus(_with_morale(squad, 50)) == 0
    assert sim.morale_bonus(_with_morale(squad, 24)) == -3


def _with_morale(squad, morale):
    return [replace(p, status=replace(p.status, morale=morale)) for p in squad]


def _quiet_match(monkeypatch):
    for name, value in (("INJURY_PERCENT", 0), ("RED_CARD_PERCENT", 0),
                        ("YELLOW_CARDS", (0, 0)), ("ASSIST_PERCENT", 0)):
        monkeypatch.setattr(config, name, value)


@pytest.mark.parametrize("goals_for, goals_against, delta_range", [
    (2, 0, config.MORALE_WIN),
    (1, 1, config.MORALE_DRAW),
    (0, 3, config.MORALE_LOSS),
])
def test_result_moves_the_whole_squad_morale(monkeypatch, goals_for, goals_against, delta_range):
    _quiet_match(monkeypatch)
    squad = _with_morale(population.generate_initial_squad("PC"), 50)
    players, *_ = sim._apply_aftermath(squad, goals_for, goals_against)

    deltas = {p.status.morale - 50 for p in players}
    assert len(deltas) == 1
    lo, hi = sorted(delta_range)
    assert lo <= deltas.pop() <= hi


def test_knocks_keep_players_out_until_next_week(monkeypatch):
    _quiet_match(monkeypatch)
    squad = population.generate_initial_squad("PC")
    players, *_, knocks = sim._apply_aftermath(squad, 1, 0)
    assert knocks == []

    monkeypatch.setattr(config, "INJURY_PERCENT", 101)
    players, *_, knocks = sim._apply_aftermath(squad, 1, 0)
    assert len(knocks) == len(squad)
    assert all(p.status.injury_status == config.INJURY_MINOR_KNOCK for p in players)
    assert all(p.status.injury_return == config.RETURN_NEXT_WEEK for p in players)
    assert all(p.season_stats.appearances == 1 for p in players)


# --- Half by half ---

def test_kick_off_and_second_half():
    squad = population.generate_initial_squad("PC")
    half = sim.kick_off("PC", "OPP", _player_club(squad), [_opponent()], squad)
    assert isinstance(half, sim.HalfTime)
    assert half.is_home and half.opponent_id == "OPP"
    assert 0 <= half.home_score <= config.MAX_HALF_GOALS
    assert 0 <= half.away_score <= config.MAX_HALF_GOALS
    assert half.summary.startswith("The whistle blows for half-time!")

    outcome = sim.second_half(half, squad)
    assert outcome.home_score >= half.home_score and outcome.away_score >= half.away_score
    assert outcome.home_score <= 2 * config.MAX_HALF_GOALS
    assert outcome.report.startswith(f"First Half: {half.score_line}")
    assert "Second Half:" in outcome.report
    assert sum(p.season_stats.goals for p in outcome.squad) == outcome.home_score
    assert all(p.season_stats.appearances == 1 for p in outcome.squad)


def test_performance_bonus_lifts_the_second_half(monkeypatch):
    squad = population.generate_initial_squad("PC")
    monkeypatch.setattr(sim.rng, "random_int", _no_luck)
    half = sim.HalfTime(home_id="PC", away_id="OPP", home_name="Sileby Town", away_name="Quorn Rovers",
                        club_name="Sileby Town", is_home=True, opponent_id="OPP", opponent_quality=1,
                        home_score=0, away_score=0)
    flat = sim.second_half(half, squad).home_score
    boosted = sim.second_half(half, squad, performance_bonus=4).home_score
    assert boosted == min(config.MAX_HALF_GOALS, flat + 2)


def test_kick_off_without_the_managed_club_cancels():
    squad = population.generate_initial_squad("PC")
    other = Club(id="X", name="Barrow Town", overall_team_quality=5)
    outcome = sim.kick_off("OPP", "X", _player_club(squad), [_opponent(), other], squad)
    assert isinstance(outcome, sim.MatchOutcome) and outcome.cancelled


def test_half_goals_clamped():
    assert sim.half_goals(-5) in (0, 1)
    assert sim.half_goals(100) == config.MAX_HALF_GOALS
