"""Round-robin schedule generation."""

from collections import Counter

from grassroots import config
from grassroots.fixtures import generate_match_schedule, round_robin_rounds


def test_twelve_team_schedule(make_clubs):
    """12 teams: 22 rounds of 6 matches, 12 * 11 in all, each team once per round."""
    blocks = generate_match_schedule(make_clubs(12), season=1)
    assert len(blocks) == 22
    assert all(len(b.matches) == 6 for b in blocks)
    assert sum(len(b.matches) for b in blocks) == 12 * 11

    for block in blocks:
        seen = Counter()
        for m in block.matches:
            seen[m.home_id] += 1
            seen[m.away_id] += 1
        assert max(seen.values()) == 1
        assert len(seen) == 12


def test_every_ordered_pair_once(make_clubs):
    """Each club hosts every other club exactly once."""
    clubs = make_clubs(8)
    blocks = generate_match_schedule(clubs, season=1)
    pairs = Counter((m.home_id, m.away_id) for b in blocks for m in b.matches)
    assert len(pairs) == 8 * 7
    assert set(pairs.values()) == {1}
    assert all(home != away for home, away in pairs)


def test_weeks_follow_pre_season(make_clubs):
    blocks = generate_match_schedule(make_clubs(6), season=3)
    assert [b.round for b in blocks] == list(range(1, 11))
    assert [b.week for b in blocks] == [config.PRE_SEASON_WEEKS + r for r in range(1, 11)]
    assert all(m.season == 3 and not m.played for b in blocks for m in b.matches)


def test_odd_league_has_byes(make_clubs):
    """5 teams: one bye per round, recorded as played, real matches N*(N-1)."""
    blocks = generate_match_schedule(make_clubs(5), season=1)
    assert len(blocks) == 10
    for block in blocks:
        byes = [m for m in block.matches if m.is_bye]
        assert len(byes) == 1
        assert byes[0].played and byes[0].result == config.BYE

    real = [m for b in blocks for m in b.matches if not m.is_bye]
    assert len(real) == 5 * 4
    assert len({(m.home_id, m.away_id) for m in real}) == 20

    bye_counts = Counter(m.home_id for b in blocks for m in b.matches if m.is_bye)
    assert set(bye_counts.values()) == {2}


def test_round_robin_alternates_home_away():
    """Nobody is at home in every round of the first leg."""
    rounds = round_robin_rounds(["A", "B", "C", "D", "E", "F"])
    assert len(rounds) == 5
    homes = Counter(home for pairs in rounds for home, _ in pairs)
    assert max(homes.values()) < 5


def test_too_few_clubs(make_clubs):
    assert generate_match_schedule(make_clubs(1), season=1) == []
    assert round_robin_rounds([]) == []
