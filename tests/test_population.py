"""Entity factories, random helpers and the game calendar."""

from datetime import date

from grassroots import calendar_utils, config, population, rng


def test_goalkeeper_attributes():
    keeper = population.generate_player("GK", 3)
    outfield = [v for code, v in keeper.attributes.items() if code != "GK"]
    assert keeper.attributes["GK"] > max(outfield)


def test_player_ranges():
    for _ in range(50):
        p = population.generate_player()
        assert p.position in config.POSITION_CODES
        assert p.secondary_position != p.position
        assert 170 <= p.height <= 195
        assert p.traits.commitment in config.COMMITMENT_LEVELS
        assert 1 <= p.traits.ambition <= 10 and 10 <= p.traits.loyalty <= 20


def test_committee_role_boosts():
    secretary = population.generate_committee_member(config.ROLE_SECRETARY)
    assert secretary.skill("administration") >= 10 and secretary.skill("work_ethic") >= 10
    assert set(secretary.skills) == set(config.COMMITTEE_SKILLS)


def test_opponents_and_identity():
    clubs = population.generate_opponent_clubs("Sileby", 11, taken_names=["Sileby Town"])
    assert len(clubs) == 11
    assert len({c.name for c in clubs}) == 11
    assert "Sileby Town" not in {c.name for c in clubs}
    for c in clubs:
        assert c.kit_primary != c.kit_secondary
        lo, hi = config.OPPONENT_QUALITY
        assert lo <= c.overall_team_quality <= hi


def test_nicknames():
    assert population.derive_nickname("Leicester Reserves") == "The Stiffs"
    assert population.derive_nickname("Anstey Red Star") == "The Reds"
    assert population.derive_nickname("Quorn Development") in config.RESERVE_NICKNAMES


def test_upgrade_cost():
    assert population.upgrade_cost(200, 2) == 450


def test_rng_helpers():
    assert rng.random_int(5, 5) == 5
    assert 1 <= rng.random_int(10, 1) <= 10
    assert rng.random_element([]) is None
    assert not rng.chance(0)
    assert rng.chance(101)
    assert rng.weighted_choice(("a", "b"), (0, 10)) == "b"
    assert rng.new_id("P").startswith("P")


def test_calendar():
    assert calendar_utils.game_date(1, 1) == config.SEASON_START_DATE
    assert calendar_utils.game_date(2, 3) == date(2026, 7, 21)
    assert calendar_utils.season_label(1) == "2025/26"
    assert calendar_utils.league_round(3) == 0
    assert calendar_utils.league_round(config.PRE_SEASON_WEEKS + 2) == 2
    assert calendar_utils.is_committee_week(5) and not calendar_utils.is_committee_week(6)
