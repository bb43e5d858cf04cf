"""Roster store operations."""

from grassroots import config, population
from grassroots import squad as squad_store


def _squad():
    return population.generate_initial_squad("PC1")


def test_initial_squad_shape():
    squad = _squad()
    assert len(squad) == config.DEFAULT_INITIAL_PLAYERS
    assert [p.position for p in squad[:11]] == list(config.STARTING_LINEUP)
    for p in squad:
        assert p.club_id == "PC1"
        assert list(p.attributes) == list(config.ATTRIBUTE_CODES)
        assert all(config.ATTRIBUTE_MIN <= v <= config.ATTRIBUTE_MAX for v in p.attributes.values())
        assert 60 <= p.status.morale <= 90 and p.status.fitness == 100


def test_add_remove_get():
    squad = _squad()
    newcomer = population.generate_player("ST", 2)
    bigger = squad_store.add_player(squad, newcomer, "PC1")
    assert len(bigger) == len(squad) + 1
    assert squad_store.get_player(bigger, newcomer.id).club_id == "PC1"

    smaller = squad_store.remove_player(bigger, newcomer.id)
    assert squad_store.get_player(smaller, newcomer.id) is None
    assert squad_store.remove_player(smaller, "nobody") == smaller
    assert squad_store.get_squad(squad) is not squad


def test_stats_add_and_status_sets():
    squad = _squad()
    pid = squad[9].id
    squad = squad_store.update_player_stats(squad, pid, goals=2, assists=1)
    squad = squad_store.update_player_stats(squad, pid, goals=1, nonsense=4)
    player = squad_store.get_player(squad, pid)
    assert (player.season_stats.goals, player.season_stats.assists) == (3, 1)

    squad = squad_store.update_player_status(squad, pid, suspended=True, suspension_games=1)
    assert not squad_store.get_player(squad, pid).status.available
    assert pid not in {p.id for p in squad_store.available_players(squad)}


def test_morale_is_clamped():
    squad = _squad()
    pid = squad[0].id
    assert squad_store.get_player(squad_store.update_player_morale(squad, pid, 500), pid).status.morale == 100
    assert squad_store.get_player(squad_store.update_player_morale(squad, pid, -500), pid).status.morale == 0
    assert all(p.status.morale == 0 for p in squad_store.update_squad_morale(squad, -200))
    assert squad_store.average_morale([]) == 50


def test_reset_season_stats():
    squad = _squad()
    pid = squad[3].id
    squad = squad_store.update_player_stats(squad, pid, appearances=20, red_cards=1)
    squad = squad_store.update_player_status(
        squad, pid, fitness=40, injury_status=config.INJURY_MINOR_KNOCK,
        injury_return=config.RETURN_NEXT_WEEK, suspended=True, suspension_games=1,
    )
    player = squad_store.get_player(squad_store.reset_season_stats(squad), pid)
    assert player.season_stats.appearances == 0 and player.season_stats.red_cards == 0
    assert player.status.fitness == 100
    assert player.status.available
    assert player.status.injury_return is None and player.status.suspension_games == 0
