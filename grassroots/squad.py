# grassroots/squad.py
# Roster store for the managed club. Every operation takes the squad list and
# returns a new one; callers hold the only reference that matters.

from dataclasses import fields, replace

from loguru import logger

from grassroots import config
from grassroots.models import PlayerStatus, SeasonStats
from grassroots.population import clamp

_STAT_FIELDS = {f.name for f in fields(SeasonStats)}
_STATUS_FIELDS = {f.name for f in fields(PlayerStatus)}


def _index_of(squad, player_id):
    for i, player in enumerate(squad):
        if player.id == player_id:
            return i
    return -1


def add_player(squad, player, club_id):
    return list(squad) + [replace(player, club_id=club_id)]


def remove_player(squad, player_id):
    if _index_of(squad, player_id) == -1:
        logger.warning(f"Player {player_id} not found for removal")
        return list(squad)
    return [p for p in squad if p.id != player_id]


def get_player(squad, player_id):
    i = _index_of(squad, player_id)
    return squad[i] if i != -1 else None


def get_squad(squad):
    return list(squad)


def _replace_player(squad, player_id, update, action):
    i = _index_of(squad, player_id)
    if i == -1:
        logger.warning(f"Player {player_id} not found for {action}")
        return list(squad)
    updated = list(squad)
    updated[i] = update(squad[i])
    return updated


def update_player_stats(squad, player_id, **deltas):
    """Add deltas to season-stat fields, e.g. goals=1, assists=1."""
    unknown = set(deltas) - _STAT_FIELDS
    if unknown:
        logger.warning(f"Ignoring unknown season stats {sorted(unknown)} for player {player_id}")

    def update(player):
        stats = player.season_stats
        changes = {k: getattr(stats, k) + v for k, v in deltas.items() if k in _STAT_FIELDS}
        return replace(player, season_stats=replace(stats, **changes))

    return _replace_player(squad, player_id, update, "stats update")


def update_player_status(squad, player_id, **values):
    """Set status fields directly, e.g. suspended=True, suspension_games=1."""
    unknown = set(values) - _STATUS_FIELDS
    if unknown:
        logger.warning(f"Ignoring unknown status fields {sorted(unknown)} for player {player_id}")

    def update(player):
        changes = {k: v for k, v in values.items() if k in _STATUS_FIELDS}
        return replace(player, status=replace(player.status, **changes))

    return _replace_player(squad, player_id, update, "status update")


def update_player_traits(squad, player_id, **values):
    def update(player):
        return replace(player, traits=replace(player.traits, **values))

    return _replace_player(squad, player_id, update, "traits update")


def update_player_morale(squad, player_id, delta):
    def update(player):
        morale = int(clamp(player.status.morale + delta, 0, 100))
        return replace(player, status=replace(player.status, morale=morale))

    return _replace_player(squad, player_id, update, "morale update")


def update_squad_morale(squad, delta):
    return [
        replace(p, status=replace(p.status, morale=int(clamp(p.status.morale + delta, 0, 100))))
        for p in squad
    ]


def reset_season_stats(squad):
    return [
        replace(
            p,
            season_stats=SeasonStats(),
            status=replace(
                p.status,
                fitness=100,
                injury_status=config.INJURY_FIT,
                injury_return=None,
                suspended=False,
                suspension_games=0,
            ),
        )
        for p in squad
    ]


# --- Queries ---

def available_players(squad):
    return [p for p in squad if p.status.available]


def average_morale(squad):
    if not squad:
        return 50
    return sum(p.status.morale for p in squad) / len(squad)
