# grassroots/league.py
# League table engine. Leagues are held as a list; every function returns a
# new list with only the touched league rebuilt.

from dataclasses import replace

from loguru import logger

from grassroots.models import LeagueStats


def _find_league(leagues, league_id):
    for i, league in enumerate(leagues):
        if league.id == league_id:
            return i, league
    return -1, None


def _swap_league(leagues, index, league):
    updated = list(leagues)
    updated[index] = league
    return updated


def get_league(leagues, league_id):
    return _find_league(leagues, league_id)[1]


def get_table(leagues, league_id):
    """Clubs ordered by points, goal difference, goals for. Ties keep insertion order."""
    _, league = _find_league(leagues, league_id)
    if league is None:
        logger.warning(f"League {league_id} not found for table")
        return []
    return sorted(
        league.clubs,
        key=lambda c: (c.league_stats.points, c.league_stats.goal_difference, c.league_stats.goals_for),
        reverse=True,
    )


def table_position(leagues, league_id, club_id):
    for position, club in enumerate(get_table(leagues, league_id), start=1):
        if club.id == club_id:
            return position
    return None


def _apply_score(stats, scored, conceded):
    won = stats.won + (scored > conceded)
    drawn = stats.drawn + (scored == conceded)
    lost = stats.lost + (scored < conceded)
    goals_for = stats.goals_for + scored
    goals_against = stats.goals_against + conceded
    return LeagueStats(
        played=stats.played + 1,
        won=won,
        drawn=drawn,
        lost=lost,
        goals_for=goals_for,
        goals_against=goals_against,
        goal_difference=goals_for - goals_against,
        points=won * 3 + drawn,
    )


def record_result(leagues, league_id, home_id, away_id, home_score, away_score):
    index, league = _find_league(leagues, league_id)
    if league is None:
        logger.warning(f"League {league_id} not found for result {home_id} v {away_id}")
        return leagues
    ids = {c.id for c in league.clubs}
    if home_id not in ids or away_id not in ids:
        logger.warning(f"Club {home_id if home_id not in ids else away_id} not in league {league_id}")
        return leagues

    clubs = []
    for club in league.clubs:
        if club.id == home_id:
            club = replace(club, league_stats=_apply_score(club.league_stats, home_score, away_score))
        elif club.id == away_id:
            club = replace(club, league_stats=_apply_score(club.league_stats, away_score, home_score))
        clubs.append(club)
    return _swap_league(leagues, index, replace(league, clubs=clubs))


def mark_match_played(leagues, league_id, match_id, result):
    index, league = _find_league(leagues, league_id)
    if league is None:
        logger.warning(f"League {league_id} not found when marking match {match_id}")
        return leagues

    for b, block in enumerate(league.fixtures):
        for m, match in enumerate(block.matches):
            if match.id != match_id:
                continue
            if match.played:
                logger.warning(f"Match {match_id} already played ({match.result})")
                return leagues
            matches = list(block.matches)
            matches[m] = replace(match, result=result, played=True)
            fixtures = list(league.fixtures)
            fixtures[b] = replace(block, matches=matches)
            return _swap_league(leagues, index, replace(league, fixtures=fixtures))

    logger.warning(f"Match {match_id} not found in league {league_id}")
    return leagues


def get_fixtures(leagues, league_id):
    _, league = _find_league(leagues, league_id)
    if league is None:
        logger.warning(f"League {league_id} not found for fixtures")
        return []
    return list(league.fixtures)


def find_week_block(league, week):
    for block in league.fixtures:
        if block.week == week:
            return block
    return None


def club_fixtures(league, club_id):
    return [m for block in league.fixtures for m in block.matches if m.involves(club_id)]


# --- Season end ---

def end_of_season(leagues):
    """Stamp final_league_position 1..N on every club from the current table."""
    updated = []
    for league in leagues:
        positions = {c.id: i for i, c in enumerate(get_table([league], league.id), start=1)}
        clubs = [replace(c, final_league_position=positions[c.id]) for c in league.clubs]
        updated.append(replace(league, clubs=clubs))
    return updated


def is_promoted(league, position):
    return position is not None and position <= league.promoted_teams


def is_relegated(league, position):
    return position is not None and position > len(league.clubs) - league.relegated_teams


def reset_season_stats(leagues):
    """Zero every table row. Last season's final_league_position stays until the next end_of_season."""
    return [
        replace(league, clubs=[replace(c, league_stats=LeagueStats()) for c in league.clubs])
        for league in leagues
    ]


def rename_club(leagues, club_id, name, nickname=None):
    """New name (and nickname) on the club's table row and every fixture it appears in."""
    updated = []
    for league in leagues:
        clubs = []
        for club in league.clubs:
            if club.id == club_id:
                club = replace(club, name=name, nickname=nickname or club.nickname)
            clubs.append(club)
        fixtures = []
        for block in league.fixtures:
            matches = []
            for m in block.matches:
                if m.home_id == club_id:
                    m = replace(m, home_name=name)
                if m.away_id == club_id:
                    m = replace(m, away_name=name)
                matches.append(m)
            fixtures.append(replace(block, matches=matches))
        updated.append(replace(league, clubs=clubs, fixtures=fixtures))
    return updated
