# grassroots/fixtures.py
# Double round-robin schedule: circle method for the first leg, mirrored
# home/away for the second.

from loguru import logger

from grassroots import config, rng
from grassroots.models import Match, WeekBlock


def round_robin_rounds(team_ids):
    """
    Circle method. Returns a list of rounds, each a list of (home, away) pairs.
    With an odd number of teams a None is padded in; the team paired with it
    has the bye that round and the pair comes back as (team, None).
    """
    teams = list(team_ids)
    if len(teams) % 2 == 1:
        teams.append(None)
    n = len(teams)
    if n < 2:
        return []

    rounds = []
    for r in range(n - 1):
        pairs = []
        for i in range(n // 2):
            a, b = teams[i], teams[n - 1 - i]
            if a is None:
                a, b = b, a
            if b is None:
                pairs.append((a, None))
            elif r % 2 == 0:
                pairs.append((a, b))
            else:
                pairs.append((b, a))
        rounds.append(pairs)
        # pivot stays, the rest rotate one place
        teams = [teams[0]] + teams[-1:] + teams[1:-1]
    return rounds


def _bye_match(club, week, round_no, season, competition):
    return Match(
        id=rng.new_id("M"),
        week=week,
        round=round_no,
        season=season,
        home_id=club.id,
        home_name=club.name,
        away_id=config.BYE,
        away_name=config.BYE,
        competition=competition,
        result=config.BYE,
        played=True,
    )


def generate_match_schedule(clubs, season, competition=config.COMPETITION_LEAGUE,
                            pre_season_weeks=config.PRE_SEASON_WEEKS):
    """Week blocks for a full home-and-away season, league round r in week pre_season_weeks + r."""
    if len(clubs) < 2:
        logger.warning(f"Cannot schedule a league of {len(clubs)} club(s)")
        return []

    by_id = {c.id: c for c in clubs}
    first_leg = round_robin_rounds([c.id for c in clubs])
    second_leg = [[(b, a) if b is not None else (a, None) for a, b in pairs] for pairs in first_leg]

    blocks = []
    for index, pairs in enumerate(first_leg + second_leg):
        round_no = index + 1
        week = pre_season_weeks + round_no
        matches = []
        for home_id, away_id in pairs:
            home = by_id[home_id]
            if away_id is None:
                matches.append(_bye_match(home, week, round_no, season, competition))
                continue
            away = by_id[away_id]
            matches.append(Match(
                id=rng.new_id("M"),
                week=week,
                round=round_no,
                season=season,
                home_id=home.id,
                home_name=home.name,
                away_id=away.id,
                away_name=away.name,
                competition=competition,
            ))
        blocks.append(WeekBlock(week=week, round=round_no, competition=competition, matches=matches))

    logger.debug(f"Scheduled {len(blocks)} rounds for season {season} ({len(clubs)} clubs)")
    return blocks
