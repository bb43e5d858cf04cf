from dateutil.relativedelta import relativedelta

from grassroots import config


def game_date(season, week):
    """Calendar date of a given season/week (week 1 of season 1 = SEASON_START_DATE)."""
    return config.SEASON_START_DATE + relativedelta(years=season - 1, weeks=week - 1)


def season_label(season):
    start = game_date(season, 1)
    return f"{start.year}/{str(start.year + 1)[-2:]}"


def league_round(week):
    """1-based league round played in `week`, or 0 during pre-season."""
    return max(0, week - config.PRE_SEASON_WEEKS)


def is_committee_week(week):
    return (
        week > config.PRE_SEASON_WEEKS
        and (week - config.PRE_SEASON_WEEKS) % config.COMMITTEE_MEETING_FREQUENCY_WEEKS == 1
    )
