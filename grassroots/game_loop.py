# grassroots/game_loop.py
# Week/season orchestrator. Every public function takes a GameState and
# returns a new one; nothing here holds game data between calls.

from dataclasses import replace

from loguru import logger

from grassroots import (
    calendar_utils, committee, config, events, facilities as fac, fixtures, interactions, league,
    match_day, names, population, rng, squad as squad_store, tasks,
)
from grassroots.config import GamePhase, TaskType, TransactionType
from grassroots.finances import new_ledger, post_to_club
from grassroots.match_simulation import simulate_ai_match, simulate_match
from grassroots.models import (
    ActionResult, Club, GameState, League, LeagueStats, Notification, PlayerClub, SeasonSummary,
)


# -----------------------------
# Setup
# -----------------------------
def validate_club_details(details):
    """Checks the new-club form. Raises ValueError; returns a cleaned copy."""
    cleaned = {k: (v.strip() if isinstance(v, str) else v) for k, v in (details or {}).items()}
    for key in ("name", "nickname", "location"):
        if not cleaned.get(key):
            raise ValueError(f"Club {key} cannot be blank.")
    primary = (cleaned.get("kit_primary") or "").upper()
    secondary = (cleaned.get("kit_secondary") or "").upper()
    if not primary or not secondary:
        raise ValueError("Both kit colours are required.")
    if primary == secondary:
        raise ValueError("Primary and secondary kit colours must be different.")
    cleaned["kit_primary"], cleaned["kit_secondary"] = primary, secondary
    return cleaned


def _table_row(club):
    return Club(
        id=club.id,
        name=club.name,
        nickname=club.nickname,
        location=club.location,
        kit_primary=club.kit_primary,
        kit_secondary=club.kit_secondary,
        reputation=club.reputation,
        fanbase=club.fanbase,
        is_player_club=True,
        league_id=club.league_id,
    )


def new_game(details, seed=None):
    """Founds the managed club, its league and season-one fixtures."""
    details = validate_club_details(details)
    if seed is not None:
        rng.seed(seed)
        names.seed(seed)

    club_id = rng.new_id("PC")
    league_id = rng.new_id("L")
    player_club = PlayerClub(
        id=club_id,
        name=details["name"],
        nickname=details["nickname"],
        location=details["location"],
        kit_primary=details["kit_primary"],
        kit_secondary=details["kit_secondary"],
        league_id=league_id,
        facilities=fac.create_initial_facilities(),
        committee=population.generate_founding_committee(),
        squad=population.generate_initial_squad(club_id),
        finances=new_ledger(details.get("starting_balance", config.DEFAULT_STARTING_BALANCE)),
    )

    opponents = population.generate_opponent_clubs(
        player_club.location, config.DEFAULT_LEAGUE_SIZE - 1, taken_names=[player_club.name]
    )
    clubs = [_table_row(player_club)] + [replace(c, league_id=league_id) for c in opponents]
    home_league = League(
        id=league_id,
        name=population.generate_league_name(player_club.location),
        num_teams=len(clubs),
        club_ids=[c.id for c in clubs],
        clubs=clubs,
        fixtures=fixtures.generate_match_schedule(clubs, 1),
    )

    state = GameState(
        player_club=player_club,
        leagues=[home_league],
        game_phase=GamePhase.OPPONENT_CUSTOMISATION,
        player_club_customised=True,
    )
    logger.info(f"New game: {player_club.name} in the {home_league.name} ({len(clubs)} clubs)")
    return state.with_message(f"Welcome to {player_club.name}! Your first season in the {home_league.name} awaits.")


def apply_opponent_customisation(state, changes=None):
    """
    Optional renames/recolours for AI clubs, keyed by club id:
    {club_id: {"name": ..., "nickname": ..., "kit_primary": ..., "kit_secondary": ...}}.
    Moves the game on to pre-season.
    """
    if state.game_phase != GamePhase.OPPONENT_CUSTOMISATION:
        logger.warning(f"Opponent customisation not open in phase {state.game_phase.value}")
        return state

    leagues = state.leagues
    for club_id, edit in (changes or {}).items():
        home = _player_league(replace(state, leagues=leagues))
        target = home.club(club_id) if home else None
        if target is None or target.is_player_club:
            logger.warning(f"Opponent {club_id} not found for customisation")
            continue
        name = (edit.get("name") or target.name).strip()
        leagues = league.rename_club(leagues, club_id, name, edit.get("nickname") or target.nickname)
        primary = edit.get("kit_primary") or target.kit_primary
        secondary = edit.get("kit_secondary") or target.kit_secondary
        if primary != secondary:
            leagues = [
                replace(lg, clubs=[
                    replace(c, kit_primary=primary, kit_secondary=secondary) if c.id == club_id else c
                    for c in lg.clubs
                ])
                for lg in leagues
            ]

    club = state.player_club
    return replace(
        state,
        leagues=leagues,
        opponents_customised=True,
        game_phase=GamePhase.PRE_SEASON,
        available_hours=config.WEEKLY_BASE_HOURS,
        weekly_tasks=tasks.generate_weekly_tasks(club.facilities, club.committee),
    ).with_message("Pre-season has begun. Get the club ready!")


# -----------------------------
# Player actions
# -----------------------------
def _find_task(state, task_id):
    for i, task in enumerate(state.weekly_tasks):
        if task.id == task_id:
            return i, task
    return -1, None


def _choice_error(state, task, player_id, topic, approach):
    if task.type == TaskType.PLAYER_CONVO:
        return interactions.conversation_choice_error(state.player_club.squad, player_id, topic, approach)
    if task.type == TaskType.RECRUIT_PLYR:
        if player_id or topic:
            return "Recruitment only takes a pitch."
        return interactions.pitch_error(approach)
    if player_id or topic or approach:
        return f'"{task.description}" does not take any choices.'
    return None


def complete_task(state, task_id, player_id=None, topic=None, approach=None):
    """
    Commit a task's full hours now; its effect lands on the next advance_week.
    Conversations take an optional player, topic and approach; recruitment an
    optional pitch (passed as `approach`). Anything left blank is rolled when
    the task runs.
    """
    i, task = _find_task(state, task_id)
    if task is None:
        logger.warning(f"Task {task_id} not found")
        return state, ActionResult(False, "That task is not on this week's list.")
    if task.completed:
        return state, ActionResult(False, f'"{task.description}" is already done this week.')
    if task.assigned_hours > 0:
        return state, ActionResult(False, f'"{task.description}" is already scheduled.')
    if task.base_hours > state.available_hours:
        return state, ActionResult(
            False,
            f'Not enough time: "{task.description}" needs {task.base_hours}h, '
            f"you have {state.available_hours}h left.",
        )
    error = _choice_error(state, task, player_id, topic, approach)
    if error:
        return state, ActionResult(False, error)

    weekly_tasks = list(state.weekly_tasks)
    weekly_tasks[i] = replace(
        task, assigned_hours=task.base_hours, player_id=player_id, topic=topic, approach=approach
    )
    state = replace(state, weekly_tasks=weekly_tasks, available_hours=state.available_hours - task.base_hours)
    return state, ActionResult(True, f'Scheduled "{task.description}" ({task.base_hours}h).')


def release_task(state, task_id):
    i, task = _find_task(state, task_id)
    if task is None:
        logger.warning(f"Task {task_id} not found for release")
        return state, ActionResult(False, "That task is not on this week's list.")
    if task.assigned_hours == 0 or task.completed:
        return state, ActionResult(False, f'"{task.description}" is not scheduled.')

    weekly_tasks = list(state.weekly_tasks)
    weekly_tasks[i] = replace(task, assigned_hours=0, player_id=None, topic=None, approach=None)
    state = replace(state, weekly_tasks=weekly_tasks, available_hours=state.available_hours + task.assigned_hours)
    return state, ActionResult(True, f'Freed up {task.assigned_hours}h from "{task.description}".')


def commit_proposal(state, proposal_id, argument_style, identity=None):
    """Put a pending proposal to the committee vote. Each proposal gets one vote."""
    proposal = next((p for p in state.pending_proposals if p.id == proposal_id), None)
    if proposal is None:
        logger.warning(f"Proposal {proposal_id} not found")
        return state, ActionResult(False, "That proposal is not on the agenda.")
    if argument_style not in config.ARGUMENT_STYLES:
        return state, ActionResult(
            False, f"Argue with one of: {', '.join(config.ARGUMENT_STYLES)}."
        )
    if proposal.cost > state.player_club.finances.balance:
        return state, ActionResult(False, f'The club can no longer afford "{proposal.name}".')

    club = state.player_club
    vote = committee.vote_on_proposal(club.committee, proposal, argument_style)
    state = replace(state, pending_proposals=[p for p in state.pending_proposals if p.id != proposal_id])

    if vote.passed:
        state, effect = committee.apply_proposal(state, proposal, identity)
        text = f"Proposal \"{proposal.name}\" PASSED! {vote.votes_for} out of {vote.total_votes} voted 'Yes'."
        state = state.with_message(effect)
        body = f"{text}\n{effect}"
    else:
        text = (f"Proposal \"{proposal.name}\" FAILED. Only {vote.votes_for} out of "
                f"{vote.total_votes} voted 'Yes'.")
        state = state.with_message(f"Committee voted down: {proposal.name}.")
        body = text

    logger.info(text)
    return state, ActionResult(vote.passed, text, Notification("committee", "Committee Decision", body))


# -----------------------------
# Weekly tick
# -----------------------------
def _player_league(state):
    for lg in state.leagues:
        if lg.id == state.player_club.league_id:
            return lg
    return state.leagues[0] if state.leagues else None


def _process_tasks(state, notifications):
    committed = [t for t in state.weekly_tasks if t.assigned_hours > 0 and not t.completed]
    done_ids = set()
    for task in committed:
        state, message, success = tasks.apply_task(state, task)
        outcome = "completed successfully." if success else "completed with mixed results."
        state = state.with_message(f"{task.description} {outcome}")
        notifications.append(Notification("task", task.description, message))
        done_ids.add(task.id)

    weekly_tasks = [
        replace(t, assigned_hours=0, completed=t.completed or t.id in done_ids)
        for t in state.weekly_tasks
    ]
    return replace(state, weekly_tasks=weekly_tasks)


def _weekly_expenses(state):
    cost = fac.total_maintenance_cost(state.player_club.facilities)
    if cost <= 0:
        return state
    state = post_to_club(state, -cost, TransactionType.OTHER_EXP, "Weekly Facility Maintenance")
    return state.with_message(f"Paid £{cost:.2f} for facility maintenance.")


def _committee_meeting(state, notifications):
    proposals = committee.generate_proposals(state)
    state = replace(state, pending_proposals=proposals).with_message("Monthly committee meeting held.")
    if proposals:
        body = "Proposals on the table:\n" + "\n".join(
            f"- {p.name} (Cost: £{p.cost:.2f}, difficulty {p.difficulty})" for p in proposals
        )
    else:
        body = "There are no affordable proposals to discuss. Focus on fundraising!"
    notifications.append(Notification("committee", "Committee Meeting", body))
    return state


def _sync_club_stats(state, home_league):
    row = home_league.club(state.player_club.id) if home_league else None
    if row is None:
        return state
    return state.with_club(league_stats=row.league_stats)


def _play_fixtures(state, notifications, half_time=None):
    """
    Every unplayed match of this week's round. Returns (state, managed club
    played at home). With a `half_time` chooser the managed club's match is
    played half by half.
    """
    home_league = _player_league(state)
    round_no = calendar_utils.league_round(state.current_week)
    if home_league is None or round_no < 1:
        return state, False
    block = league.find_week_block(home_league, state.current_week)
    if block is None:
        logger.debug(f"No fixtures for round {round_no}")
        return state, False

    club = state.player_club
    played_at_home = False
    for match in block.matches:
        if match.played or match.is_bye:
            continue
        home_league = _player_league(state)
        if match.involves(club.id):
            state = replace(state, game_phase=GamePhase.MATCH_DAY)
            opponents = [c for c in home_league.clubs if not c.is_player_club]
            if half_time is not None:
                state, outcome = match_day.play_managed_match(state, match, opponents, half_time, notifications)
            else:
                outcome = simulate_match(
                    match.home_id, match.away_id, state.player_club, opponents, state.player_club.squad
                )
            state = state.with_club(squad=outcome.squad)
            headline = f"{outcome.home_name} {outcome.home_score}-{outcome.away_score} {outcome.away_name}"
            state = state.with_message(f"Match Result: {headline}")
            notifications.append(Notification("match", f"Match Result: {headline}", outcome.report))
            if match.home_id == club.id and not outcome.cancelled:
                played_at_home = True
                revenue = fac.match_day_revenue(state.player_club.facilities, state.player_club.fanbase)
                if revenue > 0:
                    state = post_to_club(state, revenue, TransactionType.MATCH_DAY_IN, "Match Day Revenue")
                    state = state.with_message(f"Match day takings: £{revenue:.2f}.")
        else:
            outcome = simulate_ai_match(home_league.club(match.home_id), home_league.club(match.away_id))

        leagues = league.record_result(
            state.leagues, home_league.id, match.home_id, match.away_id,
            outcome.home_score, outcome.away_score,
        )
        leagues = league.mark_match_played(leagues, home_league.id, match.id, outcome.result)
        state = replace(state, leagues=leagues)
        if match.involves(club.id):
            state = replace(state, game_phase=GamePhase.POST_MATCH)

    return _sync_club_stats(state, _player_league(state)), played_at_home


def _status_decay(state, home_match):
    """Weekly fitness/morale drift, knock recovery and suspension countdown for the whole squad."""
    squad = []
    for player in state.player_club.squad:
        status = player.status
        if status.available:
            status = replace(status, fitness=max(0, status.fitness - rng.random_int(*config.FITNESS_DECAY)))
        status = replace(status, morale=max(0, status.morale - rng.random_int(*config.MORALE_DECAY)))

        if (status.injury_status == config.INJURY_MINOR_KNOCK
                and status.injury_return == config.RETURN_NEXT_WEEK):
            status = replace(status, injury_status=config.INJURY_FIT, injury_return=None)
            state = state.with_message(f"{player.name} has recovered from injury.")
        if status.suspended and status.suspension_games > 0:
            games = status.suspension_games - 1
            status = replace(status, suspension_games=games)
            if games == 0:
                status = replace(status, suspended=False, injury_status=config.INJURY_FIT)
                state = state.with_message(f"{player.name}'s suspension has ended.")
        squad.append(replace(player, status=status))

    facilities = fac.wear_facilities(state.player_club.facilities, home_match=home_match)
    return state.with_club(squad=squad, facilities=facilities)


def advance_week(state, half_time=None):
    """
    One tick. Returns (state, notifications) with the notifications in the
    order they should be shown. `half_time(briefing, half, options)` lets the
    front end pick a half-time action for the managed club's match; without
    it the match is simulated in one go.
    """
    if state.game_phase in config.BLOCKED_PHASES:
        return state, [Notification(
            "info", "Game Not Ready",
            "Complete game setup and customisation before advancing the week.",
        )]

    week = state.current_week
    logger.debug(f"Advancing season {state.current_season}, week {week}")
    notifications = []

    state = _process_tasks(state, notifications)
    state = _weekly_expenses(state)

    if calendar_utils.is_committee_week(week):
        state = _committee_meeting(state, notifications)

    state, event = events.trigger_random_event(state)
    if event is not None:
        notifications.append(event)

    state, home_match = _play_fixtures(state, notifications, half_time)
    state = _status_decay(state, home_match)

    state = replace(state, current_week=week + 1)
    if state.current_week > config.TOTAL_LEAGUE_WEEKS:
        state, summary = end_season(state)
        notifications.append(summary)
        return state, notifications

    club = state.player_club
    state = replace(
        state,
        available_hours=config.WEEKLY_BASE_HOURS,
        weekly_tasks=tasks.generate_weekly_tasks(club.facilities, club.committee),
        game_phase=GamePhase.WEEKLY_PLANNING,
    )
    return state, notifications


# -----------------------------
# Season rollover
# -----------------------------
def _ordinal(n):
    if 10 <= n % 100 <= 20:
        return f"{n}th"
    suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def end_season(state):
    """Final standings, promotion/relegation flags, history and reset. Returns (state, notification)."""
    state = replace(state, game_phase=GamePhase.END_OF_SEASON, leagues=league.end_of_season(state.leagues))
    home_league = _player_league(state)
    row = home_league.club(state.player_club.id)
    position = row.final_league_position
    stats = row.league_stats
    state = state.with_club(final_league_position=position, league_stats=stats)

    season = state.current_season
    finish = f"{_ordinal(position)} in the {home_league.name} with {stats.points} points"
    if league.is_promoted(home_league, position):
        outcome, title = "Promoted", "PROMOTED!"
        prize = rng.random_int(*config.PROMOTION_PRIZE)
        state = post_to_club(state, prize, TransactionType.PRIZE_MONEY, "Promotion Prize Money")
        text = f"PROMOTED! Congratulations! You finished {finish}. Received £{prize:.2f} prize money."
    elif league.is_relegated(home_league, position):
        outcome, title = "Relegated", "RELEGATED!"
        text = f"RELEGATED! You finished {finish}. Time for rebuilding."
    else:
        outcome, title = "Mid-table", "Season Concluded"
        text = f"Season {season} concluded. You finished {finish}."

    summary = SeasonSummary(
        season=season,
        league_name=home_league.name,
        position=position,
        points=stats.points,
        won=stats.won,
        drawn=stats.drawn,
        lost=stats.lost,
        goals_for=stats.goals_for,
        goals_against=stats.goals_against,
        outcome=outcome,
    )
    state = replace(state, club_history=list(state.club_history) + [summary]).with_message(text)
    logger.info(f"Season {season} over: {state.player_club.name} {_ordinal(position)} ({outcome})")

    leagues = league.reset_season_stats(state.leagues)
    leagues = [
        replace(lg, fixtures=fixtures.generate_match_schedule(lg.clubs, season + 1))
        for lg in leagues
    ]
    club = state.player_club
    state = replace(
        state.with_club(
            squad=squad_store.reset_season_stats(club.squad),
            league_stats=LeagueStats(),
        ),
        leagues=leagues,
        current_season=season + 1,
        current_week=1,
        game_phase=GamePhase.OFF_SEASON,
        available_hours=config.WEEKLY_BASE_HOURS * config.OFF_SEASON_HOURS_MULTIPLIER,
        weekly_tasks=tasks.generate_weekly_tasks(club.facilities, club.committee),
        pending_proposals=[],
    )
    return state, Notification("season", title, text)
