# grassroots/match_simulation.py
# Match engine: one-shot, or half by half for the managed club. Managed-club
# ratings come from the live squad, AI sides from their overall_team_quality.
# Result-driven squad changes come back on the outcome; nothing passed in is
# modified.

import math
from dataclasses import dataclass, field
from typing import List, Optional

from loguru import logger

from grassroots import config, rng, squad as squad_store
from grassroots.population import clamp, generate_seasonal_opponent_players


@dataclass
class MatchOutcome:
    home_score: int
    away_score: int
    home_id: str
    away_id: str
    home_name: str
    away_name: str
    winner_id: Optional[str]
    report: str
    squad: list = field(default_factory=list)
    cancelled: bool = False
    scorers: List[str] = field(default_factory=list)
    assists: List[str] = field(default_factory=list)
    yellow_cards: List[str] = field(default_factory=list)
    red_cards: List[str] = field(default_factory=list)
    knocks: List[str] = field(default_factory=list)

    @property
    def result(self):
        return f"{self.home_score}-{self.away_score}"


# -----------------------------
# Ratings
# -----------------------------
def _attack_value(player):
    a = player.attributes
    if player.position in config.ATTACKER_POSITIONS:
        return (a["SHO"] * 2 + a["DRI"] + a["OTB"]) / 4
    if player.position == "CAM":
        return (a["PAS"] * 2 + a["SHO"] + a["DRI"]) / 4
    if player.position in config.CENTRAL_MID_POSITIONS:
        return (a["PAS"] + a["DRI"] + a["SHO"] * 0.5) / 2.5
    return a["PAS"] * 0.5 + a["DRI"] * 0.5


def attack_rating(players):
    outfield = [p for p in players if p.position != "GK"]
    if not outfield:
        return 1
    return max(1, round(sum(_attack_value(p) for p in outfield) / len(outfield)))


def defense_rating(players):
    if not players:
        return 1
    total = 0
    count = 0
    has_keeper = False
    for p in players:
        a = p.attributes
        if p.position == "GK":
            total += a["GK"] * 3
            count += 3
            has_keeper = True
        elif p.position in config.DEFENDER_POSITIONS:
            total += (a["TKL"] * 2 + a["POS"] + a["STR"]) / 4
            count += 1
        else:
            total += a["TKL"] * 0.5 + a["WRK"] * 0.5
            count += 1
    if not has_keeper:
        total = max(1, total * 0.5)
    return max(1, round(total / count))


def ai_ratings(quality):
    """(attack, defense) for an AI side, each quality +/- a small spread."""
    return (
        quality + rng.random_int(*config.AI_RATING_SPREAD),
        quality + rng.random_int(*config.AI_RATING_SPREAD),
    )


def morale_bonus(players):
    if not players:
        return 0
    return round((squad_store.average_morale(players) - 50) / 10)


# -----------------------------
# Scoring
# -----------------------------
def goals_from_base(base):
    goals = math.floor(max(0, base) / config.GOALS_DIVISOR) + rng.random_int(*config.GOALS_BONUS)
    return int(clamp(goals, 0, config.MAX_GOALS))


def break_low_draw(home_score, away_score):
    """Low-scoring draws (0-0, 1-1): half the time a random side gets one more goal."""
    if home_score != away_score or home_score > config.DRAW_BREAK_MAX_SCORE:
        return home_score, away_score
    if rng.random_int(1, 100) > config.DRAW_BREAK_PERCENT:
        return home_score, away_score
    if rng.random_element(("home", "away")) == "home":
        return home_score + 1, away_score
    return home_score, away_score + 1


def score_match(home_attack, home_defense, away_attack, away_defense, home_bonus=0, away_bonus=0):
    variance = rng.random_int(*config.MATCH_VARIANCE)
    home_base = max(0, home_attack - away_defense + config.HOME_ADVANTAGE + home_bonus + variance)
    away_base = max(0, away_attack - home_defense + away_bonus + variance)
    return break_low_draw(goals_from_base(home_base), goals_from_base(away_base))


def _winner(home_id, away_id, home_score, away_score):
    if home_score > away_score:
        return home_id
    if away_score > home_score:
        return away_id
    return None


def cancelled_outcome(home_id, away_id, home_name="Unknown", away_name="Unknown", squad=None, reason=""):
    report = f"Match cancelled: {home_name} v {away_name}."
    if reason:
        report += f" {reason}"
    return MatchOutcome(
        home_score=0, away_score=0, home_id=home_id, away_id=away_id,
        home_name=home_name, away_name=away_name, winner_id=None,
        report=report, squad=list(squad or []), cancelled=True,
    )


def simulate_ai_match(home, away):
    """Two AI clubs, quality ratings only. No report, no squad."""
    if home is None or away is None:
        logger.warning("AI match with a missing club, cancelled")
        return cancelled_outcome(
            getattr(home, "id", None), getattr(away, "id", None),
            getattr(home, "name", "Unknown"), getattr(away, "name", "Unknown"),
        )
    home_attack, home_defense = ai_ratings(home.overall_team_quality or 1)
    away_attack, away_defense = ai_ratings(away.overall_team_quality or 1)
    hs, as_ = score_match(home_attack, home_defense, away_attack, away_defense)
    return MatchOutcome(
        home_score=hs, away_score=as_, home_id=home.id, away_id=away.id,
        home_name=home.name, away_name=away.name,
        winner_id=_winner(home.id, away.id, hs, as_),
        report=f"Final Score: {home.name} {hs} - {as_} {away.name}",
    )


# -----------------------------
# Managed-club aftermath
# -----------------------------
def _apply_aftermath(players, goals_for, goals_against):
    """
    Scorers, assists, cards, morale, knocks and appearances for the managed
    squad. Returns (players, scorers, assists, yellows, reds, knocks).
    """
    eligible = squad_store.available_players(players)
    eligible_ids = [p.id for p in eligible]
    outfield = [p for p in eligible if p.position != "GK"]

    for pid in eligible_ids:
        players = squad_store.update_player_stats(players, pid, appearances=1)

    scorers, assists = [], []
    for _ in range(goals_for):
        scorer = rng.random_element(outfield)
        if scorer is None:
            break
        players = squad_store.update_player_stats(players, scorer.id, goals=1)
        scorers.append(scorer.name)
        if rng.chance(config.ASSIST_PERCENT):
            assister = rng.random_element([p for p in eligible if p.id != scorer.id])
            if assister is not None:
                players = squad_store.update_player_stats(players, assister.id, assists=1)
                assists.append(assister.name)

    yellows, yellow_ids = [], set()
    for _ in range(rng.random_int(*config.YELLOW_CARDS)):
        carded = rng.random_element(eligible)
        if carded is None:
            break
        players = squad_store.update_player_stats(players, carded.id, yellow_cards=1)
        yellows.append(carded.name)
        yellow_ids.add(carded.id)

    reds = []
    if rng.chance(config.RED_CARD_PERCENT):
        sent_off = rng.random_element([p for p in eligible if p.id not in yellow_ids])
        if sent_off is not None:
            players = squad_store.update_player_stats(players, sent_off.id, red_cards=1)
            players = squad_store.update_player_status(players, sent_off.id, suspended=True, suspension_games=1)
            reds.append(sent_off.name)

    if goals_for > goals_against:
        morale_delta = rng.random_int(*config.MORALE_WIN)
    elif goals_for == goals_against:
        morale_delta = rng.random_int(*config.MORALE_DRAW)
    else:
        morale_delta = rng.random_int(*config.MORALE_LOSS)
    players = squad_store.update_squad_morale(players, morale_delta)

    knocks = []
    for p in squad_store.available_players(players):
        if rng.chance(config.INJURY_PERCENT):
            players = squad_store.update_player_status(
                players, p.id,
                injury_status=config.INJURY_MINOR_KNOCK,
                injury_return=config.RETURN_NEXT_WEEK,
            )
            knocks.append(p.name)

    return players, scorers, assists, yellows, reds, knocks


def _opponent_scorers(opponent_players, goals):
    outfield = [p for p in opponent_players if p.position != "GK"] or opponent_players
    return [rng.random_element(outfield).name for _ in range(goals) if outfield]


def build_report(home_name, away_name, home_score, away_score, is_home, club_name,
                 scorers, assists, yellows, reds, knocks, opponent_scorers):
    our, their = (home_score, away_score) if is_home else (away_score, home_score)
    venue = "at home" if is_home else "away from home"
    lines = [f"Final Score: {home_name} {home_score} - {away_score} {away_name}"]
    if our > their:
        lines.append(f"{club_name} won {venue}!")
    elif our < their:
        lines.append(f"{club_name} were beaten {venue}.")
    else:
        lines.append(f"{club_name} drew {venue}.")

    if scorers:
        lines.append(f"Your scorers: {', '.join(scorers)}.")
    if assists:
        lines.append(f"Assists: {', '.join(assists)}.")
    if opponent_scorers:
        lines.append(f"Their scorers: {', '.join(opponent_scorers)}.")
    if yellows or reds:
        lines.append(f"Cards: Yellows: {', '.join(yellows) or 'None'}, Reds: {', '.join(reds) or 'None'}.")
    for name in knocks:
        lines.append(f"{name} picked up a minor knock.")
    return "\n".join(lines)


def _resolve_sides(home_id, away_id, player_club, opponents):
    by_id = {c.id: c for c in opponents or []}
    club_id = player_club.id if player_club is not None else None

    def resolve(team_id):
        if team_id is not None and team_id == club_id:
            return player_club
        return by_id.get(team_id)

    return resolve(home_id), resolve(away_id)


def simulate_match(home_id, away_id, player_club, opponents, squad):
    """
    Plays one fixture. `opponents` is every AI club that could be involved;
    `squad` is the managed club's live roster and is only used when the
    managed club is one of the sides. Never raises for bad ids: an
    unresolvable side gives a 0-0 cancelled outcome.
    """
    squad = list(squad or [])
    club_id = player_club.id if player_club is not None else None
    home, away = _resolve_sides(home_id, away_id, player_club, opponents)
    if home is None or away is None or home_id == away_id:
        logger.warning(f"Cannot resolve fixture {home_id} v {away_id}, cancelling")
        return cancelled_outcome(
            home_id, away_id,
            getattr(home, "name", "Unknown"), getattr(away, "name", "Unknown"),
            squad=squad, reason="One of the teams could not be found.",
        )

    if club_id not in (home_id, away_id):
        return simulate_ai_match(home, away)

    is_home = home_id == club_id
    opponent = away if is_home else home
    playing = squad_store.available_players(squad)
    bonus = morale_bonus(squad)
    our_attack, our_defense = attack_rating(playing), defense_rating(playing)
    their_attack, their_defense = ai_ratings(opponent.overall_team_quality or 1)
    opponent_players = generate_seasonal_opponent_players(opponent.id, opponent.overall_team_quality or 1)

    if is_home:
        hs, as_ = score_match(our_attack, our_defense, their_attack, their_defense, home_bonus=bonus)
    else:
        hs, as_ = score_match(their_attack, their_defense, our_attack, our_defense, away_bonus=bonus)

    goals_for, goals_against = (hs, as_) if is_home else (as_, hs)
    players, scorers, assists, yellows, reds, knocks = _apply_aftermath(squad, goals_for, goals_against)
    report = build_report(
        home.name, away.name, hs, as_, is_home, player_club.name,
        scorers, assists, yellows, reds, knocks,
        _opponent_scorers(opponent_players, goals_against),
    )
    logger.debug(f"{home.name} {hs}-{as_} {away.name}")
    return MatchOutcome(
        home_score=hs, away_score=as_, home_id=home_id, away_id=away_id,
        home_name=home.name, away_name=away.name,
        winner_id=_winner(home_id, away_id, hs, as_),
        report=report, squad=players,
        scorers=scorers, assists=assists, yellow_cards=yellows, red_cards=reds, knocks=knocks,
    )


# -----------------------------
# Half by half
# -----------------------------
@dataclass
class HalfTime:
    """The managed club's fixture paused at the break."""
    home_id: str
    away_id: str
    home_name: str
    away_name: str
    club_name: str
    is_home: bool
    opponent_id: str
    opponent_quality: int
    home_score: int
    away_score: int

    @property
    def score_line(self):
        return f"{self.home_name} {self.home_score} - {self.away_score} {self.away_name}"

    @property
    def summary(self):
        ours, theirs = ((self.home_score, self.away_score) if self.is_home
                        else (self.away_score, self.home_score))
        text = f"The whistle blows for half-time! Current Score: {self.score_line}."
        if ours > theirs:
            return text + " You're currently winning!"
        if ours == theirs:
            return text + " It's a tight contest so far."
        return text + " You're currently losing. A big second half is needed!"


def half_goals(base):
    goals = math.floor(max(0, base) / 2) + rng.random_int(*config.HALF_GOALS_BONUS)
    return int(clamp(goals, 0, config.MAX_HALF_GOALS))


def score_half(home_attack, home_defense, away_attack, away_defense):
    variance = rng.random_int(*config.HALF_VARIANCE)
    home_base = home_attack - away_defense + config.HALF_HOME_ADVANTAGE + variance
    away_base = away_attack - home_defense - config.HALF_HOME_ADVANTAGE + variance
    return half_goals(home_base), half_goals(away_base)


def _half_ratings(is_home, squad, opponent_quality, bonus):
    """(home_attack, home_defense, away_attack, away_defense) with `bonus` on the managed side."""
    playing = squad_store.available_players(squad)
    ours = (attack_rating(playing) + bonus, defense_rating(playing) + bonus)
    theirs = ai_ratings(opponent_quality)
    return ours + theirs if is_home else theirs + ours


def kick_off(home_id, away_id, player_club, opponents, squad):
    """
    First half of the managed club's fixture. Returns a HalfTime, or a
    cancelled MatchOutcome when a side cannot be found or the managed club
    is not playing.
    """
    squad = list(squad or [])
    club_id = player_club.id if player_club is not None else None
    home, away = _resolve_sides(home_id, away_id, player_club, opponents)
    if home is None or away is None or home_id == away_id or club_id not in (home_id, away_id):
        logger.warning(f"Cannot kick off {home_id} v {away_id}, cancelling")
        return cancelled_outcome(
            home_id, away_id,
            getattr(home, "name", "Unknown"), getattr(away, "name", "Unknown"),
            squad=squad, reason="One of the teams could not be found.",
        )

    is_home = home_id == club_id
    opponent = away if is_home else home
    quality = opponent.overall_team_quality or 1
    morale = (squad_store.average_morale(squad) - 50) / config.HALF_MORALE_DIVISOR
    hs, as_ = score_half(*_half_ratings(is_home, squad, quality, morale))
    return HalfTime(
        home_id=home_id, away_id=away_id, home_name=home.name, away_name=away.name,
        club_name=player_club.name, is_home=is_home, opponent_id=opponent.id,
        opponent_quality=quality, home_score=hs, away_score=as_,
    )


def second_half(half, squad, performance_bonus=0):
    """
    Second half and the full-match aftermath. `squad` is the roster as it
    stands after the break; `performance_bonus` lifts the managed side's
    ratings for this half only.
    """
    squad = list(squad or [])
    h2, a2 = score_half(*_half_ratings(half.is_home, squad, half.opponent_quality, performance_bonus))
    hs, as_ = half.home_score + h2, half.away_score + a2

    goals_for, goals_against = (hs, as_) if half.is_home else (as_, hs)
    players, scorers, assists, yellows, reds, knocks = _apply_aftermath(squad, goals_for, goals_against)
    opponent_players = generate_seasonal_opponent_players(half.opponent_id, half.opponent_quality)
    report = "\n".join([
        f"First Half: {half.score_line}",
        f"Second Half: {half.home_name} {h2} - {a2} {half.away_name}",
        build_report(
            half.home_name, half.away_name, hs, as_, half.is_home, half.club_name,
            scorers, assists, yellows, reds, knocks,
            _opponent_scorers(opponent_players, goals_against),
        ),
    ])
    logger.debug(f"{half.home_name} {hs}-{as_} {half.away_name} (half-time {half.home_score}-{half.away_score})")
    return MatchOutcome(
        home_score=hs, away_score=as_, home_id=half.home_id, away_id=half.away_id,
        home_name=half.home_name, away_name=half.away_name,
        winner_id=_winner(half.home_id, half.away_id, hs, as_),
        report=report, squad=players,
        scorers=scorers, assists=assists, yellow_cards=yellows, red_cards=reds, knocks=knocks,
    )
