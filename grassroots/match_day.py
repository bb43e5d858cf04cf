# grassroots/match_day.py
# The managed club's fixture played half by half: pre-match briefing, first
# half, a half-time choice made by the front end, then the second half.

from dataclasses import replace

from loguru import logger

from grassroots import config, facilities as fac, names, rng, squad as squad_store
from grassroots.config import TransactionType
from grassroots.finances import post_to_club
from grassroots.match_simulation import MatchOutcome, kick_off, second_half
from grassroots.models import Notification


def half_time_options(facilities, is_home=True):
    """(action, label) pairs on offer at the break. The bar is only ours at home."""
    options = [
        ("talk_players", "Talk to Players in Changing Room"),
        ("committee_room", "Head to the Committee Room"),
    ]
    bar = facilities.get(config.FACILITY_SNACK_BAR)
    if is_home and bar is not None and bar.built:
        options.append(("bar", "Grab a Cuppa at the Tea Hut" if bar.level == 1 else "Grab a drink at the Bar"))
    options += [
        ("stands", "Wait in the Stands"),
        ("referee", "Talk to the Referee"),
        ("fans", "Mingle with Fans"),
    ]
    return options


def pre_match_briefing(state, match, opponent=None):
    club = state.player_club
    is_home = match.home_id == club.id
    if opponent is not None:
        facing = f"{opponent.name} ({opponent.nickname})" if opponent.nickname else opponent.name
    else:
        facing = match.away_name if is_home else match.home_name

    pitch = club.facilities.get(config.FACILITY_PITCH)
    if pitch is not None and pitch.built:
        pitch_line = f"{fac.status_for_level(config.FACILITY_PITCH, pitch.level)} (Condition: {pitch.condition}%)"
    else:
        pitch_line = "No pitch of our own"
    referee = f"{names.pick_first_name()} {names.pick_last_name()}"

    body = "\n".join([
        f"You're preparing for your match against {facing}.",
        f"This match is {'at home' if is_home else 'away'}.",
        f"Weather: {rng.random_element(config.WEATHER)}",
        f"Pitch: {pitch_line}",
        f"Referee: {referee} (Temperament: {rng.random_element(config.REFEREE_TEMPERAMENTS)})",
        "Good luck, Chairman!",
    ])
    return Notification("briefing", f"Match Day Briefing: {match.home_name} vs {match.away_name}", body)


def half_time_action(state, action, is_home=True):
    """Returns (state, message, performance_bonus for the second half)."""
    club = state.player_club
    if action not in dict(half_time_options(club.facilities, is_home)):
        logger.warning(f"Half-time action '{action}' not on offer, staying in the stands")
        action = "stands"

    if action == "talk_players":
        if squad_store.average_morale(club.squad) < config.HALF_TIME_TALK_MORALE:
            delta, bonus = rng.random_int(5, 10), 2
            message = "You gave a rousing team talk! The players look re-energized for the second half."
        else:
            delta, bonus = rng.random_int(1, 3), 0
            message = "The players are already motivated. You reinforced their confidence."
        return state.with_club(squad=squad_store.update_squad_morale(club.squad, delta)), message, bonus

    if action == "committee_room":
        if not club.committee:
            return state, "You spent time in the empty committee room. Nothing notable happened.", 0
        committee = []
        for member in club.committee:
            p = member.personality
            loyalty = min(config.ATTRIBUTE_MAX, p.loyalty_to_you + rng.random_int(2, 5))
            committee.append(replace(member, personality=replace(p, loyalty_to_you=loyalty)))
        return (state.with_club(committee=committee),
                "You discussed club matters with the committee. Relationships strengthened slightly.", 0)

    if action == "bar":
        takings = round(fac.match_day_revenue(club.facilities, club.fanbase) * config.BAR_TAKINGS_SHARE, 2)
        if takings > 0:
            state = post_to_club(state, takings, TransactionType.MATCH_DAY_IN, "Half-Time Bar Revenue")
        return state, f"You enjoyed a quick drink, and saw £{takings:.2f} of extra income from happy fans.", 0

    if action == "referee":
        mood = rng.random_element(("positive", "negative", "neutral"))
        if mood == "positive":
            return state, "You had a cordial chat with the referee. He seems to appreciate your understanding.", 1
        if mood == "negative":
            return state, "The referee seemed annoyed by your approach. Best to leave him alone.", -1
        return state, "You exchanged pleasantries with the referee. Nothing noteworthy.", 0

    if action == "fans":
        gain = rng.random_int(3, 7)
        return (state.with_club(fanbase=club.fanbase + gain),
                "You mingled with the fans, boosting their spirits and getting their feedback. "
                "They appreciate your presence!", 0)

    return state, "You observed the game from the stands. Got a better view, perhaps a fresh perspective.", 0


def play_managed_match(state, match, opponents, choose, notifications):
    """
    Briefing, first half, the front end's half-time pick, second half.
    `choose(briefing, half, options)` returns one of the offered actions.
    Returns (state, MatchOutcome); briefing and half-time items go on
    `notifications`.
    """
    club = state.player_club
    opponent = next((c for c in opponents if c.id in (match.home_id, match.away_id)), None)
    briefing = pre_match_briefing(state, match, opponent)
    notifications.append(briefing)

    half = kick_off(match.home_id, match.away_id, club, opponents, club.squad)
    if isinstance(half, MatchOutcome):
        return state, half

    options = half_time_options(club.facilities, half.is_home)
    action = choose(briefing, half, options)
    state, message, bonus = half_time_action(state, action, half.is_home)
    notifications.append(Notification("match", "Half-Time!", f"{half.summary}\n{message}"))
    return state, second_half(half, state.player_club.squad, bonus)
