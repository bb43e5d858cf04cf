# grassroots/events.py
# Random weekly events. Each handler applies its effect straight away and
# returns the notification to show, or None when it has nothing to act on.

from loguru import logger

from grassroots import config, facilities as fac, names, population, rng, squad as squad_store
from grassroots.config import EventType, TransactionType
from grassroots.finances import post_to_club
from grassroots.models import Notification


def _pitch_damage(state):
    cost = rng.random_int(50, 150)
    state = post_to_club(state, -cost, TransactionType.OTHER_EXP, "Pitch Damage Repair")
    facilities = fac.set_facility_status(state.player_club.facilities, config.FACILITY_PITCH, "Damaged")
    state = state.with_club(facilities=facilities)
    state = state.with_message(f"Pitch damaged, cost £{cost:.2f} to repair.")
    return state, Notification(
        kind="event",
        title="Pitch Damaged!",
        body="A group of local youths (or perhaps wild animals) damaged the pitch overnight. "
             f"Repairs cost £{cost:.2f} and it still needs attention.",
    )


def _volunteer(state):
    name = names.pick_full_name()
    role = rng.random_element(config.VOLUNTEER_ROLES)
    member = population.generate_committee_member(role, name=name)
    state = state.with_club(committee=list(state.player_club.committee) + [member])
    state = state.with_message(f"New volunteer: {name} joins as {role}.")
    return state, Notification(
        kind="event",
        title="New Volunteer!",
        body=f"{name} from the local community has offered to volunteer as {role}. What a boost!",
    )


def _journalist(state):
    state = state.with_message("Local journalist wants an interview.")
    if rng.random_int(1, 100) > 50:
        gain = rng.random_int(1, 3)
        reputation = min(config.MAX_REPUTATION, state.player_club.reputation + gain)
        state = state.with_club(reputation=reputation)
        body = f"The local paper ran a very positive article. Reputation +{gain}."
    else:
        body = "The local paper ran a mixed article. Nothing much changes."
    return state, Notification(kind="event", title="Local Press Interest!", body=body)


def _equipment_break(state):
    item = rng.random_element(config.BROKEN_EQUIPMENT)
    cost = rng.random_int(30, 80)
    state = post_to_club(state, -cost, TransactionType.OTHER_EXP, f"Repair {item}")
    state = state.with_message(f"{item} broke, cost £{cost:.2f} to fix.")
    return state, Notification(
        kind="event",
        title="Equipment Breakdown!",
        body=f"Your old {item} has broken down. Repairs cost £{cost:.2f}.",
    )


def _player_absent(state):
    player = rng.random_element(squad_store.available_players(state.player_club.squad))
    if player is None:
        return state, None
    squad = squad_store.update_player_status(
        state.player_club.squad, player.id,
        suspended=True, suspension_games=1, injury_status=config.INJURY_ABSENT,
    )
    squad = squad_store.update_player_morale(squad, player.id, -5)
    state = state.with_club(squad=squad).with_message(f"{player.name} is absent this week.")
    return state, Notification(
        kind="event",
        title="Player Absent!",
        body=f"{player.name} has work commitments and won't be available for the next match!",
    )


def _small_sponsor(state):
    sponsor = f"{names.pick_last_name()} Co."
    amount = rng.random_int(50, 200)
    state = post_to_club(state, amount, TransactionType.SPONSOR_IN, f"{sponsor} Sponsorship")
    state = state.with_message(f"Received £{amount:.2f} sponsorship from {sponsor}.")
    return state, Notification(
        kind="event",
        title="New Local Sponsor!",
        body=f"{sponsor} has offered a small one-time sponsorship of £{amount:.2f}!",
    )


EVENT_HANDLERS = {
    EventType.BAD_PITCH_DAMAGE: _pitch_damage,
    EventType.GOOD_VOLUNTEER: _volunteer,
    EventType.NEUTRAL_JOURNALIST: _journalist,
    EventType.BAD_EQUIPMENT_BREAK: _equipment_break,
    EventType.BAD_PLAYER_ABSENT: _player_absent,
    EventType.GOOD_SMALL_SPONSOR: _small_sponsor,
}


def apply_event(state, event_type):
    handler = EVENT_HANDLERS.get(event_type)
    if handler is None:
        logger.warning(f"Unhandled event type {event_type}")
        return state, None
    return handler(state)


def trigger_random_event(state):
    """Roll for this week's event. Returns (state, notification or None)."""
    if rng.random_int(1, 100) > config.EVENT_CHANCE_PERCENT:
        return state, None
    event_type = rng.random_element(list(EventType))
    logger.debug(f"Random event: {event_type.value}")
    return apply_event(state, event_type)
