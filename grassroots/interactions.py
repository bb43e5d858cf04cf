# grassroots/interactions.py
# One-on-one player conversations and recruitment pitches.
# The approach is chosen when the task is scheduled, or rolled at random.

from loguru import logger

from grassroots import population, rng, squad as squad_store

CONVERSATION_TYPES = ("motivate", "ask_commitment", "address_form")

# conversation type -> the two approaches on offer
APPROACHES = {
    "motivate": ("performance", "team_spirit"),
    "ask_commitment": ("contract", "vision"),
    "address_form": ("extra_training", "break"),
}

RECRUITMENT_PITCHES = ("game_time", "camaraderie")

TOPIC_LABELS = {
    "motivate": "Motivational chat",
    "ask_commitment": "Ask about their future",
    "address_form": "Address recent form",
}

APPROACH_LABELS = {
    "performance": "Focus on recent performance",
    "team_spirit": "Emphasize team spirit",
    "contract": "Offer a new contract",
    "vision": "Sell the club's long-term vision",
    "extra_training": "Suggest extra training",
    "break": "Suggest a short break",
    "game_time": "Promise regular first-team football",
    "camaraderie": "Sell the local camaraderie",
}


def conversation_choice_error(squad, player_id=None, topic=None, approach=None):
    """None when the choices are usable, else the reason they are not. Blank choices are rolled later."""
    if player_id and squad_store.get_player(squad, player_id) is None:
        return "That player is not in the squad."
    if topic and topic not in APPROACHES:
        return f"Talk about one of: {', '.join(CONVERSATION_TYPES)}."
    if approach and (not topic or approach not in APPROACHES[topic]):
        return "Pick a topic first, then one of its approaches."
    return None


def pitch_error(pitch=None):
    if pitch and pitch not in RECRUITMENT_PITCHES:
        return f"Pitch with one of: {', '.join(RECRUITMENT_PITCHES)}."
    return None


def _conversation_outcome(player, kind, approach, balance):
    """Returns (morale_delta, commitment or None, message)."""
    name = player.name
    traits = player.traits

    if kind == "motivate":
        if approach == "performance":
            if player.season_stats.average_rating < 6.0:
                return rng.random_int(5, 10), None, f"{name} responds well to your directness. Morale increased!"
            return rng.random_int(1, 3), None, f"{name} acknowledges your words. Morale slightly increased."
        if traits.loyalty > 10:
            return (rng.random_int(7, 12), None,
                    f"{name} is a team player and appreciates your focus on unity. Morale significantly increased!")
        return rng.random_int(2, 5), None, f"{name} nods. Morale slightly increased."

    if kind == "ask_commitment":
        if approach == "contract":
            if player.age < 25 and player.overall_rating > 10 and balance > 100:
                return 0, None, f"{name} is happy to discuss terms and keen to stay."
            return 0, None, f"{name} isn't interested in a new deal right now."
        delta = rng.random_int(-2, 2)
        if traits.ambition < 10 and traits.loyalty > 15:
            return delta, "High", f"{name} is swayed by the club's long-term vision. Commitment has deepened."
        return delta, None, f"{name} listens politely, but remains non-committal."

    # address_form
    if approach == "extra_training":
        if traits.professionalism > 10:
            return rng.random_int(2, 5), None, f"{name} accepts the challenge. Form should improve."
        return rng.random_int(-2, 0), None, f"{name} seems unenthusiastic. No immediate change."
    if traits.temperament < 5:
        return rng.random_int(5, 10), None, f"{name} is grateful for the understanding. Morale improved."
    return rng.random_int(-3, -1), None, f"{name} is confused by the suggestion. Morale slightly dipped."


def pick_conversation_target(squad):
    """A player low on morale if there is one, anyone otherwise."""
    unhappy = [p for p in squad if p.status.morale < 70]
    return rng.random_element(unhappy or squad)


def player_conversation(state, player_id=None, kind=None, approach=None):
    """Returns (state, message, success)."""
    squad = state.player_club.squad
    player = squad_store.get_player(squad, player_id) if player_id else pick_conversation_target(squad)
    if player is None:
        if player_id:
            logger.warning(f"Player {player_id} not found for conversation")
        return state, "You wanted to talk to a player, but couldn't find a suitable one this week.", False

    kind = kind or rng.random_element(CONVERSATION_TYPES)
    if kind not in APPROACHES:
        logger.warning(f"Unknown conversation type '{kind}'")
        return state, f"You had a general chat with {player.name}.", True
    approach = approach or rng.random_element(APPROACHES[kind])

    delta, commitment, message = _conversation_outcome(
        player, kind, approach, state.player_club.finances.balance
    )
    if delta:
        squad = squad_store.update_player_morale(squad, player.id, delta)
    if commitment:
        squad = squad_store.update_player_traits(squad, player.id, commitment=commitment)
    return state.with_club(squad=squad), message, True


def recruitment_chance(candidate, pitch):
    chance = 50
    if candidate.traits.ambition < 10:
        chance += 10
    if candidate.overall_rating < 10:
        chance += 10
    if pitch == "game_time" and candidate.overall_rating < 8:
        chance += rng.random_int(5, 10)
    elif pitch == "camaraderie" and candidate.traits.loyalty > 15:
        chance += rng.random_int(2, 5)
    return chance


def attempt_recruitment(state, candidate=None, pitch=None):
    """
    Try to sign a local free agent. Returns (state, message, signed).
    On success the player joins the squad and a news line is logged.
    """
    if candidate is None:
        candidate = population.generate_player(None, rng.random_int(1, 2))
    pitch = pitch or rng.random_element(RECRUITMENT_PITCHES)
    chance = recruitment_chance(candidate, pitch)

    if rng.random_int(1, 100) < chance:
        squad = squad_store.add_player(state.player_club.squad, candidate, state.player_club.id)
        state = state.with_club(squad=squad).with_message(f"New signing: {candidate.name} joins the squad!")
        hook = "the promise of game time" if pitch == "game_time" else "the local camaraderie"
        logger.info(f"Signed {candidate.name} ({candidate.position})")
        return state, f"SUCCESS! {candidate.name} is convinced by {hook} and joins the club!", True

    return state, f"FAILED. {candidate.name} isn't convinced and looks elsewhere.", False

