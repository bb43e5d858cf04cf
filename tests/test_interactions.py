"""Player conversations and recruitment."""

from dataclasses import replace

from grassroots import interactions, population
from grassroots import squad as squad_store


def test_conversation_changes_only_the_target(state):
    player = state.player_club.squad[0]
    player = replace(player, traits=replace(player.traits, loyalty=18))
    squad = list(state.player_club.squad)
    squad[0] = player
    state = state.with_club(squad=squad)

    updated, message, success = interactions.player_conversation(state, player.id, "motivate", "team_spirit")
    after = squad_store.get_player(updated.player_club.squad, player.id)
    assert success
    assert "Morale significantly increased" in message
    assert 7 <= after.status.morale - player.status.morale <= 12 or after.status.morale == 100
    others = zip(state.player_club.squad[1:], updated.player_club.squad[1:])
    assert all(a.status.morale == b.status.morale for a, b in others)


def test_vision_talk_deepens_commitment(state):
    player = state.player_club.squad[2]
    player = replace(player, traits=replace(player.traits, ambition=3, loyalty=18, commitment="Low"))
    state = state.with_club(squad=[player])
    updated, _, _ = interactions.player_conversation(state, player.id, "ask_commitment", "vision")
    assert updated.player_club.squad[0].traits.commitment == "High"


def test_unknown_player(state):
    same, message, success = interactions.player_conversation(state, "P-nobody")
    assert same is state and not success


def test_recruitment(state, monkeypatch):
    candidate = population.generate_player("ST", 1)
    chance = interactions.recruitment_chance(candidate, "camaraderie")
    assert chance >= 50

    monkeypatch.setattr(interactions.rng, "random_int", lambda lo, hi: lo)
    signed_state, message, signed = interactions.attempt_recruitment(state, candidate, "game_time")
    assert signed
    assert squad_store.get_player(signed_state.player_club.squad, candidate.id).club_id == state.player_club.id
    assert signed_state.messages[-1].text == f"New signing: {candidate.name} joins the squad!"

    monkeypatch.setattr(interactions.rng, "random_int", lambda lo, hi: hi)
    same, message, signed = interactions.attempt_recruitment(state, candidate, "game_time")
    assert not signed and same is state
    assert message.startswith("FAILED")


def test_choice_checks(state):
    squad = state.player_club.squad
    assert interactions.conversation_choice_error(squad) is None
    assert interactions.conversation_choice_error(squad, squad[0].id, "motivate", "performance") is None
    assert interactions.conversation_choice_error(squad, "P-nobody") is not None
    assert interactions.conversation_choice_error(squad, topic="gossip") is not None
    assert interactions.conversation_choice_error(squad, approach="vision") is not None
    assert interactions.conversation_choice_error(squad, topic="motivate", approach="vision") is not None
    assert interactions.pitch_error() is None
    assert interactions.pitch_error("camaraderie") is None
    assert interactions.pitch_error("money") is not None
    assert set(interactions.APPROACH_LABELS) >= set(interactions.RECRUITMENT_PITCHES)
