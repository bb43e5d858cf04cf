# grassroots/committee.py
# Monthly committee meetings: what can be proposed, how the committee votes,
# and what a passed proposal does to the club.

from dataclasses import dataclass, replace

from loguru import logger

from grassroots import config, facilities as fac, league, population, rng
from grassroots.config import TransactionType
from grassroots.finances import can_afford, post_to_club
from grassroots.models import Proposal

KIND_FACILITY_UPGRADE = "facility_upgrade"
KIND_FUNDRAISING = "fundraising"
KIND_CLUB_NAME = "club_name"
KIND_KIT_COLOURS = "kit_colours"

GALA_INCOME = (250, 750)


@dataclass
class VoteResult:
    votes_for: int
    total_votes: int
    passed: bool

    @property
    def approval_percent(self):
        if not self.total_votes:
            return 0.0
        return self.votes_for / self.total_votes * 100


def generate_proposals(state):
    """Everything the chair could table this month, minus what the club can't pay for."""
    club = state.player_club
    proposals = []

    for key in config.FACILITY_KEYS:
        facility = club.facilities.get(key)
        if facility is None or facility.level >= fac.max_level(key):
            continue
        proposals.append(Proposal(
            id=rng.new_id("PR"),
            name=f"Upgrade {facility.name} to Level {facility.level + 1}",
            kind=KIND_FACILITY_UPGRADE,
            cost=facility.current_upgrade_cost,
            difficulty=facility.level * 2 + 5,
            description=f"Improve the {facility.name} to a better standard.",
            facility_key=key,
        ))

    proposals.append(Proposal(
        id=rng.new_id("PR"),
        name="Organize a Major Fundraising Gala",
        kind=KIND_FUNDRAISING,
        cost=0,
        difficulty=10,
        description="Plan a large event to significantly boost club funds.",
    ))

    identity_open = state.player_club_customised and state.current_season > 1
    if identity_open and club.name_changes < 1:
        proposals.append(Proposal(
            id=rng.new_id("PR"),
            name="Propose Club Name Change",
            kind=KIND_CLUB_NAME,
            cost=50,
            difficulty=15,
            description="Change the club's official name. Requires careful handling.",
        ))
    if identity_open and club.colour_changes < 1:
        proposals.append(Proposal(
            id=rng.new_id("PR"),
            name="Propose Kit Colour Change",
            kind=KIND_KIT_COLOURS,
            cost=30,
            difficulty=12,
            description="Update the club's primary and secondary kit colours.",
        ))

    return [p for p in proposals if can_afford(club.finances, p.cost)]


def vote_on_proposal(committee, proposal, argument_style):
    """Each member votes yes on a score of 5 or more; 60% of the committee carries it."""
    votes_for = 0
    for member in committee:
        score = rng.random_int(1, 10)
        score += member.personality.loyalty_to_you / 2
        score -= member.skill("resistance_to_change") / 2
        if argument_style == "finance" and member.skill("financial_acumen") > 10:
            score += 3
        if argument_style == "community" and member.skill("community_relations") > 10:
            score += 3
        score -= proposal.difficulty / 2
        if score >= config.VOTE_YES_THRESHOLD:
            votes_for += 1

    total = len(committee)
    passed = total > 0 and votes_for / total * 100 >= config.MEETING_PASS_PERCENT
    return VoteResult(votes_for=votes_for, total_votes=total, passed=passed)


def apply_proposal(state, proposal, identity=None):
    """
    Pay for a passed proposal and carry it out. `identity` holds the new
    name/nickname or kit colours for identity proposals; fresh ones are
    drawn when it is missing. Returns (state, message).
    """
    identity = identity or {}
    if proposal.cost:
        state = post_to_club(state, -proposal.cost, TransactionType.OTHER_EXP,
                             f"Committee Approved: {proposal.name}")
    club = state.player_club

    if proposal.kind == KIND_FACILITY_UPGRADE:
        facilities, ok, message = fac.upgrade_facility(club.facilities, proposal.facility_key)
        state = state.with_club(facilities=facilities)
        if ok:
            return state, f"{proposal.name} approved! Building work starts. {message}"
        return state, message

    if proposal.kind == KIND_FUNDRAISING:
        income = rng.random_int(*GALA_INCOME)
        state = post_to_club(state, income, TransactionType.FUNDRAISE_IN, "Major Fundraising Gala")
        return state, f"{proposal.name} approved! The gala raised £{income:.2f}."

    if proposal.kind == KIND_CLUB_NAME:
        name = identity.get("name")
        nickname = identity.get("nickname")
        if not name:
            name, nickname, _ = population.generate_club_identity(club.location)
        nickname = nickname or population.derive_nickname(name)
        state = state.with_club(name=name, nickname=nickname, name_changes=club.name_changes + 1)
        state = replace(state, leagues=league.rename_club(state.leagues, club.id, name, nickname))
        return state, f"Club name changed to {name} ({nickname})."

    if proposal.kind == KIND_KIT_COLOURS:
        primary = identity.get("kit_primary")
        secondary = identity.get("kit_secondary")
        if not primary or not secondary or primary == secondary:
            primary, secondary = population.generate_kit_colours()
        state = state.with_club(kit_primary=primary, kit_secondary=secondary,
                                colour_changes=club.colour_changes + 1)
        return state, f"Club kit colours updated to {primary} / {secondary}."

    logger.warning(f"Unknown proposal kind '{proposal.kind}'")
    return state, f"{proposal.name} approved."

