# grassroots/population.py
# Entity factories: players, committee members, club identities, opponents
# and the league that holds them.

from grassroots import config, names, rng
from grassroots.models import (
    Club, CommitteeMember, Personality, Player, PlayerStatus, PlayerTraits, SeasonStats,
)


def clamp(v, lo, hi):
    return max(lo, min(hi, v))


def _attr_roll(lo, hi):
    """randint over [lo, hi] after clamping both ends into the attribute range."""
    lo = clamp(lo, config.ATTRIBUTE_MIN, config.ATTRIBUTE_MAX)
    hi = clamp(hi, config.ATTRIBUTE_MIN, config.ATTRIBUTE_MAX)
    return rng.random_int(lo, hi)


def upgrade_cost(base_cost, level):
    return base_cost * config.UPGRADE_COST_GROWTH ** level


# --- Players ---

# Signature attribute pushed to base+2..+5 for these roles.
SIGNATURE_ATTRIBUTES = {"ST": "SHO", "CB": "TKL", "CM": "PAS"}


def _pick_foot(position):
    """
    Foot distribution:
      - Side roles: bias to the natural side, but allow opposite + both.
      - Central roles: near-even.
    """
    right_roles = {"RB", "RM", "RWB", "RW"}
    left_roles = {"LB", "LM", "LWB", "LW"}
    # weights are (Right, Left, Both)
    if position in right_roles:
        w = (60, 25, 15)
    elif position in left_roles:
        w = (25, 60, 15)
    else:
        w = (45, 45, 10)
    return rng.weighted_choice(("Right", "Left", "Both"), w)


def generate_attributes(position, quality_tier):
    base = _attr_roll(
        config.ATTRIBUTE_MIN + (quality_tier - 1) * 2,
        config.ATTRIBUTE_MIN + quality_tier * 2,
    )
    attributes = {}
    for code in config.ATTRIBUTE_CODES:
        if position == "GK":
            if code == "GK":
                value = _attr_roll(base + 5, base + 8)
            else:
                value = _attr_roll(base - 5, base)
        elif SIGNATURE_ATTRIBUTES.get(position) == code:
            value = _attr_roll(base + 2, base + 5)
        else:
            value = _attr_roll(base - 3, base + 3)
        attributes[code] = value
    return attributes


def generate_player(position=None, quality_tier=1, club_id=None):
    if position is None:
        position = rng.random_element(config.POSITION_CODES)

    other_positions = [p for p in config.POSITION_CODES if p != position]
    secondary = rng.random_element([None, rng.random_element(other_positions)])

    return Player(
        id=rng.new_id("P"),
        name=names.pick_full_name(),
        age=rng.random_int(18, 35),
        position=position,
        secondary_position=secondary,
        foot=_pick_foot(position),
        height=rng.random_int(170, 195),
        club_id=club_id,
        attributes=generate_attributes(position, quality_tier),
        traits=PlayerTraits(
            ambition=rng.random_int(1, 10),
            loyalty=rng.random_int(10, 20),
            temperament=rng.random_int(1, 10),
            professionalism=rng.random_int(5, 15),
            commitment=rng.random_element(config.COMMITMENT_LEVELS),
        ),
        season_stats=SeasonStats(),
        status=PlayerStatus(morale=rng.random_int(60, 90), fitness=100),
    )


def generate_initial_squad(club_id, size=config.DEFAULT_INITIAL_PLAYERS):
    """A 4-4-2 first eleven plus random reserves, all quality tier 1."""
    squad = []
    while len(squad) < size:
        if len(squad) < len(config.STARTING_LINEUP):
            position = config.STARTING_LINEUP[len(squad)]
        else:
            position = rng.random_element(config.POSITION_CODES)
        squad.append(generate_player(position, 1, club_id=club_id))
    return squad


def generate_seasonal_opponent_players(club_id, quality_tier):
    """Throwaway squad for an AI side. Never stored on the club."""
    players = []
    for _ in range(rng.random_int(*config.SEASONAL_SQUAD_SIZE)):
        player = generate_player(rng.random_element(config.POSITION_CODES), quality_tier, club_id=club_id)
        player.status = PlayerStatus(
            morale=rng.random_int(50, 90),
            fitness=rng.random_int(80, 100),
        )
        players.append(player)
    return players


# --- Committee ---

def generate_committee_member(role, name=None):
    skills = {skill: rng.random_int(5, 15) for skill in config.COMMITTEE_SKILLS}
    skills["resistance_to_change"] = rng.random_int(1, 10)
    for skill, (lo, hi) in config.ROLE_SKILL_BOOSTS.get(role, {}).items():
        skills[skill] = rng.random_int(lo, hi)

    return CommitteeMember(
        id=rng.new_id("CM"),
        name=name or names.pick_full_name(),
        role=role,
        age=rng.random_int(30, 70),
        relationship_to_club=rng.random_element(config.RELATIONSHIPS_TO_CLUB),
        skills=skills,
        personality=Personality(
            loyalty_to_you=rng.random_int(5, 15),
            club_loyalty=rng.random_int(10, 20),
            enthusiasm=rng.random_int(5, 15),
            satisfaction=rng.random_int(60, 90),
        ),
    )


def generate_founding_committee():
    return [generate_committee_member(role) for role in config.FOUNDING_COMMITTEE]


# --- Club identity ---

SUFFIXES = ("United", "Rovers", "Athletic", "Town", "City", "Wanderers", "Victoria",
            "Amateurs", "Corinthians", "Sports", "Albion", "Park", "FC")
CLASSIC_SUFFIXES = ("Town", "City", "United", "Athletic")
PREFIXES = ("East", "West", "North", "South", "Royal", "Old", "Young", "St.", "AFC")
MIDDLE_WORDS = ("Park", "Lane", "Bridge", "Field", "Brook", "Grange", "Vale", "Heath",
                "Green", "Spring", "Heights", "Wood", "Hill", "Central")
GENERIC_NICKNAMES = ("The Brewers", "The Villagers", "The Foxes", "The Lions", "The Pigeons",
                     "The Swans", "The Robins", "The Tigers", "The Hornets", "The Mariners",
                     "The Millers", "The Railwaymen")
COLOUR_NICKNAMES = {
    "red": "The Reds", "blue": "The Blues", "white": "The Whites", "black": "The Blacks",
    "green": "The Greens", "amber": "The Ambers", "claret": "The Clarets",
}


def derive_nickname(club_name):
    lowered = club_name.lower()
    if "reserves" in lowered:
        return "The Stiffs"
    if "youth" in lowered or "u23" in lowered or "development" in lowered:
        return rng.random_element(config.RESERVE_NICKNAMES)
    for keyword, nickname in COLOUR_NICKNAMES.items():
        if keyword in lowered.split():
            return nickname
    return rng.random_element(GENERIC_NICKNAMES)


def generate_club_identity(region):
    """Returns (name, nickname, location) for a club somewhere near `region`."""
    town = names.pick_town(region)
    shape = rng.weighted_choice(("suffix", "classic", "middle", "prefix"), (60, 25, 10, 5))
    if shape == "suffix":
        name = f"{town} {rng.random_element(SUFFIXES)}"
    elif shape == "classic":
        name = f"{town} {rng.random_element(CLASSIC_SUFFIXES)}"
    elif shape == "middle":
        name = f"{town} {rng.random_element(MIDDLE_WORDS)} {rng.random_element(SUFFIXES)}"
    else:
        name = f"{rng.random_element(PREFIXES)} {town} {rng.random_element(SUFFIXES)}"
    return name.strip(), derive_nickname(name), town


def generate_kit_colours():
    primary = rng.random_element(config.KIT_COLOURS)
    if primary not in ("#FFFFFF", "#000000") and rng.chance(15):
        secondary = rng.random_element(("#FFFFFF", "#000000"))
    else:
        secondary = rng.random_element([c for c in config.KIT_COLOURS if c != primary])
    return primary, secondary


# --- Opponents & league ---

def generate_opponent_club(location):
    name, nickname, town = generate_club_identity(location)
    if rng.random_int(1, 100) < config.RESERVE_SIDE_PERCENT:
        town = rng.random_element(config.MAJOR_TOWNS)
        name = f"{town} {rng.random_element(config.RESERVE_SUFFIXES)}"
        nickname = rng.random_element(config.RESERVE_NICKNAMES)
    primary, secondary = generate_kit_colours()
    return Club(
        id=rng.new_id("C"),
        name=name,
        nickname=nickname,
        location=town,
        kit_primary=primary,
        kit_secondary=secondary,
        overall_team_quality=rng.random_int(*config.OPPONENT_QUALITY),
    )


def generate_opponent_clubs(location, count=config.DEFAULT_LEAGUE_SIZE - 1, taken_names=()):
    clubs = []
    used = set(taken_names)
    attempts = 0
    while len(clubs) < count:
        club = generate_opponent_club(location)
        attempts += 1
        # Two "Leicester Reserves" in one league is one too many.
        if club.name in used and attempts < count * 20:
            continue
        used.add(club.name)
        clubs.append(club)
    return clubs


REGIONAL_PREFIXES = ("County", "District", "Regional", "Area")
DIVISION_SUFFIXES = ("Division Three", "Division Two", "South", "North", "East", "West", "Alliance")


def generate_league_name(location):
    main_word = (location or "Local").split(" ")[0]
    return (f"{main_word} & {rng.random_element(REGIONAL_PREFIXES)} League "
            f"{rng.random_element(DIVISION_SUFFIXES)}").strip()
