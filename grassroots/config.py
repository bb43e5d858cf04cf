# grassroots/config.py
# Game-wide constants. Import the module (not the names) where a value may be
# overridden at runtime, e.g. DB_PATH in tests.

import os
from datetime import date
from enum import Enum


# -----------------------------
# Paths & persistence
# -----------------------------
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
DB_DIR = os.path.join(BASE_DIR, "db")
DB_PATH = os.environ.get("GRASSROOTS_DB_PATH", os.path.join(DB_DIR, "grassroots.sqlite"))

SCHEMA_VERSION = 1
SAVE_SLOT = "main"


# -----------------------------
# Calendar
# -----------------------------
WEEKLY_BASE_HOURS = 10
OFF_SEASON_HOURS_MULTIPLIER = 2

PRE_SEASON_WEEKS = 4
TOTAL_LEAGUE_MATCH_WEEKS = 22
TOTAL_LEAGUE_WEEKS = PRE_SEASON_WEEKS + TOTAL_LEAGUE_MATCH_WEEKS
COMMITTEE_MEETING_FREQUENCY_WEEKS = 4

# Week 1 of season 1. Later seasons start a year later each.
SEASON_START_DATE = date(2025, 7, 7)


class GamePhase(str, Enum):
    SETUP = "setup"
    OPPONENT_CUSTOMISATION = "opponent_customisation"
    PRE_SEASON = "pre_season"
    WEEKLY_PLANNING = "weekly_planning"
    MATCH_DAY = "match_day"
    POST_MATCH = "post_match"
    END_OF_SEASON = "end_season"
    OFF_SEASON = "off_season"


BLOCKED_PHASES = (GamePhase.SETUP, GamePhase.OPPONENT_CUSTOMISATION)


# -----------------------------
# Defaults
# -----------------------------
DEFAULT_STARTING_BALANCE = 500
DEFAULT_INITIAL_PLAYERS = 15
DEFAULT_LEAGUE_SIZE = 12
DEFAULT_REPUTATION = 10
DEFAULT_FANBASE = 0
MAX_REPUTATION = 100

ATTRIBUTE_MIN = 1
ATTRIBUTE_MAX = 20


# -----------------------------
# Players
# -----------------------------
# Ordered: iteration order of attributes is part of the contract.
PLAYER_ATTRIBUTES = (
    ("PAC", "Pace"), ("STA", "Stamina"), ("STR", "Strength"), ("AGI", "Agility"),
    ("JUM", "Jumping Reach"), ("FT", "First Touch"), ("DRI", "Dribbling"),
    ("PAS", "Passing"), ("SHO", "Shooting"), ("TKL", "Tackling"), ("HD", "Heading"),
    ("CRO", "Crossing"), ("SP", "Set Pieces"), ("GK", "Goalkeeping"),
    ("AGG", "Aggression"), ("COM", "Composure"), ("CON", "Concentration"),
    ("DEC", "Decision Making"), ("DET", "Determination"), ("LEA", "Leadership"),
    ("OTB", "Off the Ball"), ("POS", "Positioning"), ("TMW", "Teamwork"),
    ("WRK", "Work Rate"),
)
ATTRIBUTE_CODES = tuple(code for code, _ in PLAYER_ATTRIBUTES)

PLAYER_POSITIONS = (
    ("GK", "Goalkeeper"), ("SW", "Sweeper"), ("CB", "Centre Back"),
    ("LB", "Left Back"), ("RB", "Right Back"), ("LWB", "Left Wing Back"),
    ("RWB", "Right Wing Back"), ("CDM", "Defensive Midfielder"),
    ("CM", "Central Midfielder"), ("LM", "Left Midfielder"),
    ("RM", "Right Midfielder"), ("CAM", "Attacking Midfielder"),
    ("LW", "Left Winger"), ("RW", "Right Winger"), ("ST", "Striker"),
    ("CF", "Centre Forward"),
)
POSITION_CODES = tuple(code for code, _ in PLAYER_POSITIONS)

ATTACKER_POSITIONS = ("ST", "CF", "LW", "RW")
CENTRAL_MID_POSITIONS = ("CM", "LM", "RM")
DEFENDER_POSITIONS = ("CB", "LB", "RB", "LWB", "RWB", "CDM")

# 4-4-2 core of a new squad; the rest are random positions.
STARTING_LINEUP = ("GK", "CB", "CB", "RB", "LB", "CM", "CM", "LM", "RM", "ST", "ST")

FEET = ("Left", "Right", "Both")
COMMITMENT_LEVELS = ("High", "Medium", "Low")

INJURY_FIT = "Fit"
INJURY_MINOR_KNOCK = "Minor Knock"
INJURY_ABSENT = "Absent"
RETURN_NEXT_WEEK = "Next Week"

SEASON_STAT_FIELDS = (
    "appearances", "goals", "assists", "yellow_cards", "red_cards",
    "motm", "average_rating",
)


# -----------------------------
# Committee
# -----------------------------
ROLE_CHAIR = "Chairperson"
ROLE_SECRETARY = "Club Secretary"
ROLE_TREASURER = "Treasurer"
ROLE_GROUNDSMAN = "Head Groundsman"
ROLE_SOCIAL = "Social Secretary"
ROLE_PLAYER_REP = "Player Representative"
ROLE_VOLUNTEER_COORD = "Volunteer Coordinator"

COMMITTEE_ROLES = (
    ROLE_CHAIR, ROLE_SECRETARY, ROLE_TREASURER, ROLE_GROUNDSMAN,
    ROLE_SOCIAL, ROLE_PLAYER_REP, ROLE_VOLUNTEER_COORD,
)
FOUNDING_COMMITTEE = (ROLE_SECRETARY, ROLE_TREASURER, ROLE_GROUNDSMAN, ROLE_SOCIAL)
VOLUNTEER_ROLES = (ROLE_GROUNDSMAN, ROLE_SOCIAL, ROLE_VOLUNTEER_COORD)

COMMITTEE_SKILLS = (
    "administration", "financial_acumen", "grounds_keeping", "community_relations",
    "influence", "initiative", "work_ethic", "resistance_to_change",
)

# role -> {skill: (lo, hi)}
ROLE_SKILL_BOOSTS = {
    ROLE_CHAIR: {},
    ROLE_SECRETARY: {"administration": (10, 20), "work_ethic": (10, 20)},
    ROLE_TREASURER: {"financial_acumen": (10, 20), "administration": (8, 18)},
    ROLE_GROUNDSMAN: {"grounds_keeping": (10, 20), "work_ethic": (10, 20),
                      "resistance_to_change": (5, 15)},
    ROLE_SOCIAL: {"community_relations": (10, 20), "initiative": (10, 20)},
    ROLE_PLAYER_REP: {"community_relations": (8, 18), "influence": (8, 18)},
    ROLE_VOLUNTEER_COORD: {"administration": (8, 18), "community_relations": (8, 18),
                           "initiative": (8, 18)},
}

RELATIONSHIPS_TO_CLUB = ("Long-time fan", "Former player", "Local business owner", "Dedicated volunteer")

MEETING_PASS_PERCENT = 60
VOTE_YES_THRESHOLD = 5
ARGUMENT_STYLES = ("passion", "finance", "community")


# -----------------------------
# Facilities
# -----------------------------
FACILITY_PITCH = "pitch"
FACILITY_CHANGING_ROOMS = "changing_rooms"
FACILITY_TOILETS = "toilets"
FACILITY_SNACK_BAR = "snack_bar"
FACILITY_COVERED_STAND = "covered_stand"
FACILITY_TURNSTILES = "turnstiles"

# Ordered: iteration order of facilities is part of the contract.
FACILITY_KEYS = (
    FACILITY_PITCH, FACILITY_CHANGING_ROOMS, FACILITY_TOILETS,
    FACILITY_SNACK_BAR, FACILITY_COVERED_STAND, FACILITY_TURNSTILES,
)

FACILITY_SPECS = {
    FACILITY_PITCH: {
        "name": "Pitch", "start_level": 1, "base_upgrade_cost": 200,
        "maintenance_cost": 10, "capacity_contribution": 0, "revenue_per_match": 0,
        "labels": ("None", "Unkempt Field", "Basic Pitch", "Good Pitch",
                   "Excellent Pitch", "Pro-Grade Pitch"),
    },
    FACILITY_CHANGING_ROOMS: {
        "name": "Changing Rooms", "start_level": 1, "base_upgrade_cost": 150,
        "maintenance_cost": 5, "capacity_contribution": 0, "revenue_per_match": 0,
        "labels": ("None", "Basic Hut", "Small Rooms", "Decent Rooms", "Modern Facilities"),
    },
    FACILITY_TOILETS: {
        "name": "Toilets", "start_level": 0, "base_upgrade_cost": 100,
        "maintenance_cost": 3, "capacity_contribution": 0, "revenue_per_match": 0,
        "labels": ("None", "Portable Toilets", "Basic Toilet Block", "Modern Toilets"),
    },
    FACILITY_SNACK_BAR: {
        "name": "Snack Bar", "start_level": 0, "base_upgrade_cost": 250,
        "maintenance_cost": 8, "capacity_contribution": 0, "revenue_per_match": 15,
        "labels": ("None", "Tea Hut", "Basic Kiosk", "Full Snack Bar"),
    },
    FACILITY_COVERED_STAND: {
        "name": "Covered Standing Area", "start_level": 0, "base_upgrade_cost": 300,
        "maintenance_cost": 15, "capacity_contribution": 50, "revenue_per_match": 0,
        "labels": ("None", "Small Covered Area", "Medium Covered Area"),
    },
    FACILITY_TURNSTILES: {
        "name": "Turnstiles", "start_level": 0, "base_upgrade_cost": 120,
        "maintenance_cost": 2, "capacity_contribution": 0, "revenue_per_match": 0,
        "labels": ("None", "Basic Turnstile", "Modern Turnstiles"),
    },
}

# Indexed by level. Level 0 means not built.
FACILITY_GRADES = ("N/A", "E", "D", "C", "B", "A")

UPGRADE_COST_GROWTH = 1.5
UPGRADE_CONDITION_BONUS = 20
MAX_CONDITION = 100
STARTING_CONDITION = 70
HALF_CONDITION = 50
DEGRADE_WEEKS = 4
PITCH_UNPLAYABLE_THRESHOLD = 30
DEFAULT_DEGRADE_THRESHOLD = 20

BASE_GROUND_CAPACITY = 50
TICKET_PRICE = 3

# Weekly wear on built facilities; the pitch takes extra after a home match.
WEEKLY_WEAR = (1, 2)
HOME_MATCH_PITCH_WEAR = (3, 6)


# -----------------------------
# Finances
# -----------------------------
class TransactionType(str, Enum):
    SUBS_INCOME = "Player Subscriptions"
    FUNDRAISE_IN = "Fundraising Event Income"
    SPONSOR_IN = "Sponsorship Income"
    MATCH_DAY_IN = "Match Day Income"
    KIT_EXPENSE = "Kit & Equipment Expense"
    PITCH_EXPENSE = "Pitch Hire/Maintenance"
    TRAVEL_EXPENSE = "Travel Expense"
    FAC_UPGRADE_EXP = "Facility Upgrade Expense"
    WAGES_EXP = "Staff/Player Wages"
    OTHER_EXP = "Other Expense"
    PRIZE_MONEY = "Prize Money"


PROMOTION_PRIZE = (500, 1500)


# -----------------------------
# Weekly tasks
# -----------------------------
class TaskType(str, Enum):
    PITCH_MAINT = "Pitch Maintenance (General)"
    PLAYER_CONVO = "Player Conversation"
    RECRUIT_PLYR = "Recruit New Player"
    PLAN_FUNDRAISE = "Plan Fundraising Event"
    COMM_ENGAGE = "Engage Committee"
    FAC_CHECK = "Facility Check (General)"
    SPONSOR_SEARCH = "Search for Sponsors"
    ADMIN_WORK = "General Admin"
    FIX_PITCH_DAMAGE = "Repair Pitch Damage"
    CLEAN_CHGRMS = "Deep Clean Changing Rooms"


STAFF_HOURS_REDUCTION = 0.3


# -----------------------------
# Random events
# -----------------------------
class EventType(str, Enum):
    GOOD_VOLUNTEER = "New Volunteer Appears"
    BAD_PITCH_DAMAGE = "Pitch Damaged"
    NEUTRAL_JOURNALIST = "Journalist Interview Request"
    GOOD_SMALL_SPONSOR = "New Local Sponsorship Offer"
    BAD_EQUIPMENT_BREAK = "Equipment Breakdown"
    BAD_PLAYER_ABSENT = "Player Misses Match"


EVENT_CHANCE_PERCENT = 30
BROKEN_EQUIPMENT = ("lawnmower", "goal nets", "shower heater")


# -----------------------------
# Match simulation
# -----------------------------
COMPETITION_LEAGUE = "League"
BYE = "BYE"

HOME_ADVANTAGE = 2
MATCH_VARIANCE = (-3, 3)
AI_RATING_SPREAD = (-2, 2)
GOALS_DIVISOR = 3
GOALS_BONUS = (0, 2)
MAX_GOALS = 6
DRAW_BREAK_MAX_SCORE = 1
DRAW_BREAK_PERCENT = 50
ASSIST_PERCENT = 60
YELLOW_CARDS = (0, 2)
RED_CARD_PERCENT = 5
INJURY_PERCENT = 5

MORALE_WIN = (5, 10)
MORALE_DRAW = (0, 3)
MORALE_LOSS = (-10, -5)

FITNESS_DECAY = (2, 5)
MORALE_DECAY = (1, 3)

# Half-by-half play for the managed club's fixture.
HALF_HOME_ADVANTAGE = 1
HALF_VARIANCE = (-1, 1)
HALF_GOALS_BONUS = (0, 1)
MAX_HALF_GOALS = 3
HALF_MORALE_DIVISOR = 20
HALF_TIME_TALK_MORALE = 70
BAR_TAKINGS_SHARE = 0.2

WEATHER = ("Sunny", "Cloudy", "Light Rain", "Heavy Rain", "Overcast")
REFEREE_TEMPERAMENTS = ("Strict", "Lenient", "Fair")


# -----------------------------
# Opponents & league
# -----------------------------
OPPONENT_QUALITY = (5, 10)
RESERVE_SIDE_PERCENT = 30
MAJOR_TOWNS = ("Loughborough", "Leicester", "Melton Mowbray", "Nottingham", "Derby")
RESERVE_SUFFIXES = ("Reserves", "Development", "U23s")
RESERVE_NICKNAMES = ("The Young Guns", "The Future", "The Reserves")
SEASONAL_SQUAD_SIZE = (14, 20)

PROMOTED_TEAMS = 1
RELEGATED_TEAMS = 1

KIT_COLOURS = (
    "#FF0000", "#0000FF", "#FFFF00", "#00FF00", "#FF00FF", "#00FFFF", "#FFA500",
    "#FFFFFF", "#000000", "#C0C0C0", "#800080", "#008000", "#800000",
    "#4B0082", "#A52A2A", "#D2B48C", "#F5F5DC",
)
