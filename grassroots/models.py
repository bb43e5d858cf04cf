# grassroots/models.py
# Records shared by every component. Operations elsewhere never mutate a
# record in place: they build a new one with dataclasses.replace().

from dataclasses import dataclass, field, asdict, replace
from typing import Dict, List, Optional

from grassroots import config
from grassroots.config import GamePhase, TaskType


# -----------------------------
# Players
# -----------------------------
@dataclass
class PlayerTraits:
    ambition: int = 5
    loyalty: int = 15
    temperament: int = 5
    professionalism: int = 10
    commitment: str = "Medium"


@dataclass
class SeasonStats:
    appearances: int = 0
    goals: int = 0
    assists: int = 0
    yellow_cards: int = 0
    red_cards: int = 0
    motm: int = 0
    average_rating: float = 0.0


@dataclass
class PlayerStatus:
    morale: int = 75
    fitness: int = 100
    injury_status: str = config.INJURY_FIT
    injury_return: Optional[str] = None
    suspended: bool = False
    suspension_games: int = 0

    @property
    def available(self):
        return self.injury_status == config.INJURY_FIT and not self.suspended


@dataclass
class Player:
    id: str
    name: str
    age: int
    position: str
    secondary_position: Optional[str] = None
    foot: str = "Right"
    height: int = 180
    club_id: Optional[str] = None
    attributes: Dict[str, int] = field(default_factory=dict)
    traits: PlayerTraits = field(default_factory=PlayerTraits)
    season_stats: SeasonStats = field(default_factory=SeasonStats)
    status: PlayerStatus = field(default_factory=PlayerStatus)

    @property
    def overall_rating(self):
        if not self.attributes:
            return config.ATTRIBUTE_MIN
        return round(sum(self.attributes.values()) / len(self.attributes))

    @classmethod
    def from_dict(cls, data):
        data = dict(data)
        data["traits"] = PlayerTraits(**data.get("traits", {}))
        data["season_stats"] = SeasonStats(**data.get("season_stats", {}))
        data["status"] = PlayerStatus(**data.get("status", {}))
        return cls(**data)


# -----------------------------
# Facilities & committee
# -----------------------------
@dataclass
class Facility:
    key: str
    name: str
    level: int = 0
    grade: str = "N/A"
    status: str = "None"
    condition: int = 0
    max_condition: int = config.MAX_CONDITION
    base_upgrade_cost: float = 0
    current_upgrade_cost: float = 0
    maintenance_cost: int = 0
    capacity_contribution: int = 0
    revenue_per_match: int = 0
    weeks_below_half: int = 0
    is_usable: bool = False
    degrade_threshold: int = config.DEFAULT_DEGRADE_THRESHOLD

    @property
    def built(self):
        return self.level > 0

    @classmethod
    def from_dict(cls, data):
        return cls(**data)


@dataclass
class Personality:
    loyalty_to_you: int = 10
    club_loyalty: int = 15
    enthusiasm: int = 10
    satisfaction: int = 75


@dataclass
class CommitteeMember:
    id: str
    name: str
    role: str
    age: int = 50
    relationship_to_club: str = "Long-time fan"
    skills: Dict[str, int] = field(default_factory=dict)
    personality: Personality = field(default_factory=Personality)

    def skill(self, name):
        return self.skills.get(name, 0)

    @classmethod
    def from_dict(cls, data):
        data = dict(data)
        data["personality"] = Personality(**data.get("personality", {}))
        return cls(**data)


# -----------------------------
# Finances
# -----------------------------
@dataclass
class Transaction:
    id: str
    date: str
    type: str
    description: str
    amount: float


@dataclass
class Finances:
    balance: float = config.DEFAULT_STARTING_BALANCE
    starting_balance: float = config.DEFAULT_STARTING_BALANCE
    transactions: List[Transaction] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data):
        data = dict(data)
        data["transactions"] = [Transaction(**t) for t in data.get("transactions", [])]
        return cls(**data)


# -----------------------------
# Clubs & leagues
# -----------------------------
@dataclass
class LeagueStats:
    played: int = 0
    won: int = 0
    drawn: int = 0
    lost: int = 0
    goals_for: int = 0
    goals_against: int = 0
    goal_difference: int = 0
    points: int = 0


@dataclass
class Club:
    """A league member as the standings see it (AI sides and the managed club alike)."""
    id: str
    name: str
    nickname: str = ""
    location: str = ""
    kit_primary: str = "#FFFFFF"
    kit_secondary: str = "#000000"
    reputation: int = config.DEFAULT_REPUTATION
    fanbase: int = config.DEFAULT_FANBASE
    overall_team_quality: Optional[int] = None
    is_player_club: bool = False
    league_id: Optional[str] = None
    league_stats: LeagueStats = field(default_factory=LeagueStats)
    final_league_position: Optional[int] = None

    @classmethod
    def from_dict(cls, data):
        data = dict(data)
        data["league_stats"] = LeagueStats(**data.get("league_stats", {}))
        return cls(**data)


@dataclass
class PlayerClub:
    id: str
    name: str
    nickname: str
    location: str
    kit_primary: str
    kit_secondary: str
    reputation: int = config.DEFAULT_REPUTATION
    fanbase: int = config.DEFAULT_FANBASE
    league_id: Optional[str] = None
    facilities: Dict[str, Facility] = field(default_factory=dict)
    committee: List[CommitteeMember] = field(default_factory=list)
    squad: List[Player] = field(default_factory=list)
    finances: Finances = field(default_factory=Finances)
    league_stats: LeagueStats = field(default_factory=LeagueStats)
    final_league_position: Optional[int] = None
    name_changes: int = 0
    colour_changes: int = 0

    def committee_member(self, role):
        for member in self.committee:
            if member.role == role:
                return member
        return None

    @classmethod
    def from_dict(cls, data):
        data = dict(data)
        data["facilities"] = {
            key: Facility.from_dict(f) for key, f in data.get("facilities", {}).items()
        }
        data["committee"] = [CommitteeMember.from_dict(m) for m in data.get("committee", [])]
        data["squad"] = [Player.from_dict(p) for p in data.get("squad", [])]
        data["finances"] = Finances.from_dict(data.get("finances", {}))
        data["league_stats"] = LeagueStats(**data.get("league_stats", {}))
        return cls(**data)


@dataclass
class Match:
    id: str
    week: int
    round: int
    season: int
    home_id: str
    home_name: str
    away_id: str
    away_name: str
    competition: str = config.COMPETITION_LEAGUE
    result: Optional[str] = None
    played: bool = False

    @property
    def is_bye(self):
        return self.result == config.BYE

    def involves(self, club_id):
        return club_id in (self.home_id, self.away_id)


@dataclass
class WeekBlock:
    week: int
    round: int
    competition: str
    matches: List[Match] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data):
        data = dict(data)
        data["matches"] = [Match(**m) for m in data.get("matches", [])]
        return cls(**data)


@dataclass
class League:
    id: str
    name: str
    level: int = 1
    num_teams: int = config.DEFAULT_LEAGUE_SIZE
    promoted_teams: int = config.PROMOTED_TEAMS
    relegated_teams: int = config.RELEGATED_TEAMS
    club_ids: List[str] = field(default_factory=list)
    clubs: List[Club] = field(default_factory=list)
    fixtures: List[WeekBlock] = field(default_factory=list)

    def club(self, club_id):
        for club in self.clubs:
            if club.id == club_id:
                return club
        return None

    @classmethod
    def from_dict(cls, data):
        data = dict(data)
        data["clubs"] = [Club.from_dict(c) for c in data.get("clubs", [])]
        data["fixtures"] = [WeekBlock.from_dict(b) for b in data.get("fixtures", [])]
        return cls(**data)


# -----------------------------
# Weekly planning & news
# -----------------------------
@dataclass
class WeeklyTask:
    id: str
    type: TaskType
    description: str
    base_hours: int
    assigned_hours: int = 0
    completed: bool = False
    required_role: Optional[str] = None
    # Choices made when a conversation or recruitment task is scheduled.
    player_id: Optional[str] = None
    topic: Optional[str] = None
    approach: Optional[str] = None

    @classmethod
    def from_dict(cls, data):
        data = dict(data)
        data["type"] = TaskType(data["type"])
        return cls(**data)


@dataclass
class Message:
    season: int
    week: int
    text: str


@dataclass
class Notification:
    """One item of the queue a tick hands to the presentation layer."""
    kind: str
    title: str
    body: str


@dataclass
class ActionResult:
    ok: bool
    message: str
    notification: Optional[Notification] = None


@dataclass
class Proposal:
    id: str
    name: str
    kind: str
    cost: float
    difficulty: int
    description: str = ""
    facility_key: Optional[str] = None


@dataclass
class SeasonSummary:
    season: int
    league_name: str
    position: Optional[int]
    points: int
    won: int
    drawn: int
    lost: int
    goals_for: int
    goals_against: int
    outcome: str


@dataclass
class GameState:
    player_club: Optional[PlayerClub] = None
    leagues: List[League] = field(default_factory=list)
    current_season: int = 1
    current_week: int = 1
    available_hours: int = config.WEEKLY_BASE_HOURS
    weekly_tasks: List[WeeklyTask] = field(default_factory=list)
    club_history: List[SeasonSummary] = field(default_factory=list)
    messages: List[Message] = field(default_factory=list)
    game_phase: GamePhase = GamePhase.SETUP
    pending_proposals: List[Proposal] = field(default_factory=list)
    player_club_customised: bool = False
    opponents_customised: bool = False
    schema_version: int = config.SCHEMA_VERSION

    def with_message(self, text):
        return replace(self, messages=list(self.messages) + [
            Message(season=self.current_season, week=self.current_week, text=text)
        ])

    def with_club(self, **changes):
        return replace(self, player_club=replace(self.player_club, **changes))

    def to_dict(self):
        return asdict(self)

    @classmethod
    def from_dict(cls, data):
        data = dict(data)
        if data.get("player_club") is not None:
            data["player_club"] = PlayerClub.from_dict(data["player_club"])
        data["leagues"] = [League.from_dict(l) for l in data.get("leagues", [])]
        data["weekly_tasks"] = [WeeklyTask.from_dict(t) for t in data.get("weekly_tasks", [])]
        data["club_history"] = [SeasonSummary(**s) for s in data.get("club_history", [])]
        data["messages"] = [Message(**m) for m in data.get("messages", [])]
        data["game_phase"] = GamePhase(data.get("game_phase", GamePhase.SETUP))
        data["pending_proposals"] = [Proposal(**p) for p in data.get("pending_proposals", [])]
        return cls(**data)
