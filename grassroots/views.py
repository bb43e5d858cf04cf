# grassroots/views.py
# Read-only text snapshots of the game state. Nothing here changes state.

from tabulate import tabulate

from grassroots import calendar_utils, config, league
from grassroots.finances import recent_transactions, summarise, type_name


def print_table(title, rows, headers):
    print(f"\n📋 {title}")
    if not rows:
        print("(nothing to show)")
        return
    print(tabulate(rows, headers=headers, tablefmt="grid"))


def _home_league(state):
    return league.get_league(state.leagues, state.player_club.league_id)


def header_line(state):
    club = state.player_club
    date = calendar_utils.game_date(state.current_season, state.current_week)
    return (f"{club.name} | Season {calendar_utils.season_label(state.current_season)} "
            f"| Week {state.current_week} ({date:%d %b %Y}) | {state.game_phase.value} "
            f"| £{club.finances.balance:.2f} | {state.available_hours}h free")


# --- League ---

def league_table_rows(state):
    rows = []
    for position, club in enumerate(league.get_table(state.leagues, state.player_club.league_id), start=1):
        s = club.league_stats
        name = f"* {club.name}" if club.is_player_club else club.name
        rows.append([position, name, s.played, s.won, s.drawn, s.lost,
                     s.goals_for, s.goals_against, s.goal_difference, s.points])
    return rows


def show_league_table(state):
    home = _home_league(state)
    print_table(
        home.name if home else "League",
        league_table_rows(state),
        ["Pos", "Club", "P", "W", "D", "L", "GF", "GA", "GD", "Pts"],
    )


def fixture_rows(state, club_only=True):
    home = _home_league(state)
    if home is None:
        return []
    club_id = state.player_club.id
    rows = []
    for block in home.fixtures:
        for m in block.matches:
            if club_only and not m.involves(club_id):
                continue
            if m.is_bye:
                rows.append([block.week, block.round, m.home_name, "BYE", "-"])
                continue
            rows.append([block.week, block.round, m.home_name, m.away_name,
                         m.result if m.played else "vs"])
    return rows


def show_fixtures(state, club_only=True):
    print_table("Fixtures", fixture_rows(state, club_only), ["Week", "Round", "Home", "Away", "Result"])


# --- Club ---

def squad_rows(squad):
    rows = []
    for p in squad:
        s = p.status
        availability = "Available" if s.available else (
            f"Suspended ({s.suspension_games})" if s.suspended else s.injury_status
        )
        rows.append([p.name, p.position, p.age, p.overall_rating, s.morale, s.fitness, availability,
                     p.season_stats.appearances, p.season_stats.goals, p.season_stats.assists])
    return rows


def show_squad(state):
    print_table(
        f"Squad ({len(state.player_club.squad)} players)",
        squad_rows(state.player_club.squad),
        ["Name", "Pos", "Age", "OVR", "Morale", "Fitness", "Status", "Apps", "Goals", "Assists"],
    )


def show_finances(state, limit=10):
    finances = state.player_club.finances
    totals = summarise(finances)
    print_table(
        "Finances",
        [["Balance", f"£{totals['balance']:.2f}"],
         ["Income", f"£{totals['income']:.2f}"],
         ["Expenses", f"£{totals['expenses']:.2f}"]]
        + [[name, f"£{amount:.2f}"] for name, amount in totals["by_type"].items()],
        ["", "Amount"],
    )
    print_table(
        "Recent transactions",
        [[t.date, type_name(t.type), t.description, f"£{t.amount:.2f}"]
         for t in reversed(recent_transactions(finances, limit))],
        ["Date", "Type", "Description", "Amount"],
    )


def task_rows(state):
    rows = []
    for i, t in enumerate(state.weekly_tasks, start=1):
        if t.completed:
            status = "Done"
        elif t.assigned_hours:
            status = f"Scheduled ({t.assigned_hours}h)"
        else:
            status = ""
        rows.append([i, t.description, t.base_hours, status])
    return rows


def show_tasks(state):
    print_table(f"This week's tasks ({state.available_hours}h available)", task_rows(state),
                ["#", "Task", "Hours", "Status"])


def show_facilities(state):
    rows = []
    for key in config.FACILITY_KEYS:
        f = state.player_club.facilities.get(key)
        if f is None:
            continue
        upgrade = f"£{f.current_upgrade_cost:.2f}" if f.current_upgrade_cost else "-"
        rows.append([f.name, f.level, f.grade, f.status, f"{f.condition}%", f.maintenance_cost, upgrade])
    print_table("Facilities", rows, ["Facility", "Level", "Grade", "Status", "Condition", "Upkeep", "Upgrade"])


def show_committee(state):
    rows = [
        [m.name, m.role, m.age, m.relationship_to_club, m.personality.loyalty_to_you,
         m.personality.satisfaction]
        for m in state.player_club.committee
    ]
    print_table("Committee", rows, ["Name", "Role", "Age", "Connection", "Loyalty", "Satisfaction"])


def show_proposals(state):
    rows = [[i, p.name, f"£{p.cost:.2f}", p.difficulty]
            for i, p in enumerate(state.pending_proposals, start=1)]
    print_table("Proposals on the table", rows, ["#", "Proposal", "Cost", "Difficulty"])


def show_history(state):
    rows = [[calendar_utils.season_label(s.season), s.league_name, s.position, s.points,
             f"{s.won}-{s.drawn}-{s.lost}", f"{s.goals_for}:{s.goals_against}", s.outcome]
            for s in state.club_history]
    print_table("Club history", rows, ["Season", "League", "Pos", "Pts", "W-D-L", "Goals", "Outcome"])


def show_messages(state, limit=10):
    rows = [[m.season, m.week, m.text] for m in state.messages[-limit:]]
    print_table("Club news", rows, ["Season", "Week", "Message"])
