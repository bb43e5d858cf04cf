# main.py
# Text front end: found a club, then tick weeks, plan tasks and argue with the committee.
import os
import sys

from loguru import logger

from grassroots import committee, config, game_loop, interactions, views
from grassroots.config import GamePhase, TaskType
from grassroots.db.schema import init_db
from grassroots.db.store import clear_save, gen_logs_insert, load_game, read_logs, save_game

logger.remove()
logger.add(sys.stderr, level=os.environ.get("GRASSROOTS_LOG_LEVEL", "WARNING"))

HELP = ("Enter = advance week | F = advance, quick match | T = schedule task | R = release task | "
        "P = proposals | V = views | S = save | Q = quit")


def ask(prompt, default=""):
    value = input(prompt).strip()
    return value or default


def pick_number(prompt, count):
    value = input(prompt).strip()
    if not value.isdigit() or not 1 <= int(value) <= count:
        return None
    return int(value) - 1


def show_notifications(state, notifications, shown=("briefing",)):
    """Prints the queue (skipping kinds already shown mid-tick) and logs every item."""
    for note in notifications:
        if note.kind not in shown:
            print(f"\n📣 {note.title}\n{note.body}")
        gen_logs_insert(config.DB_PATH, state.current_season, state.current_week, note.kind, note.title)


def pick_option(prompt, options):
    """options: (value, label) pairs. Enter leaves the choice to chance."""
    for i, (_, label) in enumerate(options, start=1):
        print(f" {i}) {label}")
    choice = pick_number(prompt, len(options))
    return None if choice is None else options[choice][0]


def choose_half_time(briefing, half, options):
    print(f"\n📣 {briefing.title}\n{briefing.body}")
    print(f"\n⏸️ {half.summary}")
    return pick_option("Half-time (number): ", options) or "stands"


# --- Setup ---

def found_club():
    print("⚽ Found your grassroots club")
    while True:
        details = {
            "name": ask("Club name: "),
            "nickname": ask("Nickname: "),
            "location": ask("Home town: "),
            "kit_primary": ask("Primary kit colour (#RRGGBB): ", "#FF0000"),
            "kit_secondary": ask("Secondary kit colour (#RRGGBB): ", "#FFFFFF"),
        }
        seed = ask("Random seed (Enter for random): ")
        try:
            return game_loop.new_game(details, seed=int(seed) if seed.isdigit() else None)
        except ValueError as e:
            print(f"⚠️ {e}")


def customise_opponents(state):
    changes = {}
    while True:
        views.show_league_table(state)
        opponents = [c for c in state.leagues[0].clubs if not c.is_player_club]
        for i, club in enumerate(opponents, start=1):
            print(f" {i}) {club.name} ({club.nickname})")
        choice = pick_number("Rename an opponent (number, Enter to finish): ", len(opponents))
        if choice is None:
            break
        target = opponents[choice]
        changes[target.id] = {
            "name": ask(f"New name [{target.name}]: ", target.name),
            "nickname": ask(f"New nickname [{target.nickname}]: ", target.nickname),
        }
    return game_loop.apply_opponent_customisation(state, changes)


# --- Weekly actions ---

def conversation_choices(state):
    squad = state.player_club.squad
    player_id = pick_option("Who (number, Enter for whoever needs it most): ",
                            [(p.id, f"{p.name} ({p.position}, morale {p.status.morale})") for p in squad])
    topic = pick_option("Topic (number, Enter for any): ",
                        [(t, interactions.TOPIC_LABELS[t]) for t in interactions.CONVERSATION_TYPES])
    approach = None
    if topic:
        approach = pick_option("Approach (number, Enter for any): ",
                               [(a, interactions.APPROACH_LABELS[a]) for a in interactions.APPROACHES[topic]])
    return {"player_id": player_id, "topic": topic, "approach": approach}


def schedule_task(state):
    views.show_tasks(state)
    choice = pick_number("Task number: ", len(state.weekly_tasks))
    if choice is None:
        return state
    task = state.weekly_tasks[choice]
    choices = {}
    if task.type == TaskType.PLAYER_CONVO:
        choices = conversation_choices(state)
    elif task.type == TaskType.RECRUIT_PLYR:
        choices = {"approach": pick_option(
            "Your pitch (number, Enter for any): ",
            [(p, interactions.APPROACH_LABELS[p]) for p in interactions.RECRUITMENT_PITCHES],
        )}
    state, result = game_loop.complete_task(state, task.id, **choices)
    print(("✅ " if result.ok else "⚠️ ") + result.message)
    return state


def release_task(state):
    views.show_tasks(state)
    choice = pick_number("Task number to release: ", len(state.weekly_tasks))
    if choice is None:
        return state
    state, result = game_loop.release_task(state, state.weekly_tasks[choice].id)
    print(("✅ " if result.ok else "⚠️ ") + result.message)
    return state


def table_proposal(state):
    if not state.pending_proposals:
        print("🗂️ Nothing on the committee agenda. Meetings are held every four weeks.")
        return state
    views.show_proposals(state)
    choice = pick_number("Proposal number: ", len(state.pending_proposals))
    if choice is None:
        return state
    proposal = state.pending_proposals[choice]
    style = ask(f"Argument ({'/'.join(config.ARGUMENT_STYLES)}): ", "passion").lower()

    identity = None
    if proposal.kind == committee.KIND_CLUB_NAME:
        identity = {"name": ask("New club name: "), "nickname": ask("New nickname: ")}
    elif proposal.kind == committee.KIND_KIT_COLOURS:
        identity = {"kit_primary": ask("New primary colour: ").upper(),
                    "kit_secondary": ask("New secondary colour: ").upper()}

    state, result = game_loop.commit_proposal(state, proposal.id, style, identity)
    if result.notification:
        show_notifications(state, [result.notification])
    else:
        print(f"⚠️ {result.message}")
    return state


def show_views(state):
    options = {
        "1": ("League table", views.show_league_table),
        "2": ("Fixtures", views.show_fixtures),
        "3": ("Squad", views.show_squad),
        "4": ("Finances", views.show_finances),
        "5": ("Facilities", views.show_facilities),
        "6": ("Committee", views.show_committee),
        "7": ("Club history", views.show_history),
        "8": ("Club news", views.show_messages),
    }
    for key, (label, _) in options.items():
        print(f" {key}) {label}")
    print(" 9) News log")
    choice = ask("View: ")
    if choice in options:
        options[choice][1](state)
    elif choice == "9":
        views.print_table("News log", read_logs(config.DB_PATH), ["Date", "Type", "Entry"])


# --- Loop ---

def game_loop_cli(state):
    print(HELP)
    while True:
        print(f"\n📅 {views.header_line(state)}")
        user_input = input("> ").strip().lower()
        if user_input == "q":
            print("Quitting the game...")
            break
        elif user_input == "t":
            state = schedule_task(state)
        elif user_input == "r":
            state = release_task(state)
        elif user_input == "p":
            state = table_proposal(state)
        elif user_input == "v":
            show_views(state)
        elif user_input == "s":
            print("💾 Game saved." if save_game(state) else "⚠️ Save failed, see the log.")
        elif user_input in ("h", "?"):
            print(HELP)
        elif user_input in ("", "f"):
            chooser = choose_half_time if user_input == "" else None
            state, notifications = game_loop.advance_week(state, half_time=chooser)
            show_notifications(state, notifications)
            if state.game_phase == GamePhase.OFF_SEASON and state.current_week == 1:
                views.show_history(state)
        else:
            print(HELP)
    return state


if __name__ == "__main__":
    init_db()
    state = load_game()
    if state is not None and ask("Saved game found. Load it? [Y/n]: ", "y").lower() != "y":
        state = None
    if state is not None:
        print(f"✅ Loaded {state.player_club.name}")
    if state is None:
        clear_save()
        state = customise_opponents(found_club())
        views.show_squad(state)
    game_loop_cli(state)
