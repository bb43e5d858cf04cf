# grassroots/tasks.py
# Weekly task list and the effect each task type has once its hours are spent.

from dataclasses import replace

from loguru import logger

from grassroots import config, facilities as fac, interactions, names, rng
from grassroots.config import TaskType, TransactionType
from grassroots.finances import post_to_club
from grassroots.models import WeeklyTask


def _task(task_type, description, base_hours, required_role=None):
    return WeeklyTask(
        id=rng.new_id("T"),
        type=task_type,
        description=description,
        base_hours=base_hours,
        required_role=required_role,
    )


def _with_staff_help(task, committee):
    """A matching committee member trims hours in proportion to their work ethic."""
    if not task.required_role:
        return task
    staff = next((m for m in committee if m.role == task.required_role), None)
    if staff is None:
        return task
    reduction = staff.skill("work_ethic") / config.ATTRIBUTE_MAX
    hours = max(1, round(task.base_hours * (1 - reduction * config.STAFF_HOURS_REDUCTION)))
    return replace(task, base_hours=hours, description=f"{task.description} (Assisted by {staff.name})")


def generate_weekly_tasks(facilities, committee):
    tasks = [
        _task(TaskType.PLAYER_CONVO, "Talk to players, check morale", 5),
        _task(TaskType.RECRUIT_PLYR, "Scout for new players in the local area", 10),
        _task(TaskType.SPONSOR_SEARCH, "Seek local sponsors", 7),
        _task(TaskType.FAC_CHECK, "General Facility Check", 4),
        _task(TaskType.COMM_ENGAGE, "Catch up with the committee", 3),
    ]

    pitch = facilities.get(config.FACILITY_PITCH)
    if pitch and pitch.built:
        if pitch.condition < 90:
            tasks.append(_task(TaskType.PITCH_MAINT, "General Pitch Maintenance", 6, config.ROLE_GROUNDSMAN))
        if pitch.condition < config.PITCH_UNPLAYABLE_THRESHOLD:
            tasks.append(_task(TaskType.FIX_PITCH_DAMAGE, "Urgent Pitch Repair (Unplayable)", 10,
                               config.ROLE_GROUNDSMAN))
        elif pitch.condition < config.HALF_CONDITION or pitch.status == "Damaged":
            tasks.append(_task(TaskType.FIX_PITCH_DAMAGE, "Repair Major Pitch Damage", 10,
                               config.ROLE_GROUNDSMAN))

    rooms = facilities.get(config.FACILITY_CHANGING_ROOMS)
    if rooms and rooms.built and rooms.condition < 70:
        tasks.append(_task(TaskType.CLEAN_CHGRMS, "Deep Clean Changing Rooms", 8))

    tasks.append(_task(TaskType.ADMIN_WORK, "Handle club administration", 6, config.ROLE_SECRETARY))
    tasks.append(_task(TaskType.PLAN_FUNDRAISE, "Plan a fundraising event", 7, config.ROLE_SOCIAL))

    tasks = [_with_staff_help(t, committee) for t in tasks]
    return [t for t in tasks if t.base_hours <= config.WEEKLY_BASE_HOURS]


# -----------------------------
# Effects
# -----------------------------
# Each handler: (state, task) -> (state, message, success)

def _skill(state, role, skill):
    member = state.player_club.committee_member(role)
    return member.skill(skill) if member else 0


def _player_conversation(state, task):
    return interactions.player_conversation(state, task.player_id, task.topic, task.approach)


def _recruit_player(state, task):
    return interactions.attempt_recruitment(state, pitch=task.approach)


def _fundraiser(state, task):
    chance = 60 + _skill(state, config.ROLE_SOCIAL, "community_relations")
    if rng.chance(chance):
        raised = rng.random_int(100, 500)
        state = post_to_club(state, raised, TransactionType.FUNDRAISE_IN, "Community Fundraiser")
        return state, f"Your fundraising event was a success, bringing in £{raised:.2f}!", True
    return (state, "Despite your best efforts, the fundraising event didn't attract much interest. "
                   "Better luck next time.", False)


def _sponsor_search(state, task):
    if rng.chance(50):
        sponsor = f"{names.pick_first_name()} {names.pick_last_name()} Co."
        amount = rng.random_int(100, 500)
        state = post_to_club(state, amount, TransactionType.SPONSOR_IN, f"{sponsor} Sponsorship")
        return (state, f"Great news! {sponsor} has offered a one-time sponsorship of £{amount:.2f}!", True)
    return (state, f"You spent {task.assigned_hours or task.base_hours} hours looking for sponsors, "
                   "but couldn't secure any deals this week.", False)


def _engage_committee(state, task):
    committee = []
    for member in state.player_club.committee:
        p = member.personality
        committee.append(replace(member, personality=replace(
            p,
            loyalty_to_you=min(20, p.loyalty_to_you + rng.random_int(1, 3)),
            satisfaction=min(100, p.satisfaction + rng.random_int(1, 5)),
        )))
    state = state.with_club(committee=committee)
    return (state, "You spent time engaging with the committee. "
                   "Their satisfaction and loyalty to you increased slightly.", True)


def _admin_work(state, task):
    return state, "You tackled the club's administrative backlog. Everything is now up-to-date.", True


def _facility_check(state, task):
    facilities = state.player_club.facilities
    for key, facility in facilities.items():
        if facility.built:
            facilities = fac.update_facility_condition(facilities, key, 5)
    state = state.with_club(facilities=facilities)
    return state, "You checked every facility. Minor improvements to condition across the board.", True


def _pitch_work(state, task):
    facilities = state.player_club.facilities
    pitch = facilities.get(config.FACILITY_PITCH)
    if pitch is None or not pitch.built:
        return state, "No pitch to maintain!", False

    skill = _skill(state, config.ROLE_GROUNDSMAN, "grounds_keeping")
    headroom = pitch.max_condition - pitch.condition
    if task.type == TaskType.PITCH_MAINT:
        amount = min(headroom, 6 + round(skill / 2))
        message = f"You performed general maintenance on the pitch. Condition improved by {amount}%."
    elif pitch.condition < config.PITCH_UNPLAYABLE_THRESHOLD:
        amount = min(headroom, 10 + skill * 2)
        message = f"You performed urgent repairs on the unplayable pitch. Condition improved by {amount}%."
    else:
        amount = min(headroom, 8 + round(skill * 1.5))
        message = f"You repaired major damage to the pitch. Condition improved by {amount}%."

    facilities = fac.update_facility_condition(facilities, config.FACILITY_PITCH, amount)
    if task.type == TaskType.FIX_PITCH_DAMAGE:
        facilities = fac.set_facility_status(
            facilities, config.FACILITY_PITCH, fac.status_for_level(config.FACILITY_PITCH, pitch.level)
        )
    return state.with_club(facilities=facilities), message, True


def _clean_changing_rooms(state, task):
    facilities = state.player_club.facilities
    rooms = facilities.get(config.FACILITY_CHANGING_ROOMS)
    if rooms is None or not rooms.built:
        return state, "No changing rooms to clean!", False
    skill = _skill(state, config.ROLE_SECRETARY, "administration")
    amount = min(rooms.max_condition - rooms.condition, 8 + round(skill / 2))
    facilities = fac.update_facility_condition(facilities, config.FACILITY_CHANGING_ROOMS, amount)
    return (state.with_club(facilities=facilities),
            f"You deep cleaned the changing rooms. Condition improved by {amount}%.", True)


TASK_HANDLERS = {
    TaskType.PLAYER_CONVO: _player_conversation,
    TaskType.RECRUIT_PLYR: _recruit_player,
    TaskType.PLAN_FUNDRAISE: _fundraiser,
    TaskType.SPONSOR_SEARCH: _sponsor_search,
    TaskType.COMM_ENGAGE: _engage_committee,
    TaskType.ADMIN_WORK: _admin_work,
    TaskType.FAC_CHECK: _facility_check,
    TaskType.PITCH_MAINT: _pitch_work,
    TaskType.FIX_PITCH_DAMAGE: _pitch_work,
    TaskType.CLEAN_CHGRMS: _clean_changing_rooms,
}


def apply_task(state, task):
    """Run a committed task's effect. Returns (state, message, success)."""
    handler = TASK_HANDLERS.get(task.type)
    if handler is None:
        logger.warning(f"No handler for task type {task.type}")
        return state, f'Task "{task.description}" completed.', True
    return handler(state, task)
