# grassroots/facilities.py
# Facility model: level/grade upgrades, condition, regression after neglect,
# and the ground-wide queries built on top of them.

from dataclasses import replace

from loguru import logger

from grassroots import config, rng
from grassroots.models import Facility
from grassroots.population import clamp, upgrade_cost


def max_level(key):
    labels = config.FACILITY_SPECS[key]["labels"]
    return min(len(labels), len(config.FACILITY_GRADES)) - 1


def grade_for_level(level):
    return config.FACILITY_GRADES[clamp(level, 0, len(config.FACILITY_GRADES) - 1)]


def status_for_level(key, level):
    labels = config.FACILITY_SPECS.get(key, {}).get("labels")
    if not labels:
        return f"Level {level}"
    return labels[clamp(level, 0, len(labels) - 1)]


def create_facility(key, level=None, condition=None):
    spec = config.FACILITY_SPECS[key]
    level = spec["start_level"] if level is None else level
    threshold = (config.PITCH_UNPLAYABLE_THRESHOLD if key == config.FACILITY_PITCH
                 else config.DEFAULT_DEGRADE_THRESHOLD)
    if level > 0:
        condition = config.STARTING_CONDITION if condition is None else condition
    else:
        condition = 0
    return Facility(
        key=key,
        name=spec["name"],
        level=level,
        grade=grade_for_level(level),
        status=status_for_level(key, level),
        condition=condition,
        max_condition=config.MAX_CONDITION,
        base_upgrade_cost=spec["base_upgrade_cost"],
        current_upgrade_cost=upgrade_cost(spec["base_upgrade_cost"], level),
        maintenance_cost=spec["maintenance_cost"],
        capacity_contribution=spec["capacity_contribution"],
        revenue_per_match=spec["revenue_per_match"],
        weeks_below_half=0,
        is_usable=level > 0 and condition >= threshold,
        degrade_threshold=threshold,
    )


def create_initial_facilities():
    return {key: create_facility(key) for key in config.FACILITY_KEYS}


def _with_level(facility, level):
    return replace(
        facility,
        level=level,
        grade=grade_for_level(level),
        status=status_for_level(facility.key, level),
        current_upgrade_cost=upgrade_cost(facility.base_upgrade_cost, level),
    )


# --- Single-facility operations ---

def upgrade(facility):
    """
    Returns (facility, ok, message). At max level the facility comes back
    unchanged. A first build starts at the standard condition; later levels
    add a flat condition bonus.
    """
    if facility.level >= max_level(facility.key):
        return facility, False, f"{facility.name} is already at max level."

    if facility.built:
        condition = min(facility.max_condition, facility.condition + config.UPGRADE_CONDITION_BONUS)
    else:
        condition = config.STARTING_CONDITION
    upgraded = replace(_with_level(facility, facility.level + 1), condition=condition, is_usable=True)
    return upgraded, True, f"{upgraded.name} upgraded to {upgraded.status} (grade {upgraded.grade})."


def adjust_condition(facility, delta):
    if facility.level == 0:
        return facility
    condition = int(clamp(facility.condition + delta, 0, facility.max_condition))
    below_half = facility.weeks_below_half + 1 if condition < config.HALF_CONDITION else 0
    return replace(
        facility,
        condition=condition,
        is_usable=condition >= facility.degrade_threshold,
        weeks_below_half=below_half,
    )


def degrade_grade(facility, degrade_weeks=config.DEGRADE_WEEKS):
    if facility.level <= 1 or facility.weeks_below_half < degrade_weeks:
        return facility
    degraded = _with_level(facility, max(1, facility.level - 1))
    return replace(degraded, weeks_below_half=0)


# --- Facility-dict operations ---

def upgrade_facility(facilities, key):
    """Returns (facilities, ok, message)."""
    if key not in facilities:
        logger.warning(f"Facility '{key}' not found for upgrade")
        return facilities, False, f"Unknown facility '{key}'."
    facility, ok, message = upgrade(facilities[key])
    if not ok:
        return facilities, False, message
    updated = dict(facilities)
    updated[key] = facility
    return updated, True, message


def update_facility_condition(facilities, key, delta):
    if key not in facilities:
        logger.warning(f"Facility '{key}' not found for condition update")
        return facilities
    updated = dict(facilities)
    updated[key] = adjust_condition(facilities[key], delta)
    return updated


def set_facility_status(facilities, key, status):
    if key not in facilities:
        logger.warning(f"Facility '{key}' not found for status update")
        return facilities
    updated = dict(facilities)
    updated[key] = replace(facilities[key], status=status)
    return updated


def wear_facilities(facilities, home_match=False):
    """Weekly wear on every built facility, extra pitch wear after a home game,
    then grade regression for anything neglected long enough."""
    updated = {}
    for key in config.FACILITY_KEYS:
        if key not in facilities:
            continue
        facility = facilities[key]
        if facility.built:
            wear = rng.random_int(*config.WEEKLY_WEAR)
            if home_match and key == config.FACILITY_PITCH:
                wear += rng.random_int(*config.HOME_MATCH_PITCH_WEAR)
            facility = degrade_grade(adjust_condition(facility, -wear))
        updated[key] = facility
    return updated


# --- Ground-wide queries ---

def total_capacity(facilities):
    capacity = config.BASE_GROUND_CAPACITY
    stand = facilities.get(config.FACILITY_COVERED_STAND)
    if stand and stand.level > 0:
        capacity += stand.capacity_contribution * stand.level
    return capacity


def total_maintenance_cost(facilities):
    return sum(f.maintenance_cost * f.level for f in facilities.values() if f.level > 0)


def match_day_revenue(facilities, fanbase):
    revenue = 0
    snack_bar = facilities.get(config.FACILITY_SNACK_BAR)
    if snack_bar and snack_bar.level > 0:
        revenue += snack_bar.revenue_per_match * snack_bar.level
        revenue += (fanbase / 10) * snack_bar.level

    turnstiles = facilities.get(config.FACILITY_TURNSTILES)
    if turnstiles and turnstiles.level > 0:
        revenue += min(fanbase, total_capacity(facilities)) * config.TICKET_PRICE
    return revenue
