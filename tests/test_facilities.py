"""Facility upgrades, condition bounds and grade regression."""

from dataclasses import replace

import pytest

from grassroots import config
from grassroots import facilities as fac


def test_upgrade_cost_curve():
    """Base cost 200 at level 2 costs 200 x 1.5^2."""
    pitch = fac.create_facility(config.FACILITY_PITCH, level=2)
    assert pitch.current_upgrade_cost == pytest.approx(450)

    upgraded, ok, _ = fac.upgrade(fac.create_facility(config.FACILITY_PITCH, level=1))
    assert ok
    assert upgraded.level == 2
    assert upgraded.current_upgrade_cost == pytest.approx(450)


def test_upgrade_recomputes_everything():
    toilets = fac.create_facility(config.FACILITY_TOILETS)
    assert (toilets.level, toilets.grade, toilets.condition, toilets.is_usable) == (0, "N/A", 0, False)

    built, ok, message = fac.upgrade(toilets)
    assert ok
    assert built.level == 1
    assert built.grade == "E"
    assert built.status == "Portable Toilets"
    assert built.is_usable
    assert built.condition == config.STARTING_CONDITION
    assert "Portable Toilets" in message


def test_upgrade_at_max_level_is_refused():
    stand = fac.create_facility(config.FACILITY_COVERED_STAND, level=fac.max_level(config.FACILITY_COVERED_STAND))
    same, ok, message = fac.upgrade(stand)
    assert not ok
    assert same is stand
    assert "max level" in message


def test_first_build_survives_its_first_condition_change():
    """A newly built pitch sits above its own usability threshold."""
    pitch = fac.create_facility(config.FACILITY_PITCH, level=0)
    built, ok, _ = fac.upgrade(pitch)
    assert ok
    assert built.condition >= built.degrade_threshold
    assert fac.adjust_condition(built, -1).is_usable


def test_later_levels_add_the_condition_bonus():
    pitch = fac.create_facility(config.FACILITY_PITCH, level=2, condition=40)
    upgraded, _, _ = fac.upgrade(pitch)
    assert upgraded.condition == 40 + config.UPGRADE_CONDITION_BONUS


def test_condition_stays_in_bounds():
    pitch = fac.create_facility(config.FACILITY_PITCH)
    for delta in (500, -37, -1000, 12, 250, -3):
        pitch = fac.adjust_condition(pitch, delta)
        assert 0 <= pitch.condition <= pitch.max_condition
    assert fac.adjust_condition(pitch, -1000).is_usable is False


def test_unbuilt_facility_ignores_condition_changes():
    snack_bar = fac.create_facility(config.FACILITY_SNACK_BAR)
    assert fac.adjust_condition(snack_bar, 40) is snack_bar
    for facility in fac.create_initial_facilities().values():
        if facility.level == 0:
            assert facility.grade == "N/A" and not facility.is_usable


def test_neglect_drops_a_grade():
    rooms = fac.create_facility(config.FACILITY_CHANGING_ROOMS, level=3)
    for _ in range(config.DEGRADE_WEEKS):
        rooms = fac.adjust_condition(rooms, -80)
        rooms = fac.degrade_grade(rooms)
    assert rooms.level == 2
    assert rooms.grade == "D"
    assert rooms.weeks_below_half == 0

    basic = replace(fac.create_facility(config.FACILITY_CHANGING_ROOMS), weeks_below_half=10)
    assert fac.degrade_grade(basic) is basic


def test_ground_queries():
    facilities = fac.create_initial_facilities()
    assert fac.total_capacity(facilities) == config.BASE_GROUND_CAPACITY
    assert fac.total_maintenance_cost(facilities) == 10 + 5
    assert fac.match_day_revenue(facilities, fanbase=200) == 0

    facilities, _, _ = fac.upgrade_facility(facilities, config.FACILITY_COVERED_STAND)
    facilities, _, _ = fac.upgrade_facility(facilities, config.FACILITY_TURNSTILES)
    capacity = config.BASE_GROUND_CAPACITY + 50
    assert fac.total_capacity(facilities) == capacity
    assert fac.match_day_revenue(facilities, fanbase=200) == capacity * config.TICKET_PRICE
    assert fac.match_day_revenue(facilities, fanbase=20) == 20 * config.TICKET_PRICE


def test_unknown_facility_is_a_no_op():
    facilities = fac.create_initial_facilities()
    same, ok, _ = fac.upgrade_facility(facilities, "hot_tub")
    assert same is facilities and not ok
    assert fac.update_facility_condition(facilities, "hot_tub", 10) is facilities


def test_weekly_wear():
    facilities = fac.create_initial_facilities()
    worn = fac.wear_facilities(facilities, home_match=True)
    pitch_loss = facilities[config.FACILITY_PITCH].condition - worn[config.FACILITY_PITCH].condition
    rooms_loss = facilities[config.FACILITY_CHANGING_ROOMS].condition - worn[config.FACILITY_CHANGING_ROOMS].condition
    assert 4 <= pitch_loss <= 8
    assert 1 <= rooms_loss <= 2
    assert worn[config.FACILITY_TOILETS] == facilities[config.FACILITY_TOILETS]
