from datetime import date

import pytest

from weeklychef.exceptions import UnrecognizedPlanError
from weeklychef.pricing import (
    PLANS,
    Plan,
    end_date_for,
    format_price,
    parse_plan,
    plan_display_name,
    price_for,
    resolve_plan,
    saturday_price,
    sunday_price,
)


@pytest.mark.parametrize(
    "guests,expected",
    [
        (1, Plan.STANDARD),
        (2, Plan.STANDARD),
        (4, Plan.STANDARD),
        (5, Plan.PLUS),
        (7, Plan.PLUS),
        (8, Plan.PREMIUM),
        (10, Plan.PREMIUM),
        (11, Plan.STANDARD),
        (0, Plan.STANDARD),
        (-3, Plan.STANDARD),
    ],
)
def test_resolve_plan_by_guest_count(guests, expected):
    assert resolve_plan(guests) is expected


@pytest.mark.parametrize("plan", [Plan.STANDARD, Plan.PLUS, Plan.PREMIUM])
def test_price_is_additive_over_weekend_addons(plan):
    base = price_for(plan, False, False)
    assert price_for(plan, True, False) == base + saturday_price(plan)
    assert price_for(plan, False, True) == base + sunday_price(plan)
    assert price_for(plan, True, True) == base + saturday_price(plan) + sunday_price(plan)


def test_price_table_values():
    assert price_for(Plan.STANDARD, False, False) == 250000
    assert price_for(Plan.PLUS, True, True) == 400000 + 125000 + 125000
    assert price_for(Plan.PREMIUM, True, False) == 780000
    assert PLANS[Plan.PREMIUM].max_guests == 10


def test_custom_plan_has_no_fixed_price():
    with pytest.raises(ValueError):
        price_for(Plan.CUSTOM, False, False)


@pytest.mark.parametrize(
    "value,expected",
    [
        (0, Plan.STANDARD),
        (1, Plan.PLUS),
        (2, Plan.PREMIUM),
        ("2", Plan.PREMIUM),
        (" Plus ", Plan.PLUS),
        ("PREMIUM", Plan.PREMIUM),
        ("custom", Plan.CUSTOM),
        ("Custom Experience", Plan.CUSTOM),
        ("custom_experience", Plan.CUSTOM),
        (Plan.PLUS, Plan.PLUS),
    ],
)
def test_parse_plan_accepts_booking_page_forms(value, expected):
    assert parse_plan(value) is expected


@pytest.mark.parametrize("value", [3, -1, "gold", "", None, True, 2.5])
def test_parse_plan_rejects_unknown_values(value):
    with pytest.raises(UnrecognizedPlanError):
        parse_plan(value)


def test_end_date_spans_weekdays_plus_addons():
    monday = date(2026, 3, 2)
    assert end_date_for(monday, False, False) == date(2026, 3, 6)
    assert end_date_for(monday, True, False) == date(2026, 3, 7)
    assert end_date_for(monday, True, True) == date(2026, 3, 8)


def test_format_price_and_display_names():
    assert format_price(250000) == "€2,500.00"
    assert format_price(12345) == "€123.45"
    assert plan_display_name("plus") == "Weekly Private Chef Plus"
    assert plan_display_name(Plan.CUSTOM) == "Custom Experience"
