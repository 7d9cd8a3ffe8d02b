"""
Plan tiers and pricing for the weekly private chef service.

All amounts are integer EUR cents. A week covers Monday to Friday; Saturday and
Sunday are optional add-ons priced per plan.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Union

from .exceptions import UnrecognizedPlanError


class Plan(str, Enum):
    STANDARD = "standard"
    PLUS = "plus"
    PREMIUM = "premium"
    CUSTOM = "custom"


@dataclass(frozen=True)
class PlanPricing:
    name: str
    min_guests: int
    max_guests: int
    week_price: int
    saturday_price: int
    sunday_price: int


PLANS = {
    Plan.STANDARD: PlanPricing("Weekly Private Chef", 2, 4, 250000, 80000, 80000),
    Plan.PLUS: PlanPricing("Weekly Private Chef Plus", 5, 7, 400000, 125000, 125000),
    Plan.PREMIUM: PlanPricing("Weekly Private Chef Premium", 8, 10, 600000, 180000, 180000),
}

# Order of the plan cards on the booking page; clients may send the index
PLAN_INDEX = (Plan.STANDARD, Plan.PLUS, Plan.PREMIUM)

CUSTOM_PLAN_TAGS = {"custom", "custom_experience", "custom-experience", "custom experience"}

WEEKDAYS_SPAN = 4  # Monday start + 4 days = Friday


def resolve_plan(guest_count: int) -> Plan:
    """Smallest tier whose guest range contains guest_count; standard outside 2..10"""
    for plan in PLAN_INDEX:
        pricing = PLANS[plan]
        if pricing.min_guests <= guest_count <= pricing.max_guests:
            return plan
    return Plan.STANDARD


def saturday_price(plan: Plan) -> int:
    return _pricing(plan).saturday_price


def sunday_price(plan: Plan) -> int:
    return _pricing(plan).sunday_price


def price_for(plan: Plan, add_saturday: bool, add_sunday: bool) -> int:
    pricing = _pricing(plan)
    total = pricing.week_price
    if add_saturday:
        total += pricing.saturday_price
    if add_sunday:
        total += pricing.sunday_price
    return total


def _pricing(plan: Plan) -> PlanPricing:
    try:
        return PLANS[Plan(plan)]
    except (KeyError, ValueError):
        raise ValueError(f"Plan {plan!r} has no fixed price") from None


def parse_plan(value: Union[int, str, Plan, None]) -> Plan:
    """
    Normalize the plan forms sent by the booking page.

    Accepts an index into PLAN_INDEX (as int or numeric string), a plan name
    (case-insensitive) or one of the custom-experience tags.

    Raises:
        UnrecognizedPlanError: for anything else, including None and booleans
    """
    if isinstance(value, Plan):
        return value
    if isinstance(value, bool) or value is None:
        raise UnrecognizedPlanError(value)

    if isinstance(value, int):
        if 0 <= value < len(PLAN_INDEX):
            return PLAN_INDEX[value]
        raise UnrecognizedPlanError(value)

    if isinstance(value, str):
        text = value.strip().lower()
        if text.isdigit():
            return parse_plan(int(text))
        if text in CUSTOM_PLAN_TAGS:
            return Plan.CUSTOM
        try:
            return Plan(text)
        except ValueError:
            raise UnrecognizedPlanError(value) from None

    raise UnrecognizedPlanError(value)


def end_date_for(start_date: date, add_saturday: bool, add_sunday: bool) -> date:
    days = WEEKDAYS_SPAN + (1 if add_saturday else 0) + (1 if add_sunday else 0)
    return start_date + timedelta(days=days)


def format_price(cents: int) -> str:
    return f"€{cents / 100:,.2f}"


def plan_display_name(plan: Union[Plan, str]) -> str:
    plan = Plan(plan)
    if plan is Plan.CUSTOM:
        return "Custom Experience"
    return PLANS[plan].name
