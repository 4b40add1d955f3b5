"""
Target Resolver - Converts a loaded cost structure into a target billing rate.

Implements:
- Effective billable hours after forced vacation
- Fully-loaded hourly cost (salary + employer charges + indirect costs)
- Target rate before and after the client discount
- Minimum-margin check on the discounted rate

Arithmetic runs on Decimal so identical inputs always produce identical
floats and exact cases (e.g. 80000 x 1.65 / 1600) stay exact.
"""
import logging
from decimal import Decimal, InvalidOperation
from typing import Union

from ..entities import (
    GlobalParameters,
    ClientMarginPolicy,
    CostInputs,
    ResourceType,
    Target,
)
from ..exceptions import InvalidInputError

logger = logging.getLogger(__name__)

STANDARD_WORKDAY_HOURS = 8.0
DAYS_PER_YEAR = 365
HUNDRED = Decimal("100")

Number = Union[int, float, Decimal]


def to_decimal(value: Number, field: str = "value") -> Decimal:
    """
    Convert through str() so 0.1 becomes Decimal('0.1'), not its binary expansion.

    Raises:
        InvalidInputError: If the value is not a finite number (NaN, inf, text)
    """
    if isinstance(value, Decimal):
        d = value
    else:
        try:
            d = Decimal(str(value))
        except (InvalidOperation, ValueError, TypeError):
            raise InvalidInputError(field, f"not a number ({value!r})")
    if not d.is_finite():
        raise InvalidInputError(field, f"must be a finite number (got {value})")
    return d


def margin_on_rate(rate: Decimal, cost: Decimal) -> Decimal:
    """Margin in percent of the selling rate: (rate - cost) / rate x 100."""
    if rate <= 0:
        raise InvalidInputError("rate", "must be greater than 0")
    return (rate - cost) / rate * HUNDRED


def margin_at(rate: Number, cost: Number) -> float:
    """
    Margin percentage earned when billing `rate` for an hour costing `cost`.

    Raises:
        InvalidInputError: If rate is not positive
    """
    return float(margin_on_rate(to_decimal(rate, "rate"), to_decimal(cost, "cost")))


def effective_billable_hours(
    billable_hours_per_year: Number,
    forced_vacation_days: Number,
    workday_hours: Number = STANDARD_WORKDAY_HOURS,
) -> Decimal:
    """
    Billable hours left once forced vacation days are taken.

    Each vacation day removes one standard workday from the billable year.

    Raises:
        InvalidInputError: If no billable hours remain
    """
    hours = to_decimal(billable_hours_per_year, "billable_hours_per_year") - (
        to_decimal(forced_vacation_days, "forced_vacation_days")
        * to_decimal(workday_hours, "standard_workday_hours")
    )
    if hours <= 0:
        raise InvalidInputError(
            "forced_vacation_days",
            f"{forced_vacation_days} vacation days leave no billable hours "
            f"out of {billable_hours_per_year}"
        )
    return hours


def loaded_annual_cost(globals: GlobalParameters, cost: CostInputs) -> Decimal:
    """Salary plus employer charges plus the per-resource indirect costs."""
    salary = to_decimal(cost.annual_salary, "annual_salary")
    charges = Decimal("1") + to_decimal(globals.employer_rate, "employer_rate") / HUNDRED
    return salary * charges + to_decimal(globals.indirect_costs_annual, "indirect_costs_annual")


def resolve_target(
    globals: GlobalParameters,
    policy: ClientMarginPolicy,
    cost: CostInputs,
    workday_hours: Number = STANDARD_WORKDAY_HOURS,
    days_per_year: int = DAYS_PER_YEAR,
) -> Target:
    """
    Resolve the target billing rate for one resource and one client policy.

    Args:
        globals: Global cost parameters
        policy: Client margin policy
        cost: Salary (employee) or hourly rate (freelancer)
        workday_hours: Hours removed per forced vacation day
        days_per_year: Upper bound for forced vacation days

    Returns:
        A new Target

    Raises:
        InvalidInputError: If any input is out of range or inconsistent
    """
    globals.validate()
    policy.validate(days_per_year)
    cost.validate()

    hours = effective_billable_hours(
        globals.billable_hours_per_year, policy.forced_vacation_days, workday_hours
    )

    if cost.resource_type is ResourceType.FREELANCER:
        hourly_cost = to_decimal(cost.hourly_rate, "hourly_rate")
    else:
        hourly_cost = loaded_annual_cost(globals, cost) / hours

    target_margin = to_decimal(policy.target_margin_percent, "target_margin_percent")
    discount = to_decimal(policy.discount_percent, "discount_percent")

    before_discount = hourly_cost * (Decimal("1") + target_margin / HUNDRED)
    after_discount = before_discount * (Decimal("1") - discount / HUNDRED)
    margin_after_discount = margin_on_rate(after_discount, hourly_cost)
    minimum = to_decimal(policy.min_margin_percent, "min_margin_percent")
    within_objective = margin_after_discount >= minimum

    logger.debug(
        "Resolved target: cost/h=%s before=%s after=%s within_objective=%s (params %s)",
        hourly_cost, before_discount, after_discount, within_objective, globals.version
    )

    return Target(
        hourly_cost=float(hourly_cost),
        target_rate_before_discount=float(before_discount),
        target_rate_after_discount=float(after_discount),
        target_margin_percent=policy.target_margin_percent,
        min_margin_percent=policy.min_margin_percent,
        discount_percent=policy.discount_percent,
        forced_vacation_days=policy.forced_vacation_days,
        globals=globals,
        is_within_objective=within_objective,
        effective_billable_hours=float(hours),
        margin_after_discount_percent=float(margin_after_discount),
    )
