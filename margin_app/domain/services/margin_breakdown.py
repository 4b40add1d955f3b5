"""
Margin Breakdown - Profitability of a staffing profile.

Implements:
- Margin per job type and per seniority, with each group's share of the total
- Margin rate of a day (or hour) sold at a given cost
- Utilization rate (billed days over available days)

Shares are rounded to one decimal and the smallest share absorbs the
rounding residue, so the displayed percentages always add up to 100.
"""
import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, Dict, Iterable, List

from ..entities import StaffedResource, MarginShare
from ..exceptions import InvalidInputError
from .target_resolver import Number, HUNDRED, to_decimal

logger = logging.getLogger(__name__)

SHARE_QUANTUM = Decimal("0.1")
MARGIN_RATE_QUANTUM = Decimal("0.01")
UTILIZATION_QUANTUM = Decimal("0.1")


def _non_negative(value: Number, field: str) -> Decimal:
    d = to_decimal(value, field)
    if d < 0:
        raise InvalidInputError(field, "cannot be negative")
    return d


def _resource_margin(resource: StaffedResource) -> Decimal:
    cost = _non_negative(resource.daily_cost_rate, "daily_cost_rate")
    sell = _non_negative(resource.daily_sell_rate, "daily_sell_rate")
    days = _non_negative(resource.days, "days")
    return (sell - cost) * days


def margin_shares(
    resources: Iterable[StaffedResource],
    key: Callable[[StaffedResource], str],
) -> List[MarginShare]:
    """
    Group resources by `key` and compute each group's margin and share.

    Returns:
        Shares sorted from largest to smallest, percentages totalling 100.
        Empty when the total margin is zero (or there are no resources).

    Raises:
        InvalidInputError: If a rate or a day count is negative or not a number
    """
    groups: Dict[str, Decimal] = {}
    for resource in resources:
        label = key(resource)
        groups[label] = groups.get(label, Decimal("0")) + _resource_margin(resource)

    total = sum(groups.values(), Decimal("0"))
    if total == 0:
        return []

    raw = sorted(
        ((label, amount, amount / total * HUNDRED) for label, amount in groups.items()),
        key=lambda item: item[2],
        reverse=True,
    )
    rounded = [
        [label, amount, share.quantize(SHARE_QUANTUM, rounding=ROUND_HALF_UP)]
        for label, amount, share in raw
    ]

    residue = HUNDRED - sum(share for _, _, share in rounded)
    if residue:
        logger.debug("Share rounding residue %s added to '%s'", residue, rounded[-1][0])
        rounded[-1][2] += residue

    return [
        MarginShare(label=label, margin_amount=float(amount), percentage=float(share))
        for label, amount, share in rounded
    ]


def margin_by_job_type(resources: Iterable[StaffedResource]) -> List[MarginShare]:
    """Margin and share of the total per job type."""
    return margin_shares(resources, lambda r: r.job_type)


def margin_by_seniority(resources: Iterable[StaffedResource]) -> List[MarginShare]:
    """Margin and share of the total per seniority level."""
    return margin_shares(resources, lambda r: r.seniority)


def margin_rate(sell_rate: Number, cost_rate: Number) -> float:
    """
    Margin in percent of the sell rate, rounded to 2 decimals.

    A zero sell rate yields 0 rather than an error, for empty profile lines.
    """
    sell = _non_negative(sell_rate, "sell_rate")
    cost = to_decimal(cost_rate, "cost_rate")
    if sell == 0:
        return 0.0
    rate = (sell - cost) / sell * HUNDRED
    return float(rate.quantize(MARGIN_RATE_QUANTUM, rounding=ROUND_HALF_UP))


def utilization_rate(billed_days: Number, available_days: Number) -> float:
    """Billed days as a percentage of available days, rounded to 1 decimal (0 when none are available)."""
    billed = _non_negative(billed_days, "billed_days")
    available = _non_negative(available_days, "available_days")
    if available == 0:
        return 0.0
    rate = billed / available * HUNDRED
    return float(rate.quantize(UTILIZATION_QUANTUM, rounding=ROUND_HALF_UP))
