"""
Proposal Evaluator - Scores a proposed billing rate against a resolved Target.
"""
import logging
from decimal import Decimal
from typing import Optional

from ..entities import Target, Proposal, ProposalStatus, MarginStatus
from ..exceptions import InvalidInputError
from .target_resolver import Number, HUNDRED, to_decimal, margin_on_rate

logger = logging.getLogger(__name__)

# Lower bounds (inclusive) of diff_vs_target, in percentage points
EXCELLENT_MARGIN_DELTA = Decimal("5")
COMPLIANT_MARGIN_DELTA = Decimal("0")


def classify_proposal(diff_vs_target: Number) -> ProposalStatus:
    """
    Classify a margin gap (percentage points versus target).

    Bands are checked from the top: >= 5 excellent, >= 0 compliant,
    otherwise below objective.
    """
    diff = to_decimal(diff_vs_target, "diff_vs_target")
    if diff >= EXCELLENT_MARGIN_DELTA:
        return ProposalStatus.EXCELLENT
    elif diff >= COMPLIANT_MARGIN_DELTA:
        return ProposalStatus.COMPLIANT
    return ProposalStatus.BELOW_OBJECTIVE


def margin_status(
    margin_percent: Number,
    target_margin_percent: Number,
    min_margin_percent: Number,
) -> MarginStatus:
    """OK at or above target, WARNING down to the minimum, KO below it."""
    margin = to_decimal(margin_percent, "margin_percent")
    if margin >= to_decimal(target_margin_percent, "target_margin_percent"):
        return MarginStatus.OK
    elif margin >= to_decimal(min_margin_percent, "min_margin_percent"):
        return MarginStatus.WARNING
    return MarginStatus.KO


def evaluate_proposal(
    target: Target,
    proposed_rate: Number,
    planned_hours: Optional[Number] = None,
) -> Proposal:
    """
    Evaluate a proposed hourly rate.

    Args:
        target: Target produced by resolve_target
        proposed_rate: Rate offered to the client
        planned_hours: Optional hours on the engagement, to compute totals

    Returns:
        A new Proposal

    Raises:
        InvalidInputError: If the rate, the target cost or the hours are not positive
    """
    rate = to_decimal(proposed_rate, "proposed_rate")
    if rate <= 0:
        raise InvalidInputError("proposed_rate", "must be greater than 0")

    hourly_cost = to_decimal(target.hourly_cost, "hourly_cost")
    if hourly_cost <= 0:
        raise InvalidInputError("hourly_cost", "target hourly cost must be greater than 0")

    before_discount = to_decimal(target.target_rate_before_discount, "target_rate_before_discount")
    after_discount = to_decimal(target.target_rate_after_discount, "target_rate_after_discount")

    margin = margin_on_rate(rate, hourly_cost)
    diff = margin - to_decimal(target.target_margin_percent, "target_margin_percent")
    discount_delta = (rate - before_discount) / before_discount * HUNDRED

    totals = {}
    if planned_hours is not None:
        hours = to_decimal(planned_hours, "planned_hours")
        if hours <= 0:
            raise InvalidInputError("planned_hours", "must be greater than 0")
        totals = {
            'planned_hours': float(hours),
            'total_revenue': float(rate * hours),
            'total_cost': float(hourly_cost * hours),
            'total_margin': float((rate - hourly_cost) * hours),
        }

    status = classify_proposal(diff)
    logger.debug("Proposal at %s/h: margin=%s%% diff=%s status=%s", rate, margin, diff, status.value)

    return Proposal(
        rate=float(rate),
        margin_percent=float(margin),
        margin_per_hour=float(rate - hourly_cost),
        diff_vs_target=float(diff),
        discount_delta_percent=float(discount_delta),
        premium_vs_target_per_hour=float(rate - after_discount),
        status=status,
        margin_status=margin_status(margin, target.target_margin_percent, target.min_margin_percent),
        **totals,
    )
