"""
Simulation Results - Target and Proposal records derived by the engine.

Both records are produced fresh for every request and never mutated.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .parameters import GlobalParameters


class ProposalStatus(Enum):
    """Qualitative reading of a proposal's margin gap versus target."""
    EXCELLENT = "excellent"
    COMPLIANT = "compliant"
    BELOW_OBJECTIVE = "below objective"


class MarginStatus(Enum):
    """Position of a margin relative to the client's target and minimum."""
    OK = "OK"            # at or above target
    WARNING = "WARNING"  # below target, at or above minimum
    KO = "KO"            # below minimum


@dataclass(frozen=True)
class Target:
    """
    Target billing rate resolved from cost structure and margin policy.

    Attributes:
        hourly_cost: Fully-loaded cost of one billable hour
        target_rate_before_discount: Rate reaching the target margin
        target_rate_after_discount: Gross target rate minus the client discount
        target_margin_percent: Echo of the policy target margin
        min_margin_percent: Echo of the policy minimum margin
        discount_percent: Echo of the policy discount
        forced_vacation_days: Echo of the policy vacation days
        globals: Global parameters used for the computation
        is_within_objective: Whether the discounted rate still meets the minimum
        effective_billable_hours: Billable hours after vacation
        margin_after_discount_percent: Margin earned at the discounted rate
    """

    hourly_cost: float
    target_rate_before_discount: float
    target_rate_after_discount: float
    target_margin_percent: float
    min_margin_percent: float
    discount_percent: float
    forced_vacation_days: float
    globals: GlobalParameters
    is_within_objective: bool
    effective_billable_hours: float
    margin_after_discount_percent: float

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'hourly_cost': self.hourly_cost,
            'target_rate_before_discount': self.target_rate_before_discount,
            'target_rate_after_discount': self.target_rate_after_discount,
            'target_margin_percent': self.target_margin_percent,
            'min_margin_percent': self.min_margin_percent,
            'discount_percent': self.discount_percent,
            'forced_vacation_days': self.forced_vacation_days,
            'globals': self.globals.to_dict(),
            'is_within_objective': self.is_within_objective,
            'effective_billable_hours': self.effective_billable_hours,
            'margin_after_discount_percent': self.margin_after_discount_percent,
        }


@dataclass(frozen=True)
class Proposal:
    """
    A proposed billing rate scored against a Target.

    diff_vs_target is expressed in percentage points, not as a ratio.
    Totals are only populated when planned hours were supplied.
    """

    rate: float
    margin_percent: float
    margin_per_hour: float
    diff_vs_target: float
    discount_delta_percent: float
    premium_vs_target_per_hour: float
    status: ProposalStatus
    margin_status: MarginStatus
    planned_hours: Optional[float] = None
    total_revenue: Optional[float] = None
    total_cost: Optional[float] = None
    total_margin: Optional[float] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'rate': self.rate,
            'margin_percent': self.margin_percent,
            'margin_per_hour': self.margin_per_hour,
            'diff_vs_target': self.diff_vs_target,
            'discount_delta_percent': self.discount_delta_percent,
            'premium_vs_target_per_hour': self.premium_vs_target_per_hour,
            'status': self.status.value,
            'margin_status': self.margin_status.value,
            'planned_hours': self.planned_hours,
            'total_revenue': self.total_revenue,
            'total_cost': self.total_cost,
            'total_margin': self.total_margin,
        }
