"""
Simulation Inputs - Global cost parameters, client margin policy and cost inputs.

Implements:
- Immutable value semantics
- Versioned global parameter set loaded from configuration
- Range validation raising InvalidInputError
"""
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..exceptions import InvalidInputError


class ResourceType(Enum):
    """How a resource is paid."""
    EMPLOYEE = "employee"
    FREELANCER = "freelancer"


def _check_finite(field_name: str, value) -> None:
    try:
        finite = math.isfinite(value)
    except TypeError:
        raise InvalidInputError(field_name, f"not a number ({value!r})")
    if not finite:
        raise InvalidInputError(field_name, f"must be a finite number (got {value})")


def _check_percent(field_name: str, value: float) -> None:
    _check_finite(field_name, value)
    if not 0 <= value <= 100:
        raise InvalidInputError(field_name, f"must be between 0 and 100 (got {value})")


@dataclass(frozen=True)
class GlobalParameters:
    """
    Process-wide cost parameters, passed by value into the resolver.

    Attributes:
        employer_rate: Employer charges as % of gross salary
        indirect_costs_annual: Annual indirect costs for one resource
        billable_hours_per_year: Billable hours before vacation adjustment
        version: Label of the parameter set these values came from
    """

    employer_rate: float = 0.0
    indirect_costs_annual: float = 0.0
    billable_hours_per_year: int = 1600
    version: str = "default"

    def validate(self) -> None:
        """Raise InvalidInputError if any parameter is out of range."""
        _check_percent("employer_rate", self.employer_rate)
        _check_finite("indirect_costs_annual", self.indirect_costs_annual)
        _check_finite("billable_hours_per_year", self.billable_hours_per_year)
        if self.indirect_costs_annual < 0:
            raise InvalidInputError("indirect_costs_annual", "cannot be negative")
        if self.billable_hours_per_year <= 0:
            raise InvalidInputError("billable_hours_per_year", "must be greater than 0")

    def with_overrides(self, **overrides) -> 'GlobalParameters':
        """Return a copy with the non-None overrides applied."""
        values = {
            'employer_rate': self.employer_rate,
            'indirect_costs_annual': self.indirect_costs_annual,
            'billable_hours_per_year': self.billable_hours_per_year,
            'version': self.version,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return GlobalParameters(**values)

    @classmethod
    def from_config(cls, config) -> 'GlobalParameters':
        """Build the parameter set from a MarginConfig."""
        return cls(
            employer_rate=config.employer_rate,
            indirect_costs_annual=config.indirect_costs_annual,
            billable_hours_per_year=config.billable_hours_per_year,
            version=config.parameters_version,
        )

    def to_dict(self) -> dict:
        return {
            'employer_rate': self.employer_rate,
            'indirect_costs_annual': self.indirect_costs_annual,
            'billable_hours_per_year': self.billable_hours_per_year,
            'version': self.version,
        }


@dataclass(frozen=True)
class ClientMarginPolicy:
    """
    Margin policy configured for one client.

    Attributes:
        target_margin_percent: Margin the target rate is built to reach
        min_margin_percent: Lowest acceptable margin (<= target)
        discount_percent: Reduction applied to the gross target rate
        forced_vacation_days: Days per year removed from billable hours
        target_hourly_rate: Informational $/h target from the client setup
    """

    target_margin_percent: float = 0.0
    min_margin_percent: float = 0.0
    discount_percent: float = 0.0
    forced_vacation_days: float = 0
    target_hourly_rate: Optional[float] = None

    def validate(self, days_per_year: int = 365) -> None:
        """Raise InvalidInputError if the policy is inconsistent."""
        _check_percent("target_margin_percent", self.target_margin_percent)
        _check_percent("min_margin_percent", self.min_margin_percent)
        _check_percent("discount_percent", self.discount_percent)
        if self.discount_percent >= 100:
            raise InvalidInputError("discount_percent", "a 100% discount leaves no billable rate")
        if self.min_margin_percent > self.target_margin_percent:
            raise InvalidInputError(
                "min_margin_percent",
                f"minimum margin ({self.min_margin_percent}) cannot exceed "
                f"target margin ({self.target_margin_percent})"
            )
        _check_finite("forced_vacation_days", self.forced_vacation_days)
        if not 0 <= self.forced_vacation_days <= days_per_year:
            raise InvalidInputError(
                "forced_vacation_days", f"must be between 0 and {days_per_year}"
            )
        if self.target_hourly_rate is None:
            return
        _check_finite("target_hourly_rate", self.target_hourly_rate)
        if self.target_hourly_rate < 0:
            raise InvalidInputError("target_hourly_rate", "cannot be negative")

    @classmethod
    def from_dict(cls, data: dict) -> 'ClientMarginPolicy':
        """
        Create a policy from a dictionary (e.g. client settings or a config section).

        Missing keys fall back to zero, except the minimum margin which
        defaults to the target margin.
        """
        target = float(data.get('target_margin_percent', 0.0))
        rate = data.get('target_hourly_rate')
        return cls(
            target_margin_percent=target,
            min_margin_percent=float(data.get('min_margin_percent', target)),
            discount_percent=float(data.get('discount_percent', 0.0)),
            forced_vacation_days=data.get('forced_vacation_days', 0) or 0,
            target_hourly_rate=float(rate) if rate is not None else None,
        )

    def to_dict(self) -> dict:
        return {
            'target_margin_percent': self.target_margin_percent,
            'min_margin_percent': self.min_margin_percent,
            'discount_percent': self.discount_percent,
            'forced_vacation_days': self.forced_vacation_days,
            'target_hourly_rate': self.target_hourly_rate,
        }


@dataclass(frozen=True)
class CostInputs:
    """
    Cost of the resource being priced.

    Employees are costed from their annual salary; freelancers from
    their contracted hourly rate.
    """

    annual_salary: float = 0.0
    resource_type: ResourceType = ResourceType.EMPLOYEE
    hourly_rate: Optional[float] = None

    def validate(self) -> None:
        if self.resource_type is ResourceType.FREELANCER:
            if self.hourly_rate is None:
                raise InvalidInputError("hourly_rate", "must be greater than 0")
            _check_finite("hourly_rate", self.hourly_rate)
            if self.hourly_rate <= 0:
                raise InvalidInputError("hourly_rate", "must be greater than 0")
        else:
            _check_finite("annual_salary", self.annual_salary)
            if self.annual_salary <= 0:
                raise InvalidInputError("annual_salary", "must be greater than 0")

    @classmethod
    def employee(cls, annual_salary: float) -> 'CostInputs':
        return cls(annual_salary=annual_salary)

    @classmethod
    def freelancer(cls, hourly_rate: float) -> 'CostInputs':
        return cls(resource_type=ResourceType.FREELANCER, hourly_rate=hourly_rate)
