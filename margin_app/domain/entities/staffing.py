"""
Staffing Profile - Resources staffed on an engagement and their margin shares.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class StaffedResource:
    """
    One resource line of a staffing profile.

    Attributes:
        job_type: Trade of the resource (e.g. 'developer', 'designer')
        seniority: Seniority level (e.g. 'junior', 'senior')
        daily_cost_rate: Cost of one day
        daily_sell_rate: Rate billed for one day
        days: Days staffed on the engagement
    """

    job_type: str
    seniority: str
    daily_cost_rate: float
    daily_sell_rate: float
    days: float

    @property
    def margin_amount(self) -> float:
        return (self.daily_sell_rate - self.daily_cost_rate) * self.days

    def to_dict(self) -> dict:
        return {
            'job_type': self.job_type,
            'seniority': self.seniority,
            'daily_cost_rate': self.daily_cost_rate,
            'daily_sell_rate': self.daily_sell_rate,
            'days': self.days,
        }


@dataclass(frozen=True)
class MarginShare:
    """Margin earned by one group of resources and its share of the total."""
    label: str
    margin_amount: float
    percentage: float

    def to_dict(self) -> dict:
        return {
            'label': self.label,
            'margin_amount': self.margin_amount,
            'percentage': self.percentage,
        }
