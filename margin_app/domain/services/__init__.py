"""
Domain Services - Target resolution, proposal evaluation and simulation.
"""

from .target_resolver import (
    resolve_target,
    margin_at,
    effective_billable_hours,
    loaded_annual_cost,
    STANDARD_WORKDAY_HOURS,
)
from .proposal_evaluator import (
    evaluate_proposal,
    classify_proposal,
    margin_status,
    EXCELLENT_MARGIN_DELTA,
    COMPLIANT_MARGIN_DELTA,
)
from .simulation_service import MarginSimulationService, SimulationResult
from .margin_breakdown import (
    margin_shares,
    margin_by_job_type,
    margin_by_seniority,
    margin_rate,
    utilization_rate,
)

__all__ = [
    'resolve_target',
    'margin_at',
    'effective_billable_hours',
    'loaded_annual_cost',
    'STANDARD_WORKDAY_HOURS',
    'evaluate_proposal',
    'classify_proposal',
    'margin_status',
    'EXCELLENT_MARGIN_DELTA',
    'COMPLIANT_MARGIN_DELTA',
    'MarginSimulationService',
    'SimulationResult',
    'margin_shares',
    'margin_by_job_type',
    'margin_by_seniority',
    'margin_rate',
    'utilization_rate',
]
