"""
Margin Simulation Service - Boundary between callers and the pure engine.

Loads the versioned global parameters from configuration, applies
per-request overrides, checks the caller's business-unit access and
threads the inputs through the resolver and the evaluator.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from margin_app.config import MarginConfig, get_config
from ..authorization import AuthorizationContext
from ..entities import GlobalParameters, ClientMarginPolicy, CostInputs, Target, Proposal
from ..exceptions import AccessDeniedError
from .target_resolver import Number, resolve_target
from .proposal_evaluator import evaluate_proposal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulationResult:
    """Target and Proposal produced for one simulation request."""
    target: Target
    proposal: Proposal

    def to_dict(self) -> dict:
        return {
            'target': self.target.to_dict(),
            'proposal': self.proposal.to_dict(),
        }


class MarginSimulationService:
    """
    Service running margin simulations with configured defaults.

    The global parameters are read once when the service is built;
    build a new service (or call reload_config) to pick up edited values.
    """

    def __init__(self, config: Optional[MarginConfig] = None):
        self.config = config or get_config()
        self.global_parameters = GlobalParameters.from_config(self.config)

    def default_policy(self) -> ClientMarginPolicy:
        """Policy applied to clients without an explicit margin configuration."""
        return ClientMarginPolicy.from_dict(self.config.policy_defaults)

    def resolve(
        self,
        policy: ClientMarginPolicy,
        cost: CostInputs,
        parameters: Optional[GlobalParameters] = None,
    ) -> Target:
        """Resolve a target with the configured calendar."""
        return resolve_target(
            parameters or self.global_parameters,
            policy,
            cost,
            workday_hours=self.config.standard_workday_hours,
            days_per_year=self.config.days_per_year,
        )

    def simulate(
        self,
        policy: ClientMarginPolicy,
        cost: CostInputs,
        proposed_rate: Number,
        planned_hours: Optional[Number] = None,
        parameters: Optional[GlobalParameters] = None,
        access: Optional[AuthorizationContext] = None,
        business_unit_code: Optional[str] = None,
    ) -> SimulationResult:
        """
        Run a full simulation: resolve the target, then score the proposed rate.

        Args:
            policy: Client margin policy
            cost: Resource cost inputs
            proposed_rate: Rate offered to the client
            planned_hours: Optional hours on the engagement
            parameters: Global parameters overriding the configured set
            access: Caller's authorization context, checked when given
            business_unit_code: Business unit of the client being priced

        Raises:
            AccessDeniedError: If access is given and refuses the business unit
            InvalidInputError: If any numeric input is out of range
        """
        if access is not None and not access.may_access(business_unit_code or ""):
            logger.warning("Simulation refused for business unit %s", business_unit_code)
            raise AccessDeniedError(business_unit_code or "")

        target = self.resolve(policy, cost, parameters)
        proposal = evaluate_proposal(target, proposed_rate, planned_hours)

        logger.info(
            "Simulation: rate=%.2f margin=%.2f%% status=%s (params %s)",
            proposal.rate, proposal.margin_percent, proposal.status.value,
            target.globals.version
        )
        return SimulationResult(target=target, proposal=proposal)
