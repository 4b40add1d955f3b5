"""
Tests for the margin simulation service.
"""
import pytest

from margin_app.config import get_config
from margin_app.domain.authorization import AuthorizationContext
from margin_app.domain.entities import (
    GlobalParameters,
    ClientMarginPolicy,
    CostInputs,
    ProposalStatus,
)
from margin_app.domain.exceptions import AccessDeniedError, InvalidInputError
from margin_app.domain.services import MarginSimulationService, SimulationResult


@pytest.fixture
def service():
    return MarginSimulationService(get_config())


@pytest.fixture
def policy():
    return ClientMarginPolicy(target_margin_percent=25, min_margin_percent=15)


class TestMarginSimulationService:
    """Tests for the simulation boundary."""

    def test_parameters_loaded_from_config(self, service):
        assert service.global_parameters == GlobalParameters(65.0, 0.0, 1600, "2026.1")

    def test_default_policy(self, service):
        policy = service.default_policy()
        assert policy.target_margin_percent == 25.0
        assert policy.min_margin_percent == 15.0
        assert policy.discount_percent == 0.0

    def test_simulate(self, service, policy):
        result = service.simulate(policy, CostInputs.employee(80000), 110)

        assert isinstance(result, SimulationResult)
        assert result.target.hourly_cost == 82.5
        assert result.target.globals.version == "2026.1"
        assert result.proposal.margin_percent == 25.0
        assert result.proposal.status is ProposalStatus.COMPLIANT

    def test_simulate_with_parameter_override(self, service, policy):
        params = service.global_parameters.with_overrides(indirect_costs_annual=8000)
        result = service.simulate(policy, CostInputs.employee(80000), 110, parameters=params)
        assert result.target.hourly_cost == 87.5
        # configured set is untouched
        assert service.global_parameters.indirect_costs_annual == 0.0

    def test_vacation_uses_configured_workday(self, service):
        policy = ClientMarginPolicy(
            target_margin_percent=25, min_margin_percent=15, forced_vacation_days=5
        )
        target = service.resolve(policy, CostInputs.employee(80000))
        assert target.effective_billable_hours == 1560

    def test_invalid_input_propagates(self, service, policy):
        with pytest.raises(InvalidInputError):
            service.simulate(policy, CostInputs.employee(80000), 0)

    def test_result_to_dict(self, service, policy):
        data = service.simulate(policy, CostInputs.employee(80000), 110).to_dict()
        assert data['target']['hourly_cost'] == 82.5
        assert data['proposal']['status'] == "compliant"


class TestSimulationAccess:
    """Business-unit checks at the service boundary."""

    def test_allowed_business_unit(self, service, policy):
        access = AuthorizationContext.from_roles(["BU-1"])
        result = service.simulate(
            policy, CostInputs.employee(80000), 110,
            access=access, business_unit_code="BU-1"
        )
        assert result.proposal.status is ProposalStatus.COMPLIANT

    def test_refused_business_unit(self, service, policy):
        access = AuthorizationContext.from_roles(["BU-1"])
        with pytest.raises(AccessDeniedError) as exc_info:
            service.simulate(
                policy, CostInputs.employee(80000), 110,
                access=access, business_unit_code="BU-2"
            )
        assert exc_info.value.code == "ACCESS_DENIED"
        assert exc_info.value.business_unit_code == "BU-2"

    def test_cfo_unrestricted(self, service, policy):
        access = AuthorizationContext.from_roles(["CFO"])
        result = service.simulate(
            policy, CostInputs.employee(80000), 110,
            access=access, business_unit_code="BU-7"
        )
        assert result.target.hourly_cost == 82.5

    def test_no_context_means_no_check(self, service, policy):
        result = service.simulate(policy, CostInputs.employee(80000), 110, business_unit_code="BU-2")
        assert result.proposal.rate == 110
