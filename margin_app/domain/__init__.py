"""
Domain Layer - Target rate and margin simulation engine.

This module contains:
- entities/: Immutable records (GlobalParameters, ClientMarginPolicy, CostInputs, Target, Proposal, StaffedResource)
- services/: Resolver, evaluator, staffing margin breakdown and the simulation boundary service
"""

from .entities import (
    GlobalParameters, ClientMarginPolicy, CostInputs, ResourceType,
    Target, Proposal, ProposalStatus, MarginStatus,
    StaffedResource, MarginShare,
)
from .authorization import AuthorizationContext
from .exceptions import DomainError, InvalidInputError, AccessDeniedError

__all__ = [
    'GlobalParameters', 'ClientMarginPolicy', 'CostInputs', 'ResourceType',
    'Target', 'Proposal', 'ProposalStatus', 'MarginStatus',
    'StaffedResource', 'MarginShare',
    'AuthorizationContext',
    'DomainError', 'InvalidInputError', 'AccessDeniedError',
]
