"""
Domain Entities - Immutable simulation inputs and results.
"""

from .parameters import GlobalParameters, ClientMarginPolicy, CostInputs, ResourceType
from .simulation import Target, Proposal, ProposalStatus, MarginStatus
from .staffing import StaffedResource, MarginShare

__all__ = [
    'GlobalParameters', 'ClientMarginPolicy', 'CostInputs', 'ResourceType',
    'Target', 'Proposal', 'ProposalStatus', 'MarginStatus',
    'StaffedResource', 'MarginShare',
]
