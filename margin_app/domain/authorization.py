"""
Authorization Context - Typed access decision resolved once at the boundary.

Admin and CFO users are unrestricted; everyone else is limited to the
business units listed in their roles.
"""
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable

DEFAULT_ADMIN_ROLE = "admin"
DEFAULT_CFO_ROLE = "cfo"
DEFAULT_BUSINESS_UNIT_PREFIX = "BU-"


@dataclass(frozen=True)
class AuthorizationContext:
    """
    What the current actor may see or simulate.

    Attributes:
        is_admin: Actor holds the Admin role
        is_cfo: Actor holds the CFO role
        business_unit_codes: Business units assigned to the actor (upper-case)
    """

    is_admin: bool = False
    is_cfo: bool = False
    business_unit_codes: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def is_unrestricted(self) -> bool:
        return self.is_admin or self.is_cfo

    @property
    def can_manage_settings(self) -> bool:
        """Only Admin and CFO may edit global parameters and client policies."""
        return self.is_unrestricted

    def may_access(self, business_unit_code: str) -> bool:
        """Whether the actor may view or submit a simulation for this business unit."""
        if self.is_unrestricted:
            return True
        return (business_unit_code or "").strip().upper() in self.business_unit_codes

    @classmethod
    def from_roles(
        cls,
        roles: Iterable[str],
        admin_role: str = DEFAULT_ADMIN_ROLE,
        cfo_role: str = DEFAULT_CFO_ROLE,
        business_unit_prefix: str = DEFAULT_BUSINESS_UNIT_PREFIX,
    ) -> 'AuthorizationContext':
        """
        Build the context from the role names carried by the identity token.

        Role matching is case-insensitive: 'CFO', 'cfo' and 'Cfo' are the same role.
        """
        normalized = [r.strip() for r in roles if r and r.strip()]
        lowered = {r.lower() for r in normalized}
        prefix = business_unit_prefix.upper()

        return cls(
            is_admin=admin_role.lower() in lowered,
            is_cfo=cfo_role.lower() in lowered,
            business_unit_codes=frozenset(
                r.upper() for r in normalized if r.upper().startswith(prefix)
            ),
        )

    @classmethod
    def from_config(cls, roles: Iterable[str], config) -> 'AuthorizationContext':
        """Build the context using the role names from a MarginConfig."""
        return cls.from_roles(
            roles,
            admin_role=config.admin_role,
            cfo_role=config.cfo_role,
            business_unit_prefix=config.business_unit_prefix,
        )
