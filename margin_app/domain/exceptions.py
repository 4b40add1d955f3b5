"""
Domain Exceptions for the Margin Simulation Engine.

Custom exceptions enforcing business rules:
- Numeric input ranges (salary, hours, percentages)
- Margin policy consistency (minimum <= target)
- Business-unit access at the simulation boundary
"""


class DomainError(Exception):
    """Base exception for all domain errors."""

    def __init__(self, message: str, code: str = "DOMAIN_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)


# =============================================================================
# Input Exceptions
# =============================================================================

class InvalidInputError(DomainError):
    """Raised when a numeric input is malformed or out of range."""

    def __init__(self, field: str, message: str):
        super().__init__(f"Invalid value for '{field}': {message}", code="INVALID_INPUT")
        self.field = field


# =============================================================================
# Access Exceptions
# =============================================================================

class AccessDeniedError(DomainError):
    """Raised when the caller may not simulate for a business unit."""

    def __init__(self, business_unit_code: str):
        message = (
            f"Simulation for business unit '{business_unit_code}' "
            f"is not allowed for the current user"
        )
        super().__init__(message, code="ACCESS_DENIED")
        self.business_unit_code = business_unit_code
