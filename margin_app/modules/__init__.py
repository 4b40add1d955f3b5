"""
Supporting modules: display formatting and client margin import.
"""

from .formatting import (
    round_half_up,
    format_currency,
    format_percent,
    format_signed_percent,
    summarize_simulation,
)
from .policy_import import (
    import_client_margins,
    PolicyImportResult,
    ImportRowError,
)

__all__ = [
    'round_half_up',
    'format_currency',
    'format_percent',
    'format_signed_percent',
    'summarize_simulation',
    'import_client_margins',
    'PolicyImportResult',
    'ImportRowError',
]
