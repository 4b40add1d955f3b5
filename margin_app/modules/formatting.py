"""
Formatting helpers for simulation results.

The engine returns raw floats; these helpers round half-up with Decimal
and render currency and percentage strings for display.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

from margin_app.config import MarginConfig, get_config

Number = Union[int, float, Decimal]


def round_half_up(value: Number, places: int = 2) -> float:
    """
    Round to `places` decimals, halves away from zero.

    92.8125 -> 92.81, 0.125 -> 0.13, -2.5 (places=0) -> -3.0
    """
    quantum = Decimal(1).scaleb(-places)
    d = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    return float(d)


def format_currency(value: Number, currency: Optional[dict] = None) -> str:
    """
    Format an amount as a currency display string (e.g. '$1,234.56', '-$5.00').

    The decimal mark defaults to "," when the thousands separator is ".",
    so {"thousands_separator": "."} renders 1234.56 as 1.234,56.
    """
    currency = currency or get_config().currency_config
    symbol = currency.get("symbol", "$")
    places = int(currency.get("decimal_places", 2))
    separator = currency.get("thousands_separator", ",")
    decimal_mark = currency.get("decimal_separator", "," if separator == "." else ".")

    rounded = round_half_up(value, places)
    body = f"{abs(rounded):,.{places}f}".translate(
        str.maketrans({",": separator, ".": decimal_mark})
    )
    if rounded < 0:
        return f"-{symbol}{body}"
    return f"{symbol}{body}"


def format_percent(value: Number, places: Optional[int] = None) -> str:
    """Format a percentage already expressed on a 0-100 scale: 25 -> '25.00 %'."""
    if places is None:
        places = get_config().percent_decimal_places
    rounded = round_half_up(value, places) + 0.0  # drop negative zero
    return f"{rounded:.{places}f} %"


def format_signed_percent(value: Number, places: Optional[int] = None) -> str:
    """Format a signed delta in percentage points with an explicit '+' for gains."""
    text = format_percent(value, places)
    return text if text.startswith("-") else f"+{text}"


def summarize_simulation(result, config: Optional[MarginConfig] = None) -> dict:
    """
    Flatten a SimulationResult into raw values plus display strings.

    Used by the CLI and by presentation layers that want ready-made labels.
    Display settings come from `config` (default: the loaded configuration).
    """
    config = config or get_config()
    currency = config.currency_config
    places = config.percent_decimal_places
    target, proposal = result.target, result.proposal
    return {
        'target': {
            **target.to_dict(),
            'hourly_cost_formatted': format_currency(target.hourly_cost, currency),
            'target_rate_before_discount_formatted': format_currency(target.target_rate_before_discount, currency),
            'target_rate_after_discount_formatted': format_currency(target.target_rate_after_discount, currency),
            'indirect_costs_formatted': format_currency(target.globals.indirect_costs_annual, currency),
        },
        'proposal': {
            **proposal.to_dict(),
            'rate_formatted': format_currency(proposal.rate, currency),
            'margin_percent_formatted': format_percent(proposal.margin_percent, places),
            'margin_per_hour_formatted': format_currency(proposal.margin_per_hour, currency),
            'diff_vs_target_formatted': format_signed_percent(proposal.diff_vs_target, places),
            'premium_vs_target_per_hour_formatted': format_currency(proposal.premium_vs_target_per_hour, currency),
        },
    }
