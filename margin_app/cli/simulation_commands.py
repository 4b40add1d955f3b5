"""
Simulation CLI Commands - Run margin simulations from the command line.

Provides command-line interface for:
- A single target/proposal simulation
- Displaying the configured global parameters
"""
import json
import logging
from functools import partial
from typing import Optional

import click

from margin_app import __version__
from margin_app.config import ConfigurationError, get_config
from margin_app.domain.entities import ClientMarginPolicy, CostInputs
from margin_app.domain.exceptions import DomainError
from margin_app.domain.services import MarginSimulationService
from margin_app.modules.formatting import (
    format_currency,
    format_percent,
    format_signed_percent,
    summarize_simulation,
)

logger = logging.getLogger(__name__)

STATUS_COLORS = {
    'excellent': 'green',
    'compliant': 'yellow',
    'below objective': 'red',
}


@click.group()
@click.version_option(version=__version__)
@click.option('--config', 'config_path', default=None, type=click.Path(exists=True),
              help='Path to margin configuration YAML file')
@click.option('--verbose', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx, config_path: Optional[str], verbose: bool):
    """Target rate and margin simulation CLI."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path


def _load_service(ctx) -> MarginSimulationService:
    try:
        return MarginSimulationService(get_config(ctx.obj.get('config_path')))
    except ConfigurationError as e:
        raise click.ClickException(str(e))


def _formatters(config):
    """Currency, percent and signed-percent formatters bound to the loaded display settings."""
    places = config.percent_decimal_places
    return (
        partial(format_currency, currency=config.currency_config),
        partial(format_percent, places=places),
        partial(format_signed_percent, places=places),
    )


@cli.command()
@click.option('--salary', type=float, default=None, help='Annual gross salary (employee)')
@click.option('--hourly-rate', type=float, default=None, help='Contracted hourly rate (freelancer)')
@click.option('--rate', type=float, required=True, help='Proposed billing rate per hour')
@click.option('--target-margin', type=float, default=None, help='Target margin %')
@click.option('--min-margin', type=float, default=None, help='Minimum margin %')
@click.option('--discount', type=float, default=None, help='Client discount %')
@click.option('--vacation-days', type=float, default=None, help='Forced vacation days per year')
@click.option('--employer-rate', type=float, default=None, help='Override employer charges %')
@click.option('--indirect-costs', type=float, default=None, help='Override annual indirect costs')
@click.option('--billable-hours', type=int, default=None, help='Override billable hours per year')
@click.option('--hours', type=float, default=None, help='Planned hours on the engagement')
@click.option('--json', 'as_json', is_flag=True, help='Print the raw result as JSON')
@click.pass_context
def simulate(ctx, salary, hourly_rate, rate, target_margin, min_margin, discount,
             vacation_days, employer_rate, indirect_costs, billable_hours, hours, as_json):
    """Resolve the target rate and score a proposed rate.

    Example:
        margin-sim simulate --salary 80000 --rate 110 --target-margin 25 --min-margin 15
    """
    if (salary is None) == (hourly_rate is None):
        raise click.UsageError("Give exactly one of --salary or --hourly-rate")

    service = _load_service(ctx)

    defaults = service.default_policy()
    policy = ClientMarginPolicy(
        target_margin_percent=target_margin if target_margin is not None else defaults.target_margin_percent,
        min_margin_percent=min_margin if min_margin is not None else defaults.min_margin_percent,
        discount_percent=discount if discount is not None else defaults.discount_percent,
        forced_vacation_days=vacation_days if vacation_days is not None else defaults.forced_vacation_days,
    )
    cost = CostInputs.employee(salary) if salary is not None else CostInputs.freelancer(hourly_rate)
    parameters = service.global_parameters.with_overrides(
        employer_rate=employer_rate,
        indirect_costs_annual=indirect_costs,
        billable_hours_per_year=billable_hours,
    )

    try:
        result = service.simulate(policy, cost, rate, planned_hours=hours, parameters=parameters)
    except DomainError as e:
        click.echo(click.style(f"✗ {e.message}", fg='red'), err=True)
        ctx.exit(1)

    if as_json:
        click.echo(json.dumps(summarize_simulation(result, service.config), indent=2))
        return

    money, percent, signed = _formatters(service.config)
    target, proposal = result.target, result.proposal

    click.echo(click.style('Target', fg='cyan', bold=True))
    click.echo(f"  Hourly cost:                {money(target.hourly_cost)}")
    click.echo(f"  Billable hours:             {target.effective_billable_hours:,.1f} h")
    click.echo(f"  Target rate (gross):        {money(target.target_rate_before_discount)}")
    click.echo(f"  Target rate (after disc.):  {money(target.target_rate_after_discount)}")
    click.echo(f"  Target margin:              {percent(target.target_margin_percent)}")
    click.echo(f"  Minimum margin:             {percent(target.min_margin_percent)}")
    objective = (
        click.style("✓ within objective", fg='green') if target.is_within_objective
        else click.style("⚠ below objective", fg='yellow')
    )
    click.echo(f"  Discounted rate:            {objective}")

    click.echo(click.style('\nProposal', fg='cyan', bold=True))
    click.echo(f"  Proposed rate:              {money(proposal.rate)}")
    click.echo(f"  Margin:                     {percent(proposal.margin_percent)} "
               f"({money(proposal.margin_per_hour)} / h)")
    click.echo(f"  Gap vs target margin:       {signed(proposal.diff_vs_target)}")
    click.echo(f"  Vs gross target rate:       {signed(proposal.discount_delta_percent)}")
    click.echo(f"  Premium vs target rate:     {money(proposal.premium_vs_target_per_hour)} / h")
    if proposal.total_margin is not None:
        click.echo(f"  Total margin ({proposal.planned_hours:,.0f} h):     "
                   f"{money(proposal.total_margin)}")
    status = proposal.status.value
    click.echo(f"  Status:                     "
               f"{click.style(status, fg=STATUS_COLORS[status], bold=True)} "
               f"[{proposal.margin_status.value}]")


@cli.command(name='globals')
@click.pass_context
def show_globals(ctx):
    """Display the configured global cost parameters."""
    service = _load_service(ctx)
    params = service.global_parameters
    config = service.config
    money, percent, _ = _formatters(config)

    click.echo(click.style(f"Global parameters (version {params.version})", fg='cyan', bold=True))
    click.echo(f"  Employer charges:           {percent(params.employer_rate)}")
    click.echo(f"  Indirect costs / year:      {money(params.indirect_costs_annual)}")
    click.echo(f"  Billable hours / year:      {params.billable_hours_per_year} h")
    click.echo(f"  Workday length:             {config.standard_workday_hours} h")


def main():
    cli(obj={})


if __name__ == '__main__':
    main()
