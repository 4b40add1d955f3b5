"""
Tests for the simulation CLI.
"""
import json

import pytest
from click.testing import CliRunner

from margin_app.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


class TestSimulateCommand:
    """Tests for `simulate`."""

    def test_simulate_employee(self, runner):
        result = runner.invoke(cli, [
            'simulate', '--salary', '80000', '--rate', '110',
            '--target-margin', '25', '--min-margin', '15',
        ])

        assert result.exit_code == 0, result.output
        assert "$82.50" in result.output
        assert "$103.13" in result.output
        assert "compliant" in result.output
        assert "[OK]" in result.output

    def test_simulate_with_discount_json(self, runner):
        result = runner.invoke(cli, [
            'simulate', '--salary', '80000', '--rate', '110',
            '--target-margin', '25', '--min-margin', '15', '--discount', '10',
            '--json',
        ])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data['target']['target_rate_after_discount'] == 92.8125
        assert data['target']['is_within_objective'] is False
        assert data['proposal']['status'] == "compliant"

    def test_simulate_freelancer_with_hours(self, runner):
        result = runner.invoke(cli, [
            'simulate', '--hourly-rate', '70', '--rate', '100',
            '--target-margin', '25', '--min-margin', '15', '--hours', '100',
        ])

        assert result.exit_code == 0, result.output
        assert "excellent" in result.output
        assert "$3,000.00" in result.output

    def test_parameter_overrides(self, runner):
        result = runner.invoke(cli, [
            'simulate', '--salary', '80000', '--rate', '110',
            '--indirect-costs', '8000', '--json',
        ])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data['target']['hourly_cost'] == 87.5

    def test_invalid_policy_exits_with_error(self, runner):
        result = runner.invoke(cli, [
            'simulate', '--salary', '80000', '--rate', '110',
            '--target-margin', '10', '--min-margin', '20',
        ])

        assert result.exit_code == 1
        assert "cannot exceed" in result.output

    def test_salary_or_hourly_rate_required(self, runner):
        result = runner.invoke(cli, ['simulate', '--rate', '110'])
        assert result.exit_code == 2

        result = runner.invoke(cli, [
            'simulate', '--salary', '80000', '--hourly-rate', '70', '--rate', '110',
        ])
        assert result.exit_code == 2


class TestGlobalsCommand:
    """Tests for `globals`."""

    def test_show_globals(self, runner):
        result = runner.invoke(cli, ['globals'])

        assert result.exit_code == 0, result.output
        assert "2026.1" in result.output
        assert "65.00 %" in result.output
        assert "1600 h" in result.output

    def test_version(self, runner):
        result = runner.invoke(cli, ['--version'])
        assert result.exit_code == 0
        assert "1.0.0" in result.output


class TestCustomConfig:
    """Display settings of a --config file apply to every command."""

    @pytest.fixture
    def config_file(self, tmp_path):
        path = tmp_path / "margin_config.yaml"
        path.write_text(
            "global_parameters:\n"
            "  version: \"custom\"\n"
            "  employer_rate: 65\n"
            "  indirect_costs_annual: 12345.5\n"
            "  billable_hours_per_year: 1600\n"
            "ui:\n"
            "  currency:\n"
            "    symbol: \"EUR \"\n"
            "    decimal_places: 2\n"
            "    thousands_separator: \".\"\n"
            "  percent:\n"
            "    decimal_places: 1\n"
        )
        return str(path)

    def test_simulate_uses_configured_currency(self, runner, config_file):
        result = runner.invoke(cli, [
            '--config', config_file,
            'simulate', '--salary', '80000', '--rate', '110',
            '--target-margin', '25', '--min-margin', '15', '--indirect-costs', '0',
        ])

        assert result.exit_code == 0, result.output
        assert "EUR 82,50" in result.output
        assert "25.0 %" in result.output
        assert "$" not in result.output

    def test_simulate_json_uses_configured_currency(self, runner, config_file):
        result = runner.invoke(cli, [
            '--config', config_file,
            'simulate', '--salary', '80000', '--rate', '110',
            '--target-margin', '25', '--min-margin', '15', '--indirect-costs', '0', '--json',
        ])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data['proposal']['rate_formatted'] == "EUR 110,00"

    def test_globals_uses_configured_currency(self, runner, config_file):
        result = runner.invoke(cli, ['--config', config_file, 'globals'])

        assert result.exit_code == 0, result.output
        assert "custom" in result.output
        assert "EUR 12.345,50" in result.output
        assert "65.0 %" in result.output


class TestNonFiniteOptions:
    """Non-finite option values are reported like any other invalid input."""

    def test_nan_rate(self, runner):
        result = runner.invoke(cli, ['simulate', '--salary', '80000', '--rate', 'nan'])

        assert result.exit_code == 1
        assert "finite" in result.output
