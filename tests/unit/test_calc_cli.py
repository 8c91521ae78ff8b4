"""Tests for the netto-calc CLI (calc, wage-tax, rules, profile).

Uses an isolated config directory via tmp_path and NETTO_CALC_CONFIG_PATH
so that no real profile or settings are read.
"""

import json
from decimal import Decimal

import pytest
import yaml
from click.testing import CliRunner

from nettocalc.cli.__main__ import cli


# === TEST CONSTANTS ===

TEST_YEAR = "2025"


# === FIXTURES ===


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    """Empty, isolated config directory."""
    monkeypatch.setenv("NETTO_CALC_CONFIG_PATH", str(tmp_path))
    return tmp_path


@pytest.fixture
def runner():
    return CliRunner()


class TestCalcCommand:

    def test_json_output(self, runner, config_dir):
        result = runner.invoke(cli, [
            "calc", "--salary", "42000", "--year", TEST_YEAR, "--tax-class", "1", "--json",
        ])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["netto"] == 2330.59
        assert data["taxes"]["lohnsteuer"] == 415.16
        assert data["socialSecurity"]["rv"] == 325.5

    def test_table_output(self, runner, config_dir):
        result = runner.invoke(cli, ["calc", "--salary", "42000", "--year", TEST_YEAR])

        assert result.exit_code == 0, result.output
        assert "Net" in result.output
        assert "2,330.59" in result.output

    def test_children_and_class(self, runner, config_dir):
        result = runner.invoke(cli, [
            "calc", "--salary", "60000", "--year", "2026", "--tax-class", "3",
            "--children", "2", "--json",
        ])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["netto"] == 3542.17

    def test_profile_defaults_used(self, runner, config_dir):
        (config_dir / "profile.yaml").write_text(yaml.dump({"yearly_salary": 42000, "year": 2025}))

        result = runner.invoke(cli, ["calc", "--json"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["netto"] == 2330.59

    def test_options_override_profile(self, runner, config_dir):
        (config_dir / "profile.yaml").write_text(yaml.dump({"yearly_salary": 42000, "year": 2025}))

        result = runner.invoke(cli, ["calc", "--salary", "96000", "--church-tax", "--json"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["netto"] == 4512.9

    def test_one_off_shown(self, runner, config_dir):
        result = runner.invoke(cli, [
            "calc", "--salary", "42000", "--year", TEST_YEAR, "--one-off", "5000", "--json",
        ])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["oneOff"]["lohnsteuer"] == 1198.0

    def test_default_output_format_setting(self, runner, config_dir):
        (config_dir / "settings.json").write_text(json.dumps({"default_output_format": "json"}))

        result = runner.invoke(cli, ["calc", "--salary", "42000", "--year", TEST_YEAR])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["netto"] == 2330.59

    def test_unsupported_year(self, runner, config_dir):
        result = runner.invoke(cli, ["calc", "--salary", "42000", "--year", "2024"])

        assert result.exit_code == 1
        assert "not supported" in result.output

    def test_missing_salary(self, runner, config_dir):
        result = runner.invoke(cli, ["calc", "--year", TEST_YEAR])

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_invalid_tax_class_rejected_by_click(self, runner, config_dir):
        result = runner.invoke(cli, ["calc", "--salary", "42000", "--tax-class", "7"])
        assert result.exit_code == 2


class TestWageTaxCommand:

    def test_monthly_json(self, runner, config_dir):
        result = runner.invoke(cli, ["wage-tax", "--gross", "350000", "--year", TEST_YEAR, "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert Decimal(data["wage_tax"]) == 41516
        assert Decimal(data["solidarity_surcharge"]) == 0

    def test_yearly_period(self, runner, config_dir):
        result = runner.invoke(cli, [
            "wage-tax", "--gross", "4200000", "--period", "year", "--year", TEST_YEAR, "--json",
        ])

        assert result.exit_code == 0, result.output
        assert Decimal(json.loads(result.output)["wage_tax"]) == 498200

    def test_table_output(self, runner, config_dir):
        result = runner.invoke(cli, ["wage-tax", "--gross", "350000", "--year", TEST_YEAR])

        assert result.exit_code == 0, result.output
        assert "41516" in result.output

    def test_negative_gross_rejected(self, runner, config_dir):
        result = runner.invoke(cli, ["wage-tax", "--gross=-1", "--year", TEST_YEAR])
        assert result.exit_code == 1


class TestRulesCommands:

    def test_list(self, runner, config_dir):
        result = runner.invoke(cli, ["rules", "list"])

        assert result.exit_code == 0
        assert result.output.split() == ["2025", "2026"]

    def test_show_json(self, runner, config_dir):
        result = runner.invoke(cli, ["rules", "show", "2026", "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["year"] == 2026
        assert data["tariff"]["basic_allowance"] == 12348

    def test_show_table(self, runner, config_dir):
        result = runner.invoke(cli, ["rules", "show", "2025"])

        assert result.exit_code == 0, result.output
        assert "basic_allowance" in result.output

    def test_show_unsupported(self, runner, config_dir):
        result = runner.invoke(cli, ["rules", "show", "2024"])
        assert result.exit_code == 1


class TestProfileCommands:

    def test_set_and_show(self, runner, config_dir):
        result = runner.invoke(cli, ["profile", "set", "yearly_salary", "52000"])
        assert result.exit_code == 0, result.output

        runner.invoke(cli, ["profile", "set", "year", "2025"])
        saved = yaml.safe_load((config_dir / "profile.yaml").read_text())
        assert saved == {"yearly_salary": 52000, "year": 2025}

        result = runner.invoke(cli, ["profile", "show"])
        assert result.exit_code == 0
        assert "Status: valid" in result.output

    def test_decimal_values_kept_exact(self, runner, config_dir):
        runner.invoke(cli, ["profile", "set", "health_insurance_add_on_rate", "1.7"])

        saved = yaml.safe_load((config_dir / "profile.yaml").read_text())
        assert saved["health_insurance_add_on_rate"] == "1.7"

    def test_unknown_key_rejected(self, runner, config_dir):
        result = runner.invoke(cli, ["profile", "set", "salary", "52000"])

        assert result.exit_code == 1
        assert "Unknown key" in result.output
        assert not (config_dir / "profile.yaml").exists()

    def test_unset(self, runner, config_dir):
        (config_dir / "profile.yaml").write_text(yaml.dump({"yearly_salary": 42000, "state": "BY"}))

        result = runner.invoke(cli, ["profile", "unset", "state"])

        assert result.exit_code == 0
        assert yaml.safe_load((config_dir / "profile.yaml").read_text()) == {"yearly_salary": 42000}

    def test_show_missing_profile(self, runner, config_dir):
        result = runner.invoke(cli, ["profile", "show"])

        assert result.exit_code == 0
        assert "does not exist" in result.output

    def test_show_invalid_profile(self, runner, config_dir):
        (config_dir / "profile.yaml").write_text(yaml.dump({"year": 2025, "tax_class": 9}))

        result = runner.invoke(cli, ["profile", "show"])

        assert result.exit_code == 0
        assert "invalid" in result.output

    def test_path(self, runner, config_dir):
        result = runner.invoke(cli, ["profile", "path"])
        assert result.output.strip() == str(config_dir / "profile.yaml")
