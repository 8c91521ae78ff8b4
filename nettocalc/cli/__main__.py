"""netto-calc CLI - Command-line interface for German net salary calculation."""

import datetime
import json
from decimal import Decimal

import click
from rich.console import Console

from nettocalc import __version__
from nettocalc.sdk import (
    InvalidProfileError,
    InvariantViolation,
    TaxRulesError,
    calculate_net_salary,
    calculate_wage_tax,
    configure_logging,
    get_setting,
    list_supported_years,
    load_profile,
    load_tax_rules,
)
from nettocalc.sdk.taxes import PayPeriod, WageTaxInput

from .profile_commands import profile as profile_group
from .renderers.result_renderer import render_tax_result, render_tax_rules, render_wage_tax_output


PERIODS = {
    "year": PayPeriod.YEAR,
    "month": PayPeriod.MONTH,
    "week": PayPeriod.WEEK,
    "day": PayPeriod.DAY,
}


def default_year() -> int:
    """Current year if supported, otherwise the latest supported year."""
    supported = list_supported_years()
    if not supported:
        raise click.ClickException("No tax rules installed.")
    this_year = datetime.date.today().year
    return this_year if this_year in supported else supported[-1]


def _wants_json(json_flag: bool) -> bool:
    return json_flag or get_setting("default_output_format") == "json"


@click.group()
@click.version_option(version=__version__, prog_name="netto-calc")
def cli():
    """netto-calc - German wage tax and net salary calculator.

    Computes Lohnsteuer, solidarity surcharge, church tax and employee
    social-insurance contributions from a gross yearly salary.

    Saved profile defaults are loaded from (in order):

    \b
    1. NETTO_CALC_CONFIG_PATH environment variable
    2. settings.json 'profile' key (if set)
    3. ~/.config/netto-calc/profile.yaml (XDG default)

    Set LOG_LEVEL=DEBUG to trace the calculation stages.
    """
    configure_logging()


cli.add_command(profile_group)


@cli.command("calc")
@click.option("--salary", type=Decimal, help="Gross yearly salary in euros.")
@click.option("--year", type=int, help="Tax year (default: current or latest supported).")
@click.option("--tax-class", type=click.IntRange(1, 6), help="Tax class 1-6.")
@click.option("--church-tax/--no-church-tax", default=None, help="Church tax liable.")
@click.option("--children", type=click.IntRange(min=0), help="Number of children.")
@click.option("--state", type=str, help="Federal state code, e.g. NW, BY, SN.")
@click.option("--private/--statutory", "private", default=None, help="Private or statutory health insurance.")
@click.option("--premium", type=Decimal, help="Monthly private health/care premium in euros.")
@click.option("--add-on", type=Decimal, help="Health insurance add-on rate in percent.")
@click.option("--birth-year", type=int, help="Birth year (age relief).")
@click.option("--one-off", type=Decimal, help="Yearly one-off payment (bonus) in euros.")
@click.option("--json", "as_json", is_flag=True, help="Output JSON.")
def calc(salary, year, tax_class, church_tax, children, state, private, premium, add_on,
         birth_year, one_off, as_json):
    """Calculate the monthly net salary.

    Options override the saved profile (see 'netto-calc profile').

    \b
    Examples:
      netto-calc calc --salary 42000 --year 2025 --tax-class 1
      netto-calc calc --salary 60000 --tax-class 3 --children 2 --json
      netto-calc calc --salary 55000 --state BY --church-tax --one-off 5000
    """
    fields = dict(load_profile())

    overrides = {
        "yearly_salary": salary,
        "year": year,
        "tax_class": tax_class,
        "church_tax": church_tax,
        "state": state.upper() if state else None,
        "is_private_health_insurance": private,
        "private_health_premium": premium,
        "health_insurance_add_on_rate": add_on,
        "birth_year": birth_year,
        "one_off_payment": one_off,
    }
    fields.update({k: v for k, v in overrides.items() if v is not None})
    if children is not None:
        fields["has_children"] = children > 0
        fields["child_count"] = children
    fields.setdefault("year", default_year())
    fields.setdefault("tax_class", 1)

    try:
        result = calculate_net_salary(fields)
    except (InvalidProfileError, TaxRulesError) as e:
        raise click.ClickException(str(e))

    data = result.to_dict()
    if _wants_json(as_json):
        click.echo(json.dumps(data, indent=2))
        return

    render_tax_result(Console(), data, title=f"Net salary {fields['year']} (monthly)")


@cli.command("wage-tax")
@click.option("--gross", type=Decimal, required=True, help="Gross wage of the pay period in cents.")
@click.option("--period", type=click.Choice(list(PERIODS)), default="month", show_default=True)
@click.option("--tax-class", type=click.IntRange(1, 6), default=1, show_default=True)
@click.option("--children", type=Decimal, default=Decimal(0), help="Child allowance units (e.g. 1.5).")
@click.option("--church-tax", is_flag=True, help="Church tax liable.")
@click.option("--add-on", type=Decimal, help="Health add-on rate in percent (default: year average).")
@click.option("--year", type=int, help="Tax year (default: current or latest supported).")
@click.option("--json", "as_json", is_flag=True, help="Output JSON.")
def wage_tax(gross, period, tax_class, children, church_tax, add_on, year, as_json):
    """Run the raw wage-tax procedure for one pay period.

    All amounts are in cents, as in the official procedure. Useful for
    checking single values against the published calculator.

    \b
    Example:
      netto-calc wage-tax --gross 350000 --period month --tax-class 1
    """
    year = year or default_year()
    try:
        rules = load_tax_rules(year)
        inp = WageTaxInput(
            pay_period=PERIODS[period],
            gross=gross,
            tax_class=tax_class,
            child_allowances=children,
            church_tax=church_tax,
            care_childless=children == 0,
            health_add_on_rate=add_on if add_on is not None else rules.social_insurance.health_average_add_on,
        )
        out = calculate_wage_tax(inp, rules)
    except (InvalidProfileError, TaxRulesError, InvariantViolation, ValueError) as e:
        raise click.ClickException(str(e))

    if _wants_json(as_json):
        click.echo(out.model_dump_json(indent=2))
        return

    render_wage_tax_output(Console(), out.model_dump())


@cli.group("rules")
def rules_group():
    """Inspect the installed tax rules."""
    pass


@rules_group.command("list")
def rules_list():
    """List the supported tax years."""
    for year in list_supported_years():
        click.echo(year)


@rules_group.command("show")
@click.argument("year", type=int)
@click.option("--json", "as_json", is_flag=True, help="Output JSON.")
def rules_show(year, as_json):
    """Show the constants of one tax year."""
    try:
        rules = load_tax_rules(year)
    except (InvalidProfileError, TaxRulesError) as e:
        raise click.ClickException(str(e))

    if _wants_json(as_json):
        click.echo(rules.model_dump_json(indent=2))
        return

    render_tax_rules(Console(), rules.model_dump())


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
