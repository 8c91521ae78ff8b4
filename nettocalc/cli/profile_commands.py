"""Profile CLI commands for netto-calc.

Manages saved salary profile defaults (profile.yaml). Keys are SalaryProfile
field names; 'netto-calc calc' options override them per run.
"""

import click
import yaml

from nettocalc.sdk import (
    InvalidProfileError,
    SalaryProfile,
    get_profile_path,
    load_profile,
    set_profile_value,
    unset_profile_value,
    validate_profile,
)


PROFILE_KEYS = sorted(SalaryProfile.model_fields)


def _parse_value(value: str):
    """Parse a CLI value as YAML scalar; decimals stay strings to keep them exact."""
    try:
        parsed = yaml.safe_load(value)
    except yaml.YAMLError:
        return value
    if isinstance(parsed, float):
        return value
    return parsed


@click.group()
def profile():
    """Manage saved salary profile defaults (profile.yaml).

    \b
    Keys:
      yearly_salary, year, tax_class, church_tax, has_children,
      child_count, state, is_private_health_insurance,
      health_insurance_add_on_rate, birth_year, one_off_payment,
      private_health_premium
    """
    pass


@profile.command("show")
def profile_show():
    """Show the saved profile and whether it is complete."""
    profile_path = get_profile_path(require_exists=False)
    click.echo(f"Profile: {profile_path}")

    if not profile_path.exists():
        click.echo()
        click.echo("Profile does not exist yet. Create with:")
        click.echo("  netto-calc profile set yearly_salary 50000")
        return

    data = load_profile()
    click.echo()
    click.echo(yaml.dump(data, default_flow_style=False, sort_keys=False).rstrip() or "(empty)")

    unknown = sorted(set(data) - set(PROFILE_KEYS))
    if unknown:
        click.echo()
        click.echo(f"Unknown keys (ignored by calc): {', '.join(unknown)}")

    click.echo()
    complete = {k: v for k, v in data.items() if k in PROFILE_KEYS}
    complete.setdefault("tax_class", 1)
    if "year" not in complete:
        click.echo("Status: incomplete until a year is given (calc uses the current year)")
        return
    try:
        validate_profile(complete)
        click.echo("Status: valid")
    except InvalidProfileError as e:
        click.echo(f"Status: incomplete or invalid - {e}")


@profile.command("set")
@click.argument("key")
@click.argument("value")
def profile_set(key, value):
    """Set a profile value.

    \b
    Examples:
        netto-calc profile set yearly_salary 52000
        netto-calc profile set state BY
        netto-calc profile set church_tax true
    """
    if key not in PROFILE_KEYS:
        raise click.ClickException(f"Unknown key '{key}'. Valid keys: {', '.join(PROFILE_KEYS)}")

    parsed_value = _parse_value(value)
    profile_file = set_profile_value(key, parsed_value)
    click.echo(f"Set {key} = {parsed_value}")
    click.echo(f"Saved to: {profile_file}")


@profile.command("unset")
@click.argument("key")
def profile_unset(key):
    """Remove a profile value."""
    profile_file = unset_profile_value(key)
    click.echo(f"Removed {key}")
    click.echo(f"Saved to: {profile_file}")


@profile.command("path")
def profile_path():
    """Print the profile file path."""
    click.echo(get_profile_path(require_exists=False))
