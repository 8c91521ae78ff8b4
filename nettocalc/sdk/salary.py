"""Net salary calculation.

Maps a ``SalaryProfile`` onto the wage-tax procedure, adds the employee
social-insurance contributions and assembles the monthly ``TaxResult``.

The procedure runs with a monthly pay period on the yearly salary / 12
(truncated to whole cents), which reproduces the official monthly tables.
Church tax is the church-tax base times the state rate, truncated to cents.
Everything else stays unrounded until the result is built; each output
field is then rounded half-up to cents.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Mapping, Union

from pydantic import ValidationError

from .errors import InvalidProfileError
from .schemas import FederalState, SalaryProfile, SocialSecurityBreakdown, TaxBreakdown, TaxResult
from .taxes.fixed import ZERO, Rounding, set_scale
from .taxes.rules import list_supported_years, load_tax_rules
from .taxes.schemas import PayPeriod, PrivateInsurance, TaxRules, WageTaxInput, WageTaxOutput
from .taxes.social import Contributions, calc_contributions
from .taxes.withholding import calculate_wage_tax

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")

# Age relief starts with the year after the 64th birthday
AGE_RELIEF_OFFSET = 65


def _round_cents(amount: Decimal) -> Decimal:
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def validate_profile(profile: Union[SalaryProfile, Mapping[str, Any]]) -> SalaryProfile:
    """Validate a profile, raising ``InvalidProfileError`` naming the field.

    Accepts a ``SalaryProfile`` or a mapping with snake_case or camelCase
    keys. The year is checked separately by ``load_tax_rules``.
    """
    if not isinstance(profile, SalaryProfile):
        try:
            profile = SalaryProfile.model_validate(dict(profile))
        except ValidationError as e:
            errors = []
            for err in e.errors():
                loc = ".".join(str(x) for x in err["loc"])
                errors.append(f"{loc}: {err['msg']}")
            raise InvalidProfileError("; ".join(errors)) from e

    if profile.child_count > 0 and not profile.has_children:
        raise InvalidProfileError("child_count: must be 0 when has_children is false")
    if profile.private_health_premium is not None and not profile.is_private_health_insurance:
        raise InvalidProfileError(
            "private_health_premium: only valid with is_private_health_insurance"
        )
    if profile.birth_year is not None and profile.birth_year > profile.year:
        raise InvalidProfileError(f"birth_year: {profile.birth_year} is after tax year {profile.year}")
    return profile


def _care_discount_units(profile: SalaryProfile, rules: TaxRules) -> int:
    """Discount units for the second and each further child."""
    if not profile.has_children:
        return 0
    return min(rules.social_insurance.care_max_discount_units, max(profile.child_count - 1, 0))


def _add_on_rate(profile: SalaryProfile, rules: TaxRules) -> Decimal:
    if profile.health_insurance_add_on_rate is None:
        return rules.social_insurance.health_average_add_on
    return profile.health_insurance_add_on_rate


def build_wage_tax_input(profile: SalaryProfile, rules: TaxRules) -> WageTaxInput:
    """Map a profile onto the raw input of the wage-tax procedure.

    Example:
        build_wage_tax_input(SalaryProfile(yearly_salary=42000, year=2025, tax_class=1), rules)
        # -> WageTaxInput(pay_period=MONTH, gross=Decimal("350000"), care_childless=True, ...)
    """
    fields: dict[str, Any] = {
        "pay_period": PayPeriod.MONTH,
        "gross": set_scale(profile.yearly_salary * 100 / 12, 0, Rounding.DOWN),
        "tax_class": profile.tax_class,
        "church_tax": profile.church_tax,
        "care_childless": not profile.has_children,
        "care_discount_units": _care_discount_units(profile, rules),
        "care_saxony": profile.state.saxony_care_split,
        "health_add_on_rate": _add_on_rate(profile, rules),
    }

    if profile.has_children:
        fields["child_allowances"] = Decimal(profile.child_count)

    if profile.is_private_health_insurance:
        fields["private_insurance"] = PrivateInsurance.PRIVATE
        fields["private_premium"] = (profile.private_health_premium or ZERO) * 100

    if profile.birth_year is not None and profile.birth_year + AGE_RELIEF_OFFSET <= profile.year:
        fields["age_relief"] = True
        fields["age_relief_year"] = profile.birth_year + AGE_RELIEF_OFFSET

    if profile.one_off_payment:
        fields["annual_gross"] = set_scale(profile.yearly_salary * 100, 0, Rounding.DOWN)
        fields["one_off"] = set_scale(profile.one_off_payment * 100, 0, Rounding.DOWN)

    return WageTaxInput(**fields)


def church_tax(base_cents: Decimal, state: FederalState) -> Decimal:
    """Church tax in euros from a church-tax base in cents, truncated to cents."""
    return set_scale(base_cents * state.church_tax_rate / 100, 2, Rounding.DOWN)


def _one_off_breakdown(out: WageTaxOutput, state: FederalState) -> TaxBreakdown:
    return TaxBreakdown(
        lohnsteuer=_round_cents(out.one_off_wage_tax / 100),
        soli=_round_cents(out.one_off_solidarity_surcharge / 100),
        kirchensteuer=_round_cents(church_tax(out.one_off_church_tax_base, state)),
    )


def _contributions(profile: SalaryProfile, rules: TaxRules, monthly_gross: Decimal) -> Contributions:
    return calc_contributions(
        monthly_gross,
        rules.social_insurance,
        add_on_rate=_add_on_rate(profile, rules),
        private=profile.is_private_health_insurance,
        saxony=profile.state.saxony_care_split,
        childless=not profile.has_children,
        discount_units=_care_discount_units(profile, rules),
    )


def calculate_net_salary(profile: Union[SalaryProfile, Mapping[str, Any]]) -> TaxResult:
    """Compute the monthly net salary for a profile.

    Args:
        profile: SalaryProfile or a mapping that validates into one

    Returns:
        TaxResult with monthly euro amounts rounded to cents

    Raises:
        InvalidProfileError: If the profile fails validation
        UnsupportedYearError: If there are no rules for ``profile.year``

    Example:
        result = calculate_net_salary({"yearlySalary": 42000, "year": 2025, "taxClass": 1})
        result.netto  # -> Decimal("2330.59")
    """
    profile = validate_profile(profile)
    rules = load_tax_rules(profile.year)

    inp = build_wage_tax_input(profile, rules)
    out = calculate_wage_tax(inp, rules)

    monthly_gross = profile.yearly_salary / 12
    contributions = _contributions(profile, rules, monthly_gross)

    lohnsteuer = out.wage_tax / 100
    soli = out.solidarity_surcharge / 100
    kirchensteuer = church_tax(out.church_tax_base, profile.state)
    netto = monthly_gross - lohnsteuer - soli - kirchensteuer - contributions.total

    logger.debug(
        f"net salary {profile.year} class {profile.tax_class}: gross {monthly_gross:.2f}, "
        f"wage tax {lohnsteuer}, contributions {contributions.total:.2f}, netto {netto:.2f}"
    )

    return TaxResult(
        gross=_round_cents(monthly_gross),
        netto=_round_cents(netto),
        taxes=TaxBreakdown(
            lohnsteuer=_round_cents(lohnsteuer),
            soli=_round_cents(soli),
            kirchensteuer=_round_cents(kirchensteuer),
        ),
        social_security=SocialSecurityBreakdown(
            kv=_round_cents(contributions.health),
            rv=_round_cents(contributions.pension),
            av=_round_cents(contributions.unemployment),
            pv=_round_cents(contributions.care),
        ),
        one_off=_one_off_breakdown(out, profile.state) if profile.one_off_payment else None,
    )


__all__ = [
    "calculate_net_salary",
    "validate_profile",
    "build_wage_tax_input",
    "church_tax",
    "list_supported_years",
]
