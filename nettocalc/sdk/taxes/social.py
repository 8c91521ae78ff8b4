"""Employee social-insurance contributions.

Pension, unemployment, health and long-term care insurance, each charged on
the monthly gross wage capped at the annual contribution ceiling / 12.
Amounts are returned unrounded; callers round at the output boundary.

The care-rate adjustments (childless surcharge, child discount, Saxony
split) are shared with the precautionary deduction of the wage-tax
procedure, so both use ``care_rates``.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from .fixed import ZERO
from .schemas import SocialInsuranceRules


@dataclass(frozen=True)
class Contributions:
    """Monthly employee contributions in euros (unrounded)."""

    pension: Decimal
    unemployment: Decimal
    health: Decimal
    care: Decimal

    @property
    def total(self) -> Decimal:
        return self.pension + self.unemployment + self.health + self.care


def care_rates(
    rules: SocialInsuranceRules,
    saxony: bool = False,
    childless: bool = False,
    discount_units: int = 0,
) -> tuple[Decimal, Decimal]:
    """Employee and employer care rates.

    The childless surcharge and the child discount are mutually exclusive;
    discount units are capped at ``care_max_discount_units``.

    Example:
        care_rates(rules, childless=True)     # -> (0.024, 0.018)
        care_rates(rules, discount_units=1)   # -> (0.0155, 0.018)
    """
    if saxony:
        employee, employer = rules.care_saxony_rate, rules.care_saxony_employer_rate
    else:
        employee, employer = rules.care_rate, rules.care_employer_rate

    if childless:
        employee = employee + rules.care_childless_surcharge
    else:
        units = min(max(discount_units, 0), rules.care_max_discount_units)
        employee = employee - rules.care_child_discount * units
    return employee, employer


def health_rate(rules: SocialInsuranceRules, add_on_rate: Optional[Decimal] = None) -> Decimal:
    """Employee health rate: half the general rate plus half the add-on.

    ``add_on_rate`` is in percent; None means the year's average add-on.
    """
    if add_on_rate is None:
        add_on_rate = rules.health_average_add_on
    return rules.health_rate + Decimal(add_on_rate) / 2 / 100


def calc_contributions(
    monthly_gross: Decimal,
    rules: SocialInsuranceRules,
    add_on_rate: Optional[Decimal] = None,
    private: bool = False,
    saxony: bool = False,
    childless: bool = False,
    discount_units: int = 0,
) -> Contributions:
    """Compute the employee share of all four insurances for one month.

    Privately insured employees pay no statutory health or care
    contribution; their premium is outside this calculation.
    """
    pension_base = min(monthly_gross, rules.pension_ceiling / 12)
    health_base = min(monthly_gross, rules.health_ceiling / 12)

    pension = pension_base * rules.pension_rate
    unemployment = pension_base * rules.unemployment_rate

    if private:
        health = care = ZERO
    else:
        health = health_base * health_rate(rules, add_on_rate)
        care_employee, _ = care_rates(rules, saxony=saxony, childless=childless, discount_units=discount_units)
        care = health_base * care_employee

    return Contributions(pension=pension, unemployment=unemployment, health=health, care=care)
