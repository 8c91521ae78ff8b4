"""German wage-tax withholding (Lohnsteuer).

Implements the published step-by-step procedure (PAP) for computing wage
tax, solidarity surcharge and the church-tax base of one pay period. One
implementation serves every supported year; the year only selects the
``TaxRules`` constants.

The procedure is a fixed sequence of stages. Each stage is a pure function
that takes a ``WageTaxState`` and returns an updated copy, so intermediate
values can be inspected and tested stage by stage:

    parameters -> annualize -> pension relief -> age relief
    -> assessable income -> regular pass (allowances, precaution, tariff,
       child-allowance pass, surcharge) -> one-off pass

Amounts inside the state are euros unless the field name says otherwise;
inputs and outputs are cents. Every rescaling names its rounding direction
(see ``fixed``).
"""

import logging
from dataclasses import dataclass, replace
from decimal import Decimal

from .fixed import ONE, ZERO, Rounding, divide, set_scale, to_int
from .relief_tables import (
    AGE_RELIEF_CAP,
    AGE_RELIEF_RATE,
    PENSION_RELIEF_CAP,
    PENSION_RELIEF_RATE,
    PENSION_SURCHARGE,
    cohort_index,
)
from .schemas import (
    PayPeriod,
    PrivateInsurance,
    TariffRules,
    TaxRules,
    WageTaxInput,
    WageTaxOutput,
)
from .social import care_rates

logger = logging.getLogger(__name__)

DOWN = Rounding.DOWN
UP = Rounding.UP

# Tax class 5/6: tariff evaluated at 125% and 75% of income, never below
# the entry rate.
SECONDARY_HIGH = Decimal("1.25")
SECONDARY_LOW = Decimal("0.75")
ENTRY_RATE = Decimal("0.14")

# (multiplier, divisor) turning a period amount in cents into annual euros
_ANNUALIZATION = {
    PayPeriod.YEAR: (1, 100),
    PayPeriod.MONTH: (12, 100),
    PayPeriod.WEEK: (360, 700),
    PayPeriod.DAY: (360, 100),
}


@dataclass(frozen=True)
class WageTaxState:
    """Computation context threaded through the stages."""

    inp: WageTaxInput
    rules: TaxRules

    # The one-off pass switches to a yearly period
    pay_period: PayPeriod
    factor: Decimal
    pension_months: int

    # Parameters
    pension_ceiling: Decimal = ZERO
    pension_rate: Decimal = ZERO
    health_ceiling: Decimal = ZERO
    health_rate: Decimal = ZERO
    health_employer_rate: Decimal = ZERO
    care_rate: Decimal = ZERO
    care_employer_rate: Decimal = ZERO
    solidarity_exemption: Decimal = ZERO

    # Annualized amounts
    annual_wage: Decimal = ZERO
    annual_pension: Decimal = ZERO
    annual_allowance: Decimal = ZERO
    annual_addition: Decimal = ZERO
    special_pension_base: Decimal = ZERO

    # Pension and age relief
    pension_relief: Decimal = ZERO
    pension_surcharge: Decimal = ZERO
    pension_relief_one_off: Decimal = ZERO
    pension_surcharge_one_off: Decimal = ZERO
    age_relief: Decimal = ZERO

    # Assessable income
    taxable_wage: Decimal = ZERO
    precaution_wage: Decimal = ZERO
    taxable_pension: Decimal = ZERO

    # Table allowances
    flat_allowance: Decimal = ZERO
    single_parent_relief: Decimal = ZERO
    special_expenses: Decimal = ZERO
    child_allowance: Decimal = ZERO
    splitting: int = 1
    table_allowances: Decimal = ZERO

    # Precautionary deduction
    pension_precaution: Decimal = ZERO
    minimum_precaution: Decimal = ZERO
    insurance_precaution: Decimal = ZERO
    precaution: Decimal = ZERO

    # Tariff
    taxable_income: Decimal = ZERO
    annual_tax: Decimal = ZERO
    annual_wage_tax: Decimal = ZERO
    surcharge_base: Decimal = ZERO

    # Period results (cents)
    wage_tax: Decimal = ZERO
    solidarity_surcharge: Decimal = ZERO
    church_tax_base: Decimal = ZERO
    private_insurance_deduction: Decimal = ZERO
    consumed_allowances: Decimal = ZERO
    taxable_above_basic: Decimal = ZERO

    # One-off payment results (cents)
    one_off_wage_tax: Decimal = ZERO
    one_off_solidarity_surcharge: Decimal = ZERO
    one_off_church_tax_base: Decimal = ZERO
    one_off_private_insurance_deduction: Decimal = ZERO
    consumed_allowances_before_one_off: Decimal = ZERO
    consumed_allowances_one_off: Decimal = ZERO
    taxable_above_basic_before_one_off: Decimal = ZERO
    taxable_above_basic_with_one_off: Decimal = ZERO


# =============================================================================
# Tariff
# =============================================================================


def _progression(x: Decimal, start: int, quadratic: Decimal, linear: Decimal, constant: Decimal) -> Decimal:
    y = divide(x - start, 10000, 6, DOWN)
    return set_scale((y * quadratic + linear) * y + constant, 0, DOWN)


def tariff(x: Decimal, rules: TariffRules, splitting: int = 1) -> Decimal:
    """Annual income tax on ``x`` whole euros (§ 32a EStG).

    ``splitting`` is 2 for tax class 3: the caller passes half the income
    and the tax is doubled here.

    Example:
        tariff(Decimal(12096), rules_2025.tariff)  # -> 0 (basic allowance)
        tariff(Decimal(32355), rules_2025.tariff)  # -> 4982
    """
    first = rules.first_progression
    second = rules.second_progression

    if x < rules.basic_allowance + 1:
        st = ZERO
    elif x < first.end + 1:
        st = _progression(x, rules.basic_allowance, first.quadratic, first.linear, first.constant)
    elif x < second.end + 1:
        st = _progression(x, first.end, second.quadratic, second.linear, second.constant)
    elif x < rules.proportional.end + 1:
        st = set_scale(x * rules.proportional.rate - rules.proportional.deduction, 0, DOWN)
    else:
        st = set_scale(x * rules.top.rate - rules.top.deduction, 0, DOWN)
    return st * splitting


def _doubled_difference(zx: Decimal, rules: TariffRules) -> Decimal:
    """Twice the tax difference between 125% and 75% of ``zx``, at least the entry rate."""
    high = tariff(set_scale(zx * SECONDARY_HIGH, 2, DOWN), rules)
    low = tariff(set_scale(zx * SECONDARY_LOW, 2, DOWN), rules)
    diff = (high - low) * 2
    minimum = set_scale(zx * ENTRY_RATE, 0, DOWN)
    return minimum if minimum > diff else diff


def secondary_class_tax(x: Decimal, rules: TaxRules) -> Decimal:
    """Annual tax for tax classes 5 and 6 on ``x`` whole euros.

    Below the first threshold the doubled-difference method applies; between
    the thresholds the tax grows at the proportional rate, above the third
    threshold at the top rate.
    """
    thresholds = rules.secondary_classes
    w1, w2, w3 = thresholds.threshold_1, thresholds.threshold_2, thresholds.threshold_3
    proportional = rules.tariff.proportional.rate
    top = rules.tariff.top.rate

    if x > w2:
        st = _doubled_difference(w2, rules.tariff)
        if x > w3:
            st = set_scale(st + (w3 - w2) * proportional, 0, DOWN)
            return set_scale(st + (x - w3) * top, 0, DOWN)
        return set_scale(st + (x - w2) * proportional, 0, DOWN)

    st = _doubled_difference(x, rules.tariff)
    if x > w1:
        capped = set_scale(_doubled_difference(w1, rules.tariff) + (x - w1) * proportional, 0, DOWN)
        if capped < st:
            st = capped
    return st


def period_share(amount: Decimal, pay_period: PayPeriod) -> Decimal:
    """Share of an annual amount (cents) falling on one pay period."""
    if pay_period == PayPeriod.YEAR:
        return amount
    if pay_period == PayPeriod.MONTH:
        return divide(amount, 12, 0, DOWN)
    if pay_period == PayPeriod.WEEK:
        return divide(amount * 7, 360, 0, DOWN)
    return divide(amount, 360, 0, DOWN)


# =============================================================================
# Stages
# =============================================================================


def initial_state(inp: WageTaxInput, rules: TaxRules) -> WageTaxState:
    return WageTaxState(
        inp=inp,
        rules=rules,
        pay_period=inp.pay_period,
        factor=inp.factor,
        pension_months=inp.pension_months,
    )


def set_parameters(s: WageTaxState) -> WageTaxState:
    """Year constants and the employee insurance rates of this input."""
    si = s.rules.social_insurance
    care, care_employer = care_rates(
        si,
        saxony=s.inp.care_saxony,
        childless=s.inp.care_childless,
        discount_units=s.inp.care_discount_units,
    )
    return replace(
        s,
        pension_ceiling=si.pension_ceiling,
        pension_rate=si.pension_rate,
        health_ceiling=si.health_ceiling,
        health_rate=s.inp.health_add_on_rate / 2 / 100 + si.health_precaution_rate,
        health_employer_rate=si.health_employer_precaution_rate,
        care_rate=care,
        care_employer_rate=care_employer,
        solidarity_exemption=s.rules.solidarity.exemption,
    )


def annualize(s: WageTaxState) -> WageTaxState:
    """Convert period amounts (cents) into annual euros, truncated to cents."""
    multiplier, divisor = _ANNUALIZATION[s.pay_period]

    def annual(amount: Decimal) -> Decimal:
        return divide(amount * multiplier, divisor, 2, DOWN)

    return replace(
        s,
        annual_wage=annual(s.inp.gross),
        annual_pension=annual(s.inp.pension_income),
        annual_allowance=annual(s.inp.period_allowance),
        annual_addition=annual(s.inp.period_addition),
        factor=s.factor if s.inp.factor_method else ONE,
    )


def pension_relief(s: WageTaxState) -> WageTaxState:
    """Pension relief and surcharge (§ 19 (2) EStG), then age relief."""
    if s.annual_pension == ZERO:
        s = replace(
            s,
            pension_relief=ZERO,
            pension_surcharge=ZERO,
            pension_relief_one_off=ZERO,
            pension_surcharge_one_off=ZERO,
        )
        return age_relief(s)

    inp = s.inp
    j = cohort_index(inp.pension_start_year)
    rate, cap, max_surcharge = PENSION_RELIEF_RATE[j], PENSION_RELIEF_CAP[j], PENSION_SURCHARGE[j]

    if s.pay_period == PayPeriod.YEAR:
        months = Decimal(s.pension_months)
        base = inp.pension_monthly * months + inp.pension_special
        relief_cap = set_scale(cap / 12 * months, 0, UP)
        surcharge = set_scale(max_surcharge / 12 * months, 0, UP)
    else:
        base = set_scale(inp.pension_monthly * 12 + inp.pension_special, 2, DOWN)
        relief_cap = cap
        surcharge = max_surcharge

    relief = set_scale(base * rate / 100, 2, UP)
    if relief > relief_cap:
        relief = relief_cap
    if relief > s.annual_pension:
        relief = s.annual_pension

    relief_one_off = set_scale(relief + s.special_pension_base * rate / 100, 2, UP)
    if relief_one_off > cap:
        relief_one_off = cap

    surcharge_one_off_cap = set_scale((base + s.special_pension_base) / 100 - relief_one_off, 2, DOWN)
    surcharge_one_off = set_scale(surcharge + s.special_pension_base / 100, 0, UP)
    if surcharge_one_off > surcharge_one_off_cap:
        surcharge_one_off = set_scale(surcharge_one_off_cap, 0, UP)
    if surcharge_one_off > max_surcharge:
        surcharge_one_off = max_surcharge

    surcharge_cap = set_scale(base / 100 - relief, 2, DOWN)
    if surcharge > surcharge_cap:
        surcharge = set_scale(surcharge_cap, 0, UP)

    s = replace(
        s,
        pension_relief=relief,
        pension_surcharge=surcharge,
        pension_relief_one_off=relief_one_off,
        pension_surcharge_one_off=surcharge_one_off,
    )
    return age_relief(s)


def age_relief(s: WageTaxState) -> WageTaxState:
    """Age relief on non-pension income (§ 24a EStG)."""
    if not s.inp.age_relief:
        return replace(s, age_relief=ZERO)

    k = cohort_index(s.inp.age_relief_year)
    relief = set_scale((s.annual_wage - s.annual_pension) * AGE_RELIEF_RATE[k], 0, UP)
    if relief > AGE_RELIEF_CAP[k]:
        relief = AGE_RELIEF_CAP[k]
    return replace(s, age_relief=relief)


def assessable_income(s: WageTaxState) -> WageTaxState:
    """Wage after reliefs; resets the precaution wage to the annual wage."""
    taxable_wage = set_scale(
        s.annual_wage - s.pension_relief - s.age_relief - s.annual_allowance + s.annual_addition,
        2, DOWN,
    )
    taxable_pension = set_scale(s.annual_pension - s.pension_relief, 2, DOWN)
    return replace(
        s,
        taxable_wage=max(taxable_wage, ZERO),
        precaution_wage=s.annual_wage,
        taxable_pension=max(taxable_pension, ZERO),
    )


def table_allowances(s: WageTaxState) -> WageTaxState:
    """Allowances built into the wage-tax tables, per tax class."""
    allowances = s.rules.allowances
    tax_class = s.inp.tax_class
    surcharge = s.pension_surcharge
    surcharge_one_off = s.pension_surcharge_one_off
    flat = ZERO

    if ZERO <= s.taxable_pension < surcharge:
        surcharge = Decimal(to_int(s.taxable_pension))

    if tax_class < 6:
        if s.taxable_pension > ZERO:
            if s.taxable_pension - surcharge < allowances.pension_flat:
                flat = set_scale(s.taxable_pension - surcharge, 0, UP)
            else:
                flat = allowances.pension_flat
        if s.taxable_wage > s.taxable_pension:
            if s.taxable_wage - s.taxable_pension < allowances.employee_flat:
                flat = set_scale(flat + s.taxable_wage - s.taxable_pension, 0, UP)
            else:
                flat = flat + allowances.employee_flat
    else:
        surcharge = ZERO
        surcharge_one_off = ZERO

    splitting = 1
    single_parent = s.single_parent_relief
    special = s.special_expenses
    children = s.inp.child_allowances
    child_allowance = ZERO

    if tax_class in (1, 2, 3):
        special = allowances.special_expenses_flat
        child_allowance = set_scale(children * allowances.child_allowance, 0, DOWN)
        if tax_class == 2:
            single_parent = allowances.single_parent_relief
        elif tax_class == 3:
            splitting = 2
    elif tax_class == 4:
        special = allowances.special_expenses_flat
        child_allowance = set_scale(children * allowances.child_allowance / 2, 0, DOWN)
    elif tax_class == 5:
        special = allowances.special_expenses_flat

    return replace(
        s,
        pension_surcharge=surcharge,
        pension_surcharge_one_off=surcharge_one_off,
        flat_allowance=flat,
        single_parent_relief=single_parent,
        special_expenses=special,
        child_allowance=child_allowance,
        splitting=splitting,
        table_allowances=set_scale(single_parent + flat + special + surcharge, 2, DOWN),
    )


def precaution(s: WageTaxState) -> WageTaxState:
    """Precautionary deduction for insurance contributions.

    The greater of the minimum deduction (rate of wage, capped) plus the
    pension share, and the pension share plus the health/care share. The
    precaution wage is capped at the pension ceiling and then at the health
    ceiling; the capped value is kept in the state.
    """
    inp = s.inp
    minimum = s.rules.precaution
    wage = s.precaution_wage

    if inp.pension_exempt:
        pension_share = ZERO
    else:
        if wage > s.pension_ceiling:
            wage = s.pension_ceiling
        pension_share = set_scale(wage * s.pension_rate, 2, DOWN)

    minimum_share = set_scale(wage * minimum.minimum_rate, 2, DOWN)
    cap = minimum.cap_joint if inp.tax_class == 3 else minimum.cap
    if minimum_share > cap:
        minimum_share = cap
    minimum_total = set_scale(pension_share + minimum_share, 0, UP)

    if wage > s.health_ceiling:
        wage = s.health_ceiling

    if inp.private_insurance > PrivateInsurance.STATUTORY:
        if inp.tax_class == 6:
            insurance_share = ZERO
        else:
            insurance_share = inp.private_premium * 12 / 100
            if inp.private_insurance == PrivateInsurance.PRIVATE_WITH_SUBSIDY:
                subsidy = wage * (s.health_employer_rate + s.care_employer_rate)
                insurance_share = set_scale(insurance_share - subsidy, 2, DOWN)
    else:
        insurance_share = set_scale(wage * (s.health_rate + s.care_rate), 2, DOWN)

    total = set_scale(insurance_share + pension_share, 0, UP)
    if minimum_total > total:
        total = set_scale(minimum_total, 2, DOWN)

    return replace(
        s,
        precaution_wage=wage,
        pension_precaution=pension_share,
        minimum_precaution=minimum_share,
        insurance_precaution=insurance_share,
        precaution=total,
    )


def annual_tax(s: WageTaxState) -> WageTaxState:
    """Taxable income and annual tax for the current allowances."""
    s = precaution(s)
    taxable = s.taxable_wage - s.table_allowances - s.precaution
    if taxable < ONE:
        taxable = ZERO
        x = ZERO
    else:
        x = divide(taxable, s.splitting, 0, DOWN)
    return replace(s, taxable_income=taxable, annual_tax=_class_tax(s, x))


def _class_tax(s: WageTaxState, x: Decimal) -> Decimal:
    if s.inp.tax_class < 5:
        return tariff(x, s.rules.tariff, s.splitting)
    return secondary_class_tax(x, s.rules)


def _private_insurance_deduction(s: WageTaxState) -> Decimal:
    """Annual deductible private premium in cents, zero for statutory insurance."""
    if s.inp.private_insurance == PrivateInsurance.STATUTORY:
        return ZERO
    if s.minimum_precaution > s.insurance_precaution:
        return s.minimum_precaution * 100
    return s.insurance_precaution * 100


def _above_basic(s: WageTaxState, places: int) -> Decimal:
    amount = set_scale((s.taxable_income - s.rules.tariff.basic_allowance) * 100, places, DOWN)
    return max(amount, ZERO)


def regular_pass(s: WageTaxState) -> WageTaxState:
    """Wage tax of the period, then the surcharge base with child allowances."""
    s = table_allowances(s)
    consumed = set_scale((s.flat_allowance + s.pension_relief + s.pension_surcharge) * 100, 0, DOWN)
    s = annual_tax(s)
    annual_wage_tax = set_scale(s.annual_tax * s.factor, 0, DOWN)
    s = replace(
        s,
        consumed_allowances=consumed,
        taxable_above_basic=_above_basic(s, 0),
        annual_wage_tax=annual_wage_tax,
        wage_tax=period_share(annual_wage_tax * 100, s.pay_period),
        private_insurance_deduction=period_share(_private_insurance_deduction(s), s.pay_period),
    )

    if s.inp.child_allowances > ZERO:
        s = replace(s, table_allowances=s.table_allowances + s.child_allowance)
        s = assessable_income(s)
        s = annual_tax(s)
        surcharge_base = set_scale(s.annual_tax * s.factor, 0, DOWN)
    else:
        surcharge_base = annual_wage_tax

    s = replace(s, surcharge_base=surcharge_base)
    return solidarity(s)


def solidarity(s: WageTaxState) -> WageTaxState:
    """Solidarity surcharge with marginal relief, and the church-tax base."""
    rules = s.rules.solidarity
    exemption = s.solidarity_exemption * s.splitting
    base = s.surcharge_base

    if base > exemption:
        full = set_scale(base * rules.rate / 100, 2, DOWN)
        tapered = set_scale((base - exemption) * rules.taper_rate / 100, 2, DOWN)
        annual = tapered if tapered < full else full
        surcharge = period_share(set_scale(annual * 100, 0, DOWN), s.pay_period)
    else:
        surcharge = ZERO

    church_base = period_share(base * 100, s.pay_period) if s.inp.church_tax else ZERO
    return replace(
        s,
        solidarity_exemption=exemption,
        solidarity_surcharge=surcharge,
        church_tax_base=church_base,
    )


def one_off_pass(s: WageTaxState) -> WageTaxState:
    """Tax on the one-off payment: annual tax with it minus annual tax without it."""
    inp = s.inp
    s = replace(s, pay_period=PayPeriod.YEAR, pension_months=s.pension_months or 12)
    if inp.one_off == ZERO and inp.equity_benefit == ZERO:
        return s

    s, tax_without = _without_one_off(s)
    deduction_without = _private_insurance_deduction(s)

    s = replace(
        s,
        annual_wage=divide(inp.annual_gross + inp.one_off, 100, 2, DOWN),
        annual_pension=divide(inp.annual_pension + inp.one_off_pension, 100, 2, DOWN),
        special_pension_base=inp.death_benefit,
    )
    s = _with_one_off(s)
    s = annual_tax(s)

    tax_with = s.annual_tax * 100
    one_off_tax = divide((tax_with - tax_without) * s.factor, 100, 0, DOWN) * 100
    s = replace(
        s,
        taxable_above_basic_with_one_off=_above_basic(s, 2),
        one_off_private_insurance_deduction=_private_insurance_deduction(s) - deduction_without,
        one_off_wage_tax=one_off_tax,
    )
    logger.debug(f"one-off pass: tax without {tax_without}, with {tax_with}, one-off tax {one_off_tax}")
    return settle_one_off(s)


def _without_one_off(s: WageTaxState) -> tuple[WageTaxState, Decimal]:
    """Annual tax (cents) on the expected annual wage without the payment."""
    inp = s.inp
    s = replace(
        s,
        annual_wage=divide(inp.annual_gross, 100, 2, DOWN),
        annual_pension=divide(inp.annual_pension, 100, 2, DOWN),
        annual_allowance=divide(inp.annual_allowance, 100, 2, DOWN),
        annual_addition=divide(inp.annual_addition, 100, 2, DOWN),
    )
    s = pension_relief(s)
    s = assessable_income(s)
    s = replace(s, precaution_wage=s.precaution_wage - inp.annual_compensation / 100)
    s = table_allowances(s)
    consumed = set_scale((s.flat_allowance + s.pension_relief + s.pension_surcharge) * 100, 2, DOWN)
    s = annual_tax(s)
    s = replace(
        s,
        consumed_allowances_before_one_off=consumed,
        taxable_above_basic_before_one_off=_above_basic(s, 2),
    )
    return s, s.annual_tax * 100


def _with_one_off(s: WageTaxState) -> WageTaxState:
    """Allowances for the annual wage including the payment."""
    inp = s.inp
    s = pension_relief(s)
    s = replace(s, pension_relief=s.pension_relief_one_off)
    s = assessable_income(s)
    s = replace(
        s,
        precaution_wage=(
            s.precaution_wage
            + inp.equity_benefit / 100
            - inp.annual_compensation / 100
            - inp.one_off_compensation / 100
        ),
        pension_surcharge=s.pension_surcharge_one_off,
    )
    s = table_allowances(s)
    consumed = (s.flat_allowance + s.pension_relief + s.pension_surcharge) * 100
    return replace(s, consumed_allowances_one_off=consumed - s.consumed_allowances_before_one_off)


def settle_one_off(s: WageTaxState) -> WageTaxState:
    """Drop a negative one-off tax, or compute its solidarity surcharge.

    A negative amount is only offset against the period amounts when an
    equity benefit is present.
    """
    inp = s.inp
    if s.one_off_wage_tax < ZERO:
        if inp.equity_benefit != ZERO:
            delta = s.one_off_wage_tax
            rate = s.rules.solidarity.rate
            s = replace(
                s,
                wage_tax=max(s.wage_tax + delta, ZERO),
                solidarity_surcharge=max(set_scale(s.solidarity_surcharge + delta * rate / 100, 0, DOWN), ZERO),
                church_tax_base=max(s.church_tax_base + delta, ZERO),
            )
        s = replace(s, one_off_wage_tax=ZERO, one_off_solidarity_surcharge=ZERO)
    else:
        s = one_off_surcharge(s)

    return replace(s, one_off_church_tax_base=s.one_off_wage_tax if inp.church_tax else ZERO)


def one_off_surcharge(s: WageTaxState) -> WageTaxState:
    """Solidarity surcharge on the one-off tax, tested against the exemption with child allowances."""
    base = s.taxable_income
    if s.inp.child_allowances > ZERO:
        base = base - s.child_allowance

    if base < ONE:
        x = ZERO
    else:
        x = divide(base, s.splitting, 0, DOWN)

    surcharge_base = set_scale(_class_tax(s, x) * s.factor, 0, DOWN)
    if surcharge_base > s.solidarity_exemption:
        surcharge = divide(s.one_off_wage_tax * s.rules.solidarity.rate, 100, 0, DOWN)
    else:
        surcharge = ZERO
    return replace(s, one_off_solidarity_surcharge=surcharge)


# =============================================================================
# Entry point
# =============================================================================


def run_stages(inp: WageTaxInput, rules: TaxRules) -> WageTaxState:
    """Run every stage in order and return the final state."""
    s = initial_state(inp, rules)
    s = set_parameters(s)
    s = annualize(s)
    s = pension_relief(s)
    s = assessable_income(s)
    s = regular_pass(s)
    logger.debug(
        f"regular pass: class {inp.tax_class}, taxable income {s.taxable_income}, "
        f"wage tax {s.wage_tax}, surcharge {s.solidarity_surcharge}"
    )
    return one_off_pass(s)


def calculate_wage_tax(inp: WageTaxInput, rules: TaxRules) -> WageTaxOutput:
    """Compute wage tax, surcharge and church-tax base for one pay period.

    Args:
        inp: Raw procedure input (amounts in cents)
        rules: Rules of the tax year, from ``load_tax_rules``

    Returns:
        WageTaxOutput with all amounts in cents

    Raises:
        InvariantViolation: If a stage divides by zero (never for valid input)

    Example:
        rules = load_tax_rules(2025)
        out = calculate_wage_tax(WageTaxInput(pay_period=2, gross=Decimal(350000)), rules)
        out.wage_tax  # -> Decimal("41516")
    """
    s = run_stages(inp, rules)
    return WageTaxOutput(
        wage_tax=s.wage_tax,
        solidarity_surcharge=s.solidarity_surcharge,
        church_tax_base=s.church_tax_base,
        private_insurance_deduction=s.private_insurance_deduction,
        one_off_wage_tax=s.one_off_wage_tax,
        one_off_solidarity_surcharge=s.one_off_solidarity_surcharge,
        one_off_church_tax_base=s.one_off_church_tax_base,
        one_off_private_insurance_deduction=s.one_off_private_insurance_deduction,
        consumed_allowances=s.consumed_allowances,
        taxable_above_basic=s.taxable_above_basic,
        consumed_allowances_before_one_off=s.consumed_allowances_before_one_off,
        consumed_allowances_one_off=s.consumed_allowances_one_off,
        taxable_above_basic_before_one_off=s.taxable_above_basic_before_one_off,
        taxable_above_basic_with_one_off=s.taxable_above_basic_with_one_off,
    )
