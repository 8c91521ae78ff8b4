"""Pydantic schemas for the wage-tax procedure.

``TaxRules`` validates the tax-rules/*.yaml files and gives typed access to
the constants published for each year. ``WageTaxInput`` and
``WageTaxOutput`` are the raw input and output of the procedure; their
monetary fields are in cents, as in the published procedure.
"""

from decimal import Decimal
from enum import IntEnum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


# =============================================================================
# Year rules
# =============================================================================


class SocialInsuranceRules(BaseModel):
    """Contribution ceilings and employee rates."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    pension_ceiling: Decimal = Field(..., gt=0, description="Annual ceiling for pension and unemployment insurance")
    health_ceiling: Decimal = Field(..., gt=0, description="Annual ceiling for health and care insurance")
    pension_rate: Decimal = Field(..., ge=0, le=1, description="Employee pension rate")
    unemployment_rate: Decimal = Field(..., ge=0, le=1, description="Employee unemployment rate")
    health_rate: Decimal = Field(..., ge=0, le=1, description="Employee share of the general health rate")
    health_precaution_rate: Decimal = Field(
        ..., ge=0, le=1,
        description="Employee share of the reduced health rate used for the precautionary deduction",
    )
    health_average_add_on: Decimal = Field(..., ge=0, description="Average add-on rate in percent")
    care_rate: Decimal = Field(..., ge=0, le=1, description="Employee care rate")
    care_employer_rate: Decimal = Field(..., ge=0, le=1)
    care_saxony_rate: Decimal = Field(..., ge=0, le=1, description="Employee care rate in Saxony")
    care_saxony_employer_rate: Decimal = Field(..., ge=0, le=1)
    care_childless_surcharge: Decimal = Field(..., ge=0, le=1)
    care_child_discount: Decimal = Field(..., ge=0, le=1, description="Discount per additional child")
    care_max_discount_units: int = Field(..., ge=0)

    @property
    def health_employer_precaution_rate(self) -> Decimal:
        """Employer health rate assumed for the private-insurance subsidy."""
        return self.health_average_add_on / 2 / 100 + self.health_precaution_rate


class PrecautionRules(BaseModel):
    """Minimum precautionary deduction."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    minimum_rate: Decimal = Field(..., ge=0, le=1)
    cap: Decimal = Field(..., ge=0, description="Cap for all classes except 3")
    cap_joint: Decimal = Field(..., ge=0, description="Cap for tax class 3")


class AllowanceRules(BaseModel):
    """Flat allowances deducted before the tariff."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    child_allowance: Decimal = Field(..., ge=0, description="Allowance per child unit; class 4 gets half")
    single_parent_relief: Decimal = Field(..., ge=0, description="Relief for tax class 2")
    special_expenses_flat: Decimal = Field(..., ge=0)
    employee_flat: Decimal = Field(..., ge=0, description="Flat allowance for employment income")
    pension_flat: Decimal = Field(..., ge=0, description="Flat allowance for pension income")


class ProgressionZone(BaseModel):
    """Quadratic tariff zone: ``(quadratic * y + linear) * y + constant``."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    end: int = Field(..., gt=0, description="Last taxable income (whole euros) in this zone")
    quadratic: Decimal
    linear: Decimal
    constant: Decimal = Decimal(0)


class ProportionalZone(BaseModel):
    """Linear tariff zone: ``rate * x - deduction``."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    end: Optional[int] = Field(default=None, description="Last taxable income in this zone (None for top zone)")
    rate: Decimal = Field(..., gt=0, lt=1)
    deduction: Decimal


class TariffRules(BaseModel):
    """Income tax tariff (§ 32a EStG)."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    basic_allowance: int = Field(..., gt=0)
    first_progression: ProgressionZone
    second_progression: ProgressionZone
    proportional: ProportionalZone
    top: ProportionalZone

    @model_validator(mode="after")
    def check_zone_order(self) -> "TariffRules":
        """Zones must be contiguous and ascending."""
        bounds = [
            self.basic_allowance,
            self.first_progression.end,
            self.second_progression.end,
            self.proportional.end,
        ]
        if None in bounds or bounds != sorted(set(bounds)):
            raise ValueError(f"tariff zone ends must be strictly ascending, got {bounds}")
        return self


class SecondaryClassRules(BaseModel):
    """Income thresholds of the tax class 5/6 procedure."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    threshold_1: Decimal = Field(..., gt=0)
    threshold_2: Decimal = Field(..., gt=0)
    threshold_3: Decimal = Field(..., gt=0)


class SolidarityRules(BaseModel):
    """Solidarity surcharge exemption and rates (percent)."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    exemption: Decimal = Field(..., ge=0, description="Annual wage tax below which no surcharge is due")
    rate: Decimal = Field(..., ge=0, description="Surcharge rate in percent")
    taper_rate: Decimal = Field(..., ge=0, description="Marginal-relief rate in percent")


class TaxRules(BaseModel):
    """Complete rules for one tax year."""
    model_config = ConfigDict(extra="ignore", frozen=True)  # Allow unknown fields for forward compat

    year: int
    social_insurance: SocialInsuranceRules
    precaution: PrecautionRules
    allowances: AllowanceRules
    tariff: TariffRules
    secondary_classes: SecondaryClassRules
    solidarity: SolidarityRules


# =============================================================================
# Raw procedure input/output
# =============================================================================


class PayPeriod(IntEnum):
    """Length of the pay period (LZZ)."""

    YEAR = 1
    MONTH = 2
    WEEK = 3
    DAY = 4


class PrivateInsurance(IntEnum):
    """Health insurance type (PKV)."""

    STATUTORY = 0
    PRIVATE = 1
    PRIVATE_WITH_SUBSIDY = 2


_CENTS = "in cents"


class WageTaxInput(BaseModel):
    """Raw input of the wage-tax procedure.

    Field descriptions name the variable of the published procedure.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    pay_period: PayPeriod = Field(default=PayPeriod.YEAR, description="LZZ")
    gross: Decimal = Field(default=Decimal(0), ge=0, description=f"RE4: period wage incl. pension income, {_CENTS}")
    tax_class: int = Field(default=1, ge=1, le=6, description="STKL")
    child_allowances: Decimal = Field(default=Decimal(0), ge=0, description="ZKF: number of child allowance units")
    church_tax: bool = Field(default=False, description="R")
    care_childless: bool = Field(default=False, description="PVZ: childless care surcharge")
    care_discount_units: int = Field(default=0, ge=0, le=4, description="PVA: care discount units for additional children")
    care_saxony: bool = Field(default=False, description="PVS: Saxony care split")
    pension_exempt: bool = Field(default=False, description="KRV: not subject to statutory pension insurance")
    health_add_on_rate: Decimal = Field(default=Decimal(0), ge=0, description="KVZ: health add-on rate in percent")
    private_insurance: PrivateInsurance = Field(default=PrivateInsurance.STATUTORY, description="PKV")
    private_premium: Decimal = Field(default=Decimal(0), ge=0, description=f"PKPV: monthly private premium, {_CENTS}")
    factor_method: bool = Field(default=False, description="af: factor procedure (tax class 4)")
    factor: Decimal = Field(default=Decimal(1), gt=0, le=1, description="f: factor of the factor procedure")
    age_relief: bool = Field(default=False, description="ALTER1: 64th birthday completed before the year")
    age_relief_year: int = Field(default=0, ge=0, description="AJAHR: year following the 64th birthday")
    period_allowance: Decimal = Field(default=Decimal(0), ge=0, description=f"LZZFREIB, {_CENTS}")
    period_addition: Decimal = Field(default=Decimal(0), ge=0, description=f"LZZHINZU, {_CENTS}")
    pension_income: Decimal = Field(default=Decimal(0), ge=0, description=f"VBEZ: pension income in RE4, {_CENTS}")
    pension_monthly: Decimal = Field(default=Decimal(0), ge=0, description=f"VBEZM: pension of the first full month, {_CENTS}")
    pension_special: Decimal = Field(default=Decimal(0), ge=0, description=f"VBEZS: special pension payments, {_CENTS}")
    pension_start_year: int = Field(default=0, ge=0, description="VJAHR")
    pension_months: int = Field(default=0, ge=0, le=12, description="ZMVB")
    annual_gross: Decimal = Field(default=Decimal(0), ge=0, description=f"JRE4: expected annual wage, {_CENTS}")
    annual_pension: Decimal = Field(default=Decimal(0), ge=0, description=f"JVBEZ, {_CENTS}")
    annual_allowance: Decimal = Field(default=Decimal(0), ge=0, description=f"JFREIB, {_CENTS}")
    annual_addition: Decimal = Field(default=Decimal(0), ge=0, description=f"JHINZU, {_CENTS}")
    annual_compensation: Decimal = Field(default=Decimal(0), ge=0, description=f"JRE4ENT, {_CENTS}")
    one_off: Decimal = Field(default=Decimal(0), ge=0, description=f"SONSTB: one-off payment, {_CENTS}")
    one_off_compensation: Decimal = Field(default=Decimal(0), ge=0, description=f"SONSTENT, {_CENTS}")
    one_off_pension: Decimal = Field(default=Decimal(0), ge=0, description=f"VBS, {_CENTS}")
    death_benefit: Decimal = Field(default=Decimal(0), ge=0, description=f"STERBE, {_CENTS}")
    equity_benefit: Decimal = Field(default=Decimal(0), ge=0, description=f"MBV, {_CENTS}")


class WageTaxOutput(BaseModel):
    """Raw output of the wage-tax procedure, all amounts in cents."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    wage_tax: Decimal = Field(..., description="LSTLZZ")
    solidarity_surcharge: Decimal = Field(..., description="SOLZLZZ")
    church_tax_base: Decimal = Field(..., description="BK")
    private_insurance_deduction: Decimal = Field(..., description="VKVLZZ")
    one_off_wage_tax: Decimal = Field(..., description="STS")
    one_off_solidarity_surcharge: Decimal = Field(..., description="SOLZS")
    one_off_church_tax_base: Decimal = Field(..., description="BKS")
    one_off_private_insurance_deduction: Decimal = Field(..., description="VKVSONST")
    consumed_allowances: Decimal = Field(..., description="VFRB")
    taxable_above_basic: Decimal = Field(..., description="WVFRB")
    consumed_allowances_before_one_off: Decimal = Field(..., description="VFRBS1")
    consumed_allowances_one_off: Decimal = Field(..., description="VFRBS2")
    taxable_above_basic_before_one_off: Decimal = Field(..., description="WVFRBO")
    taxable_above_basic_with_one_off: Decimal = Field(..., description="WVFRBM")
