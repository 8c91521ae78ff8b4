"""Pydantic schemas for salary profiles and net-salary results.

``SalaryProfile`` is the input of ``calculate_net_salary``; it accepts
snake_case field names and the camelCase names used on the wire.
``TaxResult`` is the monthly breakdown returned to callers; ``to_dict``
renders it in the camelCase wire shape.
"""

from decimal import Decimal
from enum import Enum
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel


class FederalState(str, Enum):
    """German federal states by ISO 3166-2 subdivision code."""

    BW = "BW"  # Baden-Württemberg
    BY = "BY"  # Bayern
    BE = "BE"  # Berlin
    BB = "BB"  # Brandenburg
    HB = "HB"  # Bremen
    HH = "HH"  # Hamburg
    HE = "HE"  # Hessen
    MV = "MV"  # Mecklenburg-Vorpommern
    NI = "NI"  # Niedersachsen
    NW = "NW"  # Nordrhein-Westfalen
    RP = "RP"  # Rheinland-Pfalz
    SL = "SL"  # Saarland
    SN = "SN"  # Sachsen
    ST = "ST"  # Sachsen-Anhalt
    SH = "SH"  # Schleswig-Holstein
    TH = "TH"  # Thüringen

    @property
    def church_tax_rate(self) -> Decimal:
        """Church tax as a fraction of the church-tax base."""
        if self in (FederalState.BW, FederalState.BY):
            return Decimal("0.08")
        return Decimal("0.09")

    @property
    def saxony_care_split(self) -> bool:
        """Saxony splits the care rate unevenly between employee and employer."""
        return self is FederalState.SN


class SalaryProfile(BaseModel):
    """Gross salary and personal circumstances of one employee.

    Monetary fields are euros. Cross-field checks (supported year, children)
    are done by ``calculate_net_salary`` so that they surface as
    ``InvalidProfileError``.
    """
    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    yearly_salary: Decimal = Field(..., gt=0, description="Gross yearly salary in euros")
    year: int = Field(..., description="Tax year")
    tax_class: int = Field(..., ge=1, le=6, description="Tax class (Steuerklasse) 1-6")
    church_tax: bool = Field(default=False, description="Member of a church levying church tax")
    has_children: bool = Field(default=False)
    child_count: int = Field(default=0, ge=0, description="Children counted for allowances and care discount")
    state: FederalState = Field(default=FederalState.NW, description="Federal state of employment")
    is_private_health_insurance: bool = Field(default=False)
    health_insurance_add_on_rate: Optional[Decimal] = Field(
        default=None, ge=0,
        description="Health insurer add-on rate in percent; defaults to the year's average",
    )
    birth_year: Optional[int] = Field(default=None, ge=1900, description="Used for age relief")
    one_off_payment: Optional[Decimal] = Field(
        default=None, ge=0, description="Yearly irregular payment (bonus) in euros",
    )
    private_health_premium: Optional[Decimal] = Field(
        default=None, ge=0, description="Monthly basic private health/care premium in euros",
    )


# Euro amount rounded to cents; serialized as a JSON number
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class TaxBreakdown(BaseModel):
    """Taxes withheld, in euros."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    lohnsteuer: Money = Field(..., description="Wage tax")
    soli: Money = Field(..., description="Solidarity surcharge")
    kirchensteuer: Money = Field(..., description="Church tax")


class SocialSecurityBreakdown(BaseModel):
    """Employee social-insurance contributions, in euros."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    kv: Money = Field(..., description="Health insurance")
    rv: Money = Field(..., description="Pension insurance")
    av: Money = Field(..., description="Unemployment insurance")
    pv: Money = Field(..., description="Long-term care insurance")


class TaxResult(BaseModel):
    """Monthly net-salary breakdown.

    ``one_off`` holds the taxes on the yearly one-off payment, if any; they
    are not part of the monthly ``netto``.
    """
    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    gross: Money
    netto: Money
    taxes: TaxBreakdown
    social_security: SocialSecurityBreakdown = Field(..., alias="socialSecurity")
    one_off: Optional[TaxBreakdown] = Field(default=None, alias="oneOff")

    def to_dict(self) -> dict:
        """Wire shape: camelCase keys, numbers with two decimals."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
