"""taxes - German wage tax and social-insurance contributions.

Scope:
- Wage-tax procedure (Lohnsteuer, solidarity surcharge, church-tax base)
- Employee social-insurance contributions (pension, unemployment, health, care)
- Fixed-point arithmetic with explicit rounding

Constraints:
- Pure calculation - no profile mapping (that's in salary.py)
- No I/O apart from reading the year rules
- Year-specific constants loaded from tax-rules/{year}.yaml

Modules:
- fixed: Decimal rescaling/division with truncate or round-up
- relief_tables: Pension and age relief cohort tables
- schemas: TaxRules, WageTaxInput, WageTaxOutput
- rules: Tax rules loading (load_tax_rules, list_supported_years)
- withholding: The staged wage-tax procedure
- social: Contribution rates and amounts

Usage:
    from nettocalc.sdk.taxes import calculate_wage_tax, load_tax_rules, WageTaxInput

    rules = load_tax_rules(2025)
    out = calculate_wage_tax(WageTaxInput(pay_period=2, gross=350000), rules)
"""

# Fixed-point helpers
from .fixed import Rounding, divide, set_scale, to_int

# Schemas
from .schemas import (
    PayPeriod,
    PrivateInsurance,
    TaxRules,
    WageTaxInput,
    WageTaxOutput,
)

# Rules loading
from .rules import list_supported_years, load_tax_rules

# Wage tax
from .withholding import (
    WageTaxState,
    calculate_wage_tax,
    period_share,
    run_stages,
    secondary_class_tax,
    tariff,
)

# Social insurance
from .social import Contributions, calc_contributions, care_rates, health_rate

__all__ = [
    # Fixed-point
    "Rounding",
    "divide",
    "set_scale",
    "to_int",
    # Schemas
    "PayPeriod",
    "PrivateInsurance",
    "TaxRules",
    "WageTaxInput",
    "WageTaxOutput",
    # Rules
    "list_supported_years",
    "load_tax_rules",
    # Wage tax
    "WageTaxState",
    "calculate_wage_tax",
    "period_share",
    "run_stages",
    "secondary_class_tax",
    "tariff",
    # Social insurance
    "Contributions",
    "calc_contributions",
    "care_rates",
    "health_rate",
]
