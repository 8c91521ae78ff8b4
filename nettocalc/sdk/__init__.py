"""netto-calc SDK - German wage tax and net salary calculation."""

from .errors import (
    InvalidProfileError,
    InvariantViolation,
    TaxRulesError,
    UnsupportedYearError,
)

from .config import (
    configure_logging,
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    get_profile_path,
    load_profile,
    save_profile,
    get_profile_value,
    set_profile_value,
    unset_profile_value,
    ProfileNotFoundError,
)

from .schemas import (
    FederalState,
    SalaryProfile,
    SocialSecurityBreakdown,
    TaxBreakdown,
    TaxResult,
)

from .salary import (
    build_wage_tax_input,
    calculate_net_salary,
    church_tax,
    validate_profile,
)

from .taxes import (
    WageTaxInput,
    WageTaxOutput,
    calculate_wage_tax,
    list_supported_years,
    load_tax_rules,
)

__all__ = [
    # Errors
    "InvalidProfileError",
    "InvariantViolation",
    "TaxRulesError",
    "UnsupportedYearError",
    # Config
    "configure_logging",
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "get_profile_path",
    "load_profile",
    "save_profile",
    "get_profile_value",
    "set_profile_value",
    "unset_profile_value",
    "ProfileNotFoundError",
    # Profile and result
    "FederalState",
    "SalaryProfile",
    "SocialSecurityBreakdown",
    "TaxBreakdown",
    "TaxResult",
    # Net salary
    "build_wage_tax_input",
    "calculate_net_salary",
    "church_tax",
    "validate_profile",
    # Wage tax
    "WageTaxInput",
    "WageTaxOutput",
    "calculate_wage_tax",
    "list_supported_years",
    "load_tax_rules",
]
