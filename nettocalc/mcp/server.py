"""netto-calc MCP Server - FastMCP implementation for net salary tools."""

import logging
from decimal import Decimal
from typing import Any, Optional

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from nettocalc.sdk import (
    InvalidProfileError,
    TaxRulesError,
    calculate_net_salary as sdk_calculate_net_salary,
    list_supported_years,
    load_tax_rules,
)

logger = logging.getLogger(__name__)

# Initialize FastMCP server
mcp = FastMCP("netto-calc")


# --- Tools ---

@mcp.tool()
async def calculate_net_salary(
    yearly_salary: float = Field(description="Gross yearly salary in euros (e.g., 42000)"),
    year: int = Field(description="Tax year (see list_tax_years)"),
    tax_class: int = Field(default=1, description="Tax class (Steuerklasse) 1-6"),
    church_tax: bool = Field(default=False, description="Member of a church levying church tax"),
    child_count: int = Field(default=0, description="Number of children (0 = childless)"),
    state: str = Field(default="NW", description="Federal state code (e.g., 'NW', 'BY', 'SN')"),
    is_private_health_insurance: bool = Field(default=False, description="Privately health insured"),
    private_health_premium: Optional[float] = Field(
        default=None, description="Monthly basic private health/care premium in euros"
    ),
    health_insurance_add_on_rate: Optional[float] = Field(
        default=None, description="Health insurer add-on rate in percent (default: year average)"
    ),
    birth_year: Optional[int] = Field(default=None, description="Birth year, used for age relief"),
    one_off_payment: Optional[float] = Field(
        default=None, description="Yearly one-off payment (bonus) in euros"
    ),
) -> dict[str, Any]:
    """Calculate the monthly German net salary. Returns gross, netto, taxes (lohnsteuer, soli, kirchensteuer) and socialSecurity (kv, rv, av, pv) in euros."""
    try:
        profile = {
            "yearly_salary": Decimal(str(yearly_salary)),
            "year": year,
            "tax_class": tax_class,
            "church_tax": church_tax,
            "has_children": child_count > 0,
            "child_count": child_count,
            "state": state.upper(),
            "is_private_health_insurance": is_private_health_insurance,
            "birth_year": birth_year,
        }
        optional_amounts = {
            "private_health_premium": private_health_premium,
            "health_insurance_add_on_rate": health_insurance_add_on_rate,
            "one_off_payment": one_off_payment,
        }
        profile.update({k: Decimal(str(v)) for k, v in optional_amounts.items() if v is not None})

        result = sdk_calculate_net_salary(profile)
        return result.to_dict()

    except (InvalidProfileError, TaxRulesError) as e:
        logger.error(f"Error calculating net salary: {e}")
        return {"error": str(e)}


@mcp.tool()
async def list_tax_years() -> dict[str, Any]:
    """List the supported tax years with their basic allowance and contribution ceilings."""
    try:
        years = []
        for year in list_supported_years():
            rules = load_tax_rules(year)
            years.append({
                "year": year,
                "basic_allowance": rules.tariff.basic_allowance,
                "pension_ceiling": float(rules.social_insurance.pension_ceiling),
                "health_ceiling": float(rules.social_insurance.health_ceiling),
                "health_average_add_on": float(rules.social_insurance.health_average_add_on),
            })
        return {"years": years}
    except TaxRulesError as e:
        logger.error(f"Error loading tax rules: {e}")
        return {"error": str(e), "years": []}


# --- Server Entry Point ---

def run_server():
    """Run the MCP server in stdio mode."""
    mcp.run(transport="stdio")


if __name__ == "__main__":
    run_server()
