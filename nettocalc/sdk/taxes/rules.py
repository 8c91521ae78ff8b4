"""Tax rules loading.

One YAML file per year under ``nettocalc/tax-rules/``. Files are parsed and
validated once per year; the resulting ``TaxRules`` models are frozen and
shared between calculations.
"""

import logging
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..errors import TaxRulesError, UnsupportedYearError
from .schemas import TaxRules

logger = logging.getLogger(__name__)


def _get_tax_rules_dir() -> Path:
    """Get the tax-rules directory path."""
    package_root = Path(__file__).parent.parent.parent  # taxes -> sdk -> nettocalc
    return package_root / "tax-rules"


def list_supported_years() -> list[int]:
    """Years with a rules file, ascending."""
    rules_dir = _get_tax_rules_dir()
    years = [int(p.stem) for p in rules_dir.glob("*.yaml") if p.stem.isdigit()]
    return sorted(years)


@lru_cache(maxsize=None)
def load_tax_rules(year: int) -> TaxRules:
    """Load and validate the rules for ``year`` from tax-rules/YYYY.yaml.

    Raises:
        UnsupportedYearError: If there is no rules file for the year
        TaxRulesError: If the file does not match the ``TaxRules`` schema
    """
    year = int(year)
    config_file = _get_tax_rules_dir() / f"{year}.yaml"
    if not config_file.exists():
        raise UnsupportedYearError(year, list_supported_years())

    with open(config_file, "r") as f:
        data = yaml.safe_load(f) or {}

    try:
        rules = TaxRules.model_validate(data)
    except ValidationError as e:
        errors = []
        for err in e.errors():
            loc = ".".join(str(x) for x in err["loc"])
            errors.append(f"{loc}: {err['msg']}")
        raise TaxRulesError(f"Invalid tax rules in {config_file.name}: {'; '.join(errors)}") from e

    if rules.year != year:
        raise TaxRulesError(f"{config_file.name} declares year {rules.year}")

    logger.debug(f"loaded tax rules for {year} from {config_file}")
    return rules
