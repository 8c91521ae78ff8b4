"""Tests for employee social-insurance contributions."""

from decimal import Decimal

import pytest

from nettocalc.sdk.taxes.rules import load_tax_rules
from nettocalc.sdk.taxes.social import calc_contributions, care_rates, health_rate


# === TEST CONSTANTS ===

MONTHLY_42K = Decimal(3500)
MONTHLY_96K = Decimal(8000)


@pytest.fixture
def si_2025():
    return load_tax_rules(2025).social_insurance


class TestCareRates:

    def test_with_one_child(self, si_2025):
        assert care_rates(si_2025) == (Decimal("0.018"), Decimal("0.018"))

    def test_childless_surcharge(self, si_2025):
        employee, employer = care_rates(si_2025, childless=True)
        assert employee == Decimal("0.024")
        assert employer == Decimal("0.018")

    def test_child_discount(self, si_2025):
        employee, _ = care_rates(si_2025, discount_units=1)
        assert employee == Decimal("0.0155")

    def test_discount_units_capped(self, si_2025):
        assert care_rates(si_2025, discount_units=6) == care_rates(si_2025, discount_units=4)
        employee, _ = care_rates(si_2025, discount_units=4)
        assert employee == Decimal("0.008")

    def test_childless_ignores_discount(self, si_2025):
        assert care_rates(si_2025, childless=True, discount_units=3)[0] == Decimal("0.024")

    def test_saxony_split(self, si_2025):
        assert care_rates(si_2025, saxony=True) == (Decimal("0.023"), Decimal("0.013"))
        assert care_rates(si_2025, saxony=True, childless=True)[0] == Decimal("0.029")


class TestHealthRate:

    def test_average_add_on(self, si_2025):
        assert health_rate(si_2025) == Decimal("0.0855")

    def test_explicit_add_on(self, si_2025):
        assert health_rate(si_2025, Decimal("1.7")) == Decimal("0.0815")

    def test_zero_add_on(self, si_2025):
        assert health_rate(si_2025, Decimal(0)) == Decimal("0.073")


class TestCalcContributions:

    def test_below_ceilings(self, si_2025):
        c = calc_contributions(MONTHLY_42K, si_2025, childless=True)
        assert c.pension == Decimal("325.5")
        assert c.unemployment == Decimal("45.5")
        assert c.health == Decimal("299.25")
        assert c.care == Decimal("84")
        assert c.total == Decimal("754.25")

    def test_health_ceiling_caps_health_and_care(self, si_2025):
        c = calc_contributions(MONTHLY_96K, si_2025, childless=True)
        assert c.pension == Decimal("744")
        assert c.unemployment == Decimal("104")
        assert c.health.quantize(Decimal("0.01")) == Decimal("471.32")
        assert c.care.quantize(Decimal("0.01")) == Decimal("132.30")

    def test_pension_ceiling_caps_pension(self, si_2025):
        """Above the pension ceiling the contribution is constant."""
        at_ceiling = calc_contributions(si_2025.pension_ceiling / 12, si_2025)
        above = calc_contributions(Decimal(20000), si_2025)
        assert above.pension == at_ceiling.pension
        assert above.unemployment == at_ceiling.unemployment
        assert above.pension == Decimal("748.65")

    def test_private_insurance_pays_no_statutory_health(self, si_2025):
        c = calc_contributions(MONTHLY_42K, si_2025, private=True)
        assert c.health == 0
        assert c.care == 0
        assert c.pension == Decimal("325.5")

    def test_monotone_in_gross(self, si_2025):
        totals = [
            calc_contributions(Decimal(gross), si_2025).total
            for gross in (1000, 3000, 5000, 7000, 9000, 12000)
        ]
        assert totals == sorted(totals)
