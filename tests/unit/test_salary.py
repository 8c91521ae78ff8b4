"""Tests for calculate_net_salary and profile validation.

Reference scenarios (monthly euros):
- 42,000/yr, class 1, NW, childless, 2025: netto 2,330.59
- 96,000/yr, class 1, church tax, 2025: netto 4,512.90
- 42,000/yr, class 1, 2026: netto 2,333.25
- 60,000/yr, class 3, two children, 2026: netto 3,542.17
"""

from decimal import Decimal

import pytest

from nettocalc.sdk import (
    FederalState,
    InvalidProfileError,
    SalaryProfile,
    UnsupportedYearError,
    build_wage_tax_input,
    calculate_net_salary,
    church_tax,
    load_tax_rules,
    validate_profile,
)
from nettocalc.sdk.taxes import PayPeriod


# === TEST CONSTANTS ===

BASE_PROFILE = {"yearly_salary": 42000, "year": 2025, "tax_class": 1}


def profile(**overrides) -> dict:
    data = dict(BASE_PROFILE)
    data.update(overrides)
    return data


class TestReferenceScenarios:

    def test_class_1_childless_2025(self):
        result = calculate_net_salary(profile())
        assert result.gross == Decimal("3500.00")
        assert result.taxes.lohnsteuer == Decimal("415.16")
        assert result.taxes.soli == 0
        assert result.taxes.kirchensteuer == 0
        assert result.social_security.kv == Decimal("299.25")
        assert result.social_security.rv == Decimal("325.50")
        assert result.social_security.av == Decimal("45.50")
        assert result.social_security.pv == Decimal("84.00")
        assert result.netto == Decimal("2330.59")
        assert result.one_off is None

    def test_church_tax_reduces_netto(self):
        result = calculate_net_salary(profile(church_tax=True))
        assert result.taxes.kirchensteuer == Decimal("37.36")
        assert result.netto == Decimal("2293.23")

    def test_church_tax_changes_nothing_else(self):
        without = calculate_net_salary(profile())
        church = calculate_net_salary(profile(church_tax=True))
        assert church.taxes.lohnsteuer == without.taxes.lohnsteuer
        assert church.taxes.soli == without.taxes.soli
        assert church.social_security == without.social_security
        assert church.taxes.kirchensteuer > without.taxes.kirchensteuer

    def test_church_tax_bavaria(self):
        result = calculate_net_salary(profile(church_tax=True, state="BY"))
        assert result.taxes.kirchensteuer == Decimal("33.21")

    def test_high_income_with_surcharge(self):
        result = calculate_net_salary(profile(yearly_salary=96000, church_tax=True))
        assert result.taxes.lohnsteuer == Decimal("1847.25")
        assert result.taxes.soli == Decimal("21.98")
        assert result.taxes.kirchensteuer == Decimal("166.25")
        assert result.social_security.kv == Decimal("471.32")
        assert result.social_security.pv == Decimal("132.30")
        assert result.netto == Decimal("4512.90")

    def test_class_1_2026(self):
        result = calculate_net_salary(profile(year=2026))
        assert result.taxes.lohnsteuer == Decimal("405.50")
        assert result.social_security.kv == Decimal("306.25")
        assert result.netto == Decimal("2333.25")

    def test_class_3_two_children_2026(self):
        result = calculate_net_salary(profile(
            yearly_salary=60000, year=2026, tax_class=3, has_children=True, child_count=2,
        ))
        assert result.taxes.lohnsteuer == Decimal("412.83")
        assert result.taxes.soli == 0
        assert result.social_security.kv == Decimal("437.50")
        assert result.social_security.pv == Decimal("77.50")
        assert result.social_security.rv == Decimal("465.00")
        assert result.social_security.av == Decimal("65.00")
        assert result.netto == Decimal("3542.17")


class TestProfileEffects:

    def test_saxony_care_split(self):
        result = calculate_net_salary(profile(state="SN"))
        assert result.social_security.pv == Decimal("101.50")
        assert result.taxes.lohnsteuer < Decimal("415.16")

    def test_private_insurance(self):
        result = calculate_net_salary(profile(
            is_private_health_insurance=True, private_health_premium=500,
        ))
        assert result.social_security.kv == 0
        assert result.social_security.pv == 0
        assert result.social_security.rv == Decimal("325.50")

    def test_age_relief_lowers_tax(self):
        result = calculate_net_salary(profile(birth_year=1955))
        assert result.taxes.lohnsteuer < Decimal("415.16")

    def test_no_age_relief_before_65(self):
        result = calculate_net_salary(profile(birth_year=1961))
        assert result.taxes.lohnsteuer == Decimal("415.16")

    def test_one_off_payment(self):
        result = calculate_net_salary(profile(one_off_payment=5000))
        assert result.one_off is not None
        assert result.one_off.lohnsteuer == Decimal("1198.00")
        assert result.one_off.soli == 0
        assert result.one_off.kirchensteuer == 0
        # Yearly one-off taxes are reported separately
        assert result.netto == Decimal("2330.59")

    def test_add_on_rate_override(self):
        cheap = calculate_net_salary(profile(health_insurance_add_on_rate="1.5"))
        assert cheap.social_security.kv == Decimal("281.75")
        assert cheap.netto > Decimal("2330.59")

    def test_contributions_constant_above_ceilings(self):
        low = calculate_net_salary(profile(yearly_salary=110000))
        high = calculate_net_salary(profile(yearly_salary=150000))
        assert low.social_security == high.social_security

    def test_netto_increases_with_salary(self):
        nettos = [
            calculate_net_salary(profile(yearly_salary=salary, church_tax=True)).netto
            for salary in (15000, 25000, 42000, 60000, 80000, 100000, 150000, 300000)
        ]
        assert nettos == sorted(nettos)

    def test_deterministic(self):
        assert calculate_net_salary(profile()) == calculate_net_salary(profile())

    @pytest.mark.parametrize("tax_class", [1, 2, 3, 4, 5, 6])
    def test_all_classes_balance(self, tax_class):
        result = calculate_net_salary(profile(tax_class=tax_class))
        deductions = (
            result.taxes.lohnsteuer + result.taxes.soli + result.taxes.kirchensteuer
            + result.social_security.kv + result.social_security.rv
            + result.social_security.av + result.social_security.pv
        )
        # Each field is rounded separately, so allow a cent per field
        assert abs(result.gross - deductions - result.netto) <= Decimal("0.07")


class TestValidation:

    def test_camel_case_keys(self):
        result = calculate_net_salary({"yearlySalary": 42000, "year": 2025, "taxClass": 1})
        assert result.netto == Decimal("2330.59")

    def test_accepts_model(self):
        model = SalaryProfile(yearly_salary=Decimal(42000), year=2025, tax_class=1)
        assert calculate_net_salary(model).netto == Decimal("2330.59")

    def test_unsupported_year(self):
        with pytest.raises(UnsupportedYearError):
            calculate_net_salary(profile(year=2024))

    def test_invalid_tax_class(self):
        with pytest.raises(InvalidProfileError, match=r"(?i)tax_?class"):
            calculate_net_salary(profile(tax_class=7))

    def test_missing_salary(self):
        with pytest.raises(InvalidProfileError, match=r"(?i)yearly_?salary"):
            calculate_net_salary({"year": 2025, "tax_class": 1})

    def test_non_positive_salary(self):
        with pytest.raises(InvalidProfileError):
            calculate_net_salary(profile(yearly_salary=0))

    def test_unknown_state(self):
        with pytest.raises(InvalidProfileError):
            calculate_net_salary(profile(state="XX"))

    def test_unknown_field(self):
        with pytest.raises(InvalidProfileError):
            calculate_net_salary(profile(bonus=1))

    def test_children_without_flag(self):
        with pytest.raises(InvalidProfileError, match="child_count"):
            validate_profile(profile(child_count=2))

    def test_premium_without_private_insurance(self):
        with pytest.raises(InvalidProfileError, match="private_health_premium"):
            validate_profile(profile(private_health_premium=300))

    def test_birth_year_after_tax_year(self):
        with pytest.raises(InvalidProfileError, match="birth_year"):
            validate_profile(profile(birth_year=2030))


class TestBuildWageTaxInput:

    def test_childless_mapping(self):
        rules = load_tax_rules(2025)
        inp = build_wage_tax_input(validate_profile(profile()), rules)
        assert inp.pay_period == PayPeriod.MONTH
        assert inp.gross == 350000
        assert inp.care_childless is True
        assert inp.care_discount_units == 0
        assert inp.health_add_on_rate == Decimal("2.5")
        assert inp.one_off == 0

    def test_children_mapping(self):
        rules = load_tax_rules(2025)
        inp = build_wage_tax_input(
            validate_profile(profile(has_children=True, child_count=6)), rules,
        )
        assert inp.child_allowances == 6
        assert inp.care_childless is False
        assert inp.care_discount_units == 4

    def test_gross_truncated_to_cents(self):
        rules = load_tax_rules(2025)
        inp = build_wage_tax_input(validate_profile(profile(yearly_salary=50000)), rules)
        assert inp.gross == 416666

    def test_age_relief_mapping(self):
        rules = load_tax_rules(2025)
        inp = build_wage_tax_input(validate_profile(profile(birth_year=1955)), rules)
        assert inp.age_relief is True
        assert inp.age_relief_year == 2020

    def test_church_tax_rates(self):
        assert church_tax(Decimal(41516), FederalState.NW) == Decimal("37.36")
        assert church_tax(Decimal(41516), FederalState.BW) == Decimal("33.21")


class TestTaxResultDict:

    def test_wire_shape(self):
        data = calculate_net_salary(profile()).to_dict()
        assert set(data) == {"gross", "netto", "taxes", "socialSecurity"}
        assert data["netto"] == 2330.59
        assert data["taxes"] == {"lohnsteuer": 415.16, "soli": 0.0, "kirchensteuer": 0.0}
        assert data["socialSecurity"]["kv"] == 299.25

    def test_one_off_included(self):
        data = calculate_net_salary(profile(one_off_payment=5000)).to_dict()
        assert data["oneOff"]["lohnsteuer"] == 1198.0
