"""Tests for the fixed-point helpers used by the wage-tax procedure."""

from decimal import Decimal

import pytest

from nettocalc.sdk.errors import InvariantViolation
from nettocalc.sdk.taxes.fixed import Rounding, divide, set_scale, to_int


class TestSetScale:
    """Rescaling in an explicit direction."""

    def test_down_truncates(self):
        assert set_scale(Decimal("394.66596"), 2, Rounding.DOWN) == Decimal("394.66")

    def test_up_rounds_away_from_zero(self):
        assert set_scale(Decimal("394.661"), 2, Rounding.UP) == Decimal("394.67")

    def test_exact_value_unchanged(self):
        assert set_scale(Decimal("12.50"), 2, Rounding.UP) == Decimal("12.50")

    def test_negative_values(self):
        """DOWN is toward zero, UP away from zero, also for negatives."""
        assert set_scale(Decimal("-1.239"), 2, Rounding.DOWN) == Decimal("-1.23")
        assert set_scale(Decimal("-1.231"), 2, Rounding.UP) == Decimal("-1.24")

    def test_zero_places(self):
        assert set_scale(Decimal("4982.999"), 0, Rounding.DOWN) == Decimal("4982")
        assert set_scale(Decimal("4982.001"), 0, Rounding.UP) == Decimal("4983")

    def test_result_has_requested_exponent(self):
        assert set_scale(Decimal("7"), 2, Rounding.DOWN).as_tuple().exponent == -2


class TestDivide:
    """Division with optional rescaling."""

    def test_exact_quotient(self):
        assert divide(Decimal(350000) * 12, 100) == Decimal(42000)

    def test_rescaled_quotient(self):
        assert divide(498200, 12, 0, Rounding.DOWN) == Decimal(41516)
        assert divide(498200, 12, 0, Rounding.UP) == Decimal(41517)

    def test_zero_divisor_raises(self):
        with pytest.raises(InvariantViolation):
            divide(Decimal(1), 0)

    def test_zero_divisor_is_zero_division_error(self):
        """Callers catching ZeroDivisionError still see the violation."""
        with pytest.raises(ZeroDivisionError):
            divide(Decimal(1), Decimal(0), 2, Rounding.DOWN)

    def test_places_without_rounding_rejected(self):
        with pytest.raises(ValueError):
            divide(Decimal(1), 3, 2)


class TestToInt:

    def test_truncates(self):
        assert to_int(Decimal("12.99")) == 12
        assert to_int(Decimal("-12.99")) == -12
