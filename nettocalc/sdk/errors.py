"""Exceptions raised by the SDK."""


class InvalidProfileError(ValueError):
    """A salary profile fails a precondition; the message names the field."""


class UnsupportedYearError(InvalidProfileError):
    """No rule file exists for the requested tax year."""

    def __init__(self, year: int, supported: list[int]):
        self.year = year
        self.supported = supported
        years = ", ".join(str(y) for y in supported) or "none"
        super().__init__(f"year: tax year {year} is not supported (supported: {years})")


class TaxRulesError(ValueError):
    """A tax-rules file exists but fails schema validation."""


class InvariantViolation(ZeroDivisionError):
    """The wage-tax procedure divided by zero.

    Valid profiles never reach a zero divisor, so this signals a defect in
    the input mapping rather than a recoverable condition.
    """


__all__ = [
    "InvalidProfileError",
    "UnsupportedYearError",
    "TaxRulesError",
    "InvariantViolation",
]
