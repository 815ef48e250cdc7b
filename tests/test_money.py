"""
Unit tests for Money: rounding, currency handling and arithmetic.
"""
from decimal import Decimal

import pytest

from order_service.domain import CurrencyMismatchError, InvalidValueError, Money


class TestConstruction:
    def test_rounds_half_up_to_two_decimals(self):
        assert Money.of(100.005, "COP").amount == Decimal("100.01")
        assert Money.of(100.004, "COP").amount == Decimal("100.00")
        assert Money.of("0.125", "USD").amount == Decimal("0.13")

    def test_accepts_decimal_int_and_string(self):
        assert Money.of(Decimal("10"), "COP").amount == Decimal("10.00")
        assert Money.of(10, "COP").amount == Decimal("10.00")
        assert Money.of(" 10.5 ", "COP").amount == Decimal("10.50")

    def test_currency_is_upper_cased(self):
        assert Money.of("1", "cop").currency == "COP"
        assert Money.of("1", " usd ").currency == "USD"

    @pytest.mark.parametrize("amount", ["-0.01", -5, "abc", None, True, "NaN", "Infinity", [1]])
    def test_invalid_amounts_rejected(self, amount):
        with pytest.raises(InvalidValueError):
            Money.of(amount, "COP")

    @pytest.mark.parametrize("currency", ["", "  ", None])
    def test_blank_currency_rejected(self, currency):
        with pytest.raises(InvalidValueError):
            Money.of("1", currency)

    def test_zero(self):
        zero = Money.zero("cop")
        assert zero.is_zero()
        assert zero == Money.of("0.00", "COP")

    def test_negative_zero_normalised(self):
        assert str(Money.of("-0.00", "COP")) == "COP 0.00"

    def test_str_and_repr(self):
        money = Money.of("100", "COP")
        assert str(money) == "COP 100.00"
        assert repr(money) == "Money('100.00', 'COP')"


class TestEquality:
    def test_equal_by_amount_and_currency(self):
        assert Money.of("10", "COP") == Money.of("10.00", "cop")
        assert hash(Money.of("10", "COP")) == hash(Money.of(10.0, "COP"))

    def test_different_currency_not_equal(self):
        assert Money.of("10", "COP") != Money.of("10", "USD")

    def test_immutable(self):
        money = Money.of("10", "COP")
        with pytest.raises(AttributeError):
            money.amount = Decimal("20")


class TestArithmetic:
    def test_add(self):
        assert Money.of("10.10", "COP").add(Money.of("0.90", "COP")) == Money.of("11", "COP")

    def test_add_mismatched_currency(self):
        with pytest.raises(CurrencyMismatchError) as exc_info:
            Money.of("1", "COP").add(Money.of("1", "USD"))
        assert exc_info.value.expected == "COP"
        assert exc_info.value.actual == "USD"

    def test_add_returns_new_instance(self):
        a = Money.of("1", "COP")
        b = a.add(Money.of("2", "COP"))
        assert a == Money.of("1", "COP")
        assert b == Money.of("3", "COP")

    def test_multiply_matches_repeated_add(self):
        price = Money.of("19.99", "COP")
        repeated = Money.zero("COP")
        for _ in range(7):
            repeated = repeated.add(price)
        assert price.multiply(7) == repeated

    def test_multiply_by_zero(self):
        assert Money.of("5", "COP").multiply(0).is_zero()

    @pytest.mark.parametrize("factor", [1.5, "2", True, None])
    def test_multiply_requires_integer(self, factor):
        with pytest.raises(InvalidValueError):
            Money.of("5", "COP").multiply(factor)

    def test_multiply_negative_rejected(self):
        with pytest.raises(InvalidValueError):
            Money.of("5", "COP").multiply(-1)

    def test_is_greater_than(self):
        assert Money.of("2", "COP").is_greater_than(Money.of("1", "COP"))
        assert not Money.of("1", "COP").is_greater_than(Money.of("1", "COP"))

    def test_compare_mismatched_currency(self):
        with pytest.raises(CurrencyMismatchError):
            Money.of("2", "COP").is_greater_than(Money.of("1", "USD"))
