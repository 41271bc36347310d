"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from commerce.domain.exceptions import (
    CurrencyMismatchError,
    InvalidAmountError,
    InvalidCurrencyError,
    InvalidQuantityError,
    NegativeResultError,
)
from commerce.domain.model.value_objects import Money, Quantity


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoneyCreation:

    def test_of_defaults_to_cny(self):
        m = Money.of("10.50")
        assert m.amount == Decimal("10.50")
        assert m.currency == "CNY"

    def test_of_from_int_and_float(self):
        assert Money.of(10).amount == Decimal("10.00")
        assert Money.of(0.1).amount == Decimal("0.10")

    def test_amount_always_has_two_places(self):
        assert str(Money.of("7").amount) == "7.00"

    def test_rounds_half_up(self):
        assert Money.of("2.345").amount == Decimal("2.35")
        assert Money.of("2.344").amount == Decimal("2.34")
        assert Money.of("0.005").amount == Decimal("0.01")

    def test_currency_is_normalised(self):
        assert Money.of("1", " usd ").currency == "USD"

    def test_negative_amount_rejected(self):
        with pytest.raises(InvalidAmountError, match="cannot be negative"):
            Money.of("-1")

    def test_none_amount_rejected(self):
        with pytest.raises(InvalidAmountError, match="null"):
            Money.of(None)

    def test_garbage_amount_rejected(self):
        with pytest.raises(InvalidAmountError, match="Invalid money amount"):
            Money.of("ten")

    def test_empty_currency_rejected(self):
        with pytest.raises(InvalidAmountError, match="Currency"):
            Money.of("1", "  ")

    def test_unsupported_currency_rejected(self):
        with pytest.raises(InvalidCurrencyError, match="Unsupported currency"):
            Money.of("1", "XYZ")

    def test_zero(self):
        assert Money.zero("EUR").is_zero()
        assert Money.zero("EUR").currency == "EUR"

    def test_large_amount_keeps_cents(self):
        m = Money.of("100000000000000000000000000000")
        assert str(m) == "100000000000000000000000000000.00 CNY"
        assert Money.of("1e30").amount == Decimal("1000000000000000000000000000000.00")

    def test_amount_beyond_range_rejected(self):
        with pytest.raises(InvalidAmountError, match="out of range"):
            Money.of("1e200")

    def test_infinite_amount_rejected(self):
        with pytest.raises(InvalidAmountError, match="finite"):
            Money.of("Infinity")


class TestMoneyArithmetic:

    @pytest.mark.parametrize(
        "a, b, expected",
        [
            ("10", "5.50", "15.50"),
            ("0.01", "0.02", "0.03"),
            ("1.005", "1.005", "2.02"),  # each operand is rounded first
        ],
    )
    def test_add(self, a, b, expected):
        assert Money.of(a).add(Money.of(b)).amount == Decimal(expected)

    def test_operator_add(self):
        assert Money.of("10") + Money.of("5.50") == Money.of("15.50")

    def test_subtract(self):
        assert Money.of("10").subtract(Money.of("3")) == Money.of("7")

    def test_subtract_self_is_zero(self):
        m = Money.of("42.42")
        assert m.subtract(m).is_zero()

    def test_subtract_larger_rejected(self):
        with pytest.raises(NegativeResultError, match="negative"):
            Money.of("5") - Money.of("5.01")

    def test_multiply_by_int(self):
        assert Money.of("7.50").multiply(3) == Money.of("22.50")
        assert Money.of("7.50") * 3 == Money.of("22.50")

    def test_multiply_by_decimal_rounds(self):
        assert Money.of("10.00").multiply(Decimal("0.333")) == Money.of("3.33")
        assert Money.of("10.00").multiply(Decimal("0.3335")) == Money.of("3.34")

    def test_multiply_by_zero(self):
        assert Money.of("10").multiply(0).is_zero()

    def test_negative_factor_rejected(self):
        with pytest.raises(InvalidAmountError, match="Factor cannot be negative"):
            Money.of("10").multiply(-2)

    def test_large_sum_is_exact(self):
        big = Money.of("99999999999999999999999999.99")
        assert (big + big).amount == Decimal("199999999999999999999999999.98")
        assert (big * 3).amount == Decimal("299999999999999999999999999.97")
        assert (big - Money.of("0.99")).amount == Decimal("99999999999999999999999999.00")

    def test_overflowing_product_rejected(self):
        with pytest.raises(InvalidAmountError, match="out of range"):
            Money.of("1e90").multiply(10**20)

    @pytest.mark.parametrize("factor", [Decimal("NaN"), Decimal("sNaN"), Decimal("Infinity")])
    def test_non_finite_factor_rejected(self, factor):
        with pytest.raises(InvalidAmountError, match="finite"):
            Money.of("10").multiply(factor)

    def test_float_factor_rejected(self):
        with pytest.raises(TypeError):
            Money.of("10").multiply(1.5)

    def test_currency_mismatch_rejected(self):
        with pytest.raises(CurrencyMismatchError, match="Currency mismatch"):
            Money.of("10", "USD") + Money.of("5", "EUR")

    def test_operations_return_new_values(self):
        m = Money.of("10")
        m.add(Money.of("1"))
        assert m == Money.of("10")


class TestMoneyComparison:

    def test_named_comparisons(self):
        assert Money.of("10").is_greater_than(Money.of("5"))
        assert Money.of("10").is_greater_than_or_equal(Money.of("10"))
        assert Money.of("5").is_less_than(Money.of("10"))
        assert Money.of("5").is_less_than_or_equal(Money.of("5"))

    def test_comparison_operators(self):
        assert Money.of("5") < Money.of("10")
        assert Money.of("10") > Money.of("5")
        assert Money.of("10") >= Money.of("10")
        assert Money.of("10") <= Money.of("10")

    def test_comparison_currency_mismatch(self):
        with pytest.raises(CurrencyMismatchError):
            Money.of("1", "USD").is_greater_than(Money.of("1", "CNY"))

    def test_equal_regardless_of_input_scale(self):
        assert Money.of("10") == Money.of("10.00")

    def test_is_positive(self):
        assert Money.of("0.01").is_positive()
        assert not Money.zero().is_positive()

    def test_str_formatting(self):
        assert str(Money.of("15")) == "15.00 CNY"
        assert str(Money.of("9.5", "USD")) == "9.50 USD"


# ── Quantity ─────────────────────────────────────────────────────────────────


class TestQuantity:

    def test_valid_quantity(self):
        assert Quantity(5).value == 5

    def test_zero_rejected(self):
        with pytest.raises(InvalidQuantityError, match="must be positive"):
            Quantity(0)

    def test_negative_rejected(self):
        with pytest.raises(InvalidQuantityError, match="must be positive"):
            Quantity(-3)

    def test_bool_rejected(self):
        with pytest.raises(InvalidQuantityError, match="integer"):
            Quantity(True)
