"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import (
    ROUND_HALF_UP,
    Context,
    Decimal,
    DivisionByZero,
    InvalidOperation,
    Overflow,
    localcontext,
)

from commerce.domain.exceptions import (
    CurrencyMismatchError,
    InvalidAmountError,
    InvalidCurrencyError,
    InvalidQuantityError,
    NegativeResultError,
)

DEFAULT_CURRENCY = "CNY"

# ISO 4217 codes accepted by the platform
SUPPORTED_CURRENCIES = frozenset(
    {"CNY", "USD", "EUR", "GBP", "JPY", "HKD", "SGD", "AUD", "CAD"}
)

_CENTS = Decimal("0.01")

# Precision for all money arithmetic and rounding; amounts that need more
# digits are rejected.
_MONEY_CONTEXT = Context(
    prec=100,
    rounding=ROUND_HALF_UP,
    traps=[InvalidOperation, DivisionByZero, Overflow],
)


def normalize_currency(currency: str | None) -> str:
    """Upper-case and validate a currency code."""
    if currency is None or not currency.strip():
        raise InvalidAmountError("Currency cannot be null or empty")
    code = currency.strip().upper()
    if code not in SUPPORTED_CURRENCIES:
        raise InvalidCurrencyError(
            f"Unsupported currency: {currency}. "
            f"Supported currencies: {', '.join(sorted(SUPPORTED_CURRENCIES))}"
        )
    return code


@dataclass(frozen=True)
class Money:
    """Monetary amount with currency.

    Uses Decimal to avoid floating-point rounding errors that would be
    unacceptable in financial calculations.  The amount is quantized to
    two places (ROUND_HALF_UP) as soon as the value is built, so chained
    arithmetic never carries more precision than a cent.
    """

    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise InvalidAmountError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise InvalidAmountError(f"Money amount must be finite, got {self.amount}")
        if self.amount < Decimal("0"):
            raise InvalidAmountError(
                f"Money amount cannot be negative, got {self.amount}"
            )
        try:
            with localcontext(_MONEY_CONTEXT):
                rounded = self.amount.quantize(_CENTS)
        except InvalidOperation as exc:
            raise InvalidAmountError(
                f"Money amount out of range: {self.amount}"
            ) from exc
        object.__setattr__(self, "amount", rounded)
        object.__setattr__(self, "currency", normalize_currency(self.currency))

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def of(
        amount: str | float | int | Decimal | None,
        currency: str = DEFAULT_CURRENCY,
    ) -> Money:
        """Convenient factory that coerces to Decimal safely."""
        if amount is None:
            raise InvalidAmountError("Amount cannot be null")
        if isinstance(amount, bool):
            raise InvalidAmountError(f"Invalid money amount: {amount!r}")
        try:
            value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
        except (InvalidOperation, ValueError) as exc:
            raise InvalidAmountError(f"Invalid money amount: {amount!r}") from exc
        return Money(value, currency)

    @staticmethod
    def zero(currency: str = DEFAULT_CURRENCY) -> Money:
        return Money(Decimal("0"), currency)

    # --- Arithmetic -----------------------------------------------------------

    def add(self, other: Money) -> Money:
        self._assert_same_currency(other)
        with localcontext(_MONEY_CONTEXT):
            result = self.amount + other.amount
        return Money(result, self.currency)

    def subtract(self, other: Money) -> Money:
        self._assert_same_currency(other)
        with localcontext(_MONEY_CONTEXT):
            result = self.amount - other.amount
        if result < Decimal("0"):
            raise NegativeResultError(
                f"Cannot subtract {other} from {self}: result would be negative"
            )
        return Money(result, self.currency)

    def multiply(self, factor: int | Decimal) -> Money:
        """Scale by a non-negative int or Decimal factor."""
        if isinstance(factor, bool) or not isinstance(factor, (int, Decimal)):
            raise TypeError(
                f"Can only multiply Money by int or Decimal, got {type(factor).__name__}"
            )
        if isinstance(factor, Decimal) and not factor.is_finite():
            raise InvalidAmountError(f"Factor must be finite, got {factor}")
        if factor < 0:
            raise InvalidAmountError(
                f"Factor cannot be negative in money operations. Factor: {factor}"
            )
        with localcontext(_MONEY_CONTEXT):
            result = self.amount * factor
        return Money(result, self.currency)

    __add__ = add
    __sub__ = subtract
    __mul__ = multiply

    # --- Comparison -----------------------------------------------------------

    def is_zero(self) -> bool:
        return self.amount == Decimal("0")

    def is_positive(self) -> bool:
        return self.amount > Decimal("0")

    def is_greater_than(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount > other.amount

    def is_greater_than_or_equal(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount >= other.amount

    def is_less_than(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount < other.amount

    def is_less_than_or_equal(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount <= other.amount

    __gt__ = is_greater_than
    __ge__ = is_greater_than_or_equal
    __lt__ = is_less_than
    __le__ = is_less_than_or_equal

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.amount:.2f} {self.currency}"

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Money) -> None:
        if other is None:
            raise InvalidAmountError("Other money cannot be null")
        if self.currency != other.currency:
            raise CurrencyMismatchError(
                f"Currency mismatch: {self.currency} vs {other.currency}"
            )


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    Enforces the invariant that you cannot order zero or negative items.
    """

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise InvalidQuantityError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise InvalidQuantityError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)
