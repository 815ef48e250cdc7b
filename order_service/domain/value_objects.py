"""
Value Objects for the order bounded context.

Value objects are immutable, self-validating, and compared by value.
They keep identifiers from different bounded contexts apart:
- Order IDs (generated here, or supplied when an order is reloaded)
- Customer IDs (owned by the customer context)
- Product IDs (owned by the catalog context)

Money and Quantity carry the arithmetic used to price an order.
"""

import uuid
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

from .exceptions import CurrencyMismatchError, InvalidValueError

AmountLike = Union[Decimal, int, float, str]

MONEY_SCALE = Decimal("0.01")


def _require_text(value: object, type_name: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise InvalidValueError(f"{type_name} cannot be empty")


@dataclass(frozen=True)
class OrderId:
    """
    Order identity value object.

    Format: UUID4 string when generated by this context.
    Example: 550e8400-e29b-41d4-a716-446655440000

    Any non-blank string is accepted when an existing order is reloaded.
    """

    value: str

    def __post_init__(self):
        _require_text(self.value, "OrderId")

    @classmethod
    def generate(cls) -> "OrderId":
        """Create a new random OrderId"""
        return cls(str(uuid.uuid4()))

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"OrderId('{self.value}')"


@dataclass(frozen=True)
class CustomerId:
    """
    Customer identity value object.

    Always supplied by the customer context; never generated here.
    """

    value: str

    def __post_init__(self):
        _require_text(self.value, "CustomerId")

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"CustomerId('{self.value}')"


@dataclass(frozen=True)
class ProductId:
    """
    Product identity value object.

    Always supplied by the catalog context; never generated here.
    """

    value: str

    def __post_init__(self):
        _require_text(self.value, "ProductId")

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"ProductId('{self.value}')"


@dataclass(frozen=True)
class Quantity:
    """Number of units of a product in an order line. Always positive."""

    value: int

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise InvalidValueError(
                f"Quantity must be an integer, got {self.value!r}"
            )
        if self.value <= 0:
            raise InvalidValueError(
                f"Quantity must be greater than zero, got {self.value}"
            )

    @classmethod
    def of(cls, value: int) -> "Quantity":
        return cls(value)

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)

    def __repr__(self) -> str:
        return f"Quantity({self.value})"


def _to_decimal(amount: AmountLike) -> Decimal:
    """
    Convert a raw amount to Decimal without float artefacts.

    Floats go through their shortest repr, so 100.005 becomes
    Decimal('100.005') rather than Decimal('100.00499999...').
    """
    if amount is None:
        raise InvalidValueError("Money amount cannot be None")
    if isinstance(amount, bool):
        raise InvalidValueError(f"Invalid money amount: {amount!r}")

    if isinstance(amount, Decimal):
        value = amount
    elif isinstance(amount, float):
        value = Decimal(repr(amount))
    elif isinstance(amount, (int, str)):
        try:
            value = Decimal(amount.strip() if isinstance(amount, str) else amount)
        except InvalidOperation:
            raise InvalidValueError(f"Invalid money amount: {amount!r}")
    else:
        raise InvalidValueError(f"Invalid money amount: {amount!r}")

    if not value.is_finite():
        raise InvalidValueError(f"Money amount must be finite, got {amount!r}")
    return value


@dataclass(frozen=True)
class Money:
    """
    Monetary amount with a currency.

    Amounts are exact decimals stored at 2 fractional digits, rounded
    half-up at construction. Currency codes are upper-cased.

    Every operation returns a new instance; operations between different
    currencies raise CurrencyMismatchError.
    """

    amount: Decimal
    currency: str

    def __post_init__(self):
        value = _to_decimal(self.amount)
        if value < 0:
            raise InvalidValueError(f"Money amount cannot be negative: {value}")
        _require_text(self.currency, "Currency")

        try:
            scaled = value.quantize(MONEY_SCALE, rounding=ROUND_HALF_UP)
        except InvalidOperation:
            raise InvalidValueError(f"Money amount out of range: {value}")

        # frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "amount", scaled.copy_abs())
        object.__setattr__(self, "currency", self.currency.strip().upper())

    @classmethod
    def of(cls, amount: AmountLike, currency: str) -> "Money":
        """Create Money, e.g. Money.of("1000.00", "COP")"""
        return cls(amount, currency)

    @classmethod
    def zero(cls, currency: str) -> "Money":
        """Create a zero amount in the given currency"""
        return cls(Decimal("0"), currency)

    def add(self, other: "Money") -> "Money":
        """Sum of two amounts in the same currency"""
        self._require_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def multiply(self, factor: int) -> "Money":
        """
        Scale the amount by an integer factor (e.g. a line quantity).

        Raises:
            InvalidValueError: If factor is not an integer or makes the amount negative
        """
        if isinstance(factor, bool) or not isinstance(factor, int):
            raise InvalidValueError(
                f"Money can only be multiplied by an integer, got {factor!r}"
            )
        return Money(self.amount * factor, self.currency)

    def is_greater_than(self, other: "Money") -> bool:
        self._require_same_currency(other)
        return self.amount > other.amount

    def is_zero(self) -> bool:
        return self.amount == 0

    def _require_same_currency(self, other: "Money") -> None:
        if not isinstance(other, Money):
            raise InvalidValueError(f"Expected Money, got {type(other).__name__}")
        if self.currency != other.currency:
            raise CurrencyMismatchError(self.currency, other.currency)

    def __str__(self) -> str:
        return f"{self.currency} {self.amount:f}"

    def __repr__(self) -> str:
        return f"Money('{self.amount:f}', '{self.currency}')"
