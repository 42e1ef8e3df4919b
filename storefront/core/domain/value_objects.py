"""
Base Value Object Classes

Value Objects are immutable domain primitives that have no identity.
They are compared by their values, not by reference.
"""

from abc import ABC
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Self

CENT = Decimal("0.01")


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for all value objects.

    Value objects are:
    - Immutable (frozen=True)
    - Compared by value (dataclass equality)
    - Have no identity
    """

    def __post_init__(self):
        """Override to add validation logic."""
        self._validate()

    def _validate(self) -> None:
        """Validate the value object. Override in subclasses."""
        pass


@dataclass(frozen=True)
class Money(ValueObject):
    """
    Money value object carried in integer minor units (cents).

    Sums never touch floating point; major units only appear through
    `to_major()` at the presentation boundary.

    Example:
        ```python
        price = Money(2000, "USD")
        total = price.multiply(3).add(Money(900, "USD"))
        total.to_major()  # Decimal("69.00")
        ```
    """

    cents: int
    currency: str = "USD"

    def _validate(self) -> None:
        """Validate money constraints."""
        if isinstance(self.cents, bool) or not isinstance(self.cents, int):
            raise ValueError("Money must be expressed in integer minor units")
        if self.cents < 0:
            raise ValueError("Money amount cannot be negative")
        if not self.currency or len(self.currency) != 3:
            raise ValueError("Currency must be a 3-letter ISO code")

    def add(self, other: "Money") -> "Money":
        """Add two Money values (must be same currency)."""
        if self.currency != other.currency:
            raise ValueError(f"Cannot add {self.currency} to {other.currency}")
        return Money(self.cents + other.cents, self.currency)

    def multiply(self, quantity: int) -> "Money":
        """Multiply by a whole quantity."""
        return Money(self.cents * quantity, self.currency)

    def scale(self, factor: Decimal | str) -> "Money":
        """Multiply by a decimal factor, rounding half up to the cent."""
        scaled = (Decimal(self.cents) * Decimal(str(factor))).quantize(Decimal("1"), ROUND_HALF_UP)
        return Money(int(scaled), self.currency)

    def to_major(self) -> Decimal:
        """Amount in major units with two decimals."""
        return (Decimal(self.cents) / 100).quantize(CENT, ROUND_HALF_UP)

    def is_zero(self) -> bool:
        return self.cents == 0

    def __str__(self) -> str:
        return f"{self.currency} {self.to_major():,.2f}"

    @classmethod
    def zero(cls, currency: str = "USD") -> "Money":
        """Create a zero Money value."""
        return cls(0, currency)

    @classmethod
    def from_major(cls, amount: Decimal | float | int | str, currency: str = "USD") -> "Money":
        """Create Money from a major-unit amount (e.g. 19.99) with proper rounding."""
        cents = (Decimal(str(amount)) * 100).quantize(Decimal("1"), ROUND_HALF_UP)
        return cls(int(cents), currency)

    @classmethod
    def sum(cls, values: list["Money"], currency: str = "USD") -> "Money":
        total = cls.zero(currency)
        for value in values:
            total = total.add(value)
        return total


class StatusEnum(str, Enum):
    """
    Base class for status enums.

    Provides common functionality for all status value objects.
    """

    @classmethod
    def values(cls) -> list[str]:
        """Get all possible values."""
        return [e.value for e in cls]

    @classmethod
    def from_string(cls, value: str) -> Self:
        """Create from string value (case-insensitive)."""
        for member in cls:
            if member.value.lower() == value.lower():
                return member
        raise ValueError(f"Invalid {cls.__name__}: {value}")
