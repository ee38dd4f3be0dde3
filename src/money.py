import re
from dataclasses import dataclass
from decimal import Decimal
from fractions import Fraction
from typing import Optional


class ParseError(ValueError):
    """Raised when a money literal is not a valid decimal number."""


_MONEY_PATTERN = re.compile(r"^([+-]?)([0-9]+)(?:\.([0-9]+))?$")


@dataclass(frozen=True, order=True)
class Money:
    """
    Exact currency amount backed by a rational number.
    Arithmetic and comparisons never touch floating point.
    """

    value: Fraction = Fraction(0)

    # Input amounts carry at most this many fractional digits.
    PRECISION = 4

    @classmethod
    def zero(cls) -> "Money":
        return cls(Fraction(0))

    @classmethod
    def parse(cls, text: str) -> "Money":
        """
        Parse a decimal literal such as "12", "-3.5" or "1.10015".

        Fractional digits past PRECISION are truncated, not rounded,
        so "1.10015" parses to 1.1001.

        Raises:
            ParseError: text is not a plain decimal number
        """
        match = _MONEY_PATTERN.match(text.strip())
        if match is None:
            raise ParseError(f"invalid money literal: {text!r}")

        sign, integral, fraction = match.groups()
        value = Fraction(int(integral), 1)
        if fraction:
            digits = fraction[:cls.PRECISION]
            value += Fraction(int(digits), 10 ** len(digits))
        # The sign covers the whole literal: "-1.5" is -3/2, not -1 + 5/10.
        if sign == "-":
            value = -value
        return cls(value)

    @classmethod
    def parse_optional(cls, text: Optional[str]) -> Optional["Money"]:
        """Parse an amount column; an empty value means the record has no amount."""
        if text is None or not text.strip():
            return None
        return cls.parse(text)

    def __add__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        return Money(self.value + other.value)

    def __sub__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        return Money(self.value - other.value)

    def is_negative(self) -> bool:
        return self.value < 0

    def to_decimal(self) -> Decimal:
        return Decimal(self.value.numerator) / Decimal(self.value.denominator)

    def __str__(self) -> str:
        """Format as a plain decimal string, removing trailing zeros."""
        normalized = self.to_decimal().normalize()
        return f"{normalized:f}"

    def __repr__(self) -> str:
        return f"Money({self})"
