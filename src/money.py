from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import ClassVar

from errors import MalformedAmount, Overflow, Underflow

DECIMAL_PLACES = 4
SCALE = 10 ** DECIMAL_PLACES
QUANTUM = Decimal(1).scaleb(-DECIMAL_PLACES)

# 10_000_000_000.0000 expressed in 1/10000ths
MAX_UNITS = 100_000_000_000_000


@dataclass(frozen=True, order=True)
class Money:
    """
    Non-negative fixed-point amount with exactly 4 fractional digits.

    Stored as an integer count of 1/10000ths so that repeated additions and
    subtractions stay exact. Every instance satisfies 0 <= units <= MAX_UNITS;
    arithmetic that would leave that range raises instead of wrapping or clamping.
    """

    units: int = 0

    ZERO: ClassVar["Money"]
    MAX: ClassVar["Money"]

    def __post_init__(self):
        if not isinstance(self.units, int) or isinstance(self.units, bool):
            raise TypeError(f"money units must be an int, got {type(self.units).__name__}")
        if self.units < 0:
            raise Underflow(f"money cannot be negative ({self.units} units)")
        if self.units > MAX_UNITS:
            raise Overflow(f"money exceeds maximum of {MAX_UNITS} units ({self.units} units)")

    @classmethod
    def from_decimal_string(cls, text: str) -> "Money":
        """
        Parse a decimal literal such as "1.5" or "0.00005".

        Rounds to 4 fractional digits, half away from zero. Raises MalformedAmount
        for anything that is not a finite, non-negative amount within the bound.
        """
        try:
            value = Decimal(text.strip())
            if not value.is_finite():
                raise MalformedAmount(f"amount is not a finite number: {text!r}")
            if value.adjusted() > 20:
                # far outside the bound, would not fit the decimal context when quantized
                raise MalformedAmount(f"amount is {'negative' if value < 0 else 'too big'}: {text!r}")
            # round once at the target precision, then scale exactly
            units = int(value.quantize(QUANTUM, rounding=ROUND_HALF_UP).scaleb(DECIMAL_PLACES))
        except (InvalidOperation, AttributeError) as e:
            raise MalformedAmount(f"amount is not a decimal number: {text!r}") from e

        if units < 0:
            raise MalformedAmount(f"amount is negative: {text!r}")
        if units > MAX_UNITS:
            raise MalformedAmount(f"amount is too big: {text!r}")
        return cls(units)

    def checked_add(self, other: "Money") -> "Money":
        total = self.units + other.units
        if total > MAX_UNITS:
            raise Overflow(f"{self} + {other} exceeds maximum of {Money.MAX}")
        return Money(total)

    def checked_sub(self, other: "Money") -> "Money":
        if other.units > self.units:
            raise Underflow(f"{self} - {other} would be negative")
        return Money(self.units - other.units)

    def to_decimal(self) -> Decimal:
        return Decimal(self.units).scaleb(-DECIMAL_PLACES)

    def __str__(self) -> str:
        whole, fraction = divmod(self.units, SCALE)
        return f"{whole}.{fraction:0{DECIMAL_PLACES}d}"

    def __repr__(self) -> str:
        return f"Money({self})"


Money.ZERO = Money(0)
Money.MAX = Money(MAX_UNITS)
