import math
from fractions import Fraction
from typing import TYPE_CHECKING, Self

from swaprouter.constants import MAX_UINT256
from swaprouter.currency.token import Currency, currency_equals
from swaprouter.exceptions import CurrencyMismatch, InvalidUint256

if TYPE_CHECKING:
    from swaprouter.currency.price import Percent


def _as_fraction(value: "int | Fraction | Percent") -> Fraction:
    return value if isinstance(value, (int, Fraction)) else value.fraction


class CurrencyAmount:
    """
    An exact amount of a currency, in its smallest unit. The amount is held as a fraction so that
    intermediate arithmetic never loses precision; `quotient` floors it to the integer amount that
    appears on-chain.
    """

    __slots__ = ("currency", "fraction")

    def __init__(self, currency: Currency, amount: int | Fraction) -> None:
        fraction = Fraction(amount)
        if math.floor(fraction) > MAX_UINT256:
            raise InvalidUint256
        self.currency = currency
        self.fraction = fraction

    @classmethod
    def from_raw_amount(cls, currency: Currency, raw_amount: int) -> Self:
        return cls(currency, raw_amount)

    @classmethod
    def from_fractional_amount(cls, currency: Currency, numerator: int, denominator: int) -> Self:
        return cls(currency, Fraction(numerator, denominator))

    @property
    def quotient(self) -> int:
        return math.floor(self.fraction)

    @property
    def wrapped(self) -> "CurrencyAmount":
        if not self.currency.is_native:
            return self
        return CurrencyAmount(self.currency.wrapped, self.fraction)

    def _check_currency(self, other: "CurrencyAmount") -> None:
        if not currency_equals(self.currency, other.currency):
            raise CurrencyMismatch(
                message=f"Cannot combine amounts of {self.currency} and {other.currency}"
            )

    def add(self, other: "CurrencyAmount") -> "CurrencyAmount":
        self._check_currency(other)
        return CurrencyAmount(self.currency, self.fraction + other.fraction)

    def subtract(self, other: "CurrencyAmount") -> "CurrencyAmount":
        self._check_currency(other)
        return CurrencyAmount(self.currency, self.fraction - other.fraction)

    def multiply(self, other: "int | Fraction | Percent") -> "CurrencyAmount":
        return CurrencyAmount(self.currency, self.fraction * _as_fraction(other))

    def divide(self, other: "int | Fraction | Percent") -> "CurrencyAmount":
        return CurrencyAmount(self.currency, self.fraction / _as_fraction(other))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CurrencyAmount):
            return NotImplemented
        return currency_equals(self.currency, other.currency) and self.fraction == other.fraction

    def __hash__(self) -> int:
        return hash((self.currency, self.fraction))

    def __lt__(self, other: "CurrencyAmount") -> bool:
        self._check_currency(other)
        return self.fraction < other.fraction

    def __le__(self, other: "CurrencyAmount") -> bool:
        self._check_currency(other)
        return self.fraction <= other.fraction

    def __gt__(self, other: "CurrencyAmount") -> bool:
        self._check_currency(other)
        return self.fraction > other.fraction

    def __ge__(self, other: "CurrencyAmount") -> bool:
        self._check_currency(other)
        return self.fraction >= other.fraction

    def __repr__(self) -> str:
        return f"CurrencyAmount({self.currency!r}, {self.fraction})"
