import decimal
from fractions import Fraction

from swaprouter.currency.amount import CurrencyAmount
from swaprouter.currency.token import Currency, currency_equals
from swaprouter.exceptions import CurrencyMismatch, SwapRouterValueError


def _to_significant(value: Fraction, significant_digits: int) -> str:
    if significant_digits <= 0:
        raise SwapRouterValueError(message=f"{significant_digits} is not positive.")

    context = decimal.Context(prec=significant_digits, rounding=decimal.ROUND_HALF_UP)
    quotient = context.divide(decimal.Decimal(value.numerator), decimal.Decimal(value.denominator))
    return format(quotient.normalize(context), "f")


def _to_fixed(value: Fraction, decimal_places: int) -> str:
    quotient = decimal.Decimal(value.numerator) / decimal.Decimal(value.denominator)
    return format(
        quotient.quantize(decimal.Decimal(1).scaleb(-decimal_places), rounding=decimal.ROUND_HALF_UP),
        "f",
    )


class Percent:
    """
    An exact percentage, stored as the fraction it represents (e.g. 1% is 1/100).
    """

    __slots__ = ("fraction",)

    def __init__(self, numerator: int | Fraction, denominator: int = 1) -> None:
        self.fraction = Fraction(numerator, denominator)

    @staticmethod
    def _coerce(other: "Percent | Fraction | int") -> Fraction:
        return other.fraction if isinstance(other, Percent) else Fraction(other)

    @property
    def numerator(self) -> int:
        return self.fraction.numerator

    @property
    def denominator(self) -> int:
        return self.fraction.denominator

    def add(self, other: "Percent | Fraction | int") -> "Percent":
        return Percent(self.fraction + self._coerce(other))

    def subtract(self, other: "Percent | Fraction | int") -> "Percent":
        return Percent(self.fraction - self._coerce(other))

    def multiply(self, other: "Percent | Fraction | int") -> "Percent":
        return Percent(self.fraction * self._coerce(other))

    def divide(self, other: "Percent | Fraction | int") -> "Percent":
        return Percent(self.fraction / self._coerce(other))

    def invert(self) -> "Percent":
        return Percent(1 / self.fraction)

    def less_than(self, other: "Percent | Fraction | int") -> bool:
        return self.fraction < self._coerce(other)

    def greater_than(self, other: "Percent | Fraction | int") -> bool:
        return self.fraction > self._coerce(other)

    def equal_to(self, other: "Percent | Fraction | int") -> bool:
        return self.fraction == self._coerce(other)

    def to_significant(self, significant_digits: int = 5) -> str:
        """
        Format the percentage (e.g. 0.172 -> '17.2') to the given number of significant digits.
        """

        return _to_significant(self.fraction * 100, significant_digits)

    def to_fixed(self, decimal_places: int = 2) -> str:
        return _to_fixed(self.fraction * 100, decimal_places)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Percent):
            return NotImplemented
        return self.fraction == other.fraction

    def __hash__(self) -> int:
        return hash(self.fraction)

    def __repr__(self) -> str:
        return f"Percent({self.fraction})"


class Price:
    """
    The raw exchange rate between two currencies, measured in the smallest unit of each: one raw
    unit of `base_currency` is worth `numerator / denominator` raw units of `quote_currency`.
    """

    __slots__ = ("base_currency", "fraction", "quote_currency")

    def __init__(
        self,
        base_currency: Currency,
        quote_currency: Currency,
        denominator: int,
        numerator: int,
    ) -> None:
        self.base_currency = base_currency
        self.quote_currency = quote_currency
        self.fraction = Fraction(numerator, denominator)

    @classmethod
    def _from_fraction(cls, base: Currency, quote: Currency, fraction: Fraction) -> "Price":
        return cls(base, quote, fraction.denominator, fraction.numerator)

    @property
    def numerator(self) -> int:
        return self.fraction.numerator

    @property
    def denominator(self) -> int:
        return self.fraction.denominator

    @property
    def adjusted_for_decimals(self) -> Fraction:
        return self.fraction * Fraction(
            10**self.base_currency.decimals, 10**self.quote_currency.decimals
        )

    def invert(self) -> "Price":
        return Price._from_fraction(self.quote_currency, self.base_currency, 1 / self.fraction)

    def multiply(self, other: "Price") -> "Price":
        if not currency_equals(self.quote_currency, other.base_currency):
            raise CurrencyMismatch(message="Price quote currency must match the next base currency.")
        return Price._from_fraction(
            self.base_currency, other.quote_currency, self.fraction * other.fraction
        )

    def quote(self, currency_amount: CurrencyAmount) -> CurrencyAmount:
        """
        Convert an amount of the base currency into the quote currency at this price.
        """

        if not currency_equals(currency_amount.currency, self.base_currency):
            raise CurrencyMismatch(
                message=f"Cannot quote an amount of {currency_amount.currency} at this price."
            )
        return CurrencyAmount(self.quote_currency, self.fraction * currency_amount.fraction)

    def to_significant(self, significant_digits: int = 6) -> str:
        return _to_significant(self.adjusted_for_decimals, significant_digits)

    def to_fixed(self, decimal_places: int = 4) -> str:
        return _to_fixed(self.adjusted_for_decimals, decimal_places)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Price):
            return NotImplemented
        return (
            currency_equals(self.base_currency, other.base_currency)
            and currency_equals(self.quote_currency, other.quote_currency)
            and self.fraction == other.fraction
        )

    def __hash__(self) -> int:
        return hash((self.base_currency, self.quote_currency, self.fraction))

    def __repr__(self) -> str:
        return (
            f"Price({self.base_currency!r} -> {self.quote_currency!r}, "
            f"{self.numerator}/{self.denominator})"
        )
