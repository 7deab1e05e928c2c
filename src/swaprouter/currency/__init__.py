from swaprouter.currency.amount import CurrencyAmount
from swaprouter.currency.price import Percent, Price
from swaprouter.currency.token import Currency, Erc20Token, NativeCurrency, currency_equals

__all__ = (
    "Currency",
    "CurrencyAmount",
    "Erc20Token",
    "NativeCurrency",
    "Percent",
    "Price",
    "currency_equals",
)
