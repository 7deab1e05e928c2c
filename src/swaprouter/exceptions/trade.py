from typing import Any

from swaprouter.exceptions.base import SwapRouterError

"""
Exceptions defined here are raised by the `Trade` and `RouteV3` classes.
"""


class TradeError(SwapRouterError):
    """
    Exception raised inside trade and route helpers.
    """


class CurrencyMismatch(TradeError):
    """
    Raised when an amount, route, or trade disagrees on the currency it should be denominated in.
    """


class InputCurrencyMismatch(CurrencyMismatch):
    def __init__(self) -> None:
        super().__init__(message="Input currency does not match the route input.")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, ()


class OutputCurrencyMismatch(CurrencyMismatch):
    def __init__(self) -> None:
        super().__init__(message="Output currency does not match the route output.")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, ()


class TokenMismatch(CurrencyMismatch):
    def __init__(self, side: str) -> None:
        """
        Raised when trades submitted together do not share the same input or output currency.
        """

        self.side = side
        super().__init__(message=f"All trades must share the same {side} currency.")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.side,)


class DuplicatePools(TradeError):
    def __init__(self) -> None:
        super().__init__(message="A pool appears in more than one route.")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, ()


class TradeTypeMismatch(TradeError):
    def __init__(self) -> None:
        super().__init__(message="All trades must share the same trade type.")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, ()


class InvalidSlippageTolerance(TradeError):
    def __init__(self, slippage_tolerance: Any) -> None:
        self.slippage_tolerance = slippage_tolerance
        super().__init__(message=f"Slippage tolerance {slippage_tolerance} is negative.")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.slippage_tolerance,)


class InvalidRoute(TradeError): ...


class NoRoutesProvided(TradeError):
    def __init__(self) -> None:
        super().__init__(message="No routes provided when building the trade.")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, ()
